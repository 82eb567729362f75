"""French (constant-installment) amortization with grace periods.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from loansim.models.loan import GraceMode
from loansim.models.results import AmortizationRow

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
BALANCE_EPSILON = Decimal("1e-6")


@dataclass(frozen=True)
class AmortizationSchedule:
    rows: tuple[AmortizationRow, ...]
    monthly_payment: Decimal  # Installment due after the grace period


def french_payment(principal: Decimal, monthly_rate: Decimal, months: int) -> Decimal:
    """Constant installment that amortizes ``principal`` over ``months``.

    M = P * [i(1+i)^n] / [(1+i)^n - 1], or P / n when i = 0.
    No amortizing months means no installment.
    """
    if months <= 0:
        return ZERO
    if monthly_rate == 0:
        return principal / months
    factor = (1 + monthly_rate) ** months
    return principal * monthly_rate * factor / (factor - 1)


def amortization_schedule(
    amount: Decimal,
    monthly_rate: Decimal,
    total_months: int,
    grace_months: int = 0,
    grace_mode: GraceMode = GraceMode.NONE,
) -> AmortizationSchedule:
    """Generate the month-by-month schedule.

    During TOTAL grace the interest is capitalized and nothing is paid; the
    installment is then computed off the capitalized balance. During PARTIAL
    grace only the interest is paid. With GraceMode.NONE every period
    amortizes, whatever ``grace_months`` says: the installment spreads over
    ``total_months`` rather than ``total_months - grace_months``.
    LoanParameters rejects that combination before it reaches here.
    """
    amount = Decimal(amount)
    in_grace = grace_mode is not GraceMode.NONE and grace_months > 0

    principal_for_amortization = amount
    if grace_mode is GraceMode.TOTAL and grace_months > 0:
        principal_for_amortization = amount * (1 + monthly_rate) ** grace_months

    amort_months = total_months - grace_months if in_grace else total_months
    pmt = french_payment(principal_for_amortization, monthly_rate, amort_months)
    logger.debug(
        "Installment %s over %d months (grace %d, %s)",
        pmt, amort_months, grace_months, grace_mode.value,
    )

    rows: list[AmortizationRow] = []
    balance = amount

    for period in range(1, total_months + 1):
        opening = balance
        interest = balance * monthly_rate
        is_grace_row = in_grace and period <= grace_months

        if is_grace_row and grace_mode is GraceMode.TOTAL:
            payment = ZERO
            principal_paid = ZERO
            balance += interest
        elif is_grace_row:
            payment = interest
            principal_paid = ZERO
        else:
            payment = pmt
            principal_paid = payment - interest
            balance -= principal_paid

        if abs(balance) < BALANCE_EPSILON:
            balance = ZERO

        rows.append(AmortizationRow(
            period=period,
            payment=payment,
            interest=interest,
            principal=principal_paid,
            balance=balance,
            opening_balance=opening,
            grace=is_grace_row,
        ))

    return AmortizationSchedule(rows=tuple(rows), monthly_payment=pmt)


def yearly_schedule_summary(schedule: AmortizationSchedule) -> list[dict[str, int | Decimal]]:
    """Aggregate the schedule by loan year.

    Returns list of dicts with keys: year, principal, interest, payments, ending_balance
    """
    yearly: list[dict[str, int | Decimal]] = []
    year_principal = ZERO
    year_interest = ZERO
    year_payments = ZERO

    for row in schedule.rows:
        year_principal += row.principal
        year_interest += row.interest
        year_payments += row.payment

        if row.period % 12 == 0 or row.period == len(schedule.rows):
            yearly.append({
                "year": (row.period - 1) // 12 + 1,
                "principal": year_principal,
                "interest": year_interest,
                "payments": year_payments,
                "ending_balance": row.balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_payments = ZERO

    return yearly
