"""Cash-flow vector for TCEA / VAN / TIR.

Pure functions. No I/O.
"""

from decimal import Decimal

from loansim.models.results import AmortizationRow

HUNDRED = Decimal("100")


def upfront_fees(
    amount: Decimal, admin_fees_percent: Decimal, evaluation_fee_percent: Decimal
) -> Decimal:
    """One-time fees deducted from the disbursement."""
    return amount * (admin_fees_percent + evaluation_fee_percent) / HUNDRED


def monthly_life_insurance(amount: Decimal, life_insurance_percent: Decimal) -> Decimal:
    """Flat monthly premium, prorated on the original principal (not the balance)."""
    return amount * life_insurance_percent / HUNDRED / 12


def build_cash_flows(
    schedule: tuple[AmortizationRow, ...] | list[AmortizationRow],
    amount: Decimal,
    admin_fees_percent: Decimal = Decimal("0"),
    evaluation_fee_percent: Decimal = Decimal("0"),
    life_insurance_percent: Decimal = Decimal("0"),
) -> list[Decimal]:
    """Build the cash-flow vector, index 0 = disbursement.

    cf[0] = -(amount - upfront fees): the net cash actually advanced.
    cf[k] = installment k + monthly life insurance.
    """
    amount = Decimal(amount)
    fees = upfront_fees(amount, Decimal(admin_fees_percent), Decimal(evaluation_fee_percent))
    insurance = monthly_life_insurance(amount, Decimal(life_insurance_percent))

    flows: list[Decimal] = [-(amount - fees)]
    flows.extend(row.payment + insurance for row in schedule)
    return flows
