"""Simulation orchestrator: composes the engine sub-modules into a summary.

Pure computation. No I/O. LoanParameters in, SimulationSummary out.
"""

import logging
from decimal import Decimal

from loansim.models.loan import LoanParameters
from loansim.models.results import SimulationSummary

from loansim.engine.rates import monthly_rate, annual_effective_to_monthly, HUNDRED
from loansim.engine.amortization import amortization_schedule
from loansim.engine.cashflows import build_cash_flows, upfront_fees, monthly_life_insurance
from loansim.engine.irr import npv, irr, annualized_percent

logger = logging.getLogger(__name__)


def simulate(params: LoanParameters) -> SimulationSummary:
    """Run a complete loan simulation.

    Returns SimulationSummary with the schedule, totals, TCEA and, when
    requested, VAN and TIR. TCEA and TIR are the same annualized IRR of
    one cash-flow vector; both are None when that IRR does not exist.
    """
    i = monthly_rate(params.annual_rate, params.rate_mode, params.capitalization)
    total_months = params.total_months
    logger.debug(
        "Simulating %s over %d months at %s%% %s (TEM %s)",
        params.amount, total_months, params.annual_rate, params.rate_mode.value, i,
    )

    schedule = amortization_schedule(
        amount=params.amount,
        monthly_rate=i,
        total_months=total_months,
        grace_months=params.grace_months,
        grace_mode=params.grace_mode,
    )

    cash_flows = build_cash_flows(
        schedule.rows,
        params.amount,
        params.admin_fees_percent,
        params.evaluation_fee_percent,
        params.life_insurance_percent,
    )

    # Totals
    fees = upfront_fees(params.amount, params.admin_fees_percent, params.evaluation_fee_percent)
    total_insurance = monthly_life_insurance(params.amount, params.life_insurance_percent) * total_months
    total_interests = sum((row.interest for row in schedule.rows), Decimal("0"))
    total_payments = sum((row.payment for row in schedule.rows), Decimal("0"))
    total_payable = total_payments + total_insurance + fees

    # VAN at the caller's discount rate, always read as an effective annual rate
    van = None
    if params.include_van:
        discount_monthly = annual_effective_to_monthly(params.discount_rate_annual_percent / HUNDRED)
        van = npv(discount_monthly, cash_flows)

    # TCEA / TIR
    irr_monthly = irr(cash_flows)
    if irr_monthly is None:
        logger.info("No IRR for this cash-flow shape; TCEA and TIR left empty")
    tcea = annualized_percent(irr_monthly)
    tir = tcea if params.include_tir else None

    return SimulationSummary(
        amount=params.amount,
        term_years=params.term_years,
        monthly_payment=schedule.monthly_payment,
        total_interests=total_interests,
        total_payable=total_payable,
        tcea_percent=tcea,
        van_amount=van,
        tir_percent=tir,
        schedule=schedule.rows,
        monthly_rate=i,
        upfront_fees=fees,
        total_life_insurance=total_insurance,
        irr_monthly=irr_monthly,
    )
