"""NPV and IRR (bisection) over a monthly cash-flow vector.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal

from loansim.engine.rates import monthly_to_annual_effective

logger = logging.getLogger(__name__)

# Monthly-rate bracket: -99.99% to +500% a month
IRR_LOW = Decimal("-0.9999")
IRR_HIGH = Decimal("5.0")
IRR_MAX_ITERATIONS = 200
IRR_TOLERANCE = Decimal("1e-9")

HUNDRED = Decimal("100")


def npv(rate: Decimal, cash_flows: list[Decimal]) -> Decimal:
    """Discount ``cash_flows`` (index = period) at a periodic rate.

    NPV = sum(cf[t] / (1 + rate)^t)
    """
    rate = Decimal(rate)
    if rate <= -1:
        raise ValueError(f"rate must be greater than -1, got {rate}")

    base = 1 + rate
    total = Decimal("0")
    for t, cf in enumerate(cash_flows):
        total += cf / base ** t
    return total


def irr(cash_flows: list[Decimal]) -> Decimal | None:
    """Monthly IRR by bisection on NPV, or None when it does not exist.

    The bracket [IRR_LOW, IRR_HIGH] must show a sign change; if NPV has the
    same sign at both ends (e.g. all flows non-negative) there is no IRR.
    Returns as soon as |NPV(mid)| < IRR_TOLERANCE, otherwise the midpoint
    after IRR_MAX_ITERATIONS halvings.
    """
    if len(cash_flows) < 2:
        return None

    low, high = IRR_LOW, IRR_HIGH
    f_low = npv(low, cash_flows)
    f_high = npv(high, cash_flows)

    if f_low * f_high > 0:
        logger.debug("No sign change in NPV over [%s, %s]", low, high)
        return None
    if f_low == 0:
        return low
    if f_high == 0:
        return high

    for _ in range(IRR_MAX_ITERATIONS):
        mid = (low + high) / 2
        f_mid = npv(mid, cash_flows)
        if abs(f_mid) < IRR_TOLERANCE:
            return mid
        if f_low * f_mid < 0:
            high = mid
        else:
            low, f_low = mid, f_mid

    logger.debug("IRR bisection hit %d iterations without |NPV| < %s", IRR_MAX_ITERATIONS, IRR_TOLERANCE)
    return (low + high) / 2


def annualize(monthly_rate: Decimal) -> Decimal:
    """Monthly effective rate -> annual effective rate, both fractions."""
    return monthly_to_annual_effective(monthly_rate)


def annualized_percent(monthly_rate: Decimal | None) -> Decimal | None:
    """TCEA / TIR in percent from a monthly IRR; None passes through."""
    if monthly_rate is None:
        return None
    return annualize(monthly_rate) * HUNDRED
