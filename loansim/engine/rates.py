"""Rate-basis conversion: TEA / TNA to effective monthly rate (TEM).

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from loansim.models.loan import Capitalization, RateMode

MONTHS_PER_YEAR = 12
HUNDRED = Decimal("100")


def annual_effective_to_monthly(annual_rate: Decimal) -> Decimal:
    """Effective annual rate (fraction) -> effective monthly rate (fraction)."""
    return (1 + Decimal(annual_rate)) ** (Decimal(1) / MONTHS_PER_YEAR) - 1


def monthly_to_annual_effective(monthly_rate: Decimal) -> Decimal:
    """Effective monthly rate (fraction) -> effective annual rate (fraction)."""
    return (1 + Decimal(monthly_rate)) ** MONTHS_PER_YEAR - 1


def nominal_to_annual_effective(nominal_rate: Decimal, capitalization: Capitalization) -> Decimal:
    """TNA (fraction) capitalized m times a year -> TEA (fraction).

    ea = (1 + r/m)^m - 1
    """
    m = capitalization.periods_per_year
    return (1 + Decimal(nominal_rate) / m) ** m - 1


def monthly_rate(
    annual_rate_percent: Decimal,
    rate_mode: RateMode,
    capitalization: Capitalization = Capitalization.MONTHLY,
) -> Decimal:
    """Effective monthly rate for an annual rate quoted in percent.

    A rate of zero or below yields 0: an interest-free loan is valid.
    """
    if annual_rate_percent <= 0:
        return Decimal("0")

    r = Decimal(annual_rate_percent) / HUNDRED
    if rate_mode is RateMode.NOMINAL:
        r = nominal_to_annual_effective(r, capitalization)
    return annual_effective_to_monthly(r)
