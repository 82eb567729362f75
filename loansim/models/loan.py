from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum


class RateMode(Enum):
    EFFECTIVE = "effective"  # TEA
    NOMINAL = "nominal"      # TNA


class Capitalization(Enum):
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    SEMIANNUAL = "semiannual"
    ANNUAL = "annual"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


_PERIODS_PER_YEAR = {
    Capitalization.MONTHLY: 12,
    Capitalization.BIMONTHLY: 6,
    Capitalization.QUARTERLY: 4,
    Capitalization.SEMIANNUAL: 2,
    Capitalization.ANNUAL: 1,
}


class GraceMode(Enum):
    NONE = "none"
    TOTAL = "total"      # Interest capitalizes, nothing is paid
    PARTIAL = "partial"  # Interest-only payments


_DECIMAL_FIELDS = (
    "amount",
    "annual_rate",
    "term_years",
    "admin_fees_percent",
    "evaluation_fee_percent",
    "life_insurance_percent",
    "discount_rate_annual_percent",
)


class InvalidLoanParameters(ValueError):
    """Raised when a loan configuration cannot be simulated."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class LoanParameters:
    amount: Decimal
    annual_rate: Decimal  # Percent, e.g. 12 for 12%
    term_years: Decimal
    rate_mode: RateMode = RateMode.EFFECTIVE
    capitalization: Capitalization = Capitalization.MONTHLY  # Only used for NOMINAL

    # Grace period
    grace_months: int = 0
    grace_mode: GraceMode = GraceMode.NONE

    # Fees, all percent of principal
    admin_fees_percent: Decimal = Decimal("0")      # Upfront
    evaluation_fee_percent: Decimal = Decimal("0")  # Upfront
    life_insurance_percent: Decimal = Decimal("0")  # Annual, prorated monthly

    # VAN
    discount_rate_annual_percent: Decimal = Decimal("0")
    include_van: bool = True
    include_tir: bool = True

    def __post_init__(self):
        for name in _DECIMAL_FIELDS:
            if not Decimal(getattr(self, name)).is_finite():
                raise InvalidLoanParameters(name, "must be a finite number")
        if self.amount <= 0:
            raise InvalidLoanParameters("amount", f"must be positive, got {self.amount}")
        if self.annual_rate < 0:
            raise InvalidLoanParameters("annual_rate", f"must be non-negative, got {self.annual_rate}")
        if self.term_years <= 0:
            raise InvalidLoanParameters("term_years", f"must be positive, got {self.term_years}")
        if self.total_months < 1:
            raise InvalidLoanParameters(
                "term_years", f"{self.term_years} years rounds to zero monthly periods"
            )
        if self.grace_months < 0:
            raise InvalidLoanParameters("grace_months", f"must be non-negative, got {self.grace_months}")
        if self.grace_months > self.total_months:
            raise InvalidLoanParameters(
                "grace_months",
                f"{self.grace_months} exceeds the loan term of {self.total_months} months",
            )
        if self.grace_months > 0 and self.grace_mode is GraceMode.NONE:
            raise InvalidLoanParameters(
                "grace_mode", "grace months were requested without a grace mode (total or partial)"
            )
        for name in ("admin_fees_percent", "evaluation_fee_percent", "life_insurance_percent"):
            value = getattr(self, name)
            if value < 0:
                raise InvalidLoanParameters(name, f"must be non-negative, got {value}")
        if self.discount_rate_annual_percent <= -100:
            raise InvalidLoanParameters(
                "discount_rate_annual_percent",
                f"must be greater than -100, got {self.discount_rate_annual_percent}",
            )

    @property
    def total_months(self) -> int:
        months = Decimal(str(self.term_years)) * 12
        return int(months.quantize(Decimal("1"), ROUND_HALF_UP))

    @property
    def amortizing_months(self) -> int:
        return self.total_months - self.grace_months
