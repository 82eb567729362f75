"""Pydantic schemas for the engine boundary: bank terms, requests and results.

Loosely-shaped external payloads are mapped to LoanParameters here; the
engine itself only ever sees the typed dataclass.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from loansim.config import settings
from loansim.engine.rates import monthly_to_annual_effective
from loansim.models.loan import (
    Capitalization,
    GraceMode,
    InvalidLoanParameters,
    LoanParameters,
    RateMode,
)
from loansim.models.results import SimulationSummary

SUPPORTED_CURRENCIES = ("PEN", "USD")
SUPPORTED_PAYMENT_FREQUENCIES = ("monthly",)


def _or_default(value, default):
    return default if value is None else value


# ---- Bank-terms provider ----

class BankTerms(BaseModel):
    """Defaults published by a bank. Percentages, e.g. tea=12.5 for 12.5%."""
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str = ""
    description: str | None = None
    tea: Decimal | None = Field(None, ge=0, description="Effective annual rate")
    tem: Decimal | None = Field(None, ge=0, description="Effective monthly rate")
    available_terms: list[int] = Field(default_factory=list, alias="availableTerms")
    grace_period: int | None = Field(None, ge=0, alias="gracePeriod")
    admin_fees: Decimal | None = Field(None, ge=0, alias="adminFees")
    evaluation_fee: Decimal | None = Field(None, ge=0, alias="evaluationFee")
    life_insurance: Decimal | None = Field(None, ge=0, alias="lifeInsurance")

    @property
    def effective_annual_rate(self) -> Decimal | None:
        """TEA in percent; derived from TEM when only the monthly rate is published."""
        if self.tea is not None:
            return self.tea
        if self.tem is not None:
            return monthly_to_annual_effective(self.tem / 100) * 100
        return None


# ---- Request schemas ----

class SimulationRequest(BaseModel):
    """Per-simulation input. Any field left empty falls back to the bank's terms."""
    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal = Field(..., description="Principal to finance")
    term: Decimal = Field(..., description="Loan horizon in years")
    interest_rate: Decimal | None = Field(None, alias="interestRate")
    rate_mode: RateMode = Field(
        default_factory=lambda: settings.default_rate_mode, alias="rateMode"
    )
    capitalization: Capitalization = Field(
        default_factory=lambda: settings.default_capitalization
    )

    grace_period: int | None = Field(None, alias="gracePeriod")
    grace_mode: GraceMode = Field(GraceMode.NONE, alias="graceMode")

    admin_fees: Decimal | None = Field(None, alias="adminFees")
    evaluation_fee: Decimal | None = Field(None, alias="evaluationFee")
    life_insurance: Decimal | None = Field(None, alias="lifeInsurance")

    discount_rate: Decimal = Field(
        default_factory=lambda: settings.default_discount_rate_percent, alias="discountRate"
    )
    include_van: bool = Field(True, alias="includeVan")
    include_tir: bool = Field(True, alias="includeTir")

    currency: str = Field(default_factory=lambda: settings.default_currency)
    payment_frequency: str = Field(
        default_factory=lambda: settings.default_payment_frequency, alias="paymentFrequency"
    )

    @field_validator("currency")
    @classmethod
    def _known_currency(cls, v: str) -> str:
        v = v.upper()
        if v not in SUPPORTED_CURRENCIES:
            raise ValueError(f"currency must be one of {', '.join(SUPPORTED_CURRENCIES)}")
        return v

    @field_validator("payment_frequency")
    @classmethod
    def _monthly_only(cls, v: str) -> str:
        v = v.lower()
        if v not in SUPPORTED_PAYMENT_FREQUENCIES:
            raise ValueError("only monthly payments are supported")
        return v

    def to_loan_parameters(self, bank: BankTerms | None = None) -> LoanParameters:
        """Merge this request over the bank's defaults.

        A request without its own rate uses the bank's TEA (or TEM), which is
        always an effective rate.
        """
        bank = bank or BankTerms()

        if self.interest_rate is not None:
            annual_rate, rate_mode = self.interest_rate, self.rate_mode
        elif bank.effective_annual_rate is not None:
            annual_rate, rate_mode = bank.effective_annual_rate, RateMode.EFFECTIVE
        else:
            raise InvalidLoanParameters("annual_rate", "no interest rate in the request or bank terms")

        return LoanParameters(
            amount=self.amount,
            annual_rate=annual_rate,
            term_years=self.term,
            rate_mode=rate_mode,
            capitalization=self.capitalization,
            grace_months=_or_default(self.grace_period, _or_default(bank.grace_period, 0)),
            grace_mode=self.grace_mode,
            admin_fees_percent=_or_default(self.admin_fees, _or_default(bank.admin_fees, Decimal("0"))),
            evaluation_fee_percent=_or_default(
                self.evaluation_fee, _or_default(bank.evaluation_fee, Decimal("0"))
            ),
            life_insurance_percent=_or_default(
                self.life_insurance, _or_default(bank.life_insurance, Decimal("0"))
            ),
            discount_rate_annual_percent=self.discount_rate,
            include_van=self.include_van,
            include_tir=self.include_tir,
        )


# ---- Response schemas ----

class AmortizationRowResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    period: int
    opening_balance: Decimal = Field(..., alias="openingBalance")
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal
    grace: bool = False


class SimulationResult(BaseModel):
    """Plain-data summary handed to the schedule exporter and persistence."""
    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal
    term: Decimal
    currency: str
    monthly_payment: Decimal = Field(..., alias="monthlyPayment")
    tcea: Decimal | None = None
    van: Decimal | None = None
    tir: Decimal | None = None
    total_interests: Decimal = Field(..., alias="totalInterests")
    total_payable: Decimal = Field(..., alias="totalPayable")
    schedule: list[AmortizationRowResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: SimulationSummary, currency: str) -> "SimulationResult":
        return cls(
            amount=summary.amount,
            term=summary.term_years,
            currency=currency,
            monthly_payment=summary.monthly_payment,
            tcea=summary.tcea_percent,
            van=summary.van_amount,
            tir=summary.tir_percent,
            total_interests=summary.total_interests,
            total_payable=summary.total_payable,
            schedule=[
                AmortizationRowResponse(
                    period=row.period,
                    opening_balance=row.opening_balance,
                    payment=row.payment,
                    interest=row.interest,
                    principal=row.principal,
                    balance=row.balance,
                    grace=row.grace,
                )
                for row in summary.schedule
            ],
        )
