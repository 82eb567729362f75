from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationRow:
    period: int
    payment: Decimal
    interest: Decimal
    principal: Decimal
    balance: Decimal  # Closing balance
    opening_balance: Decimal = Decimal("0")
    grace: bool = False


@dataclass(frozen=True)
class SimulationSummary:
    amount: Decimal
    term_years: Decimal
    monthly_payment: Decimal  # Post-grace installment
    total_interests: Decimal
    total_payable: Decimal

    # None when no IRR exists (or, for VAN/TIR, when not requested)
    tcea_percent: Decimal | None = None
    van_amount: Decimal | None = None
    tir_percent: Decimal | None = None

    schedule: tuple[AmortizationRow, ...] = ()

    monthly_rate: Decimal = Decimal("0")
    upfront_fees: Decimal = Decimal("0")
    total_life_insurance: Decimal = Decimal("0")
    irr_monthly: Decimal | None = None

    @property
    def total_months(self) -> int:
        return len(self.schedule)
