from decimal import Decimal

import pytest
from scipy.optimize import brentq

from loansim.engine.amortization import amortization_schedule
from loansim.engine.cashflows import build_cash_flows
from loansim.engine.irr import annualize, annualized_percent, irr, npv
from loansim.engine.rates import monthly_rate
from loansim.models.loan import GraceMode, RateMode

TEM_12 = monthly_rate(Decimal("12"), RateMode.EFFECTIVE)


def _loan_flows(admin=Decimal("0"), evaluation=Decimal("0"), insurance=Decimal("0")):
    schedule = amortization_schedule(Decimal("200000"), TEM_12, 240)
    return build_cash_flows(schedule.rows, Decimal("200000"), admin, evaluation, insurance)


class TestNPV:
    def test_zero_rate_is_sum(self):
        flows = [Decimal("-100"), Decimal("60"), Decimal("60")]
        assert npv(Decimal("0"), flows) == Decimal("20")

    def test_single_period(self):
        assert npv(Decimal("0.10"), [Decimal("-100"), Decimal("110")]) == 0

    def test_discounting(self):
        result = npv(Decimal("0.05"), [Decimal("0"), Decimal("0"), Decimal("110.25")])
        assert result == Decimal("100")

    def test_rate_at_or_below_minus_one(self):
        with pytest.raises(ValueError):
            npv(Decimal("-1"), [Decimal("-100"), Decimal("110")])

    def test_loan_at_its_own_rate(self):
        """Without fees, discounting at the loan's TEM gives zero."""
        assert abs(npv(TEM_12, _loan_flows())) < Decimal("1e-6")


class TestIRR:
    def test_simple_irr(self):
        """Lend 100, get 110 back one period later = 10%."""
        result = irr([Decimal("-100"), Decimal("110")])
        assert abs(result - Decimal("0.10")) < Decimal("1e-9")

    def test_loan_without_costs_returns_tem(self):
        result = irr(_loan_flows())
        assert abs(result - TEM_12) < Decimal("1e-9")

    def test_fees_raise_the_rate(self):
        base = irr(_loan_flows())
        with_fees = irr(_loan_flows(Decimal("1"), Decimal("0.5"), Decimal("0.3")))
        assert with_fees > base

    def test_npv_at_irr_is_zero(self):
        flows = _loan_flows(Decimal("2"), Decimal("0.5"), Decimal("0.4"))
        result = irr(flows)
        assert result is not None
        assert abs(npv(result, flows)) < Decimal("1e-6")

    def test_matches_brent(self):
        """Cross-check against scipy's Brent solver on the same flows."""
        schedule = amortization_schedule(Decimal("80000"), TEM_12, 36, 4, GraceMode.TOTAL)
        flows = build_cash_flows(schedule.rows, Decimal("80000"), Decimal("3"), Decimal("1"), Decimal("0.5"))
        cf_float = [float(cf) for cf in flows]

        def f(rate: float) -> float:
            return sum(cf / (1 + rate) ** t for t, cf in enumerate(cf_float))

        reference = brentq(f, -0.5, 1.0, xtol=1e-14)
        assert abs(float(irr(flows)) - reference) < 1e-9

    def test_all_non_negative_flows(self):
        assert irr([Decimal("0"), Decimal("100"), Decimal("100")]) is None

    def test_all_negative_flows(self):
        assert irr([Decimal("-100"), Decimal("-10"), Decimal("-10")]) is None

    def test_too_few_flows(self):
        assert irr([]) is None
        assert irr([Decimal("-100")]) is None

    def test_negative_irr(self):
        """Lend 100, get 50 back: -50%."""
        result = irr([Decimal("-100"), Decimal("50")])
        assert abs(result - Decimal("-0.5")) < Decimal("1e-9")


class TestAnnualize:
    def test_one_percent_monthly(self):
        assert annualize(Decimal("0.01")) == Decimal("1.01") ** 12 - 1

    def test_round_trip_with_tem(self):
        assert abs(annualize(TEM_12) - Decimal("0.12")) < Decimal("1e-15")

    def test_percent(self):
        assert abs(annualized_percent(TEM_12) - Decimal("12")) < Decimal("1e-12")
        assert annualized_percent(None) is None
