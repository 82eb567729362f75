"""Display-ready rows for the PDF/Excel exporter.

Only rounds and labels what the engine already computed; nothing is recomputed.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta

from loansim.models.results import SimulationSummary

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")

CURRENCY_SYMBOLS = {"PEN": "S/", "USD": "$"}


def _money(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def format_amount(v: Decimal | None, currency: str) -> str:
    if v is None:
        return "N/A"
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} {_money(v):,.2f}"


def format_percent(v: Decimal | None) -> str:
    if v is None:
        return "N/A"
    return f"{v.quantize(TWO_PLACES, ROUND_HALF_UP)}%"


def due_dates(start: date, months: int) -> list[date]:
    """One due date per period, the first one month after ``start``."""
    return [start + relativedelta(months=k) for k in range(1, months + 1)]


def schedule_rows(
    summary: SimulationSummary, start_date: date | None = None
) -> list[dict]:
    """Schedule as plain dicts with amounts rounded to cents.

    When ``start_date`` (disbursement date) is given each row also carries
    its ``due_date``.
    """
    dates = due_dates(start_date, len(summary.schedule)) if start_date else None

    rows: list[dict] = []
    for idx, row in enumerate(summary.schedule):
        out = {
            "period": row.period,
            "opening_balance": _money(row.opening_balance),
            "interest": _money(row.interest),
            "principal": _money(row.principal),
            "payment": _money(row.payment),
            "balance": _money(row.balance),
            "grace": row.grace,
        }
        if dates:
            out["due_date"] = dates[idx]
        rows.append(out)
    return rows


def summary_lines(summary: SimulationSummary, currency: str) -> list[tuple[str, str]]:
    """Label / value pairs for the report header."""
    monthly_rate_pct = (summary.monthly_rate * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)
    return [
        ("Amount", format_amount(summary.amount, currency)),
        ("Term", f"{summary.total_months} months"),
        ("TEM", f"{monthly_rate_pct}%"),
        ("Monthly Payment", format_amount(summary.monthly_payment, currency)),
        ("Upfront Fees", format_amount(summary.upfront_fees, currency)),
        ("Life Insurance", format_amount(summary.total_life_insurance, currency)),
        ("Total Interests", format_amount(summary.total_interests, currency)),
        ("Total Payable", format_amount(summary.total_payable, currency)),
        ("TCEA", format_percent(summary.tcea_percent)),
        ("TIR", format_percent(summary.tir_percent)),
        ("VAN", format_amount(summary.van_amount, currency)),
    ]
