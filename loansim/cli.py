"""Loan simulation CLI: runs one simulation and prints a terminal report.

Usage:
    loansim --amount 200000 --term-years 20 --rate 12
    loansim --amount 100000 --term-years 15 --rate 10 --rate-mode nominal --capitalization quarterly
    loansim --amount 150000 --term-years 5 --rate 12.5 --grace-months 6 --grace-mode total --schedule 12
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from loansim.config import settings
from loansim.engine.amortization import AmortizationSchedule, yearly_schedule_summary
from loansim.engine.simulation import simulate
from loansim.export.schedule import format_amount, schedule_rows, summary_lines
from loansim.schemas import SUPPORTED_CURRENCIES
from loansim.models.loan import (
    Capitalization,
    GraceMode,
    InvalidLoanParameters,
    LoanParameters,
    RateMode,
)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(summary, currency: str) -> None:
    _header("Loan Summary")
    for label, value in summary_lines(summary, currency):
        print(f"  {label + ':':<20}{value}")


def print_schedule(summary, currency: str, limit: int, start_date: date | None = None) -> None:
    rows = schedule_rows(summary, start_date)
    _header("Payment Schedule")
    print(f"  {'#':>4}  {'Opening':>14}  {'Interest':>12}  {'Principal':>12}  {'Payment':>12}  {'Balance':>14}")
    for row in rows[:limit]:
        flag = "  (grace)" if row["grace"] else ""
        due = f"  {row['due_date'].isoformat()}" if "due_date" in row else ""
        print(
            f"  {row['period']:>4}{due}  {row['opening_balance']:>14,}  {row['interest']:>12,}"
            f"  {row['principal']:>12,}  {row['payment']:>12,}  {row['balance']:>14,}{flag}"
        )
    if len(rows) > limit:
        print(f"  ... {len(rows) - limit} more payments ({currency})")


def print_yearly(summary, currency: str) -> None:
    yearly = yearly_schedule_summary(
        AmortizationSchedule(rows=summary.schedule, monthly_payment=summary.monthly_payment)
    )
    _header("Yearly Summary")
    for y in yearly:
        print(
            f"  Year {y['year']:>2}:  paid {format_amount(y['payments'], currency):>16}"
            f"  interest {format_amount(y['interest'], currency):>16}"
            f"  balance {format_amount(y['ending_balance'], currency):>16}"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="French amortization loan simulator (TCEA / VAN / TIR)")
    parser.add_argument("--amount", type=_decimal, required=True, help="Principal to finance")
    parser.add_argument("--term-years", type=_decimal, required=True, help="Loan term in years")
    parser.add_argument("--rate", type=_decimal, required=True, help="Annual rate in percent (e.g. 12 for 12%%)")
    parser.add_argument("--rate-mode", choices=[m.value for m in RateMode], default=settings.default_rate_mode.value)
    parser.add_argument(
        "--capitalization", choices=[c.value for c in Capitalization], default=settings.default_capitalization.value,
        help="Capitalization of a nominal rate",
    )
    parser.add_argument("--grace-months", type=int, default=0)
    parser.add_argument("--grace-mode", choices=[g.value for g in GraceMode], default=GraceMode.NONE.value)
    parser.add_argument("--admin-fees", type=_decimal, default=Decimal("0"), help="Upfront admin fees, %% of amount")
    parser.add_argument("--evaluation-fee", type=_decimal, default=Decimal("0"), help="Upfront evaluation fee, %% of amount")
    parser.add_argument("--life-insurance", type=_decimal, default=Decimal("0"), help="Annual life insurance, %% of amount")
    parser.add_argument(
        "--discount-rate", type=_decimal, default=settings.default_discount_rate_percent,
        help="Effective annual discount rate for VAN, in percent",
    )
    parser.add_argument("--currency", choices=SUPPORTED_CURRENCIES, default=settings.default_currency)
    parser.add_argument("--no-van", action="store_true", help="Skip VAN")
    parser.add_argument("--no-tir", action="store_true", help="Skip TIR")
    parser.add_argument("--schedule", type=int, nargs="?", const=12, default=0, metavar="N",
                        help="Print the first N schedule rows (default 12)")
    parser.add_argument("--start-date", type=date.fromisoformat, default=None,
                        help="Disbursement date (YYYY-MM-DD) for due dates")
    parser.add_argument("--yearly", action="store_true", help="Print the yearly summary")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        params = LoanParameters(
            amount=args.amount,
            annual_rate=args.rate,
            term_years=args.term_years,
            rate_mode=RateMode(args.rate_mode),
            capitalization=Capitalization(args.capitalization),
            grace_months=args.grace_months,
            grace_mode=GraceMode(args.grace_mode),
            admin_fees_percent=args.admin_fees,
            evaluation_fee_percent=args.evaluation_fee,
            life_insurance_percent=args.life_insurance,
            discount_rate_annual_percent=args.discount_rate,
            include_van=not args.no_van,
            include_tir=not args.no_tir,
        )
    except InvalidLoanParameters as e:
        print(f"Invalid loan parameters: {e}", file=sys.stderr)
        return 2

    summary = simulate(params)
    print_summary(summary, args.currency)
    if args.schedule:
        print_schedule(summary, args.currency, args.schedule, args.start_date)
    if args.yearly:
        print_yearly(summary, args.currency)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
