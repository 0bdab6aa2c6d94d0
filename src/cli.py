"""CLI for printing amortization tables and early-payment simulations.

Usage:
    python -m src.cli schedule --principal 12000 --rate 0.12 --months 12 --method SAC --start 2024-01-01
    python -m src.cli schedule --principal 250000 --rate 0.105 --months 360 --method Price --yearly
    python -m src.cli early-payment --principal 11000 --rate 0.12 --months 11 --amount 5000 --preference reducao_parcela
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal

from src.config import settings
from src.engine.amortization import generate_amortization_table, yearly_summary
from src.engine.early_payment import simulate_early_payment
from src.engine.errors import FinancingError
from src.models.financing import AmortizationMethod, EarlyPaymentPreference, LoanTerms


def _money(v: Decimal) -> str:
    return f"{v:,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 72}")
    print(f"  {title}")
    print(f"{'=' * 72}")


def print_schedule(schedule, terms: LoanTerms, yearly: bool = False) -> None:
    _header(f"Amortization Table ({terms.method.value})")
    if yearly:
        print(f"  {'Year':>4}  {'Principal':>14}  {'Interest':>14}  {'Payments':>14}  {'Balance':>14}")
        for y in yearly_summary(schedule):
            print(
                f"  {y.year:>4}  {_money(y.principal):>14}  {_money(y.interest):>14}"
                f"  {_money(y.payments):>14}  {_money(y.ending_balance):>14}"
            )
    else:
        print(f"  {'#':>4}  {'Due':>10}  {'Payment':>12}  {'Principal':>12}  {'Interest':>12}  {'Balance':>14}")
        for row in schedule.rows:
            print(
                f"  {row.installment_number:>4}  {row.due_date.isoformat():>10}  {_money(row.payment_amount):>12}"
                f"  {_money(row.principal_amount):>12}  {_money(row.interest_amount):>12}"
                f"  {_money(row.remaining_balance):>14}"
            )

    s = schedule.summary
    print()
    print(f"  Principal:        {_money(s.principal)}")
    print(f"  Total Interest:   {_money(s.total_interest)}")
    print(f"  Total Payments:   {_money(s.total_payments)}")
    print()


def print_simulation(result) -> None:
    _header(f"Early Payment Simulation ({result.preference.value})")
    print(f"  Outstanding:      {_money(result.original_principal)}")
    print(f"  Extra Payment:    {_money(result.early_payment_amount)}")
    print(f"  New Principal:    {_money(result.new_principal)}")
    print(f"  New Installment:  {_money(result.new_payment)}")
    print(f"  New Term:         {result.new_term} months")
    print(f"  Interest Saved:   {_money(result.interest_saved)}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SAC / Price financing calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    methods = [m.value for m in AmortizationMethod]

    sched = sub.add_parser("schedule", help="Print the amortization table")
    sched.add_argument("--principal", type=Decimal, required=True, help="Amount financed")
    sched.add_argument("--rate", type=Decimal, required=True, help="Annual interest rate, e.g. 0.12")
    sched.add_argument("--months", type=int, required=True, help="Term in months")
    sched.add_argument("--method", choices=methods, default="SAC", help="Amortization method (default: SAC)")
    sched.add_argument("--start", type=date.fromisoformat, default=date.today(), help="First due date (YYYY-MM-DD)")
    sched.add_argument("--yearly", action="store_true", help="Aggregate by loan year")

    early = sub.add_parser("early-payment", help="Simulate an extra payment")
    early.add_argument("--principal", type=Decimal, required=True, help="Outstanding balance")
    early.add_argument("--rate", type=Decimal, required=True, help="Annual interest rate, e.g. 0.12")
    early.add_argument("--months", type=int, required=True, help="Remaining months")
    early.add_argument("--method", choices=methods, default="SAC", help="Amortization method (default: SAC)")
    early.add_argument("--amount", type=Decimal, required=True, help="Extra payment amount")
    early.add_argument(
        "--preference",
        choices=[p.value for p in EarlyPaymentPreference],
        default=EarlyPaymentPreference.REDUCE_TERM.value,
        help="reducao_prazo (shorter term) or reducao_parcela (smaller installment)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    args = build_parser().parse_args(argv)

    try:
        if args.command == "schedule":
            terms = LoanTerms(
                principal=args.principal,
                annual_interest_rate=args.rate,
                term_months=args.months,
                method=AmortizationMethod(args.method),
                start_date=args.start,
            )
            print_schedule(generate_amortization_table(terms), terms, yearly=args.yearly)
        else:
            result = simulate_early_payment(
                principal=args.principal,
                annual_interest_rate=args.rate,
                remaining_months=args.months,
                method=AmortizationMethod(args.method),
                early_payment_amount=args.amount,
                preference=EarlyPaymentPreference(args.preference),
            )
            print_simulation(result)
    except FinancingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
