# main.py
"""
Entry Point - Home Loan Report

Purpose
-------
Compute a bond amortization and write a Markdown report:
  1) Load loan terms (sample defaults, --config JSON, or CLI flags).
  2) Run the selected calculator ("bond" or "additional") on the shared
     amortization engine.
  3) Write the report and print the headline monthly payment.

Usage
-----
    python main.py
    python main.py --principal 1000000 --rate 10.5 --term 20 --out bond.md
    python main.py --config data/sample/loan.json --calculator additional --additional 1000
"""

from __future__ import annotations

import argparse
import sys

from homeloan.core.finance.amortization import amortization_summary
from homeloan.core.finance.errors import CALCULATION_ERRORS
from homeloan.inputs.inputs import CALCULATORS, AppInputs, InputsLoader, RunOptions
from homeloan.logging_config import configure_logging, get_logger
from homeloan.reports.formatting import format_currency, format_term
from homeloan.reports.generator import generate_additional_payment_report, generate_bond_report, write_report
from homeloan.schemas.models import LoanTerms

log = get_logger("cli")


def build_sample_inputs() -> AppInputs:
    """Return baseline inputs for demo purposes (R1m over 20 years at 10.5%)."""
    return AppInputs(
        loan=LoanTerms(principal=1_000_000.0, annual_rate_percent=10.5, term_years=20),
        run=RunOptions(),
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Home loan amortization report")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (LoanTerms or AppInputs).")
    p.add_argument("--calculator", type=str, default=None, choices=list(CALCULATORS), help="Report type (overrides config).")
    p.add_argument("--principal", type=float, default=None, help="Loan amount (overrides config).")
    p.add_argument("--rate", type=float, default=None, help="Annual interest rate in percent, e.g. 10.5 (overrides config).")
    p.add_argument("--term", type=int, default=None, help="Loan term in years (overrides config).")
    p.add_argument("--additional", type=float, default=None, help="Additional monthly payment (overrides config).")
    p.add_argument("--out", type=str, default=None, help="Output Markdown path (overrides config).")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the selected calculator and write its report. Returns a process exit code."""
    configure_logging()
    args = parse_args(argv)
    loader = InputsLoader()

    try:
        cfg = loader.load(args.config) if args.config else build_sample_inputs()
        cfg = loader.with_overrides(
            cfg,
            out=args.out,
            calculator=args.calculator,
            principal=args.principal,
            annual_rate_percent=args.rate,
            term_years=args.term,
            additional_payment=args.additional,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading inputs: {e}", file=sys.stderr)
        return 2

    terms = cfg.loan
    if cfg.run.calculator == "bond" and terms.additional_payment > 0:
        log.warning("bond report ignores additional_payment=%s; use --calculator additional", terms.additional_payment)
        terms = terms.model_copy(update={"additional_payment": 0.0})
    try:
        if cfg.run.calculator == "additional":
            md = generate_additional_payment_report(terms)
        else:
            md = generate_bond_report(terms)
    except CALCULATION_ERRORS as e:
        log.error("calculation failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    write_report(cfg.run.out, md)

    summary = amortization_summary(terms)
    print(f"Report written to {cfg.run.out}")
    print(f"Monthly payment: {format_currency(summary.monthly_payment)}; paid off in {format_term(summary.months_to_payoff)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
