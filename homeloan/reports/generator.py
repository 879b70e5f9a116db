# homeloan/reports/generator.py
"""
Markdown reports for the bond repayment and additional payment calculators.

The report is the downloadable counterpart of the on-screen calculator: it
calls the same calculator/engine functions with the same LoanTerms, so every
figure (cards and yearly table) matches what the user saw.
"""

from __future__ import annotations

import os
from datetime import date

from homeloan.core.finance.amortization import YearlyAmortizationRow, amortization_summary, schedule_for_terms
from homeloan.core.finance.calculators import calculate_additional_payment, calculate_bond_repayment
from homeloan.logging_config import get_logger
from homeloan.schemas.models import DisplayResult, LoanTerms

from .formatting import format_currency, format_percentage, format_term

log = get_logger(__name__)


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


def _render_header(title: str, generated: date | None) -> str:
    when = (generated or date.today()).strftime("%d %B %Y")
    return f"# {title}\n\n_Generated on {when}_\n"


def _render_cards(cards: list[DisplayResult]) -> str:
    """
    Render calculator result cards as a bullet list.
    """
    lines = [_section("Summary")]
    for c in cards:
        lines.append(f"- **{c.label}:** {c.value}")
    return "\n".join(lines) + "\n"


def _render_inputs(terms: LoanTerms) -> str:
    lines = [
        _section("Loan Details"),
        f"- **Loan Amount:** {format_currency(terms.principal)}",
        f"- **Interest Rate:** {format_percentage(terms.annual_rate_percent)}",
        f"- **Loan Term:** {terms.term_years} years",
    ]
    if terms.additional_payment > 0:
        lines.append(f"- **Additional Monthly Payment:** {format_currency(terms.additional_payment)}")
    return "\n".join(lines) + "\n"


def _render_schedule_table(rows: list[YearlyAmortizationRow], title: str = "Amortization Schedule (Yearly)") -> str:
    """
    Render the yearly schedule, year 0 included.

    Columns:
      Year | Principal | Interest | Balance | Cumulative Principal | Cumulative Interest
    """
    header = [
        _section(title),
        "| Year | Principal | Interest | Balance | Cumulative Principal | Cumulative Interest |",
        "| ---: | ---: | ---: | ---: | ---: | ---: |",
    ]
    body = [
        f"| {r.year} "
        f"| {format_currency(r.principal_paid)} "
        f"| {format_currency(r.interest_paid)} "
        f"| {format_currency(r.remaining_balance)} "
        f"| {format_currency(r.cumulative_principal)} "
        f"| {format_currency(r.cumulative_interest)} |"
        for r in rows
    ]
    return "\n".join(header + body) + "\n"


def _render_payoff(terms: LoanTerms) -> str:
    s = amortization_summary(terms)
    lines = [
        _section("Payoff"),
        f"- **Payments Made:** {s.months_to_payoff}",
        f"- **Time to Payoff:** {format_term(s.months_to_payoff)}",
        f"- **Total Paid:** {format_currency(s.total_payment)}",
        f"- **Total Interest:** {format_currency(s.total_interest)}",
    ]
    return "\n".join(lines) + "\n"


def _render_disclaimer() -> str:
    return (
        _section("Notes")
        + "- Figures assume a fixed rate, monthly compounding and payments at the end of each month.\n"
        + "- Amounts are rounded for display only; totals are computed from unrounded values.\n"
    )


def generate_bond_report(terms: LoanTerms, title: str | None = None, *, generated: date | None = None) -> str:
    """
    Bond repayment report: summary cards, loan details, payoff and the yearly schedule.

    A bond quote is the level payment, so every section is rendered with
    `additional_payment` set to 0. Extra payments belong in
    generate_additional_payment_report().
    """
    level = terms.model_copy(update={"additional_payment": 0.0})
    result = calculate_bond_repayment(level.principal, level.annual_rate_percent, level.term_years)
    rows = schedule_for_terms(level)
    parts = [
        _render_header(title or "Bond Repayment Report", generated),
        _render_cards(result.display_results),
        _render_inputs(level),
        _render_payoff(level),
        _render_schedule_table(rows),
        _render_disclaimer(),
    ]
    return "\n".join(p for p in parts if p).strip() + "\n"


def generate_additional_payment_report(terms: LoanTerms, title: str | None = None, *, generated: date | None = None) -> str:
    """
    Additional payment report: savings cards plus side-by-side standard vs accelerated schedules.
    """
    result = calculate_additional_payment(terms.principal, terms.annual_rate_percent, terms.term_years, terms.additional_payment)
    standard = schedule_for_terms(terms.model_copy(update={"additional_payment": 0.0}))
    accelerated = schedule_for_terms(terms)
    parts = [
        _render_header(title or "Additional Payment Report", generated),
        _render_cards(result.display_results),
        _render_inputs(terms),
        _render_schedule_table(standard, "Standard Schedule (Yearly)"),
        _render_schedule_table(accelerated, "With Additional Payment (Yearly)"),
        _render_disclaimer(),
    ]
    return "\n".join(p for p in parts if p).strip() + "\n"


def write_report(path: str, markdown: str) -> None:
    """
    Write a generated report to disk (UTF-8), creating parent folders as needed.
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(markdown)
    log.info("report written to %s (%d bytes)", path, len(markdown.encode("utf-8")))
