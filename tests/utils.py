# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from homeloan.schemas.models import LoanTerms

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_PRINCIPAL = 1_000_000.0
DEFAULT_RATE_PERCENT = 10.5
DEFAULT_TERM_YEARS = 20
DEFAULT_ADDITIONAL = 1_000.0

ZERO_RATE_PRINCIPAL = 500_000.0
ZERO_RATE_TERM_YEARS = 10

# -----------------------------
# Loan factories
# -----------------------------


def make_loan_terms(
    principal: float = DEFAULT_PRINCIPAL,
    annual_rate_percent: float = DEFAULT_RATE_PERCENT,
    term_years: int = DEFAULT_TERM_YEARS,
    additional_payment: float = 0.0,
) -> LoanTerms:
    return LoanTerms(
        principal=principal,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
        additional_payment=additional_payment,
    )


def make_zero_rate_terms(**overrides: Any) -> LoanTerms:
    return make_loan_terms(
        principal=overrides.get("principal", ZERO_RATE_PRINCIPAL),
        annual_rate_percent=0.0,
        term_years=overrides.get("term_years", ZERO_RATE_TERM_YEARS),
        additional_payment=overrides.get("additional_payment", 0.0),
    )


# -----------------------------
# Closed-form reference
# -----------------------------


def annuity_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Textbook annuity payment, written out independently of the engine."""
    r = annual_rate_percent / 1200.0
    n = term_years * 12
    return principal * r / (1.0 - (1.0 + r) ** (-n))


# -----------------------------
# File helpers
# -----------------------------


def write_json(tmp_dir: Path, payload: dict[str, Any], filename: str = "loan.json") -> Path:
    """Write `payload` as JSON into tmp_dir and return the path."""
    tmp_dir.mkdir(parents=True, exist_ok=True)
    path = tmp_dir / filename
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def table_rows(markdown: str) -> list[str]:
    """Data rows of every Markdown table in `markdown` (header and separator lines excluded)."""
    return [
        line
        for line in markdown.splitlines()
        if line.startswith("| ") and not line.startswith("| Year") and not line.startswith("| -")
    ]
