# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from homeloan.core.finance import generate_amortization_schedule
from tests.utils import (
    DEFAULT_ADDITIONAL,
    make_loan_terms,
    make_zero_rate_terms,
    write_json,
)

_ENV_KEYS = (
    "HOMELOAN_OUT",
    "HOMELOAN_CALCULATOR",
    "HOMELOAN_LOG_LEVEL",
    "HOMELOAN_LOG_FILE",
    "HOMELOAN_DEBUG",
)


# -------- Clean environment --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


# -------- Loan fixtures --------
@pytest.fixture
def zero_rate_terms():
    return make_zero_rate_terms()


@pytest.fixture
def baseline_schedule():
    """Factory that runs the engine on provided (or baseline) terms."""

    def _factory(terms=None):
        terms = terms or make_loan_terms()
        return generate_amortization_schedule(
            terms.principal,
            terms.annual_rate_percent,
            terms.term_years,
            terms.additional_payment,
        )

    return _factory


@pytest.fixture
def accelerated_terms():
    return make_loan_terms(additional_payment=DEFAULT_ADDITIONAL)


@pytest.fixture
def json_inputs_factory(tmp_path: Path):
    """
    Callable factory to write a JSON inputs file into the test's tmp path.

    Usage:
        path = json_inputs_factory({"loanAmount": 1000000, "interestRate": 10.5, "loanTerm": 20})
    """

    def _factory(payload: dict, filename: str = "loan.json") -> Path:
        return write_json(tmp_path, payload, filename=filename)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
