# homeloan/core/finance/errors.py
"""
Typed errors for the loan calculators.

Exports
-------
- LoanCalculationError, InvalidLoanTermsError, InvalidCalculatorInputError
- CALCULATION_ERRORS
"""

from __future__ import annotations

from typing import Any


class LoanCalculationError(ValueError):
    """Base class for calculator input failures. Carries the offending values in `context`."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class InvalidLoanTermsError(LoanCalculationError):
    """Principal, rate, term or additional payment outside the amortizable range."""


class InvalidCalculatorInputError(LoanCalculationError):
    """A calculator (bond, affordability, deposit, transfer) received unusable inputs."""


# Selector tuple for grouped exception handling
CALCULATION_ERRORS = (
    InvalidLoanTermsError,
    InvalidCalculatorInputError,
)

__all__ = [
    "LoanCalculationError",
    "InvalidLoanTermsError",
    "InvalidCalculatorInputError",
    "CALCULATION_ERRORS",
]
