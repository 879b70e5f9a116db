# homeloan/core/finance/amortization.py
"""
Fixed-rate, monthly-compounding amortization.

One engine for every consumer: the calculators, the Markdown reports and the
CLI all call these functions, so the numbers a user sees on screen and in a
downloaded report are produced by the same code path.

Conventions
-----------
- Rates are annual *percentages* (10.5 means 10.5%), converted internally to a
  monthly periodic rate r = rate / 100 / 12.
- Terms are whole years; n = term_years * 12 monthly payments.
- Nothing is rounded here; rounding is a display concern.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from homeloan.logging_config import get_logger
from homeloan.schemas.models import LoanTerms

from .errors import InvalidLoanTermsError

BALANCE_EPSILON = 0.01  # currency units; residues below this are paid off
MONTHS_PER_YEAR = 12

log = get_logger(__name__)


@dataclass(frozen=True)
class MonthlyPayment:
    """
    Immutable record of a single monthly payment.

    Attributes:
        month (int): 1-based month index.
        interest (float): Interest accrued and paid this month.
        principal (float): Principal repaid this month (capped at the balance).
        payment (float): Amount paid this month (interest + principal).
        balance (float): Remaining balance after this month's payment.
    """

    month: int
    interest: float
    principal: float
    payment: float
    balance: float


@dataclass(frozen=True)
class YearlyAmortizationRow:
    """
    One row of the yearly schedule. Year 0 is the starting point (no flows, full balance).

    Attributes:
        year (int): 0 for the opening row, then 1..N.
        principal_paid (float): Principal repaid during the year.
        interest_paid (float): Interest paid during the year.
        remaining_balance (float): Balance at the end of the year.
        cumulative_principal (float): Principal repaid from inception through this year.
        cumulative_interest (float): Interest paid from inception through this year.
        months_paid (int): Number of payments made during the year (12 except possibly the last).
    """

    year: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float
    cumulative_principal: float
    cumulative_interest: float
    months_paid: int = 0


@dataclass(frozen=True)
class AmortizationSummary:
    """Headline metrics for one loan scenario."""

    monthly_payment: float
    total_payment: float
    total_interest: float
    months_to_payoff: int

    @property
    def years_to_payoff(self) -> float:
        return self.months_to_payoff / MONTHS_PER_YEAR


@dataclass(frozen=True)
class AdditionalPaymentComparison:
    """Standard schedule vs. the same loan with a fixed extra monthly payment."""

    additional_payment: float
    standard: AmortizationSummary
    accelerated: AmortizationSummary

    @property
    def months_saved(self) -> int:
        return self.standard.months_to_payoff - self.accelerated.months_to_payoff

    @property
    def interest_saved(self) -> float:
        return self.standard.total_interest - self.accelerated.total_interest

    @property
    def new_monthly_payment(self) -> float:
        return self.standard.monthly_payment + self.additional_payment


def _validate(principal: float, annual_rate_percent: float, term_years: int, additional_payment: float = 0.0) -> None:
    ctx = {
        "principal": principal,
        "annual_rate_percent": annual_rate_percent,
        "term_years": term_years,
    }
    if not principal > 0:
        raise InvalidLoanTermsError("principal must be > 0", ctx)
    if not annual_rate_percent >= 0:
        raise InvalidLoanTermsError("annual_rate_percent must be >= 0", ctx)
    if isinstance(term_years, bool) or not isinstance(term_years, int) or term_years <= 0:
        raise InvalidLoanTermsError("term_years must be a positive whole number of years", ctx)
    if not additional_payment >= 0:
        raise InvalidLoanTermsError("additional_payment must be >= 0", {**ctx, "additional_payment": additional_payment})


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percentage rate to the monthly periodic rate."""
    return annual_rate_percent / 100.0 / MONTHS_PER_YEAR


def growth_minus_one(r: float, n: int) -> float:
    """(1 + r)^n - 1 without cancellation for small r."""
    return math.expm1(n * math.log1p(r))


def monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Compute the constant monthly payment for a fully-amortizing fixed-rate loan.

    Formula (standard annuity):
        M = P * [ r * (1 + r)^n ] / [ (1 + r)^n - 1 ]

    Where:
        P = principal
        r = monthly rate = annual_rate_percent / 100 / 12
        n = number of monthly payments = term_years * 12

    At r == 0 the denominator vanishes and the loan is repaid straight-line:
        M = P / n
    (1 + r)^n - 1 is evaluated as expm1(n * log1p(r)) so tiny positive rates
    keep their precision; if it still underflows to 0 the straight-line
    payment is used.

    Raises:
        InvalidLoanTermsError: principal <= 0, negative rate, or non-positive term.
    """
    _validate(principal, annual_rate_percent, term_years)

    r = monthly_rate(annual_rate_percent)
    n = term_years * MONTHS_PER_YEAR
    growth_m1 = growth_minus_one(r, n)

    if r == 0 or growth_m1 == 0:
        return principal / n

    return principal * r * (growth_m1 + 1) / growth_m1


def generate_monthly_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    additional_payment: float = 0.0,
) -> list[MonthlyPayment]:
    """
    Walk the loan month by month until it is paid off or the term ends.

    Each month:
        interest  = balance * r
        principal = min(M + additional - interest, balance)
        balance  -= principal   (clamped to 0 below BALANCE_EPSILON, which ends the walk)

    Returns:
        One MonthlyPayment per payment actually made (shorter than n when the
        additional payment retires the loan early).
    """
    _validate(principal, annual_rate_percent, term_years, additional_payment)

    r = monthly_rate(annual_rate_percent)
    n = term_years * MONTHS_PER_YEAR
    pmt = monthly_payment(principal, annual_rate_percent, term_years) + additional_payment

    out: list[MonthlyPayment] = []
    bal = float(principal)

    for month in range(1, n + 1):
        interest = bal * r
        principal_paid = pmt - interest
        # Final payment never overpays
        if principal_paid > bal:
            principal_paid = bal
        bal -= principal_paid
        if bal < BALANCE_EPSILON:
            bal = 0.0
        out.append(MonthlyPayment(month, interest, principal_paid, interest + principal_paid, bal))
        if bal == 0.0:
            break

    return out


def generate_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    additional_payment: float = 0.0,
) -> list[YearlyAmortizationRow]:
    """
    Yearly amortization schedule, indexed 0..N (N <= term_years).

    Row 0 is the opening state (balance = principal, no flows) so charts have a
    defined origin. Rows 1..N aggregate 12 monthly payments each; the last row
    may aggregate fewer when the loan is paid off mid-year. No rows are emitted
    after the balance reaches zero.
    """
    months = generate_monthly_schedule(principal, annual_rate_percent, term_years, additional_payment)

    rows: list[YearlyAmortizationRow] = [
        YearlyAmortizationRow(
            year=0,
            principal_paid=0.0,
            interest_paid=0.0,
            remaining_balance=float(principal),
            cumulative_principal=0.0,
            cumulative_interest=0.0,
            months_paid=0,
        )
    ]

    cum_principal = 0.0
    cum_interest = 0.0
    for start in range(0, len(months), MONTHS_PER_YEAR):
        chunk = months[start : start + MONTHS_PER_YEAR]
        year_principal = sum(m.principal for m in chunk)
        year_interest = sum(m.interest for m in chunk)
        cum_principal += year_principal
        cum_interest += year_interest
        rows.append(
            YearlyAmortizationRow(
                year=start // MONTHS_PER_YEAR + 1,
                principal_paid=year_principal,
                interest_paid=year_interest,
                remaining_balance=chunk[-1].balance,
                cumulative_principal=cum_principal,
                cumulative_interest=cum_interest,
                months_paid=len(chunk),
            )
        )

    log.debug(
        "schedule principal=%s rate=%s%% term=%sy extra=%s -> %d rows, %d months",
        principal,
        annual_rate_percent,
        term_years,
        additional_payment,
        len(rows),
        len(months),
    )
    return rows


def summarize_schedule(months: list[MonthlyPayment], base_payment: float) -> AmortizationSummary:
    """Aggregate a monthly walk into headline totals."""
    total_payment = sum(m.payment for m in months)
    total_interest = sum(m.interest for m in months)
    return AmortizationSummary(
        monthly_payment=base_payment,
        total_payment=total_payment,
        total_interest=total_interest,
        months_to_payoff=len(months),
    )


def amortization_summary(terms: LoanTerms) -> AmortizationSummary:
    """Headline metrics (payment, totals, payoff time) for validated LoanTerms."""
    base = monthly_payment(terms.principal, terms.annual_rate_percent, terms.term_years)
    months = generate_monthly_schedule(
        terms.principal,
        terms.annual_rate_percent,
        terms.term_years,
        terms.additional_payment,
    )
    return summarize_schedule(months, base)


def schedule_for_terms(terms: LoanTerms) -> list[YearlyAmortizationRow]:
    """Convenience: yearly schedule straight from a LoanTerms model."""
    return generate_amortization_schedule(
        terms.principal,
        terms.annual_rate_percent,
        terms.term_years,
        terms.additional_payment,
    )


def compare_additional_payment(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    additional_payment: float,
) -> AdditionalPaymentComparison:
    """
    Compare the standard schedule with one that pays `additional_payment` extra every month.

    Both sides are computed by walking the schedule (not by the closed form
    M * n - P), so interest saved matches the yearly tables exactly.
    """
    base = monthly_payment(principal, annual_rate_percent, term_years)
    standard = summarize_schedule(generate_monthly_schedule(principal, annual_rate_percent, term_years), base)
    accelerated = summarize_schedule(
        generate_monthly_schedule(principal, annual_rate_percent, term_years, additional_payment),
        base,
    )
    return AdditionalPaymentComparison(
        additional_payment=additional_payment,
        standard=standard,
        accelerated=accelerated,
    )
