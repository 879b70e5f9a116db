# homeloan/core/finance/calculators.py
"""
Home loan calculators built on the amortization engine.

Every calculator returns a pydantic result carrying the raw numbers plus
pre-formatted `display_results` cards. Payment math always goes through
`amortization.monthly_payment` / `compare_additional_payment`; nothing here
re-derives the annuity formula for a payment.
"""

from __future__ import annotations

import math

from homeloan.logging_config import get_logger
from homeloan.reports.formatting import format_currency, format_percentage, format_term
from homeloan.schemas.models import (
    AdditionalPaymentResult,
    AffordabilityResult,
    AmortisationMilestone,
    AmortisationResult,
    BondRepaymentResult,
    DepositSavingsResult,
    DisplayResult,
    TermComparisonResult,
    TermOption,
    TransferCostsResult,
)

from .amortization import (
    MONTHS_PER_YEAR,
    compare_additional_payment,
    generate_amortization_schedule,
    growth_minus_one,
    monthly_payment,
    monthly_rate,
)
from .errors import InvalidCalculatorInputError

DEFAULT_AFFORDABILITY_TERM_YEARS = 25
MAX_REPAYMENT_RATIO = 0.30  # of gross monthly income
DEFAULT_DEPOSIT_FRACTION = 0.10

# (upper bound, base duty, marginal rate, bracket floor); last bound is open-ended
TRANSFER_DUTY_BRACKETS: tuple[tuple[float, float, float, float], ...] = (
    (1_000_000.0, 0.0, 0.0, 0.0),
    (1_375_000.0, 0.0, 0.03, 1_000_000.0),
    (1_925_000.0, 11_250.0, 0.06, 1_375_000.0),
    (2_475_000.0, 44_250.0, 0.08, 1_925_000.0),
    (11_000_000.0, 88_250.0, 0.11, 2_475_000.0),
    (math.inf, 1_026_000.0, 0.13, 11_000_000.0),
)
TRANSFER_ATTORNEY_RATE = 0.015
BOND_REGISTRATION_RATE = 0.012
DEEDS_OFFICE_FEE = 1_500.0

AMORTISATION_MILESTONE_YEARS = (1, 5, 10, 15, 20, 25, 30)
COMPARISON_TERM_YEARS = (10, 15, 20, 25, 30)
DEFAULT_COMPARISON_TARGET_YEAR = 5

log = get_logger(__name__)


def calculate_bond_repayment(
    property_value: float,
    annual_rate_percent: float,
    term_years: int,
    deposit: float = 0.0,
) -> BondRepaymentResult:
    """
    Monthly repayment on a bond for `property_value - deposit`.

    Totals use the level payment over the full term:
        total_repayment = M * n
        total_interest  = total_repayment - loan_amount
    """
    if deposit < 0:
        raise InvalidCalculatorInputError("deposit must be >= 0", {"deposit": deposit})
    loan_amount = property_value - deposit
    if loan_amount <= 0:
        raise InvalidCalculatorInputError(
            "deposit must be smaller than the property value",
            {"property_value": property_value, "deposit": deposit},
        )

    pmt = monthly_payment(loan_amount, annual_rate_percent, term_years)
    total_repayment = pmt * term_years * MONTHS_PER_YEAR
    total_interest = total_repayment - loan_amount

    return BondRepaymentResult(
        loan_amount=loan_amount,
        monthly_repayment=pmt,
        total_repayment=total_repayment,
        total_interest=total_interest,
        display_results=[
            DisplayResult(
                label="Monthly Repayment",
                value=format_currency(pmt),
                tooltip="The amount you will need to pay each month for the duration of your home loan.",
            ),
            DisplayResult(
                label="Total Repayment Amount",
                value=format_currency(total_repayment),
                tooltip="The total amount you will repay over the entire term of the loan, including interest.",
            ),
            DisplayResult(
                label="Total Interest Paid",
                value=format_currency(total_interest),
                tooltip="The total amount of interest you will pay over the entire term of the loan.",
            ),
        ],
    )


def max_loan_for_payment(payment: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Present value of a level monthly payment (inverse of the annuity formula).

        P = M * [ (1 + r)^n - 1 ] / [ r * (1 + r)^n ]

    At r == 0 (or when (1 + r)^n - 1 underflows to 0) this is simply M * n.
    """
    if annual_rate_percent < 0 or term_years <= 0:
        raise InvalidCalculatorInputError(
            "rate must be >= 0 and term must be > 0",
            {"annual_rate_percent": annual_rate_percent, "term_years": term_years},
        )
    if payment <= 0:
        return 0.0
    r = monthly_rate(annual_rate_percent)
    n = term_years * MONTHS_PER_YEAR
    growth_m1 = growth_minus_one(r, n)
    if r == 0 or growth_m1 == 0:
        return payment * n
    return payment * growth_m1 / (r * (growth_m1 + 1))


def calculate_affordability(
    gross_monthly_income: float,
    monthly_expenses: float,
    existing_debt: float,
    annual_rate_percent: float,
    term_years: int = DEFAULT_AFFORDABILITY_TERM_YEARS,
    *,
    max_repayment_ratio: float = MAX_REPAYMENT_RATIO,
    deposit_fraction: float = DEFAULT_DEPOSIT_FRACTION,
) -> AffordabilityResult:
    """
    Estimate the largest bond a household can carry.

    Rules:
      - disposable = income - expenses - existing debt
      - affordable repayment = min(disposable, ratio * income), floored at 0
      - max loan = present value of that repayment over the term
      - recommended price assumes `deposit_fraction` is paid in cash
    """
    if gross_monthly_income <= 0:
        raise InvalidCalculatorInputError("gross_monthly_income must be > 0", {"gross_monthly_income": gross_monthly_income})
    if monthly_expenses < 0 or existing_debt < 0:
        raise InvalidCalculatorInputError(
            "expenses and existing debt must be >= 0",
            {"monthly_expenses": monthly_expenses, "existing_debt": existing_debt},
        )
    if not 0 <= deposit_fraction < 1:
        raise InvalidCalculatorInputError("deposit_fraction must be in [0, 1)", {"deposit_fraction": deposit_fraction})

    disposable = gross_monthly_income - monthly_expenses - existing_debt
    max_monthly = gross_monthly_income * max_repayment_ratio
    available = max(0.0, min(disposable, max_monthly))
    max_loan = max_loan_for_payment(available, annual_rate_percent, term_years)
    recommended_price = max_loan / (1 - deposit_fraction)

    if available == 0.0:
        log.info("affordability: no disposable income (income=%s, expenses=%s, debt=%s)", gross_monthly_income, monthly_expenses, existing_debt)

    return AffordabilityResult(
        disposable_income=disposable,
        max_monthly_payment=max_monthly,
        available_for_loan=available,
        max_loan_amount=max_loan,
        recommended_property_price=recommended_price,
        display_results=[
            DisplayResult(
                label="Maximum Loan Amount",
                value=format_currency(max_loan),
                tooltip="The maximum home loan amount you could potentially qualify for based on your income and expenses.",
            ),
            DisplayResult(
                label="Affordable Monthly Payment",
                value=format_currency(available),
                tooltip="The monthly repayment amount you can comfortably afford based on your financial situation.",
            ),
            DisplayResult(
                label="Recommended Property Price",
                value=format_currency(recommended_price),
                tooltip="The suggested property price you should consider, assuming a standard deposit amount.",
            ),
        ],
    )


def calculate_deposit_savings(
    property_price: float,
    deposit_percent: float,
    monthly_saving: float,
    savings_rate_percent: float = 0.0,
) -> DepositSavingsResult:
    """
    Time needed to save a deposit with level monthly contributions.

    Future value of monthly savings, solved for n:
        n = log1p(FV * r / PMT) / log1p(r)
    and n = FV / PMT when r == 0.
    """
    if property_price <= 0:
        raise InvalidCalculatorInputError("property_price must be > 0", {"property_price": property_price})
    if not 0 <= deposit_percent <= 100:
        raise InvalidCalculatorInputError("deposit_percent must be between 0 and 100", {"deposit_percent": deposit_percent})
    if monthly_saving <= 0:
        raise InvalidCalculatorInputError("monthly_saving must be > 0", {"monthly_saving": monthly_saving})
    if savings_rate_percent < 0:
        raise InvalidCalculatorInputError("savings_rate_percent must be >= 0", {"savings_rate_percent": savings_rate_percent})

    deposit_amount = property_price * deposit_percent / 100.0
    r = monthly_rate(savings_rate_percent)
    log_growth = math.log1p(r)
    if r == 0 or log_growth == 0:
        months = deposit_amount / monthly_saving
    else:
        months = math.log1p(deposit_amount * r / monthly_saving) / log_growth

    years = int(months // MONTHS_PER_YEAR)
    remaining = math.ceil(months % MONTHS_PER_YEAR)
    if remaining == MONTHS_PER_YEAR:
        years, remaining = years + 1, 0
    contributions = monthly_saving * math.ceil(months)
    interest_earned = max(0.0, deposit_amount - contributions)

    time_text = f"{years} years, {remaining} months" if remaining > 0 else f"{years} years"

    return DepositSavingsResult(
        deposit_amount=deposit_amount,
        months_to_save=months,
        years_to_save=years,
        remaining_months=remaining,
        total_contributions=contributions,
        interest_earned=interest_earned,
        display_results=[
            DisplayResult(
                label="Deposit Amount Required",
                value=format_currency(deposit_amount),
                tooltip="The total deposit you need to save based on the property price and deposit percentage.",
            ),
            DisplayResult(
                label="Time to Save Deposit",
                value=time_text,
                tooltip="The estimated time it will take to save the required deposit with your monthly savings.",
            ),
            DisplayResult(
                label="Interest Earned",
                value=format_currency(interest_earned),
                tooltip="The interest you will earn on your savings during the saving period.",
            ),
        ],
    )


def transfer_duty(purchase_price: float) -> float:
    """South African transfer duty for a residential purchase price (banded, marginal)."""
    if purchase_price < 0:
        raise InvalidCalculatorInputError("purchase_price must be >= 0", {"purchase_price": purchase_price})
    for upper, base, rate, floor in TRANSFER_DUTY_BRACKETS:
        if purchase_price <= upper:
            break
    return base + (purchase_price - floor) * rate


def calculate_transfer_costs(purchase_price: float) -> TransferCostsResult:
    """Transfer duty plus approximate attorney, bond registration and deeds office fees."""
    if purchase_price <= 0:
        raise InvalidCalculatorInputError("purchase_price must be > 0", {"purchase_price": purchase_price})

    duty = transfer_duty(purchase_price)
    attorney = purchase_price * TRANSFER_ATTORNEY_RATE
    registration = purchase_price * BOND_REGISTRATION_RATE
    total = duty + attorney + registration + DEEDS_OFFICE_FEE

    return TransferCostsResult(
        purchase_price=purchase_price,
        transfer_duty=duty,
        transfer_attorney_fee=attorney,
        bond_registration_fee=registration,
        deeds_office_fee=DEEDS_OFFICE_FEE,
        total_costs=total,
        display_results=[
            DisplayResult(label="Transfer Duty", value=format_currency(duty), tooltip="Government tax on property transfer."),
            DisplayResult(label="Transfer Attorney Fees", value=format_currency(attorney), tooltip="Conveyancing attorney fees (approximate)."),
            DisplayResult(
                label="Bond Registration Fees", value=format_currency(registration), tooltip="Bond attorney and registration fees (approximate)."
            ),
            DisplayResult(label="Deeds Office Fees", value=format_currency(DEEDS_OFFICE_FEE), tooltip="Deeds office lodgement fee."),
            DisplayResult(
                label="Total Costs",
                value=format_currency(total),
                tooltip="Total fees and costs for property transfer and bond registration.",
            ),
        ],
    )


def calculate_additional_payment(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: int,
    additional_payment: float,
) -> AdditionalPaymentResult:
    """Interest and time saved by paying a fixed extra amount every month."""
    cmp = compare_additional_payment(loan_amount, annual_rate_percent, term_years, additional_payment)

    return AdditionalPaymentResult(
        loan_amount=loan_amount,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
        additional_payment=additional_payment,
        standard_monthly_payment=cmp.standard.monthly_payment,
        new_monthly_payment=cmp.new_monthly_payment,
        standard_term_months=cmp.standard.months_to_payoff,
        new_term_months=cmp.accelerated.months_to_payoff,
        time_saved_months=cmp.months_saved,
        standard_total_interest=cmp.standard.total_interest,
        new_total_interest=cmp.accelerated.total_interest,
        interest_saved=cmp.interest_saved,
        display_results=[
            DisplayResult(
                label="Standard Monthly Payment",
                value=format_currency(cmp.standard.monthly_payment),
                tooltip="Your regular monthly payment without additional contributions.",
            ),
            DisplayResult(
                label="New Monthly Payment",
                value=format_currency(cmp.new_monthly_payment),
                tooltip="Total monthly payment including your additional amount.",
            ),
            DisplayResult(label="Time Saved", value=format_term(cmp.months_saved), tooltip="How much earlier you'll pay off your loan."),
            DisplayResult(
                label="Interest Saved",
                value=format_currency(cmp.interest_saved),
                tooltip="Total interest you'll save by making additional payments.",
            ),
            DisplayResult(
                label="New Loan Term", value=format_term(cmp.accelerated.months_to_payoff), tooltip="Your new reduced loan term."
            ),
        ],
    )


def calculate_amortisation(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: int,
) -> AmortisationResult:
    """
    Where the money goes over the life of the loan.

    Milestones are taken from the yearly schedule at years 1, 5, 10, 15, 20,
    25 and 30, keeping only those within the term. Headline totals use the
    level payment (M * n), as the bond calculator does.
    """
    pmt = monthly_payment(loan_amount, annual_rate_percent, term_years)
    rows = generate_amortization_schedule(loan_amount, annual_rate_percent, term_years)

    total_payment = pmt * term_years * MONTHS_PER_YEAR
    total_interest = total_payment - loan_amount
    ratio = total_interest / loan_amount * 100.0
    first_year = rows[1]

    milestones = [
        AmortisationMilestone(
            year=row.year,
            interest_paid=row.interest_paid,
            principal_paid=row.principal_paid,
            total_paid=row.interest_paid + row.principal_paid,
            remaining_principal=row.remaining_balance,
            interest_to_date=row.cumulative_interest,
            principal_to_date=row.cumulative_principal,
        )
        for row in rows
        if row.year in AMORTISATION_MILESTONE_YEARS
    ]

    return AmortisationResult(
        loan_amount=loan_amount,
        annual_rate_percent=annual_rate_percent,
        term_years=term_years,
        monthly_payment=pmt,
        total_payment=total_payment,
        total_interest=total_interest,
        first_year_interest=first_year.interest_paid,
        first_year_principal=first_year.principal_paid,
        interest_to_principal_ratio=ratio,
        milestones=milestones,
        display_results=[
            DisplayResult(label="Monthly Payment", value=format_currency(pmt), tooltip="Your fixed monthly bond repayment."),
            DisplayResult(
                label="Total Repayment",
                value=format_currency(total_payment),
                tooltip="Everything you will pay over the full term, capital and interest.",
            ),
            DisplayResult(label="Total Interest", value=format_currency(total_interest), tooltip="The cost of borrowing over the full term."),
            DisplayResult(
                label="First-Year Interest",
                value=format_currency(first_year.interest_paid),
                tooltip="Interest paid in the first 12 months, when the balance is highest.",
            ),
            DisplayResult(
                label="First-Year Principal",
                value=format_currency(first_year.principal_paid),
                tooltip="Capital repaid in the first 12 months.",
            ),
            DisplayResult(
                label="Interest-to-Principal Ratio",
                value=format_percentage(ratio, places=1),
                tooltip="Total interest as a percentage of the amount borrowed.",
            ),
        ],
    )


def compare_loan_terms(
    loan_amount: float,
    annual_rate_percent: float,
    terms: tuple[int, ...] = COMPARISON_TERM_YEARS,
    target_year: int = DEFAULT_COMPARISON_TARGET_YEAR,
) -> TermComparisonResult:
    """
    Same loan and rate over several terms, side by side.

    For each term: the level monthly payment, total paid (M * n), total
    interest, and the balance still owed after `target_year` years (0 once the
    term has run out).
    """
    if not terms:
        raise InvalidCalculatorInputError("at least one term is required", {"terms": terms})
    if target_year < 0:
        raise InvalidCalculatorInputError("target_year must be >= 0", {"target_year": target_year})

    options: list[TermOption] = []
    for years in terms:
        pmt = monthly_payment(loan_amount, annual_rate_percent, years)
        rows = generate_amortization_schedule(loan_amount, annual_rate_percent, years)
        total_paid = pmt * years * MONTHS_PER_YEAR
        remaining = rows[target_year].remaining_balance if target_year < len(rows) else 0.0
        options.append(
            TermOption(
                term_years=years,
                monthly_payment=pmt,
                total_interest=total_paid - loan_amount,
                total_paid=total_paid,
                remaining_balance=remaining,
            )
        )

    log.debug("term comparison loan=%s rate=%s%% terms=%s target=%sy", loan_amount, annual_rate_percent, terms, target_year)

    return TermComparisonResult(
        loan_amount=loan_amount,
        annual_rate_percent=annual_rate_percent,
        target_year=target_year,
        options=options,
        display_results=[
            DisplayResult(
                label=f"{opt.term_years}-Year Term",
                value=format_currency(opt.monthly_payment),
                tooltip=(
                    f"Total interest {format_currency(opt.total_interest)}; "
                    f"balance after {target_year} years {format_currency(opt.remaining_balance)}."
                ),
            )
            for opt in options
        ],
    )
