# homeloan/schemas/models.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =========================
# Core inputs
# =========================


class LoanTerms(BaseModel):
    """
    Fixed-rate home loan (bond) parameters. Immutable; built per calculation from user input.

    camelCase aliases (loanAmount, interestRate, loanTerm, additionalPayment) are accepted so
    calculator form payloads validate as-is.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    principal: float = Field(..., gt=0, alias="loanAmount", description="Amount borrowed (currency units).")
    annual_rate_percent: float = Field(
        ..., ge=0, alias="interestRate", description="Annual interest rate as a percentage (e.g., 10.5 = 10.5%)."
    )
    term_years: int = Field(..., gt=0, alias="loanTerm", description="Loan term in whole years.")
    additional_payment: float = Field(
        0.0, ge=0, alias="additionalPayment", description="Extra amount paid every month from month 1 (0 for none)."
    )


# =========================
# Calculator outputs
# =========================


class DisplayResult(BaseModel):
    """One result card as shown to the user (pre-formatted value)."""

    label: str
    value: str
    tooltip: str | None = None


class CalculationResult(BaseModel):
    """Common envelope for every calculator: raw numbers on the subclass, formatted cards here."""

    type: Literal["bond", "affordability", "deposit", "additional", "transfer", "amortisation", "comparison"]
    display_results: list[DisplayResult] = Field(default_factory=list)


class BondRepaymentResult(CalculationResult):
    type: Literal["bond"] = "bond"
    loan_amount: float = Field(..., description="Property value less deposit.")
    monthly_repayment: float
    total_repayment: float = Field(..., description="Monthly repayment times the number of payments.")
    total_interest: float = Field(..., description="Total repayment less the loan amount.")


class AffordabilityResult(CalculationResult):
    type: Literal["affordability"] = "affordability"
    disposable_income: float = Field(..., description="Gross income less expenses and existing debt repayments.")
    max_monthly_payment: float = Field(..., description="Gross income times the maximum repayment ratio.")
    available_for_loan: float = Field(..., description="Lower of disposable income and max monthly payment, floored at 0.")
    max_loan_amount: float
    recommended_property_price: float


class DepositSavingsResult(CalculationResult):
    type: Literal["deposit"] = "deposit"
    deposit_amount: float
    months_to_save: float = Field(..., description="Fractional months until savings reach the deposit.")
    years_to_save: int
    remaining_months: int
    total_contributions: float
    interest_earned: float


class TransferCostsResult(CalculationResult):
    type: Literal["transfer"] = "transfer"
    purchase_price: float
    transfer_duty: float
    transfer_attorney_fee: float
    bond_registration_fee: float
    deeds_office_fee: float
    total_costs: float


class AdditionalPaymentResult(CalculationResult):
    type: Literal["additional"] = "additional"
    loan_amount: float
    annual_rate_percent: float
    term_years: int
    additional_payment: float
    standard_monthly_payment: float
    new_monthly_payment: float
    standard_term_months: int
    new_term_months: int
    time_saved_months: int
    standard_total_interest: float
    new_total_interest: float
    interest_saved: float


class AmortisationMilestone(BaseModel):
    """Schedule snapshot at a milestone year (1, 5, 10, ...)."""

    year: int
    interest_paid: float = Field(..., description="Interest paid during this year.")
    principal_paid: float = Field(..., description="Principal repaid during this year.")
    total_paid: float
    remaining_principal: float
    interest_to_date: float
    principal_to_date: float


class AmortisationResult(CalculationResult):
    type: Literal["amortisation"] = "amortisation"
    loan_amount: float
    annual_rate_percent: float
    term_years: int
    monthly_payment: float
    total_payment: float = Field(..., description="Monthly payment times the number of payments.")
    total_interest: float
    first_year_interest: float
    first_year_principal: float
    interest_to_principal_ratio: float = Field(..., description="Total interest as a percentage of the loan amount.")
    milestones: list[AmortisationMilestone] = Field(default_factory=list)


class TermOption(BaseModel):
    """One loan term in a side-by-side term comparison."""

    term_years: int
    monthly_payment: float
    total_interest: float
    total_paid: float
    remaining_balance: float = Field(..., description="Balance outstanding at the comparison's target year (0 once paid off).")


class TermComparisonResult(CalculationResult):
    type: Literal["comparison"] = "comparison"
    loan_amount: float
    annual_rate_percent: float
    target_year: int
    options: list[TermOption] = Field(default_factory=list)
