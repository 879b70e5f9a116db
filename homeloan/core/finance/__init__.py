# homeloan/core/finance/__init__.py

from .amortization import (
    AdditionalPaymentComparison,
    AmortizationSummary,
    MonthlyPayment,
    YearlyAmortizationRow,
    amortization_summary,
    compare_additional_payment,
    generate_amortization_schedule,
    generate_monthly_schedule,
    monthly_payment,
    schedule_for_terms,
)
from .calculators import (
    calculate_additional_payment,
    calculate_affordability,
    calculate_amortisation,
    calculate_bond_repayment,
    calculate_deposit_savings,
    calculate_transfer_costs,
    compare_loan_terms,
)
from .errors import CALCULATION_ERRORS, InvalidCalculatorInputError, InvalidLoanTermsError, LoanCalculationError

__all__ = [
    "AdditionalPaymentComparison",
    "AmortizationSummary",
    "MonthlyPayment",
    "YearlyAmortizationRow",
    "amortization_summary",
    "compare_additional_payment",
    "generate_amortization_schedule",
    "generate_monthly_schedule",
    "monthly_payment",
    "schedule_for_terms",
    "calculate_additional_payment",
    "calculate_affordability",
    "calculate_amortisation",
    "calculate_bond_repayment",
    "calculate_deposit_savings",
    "calculate_transfer_costs",
    "compare_loan_terms",
    "CALCULATION_ERRORS",
    "InvalidCalculatorInputError",
    "InvalidLoanTermsError",
    "LoanCalculationError",
]
