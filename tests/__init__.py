"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_terms, make_zero_rate_terms
"""

from .utils import make_loan_terms, make_zero_rate_terms

__all__ = ["make_loan_terms", "make_zero_rate_terms"]
