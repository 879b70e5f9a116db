import pytest

from homeloan.core.finance.amortization import (
    BALANCE_EPSILON,
    compare_additional_payment,
    generate_amortization_schedule,
    monthly_payment,
)


def test_additional_payment_shortens_schedule(baseline_schedule, accelerated_terms):
    standard = baseline_schedule()
    accelerated = baseline_schedule(accelerated_terms)

    assert len(accelerated) < len(standard)
    assert accelerated[-1].year < 20
    assert accelerated[-1].remaining_balance == 0.0
    assert accelerated[-1].cumulative_interest < standard[-1].cumulative_interest


def test_no_rows_after_payoff(baseline_schedule, accelerated_terms):
    rows = baseline_schedule(accelerated_terms)
    # only the final row may be partial, and it is the first with a zero balance
    zero_rows = [r for r in rows if r.remaining_balance == 0.0]
    assert zero_rows == [rows[-1]]
    assert all(r.months_paid == 12 for r in rows[1:-1])
    assert 1 <= rows[-1].months_paid <= 12


def test_accelerated_principal_recovers_loan(baseline_schedule, accelerated_terms):
    last = baseline_schedule(accelerated_terms)[-1]
    assert last.cumulative_principal == pytest.approx(1_000_000, abs=BALANCE_EPSILON)


def test_zero_additional_equals_standard():
    assert generate_amortization_schedule(400_000, 9.0, 15, 0.0) == generate_amortization_schedule(400_000, 9.0, 15)


def test_compare_additional_payment_savings():
    cmp = compare_additional_payment(1_000_000, 10.5, 20, 1_000.0)
    assert cmp.standard.months_to_payoff == 240
    assert cmp.accelerated.months_to_payoff < 240
    assert cmp.months_saved == 240 - cmp.accelerated.months_to_payoff
    assert cmp.interest_saved > 0
    assert cmp.new_monthly_payment == pytest.approx(monthly_payment(1_000_000, 10.5, 20) + 1_000.0)


def test_compare_totals_match_yearly_tables():
    cmp = compare_additional_payment(1_000_000, 10.5, 20, 1_000.0)
    rows = generate_amortization_schedule(1_000_000, 10.5, 20, 1_000.0)
    assert cmp.accelerated.total_interest == pytest.approx(rows[-1].cumulative_interest)
    assert cmp.accelerated.months_to_payoff == sum(r.months_paid for r in rows)


def test_larger_extra_saves_more():
    small = compare_additional_payment(600_000, 11.0, 20, 500.0)
    large = compare_additional_payment(600_000, 11.0, 20, 2_000.0)
    assert large.months_saved > small.months_saved
    assert large.interest_saved > small.interest_saved


def test_additional_payment_at_zero_rate():
    cmp = compare_additional_payment(120_000, 0.0, 10, 1_000.0)
    # 1,000 + 1,000 per month → paid off in 60 months, no interest either way
    assert cmp.accelerated.months_to_payoff == 60
    assert cmp.interest_saved == 0.0
