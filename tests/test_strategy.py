from decimal import Decimal

import pytest

from mortgage_calc.data_models import LumpSumFrequency, PaymentFrequency
from mortgage_calc.engine import amortize, early_payoff_strategy, lump_sum_per_month

LOAN = (300000, 0.065, 360)


@pytest.mark.parametrize("frequency", list(PaymentFrequency))
@pytest.mark.parametrize("lump_frequency", list(LumpSumFrequency))
def test_no_extra_payments_save_nothing(frequency, lump_frequency):
    res = early_payoff_strategy(*LOAN, 0, frequency, 0, lump_frequency)
    assert res.interest_savings == 0
    assert res.term_reduction_periods == 0
    assert res.new_periodic_payment == res.baseline.periodic_payment


def test_additional_payment_savings_are_monotonic():
    previous = None
    for additional in [0, 50, 100, 250, 500, 1000]:
        res = early_payoff_strategy(*LOAN, additional, PaymentFrequency.MONTHLY, 0, LumpSumFrequency.ONE_TIME)
        assert res.interest_savings >= 0
        if previous is not None:
            assert res.interest_savings >= previous.interest_savings
            assert res.term_reduction_periods >= previous.term_reduction_periods
        previous = res


@pytest.mark.parametrize("lump_frequency", list(LumpSumFrequency))
def test_lump_sum_savings_are_monotonic(lump_frequency):
    previous = None
    for lump in [0, 1000, 5000, 10000, 50000]:
        res = early_payoff_strategy(*LOAN, 0, PaymentFrequency.MONTHLY, lump, lump_frequency)
        if previous is not None:
            assert res.interest_savings >= previous.interest_savings
            assert res.term_reduction_periods >= previous.term_reduction_periods
        previous = res


def test_savings_are_measured_against_plain_loan():
    res = early_payoff_strategy(*LOAN, 200, PaymentFrequency.MONTHLY, 0, LumpSumFrequency.ONE_TIME)
    plain = amortize(*LOAN)
    boosted = amortize(*LOAN, 200)
    assert res.baseline == plain
    assert res.with_strategy == boosted
    assert res.interest_savings == plain.total_interest - boosted.total_interest
    assert res.term_reduction_periods == plain.actual_term_periods - boosted.actual_term_periods
    assert res.new_periodic_payment == boosted.periodic_payment + 200


def test_higher_frequency_means_smaller_extra_per_period():
    results = {
        f: early_payoff_strategy(*LOAN, 300, f, 0, LumpSumFrequency.ONE_TIME) for f in PaymentFrequency
    }
    monthly = results[PaymentFrequency.MONTHLY]
    bi_weekly = results[PaymentFrequency.BI_WEEKLY]
    weekly = results[PaymentFrequency.WEEKLY]
    assert monthly.adjusted_extra > bi_weekly.adjusted_extra > weekly.adjusted_extra
    assert monthly.new_periodic_payment > bi_weekly.new_periodic_payment > weekly.new_periodic_payment
    annual = [monthly.adjusted_extra * 12, bi_weekly.adjusted_extra * 26, weekly.adjusted_extra * 52]
    assert max(annual) - min(annual) < Decimal("0.000001")


def test_lump_sum_cadences_spread_to_same_monthly_amount():
    assert lump_sum_per_month(36000, LumpSumFrequency.ONE_TIME, 360) == 100
    assert lump_sum_per_month(1200, LumpSumFrequency.YEARLY, 360) == 100
    assert lump_sum_per_month(300, LumpSumFrequency.QUARTERLY, 360) == 100
    assert lump_sum_per_month(-500, LumpSumFrequency.YEARLY, 360) == 0


def test_lump_sum_is_applied_as_monthly_extra():
    res = early_payoff_strategy(*LOAN, 0, PaymentFrequency.MONTHLY, 1200, LumpSumFrequency.YEARLY)
    assert res.lump_sum_per_month == 100
    assert res.with_strategy == amortize(*LOAN, 100)
    assert res.new_periodic_payment == res.with_strategy.periodic_payment + 100


def test_accepts_plain_string_cadences():
    by_string = early_payoff_strategy(*LOAN, 150, "bi-weekly", 2000, "quarterly")
    by_enum = early_payoff_strategy(*LOAN, 150, PaymentFrequency.BI_WEEKLY, 2000, LumpSumFrequency.QUARTERLY)
    assert by_string == by_enum
