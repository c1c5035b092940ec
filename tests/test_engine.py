import logging
from datetime import date
from decimal import Decimal

import pytest

from mortgage_calc.engine import (
    amortization_schedule,
    amortize,
    monthly_payment,
)


def test_thirty_year_reference_loan():
    res = amortize(300000, 0.06, 360)
    assert float(res.periodic_payment) == pytest.approx(1798.65, abs=0.01)
    assert float(res.total_interest) == pytest.approx(347514.57, abs=5)
    assert res.actual_term_periods == 360
    assert res.remaining_balance == 0


def test_extra_payment_shortens_reference_loan():
    base = amortize(300000, 0.06, 360)
    extra = amortize(300000, 0.06, 360, 200)
    assert extra.actual_term_periods < 360
    assert extra.total_interest < base.total_interest
    # the level payment does not depend on the extra payment
    assert extra.periodic_payment == base.periodic_payment


@pytest.mark.parametrize(
    "principal,rate,term,extra",
    [
        (300000, 0.06, 360, 0),
        (300000, 0.06, 360, 200),
        (450000, 0.0725, 360, 1000),
        (150000, 0.035, 180, 75.5),
        (80000, 0.0, 120, 0),
        (80000, 0.0, 120, 300),
        (25000, 0.1, 60, 25000),
    ],
)
def test_total_payment_is_principal_plus_interest(principal, rate, term, extra):
    res = amortize(principal, rate, term, extra)
    assert abs(res.total_payment - Decimal(principal) - res.total_interest) <= Decimal("0.01")
    assert res.total_interest >= 0


@pytest.mark.parametrize("principal,term", [(120000, 360), (5000, 12), (999999, 240)])
def test_zero_rate_has_no_interest(principal, term):
    res = amortize(principal, 0, term)
    assert res.total_interest == 0
    assert res.periodic_payment == Decimal(principal) / Decimal(term)
    assert res.actual_term_periods == term


def test_more_extra_never_costs_more():
    previous = None
    for extra in [0, 25, 50, 100, 200, 500, 1000, 5000]:
        res = amortize(250000, 0.065, 360, extra)
        if previous is not None:
            assert res.total_interest <= previous.total_interest
            assert res.actual_term_periods <= previous.actual_term_periods
        previous = res


def test_extra_covering_the_balance_pays_off_in_one_period():
    res = amortize(1000, 0.12, 12, 5000)
    assert res.actual_term_periods == 1
    assert res.total_interest == Decimal("10")
    assert res.total_payment == Decimal("1010")


def test_zero_principal_runs_no_periods():
    res = amortize(0, 0.05, 360)
    assert res.actual_term_periods == 0
    assert res.total_interest == 0
    assert res.total_payment == 0


def test_runaway_guard_stops_after_twice_the_term(caplog):
    payment = monthly_payment(100000, 0.06, 12)
    with caplog.at_level(logging.WARNING, logger="mortgage_calc.engine"):
        res = amortize(100000, 0.06, 12, -payment)
    assert res.actual_term_periods == 24
    assert res.remaining_balance > 100000
    assert "Stopped amortization" in caplog.text


def test_monthly_payment_rejects_non_positive_term():
    with pytest.raises(ValueError):
        monthly_payment(100000, 0.05, 0)


def test_schedule_matches_summary():
    schedule = amortization_schedule(200000, 0.05, 360, date(2024, 1, 15), 150)
    res = amortize(200000, 0.05, 360, 150)
    assert len(schedule) == res.actual_term_periods
    assert sum(e.interest_payment for e in schedule) == res.total_interest
    assert schedule[0].date == date(2024, 1, 15)
    assert schedule[1].date == date(2024, 2, 15)
    assert schedule[12].date == date(2025, 1, 15)
    assert schedule[0].starting_balance == Decimal(200000)
    assert schedule[-1].ending_balance <= Decimal("0.01")


def test_schedule_rows_chain_balances():
    schedule = amortization_schedule(50000, 0.04, 60, date(2024, 3, 1), 100)
    for prev, cur in zip(schedule, schedule[1:]):
        assert cur.starting_balance == prev.ending_balance
        assert cur.period == prev.period + 1
    for entry in schedule[:-1]:
        assert abs(entry.extra_payment - 100) < Decimal("1e-9")
        paid = entry.payment + entry.extra_payment
        assert abs(paid - entry.interest_payment - entry.principal_payment) < Decimal("1e-9")


def test_schedule_without_extra_has_no_extra_column():
    schedule = amortization_schedule(10000, 0.05, 12, date(2024, 1, 1))
    assert len(schedule) == 12
    assert all(e.extra_payment == 0 for e in schedule)


def test_sub_cent_payment_stops_within_tolerance():
    # level payment of half a cent leaves one cent after 1998 periods
    res = amortize(10, 0, 2000)
    assert res.periodic_payment == Decimal("0.005")
    assert res.actual_term_periods == 1998
    assert res.remaining_balance == 0
    assert res.total_payment == Decimal("9.99")
