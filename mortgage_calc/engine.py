"""Core calculation engine for the mortgage calculator.

This module implements the amortization routine shared by every calculator:
the level monthly payment, a month-by-month payoff loop with an optional
constant extra payment, a dated amortization schedule, and the early-payoff
strategy that compares extra periodic and lump-sum contributions against the
plain loan. All functions are pure; results are immutable dataclasses.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, getcontext
from typing import Dict, Iterator, List, Tuple

from .data_models import (
    AmortizationResult,
    EarlyPayoffStrategyResult,
    LoanParameters,
    LumpSumFrequency,
    PaymentFrequency,
    ScheduleEntry,
)
from .frequency import adjust_for_frequency
from .schedule import generate_schedule
from .utils import Number, to_decimal

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

# A balance at or below one cent counts as paid off.
PAYOFF_TOLERANCE = Decimal("0.01")

# The payoff loop never runs longer than this multiple of the term.
MAX_TERM_MULTIPLE = 2


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if term <= 0:
        raise ValueError("Term must be positive")
    if rate_per_month == 0:
        return principal / Decimal(term)
    factor = (1 + rate_per_month) ** term
    return principal * (rate_per_month * factor) / (factor - 1)


def _loan_parameters(principal: Number, annual_rate: Number, term_months: int) -> LoanParameters:
    return LoanParameters(
        principal=to_decimal(principal),
        annual_rate=to_decimal(annual_rate),
        term_months=int(term_months),
    )


def _iterate_periods(
    params: LoanParameters, payment: Decimal, extra: Decimal
) -> Iterator[Tuple[Decimal, Decimal, Decimal, Decimal]]:
    """Yield ``(starting_balance, interest, principal_payment, ending_balance)``.

    The principal reduction is clamped to the outstanding balance so the final
    period never overpays. Iteration stops once the balance is within
    ``PAYOFF_TOLERANCE`` of zero or after ``MAX_TERM_MULTIPLE * term`` periods.
    """
    rate_per_month = params.monthly_rate
    max_periods = params.term_months * MAX_TERM_MULTIPLE
    balance = params.principal
    periods = 0
    while balance > PAYOFF_TOLERANCE and periods < max_periods:
        interest = balance * rate_per_month
        principal_payment = min(payment - interest + extra, balance)
        ending_balance = balance - principal_payment
        yield balance, interest, principal_payment, ending_balance
        balance = ending_balance
        periods += 1
    if balance > PAYOFF_TOLERANCE:
        logger.warning(
            "Stopped amortization after %d periods with %.2f outstanding (principal=%s, extra=%s)",
            periods,
            balance,
            params.principal,
            extra,
        )


def monthly_payment(principal: Number, annual_rate: Number, term_months: int) -> Decimal:
    """Return the level monthly payment that retires ``principal`` in ``term_months``.

    ``annual_rate`` is a fraction (``0.065`` for 6.5 %).
    """
    params = _loan_parameters(principal, annual_rate, term_months)
    return _calculate_annuity_payment(params.principal, params.monthly_rate, params.term_months)


def amortize(
    principal: Number,
    annual_rate: Number,
    term_months: int,
    extra_payment: Number = 0,
) -> AmortizationResult:
    """Amortize a loan month by month and summarize the payoff.

    Parameters
    ----------
    principal: Number
        The amount borrowed.
    annual_rate: Number
        Nominal yearly interest rate as a fraction.
    term_months: int
        Scheduled number of monthly payments; the level payment is computed
        from it.
    extra_payment: Number
        A constant amount added to every monthly payment and applied to
        principal.

    Returns
    -------
    AmortizationResult
        ``total_payment`` equals ``principal + total_interest`` to within a
        cent whenever the loan is fully paid off. Because the loop stops once
        the balance is within ``PAYOFF_TOLERANCE``, ``actual_term_periods``
        can fall a few periods short of ``term_months`` when the level
        payment is only a few cents (``amortize(1000, 0, 200000)`` stops at
        199998 periods).
    """
    params = _loan_parameters(principal, annual_rate, term_months)
    extra = to_decimal(extra_payment)
    payment = _calculate_annuity_payment(params.principal, params.monthly_rate, params.term_months)

    total_interest = Decimal("0")
    total_payment = Decimal("0")
    balance = params.principal
    periods = 0
    for _, interest, principal_payment, ending_balance in _iterate_periods(params, payment, extra):
        total_interest += interest
        total_payment += interest + principal_payment
        balance = ending_balance
        periods += 1

    logger.debug(
        "Amortized %s at %s over %d months (extra %s): %d periods, interest %.2f",
        params.principal,
        params.annual_rate,
        params.term_months,
        extra,
        periods,
        total_interest,
    )
    return AmortizationResult(
        periodic_payment=payment,
        total_interest=total_interest,
        actual_term_periods=periods,
        total_payment=total_payment,
        remaining_balance=balance if balance > PAYOFF_TOLERANCE else Decimal("0"),
    )


def amortization_schedule(
    principal: Number,
    annual_rate: Number,
    term_months: int,
    first_payment_date: date,
    extra_payment: Number = 0,
) -> List[ScheduleEntry]:
    """Compute the dated, period-by-period amortization schedule.

    The rows follow exactly the same iteration as :func:`amortize`, so the sum
    of ``interest_payment`` equals ``amortize(...).total_interest``. Dates are
    monthly steps from ``first_payment_date``.
    """
    params = _loan_parameters(principal, annual_rate, term_months)
    extra = to_decimal(extra_payment)
    payment = _calculate_annuity_payment(params.principal, params.monthly_rate, params.term_months)

    rows = list(_iterate_periods(params, payment, extra))
    dates = generate_schedule(first_payment_date, PaymentFrequency.MONTHLY, len(rows))

    schedule: List[ScheduleEntry] = []
    for period, (row_date, row) in enumerate(zip(dates, rows), start=1):
        starting_balance, interest, principal_payment, ending_balance = row
        # Anything beyond the scheduled principal portion is the extra payment.
        extra_applied = max(principal_payment - (payment - interest), Decimal("0"))
        schedule.append(
            ScheduleEntry(
                period=period,
                date=row_date,
                starting_balance=starting_balance,
                payment=interest + principal_payment - extra_applied,
                principal_payment=principal_payment,
                interest_payment=interest,
                extra_payment=extra_applied,
                ending_balance=ending_balance,
            )
        )
    return schedule


def lump_sum_per_month(amount: Number, lump_sum_frequency: LumpSumFrequency, term_months: int) -> Decimal:
    """Express a lump-sum contribution as an equivalent monthly amount.

    A one-time lump sum is spread over the whole term, a yearly one over 12
    months and a quarterly one over 3 months. Non-positive amounts contribute
    nothing.
    """
    value = to_decimal(amount)
    if value <= 0:
        return Decimal("0")
    divisors: Dict[LumpSumFrequency, int] = {
        LumpSumFrequency.ONE_TIME: int(term_months),
        LumpSumFrequency.YEARLY: 12,
        LumpSumFrequency.QUARTERLY: 3,
    }
    return value / Decimal(divisors[LumpSumFrequency(lump_sum_frequency)])


def early_payoff_strategy(
    principal: Number,
    annual_rate: Number,
    term_months: int,
    additional_periodic_payment: Number,
    frequency: PaymentFrequency,
    lump_sum_amount: Number,
    lump_sum_frequency: LumpSumFrequency,
) -> EarlyPayoffStrategyResult:
    """Measure what extra periodic and lump-sum payments save on a loan.

    The additional payment is converted to its per-period amount for the
    chosen cadence and, together with the monthly share of the lump sum, is
    fed to :func:`amortize` as a constant extra payment. The result compares
    that run against the same loan with no extra payment.

    Inputs are expected to be validated by the caller (see
    :mod:`mortgage_calc.validation`).
    """
    baseline = amortize(principal, annual_rate, term_months, 0)
    adjusted_extra = adjust_for_frequency(additional_periodic_payment, frequency)
    lump_monthly = lump_sum_per_month(lump_sum_amount, lump_sum_frequency, term_months)
    with_strategy = amortize(principal, annual_rate, term_months, adjusted_extra + lump_monthly)

    return EarlyPayoffStrategyResult(
        interest_savings=baseline.total_interest - with_strategy.total_interest,
        new_periodic_payment=with_strategy.periodic_payment + adjusted_extra + lump_monthly,
        term_reduction_periods=baseline.actual_term_periods - with_strategy.actual_term_periods,
        adjusted_extra=adjusted_extra,
        lump_sum_per_month=lump_monthly,
        baseline=baseline,
        with_strategy=with_strategy,
    )
