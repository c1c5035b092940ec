"""Output helpers for the mortgage calculator.

This module provides simple functions to render calculator results in a
tabular text format. We rely only on built-in printing and string formatting;
the engine itself never formats numbers.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .data_models import (
    AmortizationResult,
    EarlyPayoffStrategyResult,
    ScheduleEntry,
    VAFundingFee,
    VAPurchaseSummary,
    VARefinanceSummary,
)
from .utils import Number, to_decimal

CENT = Decimal("0.01")


def format_currency(amount: Number) -> str:
    """Format money with thousands separators and exactly two decimals."""
    value = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{value:,.2f}"


def format_percent(value: Number, decimals: int = 4) -> str:
    """Format a percent value (``6.5`` -> ``"6.5000%"``) with fixed decimals."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:.{decimals}f}%"


def print_amortization(result: AmortizationResult, principal: Number) -> None:
    """Print a summary of one amortization run."""
    print("Summary")
    print("-" * 72)
    print(f"Principal          : {format_currency(principal)}")
    print(f"Monthly payment    : {format_currency(result.periodic_payment)}")
    print(f"Total interest     : {format_currency(result.total_interest)}")
    print(f"Total payment      : {format_currency(result.total_payment)}")
    print(f"Payments made      : {result.actual_term_periods}")
    if result.remaining_balance > 0:
        print(f"Unpaid balance     : {format_currency(result.remaining_balance)}")
    print("-" * 72)


def print_strategy(result: EarlyPayoffStrategyResult) -> None:
    """Print the baseline and strategy results side by side."""
    print("Early payoff strategy")
    print("=" * 72)
    print(f"{'Metric':20s} {'Baseline':>15s} {'Strategy':>15s}")
    base, plan = result.baseline, result.with_strategy
    print(f"{'Monthly payment':20s} {format_currency(base.periodic_payment):>15s} "
          f"{format_currency(result.new_periodic_payment):>15s}")
    print(f"{'Total interest':20s} {format_currency(base.total_interest):>15s} "
          f"{format_currency(plan.total_interest):>15s}")
    print(f"{'Payments made':20s} {base.actual_term_periods:>15d} {plan.actual_term_periods:>15d}")
    print("-" * 72)
    print(f"Interest saved     : {format_currency(result.interest_savings)}")
    print(f"Term reduction     : {result.term_reduction_periods} months")
    print(f"Extra per month    : {format_currency(result.adjusted_extra + result.lump_sum_per_month)}")


def print_schedule(schedule: Iterable[ScheduleEntry]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = ["Period", "Date", "StartBal", "Payment", "Principal", "Interest", "Extra", "EndBal"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.period),
            entry.date.isoformat(),
            f"{entry.starting_balance:.2f}",
            f"{entry.payment:.2f}",
            f"{entry.principal_payment:.2f}",
            f"{entry.interest_payment:.2f}",
            f"{entry.extra_payment:.2f}",
            f"{entry.ending_balance:.2f}",
        ]
        print("\t".join(row))


def print_payment_dates(dates: Iterable[date]) -> None:
    for number, payment_date in enumerate(dates, start=1):
        print(f"{number:>4d}  {payment_date.isoformat()}")


def print_va_fee(fee: VAFundingFee) -> None:
    print(f"Fee type           : {fee.fee_type.value}")
    print(f"Fee rate           : {format_percent(fee.rate * 100, 2)}")
    print(f"Base loan amount   : {format_currency(fee.base_loan_amount)}")
    print(f"Funding fee        : {format_currency(fee.fee_amount)}")
    print(f"Final loan amount  : {format_currency(fee.final_loan_amount)}")


def print_va_purchase(summary: VAPurchaseSummary) -> None:
    print("VA purchase")
    print("-" * 72)
    print(f"Total monthly      : {format_currency(summary.total_monthly_payment)}")
    print(f"Principal & int.   : {format_currency(summary.monthly_principal_interest)}")
    print(f"Property taxes     : {format_currency(summary.monthly_property_tax)}")
    print(f"Insurance          : {format_currency(summary.monthly_insurance)}")
    if summary.extra_payment > 0:
        print(f"Extra payment      : {format_currency(summary.extra_payment)}")
    print(f"Base loan amount   : {format_currency(summary.base_loan_amount)}")
    print(f"VA funding fee     : {format_currency(summary.funding_fee.fee_amount)}")
    print(f"Total loan amount  : {format_currency(summary.total_loan_amount)}")
    print(f"Total interest     : {format_currency(summary.total_interest)}")
    print(f"Total cost         : {format_currency(summary.total_cost)}")
    print(f"Loan-to-value      : {format_percent(summary.loan_to_value * 100, 2)}")
    print(f"Down payment       : {format_percent(summary.down_payment_ratio * 100, 1)}")


def print_va_refinance(summary: VARefinanceSummary) -> None:
    print("VA refinance")
    print("-" * 72)
    print(f"Current payment    : {format_currency(summary.current_monthly_payment)}")
    print(f"New payment        : {format_currency(summary.new_monthly_payment)}")
    print(f"Monthly savings    : {format_currency(summary.monthly_savings)}")
    print(f"VA funding fee     : {format_currency(summary.funding_fee.fee_amount)}")
    print(f"New loan amount    : {format_currency(summary.new_loan_amount)}")
    print(f"Loan increase      : {format_currency(summary.loan_increase)}")
    print(f"Rate reduction     : {format_percent(summary.rate_reduction * 100, 3)}")
    print(f"Lifetime savings   : {format_currency(summary.lifetime_savings)}")
    print(f"Interest (current) : {format_currency(summary.current_total_interest)}")
    print(f"Interest (new)     : {format_currency(summary.new_total_interest)}")
