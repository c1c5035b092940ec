"""Data models for the mortgage calculator.

This module defines the enumerations (payment cadence, lump-sum cadence and VA
funding fee category) and the immutable dataclasses returned by the engine.
Every result is a plain value computed fresh from the current inputs; nothing
here holds a reference to a caller or is updated in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class PaymentFrequency(str, Enum):
    """How often a borrower makes payments."""

    MONTHLY = "monthly"
    BI_WEEKLY = "bi-weekly"
    WEEKLY = "weekly"


class LumpSumFrequency(str, Enum):
    """How often a lump-sum contribution is made toward principal."""

    ONE_TIME = "one-time"
    YEARLY = "yearly"
    QUARTERLY = "quarterly"


class VAFundingFeeType(str, Enum):
    """Borrower category used to pick the VA funding fee rate."""

    FIRST_TIME = "first-time"
    SUBSEQUENT = "subsequent"
    EXEMPT = "exempt"


@dataclass(frozen=True)
class LoanParameters:
    """Inputs of one amortization pass.

    Attributes
    ----------
    principal: Decimal
        The amount borrowed.
    annual_rate: Decimal
        Nominal yearly interest rate as a fraction (``0.06`` for 6 %).
    term_months: int
        Number of scheduled monthly payments.
    """

    principal: Decimal
    annual_rate: Decimal
    term_months: int

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_rate / Decimal(12)


@dataclass(frozen=True)
class AmortizationResult:
    """Outcome of iterating a loan down to (near) zero.

    ``remaining_balance`` is zero for a fully amortized loan. It is only
    positive when the iteration cap stopped the loop early, which signals an
    extra payment configuration that cannot retire the balance.
    """

    periodic_payment: Decimal
    total_interest: Decimal
    actual_term_periods: int
    total_payment: Decimal
    remaining_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class EarlyPayoffStrategyResult:
    """Comparison of an extra-payment strategy against the plain loan."""

    interest_savings: Decimal
    new_periodic_payment: Decimal
    term_reduction_periods: int
    adjusted_extra: Decimal
    lump_sum_per_month: Decimal
    baseline: AmortizationResult
    with_strategy: AmortizationResult


@dataclass(frozen=True)
class VAFundingFee:
    fee_type: VAFundingFeeType
    rate: Decimal
    base_loan_amount: Decimal
    fee_amount: Decimal
    final_loan_amount: Decimal


@dataclass(frozen=True)
class ScheduleEntry:
    """An entry in the amortization schedule.

    Each entry corresponds to one monthly period. ``payment`` is the level
    installment actually paid that month (smaller in the final period) and
    ``extra_payment`` is the part of the principal reduction beyond it.
    """

    period: int
    date: date
    starting_balance: Decimal
    payment: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    extra_payment: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class VAPurchaseSummary:
    """Monthly cost breakdown of a VA home purchase.

    The funding fee is financed into the loan, so principal and interest are
    computed on ``total_loan_amount``. VA loans carry no mortgage insurance.
    """

    base_loan_amount: Decimal
    funding_fee: VAFundingFee
    total_loan_amount: Decimal
    monthly_principal_interest: Decimal
    monthly_property_tax: Decimal
    monthly_insurance: Decimal
    extra_payment: Decimal
    total_monthly_payment: Decimal
    total_interest: Decimal
    total_cost: Decimal
    actual_term_periods: int
    loan_to_value: Decimal
    down_payment_ratio: Decimal


@dataclass(frozen=True)
class VARefinanceSummary:
    current_monthly_payment: Decimal
    new_base_loan_amount: Decimal
    funding_fee: VAFundingFee
    new_loan_amount: Decimal
    new_monthly_payment: Decimal
    monthly_savings: Decimal
    current_total_interest: Decimal
    new_total_interest: Decimal
    lifetime_savings: Decimal
    rate_reduction: Decimal
    loan_increase: Decimal
