"""VA purchase and VA refinance scenarios.

These combine the funding fee, the amortization engine and the housing costs
that a borrower sees on a monthly statement. Property tax rates are fractions
of the home value per year; insurance is an annual dollar premium, which can
be converted from a percent of home value with
:func:`insurance_percent_to_dollar`.
"""

from __future__ import annotations

from decimal import Decimal

from .data_models import VAFundingFeeType, VAPurchaseSummary, VARefinanceSummary
from .engine import amortize
from .utils import Number, to_decimal
from .va_fee import base_loan_amount, va_funding_fee_breakdown

DEFAULT_TERM_MONTHS = 360


def insurance_dollar_to_percent(dollar_amount: Number, home_value: Number) -> Decimal:
    """Annual premium as a percent of home value (``0`` for a zero home value)."""
    home = to_decimal(home_value)
    if home <= 0:
        return Decimal("0")
    return to_decimal(dollar_amount) / home * Decimal(100)


def insurance_percent_to_dollar(percent: Number, home_value: Number) -> Decimal:
    return to_decimal(home_value) * to_decimal(percent) / Decimal(100)


def va_purchase_summary(
    home_value: Number,
    down_payment: Number,
    annual_rate: Number,
    term_months: int,
    fee_type: VAFundingFeeType,
    property_tax_rate: Number = 0,
    annual_insurance: Number = 0,
    extra_payment: Number = 0,
) -> VAPurchaseSummary:
    """Compute the monthly payment and lifetime cost of a VA purchase.

    The funding fee is derived from the current base loan (home value less
    down payment) on every call and financed into the loan. Taxes and
    insurance are counted for as many months as the loan actually runs.
    """
    home = to_decimal(home_value)
    down = to_decimal(down_payment)
    extra = to_decimal(extra_payment)

    base = base_loan_amount(home, down)
    fee = va_funding_fee_breakdown(base, fee_type)
    loan = amortize(fee.final_loan_amount, annual_rate, term_months, extra)

    monthly_tax = home * to_decimal(property_tax_rate) / Decimal(12)
    monthly_insurance = to_decimal(annual_insurance) / Decimal(12)
    escrow_total = (monthly_tax + monthly_insurance) * loan.actual_term_periods

    return VAPurchaseSummary(
        base_loan_amount=base,
        funding_fee=fee,
        total_loan_amount=fee.final_loan_amount,
        monthly_principal_interest=loan.periodic_payment,
        monthly_property_tax=monthly_tax,
        monthly_insurance=monthly_insurance,
        extra_payment=extra,
        total_monthly_payment=loan.periodic_payment + monthly_tax + monthly_insurance + extra,
        total_interest=loan.total_interest,
        total_cost=down + loan.total_payment + escrow_total,
        actual_term_periods=loan.actual_term_periods,
        loan_to_value=base / home if home > 0 else Decimal("0"),
        down_payment_ratio=down / home if home > 0 else Decimal("0"),
    )


def va_refinance_summary(
    current_balance: Number,
    current_rate: Number,
    new_rate: Number,
    cash_out: Number,
    fee_type: VAFundingFeeType,
    term_months: int = DEFAULT_TERM_MONTHS,
) -> VARefinanceSummary:
    """Compare the current loan with a VA refinance of the same term.

    The new loan is the current balance plus any cash out, with the funding
    fee financed in. Both loans are assumed to run their full term, so
    ``lifetime_savings`` is the difference in total payments.
    """
    balance = to_decimal(current_balance)
    current = amortize(balance, current_rate, term_months)

    fee = va_funding_fee_breakdown(balance + to_decimal(cash_out), fee_type)
    refinanced = amortize(fee.final_loan_amount, new_rate, term_months)

    return VARefinanceSummary(
        current_monthly_payment=current.periodic_payment,
        new_base_loan_amount=fee.base_loan_amount,
        funding_fee=fee,
        new_loan_amount=fee.final_loan_amount,
        new_monthly_payment=refinanced.periodic_payment,
        monthly_savings=current.periodic_payment - refinanced.periodic_payment,
        current_total_interest=current.total_interest,
        new_total_interest=refinanced.total_interest,
        lifetime_savings=current.total_payment - refinanced.total_payment,
        rate_reduction=to_decimal(current_rate) - to_decimal(new_rate),
        loan_increase=fee.final_loan_amount - balance,
    )
