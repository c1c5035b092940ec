"""VA funding fee calculations.

The funding fee is a percentage of the base loan amount that is usually
financed into the loan. The rate depends only on the borrower category:
first-time use, subsequent use, or exempt (e.g. service-connected disability).
Fee and final amount are always derived from the base passed in, so a change
to home value or down payment is reflected simply by calling again.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from .data_models import VAFundingFee, VAFundingFeeType
from .utils import Number, to_decimal

VA_FUNDING_FEE_RATES: Dict[VAFundingFeeType, Decimal] = {
    VAFundingFeeType.FIRST_TIME: Decimal("0.0215"),
    VAFundingFeeType.SUBSEQUENT: Decimal("0.033"),
    VAFundingFeeType.EXEMPT: Decimal("0"),
}


def va_funding_fee_rate(fee_type: VAFundingFeeType) -> Decimal:
    return VA_FUNDING_FEE_RATES[VAFundingFeeType(fee_type)]


def base_loan_amount(home_value: Number, down_payment: Number) -> Decimal:
    """Home value less down payment, never below zero."""
    return max(to_decimal(home_value) - to_decimal(down_payment), Decimal("0"))


def va_funding_fee(base_loan_amount: Number, fee_type: VAFundingFeeType) -> Decimal:
    """Return the funding fee owed on ``base_loan_amount``."""
    return to_decimal(base_loan_amount) * va_funding_fee_rate(fee_type)


def final_loan_amount(base_loan_amount: Number, fee_amount: Number) -> Decimal:
    """Return the loan amount with the funding fee financed in."""
    return to_decimal(base_loan_amount) + to_decimal(fee_amount)


def va_funding_fee_breakdown(base_loan_amount: Number, fee_type: VAFundingFeeType) -> VAFundingFee:
    """Compute rate, fee and final loan amount in one pass."""
    fee_type = VAFundingFeeType(fee_type)
    base = to_decimal(base_loan_amount)
    fee = va_funding_fee(base, fee_type)
    return VAFundingFee(
        fee_type=fee_type,
        rate=va_funding_fee_rate(fee_type),
        base_loan_amount=base,
        fee_amount=fee,
        final_loan_amount=final_loan_amount(base, fee),
    )
