from decimal import Decimal

import pytest

from mortgage_calc.data_models import VAFundingFeeType
from mortgage_calc.va_fee import (
    base_loan_amount,
    final_loan_amount,
    va_funding_fee,
    va_funding_fee_breakdown,
    va_funding_fee_rate,
)


def test_first_time_fee_on_400k():
    fee = va_funding_fee(400000, VAFundingFeeType.FIRST_TIME)
    assert fee == Decimal("8600.00")
    assert final_loan_amount(400000, fee) == Decimal("408600.00")


def test_rates_by_category():
    assert va_funding_fee_rate(VAFundingFeeType.FIRST_TIME) == Decimal("0.0215")
    assert va_funding_fee_rate(VAFundingFeeType.SUBSEQUENT) == Decimal("0.033")
    assert va_funding_fee_rate(VAFundingFeeType.EXEMPT) == 0
    assert va_funding_fee(400000, VAFundingFeeType.SUBSEQUENT) == Decimal("13200")


@pytest.mark.parametrize("base", [0, 150000, 725000.50])
def test_exempt_borrowers_pay_nothing(base):
    assert va_funding_fee(base, VAFundingFeeType.EXEMPT) == 0
    assert final_loan_amount(base, 0) == Decimal(str(base))


@pytest.mark.parametrize("fee_type", list(VAFundingFeeType))
def test_zero_base_has_zero_fee_and_final_amount(fee_type):
    breakdown = va_funding_fee_breakdown(0, fee_type)
    assert breakdown.fee_amount == 0
    assert breakdown.final_loan_amount == 0


@pytest.mark.parametrize("fee_type", [VAFundingFeeType.FIRST_TIME, VAFundingFeeType.SUBSEQUENT])
@pytest.mark.parametrize("k", [0.5, 2, 3.75, 10])
def test_fee_scales_linearly_with_base(fee_type, k):
    base = Decimal("287500")
    scaled = va_funding_fee(base * Decimal(str(k)), fee_type)
    assert abs(scaled - Decimal(str(k)) * va_funding_fee(base, fee_type)) < Decimal("0.000001")


def test_fee_follows_home_value_and_down_payment_changes():
    first = va_funding_fee_breakdown(base_loan_amount(500000, 50000), VAFundingFeeType.FIRST_TIME)
    # raising the down payment shrinks the base; fee and final amount follow
    second = va_funding_fee_breakdown(base_loan_amount(500000, 100000), VAFundingFeeType.FIRST_TIME)
    assert first.base_loan_amount == 450000
    assert second.base_loan_amount == 400000
    assert second.fee_amount == Decimal("8600")
    assert second.final_loan_amount == second.base_loan_amount + second.fee_amount
    assert second.fee_amount < first.fee_amount


def test_base_loan_amount_never_negative():
    assert base_loan_amount(300000, 350000) == 0


def test_breakdown_accepts_string_fee_type():
    breakdown = va_funding_fee_breakdown(100000, "subsequent")
    assert breakdown.fee_type is VAFundingFeeType.SUBSEQUENT
    assert breakdown.rate == Decimal("0.033")
    assert breakdown.fee_amount == Decimal("3300")
