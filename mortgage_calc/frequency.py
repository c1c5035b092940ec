"""Conversion between monthly amounts and per-period amounts.

The amortization engine iterates in months, while borrowers may pay monthly,
every two weeks or every week. These helpers move an amount between the two
views. All transforms are linear, so the yearly total of a payment stream is
the same whichever cadence it is expressed in.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from .data_models import PaymentFrequency
from .utils import Number, to_decimal

MONTHS_PER_YEAR = 12

_PERIODS_PER_YEAR: Dict[PaymentFrequency, int] = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.BI_WEEKLY: 26,
    PaymentFrequency.WEEKLY: 52,
}


def periods_per_year(frequency: PaymentFrequency) -> int:
    """Return the number of payments made per year for ``frequency``."""
    return _PERIODS_PER_YEAR[PaymentFrequency(frequency)]


def adjust_for_frequency(monthly_amount: Number, frequency: PaymentFrequency) -> Decimal:
    """Spread a monthly amount over the payment periods of ``frequency``.

    ``monthly_amount * 12 / periods_per_year``: a $100 monthly contribution is
    about $46.15 per bi-weekly period and about $23.08 per weekly period.
    """
    amount = to_decimal(monthly_amount)
    return amount * Decimal(MONTHS_PER_YEAR) / Decimal(periods_per_year(frequency))


def monthly_equivalent(per_period_amount: Number, frequency: PaymentFrequency) -> Decimal:
    """Inverse of :func:`adjust_for_frequency`."""
    amount = to_decimal(per_period_amount)
    return amount * Decimal(periods_per_year(frequency)) / Decimal(MONTHS_PER_YEAR)


def annualized(per_period_amount: Number, frequency: PaymentFrequency) -> Decimal:
    """Total paid over one year at ``frequency``."""
    return to_decimal(per_period_amount) * Decimal(periods_per_year(frequency))
