"""Payment date scheduling.

Produces the calendar dates of successive payments. Weekly and bi-weekly
cadences step by a fixed number of days; the monthly cadence steps by one
calendar month using :func:`mortgage_calc.utils.add_months`, which lets a day
that does not exist in the target month roll into the next one. Each step
starts from the previous emitted date, so after a rollover (Jan 31 -> Mar 3)
the schedule continues on the new day of month (Apr 3, May 3, ...).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List

from .data_models import PaymentFrequency
from .utils import add_months

_DAY_STEPS: Dict[PaymentFrequency, timedelta] = {
    PaymentFrequency.BI_WEEKLY: timedelta(days=14),
    PaymentFrequency.WEEKLY: timedelta(days=7),
}


def next_payment_date(current: date, frequency: PaymentFrequency) -> date:
    """Return the payment date that follows ``current``.

    Raises ``ValueError`` when the next date falls past ``date.max``.
    """
    frequency = PaymentFrequency(frequency)
    try:
        if frequency is PaymentFrequency.MONTHLY:
            return add_months(current, 1)
        return current + _DAY_STEPS[frequency]
    except (OverflowError, ValueError) as exc:
        raise ValueError("Payment date out of range") from exc


def generate_schedule(first_payment_date: date, frequency: PaymentFrequency, count: int) -> List[date]:
    """Return ``count`` payment dates starting on ``first_payment_date``.

    The first entry is always ``first_payment_date`` itself and the sequence
    is strictly increasing. A ``count`` of zero yields an empty list.
    """
    if count < 0:
        raise ValueError("Number of payments cannot be negative")
    schedule: List[date] = []
    current = first_payment_date
    for index in range(count):
        if index:
            current = next_payment_date(current, frequency)
        schedule.append(current)
    return schedule
