"""Utility functions for the mortgage calculator.

This module provides helpers for coercing host input into ``Decimal`` values,
for parsing amounts, percentages and dates typed by a user, and for calendar
month arithmetic. It uses Python's ``datetime`` module to calculate month
offsets.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, getcontext
from typing import Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    """Convert ``value`` into a finite ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. ``ValueError`` is raised for anything
    that is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, bool):
            raise ValueError(f"Invalid numeric value: {value!r}")
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValueError(f"Invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Numeric value must be finite: {value!r}")
    return result


def parse_amount(value: str) -> Decimal:
    """Parse a money string with optional suffixes.

    Accepts plain numbers ("500000"), thousands separators ("500,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "500k" meaning 500 000).
    """
    cleaned = value.strip().lower().replace(",", "").lstrip("$")
    factor = Decimal(1)
    if cleaned.endswith("k"):
        factor = Decimal(1_000)
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = Decimal(1_000_000)
        cleaned = cleaned[:-1]
    try:
        return to_decimal(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_rate(value: str) -> Decimal:
    """Parse an interest rate typed as a percent into a fraction.

    Both ``"6"`` and ``"6%"`` mean six percent and return ``Decimal("0.06")``.
    """
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    try:
        return to_decimal(cleaned) / Decimal(100)
    except ValueError as exc:
        raise ValueError(f"Invalid percentage: {value}") from exc


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date`` object."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is kept as is. When it does not exist in the target
    month the surplus days roll over into the following month, so adding one
    month to Jan 31 yields Mar 3 (Mar 2 in a leap year).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    return date(year, month, 1) + timedelta(days=dt.day - 1)
