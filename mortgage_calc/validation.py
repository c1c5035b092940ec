"""Input checks run by hosts before calling the engine.

The engine assumes sanitized numbers. The CLI and the web API call these
functions first so that bad input is rejected with a readable ``ValueError``
instead of surfacing as NaN or a runaway payoff loop. Upper bounds keep a
single request from asking for an unbounded amount of work.
"""

from __future__ import annotations

from decimal import Decimal

from .utils import Number, to_decimal

MAX_ANNUAL_RATE = Decimal("0.20")
MAX_TERM_MONTHS = 480
MAX_AMOUNT = Decimal("100000000")
# weekly payments over the longest term
MAX_PAYMENT_COUNT = 52 * MAX_TERM_MONTHS // 12


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _finite(value: Number, label: str) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise ValueError(f"{label} must be a finite number.") from exc


def _whole(value: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _bounded_amount(value: Number, label: str) -> Decimal:
    amount = _finite(value, label)
    _require(amount <= MAX_AMOUNT, f"{label} exceeds maximum.")
    return amount


def validate_rate_and_term(annual_rate: Number, term_months: int) -> None:
    rate = _finite(annual_rate, "Interest rate")
    _require(rate >= 0, "Interest rate cannot be negative.")
    _require(rate <= MAX_ANNUAL_RATE, "Interest rate must be between 0% and 20%.")
    _require(_whole(term_months), "Term must be a whole number of months.")
    _require(term_months >= 1, "Term must be at least one month.")
    _require(term_months <= MAX_TERM_MONTHS, f"Term cannot exceed {MAX_TERM_MONTHS} months.")


def validate_loan_parameters(principal: Number, annual_rate: Number, term_months: int) -> None:
    _require(_bounded_amount(principal, "Principal") > 0, "Principal must be positive.")
    validate_rate_and_term(annual_rate, term_months)


def validate_strategy_inputs(additional_periodic_payment: Number, lump_sum_amount: Number) -> None:
    _require(
        _bounded_amount(additional_periodic_payment, "Additional payment") >= 0,
        "Additional payment cannot be negative.",
    )
    _require(_bounded_amount(lump_sum_amount, "Lump sum") >= 0, "Lump sum cannot be negative.")


def validate_extra_payment(extra_payment: Number) -> None:
    _require(_bounded_amount(extra_payment, "Extra payment") >= 0, "Extra payment cannot be negative.")


def validate_loan_amount(amount: Number, label: str = "Loan amount") -> None:
    _require(_bounded_amount(amount, label) >= 0, f"{label} cannot be negative.")


def validate_home_purchase(home_value: Number, down_payment: Number) -> None:
    home = _bounded_amount(home_value, "Home value")
    down = _finite(down_payment, "Down payment")
    _require(home > 0, "Home value must be positive.")
    _require(down >= 0, "Down payment cannot be negative.")
    _require(down <= home, "Down payment cannot exceed home value.")


def validate_payment_count(count: int) -> None:
    _require(_whole(count), "Number of payments must be a whole number.")
    _require(count >= 1, "Number of payments must be at least one.")
    _require(count <= MAX_PAYMENT_COUNT, f"Number of payments cannot exceed {MAX_PAYMENT_COUNT}.")
