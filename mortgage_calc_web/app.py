import logging
import os
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping

from flask import Flask, jsonify, request

from mortgage_calc.data_models import (
    AmortizationResult,
    EarlyPayoffStrategyResult,
    LumpSumFrequency,
    PaymentFrequency,
    VAFundingFee,
    VAFundingFeeType,
)
from mortgage_calc.engine import amortization_schedule, amortize, early_payoff_strategy
from mortgage_calc.scenarios import (
    insurance_percent_to_dollar,
    va_purchase_summary,
    va_refinance_summary,
)
from mortgage_calc.schedule import generate_schedule
from mortgage_calc.utils import parse_iso_date, to_decimal
from mortgage_calc.va_fee import base_loan_amount, va_funding_fee_breakdown
from mortgage_calc.validation import (
    validate_extra_payment,
    validate_home_purchase,
    validate_loan_amount,
    validate_loan_parameters,
    validate_payment_count,
    validate_rate_and_term,
    validate_strategy_inputs,
)

app = Flask(__name__)
app.config["DEFAULT_TERM_MONTHS"] = int(os.environ.get("MORTGAGE_CALC_DEFAULT_TERM_MONTHS", "360"))
app.config["MAX_SCHEDULE_ROWS"] = int(os.environ.get("MORTGAGE_CALC_MAX_SCHEDULE_ROWS", "720"))
app.logger.setLevel(os.environ.get("MORTGAGE_CALC_LOG_LEVEL", "INFO").upper())
logging.getLogger("mortgage_calc").setLevel(app.logger.level)


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _number(data: Mapping[str, Any], name: str, default: Any = None) -> Decimal:
    value = data.get(name, default)
    if value is None:
        raise ValueError(f"Missing field: {name}")
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a finite number") from exc


def _term(data: Mapping[str, Any], name: str = "term_months") -> int:
    value = data.get(name, app.config["DEFAULT_TERM_MONTHS"])
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be a whole number of months")
    return value


def _choice(enum_cls, data: Mapping[str, Any], name: str, default: Any):
    value = data.get(name, default.value)
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"{name} must be one of: {allowed}") from exc


def _serialize_result(result: AmortizationResult) -> Dict[str, Any]:
    return {
        "periodic_payment": float(result.periodic_payment),
        "total_interest": float(result.total_interest),
        "total_payment": float(result.total_payment),
        "actual_term_periods": result.actual_term_periods,
        "remaining_balance": float(result.remaining_balance),
    }


def _serialize_strategy(result: EarlyPayoffStrategyResult) -> Dict[str, Any]:
    return {
        "interest_savings": float(result.interest_savings),
        "new_periodic_payment": float(result.new_periodic_payment),
        "term_reduction_periods": result.term_reduction_periods,
        "adjusted_extra": float(result.adjusted_extra),
        "lump_sum_per_month": float(result.lump_sum_per_month),
        "baseline": _serialize_result(result.baseline),
        "with_strategy": _serialize_result(result.with_strategy),
    }


def _serialize_fee(fee: VAFundingFee) -> Dict[str, Any]:
    return {
        "fee_type": fee.fee_type.value,
        "rate": float(fee.rate),
        "base_loan_amount": float(fee.base_loan_amount),
        "fee_amount": float(fee.fee_amount),
        "final_loan_amount": float(fee.final_loan_amount),
    }


def _serialize_schedule(schedule):
    """Convert schedule entries into JSON-serialisable dictionaries for charts."""
    serialized = []
    for entry in schedule:
        serialized.append(
            {
                "period": entry.period,
                "date": entry.date.isoformat(),
                "payment": float(entry.payment),
                "principal": float(entry.principal_payment),
                "interest": float(entry.interest_payment),
                "extra": float(entry.extra_payment),
                "balance": float(entry.ending_balance),
            }
        )
    return serialized


def _decimals_to_floats(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: float(v) if isinstance(v, Decimal) else v for k, v in values.items()}


@app.errorhandler(ValueError)
def handle_value_error(exc: ValueError):
    app.logger.info("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


@app.post("/api/amortize")
def amortize_view():
    data = _payload()
    principal = _number(data, "principal")
    annual_rate = _number(data, "annual_rate")
    term = _term(data)
    extra = _number(data, "extra_payment", 0)
    validate_loan_parameters(principal, annual_rate, term)
    validate_extra_payment(extra)

    response: Dict[str, Any] = {"result": _serialize_result(amortize(principal, annual_rate, term, extra))}
    if data.get("first_payment_date"):
        first_date = parse_iso_date(str(data["first_payment_date"]))
        schedule = amortization_schedule(principal, annual_rate, term, first_date, extra)
        max_rows = app.config["MAX_SCHEDULE_ROWS"]
        response["schedule"] = _serialize_schedule(schedule[:max_rows])
        if len(schedule) > max_rows:
            response["truncated"] = len(schedule) - max_rows
    return jsonify(response)


@app.post("/api/early-payoff")
def early_payoff_view():
    data = _payload()
    principal = _number(data, "principal")
    annual_rate = _number(data, "annual_rate")
    term = _term(data)
    additional = _number(data, "additional_periodic_payment", 0)
    lump_sum = _number(data, "lump_sum_amount", 0)
    validate_loan_parameters(principal, annual_rate, term)
    validate_strategy_inputs(additional, lump_sum)

    result = early_payoff_strategy(
        principal,
        annual_rate,
        term,
        additional,
        _choice(PaymentFrequency, data, "frequency", PaymentFrequency.MONTHLY),
        lump_sum,
        _choice(LumpSumFrequency, data, "lump_sum_frequency", LumpSumFrequency.ONE_TIME),
    )
    return jsonify(_serialize_strategy(result))


@app.post("/api/va-fee")
def va_fee_view():
    data = _payload()
    fee_type = _choice(VAFundingFeeType, data, "fee_type", VAFundingFeeType.FIRST_TIME)
    if "base_loan_amount" in data:
        base = _number(data, "base_loan_amount")
        validate_loan_amount(base, "base_loan_amount")
    else:
        home_value = _number(data, "home_value")
        down_payment = _number(data, "down_payment", 0)
        validate_home_purchase(home_value, down_payment)
        base = base_loan_amount(home_value, down_payment)
    return jsonify(_serialize_fee(va_funding_fee_breakdown(base, fee_type)))


@app.post("/api/payment-dates")
def payment_dates_view():
    data = _payload()
    first_date = parse_iso_date(str(data.get("first_payment_date", date.today().isoformat())))
    count = data.get("count", 12)
    validate_payment_count(count)
    frequency = _choice(PaymentFrequency, data, "frequency", PaymentFrequency.MONTHLY)
    dates = generate_schedule(first_date, frequency, count)
    return jsonify({"frequency": frequency.value, "dates": [d.isoformat() for d in dates]})


@app.post("/api/va-purchase")
def va_purchase_view():
    data = _payload()
    home_value = _number(data, "home_value")
    down_payment = _number(data, "down_payment", 0)
    annual_rate = _number(data, "annual_rate")
    term = _term(data)
    extra = _number(data, "extra_payment", 0)
    validate_home_purchase(home_value, down_payment)
    validate_rate_and_term(annual_rate, term)
    validate_extra_payment(extra)

    # Insurance may be given as a yearly premium or as a percent of home value.
    if "insurance_percent" in data:
        insurance = insurance_percent_to_dollar(_number(data, "insurance_percent"), home_value)
    else:
        insurance = _number(data, "annual_insurance", 0)

    summary = va_purchase_summary(
        home_value,
        down_payment,
        annual_rate,
        term,
        _choice(VAFundingFeeType, data, "fee_type", VAFundingFeeType.FIRST_TIME),
        _number(data, "property_tax_rate", 0),
        insurance,
        extra,
    )
    fields = dict(vars(summary))
    fields["funding_fee"] = _serialize_fee(summary.funding_fee)
    return jsonify(_decimals_to_floats(fields))


@app.post("/api/va-refinance")
def va_refinance_view():
    data = _payload()
    balance = _number(data, "current_balance")
    current_rate = _number(data, "current_rate")
    new_rate = _number(data, "new_rate")
    cash_out = _number(data, "cash_out", 0)
    term = _term(data)
    validate_loan_parameters(balance, current_rate, term)
    validate_rate_and_term(new_rate, term)
    validate_loan_amount(cash_out, "cash_out")

    summary = va_refinance_summary(
        balance,
        current_rate,
        new_rate,
        cash_out,
        _choice(VAFundingFeeType, data, "fee_type", VAFundingFeeType.FIRST_TIME),
        term,
    )
    fields = dict(vars(summary))
    fields["funding_fee"] = _serialize_fee(summary.funding_fee)
    return jsonify(_decimals_to_floats(fields))


if __name__ == "__main__":
    print("Starting mortgage calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
