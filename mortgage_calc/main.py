"""Command-line interface for the mortgage calculator.

This module uses the ``click`` library to implement a multi-command
interface over the engine: plain amortization (optionally with the dated
schedule), early-payoff strategies, the VA funding fee, payment dates, and
the VA purchase and refinance calculators. Results are printed to the
terminal or, for schedules, exported to JSON/CSV files.

Rates are typed as percents (``6`` or ``6%``) and amounts accept ``k``/``m``
suffixes, e.g.::

    mortgage-calc amortize -p 300k -r 6 -t 360 --extra 200
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click

from .data_models import (
    AmortizationResult,
    LumpSumFrequency,
    PaymentFrequency,
    ScheduleEntry,
    VAFundingFeeType,
)
from .engine import amortization_schedule, amortize, early_payoff_strategy
from .formatter import (
    print_amortization,
    print_payment_dates,
    print_schedule,
    print_strategy,
    print_va_fee,
    print_va_purchase,
    print_va_refinance,
)
from .scenarios import va_purchase_summary, va_refinance_summary
from .schedule import generate_schedule
from .utils import parse_amount, parse_iso_date, parse_rate
from .va_fee import va_funding_fee_breakdown
from .validation import (
    validate_extra_payment,
    validate_home_purchase,
    validate_loan_amount,
    validate_loan_parameters,
    validate_payment_count,
    validate_rate_and_term,
    validate_strategy_inputs,
)

MAX_PRINTED_ROWS = 120


def _parse(parser: Callable[[str], Any], value: Optional[str], default: Any = None) -> Any:
    """Run ``parser`` on a raw option value, reporting failures to click."""
    if value is None:
        return default
    try:
        return parser(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def _check(validator: Callable[..., None], *args: Any) -> None:
    try:
        validator(*args)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls])


def _serialize_entry(entry: ScheduleEntry) -> Dict[str, Any]:
    return {
        "period": entry.period,
        "date": entry.date.isoformat(),
        "starting_balance": float(entry.starting_balance),
        "payment": float(entry.payment),
        "principal": float(entry.principal_payment),
        "interest": float(entry.interest_payment),
        "extra": float(entry.extra_payment),
        "ending_balance": float(entry.ending_balance),
    }


def summary_to_dict(result: AmortizationResult) -> Dict[str, Any]:
    return {
        "periodic_payment": float(result.periodic_payment),
        "total_interest": float(result.total_interest),
        "total_payment": float(result.total_payment),
        "actual_term_periods": result.actual_term_periods,
        "remaining_balance": float(result.remaining_balance),
    }


def export_to_json(path: Path, schedule: List[ScheduleEntry], result: AmortizationResult) -> None:
    """Export schedule and summary to a JSON file."""
    data = {
        "summary": summary_to_dict(result),
        "schedule": [_serialize_entry(e) for e in schedule],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[ScheduleEntry]) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Period",
        "Date",
        "Starting_Balance",
        "Payment",
        "Principal",
        "Interest",
        "Extra",
        "Ending_Balance",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.period,
                    e.date.isoformat(),
                    float(e.starting_balance),
                    float(e.payment),
                    float(e.principal_payment),
                    float(e.interest_payment),
                    float(e.extra_payment),
                    float(e.ending_balance),
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log engine details to stderr")
def cli(verbose: bool) -> None:
    """A command-line mortgage calculator with early-payoff strategies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("amortize")
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", default=360, show_default=True, type=int, help="Loan term in months")
@click.option("--extra", "extra", help="Extra amount paid toward principal every month")
@click.option("--start-date", "-s", "start_date", help="First payment date (YYYY-MM-DD); prints the schedule")
@click.option("--output", "output", type=str, help="Schedule output file path (.json or .csv)")
def amortize_command(
    principal: str,
    rate: str,
    term: int,
    extra: Optional[str],
    start_date: Optional[str],
    output: Optional[str],
) -> None:
    """Compute the monthly payment, total interest and payoff term."""
    principal_value = _parse(parse_amount, principal)
    rate_value = _parse(parse_rate, rate)
    extra_value = _parse(parse_amount, extra, Decimal("0"))
    _check(validate_loan_parameters, principal_value, rate_value, term)
    _check(validate_extra_payment, extra_value)

    result = amortize(principal_value, rate_value, term, extra_value)
    if not start_date and not output:
        print_amortization(result, principal_value)
        return

    first_date = _parse(parse_iso_date, start_date, date.today())
    try:
        schedule = amortization_schedule(principal_value, rate_value, term, first_date, extra_value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, schedule)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return

    print_amortization(result, principal_value)
    # Limit schedule length printed to avoid flooding the terminal
    if len(schedule) > MAX_PRINTED_ROWS:
        click.echo(f"Schedule has {len(schedule)} rows; showing first {MAX_PRINTED_ROWS} rows.")
    print_schedule(schedule[:MAX_PRINTED_ROWS])


@cli.command("payoff")
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", default=360, show_default=True, type=int, help="Loan term in months")
@click.option("--additional", "additional", default="0", help="Additional payment per period")
@click.option(
    "--frequency",
    "frequency",
    type=_choices(PaymentFrequency),
    default=PaymentFrequency.MONTHLY.value,
    show_default=True,
    help="Cadence of the additional payment",
)
@click.option("--lump-sum", "lump_sum", default="0", help="Lump-sum contribution toward principal")
@click.option(
    "--lump-sum-frequency",
    "lump_sum_frequency",
    type=_choices(LumpSumFrequency),
    default=LumpSumFrequency.ONE_TIME.value,
    show_default=True,
    help="How often the lump sum is paid",
)
def payoff_command(
    principal: str,
    rate: str,
    term: int,
    additional: str,
    frequency: str,
    lump_sum: str,
    lump_sum_frequency: str,
) -> None:
    """Show what extra and lump-sum payments save versus the plain loan."""
    principal_value = _parse(parse_amount, principal)
    rate_value = _parse(parse_rate, rate)
    additional_value = _parse(parse_amount, additional)
    lump_value = _parse(parse_amount, lump_sum)
    _check(validate_loan_parameters, principal_value, rate_value, term)
    _check(validate_strategy_inputs, additional_value, lump_value)

    result = early_payoff_strategy(
        principal_value,
        rate_value,
        term,
        additional_value,
        PaymentFrequency(frequency),
        lump_value,
        LumpSumFrequency(lump_sum_frequency),
    )
    print_strategy(result)


@cli.command("va-fee")
@click.option("--base", "base", required=True, help="Base loan amount (before the fee)")
@click.option("--fee-type", "fee_type", type=_choices(VAFundingFeeType), default=VAFundingFeeType.FIRST_TIME.value, show_default=True)
def va_fee_command(base: str, fee_type: str) -> None:
    """Compute the VA funding fee and the fee-inclusive loan amount."""
    base_value = _parse(parse_amount, base)
    _check(validate_loan_amount, base_value, "Base loan amount")
    print_va_fee(va_funding_fee_breakdown(base_value, VAFundingFeeType(fee_type)))


@cli.command("dates")
@click.option("--first", "first", required=True, help="First payment date (YYYY-MM-DD)")
@click.option("--frequency", "frequency", type=_choices(PaymentFrequency), default=PaymentFrequency.MONTHLY.value, show_default=True)
@click.option("--count", "-n", "count", default=12, show_default=True, type=int, help="Number of payments")
def dates_command(first: str, frequency: str, count: int) -> None:
    """List upcoming payment dates."""
    first_date = _parse(parse_iso_date, first)
    _check(validate_payment_count, count)
    try:
        dates = generate_schedule(first_date, PaymentFrequency(frequency), count)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    print_payment_dates(dates)


@cli.command("va-purchase")
@click.option("--home-value", "home_value", required=True, help="Purchase price of the home")
@click.option("--down-payment", "-d", "down_payment", default="0", help="Down payment amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", default=360, show_default=True, type=int, help="Loan term in months")
@click.option("--fee-type", "fee_type", type=_choices(VAFundingFeeType), default=VAFundingFeeType.FIRST_TIME.value, show_default=True)
@click.option("--tax-rate", "tax_rate", default="0", help="Annual property tax (percent of home value)")
@click.option("--insurance", "insurance", default="0", help="Annual homeowners insurance premium")
@click.option("--extra", "extra", default="0", help="Extra amount paid toward principal every month")
def va_purchase_command(
    home_value: str,
    down_payment: str,
    rate: str,
    term: int,
    fee_type: str,
    tax_rate: str,
    insurance: str,
    extra: str,
) -> None:
    """Monthly payment and total cost of a VA home purchase."""
    home = _parse(parse_amount, home_value)
    down = _parse(parse_amount, down_payment)
    rate_value = _parse(parse_rate, rate)
    extra_value = _parse(parse_amount, extra)
    _check(validate_home_purchase, home, down)
    _check(validate_rate_and_term, rate_value, term)
    _check(validate_extra_payment, extra_value)

    summary = va_purchase_summary(
        home,
        down,
        rate_value,
        term,
        VAFundingFeeType(fee_type),
        _parse(parse_rate, tax_rate),
        _parse(parse_amount, insurance),
        extra_value,
    )
    print_va_purchase(summary)


@cli.command("va-refinance")
@click.option("--balance", "balance", required=True, help="Current loan balance")
@click.option("--current-rate", "current_rate", required=True, help="Current annual rate (percent)")
@click.option("--new-rate", "new_rate", required=True, help="New annual rate (percent)")
@click.option("--cash-out", "cash_out", default="0", help="Cash taken out of the refinance")
@click.option("--term", "-t", "term", default=360, show_default=True, type=int, help="Loan term in months")
@click.option("--fee-type", "fee_type", type=_choices(VAFundingFeeType), default=VAFundingFeeType.FIRST_TIME.value, show_default=True)
def va_refinance_command(
    balance: str,
    current_rate: str,
    new_rate: str,
    cash_out: str,
    term: int,
    fee_type: str,
) -> None:
    """Compare the current loan with a VA refinance."""
    balance_value = _parse(parse_amount, balance)
    current_value = _parse(parse_rate, current_rate)
    new_value = _parse(parse_rate, new_rate)
    cash_value = _parse(parse_amount, cash_out)
    _check(validate_loan_parameters, balance_value, current_value, term)
    _check(validate_loan_parameters, balance_value, new_value, term)
    _check(validate_loan_amount, cash_value, "Cash out")

    summary = va_refinance_summary(
        balance_value, current_value, new_value, cash_value, VAFundingFeeType(fee_type), term
    )
    print_va_refinance(summary)


if __name__ == "__main__":
    cli()
