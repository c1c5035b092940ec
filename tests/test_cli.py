import csv
import json

from click.testing import CliRunner

from mortgage_calc.main import cli


def run(*args):
    return CliRunner().invoke(cli, list(args))


def test_amortize_summary():
    result = run("amortize", "-p", "300k", "-r", "6", "-t", "360")
    assert result.exit_code == 0, result.output
    assert "1,798.65" in result.output
    assert "Payments made      : 360" in result.output


def test_amortize_prints_dated_schedule():
    result = run("amortize", "-p", "10000", "-r", "5%", "-t", "12", "--start-date", "2024-01-31")
    assert result.exit_code == 0, result.output
    assert "2024-01-31" in result.output
    assert "2024-03-02" in result.output


def test_amortize_exports_csv(tmp_path):
    out = tmp_path / "schedule.csv"
    result = run("amortize", "-p", "10000", "-r", "5", "-t", "12", "-s", "2024-01-01", "--output", str(out))
    assert result.exit_code == 0, result.output
    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0][:2] == ["Period", "Date"]
    assert len(rows) == 13


def test_amortize_exports_json(tmp_path):
    out = tmp_path / "schedule.json"
    result = run("amortize", "-p", "10000", "-r", "5", "-t", "12", "--extra", "500", "--output", str(out))
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["summary"]["actual_term_periods"] == len(data["schedule"])
    assert data["summary"]["actual_term_periods"] < 12


def test_amortize_rejects_bad_input():
    assert run("amortize", "-p", "-5", "-r", "6").exit_code == 2
    assert run("amortize", "-p", "300000", "-r", "abc").exit_code == 2
    assert run("amortize", "-p", "300000", "-r", "6", "-t", "0").exit_code == 2


def test_payoff_strategy():
    result = run(
        "payoff", "-p", "300000", "-r", "6", "--additional", "200",
        "--frequency", "bi-weekly", "--lump-sum", "5000", "--lump-sum-frequency", "yearly",
    )
    assert result.exit_code == 0, result.output
    assert "Interest saved" in result.output
    assert "Term reduction" in result.output


def test_payoff_rejects_negative_additional():
    result = run("payoff", "-p", "300000", "-r", "6", "--additional", "-100")
    assert result.exit_code == 2


def test_va_fee():
    result = run("va-fee", "--base", "400000")
    assert result.exit_code == 0, result.output
    assert "8,600.00" in result.output
    assert "408,600.00" in result.output


def test_dates_roll_over_month_end():
    result = run("dates", "--first", "2023-01-31", "-n", "3")
    assert result.exit_code == 0, result.output
    assert "2023-03-03" in result.output
    assert "2023-04-03" in result.output


def test_va_purchase_and_refinance():
    purchase = run("va-purchase", "--home-value", "400k", "-r", "6", "--tax-rate", "1.2", "--insurance", "1200")
    assert purchase.exit_code == 0, purchase.output
    assert "408,600.00" in purchase.output
    refinance = run("va-refinance", "--balance", "300k", "--current-rate", "7", "--new-rate", "6", "--fee-type", "exempt")
    assert refinance.exit_code == 0, refinance.output
    assert "Monthly savings" in refinance.output


def test_inputs_above_limits_are_rejected():
    assert run("amortize", "-p", "300000", "-r", "6", "-t", "481").exit_code == 2
    assert run("amortize", "-p", "300000", "-r", "25").exit_code == 2
    assert run("dates", "--first", "2024-01-01", "-n", "100000").exit_code == 2
    assert run("va-fee", "--base", "1000m").exit_code == 2


def test_dates_past_calendar_end():
    result = run("dates", "--first", "9999-12-30", "--frequency", "weekly", "-n", "2")
    assert result.exit_code == 2
    assert "Payment date out of range" in result.output
