import json
from pathlib import Path

from typer.testing import CliRunner

from findash_core.cli import app


runner = CliRunner()
DATA = Path(__file__).parent / "data"


def test_cli_summary(tmp_path: Path):
    out = tmp_path / "summary.json"
    result = runner.invoke(
        app,
        [
            "summary",
            "--ledger",
            str(DATA / "ledger.csv"),
            "--investments",
            str(DATA / "investments.json"),
            "--month",
            "2024-05",
            "--out",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out.read_text())
    assert payload["summary"]["total_income"] == 3500.0
    assert payload["summary"]["total_expenses"] == 1550.0
    assert payload["summary"]["investment_value"] == 20000.0
    assert payload["spending_by_category"]["Rent"] == 1200.0
    assert len(payload["cash_flow"]) == 6


def test_cli_summary_rejects_bad_month():
    result = runner.invoke(app, ["summary", "--ledger", str(DATA / "ledger.csv"), "--month", "May"])
    assert result.exit_code != 0


def test_cli_forecast_from_scenarios_file(tmp_path: Path):
    out = tmp_path / "forecast.json"
    result = runner.invoke(
        app,
        [
            "forecast",
            "--scenarios",
            str(DATA / "scenarios.json"),
            "--name",
            "conservative",
            "--starting-total",
            "0",
            "--out",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out.read_text())
    assert len(payload["monthly"]) == 12
    assert abs(payload["monthly"][1]["investment_total"] - 2005.0) < 1e-6
    assert payload["outcome"]["total_contributions"] == 12000.0


def test_cli_forecast_inline_scenario():
    result = runner.invoke(
        app,
        ["forecast", "--income", "3000", "--expenses", "2000", "--savings-rate", "0.5", "--return-rate", "0", "--years", "1"],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["monthly"][-1]["investment_total"] == 18000.0
    assert payload["monthly"][-1]["balance"] == 12000.0


def test_cli_forecast_requires_inputs():
    result = runner.invoke(app, ["forecast"])
    assert result.exit_code != 0


def test_cli_compare(tmp_path: Path):
    out = tmp_path / "compare.json"
    result = runner.invoke(
        app,
        ["compare", "--scenarios", str(DATA / "scenarios.json"), "--years", "2", "--out", str(out)],
    )
    assert result.exit_code == 0, result.stdout
    rows = json.loads(out.read_text())["years"]
    assert rows[0]["year"] == 1
    assert rows[0]["Early Retirement"] == 24000.0
    assert "Conservative" not in rows[1]


def test_cli_history_is_seeded():
    args = ["history", "--months", "6", "--initial", "1000", "--rate", "0.08", "--seed", "11"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0, first.stdout
    assert json.loads(first.stdout) == json.loads(second.stdout)
    assert len(json.loads(first.stdout)) == 6


def test_cli_dashboard():
    result = runner.invoke(app, ["dashboard", "--seed", "1"])
    assert result.exit_code == 0, result.stdout
    assert "Financial Dashboard" in result.stdout
    assert "Scenarios" in result.stdout
    assert "Budgeted" in result.stdout
    assert "Allocation:" in result.stdout


def test_cli_forecast_rejects_negative_starting_total():
    result = runner.invoke(
        app,
        ["forecast", "--income", "3000", "--expenses", "2000", "--starting-total", "-5"],
    )
    assert result.exit_code != 0


def test_cli_budgets_report(tmp_path: Path):
    path = tmp_path / "budgets.json"
    path.write_text(
        json.dumps(
            [
                {"category": "Food", "allocated": 500, "spent": 300, "period": "2024-05"},
                {"category": "Rent", "allocated": 1000, "spent": 950, "period": "2024-05"},
                {"category": "Unplanned", "allocated": 0, "spent": 40, "period": "2024-05"},
                {"category": "Old", "allocated": 100, "spent": 10, "period": "2024-04"},
            ]
        )
    )
    out = tmp_path / "report.json"
    result = runner.invoke(app, ["budgets", "--budgets", str(path), "--month", "2024-05", "--out", str(out)])
    assert result.exit_code == 0, result.stdout

    payload = json.loads(out.read_text())
    assert payload["allocated"] == 1500.0
    assert payload["spent"] == 1290.0
    assert payload["remaining"] == 210.0
    assert [b["status"] for b in payload["budgets"]] == ["on-track", "over", "over"]
    assert payload["budgets"][2]["remaining"] == -40.0


def test_cli_budgets_rejects_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["budgets", "--budgets", str(tmp_path / "nope.json")])
    assert result.exit_code != 0
