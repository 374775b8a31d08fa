import json
from pathlib import Path

from typer.testing import CliRunner

from budget_core.cli import app


runner = CliRunner()


def _show_json(store_path: Path, month: str) -> dict:
    result = runner.invoke(app, ["show", "--month", month, "--store", str(store_path), "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_cli_budget_flow(tmp_path: Path):
    store_path = tmp_path / "store.json"

    result = runner.invoke(
        app,
        ["income", "--amount", "3000", "--type", "Salary", "--frequency", "Monthly",
         "--month", "2024-04", "--store", str(store_path)],
    )
    assert result.exit_code == 0, result.output
    assert "3,000.00" in result.stdout
    assert store_path.exists()

    result = runner.invoke(app, ["goal", "--target", "12000", "--months", "12", "--month", "2024-04", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    assert "1,000.00" in result.stdout
    assert "tight" in result.stdout

    result = runner.invoke(app, ["spend", "food", "950", "--month", "2024-04", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    assert "overspent" in result.stdout

    payload = _show_json(store_path, "2024-04")
    assert payload["days_in_month"] == 30
    assert payload["total_percent"] == 100
    assert payload["budgets"]["food"]["monthly"] == 900
    assert payload["budgets"]["food"]["daily"] == 30
    assert payload["budgets"]["savings"]["daily"] == 25
    assert payload["goal_plan"]["monthly_contribution"] == 1000
    assert payload["goal_plan"]["tight"] is True
    assert payload["spending"]["food"]["remaining"] == -50
    assert payload["spending"]["food"]["overspent"] is True


def test_cli_carry_forward_does_not_persist_on_view(tmp_path: Path):
    store_path = tmp_path / "store.json"
    runner.invoke(app, ["income", "--amount", "100", "--frequency", "Weekly", "--month", "2024-01", "--store", str(store_path)])
    runner.invoke(app, ["spend", "bills", "20", "--month", "2024-01", "--store", str(store_path)])

    payload = _show_json(store_path, "2024-03")
    assert payload["monthly_income"] == 400
    assert payload["record"]["spending"] == {}
    assert list(json.loads(store_path.read_text(encoding="utf-8"))) == ["2024-01"]

    result = runner.invoke(app, ["months", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    assert "2024-01" in result.stdout
    assert "2024-03" not in result.stdout


def test_cli_allocation_warning_and_unknown_category(tmp_path: Path):
    store_path = tmp_path / "store.json"
    result = runner.invoke(app, ["allocate", "food", "50", "--month", "2024-02", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    assert "total 120%" in result.stdout
    assert "do not add up" in result.stdout

    result = runner.invoke(app, ["allocate", "travel", "5", "--month", "2024-02", "--store", str(store_path)])
    assert result.exit_code != 0


def test_cli_rejects_bad_month(tmp_path: Path):
    result = runner.invoke(app, ["show", "--month", "2024-13", "--store", str(tmp_path / "s.json")])
    assert result.exit_code != 0


def test_cli_show_renders_tables(tmp_path: Path):
    store_path = tmp_path / "store.json"
    runner.invoke(app, ["income", "--amount", "3000", "--month", "2024-04", "--store", str(store_path)])
    result = runner.invoke(app, ["show", "--month", "2024-04", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    assert "Total Allocation" in result.stdout
    assert "900.00" in result.stdout
    assert "No goal yet" in result.stdout


def test_cli_goal_clear(tmp_path: Path):
    store_path = tmp_path / "store.json"
    runner.invoke(app, ["goal", "--target", "600", "--months", "6", "--month", "2024-04", "--store", str(store_path)])
    result = runner.invoke(app, ["goal", "--clear", "--month", "2024-04", "--store", str(store_path)])
    assert result.exit_code == 0, result.output
    payload = _show_json(store_path, "2024-04")
    assert payload["goal_plan"]["monthly_contribution"] is None
    assert payload["record"]["goal"] == {"target": "", "months": ""}


def test_cli_checkin_prompts_each_category(tmp_path: Path):
    store_path = tmp_path / "store.json"
    runner.invoke(app, ["income", "--amount", "1000", "--month", "2024-04", "--store", str(store_path)])
    answers = "400\n\n\n\n\n60\n"
    result = runner.invoke(app, ["checkin", "--month", "2024-04", "--store", str(store_path)], input=answers)
    assert result.exit_code == 0, result.output

    payload = _show_json(store_path, "2024-04")
    assert payload["record"]["spending"] == {"food": 400.0, "others": 60.0}
    assert payload["spending"]["food"]["overspent"] is True
    assert payload["spending"]["others"]["overspent"] is True
    assert payload["spending"]["bills"]["remaining"] == 200


def test_cli_checkin_reprompts_on_non_numeric_answer(tmp_path: Path):
    store_path = tmp_path / "store.json"
    runner.invoke(app, ["income", "--amount", "1000", "--month", "2024-04", "--store", str(store_path)])
    answers = "lots\n250\n\n\n\n\n\n"
    result = runner.invoke(app, ["checkin", "--month", "2024-04", "--store", str(store_path)], input=answers)
    assert result.exit_code == 0, result.output
    assert "Enter a number" in result.stdout

    payload = _show_json(store_path, "2024-04")
    assert payload["record"]["spending"] == {"food": 250.0}


def test_cli_reports_unreadable_settings_file(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("BUDGET_CONFIG", str(tmp_path / "missing.json"))
    result = runner.invoke(app, ["months", "--store", str(tmp_path / "store.json")])
    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert "Could not load settings" in result.output

    bad = tmp_path / "settings.json"
    bad.write_text("{broken", encoding="utf-8")
    monkeypatch.setenv("BUDGET_CONFIG", str(bad))
    result = runner.invoke(app, ["show", "--month", "2024-04", "--store", str(tmp_path / "store.json")])
    assert result.exit_code == 2
    assert "Could not load settings" in result.output
