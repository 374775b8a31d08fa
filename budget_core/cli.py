from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from budget_core.domain.models import (
    BudgetReport,
    Frequency,
    Goal,
    IncomeType,
    MonthRecord,
    RecordPatch,
    current_month_key,
    parse_month_key,
    to_number,
)
from budget_core.io import config as config_io
from budget_core.io.store_file import JsonStorePersistence
from budget_core.services import pipeline
from budget_core.services.month_store import MonthStore

app = typer.Typer(help="Budget planner CLI: allocate income by percent, plan a savings goal, check in on spending.")

TIGHT_GOAL_ADVICE = "That's tight. Consider trimming Food or Lifestyle slightly."

STORE_HELP = "Store JSON file (defaults to settings / BUDGET_STORE_PATH)"
MONTH_HELP = "Month as YYYY-MM (defaults to the current month)"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings() -> config_io.Settings:
    try:
        return config_io.load_settings()
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Could not load settings: {exc}", param_hint="BUDGET_CONFIG") from exc


def _open_store(store: Optional[Path], settings: config_io.Settings) -> MonthStore:
    return MonthStore.open(JsonStorePersistence(store or settings.store_path))


def _resolve_month(month: Optional[str]) -> str:
    if month is None:
        return current_month_key()
    try:
        parse_month_key(month)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--month") from exc
    return month.strip()


def _money(value: float, symbol: str) -> str:
    return f"{symbol}{value:,.2f}"


def _fmt_percent(value: float) -> str:
    return f"{value:g}"


def _report_to_json(report: BudgetReport, record: MonthRecord) -> dict:
    payload = report.to_dict()
    payload["record"] = record.to_dict()
    return payload


def _render_income(console: Console, report: BudgetReport, record: MonthRecord, symbol: str) -> None:
    income = record.income
    console.print(
        f"Income: {_money(income.amount, symbol)} {income.frequency.value} ({income.type.value})"
        f" | Monthly: [bold]{_money(report.monthly_income, symbol)}[/bold]"
    )


def _render_budgets(console: Console, report: BudgetReport, symbol: str) -> None:
    table = Table(title=f"Budget for {report.month} ({report.days_in_month} days)")
    table.add_column("Key")
    table.add_column("Category")
    table.add_column("%", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Daily", justify="right")
    for budget in report.budgets.values():
        table.add_row(
            budget.key,
            budget.name,
            _fmt_percent(budget.percent),
            _money(budget.monthly, symbol),
            _money(budget.daily, symbol),
        )
    console.print(table)

    colour = "green" if report.allocation_balanced else "red"
    console.print(f"Total Allocation: [{colour}]{_fmt_percent(report.total_percent)}%[/{colour}]")
    if not report.allocation_balanced:
        console.print("[yellow]Adjust percentages to make 100%.[/yellow]")


def _render_goal(console: Console, report: BudgetReport, symbol: str) -> None:
    plan = report.goal_plan
    if not plan.active:
        console.print("No goal yet. Keep building strong habits.")
        return
    console.print(f"You need to save [bold]{_money(plan.monthly_contribution, symbol)}[/bold] per month.")
    if plan.tight:
        console.print(f"[yellow]{TIGHT_GOAL_ADVICE}[/yellow]")


def _render_checkin(console: Console, report: BudgetReport, symbol: str) -> None:
    table = Table(title="Monthly Check-in")
    table.add_column("Category")
    table.add_column("Budget", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")
    for status in report.spending.values():
        colour = "red" if status.overspent else "green"
        table.add_row(
            status.name,
            _money(status.budget, symbol),
            _money(status.spent, symbol),
            f"[{colour}]{_money(status.remaining, symbol)}[/{colour}]",
        )
    console.print(table)
    overspent = [s.name for s in report.spending.values() if s.overspent]
    if overspent:
        console.print(f"[red]Overspent:[/red] {', '.join(overspent)}")


def _render_report(console: Console, report: BudgetReport, record: MonthRecord, symbol: str) -> None:
    _render_income(console, report, record, symbol)
    _render_budgets(console, report, symbol)
    _render_goal(console, report, symbol)
    _render_checkin(console, report, symbol)


@app.command()
def show(
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
):
    """Show the budget breakdown, goal plan and check-in for a month."""
    month_key = _resolve_month(month)
    settings = _load_settings()
    month_store = _open_store(store, settings)
    record = month_store.get(month_key)
    report = pipeline.build_report(month_key, record)
    if as_json:
        typer.echo(json.dumps(_report_to_json(report, record), indent=2, ensure_ascii=False))
        return
    _render_report(Console(), report, record, settings.currency_symbol)


@app.command()
def income(
    amount: Optional[float] = typer.Option(None, help="Income amount"),
    income_type: Optional[IncomeType] = typer.Option(None, "--type", help="Allowance|Salary|Job|Other"),
    frequency: Optional[Frequency] = typer.Option(None, help="Weekly|Monthly|Yearly"),
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
):
    """Update the month's income; omitted fields keep their current value."""
    if amount is None and income_type is None and frequency is None:
        raise typer.BadParameter("Provide at least one of --amount, --type, --frequency")
    if amount is not None and amount < 0:
        raise typer.BadParameter("Income amount cannot be negative", param_hint="--amount")
    month_key = _resolve_month(month)
    settings = _load_settings()
    record = _open_store(store, settings).set_income(month_key, amount=amount, type=income_type, frequency=frequency)
    report = pipeline.build_report(month_key, record)
    typer.echo(f"Monthly income for {month_key}: {_money(report.monthly_income, settings.currency_symbol)}")


@app.command()
def allocate(
    key: str = typer.Argument(..., help="Category key, e.g. food"),
    percent: float = typer.Argument(..., help="Share of monthly income in percent"),
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
):
    """Set one category's percentage allocation."""
    month_key = _resolve_month(month)
    settings = _load_settings()
    try:
        record = _open_store(store, settings).set_percent(month_key, key, percent)
    except KeyError as exc:
        raise typer.BadParameter(f"Unknown category {key!r}", param_hint="KEY") from exc
    report = pipeline.build_report(month_key, record)
    typer.echo(f"{record.categories[key].name}: {_fmt_percent(percent)}% (total {_fmt_percent(report.total_percent)}%)")
    if not report.allocation_balanced:
        typer.echo("Warning: allocations do not add up to 100%.")


@app.command()
def goal(
    target: Optional[float] = typer.Option(None, help="Savings target amount"),
    months: Optional[int] = typer.Option(None, help="Deadline in months"),
    clear: bool = typer.Option(False, help="Remove the savings goal"),
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
):
    """Set or clear the savings goal."""
    month_key = _resolve_month(month)
    settings = _load_settings()
    month_store = _open_store(store, settings)
    if clear:
        month_store.set_goal(month_key, None, None)
        typer.echo(f"Goal cleared for {month_key}")
        return
    if target is None and months is None:
        raise typer.BadParameter("Provide --target and/or --months, or --clear")

    current = month_store.get(month_key).goal
    new_goal = Goal(
        target=target if target is not None else current.target,
        months=months if months is not None else current.months,
    )
    record = month_store.set_goal(month_key, new_goal.target, new_goal.months)
    plan = pipeline.build_report(month_key, record).goal_plan
    symbol = settings.currency_symbol
    if not plan.active:
        typer.echo("Goal saved; set a positive target and deadline to get a monthly plan.")
        return
    typer.echo(f"Save {_money(plan.monthly_contribution, symbol)} per month.")
    if plan.tight:
        typer.echo(TIGHT_GOAL_ADVICE)


@app.command()
def spend(
    key: str = typer.Argument(..., help="Category key, e.g. food"),
    amount: float = typer.Argument(..., help="Amount spent this month"),
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
):
    """Record what was spent in a category this month."""
    month_key = _resolve_month(month)
    settings = _load_settings()
    try:
        record = _open_store(store, settings).record_spending(month_key, key, amount)
    except KeyError as exc:
        raise typer.BadParameter(f"Unknown category {key!r}", param_hint="KEY") from exc
    status = pipeline.build_report(month_key, record).spending[key]
    label = "overspent" if status.overspent else "remaining"
    typer.echo(f"{status.name}: {_money(abs(status.remaining), settings.currency_symbol)} {label}")


@app.command()
def months(store: Optional[Path] = typer.Option(None, help=STORE_HELP)):
    """List stored months."""
    settings = _load_settings()
    month_store = _open_store(store, settings)
    keys = month_store.months()
    if not keys:
        typer.echo("No months stored yet.")
        return
    symbol = settings.currency_symbol
    for key in keys:
        report = pipeline.build_report(key, month_store.get(key))
        typer.echo(f"{key}  {_money(report.monthly_income, symbol)}/month  allocated {_fmt_percent(report.total_percent)}%")


def _prompt_amount(console: Console, label: str, current: Optional[float]) -> Optional[float]:
    """Ask until the answer is a number; blank keeps the current figure (None)."""
    while True:
        raw = typer.prompt(
            label,
            default="" if current is None else f"{current:g}",
            show_default=current is not None,
        )
        if not raw.strip():
            return None
        amount = to_number(raw, default=math.nan)
        if not math.isnan(amount):
            return amount
        console.print("[red]Enter a number, or leave blank to keep the current figure.[/red]")


@app.command()
def checkin(
    month: Optional[str] = typer.Option(None, help=MONTH_HELP),
    store: Optional[Path] = typer.Option(None, help=STORE_HELP),
):
    """
    Interactive check-in: enter what you spent per category (blank keeps the current figure).
    """
    console = Console()
    month_key = _resolve_month(month)
    settings = _load_settings()
    month_store = _open_store(store, settings)
    record = month_store.get(month_key)
    symbol = settings.currency_symbol

    console.print(f"[bold cyan]Monthly Check-in for {month_key}[/bold cyan]\n")
    budgets = pipeline.build_report(month_key, record).budgets
    spending = dict(record.spending)
    for key, budget in budgets.items():
        current = spending.get(key)
        amount = _prompt_amount(console, f"  {budget.name} (budget {_money(budget.monthly, symbol)})", current)
        if amount is not None:
            spending[key] = amount

    record = month_store.update(month_key, RecordPatch(spending=spending))
    _render_checkin(console, pipeline.build_report(month_key, record), symbol)
    console.print("Red = overspent, Green = within budget. Progress over perfection!")


if __name__ == "__main__":
    app()
