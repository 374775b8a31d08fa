from __future__ import annotations

from budget_core.domain.models import BudgetReport, MonthRecord
from budget_core.services import allocation, calendar, goals, income, tracker


def build_report(month_key: str, record: MonthRecord) -> BudgetReport:
    """Derive the full report for one month; nothing here is cached or persisted."""
    days = calendar.days_in_month_key(month_key)
    monthly = income.monthly_income(record.income)
    total = allocation.compute_total_percent(record.categories)
    budgets = allocation.compute_budgets(record.categories, monthly, days)

    return BudgetReport(
        month=month_key,
        days_in_month=days,
        monthly_income=monthly,
        total_percent=total,
        allocation_balanced=allocation.is_balanced(total),
        budgets=budgets,
        goal_plan=goals.plan_goal(record.goal, budgets),
        spending=tracker.track_spending(budgets, record.spending),
    )
