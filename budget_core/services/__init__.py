from budget_core.services.allocation import compute_budgets, compute_total_percent  # noqa: F401
from budget_core.services.calendar import days_in_month  # noqa: F401
from budget_core.services.goals import monthly_contribution  # noqa: F401
from budget_core.services.income import to_monthly  # noqa: F401
from budget_core.services.month_store import MonthStore, get_record, update_record  # noqa: F401
from budget_core.services.pipeline import build_report  # noqa: F401
from budget_core.services.tracker import remaining, track_spending  # noqa: F401

__all__ = [
    "MonthStore",
    "build_report",
    "compute_budgets",
    "compute_total_percent",
    "days_in_month",
    "get_record",
    "monthly_contribution",
    "remaining",
    "to_monthly",
    "track_spending",
    "update_record",
]
