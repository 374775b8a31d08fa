from budget_core.domain.models import (  # noqa: F401
    DEFAULT_CATEGORIES,
    Budget,
    BudgetReport,
    Category,
    Frequency,
    Goal,
    GoalPlan,
    Income,
    IncomeType,
    MonthRecord,
    RecordPatch,
    SpendingStatus,
    current_month_key,
    default_record,
    parse_month_key,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "Budget",
    "BudgetReport",
    "Category",
    "Frequency",
    "Goal",
    "GoalPlan",
    "Income",
    "IncomeType",
    "MonthRecord",
    "RecordPatch",
    "SpendingStatus",
    "current_month_key",
    "default_record",
    "parse_month_key",
]
