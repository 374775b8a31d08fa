from __future__ import annotations

import math
from typing import Dict, Mapping

from budget_core.domain.models import Budget, Category, to_number


def compute_total_percent(categories: Mapping[str, Category]) -> float:
    return sum(to_number(c.percent) for c in categories.values())


def is_balanced(total_percent: float) -> bool:
    """Advisory only: callers warn when the allocation does not add up to 100%."""
    return math.isclose(total_percent, 100.0, abs_tol=1e-9)


def compute_budgets(
    categories: Mapping[str, Category],
    monthly_income: float,
    days_in_month: int,
) -> Dict[str, Budget]:
    """
    Split monthly income across categories by percent share.
    - Output keys mirror the input keys (same order, nothing added or dropped).
    - Daily figure spreads the monthly budget evenly over the month's days.
    """
    if days_in_month <= 0:
        raise ValueError("days_in_month must be positive")

    budgets: Dict[str, Budget] = {}
    for key, category in categories.items():
        percent = to_number(category.percent)
        monthly = monthly_income * percent / 100
        budgets[key] = Budget(
            key=key,
            name=category.name,
            percent=percent,
            monthly=monthly,
            daily=monthly / days_in_month,
        )
    return budgets
