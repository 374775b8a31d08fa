from __future__ import annotations

from typing import Any, Dict, Mapping

from budget_core.domain.models import Budget, SpendingStatus, to_number


def remaining(budget_monthly: float, spent: Any = None) -> float:
    return budget_monthly - to_number(spent)


def is_overspent(remaining_amount: float) -> bool:
    return remaining_amount < 0


def track_spending(budgets: Mapping[str, Budget], spending: Mapping[str, Any]) -> Dict[str, SpendingStatus]:
    """One status per budget line; spending recorded against unknown keys is ignored."""
    statuses: Dict[str, SpendingStatus] = {}
    for key, budget in budgets.items():
        spent = to_number(spending.get(key))
        left = remaining(budget.monthly, spent)
        statuses[key] = SpendingStatus(
            key=key,
            name=budget.name,
            budget=budget.monthly,
            spent=spent,
            remaining=left,
            overspent=is_overspent(left),
        )
    return statuses
