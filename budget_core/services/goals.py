from __future__ import annotations

from typing import Mapping, Optional

from budget_core.domain.models import Budget, Goal, GoalPlan, to_number

SAVINGS_KEY = "savings"


def monthly_contribution(goal: Goal) -> Optional[float]:
    """
    Required saving per month to hit the target by the deadline.
    Returns None when there is no usable goal: either field missing/zero, or a non-positive deadline.
    """
    target = to_number(goal.target)
    months = to_number(goal.months)
    if not target or not months:
        return None
    if months <= 0:
        return None
    return target / months


def is_tight(contribution: Optional[float], savings_budget: float) -> bool:
    if contribution is None:
        return False
    return contribution > savings_budget


def plan_goal(goal: Goal, budgets: Mapping[str, Budget], savings_key: str = SAVINGS_KEY) -> GoalPlan:
    contribution = monthly_contribution(goal)
    savings = budgets.get(savings_key)
    savings_budget = savings.monthly if savings is not None else 0.0
    return GoalPlan(
        monthly_contribution=contribution,
        savings_budget=savings_budget,
        tight=is_tight(contribution, savings_budget),
    )
