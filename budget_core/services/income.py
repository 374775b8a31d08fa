from __future__ import annotations

from typing import Any, Union

from budget_core.domain.models import Frequency, Income, to_number

# Weekly income is scaled by a flat 4 weeks rather than the 52/12 (~4.33) average.
# Kept on purpose so stored budgets match what users have always seen.
WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12


def to_monthly(amount: Any, frequency: Union[Frequency, str, None]) -> float:
    value = to_number(amount)
    if frequency == Frequency.WEEKLY:
        return value * WEEKS_PER_MONTH
    if frequency == Frequency.YEARLY:
        return value / MONTHS_PER_YEAR
    return value


def monthly_income(income: Income) -> float:
    return to_monthly(income.amount, income.frequency)
