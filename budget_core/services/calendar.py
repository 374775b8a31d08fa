from __future__ import annotations

import pandas as pd

from budget_core.domain.models import parse_month_key


def days_in_month(year: int, month: int) -> int:
    """Gregorian month length via period arithmetic, so leap years come for free."""
    if not 1 <= int(month) <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return int(pd.Period(f"{int(year):04d}-{int(month):02d}", freq="M").days_in_month)


def days_in_month_key(month_key: str) -> int:
    year, month = parse_month_key(month_key)
    return days_in_month(year, month)
