from __future__ import annotations

import dataclasses
import datetime as dt
import math
import re
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


class IncomeType(str, Enum):
    ALLOWANCE = "Allowance"
    SALARY = "Salary"
    JOB = "Job"
    OTHER = "Other"


class Frequency(str, Enum):
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


def to_number(value: Any, default: float = 0.0) -> float:
    """
    Coerce raw form/JSON input to a finite float.
    Accepts numbers and numeric strings; anything else (None, "", text, NaN, inf) yields `default`.
    """
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def parse_month_key(key: str) -> Tuple[int, int]:
    match = MONTH_KEY_RE.match(str(key).strip())
    if not match:
        raise ValueError(f"Invalid month key {key!r}; expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in key {key!r}")
    return year, month


def current_month_key(today: Optional[dt.date] = None) -> str:
    today = today or dt.date.today()
    return f"{today.year}-{today.month:02d}"


def _enum_or_default(enum_cls, raw: Any, default):
    try:
        return enum_cls(raw)
    except ValueError:
        return default


@dataclasses.dataclass(frozen=True)
class Income:
    amount: float = 0.0
    type: IncomeType = IncomeType.ALLOWANCE
    frequency: Frequency = Frequency.MONTHLY

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "type": self.type.value, "frequency": self.frequency.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Income":
        return cls(
            amount=to_number(data.get("amount")),
            type=_enum_or_default(IncomeType, data.get("type"), IncomeType.ALLOWANCE),
            frequency=_enum_or_default(Frequency, data.get("frequency"), Frequency.MONTHLY),
        )


@dataclasses.dataclass(frozen=True)
class Category:
    key: str
    name: str
    percent: float  # not clamped to 0..100

    def with_percent(self, percent: float) -> "Category":
        return dataclasses.replace(self, percent=percent)


@dataclasses.dataclass(frozen=True)
class Goal:
    target: Optional[float] = None
    months: Optional[float] = None  # fractional deadlines are kept as entered

    @property
    def is_empty(self) -> bool:
        return self.target is None and self.months is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": "" if self.target is None else self.target,
            "months": "" if self.months is None else self.months,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Goal":
        target = to_number(data.get("target"), default=math.nan)
        months = to_number(data.get("months"), default=math.nan)
        return cls(
            target=None if math.isnan(target) else target,
            months=None if math.isnan(months) else months,
        )


DEFAULT_CATEGORIES: Dict[str, Category] = {
    "food": Category("food", "Food & Drinks", 30),
    "bills": Category("bills", "Bills & Subscriptions", 20),
    "lifestyle": Category("lifestyle", "Clothing & Lifestyle", 10),
    "savings": Category("savings", "Savings & Investments", 25),
    "misc": Category("misc", "Misc / Emergency", 10),
    "others": Category("others", "Others", 5),
}


def categories_to_dict(categories: Mapping[str, Category]) -> Dict[str, Dict[str, Any]]:
    return {key: {"name": c.name, "percent": c.percent} for key, c in categories.items()}


def categories_from_dict(data: Mapping[str, Any]) -> Dict[str, Category]:
    categories: Dict[str, Category] = {}
    for key, raw in data.items():
        raw = raw if isinstance(raw, Mapping) else {}
        categories[key] = Category(key=key, name=str(raw.get("name", key)), percent=to_number(raw.get("percent")))
    return categories


DEFAULT_CATEGORIES_DICT = categories_to_dict(DEFAULT_CATEGORIES)


@dataclasses.dataclass(frozen=True)
class MonthRecord:
    income: Income
    categories: Dict[str, Category]
    goal: Goal
    spending: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "income": self.income.to_dict(),
            "categories": categories_to_dict(self.categories),
            "goal": self.goal.to_dict(),
            "spending": dict(self.spending),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MonthRecord":
        spending = data.get("spending") or {}
        categories = data.get("categories")
        return cls(
            income=Income.from_dict(data.get("income") or {}),
            categories=categories_from_dict(categories if isinstance(categories, Mapping) else DEFAULT_CATEGORIES_DICT),
            goal=Goal.from_dict(data.get("goal") or {}),
            spending={str(k): to_number(v) for k, v in spending.items()},
        )


def default_record() -> MonthRecord:
    return MonthRecord(
        income=Income(),
        categories=dict(DEFAULT_CATEGORIES),
        goal=Goal(),
        spending={},
    )


@dataclasses.dataclass(frozen=True)
class RecordPatch:
    """Shallow, top-level override: any field left as None keeps the current value."""

    income: Optional[Income] = None
    categories: Optional[Dict[str, Category]] = None
    goal: Optional[Goal] = None
    spending: Optional[Dict[str, float]] = None

    def fields(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclasses.fields(self) if getattr(self, f.name) is not None}


@dataclasses.dataclass(frozen=True)
class Budget:
    key: str
    name: str
    percent: float
    monthly: float
    daily: float


@dataclasses.dataclass(frozen=True)
class SpendingStatus:
    key: str
    name: str
    budget: float
    spent: float
    remaining: float
    overspent: bool


@dataclasses.dataclass(frozen=True)
class GoalPlan:
    monthly_contribution: Optional[float]
    savings_budget: float
    tight: bool

    @property
    def active(self) -> bool:
        return self.monthly_contribution is not None


@dataclasses.dataclass
class BudgetReport:
    month: str
    days_in_month: int
    monthly_income: float
    total_percent: float
    allocation_balanced: bool
    budgets: Dict[str, Budget]
    goal_plan: GoalPlan
    spending: Dict[str, SpendingStatus]

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
