from __future__ import annotations

import dataclasses
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Protocol

from budget_core.domain.models import (
    Frequency,
    Goal,
    IncomeType,
    MonthRecord,
    RecordPatch,
    default_record,
    parse_month_key,
)

logger = logging.getLogger(__name__)

Store = Dict[str, MonthRecord]


class StorePersistence(Protocol):
    def load(self) -> Store: ...

    def save(self, store: Mapping[str, MonthRecord]) -> None: ...


def latest_month(store: Mapping[str, MonthRecord]) -> Optional[str]:
    keys = sorted(store.keys())
    return keys[-1] if keys else None


def get_record(store: Mapping[str, MonthRecord], month_key: str) -> MonthRecord:
    """
    Effective record for a month, without touching the store.
    Returned mappings are copies; changes only reach the store through `update_record`.
    Missing months inherit income/categories/goal from the latest stored month (whatever side of
    `month_key` it falls on) with spending cleared; an empty store yields the defaults.
    """
    parse_month_key(month_key)
    if month_key in store:
        stored = store[month_key]
        return dataclasses.replace(stored, categories=dict(stored.categories), spending=dict(stored.spending))

    source_key = latest_month(store)
    if source_key is None:
        logger.debug("No stored months; seeding %s with defaults", month_key)
        return default_record()

    logger.debug("Carrying %s forward from %s", month_key, source_key)
    source = store[source_key]
    return MonthRecord(
        income=source.income,
        categories=dict(source.categories),
        goal=source.goal,
        spending={},
    )


def apply_patch(record: MonthRecord, patch: RecordPatch) -> MonthRecord:
    changes = patch.fields()
    for name in ("categories", "spending"):
        if name in changes:
            changes[name] = dict(changes[name])
    return dataclasses.replace(record, **changes)


def update_record(store: Mapping[str, MonthRecord], month_key: str, patch: RecordPatch) -> Store:
    updated = dict(store)
    updated[month_key] = apply_patch(get_record(store, month_key), patch)
    return updated


class MonthStore:
    """
    Owns the month-keyed records and the persistence collaborator behind them.
    Reads never create entries; every update replaces the record set and saves it.
    """

    def __init__(self, persistence: StorePersistence, records: Optional[Mapping[str, MonthRecord]] = None):
        self._persistence = persistence
        self._records: Store = dict(records or {})

    @classmethod
    def open(cls, persistence: StorePersistence) -> "MonthStore":
        return cls(persistence, persistence.load())

    @property
    def records(self) -> Mapping[str, MonthRecord]:
        return MappingProxyType(self._records)

    def months(self) -> List[str]:
        return sorted(self._records)

    def get(self, month_key: str) -> MonthRecord:
        return get_record(self._records, month_key)

    def update(self, month_key: str, patch: RecordPatch) -> MonthRecord:
        self._records = update_record(self._records, month_key, patch)
        self._persistence.save(self._records)
        return self.get(month_key)

    # Field editors: build complete top-level values so `update` can stay a shallow merge.

    def set_income(
        self,
        month_key: str,
        amount: Optional[float] = None,
        type: Optional[IncomeType] = None,
        frequency: Optional[Frequency] = None,
    ) -> MonthRecord:
        current = self.get(month_key).income
        changes: Dict[str, Any] = {}
        if amount is not None:
            changes["amount"] = amount
        if type is not None:
            changes["type"] = IncomeType(type)
        if frequency is not None:
            changes["frequency"] = Frequency(frequency)
        return self.update(month_key, RecordPatch(income=dataclasses.replace(current, **changes)))

    def set_percent(self, month_key: str, category_key: str, percent: float) -> MonthRecord:
        categories = dict(self.get(month_key).categories)
        if category_key not in categories:
            raise KeyError(category_key)
        categories[category_key] = categories[category_key].with_percent(percent)
        return self.update(month_key, RecordPatch(categories=categories))

    def set_goal(self, month_key: str, target: Optional[float], months: Optional[float]) -> MonthRecord:
        return self.update(month_key, RecordPatch(goal=Goal(target=target, months=months)))

    def record_spending(self, month_key: str, category_key: str, amount: float) -> MonthRecord:
        record = self.get(month_key)
        if category_key not in record.categories:
            raise KeyError(category_key)
        spending = dict(record.spending)
        spending[category_key] = amount
        return self.update(month_key, RecordPatch(spending=spending))
