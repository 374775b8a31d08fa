"""JSON file persistence for the month-keyed store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from budget_core.domain.models import MonthRecord, parse_month_key

logger = logging.getLogger(__name__)


def store_to_json(store: Mapping[str, MonthRecord]) -> Dict[str, Any]:
    return {key: store[key].to_dict() for key in sorted(store)}


def store_from_json(data: Any) -> Dict[str, MonthRecord]:
    if not isinstance(data, dict):
        logger.warning("Ignoring store payload of type %s; expected an object", type(data).__name__)
        return {}
    store: Dict[str, MonthRecord] = {}
    for key, raw in data.items():
        try:
            parse_month_key(key)
        except ValueError:
            logger.warning("Skipping entry with invalid month key %r", key)
            continue
        if not isinstance(raw, dict):
            logger.warning("Skipping month %s: record is not an object", key)
            continue
        try:
            store[key] = MonthRecord.from_dict(raw)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning("Skipping month %s: %s", key, exc)
    return store


class JsonStorePersistence:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Dict[str, MonthRecord]:
        if not self.path.exists():
            logger.debug("No store at %s; starting empty", self.path)
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read store at %s (%s); starting empty", self.path, exc)
            return {}
        store = store_from_json(data)
        logger.debug("Loaded %d month(s) from %s", len(store), self.path)
        return store

    def save(self, store: Mapping[str, MonthRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(store_to_json(store), handle, indent=2, ensure_ascii=False)
        logger.debug("Saved %d month(s) to %s", len(store), self.path)
