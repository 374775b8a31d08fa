from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_STORE_PATH = Path.home() / ".budget_store.json"
DEFAULT_CURRENCY = "₵"


@dataclasses.dataclass(frozen=True)
class Settings:
    store_path: Path = DEFAULT_STORE_PATH
    currency_symbol: str = DEFAULT_CURRENCY


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """
    Defaults, then an optional JSON settings file (argument or BUDGET_CONFIG),
    then BUDGET_STORE_PATH / BUDGET_CURRENCY environment overrides.
    """
    config_path = path or os.getenv("BUDGET_CONFIG")
    data: Dict[str, Any] = _read_json(config_path) if config_path else {}

    store_path = os.getenv("BUDGET_STORE_PATH") or data.get("store_path") or DEFAULT_STORE_PATH
    currency = os.getenv("BUDGET_CURRENCY") or data.get("currency_symbol") or DEFAULT_CURRENCY
    return Settings(
        store_path=Path(store_path).expanduser(),
        currency_symbol=str(currency),
    )


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return data
