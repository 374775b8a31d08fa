from budget_core.io.store_file import JsonStorePersistence  # noqa: F401
from budget_core.io.config import Settings, load_settings  # noqa: F401

__all__ = ["JsonStorePersistence", "Settings", "load_settings"]
