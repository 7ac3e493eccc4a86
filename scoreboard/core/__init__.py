"""Core configuration and infrastructure helpers."""

from .config import (
    STORE_FIRESTORE,
    STORE_SQLITE,
    FirebaseSettings,
    Settings,
    load_settings,
)
from .errors import ScoreboardError, StoreError, ValidationError
from .log import configure_logging
from .time import as_utc, utcnow

__all__ = [
    "STORE_FIRESTORE",
    "STORE_SQLITE",
    "FirebaseSettings",
    "ScoreboardError",
    "Settings",
    "StoreError",
    "ValidationError",
    "as_utc",
    "configure_logging",
    "load_settings",
    "utcnow",
]
