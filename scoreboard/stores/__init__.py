"""Score store backends."""

from __future__ import annotations

from ..core.config import STORE_FIRESTORE, STORE_SQLITE, Settings
from .base import ScoreStore
from .firestore import FirestoreScoreStore
from .sql import SQLModelScoreStore


def build_store(settings: Settings) -> ScoreStore:
    """Construct the store selected by ``settings.store_backend``."""

    if settings.store_backend == STORE_SQLITE:
        return SQLModelScoreStore.from_url(settings.database_url)
    if settings.store_backend == STORE_FIRESTORE:
        if settings.firebase is None:
            raise RuntimeError("Firestore store selected without firebase settings")
        return FirestoreScoreStore.from_settings(settings.firebase)
    raise RuntimeError(f"Unknown score store backend: {settings.store_backend}")


__all__ = ["FirestoreScoreStore", "SQLModelScoreStore", "ScoreStore", "build_store"]
