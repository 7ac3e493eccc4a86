from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from scoreboard.app import create_app
from scoreboard.core import STORE_SQLITE, Settings, StoreError
from scoreboard.models import ScoreRecord
from scoreboard.stores.sql import SQLModelScoreStore, create_sql_engine


class RecordingStore(SQLModelScoreStore):
    """In-memory SQLite store that remembers which operations were called."""

    def __init__(self) -> None:
        super().__init__(create_sql_engine("sqlite://"))
        self.calls: List[str] = []

    def add(self, record: ScoreRecord) -> None:
        self.calls.append("add")
        super().add(record)

    def top(self, limit: int) -> List[ScoreRecord]:
        self.calls.append("top")
        return super().top(limit)

    def list_ids(self) -> List[str]:
        self.calls.append("list_ids")
        return super().list_ids()

    def delete_many(self, ids: Sequence[str]) -> None:
        self.calls.append("delete_many")
        super().delete_many(ids)


class FailingStore:
    """Store whose every call fails the way an unreachable backend would."""

    def __init__(self, detail: str = "deadline exceeded") -> None:
        self.detail = detail

    def _fail(self, operation: str):
        raise StoreError(operation, self.detail)

    def prepare(self) -> None:
        pass

    def add(self, record: ScoreRecord) -> None:
        self._fail("add")

    def top(self, limit: int) -> List[ScoreRecord]:
        self._fail("top")

    def list_ids(self) -> List[str]:
        self._fail("list_ids")

    def delete_many(self, ids: Sequence[str]) -> None:
        self._fail("delete_many")

    def probe(self) -> Optional[Dict[str, Any]]:
        self._fail("probe")


def valid_body(**overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "playerName": "Alex",
        "boulderScores": [5] * 10,
        "category": "Open",
    }
    body.update(overrides)
    return body


@pytest.fixture
def settings() -> Settings:
    return Settings(store_backend=STORE_SQLITE, database_url="sqlite://")


@pytest.fixture
def store() -> RecordingStore:
    recording = RecordingStore()
    recording.prepare()
    return recording


@pytest.fixture
def client(settings: Settings, store: RecordingStore):
    with TestClient(create_app(settings, store)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(settings: Settings):
    with TestClient(create_app(settings, FailingStore())) as test_client:
        yield test_client
