from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import PermissionDenied, ServiceUnavailable
from google.cloud.firestore import Query

from scoreboard.core import StoreError
from scoreboard.models import ScoreSubmission
from scoreboard.services import build_record
from scoreboard.stores.firestore import (
    DIAGNOSTIC_COLLECTION,
    DIAGNOSTIC_DOCUMENT,
    LEADERBOARD_ORDER,
    MAX_BATCH_SIZE,
    FirestoreScoreStore,
    record_from_document,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
INDEXES_FILE = Path(__file__).resolve().parents[1] / "firestore.indexes.json"


def _snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store(client):
    return FirestoreScoreStore(client, collection="scores")


def test_add_creates_document_named_after_record(store, client):
    submission = ScoreSubmission(player_name="Alex", boulder_scores=[5] * 10, category="Open")
    record = build_record(submission, now=NOW)

    store.add(record)

    client.collection.assert_called_with("scores")
    client.collection.return_value.document.assert_called_once_with(record.id)
    client.collection.return_value.document.return_value.create.assert_called_once_with(
        {
            "playerName": "Alex",
            "boulderScores": [5] * 10,
            "category": "Open",
            "totalScore": 50,
            "timestamp": NOW,
        }
    )


def test_add_wraps_backend_errors(store, client):
    document = client.collection.return_value.document.return_value
    document.create.side_effect = PermissionDenied("missing permission")
    submission = ScoreSubmission(boulder_scores=[1] * 10, category="Open")

    with pytest.raises(StoreError) as excinfo:
        store.add(build_record(submission))

    assert "missing permission" in excinfo.value.detail
    assert isinstance(excinfo.value.__cause__, PermissionDenied)


def test_top_orders_by_total_then_timestamp(store, client):
    collection = client.collection.return_value
    by_total = collection.order_by.return_value
    by_time = by_total.order_by.return_value
    by_time.limit.return_value.stream.return_value = [
        _snapshot("a", {"playerName": "A", "boulderScores": [9] * 10, "category": "Open",
                        "totalScore": 90, "timestamp": NOW}),
        _snapshot("b", {"playerName": "B", "boulderScores": [1] * 10, "category": "Youth",
                        "totalScore": 10, "timestamp": NOW}),
    ]

    records = store.top(10)

    collection.order_by.assert_called_once_with("totalScore", direction=Query.DESCENDING)
    by_total.order_by.assert_called_once_with("timestamp", direction=Query.ASCENDING)
    by_time.limit.assert_called_once_with(10)
    assert [record.id for record in records] == ["a", "b"]
    assert records[0].total_score == 90
    assert records[1].category == "Youth"


def test_top_wraps_backend_errors(store, client):
    query = client.collection.return_value.order_by.return_value.order_by.return_value
    query.limit.return_value.stream.side_effect = ServiceUnavailable("unavailable")

    with pytest.raises(StoreError):
        store.top(10)


def test_list_ids_reads_document_ids(store, client):
    client.collection.return_value.select.return_value.stream.return_value = [
        _snapshot("a", {}),
        _snapshot("b", {}),
    ]

    assert store.list_ids() == ["a", "b"]


def test_delete_many_uses_single_batch_when_small(store, client):
    store.delete_many(["a", "b", "c"])

    client.batch.assert_called_once_with()
    batch = client.batch.return_value
    assert batch.delete.call_count == 3
    batch.commit.assert_called_once_with()


def test_delete_many_splits_at_batch_limit(store, client):
    ids = [f"doc{index}" for index in range(MAX_BATCH_SIZE * 2 + 1)]

    store.delete_many(ids)

    assert client.batch.call_count == 3
    assert client.batch.return_value.commit.call_count == 3
    assert client.batch.return_value.delete.call_count == len(ids)


def test_delete_many_wraps_commit_errors(store, client):
    client.batch.return_value.commit.side_effect = ServiceUnavailable("quota")

    with pytest.raises(StoreError):
        store.delete_many(["a"])


def test_probe_returns_document_data(store, client):
    client.collection.return_value.document.return_value.get.return_value = _snapshot(
        DIAGNOSTIC_DOCUMENT, {"hello": "world"}
    )

    assert store.probe() == {"hello": "world"}
    client.collection.assert_called_with(DIAGNOSTIC_COLLECTION)
    client.collection.return_value.document.assert_called_with(DIAGNOSTIC_DOCUMENT)


def test_probe_missing_document(store, client):
    client.collection.return_value.document.return_value.get.return_value = _snapshot(
        DIAGNOSTIC_DOCUMENT, None, exists=False
    )

    assert store.probe() is None


def test_record_from_document_attaches_utc():
    record = record_from_document(
        "x",
        {
            "playerName": "A",
            "boulderScores": [1] * 10,
            "category": "Open",
            "totalScore": 10,
            "timestamp": datetime(2024, 5, 1, 12, 0),
        },
    )

    assert record.timestamp == NOW


def test_shipped_index_covers_leaderboard_query():
    indexes = json.loads(INDEXES_FILE.read_text("utf-8"))["indexes"]

    declared = [
        [(field["fieldPath"], field["order"]) for field in index["fields"]]
        for index in indexes
        if index["collectionGroup"] == "scores"
    ]

    assert [list(LEADERBOARD_ORDER)] == declared
