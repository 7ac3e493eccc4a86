"""Firestore-backed score store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud.firestore import Client, Query

from ..core.config import FirebaseSettings
from ..core.errors import StoreError
from ..core.time import as_utc
from ..models import ScoreRecord

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "scoreboard"
TOKEN_URI = "https://oauth2.googleapis.com/token"

# Firestore rejects write batches with more than 500 operations.
MAX_BATCH_SIZE = 500

DIAGNOSTIC_COLLECTION = "testCollection"
DIAGNOSTIC_DOCUMENT = "testDoc"

_BACKEND_ERRORS = (GoogleAPIError, GoogleAuthError)

# Needs the composite index declared in firestore.indexes.json.
LEADERBOARD_ORDER = (
    ("totalScore", Query.DESCENDING),
    ("timestamp", Query.ASCENDING),
)


def record_to_document(record: ScoreRecord) -> Dict[str, Any]:
    """Map a record onto the document fields stored in the collection."""

    return {
        "playerName": record.player_name,
        "boulderScores": list(record.boulder_scores),
        "category": record.category,
        "totalScore": record.total_score,
        "timestamp": record.timestamp,
    }


def record_from_document(doc_id: str, data: Dict[str, Any]) -> ScoreRecord:
    timestamp = data.get("timestamp")
    return ScoreRecord(
        id=doc_id,
        player_name=data.get("playerName"),
        boulder_scores=list(data.get("boulderScores") or []),
        category=data.get("category") or "",
        total_score=data.get("totalScore") or 0,
        timestamp=as_utc(timestamp) if timestamp is not None else None,
    )


def create_firestore_client(settings: FirebaseSettings) -> Client:
    """Initialise (once per process) the firebase app and return its client."""

    try:
        app = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        certificate = credentials.Certificate(
            {
                "type": "service_account",
                "project_id": settings.project_id,
                "client_email": settings.client_email,
                "private_key": settings.private_key,
                "token_uri": TOKEN_URI,
            }
        )
        app = firebase_admin.initialize_app(
            certificate,
            {
                "projectId": settings.project_id,
                "databaseURL": f"https://{settings.project_id}.firebaseio.com",
            },
            name=FIREBASE_APP_NAME,
        )
        logger.info("Initialised firebase app for project %s", settings.project_id)
    return firestore.client(app)


class FirestoreScoreStore:
    """Stores each score record as one document of a collection."""

    def __init__(self, client: Any, collection: str = "scores") -> None:
        self.client = client
        self.collection_name = collection

    @classmethod
    def from_settings(cls, settings: FirebaseSettings) -> "FirestoreScoreStore":
        return cls(create_firestore_client(settings), settings.collection)

    @property
    def _collection(self):
        return self.client.collection(self.collection_name)

    def prepare(self) -> None:
        logger.info("Using Firestore collection %r", self.collection_name)

    def add(self, record: ScoreRecord) -> None:
        try:
            self._collection.document(record.id).create(record_to_document(record))
        except _BACKEND_ERRORS as exc:
            raise StoreError("add", str(exc)) from exc

    def top(self, limit: int) -> List[ScoreRecord]:
        query = self._collection
        for field_path, direction in LEADERBOARD_ORDER:
            query = query.order_by(field_path, direction=direction)
        query = query.limit(limit)
        try:
            return [
                record_from_document(snapshot.id, snapshot.to_dict() or {})
                for snapshot in query.stream()
            ]
        except _BACKEND_ERRORS as exc:
            raise StoreError("top", str(exc)) from exc

    def list_ids(self) -> List[str]:
        try:
            return [snapshot.id for snapshot in self._collection.select([]).stream()]
        except _BACKEND_ERRORS as exc:
            raise StoreError("list_ids", str(exc)) from exc

    def delete_many(self, ids: Sequence[str]) -> None:
        collection = self._collection
        try:
            for start in range(0, len(ids), MAX_BATCH_SIZE):
                batch = self.client.batch()
                for doc_id in ids[start : start + MAX_BATCH_SIZE]:
                    batch.delete(collection.document(doc_id))
                batch.commit()
        except _BACKEND_ERRORS as exc:
            raise StoreError("delete_many", str(exc)) from exc

    def probe(self) -> Optional[Dict[str, Any]]:
        try:
            snapshot = (
                self.client.collection(DIAGNOSTIC_COLLECTION)
                .document(DIAGNOSTIC_DOCUMENT)
                .get()
            )
        except _BACKEND_ERRORS as exc:
            raise StoreError("probe", str(exc)) from exc
        if not snapshot.exists:
            return None
        return snapshot.to_dict()


__all__ = [
    "DIAGNOSTIC_COLLECTION",
    "DIAGNOSTIC_DOCUMENT",
    "FirestoreScoreStore",
    "LEADERBOARD_ORDER",
    "MAX_BATCH_SIZE",
    "create_firestore_client",
    "record_from_document",
    "record_to_document",
]
