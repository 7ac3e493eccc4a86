"""Score submission, leaderboard and reset logic."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError
from ..core.time import as_utc, utcnow
from ..models import BOULDER_COUNT, Score, ScoreRecord, ScoreSubmission
from ..stores import ScoreStore

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10

MSG_BAD_BODY = "Request body must be a JSON object."
MSG_BAD_SCORES = f"You must provide exactly {BOULDER_COUNT} boulder scores."
MSG_NON_NUMERIC = "Boulder scores must be numbers."
MSG_BAD_CATEGORY = "You must provide a valid category."
MSG_BAD_PLAYER = "You must provide a valid player name."


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def parse_submission(body: Any, *, require_player_name: bool = False) -> ScoreSubmission:
    """Validate a raw request body into a :class:`ScoreSubmission`.

    Only the shape is checked: ten numeric scores and a non-blank category.
    Score values themselves are not range-checked. ``playerName`` may be
    absent unless ``require_player_name`` is set, but must be a string when
    given.
    """

    if not isinstance(body, dict):
        raise ValidationError(MSG_BAD_BODY)

    scores = body.get("boulderScores")
    if not isinstance(scores, list) or len(scores) != BOULDER_COUNT:
        raise ValidationError(MSG_BAD_SCORES)
    if not all(_is_number(score) for score in scores):
        raise ValidationError(MSG_NON_NUMERIC)

    category = body.get("category")
    if not isinstance(category, str) or not category.strip():
        raise ValidationError(MSG_BAD_CATEGORY)

    player_name = body.get("playerName")
    if player_name is not None and not isinstance(player_name, str):
        raise ValidationError(MSG_BAD_PLAYER)
    if require_player_name and not (player_name or "").strip():
        raise ValidationError(MSG_BAD_PLAYER)

    return ScoreSubmission(
        player_name=player_name,
        boulder_scores=list(scores),
        category=category,
    )


def build_record(submission: ScoreSubmission, now: Optional[datetime] = None) -> ScoreRecord:
    """Create the record to persist, fixing its total and timestamp."""

    return ScoreRecord(
        player_name=submission.player_name,
        boulder_scores=list(submission.boulder_scores),
        category=submission.category,
        total_score=sum(submission.boulder_scores),
        timestamp=now or utcnow(),
    )


def _wire_total(record: ScoreRecord) -> Score:
    # SQL backends read the total back as a float; integer scores keep an integer total.
    total = record.total_score
    if (
        isinstance(total, float)
        and total.is_integer()
        and all(isinstance(score, int) for score in record.boulder_scores)
    ):
        return int(total)
    return total


def record_to_dict(record: ScoreRecord) -> Dict[str, Any]:
    """Serialise a record using the public JSON field names."""

    timestamp = record.timestamp
    return {
        "id": record.id,
        "playerName": record.player_name,
        "boulderScores": list(record.boulder_scores),
        "category": record.category,
        "totalScore": _wire_total(record),
        "timestamp": (
            as_utc(timestamp).isoformat().replace("+00:00", "Z") if timestamp else None
        ),
    }


def submit_score(
    store: ScoreStore, body: Any, *, require_player_name: bool = False
) -> ScoreRecord:
    """Validate and persist one submission. Every call creates a new record."""

    if isinstance(body, dict):
        logger.info(
            "Received score submission: playerName=%r boulderScores=%r category=%r",
            body.get("playerName"),
            body.get("boulderScores"),
            body.get("category"),
        )
    submission = parse_submission(body, require_player_name=require_player_name)
    record = build_record(submission)
    store.add(record)
    logger.info("Stored score %s with total %s", record.id, record.total_score)
    return record


def fetch_leaderboard(store: ScoreStore, limit: int = LEADERBOARD_SIZE) -> List[Dict[str, Any]]:
    """Return the best ``limit`` records, highest total first.

    Equal totals keep submission order: the earlier timestamp ranks higher.
    """

    return [record_to_dict(record) for record in store.top(limit)]


def clear_leaderboard(store: ScoreStore) -> int:
    """Delete every record currently in the store and return how many were read.

    The read and the delete are separate calls, so a record submitted in
    between is not included and survives the clear.
    """

    ids = store.list_ids()
    if not ids:
        return 0
    store.delete_many(ids)
    logger.info("Cleared %d score records", len(ids))
    return len(ids)


__all__ = [
    "LEADERBOARD_SIZE",
    "build_record",
    "clear_leaderboard",
    "fetch_leaderboard",
    "parse_submission",
    "record_to_dict",
    "submit_score",
]
