"""Score submission and persisted score record models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, Union

from sqlalchemy import JSON, Column
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

BOULDER_COUNT = 10

Score = Union[int, float]


def new_record_id() -> str:
    return uuid.uuid4().hex


class ScoreSubmission(SQLModel):
    """Validated submission body, produced before any domain logic runs."""

    player_name: Optional[str] = None
    boulder_scores: List[Score]
    category: str


class ScoreRecord(SQLModel, table=True):
    """One player's persisted submission.

    ``total_score`` is computed once when the record is created and is never
    recomputed; records have no update path.
    """

    __tablename__ = "scores"

    id: str = ORMField(default_factory=new_record_id, primary_key=True)
    player_name: Optional[str] = None
    boulder_scores: List[Score] = ORMField(sa_column=Column(JSON, nullable=False))
    category: str = ORMField(index=True)
    total_score: float = ORMField(index=True)
    timestamp: datetime = ORMField(default_factory=utcnow, index=True)


__all__ = ["BOULDER_COUNT", "Score", "ScoreRecord", "ScoreSubmission", "new_record_id"]
