"""SQLModel-backed score store for local development and tests."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from sqlalchemy import delete, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from ..core.errors import StoreError
from ..core.time import as_utc
from ..models import ScoreRecord

logger = logging.getLogger(__name__)


def create_sql_engine(database_url: str) -> Engine:
    """Create an engine, making sure the SQLite data directory exists."""

    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(database_url)

    if url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args={"check_same_thread": False})


class SQLModelScoreStore:
    """Stores score records in a ``scores`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> "SQLModelScoreStore":
        return cls(create_sql_engine(database_url))

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        except SQLAlchemyError as exc:
            raise StoreError(operation, str(exc)) from exc

    def prepare(self) -> None:
        try:
            SQLModel.metadata.create_all(self.engine, tables=[ScoreRecord.__table__])
        except SQLAlchemyError as exc:
            raise StoreError("prepare", str(exc)) from exc
        logger.info("Score table ready on %s", self.engine.url.render_as_string())

    def add(self, record: ScoreRecord) -> None:
        with self._session("add") as session:
            session.add(record)
            session.commit()

    def top(self, limit: int) -> List[ScoreRecord]:
        with self._session("top") as session:
            records = session.exec(
                select(ScoreRecord)
                .order_by(
                    ScoreRecord.total_score.desc(),
                    ScoreRecord.timestamp.asc(),
                    ScoreRecord.id.asc(),
                )
                .limit(limit)
            ).all()
            for record in records:
                session.expunge(record)
                record.timestamp = as_utc(record.timestamp)
            return list(records)

    def list_ids(self) -> List[str]:
        with self._session("list_ids") as session:
            return list(session.exec(select(ScoreRecord.id)).all())

    def delete_many(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        with self._session("delete_many") as session:
            session.execute(delete(ScoreRecord).where(ScoreRecord.id.in_(list(ids))))
            session.commit()

    def probe(self) -> Optional[Dict[str, Any]]:
        with self._session("probe") as session:
            session.execute(text("SELECT 1"))
        return {"backend": self.engine.dialect.name}


__all__ = ["SQLModelScoreStore", "create_sql_engine"]
