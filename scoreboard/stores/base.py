"""Score store interface consumed by the service layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..models import ScoreRecord


class ScoreStore(Protocol):
    """Document-collection operations the handlers rely on.

    Implementations raise :class:`~scoreboard.core.errors.StoreError` for any
    backend failure and let nothing else escape.
    """

    def prepare(self) -> None:
        """One-time setup run at application startup."""

    def add(self, record: ScoreRecord) -> None:
        """Persist a new record."""

    def top(self, limit: int) -> List[ScoreRecord]:
        """Records by total score descending, then timestamp and id ascending."""

    def list_ids(self) -> List[str]:
        """Ids of every stored record."""

    def delete_many(self, ids: Sequence[str]) -> None:
        """Batch-delete the records with the given ids."""

    def probe(self) -> Optional[Dict[str, Any]]:
        """Return the diagnostic document, or ``None`` when it does not exist."""


__all__ = ["ScoreStore"]
