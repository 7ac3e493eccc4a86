"""FastAPI dependencies resolving objects attached to the app at startup."""

from __future__ import annotations

from fastapi import Request

from ..core.config import Settings
from ..stores import ScoreStore


def get_store(request: Request) -> ScoreStore:
    """Return the score store injected by :func:`scoreboard.app.create_app`."""

    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


__all__ = ["get_settings", "get_store"]
