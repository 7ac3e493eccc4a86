"""Leaderboard endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.errors import StoreError
from ...services.scores import clear_leaderboard, fetch_leaderboard
from ...stores import ScoreStore
from ..deps import get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(store: ScoreStore = Depends(get_store)):
    """Top ten records by total score."""

    try:
        return fetch_leaderboard(store)
    except StoreError as exc:
        logger.exception("Error fetching leaderboard")
        return JSONResponse(
            status_code=500,
            content={"message": "Error fetching leaderboard", "error": exc.detail},
        )


@router.delete("/leaderboard")
def delete_leaderboard(store: ScoreStore = Depends(get_store)):
    """Remove every stored score."""

    try:
        cleared = clear_leaderboard(store)
    except StoreError as exc:
        logger.exception("Error clearing leaderboard")
        return JSONResponse(
            status_code=500,
            content={"message": "Error clearing leaderboard", "error": exc.detail},
        )
    if not cleared:
        return {"message": "No scores to clear."}
    return {"message": "Leaderboard cleared successfully!"}


__all__ = ["router"]
