"""Score submission endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ...core.config import Settings
from ...core.errors import StoreError, ValidationError
from ...services.scores import submit_score
from ...stores import ScoreStore
from ..deps import get_settings, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scores"])


@router.post("/submit-score")
def submit(
    body: Any = Body(None),
    store: ScoreStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Validate and store one player's boulder scores."""

    try:
        submit_score(store, body, require_player_name=settings.require_player_name)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"message": exc.message})
    except StoreError as exc:
        logger.exception("Error submitting scores")
        return JSONResponse(
            status_code=500,
            content={"message": "Error submitting scores", "error": exc.detail},
        )
    return {"message": "Scores submitted successfully!"}


__all__ = ["router"]
