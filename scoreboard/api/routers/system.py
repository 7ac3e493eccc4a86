"""System-level API endpoints."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from ...core.config import Settings
from ...core.errors import StoreError
from ...stores import ScoreStore
from ..deps import get_settings, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    """Liveness check."""

    return "Server is running"


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Readiness check naming the configured store backend."""

    return {"ok": True, "store": settings.store_backend}


@router.get("/test-firebase", response_class=PlainTextResponse)
def test_firebase(store: ScoreStore = Depends(get_store)):
    """Read the diagnostic document to confirm the store is reachable."""

    try:
        document = store.probe()
    except StoreError:
        logger.exception("Error getting diagnostic document")
        return PlainTextResponse("Error connecting to Firebase", status_code=500)
    if document is None:
        return "No such document!"
    return "Document data: " + json.dumps(document, default=str)


__all__ = ["router"]
