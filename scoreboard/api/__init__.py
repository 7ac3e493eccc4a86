"""API assembly helpers."""

from __future__ import annotations

import logging
from typing import Iterable

from fastapi import APIRouter, FastAPI

from .routers import ALL_ROUTERS

logger = logging.getLogger(__name__)


def register_routes(app: FastAPI, routers: Iterable[APIRouter] = ALL_ROUTERS) -> None:
    """Mount the scoreboard routers; a path claimed twice is a wiring bug."""

    seen = set()
    for router in routers:
        for route in router.routes:
            for method in sorted(getattr(route, "methods", None) or ()):
                key = (method, route.path)
                if key in seen:
                    raise RuntimeError(f"Route registered twice: {method} {route.path}")
                seen.add(key)
        app.include_router(router)
        logger.debug("Mounted %s routes", ", ".join(map(str, router.tags)) or "untagged")


__all__ = ["register_routes"]
