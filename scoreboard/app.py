"""FastAPI application factory and process entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import register_routes
from .core import Settings, configure_logging, load_settings
from .stores import ScoreStore, build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store.prepare()
    logger.info("Scoreboard started with %s store", app.state.settings.store_backend)
    yield


async def _malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"message": "Request body must be valid JSON."}
    )


def create_app(
    settings: Optional[Settings] = None, store: Optional[ScoreStore] = None
) -> FastAPI:
    """Build the application.

    ``settings`` default to :func:`load_settings`; ``store`` defaults to the
    backend those settings select. Both are held on ``app.state`` and handed
    to handlers through dependencies.
    """

    settings = settings or load_settings()
    store = store if store is not None else build_store(settings)

    app = FastAPI(title="Boulder Scoreboard API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _malformed_body)

    register_routes(app)
    return app


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server is running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
