"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

STORE_FIRESTORE = "firestore"
STORE_SQLITE = "sqlite"
STORE_BACKENDS = (STORE_FIRESTORE, STORE_SQLITE)

DEFAULT_PORT = 5000
DEFAULT_DATABASE_URL = "sqlite:///data/app.db"


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _require_firebase_env(name: str) -> str:
    """Return a credential variable the Firestore store cannot start without."""

    value = (os.getenv(name) or "").strip()
    if not value:
        raise RuntimeError(
            f"Missing required environment variable: {name} "
            f"(needed when SCORE_STORE={STORE_FIRESTORE})"
        )
    return value


def _env_flag(name: str) -> bool:
    """Read an on/off switch; unset means off, anything unrecognised is fatal."""

    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean (true/false), got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_origins(name: str) -> List[str]:
    """Comma-separated origins; unset or empty allows any origin."""

    origins = [item.strip() for item in (os.getenv(name) or "").split(",")]
    return [origin for origin in origins if origin] or ["*"]


def unescape_private_key(raw: str) -> str:
    """Turn literal ``\\n`` sequences from a one-line env value into newlines."""

    return raw.replace("\\n", "\n")


@dataclass(frozen=True)
class FirebaseSettings:
    project_id: str
    client_email: str
    private_key: str
    collection: str = "scores"


@dataclass(frozen=True)
class Settings:
    store_backend: str = STORE_FIRESTORE
    firebase: Optional[FirebaseSettings] = None
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    allowed_cors_origins: List[str] = field(default_factory=lambda: ["*"])
    require_player_name: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env``).

    Raises ``RuntimeError`` when a required value is missing or malformed so
    the process stops before serving any request.
    """

    load_dotenv(override=False)

    backend = (os.getenv("SCORE_STORE") or STORE_FIRESTORE).strip().lower()
    if backend not in STORE_BACKENDS:
        raise RuntimeError(
            f"SCORE_STORE must be one of {', '.join(STORE_BACKENDS)}, got {backend!r}"
        )

    firebase = None
    if backend == STORE_FIRESTORE:
        firebase = FirebaseSettings(
            project_id=_require_firebase_env("FIREBASE_PROJECT_ID"),
            client_email=_require_firebase_env("FIREBASE_CLIENT_EMAIL"),
            private_key=unescape_private_key(_require_firebase_env("FIREBASE_PRIVATE_KEY")),
            collection=os.getenv("SCORES_COLLECTION") or "scores",
        )

    return Settings(
        store_backend=backend,
        firebase=firebase,
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        host=os.getenv("HOST") or "0.0.0.0",
        port=_env_int("PORT", DEFAULT_PORT),
        allowed_cors_origins=_env_origins("ALLOWED_CORS_ORIGINS"),
        require_player_name=_env_flag("REQUIRE_PLAYER_NAME"),
        log_level=os.getenv("LOG_LEVEL") or "INFO",
    )


__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_PORT",
    "FirebaseSettings",
    "STORE_BACKENDS",
    "STORE_FIRESTORE",
    "STORE_SQLITE",
    "Settings",
    "load_settings",
    "unescape_private_key",
]
