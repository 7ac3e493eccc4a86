"""Service layer helpers."""

from .scores import (
    LEADERBOARD_SIZE,
    build_record,
    clear_leaderboard,
    fetch_leaderboard,
    parse_submission,
    record_to_dict,
    submit_score,
)

__all__ = [
    "LEADERBOARD_SIZE",
    "build_record",
    "clear_leaderboard",
    "fetch_leaderboard",
    "parse_submission",
    "record_to_dict",
    "submit_score",
]
