"""Model exports."""

from .score import BOULDER_COUNT, Score, ScoreRecord, ScoreSubmission

__all__ = [
    "BOULDER_COUNT",
    "Score",
    "ScoreRecord",
    "ScoreSubmission",
]
