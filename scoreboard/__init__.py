"""Scoring backend for bouldering competitions."""

__version__ = "1.0.0"
