"""CLI command groups."""

__all__ = ["config", "questions"]

from . import config, questions
