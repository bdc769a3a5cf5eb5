"""Shared helpers for CLI subcommands."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from cli.common import emit_json, json_dumps
from core.config import get_settings
from readiness.question_bank import load_question_bank
from schemas.internal.questions import QuestionSet


def load_question_set(path: Path | None = None) -> QuestionSet:
    """Load the bank from ``path``, the configured bank, or the bundled default."""
    resolved = path or get_settings().question_bank_path
    try:
        return load_question_bank(resolved)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def preview(text: str, limit: int = 80) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= limit:
        return collapsed
    return collapsed[: limit - 3] + "..."


__all__ = ["emit_json", "json_dumps", "load_question_set", "preview"]
