"""Load the readiness question bank from YAML."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml

from schemas.internal.questions import QUESTION_TYPES, QuestionSet

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_BANK = Path(__file__).resolve().parent / "readiness_questions.yaml"


def load_question_bank(path: Path | str | None = None) -> QuestionSet:
    """Load and validate the readiness question bank from YAML."""
    resolved = Path(path) if path else DEFAULT_QUESTION_BANK
    if not resolved.exists():
        raise FileNotFoundError(f"Question bank not found: {resolved}")

    raw = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("Question bank must be a YAML mapping")

    sections = raw.get("sections")
    if not isinstance(sections, list):
        raise ValueError("Question bank must include a sections list")

    questions = raw.get("questions")
    if questions is None:
        # Allow questions nested under their section.
        questions = []
        for section in sections:
            if not isinstance(section, dict):
                continue
            for item in section.pop("questions", None) or []:
                if isinstance(item, dict):
                    item.setdefault("section_id", section.get("id"))
                questions.append(item)
        raw["questions"] = questions
    if not isinstance(questions, list):
        raise ValueError("Question bank must include a questions list")

    question_set = QuestionSet.model_validate(raw)
    for question in question_set.questions:
        if question.type not in QUESTION_TYPES:
            logger.warning(
                "Unknown question type %r for %s; it will never score", question.type, question.id
            )
    logger.debug(
        "Loaded question bank %s (%d sections, %d questions)",
        resolved.name,
        len(question_set.sections),
        len(question_set.questions),
    )
    return question_set


@lru_cache(maxsize=4)
def get_question_bank(path: str | None = None) -> QuestionSet:
    """Return the cached question bank; the registry is immutable once loaded."""
    resolved: Path | None = Path(path) if path else None
    return load_question_bank(resolved)


__all__ = ["DEFAULT_QUESTION_BANK", "get_question_bank", "load_question_bank"]
