"""Write-path helpers for the response store.

The store is owned by the caller; every helper returns a new mapping and
leaves its input untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from core.config import get_settings
from schemas.internal.answers import Response
from schemas.internal.questions import QuestionSet

from .scoring import is_answered, max_possible_score

logger = logging.getLogger(__name__)


def record_response(
    question_set: QuestionSet,
    responses: Mapping[str, Response],
    question_id: str,
    value: Any,
    score: Optional[float] = None,
    *,
    allow_over_max: Optional[bool] = None,
) -> Dict[str, Response]:
    """Return a copy of ``responses`` with a user answer for ``question_id``."""
    question = question_set.question_index().get(question_id)
    if question is None:
        raise KeyError(f"Unknown question_id: {question_id}")

    if allow_over_max is None:
        allow_over_max = get_settings().allow_score_override_above_max
    if score is not None and not allow_over_max:
        maximum = max_possible_score(question)
        if score > maximum:
            raise ValueError(
                f"Score {score} exceeds maximum {maximum} for question {question_id}"
            )

    updated = dict(responses)
    updated[question_id] = Response(
        question_id=question_id, value=value, score=score, source="user"
    )
    return updated


def apply_auto_fill(
    question_set: QuestionSet, responses: Mapping[str, Response]
) -> Dict[str, Response]:
    """Fill questions from their related answers as read-only ``auto`` responses.

    User responses are never overwritten. Unanswered sources are skipped.
    With a ``value_map`` only mapped source values are carried over. Rules
    run in registry order, so a chain fills through in one pass.
    """
    index = question_set.question_index()
    updated = dict(responses)
    for question in question_set.questions:
        rule = question.auto_fill
        if rule is None:
            continue
        existing = updated.get(question.id)
        if existing is not None and existing.source == "user":
            continue
        source = updated.get(rule.from_question)
        if source is None or source.value is None:
            continue
        if not is_answered(index[rule.from_question], source, updated):
            continue

        value = source.value
        if rule.value_map:
            if not isinstance(value, (str, int, float)) or str(value) not in rule.value_map:
                continue
            value = rule.value_map[str(value)]

        updated[question.id] = Response(question_id=question.id, value=value, source="auto")
        logger.debug("Auto-filled %s from %s", question.id, rule.from_question)
    return updated


def unknown_response_ids(
    question_set: QuestionSet, responses: Mapping[str, Response]
) -> list[str]:
    """Response keys that are neither questions nor declared companions."""
    known = set()
    for question in question_set.questions:
        known.add(question.id)
        if question.other_text_id:
            known.add(question.other_text_id)
    return sorted(key for key in responses if key not in known)


__all__ = ["apply_auto_fill", "record_response", "unknown_response_ids"]
