"""Conditional display and permission applicability rules."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Protocol, Set

from schemas.internal.answers import Response
from schemas.internal.questions import QuestionDefinition, QuestionSet, Section


class _Applicable(Protocol):
    applies_to: Optional[List[str]]


def applies_to_permission(item: _Applicable, permission: Optional[str]) -> bool:
    """Items without ``applies_to`` apply to every permission code."""
    if not item.applies_to:
        return True
    return permission is not None and permission in item.applies_to


def is_question_visible(
    question: QuestionDefinition,
    responses: Mapping[str, Response],
    questions: Optional[Mapping[str, QuestionDefinition]] = None,
) -> bool:
    """Evaluate the display condition of ``question``.

    With ``questions`` (the registry index) the parent's own condition is
    checked too, so a stale answer to a hidden parent shows nothing.
    """
    return _condition_holds(question, responses, questions, set())


def _condition_holds(
    question: QuestionDefinition,
    responses: Mapping[str, Response],
    questions: Optional[Mapping[str, QuestionDefinition]],
    seen: Set[str],
) -> bool:
    condition = question.conditional_on
    if condition is None:
        return True
    if question.id in seen:
        # Cyclic conditions never resolve.
        return False
    seen.add(question.id)

    parent = responses.get(condition.question_id)
    if parent is None or parent.value is None:
        return False
    if questions is not None:
        parent_question = questions.get(condition.question_id)
        if parent_question is not None and not _condition_holds(
            parent_question, responses, questions, seen
        ):
            return False

    selected = _selected(parent.value)
    if not selected:
        return False
    if condition.values:
        allowed = {_key(value) for value in condition.values}
        if not selected & allowed:
            return False
    if condition.not_values:
        blocked = {_key(value) for value in condition.not_values}
        if selected & blocked:
            return False
    return True


def applicable_sections(
    question_set: QuestionSet, permission: Optional[str] = None
) -> List[Section]:
    return [s for s in question_set.sections if applies_to_permission(s, permission)]


def visible_questions(
    question_set: QuestionSet,
    responses: Mapping[str, Response],
    permission: Optional[str] = None,
) -> List[QuestionDefinition]:
    """Questions to aggregate over, in registry order.

    A question is visible when both it and its section apply to the
    permission code and its display condition holds, including the
    conditions of its parents.
    """
    section_ids = {s.id for s in applicable_sections(question_set, permission)}
    index = question_set.question_index()
    return [
        question
        for question in question_set.questions
        if question.section_id in section_ids
        and applies_to_permission(question, permission)
        and is_question_visible(question, responses, index)
    ]


def _selected(value: Any) -> set[str]:
    if isinstance(value, (list, tuple)):
        return {_key(item) for item in value if item is not None}
    if isinstance(value, dict):
        return set()
    if isinstance(value, str) and not value.strip():
        return set()
    return {_key(value)}


def _key(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = [
    "applicable_sections",
    "applies_to_permission",
    "is_question_visible",
    "visible_questions",
]
