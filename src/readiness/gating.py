"""Boolean "may proceed" flags derived from an aggregation."""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from schemas.internal.answers import Response
from schemas.internal.questions import QuestionDefinition, Section
from schemas.internal.results import AggregationResult, HardGateFailure, SectionGate

from .scoring import effective_score, is_answered

logger = logging.getLogger(__name__)


def section_complete(result: AggregationResult, section_id: str) -> bool:
    """All visible required questions of the section are answered.

    Independent of the section percent: zero-weight required questions still
    count, unanswered optional questions do not.
    """
    score = result.section(section_id)
    if score is None:
        return True
    return score.answered_count >= score.required_count


def artifact_unlocked(result: AggregationResult) -> bool:
    """Global gate for downstream generation (e.g. the opinion pack)."""
    return not result.unmet_critical and result.answered_count >= result.required_count


def section_unlocked(result: AggregationResult, section: Section) -> bool:
    return not _blocking_sections(result, section)


def section_gates(
    result: AggregationResult, sections: Sequence[Section]
) -> List[SectionGate]:
    gates: List[SectionGate] = []
    for section in sections:
        blocked_by = _blocking_sections(result, section)
        gates.append(
            SectionGate(
                id=section.id,
                complete=section_complete(result, section.id),
                unlocked=not blocked_by,
                blocked_by=blocked_by,
            )
        )
    return gates


def hard_gate_failures(
    questions: Sequence[QuestionDefinition],
    responses: Mapping[str, Response],
) -> List[HardGateFailure]:
    """Answered hard-gate questions scoring below their threshold.

    Unanswered hard gates are reported through ``unmet_critical`` instead.
    """
    failures: List[HardGateFailure] = []
    for question in questions:
        if not question.hard_gate or question.hard_gate_threshold is None:
            continue
        response = responses.get(question.id)
        if not is_answered(question, response, responses):
            continue
        score = effective_score(question, response, responses)
        if score < question.hard_gate_threshold:
            logger.debug(
                "Hard gate %s failed: %s < %s", question.id, score, question.hard_gate_threshold
            )
            failures.append(
                HardGateFailure(
                    question_id=question.id,
                    score=score,
                    threshold=question.hard_gate_threshold,
                    message=question.hard_gate_message,
                )
            )
    return failures


def _blocking_sections(result: AggregationResult, section: Section) -> List[str]:
    return [dep for dep in section.depends_on if not section_complete(result, dep)]


__all__ = [
    "artifact_unlocked",
    "hard_gate_failures",
    "section_complete",
    "section_gates",
    "section_unlocked",
]
