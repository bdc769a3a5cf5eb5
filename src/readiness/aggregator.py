"""Weighted readiness aggregation over a visible question set."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from schemas.internal.answers import Response
from schemas.internal.questions import QuestionDefinition, Section
from schemas.internal.results import AggregationResult, SectionScore

from .scoring import effective_score, is_answered, max_possible_score, percent


class _Tally:
    __slots__ = ("earned", "possible", "answered", "required")

    def __init__(self) -> None:
        self.earned = 0.0
        self.possible = 0.0
        self.answered = 0
        self.required = 0


def aggregate(
    questions: Sequence[QuestionDefinition],
    responses: Mapping[str, Response],
    sections: Optional[Iterable[Section]] = None,
) -> AggregationResult:
    """Aggregate responses over ``questions``, the already-visible set.

    Never raises on malformed responses: anything that fails the answered
    check simply earns nothing. ``sections`` fixes the order and titles of
    ``section_scores``; without it sections appear in first-seen order.
    """
    overall = _Tally()
    tallies: Dict[str, _Tally] = {}
    titles: Dict[str, Optional[str]] = {}
    unmet_critical: List[str] = []
    unanswered_required: List[str] = []

    for section in sections or []:
        tallies.setdefault(section.id, _Tally())
        titles[section.id] = section.title

    for question in questions:
        tally = tallies.setdefault(question.section_id, _Tally())
        titles.setdefault(question.section_id, None)
        response = responses.get(question.id)
        answered = is_answered(question, response, responses)

        if question.required:
            overall.required += 1
            tally.required += 1
            if answered:
                overall.answered += 1
                tally.answered += 1
            else:
                unanswered_required.append(question.id)
                if question.critical:
                    unmet_critical.append(question.id)

        if question.weight <= 0:
            continue
        possible = max_possible_score(question) * question.weight
        earned = effective_score(question, response, responses) * question.weight if answered else 0.0
        overall.possible += possible
        overall.earned += earned
        tally.possible += possible
        tally.earned += earned

    section_scores = [
        SectionScore(
            id=section_id,
            title=titles.get(section_id),
            percent=percent(tally.earned, tally.possible),
            earned=tally.earned,
            possible=tally.possible,
            answered_count=tally.answered,
            required_count=tally.required,
        )
        for section_id, tally in tallies.items()
    ]

    return AggregationResult(
        answered_count=overall.answered,
        required_count=overall.required,
        completion_percent=percent(overall.answered, overall.required),
        overall_percent=percent(overall.earned, overall.possible),
        earned=overall.earned,
        possible=overall.possible,
        section_scores=section_scores,
        unmet_critical=unmet_critical,
        unanswered_required=unanswered_required,
    )


__all__ = ["aggregate"]
