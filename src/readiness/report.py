"""Assemble a readiness report and its Markdown summary."""

from __future__ import annotations

from typing import Mapping, Optional

from core.config import Settings
from schemas.internal.answers import Response
from schemas.internal.questions import QuestionSet
from schemas.internal.results import ReadinessReport

from .aggregator import aggregate
from .bands import readiness_bands
from .gating import artifact_unlocked, hard_gate_failures, section_gates
from .visibility import applicable_sections, visible_questions


def build_readiness_report(
    question_set: QuestionSet,
    responses: Mapping[str, Response],
    *,
    permission: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ReadinessReport:
    sections = applicable_sections(question_set, permission)
    questions = visible_questions(question_set, responses, permission)
    result = aggregate(questions, responses, sections)
    return ReadinessReport(
        question_set_version=question_set.version,
        permission=permission,
        aggregation=result,
        bands=readiness_bands(result, settings),
        sections=section_gates(result, sections),
        artifact_unlocked=artifact_unlocked(result),
        hard_gate_failures=hard_gate_failures(questions, responses),
        visible_question_ids=[question.id for question in questions],
    )


def format_markdown_table(report: ReadinessReport) -> str:
    lines = [
        "| Section | Score | Required answered | Complete |",
        "|---|---|---|---|",
    ]
    gates = {gate.id: gate for gate in report.sections}
    for score in report.aggregation.section_scores:
        label = score.title or score.id
        gate = gates.get(score.id)
        complete = "yes" if gate is not None and gate.complete else "no"
        lines.append(
            f"| {label} | {score.percent}% | {score.answered_count}/{score.required_count} | {complete} |"
        )
    result = report.aggregation
    lines.append(
        f"| Overall | {result.overall_percent}% | {result.answered_count}/{result.required_count} "
        f"| {'yes' if report.artifact_unlocked else 'no'} |"
    )
    return "\n".join(lines)


__all__ = ["build_readiness_report", "format_markdown_table"]
