"""Core readiness runner service for CLI/API reuse."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Mapping
from uuid import uuid4

from core.config import Settings, get_settings
from readiness.question_bank import get_question_bank
from readiness.report import build_readiness_report, format_markdown_table
from readiness.responses import apply_auto_fill, unknown_response_ids
from schemas.internal.questions import QUESTION_TYPES, QuestionSet
from schemas.requests import ReadinessInput, ReadinessRunOptions
from schemas.responses import ReadinessRunResult

logger = logging.getLogger(__name__)

_SETTINGS_OVERRIDES = (
    "rag_green_threshold",
    "rag_amber_threshold",
    "confidence_high_threshold",
    "confidence_medium_threshold",
    "submission_ready_threshold",
    "minor_gaps_threshold",
    "major_gaps_threshold",
)


def run_readiness(
    input_data: ReadinessInput | Mapping[str, Any],
    options: ReadinessRunOptions | Mapping[str, Any] | None = None,
) -> ReadinessRunResult:
    """Score a response snapshot against the question bank and return a typed result."""
    input_obj = (
        input_data
        if isinstance(input_data, ReadinessInput)
        else ReadinessInput.model_validate(input_data)
    )
    options_obj = (
        options
        if isinstance(options, ReadinessRunOptions)
        else ReadinessRunOptions.model_validate(options or {})
    )

    start = perf_counter()
    run_id = uuid4().hex
    warnings: list[str] = []
    settings = _resolve_settings(options_obj)

    bank_path = options_obj.question_bank_path or settings.question_bank_path
    question_set = get_question_bank(bank_path)
    permission = input_obj.permission or settings.default_permission

    responses = dict(input_obj.responses)
    warnings.extend(_collect_warnings(question_set, responses))
    if options_obj.apply_auto_fill:
        responses = apply_auto_fill(question_set, responses)

    report = build_readiness_report(
        question_set, responses, permission=permission, settings=settings
    )
    table = format_markdown_table(report) if options_obj.include_table else ""

    runtime_ms = int((perf_counter() - start) * 1000)
    logger.debug(
        "Readiness run %s: %d%% overall, %d/%d required answered in %dms",
        run_id,
        report.aggregation.overall_percent,
        report.aggregation.answered_count,
        report.aggregation.required_count,
        runtime_ms,
    )
    return ReadinessRunResult(
        run_id=run_id,
        result=report,
        table_markdown=table,
        debug=_build_debug(options_obj, question_set, responses, bank_path),
        runtime_ms=runtime_ms,
        warnings=warnings,
    )


def _resolve_settings(options: ReadinessRunOptions) -> Settings:
    settings = get_settings()
    overrides = {
        name: getattr(options, name)
        for name in _SETTINGS_OVERRIDES
        if getattr(options, name) is not None
    }
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def _collect_warnings(
    question_set: QuestionSet, responses: Mapping[str, Any]
) -> list[str]:
    warnings: list[str] = []
    unknown = unknown_response_ids(question_set, responses)
    if unknown:
        logger.warning("Ignoring responses for unknown questions: %s", ", ".join(unknown))
        warnings.append(f"Responses for unknown questions ignored: {', '.join(unknown)}")
    untyped = [q.id for q in question_set.questions if q.type not in QUESTION_TYPES]
    if untyped:
        warnings.append(f"Questions with unknown types never score: {', '.join(untyped)}")
    return warnings


def _build_debug(
    options: ReadinessRunOptions,
    question_set: QuestionSet,
    responses: Mapping[str, Any],
    bank_path: str | None,
) -> dict[str, Any] | None:
    if options.debug_level == "none":
        return None
    debug: dict[str, Any] = {
        "question_bank": bank_path or "default",
        "question_set_version": question_set.version,
        "auto_filled": sorted(
            key for key, response in responses.items() if response.source == "auto"
        ),
    }
    if options.debug_level == "full":
        debug["responses"] = {
            key: response.model_dump() for key, response in responses.items()
        }
    return debug


__all__ = ["run_readiness"]
