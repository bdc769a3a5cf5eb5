"""RAG, confidence and readiness level bands."""

from __future__ import annotations

from typing import Optional

from core.config import Settings, get_settings
from schemas.internal.results import (
    AggregationResult,
    ConfidenceLevel,
    RagStatus,
    ReadinessBands,
    ReadinessLevel,
)


def rag_status(percent: int, settings: Optional[Settings] = None) -> RagStatus:
    settings = settings or get_settings()
    if percent >= settings.rag_green_threshold:
        return "green"
    if percent >= settings.rag_amber_threshold:
        return "amber"
    return "red"


def confidence_level(
    answered: int, required: int, settings: Optional[Settings] = None
) -> ConfidenceLevel:
    """Confidence from the share of required questions answered.

    With nothing required there is no evidence of completion and confidence
    is ``low``, matching the zero ``completion_percent`` of that case. Such a
    snapshot can reach ``minor-gaps`` at best, never ``submission-ready``.
    """
    settings = settings or get_settings()
    rate = answered / required if required else 0.0
    if rate >= settings.confidence_high_threshold:
        return "high"
    if rate >= settings.confidence_medium_threshold:
        return "medium"
    return "low"


def readiness_level(
    percent: int, confidence: ConfidenceLevel, settings: Optional[Settings] = None
) -> ReadinessLevel:
    settings = settings or get_settings()
    if percent >= settings.submission_ready_threshold and confidence == "high":
        return "submission-ready"
    if percent >= settings.minor_gaps_threshold:
        return "minor-gaps"
    if percent >= settings.major_gaps_threshold:
        return "major-gaps"
    return "not-ready"


def readiness_bands(
    result: AggregationResult, settings: Optional[Settings] = None
) -> ReadinessBands:
    settings = settings or get_settings()
    confidence = confidence_level(result.answered_count, result.required_count, settings)
    return ReadinessBands(
        rag_status=rag_status(result.overall_percent, settings),
        confidence_level=confidence,
        readiness_level=readiness_level(result.overall_percent, confidence, settings),
    )


__all__ = ["confidence_level", "rag_status", "readiness_bands", "readiness_level"]
