"""Aggregation and readiness output schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

RagStatus = Literal["red", "amber", "green"]
ConfidenceLevel = Literal["high", "medium", "low"]
ReadinessLevel = Literal["submission-ready", "minor-gaps", "major-gaps", "not-ready"]


class SectionScore(BaseModel):
    """Weighted score and completion counts of one section."""

    id: str
    title: Optional[str] = None
    percent: int = 0
    earned: float = 0
    possible: float = 0
    answered_count: int = 0
    required_count: int = 0

    model_config = ConfigDict(extra="forbid")


class AggregationResult(BaseModel):
    """Derived readiness view; recomputed on every call, never persisted."""

    answered_count: int = 0
    required_count: int = 0
    completion_percent: int = 0
    overall_percent: int = 0
    earned: float = 0
    possible: float = 0
    section_scores: List[SectionScore] = Field(default_factory=list)
    unmet_critical: List[str] = Field(default_factory=list)
    unanswered_required: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def section(self, section_id: str) -> Optional[SectionScore]:
        return next((s for s in self.section_scores if s.id == section_id), None)


class HardGateFailure(BaseModel):
    """Threshold condition failed by an answered hard-gate question."""

    question_id: str
    score: float
    threshold: float
    message: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class SectionGate(BaseModel):
    """Gating flags of one section."""

    id: str
    complete: bool
    unlocked: bool
    blocked_by: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ReadinessBands(BaseModel):
    """Headline status derived from the overall percent and completion."""

    rag_status: RagStatus
    confidence_level: ConfidenceLevel
    readiness_level: ReadinessLevel

    model_config = ConfigDict(extra="forbid")


class ReadinessReport(BaseModel):
    """Aggregation plus gating and bands for a single snapshot."""

    question_set_version: str
    permission: Optional[str] = None
    aggregation: AggregationResult
    bands: ReadinessBands
    sections: List[SectionGate] = Field(default_factory=list)
    artifact_unlocked: bool = False
    hard_gate_failures: List[HardGateFailure] = Field(default_factory=list)
    visible_question_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "AggregationResult",
    "ConfidenceLevel",
    "HardGateFailure",
    "RagStatus",
    "ReadinessBands",
    "ReadinessLevel",
    "ReadinessReport",
    "SectionGate",
    "SectionScore",
]
