"""External request schemas for readiness runs."""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.internal.answers import Response

# A bare mapping without these keys is taken to be a table value.
_RESPONSE_KEYS = {"question_id", "value", "score", "source"}


class ReadinessInput(BaseModel):
    """Response store snapshot plus the product variant it applies to."""

    responses: Dict[str, Response] = Field(default_factory=dict)
    permission: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("responses", mode="before")
    @classmethod
    def _inject_question_ids(cls, value: Any) -> Any:
        # Keys double as question ids, so entries may omit them.
        if isinstance(value, list):
            return {
                item.get("question_id"): item for item in value if isinstance(item, dict)
            }
        if not isinstance(value, dict):
            return value
        normalized: Dict[str, Any] = {}
        for key, item in value.items():
            if isinstance(item, dict) and _RESPONSE_KEYS & set(item):
                item = {"question_id": key, **item}
            elif not isinstance(item, Response):
                item = {"question_id": key, "value": item}
            normalized[key] = item
        return normalized


class ReadinessRunOptions(BaseModel):
    """Per-run overrides. All fields are optional and validated."""

    question_bank_path: str | None = None
    apply_auto_fill: bool = True
    include_table: bool = True
    debug_level: Literal["none", "min", "full"] = "none"

    rag_green_threshold: int | None = Field(default=None, ge=0, le=100)
    rag_amber_threshold: int | None = Field(default=None, ge=0, le=100)
    confidence_high_threshold: float | None = Field(default=None, ge=0, le=1)
    confidence_medium_threshold: float | None = Field(default=None, ge=0, le=1)
    submission_ready_threshold: int | None = Field(default=None, ge=0, le=100)
    minor_gaps_threshold: int | None = Field(default=None, ge=0, le=100)
    major_gaps_threshold: int | None = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(extra="forbid")


class AggregateRequest(ReadinessInput):
    """HTTP body for ``POST /aggregate``."""

    options: ReadinessRunOptions | None = None

    def to_input(self) -> ReadinessInput:
        return ReadinessInput(responses=self.responses, permission=self.permission)


__all__ = ["AggregateRequest", "ReadinessInput", "ReadinessRunOptions"]
