"""External response schemas for readiness runs."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.questions import QuestionDefinition, Section
from schemas.internal.results import ReadinessReport


class ReadinessRunResult(BaseModel):
    run_id: str | None = None
    result: ReadinessReport
    table_markdown: str = ""
    debug: dict[str, Any] | None = None
    runtime_ms: int | None = None
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class QuestionCatalog(BaseModel):
    """Sections and questions that apply to a permission code."""

    version: str
    permission: str | None = None
    sections: List[Section] = Field(default_factory=list)
    questions: List[QuestionDefinition] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


__all__ = ["QuestionCatalog", "ReadinessRunResult"]
