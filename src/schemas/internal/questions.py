"""Readiness questionnaire registry schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

QUESTION_TYPES = {"single-choice", "multi-choice", "scale", "text", "numeric-table"}
OTHER_VALUE = "other"

OptionValue = Union[str, int, float]


class QuestionOption(BaseModel):
    """Selectable option of a choice or scale question."""

    value: OptionValue
    label: str
    score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class QuestionCondition(BaseModel):
    """Display rule gating a question on another question's answer."""

    question_id: str
    values: Optional[List[OptionValue]] = None
    not_values: Optional[List[OptionValue]] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _validate_values(self) -> "QuestionCondition":
        if not self.values and not self.not_values:
            raise ValueError("conditional_on requires values or not_values")
        return self


class AutoFillRule(BaseModel):
    """Derive a question's answer from a related question."""

    from_question: str
    value_map: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)


class QuestionDefinition(BaseModel):
    """Single readiness question."""

    id: str = Field(description="Stable question identifier.")
    section_id: str
    type: str = Field(description="Question type; unknown types never score.")
    title: str = ""
    help_text: Optional[str] = None
    required: bool = False
    weight: float = Field(default=0, ge=0, allow_inf_nan=False)
    critical: bool = False
    options: Optional[List[QuestionOption]] = None
    allow_other: bool = False
    depends_on: Optional[str] = Field(
        default=None, description="Companion free-text response for 'other'."
    )
    conditional_on: Optional[QuestionCondition] = None
    applies_to: Optional[List[str]] = None
    hard_gate: bool = False
    hard_gate_threshold: Optional[float] = None
    hard_gate_message: Optional[str] = None
    columns: Optional[List[str]] = None
    rows: Optional[List[str]] = None
    auto_fill: Optional[AutoFillRule] = None
    regulatory_context: Optional[str] = None
    fca_reference: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("id", "section_id")
    @classmethod
    def _validate_identifier(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("identifiers must not be blank")
        return value

    @model_validator(mode="after")
    def _validate_hard_gate(self) -> "QuestionDefinition":
        if self.hard_gate and self.hard_gate_threshold is None:
            raise ValueError(f"{self.id}: hard_gate requires hard_gate_threshold")
        return self

    @property
    def other_text_id(self) -> Optional[str]:
        if not self.allow_other:
            return None
        return self.depends_on or f"{self.id}_other_text"

    @property
    def has_scored_options(self) -> bool:
        return any(option.score is not None for option in self.options or [])


class Section(BaseModel):
    """Questionnaire section."""

    id: str
    title: str
    description: str = ""
    applies_to: Optional[List[str]] = None
    depends_on: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


class QuestionSet(BaseModel):
    """Ordered registry of sections and questions."""

    version: str
    sections: List[Section]
    questions: List[QuestionDefinition]

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _validate_registry(self) -> "QuestionSet":
        section_ids: set[str] = set()
        for section in self.sections:
            if section.id in section_ids:
                raise ValueError(f"Duplicate section id: {section.id}")
            section_ids.add(section.id)

        for section in self.sections:
            unknown = [dep for dep in section.depends_on if dep not in section_ids]
            if unknown:
                raise ValueError(f"Unknown section dependency: {section.id} -> {unknown}")
            if section.id in section.depends_on:
                raise ValueError(f"Section depends on itself: {section.id}")

        seen: set[str] = set()
        for question in self.questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id: {question.id}")
            seen.add(question.id)
            if question.section_id not in section_ids:
                raise ValueError(
                    f"Unknown section_id for {question.id}: {question.section_id}"
                )

        for question in self.questions:
            condition = question.conditional_on
            if condition is not None:
                if condition.question_id not in seen:
                    raise ValueError(
                        f"Unknown conditional_on question_id: {condition.question_id}"
                    )
                if condition.question_id == question.id:
                    raise ValueError(f"Question conditional on itself: {question.id}")
            rule = question.auto_fill
            if rule is not None and rule.from_question not in seen:
                raise ValueError(f"Unknown auto_fill source: {rule.from_question}")

        return self

    def question_index(self) -> Dict[str, QuestionDefinition]:
        return {question.id: question for question in self.questions}

    def questions_in_section(self, section_id: str) -> List[QuestionDefinition]:
        return [q for q in self.questions if q.section_id == section_id]

    def get_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)


__all__ = [
    "OTHER_VALUE",
    "QUESTION_TYPES",
    "AutoFillRule",
    "OptionValue",
    "QuestionCondition",
    "QuestionDefinition",
    "QuestionOption",
    "QuestionSet",
    "Section",
]
