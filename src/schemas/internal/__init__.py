"""Internal schema definitions."""

from .answers import Response, ResponseMap, ResponseSource, ResponseValue  # noqa: F401
from .questions import (  # noqa: F401
    OTHER_VALUE,
    QUESTION_TYPES,
    AutoFillRule,
    QuestionCondition,
    QuestionDefinition,
    QuestionOption,
    QuestionSet,
    Section,
)
from .results import (  # noqa: F401
    AggregationResult,
    HardGateFailure,
    ReadinessBands,
    ReadinessReport,
    SectionGate,
    SectionScore,
)

__all__ = [
    "OTHER_VALUE",
    "QUESTION_TYPES",
    "AggregationResult",
    "AutoFillRule",
    "HardGateFailure",
    "QuestionCondition",
    "QuestionDefinition",
    "QuestionOption",
    "QuestionSet",
    "ReadinessBands",
    "ReadinessReport",
    "Response",
    "ResponseMap",
    "ResponseSource",
    "ResponseValue",
    "Section",
    "SectionGate",
    "SectionScore",
]
