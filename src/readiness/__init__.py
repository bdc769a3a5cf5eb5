"""Readiness scoring: registry, aggregation, gating and bands."""

from importlib.metadata import PackageNotFoundError, version as pkg_version

from .aggregator import aggregate
from .bands import readiness_bands
from .gating import (
    artifact_unlocked,
    hard_gate_failures,
    section_complete,
    section_gates,
    section_unlocked,
)
from .question_bank import DEFAULT_QUESTION_BANK, get_question_bank, load_question_bank
from .responses import apply_auto_fill, record_response
from .scoring import effective_score, is_answered, max_possible_score
from .visibility import is_question_visible, visible_questions

try:
    __version__ = pkg_version("readiness-engine")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "DEFAULT_QUESTION_BANK",
    "aggregate",
    "apply_auto_fill",
    "artifact_unlocked",
    "effective_score",
    "get_question_bank",
    "hard_gate_failures",
    "is_answered",
    "is_question_visible",
    "load_question_bank",
    "max_possible_score",
    "readiness_bands",
    "record_response",
    "section_complete",
    "section_gates",
    "section_unlocked",
    "visible_questions",
]
