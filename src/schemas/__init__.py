"""Schema package for external and internal contracts."""

from .requests import AggregateRequest, ReadinessInput, ReadinessRunOptions
from .responses import QuestionCatalog, ReadinessRunResult

__all__ = [
    "AggregateRequest",
    "QuestionCatalog",
    "ReadinessInput",
    "ReadinessRunOptions",
    "ReadinessRunResult",
]
