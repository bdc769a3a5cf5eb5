"""Questionnaire response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ResponseSource = Literal["user", "auto"]

TableCell = Optional[Union[float, str]]
TableValue = Union[Dict[str, Dict[str, TableCell]], List[Dict[str, TableCell]]]
ResponseValue = Union[bool, int, float, str, List[str], TableValue, None]


class Response(BaseModel):
    """Current answer to a single question."""

    question_id: str
    value: ResponseValue = None
    score: Optional[float] = Field(
        default=None, description="Explicit score override; never clamped."
    )
    source: ResponseSource = "user"

    model_config = ConfigDict(extra="forbid", frozen=True)


ResponseMap = Mapping[str, Response]


__all__ = [
    "Response",
    "ResponseMap",
    "ResponseSource",
    "ResponseValue",
    "TableCell",
    "TableValue",
]
