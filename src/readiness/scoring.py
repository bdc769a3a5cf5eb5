"""Per-question answered checks and score derivation."""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Mapping, Optional

from schemas.internal.answers import Response
from schemas.internal.questions import OTHER_VALUE, QuestionDefinition

AnswerCheck = Callable[[Any], bool]


def is_answered(
    question: QuestionDefinition,
    response: Optional[Response],
    responses: Optional[Mapping[str, Response]] = None,
) -> bool:
    """Return True when ``response`` counts as an answer to ``question``.

    Auto-filled responses are always answered. A selected ``"other"`` on an
    ``allow_other`` question also needs its companion free-text response,
    looked up in ``responses`` under ``question.other_text_id``.
    """
    if response is None:
        return False
    if response.source == "auto":
        return True

    value = response.value
    if question.allow_other and _selects_other(value):
        companion_id = question.other_text_id
        companion = (responses or {}).get(companion_id) if companion_id else None
        if not _companion_filled(companion):
            return False

    check = _ANSWER_CHECKS.get(question.type)
    if check is None:
        return False
    return check(value)


def max_possible_score(question: QuestionDefinition) -> float:
    """Unweighted maximum a question can earn."""
    if question.weight == 0:
        return 0.0
    if question.has_scored_options:
        return max(option.score for option in question.options or [] if option.score is not None)
    return 1.0


def effective_score(
    question: QuestionDefinition,
    response: Optional[Response],
    responses: Optional[Mapping[str, Response]] = None,
) -> float:
    """Unweighted score earned by ``response``.

    An explicit ``response.score`` wins verbatim, even above the maximum.
    """
    if response is None:
        return 0.0
    if response.score is not None:
        return response.score
    if question.weight == 0:
        return 0.0
    if question.has_scored_options:
        # Multi-select sums are capped at the best single option.
        return min(_selected_option_score(question, response.value), max_possible_score(question))
    return max_possible_score(question) if is_answered(question, response, responses) else 0.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(earned: float, possible: float) -> int:
    if possible == 0:
        return 0
    return round_half_up(100 * earned / possible)


def _selected_option_score(question: QuestionDefinition, value: Any) -> float:
    scores = {str(option.value): option.score or 0.0 for option in question.options or []}
    total = 0.0
    for selected in _selected_values(value):
        total += scores.get(selected, 0.0)
    return total


def _selected_values(value: Any) -> list[str]:
    if value is None or isinstance(value, dict):
        return []
    if isinstance(value, (list, tuple)):
        return [_option_key(item) for item in value if _is_scalar(item)]
    if _is_scalar(value):
        return [_option_key(value)]
    return []


def _option_key(value: Any) -> str:
    # Scale options are numeric in YAML while answers may arrive as 2.0 or "2".
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _selects_other(value: Any) -> bool:
    if isinstance(value, str):
        return value == OTHER_VALUE
    if isinstance(value, (list, tuple)):
        return OTHER_VALUE in value
    return False


def _companion_filled(companion: Optional[Response]) -> bool:
    if companion is None:
        return False
    if companion.source == "auto":
        return True
    return _is_text_answer(companion.value)


def _is_text_answer(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_choice_answer(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and len(value) > 0


def _is_scalar_answer(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    return False


def _is_table_answer(value: Any) -> bool:
    return any(_cell_filled(cell) for cell in _table_cells(value))


def _table_cells(value: Any) -> Iterable[Any]:
    if isinstance(value, Mapping):
        rows: Iterable[Any] = value.values()
    elif isinstance(value, (list, tuple)):
        rows = value
    else:
        return
    for row in rows:
        if isinstance(row, Mapping):
            yield from row.values()


def _cell_filled(cell: Any) -> bool:
    if cell is None:
        return False
    if isinstance(cell, str):
        return bool(cell.strip())
    if isinstance(cell, float):
        return not math.isnan(cell)
    return True


_ANSWER_CHECKS: dict[str, AnswerCheck] = {
    "single-choice": _is_scalar_answer,
    "scale": _is_scalar_answer,
    "multi-choice": _is_choice_answer,
    "text": _is_text_answer,
    "numeric-table": _is_table_answer,
}


__all__ = [
    "effective_score",
    "is_answered",
    "max_possible_score",
    "percent",
    "round_half_up",
]
