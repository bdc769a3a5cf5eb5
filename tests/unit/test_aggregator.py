from __future__ import annotations

from readiness.aggregator import aggregate
from readiness.gating import section_complete
from readiness.scoring import effective_score, max_possible_score
from schemas.internal.answers import Response
from schemas.internal.questions import QuestionDefinition, QuestionOption, Section


def _choice(qid: str, weight: float, scores: list[float], **kwargs) -> QuestionDefinition:
    options = [QuestionOption(value=str(s), label=str(s), score=s) for s in scores]
    return QuestionDefinition(
        id=qid,
        section_id=kwargs.pop("section_id", "s1"),
        type="single-choice",
        weight=weight,
        options=options,
        **kwargs,
    )


def _text(qid: str, weight: float = 1, **kwargs) -> QuestionDefinition:
    return QuestionDefinition(
        id=qid, section_id=kwargs.pop("section_id", "s1"), type="text", weight=weight, **kwargs
    )


def _answer(qid: str, value, score=None) -> Response:
    return Response(question_id=qid, value=value, score=score)


def test_partial_answers_round_half_up() -> None:
    questions = [_choice("q1", 1, [0, 1, 2]), _choice("q2", 2, [0, 3])]
    responses = {"q1": _answer("q1", "1")}

    result = aggregate(questions, responses)

    assert result.earned == 1
    assert result.possible == 8
    assert result.overall_percent == 13
    assert result.section("s1").percent == 13


def test_required_zero_weight_question_blocks_completion() -> None:
    questions = [
        _choice("q1", 1, [0, 1], required=True),
        _text("q2", weight=0, required=True),
    ]
    responses = {"q1": _answer("q1", "1")}

    result = aggregate(questions, responses)

    assert result.answered_count == 1
    assert result.required_count == 2
    assert result.overall_percent == 100
    assert result.unmet_critical == []
    assert result.unanswered_required == ["q2"]
    assert section_complete(result, "s1") is False


def test_multi_choice_scores_sum_of_selected() -> None:
    question = QuestionDefinition(
        id="q1",
        section_id="s1",
        type="multi-choice",
        weight=1,
        options=[
            QuestionOption(value="a", label="A", score=1),
            QuestionOption(value="b", label="B", score=2),
            QuestionOption(value="c", label="C", score=5),
        ],
    )

    assert effective_score(question, _answer("q1", ["a", "b"])) == 3


def test_other_without_text_contributes_nothing() -> None:
    question = _choice("q1", 1, [1], allow_other=True, required=True, critical=True)
    question = question.model_copy(
        update={"options": [QuestionOption(value="other", label="Other", score=1)]}
    )
    responses = {"q1": _answer("q1", "other")}

    result = aggregate([question], responses)

    assert result.answered_count == 0
    assert result.earned == 0
    assert result.unmet_critical == ["q1"]


def test_section_without_weighted_questions_is_zero_percent() -> None:
    questions = [_text("q1", weight=0, section_id="s2")]
    sections = [Section(id="s1", title="Empty"), Section(id="s2", title="Unweighted")]

    result = aggregate(questions, {"q1": _answer("q1", "filled")}, sections)

    assert [s.id for s in result.section_scores] == ["s1", "s2"]
    assert result.section("s1").percent == 0
    assert result.section("s2").percent == 0
    assert result.overall_percent == 0


def test_empty_question_set() -> None:
    result = aggregate([], {})

    assert result.answered_count == 0
    assert result.required_count == 0
    assert result.overall_percent == 0
    assert result.completion_percent == 0
    assert result.section_scores == []


def test_unmet_critical_only_lists_required_critical() -> None:
    questions = [
        _text("q1", required=True, critical=True),
        _text("q2", required=False, critical=True),
        _text("q3", required=True),
    ]

    result = aggregate(questions, {})

    assert result.unmet_critical == ["q1"]
    assert result.unanswered_required == ["q1", "q3"]


def test_unanswered_override_is_not_credited() -> None:
    questions = [_text("q1", required=True)]
    responses = {"q1": _answer("q1", "", score=5)}

    result = aggregate(questions, responses)

    assert result.answered_count == 0
    assert result.earned == 0


def test_override_above_max_can_exceed_hundred() -> None:
    questions = [_choice("q1", 1, [0, 1])]
    responses = {"q1": _answer("q1", "1", score=3)}

    result = aggregate(questions, responses)

    assert result.overall_percent == 300


def test_sections_in_first_seen_order_without_registry() -> None:
    questions = [
        _text("q1", section_id="b"),
        _text("q2", section_id="a"),
        _text("q3", section_id="b"),
    ]

    result = aggregate(questions, {"q2": _answer("q2", "x")})

    assert [s.id for s in result.section_scores] == ["b", "a"]
    assert result.section("a").percent == 100
    assert result.section("b").percent == 0
    assert result.overall_percent == 33


def test_aggregate_is_idempotent() -> None:
    questions = [_choice("q1", 1, [0, 1, 2], required=True), _text("q2", weight=2)]
    responses = {"q1": _answer("q1", "2"), "q2": _answer("q2", "text")}

    assert aggregate(questions, responses) == aggregate(questions, responses)


def test_answering_never_decreases_counts() -> None:
    questions = [
        _choice("q1", 1, [0, 1, 2], required=True),
        _text("q2", weight=2, required=True),
        _choice("q3", 3, [0, 3], required=True, critical=True),
    ]
    responses: dict[str, Response] = {}
    previous = aggregate(questions, responses)
    for qid, value in [("q2", "text"), ("q1", "0"), ("q3", "3")]:
        responses = {**responses, qid: _answer(qid, value)}
        current = aggregate(questions, responses)
        assert current.answered_count >= previous.answered_count
        assert current.overall_percent >= previous.overall_percent
        previous = current

    assert previous.answered_count == 3
    assert previous.unmet_critical == []


def test_zero_weight_answers_do_not_move_percent() -> None:
    questions = [_choice("q1", 2, [0, 1, 2]), _text("q2", weight=0, required=True)]
    base = {"q1": _answer("q1", "1")}

    before = aggregate(questions, base)
    after = aggregate(questions, {**base, "q2": _answer("q2", "anything")})

    assert before.overall_percent == after.overall_percent == 50
    assert after.answered_count == before.answered_count + 1


def test_percent_within_bounds_without_overrides() -> None:
    questions = [_choice(f"q{i}", i, [0, 1, 2]) for i in range(1, 5)]
    responses = {f"q{i}": _answer(f"q{i}", "2") for i in range(1, 5)}

    result = aggregate(questions, responses)

    assert result.overall_percent == 100
    for question in questions:
        assert effective_score(question, responses[question.id]) <= max_possible_score(question)


def test_malformed_values_do_not_raise() -> None:
    questions = [
        _text("q1", required=True),
        _choice("q2", 1, [0, 1], required=True),
        QuestionDefinition(id="q3", section_id="s1", type="numeric-table", weight=1),
    ]
    responses = {
        "q1": _answer("q1", ["not", "text"]),
        "q2": _answer("q2", {"row": {"col": 1.0}}),
        "q3": _answer("q3", True),
    }

    result = aggregate(questions, responses)

    assert result.answered_count == 0
    assert result.overall_percent == 0
