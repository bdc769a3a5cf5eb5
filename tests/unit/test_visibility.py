from __future__ import annotations

from readiness.visibility import (
    applicable_sections,
    applies_to_permission,
    is_question_visible,
    visible_questions,
)
from schemas.internal.answers import Response
from schemas.internal.questions import QuestionCondition, QuestionDefinition, QuestionSet, Section


def _answer(qid: str, value) -> Response:
    return Response(question_id=qid, value=value)


def _conditional(**condition) -> QuestionDefinition:
    return QuestionDefinition(
        id="child",
        section_id="s1",
        type="text",
        conditional_on=QuestionCondition(question_id="parent", **condition),
    )


def test_applies_to_permission() -> None:
    assert applies_to_permission(Section(id="s", title="All"), None) is True
    scoped = Section(id="s", title="Payments", applies_to=["payments", "emoney"])
    assert applies_to_permission(scoped, "payments") is True
    assert applies_to_permission(scoped, "consumer-credit") is False
    assert applies_to_permission(scoped, None) is False


def test_condition_hidden_without_parent_answer() -> None:
    question = _conditional(values=["yes"])

    assert is_question_visible(question, {}) is False
    assert is_question_visible(question, {"parent": _answer("parent", "")}) is False


def test_condition_values() -> None:
    question = _conditional(values=["a", "b"])

    assert is_question_visible(question, {"parent": _answer("parent", "a")}) is True
    assert is_question_visible(question, {"parent": _answer("parent", "c")}) is False
    assert is_question_visible(question, {"parent": _answer("parent", ["c", "b"])}) is True


def test_condition_not_values() -> None:
    question = _conditional(not_values=["none"])

    assert is_question_visible(question, {"parent": _answer("parent", "some")}) is True
    assert is_question_visible(question, {"parent": _answer("parent", "none")}) is False


def test_condition_matches_numeric_and_boolean_answers() -> None:
    numeric = _conditional(values=[2, 3])
    boolean = _conditional(values=["true"])

    assert is_question_visible(numeric, {"parent": _answer("parent", 2.0)}) is True
    assert is_question_visible(numeric, {"parent": _answer("parent", 1)}) is False
    assert is_question_visible(boolean, {"parent": _answer("parent", True)}) is True


def test_unconditional_question_is_visible() -> None:
    question = QuestionDefinition(id="q1", section_id="s1", type="text")

    assert is_question_visible(question, {}) is True


def test_default_bank_without_permission(question_set) -> None:
    sections = applicable_sections(question_set)
    visible = [q.id for q in visible_questions(question_set, {})]

    assert "payments" not in [s.id for s in sections]
    assert "fr-003" not in visible
    assert not any(qid.startswith("ps-") for qid in visible)
    assert len(visible) == 11


def test_default_bank_for_payments(question_set) -> None:
    responses = {"ps-001": _answer("ps-001", "money-remittance")}

    visible = [q.id for q in visible_questions(question_set, responses, "payments")]

    assert "fr-003" in visible
    assert "ps-002" in visible
    assert "ps-003" not in visible


def test_account_information_switches_conditional_questions(question_set) -> None:
    responses = {"ps-001": _answer("ps-001", "account-information")}

    visible = [q.id for q in visible_questions(question_set, responses, "payments")]

    assert "ps-002" not in visible
    assert "ps-003" in visible


def _chain_set() -> QuestionSet:
    return QuestionSet(
        version="t1",
        sections=[Section(id="s1", title="One")],
        questions=[
            QuestionDefinition(id="gate", section_id="s1", type="single-choice"),
            QuestionDefinition(
                id="parent",
                section_id="s1",
                type="single-choice",
                conditional_on=QuestionCondition(question_id="gate", values=["yes"]),
            ),
            QuestionDefinition(
                id="child",
                section_id="s1",
                type="text",
                conditional_on=QuestionCondition(question_id="parent", values=["a"]),
            ),
        ],
    )


def test_stale_answer_to_hidden_parent_hides_child() -> None:
    question_set = _chain_set()
    child = question_set.question_index()["child"]
    stale = {"gate": _answer("gate", "no"), "parent": _answer("parent", "a")}

    assert is_question_visible(child, stale) is True
    assert is_question_visible(child, stale, question_set.question_index()) is False
    assert [q.id for q in visible_questions(question_set, stale)] == ["gate"]


def test_condition_chain_visible_when_every_level_holds() -> None:
    question_set = _chain_set()
    live = {"gate": _answer("gate", "yes"), "parent": _answer("parent", "a")}

    assert [q.id for q in visible_questions(question_set, live)] == ["gate", "parent", "child"]
