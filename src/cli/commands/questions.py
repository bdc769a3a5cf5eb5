"""Question bank commands."""

from __future__ import annotations

from pathlib import Path

import typer

from readiness.scoring import max_possible_score
from readiness.visibility import applicable_sections, applies_to_permission
from schemas.internal.questions import QUESTION_TYPES, QuestionSet
from .shared import emit_json, json_dumps, load_question_set, preview


app = typer.Typer(
    help="Inspect and export the question bank",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


@app.command("list", help="Summarize the question bank")
def list_questions(
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Question bank YAML path",
    ),
    permission: str | None = typer.Option(
        None,
        "--permission",
        help="Only list sections and questions that apply to this permission code",
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the full JSON"),
) -> None:
    question_set = load_question_set(path)
    if json_out:
        emit_json(question_set.model_dump())
        return

    _print_summary(question_set, permission)


@app.command("show", help="Show a single question")
def show_question(
    question_id: str = typer.Argument(..., metavar="QUESTION_ID"),
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Question bank YAML path",
    ),
) -> None:
    question_set = load_question_set(path)
    question = question_set.question_index().get(question_id)
    if question is None:
        raise typer.BadParameter(f"Unknown question_id: {question_id}")
    payload = question.model_dump(exclude_none=True)
    payload["max_possible_score"] = max_possible_score(question)
    emit_json(payload)


@app.command("export", help="Export the question bank as JSON")
def export_questions(
    output: Path | None = typer.Option(
        None,
        "--output",
        help="JSON file to write (defaults to stdout)",
    ),
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Question bank YAML path",
    ),
) -> None:
    question_set = load_question_set(path)
    payload = question_set.model_dump()
    if output is None:
        emit_json(payload)
        return
    output.write_text(json_dumps(payload), encoding="utf-8")
    typer.echo(f"Wrote: {output}")


@app.command("validate", help="Validate a question bank and report scoring gaps")
def validate_questions(
    path: Path | None = typer.Option(
        None,
        "--path",
        help="Question bank YAML path",
    ),
) -> None:
    question_set = load_question_set(path)
    issues: list[str] = []
    for question in question_set.questions:
        if question.type not in QUESTION_TYPES:
            issues.append(f"{question.id}: unknown type {question.type!r} never scores")
        if question.weight > 0 and max_possible_score(question) == 0:
            issues.append(f"{question.id}: weighted question has no scored options")
        if question.critical and not question.required:
            issues.append(f"{question.id}: critical flag has no effect on optional questions")
    typer.echo(
        f"OK: {len(question_set.sections)} sections, {len(question_set.questions)} questions"
    )
    for issue in issues:
        typer.echo(f"Warning: {issue}")


def _print_summary(question_set: QuestionSet, permission: str | None) -> None:
    typer.echo(f"Version: {question_set.version}")
    typer.echo(f"Total questions: {len(question_set.questions)}")
    sections = (
        applicable_sections(question_set, permission)
        if permission is not None
        else list(question_set.sections)
    )
    for section in sections:
        questions = [
            question
            for question in question_set.questions_in_section(section.id)
            if permission is None or applies_to_permission(question, permission)
        ]
        required = sum(1 for question in questions if question.required)
        typer.echo(f"\n[{section.id}] {section.title} ({len(questions)} questions, {required} required)")
        for question in questions:
            flags = "".join(
                [
                    "R" if question.required else "-",
                    "C" if question.critical else "-",
                ]
            )
            typer.echo(
                f"  {flags} {question.id:<8} w={question.weight:g} {question.type:<13} "
                f"{preview(question.title, 60)}"
            )


__all__ = ["app"]
