"""Typer CLI entrypoint for readiness scoring."""

from __future__ import annotations

import logging
import os
import shlex
import sys
from importlib import import_module
from pathlib import Path
from typing import Any

import typer

from readiness import __version__

_SUBCOMMAND_SPECS: list[tuple[str, str, str]] = [
    ("config", "cli.commands.config", "Inspect and export configuration"),
    ("questions", "cli.commands.questions", "Inspect and export the question bank"),
]
_SUBCOMMAND_NAMES = {name for name, _, _ in _SUBCOMMAND_SPECS}
_SUBCOMMANDS_REGISTERED = False

app = typer.Typer(
    help=(
        "Readiness command line tool\n\n"
        "Scores questionnaire responses and reports completion and gating state\n"
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=True,
)


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version and exit",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    _configure_logging()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command(help="Score a response snapshot and print the result")
def score(
    responses_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="RESPONSES_FILE",
    ),
    permission: str | None = typer.Option(
        None,
        "--permission",
        help="Permission code used for applicability filtering",
    ),
    questions: Path | None = typer.Option(
        None,
        "--questions",
        help="Question bank YAML path (defaults to the bundled bank)",
    ),
    options: str | None = typer.Option(
        None,
        "--options",
        help="ReadinessRunOptions as a JSON string",
    ),
    options_file: Path | None = typer.Option(
        None,
        "--options-file",
        help="JSON/YAML file containing ReadinessRunOptions",
    ),
    set_values: list[str] | None = typer.Option(
        None,
        "--set",
        help="Override a single option with key=value; may be repeated",
    ),
    debug: str = typer.Option(
        "none",
        "--debug",
        help="Debug level: none|min|full",
    ),
    json_out: bool = typer.Option(
        False,
        "--json",
        help="Print the JSON result",
    ),
    table: bool = typer.Option(
        True,
        "--table/--no-table",
        help="Print the Markdown section table",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Write result.json/table.md into this directory",
    ),
) -> None:
    from cli.common import build_input, build_options, load_options_payload, load_responses_file
    from services.readiness_runner import run_readiness

    payload = load_options_payload(options, options_file, set_values)
    payload.setdefault("debug_level", debug)
    payload["include_table"] = table
    if questions is not None:
        payload["question_bank_path"] = str(questions)

    options_obj = build_options(payload)
    input_obj = build_input(load_responses_file(responses_file), permission)
    try:
        result = run_readiness(input_obj, options_obj)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    _emit_result(result, json_out=json_out, table=table)
    if output_dir is not None:
        from cli.common import write_run_output_dir

        write_run_output_dir(result, output_dir, include_table=table)


def _emit_result(result: Any, *, json_out: bool, table: bool) -> None:
    from cli.common import emit_json

    if json_out:
        emit_json(result.model_dump())
    else:
        report = result.result
        typer.echo(
            f"Overall: {report.aggregation.overall_percent}% "
            f"({report.bands.rag_status}, {report.bands.readiness_level})"
        )
        typer.echo(
            f"Required answered: {report.aggregation.answered_count}/"
            f"{report.aggregation.required_count}"
        )
        typer.echo(f"Artifact unlocked: {'yes' if report.artifact_unlocked else 'no'}")
        if report.aggregation.unmet_critical:
            typer.echo(f"Unmet critical: {', '.join(report.aggregation.unmet_critical)}")
        for failure in report.hard_gate_failures:
            typer.echo(f"Hard gate {failure.question_id}: {failure.message or 'below threshold'}")
        for warning in result.warnings:
            typer.echo(f"Warning: {warning}", err=True)

    if table and getattr(result, "table_markdown", ""):
        typer.echo(result.table_markdown)


def _configure_logging() -> None:
    from core.config import get_settings

    level = get_settings().log_level.upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_invoked_subcommand() -> str | None:
    completion_args = os.getenv("_TYPER_COMPLETE_ARGS")
    tokens: list[str]
    if completion_args:
        try:
            tokens = shlex.split(completion_args)
        except ValueError:
            tokens = completion_args.split()
        if tokens:
            tokens = tokens[1:]
    else:
        tokens = sys.argv[1:]

    for token in tokens:
        if token in _SUBCOMMAND_NAMES:
            return token
        if token.startswith("-"):
            continue
        break
    return None


def _register_subcommands() -> None:
    global _SUBCOMMANDS_REGISTERED
    if _SUBCOMMANDS_REGISTERED:
        return

    selected = _parse_invoked_subcommand()
    for name, module_path, help_text in _SUBCOMMAND_SPECS:
        if selected == name:
            module = import_module(module_path)
            app.add_typer(module.app, name=name)
            continue
        app.add_typer(
            typer.Typer(
                help=help_text,
                add_completion=False,
                no_args_is_help=True,
            ),
            name=name,
        )

    _SUBCOMMANDS_REGISTERED = True


def main() -> None:
    _register_subcommands()
    app()


__all__ = ["app", "main"]
