"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError

from schemas.requests import ReadinessInput, ReadinessRunOptions
from schemas.responses import ReadinessRunResult


def load_options_payload(
    options: str | None,
    options_file: Path | None,
    set_values: list[str] | None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {}

    if options:
        payload.update(_parse_json_string(options))

    if options_file:
        payload.update(_load_mapping_file(options_file, label="Options file"))

    if set_values:
        payload.update(_parse_set_values(set_values))

    return payload


def build_options(payload: dict[str, Any]) -> ReadinessRunOptions:
    try:
        return ReadinessRunOptions.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def load_responses_file(path: Path) -> dict[str, Any]:
    """Read a response snapshot.

    The file is either ``{"responses": {...}, "permission": ...}`` or a bare
    mapping of question id to response.
    """
    data = _load_mapping_file(path, label="Responses file")
    if "responses" not in data:
        data = {"responses": data}
    return data


def build_input(payload: dict[str, Any], permission: str | None = None) -> ReadinessInput:
    if permission is not None:
        payload = {**payload, "permission": permission}
    try:
        return ReadinessInput.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_value(value: str) -> Any:
    if value == "":
        return ""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def emit_json(data: Any) -> None:
    typer.echo(json_dumps(data))


def json_dumps(payload: object) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def write_run_output_dir(
    result: ReadinessRunResult,
    output_dir: Path,
    *,
    include_table: bool,
) -> None:
    """Persist a single run result to an output directory."""
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "result.json").write_text(
        json_dumps(result.model_dump()),
        encoding="utf-8",
    )

    if include_table and result.table_markdown:
        (output_dir / "table.md").write_text(result.table_markdown, encoding="utf-8")

    if result.debug is not None:
        (output_dir / "debug.json").write_text(
            json_dumps(result.debug),
            encoding="utf-8",
        )


def _parse_json_string(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter("Options must be a JSON object.")
    return data


def _load_mapping_file(path: Path, *, label: str) -> dict[str, Any]:
    if not path.exists():
        raise typer.BadParameter(f"{label} not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise typer.BadParameter(f"Invalid YAML: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter(f"{label} must contain a JSON/YAML object.")
    return data


def _parse_set_values(items: list[str]) -> dict[str, Any]:
    parsed: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise typer.BadParameter("--set requires key=value syntax.")
        key, raw_value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("--set requires a non-empty key.")
        parsed[key] = parse_value(raw_value.strip())
    return parsed
