from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from cli.app import app
from cli.commands import config as config_command
from cli.commands import questions as questions_command

runner = CliRunner()


def _responses_file(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "responses.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_score_prints_summary_and_table(tmp_path: Path) -> None:
    path = _responses_file(tmp_path, {"bm-001": "e-money", "bm-003": "Fees"})

    result = runner.invoke(app, ["score", str(path)])

    assert result.exit_code == 0, result.output
    assert "Overall:" in result.stdout
    assert "Required answered: 2/9" in result.stdout
    assert "| Business Model & Strategy |" in result.stdout


def test_score_json_output(tmp_path: Path) -> None:
    path = _responses_file(
        tmp_path, {"responses": {"bm-001": "payment-services"}, "permission": "payments"}
    )

    result = runner.invoke(app, ["score", str(path), "--json", "--no-table"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["result"]["permission"] == "payments"
    assert "ps-001" in payload["result"]["visible_question_ids"]
    assert payload["table_markdown"] == ""


def test_score_permission_flag_and_yaml_input(tmp_path: Path) -> None:
    path = tmp_path / "responses.yaml"
    path.write_text("bm-001: payment-services\n", encoding="utf-8")

    result = runner.invoke(
        app, ["score", str(path), "--permission", "payments", "--json", "--no-table"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["result"]["permission"] == "payments"


def test_score_writes_output_dir(tmp_path: Path) -> None:
    path = _responses_file(tmp_path, {})
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["score", str(path), "--output-dir", str(out_dir), "--set", "debug_level=min"]
    )

    assert result.exit_code == 0, result.output
    assert (out_dir / "result.json").exists()
    assert (out_dir / "table.md").read_text(encoding="utf-8").startswith("| Section |")
    assert (out_dir / "debug.json").exists()


def test_score_rejects_bad_options(tmp_path: Path) -> None:
    path = _responses_file(tmp_path, {})

    result = runner.invoke(app, ["score", str(path), "--options", "[1, 2]"])

    assert result.exit_code != 0


def test_score_rejects_missing_question_bank(tmp_path: Path) -> None:
    path = _responses_file(tmp_path, {})

    result = runner.invoke(
        app, ["score", str(path), "--questions", str(tmp_path / "missing.yaml")]
    )

    assert result.exit_code != 0


def test_score_rejects_invalid_question_bank(tmp_path: Path) -> None:
    path = _responses_file(tmp_path, {})
    bank = tmp_path / "bank.yaml"
    bank.write_text(
        """
version: t1
sections:
  - {id: s1, title: One}
questions:
  - {id: q, section_id: missing, type: text}
""",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["score", str(path), "--questions", str(bank)])

    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip()


def test_questions_list_and_show() -> None:
    listed = runner.invoke(questions_command.app, ["list", "--permission", "payments"])
    shown = runner.invoke(questions_command.app, ["show", "pc-001"])

    assert listed.exit_code == 0, listed.output
    assert "[payments] Payment Services" in listed.stdout
    assert shown.exit_code == 0, shown.output
    assert json.loads(shown.stdout)["max_possible_score"] == 3


def test_questions_show_unknown_id() -> None:
    result = runner.invoke(questions_command.app, ["show", "zz-999"])

    assert result.exit_code != 0


def test_questions_export_and_validate(tmp_path: Path) -> None:
    output = tmp_path / "bank.json"

    exported = runner.invoke(questions_command.app, ["export", "--output", str(output)])
    validated = runner.invoke(questions_command.app, ["validate"])

    assert exported.exit_code == 0, exported.output
    assert len(json.loads(output.read_text(encoding="utf-8"))["questions"]) == 15
    assert validated.exit_code == 0, validated.output
    assert "OK: 4 sections, 15 questions" in validated.stdout


def test_config_show_and_diff(monkeypatch) -> None:
    monkeypatch.setenv("RAG_GREEN_THRESHOLD", "85")

    shown = runner.invoke(config_command.app, ["show"])
    diff = runner.invoke(config_command.app, ["diff"])

    assert shown.exit_code == 0, shown.output
    assert json.loads(shown.stdout)["rag_green_threshold"] == 85
    assert json.loads(diff.stdout) == {"rag_green_threshold": {"value": 85, "default": 80}}
