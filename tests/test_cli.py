"""Testy komend CLI xsb (wywoływane przez build_parser, bez podprocesu)."""

from __future__ import annotations

import json

import pytest

from conftest import T_ATTEMPTED, VERB_ATTEMPTED, VERB_COMPLETED
from xsb.cli import build_parser


def run_cli(*argv: str) -> None:
    args = build_parser().parse_args(list(argv))
    args.func(args)


@pytest.fixture
def statement_file(tmp_path):
    def write(statement: dict):
        path = tmp_path / "statement.json"
        path.write_text(json.dumps(statement), encoding="utf-8")
        return path
    return write


class TestProfileCommand:

    def test_lists_profile(self, profile_file, capsys):
        run_cli("profile", str(profile_file))
        out = capsys.readouterr().out
        assert "Example Profile" in out
        assert "Pojęć: 8, szablonów: 2, wzorców: 2" in out

    def test_lists_versions_and_primary_patterns(self, profile_file, capsys):
        run_cli("profile", str(profile_file))
        out = capsys.readouterr().out
        assert "Wersje" in out
        assert "Wzorce główne: Main" in out

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("profile", str(tmp_path / "none.json"))
        assert exc_info.value.code == 1

    def test_invalid_profile(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"id": "http://x"}), encoding="utf-8")
        with pytest.raises(SystemExit):
            run_cli("profile", str(path))


class TestValidateCommand:

    def test_valid_statement(self, profile_file, statement_file, capsys):
        path = statement_file({
            "verb": {"id": VERB_COMPLETED},
            "object": {"id": "http://x", "definition": {"type": "http://adlnet.gov/expapi/activities/course"}},
            "result": {"success": True, "completion": True},
        })
        run_cli("validate", str(path), "--template", "Completed", "--profile", str(profile_file))
        assert "OK" in capsys.readouterr().out

    def test_invalid_statement_json_output(self, profile_file, statement_file, capsys):
        path = statement_file({"verb": {"id": VERB_COMPLETED}})
        with pytest.raises(SystemExit) as exc_info:
            run_cli(
                "validate", str(path), "-t", "Completed",
                "-p", str(profile_file), "--json-output",
            )
        assert exc_info.value.code == 1
        report = json.loads(capsys.readouterr().out)
        assert report["is_valid"] is False
        assert [e["code"] for e in report["errors"]] == [
            "E_OBJECT_ACTIVITY_TYPE_MISMATCH",
            "E_RULE_INCLUDED_MISSING",
            "E_RULE_INCLUDED_MISSING",
        ]

    def test_profiles_from_environment(self, profile_file, statement_file, monkeypatch, capsys):
        monkeypatch.setenv("XSB_PROFILES", str(profile_file))
        path = statement_file({"verb": {"id": VERB_ATTEMPTED}})
        with pytest.raises(SystemExit):
            run_cli("validate", str(path), "--template", "Attempted", "--json-output")
        assert json.loads(capsys.readouterr().out)["template_id"] == T_ATTEMPTED

    def test_no_profile(self, statement_file, monkeypatch):
        monkeypatch.delenv("XSB_PROFILES", raising=False)
        path = statement_file({})
        with pytest.raises(SystemExit):
            run_cli("validate", str(path), "--template", "Attempted")

    def test_unknown_template(self, profile_file, statement_file):
        path = statement_file({})
        with pytest.raises(SystemExit):
            run_cli("validate", str(path), "--template", "Nope", "--profile", str(profile_file))


class TestMatchCommand:

    def test_complete_sequence(self, profile_file, capsys):
        run_cli(
            "match", "--pattern", "Main", "Attempted", "Completed",
            "--profile", str(profile_file),
        )
        assert "Status: success" in capsys.readouterr().out

    def test_partial_sequence(self, profile_file, capsys):
        run_cli("match", "--pattern", "Main", "Attempted", "--profile", str(profile_file))
        assert "Status: partial" in capsys.readouterr().out

    def test_rejected_step(self, profile_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("match", "--pattern", "Main", "Completed", "--profile", str(profile_file))
        assert exc_info.value.code == 1
        assert "ODRZUCONO" in capsys.readouterr().out


class TestTemplateCommand:

    def test_prints_prefilled_statement(self, profile_file, capsys):
        run_cli("template", "Attempted", "--pattern", "Main", "--profile", str(profile_file))
        statement = json.loads(capsys.readouterr().out)
        assert statement["verb"]["id"] == VERB_ATTEMPTED
        assert "registration" in statement["context"]

    def test_sequence_violation(self, profile_file):
        with pytest.raises(SystemExit):
            run_cli("template", "Completed", "--pattern", "Main", "--profile", str(profile_file))
