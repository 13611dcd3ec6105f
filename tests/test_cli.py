"""
Tests for the command-line interface.
"""

import json
import re

import pytest

from cpgen import cli
from cpgen.entropy import ScriptedRandomSource


def test_prints_one_password(capsys):
    code = cli.main(["--length", "12", "--upper-min", "0", "--lower-min", "0",
                     "--numeric-min", "12", "--special-min", "0"])

    out = capsys.readouterr().out.strip()
    assert code == cli.EXIT_OK
    assert re.fullmatch(r"[0-9]{12}", out)


def test_json_count(capsys):
    code = cli.main(["--count", "3", "--json", "--max-retries", "1000"])

    passwords = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert len(passwords) == 3
    assert all(len(p) == 16 for p in passwords)


def test_json_meta(capsys):
    code = cli.main(["--json", "--meta", "--length", "9", "--upper-min", "9",
                     "--lower-min", "0", "--numeric-min", "0", "--special-min", "0"])

    [entry] = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert entry["attempts"] == 1
    assert entry["class_counts"]["upper"] == 9
    assert entry["request"]["length"] == 9
    assert entry["entropy_bits"] > 0


def test_meta_text(capsys):
    cli.main(["--meta", "--max-retries", "1000"])

    out = capsys.readouterr().out
    assert "attempts=" in out
    assert "bits" in out


def test_constraint_error_exit_code(capsys):
    code = cli.main(["--length", "10", "--upper-min", "5", "--lower-min", "5"])

    captured = capsys.readouterr()
    assert code == cli.EXIT_CONSTRAINT
    assert captured.out == ""
    assert "exceeds password length" in captured.err


def test_exhausted_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(
        cli, "source_factory", lambda name: lambda: ScriptedRandomSource(b"\x00", cycle=True)
    )

    code = cli.main(["--max-retries", "3"])

    assert code == cli.EXIT_EXHAUSTED
    assert "retry budget" in capsys.readouterr().err


def test_source_error_exit_code(monkeypatch, capsys):
    monkeypatch.setattr(cli, "source_factory", lambda name: lambda: ScriptedRandomSource(b""))

    code = cli.main([])

    assert code == cli.EXIT_SOURCE
    assert "Random source failed" in capsys.readouterr().err


@pytest.mark.parametrize("count", ["0", "-5", "many"])
def test_count_must_be_positive(count, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--count", count])

    assert excinfo.value.code == 2
    assert "--count" in capsys.readouterr().err


def test_source_configuration_error_exit_code(monkeypatch, capsys):
    def broken_source():
        raise ValueError("num_qubits must be at least 1")

    monkeypatch.setattr(cli, "source_factory", lambda name: broken_source)

    code = cli.main([])

    assert code == cli.EXIT_SOURCE
    assert "num_qubits" in capsys.readouterr().err
