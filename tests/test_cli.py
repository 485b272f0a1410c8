from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from passgen.cli import app
from passgen.rules import RuleSet


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: Any) -> None:
    for name in ("PASSGEN_MIN_LENGTH", "PASSGEN_MAX_LENGTH", "PASSGEN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_generate_default() -> None:
    result = CliRunner().invoke(app, ["generate"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 1
    assert RuleSet().is_valid(lines[0])


def test_generate_count_and_length() -> None:
    result = CliRunner().invoke(app, ["generate", "-n", "3", "--length", "20"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 3
    rules = RuleSet().set_exact_length(20)
    assert all(rules.is_valid(line) for line in lines)


def test_generate_custom_classes() -> None:
    result = CliRunner().invoke(
        app,
        ["generate", "--length", "12", "--min-special", "2", "--special", "^", "--min-upper", "0"],
    )
    assert result.exit_code == 0
    password = result.stdout.strip()
    assert len(password) == 12
    assert password.count("^") >= 2


def test_generate_with_config(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("rules:\n  min_length: 30\n  max_length: 30\n")
    result = CliRunner().invoke(app, ["generate", "--config", str(cfg_file)])
    assert result.exit_code == 0
    assert len(result.stdout.strip()) == 30


def test_generate_bad_length_range() -> None:
    result = CliRunner().invoke(app, ["generate", "--min-length", "50", "--max-length", "10"])
    assert result.exit_code == 4


def test_generate_no_classes() -> None:
    result = CliRunner().invoke(
        app,
        [
            "generate",
            "--min-lower",
            "0",
            "--min-upper",
            "0",
            "--min-numeric",
            "0",
            "--min-special",
            "0",
        ],
    )
    assert result.exit_code == 4


def test_generate_exhausted() -> None:
    result = CliRunner().invoke(app, ["generate", "--max-attempts", "0"])
    assert result.exit_code == 5


def test_bad_config(tmp_path: Path) -> None:
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    result = CliRunner().invoke(app, ["generate", "--config", str(bad_cfg)])
    assert result.exit_code == 4


def test_missing_config(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["generate", "--config", str(tmp_path / "missing.yml")])
    assert result.exit_code == 4


def test_check_valid() -> None:
    result = CliRunner().invoke(app, ["check", "aB1^aB1^aB1^aB1^"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "valid"


def test_check_invalid() -> None:
    result = CliRunner().invoke(app, ["check", "short"])
    assert result.exit_code == 1
    assert result.stdout.strip() == "invalid"
