"""Typer-based command line interface for password generation.

``passgen generate`` prints one or more passwords built from the configured
rules; ``passgen check`` validates a password against them.  Rule values come
from the packaged defaults, an optional ``--config`` YAML file and
``PASSGEN_*`` environment variables, in that order, with command line options
applied last.

Exit codes
----------
0 success
1 password rejected by ``check``
4 configuration error
5 generation exhausted (no valid password within the attempt budget)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .generator import PasswordGenerator
from .rules import RuleSet
from .utils.errors import GenerationExhaustedError, InvalidConfigurationError
from .utils.logging import configure_logging, get_logger

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

logger = get_logger(__name__)

app = typer.Typer(
    name="passgen",
    help="Generate random passwords that satisfy composition rules.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None, verbose: bool) -> ConfigModel:
    try:
        cfg = load_config(config_path)
    except (ValidationError, OSError, ValueError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    configure_logging("DEBUG" if verbose else cfg.logging.level)
    logger.debug("loaded configuration (schema_version=%d)", cfg.schema_version)
    return cfg


def _apply_overrides(
    rules: RuleSet,
    *,
    length: int | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    min_lower: int | None = None,
    min_upper: int | None = None,
    min_numeric: int | None = None,
    min_special: int | None = None,
    special: str | None = None,
    max_consecutive: int | None = None,
    max_attempts: int | None = None,
) -> RuleSet:
    """Return a copy of ``rules`` with command line overrides applied."""

    new_rules = rules.clone()
    if length is not None:
        new_rules.set_exact_length(length)
    elif min_length is not None or max_length is not None:
        new_rules.set_length_range(
            new_rules.min_length if min_length is None else min_length,
            new_rules.max_length if max_length is None else max_length,
        )
    if min_lower is not None:
        new_rules.min_lowercase = min_lower
    if min_upper is not None:
        new_rules.min_uppercase = min_upper
    if min_numeric is not None:
        new_rules.min_numeric = min_numeric
    if min_special is not None:
        new_rules.min_special = min_special
    if special is not None:
        new_rules.special_characters = special
    if max_consecutive is not None:
        new_rules.max_consecutive_identical = max_consecutive
    if max_attempts is not None:
        new_rules.max_attempts = max_attempts
    return new_rules


@app.callback()
def main() -> None:
    """Entry point for the passgen command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of passwords"),
    length: Optional[int] = typer.Option(  # noqa: B008
        None, "--length", help="Exact password length (overrides --min/--max-length)"
    ),
    min_length: Optional[int] = typer.Option(None, "--min-length"),  # noqa: B008
    max_length: Optional[int] = typer.Option(None, "--max-length"),  # noqa: B008
    min_lower: Optional[int] = typer.Option(None, "--min-lower"),  # noqa: B008
    min_upper: Optional[int] = typer.Option(None, "--min-upper"),  # noqa: B008
    min_numeric: Optional[int] = typer.Option(None, "--min-numeric"),  # noqa: B008
    min_special: Optional[int] = typer.Option(None, "--min-special"),  # noqa: B008
    special: Optional[str] = typer.Option(  # noqa: B008
        None, "--special", help="Characters counted as special"
    ),
    max_consecutive: Optional[int] = typer.Option(  # noqa: B008
        None, "--max-consecutive", help="Longest allowed run of identical characters"
    ),
    max_attempts: Optional[int] = typer.Option(None, "--max-attempts"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug logging to stderr"
    ),
) -> None:
    """Print ``count`` passwords, one per line."""

    cfg = _load(config_path, verbose)
    try:
        rules = _apply_overrides(
            cfg.rules.to_rule_set(),
            length=length,
            min_length=min_length,
            max_length=max_length,
            min_lower=min_lower,
            min_upper=min_upper,
            min_numeric=min_numeric,
            min_special=min_special,
            special=special,
            max_consecutive=max_consecutive,
            max_attempts=max_attempts,
        )
    except InvalidConfigurationError as exc:
        _safe_exit(4, str(exc))

    generator = PasswordGenerator(rules)
    try:
        for password in generator.passwords(count):
            typer.echo(password)
    except InvalidConfigurationError as exc:
        _safe_exit(4, str(exc))
    except GenerationExhaustedError as exc:
        _safe_exit(5, str(exc))


@app.command()
def check(
    password: str = typer.Argument(..., help="Password to validate"),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit debug logging to stderr"
    ),
) -> None:
    """Validate ``password`` against the configured rules."""

    cfg = _load(config_path, verbose)
    try:
        rules = cfg.rules.to_rule_set()
    except InvalidConfigurationError as exc:
        _safe_exit(4, str(exc))

    if rules.is_valid(password):
        typer.echo("valid")
        return
    typer.echo("invalid")
    raise typer.Exit(1)
