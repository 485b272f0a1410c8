"""Typed configuration schema and loader for the passgen package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint, model_validator

from passgen.rules import RuleSet

ENV_PREFIX = "PASSGEN_"
LOG_LEVEL_ENV = ENV_PREFIX + "LOG_LEVEL"

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class RuleSettings(BaseModel):
    """Password composition rules as read from configuration."""

    min_length: conint(ge=0)
    max_length: conint(ge=0)
    max_consecutive_identical: conint(ge=0)
    min_lowercase: conint(ge=0)
    min_uppercase: conint(ge=0)
    min_numeric: conint(ge=0)
    min_special: conint(ge=0)
    special_characters: str | None = None
    max_attempts: conint(ge=0)
    max_enumerations: conint(ge=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def check_length_range(self) -> RuleSettings:
        if self.min_length > self.max_length:
            raise ValueError(
                f"min_length ({self.min_length}) cannot be greater than "
                f"max_length ({self.max_length})"
            )
        return self

    def to_rule_set(self) -> RuleSet:
        """Bind these settings onto a fresh :class:`RuleSet` through its setters."""

        return (
            RuleSet()
            .set_length_range(self.min_length, self.max_length)
            .set_max_consecutive_identical(self.max_consecutive_identical)
            .set_min_lowercase(self.min_lowercase)
            .set_min_uppercase(self.min_uppercase)
            .set_min_numeric(self.min_numeric)
            .set_min_special(self.min_special)
            .set_special_characters(self.special_characters)
            .set_max_attempts(self.max_attempts)
            .set_max_enumerations(self.max_enumerations)
        )

    @classmethod
    def from_rule_set(cls, rules: RuleSet) -> RuleSettings:
        """Capture the current values of ``rules``."""

        return cls(
            min_length=rules.min_length,
            max_length=rules.max_length,
            max_consecutive_identical=rules.max_consecutive_identical,
            min_lowercase=rules.min_lowercase,
            min_uppercase=rules.min_uppercase,
            min_numeric=rules.min_numeric,
            min_special=rules.min_special,
            special_characters=rules.special_characters,
            max_attempts=rules.max_attempts,
            max_enumerations=rules.max_enumerations,
        )


class LoggingSettings(BaseModel):
    """Logging behaviour for the command line interface."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    rules: RuleSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``PASSGEN_*`` overrides from ``environ`` as a config mapping.

    Each rule field maps to ``PASSGEN_<FIELD>`` (``PASSGEN_MIN_LENGTH``,
    ``PASSGEN_SPECIAL_CHARACTERS``, ...).  Values are left as strings for
    pydantic to coerce.  ``PASSGEN_LOG_LEVEL`` sets ``logging.level``.
    """

    overrides: dict[str, Any] = {}
    rules: dict[str, Any] = {}
    for field in RuleSettings.model_fields:
        name = ENV_PREFIX + field.upper()
        if name in environ:
            rules[field] = environ[name]
    if rules:
        overrides["rules"] = rules
    if LOG_LEVEL_ENV in environ:
        overrides["logging"] = {"level": environ[LOG_LEVEL_ENV].upper()}
    return overrides


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``PASSGEN_*`` environment variables.
    """

    with (
        importlib_resources.files("passgen.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    merged = deep_merge_dicts(merged, env_overrides(environ))

    return ConfigModel.model_validate(merged)


__all__ = [
    "ENV_PREFIX",
    "ConfigModel",
    "RuleSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "env_overrides",
    "load_config",
]
