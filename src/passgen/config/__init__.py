"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. ``PASSGEN_*`` environment variables (e.g. ``PASSGEN_MIN_LENGTH``)
"""

from .schema import ConfigModel, LoggingSettings, RuleSettings, load_config

__all__ = ["ConfigModel", "LoggingSettings", "RuleSettings", "load_config"]
