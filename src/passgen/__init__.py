"""passgen: rule-based random password generation.

The package exposes :class:`RuleSet` for describing password composition rules
and :class:`PasswordGenerator` for producing passwords that satisfy them.  The
command line interface lives in :mod:`passgen.cli`.
"""

from .generator import DEFAULT, PasswordGenerator, generate, generate_into
from .random_source import RandomSource, default_random_source
from .rules import RuleSet, is_valid
from .utils.errors import (
    DestinationLengthError,
    GenerationExhaustedError,
    InvalidConfigurationError,
    LengthRangeError,
    PasswordGeneratorError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT",
    "PasswordGenerator",
    "generate",
    "generate_into",
    "RandomSource",
    "default_random_source",
    "RuleSet",
    "is_valid",
    "PasswordGeneratorError",
    "InvalidConfigurationError",
    "LengthRangeError",
    "DestinationLengthError",
    "GenerationExhaustedError",
    "__version__",
]
