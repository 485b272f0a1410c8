"""Character class alphabets and rule defaults."""

from __future__ import annotations

from typing import Final

__all__ = [
    "LOWERCASE_CHARACTERS",
    "UPPERCASE_CHARACTERS",
    "NUMERIC_CHARACTERS",
    "DEFAULT_SPECIAL_CHARACTERS",
    "DEFAULT_MIN_LENGTH",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_MAX_CONSECUTIVE_IDENTICAL",
    "DEFAULT_MIN_LOWERCASE",
    "DEFAULT_MIN_UPPERCASE",
    "DEFAULT_MIN_NUMERIC",
    "DEFAULT_MIN_SPECIAL",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MAX_ENUMERATIONS",
]

LOWERCASE_CHARACTERS: Final = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE_CHARACTERS: Final = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMERIC_CHARACTERS: Final = "0123456789"
DEFAULT_SPECIAL_CHARACTERS: Final = "!;#$%&()*+,-./:;<=>?@[]^_`{|}~"

DEFAULT_MIN_LENGTH: Final = 16
DEFAULT_MAX_LENGTH: Final = 64
DEFAULT_MAX_CONSECUTIVE_IDENTICAL: Final = 2

DEFAULT_MIN_LOWERCASE: Final = 1
DEFAULT_MIN_UPPERCASE: Final = 1
DEFAULT_MIN_NUMERIC: Final = 1
DEFAULT_MIN_SPECIAL: Final = 1

DEFAULT_MAX_ATTEMPTS: Final = 10000
DEFAULT_MAX_ENUMERATIONS: Final = 100
