"""Password composition rules.

A :class:`RuleSet` holds the length bounds, per-class minimum counts and the
consecutive-run cap that a password must satisfy.  Every setter validates
immediately so the ``min_length <= max_length`` invariant is never observable
in a broken state.  Setters exist both as properties and as fluent ``set_*``
methods returning the rule set, which allows chained configuration::

    rules = RuleSet().set_length_range(20, 24).set_min_special(2)

Character classification used by :meth:`RuleSet.is_valid`:

* special: membership in :attr:`RuleSet.special_characters`, tallied
  independently of the other classes;
* numeric, else lowercase, else uppercase: a mutually exclusive cascade.

A caller that places letters or digits in ``special_characters`` therefore
gets those characters counted twice.
"""

from __future__ import annotations

from .utils import constants
from .utils.errors import InvalidConfigurationError, LengthRangeError

__all__ = ["RuleSet", "is_valid"]


def _check_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidConfigurationError(f"{name} cannot be negative, got {value}")
    return value


class RuleSet:
    """Mutable, validated password rules."""

    __slots__ = (
        "_min_length",
        "_max_length",
        "_max_consecutive_identical",
        "_min_lowercase",
        "_min_uppercase",
        "_min_numeric",
        "_min_special",
        "_special_characters",
        "_max_attempts",
        "_max_enumerations",
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> RuleSet:
        """Restore every attribute to its default value."""

        self._min_length = constants.DEFAULT_MIN_LENGTH
        self._max_length = constants.DEFAULT_MAX_LENGTH
        self._max_consecutive_identical = constants.DEFAULT_MAX_CONSECUTIVE_IDENTICAL
        self._min_lowercase = constants.DEFAULT_MIN_LOWERCASE
        self._min_uppercase = constants.DEFAULT_MIN_UPPERCASE
        self._min_numeric = constants.DEFAULT_MIN_NUMERIC
        self._min_special = constants.DEFAULT_MIN_SPECIAL
        self._special_characters: str | None = None
        self._max_attempts = constants.DEFAULT_MAX_ATTEMPTS
        self._max_enumerations = constants.DEFAULT_MAX_ENUMERATIONS
        return self

    def clone(self) -> RuleSet:
        """Return an independent copy of this rule set."""

        other = type(self).__new__(type(self))
        for slot in self.__slots__:
            setattr(other, slot, getattr(self, slot))
        return other

    __copy__ = clone

    def __deepcopy__(self, memo: dict[int, object]) -> RuleSet:
        return self.clone()

    def _key(self) -> tuple[object, ...]:
        return (
            self._min_length,
            self._max_length,
            self._max_consecutive_identical,
            self._min_lowercase,
            self._min_uppercase,
            self._min_numeric,
            self._min_special,
            self.special_characters,
            self._max_attempts,
            self._max_enumerations,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"RuleSet(min_length={self._min_length}, max_length={self._max_length}, "
            f"max_consecutive_identical={self._max_consecutive_identical}, "
            f"min_lowercase={self._min_lowercase}, min_uppercase={self._min_uppercase}, "
            f"min_numeric={self._min_numeric}, min_special={self._min_special}, "
            f"special_characters={self.special_characters!r}, "
            f"max_attempts={self._max_attempts}, max_enumerations={self._max_enumerations})"
        )

    # -- Length bounds --------------------------------------------------------

    @property
    def min_length(self) -> int:
        return self._min_length

    @min_length.setter
    def min_length(self, value: int) -> None:
        _check_count("min_length", value)
        if value > self._max_length:
            raise LengthRangeError(
                f"min_length ({value}) cannot be greater than max_length ({self._max_length})"
            )
        self._min_length = value

    def set_min_length(self, value: int) -> RuleSet:
        self.min_length = value
        return self

    @property
    def max_length(self) -> int:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int) -> None:
        _check_count("max_length", value)
        if value < self._min_length:
            raise LengthRangeError(
                f"max_length ({value}) cannot be less than min_length ({self._min_length})"
            )
        self._max_length = value

    def set_max_length(self, value: int) -> RuleSet:
        self.max_length = value
        return self

    def set_length_range(self, min_length: int, max_length: int) -> RuleSet:
        """Set both length bounds at once.

        Unlike the individual setters, the new bounds are only checked against
        each other, so the range can be moved anywhere in a single call.
        """

        _check_count("min_length", min_length)
        _check_count("max_length", max_length)
        if min_length > max_length:
            raise InvalidConfigurationError(
                f"min_length ({min_length}) cannot be greater than max_length ({max_length})"
            )
        self._min_length = min_length
        self._max_length = max_length
        return self

    @property
    def exact_length(self) -> int | None:
        """The fixed length when both bounds agree, otherwise ``None``."""

        if self._min_length == self._max_length:
            return self._min_length
        return None

    @exact_length.setter
    def exact_length(self, value: int) -> None:
        self.set_length_range(value, value)

    def set_exact_length(self, value: int) -> RuleSet:
        return self.set_length_range(value, value)

    # -- Per-class rules ------------------------------------------------------

    @property
    def max_consecutive_identical(self) -> int:
        return self._max_consecutive_identical

    @max_consecutive_identical.setter
    def max_consecutive_identical(self, value: int) -> None:
        self._max_consecutive_identical = _check_count("max_consecutive_identical", value)

    def set_max_consecutive_identical(self, value: int) -> RuleSet:
        self.max_consecutive_identical = value
        return self

    @property
    def min_lowercase(self) -> int:
        return self._min_lowercase

    @min_lowercase.setter
    def min_lowercase(self, value: int) -> None:
        self._min_lowercase = _check_count("min_lowercase", value)

    def set_min_lowercase(self, value: int) -> RuleSet:
        self.min_lowercase = value
        return self

    @property
    def min_uppercase(self) -> int:
        return self._min_uppercase

    @min_uppercase.setter
    def min_uppercase(self, value: int) -> None:
        self._min_uppercase = _check_count("min_uppercase", value)

    def set_min_uppercase(self, value: int) -> RuleSet:
        self.min_uppercase = value
        return self

    @property
    def min_numeric(self) -> int:
        return self._min_numeric

    @min_numeric.setter
    def min_numeric(self, value: int) -> None:
        self._min_numeric = _check_count("min_numeric", value)

    def set_min_numeric(self, value: int) -> RuleSet:
        self.min_numeric = value
        return self

    @property
    def min_special(self) -> int:
        return self._min_special

    @min_special.setter
    def min_special(self, value: int) -> None:
        self._min_special = _check_count("min_special", value)

    def set_min_special(self, value: int) -> RuleSet:
        self.min_special = value
        return self

    @property
    def special_characters(self) -> str:
        """Characters counted as special; ``None`` restores the default set."""

        if self._special_characters is None:
            return constants.DEFAULT_SPECIAL_CHARACTERS
        return self._special_characters

    @special_characters.setter
    def special_characters(self, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidConfigurationError(
                f"special_characters must be a string, got {type(value).__name__}"
            )
        self._special_characters = value

    def set_special_characters(self, value: str | None) -> RuleSet:
        self.special_characters = value
        return self

    @property
    def min_required(self) -> int:
        """Total number of characters guaranteed by the per-class minimums."""

        return self._min_special + self._min_numeric + self._min_lowercase + self._min_uppercase

    # -- Generation budget ----------------------------------------------------

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @max_attempts.setter
    def max_attempts(self, value: int) -> None:
        self._max_attempts = _check_count("max_attempts", value)

    def set_max_attempts(self, value: int) -> RuleSet:
        self.max_attempts = value
        return self

    @property
    def max_enumerations(self) -> int:
        return self._max_enumerations

    @max_enumerations.setter
    def max_enumerations(self, value: int) -> None:
        self._max_enumerations = _check_count("max_enumerations", value)

    def set_max_enumerations(self, value: int) -> RuleSet:
        self.max_enumerations = value
        return self

    # -- Derived data ---------------------------------------------------------

    @property
    def character_set(self) -> str:
        """Alphabet of every class whose minimum is greater than zero.

        Classes are concatenated in the order lowercase, uppercase, numeric,
        special.  Positions beyond the guaranteed minimums are filled from
        this alphabet only.
        """

        parts: list[str] = []
        if self._min_lowercase > 0:
            parts.append(constants.LOWERCASE_CHARACTERS)
        if self._min_uppercase > 0:
            parts.append(constants.UPPERCASE_CHARACTERS)
        if self._min_numeric > 0:
            parts.append(constants.NUMERIC_CHARACTERS)
        if self._min_special > 0:
            parts.append(self.special_characters)
        return "".join(parts)

    def _run_limit(self) -> int:
        # zero and one both forbid two adjacent identical characters
        return max(self._max_consecutive_identical, 1)

    def is_valid(self, password: str) -> bool:
        """Return whether ``password`` satisfies every rule of this rule set."""

        if len(password) < self._min_length or len(password) > self._max_length:
            return False

        special = self.special_characters
        limit = self._run_limit()
        count_special = count_numeric = count_lowercase = count_uppercase = 0
        run = 0
        prev: str | None = None

        for c in password:
            run = run + 1 if c == prev else 1
            if run > limit:
                return False
            prev = c

            # special may overlap with numeric and alpha
            if c in special:
                count_special += 1

            if c.isnumeric():
                count_numeric += 1
            elif c.islower():
                count_lowercase += 1
            elif c.isupper():
                count_uppercase += 1

        return (
            count_special >= self._min_special
            and count_numeric >= self._min_numeric
            and count_lowercase >= self._min_lowercase
            and count_uppercase >= self._min_uppercase
        )


def is_valid(rules: RuleSet, password: str) -> bool:
    """Validate an externally supplied ``password`` against ``rules``."""

    return rules.is_valid(password)
