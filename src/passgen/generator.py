"""Random password generation.

:class:`PasswordGenerator` turns a :class:`~passgen.rules.RuleSet` into a
password.  Each call

1. picks a target length (fixed, or uniform in ``[min_length, max_length]``),
2. runs pre-flight checks against the rule set and the destination size,
3. shuffles the fallback alphabet once,
4. repeatedly builds a candidate (required minimum characters first, the
   remainder drawn from the fallback alphabet), shuffles it with
   Fisher-Yates and validates it, until a candidate passes or the attempt
   budget runs out.

Placing the required characters before shuffling means the per-class minimums
always hold; retries only exist to reject candidates whose shuffle produced a
forbidden run of identical characters.

All draws come from an injected :class:`~passgen.random_source.RandomSource`
which defaults to the operating system CSPRNG.  Generators hold no per-call
state and may be shared between threads as long as the rule sets handed to
them are not mutated concurrently.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, MutableSequence
from typing import Union

from .random_source import RandomSource, default_random_source
from .rules import RuleSet, is_valid
from .utils import constants
from .utils.errors import (
    DestinationLengthError,
    GenerationExhaustedError,
    InvalidConfigurationError,
    PasswordGeneratorError,
)
from .utils.logging import get_logger

__all__ = [
    "Buffer",
    "RulesArg",
    "Validator",
    "PasswordGenerator",
    "DEFAULT",
    "generate",
    "generate_into",
]

logger = get_logger(__name__)

Buffer = Union[MutableSequence[str], bytearray]
"""Destination for :meth:`PasswordGenerator.generate_into`."""

RulesArg = Union[RuleSet, Callable[[RuleSet], object], None]
"""A rule set, a configurator applied to a clone of the defaults, or ``None``."""

Validator = Callable[[RuleSet, str], bool]


class PasswordGenerator:
    """Generate random passwords satisfying a :class:`RuleSet`."""

    def __init__(
        self,
        rules: RuleSet | None = None,
        *,
        random_source: RandomSource | None = None,
        validator: Validator | None = None,
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        rules:
            Default rules used when a call does not provide its own.
        random_source:
            Source of uniform integers.  Defaults to
            :func:`~passgen.random_source.default_random_source`.
        validator:
            Callable deciding whether a candidate is acceptable.  Defaults to
            :func:`passgen.rules.is_valid`.
        """

        self.rules: RuleSet = rules if rules is not None else RuleSet()
        self.random_source: RandomSource = (
            random_source if random_source is not None else default_random_source()
        )
        self.validator: Validator = validator if validator is not None else is_valid

    def __repr__(self) -> str:
        return f"PasswordGenerator(rules={self.rules!r})"

    # -- Public API -----------------------------------------------------------

    def generate(self, rules: RulesArg = None) -> str:
        """Return a new password.

        ``rules`` may be ``None`` for the generator defaults, a
        :class:`RuleSet`, or a callable that receives a clone of the defaults
        and mutates it.
        """

        resolved = self._resolve(rules)
        buffer: list[str] = [""] * self.get_length(resolved)
        self._generate_into(resolved, buffer)
        return "".join(buffer)

    def generate_into(self, buffer: Buffer, rules: RulesArg = None) -> None:
        """Write a new password into the fixed-size ``buffer``.

        ``buffer`` is either a mutable sequence of one-character strings or a
        ``bytearray`` receiving ASCII bytes.  Its length is the password
        length and must lie within the rule set's length bounds.  If
        generation fails the buffer is cleared.
        """

        self._generate_into(self._resolve(rules), buffer)

    def passwords(self, count: int | None = None, rules: RulesArg = None) -> Iterator[str]:
        """Lazily yield ``count`` independent passwords.

        ``count`` defaults to the rule set's ``max_enumerations``.
        """

        resolved = self._resolve(rules)
        remaining = resolved.max_enumerations if count is None else count
        while remaining > 0:
            remaining -= 1
            yield self.generate(resolved)

    def __iter__(self) -> Iterator[str]:
        return self.passwords()

    def get_length(self, rules: RuleSet) -> int:
        """Return the length of the next password for ``rules``."""

        if rules.min_length == rules.max_length:
            return rules.min_length
        return self.random_source.randrange(rules.min_length, rules.max_length + 1)

    def shuffle(self, chars: MutableSequence[str]) -> None:
        """Shuffle ``chars`` in place with the Fisher-Yates algorithm."""

        n = len(chars)
        for i in range(n - 1):
            j = self.random_source.randrange(i, n)
            if i == j:
                continue
            chars[i], chars[j] = chars[j], chars[i]

    def shuffled(self, text: str) -> str:
        """Return a shuffled copy of ``text``."""

        chars = list(text)
        self.shuffle(chars)
        return "".join(chars)

    # -- Internal helpers -----------------------------------------------------

    def _resolve(self, rules: RulesArg) -> RuleSet:
        if rules is None:
            return self.rules
        if isinstance(rules, RuleSet):
            return rules
        if callable(rules):
            configured = self.rules.clone()
            rules(configured)
            return configured
        raise TypeError(f"expected RuleSet, callable or None, got {type(rules).__name__}")

    def _choice(self, alphabet: str) -> str:
        return alphabet[self.random_source.randrange(len(alphabet))]

    def _preflight(self, rules: RuleSet, length: int, *, ascii_only: bool = False) -> None:
        if length < rules.min_length:
            raise DestinationLengthError(
                f"the requested password length is too small ({length} < {rules.min_length})"
            )
        if length > rules.max_length:
            raise DestinationLengthError(
                f"the requested password length is too large ({length} > {rules.max_length})"
            )

        required = rules.min_required
        if required == 0:
            raise InvalidConfigurationError(
                "at least one character class must have a minimum greater than zero"
            )
        if required > length:
            raise InvalidConfigurationError(
                f"destination too small for required minimums ({required} > {length})"
            )
        if rules.min_special > 0 and not rules.special_characters:
            raise InvalidConfigurationError(
                "min_special is greater than zero but special_characters is empty"
            )
        if ascii_only and rules.min_special > 0 and not rules.special_characters.isascii():
            raise InvalidConfigurationError(
                "special_characters must be ASCII when writing into a bytearray"
            )

    def _fill(self, rules: RuleSet, fallback: str, chars: list[str]) -> None:
        pos = 0
        for alphabet, count in (
            (rules.special_characters, rules.min_special),
            (constants.NUMERIC_CHARACTERS, rules.min_numeric),
            (constants.LOWERCASE_CHARACTERS, rules.min_lowercase),
            (constants.UPPERCASE_CHARACTERS, rules.min_uppercase),
        ):
            for _ in range(count):
                chars[pos] = self._choice(alphabet)
                pos += 1
        for i in range(pos, len(chars)):
            chars[i] = self._choice(fallback)
        self.shuffle(chars)

    def _generate_into(self, rules: RuleSet, buffer: Buffer) -> None:
        try:
            password = self._generate_password(
                rules, len(buffer), ascii_only=isinstance(buffer, bytearray)
            )
            _commit(buffer, password)
        except PasswordGeneratorError:
            _clear(buffer)
            raise

    def _generate_password(self, rules: RuleSet, length: int, *, ascii_only: bool = False) -> str:
        self._preflight(rules, length, ascii_only=ascii_only)

        fallback = self.shuffled(rules.character_set)
        chars: list[str] = [""] * length

        for attempt in range(1, rules.max_attempts + 1):
            self._fill(rules, fallback, chars)
            candidate = "".join(chars)
            if self.validator(rules, candidate):
                logger.debug("generated %d character password after %d attempt(s)", length, attempt)
                return candidate

        logger.warning(
            "no valid password of length %d after %d attempts", length, rules.max_attempts
        )
        raise GenerationExhaustedError(f"too many attempts ({rules.max_attempts})")


def _commit(buffer: Buffer, password: str) -> None:
    if isinstance(buffer, bytearray):
        buffer[:] = password.encode("ascii")
    else:
        buffer[:] = list(password)


def _clear(buffer: Buffer) -> None:
    if isinstance(buffer, bytearray):
        buffer[:] = bytes(len(buffer))
    else:
        buffer[:] = ["\0"] * len(buffer)


DEFAULT = PasswordGenerator()
"""Shared generator using the default rules."""


def generate(rules: RulesArg = None) -> str:
    """Return a new password from the shared :data:`DEFAULT` generator."""

    return DEFAULT.generate(rules)


def generate_into(buffer: Buffer, rules: RulesArg = None) -> None:
    """Fill ``buffer`` with a new password from the shared :data:`DEFAULT` generator."""

    DEFAULT.generate_into(buffer, rules)
