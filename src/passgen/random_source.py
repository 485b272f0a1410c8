"""Random sources used for password generation.

Every draw made by :class:`~passgen.generator.PasswordGenerator` (length
selection, character sampling and shuffle swaps) goes through a
:class:`RandomSource`.  The default source is :class:`secrets.SystemRandom`,
backed by the operating system CSPRNG, which yields unbiased draws from
``randrange``.

Security notes
--------------
Seedable generators such as :class:`random.Random` satisfy the protocol and
are useful for reproducible tests, but they are predictable and must never be
used to produce real passwords.
"""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

__all__ = ["RandomSource", "default_random_source"]


@runtime_checkable
class RandomSource(Protocol):
    """Protocol for uniform integer sources."""

    def randrange(self, start: int, stop: int | None = ..., step: int = ...) -> int:
        """Return a uniformly distributed integer in ``[start, stop)``."""

        ...


def default_random_source() -> RandomSource:
    """Return a new cryptographically secure random source."""

    return secrets.SystemRandom()
