from __future__ import annotations

import random

import pytest


class FirstIndexSource:
    """Random source that always returns the lowest value of the range."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int | None]] = []

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        self.calls.append((start, stop))
        return 0 if stop is None else start


@pytest.fixture
def first_index_source() -> FirstIndexSource:
    return FirstIndexSource()


@pytest.fixture
def seeded_source() -> random.Random:
    # predictable; only suitable for tests
    return random.Random(20231016)
