from __future__ import annotations

import random
from collections import Counter
from typing import Any

import pytest

import passgen
from passgen.generator import DEFAULT, PasswordGenerator
from passgen.random_source import RandomSource
from passgen.rules import RuleSet
from passgen.utils import constants
from passgen.utils.errors import (
    DestinationLengthError,
    GenerationExhaustedError,
    InvalidConfigurationError,
)


def _class_counts(password: str, special: str) -> Counter[str]:
    counts: Counter[str] = Counter()
    for c in password:
        if c in special:
            counts["special"] += 1
        if c.isdigit():
            counts["numeric"] += 1
        elif c.islower():
            counts["lower"] += 1
        elif c.isupper():
            counts["upper"] += 1
    return counts


def test_default_passwords_are_valid() -> None:
    generator = PasswordGenerator()
    rules = generator.rules
    for _ in range(1000):
        password = generator.generate()
        assert rules.is_valid(password)
        assert rules.min_length <= len(password) <= rules.max_length


def test_generated_passwords_meet_minimums(seeded_source: random.Random) -> None:
    rules = (
        RuleSet()
        .set_length_range(16, 32)
        .set_min_special(3)
        .set_min_numeric(3)
        .set_min_lowercase(3)
        .set_min_uppercase(3)
    )
    generator = PasswordGenerator(random_source=seeded_source)
    for _ in range(200):
        password = generator.generate(rules)
        assert rules.is_valid(password)
        counts = _class_counts(password, rules.special_characters)
        for key in ("special", "numeric", "lower", "upper"):
            assert counts[key] >= 3
        run = max(len(list(g)) for g in _runs(password))
        assert run <= rules.max_consecutive_identical


def _runs(password: str) -> list[str]:
    out: list[str] = []
    for c in password:
        if out and out[-1][0] == c:
            out[-1] += c
        else:
            out.append(c)
    return out


def test_all_minimums_zero_rejected() -> None:
    rules = RuleSet().set_min_special(0).set_min_numeric(0).set_min_lowercase(0).set_min_uppercase(0)
    with pytest.raises(InvalidConfigurationError, match="at least one character class"):
        PasswordGenerator().generate(rules)


def test_buffer_smaller_than_min_length() -> None:
    with pytest.raises(DestinationLengthError, match="too small"):
        PasswordGenerator().generate_into([""] * 2)


def test_buffer_larger_than_max_length() -> None:
    rules = RuleSet().set_length_range(5, 7)
    generator = PasswordGenerator()
    buffer = [""] * 6
    generator.generate_into(buffer, rules)
    assert rules.is_valid("".join(buffer))
    with pytest.raises(DestinationLengthError, match="too large"):
        generator.generate_into([""] * 9, rules)


def test_minimums_exceed_destination() -> None:
    rules = (
        RuleSet()
        .set_exact_length(10)
        .set_min_special(10)
        .set_min_numeric(10)
        .set_min_lowercase(10)
        .set_min_uppercase(10)
    )
    with pytest.raises(InvalidConfigurationError, match="destination too small"):
        PasswordGenerator().generate_into([""] * 10, rules)


def test_empty_special_characters_rejected() -> None:
    rules = RuleSet().set_special_characters("")
    with pytest.raises(InvalidConfigurationError):
        PasswordGenerator().generate(rules)


def test_exact_length_is_fixed(seeded_source: random.Random) -> None:
    generator = PasswordGenerator(random_source=seeded_source)
    rules = RuleSet().set_exact_length(24)
    assert {len(generator.generate(rules)) for _ in range(50)} == {24}


def test_length_within_range(seeded_source: random.Random) -> None:
    generator = PasswordGenerator(random_source=seeded_source)
    rules = RuleSet().set_length_range(8, 12)
    lengths = {len(generator.generate(rules)) for _ in range(300)}
    assert lengths == {8, 9, 10, 11, 12}


def test_get_length_draws_inclusive_range(first_index_source: Any) -> None:
    generator = PasswordGenerator(random_source=first_index_source)
    assert generator.get_length(RuleSet().set_exact_length(7)) == 7
    assert first_index_source.calls == []

    assert generator.get_length(RuleSet().set_length_range(3, 7)) == 3
    assert first_index_source.calls == [(3, 8)]


def test_required_characters_placed_before_fallback(first_index_source: Any) -> None:
    generator = PasswordGenerator(
        random_source=first_index_source, validator=lambda rules, password: True
    )
    password = generator.generate(RuleSet().set_length_range(6, 6))
    # special, numeric, lowercase, uppercase, then the fallback alphabet
    assert password == "!0aAaa"


def test_exhaustion_with_degenerate_source(first_index_source: Any) -> None:
    generator = PasswordGenerator(random_source=first_index_source)
    rules = RuleSet().set_exact_length(16).set_max_attempts(3)
    with pytest.raises(GenerationExhaustedError, match="too many attempts"):
        generator.generate(rules)


def test_exhaustion_calls_validator_max_attempts_times() -> None:
    calls: list[str] = []

    def reject(rules: RuleSet, password: str) -> bool:
        calls.append(password)
        return False

    generator = PasswordGenerator(validator=reject)
    rules = RuleSet().set_max_attempts(10)
    buffer = list("previously-valid-password")[:20]
    with pytest.raises(GenerationExhaustedError):
        generator.generate_into(buffer, rules)
    assert len(calls) == 10
    assert buffer == ["\0"] * 20


def test_zero_attempt_budget() -> None:
    with pytest.raises(GenerationExhaustedError):
        PasswordGenerator().generate(RuleSet().set_max_attempts(0))


def test_failed_preflight_clears_buffer() -> None:
    rules = RuleSet().set_exact_length(3)
    buffer = bytearray(b"abc")
    with pytest.raises(InvalidConfigurationError):
        PasswordGenerator().generate_into(buffer, rules.set_min_special(4))
    assert buffer == bytearray(3)


def test_non_ascii_special_rejected_for_bytearray() -> None:
    rules = RuleSet().set_exact_length(16).set_special_characters("\u00e9")
    buffer = bytearray(b"previously-valid")
    with pytest.raises(InvalidConfigurationError, match="ASCII"):
        PasswordGenerator().generate_into(buffer, rules)
    assert buffer == bytearray(16)


def test_non_ascii_special_allowed_for_list_buffer() -> None:
    rules = RuleSet().set_exact_length(16).set_special_characters("\u00e9")
    buffer = [""] * 16
    PasswordGenerator().generate_into(buffer, rules)
    assert "\u00e9" in buffer
    assert rules.is_valid("".join(buffer))


def test_generate_into_bytearray() -> None:
    buffer = bytearray(20)
    PasswordGenerator().generate_into(buffer)
    password = buffer.decode("ascii")
    assert RuleSet().is_valid(password)


def test_configurator_applies_to_clone() -> None:
    generator = PasswordGenerator()
    password = generator.generate(lambda rules: rules.set_exact_length(30).set_min_numeric(5))
    assert len(password) == 30
    assert sum(c.isdigit() for c in password) >= 5
    assert generator.rules == RuleSet()


def test_configurator_with_buffer() -> None:
    buffer = [""] * 12
    PasswordGenerator().generate_into(buffer, lambda rules: rules.set_length_range(10, 12))
    assert RuleSet().set_length_range(10, 12).is_valid("".join(buffer))


def test_invalid_rules_argument() -> None:
    with pytest.raises(TypeError):
        PasswordGenerator().generate(42)  # type: ignore[arg-type]


def test_passwords_are_independent() -> None:
    generator = PasswordGenerator()
    passwords = {generator.generate() for _ in range(5)}
    assert len(passwords) == 5


def test_iteration_stops_after_max_enumerations() -> None:
    generator = PasswordGenerator(RuleSet().set_max_enumerations(10))
    passwords = list(generator)
    assert len(passwords) == 10
    assert all(generator.rules.is_valid(p) for p in passwords)


def test_passwords_count_overrides_enumerations() -> None:
    generator = PasswordGenerator()
    assert len(list(generator.passwords(3))) == 3
    assert list(generator.passwords(0)) == []


def test_default_random_source_is_secure() -> None:
    source = PasswordGenerator().random_source
    assert isinstance(source, random.SystemRandom)
    assert isinstance(source, RandomSource)


def test_module_level_helpers() -> None:
    assert DEFAULT.rules.is_valid(passgen.generate())
    buffer = [""] * 16
    passgen.generate_into(buffer)
    assert DEFAULT.rules.is_valid("".join(buffer))


def test_fallback_alphabet_only_uses_enabled_classes(seeded_source: random.Random) -> None:
    rules = RuleSet().set_exact_length(40).set_min_special(0).set_min_uppercase(0)
    generator = PasswordGenerator(random_source=seeded_source)
    allowed = set(constants.LOWERCASE_CHARACTERS + constants.NUMERIC_CHARACTERS)
    for _ in range(50):
        assert set(generator.generate(rules)) <= allowed
