import random
import re

import pytest

from college_id.services.identifier_service import (
    IdentifierGenerator,
    generate_roll,
    generate_unique_code,
    name_initials,
)
from tests.conftest import FIXED_MILLIS, ScriptedRandom

ROLL_PATTERN = re.compile(r"^\d{2}-\d{4}$")
UNIQUE_CODE_PATTERN = re.compile(r"^BVC[A-Z]{0,4}\d{6}\d{3}$")

pytestmark = pytest.mark.unit


class TestGenerateRoll:
    """Roll shape and year prefix."""

    def test_roll_uses_last_two_digits_of_join_year(self):
        assert generate_roll(2025, ScriptedRandom([4321])) == "25-4321"

    def test_roll_year_is_zero_padded(self):
        assert generate_roll(2005, ScriptedRandom([1000])) == "05-1000"
        assert generate_roll(2100, ScriptedRandom([9999])) == "00-9999"

    def test_roll_of_negative_year_uses_its_last_two_digits(self):
        assert generate_roll(-2025, ScriptedRandom([5653])) == "25-5653"

    @pytest.mark.parametrize("join_year", [1999, 2000, 2023, 2025, 2031])
    def test_roll_matches_pattern_for_random_draws(self, join_year):
        rng = random.Random(join_year)
        for _ in range(50):
            roll = generate_roll(join_year, rng)
            assert ROLL_PATTERN.match(roll)
            assert roll[:2] == str(join_year)[-2:]


class TestGenerateUniqueCode:
    """Prefix, initials, timestamp and random parts."""

    def test_unique_code_layout(self):
        code = generate_unique_code("Asha Rao", FIXED_MILLIS, ScriptedRandom([512]))
        assert code == "BVCAR123456512"

    def test_initials_capped_at_four(self):
        assert name_initials("alpha beta gamma delta epsilon") == "ABGD"

    def test_initials_ignore_repeated_whitespace(self):
        assert name_initials("  asha   rao ") == "AR"

    def test_empty_name_has_no_initials(self):
        code = generate_unique_code("", FIXED_MILLIS, ScriptedRandom([100]))
        assert code == "BVC123456100"

    def test_short_timestamp_is_zero_padded(self):
        code = generate_unique_code("Ravi", 42, ScriptedRandom([999]))
        assert code == "BVCR000042999"

    def test_custom_prefix(self):
        code = generate_unique_code("Ravi", FIXED_MILLIS, ScriptedRandom([345]), prefix="XYZ")
        assert code == "XYZR123456345"

    @pytest.mark.parametrize(
        "name",
        ["Asha Rao", "venkata sai krishna reddy kumar", "M", "Lakshmi  Devi"],
    )
    def test_unique_code_matches_pattern(self, name):
        rng = random.Random(7)
        for _ in range(20):
            assert UNIQUE_CODE_PATTERN.match(generate_unique_code(name, FIXED_MILLIS, rng))


class TestIdentifierGenerator:
    def test_generator_reads_clock_on_every_call(self):
        ticks = iter([1000000111111, 1000000222222])
        generator = IdentifierGenerator(
            rng=ScriptedRandom([100, 200]), clock=lambda: next(ticks)
        )
        assert generator.unique_code("Asha") == "BVCA111111100"
        assert generator.unique_code("Asha") == "BVCA222222200"

    def test_generator_roll(self):
        generator = IdentifierGenerator(rng=ScriptedRandom([7777]))
        assert generator.roll(2024) == "24-7777"
