"""Roll and unique-code generation.

The functions here take their random source and clock reading as arguments
so that callers (and tests) control every input. ``IdentifierGenerator``
bundles those inputs for the admission service.
"""

import random
import time
from typing import Callable, Optional

DEFAULT_UNIQUE_CODE_PREFIX = "BVC"
MAX_INITIALS = 4


def current_millis() -> int:
    """Milliseconds since the epoch"""
    return time.time_ns() // 1_000_000


def name_initials(name: str) -> str:
    """Upper-cased first letters of the words in ``name``, at most four"""
    initials = "".join(word[0] for word in (name or "").split())
    return initials.upper()[:MAX_INITIALS]


def generate_roll(join_year: int, rng: random.Random) -> str:
    """Build a ``YY-NNNN`` roll from the join year and a random 4-digit number.

    Not unique on its own; the ``roll`` unique index is what rejects a clash.
    """
    return f"{abs(join_year) % 100:02d}-{rng.randint(1000, 9999)}"


def generate_unique_code(
    name: str,
    timestamp_ms: int,
    rng: random.Random,
    prefix: str = DEFAULT_UNIQUE_CODE_PREFIX,
) -> str:
    """Build ``prefix + initials + last 6 timestamp digits + 3 random digits``."""
    stamp = str(timestamp_ms)[-6:].zfill(6)
    return f"{prefix}{name_initials(name)}{stamp}{rng.randint(100, 999)}"


class IdentifierGenerator:
    """Generates identifiers from an injected random source and clock"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Callable[[], int] = current_millis,
        prefix: str = DEFAULT_UNIQUE_CODE_PREFIX,
    ):
        self.rng = rng or random.Random()
        self.clock = clock
        self.prefix = prefix

    def roll(self, join_year: int) -> str:
        return generate_roll(join_year, self.rng)

    def unique_code(self, seed: str) -> str:
        return generate_unique_code(seed, self.clock(), self.rng, self.prefix)
