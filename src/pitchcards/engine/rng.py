from __future__ import annotations

import hashlib
import math
import random


def seeded_rng(seed: int) -> random.Random:
    """Return a private generator for one simulation stage.

    Every engine entry point builds its own stream from an explicit seed;
    nothing here touches the module-level `random` state. The seed is passed as
    its decimal text because `random.Random` drops the sign of an int seed.
    """
    return random.Random(str(seed))


def derive_seed(seed: int, label: str) -> int:
    digest = hashlib.sha256(f"{seed}:{label}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") >> 1


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    # .5 rounds up (towards +inf), unlike round() which rounds to even
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    return round_half_up(value * 10) / 10
