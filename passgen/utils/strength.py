"""
Entropy-based password strength estimation.
"""

import math
from enum import Enum
from typing import NamedTuple

MEDIUM_THRESHOLD_BITS = 50.0
STRONG_THRESHOLD_BITS = 80.0


class Strength(Enum):
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


class StrengthReport(NamedTuple):
    """Entropy and tier for a (pool size, length) pair."""
    entropy_bits: float
    tier: Strength


def estimate_strength(pool_size: int, length: int) -> StrengthReport:
    """
    Estimate strength as ``length * log2(pool_size)`` bits.

    Thresholds are inclusive at the lower edge of each higher tier:
    below 50 bits is weak, 50 up to 80 is medium, 80 and above is strong.
    """
    entropy = length * math.log2(pool_size) if pool_size > 0 else 0.0

    if entropy < MEDIUM_THRESHOLD_BITS:
        tier = Strength.WEAK
    elif entropy < STRONG_THRESHOLD_BITS:
        tier = Strength.MEDIUM
    else:
        tier = Strength.STRONG

    return StrengthReport(entropy, tier)
