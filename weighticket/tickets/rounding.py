"""Rounding policy for mass and currency figures."""

import math
import sys

from weighticket.config.constants import KG_PER_TON, MASS_DECIMALS

# Compensates for binary representation error (1.005 -> 1.01)
EPSILON = sys.float_info.epsilon


def round_to(value: float, decimals: int = 2) -> float:
    """Round half away from zero to ``decimals`` places.

    The float epsilon is added to the magnitude before scaling, so values
    stored just below a half (1.005 is 1.00499999...) still round up.
    """
    factor = 10 ** decimals
    scaled = (abs(float(value)) + EPSILON) * factor
    return math.copysign(math.floor(scaled + 0.5), value) / factor


def ton_to_kg(ton: float, decimals: int = MASS_DECIMALS) -> float:
    """Convert tons to kilograms, rounded to ``decimals`` places."""
    return round_to(float(ton) * KG_PER_TON, decimals)


def round_to_kg(value: float) -> int:
    """Whole kilograms for printed slips."""
    return int(round_to(value, 0))
