"""
Harmony generation: derive related colors from a base color.

Each ``HarmonyMode`` has exactly one rule in ``HARMONY_RULES``. A rule maps
(base HSL, 1-based index, random source) to the hex color for that index.
``generate`` keeps the base color first, then orders the remaining colors:
shuffled for every mode except Monochromatic, which is sorted by descending
luminance.

Randomness always comes from an injected ``random.Random`` so callers (and
tests) control it; ``None`` means a freshly seeded generator.
"""

import random
from enum import Enum
from typing import Callable, Dict, List, Optional

from loguru import logger

from .conversions import HSL, hex_to_hsl, hsl_to_hex, normalize_hex, rotate_hue
from .naming import name_for
from .perception import luminance


class HarmonyMode(str, Enum):
    """Supported harmony relationships."""
    RANDOM = "Random"
    ANALOGOUS = "Analogous"
    MONOCHROMATIC = "Monochromatic"
    TRIADIC = "Triadic"
    COMPLEMENTARY = "Complementary"

    @classmethod
    def parse(cls, value) -> "HarmonyMode":
        """Accept a member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if value.lower() in (mode.value.lower(), mode.name.lower()):
                    return mode
        raise ValueError(f"Unknown harmony mode: {value!r}")


Rule = Callable[[HSL, int, random.Random], str]


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def random_hex(rng: Optional[random.Random] = None) -> str:
    """Uniformly random 24-bit color as ``#RRGGBB``."""
    rng = rng or random.Random()
    return f"#{rng.randrange(1 << 24):06X}"


def initial_palette(count: int, rng: Optional[random.Random] = None) -> List[Dict[str, str]]:
    """Fresh random colors with their names, used to seed a session."""
    rng = rng or random.Random()
    palette = []
    for _ in range(count):
        hex_color = random_hex(rng)
        palette.append({"hex": hex_color, "name": name_for(hex_color)})
    return palette


def _random_rule(base: HSL, i: int, rng: random.Random) -> str:
    return random_hex(rng)


def _analogous_rule(base: HSL, i: int, rng: random.Random) -> str:
    # even index steps forward, odd index steps back
    sign = 1 if i % 2 == 0 else -1
    h = rotate_hue(base.h, 30 * i * sign)
    s = _clamp(base.s + (rng.random() * 20 - 10), 10, 100)
    return hsl_to_hex(HSL(h, s, base.l))


def _monochromatic_rule(base: HSL, i: int, rng: random.Random) -> str:
    s = _clamp(rng.random() * 100, 20, 100)
    l = _clamp(rng.random() * 100, 10, 90)  # noqa: E741
    return hsl_to_hex(HSL(base.h, s, l))


def _triadic_rule(base: HSL, i: int, rng: random.Random) -> str:
    return hsl_to_hex(HSL(rotate_hue(base.h, 120 * i), base.s, base.l))


def _complementary_rule(base: HSL, i: int, rng: random.Random) -> str:
    complement = rotate_hue(base.h, 180)
    if i == 1:
        return hsl_to_hex(HSL(complement, base.s, base.l))

    h = base.h if i % 2 == 0 else complement
    l = _clamp(rng.random() * 100, 20, 80)  # noqa: E741
    return hsl_to_hex(HSL(h, base.s, l))


HARMONY_RULES: Dict[HarmonyMode, Rule] = {
    HarmonyMode.RANDOM: _random_rule,
    HarmonyMode.ANALOGOUS: _analogous_rule,
    HarmonyMode.MONOCHROMATIC: _monochromatic_rule,
    HarmonyMode.TRIADIC: _triadic_rule,
    HarmonyMode.COMPLEMENTARY: _complementary_rule,
}


def generate(base_color: str, mode, count: int,
             rng: Optional[random.Random] = None) -> List[str]:
    """
    Generate ``count`` colors related to ``base_color``.

    Args:
        base_color: Base color as #RGB or #RRGGBB
        mode: A HarmonyMode (or its name/value)
        count: Number of colors to return, >= 1
        rng: Random source; a fresh one when omitted

    Returns:
        List of canonical hex strings; element 0 is the base color

    Raises:
        InvalidColorFormat: if base_color is malformed
        ValueError: for an unknown mode or count < 1
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")

    mode = HarmonyMode.parse(mode)
    rng = rng or random.Random()
    base_hex = normalize_hex(base_color)
    base = hex_to_hsl(base_hex)
    rule = HARMONY_RULES[mode]

    derived = [rule(base, i, rng) for i in range(1, count)]

    if mode is HarmonyMode.MONOCHROMATIC:
        derived.sort(key=luminance, reverse=True)
    else:
        rng.shuffle(derived)

    logger.debug(f"Generated {count} {mode.value} colors from {base_hex}")
    return [base_hex] + derived


def pad_palette(colors: List[str], target: int,
                rng: Optional[random.Random] = None) -> List[str]:
    """Fill a short color list up to ``target`` with independent random draws."""
    if len(colors) >= target:
        return list(colors)

    rng = rng or random.Random()
    missing = target - len(colors)
    logger.warning(f"Harmony produced {len(colors)} of {target} colors; padding {missing} at random")
    return list(colors) + [random_hex(rng) for _ in range(missing)]
