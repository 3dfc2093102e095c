"""Acid-base indicators and pH-to-colour mapping.

An indicator changes colour across a transition window ``[low, high]``. Below
the window the solution shows the first colour stop, above it the last one.
Inside the window the colour is interpolated linearly through the middle stop
at the window midpoint (two linear segments).

Indicators may carry an ``override`` hook that is consulted before the general
mapping. Phenolphthalein uses it to stay near-colourless in acidic solution.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

COLOR_HEX = {
    "red": "#ef4444",
    "orange": "#f59e0b",
    "yellow": "#facc15",
    "green": "#22c55e",
    "blue": "#3b82f6",
    "pink": "#f472b6",
    "fuchsia": "#d946ef",
    "colorless": "#dbeafe",
}
FALLBACK_HEX = "#60a5fa"
COLORLESS_HEX = COLOR_HEX["colorless"]

ColorOverride = Callable[["Indicator", float], Optional[str]]


@dataclass(frozen=True)
class Indicator:
    """Immutable indicator reference data.

    Attributes:
        name: Display name.
        low: pH at which the colour change starts.
        high: pH at which the colour change ends.
        colors: Two or three named colour stops, acidic to basic.
        override: Optional hook ``(indicator, pH) -> hex | None``. A non-None
            return value replaces the general mapping for that pH.
    """

    name: str
    low: float
    high: float
    colors: Tuple[str, ...]
    override: Optional[ColorOverride] = None

    @property
    def first_color(self) -> str:
        return self.colors[0]

    @property
    def middle_color(self) -> str:
        return self.colors[1] if len(self.colors) > 1 else self.colors[0]

    @property
    def last_color(self) -> str:
        return self.colors[2] if len(self.colors) > 2 else self.middle_color


def colorless_below(threshold: float, color: str = COLORLESS_HEX) -> ColorOverride:
    """Return an override that shows ``color`` for any pH below ``threshold``."""

    def _override(indicator: Indicator, pH: float) -> Optional[str]:
        return color if pH < threshold else None

    return _override


def pick_color(name: str) -> str:
    """Return the hex code for a named colour, or the fallback blue."""
    return COLOR_HEX.get(name, FALLBACK_HEX)


def _channels(hex_color: str) -> Tuple[int, int, int]:
    value = int(hex_color[1:], 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def mix_colors(hex1: str, hex2: str, t: float) -> str:
    """Blend two ``#rrggbb`` colours; ``t = 0`` gives ``hex1``, ``t = 1`` ``hex2``.

    Channel values are truncated toward zero, not rounded.
    """
    a = _channels(hex1)
    b = _channels(hex2)
    mixed = [int(ca * (1 - t) + cb * t) for ca, cb in zip(a, b)]
    return "#{:02x}{:02x}{:02x}".format(*mixed)


def color_for_ph(pH: float, indicator: Indicator) -> str:
    """Map a pH value through an indicator's transition window.

    Args:
        pH (float): Solution pH, normally already clamped to [0, 14] for
            display.
        indicator (Indicator): Indicator in the flask.

    Returns:
        str: ``#rrggbb`` colour of the solution.

    Raises:
        ValueError: If ``pH`` is not finite.

    Example:
        For bromothymol blue (6.0-7.6, yellow/green/blue), pH 6.0 is yellow,
        6.8 is green, 7.6 and above is blue, and 6.4 is halfway between
        yellow and green.
    """
    if indicator.override is not None:
        special = indicator.override(indicator, pH)
        if special is not None:
            return special

    if not math.isfinite(pH):
        raise ValueError(f"pH must be finite to map a colour, got {pH}")

    t = (pH - indicator.low) / (indicator.high - indicator.low)
    if t <= 0:
        return pick_color(indicator.first_color)
    if t >= 1:
        return pick_color(indicator.last_color)

    first = pick_color(indicator.first_color)
    mid = pick_color(indicator.middle_color)
    last = pick_color(indicator.last_color)
    if t < 0.5:
        return mix_colors(first, mid, t * 2)
    return mix_colors(mid, last, (t - 0.5) * 2)


METHYL_ORANGE = Indicator("Methyl Orange", 3.1, 4.4, ("red", "orange", "yellow"))
METHYL_RED = Indicator("Methyl Red", 4.4, 6.2, ("red", "orange", "yellow"))
BROMOTHYMOL_BLUE = Indicator("Bromothymol Blue", 6.0, 7.6, ("yellow", "green", "blue"))
PHENOLPHTHALEIN = Indicator(
    "Phenolphthalein",
    8.2,
    10.0,
    ("colorless", "pink", "fuchsia"),
    override=colorless_below(8.2),
)
THYMOL_BLUE = Indicator("Thymol Blue", 1.2, 2.8, ("red", "orange", "yellow"))

INDICATORS: Tuple[Indicator, ...] = (
    METHYL_ORANGE,
    METHYL_RED,
    BROMOTHYMOL_BLUE,
    PHENOLPHTHALEIN,
    THYMOL_BLUE,
)


def find_indicator(name: str) -> Indicator:
    """Look up a catalogued indicator by name (case-insensitive).

    Raises:
        KeyError: If no indicator has that name.
    """
    for indicator in INDICATORS:
        if indicator.name.lower() == str(name).lower():
            return indicator
    raise KeyError(f"No indicator named '{name}'.")
