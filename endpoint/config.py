"""Game-wide constants and the default session configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple

PH_DISPLAY_RANGE: Tuple[float, float] = (0.0, 14.0)
VOLUME_DECIMALS = 3
FLASK_CAPACITY_ML = 80.0
FLASK_LEVEL_RANGE: Tuple[float, float] = (0.15, 0.95)
METER_FALLBACK_ML = 100.0

_DEFAULT_BINDINGS = {
    "a": (1, "add", 0.1),
    "s": (1, "add", 0.5),
    "d": (1, "add", 1.0),
    "g": (1, "add", 2.0),
    "f": (1, "submit", None),
    "j": (2, "add", 0.1),
    "k": (2, "add", 0.5),
    "l": (2, "add", 1.0),
    "h": (2, "add", 2.0),
    ";": (2, "submit", None),
}


@dataclass(frozen=True)
class GameConfig:
    """Settings for one two-player session.

    Attributes:
        player_names: Display names, indexed by player id - 1.
        volume_steps: Burette increments offered on each player's card (mL),
            in the order their keys are listed.
        key_bindings: Key -> ``(player_id, action, volume_ml)``; ``action`` is
            ``"add"`` or ``"submit"``.
        next_round_key: Starts a new round once both players have submitted.
        quit_key: Ends the session.
        flask_capacity_ml: Total volume shown as a full flask.
        flask_level_range: Lower/upper bound of the drawn liquid level.
        meter_fallback_ml: Denominator for the progress meter when the
            equivalence volume is unavailable.
    """

    player_names: Tuple[str, str] = ("Player 1", "Player 2")
    volume_steps: Tuple[float, ...] = (0.1, 0.5, 1.0, 2.0)
    key_bindings: Mapping[str, tuple] = field(
        default_factory=lambda: dict(_DEFAULT_BINDINGS)
    )
    next_round_key: str = "n"
    quit_key: str = "q"
    flask_capacity_ml: float = FLASK_CAPACITY_ML
    flask_level_range: Tuple[float, float] = FLASK_LEVEL_RANGE
    meter_fallback_ml: float = METER_FALLBACK_ML


DEFAULT_CONFIG = GameConfig()
