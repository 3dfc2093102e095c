"""
A two-player acid-base titration game.

Each player adds titrant to the same analyte, watches the simulated pH and
indicator colour, and submits a guess for the equivalence volume. The closer
guess wins the round.

Modules:
    - chemistry: pH model, equivalence volume, strict validation, curves.
    - indicators: Indicator catalogue and pH-to-colour mapping.
    - reactions: Reaction templates and randomized systems.
    - game: Immutable round state and its transitions.
    - session: Keyboard bindings for two players on one keyboard.
    - reporting: Display values and terminal rendering.
    - output: Round history tables and CSV export.
    - plotting: End-of-round reveal figures.
"""

__version__ = "1.0.0"

from .chemistry import (
    InvalidSystemError,
    StrongAcid,
    StrongBase,
    TitrationSystem,
    WeakAcid,
    WeakBase,
    compute_ph,
    equivalence_volume,
    evaluate,
    titration_curve,
)
from .game import add_volume, decide_winner, start_round, submit
from .indicators import INDICATORS, Indicator, color_for_ph

__all__ = [
    # Chemistry
    "StrongAcid",
    "WeakAcid",
    "StrongBase",
    "WeakBase",
    "TitrationSystem",
    "compute_ph",
    "equivalence_volume",
    "evaluate",
    "titration_curve",
    "InvalidSystemError",
    # Indicators
    "Indicator",
    "INDICATORS",
    "color_for_ph",
    # Rounds
    "start_round",
    "add_volume",
    "submit",
    "decide_winner",
]
