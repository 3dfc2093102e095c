"""
Acid-base titration chemistry used by the game.

This subpackage is the only part of the project with domain logic: given an
analyte/titrant pairing and a titrant volume it returns an approximate pH and
the equivalence volume.

Modules:
    species:
        Tagged species variants (strong/weak acid, strong/weak base), the
        ``TitrationSystem`` pairing, and the closed ``Regime`` enum.

    ph_model:
        Regime dispatch and the closed-form pH approximations
        (Henderson-Hasselbalch in buffer regions, excess H+/OH- beyond
        equivalence, conjugate hydrolysis at equivalence).

    validation:
        Optional strict checks that reject non-positive concentrations and
        negative volumes with ``InvalidSystemError``.

    curves:
        Evaluation of a full simulated titration curve as a DataFrame.

Design Principle:
    This subpackage has no dependencies on plotting/ or matplotlib, holds no
    state, and performs no I/O.
"""

from .curves import titration_curve
from .ph_model import (
    Region,
    TitrationPoint,
    classify_regime,
    compute_ph,
    equivalence_volume,
    evaluate,
)
from .species import (
    Regime,
    StrongAcid,
    StrongBase,
    TitrationSystem,
    WeakAcid,
    WeakBase,
)
from .validation import InvalidSystemError, validate_system, validate_volume

__all__ = [
    "StrongAcid",
    "WeakAcid",
    "StrongBase",
    "WeakBase",
    "TitrationSystem",
    "Regime",
    "Region",
    "TitrationPoint",
    "classify_regime",
    "compute_ph",
    "equivalence_volume",
    "evaluate",
    "titration_curve",
    "InvalidSystemError",
    "validate_system",
    "validate_volume",
]
