"""Optional strict checks for titration systems and titrant volumes.

The pH model itself never validates; degenerate input produces ``inf`` or
``nan``. Callers that prefer a clear failure can run these checks first, or
pass ``strict=True`` to ``compute_ph``/``evaluate``. Valid input yields
exactly the same pH either way.
"""

from __future__ import annotations

import math

from endpoint.chemistry.species import (
    StrongAcid,
    StrongBase,
    TitrationSystem,
    WeakAcid,
    WeakBase,
)


class InvalidSystemError(ValueError):
    """Raised when a titration system or volume is physically invalid."""


def _as_float(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be numeric, got {type(value)}")
    v = float(value)
    if not math.isfinite(v):
        raise InvalidSystemError(f"{name} must be finite, got {v}")
    return v


def _require_positive(value: object, name: str) -> float:
    v = _as_float(value, name)
    if v <= 0:
        raise InvalidSystemError(f"{name} must be positive, got {v}")
    return v


def _require_non_negative(value: object, name: str) -> float:
    v = _as_float(value, name)
    if v < 0:
        raise InvalidSystemError(f"{name} cannot be negative, got {v}")
    return v


def validate_volume(volume_ml: object, name: str = "Titrant volume added") -> float:
    """Check that a volume in mL is numeric, finite and non-negative.

    Args:
        volume_ml: Candidate volume in mL.
        name (str, optional): Label used in error messages.

    Returns:
        float: The volume as a float.

    Raises:
        TypeError: If ``volume_ml`` is not numeric.
        InvalidSystemError: If the volume is negative or non-finite.
    """
    return _require_non_negative(volume_ml, name)


def validate_system(system: TitrationSystem) -> TitrationSystem:
    """Check a titration system before it is handed to the pH model.

    Concentrations and dissociation constants must be strictly positive and
    finite; the analyte volume must be non-negative. The analyte must be an
    acid and the titrant a base.

    Args:
        system (TitrationSystem): System to check.

    Returns:
        TitrationSystem: ``system`` unchanged, for chaining.

    Raises:
        TypeError: If a species has the wrong kind or a non-numeric field.
        InvalidSystemError: If any value is non-positive or non-finite.
    """
    analyte, titrant = system.analyte, system.titrant
    if not isinstance(analyte, (StrongAcid, WeakAcid)):
        raise TypeError(f"Analyte must be a strong or weak acid, got {type(analyte)}")
    if not isinstance(titrant, (StrongBase, WeakBase)):
        raise TypeError(f"Titrant must be a strong or weak base, got {type(titrant)}")

    _require_positive(analyte.concentration, "Analyte concentration")
    _require_non_negative(analyte.volume, "Analyte volume")
    _require_positive(titrant.concentration, "Titrant concentration")
    if isinstance(analyte, WeakAcid):
        _require_positive(analyte.ka, "Ka")
    if isinstance(titrant, WeakBase):
        _require_positive(titrant.kb, "Kb")
    return system
