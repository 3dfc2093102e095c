"""Centralized unit conversion utilities."""

from __future__ import annotations

ML_PER_L: float = 1000.0


def ml_to_l(volume_ml: float) -> float:
    """Convert a volume from mL to L.

    Args:
        volume_ml (float): Volume in millilitres (numerically equal to cm^3).

    Returns:
        float: Volume in litres (numerically equal to dm^3).

    Note:
        Moles are always computed as ``concentration (mol L^-1) * volume (L)``,
        so every volume entering the pH model goes through this conversion.
    """
    return float(volume_ml) / ML_PER_L


def l_to_ml(volume_l: float) -> float:
    """Convert a volume from L back to mL."""
    return float(volume_l) * ML_PER_L
