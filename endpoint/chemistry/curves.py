"""Evaluate a full simulated titration curve for one system.

Used to draw the reveal figure after a round and to export reference curves.
Each volume is evaluated independently with ``compute_ph``.
"""

from __future__ import annotations

import warnings
from typing import Iterable

import numpy as np
import pandas as pd

from endpoint.chemistry.ph_model import compute_ph
from endpoint.chemistry.species import TitrationSystem
from endpoint.config import PH_DISPLAY_RANGE

VOLUME_COL = "Volume (mL)"
PH_COL = "pH"
PH_DISPLAY_COL = "pH (display)"

DEFAULT_CURVE_POINTS = 201
DEFAULT_RANGE_FACTOR = 2.0


def titration_curve(
    system: TitrationSystem,
    volumes_ml: Iterable[float] | None = None,
    *,
    max_volume_ml: float | None = None,
    points: int = DEFAULT_CURVE_POINTS,
) -> pd.DataFrame:
    """Return simulated pH against titrant volume.

    Args:
        system (TitrationSystem): Analyte/titrant pairing.
        volumes_ml (Iterable[float], optional): Explicit titrant volumes in
            mL. When omitted, ``points`` evenly spaced volumes from 0 to
            ``max_volume_ml`` are used.
        max_volume_ml (float, optional): Upper end of the default grid.
            Defaults to twice the equivalence volume.
        points (int, optional): Grid size for the default grid.

    Returns:
        pandas.DataFrame: Columns ``Volume (mL)``, ``pH`` (model output) and
        ``pH (display)`` (clipped to [0, 14]).

    Raises:
        ValueError: If the grid cannot be built (fewer than two points, or a
            non-finite/non-positive upper volume).
    """
    if volumes_ml is None:
        if points < 2:
            raise ValueError(f"points must be >= 2, got {points}")
        upper = (
            DEFAULT_RANGE_FACTOR * system.equivalence_volume_ml
            if max_volume_ml is None
            else float(max_volume_ml)
        )
        if not np.isfinite(upper) or upper <= 0:
            raise ValueError(
                f"Curve upper volume must be positive and finite, got {upper}"
            )
        volumes = np.linspace(0.0, upper, int(points))
    else:
        volumes = np.asarray(list(volumes_ml), dtype=float)

    ph = np.array([compute_ph(system, float(v)) for v in volumes], dtype=float)

    n_bad = int(np.count_nonzero(~np.isfinite(ph)))
    if n_bad:
        warnings.warn(
            f"Simulated curve contains {n_bad} non-finite pH values; "
            f"check the system's concentrations and volumes.",
            UserWarning,
            stacklevel=2,
        )

    lo, hi = PH_DISPLAY_RANGE
    return pd.DataFrame(
        {
            VOLUME_COL: volumes,
            PH_COL: ph,
            PH_DISPLAY_COL: np.clip(ph, lo, hi),
        }
    )
