"""Approximate pH of an acid analyte during titration with a base.

Every query converts volumes from mL to L and works in moles:

    n_A = C_A * V_A          (fixed for the system)
    n_T = C_T * V_added      (varies with the query)
    V_total = V_A + V_added

and then picks one of four closed-form approximations according to the
analyte/titrant pairing (``Regime``):

    Strong acid / strong base:
        excess H+ before equivalence, excess OH- after, exactly 7 at n_T = n_A.

    Weak acid / strong base:
        pure weak acid at n_T = 0 ([H+] = sqrt(Ka C_A)), Henderson-Hasselbalch
        buffer before equivalence, excess OH- after, conjugate-base hydrolysis
        at equivalence.

    Strong acid / weak base:
        mirror of the weak acid case with pKa = 14 - pKb. The n_T = 0 branch is
        a special-cased limit, 0.5 * (-log10 C_A), not the general strong-acid
        formula; it is kept as-is.

    Weak acid / weak base:
        pure weak acid at n_T = 0, 7 + (pKa - pKb)/2 at equivalence, buffer
        before, and a crude excess-base expression after equivalence whose log
        argument is guarded by 1e-9.

The model does not validate its inputs. Zero or negative concentrations and
volumes propagate as ``inf``/``nan`` following IEEE logarithm semantics; use
``strict=True`` (see ``endpoint.chemistry.validation``) to reject them instead.
Output is not clamped to [0, 14]; clamping is a display concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict

import numpy as np

from endpoint.chemistry.species import Regime, TitrationSystem
from endpoint.chemistry.validation import validate_system, validate_volume
from endpoint.units import ml_to_l

WATER_KW = 1e-14
PKW = 14.0
NEUTRAL_PH = 7.0
LOG_GUARD = 1e-9


class Region(Enum):
    """Position of a query relative to the equivalence point."""

    INITIAL = "initial"
    BEFORE_EQUIVALENCE = "before_equivalence"
    EQUIVALENCE = "equivalence"
    AFTER_EQUIVALENCE = "after_equivalence"


@dataclass(frozen=True)
class TitrationPoint:
    """Result of evaluating one system at one titrant volume."""

    volume_ml: float
    ph: float
    equivalence_volume_ml: float
    regime: Regime | None
    region: Region


@dataclass(frozen=True)
class _Amounts:
    analyte_concentration: np.float64
    analyte_moles: np.float64
    titrant_moles: np.float64
    total_volume_l: np.float64


def _amounts(system: TitrationSystem, volume_ml: float) -> _Amounts:
    va = np.float64(ml_to_l(system.analyte.volume))
    vt = np.float64(ml_to_l(volume_ml))
    ca = np.float64(system.analyte.concentration)
    ct = np.float64(system.titrant.concentration)
    return _Amounts(
        analyte_concentration=ca,
        analyte_moles=ca * va,
        titrant_moles=ct * vt,
        total_volume_l=va + vt,
    )


def _region(amt: _Amounts) -> Region:
    n_a, n_t = amt.analyte_moles, amt.titrant_moles
    if n_t == 0:
        return Region.INITIAL
    if n_t < n_a:
        return Region.BEFORE_EQUIVALENCE
    if n_t > n_a:
        return Region.AFTER_EQUIVALENCE
    return Region.EQUIVALENCE


def _ph_from_h(h: np.float64) -> np.float64:
    return -np.log10(h)


def _ph_from_oh(oh: np.float64) -> np.float64:
    return PKW + np.log10(oh)


def _strong_acid_strong_base(system: TitrationSystem, amt: _Amounts) -> np.float64:
    n_a, n_t, v = amt.analyte_moles, amt.titrant_moles, amt.total_volume_l
    if n_t < n_a:
        return _ph_from_h((n_a - n_t) / v)
    elif n_t > n_a:
        return _ph_from_oh((n_t - n_a) / v)
    return np.float64(NEUTRAL_PH)


def _weak_acid_strong_base(system: TitrationSystem, amt: _Amounts) -> np.float64:
    n_a, n_t, v = amt.analyte_moles, amt.titrant_moles, amt.total_volume_l
    ka = np.float64(system.analyte.ka)
    pka = -np.log10(ka)
    if n_t == 0:
        return _ph_from_h(np.sqrt(ka * amt.analyte_concentration))
    if n_t < n_a:
        return pka + np.log10(n_t / (n_a - n_t))
    elif n_t > n_a:
        return _ph_from_oh((n_t - n_a) / v)
    # A- hydrolysis at equivalence
    kb = WATER_KW / ka
    return _ph_from_oh(np.sqrt(kb * (n_a / v)))


def _strong_acid_weak_base(system: TitrationSystem, amt: _Amounts) -> np.float64:
    n_a, n_t, v = amt.analyte_moles, amt.titrant_moles, amt.total_volume_l
    kb = np.float64(system.titrant.kb)
    pka = PKW - (-np.log10(kb))
    if n_t == 0:
        # TODO: confirm whether this limit should use the strong-acid formula
        # from the strong/strong regime; the current value is half of it.
        return 0.5 * (-np.log10(amt.analyte_concentration) - np.log10(1.0))
    if n_t < n_a:
        return pka - np.log10((n_a - n_t) / n_t)
    elif n_t > n_a:
        return _ph_from_h((n_t - n_a) / v)
    # BH+ hydrolysis at equivalence
    ka = WATER_KW / kb
    return _ph_from_h(np.sqrt(ka * (n_a / v)))


def _weak_acid_weak_base(system: TitrationSystem, amt: _Amounts) -> np.float64:
    n_a, n_t = amt.analyte_moles, amt.titrant_moles
    ka = np.float64(system.analyte.ka)
    kb = np.float64(system.titrant.kb)
    pka, pkb = -np.log10(ka), -np.log10(kb)
    if n_t == 0:
        return _ph_from_h(np.sqrt(ka * amt.analyte_concentration))
    if n_t == n_a:
        return NEUTRAL_PH + 0.5 * (pka - pkb)
    if n_t < n_a:
        return pka + np.log10(n_t / (n_a - n_t))
    ratio = (n_t - n_a) / n_a
    return PKW - (pkb + np.log10(ratio + LOG_GUARD))


_HANDLERS: Dict[Regime, Callable[[TitrationSystem, _Amounts], np.float64]] = {
    Regime.STRONG_ACID_STRONG_BASE: _strong_acid_strong_base,
    Regime.WEAK_ACID_STRONG_BASE: _weak_acid_strong_base,
    Regime.STRONG_ACID_WEAK_BASE: _strong_acid_weak_base,
    Regime.WEAK_ACID_WEAK_BASE: _weak_acid_weak_base,
}


def classify_regime(system: TitrationSystem) -> Regime | None:
    """Return the regime for ``system``, or ``None`` if the pairing is unknown."""
    return system.regime


def equivalence_volume(system: TitrationSystem) -> float:
    """Return the equivalence volume of ``system`` in mL.

    Args:
        system (TitrationSystem): Analyte/titrant pairing.

    Returns:
        float: ``(n_A / C_T) * 1000``. Independent of any titrant volume
        queried through ``compute_ph``; cached on the system instance.
    """
    return system.equivalence_volume_ml


def evaluate(
    system: TitrationSystem, volume_ml: float, *, strict: bool = False
) -> TitrationPoint:
    """Evaluate pH, equivalence volume and region at one titrant volume.

    Args:
        system (TitrationSystem): Analyte/titrant pairing.
        volume_ml (float): Titrant volume added in mL. ``0`` is the pure
            analyte before any titrant is delivered.
        strict (bool, optional): Validate ``system`` and ``volume_ml`` first
            and raise ``InvalidSystemError`` on degenerate input. Defaults to
            ``False``.

    Returns:
        TitrationPoint: The computed point. ``ph`` may fall outside [0, 14]
        at extreme compositions and may be ``inf``/``nan`` for degenerate
        input when ``strict`` is ``False``.

    Raises:
        InvalidSystemError: Only when ``strict`` is ``True`` and validation
            fails.
    """
    if strict:
        validate_system(system)
        validate_volume(volume_ml)

    regime = system.regime
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        amt = _amounts(system, volume_ml)
        handler = _HANDLERS.get(regime)
        ph = handler(system, amt) if handler is not None else NEUTRAL_PH
        region = _region(amt)

    return TitrationPoint(
        volume_ml=float(volume_ml),
        ph=float(ph),
        equivalence_volume_ml=system.equivalence_volume_ml,
        regime=regime,
        region=region,
    )


def compute_ph(
    system: TitrationSystem, volume_ml: float, *, strict: bool = False
) -> float:
    """Return the simulated pH after adding ``volume_ml`` of titrant.

    Args:
        system (TitrationSystem): Analyte/titrant pairing.
        volume_ml (float): Titrant volume added in mL (non-negative).
        strict (bool, optional): See ``evaluate``.

    Returns:
        float: Approximate pH, unclamped.
    """
    return evaluate(system, volume_ml, strict=strict).ph
