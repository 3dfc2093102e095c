"""Chemical species and titration systems used by the pH model.

The analyte is always acid-like (strong or weak acid with a fixed volume in the
flask) and the titrant is always base-like (strong or weak base delivered from
the burette). The four possible pairings form a closed set of regimes; see
``Regime``.

Units:
    - concentration: mol L^-1 (M)
    - volume: mL
    - ka / kb: dimensionless dissociation constants
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Union

import numpy as np

from endpoint.units import l_to_ml, ml_to_l


@dataclass(frozen=True)
class StrongAcid:
    """Fully dissociated acid analyte (e.g. HCl)."""

    concentration: float
    volume: float


@dataclass(frozen=True)
class WeakAcid:
    """Partially dissociated acid analyte (e.g. CH3COOH, HF)."""

    concentration: float
    volume: float
    ka: float


@dataclass(frozen=True)
class StrongBase:
    """Fully dissociated base titrant (e.g. NaOH)."""

    concentration: float


@dataclass(frozen=True)
class WeakBase:
    """Partially protonated base titrant (e.g. NH3)."""

    concentration: float
    kb: float


Analyte = Union[StrongAcid, WeakAcid]
Titrant = Union[StrongBase, WeakBase]
ChemicalSpecies = Union[StrongAcid, WeakAcid, StrongBase, WeakBase]


class Regime(Enum):
    """Closed set of analyte/titrant pairings handled by the pH model."""

    STRONG_ACID_STRONG_BASE = "strong_acid_strong_base"
    WEAK_ACID_STRONG_BASE = "weak_acid_strong_base"
    STRONG_ACID_WEAK_BASE = "strong_acid_weak_base"
    WEAK_ACID_WEAK_BASE = "weak_acid_weak_base"


_REGIMES = {
    (StrongAcid, StrongBase): Regime.STRONG_ACID_STRONG_BASE,
    (WeakAcid, StrongBase): Regime.WEAK_ACID_STRONG_BASE,
    (StrongAcid, WeakBase): Regime.STRONG_ACID_WEAK_BASE,
    (WeakAcid, WeakBase): Regime.WEAK_ACID_WEAK_BASE,
}


@dataclass(frozen=True)
class TitrationSystem:
    """One analyte in the flask paired with one titrant in the burette.

    The system is fixed for the lifetime of a round; only the titrant volume
    added varies, and that is passed to the pH model per query rather than
    stored here.

    Attributes:
        analyte: Acid in the flask, with its fixed volume in mL.
        titrant: Base in the burette.
        label: Human-readable name of the reaction, e.g.
            ``"Weak acid (CH3COOH) vs Strong base (NaOH)"``.
    """

    analyte: Analyte
    titrant: Titrant
    label: str = field(default="", compare=False)

    @property
    def regime(self) -> Regime | None:
        """Regime for this pairing, or ``None`` for an unsupported pairing."""
        return _REGIMES.get((type(self.analyte), type(self.titrant)))

    @property
    def analyte_moles(self) -> float:
        """Initial moles of acid in the flask."""
        return self.analyte.concentration * ml_to_l(self.analyte.volume)

    @cached_property
    def equivalence_volume_ml(self) -> float:
        """Titrant volume (mL) that exactly neutralizes the analyte.

        Computed once per instance; the value depends only on the analyte
        moles and the titrant concentration.
        """
        return equivalence_volume_ml(
            self.analyte_moles, self.titrant.concentration
        )


def equivalence_volume_ml(analyte_moles: float, titrant_concentration: float) -> float:
    """Return ``(analyte_moles / titrant_concentration) * 1000`` in mL.

    Zero titrant concentration yields ``inf`` (or ``nan`` for zero moles)
    instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        moles = np.float64(analyte_moles)
        return l_to_ml(moles / np.float64(titrant_concentration))
