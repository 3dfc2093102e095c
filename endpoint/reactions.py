"""Reaction templates and randomized titration systems for each round.

Every round draws one template and fresh concentrations/volumes within that
template's ranges. Drawn values are rounded to three decimals so the numbers
shown on the player cards are the numbers the pH model uses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from endpoint.chemistry.species import (
    StrongAcid,
    StrongBase,
    TitrationSystem,
    WeakAcid,
    WeakBase,
)
from endpoint.indicators import INDICATORS, Indicator

logger = logging.getLogger(__name__)

DRAW_DECIMALS = 3

ACETIC_ACID_KA = 1.8e-5
HYDROFLUORIC_ACID_KA = 6.8e-4
AMMONIA_KB = 1.8e-5


@dataclass(frozen=True)
class ReactionTemplate:
    """Recipe for one kind of titration.

    Attributes:
        label: Name shown to the players.
        ka: Analyte Ka, or ``None`` for a strong acid.
        kb: Titrant Kb, or ``None`` for a strong base.
        analyte_concentration_range: Bounds for the analyte concentration (M).
        analyte_volume_range: Bounds for the analyte volume (mL).
        titrant_concentration_range: Bounds for the titrant concentration (M).
    """

    label: str
    ka: Optional[float] = None
    kb: Optional[float] = None
    analyte_concentration_range: Tuple[float, float] = (0.05, 0.12)
    analyte_volume_range: Tuple[float, float] = (20.0, 35.0)
    titrant_concentration_range: Tuple[float, float] = (0.05, 0.12)


REACTION_TEMPLATES: Tuple[ReactionTemplate, ...] = (
    ReactionTemplate("Strong acid (HCl) vs Strong base (NaOH)"),
    ReactionTemplate("Weak acid (CH3COOH) vs Strong base (NaOH)", ka=ACETIC_ACID_KA),
    ReactionTemplate("Strong acid (HCl) vs Weak base (NH3)", kb=AMMONIA_KB),
    ReactionTemplate(
        "Weak acid (HF) vs Weak base (NH3)",
        ka=HYDROFLUORIC_ACID_KA,
        kb=AMMONIA_KB,
        analyte_concentration_range=(0.06, 0.10),
        analyte_volume_range=(20.0, 30.0),
        titrant_concentration_range=(0.06, 0.10),
    ),
)


def draw_value(low: float, high: float, rng: np.random.Generator) -> float:
    """Draw a uniform value in ``[low, high)`` rounded to three decimals."""
    return round(low + float(rng.random()) * (high - low), DRAW_DECIMALS)


def draw_system(
    template: ReactionTemplate, rng: np.random.Generator
) -> TitrationSystem:
    """Build a titration system with fresh values from ``template``'s ranges."""
    c_a = draw_value(*template.analyte_concentration_range, rng)
    v_a = draw_value(*template.analyte_volume_range, rng)
    c_t = draw_value(*template.titrant_concentration_range, rng)

    if template.ka is None:
        analyte = StrongAcid(concentration=c_a, volume=v_a)
    else:
        analyte = WeakAcid(concentration=c_a, volume=v_a, ka=template.ka)
    if template.kb is None:
        titrant = StrongBase(concentration=c_t)
    else:
        titrant = WeakBase(concentration=c_t, kb=template.kb)

    system = TitrationSystem(analyte=analyte, titrant=titrant, label=template.label)
    logger.debug(
        "Drew %s: C_A=%.3f M, V_A=%.3f mL, C_T=%.3f M",
        template.label,
        c_a,
        v_a,
        c_t,
    )
    return system


def random_system(rng: np.random.Generator) -> TitrationSystem:
    """Pick a template uniformly at random and draw a system from it."""
    template = REACTION_TEMPLATES[int(rng.integers(len(REACTION_TEMPLATES)))]
    return draw_system(template, rng)


def random_indicator(rng: np.random.Generator) -> Indicator:
    """Pick one catalogued indicator uniformly at random."""
    return INDICATORS[int(rng.integers(len(INDICATORS)))]
