"""Define standardized column names for round history DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoundColumns:
    """Container for standardized column labels.

    Attributes:
        round: 1-based round number.
        reaction: Reaction label, e.g. ``"Strong acid (HCl) vs Strong base
            (NaOH)"``.
        indicator: Indicator name.
        analyte_conc: Analyte concentration in mol L^-1.
        analyte_volume: Analyte volume in mL.
        titrant_conc: Titrant concentration in mol L^-1.
        veq: True equivalence volume in mL.
        guess: Per-player guess column template; format with the player id.
        error: Per-player absolute error template; format with the player id.
        winner: Winning player id, empty on a tie.
    """

    round: str = "Round"
    reaction: str = "Reaction"
    indicator: str = "Indicator"
    analyte_conc: str = "Analyte Concentration (M)"
    analyte_volume: str = "Analyte Volume (mL)"
    titrant_conc: str = "Titrant Concentration (M)"
    veq: str = "Equivalence Volume (mL)"
    guess: str = "Player {} Guess (mL)"
    error: str = "Player {} Absolute Error (mL)"
    winner: str = "Winner"


COLUMNS = RoundColumns()
