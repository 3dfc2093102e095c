"""Render the end-of-round reveal figure.

The figure shows the simulated titration curve for the round's system, the
true equivalence volume, both players' guesses, and the indicator's colour
transition window, so players can see how far off each guess was.
"""

from __future__ import annotations

import logging
import os

import matplotlib.pyplot as plt
import numpy as np

from endpoint.chemistry.curves import PH_DISPLAY_COL, VOLUME_COL, titration_curve
from endpoint.game import RoundState, round_complete
from endpoint.indicators import color_for_ph

from .style import (
    CURVE_COLOR,
    EQUIVALENCE_COLOR,
    LABEL_PH,
    LABEL_VEQ,
    LABEL_VOLUME,
    STYLE,
    clean_axis,
    color_for_player,
    sanitize_filename,
    save_figure,
    set_global_style,
)

logger = logging.getLogger(__name__)


def plot_round_reveal(state: RoundState, output_dir: str = "output") -> str:
    """Draw one scored round and save it as a PNG/PDF/SVG bundle.

    Args:
        state (RoundState): A round in which both players have submitted.
        output_dir (str, optional): Directory for the figure bundle. Defaults
            to ``"output"``.

    Returns:
        str: Path to the PNG file.

    Raises:
        ValueError: If the round has not been scored yet.

    Note:
        The curve extends to twice the equivalence volume or a little past the
        largest guess, whichever is further.
    """
    if not round_complete(state):
        raise ValueError(
            f"Round {state.round_number} has not been scored; nothing to reveal."
        )

    set_global_style()
    os.makedirs(output_dir, exist_ok=True)

    system, indicator = state.system, state.indicator
    veq = system.equivalence_volume_ml
    guesses = [p.guess_ml or 0.0 for p in state.players]
    upper = max(2.0 * veq, 1.1 * max(guesses))
    curve = titration_curve(system, max_volume_ml=upper)

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)

    low_color = color_for_ph(indicator.low - 1e-6, indicator)
    high_color = color_for_ph(indicator.high, indicator)
    ax.axhspan(
        indicator.low,
        indicator.high,
        color=color_for_ph(0.5 * (indicator.low + indicator.high), indicator),
        alpha=STYLE.ALPHA_BAND,
        linewidth=0.0,
        label=f"{indicator.name} ({indicator.low}-{indicator.high})",
    )
    ax.axhline(indicator.low, color=low_color, linewidth=0.8, linestyle=":")
    ax.axhline(indicator.high, color=high_color, linewidth=0.8, linestyle=":")

    ax.plot(
        curve[VOLUME_COL],
        curve[PH_DISPLAY_COL],
        color=CURVE_COLOR,
        linewidth=STYLE.LINEWIDTH,
        label="Simulated pH",
    )
    ax.axvline(
        veq,
        color=EQUIVALENCE_COLOR,
        linewidth=STYLE.LINEWIDTH_THIN,
        label=f"{LABEL_VEQ} = {veq:.2f} mL",
    )

    for player in state.players:
        guess = player.guess_ml if player.guess_ml is not None else 0.0
        ax.axvline(
            guess,
            color=color_for_player(player.player_id),
            linewidth=STYLE.LINEWIDTH_THIN,
            linestyle="--",
            label=f"{player.name}: {guess:.2f} mL "
            f"(error {player.result.error_ml:.2f} mL)",
        )

    ax.set_xlim(0.0, float(np.nanmax(curve[VOLUME_COL])))
    ax.set_ylim(0.0, 14.0)
    ax.set_xlabel(LABEL_VOLUME)
    ax.set_ylabel(LABEL_PH)
    if state.winner:
        outcome = f"Player {state.winner} wins"
    else:
        outcome = "Tie"
    ax.set_title(f"Round {state.round_number}: {system.label} ({outcome})")
    clean_axis(ax)
    ax.legend(loc="upper left", fontsize=STYLE.LEGEND_FONTSIZE)

    stem = sanitize_filename(f"round_{state.round_number:02d}_reveal")
    png_path = save_figure(fig, os.path.join(output_dir, stem))
    plt.close(fig)
    logger.info("Saved round %d reveal figure to %s", state.round_number, png_path)
    return str(png_path)
