"""Derive display values for player cards and the round banner.

This module sits between the round state and whatever draws it. It computes
clamped pH, indicator colour, masking of submitted volumes, flask level and
progress meter, and formats them as text for the terminal session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from endpoint.chemistry.ph_model import compute_ph, equivalence_volume
from endpoint.config import DEFAULT_CONFIG, PH_DISPLAY_RANGE, GameConfig
from endpoint.game import (
    PlayerState,
    RoundState,
    both_submitted,
    is_volume_hidden,
)
from endpoint.indicators import color_for_ph

HIDDEN_VOLUME_TEXT = "•••••"


def clamp(x: float, lo: float, hi: float) -> float:
    return float(np.clip(x, lo, hi))


def clamp_ph(pH: float) -> float:
    """Clamp a model pH to the displayable [0, 14] range."""
    lo, hi = PH_DISPLAY_RANGE
    return clamp(pH, lo, hi)


def fmt(x: float, dec: int = 2) -> str:
    """Format ``x`` with a fixed number of decimals, rounding halves up."""
    scale = 10.0**dec
    return f"{np.floor(float(x) * scale + 0.5) / scale:.{dec}f}"


@dataclass(frozen=True)
class PlayerCard:
    """Display values for one player's card.

    Attributes:
        player_id: Player id.
        title: Player name.
        reaction: Reaction label badge.
        indicator: Indicator badge, e.g. ``"Indicator: Methyl Red (4.4-6.2)"``.
        ph: Simulated pH clamped to [0, 14].
        color: Solution colour as ``#rrggbb``.
        added_text: Titrant volume text, masked while hidden.
        volume_hidden: Whether ``added_text`` is masked.
        analyte_volume_text: Analyte volume, one decimal.
        concentration_text: ``"C_A / C_T"`` in M, three decimals.
        progress: Fraction of the way to equivalence, clamped to [0, 1].
        flask_level: Liquid level in the flask drawing, normalized.
        controls_enabled: ``False`` once the player has submitted.
        status: ``"winner"``, ``"loser"`` or ``""``.
        result_lines: Guess, equivalence and error lines after scoring.
    """

    player_id: int
    title: str
    reaction: str
    indicator: str
    ph: float
    color: str
    added_text: str
    volume_hidden: bool
    analyte_volume_text: str
    concentration_text: str
    progress: float
    flask_level: float
    controls_enabled: bool
    status: str
    result_lines: List[str]


def _status(state: RoundState, player: PlayerState) -> str:
    if not state.winner:
        return ""
    return "winner" if state.winner == player.player_id else "loser"


def build_player_card(
    state: RoundState, player: PlayerState, config: GameConfig = DEFAULT_CONFIG
) -> PlayerCard:
    """Compute every display value for one player's card."""
    system, ind = state.system, state.indicator
    pH = clamp_ph(compute_ph(system, player.added_ml))
    eq = equivalence_volume(system)
    hidden = is_volume_hidden(state, player)

    total_ml = system.analyte.volume + player.added_ml
    level_lo, level_hi = config.flask_level_range
    meter_denominator = eq if np.isfinite(eq) and eq > 0 else config.meter_fallback_ml

    result_lines: List[str] = []
    if player.submitted and player.result is not None:
        result_lines = [
            f"Your guess: {fmt(player.guess_ml)} mL",
            f"Equivalence: {fmt(player.result.equivalence_volume_ml)} mL",
            f"Absolute error: {fmt(player.result.error_ml)} mL",
        ]

    return PlayerCard(
        player_id=player.player_id,
        title=player.name,
        reaction=system.label,
        indicator=f"Indicator: {ind.name} ({ind.low}-{ind.high})",
        ph=pH,
        color=color_for_ph(pH, ind),
        added_text=HIDDEN_VOLUME_TEXT if hidden else fmt(player.added_ml, 2),
        volume_hidden=hidden,
        analyte_volume_text=fmt(system.analyte.volume, 1),
        concentration_text=(
            f"{fmt(system.analyte.concentration, 3)} / "
            f"{fmt(system.titrant.concentration, 3)}"
        ),
        progress=clamp(player.added_ml / meter_denominator, 0.0, 1.0),
        flask_level=clamp(total_ml / config.flask_capacity_ml, level_lo, level_hi),
        controls_enabled=not player.submitted,
        status=_status(state, player),
        result_lines=result_lines,
    )


def round_notice(state: RoundState) -> str:
    """Return the banner text shown above both cards."""
    if both_submitted(state):
        if state.winner:
            return (
                f"Round {state.round_number}: Winner is Player {state.winner}! "
                f"Start next round when ready."
            )
        return f"Round {state.round_number}: It's a tie! Start next round when ready."

    who = ", ".join(str(p.player_id) for p in state.players if p.submitted)
    if who:
        return f"Player {who} submitted. Volumes hidden until both submit."
    return f"Round {state.round_number}: add titrant and submit your equivalence guess."


def _meter(fraction: float, width: int = 20) -> str:
    filled = int(round(fraction * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_card_text(card: PlayerCard, keys: Optional[str] = None) -> str:
    """Render one card as plain text for a terminal."""
    header = card.title
    if card.status:
        header += f"  ({card.status.upper()})"
    lines = [
        header,
        f"  {card.reaction}",
        f"  {card.indicator}",
        f"  pH (simulated): {fmt(card.ph, 2)}   colour: {card.color}",
        f"  Titrant added (mL): {card.added_text}",
        f"  Analyte vol (mL): {card.analyte_volume_text}",
        f"  Conc (analyte/titrant, M): {card.concentration_text}",
        f"  Flask {_meter(card.flask_level)}",
    ]
    if keys and card.controls_enabled:
        lines.append(f"  Keys: {keys}")
    lines.extend(f"  {line}" for line in card.result_lines)
    return "\n".join(lines)


def _key_hint(player_id: int, config: GameConfig) -> str:
    adds = {}
    submit_keys = []
    for key, (pid, action, volume_ml) in config.key_bindings.items():
        if pid != player_id:
            continue
        if action == "add":
            adds.setdefault(volume_ml, key)
        else:
            submit_keys.append(key)
    steps = [v for v in config.volume_steps if v in adds]
    steps += [v for v in adds if v not in steps]
    parts = [f"{adds[v]}=+{fmt(v)} mL" for v in steps]
    parts += [f"{key}=submit" for key in submit_keys]
    return "  ".join(parts)


def render_round_text(state: RoundState, config: GameConfig = DEFAULT_CONFIG) -> str:
    """Render the banner and both player cards."""
    blocks = [round_notice(state)]
    for player in state.players:
        card = build_player_card(state, player, config)
        blocks.append(render_card_text(card, _key_hint(player.player_id, config)))
    if both_submitted(state):
        blocks.append(
            f"Press '{config.next_round_key}' for the next round, "
            f"'{config.quit_key}' to quit."
        )
    return "\n\n".join(blocks)
