"""Round state for a two-player titration duel and its transitions.

State is immutable: every transition takes a ``RoundState`` and returns a new
one. Nothing here renders or reads input, so rounds can be driven directly in
tests or from the terminal session in ``main.py``.

Round flow:
    1. ``start_round`` draws a system and an indicator.
    2. Players call ``add_volume`` any number of times.
    3. ``submit`` locks in a player's current volume as their guess and hides
       submitted volumes from the other player.
    4. Once both have submitted, volumes are revealed and ``decide_winner``
       scores each guess against the equivalence volume.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from endpoint.chemistry.ph_model import equivalence_volume
from endpoint.chemistry.species import TitrationSystem
from endpoint.config import DEFAULT_CONFIG, VOLUME_DECIMALS, GameConfig
from endpoint.indicators import Indicator
from endpoint.reactions import random_indicator, random_system

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerResult:
    """Score of one submitted guess."""

    error_ml: float
    equivalence_volume_ml: float


@dataclass(frozen=True)
class PlayerState:
    player_id: int
    name: str
    added_ml: float = 0.0
    submitted: bool = False
    guess_ml: Optional[float] = None
    result: Optional[PlayerResult] = None


@dataclass(frozen=True)
class RoundState:
    """Everything the display needs for one round.

    Attributes:
        round_number: 1-based round counter.
        system: Titration system shared by both players this round.
        indicator: Indicator shared by both players this round.
        players: Exactly two players, ids 1 and 2.
        volumes_hidden: ``True`` while only one player has submitted.
        winner: Winning player id once decided; ``None`` before that and on a
            tie.
    """

    round_number: int
    system: TitrationSystem
    indicator: Indicator
    players: Tuple[PlayerState, PlayerState]
    volumes_hidden: bool = False
    winner: Optional[int] = None


def new_players(config: GameConfig = DEFAULT_CONFIG) -> Tuple[PlayerState, PlayerState]:
    return tuple(
        PlayerState(player_id=i + 1, name=name)
        for i, name in enumerate(config.player_names[:2])
    )


def make_round(
    round_number: int,
    system: TitrationSystem,
    indicator: Indicator,
    config: GameConfig = DEFAULT_CONFIG,
) -> RoundState:
    """Create a fresh round from an explicit system and indicator."""
    return RoundState(
        round_number=int(round_number),
        system=system,
        indicator=indicator,
        players=new_players(config),
    )


def start_round(
    round_number: int,
    rng: np.random.Generator,
    config: GameConfig = DEFAULT_CONFIG,
) -> RoundState:
    """Create a round with a randomly drawn system and indicator."""
    system = random_system(rng)
    indicator = random_indicator(rng)
    logger.info(
        "Round %d: %s with %s", round_number, system.label, indicator.name
    )
    return make_round(round_number, system, indicator, config)


def next_round(
    state: RoundState,
    rng: np.random.Generator,
    config: GameConfig = DEFAULT_CONFIG,
) -> RoundState:
    """Start the round after ``state``.

    Raises:
        ValueError: If the current round is not complete.
    """
    if not round_complete(state):
        raise ValueError(
            f"Round {state.round_number} is still in progress; "
            f"both players must submit first."
        )
    return start_round(state.round_number + 1, rng, config)


def find_player(state: RoundState, player_id: int) -> PlayerState:
    """Return the player with ``player_id``.

    Raises:
        KeyError: If no such player exists in this round.
    """
    for player in state.players:
        if player.player_id == player_id:
            return player
    raise KeyError(f"No player with id {player_id} in round {state.round_number}.")


def _with_player(state: RoundState, updated: PlayerState) -> RoundState:
    players = tuple(
        updated if p.player_id == updated.player_id else p for p in state.players
    )
    return replace(state, players=players)


def both_submitted(state: RoundState) -> bool:
    return all(p.submitted for p in state.players)


def round_complete(state: RoundState) -> bool:
    """``True`` once both players have submitted and results are scored."""
    return both_submitted(state) and all(p.result is not None for p in state.players)


def is_volume_hidden(state: RoundState, player: PlayerState) -> bool:
    """Whether ``player``'s added volume must be masked on screen.

    A submitted volume stays masked until the other player submits too.
    """
    return state.volumes_hidden and player.submitted


def add_volume(state: RoundState, player_id: int, volume_ml: float) -> RoundState:
    """Deliver ``volume_ml`` of titrant into one player's flask.

    Additions after the player has submitted are ignored. The running total is
    rounded to three decimals.

    Raises:
        KeyError: If ``player_id`` is unknown.
        ValueError: If ``volume_ml`` is negative or not finite.
    """
    player = find_player(state, player_id)
    v = float(volume_ml)
    if not math.isfinite(v) or v < 0:
        raise ValueError(f"Volume increment must be finite and >= 0, got {volume_ml}")
    if player.submitted:
        logger.debug("Ignoring addition from %s after submission", player.name)
        return state

    added = round(player.added_ml + v, VOLUME_DECIMALS)
    logger.debug("%s added %.2f mL (total %.3f mL)", player.name, v, added)
    return _with_player(state, replace(player, added_ml=added))


def submit(state: RoundState, player_id: int) -> RoundState:
    """Lock in a player's current volume as their equivalence guess.

    The first submission hides submitted volumes. The second reveals all
    volumes and decides the winner. Repeated submissions are ignored.

    Raises:
        KeyError: If ``player_id`` is unknown.
    """
    player = find_player(state, player_id)
    if player.submitted:
        return state

    logger.info("%s submitted %.2f mL", player.name, player.added_ml)
    state = _with_player(
        state, replace(player, submitted=True, guess_ml=player.added_ml)
    )
    state = replace(state, volumes_hidden=True)

    if both_submitted(state):
        state = decide_winner(replace(state, volumes_hidden=False))
    return state


def decide_winner(state: RoundState) -> RoundState:
    """Score both guesses against the equivalence volume.

    The smaller absolute error wins; equal errors are a tie (``winner`` stays
    ``None``). A missing guess counts as 0 mL.
    """
    eq = equivalence_volume(state.system)
    scored = []
    for player in state.players:
        guess = player.guess_ml if player.guess_ml is not None else 0.0
        error = abs(guess - eq)
        scored.append(replace(player, result=PlayerResult(error, eq)))

    p1, p2 = scored
    err1, err2 = p1.result.error_ml, p2.result.error_ml
    if err1 == err2:
        winner = None
    else:
        winner = p1.player_id if err1 < err2 else p2.player_id

    if winner is None:
        logger.info("Round %d is a tie (V_eq = %.2f mL)", state.round_number, eq)
    else:
        logger.info(
            "Round %d won by player %d (V_eq = %.2f mL)", state.round_number, winner, eq
        )
    return replace(state, players=tuple(scored), winner=winner, volumes_hidden=False)
