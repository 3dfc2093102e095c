"""Keyboard bindings for two players sharing one keyboard."""

from __future__ import annotations

import logging

import numpy as np

from endpoint.config import DEFAULT_CONFIG, GameConfig
from endpoint.game import RoundState, add_volume, next_round, round_complete, submit

logger = logging.getLogger(__name__)


def apply_key(
    state: RoundState,
    key: str,
    rng: np.random.Generator,
    config: GameConfig = DEFAULT_CONFIG,
) -> RoundState:
    """Apply one key press to the round and return the resulting state.

    Keys are case-insensitive. Unknown keys, and the next-round key while a
    round is still in progress, leave ``state`` unchanged.
    """
    k = str(key).lower()
    if k == config.next_round_key:
        if round_complete(state):
            return next_round(state, rng, config)
        logger.debug("Next round requested before both players submitted")
        return state

    binding = config.key_bindings.get(k)
    if binding is None:
        return state

    player_id, action, volume_ml = binding
    if action == "add":
        return add_volume(state, player_id, volume_ml)
    if action == "submit":
        return submit(state, player_id)
    raise ValueError(f"Unknown action '{action}' bound to key '{k}'")


def apply_keys(
    state: RoundState,
    keys: str,
    rng: np.random.Generator,
    config: GameConfig = DEFAULT_CONFIG,
) -> RoundState:
    """Apply a string of key presses in order."""
    for key in keys:
        state = apply_key(state, key, rng, config)
    return state
