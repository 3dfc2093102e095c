"""Write the session's round history to a reproducible CSV file.

This module is the output boundary between in-memory round state and tabular
artifacts kept after a session.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List

import pandas as pd

from endpoint.game import RoundState, round_complete
from endpoint.schema import COLUMNS

logger = logging.getLogger(__name__)

HISTORY_FILENAME = "round_history.csv"


def build_round_record(state: RoundState) -> Dict[str, object]:
    """Flatten one scored round into a history row.

    Args:
        state (RoundState): A round in which both players have submitted.

    Returns:
        dict: Values keyed by ``RoundColumns`` labels.

    Raises:
        ValueError: If the round has not been scored yet.
    """
    if not round_complete(state):
        raise ValueError(
            f"Round {state.round_number} has not been scored; "
            f"both players must submit first."
        )

    system = state.system
    record: Dict[str, object] = {
        COLUMNS.round: state.round_number,
        COLUMNS.reaction: system.label,
        COLUMNS.indicator: state.indicator.name,
        COLUMNS.analyte_conc: system.analyte.concentration,
        COLUMNS.analyte_volume: system.analyte.volume,
        COLUMNS.titrant_conc: system.titrant.concentration,
        COLUMNS.veq: system.equivalence_volume_ml,
    }
    for player in state.players:
        record[COLUMNS.guess.format(player.player_id)] = player.guess_ml
        record[COLUMNS.error.format(player.player_id)] = player.result.error_ml
    record[COLUMNS.winner] = state.winner
    return record


def create_history_dataframe(records: Iterable[Dict[str, object]]) -> pd.DataFrame:
    """Collect round records into a DataFrame ordered by round number."""
    rows: List[Dict[str, object]] = list(records)
    if not rows:
        return pd.DataFrame(
            columns=[
                COLUMNS.round,
                COLUMNS.reaction,
                COLUMNS.indicator,
                COLUMNS.analyte_conc,
                COLUMNS.analyte_volume,
                COLUMNS.titrant_conc,
                COLUMNS.veq,
                COLUMNS.winner,
            ]
        )
    df = pd.DataFrame(rows)
    df[COLUMNS.winner] = df[COLUMNS.winner].astype("Int64")
    return df.sort_values(COLUMNS.round).reset_index(drop=True)


def summarize_wins(history_df: pd.DataFrame) -> pd.Series:
    """Count wins per player id, plus ties under the ``"tie"`` label."""
    if history_df.empty:
        return pd.Series(dtype="int64")
    winners = history_df[COLUMNS.winner].astype("object").where(
        history_df[COLUMNS.winner].notna(), "tie"
    )
    return winners.value_counts()


def save_history_to_csv(history_df: pd.DataFrame, output_dir: str = "output") -> str:
    """Save the round history table to ``round_history.csv``.

    Args:
        history_df (pandas.DataFrame): Output from ``create_history_dataframe``.
        output_dir (str): Directory where the CSV is written.

    Returns:
        str: Path to the written CSV.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, HISTORY_FILENAME)
    history_df.to_csv(path, index=False)
    logger.info("Saved round history (%d rounds) to %s", len(history_df), path)
    return path
