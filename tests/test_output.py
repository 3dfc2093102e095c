"""Tests for round history tables and CSV export."""

import os

import pandas as pd
import pytest

from endpoint.chemistry.species import StrongAcid, StrongBase, TitrationSystem
from endpoint.game import add_volume, make_round, submit
from endpoint.indicators import METHYL_ORANGE
from endpoint.output import (
    build_round_record,
    create_history_dataframe,
    save_history_to_csv,
    summarize_wins,
)
from endpoint.schema import COLUMNS


def _scored_round(number, guess_1, guess_2):
    system = TitrationSystem(
        StrongAcid(0.1, 25.0), StrongBase(0.1), label="Strong acid vs strong base"
    )
    state = make_round(number, system, METHYL_ORANGE)
    state = add_volume(add_volume(state, 1, guess_1), 2, guess_2)
    return submit(submit(state, 1), 2)


def test_record_requires_scored_round():
    system = TitrationSystem(StrongAcid(0.1, 25.0), StrongBase(0.1))
    state = make_round(1, system, METHYL_ORANGE)
    with pytest.raises(ValueError, match="has not been scored"):
        build_round_record(state)


def test_record_contents():
    record = build_round_record(_scored_round(1, 24.0, 27.0))
    assert record[COLUMNS.round] == 1
    assert record[COLUMNS.indicator] == "Methyl Orange"
    assert record[COLUMNS.veq] == pytest.approx(25.0)
    assert record[COLUMNS.guess.format(1)] == 24.0
    assert record[COLUMNS.error.format(2)] == pytest.approx(2.0)
    assert record[COLUMNS.winner] == 1


def test_history_sorted_by_round():
    records = [
        build_round_record(_scored_round(2, 20.0, 25.0)),
        build_round_record(_scored_round(1, 24.0, 27.0)),
    ]
    df = create_history_dataframe(records)
    assert df[COLUMNS.round].tolist() == [1, 2]
    assert df[COLUMNS.winner].tolist() == [1, 2]


def test_empty_history_has_columns():
    df = create_history_dataframe([])
    assert df.empty
    assert COLUMNS.veq in df.columns


def test_summarize_wins_counts_ties():
    records = [
        build_round_record(_scored_round(1, 24.0, 27.0)),
        build_round_record(_scored_round(2, 24.0, 24.0)),
        build_round_record(_scored_round(3, 22.0, 24.5)),
    ]
    wins = summarize_wins(create_history_dataframe(records))
    assert wins[1] == 1
    assert wins[2] == 1
    assert wins["tie"] == 1


def test_save_history_to_csv(tmp_path):
    df = create_history_dataframe([build_round_record(_scored_round(1, 24.0, 27.0))])
    path = save_history_to_csv(df, output_dir=str(tmp_path))
    assert path.endswith("round_history.csv")
    assert os.path.exists(path)
    loaded = pd.read_csv(path)
    assert loaded.loc[0, COLUMNS.reaction] == "Strong acid vs strong base"
    assert loaded.loc[0, COLUMNS.guess.format(2)] == pytest.approx(27.0)
