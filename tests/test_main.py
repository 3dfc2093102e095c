"""Run the terminal session end to end with scripted key presses."""

import os

import pandas as pd

import main


def _scripted_input(monkeypatch, lines):
    feed = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_two_rounds_write_history(tmp_path, monkeypatch):
    _scripted_input(monkeypatch, ["ddddf", "lll;", "n", "sssf", "jj;", "q"])
    out_dir = tmp_path / "out"
    code = main.main(
        [
            "--seed",
            "5",
            "--output-dir",
            str(out_dir),
            "--log-file",
            str(tmp_path / "session.log"),
        ]
    )
    assert code == 0
    history = pd.read_csv(out_dir / "round_history.csv")
    assert history["Round"].tolist() == [1, 2]
    assert os.path.exists(out_dir / "round_01_reveal.png")
    assert os.path.exists(out_dir / "round_02_reveal.png")


def test_rounds_limit_stops_session(tmp_path, monkeypatch):
    _scripted_input(monkeypatch, ["f;", "n", "f;", "n"])
    code = main.main(
        [
            "--rounds",
            "1",
            "--no-plots",
            "--output-dir",
            str(tmp_path),
            "--log-file",
            str(tmp_path / "session.log"),
        ]
    )
    assert code == 0
    assert len(pd.read_csv(tmp_path / "round_history.csv")) == 1


def test_no_completed_rounds_returns_error(tmp_path, monkeypatch):
    _scripted_input(monkeypatch, ["aaa"])
    code = main.main(
        [
            "--no-plots",
            "--output-dir",
            str(tmp_path),
            "--log-file",
            str(tmp_path / "s.log"),
        ]
    )
    assert code == 1
    assert not os.path.exists(tmp_path / "round_history.csv")
