#!/usr/bin/env python3
"""
Main script for playing the titration duel in a terminal.
"""

# Session overview:
# 1) Draw a reaction (analyte/titrant pairing with fresh concentrations) and
#    an indicator for the round.
# 2) Both players type key presses on one line and press Enter; each key adds
#    titrant to one player's flask or submits that player's guess.
# 3) After both submit, guesses are scored against the equivalence volume and
#    a reveal figure is saved.
# 4) On exit, the round history is written to CSV.

import argparse
import logging
import os
import sys
import time

import numpy as np

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from endpoint.config import DEFAULT_CONFIG
from endpoint.game import round_complete, start_round
from endpoint.output import (
    build_round_record,
    create_history_dataframe,
    save_history_to_csv,
    summarize_wins,
)
from endpoint.plotting import plot_round_reveal
from endpoint.reporting import render_round_text
from endpoint.session import apply_key


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Two-player titration duel.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Stop after this many completed rounds (default: until quit).",
    )
    parser.add_argument("--output-dir", default="output", help="Output directory.")
    parser.add_argument(
        "--no-plots", action="store_true", help="Skip reveal figures."
    )
    parser.add_argument(
        "--log-file", default="titration_duel.log", help="Session log file."
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Run an interactive session and write its outputs."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(args.log_file, mode="w"),
        ],
    )

    start_time = time.time()
    config = DEFAULT_CONFIG
    rng = np.random.default_rng(args.seed)
    logging.info("Starting titration duel (seed=%s)", args.seed)

    state = start_round(1, rng, config)
    records = []
    figure_paths = []
    print(render_round_text(state, config))

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        if line.strip().lower() == config.quit_key:
            break

        was_complete = round_complete(state)
        for key in line.strip():
            state = apply_key(state, key, rng, config)
            if round_complete(state) and not was_complete:
                records.append(build_round_record(state))
                if not args.no_plots:
                    figure_paths.append(plot_round_reveal(state, args.output_dir))
            was_complete = round_complete(state)

        print()
        print(render_round_text(state, config))

        if args.rounds is not None and len(records) >= args.rounds:
            logging.info("Reached %d completed rounds", len(records))
            break

    if not records:
        logging.warning("No rounds were completed; nothing to save.")
        return 1

    history_df = create_history_dataframe(records)
    history_csv = save_history_to_csv(history_df, args.output_dir)
    wins = summarize_wins(history_df)
    for who, count in wins.items():
        logging.info("  - %s: %d", f"Player {who}" if who != "tie" else "Ties", count)

    total_duration = time.time() - start_time
    logging.info(f"Session length: {total_duration:.0f} seconds")
    logging.info("Generated output files:")
    for path in figure_paths:
        logging.info("  - Reveal figure: %s", path)
    logging.info("  - Round history CSV: %s", history_csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
