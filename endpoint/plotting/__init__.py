"""
Plotting utilities for the titration duel.

Modules:
    round_plots:
        End-of-round reveal figure: simulated pH curve, equivalence volume,
        both guesses, and the indicator transition window.

    style:
        Shared rcParams, player colours, axis cleanup, and multi-format save.

Design Principles:
    No chemistry in plotting code beyond evaluating the curve through the
    engine; figures receive a scored round and render it.
"""

from .round_plots import plot_round_reveal
from .style import set_global_style

__all__ = ["plot_round_reveal", "set_global_style"]
