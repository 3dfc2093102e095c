import os

import pytest

from endpoint.chemistry.species import StrongAcid, TitrationSystem, WeakBase
from endpoint.game import add_volume, make_round, submit
from endpoint.indicators import PHENOLPHTHALEIN
from endpoint.plotting import plot_round_reveal


def _round():
    system = TitrationSystem(
        StrongAcid(0.09, 30.0), WeakBase(0.1, 1.8e-5), label="Strong acid vs weak base"
    )
    return make_round(4, system, PHENOLPHTHALEIN)


def test_plot_round_reveal(tmp_path):
    state = _round()
    state = add_volume(add_volume(state, 1, 26.0), 2, 29.5)
    state = submit(submit(state, 1), 2)
    out = plot_round_reveal(state, output_dir=str(tmp_path))
    assert out.endswith("round_04_reveal.png")
    assert os.path.exists(out)
    assert os.path.exists(out.replace(".png", ".svg"))


def test_plot_round_reveal_requires_scored_round(tmp_path):
    with pytest.raises(ValueError, match="nothing to reveal"):
        plot_round_reveal(_round(), output_dir=str(tmp_path))
