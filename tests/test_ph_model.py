"""Validate the four pH regimes against hand-computed titration values."""

import math
import warnings

import numpy as np
import pytest

from endpoint.chemistry.ph_model import (
    NEUTRAL_PH,
    Region,
    classify_regime,
    compute_ph,
    evaluate,
)
from endpoint.chemistry.species import (
    Regime,
    StrongAcid,
    StrongBase,
    TitrationSystem,
    WeakAcid,
    WeakBase,
)

ACETIC_KA = 1.8e-5
HF_KA = 6.8e-4
NH3_KB = 1.8e-5


@pytest.fixture()
def strong_strong() -> TitrationSystem:
    return TitrationSystem(StrongAcid(0.1, 25.0), StrongBase(0.1))


@pytest.fixture()
def weak_strong() -> TitrationSystem:
    return TitrationSystem(WeakAcid(0.1, 25.0, ACETIC_KA), StrongBase(0.1))


@pytest.fixture()
def strong_weak() -> TitrationSystem:
    return TitrationSystem(StrongAcid(0.1, 25.0), WeakBase(0.1, NH3_KB))


@pytest.fixture()
def weak_weak() -> TitrationSystem:
    return TitrationSystem(WeakAcid(0.08, 25.0, HF_KA), WeakBase(0.08, NH3_KB))


class TestStrongAcidStrongBase:
    """HCl titrated with NaOH."""

    def test_initial_ph(self, strong_strong):
        """Before any titrant, pH = -log10(0.1) = 1."""
        assert compute_ph(strong_strong, 0.0) == pytest.approx(1.0, abs=1e-9)

    def test_exactly_neutral_at_equivalence(self, strong_strong):
        assert compute_ph(strong_strong, 25.0) == 7.0

    @pytest.mark.parametrize(
        "conc, volume", [(0.05, 20.0), (0.087, 31.234), (0.12, 35.0), (0.1, 0.5)]
    )
    def test_neutral_for_any_matched_amounts(self, conc, volume):
        """Equal titrant and analyte moles give exactly 7 for any valid pair."""
        system = TitrationSystem(StrongAcid(conc, volume), StrongBase(conc))
        assert compute_ph(system, volume) == 7.0

    def test_excess_base(self, strong_strong):
        """At 50 mL, [OH-] = (0.005 - 0.0025) / 0.075 M, pH about 12.52."""
        expected = 14 + math.log10(0.0025 / 0.075)
        ph = compute_ph(strong_strong, 50.0)
        assert ph == pytest.approx(expected, rel=1e-9)
        assert ph == pytest.approx(12.52, abs=0.01)

    def test_brackets_neutral_near_equivalence(self, strong_strong):
        assert compute_ph(strong_strong, 24.99) < 7.0 < compute_ph(strong_strong, 25.01)

    def test_monotonic(self, strong_strong):
        volumes = np.arange(0.0, 50.25, 0.25)
        ph = np.array([compute_ph(strong_strong, v) for v in volumes])
        assert np.all(np.diff(ph) >= 0)

    def test_monotonic_unequal_concentrations(self):
        system = TitrationSystem(StrongAcid(0.093, 27.5), StrongBase(0.061))
        volumes = np.linspace(0.0, 2 * system.equivalence_volume_ml, 401)
        ph = np.array([compute_ph(system, v) for v in volumes])
        assert np.all(np.diff(ph) >= 0)


class TestWeakAcidStrongBase:
    """Ethanoic acid titrated with NaOH."""

    def test_initial_ph_pure_weak_acid(self, weak_strong):
        """[H+] = sqrt(Ka * C) before any base is added, pH about 2.87."""
        expected = -math.log10(math.sqrt(ACETIC_KA * 0.1))
        ph = compute_ph(weak_strong, 0.0)
        assert ph == pytest.approx(expected, rel=1e-12)
        assert ph == pytest.approx(2.87, abs=0.01)

    def test_half_equivalence_equals_pka(self, weak_strong):
        """At half equivalence the buffer ratio is 1, so pH = pKa."""
        pka = -math.log10(ACETIC_KA)
        assert compute_ph(weak_strong, 12.5) == pytest.approx(pka, abs=1e-9)
        assert compute_ph(weak_strong, 12.5) == pytest.approx(4.74, abs=0.01)

    def test_buffer_region_henderson_hasselbalch(self, weak_strong):
        n_a = 0.1 * (25.0 / 1000)
        n_t = 0.1 * (5.0 / 1000)
        expected = -math.log10(ACETIC_KA) + math.log10(n_t / (n_a - n_t))
        assert compute_ph(weak_strong, 5.0) == pytest.approx(expected, rel=1e-12)

    def test_equivalence_conjugate_base_hydrolysis(self, weak_strong):
        """At equivalence the acetate salt is 0.05 M and the solution is basic."""
        kb = 1e-14 / ACETIC_KA
        expected = 14 + math.log10(math.sqrt(kb * 0.0025 / 0.05))
        ph = compute_ph(weak_strong, 25.0)
        assert ph == pytest.approx(expected, rel=1e-9)
        assert ph > 7.0

    def test_excess_base(self, weak_strong):
        expected = 14 + math.log10((0.1 * 0.03 - 0.0025) / 0.055)
        assert compute_ph(weak_strong, 30.0) == pytest.approx(expected, rel=1e-9)

    def test_monotonic_from_first_buffer_point(self, weak_strong):
        volumes = np.arange(0.5, 50.25, 0.25)
        ph = np.array([compute_ph(weak_strong, v) for v in volumes])
        assert np.all(np.diff(ph) >= 0)

    def test_initial_to_buffer_dip(self, weak_strong):
        """The first tiny addition drops below the pure-acid value.

        The pure weak acid formula and the Henderson-Hasselbalch buffer formula
        disagree when almost no base is present. The dip is a known property
        of the approximations.
        """
        assert compute_ph(weak_strong, 0.1) < compute_ph(weak_strong, 0.0)


class TestStrongAcidWeakBase:
    """HCl titrated with ammonia."""

    def test_initial_special_case(self, strong_weak):
        """Zero titrant uses 0.5 * (-log10 C_A), i.e. 0.5 for 0.1 M acid."""
        assert compute_ph(strong_weak, 0.0) == pytest.approx(0.5, abs=1e-12)

    def test_half_equivalence_equals_conjugate_pka(self, strong_weak):
        pka = 14 + math.log10(NH3_KB)
        assert compute_ph(strong_weak, 12.5) == pytest.approx(pka, abs=1e-9)

    def test_equivalence_conjugate_acid_hydrolysis(self, strong_weak):
        ka = 1e-14 / NH3_KB
        expected = -math.log10(math.sqrt(ka * 0.0025 / 0.05))
        ph = compute_ph(strong_weak, 25.0)
        assert ph == pytest.approx(expected, rel=1e-9)
        assert ph < 7.0

    def test_after_equivalence_uses_excess_formula(self, strong_weak):
        expected = -math.log10(0.0025 / 0.075)
        assert compute_ph(strong_weak, 50.0) == pytest.approx(expected, rel=1e-9)


class TestWeakAcidWeakBase:
    """HF titrated with ammonia."""

    def test_initial_matches_pure_weak_acid(self, weak_weak):
        expected = -math.log10(math.sqrt(HF_KA * 0.08))
        assert compute_ph(weak_weak, 0.0) == pytest.approx(expected, rel=1e-12)

    def test_equivalence_average_of_pkas(self, weak_weak):
        pka, pkb = -math.log10(HF_KA), -math.log10(NH3_KB)
        expected = 7 + 0.5 * (pka - pkb)
        assert compute_ph(weak_weak, 25.0) == pytest.approx(expected, rel=1e-12)

    def test_buffer_region(self, weak_weak):
        n_a = 0.08 * (25.0 / 1000)
        n_t = 0.08 * (10.0 / 1000)
        expected = -math.log10(HF_KA) + math.log10(n_t / (n_a - n_t))
        assert compute_ph(weak_weak, 10.0) == pytest.approx(expected, rel=1e-12)

    def test_excess_base_guarded_logarithm(self, weak_weak):
        n_a = 0.08 * (25.0 / 1000)
        n_t = 0.08 * (30.0 / 1000)
        ratio = (n_t - n_a) / n_a
        expected = 14 - (-math.log10(NH3_KB) + math.log10(ratio + 1e-9))
        assert compute_ph(weak_weak, 30.0) == pytest.approx(expected, rel=1e-12)

    def test_guard_keeps_result_finite_just_past_equivalence(self, weak_weak):
        assert math.isfinite(compute_ph(weak_weak, 25.0 + 1e-12))


class TestDispatch:
    """Regime selection and region labelling."""

    def test_classify_regime(self, strong_strong, weak_strong, strong_weak, weak_weak):
        assert classify_regime(strong_strong) is Regime.STRONG_ACID_STRONG_BASE
        assert classify_regime(weak_strong) is Regime.WEAK_ACID_STRONG_BASE
        assert classify_regime(strong_weak) is Regime.STRONG_ACID_WEAK_BASE
        assert classify_regime(weak_weak) is Regime.WEAK_ACID_WEAK_BASE

    def test_unknown_pairing_falls_back_to_neutral(self):
        class Buffer(StrongAcid):
            pass

        system = TitrationSystem(Buffer(0.1, 25.0), StrongBase(0.1))
        assert classify_regime(system) is None
        assert compute_ph(system, 3.0) == NEUTRAL_PH

    @pytest.mark.parametrize(
        "volume, region",
        [
            (0.0, Region.INITIAL),
            (10.0, Region.BEFORE_EQUIVALENCE),
            (25.0, Region.EQUIVALENCE),
            (40.0, Region.AFTER_EQUIVALENCE),
        ],
    )
    def test_evaluate_region(self, strong_strong, volume, region):
        point = evaluate(strong_strong, volume)
        assert point.region is region
        assert point.volume_ml == volume
        assert point.ph == compute_ph(strong_strong, volume)


class TestDegenerateInput:
    """Degenerate input propagates as inf/nan without raising."""

    def test_zero_concentration_weak_acid_is_infinite(self):
        system = TitrationSystem(WeakAcid(0.0, 25.0, ACETIC_KA), StrongBase(0.1))
        assert compute_ph(system, 0.0) == math.inf

    def test_negative_ka_gives_nan(self):
        system = TitrationSystem(WeakAcid(0.1, 25.0, -1e-5), StrongBase(0.1))
        assert math.isnan(compute_ph(system, 5.0))

    def test_zero_total_volume_does_not_raise(self):
        system = TitrationSystem(WeakAcid(0.1, 0.0, ACETIC_KA), StrongBase(0.1))
        ph = compute_ph(system, 0.0)
        assert isinstance(ph, float)

    def test_no_floating_point_warnings(self):
        system = TitrationSystem(WeakAcid(0.0, 0.0, 0.0), WeakBase(0.0, 0.0))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            for volume in (0.0, 1.0, 10.0):
                compute_ph(system, volume)
