"""
Tests for lulc_planner/features/evolution.py.

What we test
------------
analyze_transition_evolution():
  - Empty input → [].
  - One evolution per (from, to) pair; history sorted by year.
  - Sorted by CPRI descending; ties keep first-seen order.
  - CPRI always in [0, 1].
  - Deviation ratio / anomaly band, trend, confidence stability.
  - Single-record group: ratio 1.0, Normal, Stable.
  - Zero-area baseline does not divide by zero.

compute_cpri() / normalized_impact():
  - Known values; unstable confidence applies the 0.8 trust factor.
  - Impact saturates at 1.0.

classify_readiness():
  - 0.75 / 0.45 boundaries.
"""

from __future__ import annotations

import pytest

from lulc_planner.features.evolution import (
    analyze_transition_evolution,
    classify_deviation,
    classify_readiness,
    classify_trend,
    compute_cpri,
    normalized_impact,
)
from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import (
    AnomalyLevel,
    LandClass,
    Readiness,
    TrendDirection,
)


def _rec(year, frm, to, area, conf=0.9) -> TransitionRecord:
    return TransitionRecord(year=year, from_class=frm, to_class=to, area_sq_km=area, confidence=conf)


# ── analyze_transition_evolution ──────────────────────────────────────────────

class TestAnalyzeTransitionEvolution:
    def test_empty(self):
        assert analyze_transition_evolution([]) == []

    def test_one_evolution_per_pair(self, sample_transitions):
        evos = analyze_transition_evolution(sample_transitions)
        keys = {e.transition_key for e in evos}
        assert len(evos) == 6
        assert (LandClass.WATER, LandClass.BARREN) in keys

    def test_history_sorted_by_year(self):
        evos = analyze_transition_evolution(
            [_rec(2024, "Forest", "Built-up", 3), _rec(2018, "Forest", "Built-up", 1)]
        )
        assert [r.year for r in evos[0].history] == [2018, 2024]
        assert evos[0].latest_flow == 3
        assert evos[0].total_volume == pytest.approx(4.0)

    def test_sorted_by_cpri_desc(self, sample_transitions):
        evos = analyze_transition_evolution(sample_transitions)
        cpris = [e.cpri for e in evos]
        assert cpris == sorted(cpris, reverse=True)
        top = evos[0]
        assert top.transition_key == (LandClass.AGRICULTURE, LandClass.BUILT_UP)
        assert top.cpri == pytest.approx(0.58)
        assert top.readiness is Readiness.POLICY_REVIEW

    def test_cpri_in_unit_interval(self, sample_transitions):
        extra = [_rec(2024, "Forest", "Barren", 5000.0, 1.0), _rec(2024, "Water", "Forest", 0.0, 0.0)]
        for e in analyze_transition_evolution(sample_transitions + extra):
            assert 0.0 <= e.cpri <= 1.0

    def test_ties_keep_first_seen_order(self):
        evos = analyze_transition_evolution(
            [_rec(2024, "Barren", "Forest", 5), _rec(2024, "Forest", "Barren", 5)]
        )
        assert [e.from_class for e in evos] == [LandClass.BARREN, LandClass.FOREST]

    def test_surge_and_accelerating(self, sample_transitions):
        evos = {e.transition_key: e for e in analyze_transition_evolution(sample_transitions)}
        forest_bu = evos[(LandClass.FOREST, LandClass.BUILT_UP)]
        # baseline = (2.1 + 5.4 + 8.2) / 3
        assert forest_bu.deviation_ratio == pytest.approx(14.2 / (15.7 / 3))
        assert forest_bu.anomaly is AnomalyLevel.SURGE
        assert forest_bu.trend is TrendDirection.ACCELERATING

    def test_decelerating_and_stable_confidence(self, sample_transitions):
        evos = {e.transition_key: e for e in analyze_transition_evolution(sample_transitions)}
        agri_barren = evos[(LandClass.AGRICULTURE, LandClass.BARREN)]
        assert agri_barren.trend is TrendDirection.DECELERATING
        assert agri_barren.confidence_stable is True
        assert agri_barren.confidence_range == pytest.approx(0.03)

    def test_unstable_confidence(self, sample_transitions):
        evos = {e.transition_key: e for e in analyze_transition_evolution(sample_transitions)}
        water_barren = evos[(LandClass.WATER, LandClass.BARREN)]
        assert water_barren.confidence_stable is False
        # min(log10(2.3) / 2, 1) × 0.8 × 0.75
        assert water_barren.cpri == pytest.approx(0.11)

    def test_single_record_group(self):
        [evo] = analyze_transition_evolution([_rec(2024, "Barren", "Built-up", 4.8, 0.58)])
        assert evo.deviation_ratio == 1.0
        assert evo.anomaly is AnomalyLevel.NORMAL
        assert evo.trend is TrendDirection.STABLE
        assert evo.confidence_stable is True

    def test_zero_baseline(self):
        [evo] = analyze_transition_evolution(
            [_rec(2020, "Forest", "Built-up", 0.0), _rec(2022, "Forest", "Built-up", 3.0)]
        )
        assert evo.deviation_ratio == 1.0
        assert evo.anomaly is AnomalyLevel.NORMAL

    def test_label(self, sample_transitions):
        evo = analyze_transition_evolution(sample_transitions)[0]
        assert evo.label == "Agriculture → Built-up"
        assert evo.latest.year == 2024


# ── CPRI helpers ───────────────────────────────────────────────────────────────

class TestCpri:
    def test_normalized_impact_saturates(self):
        assert normalized_impact(0.0) == 0.0
        assert normalized_impact(99.0) == pytest.approx(1.0)
        assert normalized_impact(10_000.0) == 1.0

    def test_stable_vs_unstable(self):
        stable = compute_cpri(99.0, 0.9, confidence_stable=True)
        unstable = compute_cpri(99.0, 0.9, confidence_stable=False)
        assert stable == pytest.approx(0.9)
        assert unstable == pytest.approx(0.72)


class TestClassifiers:
    @pytest.mark.parametrize(
        "cpri,expected",
        [
            (0.75, Readiness.READY_FOR_ACTION),
            (0.74, Readiness.POLICY_REVIEW),
            (0.45, Readiness.POLICY_REVIEW),
            (0.44, Readiness.FIELD_VALIDATION),
            (0.0, Readiness.FIELD_VALIDATION),
        ],
    )
    def test_readiness_bands(self, cpri, expected):
        assert classify_readiness(cpri) is expected

    def test_deviation_bands(self):
        assert classify_deviation(2.01) is AnomalyLevel.SURGE
        assert classify_deviation(2.0) is AnomalyLevel.ELEVATED
        assert classify_deviation(1.3) is AnomalyLevel.NORMAL

    def test_trend_single_record_stable(self):
        assert classify_trend([_rec(2024, "Forest", "Barren", 1)]) is TrendDirection.STABLE
