"""
Tests for lulc_planner/features/velocity.py.

What we test
------------
compute_velocity():
  - Returns None with fewer than 3 points.
  - Velocity from the last two points divided by the year gap.
  - Acceleration = v_current − v_previous; status bands.
  - Zero year gap gives a rate of 0 instead of dividing by zero.

classify_acceleration():
  - Band boundaries (> 0.5, > 0, < −0.5, < 0, == 0).

stability_from_values() / confidence_stability():
  - [0.90, 0.91, 0.89] → High Stability.
  - [0.60, 0.85, 0.95] → Highly Unstable.
  - Zero confidences treated as missing; < 2 remaining → None.
  - score = 1 − std_dev.
"""

from __future__ import annotations

import pytest

from lulc_planner.features.velocity import (
    classify_acceleration,
    classify_std_dev,
    compute_velocity,
    confidence_stability,
    stability_from_values,
)
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass, StabilityLabel, VelocityStatus


# ── compute_velocity ───────────────────────────────────────────────────────────

class TestComputeVelocity:
    def test_none_below_three_points(self):
        assert compute_velocity([1.0, 2.0], [2018, 2020]) is None
        assert compute_velocity([], []) is None

    def test_sample_built_up(self):
        m = compute_velocity([96.4, 104.8, 117.6, 136.2], [2018, 2020, 2022, 2024])
        assert m is not None
        assert m.velocity == pytest.approx(9.3)
        assert m.acceleration == pytest.approx(2.9)
        assert m.status is VelocityStatus.RAPID_ACCELERATION

    def test_constant_growth_is_stable(self):
        m = compute_velocity([10.0, 20.0, 30.0], [2020, 2021, 2022])
        assert m.velocity == pytest.approx(10.0)
        assert m.acceleration == pytest.approx(0.0)
        assert m.status is VelocityStatus.STABLE

    def test_deceleration(self):
        m = compute_velocity([10.0, 20.0, 21.0], [2020, 2021, 2022])
        assert m.acceleration == pytest.approx(-9.0)
        assert m.status is VelocityStatus.RAPID_DECELERATION

    def test_zero_year_gap_gives_zero_rate(self):
        m = compute_velocity([10.0, 20.0, 25.0], [2020, 2021, 2021])
        assert m.velocity == 0.0
        assert m.acceleration == pytest.approx(-10.0)


class TestClassifyAcceleration:
    @pytest.mark.parametrize(
        "accel,expected",
        [
            (0.51, VelocityStatus.RAPID_ACCELERATION),
            (0.5, VelocityStatus.ACCELERATING),
            (0.01, VelocityStatus.ACCELERATING),
            (0.0, VelocityStatus.STABLE),
            (-0.01, VelocityStatus.DECELERATING),
            (-0.5, VelocityStatus.DECELERATING),
            (-0.51, VelocityStatus.RAPID_DECELERATION),
        ],
    )
    def test_bands(self, accel, expected):
        assert classify_acceleration(accel) is expected


# ── Confidence stability ───────────────────────────────────────────────────────

class TestStability:
    def test_tight_confidences_high_stability(self):
        s = stability_from_values([0.90, 0.91, 0.89], LandClass.BUILT_UP)
        assert s.label is StabilityLabel.HIGH_STABILITY
        assert s.std_dev == pytest.approx(0.0082, abs=1e-4)
        assert s.score == pytest.approx(1 - s.std_dev, abs=1e-4)
        assert s.n_values == 3

    def test_spread_confidences_highly_unstable(self):
        s = stability_from_values([0.60, 0.85, 0.95], LandClass.BUILT_UP)
        assert s.label is StabilityLabel.HIGHLY_UNSTABLE
        assert s.std_dev > 0.10

    def test_zeros_are_missing(self):
        s = stability_from_values([0.0, 0.9, 0.0, 0.9], LandClass.FOREST)
        assert s.n_values == 2
        assert s.std_dev == 0.0

    def test_none_with_fewer_than_two_values(self):
        assert stability_from_values([0.0, 0.9], LandClass.FOREST) is None
        assert stability_from_values([], LandClass.FOREST) is None

    def test_classify_std_dev_bands(self):
        assert classify_std_dev(0.05) is StabilityLabel.HIGH_STABILITY
        assert classify_std_dev(0.07) is StabilityLabel.MODERATE_STABILITY
        assert classify_std_dev(0.11) is StabilityLabel.HIGHLY_UNSTABLE

    def test_from_series(self, sample_series):
        s = confidence_stability(sample_series, "Built-up")
        assert s.lulc_class is LandClass.BUILT_UP
        assert s.label is StabilityLabel.HIGH_STABILITY
        assert s.n_values == 4

    def test_single_year_series_is_none(self):
        series = [TimeSeriesPoint(year=2020, lulc_class="Built-up", area_sq_km=1, confidence=0.9)]
        assert confidence_stability(series, LandClass.BUILT_UP) is None
