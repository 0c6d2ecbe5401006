"""
Tests for lulc_planner/features/trends.py.

What we test
------------
distinct_years():
  - Sorted, de-duplicated.
  - Empty series → [].

extract_trend():
  - Values aligned to the sorted year axis.
  - Missing (year, class) → 0.0.
  - Duplicate (year, class) → first row in input order wins.
  - Raw labels and aliases are accepted as the class argument.
  - Unknown label raises ValueError.

extract_confidence_trend():
  - Confidences aligned the same way; missing → 0.0.
"""

from __future__ import annotations

import pytest

from lulc_planner.features.trends import (
    distinct_years,
    extract_confidence_trend,
    extract_trend,
)
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass


def _pt(year: int, cls: str, area: float, conf: float = 0.9) -> TimeSeriesPoint:
    return TimeSeriesPoint(year=year, lulc_class=cls, area_sq_km=area, confidence=conf)


# ── distinct_years ─────────────────────────────────────────────────────────────

class TestDistinctYears:
    def test_sorted_and_unique(self):
        series = [_pt(2022, "Forest", 1), _pt(2018, "Forest", 1), _pt(2022, "Water", 1)]
        assert distinct_years(series) == [2018, 2022]

    def test_empty(self):
        assert distinct_years([]) == []


# ── extract_trend ──────────────────────────────────────────────────────────────

class TestExtractTrend:
    def test_sample_built_up(self, sample_series):
        assert extract_trend(sample_series, LandClass.BUILT_UP) == [96.4, 104.8, 117.6, 136.2]

    def test_missing_year_is_zero(self):
        series = [_pt(2018, "Forest", 10), _pt(2020, "Water", 5), _pt(2022, "Forest", 8)]
        assert extract_trend(series, "Forest") == [10.0, 0.0, 8.0]

    def test_first_duplicate_wins(self):
        series = [_pt(2018, "Forest", 10), _pt(2018, "Forest", 99), _pt(2020, "Forest", 12)]
        assert extract_trend(series, "Forest") == [10.0, 12.0]

    def test_explicit_axis(self):
        series = [_pt(2018, "Forest", 10)]
        assert extract_trend(series, "Forest", [2016, 2018]) == [0.0, 10.0]

    def test_alias_label(self):
        series = [_pt(2018, "Water Body", 5), _pt(2020, "water", 4)]
        assert extract_trend(series, "Water Body") == [5.0, 4.0]

    def test_unknown_label_raises(self, sample_series):
        with pytest.raises(ValueError, match="Unknown land class"):
            extract_trend(sample_series, "Wetland")

    def test_empty_series(self):
        assert extract_trend([], "Forest") == []


# ── extract_confidence_trend ───────────────────────────────────────────────────

class TestExtractConfidenceTrend:
    def test_sample_built_up(self, sample_series):
        assert extract_confidence_trend(sample_series, "Built-up") == [0.88, 0.89, 0.87, 0.88]

    def test_missing_year_is_zero(self):
        series = [_pt(2018, "Forest", 10, 0.8), _pt(2020, "Water", 5, 0.7)]
        assert extract_confidence_trend(series, "Forest") == [0.8, 0.0]
