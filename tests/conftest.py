"""
Shared pytest fixtures for the LULC planner test suite.

Provides:
  - ``sample_series``: four survey years (2018–2024) × five classes, with a
    steadily accelerating Built-up class and shrinking Forest / Water.
  - ``sample_transitions``: the transition table used by the bundled sample
    data (Forest/Agriculture → Built-up histories plus sparse low-confidence
    flows).
"""

from __future__ import annotations

import pytest

from lulc_planner.models.records import TimeSeriesPoint, TransitionRecord

# (year, class, area, confidence)
_SERIES_ROWS = [
    (2018, "Forest", 412.5, 0.91),
    (2018, "Water", 58.2, 0.93),
    (2018, "Built-up", 96.4, 0.88),
    (2018, "Agriculture", 688.0, 0.86),
    (2018, "Barren", 45.1, 0.79),
    (2020, "Forest", 405.9, 0.90),
    (2020, "Water", 57.1, 0.92),
    (2020, "Built-up", 104.8, 0.89),
    (2020, "Agriculture", 679.3, 0.85),
    (2020, "Barren", 44.9, 0.80),
    (2022, "Forest", 397.2, 0.90),
    (2022, "Water", 56.4, 0.92),
    (2022, "Built-up", 117.6, 0.87),
    (2022, "Agriculture", 668.8, 0.86),
    (2022, "Barren", 43.0, 0.78),
    (2024, "Forest", 383.0, 0.89),
    (2024, "Water", 55.2, 0.91),
    (2024, "Built-up", 136.2, 0.88),
    (2024, "Agriculture", 652.6, 0.85),
    (2024, "Barren", 41.9, 0.79),
]

# (year, from, to, area, confidence)
_TRANSITION_ROWS = [
    (2018, "Forest", "Built-up", 2.1, 0.92),
    (2020, "Forest", "Built-up", 5.4, 0.88),
    (2022, "Forest", "Built-up", 8.2, 0.85),
    (2024, "Forest", "Built-up", 14.2, 0.82),
    (2018, "Agriculture", "Built-up", 15.0, 0.85),
    (2020, "Agriculture", "Built-up", 19.5, 0.84),
    (2022, "Agriculture", "Built-up", 20.1, 0.86),
    (2024, "Agriculture", "Built-up", 21.6, 0.85),
    (2020, "Water Body", "Barren", 0.5, 0.60),
    (2024, "Water Body", "Barren", 1.3, 0.75),
    (2022, "Agriculture", "Barren", 3.4, 0.55),
    (2024, "Agriculture", "Barren", 2.1, 0.52),
    (2024, "Barren", "Built-up", 4.8, 0.58),
    (2022, "Forest", "Agriculture", 1.2, 0.66),
    (2024, "Forest", "Agriculture", 2.9, 0.71),
]


def _record(
    year: int = 2024,
    from_class: str = "Forest",
    to_class: str = "Built-up",
    area_sq_km: float = 10.0,
    confidence: float = 0.9,
) -> TransitionRecord:
    return TransitionRecord(
        year=year,
        from_class=from_class,
        to_class=to_class,
        area_sq_km=area_sq_km,
        confidence=confidence,
    )


def _point(
    year: int,
    lulc_class: str,
    area_sq_km: float,
    confidence: float = 0.9,
) -> TimeSeriesPoint:
    return TimeSeriesPoint(
        year=year, lulc_class=lulc_class, area_sq_km=area_sq_km, confidence=confidence
    )


@pytest.fixture
def sample_series() -> list[TimeSeriesPoint]:
    """Twenty time-series points over 2018, 2020, 2022 and 2024."""
    return [_point(*row) for row in _SERIES_ROWS]


@pytest.fixture
def sample_transitions() -> list[TransitionRecord]:
    """Fifteen transition records across six (from, to) pairs."""
    return [_record(*row) for row in _TRANSITION_ROWS]
