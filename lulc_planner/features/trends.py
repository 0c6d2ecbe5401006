"""
Per-class annual series extracted from the time-series table.

Every time-series component (eco risk, velocity, trust, policy, projection,
BDI alert) works on the same aligned view:

    years          = distinct_years(series)          # sorted ascending
    built_up_trend = extract_trend(series, "Built-up", years)

``years[i]`` and ``trend[i]`` always refer to the same year.  A class with no
row for some year contributes ``0.0`` for that year; this is the defined
default, not an error.  When a (year, class) pair appears more than once, the
first row in input order wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass


def distinct_years(series: Sequence[TimeSeriesPoint]) -> list[int]:
    """Return the sorted, de-duplicated years present in ``series``."""
    return sorted({p.year for p in series})


def _first_by_year(
    series: Sequence[TimeSeriesPoint],
    lulc_class: LandClass,
) -> dict[int, TimeSeriesPoint]:
    lookup: dict[int, TimeSeriesPoint] = {}
    for point in series:
        if point.lulc_class == lulc_class and point.year not in lookup:
            lookup[point.year] = point
    return lookup


def extract_trend(
    series: Sequence[TimeSeriesPoint],
    lulc_class: LandClass | str,
    years: Sequence[int] | None = None,
) -> list[float]:
    """Return yearly areas for ``lulc_class`` aligned to ``years``.

    Args:
        series:     Time-series points (any order).
        lulc_class: Target class (enum or raw label such as ``"Water Body"``).
        years:      Year axis; defaults to ``distinct_years(series)``.

    Returns:
        One area per year; ``0.0`` where the class has no row for that year.
    """
    cls = LandClass.parse(lulc_class)
    axis = distinct_years(series) if years is None else years
    lookup = _first_by_year(series, cls)
    return [lookup[y].area_sq_km if y in lookup else 0.0 for y in axis]


def extract_confidence_trend(
    series: Sequence[TimeSeriesPoint],
    lulc_class: LandClass | str,
    years: Sequence[int] | None = None,
) -> list[float]:
    """Return yearly confidences for ``lulc_class``; missing years are ``0.0``."""
    cls = LandClass.parse(lulc_class)
    axis = distinct_years(series) if years is None else years
    lookup = _first_by_year(series, cls)
    return [lookup[y].confidence if y in lookup else 0.0 for y in axis]
