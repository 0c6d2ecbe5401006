"""
Temporal explainability: flag Built-up growth spikes between observed years.

Any consecutive pair where Built-up area grows by more than the spike
threshold (10 sq km by default) is reported.  Spikes above 1.5× the threshold
are High severity, the rest Medium.  A cause is attached from the configured
table of known drivers (``[anomalies.drivers]`` in config), falling back to
"Unknown Driver".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass

MIN_ANOMALY_YEARS = 3
DEFAULT_SPIKE_THRESHOLD = 10.0
UNKNOWN_DRIVER = "Unknown Driver"


@dataclass(frozen=True)
class TemporalAnomaly:
    """One abnormal Built-up growth step.

    Attributes:
        year:     Year the step ends in.
        growth:   Area gained since the previous observed year (sq km).
        cause:    Known driver for that year, or "Unknown Driver".
        severity: "High" or "Medium".
    """

    year:     int
    growth:   float
    cause:    str
    severity: str


def explain_temporal_anomalies(
    series: Sequence[TimeSeriesPoint],
    drivers: Mapping[int, str] | None = None,
    spike_threshold: float = DEFAULT_SPIKE_THRESHOLD,
) -> list[TemporalAnomaly]:
    """Return Built-up growth spikes in chronological order.

    Returns:
        List of ``TemporalAnomaly``; empty with fewer than 3 distinct years.
    """
    years = distinct_years(series)
    if len(years) < MIN_ANOMALY_YEARS:
        return []

    built_up = extract_trend(series, LandClass.BUILT_UP, years)
    known = drivers or {}
    high_threshold = spike_threshold * 1.5

    anomalies: list[TemporalAnomaly] = []
    for i in range(1, len(years)):
        growth = built_up[i] - built_up[i - 1]
        if growth > spike_threshold:
            anomalies.append(
                TemporalAnomaly(
                    year=years[i],
                    growth=round(growth, 1),
                    cause=known.get(years[i], UNKNOWN_DRIVER),
                    severity="High" if growth > high_threshold else "Medium",
                )
            )
    return anomalies
