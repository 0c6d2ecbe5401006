"""
Velocity, acceleration and confidence stability of annual series.

Velocity (sq km / year) is the first difference of the last two points
divided by their year gap; acceleration (sq km / year²) is the change between
the last two velocities::

    v_current    = (a[n-1] - a[n-2]) / (y[n-1] - y[n-2])
    v_previous   = (a[n-2] - a[n-3]) / (y[n-2] - y[n-3])
    acceleration = v_current - v_previous

Status bands on acceleration:
    > 0.5   Rapid Acceleration
    > 0     Accelerating
    < -0.5  Rapid Deceleration
    < 0     Decelerating
    else    Stable

Confidence stability uses the population standard deviation of a class's
non-zero yearly confidences:
    > 0.10  Highly Unstable
    > 0.05  Moderate Stability
    else    High Stability
    score = 1 - std_dev
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_confidence_trend
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass, StabilityLabel, VelocityStatus

MIN_VELOCITY_POINTS = 3
MIN_STABILITY_VALUES = 2


@dataclass(frozen=True)
class VelocityMetrics:
    """Latest velocity and acceleration of an annual series.

    Attributes:
        velocity:     Latest rate of change in sq km / year.
        acceleration: Change in velocity in sq km / year².
        status:       Acceleration band.
    """

    velocity:     float
    acceleration: float
    status:       VelocityStatus


@dataclass(frozen=True)
class ConfidenceStability:
    """Temporal stability of a class's detection confidence.

    Attributes:
        lulc_class: Class the confidences were collected for.
        std_dev:    Population standard deviation of the confidences.
        score:      ``1 - std_dev``.
        label:      Stability band.
        n_values:   Number of non-zero confidences used.
    """

    lulc_class: LandClass
    std_dev:    float
    score:      float
    label:      StabilityLabel
    n_values:   int


def _rate(a_end: float, a_start: float, y_end: int, y_start: int) -> float:
    span = y_end - y_start
    return (a_end - a_start) / span if span != 0 else 0.0


def classify_acceleration(acceleration: float) -> VelocityStatus:
    """Map an acceleration value to its status band."""
    if acceleration > 0.5:
        return VelocityStatus.RAPID_ACCELERATION
    if acceleration > 0:
        return VelocityStatus.ACCELERATING
    if acceleration < -0.5:
        return VelocityStatus.RAPID_DECELERATION
    if acceleration < 0:
        return VelocityStatus.DECELERATING
    return VelocityStatus.STABLE


def compute_velocity(
    values: Sequence[float],
    years: Sequence[int],
) -> VelocityMetrics | None:
    """Compute velocity and acceleration of an aligned (years, values) series.

    Returns:
        ``VelocityMetrics``, or ``None`` with fewer than 3 points.
    """
    n = min(len(values), len(years))
    if n < MIN_VELOCITY_POINTS:
        return None

    v_current = _rate(values[n - 1], values[n - 2], years[n - 1], years[n - 2])
    v_previous = _rate(values[n - 2], values[n - 3], years[n - 2], years[n - 3])
    acceleration = v_current - v_previous

    return VelocityMetrics(
        velocity=round(v_current, 4),
        acceleration=round(acceleration, 4),
        status=classify_acceleration(acceleration),
    )


def classify_std_dev(std_dev: float) -> StabilityLabel:
    if std_dev > 0.10:
        return StabilityLabel.HIGHLY_UNSTABLE
    if std_dev > 0.05:
        return StabilityLabel.MODERATE_STABILITY
    return StabilityLabel.HIGH_STABILITY


def stability_from_values(
    values: Sequence[float],
    lulc_class: LandClass,
) -> ConfidenceStability | None:
    """Stability of raw confidence values; zero values are treated as missing."""
    conf = [v for v in values if v > 0]
    if len(conf) < MIN_STABILITY_VALUES:
        return None

    mean = sum(conf) / len(conf)
    variance = sum((v - mean) ** 2 for v in conf) / len(conf)
    std_dev = math.sqrt(variance)

    return ConfidenceStability(
        lulc_class=lulc_class,
        std_dev=round(std_dev, 4),
        score=round(1.0 - std_dev, 4),
        label=classify_std_dev(std_dev),
        n_values=len(conf),
    )


def confidence_stability(
    series: Sequence[TimeSeriesPoint],
    lulc_class: LandClass | str,
) -> ConfidenceStability | None:
    """Confidence stability of ``lulc_class`` across all years in ``series``.

    Returns:
        ``ConfidenceStability``, or ``None`` with fewer than 2 non-zero values.
    """
    cls = LandClass.parse(lulc_class)
    values = extract_confidence_trend(series, cls, distinct_years(series))
    return stability_from_values(values, cls)
