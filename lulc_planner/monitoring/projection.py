"""
Future projection engine: Built-up extrapolation under an intervention.

Baseline annual rate comes from the last three observed years::

    baseline_rate = (area[n-1] − area[n-3]) / (year[n-1] − year[n-3])

A policy-intensity parameter in [0, 100] scales the rate down, up to
``max_reduction`` (60%) at full intensity::

    reduction     = intensity / 100 × max_reduction
    adjusted_rate = baseline_rate × (1 − reduction)
    increase      = adjusted_rate × horizon_years

Risk bands on ``increase`` (sq km):
    > 10  Critical
    > 5   High
    else  Low

When intensity > 0 the projection also reports ``saved_area``, the
counterfactual difference between the unmitigated and mitigated increase.
Intensity 0 reproduces the baseline projection exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass, RiskLevel

MIN_PROJECTION_YEARS = 3
DEFAULT_HORIZON_YEARS = 2
DEFAULT_MAX_REDUCTION = 0.60


@dataclass(frozen=True)
class FutureProjection:
    """Projected Built-up area at ``target_year``.

    Attributes:
        target_year:    Last observed year + horizon.
        projected_area: Projected Built-up area (sq km).
        increase:       Projected increase over the last observed area.
        risk_level:     Risk band on ``increase``.
        baseline_rate:  Unmitigated annual rate (sq km / yr).
        adjusted_rate:  Rate after the intervention reduction.
        reduction_pct:  Applied reduction in percent; ``None`` at intensity 0.
        saved_area:     Unmitigated minus mitigated increase; ``None`` at intensity 0.
    """

    target_year:    int
    projected_area: float
    increase:       float
    risk_level:     RiskLevel
    baseline_rate:  float
    adjusted_rate:  float
    reduction_pct:  float | None
    saved_area:     float | None


def classify_projection_risk(increase: float) -> RiskLevel:
    if increase > 10:
        return RiskLevel.CRITICAL
    if increase > 5:
        return RiskLevel.HIGH
    return RiskLevel.LOW


def project_future(
    series: Sequence[TimeSeriesPoint],
    policy_intensity: float = 0.0,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    max_reduction: float = DEFAULT_MAX_REDUCTION,
) -> FutureProjection | None:
    """Project Built-up area ``horizon_years`` past the last observed year.

    Args:
        series:           Time-series points.
        policy_intensity: Intervention intensity in [0, 100]; clamped.
        horizon_years:    Years to project forward.
        max_reduction:    Rate reduction at full intensity.

    Returns:
        ``FutureProjection``, or ``None`` with fewer than 3 distinct years.
    """
    years = distinct_years(series)
    if len(years) < MIN_PROJECTION_YEARS:
        return None

    built_up = extract_trend(series, LandClass.BUILT_UP, years)
    last_idx = len(years) - 1
    start_idx = max(len(years) - 3, 0)

    time_span = years[last_idx] - years[start_idx]
    urban_change = built_up[last_idx] - built_up[start_idx]
    baseline_rate = urban_change / time_span if time_span > 0 else 0.0

    intensity = max(0.0, min(policy_intensity, 100.0))
    reduction = intensity / 100.0 * max_reduction
    adjusted_rate = baseline_rate * (1.0 - reduction)

    increase = adjusted_rate * horizon_years
    projected_area = built_up[last_idx] + increase

    saved_area: float | None = None
    reduction_pct: float | None = None
    if reduction > 0:
        saved_area = round(baseline_rate * horizon_years - increase, 2)
        reduction_pct = round(reduction * 100.0, 1)

    return FutureProjection(
        target_year=years[last_idx] + horizon_years,
        projected_area=round(projected_area, 2),
        increase=round(increase, 2),
        risk_level=classify_projection_risk(increase),
        baseline_rate=round(baseline_rate, 4),
        adjusted_rate=round(adjusted_rate, 4),
        reduction_pct=reduction_pct,
        saved_area=saved_area,
    )
