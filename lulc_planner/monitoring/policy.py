"""
Policy impact analytics: Built-up growth rate before vs after intervention.

The pre-period is the first two observed years and the post-period the last
two (index positions, not calendar years)::

    rate        = (area[end] − area[start]) / (year[end] − year[start])
    rate_change = post_rate − pre_rate

Bands on ``rate_change`` (sq km / year):
    < -1.0  Effective Containment
    > 1.0   Policy Failure
    else    Steady State
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass, PolicyAssessment

MIN_POLICY_YEARS = 4


@dataclass(frozen=True)
class PolicyEvaluation:
    """Pre- vs post-intervention Built-up growth comparison.

    Attributes:
        pre_rate:    Annual growth over the first two years (sq km / yr).
        post_rate:   Annual growth over the last two years (sq km / yr).
        rate_change: ``post_rate − pre_rate``.
        assessment:  Effectiveness band.
        description: Human-readable verdict carrying the magnitude.
    """

    pre_rate:    float
    post_rate:   float
    rate_change: float
    assessment:  PolicyAssessment
    description: str


def annual_rate(
    values: Sequence[float],
    years: Sequence[int],
    start_idx: int,
    end_idx: int,
) -> float:
    """Annual change between two indices; 0.0 when the year span is not positive."""
    span = years[end_idx] - years[start_idx]
    return (values[end_idx] - values[start_idx]) / span if span > 0 else 0.0


def classify_rate_change(rate_change: float) -> tuple[PolicyAssessment, str]:
    if rate_change < -1.0:
        return (
            PolicyAssessment.EFFECTIVE_CONTAINMENT,
            f"Success: Urban growth slowed by {abs(rate_change):.1f} sq km/yr post-policy.",
        )
    if rate_change > 1.0:
        return (
            PolicyAssessment.POLICY_FAILURE,
            f"Critical: Urban sprawl accelerated by {rate_change:.1f} sq km/yr despite controls.",
        )
    return (
        PolicyAssessment.STEADY_STATE,
        f"Growth rate remains consistent with historical baseline "
        f"({rate_change:+.1f} sq km/yr).",
    )


def evaluate_policy(series: Sequence[TimeSeriesPoint]) -> PolicyEvaluation | None:
    """Compare Built-up growth before and after intervention.

    Returns:
        ``PolicyEvaluation``, or ``None`` with fewer than 4 distinct years.
    """
    years = distinct_years(series)
    if len(years) < MIN_POLICY_YEARS:
        return None

    built_up = extract_trend(series, LandClass.BUILT_UP, years)
    n = len(years)

    pre_rate = annual_rate(built_up, years, 0, 1)
    post_rate = annual_rate(built_up, years, n - 2, n - 1)
    rate_change = post_rate - pre_rate
    assessment, description = classify_rate_change(rate_change)

    return PolicyEvaluation(
        pre_rate=round(pre_rate, 2),
        post_rate=round(post_rate, 2),
        rate_change=round(rate_change, 2),
        assessment=assessment,
        description=description,
    )
