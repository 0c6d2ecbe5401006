"""
Temporal trust score: a 0–100 reliability index for the Built-up series.

Purpose
-------
Before acting on growth metrics, readers need to know how far the underlying
series can be trusted.  ``temporal_trust_score()`` combines three factors:

- **Stability** (weight 0.4): confidence-stability score of the Built-up class
  (``1 - std_dev`` of yearly confidences).  ``0.0`` when fewer than two
  non-zero confidences exist.
- **Consistency** (weight 0.4): fraction of consecutive year pairs where the
  Built-up area does not decrease.  Urban land rarely reverts, so a
  non-monotonic series signals classification noise.
- **Magnitude** (weight 0.2): ``min(latest_area / 50, 1.0)``.  Larger areas are
  detected more reliably; 50 sq km and above gets full credit.

    score = round((0.4·stability + 0.4·consistency + 0.2·magnitude) × 100)

Levels:
    >= 85   High Trust
    <= 60   Low Trust
    else    Moderate
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.features.velocity import confidence_stability
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import LandClass, TrustLevel

MIN_TRUST_YEARS = 2
MAGNITUDE_CAP_SQ_KM = 50.0


@dataclass(frozen=True)
class TrustScore:
    """Temporal trust index and its components.

    Attributes:
        score:             0–100 integer index.
        level:             Trust band.
        stability_score:   Confidence-stability component (0–1).
        consistency_score: Monotonicity component (0–1).
        magnitude_score:   Area-magnitude component (0–1).
    """

    score:             int
    level:             TrustLevel
    stability_score:   float
    consistency_score: float
    magnitude_score:   float


def classify_trust(score: int) -> TrustLevel:
    if score >= 85:
        return TrustLevel.HIGH_TRUST
    if score <= 60:
        return TrustLevel.LOW_TRUST
    return TrustLevel.MODERATE


def temporal_trust_score(series: Sequence[TimeSeriesPoint]) -> TrustScore | None:
    """Compute the Built-up temporal trust score.

    Returns:
        ``TrustScore``, or ``None`` with fewer than 2 distinct years.
    """
    years = distinct_years(series)
    if len(years) < MIN_TRUST_YEARS:
        return None

    trend = extract_trend(series, LandClass.BUILT_UP, years)

    stability = confidence_stability(series, LandClass.BUILT_UP)
    stability_score = stability.score if stability is not None else 0.0

    non_decreasing = sum(1 for i in range(1, len(trend)) if trend[i] >= trend[i - 1])
    consistency_score = non_decreasing / (len(trend) - 1)

    magnitude_score = min(trend[-1] / MAGNITUDE_CAP_SQ_KM, 1.0)

    raw = stability_score * 0.4 + consistency_score * 0.4 + magnitude_score * 0.2
    score = int(round(raw * 100))

    return TrustScore(
        score=score,
        level=classify_trust(score),
        stability_score=round(stability_score, 4),
        consistency_score=round(consistency_score, 4),
        magnitude_score=round(magnitude_score, 4),
    )
