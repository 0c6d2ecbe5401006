"""
Transition evolution analysis and the Composite Policy Readiness Index (CPRI).

How it works — step by step
----------------------------
1.  Group transition records by (from, to), in first-seen order.
2.  Sort each group by year ascending (stable: same-year records keep input
    order).  The last record is the *latest flow*.
3.  **Anomaly**: baseline = mean area of every record except the latest (the
    latest record's own area when the group has one record).
    ``deviation_ratio = latest / baseline`` (1.0 when baseline is 0).
        > 2.0  Surge
        > 1.3  Elevated
        else   Normal
4.  **Trend** on the last two records:
        last > prev × 1.15  Accelerating
        last < prev × 0.85  Decelerating
        else                Stable
5.  **Confidence stability**: ``max(conf) - min(conf) < 0.10``.
6.  **CPRI** = normalized impact × trust factor × latest confidence::

        normalized_impact = min(log10(latest_area + 1) / 2, 1)   # ~100 sq km saturates
        trust_factor      = 1.0 if confidence-stable else 0.8
        cpri              = round(normalized_impact × trust_factor × confidence, 2)

    Every factor is in [0, 1], so CPRI is in [0, 1] by construction.
        >= 0.75  Ready for Action
        >= 0.45  Policy Review
        else     Field Validation
7.  Evolutions are sorted by CPRI descending (stable).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import (
    AnomalyLevel,
    LandClass,
    Readiness,
    TrendDirection,
)

logger = logging.getLogger(__name__)

READY_THRESHOLD = 0.75
REVIEW_THRESHOLD = 0.45

_SURGE_RATIO = 2.0
_ELEVATED_RATIO = 1.3
_ACCELERATING_FACTOR = 1.15
_DECELERATING_FACTOR = 0.85
_STABLE_CONF_RANGE = 0.10
_UNSTABLE_TRUST_FACTOR = 0.8


@dataclass(frozen=True)
class TransitionEvolution:
    """Multi-year history and derived metrics for one (from, to) pair.

    Attributes:
        from_class:        Origin class.
        to_class:          Destination class.
        history:           Records ordered by year ascending.
        total_volume:      Cumulative area across the history.
        latest_flow:       Area of the latest record.
        latest_confidence: Confidence of the latest record.
        trend:             Direction from the last two records.
        deviation_ratio:   Latest flow / baseline average (>= 0).
        anomaly:           Deviation band.
        confidence_stable: True if confidence range < 0.10.
        confidence_range:  max − min of confidences in the history.
        cpri:              Composite Policy Readiness Index in [0, 1].
        readiness:         CPRI band.
    """

    from_class:        LandClass
    to_class:          LandClass
    history:           tuple[TransitionRecord, ...]
    total_volume:      float
    latest_flow:       float
    latest_confidence: float
    trend:             TrendDirection
    deviation_ratio:   float
    anomaly:           AnomalyLevel
    confidence_stable: bool
    confidence_range:  float
    cpri:              float
    readiness:         Readiness

    @property
    def transition_key(self) -> tuple[LandClass, LandClass]:
        return (self.from_class, self.to_class)

    @property
    def label(self) -> str:
        return f"{self.from_class} → {self.to_class}"

    @property
    def latest(self) -> TransitionRecord:
        return self.history[-1]


# ── Classification helpers (module-level for testability) ─────────────────────

def classify_deviation(deviation_ratio: float) -> AnomalyLevel:
    if deviation_ratio > _SURGE_RATIO:
        return AnomalyLevel.SURGE
    if deviation_ratio > _ELEVATED_RATIO:
        return AnomalyLevel.ELEVATED
    return AnomalyLevel.NORMAL


def classify_trend(history: Sequence[TransitionRecord]) -> TrendDirection:
    if len(history) < 2:
        return TrendDirection.STABLE
    last = history[-1].area_sq_km
    prev = history[-2].area_sq_km
    if last > prev * _ACCELERATING_FACTOR:
        return TrendDirection.ACCELERATING
    if last < prev * _DECELERATING_FACTOR:
        return TrendDirection.DECELERATING
    return TrendDirection.STABLE


def classify_readiness(cpri: float) -> Readiness:
    if cpri >= READY_THRESHOLD:
        return Readiness.READY_FOR_ACTION
    if cpri >= REVIEW_THRESHOLD:
        return Readiness.POLICY_REVIEW
    return Readiness.FIELD_VALIDATION


def normalized_impact(area_sq_km: float) -> float:
    """Log-scaled impact in [0, 1]; 99 sq km and above saturates at 1."""
    return min(math.log10(area_sq_km + 1.0) / 2.0, 1.0)


def compute_cpri(latest_area: float, latest_confidence: float, confidence_stable: bool) -> float:
    trust_factor = 1.0 if confidence_stable else _UNSTABLE_TRUST_FACTOR
    return round(normalized_impact(latest_area) * trust_factor * latest_confidence, 2)


# ── Analyzer ──────────────────────────────────────────────────────────────────

def _build_evolution(group: list[TransitionRecord]) -> TransitionEvolution:
    history = tuple(sorted(group, key=lambda r: r.year))
    latest = history[-1]

    baseline_recs = history[:-1]
    if baseline_recs:
        baseline_avg = sum(r.area_sq_km for r in baseline_recs) / len(baseline_recs)
    else:
        baseline_avg = latest.area_sq_km
    deviation_ratio = latest.area_sq_km / baseline_avg if baseline_avg > 0 else 1.0

    confs = [r.confidence for r in history]
    conf_range = max(confs) - min(confs)
    conf_stable = conf_range < _STABLE_CONF_RANGE

    cpri = compute_cpri(latest.area_sq_km, latest.confidence, conf_stable)

    return TransitionEvolution(
        from_class=latest.from_class,
        to_class=latest.to_class,
        history=history,
        total_volume=round(sum(r.area_sq_km for r in history), 4),
        latest_flow=latest.area_sq_km,
        latest_confidence=latest.confidence,
        trend=classify_trend(history),
        deviation_ratio=deviation_ratio,
        anomaly=classify_deviation(deviation_ratio),
        confidence_stable=conf_stable,
        confidence_range=round(conf_range, 4),
        cpri=cpri,
        readiness=classify_readiness(cpri),
    )


def analyze_transition_evolution(
    records: Sequence[TransitionRecord],
) -> list[TransitionEvolution]:
    """Group transition records by (from, to) and rank the groups by CPRI.

    Args:
        records: Transition records in any order.  Not mutated.

    Returns:
        One ``TransitionEvolution`` per (from, to) pair, sorted by CPRI
        descending; ties keep first-seen group order.  Empty input → ``[]``.
    """
    groups: dict[tuple[LandClass, LandClass], list[TransitionRecord]] = {}
    for rec in records:
        groups.setdefault(rec.transition_key, []).append(rec)

    evolutions = [_build_evolution(group) for group in groups.values()]
    evolutions.sort(key=lambda e: e.cpri, reverse=True)

    logger.debug(
        "Analyzed %d transition groups from %d records", len(evolutions), len(records)
    )
    return evolutions
