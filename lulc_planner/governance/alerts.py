"""
Governance alert engine: independent rules over transition records and the
Built-up trend.

Rules
-----
1. ``ecological_risk``   — any record Forest/Water → Built-up/Barren with
                           confidence > 0.80.  Severity HIGH.
2. ``urban_sprawl``      — total Agriculture → Built-up area > 5 sq km.
                           Severity MEDIUM.
3. ``data_gap``          — more than 2 records with confidence < 0.60.
                           Severity LOW.
4. ``baseline_deviation``— Baseline Deviation Index on the Built-up trend
                           (needs >= 4 years)::

                               baseline_rate = (v[n-2] − v[0]) / (y[n-2] − y[0])
                               recent_rate   = (v[n-1] − v[n-2]) / (y[n-1] − y[n-2])
                               bdi           = recent_rate / baseline_rate  (0 if baseline is 0)

                           bdi > 1.5 → HIGH "Abnormal Growth Spike";
                           bdi > 1.2 → MEDIUM "Growth Acceleration".

Rules fire independently and accumulate in the order above.  An empty alert
list is a valid outcome, not an error.  Rules 1 and 2 are phrased for the
persona that owns the concern (environmental officer / urban planner).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import (
    DEGRADED_CLASSES,
    ECO_CLASSES,
    AlertSeverity,
    LandClass,
    Persona,
)

logger = logging.getLogger(__name__)

ECO_CONFIDENCE_THRESHOLD = 0.80
SPRAWL_AREA_THRESHOLD = 5.0
LOW_CONFIDENCE_THRESHOLD = 0.60
DATA_GAP_COUNT_THRESHOLD = 2
MIN_BDI_YEARS = 4
BDI_HIGH = 1.5
BDI_MEDIUM = 1.2


@dataclass(frozen=True)
class Alert:
    """One triggered governance rule.

    Attributes:
        rule:               Rule identifier (e.g. ``"ecological_risk"``).
        severity:           low / medium / high.
        title:              Short headline.
        description:        Persona-phrased explanation with magnitudes.
        triggering_records: Records that caused the rule to fire (empty for
                            trend-based rules).
    """

    rule:               str
    severity:           AlertSeverity
    title:              str
    description:        str
    triggering_records: tuple[TransitionRecord, ...] = field(default_factory=tuple)


# ── Individual rules ──────────────────────────────────────────────────────────

def ecological_risk_alert(
    records: Sequence[TransitionRecord],
    persona: Persona = Persona.POLICY_MAKER,
) -> Alert | None:
    items = tuple(
        r for r in records
        if r.from_class in ECO_CLASSES
        and r.to_class in DEGRADED_CLASSES
        and r.confidence > ECO_CONFIDENCE_THRESHOLD
    )
    if not items:
        return None

    if persona is Persona.ENVIRONMENTAL_OFFICER:
        title = "Critical Ecosystem Loss"
        desc = (
            f"Urgent: {len(items)} protected zones compromised. "
            "Immediate enforcement action required."
        )
    else:
        title = "Ecological Risk"
        desc = (
            f"Detected {len(items)} verified zones of forest/water depletion. "
            "Recommend halt."
        )
    return Alert("ecological_risk", AlertSeverity.HIGH, title, desc, items)


def urban_sprawl_alert(
    records: Sequence[TransitionRecord],
    persona: Persona = Persona.POLICY_MAKER,
) -> Alert | None:
    items = tuple(
        r for r in records
        if r.from_class is LandClass.AGRICULTURE and r.to_class is LandClass.BUILT_UP
    )
    total_area = sum(r.area_sq_km for r in items)
    if total_area <= SPRAWL_AREA_THRESHOLD:
        return None

    if persona is Persona.URBAN_PLANNER:
        title = "Unplanned Sprawl Detected"
        desc = (
            f"Infrastructure misalignment: {total_area:.1f} sq km of agri-land "
            "converted outside zoning limits."
        )
    else:
        title = "Urban Sprawl Alert"
        desc = (
            f"{total_area:.1f} sq km of agricultural land converted to urban use. "
            "Zoning review needed."
        )
    return Alert("urban_sprawl", AlertSeverity.MEDIUM, title, desc, items)


def data_gap_alert(records: Sequence[TransitionRecord]) -> Alert | None:
    items = tuple(r for r in records if r.confidence < LOW_CONFIDENCE_THRESHOLD)
    if len(items) <= DATA_GAP_COUNT_THRESHOLD:
        return None
    return Alert(
        "data_gap",
        AlertSeverity.LOW,
        "Data Gap Identified",
        f"High uncertainty in {len(items)} regions. "
        "Satellite shadow or cloud cover suspected.",
        items,
    )


def compute_bdi(years: Sequence[int], values: Sequence[float]) -> float | None:
    """Baseline Deviation Index of an aligned annual series.

    Returns:
        ``recent_rate / baseline_rate`` (0.0 when the baseline rate is 0), or
        ``None`` with fewer than 4 points.
    """
    n = min(len(years), len(values))
    if n < MIN_BDI_YEARS:
        return None

    baseline_span = years[n - 2] - years[0]
    recent_span = years[n - 1] - years[n - 2]
    baseline_rate = (values[n - 2] - values[0]) / baseline_span if baseline_span else 0.0
    recent_rate = (values[n - 1] - values[n - 2]) / recent_span if recent_span else 0.0

    return recent_rate / baseline_rate if baseline_rate != 0 else 0.0


def baseline_deviation_alert(
    years: Sequence[int],
    built_up_trend: Sequence[float],
) -> Alert | None:
    bdi = compute_bdi(years, built_up_trend)
    if bdi is None:
        return None

    if bdi > BDI_HIGH:
        return Alert(
            "baseline_deviation",
            AlertSeverity.HIGH,
            "Abnormal Growth Spike",
            f"ALERT: Urban expansion rate is {bdi:.1f}x higher than historical "
            f"baseline ({years[0]}-{years[-2]}). Verify immediately.",
        )
    if bdi > BDI_MEDIUM:
        return Alert(
            "baseline_deviation",
            AlertSeverity.MEDIUM,
            "Growth Acceleration",
            f"Urban growth is {bdi * 100 - 100:.0f}% faster than the "
            f"{years[0]}-{years[-2]} baseline.",
        )
    return None


# ── Engine ────────────────────────────────────────────────────────────────────

def generate_governance_alerts(
    records: Sequence[TransitionRecord],
    years: Sequence[int],
    built_up_trend: Sequence[float],
    persona: Persona = Persona.POLICY_MAKER,
) -> list[Alert]:
    """Evaluate all governance rules.

    Args:
        records:        Transition records (normally the filtered set).
        years:          Year axis of the time series.
        built_up_trend: Built-up areas aligned to ``years``.
        persona:        Active persona for phrasing.

    Returns:
        Triggered alerts in rule order; empty when nothing fires.
    """
    candidates = (
        ecological_risk_alert(records, persona),
        urban_sprawl_alert(records, persona),
        data_gap_alert(records),
        baseline_deviation_alert(years, built_up_trend),
    )
    alerts = [a for a in candidates if a is not None]
    logger.debug("Governance rules fired: %s", [a.rule for a in alerts])
    return alerts
