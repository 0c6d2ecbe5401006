"""
Tests for lulc_planner/governance/alerts.py.

What we test
------------
ecological_risk_alert():
  - Fires for Forest/Water → Built-up/Barren above 0.80 confidence only.
  - Persona phrasing for the environmental officer.

urban_sprawl_alert():
  - Fires when Agriculture → Built-up area sums above 5 sq km.

data_gap_alert():
  - Fires with more than 2 records below 0.60 confidence.

compute_bdi() / baseline_deviation_alert():
  - [10, 14, 18, 25] over 2018–2024 → 1.75 → HIGH.
  - BDI 1.3 → MEDIUM; 1.05 → no alert.
  - Fewer than 4 points → None; zero baseline → 0.0.

generate_governance_alerts():
  - Sample data fires all four rules in rule order.
  - Empty records + short trend → [].
"""

from __future__ import annotations

import pytest

from lulc_planner.governance.alerts import (
    baseline_deviation_alert,
    compute_bdi,
    data_gap_alert,
    ecological_risk_alert,
    generate_governance_alerts,
    urban_sprawl_alert,
)
from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import AlertSeverity, Persona

YEARS = [2018, 2020, 2022, 2024]


def _rec(frm, to, area=1.0, conf=0.9, year=2024) -> TransitionRecord:
    return TransitionRecord(year=year, from_class=frm, to_class=to, area_sq_km=area, confidence=conf)


# ── Ecological risk ────────────────────────────────────────────────────────────

class TestEcologicalRisk:
    def test_fires_on_verified_eco_loss(self):
        alert = ecological_risk_alert([_rec("Forest", "Built-up", conf=0.85)])
        assert alert.rule == "ecological_risk"
        assert alert.severity is AlertSeverity.HIGH
        assert len(alert.triggering_records) == 1

    def test_water_to_barren_counts(self):
        assert ecological_risk_alert([_rec("Water", "Barren", conf=0.9)]) is not None

    def test_confidence_must_exceed_threshold(self):
        assert ecological_risk_alert([_rec("Forest", "Built-up", conf=0.80)]) is None

    def test_non_eco_origin_ignored(self):
        assert ecological_risk_alert([_rec("Agriculture", "Built-up", conf=0.95)]) is None

    def test_persona_phrasing(self):
        records = [_rec("Forest", "Barren", conf=0.9)]
        officer = ecological_risk_alert(records, Persona.ENVIRONMENTAL_OFFICER)
        planner = ecological_risk_alert(records, Persona.URBAN_PLANNER)
        assert officer.title == "Critical Ecosystem Loss"
        assert planner.title == "Ecological Risk"


# ── Urban sprawl ───────────────────────────────────────────────────────────────

class TestUrbanSprawl:
    def test_fires_above_five(self):
        records = [_rec("Agriculture", "Built-up", area=3.0), _rec("Agriculture", "Built-up", area=2.5)]
        alert = urban_sprawl_alert(records)
        assert alert.severity is AlertSeverity.MEDIUM
        assert "5.5 sq km" in alert.description

    def test_exactly_five_does_not_fire(self):
        assert urban_sprawl_alert([_rec("Agriculture", "Built-up", area=5.0)]) is None

    def test_planner_phrasing(self):
        alert = urban_sprawl_alert([_rec("Agriculture", "Built-up", area=6.0)], Persona.URBAN_PLANNER)
        assert alert.title == "Unplanned Sprawl Detected"


# ── Data gap ───────────────────────────────────────────────────────────────────

class TestDataGap:
    def test_three_low_confidence_records(self):
        records = [_rec("Forest", "Barren", conf=c) for c in (0.5, 0.55, 0.59)]
        alert = data_gap_alert(records)
        assert alert.severity is AlertSeverity.LOW
        assert "3 regions" in alert.description

    def test_two_is_not_enough(self):
        records = [_rec("Forest", "Barren", conf=c) for c in (0.5, 0.55, 0.60)]
        assert data_gap_alert(records) is None


# ── BDI ────────────────────────────────────────────────────────────────────────

class TestBaselineDeviation:
    def test_bdi_high(self):
        assert compute_bdi(YEARS, [10, 14, 18, 25]) == pytest.approx(1.75)
        alert = baseline_deviation_alert(YEARS, [10, 14, 18, 25])
        assert alert.severity is AlertSeverity.HIGH
        assert alert.title == "Abnormal Growth Spike"
        assert "2018-2022" in alert.description

    def test_bdi_medium(self):
        values = [10, 14, 18, 23.2]
        assert compute_bdi(YEARS, values) == pytest.approx(1.3)
        alert = baseline_deviation_alert(YEARS, values)
        assert alert.severity is AlertSeverity.MEDIUM
        assert alert.title == "Growth Acceleration"

    def test_bdi_low_no_alert(self):
        values = [10, 14, 18, 22.2]
        assert compute_bdi(YEARS, values) == pytest.approx(1.05)
        assert baseline_deviation_alert(YEARS, values) is None

    def test_too_few_points(self):
        assert compute_bdi(YEARS[:3], [10, 14, 18]) is None
        assert baseline_deviation_alert(YEARS[:3], [10, 14, 18]) is None

    def test_zero_baseline(self):
        assert compute_bdi(YEARS, [10, 10, 10, 20]) == 0.0


# ── Engine ─────────────────────────────────────────────────────────────────────

class TestGenerateGovernanceAlerts:
    def test_sample_fires_all_rules_in_order(self, sample_transitions):
        built_up = [96.4, 104.8, 117.6, 136.2]
        alerts = generate_governance_alerts(sample_transitions, YEARS, built_up)
        assert [a.rule for a in alerts] == [
            "ecological_risk",
            "urban_sprawl",
            "data_gap",
            "baseline_deviation",
        ]
        assert len(alerts[0].triggering_records) == 4
        assert alerts[3].severity is AlertSeverity.HIGH

    def test_nothing_fires(self):
        assert generate_governance_alerts([], [2020], [1.0]) == []

    def test_baseline_alert_has_no_records(self):
        alerts = generate_governance_alerts([], YEARS, [10, 14, 18, 25])
        assert len(alerts) == 1
        assert alerts[0].triggering_records == ()
