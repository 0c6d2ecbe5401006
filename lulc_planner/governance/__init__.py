"""
Rule-based governance alerts for the LULC planner.

  governance/alerts.py — Alert dataclass, the four independent rules, the
                         Baseline Deviation Index and generate_governance_alerts().

Alerts are advisory.  The rules flag conditions that warrant attention
(ecological conversion, sprawl, data gaps, growth spikes); they do not
determine legal or regulatory status of any parcel.
"""

from lulc_planner.governance.alerts import (
    Alert,
    baseline_deviation_alert,
    compute_bdi,
    data_gap_alert,
    ecological_risk_alert,
    generate_governance_alerts,
    urban_sprawl_alert,
)

__all__ = [
    "Alert",
    "baseline_deviation_alert",
    "compute_bdi",
    "data_gap_alert",
    "ecological_risk_alert",
    "generate_governance_alerts",
    "urban_sprawl_alert",
]
