"""
Time-series monitoring: ecological risk, policy effectiveness, growth
projection and temporal anomaly explanation.

Modules
-------
eco_risk   : EcoRiskAssessment + assess_eco_risk() — Forest/Water baseline loss.
policy     : PolicyEvaluation + evaluate_policy() — pre vs post growth rate.
projection : FutureProjection + project_future() — intervention simulation.
anomalies  : TemporalAnomaly + explain_temporal_anomalies() — growth spikes.

All functions are pure and return ``None`` (or ``[]``) when the time series
has too few years to support the metric.
"""
