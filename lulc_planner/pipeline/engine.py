"""
Planning engine: one total, synchronous recompute of every derived structure.

``PlanningEngine.recompute()`` is the output boundary of the system.  It runs
the components in a deterministic sequence:

  Step 1 — Time series:  years, Built-up trend, eco risk, policy evaluation,
                         projection, velocity, confidence stability, trust,
                         temporal anomalies.  Each runs independently.
  Step 2 — Evolutions:   group all transition records and rank by CPRI.
  Step 3 — Decisions:    recommended actions, survey allocation and the
                         headline narrative from the evolutions.
  Step 4 — Records:      filter by scenario + confidence floor, then alerts,
                         priority ranking, decision counts, field check tasks
                         and change stories on the filtered set.

Minimum-data guards inside the components return ``None`` or ``[]``; the
snapshot carries those through unchanged, so consumers render a placeholder
instead of failing.

The engine holds only its ``AppConfig``.  Every call to ``recompute()`` is a
pure function of (transitions, series, params); changing a parameter means
building a new ``PlanningParameters`` with ``with_changes()`` and calling
``recompute()`` again.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.config import AppConfig
from lulc_planner.features.evolution import TransitionEvolution, analyze_transition_evolution
from lulc_planner.features.quality import TrustScore, temporal_trust_score
from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.features.velocity import (
    ConfidenceStability,
    VelocityMetrics,
    compute_velocity,
    confidence_stability,
)
from lulc_planner.governance.alerts import Alert, generate_governance_alerts
from lulc_planner.models.params import PlanningParameters
from lulc_planner.models.records import TimeSeriesPoint, TransitionRecord
from lulc_planner.monitoring.anomalies import TemporalAnomaly, explain_temporal_anomalies
from lulc_planner.monitoring.eco_risk import EcoRiskAssessment, assess_eco_risk
from lulc_planner.monitoring.policy import PolicyEvaluation, evaluate_policy
from lulc_planner.monitoring.projection import FutureProjection, project_future
from lulc_planner.recommendations.actions import RecommendedAction, recommend_actions
from lulc_planner.recommendations.narrative import (
    ChangeStory,
    Narrative,
    generate_change_narrative,
    generate_change_stories,
)
from lulc_planner.recommendations.ranker import (
    PrioritizedRecord,
    filter_records,
    prioritize_records,
    rank_records,
)
from lulc_planner.recommendations.scorer import count_decisions
from lulc_planner.recommendations.survey import (
    FieldCheckTask,
    SurveyAllocation,
    build_field_check_tasks,
    optimize_survey_budget,
)
from lulc_planner.taxonomy.land_taxonomy import DecisionStatus, LandClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanningSnapshot:
    """Every derived structure for one (inputs, parameters) combination.

    Attributes:
        params:               Parameters the snapshot was computed with.
        years:                Sorted distinct years of the time series.
        built_up_trend:       Built-up areas aligned to ``years``.
        eco_risk:             Forest/Water loss; ``None`` below 2 years.
        policy_evaluation:    Pre vs post growth; ``None`` below 4 years.
        projection:           Built-up projection; ``None`` below 3 years.
        velocity:             Built-up velocity; ``None`` below 3 years.
        confidence_stability: Built-up confidence stability; ``None`` below 2 values.
        trust:                Temporal trust score; ``None`` below 2 years.
        temporal_anomalies:   Built-up growth spikes.
        evolutions:           Transition evolutions ranked by CPRI.
        recommended_actions:  Persona-ordered top interventions.
        alerts:               Governance alerts on the filtered records.
        filtered_records:     Records passing scenario + confidence filters.
        prioritized_records:  Filtered records by impact score.
        ranked_records:       Prioritised records in ``params.rank_mode`` order.
        decision_counts:      Filtered records per decision gate.
        survey_allocation:    Budget-constrained survey plan.
        field_check_tasks:    Record-level verification tasks.
        narrative:            Headline narrative.
        change_stories:       Persona one-line summary.
    """

    params:               PlanningParameters
    years:                tuple[int, ...]
    built_up_trend:       tuple[float, ...]
    eco_risk:             EcoRiskAssessment | None
    policy_evaluation:    PolicyEvaluation | None
    projection:           FutureProjection | None
    velocity:             VelocityMetrics | None
    confidence_stability: ConfidenceStability | None
    trust:                TrustScore | None
    temporal_anomalies:   tuple[TemporalAnomaly, ...]
    evolutions:           tuple[TransitionEvolution, ...]
    recommended_actions:  tuple[RecommendedAction, ...]
    alerts:               tuple[Alert, ...]
    filtered_records:     tuple[TransitionRecord, ...]
    prioritized_records:  tuple[PrioritizedRecord, ...]
    ranked_records:       tuple[PrioritizedRecord, ...]
    decision_counts:      dict[DecisionStatus, int]
    survey_allocation:    SurveyAllocation
    field_check_tasks:    tuple[FieldCheckTask, ...]
    narrative:            Narrative
    change_stories:       tuple[ChangeStory, ...]


class PlanningEngine:
    """Recomputes a ``PlanningSnapshot`` from inputs and parameters.

    Attributes:
        config: Application configuration (engine constants, anomaly drivers).
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()

    def recompute(
        self,
        transitions: Sequence[TransitionRecord],
        series: Sequence[TimeSeriesPoint],
        params: PlanningParameters | None = None,
    ) -> PlanningSnapshot:
        """Run every component and return the full snapshot.

        Args:
            transitions: Transition records.  Not mutated.
            series:      Time-series points.  Not mutated.
            params:      Planning parameters; defaults from config when ``None``.

        Returns:
            ``PlanningSnapshot``.
        """
        params = params or self.config.defaults.to_parameters()
        engine_cfg = self.config.engine

        logger.info(
            "Recompute starting | transitions=%d | points=%d | persona=%s | scenario=%s",
            len(transitions), len(series), params.persona, params.scenario,
            extra={"persona": str(params.persona), "scenario": str(params.scenario)},
        )

        # Step 1: time series
        years = distinct_years(series)
        built_up = extract_trend(series, LandClass.BUILT_UP, years)

        eco_risk = assess_eco_risk(series)
        policy_evaluation = evaluate_policy(series)
        projection = project_future(
            series,
            policy_intensity=params.policy_intensity,
            horizon_years=engine_cfg.projection_horizon_years,
            max_reduction=engine_cfg.max_policy_reduction,
        )
        velocity = compute_velocity(built_up, years)
        stability = confidence_stability(series, LandClass.BUILT_UP)
        trust = temporal_trust_score(series)
        anomalies = explain_temporal_anomalies(
            series,
            drivers=self.config.anomalies.drivers,
            spike_threshold=engine_cfg.spike_threshold_sq_km,
        )
        if len(years) < 4:
            logger.warning(
                "Only %d distinct year(s) in time series; some metrics are unavailable",
                len(years),
            )

        # Step 2: evolutions
        evolutions = analyze_transition_evolution(transitions)

        # Step 3: decisions over evolutions
        actions = recommend_actions(evolutions, params.persona, engine_cfg.top_actions)
        allocation = optimize_survey_budget(
            evolutions, params.budget, engine_cfg.survey_cost_per_site
        )
        narrative = generate_change_narrative(evolutions, params.persona)

        # Step 4: filtered records
        filtered = filter_records(transitions, params.min_confidence, params.scenario)
        alerts = generate_governance_alerts(filtered, years, built_up, params.persona)
        prioritized = prioritize_records(filtered, params.persona)
        ranked = rank_records(prioritized, params.rank_mode)
        field_checks = build_field_check_tasks(prioritized, engine_cfg.field_check_limit)
        stories = generate_change_stories(filtered, params.persona)

        logger.info(
            "Recompute completed | evolutions=%d | actions=%d | alerts=%d | "
            "filtered=%d | survey_selected=%d/%d",
            len(evolutions), len(actions), len(alerts), len(filtered),
            len(allocation.selected), allocation.candidate_count,
            extra={
                "persona": str(params.persona),
                "alert_count": len(alerts),
                "filtered_count": len(filtered),
            },
        )

        return PlanningSnapshot(
            params=params,
            years=tuple(years),
            built_up_trend=tuple(built_up),
            eco_risk=eco_risk,
            policy_evaluation=policy_evaluation,
            projection=projection,
            velocity=velocity,
            confidence_stability=stability,
            trust=trust,
            temporal_anomalies=tuple(anomalies),
            evolutions=tuple(evolutions),
            recommended_actions=tuple(actions),
            alerts=tuple(alerts),
            filtered_records=tuple(filtered),
            prioritized_records=tuple(prioritized),
            ranked_records=tuple(ranked),
            decision_counts=count_decisions(filtered),
            survey_allocation=allocation,
            field_check_tasks=tuple(field_checks),
            narrative=narrative,
            change_stories=tuple(stories),
        )


def recompute(
    transitions: Sequence[TransitionRecord],
    series: Sequence[TimeSeriesPoint],
    params: PlanningParameters | None = None,
) -> PlanningSnapshot:
    """Recompute with default configuration."""
    return PlanningEngine().recompute(transitions, series, params)
