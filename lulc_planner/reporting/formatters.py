"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept snapshot components and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Placeholders
------------
A metric that is ``None`` (too few years to compute) is rendered as
``(insufficient data)`` rather than a zero, so a reader never mistakes a
missing metric for a measured one.
"""

from __future__ import annotations

from collections.abc import Sequence

from lulc_planner.config import RegionConfig
from lulc_planner.features.evolution import TransitionEvolution
from lulc_planner.governance.alerts import Alert
from lulc_planner.pipeline.engine import PlanningSnapshot
from lulc_planner.recommendations.actions import RecommendedAction
from lulc_planner.recommendations.ranker import PrioritizedRecord
from lulc_planner.recommendations.scorer import decision_status
from lulc_planner.recommendations.survey import FieldCheckTask, SurveyAllocation

_NA = "(insufficient data)"


# ── Header ────────────────────────────────────────────────────────────────────


def format_briefing_header(region: RegionConfig, snapshot: PlanningSnapshot) -> str:
    """Region, parameters and headline narrative."""
    p = snapshot.params
    years = f"{snapshot.years[0]}-{snapshot.years[-1]}" if snapshot.years else "none"
    lines = [
        "",
        f"=== LULC Planning Briefing: {region.name} ===",
        f"  Data version:  {region.data_version}",
        f"  Master plan:   {region.master_plan_year}",
        f"  Years:         {years}",
        f"  Persona:       {p.persona}    Scenario: {p.scenario}",
        f"  Min conf:      {p.min_confidence:.2f}    Intensity: {p.policy_intensity:.0f}%",
        "",
        f"  [{snapshot.narrative.emphasis.upper()}] {snapshot.narrative.title}",
        f"  {snapshot.narrative.body}",
    ]
    for story in snapshot.change_stories:
        lines.append(f"  > {story.text}")
    return "\n".join(lines)


# ── Time-series metrics ───────────────────────────────────────────────────────


def format_metrics(snapshot: PlanningSnapshot) -> str:
    """Eco risk, policy, projection, velocity, stability, trust and anomalies."""
    lines = ["", "  [TIME-SERIES METRICS]"]

    eco = snapshot.eco_risk
    if eco is None:
        lines.append(f"    Eco risk:        {_NA}")
    else:
        lines.append(
            f"    Eco risk:        {eco.trend}  (loss {eco.loss_area:+.1f} sq km; "
            f"Forest {eco.forest_loss_pct:+.1f}%, Water {eco.water_loss_pct:+.1f}%)"
        )

    pol = snapshot.policy_evaluation
    if pol is None:
        lines.append(f"    Policy impact:   {_NA}")
    else:
        lines.append(
            f"    Policy impact:   {pol.assessment}  "
            f"(pre {pol.pre_rate:.2f} -> post {pol.post_rate:.2f} sq km/yr)"
        )

    proj = snapshot.projection
    if proj is None:
        lines.append(f"    Projection:      {_NA}")
    else:
        saved = "" if proj.saved_area is None else f", saves {proj.saved_area:.2f} sq km"
        lines.append(
            f"    Projection:      {proj.projected_area:.2f} sq km by {proj.target_year} "
            f"(+{proj.increase:.2f}, {proj.risk_level} risk{saved})"
        )

    vel = snapshot.velocity
    if vel is None:
        lines.append(f"    Velocity:        {_NA}")
    else:
        lines.append(
            f"    Velocity:        {vel.velocity:.2f} sq km/yr, "
            f"accel {vel.acceleration:+.2f}  [{vel.status}]"
        )

    stab = snapshot.confidence_stability
    lines.append(
        f"    Conf stability:  {_NA}" if stab is None
        else f"    Conf stability:  {stab.label} (score {stab.score:.2f})"
    )

    trust = snapshot.trust
    lines.append(
        f"    Temporal trust:  {_NA}" if trust is None
        else f"    Temporal trust:  {trust.score}/100  [{trust.level}]"
    )

    for anomaly in snapshot.temporal_anomalies:
        lines.append(
            f"    Spike {anomaly.year}:      +{anomaly.growth:.1f} sq km  "
            f"[{anomaly.severity}] {anomaly.cause}"
        )
    return "\n".join(lines)


# ── Evolutions & actions ──────────────────────────────────────────────────────


def format_evolutions_table(evolutions: Sequence[TransitionEvolution]) -> str:
    """Transition evolutions in CPRI order."""
    lines = ["", "  [TRANSITION EVOLUTION]"]
    if not evolutions:
        lines.append("    (no transitions)")
        return "\n".join(lines)

    header = (
        f"    {'Transition':<28}  {'Latest':>8}  {'Total':>8}  {'Trend':<12}  "
        f"{'Anomaly':<16}  {'CPRI':>5}  {'Readiness':<16}"
    )
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for evo in evolutions:
        lines.append(
            f"    {evo.label[:28]:<28}  {evo.latest_flow:>8.1f}  {evo.total_volume:>8.1f}  "
            f"{evo.trend:<12}  {evo.anomaly:<16}  {evo.cpri:>5.2f}  {evo.readiness:<16}"
        )
    return "\n".join(lines)


def format_actions(actions: Sequence[RecommendedAction]) -> str:
    """Recommended actions, each followed by its audit trail."""
    lines = ["", "  [RECOMMENDED ACTIONS]"]
    if not actions:
        lines.append("    (no actions)")
        return "\n".join(lines)

    for i, act in enumerate(actions, start=1):
        lines.append(
            f"    {i}. [{act.urgency}] {act.action} -> {act.department} "
            f"({act.readiness_pct}% ready)"
        )
        lines.append(f"       {act.details}")
        for step in act.audit_trail:
            lines.append(f"         {step.step}. {step.label}: {step.value}")
    return "\n".join(lines)


# ── Alerts ────────────────────────────────────────────────────────────────────


def format_alerts(alerts: Sequence[Alert]) -> str:
    """Governance alerts, one block per rule."""
    lines = ["", "  [GOVERNANCE ALERTS]"]
    if not alerts:
        lines.append("    (no alerts triggered)")
        return "\n".join(lines)

    for alert in alerts:
        lines.append(f"    [{alert.severity.upper()}] {alert.title}")
        lines.append(f"      {alert.description}")
        if alert.triggering_records:
            lines.append(f"      Records: {len(alert.triggering_records)}")
    return "\n".join(lines)


# ── Record table ──────────────────────────────────────────────────────────────


def format_priority_table(
    ranked: Sequence[PrioritizedRecord],
    decision_counts: dict | None = None,
    limit: int = 10,
) -> str:
    """Top ``limit`` ranked records plus decision gate counts."""
    lines = ["", "  [PRIORITISED RECORDS]"]
    if not ranked:
        lines.append("    (no records pass the current filters)")
        return "\n".join(lines)

    header = (
        f"    {'Rank':>4}  {'Year':>4}  {'Transition':<28}  {'Area':>7}  "
        f"{'Conf':>5}  {'Impact':>7}  {'Status':<24}"
    )
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for rank, item in enumerate(ranked[:limit], start=1):
        rec = item.record
        transition = f"{rec.from_class} → {rec.to_class}"
        lines.append(
            f"    {rank:>4}  {rec.year:>4}  {transition[:28]:<28}  {rec.area_sq_km:>7.1f}  "
            f"{rec.confidence:>5.2f}  {item.impact_score:>7.1f}  "
            f"{decision_status(rec.confidence):<24}"
        )
    if len(ranked) > limit:
        lines.append(f"    ... {len(ranked) - limit} more")

    if decision_counts:
        lines.append("")
        for status, count in decision_counts.items():
            lines.append(f"    {status:<24} {count:>4}")
    return "\n".join(lines)


# ── Survey ────────────────────────────────────────────────────────────────────


def format_survey_allocation(
    allocation: SurveyAllocation,
    budget: float,
    field_checks: Sequence[FieldCheckTask] = (),
) -> str:
    """Funded survey sites, deferred shortfall and record-level field checks."""
    lines = [
        "",
        "  [FIELD SURVEY PLAN]",
        f"    Budget:      {budget:,.0f}",
        f"    Candidates:  {allocation.candidate_count}    "
        f"Max sites: {allocation.max_sites}",
        f"    Funded:      {len(allocation.selected)}    "
        f"Total cost: {allocation.total_cost:,.0f}",
    ]
    for task in allocation.selected:
        lines.append(
            f"      {task.task_id}  {task.from_class} → {task.to_class}  "
            f"{task.area_sq_km:.1f} sq km  conf {task.confidence:.2f}"
        )
    if allocation.deferred_count:
        lines.append(
            f"    Deferred:    {allocation.deferred_count} "
            f"(shortfall {allocation.shortfall_cost:,.0f})"
        )

    if field_checks:
        lines.append("")
        lines.append("    Field checks:")
        for check in field_checks:
            lines.append(f"      [{check.priority}] {check.task} @ {check.location}: {check.reason}")
    return "\n".join(lines)
