"""
Field survey planning.

Budget optimizer
----------------
``optimize_survey_budget()`` picks field-validation sites under a budget:

1. Candidates: evolutions with CPRI < 0.45 (the Field Validation band).
2. Rank candidates by latest flow descending (stable).  Volume at risk, not
   ambiguity, drives the order.
3. ``max_sites = floor(budget / cost_per_site)``; a zero or negative budget
   gives 0 sites.
4. The first ``max_sites`` candidates are selected; the rest are deferred,
   with the shortfall reported as ``deferred_count × cost_per_site``.

Field check tasks
-----------------
``build_field_check_tasks()`` works on individual prioritised records rather
than evolutions.  A record needs ground verification when

    (confidence < 0.75 and area > 0.5)  or  (impact > 2.0 and confidence < 0.85)

Tasks are ordered by area descending and capped (5 by default).
"""

from __future__ import annotations

import hashlib
import math
from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.evolution import REVIEW_THRESHOLD, TransitionEvolution
from lulc_planner.recommendations.ranker import PrioritizedRecord
from lulc_planner.taxonomy.land_taxonomy import LandClass

DEFAULT_COST_PER_SITE = 1200.0
DEFAULT_FIELD_CHECK_LIMIT = 5


@dataclass(frozen=True)
class SurveyTask:
    """One site selected for a field survey.

    Attributes:
        task_id:    Deterministic id from (from, to, latest year).
        from_class: Origin class.
        to_class:   Destination class.
        confidence: Latest detection confidence.
        area_sq_km: Latest flow.
    """

    task_id:    str
    from_class: LandClass
    to_class:   LandClass
    confidence: float
    area_sq_km: float


@dataclass(frozen=True)
class SurveyAllocation:
    """Budget-constrained survey plan.

    Attributes:
        selected:        Tasks funded by the budget, in priority order.
        deferred_count:  Candidates left unfunded.
        total_cost:      ``len(selected) × cost_per_site``.
        max_sites:       ``floor(budget / cost_per_site)`` (>= 0).
        shortfall_cost:  Cost to also fund the deferred candidates.
        candidate_count: Candidates in the Field Validation band.
    """

    selected:        tuple[SurveyTask, ...]
    deferred_count:  int
    total_cost:      float
    max_sites:       int
    shortfall_cost:  float
    candidate_count: int


@dataclass(frozen=True)
class FieldCheckTask:
    """A record-level ground verification task."""

    task:     str
    reason:   str
    location: str
    priority: str


def survey_task_id(from_class: LandClass, to_class: LandClass, year: int) -> str:
    payload = f"{from_class}|{to_class}|{year}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]


def _to_task(evolution: TransitionEvolution) -> SurveyTask:
    latest = evolution.latest
    return SurveyTask(
        task_id=survey_task_id(latest.from_class, latest.to_class, latest.year),
        from_class=latest.from_class,
        to_class=latest.to_class,
        confidence=latest.confidence,
        area_sq_km=evolution.latest_flow,
    )


def optimize_survey_budget(
    evolutions: Sequence[TransitionEvolution],
    budget: float,
    cost_per_site: float = DEFAULT_COST_PER_SITE,
) -> SurveyAllocation:
    """Select Field Validation sites that fit within ``budget``.

    Args:
        evolutions:    Transition evolutions (any order).
        budget:        Available budget; <= 0 or NaN selects nothing, an
                       infinite budget funds every candidate.
        cost_per_site: Cost of one site visit (> 0).

    Returns:
        ``SurveyAllocation``.  Never raises for a small, negative or
        non-finite budget.
    """
    candidates = [e for e in evolutions if e.cpri < REVIEW_THRESHOLD]
    ranked = sorted(candidates, key=lambda e: e.latest_flow, reverse=True)

    affordable = budget / cost_per_site if budget > 0 else 0.0
    if math.isnan(affordable):
        max_sites = 0
    elif math.isinf(affordable):
        max_sites = len(ranked)
    else:
        max_sites = math.floor(affordable)
    selected = tuple(_to_task(e) for e in ranked[:max_sites])
    deferred_count = len(ranked) - len(selected)

    return SurveyAllocation(
        selected=selected,
        deferred_count=deferred_count,
        total_cost=len(selected) * cost_per_site,
        max_sites=max_sites,
        shortfall_cost=deferred_count * cost_per_site,
        candidate_count=len(ranked),
    )


def needs_field_check(item: PrioritizedRecord) -> bool:
    rec = item.record
    uncertain = rec.confidence < 0.75 and rec.area_sq_km > 0.5
    high_impact = item.impact_score > 2.0 and rec.confidence < 0.85
    return uncertain or high_impact


def build_field_check_tasks(
    prioritized: Sequence[PrioritizedRecord],
    limit: int = DEFAULT_FIELD_CHECK_LIMIT,
) -> list[FieldCheckTask]:
    """Return up to ``limit`` record-level verification tasks, largest area first."""
    flagged = sorted(
        (p for p in prioritized if needs_field_check(p)),
        key=lambda p: p.record.area_sq_km,
        reverse=True,
    )

    tasks: list[FieldCheckTask] = []
    for p in flagged[:limit]:
        rec = p.record
        if rec.confidence < 0.75:
            reason = "Low model confidence due to spectral mixing"
        else:
            reason = "High-impact transition requires on-ground verification"
        tasks.append(
            FieldCheckTask(
                task=f"Validate {rec.from_class} → {rec.to_class}",
                reason=reason,
                location=f"{rec.area_sq_km} sq km zone",
                priority="High" if p.impact_score > 2.5 else "Medium",
            )
        )
    return tasks
