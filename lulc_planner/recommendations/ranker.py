"""
Record filtering and priority ranking.

Usage flow
----------
1. filter_records(records, min_confidence, scenario)
   -> list[TransitionRecord]     (confidence floor + scenario slice)

2. prioritize_records(filtered, persona)
   -> list[PrioritizedRecord]    (impact score desc, stable)

3. rank_records(prioritized, rank_mode)
   -> list[PrioritizedRecord]    (impact / area / confidence desc, stable)

The weighting (step 2) and the display order (step 3) are independent: the
impact score of every record is the same whatever ``rank_mode`` is selected.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from lulc_planner.models.records import TransitionRecord
from lulc_planner.recommendations.scorer import compute_impact_score, policy_weight
from lulc_planner.taxonomy.land_taxonomy import (
    DEGRADED_CLASSES,
    ECO_CLASSES,
    LandClass,
    Persona,
    RankMode,
    Scenario,
)


@dataclass(frozen=True)
class PrioritizedRecord:
    """A transition record with its persona-weighted impact score.

    Attributes:
        record:       The underlying record.
        weight:       Persona policy weight applied.
        impact_score: ``area × confidence × weight`` (1 decimal).
    """

    record:       TransitionRecord
    weight:       float
    impact_score: float


def in_scenario(record: TransitionRecord, scenario: Scenario) -> bool:
    """True if ``record`` belongs to the scenario slice."""
    match scenario:
        case Scenario.ALL:
            return True
        case Scenario.URBAN_FOCUS:
            return record.to_class is LandClass.BUILT_UP
        case Scenario.ECO_FOCUS:
            return record.from_class in ECO_CLASSES and record.to_class in DEGRADED_CLASSES
        case _:
            assert_never(scenario)


def filter_records(
    records: Sequence[TransitionRecord],
    min_confidence: float = 0.0,
    scenario: Scenario = Scenario.ALL,
) -> list[TransitionRecord]:
    """Keep records with confidence >= ``min_confidence`` inside ``scenario``."""
    return [
        r for r in records
        if r.confidence >= min_confidence and in_scenario(r, scenario)
    ]


def prioritize_records(
    records: Sequence[TransitionRecord],
    persona: Persona,
) -> list[PrioritizedRecord]:
    """Score every record and sort by impact descending (ties keep input order)."""
    scored = []
    for rec in records:
        weight = policy_weight(persona, rec.from_class, rec.to_class)
        scored.append(
            PrioritizedRecord(
                record=rec,
                weight=weight,
                impact_score=compute_impact_score(rec.area_sq_km, rec.confidence, weight),
            )
        )
    scored.sort(key=lambda p: p.impact_score, reverse=True)
    return scored


def rank_records(
    prioritized: Sequence[PrioritizedRecord],
    rank_mode: RankMode = RankMode.IMPACT,
) -> list[PrioritizedRecord]:
    """Return a new list ordered by ``rank_mode`` (descending, stable)."""
    match rank_mode:
        case RankMode.IMPACT:
            return sorted(prioritized, key=lambda p: p.impact_score, reverse=True)
        case RankMode.AREA:
            return sorted(prioritized, key=lambda p: p.record.area_sq_km, reverse=True)
        case RankMode.CONFIDENCE:
            return sorted(prioritized, key=lambda p: p.record.confidence, reverse=True)
        case _:
            assert_never(rank_mode)
