"""
Priority scoring: persona-weighted impact of a transition record, and the
per-record decision gate.

Impact formula
--------------
    impact_score = area_sq_km × confidence × policy_weight(persona, from, to)

Weight table
------------
Environmental officer:
    origin Forest / Water          3.0
    anything else                  1.0
Urban planner:
    destination Built-up           2.0
    anything else                  1.0
Policy maker (fixed domain weights, first match wins):
    Forest → Built-up              1.5
    origin Water                   2.0
    Agriculture → Built-up         1.2
    anything else                  1.0

Decision gate (per record, by confidence)
-----------------------------------------
    >= 0.85   Safe to Act
    >= 0.75   Review Required
    else      Field Validation Needed
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import assert_never

from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import (
    ECO_CLASSES,
    DecisionStatus,
    LandClass,
    Persona,
)

SAFE_TO_ACT_CONFIDENCE = 0.85
REVIEW_CONFIDENCE = 0.75


def policy_weight(persona: Persona, from_class: LandClass, to_class: LandClass) -> float:
    """Return the persona-specific weight for a (from, to) transition."""
    match persona:
        case Persona.ENVIRONMENTAL_OFFICER:
            return 3.0 if from_class in ECO_CLASSES else 1.0
        case Persona.URBAN_PLANNER:
            return 2.0 if to_class is LandClass.BUILT_UP else 1.0
        case Persona.POLICY_MAKER:
            if from_class is LandClass.FOREST and to_class is LandClass.BUILT_UP:
                return 1.5
            if from_class is LandClass.WATER:
                return 2.0
            if from_class is LandClass.AGRICULTURE and to_class is LandClass.BUILT_UP:
                return 1.2
            return 1.0
        case _:
            assert_never(persona)


def compute_impact_score(area_sq_km: float, confidence: float, weight: float) -> float:
    """``area × confidence × weight``, rounded to 1 decimal."""
    return round(area_sq_km * confidence * weight, 1)


def decision_status(confidence: float) -> DecisionStatus:
    if confidence >= SAFE_TO_ACT_CONFIDENCE:
        return DecisionStatus.SAFE_TO_ACT
    if confidence >= REVIEW_CONFIDENCE:
        return DecisionStatus.REVIEW_REQUIRED
    return DecisionStatus.FIELD_VALIDATION_NEEDED


def count_decisions(records: Sequence[TransitionRecord]) -> dict[DecisionStatus, int]:
    """Count records per decision gate; every status is present in the result."""
    counts = {status: 0 for status in DecisionStatus}
    for rec in records:
        counts[decision_status(rec.confidence)] += 1
    return counts
