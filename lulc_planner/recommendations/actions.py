"""
Action recommender: turns ranked transition evolutions into routed
interventions with an explicit audit trail.

Persona ordering
----------------
The CPRI-ranked evolutions are stably partitioned, never fully re-sorted:
    urban planner          destination Built-up first
    environmental officer  origin Forest / Water first
    policy maker           CPRI order unchanged
The top ``top_n`` (3) after partitioning are recommended.

Decision rules (priority order — first match wins)
---------------------------------------------------
    1. cpri >= 0.75  Immediate, auto-routed by class:
         origin Forest          → Environment Dept  (halt order + restoration)
         destination Built-up   → Urban Planning    (zoning + development tax)
         otherwise              → Revenue Dept      (land records update)
    2. cpri >= 0.45  High, Planning Committee review.
    3. otherwise     Critical, Enforcement Wing field inspection.

"Critical" on the lowest band means unresolved uncertainty that must be
validated on the ground, not the most urgent enforcement.

Audit trail
-----------
Every recommendation carries three ``AuditStep`` entries built from fixed
formula text, so any consumer can reproduce the decision from the same
inputs:
    1. Data Inputs      — area, latest confidence, confidence stability
    2. Calculated CPRI  — value and formula
    3. Decision Rule    — the threshold rule that fired
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from lulc_planner.features.evolution import (
    READY_THRESHOLD,
    REVIEW_THRESHOLD,
    TransitionEvolution,
)
from lulc_planner.taxonomy.land_taxonomy import ECO_CLASSES, LandClass, Persona, Urgency

DEFAULT_TOP_N = 3
CPRI_FORMULA = "Norm. Impact × Trust × Conf"


@dataclass(frozen=True)
class AuditStep:
    """One line of a recommendation's audit trail."""

    step:  int
    label: str
    value: str


@dataclass(frozen=True)
class RecommendedAction:
    """A routed intervention for one transition evolution.

    Attributes:
        evolution:     The evolution this action addresses.
        action:        Intervention text.
        urgency:       Immediate / High / Critical.
        department:    Owning department.
        readiness_pct: ``round(cpri × 100)``.
        audit_trail:   Three ``AuditStep`` entries (inputs, CPRI, rule).
    """

    evolution:     TransitionEvolution
    action:        str
    urgency:       Urgency
    department:    str
    readiness_pct: int
    audit_trail:   tuple[AuditStep, ...]

    @property
    def details(self) -> str:
        return f"{self.evolution.label} ({self.evolution.latest_flow} sq km)"


def persona_priority(evolution: TransitionEvolution, persona: Persona) -> bool:
    """True if ``evolution`` belongs to the persona's focus set."""
    match persona:
        case Persona.URBAN_PLANNER:
            return evolution.to_class is LandClass.BUILT_UP
        case Persona.ENVIRONMENTAL_OFFICER:
            return evolution.from_class in ECO_CLASSES
        case Persona.POLICY_MAKER:
            return False
        case _:
            assert_never(persona)


def order_for_persona(
    evolutions: Sequence[TransitionEvolution],
    persona: Persona,
) -> list[TransitionEvolution]:
    """Stable partition: the persona's focus set first, each part in CPRI order."""
    focus = [e for e in evolutions if persona_priority(e, persona)]
    rest = [e for e in evolutions if not persona_priority(e, persona)]
    return focus + rest


def _route(evolution: TransitionEvolution) -> tuple[Urgency, str, str, str]:
    """Return (urgency, department, action, decision rule) for one evolution."""
    cpri = evolution.cpri
    if cpri >= READY_THRESHOLD:
        rule = f"Score ≥ {READY_THRESHOLD} → Auto-Route to Dept"
        if evolution.from_class is LandClass.FOREST:
            return (Urgency.IMMEDIATE, "Environment Dept",
                    "Issue Halt Order & Eco-Restoration Plan", rule)
        if evolution.to_class is LandClass.BUILT_UP:
            return (Urgency.IMMEDIATE, "Urban Planning",
                    "Formalize Zoning & Collect Development Tax", rule)
        return (Urgency.IMMEDIATE, "Revenue Dept", "Update Land Records Registry", rule)

    if cpri >= REVIEW_THRESHOLD:
        return (
            Urgency.HIGH,
            "Planning Committee",
            f"Schedule Committee Review for {evolution.latest_flow} sq km change",
            f"Score ≥ {REVIEW_THRESHOLD} → Committee Review",
        )

    return (
        Urgency.CRITICAL,
        "Enforcement Wing",
        f"Dispatch Field Inspection Team to verify "
        f"{evolution.from_class}->{evolution.to_class}",
        f"Score < {REVIEW_THRESHOLD} → Field Validation",
    )


def build_audit_trail(evolution: TransitionEvolution, rule: str) -> tuple[AuditStep, ...]:
    stable = "Yes" if evolution.confidence_stable else "No"
    return (
        AuditStep(
            1,
            "Data Inputs",
            f"Area: {evolution.latest_flow}km² | Conf: {evolution.latest_confidence} "
            f"| Stable: {stable}",
        ),
        AuditStep(2, "Calculated CPRI", f"{evolution.cpri:.2f} ({CPRI_FORMULA})"),
        AuditStep(3, "Decision Rule", rule),
    )


def recommend_actions(
    evolutions: Sequence[TransitionEvolution],
    persona: Persona = Persona.POLICY_MAKER,
    top_n: int = DEFAULT_TOP_N,
) -> list[RecommendedAction]:
    """Recommend interventions for the persona's top ``top_n`` evolutions.

    Args:
        evolutions: Evolutions ranked by CPRI descending.
        persona:    Active persona.
        top_n:      Maximum recommendations.

    Returns:
        Up to ``top_n`` ``RecommendedAction`` objects; ``[]`` for no evolutions.
    """
    recommendations: list[RecommendedAction] = []
    for evolution in order_for_persona(evolutions, persona)[:top_n]:
        urgency, department, action, rule = _route(evolution)
        recommendations.append(
            RecommendedAction(
                evolution=evolution,
                action=action,
                urgency=urgency,
                department=department,
                readiness_pct=int(round(evolution.cpri * 100)),
                audit_trail=build_audit_trail(evolution, rule),
            )
        )
    return recommendations
