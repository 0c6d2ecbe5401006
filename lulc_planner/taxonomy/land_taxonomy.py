"""
Closed vocabularies for the LULC planning decision engine.

Two orthogonal dimensions drive every persona-aware output:
  - ``Persona``  — the *who*:  which stakeholder is reading the output?
  - ``Scenario`` — the *what*: which slice of transitions is in focus?

The remaining enums are the labels produced by the scoring components.  They
are ``StrEnum`` so they serialise to JSON and compare to plain strings without
conversion.

Usage example::

    from lulc_planner.taxonomy.land_taxonomy import LandClass, Persona

    persona = Persona.URBAN_PLANNER
    origin  = LandClass.parse("Water Body")   # -> LandClass.WATER

This module has NO imports from any other ``lulc_planner`` package.
"""

from enum import StrEnum


class LandClass(StrEnum):
    """Land Use / Land Cover class."""

    FOREST = "Forest"
    WATER = "Water"
    BUILT_UP = "Built-up"
    AGRICULTURE = "Agriculture"
    BARREN = "Barren"

    @classmethod
    def parse(cls, raw: str) -> "LandClass":
        """Resolve a raw class label, accepting common aliases.

        Raises:
            ValueError: If the label matches no class or alias.
        """
        key = raw.strip().lower()
        resolved = _LAND_CLASS_ALIASES.get(key)
        if resolved is None:
            valid = sorted(c.value for c in cls)
            raise ValueError(f"Unknown land class '{raw}'. Valid values: {valid}")
        return resolved


_LAND_CLASS_ALIASES: dict[str, LandClass] = {
    "forest": LandClass.FOREST,
    "water": LandClass.WATER,
    "water body": LandClass.WATER,
    "waterbody": LandClass.WATER,
    "built-up": LandClass.BUILT_UP,
    "built up": LandClass.BUILT_UP,
    "builtup": LandClass.BUILT_UP,
    "urban": LandClass.BUILT_UP,
    "agriculture": LandClass.AGRICULTURE,
    "cropland": LandClass.AGRICULTURE,
    "barren": LandClass.BARREN,
    "bare": LandClass.BARREN,
}

# Origins whose loss counts as ecological depletion.
ECO_CLASSES: frozenset[LandClass] = frozenset({LandClass.FOREST, LandClass.WATER})

# Destinations that count as irreversible conversion of an eco origin.
DEGRADED_CLASSES: frozenset[LandClass] = frozenset({LandClass.BUILT_UP, LandClass.BARREN})


class Persona(StrEnum):
    """Stakeholder viewpoint used to reweight ranking and narrative."""

    URBAN_PLANNER = "urban_planner"
    ENVIRONMENTAL_OFFICER = "environmental_officer"
    POLICY_MAKER = "policy_maker"


class Scenario(StrEnum):
    """Planning scenario filter applied to transition records."""

    ALL = "all"
    URBAN_FOCUS = "urban"
    ECO_FOCUS = "eco"


class RankMode(StrEnum):
    """Sort key for the prioritised record table."""

    IMPACT = "impact"
    AREA = "area"
    CONFIDENCE = "confidence"


# ── Time-series labels ────────────────────────────────────────────────────────


class EcoTrend(StrEnum):
    STABLE = "Stable"
    DECLINING = "Declining"
    RAPID_DEGRADATION = "Rapid Degradation"
    RECOVERING = "Recovering"


class VelocityStatus(StrEnum):
    RAPID_ACCELERATION = "Rapid Acceleration"
    ACCELERATING = "Accelerating"
    STABLE = "Stable"
    DECELERATING = "Decelerating"
    RAPID_DECELERATION = "Rapid Deceleration"


class StabilityLabel(StrEnum):
    HIGH_STABILITY = "High Stability"
    MODERATE_STABILITY = "Moderate Stability"
    HIGHLY_UNSTABLE = "Highly Unstable"


class TrustLevel(StrEnum):
    HIGH_TRUST = "High Trust"
    MODERATE = "Moderate"
    LOW_TRUST = "Low Trust"


class PolicyAssessment(StrEnum):
    EFFECTIVE_CONTAINMENT = "Effective Containment"
    POLICY_FAILURE = "Policy Failure"
    STEADY_STATE = "Steady State"
    NEUTRAL = "Neutral"


class RiskLevel(StrEnum):
    LOW = "Low"
    HIGH = "High"
    CRITICAL = "Critical"


# ── Transition evolution labels ───────────────────────────────────────────────


class TrendDirection(StrEnum):
    ACCELERATING = "Accelerating"
    DECELERATING = "Decelerating"
    STABLE = "Stable"


class AnomalyLevel(StrEnum):
    NORMAL = "Normal"
    ELEVATED = "Elevated"
    SURGE = "Surge"


class Readiness(StrEnum):
    FIELD_VALIDATION = "Field Validation"
    POLICY_REVIEW = "Policy Review"
    READY_FOR_ACTION = "Ready for Action"


# ── Decision labels ───────────────────────────────────────────────────────────


class Urgency(StrEnum):
    """Recommendation urgency.

    ``CRITICAL`` marks the lowest CPRI band: unresolved uncertainty that must
    be validated before anything else happens.
    """

    IMMEDIATE = "Immediate"
    HIGH = "High"
    CRITICAL = "Critical"


class AlertSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DecisionStatus(StrEnum):
    """Per-record action gate derived from detection confidence."""

    SAFE_TO_ACT = "Safe to Act"
    REVIEW_REQUIRED = "Review Required"
    FIELD_VALIDATION_NEEDED = "Field Validation Needed"
