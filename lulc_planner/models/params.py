"""
User-adjustable planning parameters.

``PlanningParameters`` is the only mutable-looking input to the engine, and it
is frozen: every change produces a new instance via ``with_changes()``, and the
engine recomputes every derived structure from scratch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from lulc_planner.taxonomy.land_taxonomy import Persona, RankMode, Scenario


class PlanningParameters(BaseModel):
    """Immutable parameter set for one recompute.

    Attributes:
        persona:          Stakeholder viewpoint for ranking and narrative.
        scenario:         Transition filter (all / urban focus / eco focus).
        min_confidence:   Records below this confidence are filtered out.
        policy_intensity: Intervention intensity in [0, 100] for projections.
        budget:           Field-survey budget (same currency as cost per site).
        rank_mode:        Sort key for the prioritised record table.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    persona: Persona = Persona.POLICY_MAKER
    scenario: Scenario = Scenario.ALL
    min_confidence: float = 0.0
    policy_intensity: float = 0.0
    budget: float = 5000.0
    rank_mode: RankMode = RankMode.IMPACT

    @field_validator("min_confidence")
    @classmethod
    def validate_min_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"min_confidence must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("policy_intensity")
    @classmethod
    def validate_policy_intensity(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"policy_intensity must be in [0, 100], got {v}.")
        return v

    def with_changes(self, **updates: Any) -> "PlanningParameters":
        """Return a new validated instance with ``updates`` applied."""
        return PlanningParameters(**{**self.model_dump(), **updates})
