"""
Narrative layer: persona-tailored text over already-computed metrics.

No scoring happens here.  ``generate_change_narrative()`` picks the top
evolution for the persona and fills a template; ``generate_change_stories()``
summarises the filtered records in one line per persona.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from lulc_planner.features.evolution import READY_THRESHOLD, TransitionEvolution
from lulc_planner.models.records import TransitionRecord
from lulc_planner.taxonomy.land_taxonomy import (
    ECO_CLASSES,
    AnomalyLevel,
    LandClass,
    Persona,
    TrendDirection,
)


@dataclass(frozen=True)
class Narrative:
    """Headline and body for the dominant transition.

    ``emphasis`` is ``"surge"``, ``"accelerating"`` or ``"normal"``.
    """

    title:    str
    body:     str
    emphasis: str


@dataclass(frozen=True)
class ChangeStory:
    story_id: int
    text:     str


INSUFFICIENT_NARRATIVE = Narrative("Insufficient Data", "No trends detected.", "normal")


def _in_persona_focus(evolution: TransitionEvolution, persona: Persona) -> bool:
    match persona:
        case Persona.URBAN_PLANNER:
            return LandClass.BUILT_UP in (evolution.from_class, evolution.to_class)
        case Persona.ENVIRONMENTAL_OFFICER:
            return evolution.from_class in ECO_CLASSES
        case Persona.POLICY_MAKER:
            return True
        case _:
            assert_never(persona)


def select_top_evolution(
    evolutions: Sequence[TransitionEvolution],
    persona: Persona,
) -> TransitionEvolution | None:
    """Top evolution in the persona's focus, falling back to the overall top."""
    if not evolutions:
        return None
    focused = [e for e in evolutions if _in_persona_focus(e, persona)]
    return (focused or list(evolutions))[0]


def _narrative_body(top: TransitionEvolution, persona: Persona, accelerating: bool) -> str:
    flow = top.latest_flow
    match persona:
        case Persona.URBAN_PLANNER:
            body = f"Urban Expansion Alert: {top.to_class} zones are expanding at {flow} sq km/yr. "
            if accelerating:
                body += "Growth is accelerating rapidly, requiring immediate infrastructure scaling."
            else:
                body += "Growth is steady, allowing for planned zoning updates."
            return body
        case Persona.ENVIRONMENTAL_OFFICER:
            enforcement = (
                "urgently required" if top.cpri > READY_THRESHOLD
                else "dependent on field verification"
            )
            return (
                f"Ecological Warning: {top.from_class} loss is tracking at {flow} sq km/yr. "
                "This represents a critical depletion of natural capital. "
                f"Conservation enforcement is {enforcement}."
            )
        case Persona.POLICY_MAKER:
            body = (
                f"The most significant land-use change is the conversion of "
                f"{top.from_class} to {top.to_class}. "
                f"This trend is currently {top.trend.value.lower()} with a flow of "
                f"{flow} sq km/yr. "
            )
            if top.cpri > READY_THRESHOLD:
                body += (
                    f"Given the high certainty (CPRI {top.cpri:.2f}), immediate policy "
                    "intervention is recommended."
                )
            else:
                body += (
                    f"However, ambiguity remains (CPRI {top.cpri:.2f}), necessitating "
                    "field verification before regulation."
                )
            return body
        case _:
            assert_never(persona)


def generate_change_narrative(
    evolutions: Sequence[TransitionEvolution],
    persona: Persona = Persona.POLICY_MAKER,
) -> Narrative:
    """Build the headline narrative for the persona's dominant transition."""
    top = select_top_evolution(evolutions, persona)
    if top is None:
        return INSUFFICIENT_NARRATIVE

    accelerating = top.trend is TrendDirection.ACCELERATING
    if top.anomaly is AnomalyLevel.SURGE:
        title, emphasis = f"Surge Alert: {top.label}", "surge"
    elif accelerating:
        title, emphasis = f"Accelerating Scale: {top.label}", "accelerating"
    else:
        title, emphasis = f"Major Shift: {top.label}", "normal"

    return Narrative(title, _narrative_body(top, persona, accelerating), emphasis)


def generate_change_stories(
    records: Sequence[TransitionRecord],
    persona: Persona = Persona.POLICY_MAKER,
) -> list[ChangeStory]:
    """One persona-tailored summary line over the (filtered) records."""
    if not records:
        return [ChangeStory(0, "No sufficient data.")]

    largest = max(records, key=lambda r: r.area_sq_km)

    match persona:
        case Persona.URBAN_PLANNER:
            growth = sum(r.area_sq_km for r in records if r.to_class is LandClass.BUILT_UP)
            text = (
                f"Urban Report: Total built-up expansion is {growth:.1f} sq km. "
                f"Focus infrastructure audit on {largest.to_class} zones."
            )
        case Persona.ENVIRONMENTAL_OFFICER:
            loss = sum(
                r.area_sq_km for r in records
                if r.from_class in ECO_CLASSES and r.to_class is not LandClass.FOREST
            )
            text = (
                f"Eco-Status: Critical loss of {loss:.1f} sq km in protected biomes. "
                "Immediate conservation orders recommended."
            )
        case Persona.POLICY_MAKER:
            text = (
                f"Executive Summary: Primary transition trend is "
                f"{largest.from_class} → {largest.to_class} covering "
                f"{largest.area_sq_km} sq km."
            )
        case _:
            assert_never(persona)

    return [ChangeStory(1, text)]
