"""
Ecological trajectory: Forest and Water loss between the first and last year.

    forest_loss = forest[first] − forest[last]
    water_loss  = water[first]  − water[last]
    total       = forest_loss + water_loss

Classification of the total (sq km):
    > 20    Rapid Degradation
    > 5     Declining
    < -1    Recovering
    else    Stable

Loss percentages are ``loss / baseline × 100``; a zero baseline gives 0%.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from lulc_planner.features.trends import distinct_years, extract_trend
from lulc_planner.models.records import TimeSeriesPoint
from lulc_planner.taxonomy.land_taxonomy import EcoTrend, LandClass

logger = logging.getLogger(__name__)

MIN_ECO_YEARS = 2


@dataclass(frozen=True)
class EcoRiskAssessment:
    """Forest/Water loss over the full observation window.

    Attributes:
        loss_area:       Combined Forest + Water loss (sq km, negative = gain).
        trend:           Ecological trajectory band.
        forest_loss:     Forest loss (sq km).
        water_loss:      Water loss (sq km).
        forest_loss_pct: Forest loss as % of the first-year Forest area.
        water_loss_pct:  Water loss as % of the first-year Water area.
    """

    loss_area:       float
    trend:           EcoTrend
    forest_loss:     float
    water_loss:      float
    forest_loss_pct: float
    water_loss_pct:  float


def classify_eco_loss(total_loss: float) -> EcoTrend:
    """Map combined Forest + Water loss to an ecological trajectory."""
    if total_loss > 20:
        return EcoTrend.RAPID_DEGRADATION
    if total_loss > 5:
        return EcoTrend.DECLINING
    if total_loss < -1:
        return EcoTrend.RECOVERING
    return EcoTrend.STABLE


def _loss_pct(baseline: float, loss: float) -> float:
    return loss / baseline * 100.0 if baseline > 0 else 0.0


def assess_eco_risk(series: Sequence[TimeSeriesPoint]) -> EcoRiskAssessment | None:
    """Assess ecological loss across the time series.

    Returns:
        ``EcoRiskAssessment``, or ``None`` with fewer than 2 distinct years.
    """
    years = distinct_years(series)
    if len(years) < MIN_ECO_YEARS:
        logger.debug("Eco risk skipped: %d distinct year(s)", len(years))
        return None

    forest = extract_trend(series, LandClass.FOREST, years)
    water = extract_trend(series, LandClass.WATER, years)

    forest_loss = forest[0] - forest[-1]
    water_loss = water[0] - water[-1]
    total_loss = forest_loss + water_loss

    return EcoRiskAssessment(
        loss_area=round(total_loss, 1),
        trend=classify_eco_loss(total_loss),
        forest_loss=round(forest_loss, 1),
        water_loss=round(water_loss, 1),
        forest_loss_pct=round(_loss_pct(forest[0], forest_loss), 1),
        water_loss_pct=round(_loss_pct(water[0], water_loss), 1),
    )
