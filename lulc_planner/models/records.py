"""
Input record models for the two source tables.

``TransitionRecord`` is one row of the transition table: area converted from
one land class to another in a given year, with the classifier's detection
confidence.

``TimeSeriesPoint`` is one row of the per-class time series: total area and
mean confidence of one land class in one year.

Both models are frozen — records are sourced once and never mutated.  Every
derived structure in the engine is recomputed from these.
"""

from __future__ import annotations

import hashlib

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lulc_planner.taxonomy.land_taxonomy import LandClass


def _parse_land_class(v: object) -> object:
    if isinstance(v, str) and not isinstance(v, LandClass):
        return LandClass.parse(v)
    return v


class TransitionRecord(BaseModel):
    """Area converted between two land classes in one year.

    Attributes:
        year:       Observation year.
        from_class: Origin land class (CSV column ``from``).
        to_class:   Destination land class (CSV column ``to``).
        area_sq_km: Converted area in square kilometres (>= 0).
        confidence: Detection confidence in [0, 1].
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    year: int
    from_class: LandClass = Field(alias="from")
    to_class: LandClass = Field(alias="to")
    area_sq_km: float
    confidence: float

    @field_validator("from_class", "to_class", mode="before")
    @classmethod
    def normalise_land_class(cls, v: object) -> object:
        return _parse_land_class(v)

    @field_validator("area_sq_km")
    @classmethod
    def validate_area(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"area_sq_km must be >= 0, got {v}.")
        return v

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0.0, 1.0], got {v}.")
        return v

    @property
    def transition_key(self) -> tuple[LandClass, LandClass]:
        return (self.from_class, self.to_class)

    @property
    def record_id(self) -> str:
        """Deterministic content-derived identifier (12 hex chars)."""
        payload = (
            f"{self.from_class}|{self.to_class}|{self.year}|"
            f"{self.area_sq_km!r}|{self.confidence!r}"
        )
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:12]


class TimeSeriesPoint(BaseModel):
    """Total area and mean confidence of one land class in one year.

    Attributes:
        year:       Observation year.
        lulc_class: Land class.
        area_sq_km: Total class area in square kilometres (>= 0).
        confidence: Mean classification confidence in [0, 1].
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    year: int
    lulc_class: LandClass
    area_sq_km: float
    confidence: float = 0.0

    @field_validator("lulc_class", mode="before")
    @classmethod
    def normalise_land_class(cls, v: object) -> object:
        return _parse_land_class(v)

    @field_validator("area_sq_km")
    @classmethod
    def validate_area(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"area_sq_km must be >= 0, got {v}.")
        return v

    @field_validator("confidence")
    @classmethod
    def validate_confidence(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"confidence must be in [0.0, 1.0], got {v}.")
        return v
