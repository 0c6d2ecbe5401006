"""
Planner configuration.

Sources, lowest precedence first:

  config/default.toml   committed defaults (region, data paths, engine constants)
  config/local.toml     per-machine overrides next to the default file, gitignored
  .env                  loaded into the environment, never overrides real env vars
  LULC_PLANNER_*        environment overrides, see ``_ENV_OVERRIDES``

``load_config()`` merges these into one frozen ``AppConfig``; commands and
``PlanningEngine`` take that object instead of reading env vars themselves.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from lulc_planner.models.params import PlanningParameters
from lulc_planner.taxonomy.land_taxonomy import Persona, RankMode, Scenario

# ── Sub-config models ─────────────────────────────────────────────────────────


class RegionConfig(BaseModel):
    """Study region metadata shown on briefings."""

    model_config = ConfigDict(frozen=True)

    name: str = "Tirupati District"
    master_plan_year: int = 2030
    data_version: str = "v2.1 (Sentinel-2)"


class DataConfig(BaseModel):
    """Filesystem paths for the two source tables and exported reports."""

    model_config = ConfigDict(frozen=True)

    transitions_csv: str = "data/sample/transition_data.csv"
    timeseries_csv: str = "data/sample/lulc_timeseries.csv"
    output_dir: str = "data/outputs"


class EngineConfig(BaseModel):
    """Fixed engine constants that are not user-adjustable per recompute."""

    model_config = ConfigDict(frozen=True)

    survey_cost_per_site: float = 1200.0
    projection_horizon_years: int = 2
    max_policy_reduction: float = 0.60
    top_actions: int = 3
    spike_threshold_sq_km: float = 10.0
    field_check_limit: int = 5

    @field_validator("survey_cost_per_site")
    @classmethod
    def validate_cost(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"survey_cost_per_site must be > 0, got {v}.")
        return v

    @field_validator("max_policy_reduction")
    @classmethod
    def validate_reduction(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"max_policy_reduction must be in [0.0, 1.0], got {v}.")
        return v

    @field_validator("projection_horizon_years", "top_actions", "field_check_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}.")
        return v


class DefaultsConfig(BaseModel):
    """Initial planning parameters used when the CLI gets no overrides."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    persona: Persona = Persona.POLICY_MAKER
    scenario: Scenario = Scenario.ALL
    min_confidence: float = 0.0
    policy_intensity: float = 0.0
    budget: float = 5000.0
    rank_mode: RankMode = RankMode.IMPACT

    def to_parameters(self) -> PlanningParameters:
        return PlanningParameters(**self.model_dump())


class AnomalyConfig(BaseModel):
    """Known drivers for explaining Built-up growth spikes, keyed by year."""

    model_config = ConfigDict(frozen=True)

    drivers: dict[int, str] = {}


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Where log lines go and in which shape."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; use one of {', '.join(_LOG_LEVELS)}.")
        return level


class AppConfig(BaseModel):
    """Everything the CLI and the engine need, validated and frozen."""

    model_config = ConfigDict(frozen=True)

    region: RegionConfig = RegionConfig()
    data: DataConfig = DataConfig()
    engine: EngineConfig = EngineConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    anomalies: AnomalyConfig = AnomalyConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loading ───────────────────────────────────────────────────────────────────

def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


# env var -> (config section or None for top level, key, converter)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "LULC_PLANNER_TRANSITIONS_CSV": ("data", "transitions_csv", str),
    "LULC_PLANNER_TIMESERIES_CSV":  ("data", "timeseries_csv", str),
    "LULC_PLANNER_LOG_LEVEL":       ("logging", "level", str),
    "LULC_PLANNER_BUDGET":          ("defaults", "budget", float),
    "LULC_PLANNER_DEBUG":           (None, "debug", _truthy),
}


def _project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the merged, validated ``AppConfig``.

    Args:
        config_path: TOML file to start from.  ``None`` means
            ``config/default.toml`` under the project root.  A ``local.toml``
            in the same directory is layered on top when present.

    Raises:
        FileNotFoundError: ``config_path`` does not exist.
        pydantic.ValidationError: a merged value is out of range or unknown.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Pass --config or restore config/default.toml."
        )

    raw = _read_toml(path)
    local = path.with_name("local.toml")
    if local.is_file():
        raw = _deep_merge(raw, _read_toml(local))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _deep_merge(current, value)
        merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    for var, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = convert(value)
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    # [project] debug is the older spelling of the top-level flag.
    debug = raw.get("debug", raw.get("project", {}).get("debug", False))

    # TOML keys are strings; driver years are looked up as ints.
    anomalies = dict(raw.get("anomalies", {}))
    anomalies["drivers"] = {int(y): label for y, label in anomalies.get("drivers", {}).items()}

    return AppConfig(
        region=RegionConfig(**raw.get("region", {})),
        data=DataConfig(**raw.get("data", {})),
        engine=EngineConfig(**raw.get("engine", {})),
        defaults=DefaultsConfig(**raw.get("defaults", {})),
        anomalies=AnomalyConfig(**anomalies),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=debug,
    )
