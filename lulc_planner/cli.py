"""
Command-line interface for the LULC planner.

Each command loads ``AppConfig``, sets up logging, parses the transition and
time-series CSVs, builds ``PlanningParameters`` from the config defaults plus
any flags given, recomputes a ``PlanningSnapshot`` and prints the relevant
briefing blocks.  Bad config, bad CSV rows or out-of-range flags print an
``[ERROR]`` line and exit with code 1.

Examples::

    lulc-planner validate-config --full
    lulc-planner analyze --persona environmental_officer --scenario eco
    lulc-planner analyze --intensity 50 --json-out data/outputs/snapshot.json
    lulc-planner alerts --min-confidence 0.7
    lulc-planner survey --budget 3000
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

app = typer.Typer(
    name="lulc-planner",
    help="Land-use change analytics and planning decisions for district planners.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Return the merged ``AppConfig`` or exit 1 with the reason on stderr."""
    from lulc_planner.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, tomllib.TOMLDecodeError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from lulc_planner.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_inputs_or_exit(config, transitions_csv: Optional[str], timeseries_csv: Optional[str]):
    """Parse both source CSVs, exiting with ``[ERROR]`` on any failure."""
    from lulc_planner.ingestion.csv_loader import parse_timeseries_csv, parse_transition_csv

    transitions_path = Path(transitions_csv or config.data.transitions_csv)
    timeseries_path = Path(timeseries_csv or config.data.timeseries_csv)

    for path in (transitions_path, timeseries_path):
        if not path.exists():
            typer.echo(f"[ERROR] Data file not found: {path}", err=True)
            raise typer.Exit(code=1)

    try:
        transitions = parse_transition_csv(transitions_path)
        series = parse_timeseries_csv(timeseries_path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] CSV parse failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    return transitions, series


def _build_params_or_exit(config, **overrides):
    """Apply non-None CLI overrides to the configured default parameters."""
    updates = {k: v for k, v in overrides.items() if v is not None}
    try:
        return config.defaults.to_parameters().with_changes(**updates)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid planning parameters: {exc}", err=True)
        raise typer.Exit(code=1)


def _recompute(config, transitions_csv, timeseries_csv, **overrides):
    from lulc_planner.pipeline.engine import PlanningEngine

    transitions, series = _load_inputs_or_exit(config, transitions_csv, timeseries_csv)
    params = _build_params_or_exit(config, **overrides)
    return PlanningEngine(config).recompute(transitions, series, params)


# ── Shared options ────────────────────────────────────────────────────────────

_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_TRANSITIONS_OPT = typer.Option(
    None, "--transitions", help="Transition CSV (default: config.data.transitions_csv)."
)
_TIMESERIES_OPT = typer.Option(
    None, "--timeseries", help="Time-series CSV (default: config.data.timeseries_csv)."
)
_PERSONA_OPT = typer.Option(
    None, "--persona", help="urban_planner | environmental_officer | policy_maker."
)
_MIN_CONF_OPT = typer.Option(
    None, "--min-confidence", help="Drop records below this confidence (0-1)."
)
_SCENARIO_OPT = typer.Option(None, "--scenario", help="all | urban | eco.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPT,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Region:           {config.region.name}")
    typer.echo(f"  Transitions CSV:  {config.data.transitions_csv}")
    typer.echo(f"  Time-series CSV:  {config.data.timeseries_csv}")
    typer.echo(f"  Default persona:  {config.defaults.persona}")
    typer.echo(f"  Default budget:   {config.defaults.budget:,.0f}")
    typer.echo(f"  Cost per site:    {config.engine.survey_cost_per_site:,.0f}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


@app.command("analyze")
def analyze(
    persona: Optional[str] = _PERSONA_OPT,
    scenario: Optional[str] = _SCENARIO_OPT,
    min_confidence: Optional[float] = _MIN_CONF_OPT,
    intensity: Optional[float] = typer.Option(
        None, "--intensity", help="Policy intervention intensity (0-100)."
    ),
    budget: Optional[float] = typer.Option(None, "--budget", help="Field survey budget."),
    rank_mode: Optional[str] = typer.Option(
        None, "--rank-mode", help="impact | area | confidence."
    ),
    json_out: Optional[str] = typer.Option(
        None, "--json-out", help="Write the full snapshot as JSON to this path."
    ),
    csv_out: Optional[str] = typer.Option(
        None, "--csv-out", help="Write the ranked record table as CSV to this path."
    ),
    transitions_csv: Optional[str] = _TRANSITIONS_OPT,
    timeseries_csv: Optional[str] = _TIMESERIES_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Recompute every metric and print the full planning briefing."""
    from lulc_planner.reporting.export import (
        export_to_csv,
        export_to_json,
        flatten_priorities_for_export,
        snapshot_to_dict,
    )
    from lulc_planner.reporting.formatters import (
        format_actions,
        format_alerts,
        format_briefing_header,
        format_evolutions_table,
        format_metrics,
        format_priority_table,
        format_survey_allocation,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _recompute(
        config,
        transitions_csv,
        timeseries_csv,
        persona=persona,
        scenario=scenario,
        min_confidence=min_confidence,
        policy_intensity=intensity,
        budget=budget,
        rank_mode=rank_mode,
    )

    typer.echo(format_briefing_header(config.region, snapshot))
    typer.echo(format_metrics(snapshot))
    typer.echo(format_evolutions_table(snapshot.evolutions))
    typer.echo(format_actions(snapshot.recommended_actions))
    typer.echo(format_alerts(snapshot.alerts))
    typer.echo(format_priority_table(snapshot.ranked_records, snapshot.decision_counts))
    typer.echo(
        format_survey_allocation(
            snapshot.survey_allocation, snapshot.params.budget, snapshot.field_check_tasks
        )
    )

    if json_out:
        written = export_to_json(snapshot_to_dict(snapshot), Path(json_out))
        typer.echo(f"\n  JSON written: {written}")
    if csv_out:
        written = export_to_csv(flatten_priorities_for_export(snapshot), Path(csv_out))
        typer.echo(f"  CSV written:  {written}")

    typer.echo("")
    typer.echo("[OK] Analysis complete.")


@app.command("alerts")
def alerts(
    persona: Optional[str] = _PERSONA_OPT,
    scenario: Optional[str] = _SCENARIO_OPT,
    min_confidence: Optional[float] = _MIN_CONF_OPT,
    transitions_csv: Optional[str] = _TRANSITIONS_OPT,
    timeseries_csv: Optional[str] = _TIMESERIES_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print governance alerts for the filtered records."""
    from lulc_planner.reporting.formatters import format_alerts

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _recompute(
        config,
        transitions_csv,
        timeseries_csv,
        persona=persona,
        scenario=scenario,
        min_confidence=min_confidence,
    )

    typer.echo(format_alerts(snapshot.alerts))
    typer.echo("")
    typer.echo(f"[OK] {len(snapshot.alerts)} alert(s) triggered.")


@app.command("survey")
def survey(
    budget: Optional[float] = typer.Option(None, "--budget", help="Field survey budget."),
    persona: Optional[str] = _PERSONA_OPT,
    transitions_csv: Optional[str] = _TRANSITIONS_OPT,
    timeseries_csv: Optional[str] = _TIMESERIES_OPT,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the budget-constrained field survey plan and field check tasks."""
    from lulc_planner.reporting.formatters import format_survey_allocation

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    snapshot = _recompute(
        config,
        transitions_csv,
        timeseries_csv,
        persona=persona,
        budget=budget,
    )

    typer.echo(
        format_survey_allocation(
            snapshot.survey_allocation, snapshot.params.budget, snapshot.field_check_tasks
        )
    )
    typer.echo("")
    typer.echo(
        f"[OK] {len(snapshot.survey_allocation.selected)} of "
        f"{snapshot.survey_allocation.candidate_count} candidate site(s) funded."
    )


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
