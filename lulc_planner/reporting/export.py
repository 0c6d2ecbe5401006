"""
Export helpers for planning snapshots.

All file-writing functions write to disk and return the written ``Path``.
They accept generic ``list[dict]`` / ``dict`` data to stay decoupled from the
snapshot shape.

``snapshot_to_dict()`` is the JSON adapter: it converts a ``PlanningSnapshot``
into plain dicts, lists, strings and numbers.  ``None`` metrics stay ``None``
so downstream readers can show their own placeholder.

``flatten_priorities_for_export()`` converts the ranked record table into one
flat row per record so the CSV loads directly in a spreadsheet.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from lulc_planner.features.evolution import TransitionEvolution
from lulc_planner.models.records import TransitionRecord
from lulc_planner.pipeline.engine import PlanningSnapshot
from lulc_planner.recommendations.actions import RecommendedAction
from lulc_planner.recommendations.scorer import decision_status


def _prepare(path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write row dicts as UTF-8 CSV; an empty ``records`` list writes an empty file.

    Columns follow ``fieldnames`` when given (extra keys are dropped),
    otherwise the first row's keys.
    """
    path = _prepare(path)
    with path.open("w", newline="", encoding="utf-8") as fh:
        if records:
            writer = csv.DictWriter(
                fh, fieldnames=fieldnames or list(records[0]), extrasaction="ignore"
            )
            writer.writeheader()
            writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` as indented JSON; non-JSON values (dates, enums) go through ``str``."""
    path = _prepare(path)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False, default=str)
    return path


# ── Snapshot → plain dicts ────────────────────────────────────────────────────


def _record_to_dict(record: TransitionRecord) -> dict[str, Any]:
    row = record.model_dump(mode="json", by_alias=True)
    row["record_id"] = record.record_id
    return row


def _evolution_to_dict(evo: TransitionEvolution) -> dict[str, Any]:
    return {
        "transition":        evo.label,
        "from":              str(evo.from_class),
        "to":                str(evo.to_class),
        "years":             [r.year for r in evo.history],
        "total_volume":      evo.total_volume,
        "latest_flow":       evo.latest_flow,
        "latest_confidence": evo.latest_confidence,
        "trend":             str(evo.trend),
        "deviation_ratio":   evo.deviation_ratio,
        "anomaly":           str(evo.anomaly),
        "confidence_stable": evo.confidence_stable,
        "confidence_range":  evo.confidence_range,
        "cpri":              evo.cpri,
        "readiness":         str(evo.readiness),
    }


def _action_to_dict(action: RecommendedAction) -> dict[str, Any]:
    return {
        "transition":    action.evolution.label,
        "action":        action.action,
        "urgency":       str(action.urgency),
        "department":    action.department,
        "details":       action.details,
        "readiness_pct": action.readiness_pct,
        "audit_trail":   [asdict(step) for step in action.audit_trail],
    }


def _optional(obj: Any) -> dict[str, Any] | None:
    return None if obj is None else asdict(obj)


def snapshot_to_dict(snapshot: PlanningSnapshot) -> dict[str, Any]:
    """Convert a snapshot into a JSON-serialisable dict."""
    allocation = snapshot.survey_allocation
    return {
        "params":               snapshot.params.model_dump(mode="json"),
        "years":                list(snapshot.years),
        "built_up_trend":       list(snapshot.built_up_trend),
        "eco_risk":             _optional(snapshot.eco_risk),
        "policy_evaluation":    _optional(snapshot.policy_evaluation),
        "projection":           _optional(snapshot.projection),
        "velocity":             _optional(snapshot.velocity),
        "confidence_stability": _optional(snapshot.confidence_stability),
        "trust":                _optional(snapshot.trust),
        "temporal_anomalies":   [asdict(a) for a in snapshot.temporal_anomalies],
        "evolutions":           [_evolution_to_dict(e) for e in snapshot.evolutions],
        "recommended_actions":  [_action_to_dict(a) for a in snapshot.recommended_actions],
        "alerts": [
            {
                "rule":               a.rule,
                "severity":           str(a.severity),
                "title":              a.title,
                "description":        a.description,
                "triggering_records": [r.record_id for r in a.triggering_records],
            }
            for a in snapshot.alerts
        ],
        "filtered_records":     [_record_to_dict(r) for r in snapshot.filtered_records],
        "decision_counts":      {str(k): v for k, v in snapshot.decision_counts.items()},
        "survey_allocation": {
            "selected":        [asdict(t) for t in allocation.selected],
            "deferred_count":  allocation.deferred_count,
            "total_cost":      allocation.total_cost,
            "max_sites":       allocation.max_sites,
            "shortfall_cost":  allocation.shortfall_cost,
            "candidate_count": allocation.candidate_count,
        },
        "field_check_tasks":    [asdict(t) for t in snapshot.field_check_tasks],
        "narrative":            asdict(snapshot.narrative),
        "change_stories":       [asdict(s) for s in snapshot.change_stories],
        "ranked_records":       flatten_priorities_for_export(snapshot),
    }


def flatten_priorities_for_export(snapshot: PlanningSnapshot) -> list[dict]:
    """Flatten the ranked record table into one row per record.

    Each row contains ``rank``, ``record_id``, ``year``, ``from``, ``to``,
    ``area_sq_km``, ``confidence``, ``weight``, ``impact_score`` and
    ``decision_status``.
    """
    rows: list[dict] = []
    for rank, item in enumerate(snapshot.ranked_records, start=1):
        rec = item.record
        rows.append(
            {
                "rank":            rank,
                "record_id":       rec.record_id,
                "year":            rec.year,
                "from":            str(rec.from_class),
                "to":              str(rec.to_class),
                "area_sq_km":      rec.area_sq_km,
                "confidence":      rec.confidence,
                "weight":          item.weight,
                "impact_score":    item.impact_score,
                "decision_status": str(decision_status(rec.confidence)),
            }
        )
    return rows
