"""
CSV parsers for the two source tables.

Transition table — comma delimited, header row required:
  year, from, to, area_sq_km, confidence

Time-series table — comma delimited, header row required:
  year, lulc_class, area_sq_km, confidence

Class labels are case-insensitive and accept common aliases
(``"Water Body"`` → Water, ``"Urban"`` → Built-up).  Numeric fields must
parse as numbers; ``year`` must be an integer (``"2020"`` or ``"2020.0"``).

All rows are validated before any are returned.  If **any** row fails, a
single :class:`ValueError` is raised listing the first 10 failures, so the
engine never sees malformed input.  Blank lines are skipped.
"""

from __future__ import annotations

import csv
import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from lulc_planner.models.records import TimeSeriesPoint, TransitionRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSITION_COLUMNS = frozenset({"year", "from", "to", "area_sq_km", "confidence"})
TIMESERIES_COLUMNS = frozenset({"year", "lulc_class", "area_sq_km", "confidence"})

_MAX_ERRORS_SHOWN = 10


def parse_transition_csv(path: Path) -> list[TransitionRecord]:
    """Parse the transition table into validated :class:`TransitionRecord` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing or any row fails validation.
    """
    return _parse_csv(path, TRANSITION_COLUMNS, _row_to_transition, "transition")


def parse_timeseries_csv(path: Path) -> list[TimeSeriesPoint]:
    """Parse the time-series table into validated :class:`TimeSeriesPoint` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If required columns are missing or any row fails validation.
    """
    return _parse_csv(path, TIMESERIES_COLUMNS, _row_to_timeseries, "time-series")


# ── Private helpers ────────────────────────────────────────────────────────────

def _parse_csv(
    path: Path,
    required: frozenset[str],
    convert: Callable[[dict[str, str]], T],
    kind: str,
) -> list[T]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{kind.capitalize()} CSV file not found: {path}")

    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = required - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        rows = [
            {k.strip(): (v or "") for k, v in row.items() if k is not None}
            for row in reader
        ]

    results: list[T] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        if not any(v.strip() for v in row.values()):
            continue
        try:
            results.append(convert(row))
        except (ValueError, ValidationError) as exc:
            errors.append((line_no, str(exc)))

    if errors:
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:_MAX_ERRORS_SHOWN])
        suffix = (
            f"\n  … and {len(errors) - _MAX_ERRORS_SHOWN} more"
            if len(errors) > _MAX_ERRORS_SHOWN else ""
        )
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    if not results:
        logger.warning("%s CSV has no data rows: %s", kind.capitalize(), path)
    else:
        logger.info("Parsed %d %s rows from %s", len(results), kind, path.name)
    return results


def _row_to_transition(row: dict[str, str]) -> TransitionRecord:
    return TransitionRecord(
        year=_parse_year(row),
        from_class=_req(row, "from"),
        to_class=_req(row, "to"),
        area_sq_km=_parse_float(row, "area_sq_km"),
        confidence=_parse_float(row, "confidence"),
    )


def _row_to_timeseries(row: dict[str, str]) -> TimeSeriesPoint:
    return TimeSeriesPoint(
        year=_parse_year(row),
        lulc_class=_req(row, "lulc_class"),
        area_sq_km=_parse_float(row, "area_sq_km"),
        confidence=_parse_float(row, "confidence"),
    )


def _req(row: dict[str, str], key: str) -> str:
    """Return a required string field, stripped; raise if empty."""
    v = row.get(key, "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _parse_float(row: dict[str, str], key: str) -> float:
    v = _req(row, key)
    try:
        value = float(v)
    except ValueError:
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    if not math.isfinite(value):
        raise ValueError(f"Non-finite number for '{key}': '{v}'.")
    return value


def _parse_year(row: dict[str, str]) -> int:
    v = _req(row, "year")
    try:
        year = float(v)
    except ValueError:
        raise ValueError(f"Invalid year: '{v}'. Expected an integer such as 2020.")
    if not year.is_integer():
        raise ValueError(f"Invalid year: '{v}'. Expected an integer such as 2020.")
    return int(year)
