"""
Tests for lulc_planner.ingestion.csv_loader — CSV import validation.

Covers:
  - parse_transition_csv(): valid file, aliases, missing columns, bad numbers,
    out-of-range confidence, blank lines, empty file, error cap at 10 rows
  - parse_timeseries_csv(): valid file, float-formatted years, bad years
  - The bundled sample files parse cleanly
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lulc_planner.ingestion.csv_loader import (
    TIMESERIES_COLUMNS,
    TRANSITION_COLUMNS,
    parse_timeseries_csv,
    parse_transition_csv,
)
from lulc_planner.taxonomy.land_taxonomy import LandClass

SAMPLE_DIR = Path(__file__).resolve().parents[2] / "data" / "sample"

TRANSITION_HEADER = "year,from,to,area_sq_km,confidence\n"
TIMESERIES_HEADER = "year,lulc_class,area_sq_km,confidence\n"


# ── Helpers ────────────────────────────────────────────────────────────────────

def _write_csv(tmp_path: Path, content: str, name: str = "data.csv") -> Path:
    """Write CSV content to a temp file and return the path."""
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return p


# ── Column sets ────────────────────────────────────────────────────────────────

def test_required_columns():
    assert TRANSITION_COLUMNS == {"year", "from", "to", "area_sq_km", "confidence"}
    assert TIMESERIES_COLUMNS == {"year", "lulc_class", "area_sq_km", "confidence"}


# ── parse_transition_csv: happy path ──────────────────────────────────────────

class TestParseTransitionCsvValid:
    def test_returns_records(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Forest,Built-up,14.2,0.82\n")
        [rec] = parse_transition_csv(path)
        assert rec.year == 2024
        assert rec.from_class is LandClass.FOREST
        assert rec.to_class is LandClass.BUILT_UP
        assert rec.area_sq_km == pytest.approx(14.2)
        assert rec.confidence == pytest.approx(0.82)

    def test_aliases_normalised(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Water Body,urban,1.3,0.75\n")
        [rec] = parse_transition_csv(path)
        assert rec.from_class is LandClass.WATER
        assert rec.to_class is LandClass.BUILT_UP

    def test_blank_lines_skipped(self, tmp_path):
        content = TRANSITION_HEADER + "2024,Forest,Barren,1,0.9\n,,,,\n2022,Forest,Barren,2,0.9\n"
        assert len(parse_transition_csv(_write_csv(tmp_path, content))) == 2

    def test_whitespace_and_bom(self, tmp_path):
        p = tmp_path / "bom.csv"
        p.write_text(
            "\ufeffyear, from ,to,area_sq_km,confidence\n2024, Forest ,Barren,1,0.9\n",
            encoding="utf-8",
        )
        [rec] = parse_transition_csv(p)
        assert rec.from_class is LandClass.FOREST

    def test_empty_body_returns_empty_list(self, tmp_path):
        assert parse_transition_csv(_write_csv(tmp_path, TRANSITION_HEADER)) == []

    def test_sample_file(self):
        records = parse_transition_csv(SAMPLE_DIR / "transition_data.csv")
        assert len(records) == 15


# ── parse_transition_csv: failures ────────────────────────────────────────────

class TestParseTransitionCsvInvalid:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_transition_csv(tmp_path / "nope.csv")

    def test_no_header(self, tmp_path):
        with pytest.raises(ValueError, match="no header"):
            parse_transition_csv(_write_csv(tmp_path, ""))

    def test_missing_columns(self, tmp_path):
        with pytest.raises(ValueError, match="missing required columns"):
            parse_transition_csv(_write_csv(tmp_path, "year,from,to\n2024,Forest,Barren\n"))

    def test_bad_number(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Forest,Barren,abc,0.9\n")
        with pytest.raises(ValueError, match="Row 2"):
            parse_transition_csv(path)

    def test_nan_rejected(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Forest,Barren,nan,0.9\n")
        with pytest.raises(ValueError, match="Non-finite"):
            parse_transition_csv(path)

    def test_confidence_out_of_range(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Forest,Barren,1,1.5\n")
        with pytest.raises(ValueError, match="1 row"):
            parse_transition_csv(path)

    def test_negative_area(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Forest,Barren,-1,0.5\n")
        with pytest.raises(ValueError):
            parse_transition_csv(path)

    def test_unknown_class(self, tmp_path):
        path = _write_csv(tmp_path, TRANSITION_HEADER + "2024,Wetland,Barren,1,0.5\n")
        with pytest.raises(ValueError, match="Wetland"):
            parse_transition_csv(path)

    def test_error_list_capped(self, tmp_path):
        rows = "".join(f"2024,Forest,Barren,bad{i},0.5\n" for i in range(12))
        with pytest.raises(ValueError) as exc_info:
            parse_transition_csv(_write_csv(tmp_path, TRANSITION_HEADER + rows))
        msg = str(exc_info.value)
        assert msg.startswith("12 row(s) failed")
        assert "and 2 more" in msg
        assert "Row 13" not in msg


# ── parse_timeseries_csv ───────────────────────────────────────────────────────

class TestParseTimeseriesCsv:
    def test_returns_points(self, tmp_path):
        path = _write_csv(tmp_path, TIMESERIES_HEADER + "2020,Built-up,104.8,0.89\n")
        [pt] = parse_timeseries_csv(path)
        assert pt.lulc_class is LandClass.BUILT_UP
        assert pt.area_sq_km == pytest.approx(104.8)

    def test_float_year_accepted(self, tmp_path):
        path = _write_csv(tmp_path, TIMESERIES_HEADER + "2020.0,Forest,1,0.9\n")
        assert parse_timeseries_csv(path)[0].year == 2020

    def test_fractional_year_rejected(self, tmp_path):
        path = _write_csv(tmp_path, TIMESERIES_HEADER + "2020.5,Forest,1,0.9\n")
        with pytest.raises(ValueError, match="Invalid year"):
            parse_timeseries_csv(path)

    def test_empty_required_field(self, tmp_path):
        path = _write_csv(tmp_path, TIMESERIES_HEADER + "2020,,1,0.9\n")
        with pytest.raises(ValueError, match="lulc_class"):
            parse_timeseries_csv(path)

    def test_sample_file(self):
        points = parse_timeseries_csv(SAMPLE_DIR / "lulc_timeseries.csv")
        assert len(points) == 20
        assert {p.year for p in points} == {2018, 2020, 2022, 2024}
