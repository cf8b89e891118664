"""Unit tests for the sectioned polygon CSV helpers."""
from __future__ import annotations

import csv
from pathlib import Path

import pytest

from io_rings_csv import FIELDS, CsvFormatError, load_rings_csv, write_rings_csv
from models import Point


def _write_rows(path: Path, rows, fieldnames=FIELDS) -> None:
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def test_write_and_load_roundtrip(tmp_path: Path) -> None:
    meta = {"name": "Atoll", "precision": "0.01"}
    outer = [Point(0.0, 0.0), Point(10.0, 0.0), Point(10.0, 10.0), Point(0.0, 10.0)]
    holes = [
        [Point(4.0, 4.0), Point(6.0, 4.0), Point(6.0, 6.0), Point(4.0, 6.0)],
        [Point(1.0, 1.0), Point(2.0, 1.0), Point(1.5, 2.0)],
    ]

    csv_path = tmp_path / "nested" / "shape.csv"
    write_rings_csv(str(csv_path), meta, outer, holes)

    loaded_meta, loaded_outer, loaded_holes = load_rings_csv(str(csv_path))
    assert loaded_meta == meta
    assert loaded_outer == outer
    assert loaded_holes == holes


def test_order_column_sorts_vertices(tmp_path: Path) -> None:
    csv_path = tmp_path / "ordered.csv"
    _write_rows(
        csv_path,
        [
            {"section": "outer", "order": "3", "x": "10", "y": "10"},
            {"section": "outer", "order": "1", "x": "0", "y": "0"},
            {"section": "outer", "order": "2", "x": "10", "y": "0"},
            {"section": "hole", "ring": "a", "x": "4", "y": "4"},
            {"section": "hole", "ring": "a", "x": "6", "y": "4"},
            {"section": "hole", "ring": "a", "x": "5", "y": "6"},
        ],
    )
    _, outer, holes = load_rings_csv(str(csv_path))
    assert outer == [Point(0, 0), Point(10, 0), Point(10, 10)]
    assert holes == [[Point(4, 4), Point(6, 4), Point(5, 6)]]


def test_empty_file_loads_empty(tmp_path: Path) -> None:
    csv_path = tmp_path / "empty.csv"
    _write_rows(csv_path, [])
    assert load_rings_csv(str(csv_path)) == ({}, [], [])


def test_missing_section_column_raises(tmp_path: Path) -> None:
    csv_path = tmp_path / "plain.csv"
    _write_rows(csv_path, [{"x": "0", "y": "0"}], fieldnames=["x", "y"])
    with pytest.raises(CsvFormatError):
        load_rings_csv(str(csv_path))


def test_invalid_coordinate_raises(tmp_path: Path) -> None:
    csv_path = tmp_path / "bad.csv"
    _write_rows(csv_path, [{"section": "outer", "x": "abc", "y": "1"}])
    with pytest.raises(CsvFormatError, match="outer row 2"):
        load_rings_csv(str(csv_path))


def test_hole_without_ring_raises(tmp_path: Path) -> None:
    csv_path = tmp_path / "hole.csv"
    _write_rows(csv_path, [{"section": "hole", "x": "1", "y": "1"}])
    with pytest.raises(CsvFormatError, match="Missing ring id"):
        load_rings_csv(str(csv_path))


def test_unknown_section_raises(tmp_path: Path) -> None:
    csv_path = tmp_path / "unknown.csv"
    _write_rows(csv_path, [{"section": "islands", "x": "1", "y": "1"}])
    with pytest.raises(CsvFormatError, match="Unknown section 'islands'"):
        load_rings_csv(str(csv_path))


def test_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rings_csv(str(tmp_path / "absent.csv"))
