"""Tests du chargement des candidats et de l'écriture des tableaux."""

import json
from pathlib import Path

import pandas as pd

from talentia_dedup.matching.schema import Candidate
from talentia_dedup.records import load_candidates, save_sheets


def test_load_candidates_list(tmp_path: Path) -> None:
    path = tmp_path / "candidates.json"
    path.write_text(
        json.dumps(
            [
                {"id": "c1", "first_name": "Juan", "last_name": "Pérez", "phone": "987654321", "extra": "ignoré"},
                {"id": "c2", "first_name": "Rosa", "is_duplicate": "true"},
            ]
        ),
        encoding="utf-8",
    )
    candidates = load_candidates(path)
    assert [c.id for c in candidates] == ["c1", "c2"]
    assert candidates[0].last_name == "Pérez"
    assert candidates[1].is_duplicate
    assert not candidates[1].is_active


def test_load_candidates_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps({"candidates": [{"id": "c1"}]}), encoding="utf-8")
    assert load_candidates(path) == [Candidate(id="c1")]


def test_candidate_full_name() -> None:
    c = Candidate(id="c1", first_name=" Juan ", last_name="Perez", maternal_last_name=None)
    assert c.full_name == "Juan Perez"
    c = Candidate(id="c2", first_name="María  del   Carmen", last_name="  ", maternal_last_name="Quispe")
    assert c.full_name == "María del Carmen Quispe"


def test_save_sheets_xlsx(tmp_path: Path) -> None:
    out = tmp_path / "sub" / "out.xlsx"
    long_name = "A" * 40
    save_sheets(out, {"Unique": pd.DataFrame({"id": ["c1"]}), long_name: pd.DataFrame({"x": [1]})})
    assert out.exists()
    sheets = pd.read_excel(out, sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Unique", "A" * 31]
    assert sheets["Unique"]["id"].tolist() == ["c1"]


def test_save_sheets_csv_first_sheet_only(tmp_path: Path) -> None:
    out = tmp_path / "out.csv"
    save_sheets(out, {"Unique": pd.DataFrame({"id": ["c1", "c2"]}), "Other": pd.DataFrame({"x": [1]})})
    df = pd.read_csv(out)
    assert df.columns.tolist() == ["id"]
    assert len(df) == 2
