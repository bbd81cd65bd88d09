"""I/O : chargement des candidats (JSON) et écriture des tableaux de revue."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from talentia_dedup.config import TalentiaDedupError
from talentia_dedup.matching.schema import Candidate

SUPPORTED_OUTPUT_EXTENSIONS = (".xlsx", ".csv")


class RecordFileError(TalentiaDedupError):
    """Erreur de lecture ou d'écriture d'un fichier de candidats ou de rapport."""


def load_candidates(filepath: str | Path) -> list[Candidate]:
    """
    Charge une liste de candidats depuis un fichier JSON.

    Le fichier contient soit un tableau d'objets, soit un objet avec une clé
    "candidates". Chaque objet doit avoir un "id".

    Raises:
        RecordFileError: Fichier absent, JSON invalide ou candidat sans id.
    """
    path = Path(filepath)
    if not path.exists():
        raise RecordFileError(f"Fichier introuvable: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordFileError(f"JSON invalide dans {path}: {e}") from e
    except OSError as e:
        raise RecordFileError(f"Impossible de lire {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("candidates")
    if not isinstance(data, list):
        raise RecordFileError(f"{path} doit contenir un tableau de candidats")

    candidates: list[Candidate] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise RecordFileError(f"{path}: l'élément #{i} n'est pas un objet")
        try:
            candidates.append(Candidate.from_dict(item))
        except KeyError as e:
            raise RecordFileError(f"{path}: l'élément #{i} n'a pas d'id") from e
        except TypeError as e:
            raise RecordFileError(f"{path}: élément #{i} invalide: {e}") from e
    return candidates


def save_sheets(filepath: str | Path, sheets: dict[str, pd.DataFrame]) -> None:
    """
    Écrit les tableaux de revue.

    .xlsx : une feuille par DataFrame (openpyxl). .csv : seul le premier tableau.

    Raises:
        RecordFileError: Extension non supportée ou écriture impossible.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_OUTPUT_EXTENSIONS:
        raise RecordFileError(
            f"Format de sortie non supporté: {suffix or '(aucun)'}. Valides: {', '.join(SUPPORTED_OUTPUT_EXTENSIONS)}"
        )
    if not sheets:
        raise RecordFileError("Aucun tableau à écrire")

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if suffix == ".csv":
            next(iter(sheets.values())).to_csv(path, index=False, encoding="utf-8")
            return
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for name, df in sheets.items():
                df.to_excel(writer, sheet_name=name[:31], index=False)
    except OSError as e:
        raise RecordFileError(f"Impossible d'écrire {path}: {e}") from e
