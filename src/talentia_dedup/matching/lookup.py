"""Recherche de candidats par nom phonétique (autocomplétion)."""

from __future__ import annotations

from collections.abc import Iterable

from rapidfuzz import fuzz, process

from talentia_dedup.matching.schema import Candidate
from talentia_dedup.normalize import to_spanish_phonetic


def phonetic_key(candidate: Candidate) -> str:
    """Forme phonétique du nom complet (colonne name_phonetic côté application)."""
    return to_spanish_phonetic(candidate.full_name)


def search_by_name(
    query: str,
    pool: Iterable[Candidate],
    *,
    limit: int = 10,
    score_cutoff: float = 70.0,
) -> list[tuple[Candidate, float]]:
    """
    Classe les candidats dont le nom sonne comme la requête.

    « Ernandes Yanos » trouve donc « Hernández Llanos ». Les candidats supprimés
    ou déjà doublons sont ignorés.

    Args:
        query: Texte saisi (nom partiel ou complet).
        pool: Candidats à parcourir.
        limit: Nombre maximum de résultats.
        score_cutoff: Score minimal (0-100, fuzz.ratio sur les formes phonétiques).

    Returns:
        Liste de (candidat, score), meilleur score en premier.
    """
    key = to_spanish_phonetic(query)
    if not key or limit < 1:
        return []

    candidates = [c for c in pool if c.is_active]
    choices = {i: phonetic_key(c) for i, c in enumerate(candidates)}
    hits = process.extract(
        key,
        choices,
        scorer=fuzz.ratio,
        limit=limit,
        score_cutoff=score_cutoff,
    )
    return [(candidates[idx], float(score)) for _choice, score, idx in hits]
