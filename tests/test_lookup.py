"""Tests de la recherche par nom phonétique."""

from talentia_dedup.matching.lookup import phonetic_key, search_by_name
from talentia_dedup.matching.schema import Candidate

POOL = [
    Candidate(id="c1", first_name="Juan", last_name="Hernández", maternal_last_name="Llanos"),
    Candidate(id="c2", first_name="Rosa", last_name="Mamani", maternal_last_name="Apaza"),
    Candidate(id="c3", first_name="Juan", last_name="Hernández", maternal_last_name="Llanos", deleted_at="2026-01-01"),
]


def test_phonetic_key() -> None:
    assert phonetic_key(POOL[0]) == "juanernandesyanos"


def test_search_by_name_phonetic_variant() -> None:
    hits = search_by_name("Juan Ernandes Yanos", POOL)
    assert [c.id for c, _ in hits] == ["c1"]
    assert hits[0][1] == 100.0


def test_search_by_name_ranking() -> None:
    pool = POOL + [Candidate(id="c4", first_name="Juana", last_name="Hernandes", maternal_last_name="Llanos")]
    hits = search_by_name("Juan Hernandez Llanos", pool)
    assert [c.id for c, _ in hits] == ["c1", "c4"]
    assert hits[0][1] > hits[1][1]


def test_search_by_name_limit_and_cutoff() -> None:
    assert search_by_name("Juan Hernandez Llanos", POOL, limit=0) == []
    assert search_by_name("Quispe", POOL) == []


def test_search_by_name_empty_query() -> None:
    assert search_by_name("", POOL) == []
    assert search_by_name("---", POOL) == []
