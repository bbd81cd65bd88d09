"""Tests des scorers de similarité de noms."""

from collections.abc import Callable

import pytest

from talentia_dedup.config import DedupConfig
from talentia_dedup.matching.schema import Candidate
from talentia_dedup.matching.scorers import (
    INDIGENOUS_SURNAMES,
    first_name_similarity,
    full_name_similarity,
    is_indigenous_surname,
    name_similarity,
    phonetic_similarity,
    split_compound_name,
    surname_similarity,
)


def test_name_similarity_identical() -> None:
    assert name_similarity("Juan", "Juan") == 1.0
    assert name_similarity("JUAN", " juan ") == 1.0


def test_name_similarity_empty() -> None:
    assert name_similarity("", "") == 1.0
    assert name_similarity("  ", None) == 1.0
    assert name_similarity("Juan", "") == 0.0
    assert name_similarity(None, "Juan") == 0.0


def test_name_similarity_ignores_inner_spacing() -> None:
    assert name_similarity("Maria  del\tCarmen", "maria del carmen") == 1.0
    assert surname_similarity("Nun\u0303ez", "Nu\u00f1ez") == 1.0


def test_name_similarity_formula() -> None:
    assert name_similarity("Maria", "Mario") == pytest.approx(0.8)
    assert name_similarity("Hernandez", "Ernandez") == pytest.approx(1 - 1 / 9)


@pytest.mark.parametrize(("a", "b"), [("Pedro", "Juan"), ("Quispe", "Mamani"), ("a", "zzzzzzzz")])
def test_name_similarity_in_unit_range(a: str, b: str) -> None:
    assert 0.0 <= name_similarity(a, b) <= 1.0


def test_phonetic_similarity() -> None:
    assert phonetic_similarity("Hernandez", "Ernandez") == 1.0
    assert phonetic_similarity("Gonzalez", "Gonsales") == 1.0
    assert phonetic_similarity("Valverde", "Balberde") == 1.0


def test_is_indigenous_surname() -> None:
    assert is_indigenous_surname("Quispe")
    assert is_indigenous_surname("  MAMANI ")
    assert not is_indigenous_surname("Perez")
    assert not is_indigenous_surname(None)
    assert "huaman" in INDIGENOUS_SURNAMES


def test_surname_similarity_indigenous_exact_only() -> None:
    assert surname_similarity("Quispe", "Quizpe") == 0.0
    assert surname_similarity("Mamani", "Mamany") == 0.0
    assert surname_similarity("Quispe", " quispe ") == 1.0


def test_surname_similarity_max_of_direct_and_phonetic() -> None:
    assert surname_similarity("Hernandez", "Ernandez") == 1.0
    direct = name_similarity("Perez", "Peres")
    assert surname_similarity("Perez", "Peres") == max(direct, phonetic_similarity("Perez", "Peres"))


def test_surname_similarity_empty() -> None:
    assert surname_similarity("", "") == 1.0
    assert surname_similarity(None, None) == 1.0
    assert surname_similarity("Perez", "") == 0.0


def test_split_compound_name() -> None:
    assert split_compound_name("Maria  del Carmen") == ["maria", "del", "carmen"]
    assert split_compound_name(None) == []


def test_first_name_compound() -> None:
    assert first_name_similarity("Juan Carlos", "Juan Carlos") == 1.0
    # un seul côté composé : seul le premier prénom compte
    assert first_name_similarity("Juan", "Juan Carlos") == 1.0
    score = first_name_similarity("Juan Carlos", "Juan Pablo")
    assert 0.7 <= score < 1.0


def test_first_name_second_token_weight() -> None:
    config = DedupConfig(second_token_weight=0.5)
    plain = first_name_similarity("Juan Carlos", "Juan Pablo")
    heavier = first_name_similarity("Juan Carlos", "Juan Pablo", config)
    assert heavier < plain


def test_first_name_missing() -> None:
    assert first_name_similarity("", "Juan") == 0.0
    assert first_name_similarity(None, None) == 0.0


def test_full_name_identical(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a")
    b = make_candidate(id="b")
    result = full_name_similarity(a, b)
    assert result.similarity == pytest.approx(1.0)
    assert result.phonetic_match


def test_full_name_phonetic_variant(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a", first_name="José", last_name="Hernández")
    b = make_candidate(id="b", first_name="Jose", last_name="Ernandez")
    result = full_name_similarity(a, b)
    assert result.similarity == pytest.approx(1.0)
    assert result.phonetic_match


def test_full_name_indigenous_surname(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a", last_name="Quispe")
    b = make_candidate(id="b", last_name="Quizpe")
    result = full_name_similarity(a, b)
    assert result.last_name == 0.0
    assert result.similarity == pytest.approx(0.5)
    # z → s : formes phonétiques identiques, mais le score reste nul
    assert result.phonetic_match


def test_full_name_maternal_absent_on_both(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a", maternal_last_name=None)
    b = make_candidate(id="b", maternal_last_name="  ")
    result = full_name_similarity(a, b)
    assert result.maternal_last_name == 1.0
    assert result.similarity == pytest.approx(1.0)


def test_full_name_maternal_absent_on_one(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a", maternal_last_name="Garcia")
    b = make_candidate(id="b", maternal_last_name=None)
    result = full_name_similarity(a, b)
    assert result.maternal_last_name == 0.0
    assert result.similarity == pytest.approx(0.8)


def test_full_name_none_fields(make_candidate: Callable[..., Candidate]) -> None:
    a = make_candidate(id="a", first_name=None, last_name=None, maternal_last_name=None)
    b = make_candidate(id="b")
    result = full_name_similarity(a, b)
    assert 0.0 <= result.similarity <= 1.0
    assert not result.phonetic_match
