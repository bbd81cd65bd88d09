"""Comparaison de deux candidats : téléphone + nom complet."""

from __future__ import annotations

from talentia_dedup.config import (
    DEFAULT_CONFIG,
    MATCH_NAME,
    MATCH_PHONE,
    MATCH_PHONE_AND_NAME,
    DedupConfig,
)
from talentia_dedup.matching.schema import Candidate, DuplicateMatch, MatchDetails
from talentia_dedup.matching.scorers import full_name_similarity
from talentia_dedup.normalize import normalize_phone


def phone_key(candidate: Candidate) -> str:
    """Téléphone normalisé du candidat (phone_normalized, sinon dérivé de phone)."""
    if candidate.phone_normalized:
        return normalize_phone(candidate.phone_normalized)
    return normalize_phone(candidate.phone)


def phones_match(phone1: str, phone2: str, config: DedupConfig = DEFAULT_CONFIG) -> bool:
    """Égalité stricte, seulement si les deux numéros ont assez de chiffres."""
    n = config.min_phone_digits
    return len(phone1) >= n and len(phone2) >= n and phone1 == phone2


def compare_candidates(
    x: Candidate,
    y: Candidate,
    config: DedupConfig = DEFAULT_CONFIG,
) -> DuplicateMatch | None:
    """
    Compare deux candidats et décide s'ils décrivent la même personne.

    Table de décision (dans l'ordre) :
    - téléphone identique et nom >= 0.80 → 0.99, phone_and_name
    - téléphone identique seul → 0.98, phone
    - nom >= seuil de revue → similarité * 0.9, name
    - sinon → None

    Une confiance finale sous le seuil de revue donne aussi None : un nom à
    0.85 (0.85 * 0.9 = 0.765) n'est donc pas signalé.

    Returns:
        DuplicateMatch, ou None si pas de correspondance (ou x et y ont le même id).
    """
    if x.id == y.id:
        return None

    phone_match = phones_match(phone_key(x), phone_key(y), config)
    names = full_name_similarity(x, y, config)

    if phone_match and names.similarity >= config.phone_name_threshold:
        confidence = config.phone_and_name_confidence
        match_type = MATCH_PHONE_AND_NAME
    elif phone_match:
        confidence = config.phone_confidence
        match_type = MATCH_PHONE
    elif names.similarity >= config.review_threshold:
        confidence = names.similarity * config.name_confidence_factor
        match_type = MATCH_NAME
    else:
        return None

    if confidence < config.review_threshold:
        return None

    return DuplicateMatch(
        source_id=x.id,
        matched_id=y.id,
        confidence=confidence,
        match_type=match_type,
        details=MatchDetails(
            phone_match=phone_match,
            name_similarity=names.similarity,
            phonetic_match=names.phonetic_match,
        ),
    )
