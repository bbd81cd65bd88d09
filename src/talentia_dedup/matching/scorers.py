"""Calcul des scores de similarité de noms (0-1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from talentia_dedup.config import DEFAULT_CONFIG, DedupConfig
from talentia_dedup.matching.distance import levenshtein_distance
from talentia_dedup.normalize import norm_text, to_spanish_phonetic

# Apellidos quechua et aymara courants : une graphie voisine désigne en général
# une autre personne, pas une faute de frappe.
INDIGENOUS_SURNAMES = frozenset(
    {
        # quechua
        "quispe", "mamani", "condori", "huanca", "choque", "cusi", "inca",
        "huaman", "supa", "yupanqui", "tito", "ccama", "ccari", "chura",
        "ccanqui", "apaza", "catacora", "colque", "huallpa", "ticona",
        "poma", "chambi", "cahuana", "calsina", "calla", "callata",
        # aymara
        "paxi", "pari", "tarqui", "quenta", "quino", "coaquira",
        "coila", "coa", "ramos", "larico", "llanos", "llanqui",
    }
)  # fmt: skip


@dataclass(frozen=True)
class NameComparison:
    """Similarité pondérée du nom complet et détail par composante."""

    similarity: float
    phonetic_match: bool
    first_name: float
    last_name: float
    maternal_last_name: float


def name_similarity(a: Any, b: Any) -> float:
    """
    Similarité de Levenshtein normalisée : 1 - distance / max(len).

    Deux valeurs vides → 1, une seule vide → 0.

    Examples:
        >>> name_similarity("Maria", "Mario")
        0.8
    """
    s1 = norm_text(a)
    s2 = norm_text(b)
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0
    return 1.0 - levenshtein_distance(s1, s2) / max(len(s1), len(s2))


def phonetic_similarity(a: Any, b: Any) -> float:
    """Même formule que name_similarity, sur les formes phonétiques."""
    return name_similarity(to_spanish_phonetic(a), to_spanish_phonetic(b))


def best_similarity(a: Any, b: Any) -> float:
    """Maximum de la similarité directe et de la similarité phonétique."""
    return max(name_similarity(a, b), phonetic_similarity(a, b))


def is_indigenous_surname(surname: Any) -> bool:
    return norm_text(surname) in INDIGENOUS_SURNAMES


def surname_similarity(a: Any, b: Any) -> float:
    """
    Similarité de deux apellidos.

    Si l'un des deux est un nom indigène, seule l'égalité exacte compte
    (1 ou 0). Sinon, max(directe, phonétique).
    """
    s1 = norm_text(a)
    s2 = norm_text(b)
    if not s1 and not s2:
        return 1.0
    if not s1 or not s2:
        return 0.0
    if s1 in INDIGENOUS_SURNAMES or s2 in INDIGENOUS_SURNAMES:
        return 1.0 if s1 == s2 else 0.0
    return best_similarity(s1, s2)


def split_compound_name(name: Any) -> list[str]:
    """Découpe un prénom composé : "Maria del Carmen" → ["maria", "del", "carmen"]."""
    return norm_text(name).split()


def first_name_similarity(a: Any, b: Any, config: DedupConfig = DEFAULT_CONFIG) -> float:
    """
    Similarité des prénoms, en tenant compte des prénoms composés.

    Le premier prénom compte seul, sauf si les deux côtés ont un deuxième
    prénom : il entre alors pour second_token_weight dans le score.
    """
    parts1 = split_compound_name(a)
    parts2 = split_compound_name(b)
    if not parts1 or not parts2:
        return 0.0

    score = best_similarity(parts1[0], parts2[0])
    if len(parts1) > 1 and len(parts2) > 1:
        w = config.second_token_weight
        score = score * (1 - w) + best_similarity(parts1[1], parts2[1]) * w
    return score


def full_name_similarity(x: Any, y: Any, config: DedupConfig = DEFAULT_CONFIG) -> NameComparison:
    """
    Similarité pondérée du nom complet de deux candidats.

    Pondération par défaut : prénom 30 %, apellido paterno 50 %, materno 20 %.
    L'absence d'apellido materno des deux côtés compte comme une correspondance.

    phonetic_match est vrai seulement si le prénom complet et l'apellido paterno
    ont des formes phonétiques identiques.

    Args:
        x: Objet avec first_name, last_name, maternal_last_name.
        y: Idem.
        config: Pondérations.

    Returns:
        NameComparison.
    """
    first = first_name_similarity(x.first_name, y.first_name, config)
    last = surname_similarity(x.last_name, y.last_name)

    maternal = 1.0
    if norm_text(x.maternal_last_name) or norm_text(y.maternal_last_name):
        maternal = surname_similarity(x.maternal_last_name, y.maternal_last_name)

    weighted = (
        first * config.first_name_weight
        + last * config.last_name_weight
        + maternal * config.maternal_name_weight
    )

    phonetic_match = to_spanish_phonetic(x.first_name) == to_spanish_phonetic(
        y.first_name
    ) and to_spanish_phonetic(x.last_name) == to_spanish_phonetic(y.last_name)

    return NameComparison(
        similarity=min(1.0, max(0.0, weighted)),
        phonetic_match=phonetic_match,
        first_name=first,
        last_name=last,
        maternal_last_name=maternal,
    )
