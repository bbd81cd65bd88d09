"""Normalisation de texte, phonétique espagnole (Pérou) et téléphones."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable
from typing import Any

_ACCENTS = str.maketrans({"á": "a", "é": "e", "í": "i", "ó": "o", "ú": "u", "ü": "u"})
_RR = "rr"

# Au-delà, la chaîne ne bouge plus : chaque passe qui modifie le texte le raccourcit
# ou fait disparaître un c, g, z, v ou h.
_MAX_PASSES = 8


def norm_text(s: Any, *, lower: bool = True) -> str:
    """
    Nettoie un champ nom : NFKC, espaces multiples → espace simple, strip.

    Les formes décomposées (« n » + tilde combinant) sont recomposées : « Nuñez »
    saisi sur deux claviers différents donne la même chaîne.

    Args:
        s: Valeur du champ. Toute valeur non textuelle (None, NaN, nombre) donne "".
        lower: Minuscules pour les comparaisons ; casse d'origine pour l'affichage.

    Returns:
        Chaîne nettoyée.
    """
    if not isinstance(s, str):
        return ""
    text = unicodedata.normalize("NFKC", s)
    text = re.sub(r"\s+", " ", text).strip()
    return text.lower() if lower else text


def _collapse_repeats(s: str) -> str:
    """
    Réduit les lettres répétées à une seule, sauf le digramme « rr ».

    Première passe : découpage en jetons, chaque paire « rr » formant un jeton.
    Seconde passe : fusion des jetons identiques consécutifs.
    """
    tokens: list[str] = []
    i = 0
    while i < len(s):
        if s.startswith(_RR, i):
            tokens.append(_RR)
            i += 2
        else:
            tokens.append(s[i])
            i += 1

    out: list[str] = []
    for tok in tokens:
        if not out or out[-1] != tok:
            out.append(tok)
    return "".join(out)


# Règles appliquées dans l'ordre : chaque règle travaille sur la sortie de la précédente.
PHONETIC_RULES: tuple[tuple[str, Callable[[str], str]], ...] = (
    ("enye", lambda s: s.replace("ñ", "ny")),
    ("accents", lambda s: s.translate(_ACCENTS)),
    ("yeismo", lambda s: s.replace("ll", "y")),
    ("seseo", lambda s: re.sub(r"c([ei])", r"s\1", s).replace("z", "s")),
    ("h_muda", lambda s: s.replace("h", "")),
    ("b_v", lambda s: s.replace("v", "b")),
    ("g_j", lambda s: re.sub(r"g([ei])", r"j\1", s)),
    ("dobles", _collapse_repeats),
    ("no_alfa", lambda s: re.sub(r"[^a-z]", "", s)),
)


def _apply_rules(s: str) -> str:
    for _rule_id, transform in PHONETIC_RULES:
        s = transform(s)
    return s


def to_spanish_phonetic(name: Any) -> str:
    """
    Convertit un nom en sa représentation phonétique (espagnol péruvien).

    Minuscules, accents retirés, puis yeísmo (ll → y), seseo (ce/ci/z → s),
    h muette, fusion b/v, g doux (ge/gi → je/ji), lettres doubles réduites
    (sauf rr) et suppression de tout caractère non alphabétique.

    La table est réappliquée jusqu'à stabilité : le retrait des tirets ou des
    h peut rapprocher des lettres qu'une règle antérieure aurait réécrites
    (« l-l », « Chepe »), et le résultat doit rester idempotent.

    Args:
        name: Nom à convertir. Toute valeur non textuelle donne "".

    Returns:
        Représentation phonétique, uniquement en lettres a-z.

    Examples:
        >>> to_spanish_phonetic("Hernández")
        'ernandes'
        >>> to_spanish_phonetic("Llanos")
        'yanos'
    """
    if not isinstance(name, str) or not name:
        return ""

    current = norm_text(name)
    for _ in range(_MAX_PASSES):
        nxt = _apply_rules(current)
        if nxt == current:
            break
        current = nxt
    return current


def normalize_phone(raw: Any) -> str:
    """
    Réduit un numéro péruvien à ses 9 chiffres de mobile.

    Retire tout ce qui n'est pas un chiffre, puis le préfixe pays 51 (11 chiffres)
    et le zéro de ligne (10 chiffres). Si la forme à 9 chiffres n'est pas atteinte,
    les chiffres restants sont renvoyés tels quels.
    """
    if raw is None:
        return ""
    digits = re.sub(r"\D", "", str(raw))
    if digits.startswith("51") and len(digits) == 11:
        digits = digits[2:]
    if digits.startswith("0") and len(digits) == 10:
        digits = digits[1:]
    return digits
