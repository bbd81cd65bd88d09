"""Distance de Levenshtein bornée, en espace O(min(n, m))."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundedDistance:
    """
    Résultat d'un calcul de distance borné.

    Si exceeded est vrai, la distance réelle dépasse la borne et value vaut
    borne + 1 : la valeur exacte est inconnue.
    """

    value: int
    exceeded: bool = False

    @classmethod
    def exact(cls, value: int) -> BoundedDistance:
        return cls(value, False)

    @classmethod
    def over(cls, max_distance: int) -> BoundedDistance:
        return cls(max_distance + 1, True)


def bounded_distance(a: str, b: str, max_distance: int | None = None) -> BoundedDistance:
    """
    Calcule la distance d'édition (insertion, suppression, substitution à coût 1).

    Optimisations :
    - chaînes identiques → 0, chaîne vide → longueur de l'autre ;
    - la chaîne la plus courte sert de ligne : deux tableaux 1-D alternés ;
    - écart de longueur supérieur à la borne → dépassement immédiat ;
    - arrêt anticipé dès que le minimum d'une ligne dépasse la borne.

    Args:
        a: Première chaîne.
        b: Deuxième chaîne.
        max_distance: Borne optionnelle (>= 0).

    Returns:
        BoundedDistance exacte, ou marquée exceeded si la borne est dépassée.

    Raises:
        ValueError: Si max_distance est négatif.
    """
    if max_distance is not None and max_distance < 0:
        raise ValueError(f"max_distance doit être >= 0 (got {max_distance})")

    if a == b:
        return BoundedDistance.exact(0)
    if not a or not b:
        d = len(a) or len(b)
        if max_distance is not None and d > max_distance:
            return BoundedDistance.over(max_distance)
        return BoundedDistance.exact(d)

    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)

    if max_distance is not None and n - m > max_distance:
        return BoundedDistance.over(max_distance)

    previous = list(range(m + 1))
    current = [0] * (m + 1)

    for j in range(1, n + 1):
        current[0] = j
        row_min = j
        cb = b[j - 1]
        for i in range(1, m + 1):
            cost = 0 if a[i - 1] == cb else 1
            v = min(
                previous[i] + 1,  # suppression
                current[i - 1] + 1,  # insertion
                previous[i - 1] + cost,  # substitution
            )
            current[i] = v
            if v < row_min:
                row_min = v

        if max_distance is not None and row_min > max_distance:
            return BoundedDistance.over(max_distance)

        previous, current = current, previous

    d = previous[m]
    if max_distance is not None and d > max_distance:
        return BoundedDistance.over(max_distance)
    return BoundedDistance.exact(d)


def levenshtein_distance(a: str, b: str, max_distance: int | None = None) -> int:
    """
    Distance de Levenshtein entre deux chaînes.

    Avec max_distance, toute valeur > max_distance signifie « trop loin » :
    seule une valeur <= max_distance est exacte.

    Raises:
        ValueError: Si max_distance est négatif. Le moteur ne passe que des
            bornes >= 1 : seul un appel direct erroné y mène.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("gato", "pato")
        1
    """
    return bounded_distance(a, b, max_distance).value
