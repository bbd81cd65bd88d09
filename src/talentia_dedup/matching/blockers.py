"""Index téléphone → candidat pour les recherches O(1) du traitement par lots."""

from __future__ import annotations

from collections.abc import Iterable

from talentia_dedup.config import DEFAULT_CONFIG, DedupConfig
from talentia_dedup.matching.comparator import phone_key
from talentia_dedup.matching.schema import Candidate


class PhoneIndex:
    """
    Index des candidats par téléphone normalisé.

    Les numéros trop courts ne sont pas indexés. À téléphone égal, le dernier
    candidat ajouté remplace le précédent.
    """

    def __init__(self, config: DedupConfig = DEFAULT_CONFIG) -> None:
        self.min_digits = config.min_phone_digits
        self._by_phone: dict[str, Candidate] = {}

    @classmethod
    def build(cls, candidates: Iterable[Candidate], config: DedupConfig = DEFAULT_CONFIG) -> PhoneIndex:
        """Indexe les candidats actifs (ni supprimés, ni déjà doublons)."""
        index = cls(config)
        for c in candidates:
            if c.is_active:
                index.add(c)
        return index

    def key(self, candidate: Candidate) -> str | None:
        phone = phone_key(candidate)
        return phone if len(phone) >= self.min_digits else None

    def add(self, candidate: Candidate) -> bool:
        phone = self.key(candidate)
        if phone is None:
            return False
        self._by_phone[phone] = candidate
        return True

    def get(self, candidate: Candidate) -> Candidate | None:
        phone = self.key(candidate)
        if phone is None:
            return None
        return self._by_phone.get(phone)

    def __contains__(self, phone: object) -> bool:
        return phone in self._by_phone

    def __len__(self) -> int:
        return len(self._by_phone)


def build_id_index(candidates: Iterable[Candidate]) -> dict[str, Candidate]:
    """Index id → candidat actif. À id égal, le premier candidat est gardé."""
    index: dict[str, Candidate] = {}
    for c in candidates:
        if c.is_active and c.id not in index:
            index[c.id] = c
    return index
