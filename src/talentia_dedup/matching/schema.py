"""Schémas et types pour la déduplication."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from talentia_dedup.normalize import norm_text


@dataclass(frozen=True)
class Candidate:
    """
    Instantané d'un candidat, fourni par l'application appelante.

    Le moteur ne fait que lire ces champs ; il n'en crée ni n'en modifie aucun.
    """

    id: str
    first_name: str | None = ""
    last_name: str | None = ""
    maternal_last_name: str | None = None
    phone: str | None = ""
    phone_normalized: str | None = None  # 9 chiffres, peut être absent
    dni: str | None = None
    deleted_at: str | None = None  # marqueur de suppression logique
    is_duplicate: bool = False

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Candidate:
        """Construit un candidat depuis un dict ; les clés inconnues sont ignorées."""
        if "id" not in d or d["id"] is None:
            raise KeyError("id")
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in d.items() if k in known}
        flag = values.get("is_duplicate", False)
        if isinstance(flag, str):
            flag = flag.strip().lower() in {"1", "true", "yes", "y", "on"}
        values["is_duplicate"] = bool(flag)
        return cls(**values)

    @property
    def is_active(self) -> bool:
        """Faux si le candidat est supprimé ou déjà marqué comme doublon."""
        return not self.deleted_at and not self.is_duplicate

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.last_name, self.maternal_last_name)
        return " ".join(filter(None, (norm_text(p, lower=False) for p in parts)))


@dataclass(frozen=True)
class MatchDetails:
    """Explication d'une correspondance, pour la revue humaine."""

    phone_match: bool
    name_similarity: float
    phonetic_match: bool


@dataclass(frozen=True)
class DuplicateMatch:
    """Correspondance entre un candidat et un enregistrement existant."""

    source_id: str
    matched_id: str
    confidence: float  # 0-1
    match_type: str  # phone, name, phone_and_name
    details: MatchDetails

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "matched_id": self.matched_id,
            "confidence": self.confidence,
            "match_type": self.match_type,
            "details": {
                "phone_match": self.details.phone_match,
                "name_similarity": self.details.name_similarity,
                "phonetic_match": self.details.phonetic_match,
            },
        }

    def __repr__(self) -> str:
        return f"DuplicateMatch({self.source_id}->{self.matched_id}, {self.match_type}, {self.confidence:.2f})"


@dataclass
class DuplicateGroup:
    """Candidat entrant à faire revoir, avec ses correspondances classées."""

    candidate: Candidate
    matches: list[DuplicateMatch]

    @property
    def best(self) -> DuplicateMatch:
        return self.matches[0]


@dataclass
class MergePair:
    """Fusion automatique : kept est conservé, merged disparaît."""

    kept: Candidate
    merged: Candidate
    match: DuplicateMatch


@dataclass
class BatchDedupResult:
    """Partition d'un lot entrant : uniques, à revoir, fusionnés automatiquement."""

    unique: list[Candidate] = field(default_factory=list)
    duplicates: list[DuplicateGroup] = field(default_factory=list)
    auto_merged: list[MergePair] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.unique) + len(self.duplicates) + len(self.auto_merged)
