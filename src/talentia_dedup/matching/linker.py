"""Moteur de déduplication : recherche de doublons et traitement par lots."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from talentia_dedup.config import DEFAULT_CONFIG, DedupConfig
from talentia_dedup.matching.blockers import PhoneIndex, build_id_index
from talentia_dedup.matching.comparator import compare_candidates, phone_key, phones_match
from talentia_dedup.matching.distance import bounded_distance
from talentia_dedup.matching.schema import (
    BatchDedupResult,
    Candidate,
    DuplicateGroup,
    DuplicateMatch,
    MergePair,
)
from talentia_dedup.normalize import to_spanish_phonetic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Prepared:
    """Candidat avec son téléphone et son apellido phonétique précalculés."""

    candidate: Candidate
    phone: str
    last_name_phonetic: str

    @classmethod
    def of(cls, candidate: Candidate) -> _Prepared:
        return cls(candidate, phone_key(candidate), to_spanish_phonetic(candidate.last_name))


def _sort_matches(matches: list[DuplicateMatch]) -> None:
    # Tri stable : à confiance égale, l'ordre du pool est conservé.
    matches.sort(key=lambda m: m.confidence, reverse=True)


class Deduplicator:
    """Moteur de déduplication configuré."""

    def __init__(self, config: DedupConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def compare(self, x: Candidate, y: Candidate) -> DuplicateMatch | None:
        return compare_candidates(x, y, self.config)

    def _surnames_too_far(self, p1: str, p2: str) -> bool:
        """
        Vrai si les apellidos phonétiques sont assez éloignés pour sauter la paire.

        La borne est relâchée d'un cran : seules les paires dont la similarité
        exacte est sûrement sous prefilter_threshold sont écartées.
        """
        if p1 == p2:
            return False
        max_len = max(len(p1), len(p2))
        bound = int(max_len * (1.0 - self.config.prefilter_threshold)) + 1
        result = bounded_distance(p1, p2, bound)
        if result.exceeded:
            return True
        return 1.0 - result.value / max_len < self.config.prefilter_threshold

    def _search(self, target: _Prepared, pool: Iterable[_Prepared]) -> list[DuplicateMatch]:
        matches: list[DuplicateMatch] = []
        candidate = target.candidate

        for entry in pool:
            existing = entry.candidate
            if existing.id == candidate.id or not existing.is_active:
                continue

            if not phones_match(target.phone, entry.phone, self.config):
                if self._surnames_too_far(target.last_name_phonetic, entry.last_name_phonetic):
                    continue

            match = compare_candidates(candidate, existing, self.config)
            if match is not None:
                matches.append(match)

        _sort_matches(matches)
        return matches

    def find_duplicates(self, candidate: Candidate, pool: Iterable[Candidate]) -> list[DuplicateMatch]:
        """
        Cherche les doublons d'un candidat dans un pool.

        Ignore le candidat lui-même et les enregistrements supprimés ou déjà
        marqués comme doublons. Sans correspondance de téléphone, une paire dont
        les apellidos phonétiques sont trop éloignés (< 0.6) est écartée avant
        la comparaison complète.

        Returns:
            Correspondances triées par confiance décroissante.
        """
        return self._search(_Prepared.of(candidate), (_Prepared.of(c) for c in pool))

    def batch_deduplicate(
        self,
        incoming: Sequence[Candidate],
        existing: Sequence[Candidate],
    ) -> BatchDedupResult:
        """
        Déduplique un lot entrant contre la base existante et contre lui-même.

        Les candidats entrants sont traités dans l'ordre. Un candidat peut
        correspondre à un enregistrement existant ou à un candidat entrant déjà
        accepté comme unique (index téléphone du lot).

        Classement :
        - aucune correspondance → unique
        - meilleure confiance >= auto_merge_threshold → auto_merged
        - sinon → duplicates, avec la liste classée pour revue

        L'index téléphone des enregistrements existants ne sert qu'au
        diagnostic : il compte les candidats entrants dont le téléphone est
        déjà connu (existing_phone_hits dans le log batch_complete). Les
        correspondances elles-mêmes viennent de la recherche sur le pool.

        Returns:
            BatchDedupResult.
        """
        result = BatchDedupResult()
        pool = [_Prepared.of(c) for c in existing if c.is_active]
        existing_by_id = build_id_index(existing)
        existing_phones = PhoneIndex.build(existing, self.config)
        incoming_phones = PhoneIndex(self.config)
        phone_hits = 0

        for candidate in incoming:
            target = _Prepared.of(candidate)
            matches = self._search(target, pool)

            if existing_phones.get(candidate) is not None:
                phone_hits += 1

            earlier = incoming_phones.get(candidate)
            if earlier is not None:
                internal = compare_candidates(candidate, earlier, self.config)
                if internal is not None:
                    matches.append(internal)
                    _sort_matches(matches)

            if not matches:
                result.unique.append(candidate)
                incoming_phones.add(candidate)
                logger.debug("batch_unique id=%s", candidate.id)
                continue

            best = matches[0]
            if best.confidence < self.config.auto_merge_threshold:
                result.duplicates.append(DuplicateGroup(candidate=candidate, matches=matches))
                logger.debug(
                    "batch_review id=%s matches=%d best=%.3f", candidate.id, len(matches), best.confidence
                )
                continue

            kept = existing_by_id.get(best.matched_id)
            if kept is None and earlier is not None and earlier.id == best.matched_id:
                kept = earlier
            if kept is None:
                logger.warning("batch_kept_missing id=%s matched_id=%s", candidate.id, best.matched_id)
                result.unique.append(candidate)
                incoming_phones.add(candidate)
                continue

            result.auto_merged.append(MergePair(kept=kept, merged=candidate, match=best))
            logger.debug(
                "batch_auto_merge id=%s kept=%s confidence=%.3f", candidate.id, kept.id, best.confidence
            )

        logger.info(
            "batch_complete incoming=%d existing=%d unique=%d duplicates=%d auto_merged=%d existing_phone_hits=%d",
            len(incoming),
            len(pool),
            len(result.unique),
            len(result.duplicates),
            len(result.auto_merged),
            phone_hits,
        )
        return result


def find_duplicates(
    candidate: Candidate,
    pool: Iterable[Candidate],
    config: DedupConfig = DEFAULT_CONFIG,
) -> list[DuplicateMatch]:
    """Recherche de doublons pour un seul candidat (vérification avant insertion)."""
    return Deduplicator(config).find_duplicates(candidate, pool)


def batch_deduplicate(
    incoming: Sequence[Candidate],
    existing: Sequence[Candidate],
    config: DedupConfig = DEFAULT_CONFIG,
) -> BatchDedupResult:
    """Déduplication d'un import en masse."""
    return Deduplicator(config).batch_deduplicate(incoming, existing)
