"""Module de matching et déduplication."""

from talentia_dedup.matching.comparator import compare_candidates
from talentia_dedup.matching.linker import Deduplicator, batch_deduplicate, find_duplicates
from talentia_dedup.matching.schema import (
    BatchDedupResult,
    Candidate,
    DuplicateGroup,
    DuplicateMatch,
    MatchDetails,
    MergePair,
)

__all__ = [
    "BatchDedupResult",
    "Candidate",
    "Deduplicator",
    "DuplicateGroup",
    "DuplicateMatch",
    "MatchDetails",
    "MergePair",
    "batch_deduplicate",
    "compare_candidates",
    "find_duplicates",
]
