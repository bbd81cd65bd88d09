"""talentia-dedup - Déduplication de candidats (phonétique espagnole, Pérou)."""

from talentia_dedup.config import ConfigError, ConfigFileError, DedupConfig, TalentiaDedupError
from talentia_dedup.matching import (
    BatchDedupResult,
    Candidate,
    Deduplicator,
    DuplicateMatch,
    batch_deduplicate,
    compare_candidates,
    find_duplicates,
)
from talentia_dedup.normalize import to_spanish_phonetic
from talentia_dedup.records import RecordFileError

__all__ = [
    "__version__",
    "TalentiaDedupError",
    "ConfigError",
    "ConfigFileError",
    "RecordFileError",
    "DedupConfig",
    "Candidate",
    "DuplicateMatch",
    "BatchDedupResult",
    "Deduplicator",
    "find_duplicates",
    "batch_deduplicate",
    "compare_candidates",
    "to_spanish_phonetic",
]

__version__ = "0.1.0"
