"""Configuration des seuils de déduplication et chargement du fichier JSON."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

MATCH_PHONE = "phone"
MATCH_NAME = "name"
MATCH_PHONE_AND_NAME = "phone_and_name"
VALID_MATCH_TYPES = frozenset({MATCH_PHONE, MATCH_NAME, MATCH_PHONE_AND_NAME})

_UNIT_FIELDS = (
    "review_threshold",
    "auto_merge_threshold",
    "phone_name_threshold",
    "phone_and_name_confidence",
    "phone_confidence",
    "name_confidence_factor",
    "prefilter_threshold",
    "first_name_weight",
    "last_name_weight",
    "maternal_name_weight",
    "second_token_weight",
)


class TalentiaDedupError(Exception):
    """Exception de base pour talentia-dedup."""


class ConfigError(TalentiaDedupError, ValueError):
    """Erreur de validation de la configuration."""


class ConfigFileError(TalentiaDedupError):
    """Erreur de chargement du fichier de configuration (fichier absent, JSON invalide)."""


@dataclass(frozen=True)
class DedupConfig:
    """Seuils et pondérations du moteur de déduplication."""

    review_threshold: float = 0.80  # en dessous, la correspondance est ignorée
    auto_merge_threshold: float = 0.95  # fusion sans revue humaine
    phone_name_threshold: float = 0.80
    phone_and_name_confidence: float = 0.99
    phone_confidence: float = 0.98
    name_confidence_factor: float = 0.9
    prefilter_threshold: float = 0.6
    min_phone_digits: int = 9

    first_name_weight: float = 0.30
    last_name_weight: float = 0.50
    maternal_name_weight: float = 0.20
    second_token_weight: float = 0.30  # part du deuxième prénom dans un prénom composé

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> DedupConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ConfigError(f"Clés inconnues: {unknown}. Valides: {sorted(known)}")

        values: dict[str, Any] = {}
        for key, raw in d.items():
            try:
                values[key] = int(raw) if key == "min_phone_digits" else float(raw)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{key} doit être numérique (got {raw!r})") from e

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """
        Vérifie la cohérence des seuils.

        Raises:
            ConfigError: Si un seuil sort de [0, 1] ou si les poids ne somment pas à 1.
        """
        for name in _UNIT_FIELDS:
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ConfigError(f"{name} doit être entre 0 et 1 (got {value})")
        if self.min_phone_digits < 1:
            raise ConfigError(f"min_phone_digits doit être >= 1 (got {self.min_phone_digits})")
        if self.auto_merge_threshold < self.review_threshold:
            raise ConfigError(
                f"auto_merge_threshold ({self.auto_merge_threshold}) doit être >= "
                f"review_threshold ({self.review_threshold})"
            )
        total = self.first_name_weight + self.last_name_weight + self.maternal_name_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigError(f"Les poids des noms doivent sommer à 1 (got {total:.3f})")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def load(cls, path: str | Path) -> DedupConfig:
        """
        Charge la configuration depuis un fichier JSON.

        Les clés absentes gardent leur valeur par défaut.

        Raises:
            ConfigFileError: Si le fichier est absent ou le JSON invalide.
            ConfigError: Si la configuration est invalide.
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigFileError(f"Fichier de configuration introuvable: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                d = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"JSON invalide dans {path}: {e}") from e
        except OSError as e:
            raise ConfigFileError(f"Impossible de lire {path}: {e}") from e

        if not isinstance(d, dict):
            raise ConfigFileError(f"Fichier de configuration invalide: {path} doit contenir un objet JSON")

        return cls.from_dict(d)


DEFAULT_CONFIG = DedupConfig()
