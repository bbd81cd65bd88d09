"""Génération des tableaux de revue et du rapport de déduplication."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import pandas as pd

from talentia_dedup import __version__
from talentia_dedup.config import DEFAULT_CONFIG, MATCH_NAME, MATCH_PHONE, MATCH_PHONE_AND_NAME, DedupConfig
from talentia_dedup.matching.schema import BatchDedupResult, Candidate, DuplicateMatch

MATCH_TYPE_LABELS = {
    MATCH_PHONE: "Coincidencia de telefono",
    MATCH_NAME: "Coincidencia de nombre",
    MATCH_PHONE_AND_NAME: "Coincidencia de telefono y nombre",
}

# Seuil intermédiaire : entre review_threshold et auto_merge_threshold
REVISION_THRESHOLD = 0.85

RECOMMENDATIONS = {
    "fusion_automatica": "Alta confianza de duplicado. Se recomienda fusionar automaticamente.",
    "revision_requerida": "Probable duplicado. Requiere revision manual antes de proceder.",
    "verificar_manualmente": "Posible duplicado. Verificar datos con el candidato.",
}
DEFAULT_RECOMMENDATION = (
    "continuar",
    "Baja probabilidad de duplicado. Puede continuar con el registro.",
)


def match_type_label(match_type: str) -> str:
    return MATCH_TYPE_LABELS.get(match_type, match_type)


def recommendation(confidence: float, config: DedupConfig = DEFAULT_CONFIG) -> tuple[str, str]:
    """
    Action conseillée au recruteur pour une confiance donnée.

    Les bornes suivent la configuration : fusion à partir de
    auto_merge_threshold, vérification à partir de review_threshold. Une
    correspondance rangée dans « duplicates » par le traitement par lots n'est
    donc jamais recommandée pour la fusion.

    Returns:
        (action, description)
    """
    tiers = (
        (config.auto_merge_threshold, "fusion_automatica"),
        (max(REVISION_THRESHOLD, config.review_threshold), "revision_requerida"),
        (config.review_threshold, "verificar_manualmente"),
    )
    for threshold, action in tiers:
        if confidence >= threshold:
            return action, RECOMMENDATIONS[action]
    return DEFAULT_RECOMMENDATION


def _pct(value: float) -> int:
    return int(round(value * 100))


def build_matches_df(
    matches: list[DuplicateMatch],
    pool: Iterable[Candidate] = (),
    config: DedupConfig = DEFAULT_CONFIG,
) -> pd.DataFrame:
    """
    Construit le tableau de revue d'une liste de correspondances.

    Les champs d'affichage (nom, téléphone, DNI) viennent du pool s'il contient
    l'enregistrement correspondant.
    """
    by_id = {c.id: c for c in pool}
    rows = []
    for rank, m in enumerate(matches, start=1):
        other = by_id.get(m.matched_id)
        action, _ = recommendation(m.confidence, config)
        rows.append(
            {
                "rank": rank,
                "source_id": m.source_id,
                "matched_id": m.matched_id,
                "matched_name": other.full_name if other else "Desconocido",
                "matched_phone": other.phone if other else None,
                "matched_dni": other.dni if other else None,
                "confidence_pct": _pct(m.confidence),
                "match_type": m.match_type,
                "match_label": match_type_label(m.match_type),
                "phone_match": m.details.phone_match,
                "name_similarity_pct": _pct(m.details.name_similarity),
                "phonetic_match": m.details.phonetic_match,
                "recommendation": action,
            }
        )
    columns = [
        "rank", "source_id", "matched_id", "matched_name", "matched_phone", "matched_dni",
        "confidence_pct", "match_type", "match_label", "phone_match",
        "name_similarity_pct", "phonetic_match", "recommendation",
    ]  # fmt: skip
    return pd.DataFrame(rows, columns=columns)


def _candidate_row(c: Candidate) -> dict[str, object]:
    return {"id": c.id, "full_name": c.full_name, "phone": c.phone, "dni": c.dni}


def build_batch_frames(
    result: BatchDedupResult,
    config: DedupConfig = DEFAULT_CONFIG,
) -> dict[str, pd.DataFrame]:
    """
    Construit les trois tableaux d'un traitement par lots.

    Returns:
        {"Unique": ..., "Duplicates": ..., "AutoMerged": ...}
    """
    unique_df = pd.DataFrame(
        [_candidate_row(c) for c in result.unique],
        columns=["id", "full_name", "phone", "dni"],
    )

    dup_rows = []
    for group in result.duplicates:
        for rank, m in enumerate(group.matches, start=1):
            dup_rows.append(
                {
                    "candidate_id": group.candidate.id,
                    "candidate_name": group.candidate.full_name,
                    "rank": rank,
                    "matched_id": m.matched_id,
                    "confidence_pct": _pct(m.confidence),
                    "match_type": m.match_type,
                    "name_similarity_pct": _pct(m.details.name_similarity),
                    "phonetic_match": m.details.phonetic_match,
                    "recommendation": recommendation(m.confidence, config)[0],
                }
            )
    dup_df = pd.DataFrame(
        dup_rows,
        columns=[
            "candidate_id", "candidate_name", "rank", "matched_id", "confidence_pct",
            "match_type", "name_similarity_pct", "phonetic_match", "recommendation",
        ],
    )  # fmt: skip

    merged_df = pd.DataFrame(
        [
            {
                "kept_id": p.kept.id,
                "kept_name": p.kept.full_name,
                "merged_id": p.merged.id,
                "merged_name": p.merged.full_name,
                "confidence_pct": _pct(p.match.confidence),
                "match_type": p.match.match_type,
            }
            for p in result.auto_merged
        ],
        columns=["kept_id", "kept_name", "merged_id", "merged_name", "confidence_pct", "match_type"],
    )

    return {"Unique": unique_df, "Duplicates": dup_df, "AutoMerged": merged_df}


def build_report_df(result: BatchDedupResult, config: DedupConfig) -> pd.DataFrame:
    """
    Construit le DataFrame pour l'onglet REPORT.

    Contient : nb candidats entrants, nb uniques, nb à revoir, nb fusionnés,
    seuils, horodatage, version.
    """
    by_type: dict[str, int] = {}
    for group in result.duplicates:
        t = group.best.match_type
        by_type[t] = by_type.get(t, 0) + 1

    rows = [
        ("nb_incoming", len(result)),
        ("nb_unique", len(result.unique)),
        ("nb_duplicates_review", len(result.duplicates)),
        ("nb_auto_merged", len(result.auto_merged)),
    ]
    for t in sorted(by_type):
        rows.append((f"nb_review_{t}", by_type[t]))
    rows.extend(
        [
            ("", ""),
            ("Parameters", ""),
            ("review_threshold", config.review_threshold),
            ("auto_merge_threshold", config.auto_merge_threshold),
            ("prefilter_threshold", config.prefilter_threshold),
            ("min_phone_digits", config.min_phone_digits),
            (
                "name_weights",
                f"first={config.first_name_weight} last={config.last_name_weight} "
                f"maternal={config.maternal_name_weight}",
            ),
            ("", ""),
            ("timestamp", datetime.now().isoformat()),
            ("version", __version__),
        ]
    )
    return pd.DataFrame(rows, columns=["Key", "Value"])


def print_report_console(result: BatchDedupResult) -> None:
    """Affiche un résumé du rapport en console."""
    print("\n=== Talentia Dedup Report ===")
    print(f"  Candidats entrants:  {len(result)}")
    print(f"  Uniques:             {len(result.unique)}")
    print(f"  À revoir:            {len(result.duplicates)}")
    print(f"  Fusion automatique:  {len(result.auto_merged)}")
    print(f"  Version:             {__version__}")
    print(f"  Timestamp:           {datetime.now().isoformat()}")
    print("=============================\n")
