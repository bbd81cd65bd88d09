"""Interface en ligne de commande talentia-dedup."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from talentia_dedup import __version__
from talentia_dedup.config import DEFAULT_CONFIG, DedupConfig, TalentiaDedupError
from talentia_dedup.matching.linker import Deduplicator
from talentia_dedup.normalize import to_spanish_phonetic
from talentia_dedup.records import RecordFileError, load_candidates, save_sheets
from talentia_dedup.report import (
    build_batch_frames,
    build_matches_df,
    build_report_df,
    match_type_label,
    print_report_console,
    recommendation,
)

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_config(config_path: str | None) -> DedupConfig:
    return DedupConfig.load(config_path) if config_path else DEFAULT_CONFIG


def cmd_phonetic(names: Sequence[str]) -> int:
    """Affiche la forme phonétique de chaque nom."""
    for name in names:
        print(f"{name}\t{to_spanish_phonetic(name)}")
    return 0


def cmd_check(candidate_path: str, pool_path: str, config_path: str | None = None) -> int:
    """Vérifie un candidat contre un pool (vérification avant insertion)."""
    config = _load_config(config_path)
    candidates = load_candidates(candidate_path)
    if len(candidates) != 1:
        raise RecordFileError(f"{candidate_path} doit contenir exactement un candidat (got {len(candidates)})")
    candidate = candidates[0]
    pool = load_candidates(pool_path)

    matches = Deduplicator(config).find_duplicates(candidate, pool)
    if not matches:
        print("Aucun doublon trouvé.")
        return 0

    df = build_matches_df(matches, pool, config)
    print(f"{len(matches)} doublon(s) possible(s) pour {candidate.full_name or candidate.id}:")
    for row in df.itertuples(index=False):
        print(
            f"  [{row.rank}] {row.matched_id} {row.matched_name} - "
            f"{row.confidence_pct}% ({match_type_label(row.match_type)})"
        )
    action, description = recommendation(matches[0].confidence, config)
    print(f"Recommandation: {action} - {description}")
    return 0


def cmd_batch(
    incoming_path: str,
    existing_path: str,
    output_path: str | None,
    *,
    config_path: str | None = None,
    dry_run: bool = False,
) -> int:
    """Exécute la déduplication par lots."""
    config = _load_config(config_path)
    incoming = load_candidates(incoming_path)
    existing = load_candidates(existing_path)

    result = Deduplicator(config).batch_deduplicate(incoming, existing)
    print_report_console(result)

    if dry_run:
        print("Mode dry-run: pas d'écriture du fichier de sortie.")
        return 0

    if not output_path:
        print("Erreur: --output requis en mode non dry-run.", file=sys.stderr)
        return 1

    sheets = build_batch_frames(result, config)
    sheets["REPORT"] = build_report_df(result, config)
    save_sheets(output_path, sheets)
    print(f"Fichier de sortie: {output_path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="talentia-dedup",
        description="Déduplication de candidats (phonétique espagnole, Pérou)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Journalisation détaillée")

    subparsers = parser.add_subparsers(dest="command", help="Commandes")

    # phonetic
    p_phon = subparsers.add_parser("phonetic", help="Forme phonétique de noms")
    p_phon.add_argument("names", nargs="+", help="Noms à convertir")

    # check
    p_check = subparsers.add_parser("check", help="Vérifier un candidat avant insertion")
    p_check.add_argument("--candidate", required=True, help="Fichier JSON du candidat")
    p_check.add_argument("--pool", required=True, help="Fichier JSON des candidats existants")
    p_check.add_argument("--config", "-c", help="Fichier config JSON")

    # batch
    p_batch = subparsers.add_parser("batch", help="Dédupliquer un import")
    p_batch.add_argument("--incoming", required=True, help="Fichier JSON des candidats importés")
    p_batch.add_argument("--existing", required=True, help="Fichier JSON des candidats existants")
    p_batch.add_argument("--config", "-c", help="Fichier config JSON")
    p_batch.add_argument("--output", "-o", help="Fichier de sortie (.xlsx ou .csv)")
    p_batch.add_argument("--dry-run", action="store_true", help="Ne pas écrire le fichier de sortie")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "phonetic":
            return cmd_phonetic(args.names)

        if args.command == "check":
            return cmd_check(args.candidate, args.pool, args.config)

        if args.command == "batch":
            if not args.dry_run and not args.output:
                parser.error("--output requis sauf en --dry-run")
            return cmd_batch(
                args.incoming,
                args.existing,
                args.output,
                config_path=args.config,
                dry_run=args.dry_run,
            )
    except TalentiaDedupError as e:
        logger.debug("command_failed command=%s", args.command, exc_info=True)
        print(f"Erreur: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
