"""CLI entry point for the lead scoring engine."""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from leadscore.config import settings
from leadscore.export import export_to_csv
from leadscore.models import CompanyRecord, ScoringConfiguration, ScoringOptions
from leadscore.presets import PRESETS, get_preset
from leadscore.score import RankedResultBuilder, RankingResult

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

_companies_adapter = TypeAdapter(list[CompanyRecord])


def load_companies(companies_path: Path) -> list[CompanyRecord]:
    """Load company records from a JSON array file."""
    with open(companies_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return _companies_adapter.validate_python(data)


def load_configuration(criteria_path: Path) -> ScoringConfiguration:
    """Load a configuration from JSON.

    Accepts either an explicit ``{"criteria": [...]}`` configuration or the
    filtering panel's flat options.
    """
    with open(criteria_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "criteria" in data:
        return ScoringConfiguration.model_validate(data)
    return ScoringConfiguration.from_options(ScoringOptions.model_validate(data))


def run_scoring(
    companies: list[CompanyRecord],
    configuration: ScoringConfiguration,
    output_path: Optional[Path] = None,
    as_of: Optional[datetime] = None,
    workers: Optional[int] = None,
) -> RankingResult:
    """Score, rank and optionally export a batch of companies."""
    logger.info(f"Scoring {len(companies)} companies...")
    builder = RankedResultBuilder(workers=workers)
    result = builder.build(companies, configuration, as_of=as_of)

    for warning in result.warnings:
        logger.warning(f"{warning}: no active criteria, ranked by record quality only")

    if output_path is not None:
        logger.info(f"Exporting results to {output_path}...")
        export_to_csv(result.entries, output_path)
        logger.info(f"Results exported to {output_path}")

    return result


def print_summary(result: RankingResult, top: int = 10):
    """Print a summary of results to console."""
    print("\n" + "=" * 60)
    print("LEAD SCORING - RESULTS SUMMARY")
    print("=" * 60)

    print(f"\nCompanies scored: {result.total_scored}")
    print(f"At or above threshold {result.criteria.minimum_score_threshold}: {len(result.entries)}")
    print(f"Filtered out: {result.filtered_out}")

    lines = result.criteria.describe()
    if lines:
        print("\nActive criteria:")
        for line in lines:
            print(f"   {line}")
    else:
        print("\nNo active criteria; ranked by record quality signals")

    if result.entries:
        print("\n" + "-" * 60)
        print(f"TOP {top} COMPANIES")
        print("-" * 60)

        for entry in result.entries[:top]:
            b = entry.breakdown
            print(f"\n#{entry.rank} {entry.company.name}")
            print(f"   Score: {b.normalized_score} | Raw: {b.raw_score:g}/{b.max_possible_score:g}")
            if b.matched_criteria:
                print(f"   Matched: {', '.join(b.matched_criteria)}")

    print("\n" + "=" * 60)


def print_presets():
    for key, preset in PRESETS.items():
        print(f"{key}: {preset.name} - {preset.description}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lead Scoring - Score and rank company records against weighted criteria"
    )
    parser.add_argument(
        "--companies",
        type=Path,
        default=Path("companies.json"),
        help="Path to company records JSON file (default: companies.json)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--criteria", "-c",
        type=Path,
        help="Path to scoring criteria JSON file",
    )
    source.add_argument(
        "--preset", "-p",
        help="Use a built-in preset (see --list-presets)",
    )
    parser.add_argument(
        "--threshold", "-t",
        type=int,
        help="Minimum normalized score to keep (overrides the configuration)",
    )
    parser.add_argument(
        "--as-of",
        type=datetime.fromisoformat,
        help="Reference time for freshness, ISO 8601 (default: now)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=settings.default_output_path,
        help="Output CSV path (default: data/ranked_companies.csv)",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=settings.batch_workers,
        help="Worker threads for large batches (default: 1)",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List built-in presets and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.list_presets:
        print_presets()
        return

    # Load configuration
    if args.preset:
        configuration = get_preset(args.preset)
        if configuration is None:
            logger.error(f"Unknown preset: {args.preset}")
            sys.exit(1)
    elif args.criteria:
        if not args.criteria.exists():
            logger.error(f"Criteria file not found: {args.criteria}")
            sys.exit(1)
        try:
            configuration = load_configuration(args.criteria)
            logger.info(f"Loaded criteria from {args.criteria}")
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to load criteria: {e}")
            sys.exit(1)
    else:
        configuration = ScoringConfiguration()

    if args.threshold is not None:
        configuration = configuration.with_threshold(args.threshold)

    # Load companies
    if not args.companies.exists():
        logger.error(f"Companies file not found: {args.companies}")
        sys.exit(1)

    try:
        companies = load_companies(args.companies)
        logger.info(f"Loaded {len(companies)} companies from {args.companies}")
    except (ValueError, ValidationError) as e:
        logger.error(f"Failed to load companies: {e}")
        sys.exit(1)

    result = run_scoring(
        companies,
        configuration,
        output_path=args.output,
        as_of=args.as_of,
        workers=args.workers,
    )
    print_summary(result)


if __name__ == "__main__":
    main()
