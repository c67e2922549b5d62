"""Main entry point for Keyword Scout."""

import argparse
import sys

from loguru import logger

from .errors import KeywordScoutError
from .importer import DataImporter, load_keywords_file
from .orchestrator.coordinator import AnalysisCoordinator
from .storage.database import Database, sqlite_directory
from .utils.config import get_config
from .utils.logger import setup_logging

TIER_MARKERS = {
    "very_high": "***",
    "high": "**",
    "medium": "*",
    "low": "o",
}


def _open_database() -> Database:
    config = get_config()
    directory = sqlite_directory(config.database.url)
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    return Database(config.database.url, echo=config.database.echo)


def _coordinator() -> AnalysisCoordinator:
    config = get_config()
    return AnalysisCoordinator(_open_database(), candidate_limit=config.analysis.candidate_limit)


def run_import(path: str):
    """Import keywords from a YAML or JSON file.

    Args:
        path: Path to the keyword file
    """
    keywords = load_keywords_file(path)
    logger.info(f"Importing {len(keywords)} keywords from {path}")

    importer = DataImporter(_open_database())
    imported = importer.import_keywords(keywords)

    print(f"Imported {len(imported)} keywords")


def run_opportunities(min_volume: int, max_competition: int, top: int):
    """Print the top keyword opportunities."""
    opportunities = _coordinator().find_opportunities(min_volume, max_competition)

    print("TOP OPPORTUNITIES (Low Competition, High Volume)\n")
    for i, opp in enumerate(opportunities[:top], start=1):
        print(f"{i:>2}. {TIER_MARKERS[opp.potential_revenue_tier]} \"{opp.keyword}\"")
        print(
            f"    Score: {opp.opportunity_score}/100 | Vol: {opp.search_volume} "
            f"| Comp: {opp.competition_index}%"
        )
        print(f"    {opp.reason}\n")


def run_trending(category: str, limit: int):
    """Print rising keywords."""
    trending = _coordinator().get_trending_keywords(category, limit)

    print("RISING TRENDS\n")
    for i, trend in enumerate(trending, start=1):
        print(f"{i:>2}. \"{trend.keyword}\"")
        print(
            f"    Category: {trend.category} | Vol: {trend.search_volume} "
            f"| Comp: {trend.competition_index}% | Velocity: {trend.velocity_score:g}\n"
        )


def run_competition(category: str):
    """Print the competition distribution for a category."""
    summary = _coordinator().get_competition_analysis(category)

    print(f"COMPETITION: {category}\n")
    print(f"  Low:     {summary.low_competition}")
    print(f"  Medium:  {summary.medium_competition}")
    print(f"  High:    {summary.high_competition}")
    print(f"  Average: {summary.average}")
    print(f"  Median:  {summary.median}")


def run_seasonal(category: str):
    """Print the peak-month histogram for a category."""
    summary = _coordinator().get_seasonal_trends(category)

    print(f"SEASONAL PEAKS: {category}\n")
    if not summary.months:
        print("  No peak months recorded")
    for peak in summary.months:
        print(f"  {peak.month:<10} {peak.peak_keywords_count}")


def run_api():
    """Run the FastAPI server."""
    import uvicorn

    from .api.main import app

    config = get_config()

    logger.info("=" * 80)
    logger.info("Keyword Scout API - Starting")
    logger.info("=" * 80)

    uvicorn.run(
        app,
        host=config.api.host,
        port=config.api.port,
        log_level="info",
    )


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(description="Keyword Scout")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Import command
    import_parser = subparsers.add_parser("import", help="Import keywords from a YAML/JSON file")
    import_parser.add_argument("path", help="Keyword file")

    # Opportunities command
    opp_parser = subparsers.add_parser("opportunities", help="Rank keyword opportunities")
    opp_parser.add_argument("--min-volume", type=int, default=config.analysis.min_search_volume)
    opp_parser.add_argument(
        "--max-competition", type=int, default=config.analysis.max_competition_index
    )
    opp_parser.add_argument("--top", type=int, default=15, help="Number of results to show")

    # Trending command
    trending_parser = subparsers.add_parser("trending", help="List rising keywords")
    trending_parser.add_argument("--category", default=None)
    trending_parser.add_argument("--limit", type=int, default=config.analysis.trending_limit)

    # Category aggregates
    competition_parser = subparsers.add_parser("competition", help="Competition distribution")
    competition_parser.add_argument("category")

    seasonal_parser = subparsers.add_parser("seasonal", help="Seasonal peak months")
    seasonal_parser.add_argument("category")

    # API command
    subparsers.add_parser("api", help="Run the API server")

    return parser


def main():
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(log_level=args.log_level)

    try:
        if args.command == "import":
            run_import(args.path)
        elif args.command == "opportunities":
            run_opportunities(args.min_volume, args.max_competition, args.top)
        elif args.command == "trending":
            run_trending(args.category, args.limit)
        elif args.command == "competition":
            run_competition(args.category)
        elif args.command == "seasonal":
            run_seasonal(args.category)
        elif args.command == "api":
            run_api()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except (KeywordScoutError, OSError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
