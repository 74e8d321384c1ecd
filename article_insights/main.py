"""
Command-line entry point for the article insights pipeline.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from article_insights.concurrent.models import MAX_WORKERS
from article_insights.data.roster import load_inputs, read_roster
from article_insights.services.pipeline import AnalysisPipeline
from article_insights.services.report_generator import ReportBuilder, ReportFiles
from article_insights.utils.errors import ArticleInsightsError, ConfigurationError, handle_error
from article_insights.utils.logging import get_logger, setup_logging
from config import ConfigManager, SystemConfig


logger = get_logger(__name__)


def worker_count_arg(value: str) -> int:
    """argparse type for the thread count."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"thread count must be an integer, got {value!r}")
    if not (1 <= count <= MAX_WORKERS):
        raise argparse.ArgumentTypeError(f"thread count must be between 1 and {MAX_WORKERS}")
    return count


def create_cli_parser() -> argparse.ArgumentParser:
    """Create command-line interface parser."""
    parser = argparse.ArgumentParser(
        prog='article-insights',
        description='Deduplicate an article corpus and report ranked statistics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 4 data/articles.txt data/inputs.txt
  %(prog)s 8 data/articles.txt data/inputs.txt --output-dir out
  %(prog)s 2 data/articles.txt data/inputs.txt --config insights.json -v
  ARTICLE_INSIGHTS_WORKERS=6 %(prog)s data/articles.txt data/inputs.txt
        """
    )

    parser.add_argument(
        'num_threads',
        nargs='?',
        type=worker_count_arg,
        help='Worker threads used by both parallel phases (default: pipeline.worker_count from configuration)'
    )

    parser.add_argument(
        'articles_file',
        type=str,
        help='Roster listing the article JSON files'
    )

    parser.add_argument(
        'inputs_file',
        type=str,
        help='Roster listing the language, category and stop-word files'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to configuration file (default: article_insights.json if present)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Directory for report files (overrides configuration)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override log level from configuration'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output (equivalent to --log-level DEBUG)'
    )

    return parser


def load_system_config(config_path: Optional[str]) -> SystemConfig:
    """Load configuration; an explicitly named file must exist."""
    if config_path:
        if not Path(config_path).exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        return ConfigManager(config_path).load_config()
    return ConfigManager().load_config()


def run(args: argparse.Namespace, config: SystemConfig) -> None:
    """Run the pipeline and write every report."""
    article_files = read_roster(args.articles_file)
    vocabulary = load_inputs(args.inputs_file)

    pipeline = AnalysisPipeline(
        worker_count=args.num_threads or config.pipeline.worker_count,
        stop_words=vocabulary.stop_words,
        keyword_language=config.pipeline.keyword_language
    )
    statistics = pipeline.run(article_files)

    builder = ReportBuilder(
        statistics,
        languages=vocabulary.languages,
        categories=vocabulary.categories,
        output_dir=config.output.output_dir,
        files=ReportFiles(
            all_articles=config.output.all_articles_file,
            keywords=config.output.keywords_file,
            reports=config.output.reports_file
        )
    )
    builder.write_all()

    logger.info(
        f"Done: {statistics.corpus_size} articles, {statistics.unique_article_count} unique, "
        f"{statistics.duplicates_found} duplicates"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command-line interface. Returns the exit code."""
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    try:
        config = load_system_config(args.config)
    except ArticleInsightsError as e:
        setup_logging("INFO")
        logger.error(f"Configuration error: {e}")
        return 1

    if args.output_dir:
        config.output.output_dir = args.output_dir

    if args.verbose:
        log_level = 'DEBUG'
    else:
        log_level = args.log_level or config.logging.log_level

    setup_logging(
        log_level=log_level,
        log_file=config.logging.log_file,
        retention_days=config.logging.retention_days
    )

    try:
        run(args, config)
    except ArticleInsightsError as e:
        handle_error(e, logger, {"stage": "run", "articles_file": args.articles_file}, reraise=False)
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
