"""
Report files built from the final statistics.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Iterable, List, Optional, Union

from article_insights.analysis.aggregator import text_order
from article_insights.analysis.statistics import RankedEntry, Statistics
from article_insights.utils.errors import ReportError
from article_insights.utils.logging import get_logger


logger = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_category(category: str) -> str:
    """
    File-name form of a category: commas dropped, whitespace runs turned into "_".

    >>> normalize_category("Arts, Culture and Entertainment")
    'Arts_Culture_and_Entertainment'
    """
    return _WHITESPACE_RUN.sub("_", category.replace(",", ""))


@dataclass
class ReportFiles:
    """Names of the fixed report files."""
    all_articles: str = "all_articles.txt"
    keywords: str = "keywords_count.txt"
    reports: str = "reports.txt"


class ReportBuilder:
    """Writes listings and the summary report for one run."""

    def __init__(
        self,
        statistics: Statistics,
        languages: AbstractSet[str],
        categories: AbstractSet[str],
        output_dir: Union[str, Path] = ".",
        files: Optional[ReportFiles] = None
    ):
        """
        Initialize report builder.

        Args:
            statistics: Final statistics of the run
            languages: Languages that get their own listing
            categories: Categories that get their own listing
            output_dir: Directory receiving every report file
            files: Names of the fixed report files
        """
        self.statistics = statistics
        self.languages = frozenset(languages)
        self.categories = frozenset(categories)
        self.output_dir = Path(output_dir)
        self.files = files or ReportFiles()

    def write_all(self) -> List[Path]:
        """
        Write every report.

        Returns:
            Paths of the files written

        Raises:
            ReportError: If a file cannot be written
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written = [self.write_all_articles()]
        written.extend(self.write_category_listings())
        written.extend(self.write_language_listings())
        written.append(self.write_keyword_counts())
        written.append(self.write_summary())

        logger.info(f"Wrote {len(written)} report files to {self.output_dir}")
        return written

    def _write_lines(self, file_name: str, lines: Iterable[str]) -> Path:
        path = self.output_dir / file_name
        try:
            with open(path, "w", encoding="utf-8") as f:
                for line in lines:
                    f.write(f"{line}\n")
        except OSError as e:
            raise ReportError(f"Cannot write report {path}: {e}", {"path": str(path)}) from e
        return path

    def all_articles_lines(self) -> List[str]:
        return [f"{article.uuid} {article.published}" for article in self.statistics.articles_by_recency()]

    def write_all_articles(self) -> Path:
        return self._write_lines(self.files.all_articles, self.all_articles_lines())

    def write_category_listings(self) -> List[Path]:
        # Distinct categories may normalize to the same file name; merge them
        merged = {}
        for category, uuids in self.statistics.uuids_by_category(self.categories).items():
            merged.setdefault(normalize_category(category), set()).update(uuids)

        return [
            self._write_lines(f"{name}.txt", sorted(uuids, key=text_order))
            for name, uuids in sorted(merged.items())
        ]

    def write_language_listings(self) -> List[Path]:
        return [
            self._write_lines(f"{language}.txt", uuids)
            for language, uuids in sorted(self.statistics.uuids_by_language(self.languages).items())
        ]

    def keyword_lines(self) -> List[str]:
        return [f"{entry.key} {entry.count}" for entry in self.statistics.keyword_frequencies()]

    def write_keyword_counts(self) -> Path:
        return self._write_lines(self.files.keywords, self.keyword_lines())

    def summary_lines(self) -> List[str]:
        """Lines of the summary report; ranked lines are omitted when empty."""
        stats = self.statistics
        lines = [
            f"duplicates_found - {stats.duplicates_found}",
            f"unique_articles - {stats.unique_article_count}",
        ]

        def ranked(label: str, entry: Optional[RankedEntry], normalize=None) -> None:
            if entry is None:
                return
            key = normalize(entry.key) if normalize and entry.key is not None else entry.key
            lines.append(f"{label} - {key} {entry.count}")

        ranked("best_author", stats.best_author())
        ranked("top_language", stats.top_language())
        ranked("top_category", stats.top_category(), normalize_category)

        recent = stats.most_recent_article()
        if recent is not None:
            lines.append(f"most_recent_article - {recent.published} {recent.url}")

        ranked("top_keyword_en", stats.top_keyword_english())
        return lines

    def write_summary(self) -> Path:
        return self._write_lines(self.files.reports, self.summary_lines())
