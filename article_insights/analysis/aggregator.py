"""
Duplicate filtering and per-field tallies over a frozen corpus.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from article_insights.data.corpus import Corpus
from article_insights.data.models import Article
from article_insights.utils.errors import BarrierViolationError
from article_insights.utils.logging import get_logger


logger = get_logger(__name__)


def text_order(value: Optional[str]) -> Tuple[bool, str]:
    """
    Total ordering key for possibly-missing string fields.

    None sorts below every string, so records with absent fields still take
    part in rankings instead of breaking comparisons.
    """
    return (value is not None, value or "")


def is_more_recent(candidate: Article, current: Optional[Article]) -> bool:
    """
    Check whether candidate replaces current as the most recent article.

    A strictly later ``published`` wins; on equal ``published`` the strictly
    smaller uuid wins.
    """
    if current is None:
        return True

    candidate_published = text_order(candidate.published)
    current_published = text_order(current.published)
    if candidate_published != current_published:
        return candidate_published > current_published
    return text_order(candidate.uuid) < text_order(current.uuid)


@dataclass
class AggregationResult:
    """Everything derived from the corpus in the single-threaded phase."""
    corpus_size: int
    unique_articles: Tuple[Article, ...]
    duplicates_found: int
    author_counts: Dict[Optional[str], int] = field(default_factory=dict)
    language_counts: Dict[Optional[str], int] = field(default_factory=dict)
    category_counts: Dict[str, int] = field(default_factory=dict)
    most_recent_article: Optional[Article] = None

    def unique_in_language(self, language: str) -> Tuple[Article, ...]:
        """Unique articles written in the given language, in corpus order."""
        return tuple(article for article in self.unique_articles if article.language == language)


class Aggregator:
    """
    Computes uniqueness, duplicate count, tallies and the most recent article.

    An article is a duplicate when its uuid or its title occurs more than once
    anywhere in the corpus, so the whole corpus must be present first: the
    corpus has to be frozen before ``aggregate`` is called.
    """

    def aggregate(self, corpus: Corpus) -> AggregationResult:
        """
        Run duplicate detection and tallying.

        Args:
            corpus: Frozen corpus

        Returns:
            Aggregation result; calling again on the same corpus yields an
            equal result

        Raises:
            BarrierViolationError: If the corpus is still open
        """
        if not corpus.frozen:
            raise BarrierViolationError("Aggregation requires the ingestion phase to have joined")

        articles = corpus.articles

        uuid_frequency = Counter(article.uuid for article in articles)
        title_frequency = Counter(article.title for article in articles)

        unique = []
        duplicates_found = 0
        author_counts: Counter = Counter()
        language_counts: Counter = Counter()
        category_counts: Counter = Counter()
        most_recent: Optional[Article] = None

        for article in articles:
            if uuid_frequency[article.uuid] > 1 or title_frequency[article.title] > 1:
                duplicates_found += 1
                continue

            unique.append(article)
            author_counts[article.author] += 1
            language_counts[article.language] += 1
            # Counted once per article even if the list repeats a category
            category_counts.update(article.category_set())

            if is_more_recent(article, most_recent):
                most_recent = article

        result = AggregationResult(
            corpus_size=len(articles),
            unique_articles=tuple(unique),
            duplicates_found=duplicates_found,
            author_counts=dict(author_counts),
            language_counts=dict(language_counts),
            category_counts=dict(category_counts),
            most_recent_article=most_recent
        )

        logger.info(
            f"Aggregated {result.corpus_size} articles: {len(result.unique_articles)} unique, "
            f"{result.duplicates_found} duplicates"
        )
        return result
