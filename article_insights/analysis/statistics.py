"""
Read-only accessors over the final aggregate state.
"""

from typing import Dict, FrozenSet, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from article_insights.data.models import Article
from .aggregator import AggregationResult, text_order


class RankedEntry(NamedTuple):
    """A key together with its count."""
    key: Optional[str]
    count: int


def top_entry(counts: Mapping[Optional[str], int]) -> Optional[RankedEntry]:
    """
    Highest count in a mapping.

    Ties go to the lexicographically largest key.

    Returns:
        The winning entry, or None for an empty mapping
    """
    if not counts:
        return None
    key, count = max(counts.items(), key=lambda item: (item[1], text_order(item[0])))
    return RankedEntry(key, count)


class Statistics:
    """
    Aggregate results of one pipeline run.

    Every accessor is a pure function of the aggregation result and the
    keyword index, so answers do not depend on thread scheduling.
    """

    def __init__(
        self,
        aggregation: AggregationResult,
        keyword_index: Optional[Mapping[str, FrozenSet[str]]] = None
    ):
        self._aggregation = aggregation
        self._keyword_index: Dict[str, FrozenSet[str]] = {
            keyword: frozenset(uuids) for keyword, uuids in (keyword_index or {}).items()
        }

    @property
    def aggregation(self) -> AggregationResult:
        return self._aggregation

    @property
    def corpus_size(self) -> int:
        return self._aggregation.corpus_size

    @property
    def duplicates_found(self) -> int:
        return self._aggregation.duplicates_found

    @property
    def unique_articles(self) -> Tuple[Article, ...]:
        return self._aggregation.unique_articles

    @property
    def unique_article_count(self) -> int:
        return len(self._aggregation.unique_articles)

    @property
    def author_counts(self) -> Dict[Optional[str], int]:
        return dict(self._aggregation.author_counts)

    @property
    def language_counts(self) -> Dict[Optional[str], int]:
        return dict(self._aggregation.language_counts)

    @property
    def category_counts(self) -> Dict[str, int]:
        return dict(self._aggregation.category_counts)

    @property
    def keyword_index(self) -> Dict[str, FrozenSet[str]]:
        return dict(self._keyword_index)

    def keyword_counts(self) -> Dict[str, int]:
        """Number of unique English articles containing each keyword."""
        return {keyword: len(uuids) for keyword, uuids in self._keyword_index.items()}

    def best_author(self) -> Optional[RankedEntry]:
        return top_entry(self._aggregation.author_counts)

    def top_language(self) -> Optional[RankedEntry]:
        return top_entry(self._aggregation.language_counts)

    def top_category(self) -> Optional[RankedEntry]:
        return top_entry(self._aggregation.category_counts)

    def top_keyword_english(self) -> Optional[RankedEntry]:
        return top_entry(self.keyword_counts())

    def most_recent_article(self) -> Optional[Article]:
        """Latest published unique article; ties go to the smallest uuid."""
        return self._aggregation.most_recent_article

    def articles_by_recency(self) -> List[Article]:
        """Unique articles ordered by published descending, then uuid ascending."""
        by_uuid = sorted(self.unique_articles, key=lambda article: text_order(article.uuid))
        return sorted(by_uuid, key=lambda article: text_order(article.published), reverse=True)

    def uuids_by_language(self, languages: Iterable[str]) -> Dict[str, List[str]]:
        """
        Sorted uuids of unique articles per language.

        Languages without any unique article are left out.
        """
        wanted = set(languages)
        grouped: Dict[str, set] = {}
        for article in self.unique_articles:
            if article.language in wanted:
                grouped.setdefault(article.language, set()).add(article.uuid)
        return {language: sorted(uuids, key=text_order) for language, uuids in grouped.items()}

    def uuids_by_category(self, categories: Iterable[str]) -> Dict[str, List[str]]:
        """
        Sorted uuids of unique articles per category.

        Categories without any unique article are left out.
        """
        wanted = set(categories)
        grouped: Dict[str, set] = {}
        for article in self.unique_articles:
            for category in article.category_set() & wanted:
                grouped.setdefault(category, set()).add(article.uuid)
        return {category: sorted(uuids, key=text_order) for category, uuids in grouped.items()}

    def keyword_frequencies(self) -> List[RankedEntry]:
        """Keywords ordered by article count descending, then keyword ascending."""
        return [
            RankedEntry(keyword, count)
            for keyword, count in sorted(self.keyword_counts().items(), key=lambda item: (-item[1], item[0]))
        ]

    def summary(self) -> Dict[str, object]:
        """Headline figures as a plain dictionary."""
        most_recent = self.most_recent_article()
        return {
            "corpus_size": self.corpus_size,
            "duplicates_found": self.duplicates_found,
            "unique_articles": self.unique_article_count,
            "best_author": self.best_author(),
            "top_language": self.top_language(),
            "top_category": self.top_category(),
            "most_recent_article": most_recent.uuid if most_recent else None,
            "top_keyword_en": self.top_keyword_english()
        }
