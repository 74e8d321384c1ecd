"""
Orchestration of the three analysis phases.
"""

from typing import AbstractSet, Dict, FrozenSet, Iterable, Optional

from article_insights.analysis.aggregator import AggregationResult, Aggregator
from article_insights.analysis.statistics import Statistics
from article_insights.data.corpus import Corpus
from article_insights.data.loader import ArticleFileReader
from article_insights.utils.logging import get_logger, log_phase
from .ingestion import IngestionPool
from .keyword_extraction import KeywordExtractionPool


logger = get_logger(__name__)

DEFAULT_KEYWORD_LANGUAGE = "english"


class AnalysisPipeline:
    """
    Runs ingestion, aggregation and keyword extraction strictly in sequence.

    Phase 1 returns only after its workers joined and the corpus is frozen;
    phase 2 reads that frozen corpus on the calling thread; phase 3 starts
    only once phase 2 produced the unique articles. Phases never overlap.
    """

    def __init__(
        self,
        worker_count: int,
        stop_words: AbstractSet[str] = frozenset(),
        reader: Optional[ArticleFileReader] = None,
        keyword_language: str = DEFAULT_KEYWORD_LANGUAGE
    ):
        """
        Initialize the pipeline.

        Args:
            worker_count: Worker threads used by both parallel phases
            stop_words: Lowercase words excluded from keyword extraction
            reader: Article file parser
            keyword_language: Language whose unique articles are indexed
        """
        self.worker_count = worker_count
        self.keyword_language = keyword_language
        self.ingestion = IngestionPool(worker_count, reader)
        self.aggregator = Aggregator()
        self.keyword_extraction = KeywordExtractionPool(worker_count, stop_words)

    @log_phase("ingestion")
    def ingest(self, paths: Iterable[str]) -> Corpus:
        return self.ingestion.run(paths)

    @log_phase("duplicate filtering")
    def aggregate(self, corpus: Corpus) -> AggregationResult:
        return self.aggregator.aggregate(corpus)

    @log_phase("keyword extraction")
    def extract_keywords(self, aggregation: AggregationResult) -> Dict[str, FrozenSet[str]]:
        return self.keyword_extraction.run(aggregation.unique_in_language(self.keyword_language))

    def run(self, paths: Iterable[str]) -> Statistics:
        """
        Run the whole pipeline over the given article files.

        Args:
            paths: Article file paths

        Returns:
            Final statistics
        """
        corpus = self.ingest(paths)
        aggregation = self.aggregate(corpus)
        keyword_index = self.extract_keywords(aggregation)
        return Statistics(aggregation, keyword_index)
