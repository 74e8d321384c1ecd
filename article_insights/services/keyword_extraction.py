"""
Phase 3: parallel keyword extraction from unique English articles.
"""

from typing import AbstractSet, Dict, FrozenSet, Iterable, Optional

from article_insights.analysis.keywords import extract_keywords
from article_insights.concurrent.models import ConcurrentConfig, PoolRunResult
from article_insights.concurrent.thread_pool import WorkerPool
from article_insights.concurrent.thread_safe import ThreadSafeCounter, ThreadSafeSetMap, WorkQueue
from article_insights.data.models import Article
from article_insights.utils.logging import get_logger


logger = get_logger(__name__)


class KeywordExtractionPool:
    """
    Worker pool building the keyword -> uuid-set index.

    Workers only ever insert into the shared index, and insertions are
    idempotent and commutative, so the final index is the same for any
    interleaving of workers.
    """

    def __init__(self, worker_count: int, stop_words: AbstractSet[str] = frozenset()):
        """
        Initialize the keyword pool.

        Args:
            worker_count: Number of worker threads
            stop_words: Lowercase words excluded from the index
        """
        self.pool = WorkerPool(ConcurrentConfig(max_workers=worker_count, name="keywords"))
        self.stop_words = frozenset(stop_words)
        self.last_run: Optional[PoolRunResult] = None

    def run(self, articles: Iterable[Article]) -> Dict[str, FrozenSet[str]]:
        """
        Index the keywords of the given articles.

        Args:
            articles: Unique articles already filtered to the indexed language

        Returns:
            Snapshot of the index taken after every worker joined
        """
        index = ThreadSafeSetMap()
        skipped = ThreadSafeCounter()
        work_queue = WorkQueue(articles)

        def index_article(article: Article) -> None:
            if article.text is None:
                skipped.increment()
                return
            for keyword in extract_keywords(article.text, self.stop_words):
                index.add(keyword, article.uuid)

        self.last_run = self.pool.run(
            work_queue,
            index_article,
            describe=lambda article: f"article {article.uuid}"
        )
        snapshot = index.snapshot()

        logger.info(
            f"Indexed {len(snapshot)} keywords from {self.last_run.items_processed} articles "
            f"({skipped.get_value()} without text) with {self.pool.worker_count} workers"
        )
        return snapshot
