"""
Phase 1: parallel ingestion of article files into the corpus.
"""

from typing import Iterable, Optional

from article_insights.concurrent.models import ConcurrentConfig, PoolRunResult
from article_insights.concurrent.thread_pool import WorkerPool
from article_insights.concurrent.thread_safe import WorkQueue
from article_insights.data.corpus import Corpus
from article_insights.data.loader import ArticleFileReader
from article_insights.utils.errors import ArticleParseError
from article_insights.utils.logging import get_logger


logger = get_logger(__name__)


class IngestionPool:
    """
    Worker pool that parses article files into a shared corpus.

    Each worker pops a path, parses the whole file, and appends its articles
    to the corpus in one locked batch. A file that fails to parse is logged
    and contributes nothing; other workers are unaffected.
    """

    def __init__(self, worker_count: int, reader: Optional[ArticleFileReader] = None):
        """
        Initialize the ingestion pool.

        Args:
            worker_count: Number of worker threads
            reader: Article file parser
        """
        self.pool = WorkerPool(ConcurrentConfig(max_workers=worker_count, name="ingest"))
        self.reader = reader or ArticleFileReader()
        self.last_run: Optional[PoolRunResult] = None

    def run(self, paths: Iterable[str]) -> Corpus:
        """
        Ingest every listed file and wait for all workers to finish.

        Args:
            paths: Article file paths

        Returns:
            The frozen corpus; it is only handed out after every worker joined

        Raises:
            WorkerPoolError: If a worker died with an unexpected error
        """
        corpus = Corpus()
        work_queue = WorkQueue(paths)
        file_count = work_queue.qsize()

        def ingest_file(path: str) -> None:
            articles = self.reader.read(path)
            appended = corpus.append_batch(articles)
            logger.debug(f"Ingested {appended} articles from {path}")

        self.last_run = self.pool.run(
            work_queue,
            ingest_file,
            recoverable_errors=(ArticleParseError,)
        )
        corpus.freeze()

        logger.info(
            f"Ingested {len(corpus)} articles from {self.last_run.items_processed}/{file_count} files "
            f"({self.last_run.items_failed} failed) with {self.pool.worker_count} workers"
        )
        return corpus
