"""
Append-only store of every raw article ingested in a run.
"""

import threading
from typing import Iterable, Iterator, List, Tuple

from article_insights.utils.errors import BarrierViolationError
from article_insights.utils.logging import get_logger
from .models import Article


logger = get_logger(__name__)


class Corpus:
    """
    Ordered sequence of raw articles in arrival order.

    While open, workers may only append (one locked batch per file). After
    ``freeze`` the corpus is read-only and no lock is needed to read it.
    Reading an open corpus or appending to a frozen one raises
    BarrierViolationError.
    """

    def __init__(self):
        self._articles: List[Article] = []
        self._lock = threading.Lock()
        self._frozen = threading.Event()
        self._batches = 0

    def append_batch(self, articles: Iterable[Article]) -> int:
        """
        Append all articles of one file under a single critical section.

        Args:
            articles: Articles parsed from one file

        Returns:
            Number of articles appended

        Raises:
            BarrierViolationError: If the corpus is already frozen
        """
        batch = list(articles)
        with self._lock:
            if self._frozen.is_set():
                raise BarrierViolationError(
                    "Cannot append to a frozen corpus",
                    {"batch_size": len(batch)}
                )
            self._articles.extend(batch)
            self._batches += 1
        return len(batch)

    def freeze(self) -> None:
        """Close the corpus for writing. Idempotent."""
        with self._lock:
            if not self._frozen.is_set():
                self._frozen.set()
                logger.debug(f"Corpus frozen with {len(self._articles)} articles from {self._batches} batches")

    @property
    def frozen(self) -> bool:
        return self._frozen.is_set()

    def _require_frozen(self) -> None:
        if not self._frozen.is_set():
            raise BarrierViolationError("Corpus must be frozen before it is read")

    @property
    def articles(self) -> Tuple[Article, ...]:
        """All articles in arrival order."""
        self._require_frozen()
        return tuple(self._articles)

    @property
    def batch_count(self) -> int:
        self._require_frozen()
        return self._batches

    def __len__(self) -> int:
        self._require_frozen()
        return len(self._articles)

    def __iter__(self) -> Iterator[Article]:
        self._require_frozen()
        return iter(self._articles)

    @classmethod
    def from_articles(cls, articles: Iterable[Article]) -> "Corpus":
        """Build an already frozen corpus from a fixed article sequence."""
        corpus = cls()
        corpus.append_batch(articles)
        corpus.freeze()
        return corpus

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "open"
        return f"Corpus({state}, batches={self._batches})"
