"""
Fixed-size worker pool draining a WorkQueue.
"""

import queue
import threading
import time
import traceback
from typing import Any, Callable, List, Optional, Tuple, Type

from article_insights.utils.logging import get_logger
from article_insights.utils.errors import WorkerPoolError
from .models import ConcurrentConfig, PoolRunResult, WorkerState, WorkerStatus
from .thread_safe import ThreadSafeCounter, WorkQueue


logger = get_logger(__name__)


class WorkerThread(threading.Thread):
    """Individual worker thread that pops items until the queue is empty."""

    def __init__(
        self,
        worker_id: str,
        work_queue: WorkQueue,
        processor: Callable[[Any], None],
        shutdown_event: threading.Event,
        recoverable_errors: Tuple[Type[BaseException], ...] = (),
        describe: Callable[[Any], str] = str
    ):
        """
        Initialize worker thread.

        Args:
            worker_id: Unique identifier for this worker
            work_queue: Queue to pop items from
            processor: Function applied to every popped item
            shutdown_event: Event set when any worker dies unexpectedly
            recoverable_errors: Exception types logged and counted as a failed
                item; the worker keeps draining after them
            describe: Renders an item for status and log lines
        """
        super().__init__(name=f"PipelineWorker-{worker_id}", daemon=True)

        self.worker_id = worker_id
        self.work_queue = work_queue
        self.processor = processor
        self.shutdown_event = shutdown_event
        self.recoverable_errors = recoverable_errors
        self.describe = describe

        self.status = WorkerStatus(worker_id=worker_id)
        self.fatal_error: Optional[BaseException] = None
        self.logger = get_logger(f"{__name__}.{worker_id}")

    def run(self) -> None:
        """Main worker loop: pop, process, repeat until drained."""
        self.logger.debug(f"Worker {self.worker_id} starting")
        self.status.state = WorkerState.IDLE
        self.status.update_activity()

        try:
            while not self.shutdown_event.is_set():
                try:
                    item = self.work_queue.pop()
                except queue.Empty:
                    break

                self._process_item(item)

        except Exception as e:
            self.fatal_error = e
            self.status.set_error_state(f"Fatal error: {e}")
            self.logger.error(f"Fatal error in worker {self.worker_id}: {e}")
            self.logger.debug(f"Worker {self.worker_id} traceback: {traceback.format_exc()}")
            self.shutdown_event.set()

        finally:
            if self.status.state != WorkerState.ERROR:
                self.status.state = WorkerState.STOPPED
            self.status.update_activity()
            self.logger.debug(f"Worker {self.worker_id} stopped")

    def _process_item(self, item: Any) -> None:
        label = self.describe(item)
        self.status.start_item(label)

        try:
            self.processor(item)
        except self.recoverable_errors as e:
            self.status.fail_item(str(e))
            self.logger.warning(f"Worker {self.worker_id} skipped {label}: {e}")
            return

        self.status.complete_item()


class WorkerPool:
    """
    Runs a fixed number of WorkerThreads over one WorkQueue.

    ``run`` returns only after every worker has joined, which is the barrier
    separating pipeline phases.
    """

    def __init__(self, config: ConcurrentConfig):
        """
        Initialize worker pool.

        Args:
            config: Pool configuration
        """
        self.config = config
        self._runs = ThreadSafeCounter()

    @property
    def worker_count(self) -> int:
        return self.config.max_workers

    def run(
        self,
        work_queue: WorkQueue,
        processor: Callable[[Any], None],
        recoverable_errors: Tuple[Type[BaseException], ...] = (),
        describe: Callable[[Any], str] = str
    ) -> PoolRunResult:
        """
        Drain work_queue with the configured number of workers and join them.

        Args:
            work_queue: Queue of items to process
            processor: Function applied to every item
            recoverable_errors: Exception types that only fail a single item
            describe: Renders an item for status and log lines

        Returns:
            Summary of the run

        Raises:
            WorkerPoolError: If any worker died with an unexpected exception
        """
        run_number = self._runs.increment()
        shutdown_event = threading.Event()
        start_time = time.time()

        workers: List[WorkerThread] = [
            WorkerThread(
                worker_id=f"{self.config.name}_{run_number}_{i}",
                work_queue=work_queue,
                processor=processor,
                shutdown_event=shutdown_event,
                recoverable_errors=recoverable_errors,
                describe=describe
            )
            for i in range(self.config.max_workers)
        ]

        logger.debug(
            f"Pool {self.config.name} starting {len(workers)} workers "
            f"for {work_queue.qsize()} items"
        )

        for worker in workers:
            worker.start()

        for worker in workers:
            worker.join()

        elapsed = time.time() - start_time
        statuses = [worker.status for worker in workers]
        result = PoolRunResult(
            pool_name=self.config.name,
            worker_count=len(workers),
            items_processed=sum(status.items_processed for status in statuses),
            items_failed=sum(status.items_failed for status in statuses),
            elapsed_seconds=elapsed,
            worker_statuses=statuses
        )

        failed_workers = [worker for worker in workers if worker.fatal_error is not None]
        if failed_workers:
            first_error = failed_workers[0].fatal_error
            raise WorkerPoolError(
                f"Pool {self.config.name}: {len(failed_workers)} worker(s) failed: {first_error}",
                {
                    "pool": self.config.name,
                    "failed_workers": [worker.worker_id for worker in failed_workers],
                    "worker_statuses": [worker.status.to_dict() for worker in failed_workers],
                    "remaining_items": work_queue.qsize()
                }
            ) from first_error

        logger.debug(
            f"Pool {self.config.name} drained: {result.items_processed} processed, "
            f"{result.items_failed} failed in {elapsed:.2f}s"
        )
        return result
