"""
Concurrency building blocks for the analysis pipeline.

Main Components:
- WorkQueue: FIFO drained by a pool, with atomic check-and-pop
- ThreadSafeSetMap: sharded key -> set map with idempotent inserts
- WorkerPool: fixed-size pool whose run() is a join barrier
"""

from .models import (
    ConcurrentConfig,
    PoolRunResult,
    WorkerState,
    WorkerStatus
)

from .thread_safe import (
    ThreadSafeCounter,
    ThreadSafeSetMap,
    WorkQueue
)

from .thread_pool import WorkerPool, WorkerThread

__all__ = [
    'ConcurrentConfig',
    'PoolRunResult',
    'WorkerState',
    'WorkerStatus',

    'ThreadSafeCounter',
    'ThreadSafeSetMap',
    'WorkQueue',

    'WorkerPool',
    'WorkerThread'
]
