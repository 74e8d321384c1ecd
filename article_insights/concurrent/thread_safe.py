"""
Thread-safe data structures shared by the pipeline worker pools.
"""

import queue
import threading
import zlib
from collections import deque
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Set


class ThreadSafeCounter:
    """Thread-safe counter with atomic operations."""

    def __init__(self, initial_value: int = 0):
        """
        Initialize counter with initial value.

        Args:
            initial_value: Starting value for the counter
        """
        self._value = initial_value
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        """
        Atomically increment counter and return new value.

        Args:
            amount: Amount to increment by (default: 1)

        Returns:
            New counter value after increment
        """
        with self._lock:
            self._value += amount
            return self._value

    def get_value(self) -> int:
        """Get current counter value."""
        with self._lock:
            return self._value

    def reset(self) -> int:
        """
        Reset counter to zero and return previous value.

        Returns:
            Previous value before reset
        """
        with self._lock:
            old_value = self._value
            self._value = 0
            return old_value

    def __repr__(self) -> str:
        return f"ThreadSafeCounter(value={self.get_value()})"


class WorkQueue:
    """
    FIFO of work items drained by a worker pool.

    The emptiness check and the removal happen under one lock, so no two
    workers can ever receive the same item. There is no priority and no
    reordering.
    """

    def __init__(self, items: Iterable[Any] = ()):
        """
        Initialize the queue, optionally pre-loaded with items.

        Args:
            items: Initial items, enqueued in iteration order
        """
        self._items = deque()
        self._lock = threading.Lock()
        self._put_count = 0
        self._pop_count = 0
        self.extend(items)

    def put(self, item: Any) -> None:
        """Append one item to the tail of the queue."""
        with self._lock:
            self._items.append(item)
            self._put_count += 1

    def extend(self, items: Iterable[Any]) -> int:
        """
        Append several items to the tail of the queue.

        Returns:
            Number of items added
        """
        items = list(items)
        with self._lock:
            self._items.extend(items)
            self._put_count += len(items)
        return len(items)

    def pop(self) -> Any:
        """
        Remove and return the head of the queue.

        Returns:
            The oldest queued item

        Raises:
            queue.Empty: If no items remain
        """
        with self._lock:
            if not self._items:
                raise queue.Empty()
            self._pop_count += 1
            return self._items.popleft()

    def empty(self) -> bool:
        """Check if queue is empty."""
        with self._lock:
            return not self._items

    def qsize(self) -> int:
        """Get number of queued items."""
        with self._lock:
            return len(self._items)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get queue statistics.

        Returns:
            Dictionary with queue statistics
        """
        with self._lock:
            return {
                "size": len(self._items),
                "empty": not self._items,
                "put_count": self._put_count,
                "pop_count": self._pop_count,
                "pending_items": self._put_count - self._pop_count
            }

    def __len__(self) -> int:
        return self.qsize()

    def __bool__(self) -> bool:
        return not self.empty()


class ThreadSafeSetMap:
    """
    Mapping of key to a set of members with atomic per-key insertion.

    Keys are spread over independently locked shards so that workers
    inserting different keys rarely contend. Insertion is idempotent and
    commutative: the final contents do not depend on the order in which
    concurrent ``add`` calls complete.
    """

    def __init__(self, shard_count: int = 16):
        """
        Initialize the map.

        Args:
            shard_count: Number of independently locked shards
        """
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")

        self._shards: List[Dict[Hashable, Set[Any]]] = [{} for _ in range(shard_count)]
        self._locks = [threading.Lock() for _ in range(shard_count)]

    def _shard_index(self, key: Hashable) -> int:
        # str hashes are salted per process; crc32 keeps shard placement stable
        if isinstance(key, str):
            return zlib.crc32(key.encode("utf-8")) % len(self._shards)
        return hash(key) % len(self._shards)

    def add(self, key: Hashable, member: Any) -> bool:
        """
        Insert member into the set stored under key.

        Args:
            key: Set key
            member: Member to insert

        Returns:
            True if member was added (wasn't already present)
        """
        index = self._shard_index(key)
        with self._locks[index]:
            members = self._shards[index].setdefault(key, set())
            if member in members:
                return False
            members.add(member)
            return True

    def get(self, key: Hashable) -> FrozenSet[Any]:
        """Get a frozen copy of the members stored under key (empty if absent)."""
        index = self._shard_index(key)
        with self._locks[index]:
            return frozenset(self._shards[index].get(key, ()))

    def size_of(self, key: Hashable) -> int:
        """Get number of members stored under key."""
        index = self._shard_index(key)
        with self._locks[index]:
            return len(self._shards[index].get(key, ()))

    def __contains__(self, key: Hashable) -> bool:
        index = self._shard_index(key)
        with self._locks[index]:
            return key in self._shards[index]

    def keys(self) -> List[Hashable]:
        """Get all keys currently present."""
        keys: List[Hashable] = []
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                keys.extend(shard.keys())
        return keys

    def __len__(self) -> int:
        total = 0
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                total += len(shard)
        return total

    def snapshot(self) -> Dict[Hashable, FrozenSet[Any]]:
        """
        Copy the whole map.

        Returns:
            Plain dict of key to frozenset of members
        """
        result: Dict[Hashable, FrozenSet[Any]] = {}
        for shard, lock in zip(self._shards, self._locks):
            with lock:
                for key, members in shard.items():
                    result[key] = frozenset(members)
        return result

    def __repr__(self) -> str:
        return f"ThreadSafeSetMap(keys={len(self)}, shards={len(self._shards)})"
