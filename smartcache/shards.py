# smartcache/shards.py
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

V = TypeVar("V")

DEFAULT_SHARDS = 16


class ShardedMap(Generic[V]):
    """
    String-keyed map split over N independently locked dicts.
    Operations on keys in different shards never contend; snapshot() copies one
    shard at a time, so it is consistent per shard but not across shards.
    """
    def __init__(self, shards: int = DEFAULT_SHARDS):
        if shards <= 0:
            raise ValueError("shards must be positive")
        self._shards: List[Dict[str, V]] = [{} for _ in range(shards)]
        self._locks = [threading.Lock() for _ in range(shards)]

    def _index(self, key: str) -> int:
        return hash(key) % len(self._shards)

    @contextmanager
    def locked(self, key: str) -> Iterator[Dict[str, V]]:
        """Hold the lock of the shard owning `key` and yield that shard's dict."""
        i = self._index(key)
        with self._locks[i]:
            yield self._shards[i]

    def get(self, key: str) -> Optional[V]:
        with self.locked(key) as shard:
            return shard.get(key)

    def put(self, key: str, value: V):
        with self.locked(key) as shard:
            shard[key] = value

    def pop(self, key: str) -> Optional[V]:
        with self.locked(key) as shard:
            return shard.pop(key, None)

    def pop_if_same(self, key: str, value: V) -> bool:
        # only drop the exact object we were handed; a replacement stays put
        with self.locked(key) as shard:
            if shard.get(key) is value:
                del shard[key]
                return True
            return False

    def items(self) -> List[Tuple[str, V]]:
        out: List[Tuple[str, V]] = []
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                out.extend(shard.items())
        return out

    def snapshot(self) -> List[V]:
        return [v for _, v in self.items()]

    def clear(self):
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                shard.clear()

    def __len__(self) -> int:
        total = 0
        for lock, shard in zip(self._locks, self._shards):
            with lock:
                total += len(shard)
        return total
