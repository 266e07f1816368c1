# smartcache/keys.py
from __future__ import annotations
import base64
import hashlib
from typing import Callable, Generic, TypeVar

K = TypeVar("K")

STORAGE_KEY_LENGTH = 16


class KeyHasher(Generic[K]):
    """
    Maps caller keys onto short, fixed-length storage keys.
    serializer(key) -> UTF-8 -> SHA-256 -> base64, truncated to 16 chars.
    Serializer errors are not caught here; they surface to whoever called the cache.
    """
    def __init__(self, serializer: Callable[[K], str]):
        if serializer is None or not callable(serializer):
            raise TypeError("key serializer must be callable")
        self._serializer = serializer

    def hash(self, key: K) -> str:
        raw = self._serializer(key)
        digest = hashlib.sha256(raw.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("ascii")[:STORAGE_KEY_LENGTH]
