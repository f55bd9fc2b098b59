"""Explicit document cache keyed by content digests."""

from __future__ import annotations

import json
from threading import Lock
from typing import Any, Callable, Dict, Mapping, Optional

from .logging import increment_counter


Serializer = Callable[[Mapping[str, Any]], Any]
Deserializer = Callable[[Any], Dict[str, Any]]


def _serialize_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload)


def _deserialize_payload(data: Any) -> Dict[str, Any]:
    if isinstance(data, str):
        return json.loads(data)
    raise TypeError("Unexpected payload type in cache")


class DocumentCache:
    """Generated documents stored by digest.

    Entries never expire; a changed route table or override source produces a
    new digest, and stale entries are dropped with :meth:`invalidate` or
    :meth:`clear`. Payloads are stored serialized, so every hit returns a fresh
    copy that callers may mutate freely.
    """

    def __init__(
        self,
        *,
        namespace: str = "document.cache",
        max_entries: int = 8,
        serializer: Serializer = _serialize_payload,
        deserializer: Deserializer = _deserialize_payload,
    ) -> None:
        self._namespace = namespace
        self._max_entries = max(1, int(max_entries))
        self._serializer = serializer
        self._deserializer = deserializer
        self._entries: Dict[str, Any] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, digest: str) -> Optional[Dict[str, Any]]:
        """Return the cached document for *digest* if present."""

        with self._lock:
            payload = self._entries.get(digest)
        if payload is None:
            increment_counter(f"{self._namespace}.miss")
            return None
        increment_counter(f"{self._namespace}.hit")
        return self._deserializer(payload)

    def set(self, digest: str, document: Mapping[str, Any]) -> None:
        serialized = self._serializer(document)
        with self._lock:
            self._entries.pop(digest, None)
            self._entries[digest] = serialized
            while len(self._entries) > self._max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

    def invalidate(self, digest: str) -> None:
        """Remove *digest* from the cache if present."""

        with self._lock:
            self._entries.pop(digest, None)

    def clear(self) -> None:
        """Remove all cached documents."""

        with self._lock:
            self._entries.clear()


__all__ = ["DocumentCache"]
