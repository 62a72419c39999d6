"""Bounded, thread-safe memoization of generated schemas."""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from schema_reflector.schema_model import Schema

LOGGER = logging.getLogger(__name__)

_ABSENT_HOOK = b"\x00absent"


@dataclass(frozen=True)
class CacheKey:
    """Reflected type plus the fingerprint of the options that shaped it."""

    type: Any
    fingerprint: int


def fingerprint_options(
    toggles: Iterable[bool],
    texts: Iterable[str],
    hooks: Iterable[object | None],
    comment_map: Mapping[str, str] | None = None,
) -> int:
    """Hash every option able to change the generated schema.

    Hooks contribute their identity only, so two equivalent but distinct
    callables never share a fingerprint.
    """
    digest = hashlib.blake2b(digest_size=8)
    for toggle in toggles:
        digest.update(b"1" if toggle else b"0")
    for text in texts:
        encoded = text.encode("utf-8")
        digest.update(len(encoded).to_bytes(8, "little"))
        digest.update(encoded)
    for hook in hooks:
        if hook is None:
            digest.update(_ABSENT_HOOK)
            continue
        digest.update(id(hook).to_bytes(8, "little"))
        digest.update(getattr(hook, "__qualname__", type(hook).__qualname__).encode("utf-8"))
    if comment_map is not None:
        digest.update(str(len(comment_map)).encode("ascii"))
        digest.update(id(comment_map).to_bytes(8, "little"))
    return int.from_bytes(digest.digest(), "little")


class SchemaCache:
    """Cloned schemas keyed by type and option fingerprint, least recently used evicted first.

    Entries are published once and never mutated. The entry dict is read and
    written with single atomic operations; only the recency order sits behind
    a lock.
    """

    def __init__(self, max_entries: int = 0) -> None:
        self._max_entries = max_entries
        self._entries: dict[CacheKey, Schema] = {}
        self._recency: OrderedDict[CacheKey, None] = OrderedDict()
        self._recency_lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def load(self, key: CacheKey) -> Schema | None:
        """Return a private copy of a cached schema, or None on a miss."""
        cached = self._entries.get(key)
        if cached is None:
            LOGGER.debug("Schema cache miss for %r", key.type)
            return None
        with self._recency_lock:
            if key in self._recency:
                self._recency.move_to_end(key)
        LOGGER.debug("Schema cache hit for %r", key.type)
        return cached.clone()

    def store(self, key: CacheKey, schema: Schema) -> None:
        """Publish a copy of ``schema``; the first stored value for a key wins."""
        candidate = schema.clone()
        if self._entries.setdefault(key, candidate) is not candidate:
            return
        with self._recency_lock:
            self._recency[key] = None
            if self._max_entries <= 0:
                return
            while len(self._recency) > self._max_entries:
                evicted, _ = self._recency.popitem(last=False)
                self._entries.pop(evicted, None)
                LOGGER.debug("Schema cache evicted %r", evicted.type)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def clear(self) -> None:
        with self._recency_lock:
            self._entries.clear()
            self._recency.clear()
