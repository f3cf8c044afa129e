"""
In-memory cache of parsed PDF documents.

Entries are keyed by a SHA-256 fingerprint of the file content; a separate index
maps the file names clients use onto fingerprints, so a follow-up question can
refer to a document by name alone. The cache is bounded in size (least recently
used entries go first) and optionally in age.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from langchain_core.documents import Document
import logging

logger = logging.getLogger(__name__)


@dataclass
class ParsedDocument:
    """Text extracted from one PDF."""
    file_name: str
    fingerprint: str
    documents: List[Document]
    lines: List[str]
    cached_at: float = field(default_factory=time.monotonic)


class DocumentCache:
    """Process-wide store of parsed documents, bounded by count and age."""

    def __init__(
        self,
        max_entries: int = 32,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, ParsedDocument]" = OrderedDict()
        self._names: Dict[str, str] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, file_name: str) -> bool:
        return self.get_by_name(file_name) is not None

    def _is_expired(self, entry: ParsedDocument) -> bool:
        if not self.ttl_seconds:
            return False
        return self._clock() - entry.cached_at > self.ttl_seconds

    def _drop(self, fingerprint: str) -> None:
        self._entries.pop(fingerprint, None)
        for name in [n for n, fp in self._names.items() if fp == fingerprint]:
            del self._names[name]

    def get(self, fingerprint: str) -> Optional[ParsedDocument]:
        """Return the live entry for a content fingerprint, if any."""
        with self._lock:
            entry = self._entries.get(fingerprint)
            if entry is None:
                return None
            if self._is_expired(entry):
                logger.info(f"Parsed document expired: {entry.file_name} ({fingerprint[:12]})")
                self._drop(fingerprint)
                return None
            self._entries.move_to_end(fingerprint)
            return entry

    def get_by_name(self, file_name: str) -> Optional[ParsedDocument]:
        """Return the live entry a file name currently points at, if any."""
        with self._lock:
            fingerprint = self._names.get(file_name)
            if fingerprint is None:
                return None
            return self.get(fingerprint)

    def bind(self, file_name: str, fingerprint: str) -> Optional[ParsedDocument]:
        """Point a file name at an already cached fingerprint."""
        with self._lock:
            entry = self.get(fingerprint)
            if entry is not None:
                self._names[file_name] = fingerprint
            return entry

    def put(self, file_name: str, parsed: ParsedDocument) -> ParsedDocument:
        """Store a parsed document and point ``file_name`` at it."""
        with self._lock:
            parsed.cached_at = self._clock()
            self._entries[parsed.fingerprint] = parsed
            self._entries.move_to_end(parsed.fingerprint)
            self._names[file_name] = parsed.fingerprint

            while len(self._entries) > self.max_entries:
                oldest = next(iter(self._entries))
                logger.info(f"Evicting parsed document: {self._entries[oldest].file_name} ({oldest[:12]})")
                self._drop(oldest)

            return parsed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._names.clear()
