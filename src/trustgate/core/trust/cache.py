"""TTL cache of trust assessments keyed by content hash.

One entry per content hash. Each entry expires after the assessment's
own ``ttl_seconds`` (None never expires), so low-trust results are
re-evaluated quickly while SELF results live for the process lifetime.
The cache is guarded by a lock so evaluators can be shared across threads.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from .models import TrustAssessment


@dataclass(frozen=True)
class _CacheEntry:
    assessment: TrustAssessment
    expires_at: float | None


class AssessmentCache:
    """Thread-safe content-hash -> assessment cache with per-entry TTL.

    Args:
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, content_hash: str) -> TrustAssessment | None:
        """Return the cached assessment, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(content_hash)
            if entry is None:
                return None
            if entry.expires_at is not None and entry.expires_at <= self._clock():
                del self._entries[content_hash]
                return None
            return entry.assessment

    def put(self, content_hash: str, assessment: TrustAssessment) -> None:
        """Store an assessment, replacing any previous entry for the hash."""
        ttl = assessment.ttl_seconds
        with self._lock:
            expires_at = None if ttl is None else self._clock() + ttl
            self._entries[content_hash] = _CacheEntry(assessment, expires_at)

    def clear(self) -> None:
        """Drop every entry immediately."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, content_hash: object) -> bool:
        if not isinstance(content_hash, str):
            return False
        return self.get(content_hash) is not None
