"""Manual trust overrides and their in-memory store.

An override pins the trust outcome for either one artifact (by content
hash) or every artifact from one author (by fingerprint). A REVOKED
override forces REVOKED; any other level means "vouch" and yields
VOUCHED with score 0.9. Manual vouching never yields SELF.

Store keys are the content hash for artifact overrides and
``author:<fingerprint>`` for author overrides. Overrides live only as long
as the store; persisting them is the caller's concern.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from trustgate.exceptions import TrustGateError
from .models import TrustLevel

AUTHOR_KEY_PREFIX = "author:"


@dataclass(frozen=True)
class OverrideTarget:
    """What an override applies to.

    Attributes:
        kind: ``"artifact"`` or ``"author"``.
        value: The content hash or the author fingerprint.
    """

    kind: str
    value: str

    def __post_init__(self) -> None:
        if self.kind not in ("artifact", "author"):
            raise TrustGateError(
                f"Override target kind must be 'artifact' or 'author', got {self.kind!r}"
            )
        if not self.value:
            raise TrustGateError("Override target value must not be empty")

    @classmethod
    def artifact(cls, content_hash: str) -> OverrideTarget:
        return cls("artifact", content_hash)

    @classmethod
    def author(cls, fingerprint: str) -> OverrideTarget:
        return cls("author", fingerprint)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TrustOverride:
    """A user-defined trust decision that bypasses scoring.

    Attributes:
        target: Artifact or author the override applies to.
        trust_level: REVOKED to block; any other level to vouch.
        created_at: When the override was set.
        expires_at: Optional expiry; expired overrides are ignored.
        reason: Free-text note shown in listings.
    """

    target: OverrideTarget
    trust_level: TrustLevel
    created_at: datetime = field(default_factory=_utcnow)
    expires_at: datetime | None = None
    reason: str = ""

    @property
    def key(self) -> str:
        """Store key: the content hash, or ``author:<fingerprint>``."""
        if self.target.kind == "artifact":
            return self.target.value
        return f"{AUTHOR_KEY_PREFIX}{self.target.value}"

    @property
    def revokes(self) -> bool:
        return self.trust_level == TrustLevel.REVOKED

    def is_expired(self, now: datetime | None = None) -> bool:
        remaining = self.seconds_remaining(now)
        return remaining is not None and remaining <= 0

    def seconds_remaining(self, now: datetime | None = None) -> float | None:
        """Seconds until expiry, floored at 0; None if it never expires."""
        if self.expires_at is None:
            return None
        now = now or _utcnow()
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return max(0.0, (expires_at - now).total_seconds())


class OverrideStore:
    """Thread-safe keyed store of trust overrides."""

    def __init__(self) -> None:
        self._overrides: dict[str, TrustOverride] = {}
        self._lock = threading.Lock()

    def set(self, override: TrustOverride) -> None:
        """Add or replace the override for its target."""
        with self._lock:
            self._overrides[override.key] = override

    def remove(self, key: str) -> bool:
        """Remove the override stored under ``key``.

        Missing keys are a no-op. Returns True if an override was removed.
        """
        with self._lock:
            return self._overrides.pop(key, None) is not None

    def list(self) -> list[TrustOverride]:
        """Return all unexpired overrides, pruning expired ones."""
        with self._lock:
            self._prune()
            return list(self._overrides.values())

    def find_for_artifact(self, content_hash: str) -> TrustOverride | None:
        return self._find(content_hash)

    def find_for_author(self, fingerprint: str) -> TrustOverride | None:
        if not fingerprint:
            return None
        return self._find(f"{AUTHOR_KEY_PREFIX}{fingerprint}")

    def lookup(self, content_hash: str, fingerprint: str) -> TrustOverride | None:
        """Return the applicable override; artifact overrides win over author ones."""
        return self.find_for_artifact(content_hash) or self.find_for_author(fingerprint)

    def _find(self, key: str) -> TrustOverride | None:
        with self._lock:
            override = self._overrides.get(key)
            if override is None:
                return None
            if override.is_expired():
                del self._overrides[key]
                return None
            return override

    def _prune(self) -> None:
        now = _utcnow()
        expired = [k for k, o in self._overrides.items() if o.is_expired(now)]
        for key in expired:
            del self._overrides[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._overrides)
