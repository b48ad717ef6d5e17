"""Provider contracts consumed by the trust evaluator.

The evaluator never talks to the network, key store or social graph
directly. It depends on these five abstract contracts, injected through
its constructor. Concrete adapters live in ``trustgate.providers``.

Any provider method may raise; the evaluator treats a failure as "no
trust data" and scores the affected factor as 0.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from trustgate.core.envelope.models import (
    AuthorIdentity,
    SignedEnvelope,
    VerificationResult,
)


@dataclass(frozen=True)
class Friend:
    """A node in the local social graph."""

    id: str
    public_key: str


class EnvelopeVerifier(ABC):
    """Validates the author's signature over an envelope's content hash."""

    @abstractmethod
    async def verify(self, envelope: SignedEnvelope) -> VerificationResult:
        """Return whether the envelope's signature is valid."""


class IdentityProvider(ABC):
    """Supplies the local node's own public identity."""

    @abstractmethod
    async def get_public_identity(self) -> AuthorIdentity | None:
        """Return the local identity, or None if no identity exists yet."""


class SocialGraphProvider(ABC):
    """Friend and friend-of-friend lookups."""

    @abstractmethod
    async def get_friends(self) -> list[Friend]:
        """Return the local identity's direct friends."""

    @abstractmethod
    async def get_friends_of_friend(self, public_key: str) -> list[Friend]:
        """Return the direct friends of the friend with ``public_key``."""


class ReputationProvider(ABC):
    """Author reputation, staking tier and content coherence."""

    @abstractmethod
    async def get_reputation(self, public_key: str) -> float:
        """Return the author's reputation in [0, 1]."""

    @abstractmethod
    async def get_staking_tier(self, public_key: str) -> str:
        """Return the author's staking tier name (e.g. ``"Adept"``)."""

    @abstractmethod
    async def get_coherence_score(self, content_hash: str) -> float:
        """Return the coherence score in [0, 1] for a piece of content."""


class DomainOverlapProvider(ABC):
    """Shared-community membership between the local node and an author."""

    @abstractmethod
    async def get_common_domains(self, author_fingerprint: str) -> list[str]:
        """Return ids of domains both the local node and the author belong to."""
