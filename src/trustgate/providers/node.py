"""Trust providers backed by a node's JSON API.

``NodeTrustAdapter`` implements the identity, social graph, reputation
and domain overlap contracts by reading from a peer node's local HTTP
API::

    GET /identity                      -> {"pub": ..., "fingerprint": ...}
    GET /social/friends                -> [{"id": ..., "public_key": ...}]
    GET /social/<pub>/friends          -> [{"id": ..., "public_key": ...}]
    GET /reputation/<pub>              -> {"score": 0.0-1.0}
    GET /staking/<pub>                 -> {"tier": "Adept"}
    GET /coherence/<content_hash>      -> {"score": 0.0-1.0}
    GET /domains/common/<fingerprint>  -> ["domain-id", ...]

Missing records (404, absent fields) yield conservative values: empty
lists, score 0, tier ``Neophyte``. Transport failures raise
``ProviderError``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from trustgate.core.envelope.models import AuthorIdentity
from trustgate.core.trust.providers import (
    DomainOverlapProvider,
    Friend,
    IdentityProvider,
    ReputationProvider,
    SocialGraphProvider,
)
from trustgate.core.trust.scoring import clamp_unit
from trustgate.exceptions import EnvelopeError, ProviderError
from trustgate.providers.http_client import DEFAULT_TIMEOUT, fetch_json

logger = logging.getLogger(__name__)

KNOWN_TIERS: frozenset[str] = frozenset({"Neophyte", "Adept", "Magus", "Archon"})
DEFAULT_TIER: str = "Neophyte"


class NodeTrustAdapter(
    IdentityProvider, SocialGraphProvider, ReputationProvider, DomainOverlapProvider
):
    """Reads trust data from a node's HTTP API.

    Args:
        base_url: Root URL of the node API, e.g. ``http://localhost:8765``.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get(self, *parts: str) -> Any:
        path = "/".join(quote(p, safe="") for p in parts)
        return await fetch_json(f"{self._base_url}/{path}", timeout=self._timeout)

    # -- IdentityProvider --

    async def get_public_identity(self) -> AuthorIdentity | None:
        data = await self._get("identity")
        if data is None:
            return None
        try:
            return AuthorIdentity.from_dict(data)
        except EnvelopeError as exc:
            raise ProviderError(f"Malformed identity from node: {exc}") from exc

    # -- SocialGraphProvider --

    async def get_friends(self) -> list[Friend]:
        return _parse_friends(await self._get("social", "friends"))

    async def get_friends_of_friend(self, public_key: str) -> list[Friend]:
        return _parse_friends(await self._get("social", public_key, "friends"))

    # -- ReputationProvider --

    async def get_reputation(self, public_key: str) -> float:
        return _score(await self._get("reputation", public_key))

    async def get_staking_tier(self, public_key: str) -> str:
        data = await self._get("staking", public_key)
        tier = data.get("tier") if isinstance(data, dict) else None
        if tier in KNOWN_TIERS:
            return tier
        return DEFAULT_TIER

    async def get_coherence_score(self, content_hash: str) -> float:
        return _score(await self._get("coherence", content_hash))

    # -- DomainOverlapProvider --

    async def get_common_domains(self, author_fingerprint: str) -> list[str]:
        data = await self._get("domains", "common", author_fingerprint)
        if isinstance(data, dict):
            data = data.get("domains", [])
        if not isinstance(data, list):
            return []
        return [str(d) for d in data if d]


def _score(data: Any) -> float:
    if not isinstance(data, dict):
        return 0.0
    return clamp_unit(data.get("score"))


def _parse_friends(data: Any) -> list[Friend]:
    """Parse a friend list, skipping malformed entries."""
    if isinstance(data, dict):
        data = data.get("friends", [])
    if not isinstance(data, list):
        return []
    friends: list[Friend] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        key = item.get("public_key") or item.get("publicKey")
        if not key:
            continue
        friends.append(Friend(id=str(item.get("id", key)), public_key=str(key)))
    return friends
