"""In-memory trust providers backed by a static network description.

A network file is a YAML document describing what the local node knows::

    identity:
      pub: "MCowBQYDK2VwAyEA..."
      fingerprint: "a1b2c3d4e5f60718"
    friends:
      - {id: alice, public_key: "alice-pub"}
    friends_of_friends:
      alice-pub:
        - {id: carol, public_key: "carol-pub"}
    domains:                    # author fingerprint -> shared domain ids
      carol-fp: [rust-devs]
    reputation:                 # public key -> [0, 1]
      carol-pub: 0.8
    staking:                    # public key -> tier name
      carol-pub: Adept
    coherence:                  # content hash -> [0, 1]
      abc123: 0.7

Every section is optional. Unknown authors have reputation 0, no staking
tier and no shared domains; unknown content has coherence 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from trustgate.core.envelope.models import AuthorIdentity
from trustgate.core.trust.providers import (
    DomainOverlapProvider,
    Friend,
    IdentityProvider,
    ReputationProvider,
    SocialGraphProvider,
)
from trustgate.exceptions import ConfigError, EnvelopeError

logger = logging.getLogger(__name__)

_NETWORK_KEYS = frozenset({
    "identity",
    "friends",
    "friends_of_friends",
    "domains",
    "reputation",
    "staking",
    "coherence",
})


class StaticIdentity(IdentityProvider):
    """Identity provider returning a fixed identity (or None)."""

    def __init__(self, identity: AuthorIdentity | None) -> None:
        self._identity = identity

    async def get_public_identity(self) -> AuthorIdentity | None:
        return self._identity


@dataclass
class StaticNetwork(SocialGraphProvider, ReputationProvider, DomainOverlapProvider):
    """A static snapshot of social graph, reputation and domain data."""

    identity: AuthorIdentity | None = None
    friends: list[Friend] = field(default_factory=list)
    friends_of_friends: dict[str, list[Friend]] = field(default_factory=dict)
    domains: dict[str, list[str]] = field(default_factory=dict)
    reputation: dict[str, float] = field(default_factory=dict)
    staking: dict[str, str] = field(default_factory=dict)
    coherence: dict[str, float] = field(default_factory=dict)

    # -- SocialGraphProvider --

    async def get_friends(self) -> list[Friend]:
        return list(self.friends)

    async def get_friends_of_friend(self, public_key: str) -> list[Friend]:
        return list(self.friends_of_friends.get(public_key, []))

    # -- ReputationProvider --

    async def get_reputation(self, public_key: str) -> float:
        return self.reputation.get(public_key, 0.0)

    async def get_staking_tier(self, public_key: str) -> str:
        return self.staking.get(public_key, "")

    async def get_coherence_score(self, content_hash: str) -> float:
        return self.coherence.get(content_hash, 0.0)

    # -- DomainOverlapProvider --

    async def get_common_domains(self, author_fingerprint: str) -> list[str]:
        return list(self.domains.get(author_fingerprint, []))

    def identity_provider(self) -> StaticIdentity:
        return StaticIdentity(self.identity)

    # -- Loading --

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StaticNetwork:
        """Build a network from a parsed network document.

        Raises:
            ConfigError: If a section has the wrong shape.
        """
        unknown = set(data) - _NETWORK_KEYS
        if unknown:
            raise ConfigError(f"Unknown network keys: {sorted(unknown)}")

        identity = None
        if data.get("identity") is not None:
            try:
                identity = AuthorIdentity.from_dict(data["identity"])
            except EnvelopeError as exc:
                raise ConfigError(f"Invalid network identity: {exc}") from exc

        fofs = _mapping(data, "friends_of_friends")
        return cls(
            identity=identity,
            friends=_friends(data.get("friends") or [], "friends"),
            friends_of_friends={
                str(pub): _friends(items or [], f"friends_of_friends.{pub}")
                for pub, items in fofs.items()
            },
            domains={
                str(fp): [str(d) for d in (ids or [])]
                for fp, ids in _mapping(data, "domains").items()
            },
            reputation=_scores(data, "reputation"),
            staking={str(k): str(v) for k, v in _mapping(data, "staking").items()},
            coherence=_scores(data, "coherence"),
        )

    @classmethod
    def load(cls, path: str | Path) -> StaticNetwork:
        """Load a network description from a YAML file."""
        path = Path(path)
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"Cannot read network file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in network file {path}: {exc}") from exc
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Network file {path} must contain a mapping")
        network = cls.from_dict(raw)
        logger.debug(
            "Loaded network from %s: %d friends, %d reputation records",
            path,
            len(network.friends),
            len(network.reputation),
        )
        return network


def _mapping(data: dict[str, Any], key: str) -> dict[Any, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Network section '{key}' must be a mapping")
    return value


def _friends(items: Any, section: str) -> list[Friend]:
    if not isinstance(items, list):
        raise ConfigError(f"Network section '{section}' must be a list")
    friends: list[Friend] = []
    for item in items:
        if not isinstance(item, dict) or not item.get("public_key"):
            raise ConfigError(f"Each entry in '{section}' needs a public_key")
        key = str(item["public_key"])
        friends.append(Friend(id=str(item.get("id", key)), public_key=key))
    return friends


def _scores(data: dict[str, Any], key: str) -> dict[str, float]:
    scores: dict[str, float] = {}
    for name, value in _mapping(data, key).items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Network '{key}.{name}' must be numeric, got {value!r}")
        scores[str(name)] = float(value)
    return scores
