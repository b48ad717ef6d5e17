"""Signed envelope data models.

A ``SignedEnvelope`` bundles an artifact's content with its author's
public identity, the author's signature over the content hash, optional
third-party endorsements, and the set of runtime capabilities the
artifact asks for. Envelopes are immutable once constructed: collections
are frozen in ``__post_init__`` so an envelope cannot change between
evaluation and enforcement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from trustgate.exceptions import EnvelopeError


@dataclass(frozen=True)
class AuthorIdentity:
    """Public portion of an identity, enough to verify without key material.

    Attributes:
        pub: Public key (opaque string, typically base64).
        fingerprint: Short stable identifier derived from the key.
    """

    pub: str
    fingerprint: str

    @classmethod
    def from_dict(cls, data: Any) -> AuthorIdentity:
        """Build an identity from a ``{"pub": ..., "fingerprint": ...}`` mapping."""
        if not isinstance(data, dict):
            raise EnvelopeError(f"Identity must be a mapping, got {type(data).__name__}")
        pub = data.get("pub")
        if not isinstance(pub, str) or not pub:
            raise EnvelopeError("Identity is missing its public key")
        fingerprint = data.get("fingerprint", "")
        if not isinstance(fingerprint, str):
            raise EnvelopeError("Identity fingerprint must be a string")
        return cls(pub=pub, fingerprint=fingerprint)


@dataclass(frozen=True)
class Endorsement:
    """A third party's signature corroborating an envelope."""

    endorser: AuthorIdentity
    signature: str
    comment: str = ""


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a cryptographic envelope check."""

    valid: bool
    error: str | None = None


@dataclass(frozen=True)
class SignedEnvelope:
    """Content plus author signature, endorsements and requested capabilities.

    Attributes:
        content: The artifact payload (any JSON-serializable value).
        content_hash: Stable digest of ``content``; the cache key.
        author: Public identity of the signing author.
        signature: Author's signature over ``content_hash``.
        endorsements: Co-signer endorsements, frozen to a tuple.
        requested_capabilities: Capability identifiers the artifact needs,
            frozen to a frozenset.
        artifact_type: Free-form artifact kind (``plugin``, ``skill``...).
        version: Artifact version string.
    """

    content: Any
    content_hash: str
    author: AuthorIdentity
    signature: str
    endorsements: tuple[Endorsement, ...] = ()
    requested_capabilities: frozenset[str] = field(default_factory=frozenset)
    artifact_type: str = ""
    version: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "endorsements", tuple(self.endorsements))
        object.__setattr__(
            self, "requested_capabilities", frozenset(self.requested_capabilities)
        )

    def validate(self) -> None:
        """Raise EnvelopeError if the envelope is structurally unusable.

        Only shape is checked here. Whether the signature is genuine is the
        verifier's job and never raises.

        Raises:
            EnvelopeError: If the content hash or author key is missing, or
                an endorsement or capability has the wrong type.
        """
        if not isinstance(self.content_hash, str) or not self.content_hash:
            raise EnvelopeError("Envelope is missing its content hash")
        if not isinstance(self.author, AuthorIdentity):
            raise EnvelopeError(
                f"Envelope author must be an AuthorIdentity, "
                f"got {type(self.author).__name__}"
            )
        if not self.author.pub:
            raise EnvelopeError("Envelope author is missing its public key")
        for endorsement in self.endorsements:
            if not isinstance(endorsement, Endorsement):
                raise EnvelopeError(
                    f"Endorsements must be Endorsement objects, "
                    f"got {type(endorsement).__name__}"
                )
        for capability in self.requested_capabilities:
            if not isinstance(capability, str) or not capability:
                raise EnvelopeError(f"Invalid capability identifier: {capability!r}")

    @classmethod
    def from_dict(cls, data: Any) -> SignedEnvelope:
        """Build an envelope from its JSON document form.

        Expected keys: ``content``, ``content_hash``, ``author``,
        ``signature``; optional ``endorsements``, ``requested_capabilities``,
        ``artifact_type`` and ``version``.

        Raises:
            EnvelopeError: If required keys are missing or mistyped.
        """
        if not isinstance(data, dict):
            raise EnvelopeError(f"Envelope must be a mapping, got {type(data).__name__}")
        for key in ("content_hash", "author", "signature"):
            if key not in data:
                raise EnvelopeError(f"Envelope is missing required key '{key}'")

        endorsements = [
            Endorsement(
                endorser=AuthorIdentity.from_dict(item.get("endorser")),
                signature=str(item.get("signature", "")),
                comment=str(item.get("comment", "")),
            )
            for item in _as_list(data.get("endorsements", []), "endorsements")
        ]
        envelope = cls(
            content=data.get("content"),
            content_hash=data["content_hash"],
            author=AuthorIdentity.from_dict(data["author"]),
            signature=str(data["signature"]),
            endorsements=tuple(endorsements),
            requested_capabilities=frozenset(
                _as_list(data.get("requested_capabilities", []), "requested_capabilities")
            ),
            artifact_type=str(data.get("artifact_type", "")),
            version=str(data.get("version", "")),
        )
        envelope.validate()
        return envelope


def _as_list(value: Any, name: str) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        raise EnvelopeError(f"Envelope '{name}' must be a list")
    for item in value:
        if name == "endorsements" and not isinstance(item, dict):
            raise EnvelopeError("Each endorsement must be a mapping")
    return list(value)


def endorser_keys(endorsements: Iterable[Endorsement]) -> set[str]:
    """Return the distinct endorser public keys."""
    return {e.endorser.pub for e in endorsements}
