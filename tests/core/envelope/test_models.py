"""Tests for envelope models and their document form."""

from __future__ import annotations

from typing import Any

import pytest

from trustgate.core.envelope import AuthorIdentity, Endorsement, SignedEnvelope
from trustgate.core.envelope.models import endorser_keys
from trustgate.exceptions import EnvelopeError


def _doc(**overrides: Any) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "content": {"name": "x"},
        "content_hash": "abc",
        "author": {"pub": "author-pub", "fingerprint": "author-fp"},
        "signature": "sig",
        "endorsements": [
            {"endorser": {"pub": "e1", "fingerprint": "f1"}, "signature": "s1"},
        ],
        "requested_capabilities": ["fs:read", "ui:overlay"],
        "artifact_type": "plugin",
        "version": "1.0.0",
    }
    doc.update(overrides)
    return doc


class TestAuthorIdentity:
    """Identity parsing."""

    def test_from_dict(self) -> None:
        ident = AuthorIdentity.from_dict({"pub": "p", "fingerprint": "f"})
        assert ident == AuthorIdentity(pub="p", fingerprint="f")

    def test_fingerprint_optional(self) -> None:
        assert AuthorIdentity.from_dict({"pub": "p"}).fingerprint == ""

    @pytest.mark.parametrize("data", [None, [], {"fingerprint": "f"}, {"pub": ""}])
    def test_invalid(self, data: Any) -> None:
        with pytest.raises(EnvelopeError):
            AuthorIdentity.from_dict(data)


class TestSignedEnvelope:
    """Construction, immutability and validation."""

    def test_from_dict(self) -> None:
        env = SignedEnvelope.from_dict(_doc())
        assert env.content_hash == "abc"
        assert env.author.pub == "author-pub"
        assert env.requested_capabilities == frozenset({"fs:read", "ui:overlay"})
        assert env.endorsements[0].endorser.pub == "e1"
        assert env.artifact_type == "plugin"

    def test_collections_are_frozen(self) -> None:
        env = SignedEnvelope(
            content=None,
            content_hash="h",
            author=AuthorIdentity("p", "f"),
            signature="s",
            endorsements=[Endorsement(AuthorIdentity("e", "f"), "s")],  # type: ignore[arg-type]
            requested_capabilities={"fs:read"},  # type: ignore[arg-type]
        )
        assert isinstance(env.endorsements, tuple)
        assert isinstance(env.requested_capabilities, frozenset)
        with pytest.raises(AttributeError):
            env.content_hash = "other"  # type: ignore[misc]

    @pytest.mark.parametrize("key", ["content_hash", "author", "signature"])
    def test_missing_required_key(self, key: str) -> None:
        doc = _doc()
        del doc[key]
        with pytest.raises(EnvelopeError, match=key):
            SignedEnvelope.from_dict(doc)

    def test_empty_content_hash(self) -> None:
        with pytest.raises(EnvelopeError, match="content hash"):
            SignedEnvelope.from_dict(_doc(content_hash=""))

    def test_capabilities_must_be_list(self) -> None:
        with pytest.raises(EnvelopeError, match="must be a list"):
            SignedEnvelope.from_dict(_doc(requested_capabilities="fs:read"))

    def test_bad_capability_identifier(self) -> None:
        with pytest.raises(EnvelopeError, match="capability"):
            SignedEnvelope.from_dict(_doc(requested_capabilities=[""]))

    def test_endorsement_must_be_mapping(self) -> None:
        with pytest.raises(EnvelopeError, match="endorsement"):
            SignedEnvelope.from_dict(_doc(endorsements=["bob"]))

    def test_not_a_mapping(self) -> None:
        with pytest.raises(EnvelopeError):
            SignedEnvelope.from_dict(["nope"])

    def test_endorser_keys_are_distinct(self) -> None:
        a = AuthorIdentity("a", "fa")
        keys = endorser_keys([Endorsement(a, "1"), Endorsement(a, "2")])
        assert keys == {"a"}
