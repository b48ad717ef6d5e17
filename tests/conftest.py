"""Shared fixtures for trustgate tests."""

from __future__ import annotations

import json
import pathlib

import pytest

from trustgate.core.envelope import compute_content_hash


@pytest.fixture
def envelope_content() -> dict:
    return {"name": "weather-plugin", "entry": "main.js", "version": "1.2.0"}


@pytest.fixture
def envelope_file(tmp_path: pathlib.Path, envelope_content: dict) -> pathlib.Path:
    """Write a well-formed envelope from an unknown author to disk."""
    doc = {
        "content": envelope_content,
        "content_hash": compute_content_hash(envelope_content),
        "author": {"pub": "stranger-pub", "fingerprint": "stranger-fp"},
        "signature": "c2lnbmF0dXJl",
        "endorsements": [],
        "requested_capabilities": ["ui:notification", "fs:write"],
        "artifact_type": "plugin",
        "version": "1.2.0",
    }
    path = tmp_path / "plugin.envelope.json"
    path.write_text(json.dumps(doc))
    return path


@pytest.fixture
def network_file(tmp_path: pathlib.Path, envelope_content: dict) -> pathlib.Path:
    """Network where the stranger has low reputation and no connections."""
    content_hash = compute_content_hash(envelope_content)
    path = tmp_path / "network.yaml"
    path.write_text(
        "identity:\n"
        "  pub: self-pub\n"
        "  fingerprint: self-fp\n"
        "friends: []\n"
        "reputation:\n"
        "  stranger-pub: 0.1\n"
        "staking:\n"
        "  stranger-pub: Neophyte\n"
        "coherence:\n"
        f"  {content_hash}: 0.5\n"
    )
    return path
