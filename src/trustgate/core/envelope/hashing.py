"""Canonical content hashing for signed envelopes.

The content hash is the stable digest an author signs and the key the
trust cache is indexed by:

    hash = lowercase_hex(SHA-256(UTF-8(canonical_json(content))))

where ``canonical_json`` sorts object keys recursively and uses compact
separators, so two structurally equal payloads always hash identically
regardless of key insertion order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from trustgate.exceptions import EnvelopeError


def canonicalize(content: Any) -> str:
    """Serialize content to its canonical JSON form.

    Args:
        content: Any JSON-serializable value.

    Returns:
        Compact JSON with recursively sorted keys.

    Raises:
        EnvelopeError: If the content is not JSON-serializable.
    """
    try:
        return json.dumps(
            content,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise EnvelopeError(f"Envelope content is not canonicalizable: {exc}") from exc


def compute_content_hash(content: Any) -> str:
    """Compute the canonical SHA-256 content hash (lowercase hex)."""
    canonical = canonicalize(content)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
