"""Signed envelope models and canonical content hashing.

Submodules:
    models   -- AuthorIdentity, Endorsement, SignedEnvelope, VerificationResult
    hashing  -- canonicalize, compute_content_hash
"""

from trustgate.core.envelope.hashing import canonicalize, compute_content_hash
from trustgate.core.envelope.models import (
    AuthorIdentity,
    Endorsement,
    SignedEnvelope,
    VerificationResult,
)

__all__ = [
    "AuthorIdentity",
    "Endorsement",
    "SignedEnvelope",
    "VerificationResult",
    "canonicalize",
    "compute_content_hash",
]
