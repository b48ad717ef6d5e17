"""Integrity-level envelope verification.

``ContentHashVerifier`` recomputes the canonical content hash and checks
that the author attached a signature. Cryptographic signature checking is
delegated to an optional ``signature_check`` callable so key handling stays
outside this package.
"""

from __future__ import annotations

import logging
from typing import Callable

from trustgate.core.envelope.hashing import compute_content_hash
from trustgate.core.envelope.models import SignedEnvelope, VerificationResult
from trustgate.core.trust.providers import EnvelopeVerifier
from trustgate.exceptions import EnvelopeError

logger = logging.getLogger(__name__)


class ContentHashVerifier(EnvelopeVerifier):
    """Verifies the content digest and delegates signature checks.

    Args:
        signature_check: Optional callable returning True when the author's
            signature over ``content_hash`` is genuine.
    """

    def __init__(
        self, signature_check: Callable[[SignedEnvelope], bool] | None = None
    ) -> None:
        self._signature_check = signature_check

    async def verify(self, envelope: SignedEnvelope) -> VerificationResult:
        try:
            expected = compute_content_hash(envelope.content)
        except EnvelopeError as exc:
            return VerificationResult(valid=False, error=str(exc))
        if expected != envelope.content_hash:
            return VerificationResult(valid=False, error="Content hash mismatch")
        if not envelope.signature:
            return VerificationResult(valid=False, error="Missing author signature")
        if self._signature_check is not None and not self._signature_check(envelope):
            return VerificationResult(valid=False, error="Signature check failed")
        return VerificationResult(valid=True)
