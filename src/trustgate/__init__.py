"""TrustGate: provenance trust scoring and capability gating for signed artifacts."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from trustgate.core.capabilities import Decision, RiskLevel
from trustgate.core.envelope import AuthorIdentity, Endorsement, SignedEnvelope
from trustgate.core.gate import TrustGate
from trustgate.core.trust import (
    TrustAssessment,
    TrustEvaluator,
    TrustFactors,
    TrustLevel,
    TrustOverride,
)

__all__ = [
    "AuthorIdentity",
    "Decision",
    "Endorsement",
    "RiskLevel",
    "SignedEnvelope",
    "TrustAssessment",
    "TrustEvaluator",
    "TrustFactors",
    "TrustGate",
    "TrustLevel",
    "TrustOverride",
]
