"""Trust scoring for signed envelopes.

Submodules:
    models     -- TrustLevel, TrustFactors, TrustWeights, TrustAssessment
    scoring    -- weighted_score, score_to_level, factor helpers
    cache      -- AssessmentCache (TTL per trust level)
    overrides  -- OverrideTarget, TrustOverride, OverrideStore
    providers  -- abstract provider contracts
    evaluator  -- TrustEvaluator
"""

from trustgate.core.trust.models import (
    TrustAssessment,
    TrustFactors,
    TrustLevel,
    TrustWeights,
)
from trustgate.core.trust.cache import AssessmentCache
from trustgate.core.trust.overrides import OverrideStore, OverrideTarget, TrustOverride
from trustgate.core.trust.providers import (
    DomainOverlapProvider,
    EnvelopeVerifier,
    Friend,
    IdentityProvider,
    ReputationProvider,
    SocialGraphProvider,
)
from trustgate.core.trust.evaluator import TrustEvaluator

__all__ = [
    "AssessmentCache",
    "DomainOverlapProvider",
    "EnvelopeVerifier",
    "Friend",
    "IdentityProvider",
    "OverrideStore",
    "OverrideTarget",
    "ReputationProvider",
    "SocialGraphProvider",
    "TrustAssessment",
    "TrustEvaluator",
    "TrustFactors",
    "TrustLevel",
    "TrustOverride",
    "TrustWeights",
]
