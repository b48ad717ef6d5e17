"""Pure scoring functions for the weighted trust branch.

Score model::

    S = 0.30 * social + 0.20 * reputation + 0.20 * endorsements
        + 0.15 * staking + 0.15 * coherence

All weights are non-negative, so S is monotonically non-decreasing in
every factor. S is clamped to [-1, 1].
"""

from __future__ import annotations

import math
from typing import Iterable, Mapping

from trustgate.core.envelope.models import Endorsement, endorser_keys
from .models import (
    DEFAULT_WEIGHTS,
    ENDORSEMENT_SATURATION,
    FRIEND_ENDORSEMENT_BONUS,
    SCORE_MAX,
    SCORE_MIN,
    SCORED_LEVELS,
    STAKING_TIER_SCORES,
    TRUST_THRESHOLDS,
    TrustFactors,
    TrustLevel,
    TrustWeights,
)

def clamp_unit(value: object) -> float:
    """Coerce a provider value into [0, 1].

    Non-numeric and non-finite values become 0.0 so that garbage from a
    provider never reads as trust.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, float(value)))


def weighted_score(factors: TrustFactors, weights: TrustWeights = DEFAULT_WEIGHTS) -> float:
    """Combine factors into a single score in [-1, 1]."""
    score = (
        weights.social_distance * factors.social_distance
        + weights.author_reputation * factors.author_reputation
        + weights.endorsement_quality * factors.endorsement_quality
        + weights.staking_tier * factors.staking_tier
        + weights.coherence_score * factors.coherence_score
    )
    # Clamp to guard against floating-point drift
    return max(SCORE_MIN, min(SCORE_MAX, score))


def score_to_level(
    score: float,
    thresholds: Mapping[TrustLevel, float] = TRUST_THRESHOLDS,
) -> TrustLevel:
    """Map a weighted score to a trust level.

    The result is at most VOUCHED, even for a perfect score: SELF comes
    only from the local identity check.

    Level boundaries (defaults):
        - VOUCHED:   score >= 0.7
        - COMMUNITY: 0.4 <= score < 0.7
        - UNKNOWN:   0.05 <= score < 0.4
        - REVOKED:   score < 0.05
    """
    for level in SCORED_LEVELS:
        if score >= thresholds[level]:
            return level
    return TrustLevel.REVOKED


def endorsement_quality(
    endorsements: Iterable[Endorsement],
    friend_keys: set[str],
) -> float:
    """Score endorsements by volume plus a bonus for friend endorsers.

    Base: min(1, count / 5). Each distinct endorser who is a direct friend
    adds 0.1. The result is capped at 1.0.
    """
    endorsements = list(endorsements)
    score = min(1.0, len(endorsements) / ENDORSEMENT_SATURATION)
    friend_endorsers = endorser_keys(endorsements) & friend_keys
    score += len(friend_endorsers) * FRIEND_ENDORSEMENT_BONUS
    return min(1.0, score)


def staking_score(
    tier: object,
    table: Mapping[str, float] = STAKING_TIER_SCORES,
) -> float:
    """Look up the score for a staking tier; unknown tiers score 0."""
    if not isinstance(tier, str):
        return 0.0
    return table.get(tier, 0.0)
