"""Trust data models: levels, factors, weights, and assessments.

Defines the core data structures for trust evaluation:

- ``TrustLevel`` -- ordered trust tiers REVOKED < UNKNOWN < COMMUNITY
  < VOUCHED < SELF.
- ``TrustFactors`` -- the signature flag plus five scoring inputs in [0, 1].
- ``TrustWeights`` -- fixed weights for combining the five inputs.
- ``TrustAssessment`` -- the graded, cacheable output of an evaluation.

Default thresholds, cache lifetimes and the staking tier table live here
as module constants; ``trustgate.config.TrustConfig`` can override all of
them except the weights.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any


# ---------------------------------------------------------------------------
# TrustLevel: ordered trust tiers
# ---------------------------------------------------------------------------


class TrustLevel(IntEnum):
    """Discrete trust tiers derived from a continuous score.

    The integer encoding enables direct comparison:
    REVOKED < UNKNOWN < COMMUNITY < VOUCHED < SELF.

    - **SELF**: Signed by the local identity. Trusted unconditionally.
    - **VOUCHED**: Manually vouched for, or strongly connected to the
      local identity through friends, endorsements and reputation.
    - **COMMUNITY**: Verified by the wider network but not personally known.
    - **UNKNOWN**: Valid signature, little or no trust data.
    - **REVOKED**: Invalid signature, explicitly revoked, or scored below
      the lowest threshold. Nothing is ever granted at this level.
    """

    REVOKED = 0
    UNKNOWN = 1
    COMMUNITY = 2
    VOUCHED = 3
    SELF = 4


# ---------------------------------------------------------------------------
# Default constants
# ---------------------------------------------------------------------------

SCORE_MIN: float = -1.0
SCORE_MAX: float = 1.0

# Levels the weighted score can reach, highest first. SELF is assigned
# only to the local identity, never by score.
SCORED_LEVELS: tuple[TrustLevel, ...] = (
    TrustLevel.VOUCHED,
    TrustLevel.COMMUNITY,
    TrustLevel.UNKNOWN,
)

# Minimum score for each scored level, checked in descending order.
# Anything below the UNKNOWN threshold maps to REVOKED. Organic scores are
# >= 0, so the UNKNOWN threshold sits above zero to keep REVOKED reachable.
TRUST_THRESHOLDS: dict[TrustLevel, float] = {
    TrustLevel.VOUCHED: 0.7,
    TrustLevel.COMMUNITY: 0.4,
    TrustLevel.UNKNOWN: 0.05,
}

# Cache lifetime per level, in seconds. None means never expires.
TRUST_CACHE_TTL: dict[TrustLevel, float | None] = {
    TrustLevel.SELF: None,
    TrustLevel.VOUCHED: 60 * 60.0,
    TrustLevel.COMMUNITY: 15 * 60.0,
    TrustLevel.UNKNOWN: 5 * 60.0,
    TrustLevel.REVOKED: 60.0,
}

SOCIAL_DISTANCE_FRIEND: float = 1.0
SOCIAL_DISTANCE_SHARED_DOMAIN: float = 0.6
SOCIAL_DISTANCE_FRIEND_OF_FRIEND: float = 0.5
SOCIAL_DISTANCE_NONE: float = 0.0

STAKING_TIER_SCORES: dict[str, float] = {
    "Archon": 1.0,
    "Magus": 0.75,
    "Adept": 0.5,
    "Neophyte": 0.0,
}

ENDORSEMENT_SATURATION: int = 5
FRIEND_ENDORSEMENT_BONUS: float = 0.1

OVERRIDE_VOUCHED_SCORE: float = 0.9

FACTOR_NAMES: tuple[str, ...] = (
    "social_distance",
    "author_reputation",
    "endorsement_quality",
    "staking_tier",
    "coherence_score",
)


# ---------------------------------------------------------------------------
# TrustFactors: per-evaluation inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrustFactors:
    """Breakdown of the inputs behind a trust assessment.

    Attributes:
        signature_valid: Whether the envelope signature verified.
        social_distance: 1.0 direct friend, 0.6 shared domain,
            0.5 friend-of-friend, 0.0 otherwise.
        author_reputation: Reputation of the author in [0, 1].
        staking_tier: Score of the author's staking tier in [0, 1].
        endorsement_quality: Endorsement count and friend-endorser score.
        coherence_score: Content coherence signal in [0, 1].
    """

    signature_valid: bool
    social_distance: float = 0.0
    author_reputation: float = 0.0
    staking_tier: float = 0.0
    endorsement_quality: float = 0.0
    coherence_score: float = 0.0

    @classmethod
    def uniform(cls, value: float, *, signature_valid: bool = True) -> TrustFactors:
        """Return factors with every numeric input set to ``value``."""
        return cls(
            signature_valid=signature_valid,
            social_distance=value,
            author_reputation=value,
            staking_tier=value,
            endorsement_quality=value,
            coherence_score=value,
        )

    def as_dict(self) -> dict[str, float]:
        """Return the five numeric factors keyed by name."""
        return {name: getattr(self, name) for name in FACTOR_NAMES}


# ---------------------------------------------------------------------------
# TrustWeights: fixed factor weights
# ---------------------------------------------------------------------------


WEIGHT_SUM_EPSILON: float = 1e-6


@dataclass(frozen=True)
class TrustWeights:
    """Weights for combining trust factors into a score.

    Social distance dominates (30%) because a personal connection is the
    hardest signal to fake. Reputation and endorsements contribute 20%
    each; staking and coherence 15% each.
    """

    social_distance: float = 0.30
    author_reputation: float = 0.20
    endorsement_quality: float = 0.20
    staking_tier: float = 0.15
    coherence_score: float = 0.15

    def validate(self) -> None:
        """Raise ValueError if weights are negative or do not sum to 1.0.

        Non-negative weights keep the score monotone: raising any single
        factor can never lower the result.
        """
        total = 0.0
        for name in FACTOR_NAMES:
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Weight '{name}' must be non-negative, got {value}")
            total += value
        if abs(total - 1.0) > WEIGHT_SUM_EPSILON:
            raise ValueError(
                f"Weights must sum to 1.0 (within epsilon={WEIGHT_SUM_EPSILON}), "
                f"got sum={total}"
            )


DEFAULT_WEIGHTS = TrustWeights()


# ---------------------------------------------------------------------------
# TrustAssessment: evaluation output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TrustAssessment:
    """Graded trust assessment for one envelope.

    Attributes:
        score: Numeric score in [-1, 1].
        level: Trust level derived from the score (or forced by a gate).
        factors: The inputs the score was computed from.
        evaluated_at: When the assessment was computed (UTC).
        ttl_seconds: How long the assessment stays cached; None is unbounded.
    """

    score: float
    level: TrustLevel
    factors: TrustFactors
    evaluated_at: datetime
    ttl_seconds: float | None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "score": round(self.score, 4),
            "level": self.level.name,
            "signature_valid": self.factors.signature_valid,
            "factors": {k: round(v, 4) for k, v in self.factors.as_dict().items()},
            "evaluated_at": self.evaluated_at.isoformat(),
            "ttl_seconds": self.ttl_seconds,
        }
