"""Trust evaluator: turns a signed envelope into a graded assessment.

Evaluation runs a fixed sequence of short-circuiting gates:

1. **Cache** -- an unexpired assessment for the content hash is returned
   verbatim, with no provider calls.
2. **Signature** -- an invalid (or unverifiable) signature finalizes
   REVOKED with score -1.
3. **Self** -- an envelope signed by the local identity finalizes SELF
   with score 1.0 without touching any data provider.
4. **Override** -- an artifact override, else an author override, forces
   REVOKED (-1.0) or VOUCHED (0.9).
5. **Weighted scoring** -- five factors from the social graph, reputation
   and domain providers, combined with fixed weights.
6. **Level mapping** -- score against descending thresholds, topping out
   at VOUCHED. Only the self gate yields SELF.
7. **Finalize** -- build, cache with a level-dependent TTL (never past an
   applied override's expiry), return.

Provider failures never escape: the affected factor scores 0, because the
absence of trust data must never read as trust. Only structurally invalid
envelopes raise (``EnvelopeError``).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, TypeVar

from trustgate.config import TrustConfig
from trustgate.core.envelope.models import (
    AuthorIdentity,
    SignedEnvelope,
    VerificationResult,
)
from trustgate.exceptions import EnvelopeError
from .cache import AssessmentCache
from .models import (
    DEFAULT_WEIGHTS,
    OVERRIDE_VOUCHED_SCORE,
    SOCIAL_DISTANCE_FRIEND,
    SOCIAL_DISTANCE_FRIEND_OF_FRIEND,
    SOCIAL_DISTANCE_NONE,
    SOCIAL_DISTANCE_SHARED_DOMAIN,
    TrustAssessment,
    TrustFactors,
    TrustLevel,
)
from .overrides import OverrideStore, TrustOverride
from .providers import (
    DomainOverlapProvider,
    EnvelopeVerifier,
    Friend,
    IdentityProvider,
    ReputationProvider,
    SocialGraphProvider,
)
from .scoring import (
    clamp_unit,
    endorsement_quality,
    score_to_level,
    staking_score,
    weighted_score,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REVOKED_FACTORS = TrustFactors.uniform(0.0, signature_valid=True)
_INVALID_SIGNATURE_FACTORS = TrustFactors.uniform(0.0, signature_valid=False)
_SELF_FACTORS = TrustFactors.uniform(1.0)
_VOUCHED_FACTORS = TrustFactors.uniform(OVERRIDE_VOUCHED_SCORE)


class TrustEvaluator:
    """Computes and caches trust assessments for signed envelopes.

    The evaluator owns two pieces of mutable state, the assessment cache
    and the override store; both are lock-guarded so one evaluator can be
    shared between threads. Concurrent evaluations of the same uncached
    hash may each run the full computation.

    Args:
        verifier: Signature verifier.
        identity: Source of the local node's public identity.
        social_graph: Friend and friend-of-friend lookups.
        reputation: Reputation, staking tier and coherence lookups.
        domains: Shared-domain lookups.
        config: Thresholds, cache TTLs and staking table. Defaults apply
            when omitted.
        cache: Assessment cache; a fresh one is created when omitted.
    """

    def __init__(
        self,
        verifier: EnvelopeVerifier,
        identity: IdentityProvider,
        social_graph: SocialGraphProvider,
        reputation: ReputationProvider,
        domains: DomainOverlapProvider,
        config: TrustConfig | None = None,
        cache: AssessmentCache | None = None,
    ) -> None:
        self._verifier = verifier
        self._identity = identity
        self._social_graph = social_graph
        self._reputation = reputation
        self._domains = domains
        self._config = config or TrustConfig()
        self._config.validate()
        self._weights = DEFAULT_WEIGHTS
        self._weights.validate()
        self._cache = cache if cache is not None else AssessmentCache()
        self._overrides = OverrideStore()

    @property
    def config(self) -> TrustConfig:
        return self._config

    # -- Evaluation --

    async def evaluate(self, envelope: SignedEnvelope) -> TrustAssessment:
        """Evaluate the trust level of a signed envelope.

        Args:
            envelope: The envelope to assess.

        Returns:
            A ``TrustAssessment``; never raises for missing trust data.

        Raises:
            EnvelopeError: If ``envelope`` is structurally invalid.
        """
        if not isinstance(envelope, SignedEnvelope):
            raise EnvelopeError(
                f"Expected a SignedEnvelope, got {type(envelope).__name__}"
            )
        envelope.validate()
        content_hash = envelope.content_hash

        cached = self._cache.get(content_hash)
        if cached is not None:
            return cached

        if not await self._signature_valid(envelope):
            logger.info("Envelope %s revoked: invalid signature", content_hash)
            return self._finalize(
                content_hash, TrustLevel.REVOKED, -1.0, _INVALID_SIGNATURE_FACTORS
            )

        own = await self._guarded(
            "identity.get_public_identity", self._identity.get_public_identity, None
        )
        if isinstance(own, AuthorIdentity) and own.pub == envelope.author.pub:
            return self._finalize(content_hash, TrustLevel.SELF, 1.0, _SELF_FACTORS)

        override = self._overrides.lookup(content_hash, envelope.author.fingerprint)
        if override is not None:
            if override.revokes:
                logger.info(
                    "Envelope %s revoked: override on %s", content_hash, override.key
                )
                return self._finalize(
                    content_hash,
                    TrustLevel.REVOKED,
                    -1.0,
                    _REVOKED_FACTORS,
                    max_ttl=override.seconds_remaining(),
                )
            return self._finalize(
                content_hash,
                TrustLevel.VOUCHED,
                OVERRIDE_VOUCHED_SCORE,
                _VOUCHED_FACTORS,
                max_ttl=override.seconds_remaining(),
            )

        factors = await self._compute_factors(envelope)
        score = weighted_score(factors, self._weights)
        level = score_to_level(score, self._config.thresholds)
        if level == TrustLevel.REVOKED:
            logger.info("Envelope %s revoked: score %.3f", content_hash, score)
        return self._finalize(content_hash, level, score, factors)

    # -- Override management --

    def set_override(self, override: TrustOverride) -> None:
        """Add or replace an override and drop cached assessments."""
        self._overrides.set(override)
        self._cache.clear()
        logger.info(
            "Trust override set on %s: %s", override.key, override.trust_level.name
        )

    def remove_override(self, key: str) -> bool:
        """Remove the override stored under ``key``.

        ``key`` is a content hash or ``author:<fingerprint>``. Removing a
        missing key is a no-op. Returns True if an override was removed.
        """
        removed = self._overrides.remove(key)
        if removed:
            self._cache.clear()
            logger.info("Trust override removed from %s", key)
        return removed

    def get_overrides(self) -> list[TrustOverride]:
        """Return all active overrides."""
        return self._overrides.list()

    # -- Cache management --

    def clear_cache(self) -> None:
        """Empty the assessment cache immediately."""
        self._cache.clear()

    # -- Gates --

    async def _signature_valid(self, envelope: SignedEnvelope) -> bool:
        try:
            result = await self._verifier.verify(envelope)
        except Exception:
            logger.warning(
                "Signature verification failed for %s",
                envelope.content_hash,
                exc_info=True,
            )
            return False
        if not isinstance(result, VerificationResult):
            logger.warning(
                "Verifier returned %s for %s; treating signature as invalid",
                type(result).__name__,
                envelope.content_hash,
            )
            return False
        if not result.valid and result.error:
            logger.debug("Signature invalid for %s: %s", envelope.content_hash, result.error)
        return bool(result.valid)

    # -- Weighted scoring --

    async def _compute_factors(self, envelope: SignedEnvelope) -> TrustFactors:
        author = envelope.author
        friends = await self._guarded(
            "social_graph.get_friends", self._social_graph.get_friends, []
        )
        friend_keys = {f.public_key for f in friends if isinstance(f, Friend)}

        social = await self._social_distance(author, friends, friend_keys)
        reputation = clamp_unit(
            await self._guarded(
                "reputation.get_reputation",
                lambda: self._reputation.get_reputation(author.pub),
                0.0,
            )
        )
        endorsements = endorsement_quality(envelope.endorsements, friend_keys)
        tier = await self._guarded(
            "reputation.get_staking_tier",
            lambda: self._reputation.get_staking_tier(author.pub),
            None,
        )
        staking = staking_score(tier, self._config.staking_tier_scores)
        coherence = clamp_unit(
            await self._guarded(
                "reputation.get_coherence_score",
                lambda: self._reputation.get_coherence_score(envelope.content_hash),
                0.0,
            )
        )

        return TrustFactors(
            signature_valid=True,
            social_distance=social,
            author_reputation=reputation,
            staking_tier=staking,
            endorsement_quality=endorsements,
            coherence_score=coherence,
        )

    async def _social_distance(
        self,
        author: AuthorIdentity,
        friends: list[Friend],
        friend_keys: set[str],
    ) -> float:
        """Score graph proximity: friend, shared domain, friend-of-friend."""
        if author.pub in friend_keys:
            return SOCIAL_DISTANCE_FRIEND

        common = await self._guarded(
            "domains.get_common_domains",
            lambda: self._domains.get_common_domains(author.fingerprint),
            [],
        )
        if common:
            return SOCIAL_DISTANCE_SHARED_DOMAIN

        # Sequential with early exit to bound the number of provider calls.
        for friend in friends:
            fofs = await self._guarded(
                "social_graph.get_friends_of_friend",
                lambda: self._social_graph.get_friends_of_friend(friend.public_key),
                [],
            )
            if any(fof.public_key == author.pub for fof in fofs):
                return SOCIAL_DISTANCE_FRIEND_OF_FRIEND

        return SOCIAL_DISTANCE_NONE

    async def _guarded(
        self,
        call: str,
        fetch: Callable[[], Awaitable[T]],
        default: T,
    ) -> T:
        """Await a provider call, returning ``default`` if it raises."""
        try:
            return await fetch()
        except Exception:
            logger.warning("Provider call %s failed; scoring as 0", call, exc_info=True)
            return default

    # -- Finalize --

    def _finalize(
        self,
        content_hash: str,
        level: TrustLevel,
        score: float,
        factors: TrustFactors,
        max_ttl: float | None = None,
    ) -> TrustAssessment:
        """Build and cache an assessment.

        ``max_ttl`` bounds the level TTL, so an assessment forced by an
        expiring override leaves the cache when the override does.
        """
        ttl = self._config.ttl_for(level)
        if max_ttl is not None:
            ttl = max_ttl if ttl is None else min(ttl, max_ttl)
        assessment = TrustAssessment(
            score=score,
            level=level,
            factors=factors,
            evaluated_at=datetime.now(timezone.utc),
            ttl_seconds=ttl,
        )
        self._cache.put(content_hash, assessment)
        logger.debug(
            "Assessed %s: level=%s score=%.3f", content_hash, level.name, score
        )
        return assessment
