"""Trust gate: capability authorization over trust assessments.

The gate does not derive trust itself. ``check`` and ``check_all`` are
pure, synchronous functions over an already computed ``TrustAssessment``;
``evaluate`` and ``check_capability`` delegate the async part to a
``TrustEvaluator``.

Hard rule: a REVOKED assessment denies every capability, bypassing the
matrix entirely. Otherwise the sparse capability matrix is consulted,
falling back to the per-level default.

Consumers enforce the result: DENY refuses the capability (a loader
should abort), CONFIRM grants only after explicit confirmation, ALLOW
grants silently.
"""

from __future__ import annotations

from trustgate.core.capabilities.levels import Decision
from trustgate.core.capabilities.matrix import resolve_rule
from trustgate.core.capabilities.models import CapabilityCheckResult
from trustgate.core.envelope.models import SignedEnvelope
from trustgate.core.trust.evaluator import TrustEvaluator
from trustgate.core.trust.models import TrustAssessment, TrustLevel

REVOKED_RESULT = CapabilityCheckResult(decision=Decision.DENY, reason="Trust revoked")


def gate_capability(capability: str, assessment: TrustAssessment) -> CapabilityCheckResult:
    """Decide one capability for an assessment; REVOKED always denies."""
    if assessment.level == TrustLevel.REVOKED:
        return REVOKED_RESULT
    return CapabilityCheckResult.from_rule(resolve_rule(capability, assessment.level))


class TrustGate:
    """Maps (capability, trust assessment) to an authorization decision.

    Args:
        evaluator: Evaluator used by ``evaluate`` and ``check_capability``.
    """

    def __init__(self, evaluator: TrustEvaluator) -> None:
        self._evaluator = evaluator

    @property
    def evaluator(self) -> TrustEvaluator:
        return self._evaluator

    async def evaluate(self, envelope: SignedEnvelope) -> TrustAssessment:
        """Evaluate an envelope's trust. Delegates to the evaluator."""
        return await self._evaluator.evaluate(envelope)

    async def check_capability(
        self, envelope: SignedEnvelope, capability: str
    ) -> CapabilityCheckResult:
        """Evaluate the envelope, then gate a single capability."""
        assessment = await self.evaluate(envelope)
        return self.check(capability, assessment)

    def check(self, capability: str, assessment: TrustAssessment) -> CapabilityCheckResult:
        """Gate one capability against an assessment.

        Args:
            capability: Capability identifier; unknown ones use level defaults.
            assessment: Precomputed trust assessment.

        Returns:
            The decision with its risk annotation, if any.
        """
        return gate_capability(capability, assessment)

    def check_all(
        self, envelope: SignedEnvelope, assessment: TrustAssessment
    ) -> dict[str, CapabilityCheckResult]:
        """Gate every capability the envelope requests.

        Returns exactly one entry per requested capability, in sorted order.
        """
        return {
            capability: self.check(capability, assessment)
            for capability in sorted(envelope.requested_capabilities)
        }
