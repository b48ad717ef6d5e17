"""Tests for TrustGate capability decisions."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from trust_fakes import FRIEND, SELF, STRANGER, CountingNetwork, make_envelope, make_harness
from trustgate.core.capabilities import CAPABILITY_UNIVERSE, Decision, RiskLevel
from trustgate.core.gate import REVOKED_RESULT, TrustGate
from trustgate.core.trust import TrustAssessment, TrustFactors, TrustLevel


def _assessment(level: TrustLevel) -> TrustAssessment:
    return TrustAssessment(
        score=0.5,
        level=level,
        factors=TrustFactors(signature_valid=True),
        evaluated_at=datetime.now(timezone.utc),
        ttl_seconds=60.0,
    )


@pytest.fixture
def gate() -> TrustGate:
    return TrustGate(make_harness().evaluator)


class TestCheck:
    """Single-capability decisions."""

    @pytest.mark.parametrize(
        "capability", sorted(CAPABILITY_UNIVERSE) + ["telepathy:read", ""]
    )
    def test_revoked_denies_everything(self, gate: TrustGate, capability: str) -> None:
        """REVOKED denies known, unknown and empty capability ids alike."""
        result = gate.check(capability, _assessment(TrustLevel.REVOKED))
        assert result == REVOKED_RESULT
        assert result.decision == Decision.DENY
        assert result.reason == "Trust revoked"

    def test_wallet_transfer_for_self_needs_confirmation(self, gate: TrustGate) -> None:
        result = gate.check("wallet:transfer", _assessment(TrustLevel.SELF))
        assert result.decision == Decision.CONFIRM
        assert result.risk == RiskLevel.HIGH
        assert result.reason == "high risk capability"

    def test_self_default_allows(self, gate: TrustGate) -> None:
        result = gate.check("fs:write", _assessment(TrustLevel.SELF))
        assert result.decision == Decision.ALLOW
        assert result.reason is None

    def test_unknown_capability_for_community(self, gate: TrustGate) -> None:
        result = gate.check("telepathy:read", _assessment(TrustLevel.COMMUNITY))
        assert result.decision == Decision.CONFIRM
        assert result.risk == RiskLevel.HIGH

    @pytest.mark.parametrize("capability", sorted(CAPABILITY_UNIVERSE))
    def test_never_looser_than_self(self, gate: TrustGate, capability: str) -> None:
        """Lower trust never yields a less restrictive decision."""
        levels = [TrustLevel.UNKNOWN, TrustLevel.COMMUNITY, TrustLevel.VOUCHED, TrustLevel.SELF]
        decisions = [gate.check(capability, _assessment(lvl)).decision for lvl in levels]
        assert decisions == sorted(decisions, reverse=True)


class TestCheckAll:
    """Whole-envelope gating."""

    def test_one_result_per_requested_capability(self, gate: TrustGate) -> None:
        caps = ["ui:notification", "fs:write", "network:http", "mystery:op"]
        envelope = make_envelope(STRANGER, capabilities=caps)
        results = gate.check_all(envelope, _assessment(TrustLevel.UNKNOWN))
        assert list(results) == sorted(caps)
        assert results["ui:notification"].decision == Decision.CONFIRM
        assert results["fs:write"].decision == Decision.DENY
        assert results["mystery:op"].decision == Decision.DENY

    def test_no_capabilities(self, gate: TrustGate) -> None:
        envelope = make_envelope(STRANGER)
        assert gate.check_all(envelope, _assessment(TrustLevel.SELF)) == {}


class TestAsyncDelegation:
    """evaluate and check_capability go through the evaluator."""

    def test_evaluate_delegates(self) -> None:
        harness = make_harness()
        gate = TrustGate(harness.evaluator)
        assert gate.evaluator is harness.evaluator
        result = asyncio.run(gate.evaluate(make_envelope(SELF)))
        assert result.level == TrustLevel.SELF
        assert harness.verifier.calls == 1

    def test_check_capability_for_friend(self) -> None:
        harness = make_harness(CountingNetwork(friends=[FRIEND]))
        gate = TrustGate(harness.evaluator)
        # Friend with default data scores COMMUNITY.
        result = asyncio.run(gate.check_capability(make_envelope(FRIEND), "fs:read"))
        assert result.decision == Decision.CONFIRM
        assert result.risk == RiskLevel.MEDIUM

    def test_check_capability_invalid_signature(self) -> None:
        harness = make_harness(valid=False)
        gate = TrustGate(harness.evaluator)
        result = asyncio.run(gate.check_capability(make_envelope(SELF), "ui:notification"))
        assert result == REVOKED_RESULT
