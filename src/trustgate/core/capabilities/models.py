"""Matrix rules and capability check results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from trustgate.core.capabilities.levels import Decision, RiskLevel


@dataclass(frozen=True)
class MatrixRule:
    """One cell of the capability matrix: a decision and optional risk."""

    decision: Decision
    risk: RiskLevel | None = None


@dataclass(frozen=True)
class CapabilityCheckResult:
    """Decision for a single capability.

    Attributes:
        decision: ALLOW, CONFIRM or DENY.
        risk: Risk annotation, set for risk-rated rules.
        reason: Human-readable explanation for prompts and logs.
    """

    decision: Decision
    risk: RiskLevel | None = None
    reason: str | None = None

    @classmethod
    def from_rule(cls, rule: MatrixRule) -> CapabilityCheckResult:
        reason = f"{rule.risk.label} risk capability" if rule.risk is not None else None
        return cls(decision=rule.decision, risk=rule.risk, reason=reason)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "decision": self.decision.name,
            "risk": self.risk.label if self.risk is not None else None,
            "reason": self.reason,
        }


def most_restrictive(results: Mapping[str, CapabilityCheckResult]) -> Decision:
    """Return the strictest decision across results (ALLOW when empty)."""
    return max((r.decision for r in results.values()), default=Decision.ALLOW)


def denied(results: Mapping[str, CapabilityCheckResult]) -> list[str]:
    """Return the capabilities that were denied, sorted."""
    return sorted(c for c, r in results.items() if r.decision == Decision.DENY)


def needs_confirmation(results: Mapping[str, CapabilityCheckResult]) -> list[str]:
    """Return the capabilities that require confirmation, sorted."""
    return sorted(c for c, r in results.items() if r.decision == Decision.CONFIRM)
