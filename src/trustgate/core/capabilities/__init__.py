"""Capability vocabulary and the trust-level capability matrix.

Submodules
----------
- ``levels``: CAPABILITY_UNIVERSE, Decision, RiskLevel.
- ``models``: MatrixRule, CapabilityCheckResult, aggregate helpers.
- ``matrix``: DEFAULT_RULES, CAPABILITY_MATRIX, resolve_rule.
"""

from trustgate.core.capabilities.levels import CAPABILITY_UNIVERSE, Decision, RiskLevel
from trustgate.core.capabilities.models import (
    CapabilityCheckResult,
    MatrixRule,
    denied,
    most_restrictive,
    needs_confirmation,
)
from trustgate.core.capabilities.matrix import (
    CAPABILITY_MATRIX,
    DEFAULT_RULES,
    resolve_rule,
)

__all__ = [
    "CAPABILITY_MATRIX",
    "CAPABILITY_UNIVERSE",
    "CapabilityCheckResult",
    "DEFAULT_RULES",
    "Decision",
    "MatrixRule",
    "RiskLevel",
    "denied",
    "most_restrictive",
    "needs_confirmation",
    "resolve_rule",
]
