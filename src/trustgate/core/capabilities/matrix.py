"""Capability matrix: per-capability rules layered over per-level defaults.

``DEFAULT_RULES`` is total over trust levels. ``CAPABILITY_MATRIX`` is
sparse: it only lists the cells where a capability deserves different
treatment from the default, relaxing low-risk UI capabilities and
tightening wallet transfers and shell access.

``resolve_rule`` is the total lookup: the sparse cell if present, else
the level default. It does not handle REVOKED specially; that hard rule
lives in ``TrustGate.check``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from trustgate.core.capabilities.levels import Decision, RiskLevel
from trustgate.core.capabilities.models import MatrixRule
from trustgate.core.trust.models import TrustLevel

_ALLOW = MatrixRule(Decision.ALLOW)
_DENY = MatrixRule(Decision.DENY)


def _confirm(risk: RiskLevel) -> MatrixRule:
    return MatrixRule(Decision.CONFIRM, risk)


DEFAULT_RULES: Mapping[TrustLevel, MatrixRule] = MappingProxyType({
    TrustLevel.SELF: _ALLOW,
    TrustLevel.VOUCHED: _confirm(RiskLevel.MEDIUM),
    TrustLevel.COMMUNITY: _confirm(RiskLevel.HIGH),
    TrustLevel.UNKNOWN: _DENY,
    TrustLevel.REVOKED: _DENY,
})

_V, _C, _U, _S = (
    TrustLevel.VOUCHED,
    TrustLevel.COMMUNITY,
    TrustLevel.UNKNOWN,
    TrustLevel.SELF,
)

CAPABILITY_MATRIX: Mapping[str, Mapping[TrustLevel, MatrixRule]] = MappingProxyType({
    "ui:notification": {_V: _ALLOW, _C: _ALLOW, _U: _confirm(RiskLevel.LOW)},
    "ui:overlay": {_V: _ALLOW, _C: _ALLOW, _U: _confirm(RiskLevel.LOW)},
    "network:http": {
        _V: _ALLOW,
        _C: _confirm(RiskLevel.MEDIUM),
        _U: _confirm(RiskLevel.HIGH),
    },
    "fs:read": {
        _V: _ALLOW,
        _C: _confirm(RiskLevel.MEDIUM),
        _U: _confirm(RiskLevel.HIGH),
    },
    "fs:write": {
        _V: _confirm(RiskLevel.MEDIUM),
        _C: _confirm(RiskLevel.HIGH),
        _U: _DENY,
    },
    "dsn:register-tool": {_V: _ALLOW, _C: _confirm(RiskLevel.MEDIUM), _U: _DENY},
    "dsn:register-service": {_V: _ALLOW, _C: _confirm(RiskLevel.MEDIUM), _U: _DENY},
    "dsn:publish-observation": {_V: _ALLOW, _C: _confirm(RiskLevel.MEDIUM), _U: _DENY},
    "dsn:identity": {_V: _confirm(RiskLevel.HIGH), _C: _DENY, _U: _DENY},
    "dsn:gmf-write": {
        _V: _confirm(RiskLevel.MEDIUM),
        _C: _confirm(RiskLevel.HIGH),
        _U: _DENY,
    },
    "crypto:sign": {_V: _confirm(RiskLevel.MEDIUM), _C: _DENY, _U: _DENY},
    "crypto:encrypt": {_V: _confirm(RiskLevel.MEDIUM), _C: _DENY, _U: _DENY},
    "wallet:read": {_V: _ALLOW, _C: _confirm(RiskLevel.MEDIUM), _U: _DENY},
    "wallet:transfer": {
        _S: _confirm(RiskLevel.HIGH),
        _V: _confirm(RiskLevel.CRITICAL),
        _C: _DENY,
        _U: _DENY,
    },
    "system:shell": {
        _S: _confirm(RiskLevel.MEDIUM),
        _V: _DENY,
        _C: _DENY,
        _U: _DENY,
    },
})


def resolve_rule(capability: str, level: TrustLevel) -> MatrixRule:
    """Return the rule for ``capability`` at ``level``.

    Unknown capabilities and unlisted cells fall back to
    ``DEFAULT_RULES[level]``.
    """
    cells = CAPABILITY_MATRIX.get(capability)
    if cells is not None:
        rule = cells.get(level)
        if rule is not None:
            return rule
    return DEFAULT_RULES[level]
