"""Capability vocabulary, decisions and risk levels.

Capabilities are plain string identifiers of the form ``<area>:<action>``.
``CAPABILITY_UNIVERSE`` lists the known vocabulary; the set is open, and
identifiers outside it are gated by the per-level defaults.

Decisions form a chain ordered by restrictiveness:

    ALLOW  <  CONFIRM  <  DENY

so the most restrictive of several decisions is simply their maximum.
"""

from __future__ import annotations

from enum import IntEnum


# ---------------------------------------------------------------------------
# CAPABILITY_UNIVERSE: the known capability identifiers
# ---------------------------------------------------------------------------

CAPABILITY_UNIVERSE: frozenset[str] = frozenset({
    "ui:notification",
    "ui:overlay",
    "network:http",
    "fs:read",
    "fs:write",
    "dsn:register-tool",
    "dsn:register-service",
    "dsn:publish-observation",
    "dsn:identity",
    "dsn:gmf-write",
    "crypto:sign",
    "crypto:encrypt",
    "wallet:read",
    "wallet:transfer",
    "system:shell",
})
"""Known capabilities an artifact may request.

- **ui:** notifications and overlays (lowest risk).
- **network:http**: outbound HTTP requests.
- **fs:** local file reads and writes.
- **dsn:** registering tools and services, publishing observations,
  acting as the node identity, writing to the shared memory field.
- **crypto:** signing and encrypting with the node's keys.
- **wallet:** reading balances and transferring funds.
- **system:shell**: arbitrary command execution (highest risk).
"""


# ---------------------------------------------------------------------------
# Decision and RiskLevel
# ---------------------------------------------------------------------------


class Decision(IntEnum):
    """Outcome of gating one capability.

    - **ALLOW**: grant without interaction.
    - **CONFIRM**: grant only after explicit out-of-band confirmation.
    - **DENY**: refuse; a loader should abort.
    """

    ALLOW = 0
    CONFIRM = 1
    DENY = 2


class RiskLevel(IntEnum):
    """Risk annotation attached to CONFIRM decisions."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return self.name.lower()
