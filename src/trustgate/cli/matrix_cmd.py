"""``trustgate matrix`` - Show the effective capability matrix.

Lists the decision for every known capability at every trust level, as
``TrustGate.check`` would return it.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import click

from trustgate.core.capabilities import CAPABILITY_UNIVERSE, CapabilityCheckResult
from trustgate.core.gate import gate_capability
from trustgate.core.trust import TrustAssessment, TrustFactors, TrustLevel


def effective_matrix() -> dict[str, dict[TrustLevel, CapabilityCheckResult]]:
    """Compute capability -> level -> result for the known vocabulary."""
    now = datetime.now(timezone.utc)
    probes = {
        level: TrustAssessment(
            score=0.0,
            level=level,
            factors=TrustFactors(signature_valid=True),
            evaluated_at=now,
            ttl_seconds=None,
        )
        for level in TrustLevel
    }
    return {
        capability: {level: gate_capability(capability, probe) for level, probe in probes.items()}
        for capability in sorted(CAPABILITY_UNIVERSE)
    }


@click.command("matrix")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def matrix_command(output_format: str) -> None:
    """Print the decision for every capability at every trust level."""
    rows = effective_matrix()
    if output_format == "json":
        click.echo(json.dumps({
            capability: {level.name: result.to_dict() for level, result in cells.items()}
            for capability, cells in rows.items()
        }, indent=2))
    else:
        from trustgate.cli.output import print_matrix
        print_matrix(rows)
