"""``trustgate check <envelope>`` - Gate an envelope's requested capabilities.

Evaluates trust, applies any overrides given on the command line, and
reports the decision for every requested capability.

Exit Codes:
    0 - No capability denied (some may need confirmation).
    1 - At least one capability denied.
    2 - Envelope, network or config could not be loaded.
"""

from __future__ import annotations

import json
import sys

import click

from trustgate.cli.common import build_gate, fail, load_envelope, run_async, source_options
from trustgate.core.capabilities import denied, most_restrictive
from trustgate.core.gate import TrustGate
from trustgate.core.trust import OverrideTarget, TrustLevel, TrustOverride
from trustgate.exceptions import TrustGateError


def _apply_overrides(
    gate: TrustGate,
    revoke_authors: tuple[str, ...],
    vouch_authors: tuple[str, ...],
    revoke_artifacts: tuple[str, ...],
) -> None:
    evaluator = gate.evaluator
    for fingerprint in vouch_authors:
        evaluator.set_override(
            TrustOverride(OverrideTarget.author(fingerprint), TrustLevel.VOUCHED)
        )
    for fingerprint in revoke_authors:
        evaluator.set_override(
            TrustOverride(OverrideTarget.author(fingerprint), TrustLevel.REVOKED)
        )
    for content_hash in revoke_artifacts:
        evaluator.set_override(
            TrustOverride(OverrideTarget.artifact(content_hash), TrustLevel.REVOKED)
        )


@click.command("check")
@click.argument("envelope_path", type=click.Path(exists=True, dir_okay=False))
@source_options
@click.option("--revoke-author", multiple=True, help="Revoke an author by fingerprint.")
@click.option("--vouch-author", multiple=True, help="Vouch for an author by fingerprint.")
@click.option("--revoke-artifact", multiple=True, help="Revoke an artifact by content hash.")
def check_command(
    envelope_path: str,
    network_path: str | None,
    node_url: str | None,
    config_path: str | None,
    output_format: str,
    revoke_author: tuple[str, ...],
    vouch_author: tuple[str, ...],
    revoke_artifact: tuple[str, ...],
) -> None:
    """Decide ALLOW / CONFIRM / DENY for each capability an envelope requests.

    Exit code 0 when nothing is denied, 1 when any capability is denied,
    2 on input errors.
    """
    try:
        envelope = load_envelope(envelope_path)
        gate = build_gate(network_path, node_url, config_path)
        _apply_overrides(gate, revoke_author, vouch_author, revoke_artifact)
    except TrustGateError as exc:
        fail(str(exc), output_format)
        return

    assessment = run_async(gate.evaluate(envelope))
    results = gate.check_all(envelope, assessment)

    if output_format == "json":
        click.echo(json.dumps({
            "content_hash": envelope.content_hash,
            "level": assessment.level.name,
            "score": round(assessment.score, 4),
            "decision": most_restrictive(results).name,
            "capabilities": {c: r.to_dict() for c, r in results.items()},
        }, indent=2))
    else:
        from trustgate.cli.output import print_assessment, print_capability_results
        print_assessment(envelope.content_hash, assessment)
        print_capability_results(results)

    sys.exit(1 if denied(results) else 0)
