"""``trustgate evaluate <envelope>`` - Compute and display a trust assessment.

Exit Codes:
    0 - Assessment computed and displayed.
    2 - Envelope, network or config could not be loaded.
"""

from __future__ import annotations

import json
import sys

import click

from trustgate.cli.common import build_gate, fail, load_envelope, run_async, source_options
from trustgate.exceptions import TrustGateError


@click.command("evaluate")
@click.argument("envelope_path", type=click.Path(exists=True, dir_okay=False))
@source_options
def evaluate_command(
    envelope_path: str,
    network_path: str | None,
    node_url: str | None,
    config_path: str | None,
    output_format: str,
) -> None:
    """Compute the trust assessment for a signed envelope.

    Reads the envelope JSON at ENVELOPE_PATH and scores it against the
    trust data in --network (YAML) or served by --node-url.
    """
    try:
        envelope = load_envelope(envelope_path)
        gate = build_gate(network_path, node_url, config_path)
    except TrustGateError as exc:
        fail(str(exc), output_format)
        return

    assessment = run_async(gate.evaluate(envelope))

    if output_format == "json":
        data = {"content_hash": envelope.content_hash, **assessment.to_dict()}
        click.echo(json.dumps(data, indent=2))
    else:
        from trustgate.cli.output import print_assessment
        print_assessment(envelope.content_hash, assessment)

    sys.exit(0)
