"""TrustGate CLI - Trust scoring and capability gating for signed artifacts.

Entry point for the ``trustgate`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    evaluate - Compute the trust assessment for an envelope.
    check    - Decide each capability an envelope requests.
    matrix   - Show the capability matrix across trust levels.

Usage::

    trustgate evaluate plugin.envelope.json --network network.yaml
    trustgate check plugin.envelope.json --network network.yaml --format json
    trustgate check plugin.envelope.json --node-url http://localhost:8765
    trustgate check plugin.envelope.json --network network.yaml --vouch-author a1b2c3
    trustgate matrix
"""

from __future__ import annotations

import logging

import click

from trustgate import __version__
from trustgate.cli.check_cmd import check_command
from trustgate.cli.evaluate_cmd import evaluate_command
from trustgate.cli.matrix_cmd import matrix_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """TrustGate: provenance trust scoring and capability gating.

    Score signed artifacts from peers of unknown provenance and decide,
    capability by capability, whether to allow, confirm or deny.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register all subcommands
cli.add_command(evaluate_command)
cli.add_command(check_command)
cli.add_command(matrix_command)
