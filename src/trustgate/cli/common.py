"""Shared helpers for CLI commands: loading inputs and wiring the gate."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click

from trustgate.config import TrustConfig, load_config
from trustgate.core.envelope import SignedEnvelope
from trustgate.core.gate import TrustGate
from trustgate.core.trust import TrustEvaluator
from trustgate.exceptions import TrustGateError
from trustgate.providers import ContentHashVerifier, StaticNetwork


def run_async(coro: object) -> Any:
    """Run an async coroutine in a synchronous context."""
    return asyncio.run(coro)  # type: ignore[arg-type]


def fail(message: str, output_format: str) -> None:
    """Report an input error in the requested format and exit with code 2."""
    if output_format == "json":
        click.echo(json.dumps({"error": message}))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(2)


def load_envelope(path: str) -> SignedEnvelope:
    """Read a JSON envelope document from disk.

    Raises:
        TrustGateError: If the file is unreadable, not JSON, or malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise TrustGateError(f"Cannot read envelope {path}: {exc}") from exc
    except ValueError as exc:
        raise TrustGateError(f"Envelope {path} is not valid JSON: {exc}") from exc
    return SignedEnvelope.from_dict(data)


def build_gate(
    network_path: str | None,
    node_url: str | None,
    config_path: str | None,
) -> TrustGate:
    """Wire a TrustGate from a network file or a node URL.

    Raises:
        TrustGateError: If neither or both sources are given, or loading fails.
    """
    if bool(network_path) == bool(node_url):
        raise TrustGateError("Provide exactly one of --network or --node-url")

    config = load_config(config_path) if config_path else TrustConfig()
    verifier = ContentHashVerifier()

    if node_url:
        from trustgate.providers.http_client import _ensure_httpx
        from trustgate.providers.node import NodeTrustAdapter

        _ensure_httpx()
        adapter = NodeTrustAdapter(node_url)
        evaluator = TrustEvaluator(
            verifier, adapter, adapter, adapter, adapter, config=config
        )
    else:
        network = StaticNetwork.load(network_path)  # type: ignore[arg-type]
        evaluator = TrustEvaluator(
            verifier,
            network.identity_provider(),
            network,
            network,
            network,
            config=config,
        )
    return TrustGate(evaluator)


def source_options(func: Any) -> Any:
    """Attach the shared --network / --node-url / --config / --format options."""
    func = click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format (default: text).",
    )(func)
    func = click.option(
        "--config", "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML file overriding thresholds, cache TTLs and staking tiers.",
    )(func)
    func = click.option(
        "--node-url",
        default=None,
        help="Read trust data from a node's HTTP API.",
    )(func)
    func = click.option(
        "--network", "network_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML file describing identity, friends and reputation.",
    )(func)
    return func
