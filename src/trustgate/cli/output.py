"""Rich output formatting helpers for the TrustGate CLI.

Provides consistent, level-colored terminal output for trust assessments,
capability decisions and the capability matrix.

Color Mapping:
    SELF = bold green, VOUCHED = green, COMMUNITY = cyan,
    UNKNOWN = yellow, REVOKED = bold red
    ALLOW = green, CONFIRM = yellow, DENY = bold red
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trustgate.core.capabilities import CapabilityCheckResult, Decision
from trustgate.core.trust import TrustAssessment, TrustLevel

_TRUST_LEVEL_STYLES: dict[TrustLevel, str] = {
    TrustLevel.SELF: "bold green",
    TrustLevel.VOUCHED: "green",
    TrustLevel.COMMUNITY: "cyan",
    TrustLevel.UNKNOWN: "yellow",
    TrustLevel.REVOKED: "bold red",
}

_DECISION_STYLES: dict[Decision, str] = {
    Decision.ALLOW: "green",
    Decision.CONFIRM: "yellow",
    Decision.DENY: "bold red",
}

console = Console()


def trust_level_style(level: TrustLevel) -> str:
    """Return the Rich style string for a given trust level."""
    return _TRUST_LEVEL_STYLES.get(level, "white")


def decision_style(decision: Decision) -> str:
    """Return the Rich style string for a given decision."""
    return _DECISION_STYLES.get(decision, "white")


def print_assessment(content_hash: str, assessment: TrustAssessment) -> None:
    """Print a formatted trust assessment with its factor breakdown.

    Args:
        content_hash: Hash of the assessed envelope.
        assessment: The computed assessment.
    """
    level_text = Text(assessment.level.name, style=trust_level_style(assessment.level))
    header = Text.assemble(("Artifact: ", "bold"), (content_hash, ""))
    console.print(Panel(header, title="Trust Assessment"))
    console.print(f"  Score:           [bold]{assessment.score:.3f}[/bold]")
    console.print("  Trust Level:     ", level_text)
    signature = "valid" if assessment.factors.signature_valid else "INVALID"
    console.print(f"  Signature:       {signature}")

    factor_table = Table(title="Factor Breakdown", show_header=True)
    factor_table.add_column("Factor", style="bold")
    factor_table.add_column("Value", justify="right")
    for name, value in assessment.factors.as_dict().items():
        factor_table.add_row(name.replace("_", " ").capitalize(), f"{value:.3f}")
    console.print(factor_table)


def print_capability_results(results: Mapping[str, CapabilityCheckResult]) -> None:
    """Print per-capability decisions.

    Args:
        results: Capability -> decision, as returned by ``check_all``.
    """
    if not results:
        console.print("[dim]No capabilities requested.[/dim]")
        return

    table = Table(title="Capability Decisions", show_header=True, header_style="bold")
    table.add_column("Capability", style="bold")
    table.add_column("Decision", justify="center")
    table.add_column("Reason", style="dim")
    for capability, result in results.items():
        table.add_row(
            capability,
            Text(result.decision.name, style=decision_style(result.decision)),
            result.reason or "-",
        )
    console.print(table)

    for capability, result in results.items():
        if result.decision == Decision.DENY:
            console.print(
                f"[red]blocked: capability {capability} requires higher trust[/red]"
            )


def print_matrix(rows: Mapping[str, Mapping[TrustLevel, CapabilityCheckResult]]) -> None:
    """Print the effective decision for each capability at each level."""
    levels = sorted(TrustLevel, reverse=True)
    table = Table(title="Capability Matrix", show_header=True, header_style="bold")
    table.add_column("Capability", style="bold")
    for level in levels:
        table.add_column(level.name, justify="center")
    for capability, cells in rows.items():
        rendered = []
        for level in levels:
            result = cells[level]
            label = result.decision.name
            if result.risk is not None:
                label = f"{label} ({result.risk.label})"
            rendered.append(Text(label, style=decision_style(result.decision)))
        table.add_row(capability, *rendered)
    console.print(table)

