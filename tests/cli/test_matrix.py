"""Tests for ``trustgate matrix``."""

from __future__ import annotations

import json

from click.testing import CliRunner

from trustgate.cli.main import cli
from trustgate.cli.matrix_cmd import effective_matrix
from trustgate.core.capabilities import CAPABILITY_UNIVERSE, Decision
from trustgate.core.trust import TrustLevel


class TestEffectiveMatrix:
    """The computed grid."""

    def test_covers_universe_and_levels(self) -> None:
        rows = effective_matrix()
        assert list(rows) == sorted(CAPABILITY_UNIVERSE)
        assert all(set(cells) == set(TrustLevel) for cells in rows.values())

    def test_revoked_column_denies(self) -> None:
        rows = effective_matrix()
        assert all(c[TrustLevel.REVOKED].decision == Decision.DENY for c in rows.values())


class TestMatrixCommand:
    """Text and JSON rendering."""

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["matrix", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["wallet:transfer"]["SELF"]["decision"] == "CONFIRM"
        assert data["wallet:transfer"]["VOUCHED"]["risk"] == "critical"
        assert data["system:shell"]["VOUCHED"]["decision"] == "DENY"

    def test_text(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["matrix"])
        assert result.exit_code == 0
        assert "Capability Matrix" in result.output
