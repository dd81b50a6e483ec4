"""Unit tests for the seek token CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from catalog_service.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestEncode:
    def test_keyed_anchor(self, runner: CliRunner):
        result = runner.invoke(cli, ["seek", "encode", "p", "a", "a", "--key", "e", "--id", "5"])

        assert result.exit_code == 0
        assert result.output.strip() == "cCxhLGEsZSwsNQ"

    def test_first_page(self, runner: CliRunner):
        result = runner.invoke(cli, ["seek", "encode", "m", "d", "s"])

        assert result.exit_code == 0
        assert result.output.strip() == "bSxkLHMsLCw"

    def test_ranked_anchor(self, runner: CliRunner):
        result = runner.invoke(
            cli, ["seek", "encode", "qkorps", "d", "r", "--rank", "0.5", "--id", "3"]
        )

        assert result.exit_code == 0
        decoded = runner.invoke(cli, ["seek", "decode", result.output.strip()])
        assert "qkorps,d,r,,0.5,3" in decoded.output

    @pytest.mark.parametrize(
        "args",
        [
            ["p", "a", "a", "--key", "e"],
            ["p", "a", "r", "--rank", "1", "--id", "5"],
            ["x", "a", "s"],
            ["p", "sideways", "s"],
            ["qkorps", "d", "e"],
        ],
    )
    def test_rejects_invalid_seeks(self, runner: CliRunner, args: list[str]):
        result = runner.invoke(cli, ["seek", "encode", *args])

        assert result.exit_code == 1


class TestDecode:
    def test_shows_fields(self, runner: CliRunner):
        result = runner.invoke(cli, ["seek", "decode", "cCxhLGEsZSwsNQ"])

        assert result.exit_code == 0
        assert "p,a,a,e,,5" in result.output
        assert "project_name" in result.output
        assert "After" in result.output
        assert "rank" not in result.output

    def test_rejects_garbage(self, runner: CliRunner):
        result = runner.invoke(cli, ["seek", "decode", "!!!!"])

        assert result.exit_code == 1


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "catalog-service" in result.output
