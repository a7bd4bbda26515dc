"""Tests for the aumos-rebac command-line interface."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from aumos_rebac.cli.main import (
    EXIT_DENIED,
    EXIT_GRANTED,
    EXIT_INDETERMINATE,
    EXIT_USAGE,
    cli,
)

_CONFIG = textwrap.dedent(
    """\
    version: "1"
    exploration:
      max_depth: 2
    relations:
      - {subject: alice, relation: memberOf, object: team1}
      - {subject: team1, relation: editor, object: doc1}
      - {subject: bob, relation: viewer, object: doc1}
      - {subject: carol, relation: memberOf, object: org1}
      - {subject: org1, relation: memberOf, object: team2}
      - {subject: team2, relation: owns, object: doc1}
    """
)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def config_file(tmp_path: Path) -> str:
    path = tmp_path / "rebac.yaml"
    path.write_text(_CONFIG, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_granted_exits_zero(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "alice", "-r", "doc1", "-a", "write", "-c", config_file]
        )
        assert result.exit_code == EXIT_GRANTED
        assert "GRANTED" in result.output
        assert "editor" in result.output

    def test_no_relation_exits_one(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "bob", "-r", "doc1", "-a", "write", "-c", config_file]
        )
        assert result.exit_code == EXIT_DENIED
        assert "no relation" in result.output

    def test_depth_exceeded_exits_three(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "carol", "-r", "doc1", "-a", "read", "-c", config_file]
        )
        assert result.exit_code == EXIT_INDETERMINATE
        assert "max depth exceeded" in result.output

    def test_unknown_action_rejected(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "alice", "-r", "doc1", "-a", "delete", "-c", config_file]
        )
        assert result.exit_code == 2

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            ["check", "-s", "alice", "-r", "doc1", "-a", "read", "-c", str(tmp_path / "nope.yaml")],
        )
        assert result.exit_code != 0

    def test_invalid_config_exits_two(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("exploration:\n  max_depth: 0\n", encoding="utf-8")
        result = runner.invoke(
            cli, ["check", "-s", "alice", "-r", "doc1", "-a", "read", "-c", str(path)]
        )
        assert result.exit_code == EXIT_USAGE

    def test_empty_resource_id_exits_two(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "alice", "-r", "", "-a", "read", "-c", config_file]
        )
        assert result.exit_code == EXIT_USAGE
        assert not isinstance(result.exception, ValueError)


# ---------------------------------------------------------------------------
# explain
# ---------------------------------------------------------------------------


class TestExplainCommand:
    def test_empty_resource_id_exits_two(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["explain", "-s", "alice", "-r", "", "-c", config_file])
        assert result.exit_code == EXIT_USAGE


    def test_lists_both_actions(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["explain", "-s", "bob", "-r", "doc1", "-c", config_file])
        assert result.exit_code == 0
        assert "read" in result.output
        assert "write" in result.output
        assert "GRANTED" in result.output
        assert "DENIED" in result.output


# ---------------------------------------------------------------------------
# relations
# ---------------------------------------------------------------------------


class TestRelationsCommand:
    def test_outgoing(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["relations", "alice", "-c", config_file])
        assert result.exit_code == 0
        assert "team1" in result.output
        assert "Total: 1" in result.output

    def test_incoming(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["relations", "doc1", "--reverse", "-c", config_file])
        assert result.exit_code == 0
        assert "Total: 3" in result.output

    def test_unknown_entity(self, runner: CliRunner, config_file: str) -> None:
        result = runner.invoke(cli, ["relations", "nobody", "-c", config_file])
        assert result.exit_code == 0
        assert "No outgoing relations" in result.output


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_shows_version(self, runner: CliRunner) -> None:
        from aumos_rebac import __version__

        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output
