"""Tests for the user command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from gavel.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestUserCommands:
    def test_signup(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["user", "signup", "--username", "alice", "--password", "pw"]
        )
        assert result.exit_code == 0, result.output
        assert "signup" in result.output
        assert "alice" in result.output

    def test_signup_prompts_for_password(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["user", "signup", "--username", "alice"], input="pw\npw\n"
        )
        assert result.exit_code == 0, result.output

    def test_duplicate_signup_fails(self, cli_runner: CliRunner) -> None:
        args = ["user", "signup", "--username", "alice", "--password", "pw"]
        cli_runner.invoke(cli, args)
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Username already exists" in result.output

    def test_signin_quiet_prints_token(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "signup", "--username", "alice", "--password", "pw"])
        result = cli_runner.invoke(
            cli, ["-q", "user", "signin", "--username", "alice", "--password", "pw"]
        )
        assert result.exit_code == 0
        assert result.output.strip().count(".") == 2

    def test_signin_json(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "signup", "--username", "alice", "--password", "pw"])
        result = cli_runner.invoke(
            cli, ["--json", "user", "signin", "--username", "alice", "--password", "pw"]
        )
        data = json.loads(result.output)
        assert data["data"]["user"]["username"] == "alice"
        assert data["data"]["expires_in"] == 3600

    def test_signin_wrong_password(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "signup", "--username", "alice", "--password", "pw"])
        result = cli_runner.invoke(
            cli, ["user", "signin", "--username", "alice", "--password", "nope"]
        )
        assert result.exit_code == 1
        assert "Invalid credentials" in result.output
