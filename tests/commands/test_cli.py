"""Tests for the root gavel CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from gavel import __version__
from gavel.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "gavel" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    assert cli_runner.invoke(cli, [flag, "--version"]).exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/does-not-exist.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_root")
def test_broken_config_is_a_clean_error(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "gavel.toml").write_text("[auth\nsecret_key = ")
    result = cli_runner.invoke(cli, ["auction", "list"])
    assert result.exit_code != 0
    assert "Invalid TOML" in result.output


EXPECTED_GROUPS = ["user", "auction"]
EXPECTED_COMMANDS = ["init", "serve", "bid"]


@pytest.mark.parametrize("name", EXPECTED_GROUPS + EXPECTED_COMMANDS)
def test_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert name in result.output


@pytest.mark.parametrize(
    ("path", "example"),
    [
        (["auction"], "gavel auction sweep"),
        (["auction", "create"], "--closing-time 2030-01-01T00:00:00Z"),
        (["user", "signin"], "export GAVEL_TOKEN=$(gavel -q user signin --username alice)"),
        (["bid"], 'gavel bid 65f1c0de0123456789abcdef 150 --token "$GAVEL_TOKEN"'),
        (["serve"], "gavel serve --host 0.0.0.0 --port 8080"),
    ],
)
def test_help_shows_examples_verbatim(
    cli_runner: CliRunner, path: list[str], example: str
) -> None:
    result = cli_runner.invoke(cli, [*path, "--help"])
    assert result.exit_code == 0
    assert example in result.output
