"""Tests for the serve command."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner
from fastapi import FastAPI

from gavel.cli import cli


class TestServeCommand:
    def test_help_shows_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["serve", "--help"])
        assert "--host" in result.output
        assert "--port" in result.output
        assert "--reload" in result.output

    @pytest.mark.usefixtures("_isolated_root")
    def test_defaults_from_settings(self, cli_runner: CliRunner) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 0, result.output
        app = run.call_args.args[0]
        assert isinstance(app, FastAPI)
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 5001

    @pytest.mark.usefixtures("_isolated_root")
    def test_overrides(self, cli_runner: CliRunner) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["serve", "--host", "0.0.0.0", "--port", "9000"])
        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["host"] == "0.0.0.0"
        assert run.call_args.kwargs["port"] == 9000

    @pytest.mark.usefixtures("_isolated_root")
    def test_reload_uses_factory_string(self, cli_runner: CliRunner) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["serve", "--reload"])
        assert result.exit_code == 0, result.output
        assert run.call_args.args[0] == "gavel.api.app:app_factory"
        assert run.call_args.kwargs["factory"] is True
        assert run.call_args.kwargs["reload"] is True
