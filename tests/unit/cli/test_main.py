"""Unit tests for the main CLI application."""

import logging

from treefs import __version__
from treefs.cli.main import app, configure_logging
from typer.testing import CliRunner

runner = CliRunner()


class TestMain:
    """Tests for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"treefs version {__version__}" in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])

        assert "Usage" in result.output
        for command in ("tree", "find", "rm", "index", "config"):
            assert command in result.output

    def test_help_alias(self) -> None:
        result = runner.invoke(app, ["-h"])

        assert result.exit_code == 0


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, quiet=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_only_errors(self) -> None:
        configure_logging(verbose=False, quiet=True)

        assert logging.getLogger().level == logging.ERROR

    def test_default_warnings(self) -> None:
        configure_logging(verbose=False, quiet=False)

        assert logging.getLogger().level == logging.WARNING
