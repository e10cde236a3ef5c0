"""Unit tests for argument validation and dispatch.

Invalid invocations must be rejected before any external command runs.
"""

from unittest.mock import MagicMock, patch

import pytest
from adactl import __version__
from adactl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def no_subprocess():
    """Fail loudly if anything tries to run an external command."""
    with (
        patch("adactl.utils.shell.subprocess.run") as mock_run,
        patch("adactl.utils.shell.subprocess.Popen") as mock_popen,
    ):
        yield mock_run, mock_popen
    mock_run.assert_not_called()
    mock_popen.assert_not_called()


class TestUsageErrors:
    """Tests for rejected invocations."""

    def test_no_operation(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        """Running without an operation flag lists the options."""
        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Please specify an operation" in result.output

    def test_multiple_operations(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["cardano-node", "--install", "--uninstall"])

        assert result.exit_code == 1
        assert "only one operation" in result.output

    def test_unknown_target(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["bitcoin-node", "--install"])

        assert result.exit_code == 1
        assert "Unknown target" in result.output

    def test_target_with_markup_characters(
        self, no_subprocess: tuple[MagicMock, MagicMock]
    ) -> None:
        """Bracketed input is echoed literally instead of read as console markup."""
        result = runner.invoke(app, ["[/]", "--install"])

        assert result.exit_code == 1
        assert "Unknown target" in result.output
        assert "[/]" in result.output

    def test_missing_target(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["--install"])

        assert result.exit_code == 1
        assert "Target is required" in result.output

    @pytest.mark.parametrize("port", ["0", "70000"])
    def test_port_out_of_range(
        self, port: str, no_subprocess: tuple[MagicMock, MagicMock]
    ) -> None:
        result = runner.invoke(app, ["cardano-node", "--install", "--port", port])

        assert result.exit_code == 1
        assert "Invalid port" in result.output

    def test_port_not_a_number(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["cardano-node", "--install", "--port", "abc"])

        assert result.exit_code == 1
        assert "Invalid port abc" in result.output

    def test_port_without_install(self, no_subprocess: tuple[MagicMock, MagicMock]) -> None:
        result = runner.invoke(app, ["--status", "--port", "6001"])

        assert result.exit_code == 1
        assert "--port" in result.output

    @pytest.mark.parametrize("version", ["10", "10.5.1.2", "latest"])
    def test_bad_cardano_version(
        self, version: str, no_subprocess: tuple[MagicMock, MagicMock]
    ) -> None:
        result = runner.invoke(app, ["cardano-node", "-i", "-cv", version])

        assert result.exit_code == 1
        assert "Invalid cardano-node version" in result.output


class TestGlobalOptions:
    """Tests for help and version output."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--install" in result.output
        assert "--remove-all" in result.output


def test_upgrade_prints_guidance(cli_install_dir, no_subprocess) -> None:
    """Upgrade only prints guidance and succeeds."""
    result = runner.invoke(app, ["cardano-node", "--upgrade"])

    assert result.exit_code == 0
    assert "nothing was changed" in result.output


def test_target_is_case_insensitive(cli_install_dir, no_subprocess) -> None:
    result = runner.invoke(app, ["Cardano-Node", "-g"])

    assert result.exit_code == 0
    assert "cardano-node" in result.output
