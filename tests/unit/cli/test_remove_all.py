"""Unit tests for the remove-all command."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from adactl.cli.main import app
from adactl.core.node_config import save_node_config
from adactl.core.paths import get_node_config_path
from adactl.core.shell_rc import RC_MARKER, add_path_export
from adactl.utils.shell import CommandResult
from typer.testing import CliRunner

runner = CliRunner()

OK = CommandResult(stdout="", stderr="", returncode=0)


@pytest.fixture
def installed(cli_install_dir: Path, isolated_home: Path) -> Path:
    """A fully set up machine: tree, PATH export and stored config."""
    (isolated_home / ".bashrc").write_text("alias ll='ls -l'\n")
    add_path_export()
    save_node_config(6002)
    return cli_install_dir


class TestRemoveAllCommand:
    """Tests for adactl --remove-all."""

    def test_wrong_confirmation(self, installed: Path, isolated_home: Path) -> None:
        """Anything but the exact phrase aborts without removing anything."""
        with patch("adactl.cli.commands.remove_all.run_interactive") as mock_interactive:
            result = runner.invoke(app, ["--remove-all"], input="remove all\n")

        assert result.exit_code == 0
        assert "Nothing was removed" in result.output
        assert installed.exists()
        assert get_node_config_path().exists()
        assert RC_MARKER in (isolated_home / ".bashrc").read_text()
        mock_interactive.assert_not_called()

    def test_closed_stdin_aborts(self, installed: Path) -> None:
        """End of input at the confirmation prompt counts as a refusal."""
        with patch("adactl.cli.commands.remove_all.run_interactive") as mock_interactive:
            result = runner.invoke(app, ["--remove-all"], input="")

        assert result.exit_code == 0
        assert "Nothing was removed" in result.output
        assert installed.exists()
        assert get_node_config_path().exists()
        mock_interactive.assert_not_called()

    def test_removes_everything(self, installed: Path, isolated_home: Path) -> None:
        with (
            patch(
                "adactl.core.node_status.run_command",
                return_value=CommandResult(
                    stdout="cardano-node.service enabled enabled\n", stderr="", returncode=0
                ),
            ),
            patch(
                "adactl.cli.commands.remove_all.run_interactive", return_value=0
            ) as mock_systemctl,
            patch(
                "adactl.cli.commands.remove_all.find_ansible_tool",
                return_value="ansible-playbook",
            ),
            patch("adactl.core.ansible.run_command", return_value=OK),
            patch("adactl.core.ansible.run_streaming", return_value=OK) as mock_playbook,
        ):
            result = runner.invoke(app, ["--remove-all"], input="REMOVE ALL\n")

        assert result.exit_code == 0
        assert [c.args[0][2] for c in mock_systemctl.call_args_list] == ["stop", "disable"]
        assert mock_playbook.call_args.args[0][-1] == str(installed / "Uninstall.yml")
        assert not installed.exists()
        assert not get_node_config_path().exists()
        assert (isolated_home / ".bashrc").read_text() == "alias ll='ls -l'\n"
        assert "All components removed" in result.output

    def test_without_service_or_ansible(self, installed: Path) -> None:
        """Missing service and Ansible are skipped, files are still removed."""
        with (
            patch(
                "adactl.core.node_status.run_command",
                return_value=CommandResult(
                    stdout="0 unit files listed.\n", stderr="", returncode=1
                ),
            ),
            patch("adactl.cli.commands.remove_all.run_interactive") as mock_interactive,
            patch("adactl.cli.commands.remove_all.find_ansible_tool", return_value=None),
        ):
            result = runner.invoke(app, ["--remove-all"], input="REMOVE ALL\n")

        assert result.exit_code == 0
        mock_interactive.assert_not_called()
        assert not installed.exists()

    def test_service_stop_failure(self, installed: Path) -> None:
        with (
            patch(
                "adactl.core.node_status.run_command",
                return_value=CommandResult(
                    stdout="cardano-node.service enabled enabled\n", stderr="", returncode=0
                ),
            ),
            patch("adactl.cli.commands.remove_all.run_interactive", return_value=5),
        ):
            result = runner.invoke(app, ["--remove-all"], input="REMOVE ALL\n")

        assert result.exit_code == 5
        assert installed.exists()
