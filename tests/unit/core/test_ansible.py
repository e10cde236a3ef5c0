"""Unit tests for ansible-playbook execution."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from adactl.core.ansible import PlaybookRun, build_playbook_run, execute_playbook
from adactl.core.settings import Settings
from adactl.utils.shell import CommandResult

SUDO_OK = CommandResult(stdout="", stderr="", returncode=0)
SUDO_NEEDS_PASSWORD = CommandResult(stdout="", stderr="a password is required", returncode=1)


class TestBuildPlaybookRun:
    """Tests for build_playbook_run function."""

    @patch("adactl.core.ansible.run_command", return_value=SUDO_OK)
    def test_passwordless_sudo(self, mock_run: MagicMock, settings: Settings) -> None:
        params = Path("/tmp/params.yml")

        run = build_playbook_run(settings, settings.install_playbook_path, params)

        mock_run.assert_called_once_with(["sudo", "-n", "true"])
        assert run.needs_password is False
        assert run.cwd == settings.install_dir
        assert run.args == [
            "ansible-playbook",
            "-i",
            str(settings.inventory_path),
            "-e",
            "@/tmp/params.yml",
            str(settings.install_playbook_path),
        ]

    @patch("adactl.core.ansible.run_command", return_value=SUDO_NEEDS_PASSWORD)
    def test_asks_become_pass(self, _mock_run: MagicMock, settings: Settings) -> None:
        run = build_playbook_run(
            settings,
            settings.install_playbook_path,
            settings.install_params_path,
            ansible_playbook="/home/u/.local/bin/ansible-playbook",
        )

        assert run.needs_password is True
        assert run.args[0] == "/home/u/.local/bin/ansible-playbook"
        assert "--ask-become-pass" in run.args
        assert run.args[-1] == str(settings.install_playbook_path)


class TestExecutePlaybook:
    """Tests for execute_playbook function."""

    @patch("adactl.core.ansible.run_interactive")
    @patch("adactl.core.ansible.run_streaming")
    def test_streams_without_password(
        self, mock_stream: MagicMock, mock_interactive: MagicMock, tmp_path: Path
    ) -> None:
        mock_stream.return_value = CommandResult(stdout="ok", stderr="", returncode=0)
        run = PlaybookRun(args=["ansible-playbook", "x.yml"], cwd=tmp_path, needs_password=False)

        result = execute_playbook(run)

        assert result.success
        mock_stream.assert_called_once_with(["ansible-playbook", "x.yml"], cwd=str(tmp_path))
        mock_interactive.assert_not_called()

    @patch("adactl.core.ansible.run_interactive", return_value=2)
    @patch("adactl.core.ansible.run_streaming")
    def test_interactive_with_password(
        self, mock_stream: MagicMock, mock_interactive: MagicMock, tmp_path: Path
    ) -> None:
        run = PlaybookRun(args=["ansible-playbook", "x.yml"], cwd=tmp_path, needs_password=True)

        result = execute_playbook(run)

        assert result.returncode == 2
        mock_interactive.assert_called_once()
        mock_stream.assert_not_called()
