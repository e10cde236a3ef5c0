"""Unit tests for tool settings."""

from pathlib import Path

import pytest
from adactl.core.settings import (
    DEFAULT_INSTALL_DIR,
    Settings,
    SettingsError,
    load_settings,
)


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.install_dir == DEFAULT_INSTALL_DIR
        assert settings.default_port == 6002
        assert settings.required_collections == ["community.general", "ansible.posix"]

    def test_derived_paths(self, tmp_path: Path) -> None:
        settings = Settings(install_dir=tmp_path)

        assert settings.inventory_path == tmp_path / "inventory.ini"
        assert settings.install_playbook_path == tmp_path / "Build.yml"
        assert settings.install_params_path == tmp_path / "install_param.yml"
        assert settings.uninstall_playbook_path == tmp_path / "Uninstall.yml"
        assert settings.uninstall_params_path == (
            tmp_path / "uninstall-steps" / "uninstall_param.yml"
        )

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(ValueError):
            Settings.model_validate({"instal_dir": "/opt/x"})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "settings.toml")

        assert settings == Settings()

    def test_reads_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('install_dir = "/srv/ada"\ndefault_port = 3001\n')

        settings = load_settings(path)

        assert settings.install_dir == Path("/srv/ada")
        assert settings.default_port == 3001

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "settings.toml"
        path.write_text('install_dir = "/srv/ada"\n')
        monkeypatch.setenv("ADACTL_INSTALL_DIR", "/data/ada")
        monkeypatch.setenv("ADACTL_ARCHIVE_URL", "https://example.invalid/a.zip")

        settings = load_settings(path)

        assert settings.install_dir == Path("/data/ada")
        assert settings.archive_url == "https://example.invalid/a.zip"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("install_dir = \n")

        with pytest.raises(SettingsError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.toml"
        path.write_text("default_port = 0\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)
