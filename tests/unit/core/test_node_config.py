"""Unit tests for stored node configuration I/O."""

import json
from pathlib import Path

import pytest
from adactl.core.node_config import (
    ConfigError,
    delete_node_config,
    load_node_config,
    save_node_config,
)
from adactl.core.paths import get_node_config_path


class TestSaveAndLoad:
    """Tests for save_node_config and load_node_config."""

    def test_load_missing_returns_none(self) -> None:
        assert load_node_config() is None

    def test_save_writes_json(self) -> None:
        path = save_node_config(9000)

        assert path == get_node_config_path()
        data = json.loads(path.read_text())
        assert data["cardano_port"] == 9000
        assert data["last_installation"] is not None

    def test_port_read_back(self) -> None:
        save_node_config(9000)

        config = load_node_config()

        assert config is not None
        assert config.cardano_port == 9000

    def test_save_overwrites(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        save_node_config(6001, path)
        save_node_config(6003, path)

        config = load_node_config(path)

        assert config is not None
        assert config.cardano_port == 6003
        assert list(tmp_path.glob("*.tmp")) == []

    def test_load_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="Invalid stored config"):
            load_node_config(path)

    def test_load_invalid_port(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"cardano_port": 70000}))

        with pytest.raises(ConfigError):
            load_node_config(path)


class TestDeleteNodeConfig:
    """Tests for delete_node_config function."""

    def test_deletes_existing(self) -> None:
        path = save_node_config(9000)

        assert delete_node_config() is True
        assert not path.exists()

    def test_missing_is_not_an_error(self) -> None:
        assert delete_node_config() is False
