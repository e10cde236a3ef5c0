"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from adactl.core.settings import Settings

INSTALL_PARAM_TEMPLATE = """---
# Cardano node build parameters
cardano_node_version: 10.5.1
cardano_port: 6002  # node listening port
node_home: /home/cardano/cardano-my-node

ghc_version: 9.6.7
cabal_version: 3.12.1.0
"""

GALAXY_LIST_OUTPUT = """
# /home/user/.ansible/collections/ansible_collections
Collection        Version
----------------- -------
ansible.posix     1.5.4
community.general 8.6.0
"""


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and XDG_CONFIG_HOME at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("ADACTL_INSTALL_DIR", raising=False)
    monkeypatch.delenv("ADACTL_ARCHIVE_URL", raising=False)
    return home


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """A populated automation tree."""
    root = tmp_path / "opt" / "love2automate-ada"
    (root / "uninstall-steps").mkdir(parents=True)
    (root / "scripts").mkdir()
    (root / "Build.yml").write_text("- hosts: all\n")
    (root / "Uninstall.yml").write_text("- hosts: all\n")
    (root / "install_param.yml").write_text(INSTALL_PARAM_TEMPLATE)
    (root / "uninstall-steps" / "uninstall_param.yml").write_text("remove_db: true\n")
    (root / "inventory.ini").write_text("# hosts\n[cardano]\nlocalhost ansible_connection=local\n")
    (root / "scripts" / "get-dependency-versions.sh").write_text("#!/usr/bin/env bash\n")
    return root


@pytest.fixture
def settings(install_dir: Path) -> Settings:
    """Settings pointing at the temporary automation tree."""
    return Settings(install_dir=install_dir)


@pytest.fixture
def galaxy_list_output() -> str:
    """Sample ansible-galaxy collection list output with both collections."""
    return GALAXY_LIST_OUTPUT
