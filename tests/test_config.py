# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from install_tool.config import Config, load_config


def test_config_defaults():
    config = Config.from_dict({})
    assert config.config_version == "1.1"
    assert config.database.connections["Default"].path == "cms.db"
    assert config.extensions.active == ["core", "install"]
    assert config.extensions.composer_mode is False
    assert config.install.wizard_done == {}


def test_load_from_file(tmp_path):
    """Test loading config from TOML file."""
    config_file = tmp_path / "install_tool.toml"
    config_file.write_text("""
config_version = "1.1"

[database.connections.Default]
path = "site.db"

[database.connections.Redirects]
path = "redirects.db"

[database.table_mapping]
sys_redirect = "Redirects"

[extensions]
active = ["core", "install", "redirects"]
composer_mode = true

[install.wizard_done]
redirectsExtension = true
""")

    config = Config.from_file(str(config_file))
    assert config.get_connection_paths() == {"Default": "site.db", "Redirects": "redirects.db"}
    assert config.database.table_mapping == {"sys_redirect": "Redirects"}
    assert config.extensions.composer_mode is True
    assert config.install.wizard_done == {"redirectsExtension": True}
    assert config.source_path == str(config_file)


def test_missing_default_connection_is_rejected():
    with pytest.raises(ValidationError, match="Default"):
        Config.from_dict({"database": {"connections": {"Other": {"path": "x.db"}}}})


def test_table_mapped_to_unknown_connection_is_rejected():
    with pytest.raises(ValidationError, match="unknown connection"):
        Config.from_dict({"database": {"table_mapping": {"sys_redirect": "Missing"}}})


def test_old_config_is_auto_upgraded(tmp_path):
    config_file = tmp_path / "install_tool.toml"
    config_file.write_text("""# my site
[database]
path = "legacy.db"
""")

    config = Config.from_file(str(config_file), auto_upgrade=True)

    assert config.database.connections["Default"].path == "legacy.db"
    content = config_file.read_text()
    assert "# my site" in content
    assert 'config_version = "1.1"' in content


def test_load_config_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config()


def test_load_config_default_location(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "install_tool.toml").write_text('config_version = "1.1"\n')

    config = load_config()
    assert config.source_path == "config/install_tool.toml"
