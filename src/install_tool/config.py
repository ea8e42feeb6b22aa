# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Configuration management for the install tool."""

from pathlib import Path
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, model_validator
import tomli
import tomlkit

DEFAULT_CONFIG_PATHS = [
    "install_tool.toml",
    ".install_tool.toml",
    "config/install_tool.toml"
]


class ConnectionConfig(BaseModel):
    """A single named database connection."""
    path: str = Field(
        default="cms.db",
        description="Path to SQLite database file"
    )


class DatabaseConfig(BaseModel):
    """Database configuration."""
    connections: Dict[str, ConnectionConfig] = Field(
        default_factory=lambda: {"Default": ConnectionConfig()},
        description="Named database connections. A 'Default' connection is required."
    )
    table_mapping: Dict[str, str] = Field(
        default_factory=dict,
        description="Maps table names to connection names. Unmapped tables use 'Default'."
    )

    @model_validator(mode='after')
    def validate_connections(self):
        if "Default" not in self.connections:
            raise ValueError("database.connections must define a 'Default' connection")
        for table, name in self.table_mapping.items():
            if name not in self.connections:
                raise ValueError(
                    f"Table '{table}' is mapped to unknown connection '{name}'"
                )
        return self


class ExtensionsConfig(BaseModel):
    """Extension installation settings."""
    active: List[str] = Field(
        default_factory=lambda: ["core", "install"],
        description="Keys of installed (active) extensions"
    )
    composer_mode: bool = Field(
        default=False,
        description="Extensions are managed by composer and cannot be installed by wizards"
    )


class InstallConfig(BaseModel):
    """Upgrade wizard state."""
    wizard_done: Dict[str, bool] = Field(
        default_factory=dict,
        description="Upgrade wizards that already ran, by identifier"
    )


class Config(BaseModel):
    """Main configuration model."""
    config_version: str = Field(default="1.1", description="Config file format version")
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    extensions: ExtensionsConfig = Field(default_factory=ExtensionsConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)
    source_path: Optional[str] = Field(
        default=None,
        exclude=True,
        description="File this config was loaded from"
    )

    @classmethod
    def from_file(cls, config_path: str, auto_upgrade: bool = False) -> "Config":
        """Load configuration from TOML file.

        Args:
            config_path: Path to the config file
            auto_upgrade: If True, automatically upgrade old configs without prompting

        Returns:
            Config object
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            data = tomli.load(f)

        from .migrations import MigrationManager
        manager = MigrationManager()
        current_version = data.get('config_version', manager.UNVERSIONED)

        if manager.needs_upgrade(current_version):
            target_version = manager.CURRENT_VERSION
            if not auto_upgrade:
                import click
                click.echo(f"Config file is version {current_version}, but current version is {target_version}")
                click.echo(manager.get_changes_description(current_version, target_version))
                if not click.confirm("Upgrade now?", default=True):
                    raise ValueError(
                        f"Config version {current_version} is not supported. "
                        f"Please upgrade to v{target_version} using: install-tool update-config"
                    )

            with open(path, 'r', encoding='utf-8') as f:
                doc = tomlkit.load(f)
            doc = manager.upgrade_config(doc, target_version)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(tomlkit.dumps(doc))
            data = doc.unwrap()

        config = cls(**data)
        config.source_path = str(path)
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Load configuration from dictionary."""
        return cls(**data)

    def get_connection_paths(self) -> Dict[str, str]:
        return {name: conn.path for name, conn in self.database.connections.items()}


def find_config_path(config_path: Optional[str] = None) -> Optional[str]:
    """Return the given path if it exists, else the first default location found."""
    if config_path and Path(config_path).exists():
        return config_path
    for default_path in DEFAULT_CONFIG_PATHS:
        if Path(default_path).exists():
            return default_path
    return None


def load_config(config_path: Optional[str] = None, auto_upgrade: bool = False) -> Config:
    """Load configuration from file.

    Args:
        config_path: Path to config file (optional, will search default locations if not provided)
        auto_upgrade: If True, automatically upgrade old configs without prompting

    Returns:
        Config object
    """
    path = find_config_path(config_path)
    if path is None:
        raise FileNotFoundError(
            "No configuration file found. Please create install_tool.toml "
            "(install-tool init-config)."
        )
    return Config.from_file(path, auto_upgrade=auto_upgrade)
