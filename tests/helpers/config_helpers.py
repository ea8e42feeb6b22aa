# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Helper functions for creating test configurations."""

from pathlib import Path
from typing import Dict, Any, List, Optional
import tomlkit


def minimal_config(db_path: str = "cms.db") -> Dict[str, Any]:
    """Return minimal valid configuration."""
    return {
        "config_version": "1.1",
        "database": {
            "connections": {
                "Default": {"path": db_path}
            }
        }
    }


def create_test_config(
    db_path: str = "cms.db",
    active_extensions: Optional[List[str]] = None,
    composer_mode: bool = False,
    **kwargs
) -> Dict[str, Any]:
    """
    Create a test configuration dictionary.

    Args:
        db_path: SQLite path of the Default connection
        active_extensions: Installed extension keys
        composer_mode: Whether extensions are managed by composer
        **kwargs: Additional config overrides

    Returns:
        Configuration dictionary
    """
    config = minimal_config(db_path)
    config["extensions"] = {
        "active": active_extensions if active_extensions is not None else ["core", "install"],
        "composer_mode": composer_mode,
    }

    for key, value in kwargs.items():
        if isinstance(value, dict) and key in config:
            config[key].update(value)
        else:
            config[key] = value

    return config


def write_config_file(config_path: Path, config_dict: Dict[str, Any]) -> Path:
    """Write a configuration dict as TOML."""
    config_path.write_text(tomlkit.dumps(config_dict), encoding='utf-8')
    return config_path
