# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Config migration system for install-tool.

Handles upgrading config files between versions when format changes.
"""

from pathlib import Path
from typing import Dict, List, Tuple, Optional, Callable
import importlib.util
from packaging import version


class MigrationError(Exception):
    """Raised when a migration fails."""
    pass


class MigrationManager:
    """Manages config file migrations."""

    CURRENT_VERSION = "1.1"
    # Files without config_version hold a single [database] path
    UNVERSIONED = "1.0"

    DESCRIPTIONS = {
        ("1.0", "1.1"): (
            "Files without config_version use a single [database] path.\n"
            "Version 1.1 uses named database connections:\n"
            "  • [database] path becomes [database.connections.Default] path\n"
            "  • [database.table_mapping] can place tables on other connections"
        ),
    }

    def __init__(self, migrations_dir: Optional[Path] = None):
        self.migrations_dir = migrations_dir or Path(__file__).parent
        self._loaded_migrations: Dict[Tuple[str, str], Callable] = {}

    def compare_versions(self, v1: str, v2: str) -> int:
        """
        Compare two version strings.

        Returns:
            -1 if v1 < v2
            0 if v1 == v2
            1 if v1 > v2
        """
        ver1 = version.parse(v1)
        ver2 = version.parse(v2)

        if ver1 < ver2:
            return -1
        if ver1 > ver2:
            return 1
        return 0

    def needs_upgrade(self, current_version: str) -> bool:
        """Check if config needs upgrade."""
        return self.compare_versions(current_version, self.CURRENT_VERSION) < 0

    def _discover_migrations(self) -> List[Tuple[str, str]]:
        """Discover available migration scripts from their file names."""
        migrations = []
        if not self.migrations_dir.exists():
            return migrations

        for file in self.migrations_dir.glob("v*_to_v*.py"):
            # v1_0_to_v1_1.py -> ("1.0", "1.1")
            parts = file.stem.split("_to_")
            if len(parts) != 2:
                continue
            from_part = parts[0].lstrip("v").replace("_", ".")
            to_part = parts[1].lstrip("v").replace("_", ".")
            migrations.append((from_part, to_part))

        return sorted(migrations, key=lambda m: version.parse(m[0]))

    def get_migration_path(self, from_version: str, to_version: str) -> List[Tuple[str, str]]:
        """
        Get ordered list of migrations needed to go from one version to another.

        Returns:
            List of (from_version, to_version) tuples representing migration steps
        """
        available = self._discover_migrations()
        path = []
        current = from_version

        while self.compare_versions(current, to_version) < 0:
            step = next((m for m in available if m[0] == current), None)
            if step is None:
                raise MigrationError(
                    f"No migration path found from {from_version} to {to_version}"
                )
            path.append(step)
            current = step[1]

        return path

    def load_migration(self, from_version: str, to_version: str) -> Callable:
        """Load a migration function from file."""
        key = (from_version, to_version)
        if key in self._loaded_migrations:
            return self._loaded_migrations[key]

        from_part = "v" + from_version.replace(".", "_")
        to_part = "v" + to_version.replace(".", "_")
        filename = f"{from_part}_to_{to_part}.py"
        migration_file = self.migrations_dir / filename

        if not migration_file.exists():
            raise MigrationError(f"Migration file not found: {migration_file}")

        spec = importlib.util.spec_from_file_location(
            f"migration_{from_part}_to_{to_part}",
            migration_file
        )
        if not spec or not spec.loader:
            raise MigrationError(f"Failed to load migration: {migration_file}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        if not hasattr(module, 'migrate'):
            raise MigrationError(f"Migration {filename} must have a 'migrate' function")

        self._loaded_migrations[key] = module.migrate
        return module.migrate

    def apply_migration(self, config_dict: Dict, from_version: str, to_version: str) -> Dict:
        """Apply a single migration to config dict."""
        migrate_func = self.load_migration(from_version, to_version)

        try:
            updated_config = migrate_func(config_dict)
        except Exception as e:
            raise MigrationError(
                f"Migration from {from_version} to {to_version} failed: {e}"
            ) from e

        updated_config['config_version'] = to_version
        return updated_config

    def upgrade_config(self, config_dict: Dict, target_version: Optional[str] = None) -> Dict:
        """
        Upgrade config dict to target version (or latest if not specified).

        Args:
            config_dict: Config dictionary or tomlkit document
            target_version: Target version (defaults to latest)

        Returns:
            Upgraded config dictionary
        """
        if target_version is None:
            target_version = self.CURRENT_VERSION

        current_version = config_dict.get('config_version', self.UNVERSIONED)
        if self.compare_versions(current_version, target_version) >= 0:
            return config_dict

        updated_config = config_dict
        for from_v, to_v in self.get_migration_path(current_version, target_version):
            updated_config = self.apply_migration(updated_config, from_v, to_v)

        return updated_config

    def get_changes_description(self, from_version: str, to_version: str) -> str:
        """Get human-readable description of changes between versions."""
        try:
            path = self.get_migration_path(from_version, to_version)
        except MigrationError:
            return "No description available"
        if not path:
            return "No description available"
        return "\n".join(
            self.DESCRIPTIONS.get(step, f"Version {step[1]}: no description available")
            for step in path
        )
