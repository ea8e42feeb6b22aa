# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Extension catalog and installation."""

import logging
from typing import Dict, List, Optional
from packaging import version
from pydantic import BaseModel, Field

from .db import ConnectionPool
from .state import WizardStateStore

logger = logging.getLogger(__name__)


class ExtensionInstallError(Exception):
    """Raised when an extension cannot be installed."""
    pass


class ExtensionDetails(BaseModel):
    """What an upgrade wizard needs to know about an extension it installs."""
    title: str
    description: str = ""
    version_string: str = Field(description="Minimum version required")
    composer_name: str


class ExtensionPackage(BaseModel):
    """An extension shipped with the installer."""
    key: str
    version: str
    tables: Dict[str, str] = Field(
        default_factory=dict,
        description="Table name -> CREATE TABLE statement"
    )


SYS_REDIRECT_DDL = """
CREATE TABLE IF NOT EXISTS sys_redirect (
    uid INTEGER PRIMARY KEY AUTOINCREMENT,
    pid INTEGER DEFAULT 0 NOT NULL,
    updatedon INTEGER DEFAULT 0 NOT NULL,
    createdon INTEGER DEFAULT 0 NOT NULL,
    createdby INTEGER DEFAULT 0 NOT NULL,
    deleted INTEGER DEFAULT 0 NOT NULL,
    disabled INTEGER DEFAULT 0 NOT NULL,
    starttime INTEGER DEFAULT 0 NOT NULL,
    endtime INTEGER DEFAULT 0 NOT NULL,
    source_host VARCHAR(255) DEFAULT '' NOT NULL,
    source_path VARCHAR(2048) DEFAULT '' NOT NULL,
    is_regexp INTEGER DEFAULT 0 NOT NULL,
    force_https INTEGER DEFAULT 0 NOT NULL,
    respect_query_parameters INTEGER DEFAULT 0 NOT NULL,
    keep_query_parameters INTEGER DEFAULT 0 NOT NULL,
    target VARCHAR(2048) DEFAULT '' NOT NULL,
    target_statuscode INTEGER DEFAULT 307 NOT NULL,
    hitcount INTEGER DEFAULT 0 NOT NULL,
    lasthiton INTEGER DEFAULT 0 NOT NULL,
    disable_hitcount INTEGER DEFAULT 0 NOT NULL
);
CREATE INDEX IF NOT EXISTS index_source ON sys_redirect (source_host, source_path);
"""

BUNDLED_EXTENSIONS: Dict[str, ExtensionPackage] = {
    "redirects": ExtensionPackage(
        key="redirects",
        version="9.2.0",
        tables={"sys_redirect": SYS_REDIRECT_DDL},
    ),
}


class ExtensionInstaller:
    """Installs bundled extensions: creates their tables and activates them."""

    def __init__(self, pool: ConnectionPool, state: WizardStateStore,
                 composer_mode: bool = False,
                 catalog: Optional[Dict[str, ExtensionPackage]] = None):
        self.pool = pool
        self.state = state
        self.composer_mode = composer_mode
        self.catalog = BUNDLED_EXTENSIONS if catalog is None else catalog

    def is_loaded(self, extension_key: str) -> bool:
        return extension_key in self.state.active_extensions()

    def is_available(self, extension_key: str, version_constraint: Optional[str] = None) -> bool:
        """Check the extension is bundled, optionally at least at the given version."""
        package = self.catalog.get(extension_key)
        if package is None:
            return False
        if version_constraint:
            return version.parse(package.version) >= version.parse(version_constraint)
        return True

    def available_extensions(self) -> List[str]:
        return sorted(self.catalog)

    def install(self, extension_key: str):
        """
        Create the extension's tables and mark it active.

        Raises:
            ExtensionInstallError: If the extension is not bundled or composer
                manages extensions
        """
        if self.composer_mode:
            raise ExtensionInstallError(
                f"Extensions are managed by composer, cannot install '{extension_key}'"
            )
        package = self.catalog.get(extension_key)
        if package is None:
            raise ExtensionInstallError(f"Extension '{extension_key}' is not available")

        for table, ddl in package.tables.items():
            connection = self.pool.get_connection_for_table(table)
            if connection.table_exists(table):
                logger.info("Table %s already present on connection '%s'", table, connection.name)
                continue
            connection.execute_script(ddl)
            logger.info("Created table %s on connection '%s'", table, connection.name)

        self.state.activate_extension(extension_key)
        logger.info("Installed extension '%s' (%s)", extension_key, package.version)
