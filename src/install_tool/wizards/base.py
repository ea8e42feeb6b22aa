# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Base classes for upgrade wizards."""

import logging
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field

from ..db import ConnectionPool
from ..extensions import ExtensionDetails, ExtensionInstaller, ExtensionInstallError
from ..state import WizardStateStore


class UpdateResult(BaseModel):
    """Outcome of running an upgrade wizard."""
    success: bool
    database_queries: List[str] = Field(default_factory=list)
    custom_message: str = ""


class AbstractUpdate:
    """
    An upgrade wizard.

    Subclasses set ``identifier`` and ``title`` and implement
    ``check_for_update`` and ``perform_update``.
    """

    identifier: str = ""
    title: str = ""
    description: str = ""

    def __init__(self, pool: ConnectionPool, state: WizardStateStore,
                 installer: Optional[ExtensionInstaller] = None):
        self.pool = pool
        self.state = state
        self.installer = installer
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    def check_for_update(self) -> bool:
        """Return True if this wizard has work to do."""
        raise NotImplementedError

    def perform_update(self) -> UpdateResult:
        raise NotImplementedError

    def is_wizard_done(self) -> bool:
        return self.state.is_done(self.identifier)

    def mark_wizard_done(self):
        self.state.mark_done(self.identifier)


class AbstractDownloadExtensionUpdate(AbstractUpdate):
    """Wizard that installs one or more extensions before migrating data."""

    extension_details: dict = {}

    def install_extension(self, extension_key: str) -> Tuple[bool, str]:
        """
        Install an extension unless it is already loaded.

        Returns:
            (success, message) - message explains a failure
        """
        details: ExtensionDetails = self.extension_details[extension_key]

        if self.installer is None:
            return False, "No extension installer configured"

        if self.installer.is_loaded(extension_key):
            self.logger.info("Extension '%s' already installed", extension_key)
            return True, ""

        if self.installer.composer_mode:
            return False, (
                f"The extension \"{details.title}\" is not installed. Extensions are managed "
                f"by composer, please run: composer require {details.composer_name}"
            )

        if not self.installer.is_available(extension_key, details.version_string):
            return False, (
                f"The extension \"{details.title}\" (version {details.version_string} or newer) "
                "is not available and could not be installed. Bundled extensions: "
                f"{', '.join(self.installer.available_extensions()) or 'none'}"
            )

        try:
            self.installer.install(extension_key)
        except ExtensionInstallError as e:
            self.logger.error("Installing '%s' failed: %s", extension_key, e)
            return False, str(e)

        return True, ""
