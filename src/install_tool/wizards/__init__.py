# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Upgrade wizards.

Each wizard checks whether an installation needs a one-time upgrade step
and performs it. Wizards are registered in WIZARDS by identifier.
"""

from typing import Dict, List, Type

from ..config import Config
from ..db import ConnectionPool
from ..extensions import ExtensionInstaller
from ..state import WizardStateStore
from .base import AbstractUpdate, AbstractDownloadExtensionUpdate, UpdateResult
from .redirects import RedirectsExtensionUpdate


class WizardNotFoundError(Exception):
    """Raised for an unknown wizard identifier."""
    pass


WIZARDS: Dict[str, Type[AbstractUpdate]] = {
    RedirectsExtensionUpdate.identifier: RedirectsExtensionUpdate,
}


def get_wizard(identifier: str, pool: ConnectionPool, state: WizardStateStore,
               installer: ExtensionInstaller) -> AbstractUpdate:
    try:
        wizard_class = WIZARDS[identifier]
    except KeyError:
        raise WizardNotFoundError(
            f"Unknown upgrade wizard '{identifier}'. Available: {', '.join(sorted(WIZARDS))}"
        ) from None
    return wizard_class(pool, state, installer)


def available_wizards(pool: ConnectionPool, state: WizardStateStore,
                      installer: ExtensionInstaller) -> List[AbstractUpdate]:
    return [get_wizard(identifier, pool, state, installer) for identifier in WIZARDS]


def build_services(config: Config):
    """Create the pool, state store and installer a wizard runs against."""
    pool = ConnectionPool.from_config(config)
    state = WizardStateStore.from_config(config)
    installer = ExtensionInstaller(pool, state, composer_mode=config.extensions.composer_mode)
    return pool, state, installer


__all__ = [
    'AbstractUpdate', 'AbstractDownloadExtensionUpdate', 'UpdateResult',
    'RedirectsExtensionUpdate', 'WizardNotFoundError', 'WIZARDS',
    'get_wizard', 'available_wizards', 'build_services',
]
