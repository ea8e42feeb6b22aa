# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Persistent install state: upgrade wizard flags and active extensions.

Values are written back into the TOML config file with tomlkit so user
comments and formatting survive. Concurrent writers are not coordinated.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional
import tomlkit

logger = logging.getLogger(__name__)


class WizardStateStore:
    """Key/value store for "wizard done" flags and the active extension list."""

    def __init__(self, config_path: Optional[str] = None,
                 wizard_done: Optional[Dict[str, bool]] = None,
                 active_extensions: Optional[List[str]] = None):
        self.config_path = Path(config_path) if config_path else None
        self._wizard_done: Dict[str, bool] = dict(wizard_done or {})
        self._active: List[str] = list(active_extensions or [])

    @classmethod
    def from_config(cls, config) -> "WizardStateStore":
        return cls(
            config.source_path,
            wizard_done=config.install.wizard_done,
            active_extensions=config.extensions.active
        )

    def _load_document(self):
        with open(self.config_path, 'r', encoding='utf-8') as f:
            return tomlkit.load(f)

    def _save_document(self, doc):
        with open(self.config_path, 'w', encoding='utf-8') as f:
            f.write(tomlkit.dumps(doc))

    def _section(self, doc, name: str):
        if name not in doc:
            doc[name] = tomlkit.table()
        return doc[name]

    def is_done(self, identifier: str) -> bool:
        return bool(self._wizard_done.get(identifier, False))

    def mark_done(self, identifier: str):
        self._set_done(identifier, True)

    def mark_undone(self, identifier: str):
        self._set_done(identifier, False)

    def _set_done(self, identifier: str, done: bool):
        if done:
            self._wizard_done[identifier] = True
        else:
            self._wizard_done.pop(identifier, None)

        if self.config_path:
            doc = self._load_document()
            flags = self._section(self._section(doc, 'install'), 'wizard_done')
            if done:
                flags[identifier] = True
            elif identifier in flags:
                del flags[identifier]
            self._save_document(doc)
        logger.debug("Wizard '%s' marked as %s", identifier, "done" if done else "not done")

    def active_extensions(self) -> List[str]:
        return list(self._active)

    def activate_extension(self, extension_key: str):
        if extension_key in self._active:
            return
        self._active.append(extension_key)

        if self.config_path:
            doc = self._load_document()
            extensions = self._section(doc, 'extensions')
            if 'active' not in extensions:
                # Defaults were in effect, write them out along with the new key
                active = tomlkit.array()
                for key in self._active:
                    active.append(key)
                extensions['active'] = active
            elif extension_key not in extensions['active']:
                extensions['active'].append(extension_key)
            self._save_document(doc)
        logger.debug("Extension '%s' activated", extension_key)
