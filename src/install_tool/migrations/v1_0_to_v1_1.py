# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Migration from unversioned config files to version 1.1.

A file without config_version is read as version 1.0: one [database] path.
Version 1.1 names its connections so tables can live on different databases
([database.table_mapping]).

This migration:
- Moves database.path to database.connections.Default.path
- Sets config_version to "1.1"
"""

from typing import Dict, Any
import tomlkit


def migrate(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config from version 1.0 to 1.1.

    Args:
        config_dict: Config dictionary/document loaded from TOML

    Returns:
        Upgraded config dictionary/document
    """
    # Modify tomlkit documents in place to keep comments
    if hasattr(config_dict, 'add'):
        doc = config_dict
    else:
        doc = tomlkit.document()
        for key, value in config_dict.items():
            doc[key] = value

    database = doc.get('database')
    if database is not None and 'path' in database:
        old_path = database['path']
        del database['path']

        default = tomlkit.table()
        default['path'] = str(old_path)

        connections = database.get('connections')
        if connections is None:
            connections = tomlkit.table()
            connections['Default'] = default
            database['connections'] = connections
        elif 'Default' not in connections:
            connections['Default'] = default

    doc['config_version'] = '1.1'

    return doc
