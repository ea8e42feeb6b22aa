# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Shared pytest fixtures."""

import pytest

from install_tool.config import Config
from install_tool.db import ConnectionPool
from install_tool.extensions import ExtensionInstaller
from install_tool.state import WizardStateStore
from install_tool.wizards import RedirectsExtensionUpdate
from helpers.config_helpers import create_test_config, write_config_file
from helpers.db_helpers import create_legacy_database, domain_row


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cms.db")


@pytest.fixture
def legacy_rows():
    """sys_domain rows: three redirecting records and one plain domain."""
    return [
        domain_row(1, "www.example.org", "https://example.org/"),
        domain_row(2, "old.example.org:8080/shop/", "http://shop.example.org", hidden=1,
                   redirectHttpStatusCode=307, prepend_params=1),
        domain_row(3, "gone.example.org/", "https://example.org/gone", deleted=1),
        domain_row(4, "example.org"),
    ]


@pytest.fixture
def legacy_db(db_path, legacy_rows):
    create_legacy_database(db_path, legacy_rows)
    return db_path


@pytest.fixture
def test_config_dict(db_path):
    return create_test_config(db_path=db_path)


@pytest.fixture
def test_config_file(tmp_path, test_config_dict):
    """Config file on disk so flags get persisted."""
    return write_config_file(tmp_path / "install_tool.toml", test_config_dict)


@pytest.fixture
def test_config(test_config_file):
    return Config.from_file(str(test_config_file))


@pytest.fixture
def pool(test_config):
    pool = ConnectionPool.from_config(test_config)
    yield pool
    pool.close_all()


@pytest.fixture
def state(test_config):
    return WizardStateStore.from_config(test_config)


@pytest.fixture
def installer(pool, state):
    return ExtensionInstaller(pool, state)


@pytest.fixture
def wizard(pool, state, installer):
    return RedirectsExtensionUpdate(pool, state, installer)
