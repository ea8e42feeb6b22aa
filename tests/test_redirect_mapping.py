# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Tests for mapping sys_domain records to sys_redirect records."""

import pytest

from install_tool.models import DomainEntry, to_int
from install_tool.wizards.redirects import domain_entry_to_redirect, split_domain_name
from helpers.db_helpers import domain_row


def _redirect_for(domain_name, redirect_to="http://target.example.com", **overrides):
    entry = DomainEntry.from_row(domain_row(1, domain_name, redirect_to, **overrides))
    return domain_entry_to_redirect(entry)


def test_copies_plain_fields():
    """Test timestamps, flags and status code are copied."""
    redirect = _redirect_for(
        "example.com", deleted=1, hidden=1, crdate=100, cruser_id=7, tstamp=200,
        prepend_params=1, redirectHttpStatusCode=302
    )
    assert redirect.deleted == 1
    assert redirect.disabled == 1
    assert redirect.createdon == 100
    assert redirect.createdby == 7
    assert redirect.updatedon == 200
    assert redirect.keep_query_parameters == 1
    assert redirect.target_statuscode == 302
    assert redirect.target == "http://target.example.com"


def test_domain_without_path_becomes_wildcard_regexp():
    redirect = _redirect_for("example.com")
    assert redirect.source_host == "example.com"
    assert redirect.source_path == ".*"
    assert redirect.is_regexp == 1


def test_domain_with_root_path_becomes_wildcard_regexp():
    redirect = _redirect_for("example.com/")
    assert redirect.source_path == ".*"
    assert redirect.is_regexp == 1


@pytest.mark.parametrize("domain_name,expected_path", [
    ("example.com/shop", "/shop/"),
    ("example.com/shop/", "/shop/"),
    ("example.com//shop//", "/shop/"),
    ("example.com/shop/de", "/shop/de/"),
    ("example.com///", "/"),
])
def test_domain_path_is_normalized(domain_name, expected_path):
    """Test slashes are trimmed and the path is wrapped in single slashes."""
    redirect = _redirect_for(domain_name)
    assert redirect.source_path == expected_path
    assert redirect.is_regexp is None
    assert "is_regexp" not in redirect.to_row()


def test_port_is_kept_in_source_host():
    redirect = _redirect_for("example.com:8080/shop")
    assert redirect.source_host == "example.com:8080"


def test_invalid_port_is_dropped():
    redirect = _redirect_for("example.com:notaport")
    assert redirect.source_host == "example.com"


def test_domain_name_with_scheme():
    redirect = _redirect_for("http://example.com:81/path")
    assert redirect.source_host == "example.com:81"
    assert redirect.source_path == "/path/"


def test_https_target_forces_https():
    redirect = _redirect_for("example.com", "https://secure.example.com/")
    assert redirect.force_https == 1
    assert redirect.to_row()["force_https"] == 1


@pytest.mark.parametrize("target", ["http://example.com", "/relative/page", "t3://page?uid=1"])
def test_other_targets_leave_force_https_unset(target):
    redirect = _redirect_for("example.com", target)
    assert redirect.force_https is None
    assert "force_https" not in redirect.to_row()


def test_empty_domain_name_yields_empty_host():
    redirect = _redirect_for("")
    assert redirect.source_host == ""
    assert redirect.source_path == ".*"


def test_url_inside_path_does_not_count_as_scheme():
    """Test a '://' after the host leaves the host intact."""
    redirect = _redirect_for("example.com/go?to=http://x")
    assert redirect.source_host == "example.com"
    assert redirect.source_path == "/go/"


def test_ipv6_host_keeps_brackets():
    redirect = _redirect_for("[::1]:8080/shop")
    assert redirect.source_host == "[::1]:8080"
    assert redirect.source_path == "/shop/"


def test_host_case_is_preserved():
    redirect = _redirect_for("WWW.Example.org")
    assert redirect.source_host == "WWW.Example.org"


def test_user_info_is_dropped_from_host():
    redirect = _redirect_for("http://admin@example.com:81/")
    assert redirect.source_host == "example.com:81"


def test_unbalanced_ipv6_brackets_yield_empty_host():
    redirect = _redirect_for("[::1/shop")
    assert redirect.source_host == ""
    assert redirect.source_path == ".*"


def test_split_domain_name():
    assert split_domain_name("example.com:8080/a/b") == {
        "host": "example.com", "port": 8080, "path": "/a/b"
    }


@pytest.mark.parametrize("value,expected", [
    (None, 0),
    ("", 0),
    ("301", 301),
    ("12abc", 12),
    ("abc", 0),
    (True, 1),
    (5, 5),
    (2.7, 2),
])
def test_to_int(value, expected):
    assert to_int(value) == expected


def test_domain_entry_casts_legacy_values():
    """Test NULLs and strings coming from the database are coerced."""
    entry = DomainEntry.from_row({
        "uid": "9", "domainName": None, "redirectTo": "http://x.org",
        "redirectHttpStatusCode": "307", "hidden": None, "sorting": 256,
    })
    assert entry.uid == 9
    assert entry.domain_name == ""
    assert entry.redirect_http_status_code == 307
    assert entry.hidden == 0
