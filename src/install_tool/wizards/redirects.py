# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Installs the redirects extension and converts sys_domain redirects.

Legacy sys_domain records could redirect a whole domain through their
``redirectTo`` field. The redirects extension replaces that with proper
sys_redirect records, so each filled-in domain record becomes one redirect
and the domain record is removed.
"""

import re
from typing import Any, Dict
from urllib.parse import urlsplit

from ..db import DEFAULT_CONNECTION
from ..extensions import ExtensionDetails
from ..models import DomainEntry, Redirect
from .base import AbstractDownloadExtensionUpdate, UpdateResult


_SCHEME = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*://')


def split_domain_name(domain_name: str) -> Dict[str, Any]:
    """
    Split a sys_domain domainName into host, port and path.

    domainName normally has no scheme ("example.com:8080/shop"), so it is
    parsed as a network location. The host keeps its case and IPv6 brackets.
    """
    if not _SCHEME.match(domain_name) and not domain_name.startswith("//"):
        domain_name = "//" + domain_name
    try:
        parts = urlsplit(domain_name)
    except ValueError:
        # Unbalanced IPv6 brackets
        return {"host": "", "port": None, "path": ""}

    netloc = parts.netloc.rpartition("@")[2]
    if netloc.startswith("["):
        host = netloc.partition("]")[0] + "]"
    else:
        host = netloc.partition(":")[0]

    try:
        port = parts.port
    except ValueError:
        port = None
    return {"host": host, "port": port, "path": parts.path}


def domain_entry_to_redirect(entry: DomainEntry) -> Redirect:
    """Map one sys_domain record to the sys_redirect record replacing it."""
    source = split_domain_name(entry.domain_name)
    target = entry.redirect_to

    redirect = Redirect(
        deleted=entry.deleted,
        disabled=entry.hidden,
        createdon=entry.crdate,
        createdby=entry.cruser_id,
        updatedon=entry.tstamp,
        source_host=source["host"] + (f":{source['port']}" if source["port"] else ""),
        keep_query_parameters=entry.prepend_params,
        target_statuscode=entry.redirect_http_status_code,
        target=target,
    )

    if urlsplit(target).scheme == "https":
        redirect.force_https = 1

    path = source["path"]
    if not path or path == "/":
        redirect.source_path = ".*"
        redirect.is_regexp = 1
    else:
        path = path.strip("/")
        redirect.source_path = "/" + (path + "/" if path else "")

    return redirect


class RedirectsExtensionUpdate(AbstractDownloadExtensionUpdate):
    """Installs EXT:redirects if sys_domain.redirectTo is filled and migrates those records."""

    identifier = "redirectsExtension"
    title = 'Install system extension "redirects" if a sys_domain entry with redirectTo is necessary'
    description = (
        'The extension "redirects" includes functionality to handle any kind of redirects. '
        'The functionality supersedes sys_domain entries with the only purpose of redirecting '
        'to a different domain or entry. This upgrade wizard installs the redirect extension '
        'if necessary and migrates the sys_domain entries to standard redirects.'
    )

    extension_details = {
        "redirects": ExtensionDetails(
            title="Redirects",
            description="Manage redirects for your website",
            version_string="9.2",
            composer_name="typo3/cms-redirects",
        ),
    }

    def check_for_update(self) -> bool:
        return self.check_if_wizard_is_required() and not self.is_wizard_done()

    def perform_update(self) -> UpdateResult:
        """
        Install EXT:redirects, then move the domain records over.

        Nothing is migrated when the installation fails.
        """
        self.pool.reset_query_log()
        installed, message = self.install_extension("redirects")
        if installed:
            migrated = self.migrate_redirect_domains_to_sys_redirect()
            self.mark_wizard_done()
            message = f"Migrated {migrated} sys_domain redirect(s) to sys_redirect."
        else:
            self.logger.warning("Redirects extension not installed: %s", message)

        return UpdateResult(
            success=installed,
            database_queries=self.pool.executed_queries(),
            custom_message=message
        )

    def check_if_wizard_is_required(self) -> bool:
        """True if sys_domain.redirectTo exists and at least one row has it filled."""
        connection = self.pool.get_connection_by_name(DEFAULT_CONNECTION)
        columns = connection.list_table_columns("sys_domain")
        if "redirectto" not in columns:
            return False

        connection = self.pool.get_connection_for_table("sys_domain")
        return connection.count_where_not_empty("sys_domain", "redirectTo") > 0

    def migrate_redirect_domains_to_sys_redirect(self) -> int:
        """
        Move every sys_domain record with redirectTo filled (deleted ones too) to sys_redirect.

        Each record is inserted, its source row hard-deleted, and the pair
        committed before the next record. There is no rollback across records.
        """
        conn_domains = self.pool.get_connection_for_table("sys_domain")
        conn_redirects = self.pool.get_connection_for_table("sys_redirect")

        rows = conn_domains.select_where_not_empty("sys_domain", "redirectTo")
        for row in rows:
            entry = DomainEntry.from_row(row)
            redirect = domain_entry_to_redirect(entry)

            conn_redirects.insert("sys_redirect", redirect.to_row())
            conn_domains.delete("sys_domain", {"uid": entry.uid})

            conn_redirects.commit()
            if conn_domains is not conn_redirects:
                conn_domains.commit()
            self.logger.debug(
                "Migrated sys_domain:%d %s -> %s", entry.uid, entry.domain_name, entry.redirect_to
            )

        self.logger.info("Migrated %d sys_domain record(s) to sys_redirect", len(rows))
        return len(rows)
