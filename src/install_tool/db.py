# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Database connections for the install tool."""

import logging
import sqlite3
from pathlib import Path
from typing import List, Dict, Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONNECTION = "Default"


class DatabaseError(Exception):
    """Raised when a database operation fails."""
    pass


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


class Connection:
    """SQLite connection wrapper."""

    def __init__(self, name: str, db_path: str):
        self.name = name
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self.executed_queries: List[str] = []

    def connect(self):
        """Open the database file, creating parent directories if needed."""
        if self.conn:
            return
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        logger.debug("Connected '%s' to %s", self.name, self.db_path)

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        self.connect()
        self.executed_queries.append(sql)
        try:
            return self.conn.execute(sql, params)
        except sqlite3.Error as e:
            raise DatabaseError(f"Query failed on connection '{self.name}': {e}") from e

    def commit(self):
        if self.conn:
            self.conn.commit()

    def execute_script(self, script: str):
        """Run several statements at once (used for table definitions)."""
        self.connect()
        self.executed_queries.append(script.strip())
        try:
            self.conn.executescript(script)
        except sqlite3.Error as e:
            raise DatabaseError(f"Script failed on connection '{self.name}': {e}") from e

    def list_table_columns(self, table: str) -> Dict[str, Dict[str, Any]]:
        """
        Get the columns of a table.

        Keys are lower-cased column names. A table that does not exist has no
        columns, so the result is an empty dict.
        """
        cursor = self._execute(f"PRAGMA table_info({_quote(table)})")
        columns = {}
        for row in cursor.fetchall():
            columns[row["name"].lower()] = {
                "name": row["name"],
                "type": row["type"],
                "notnull": bool(row["notnull"]),
                "default": row["dflt_value"],
            }
        return columns

    def table_exists(self, table: str) -> bool:
        cursor = self._execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table,)
        )
        return cursor.fetchone() is not None

    def count_where_not_empty(self, table: str, column: str) -> int:
        """Count rows whose column holds something other than an empty string."""
        cursor = self._execute(
            f"SELECT COUNT(*) FROM {_quote(table)} WHERE {_quote(column)} <> ?",
            ('',)
        )
        return cursor.fetchone()[0]

    def select_where_not_empty(self, table: str, column: str) -> List[Dict[str, Any]]:
        """
        Fetch all rows whose column is not an empty string.

        No deleted/hidden restrictions are applied.
        """
        cursor = self._execute(
            f"SELECT * FROM {_quote(table)} WHERE {_quote(column)} <> ?",
            ('',)
        )
        return [dict(row) for row in cursor.fetchall()]

    def insert(self, table: str, data: Dict[str, Any]) -> int:
        """Insert a row and return its rowid."""
        columns = ", ".join(_quote(c) for c in data)
        placeholders = ", ".join("?" for _ in data)
        cursor = self._execute(
            f"INSERT INTO {_quote(table)} ({columns}) VALUES ({placeholders})",
            tuple(data.values())
        )
        return cursor.lastrowid

    def delete(self, table: str, identifier: Dict[str, Any]) -> int:
        """Delete rows matching all given column values; returns affected rows."""
        if not identifier:
            raise DatabaseError("Refusing to delete without identifier")
        where = " AND ".join(f"{_quote(c)} = ?" for c in identifier)
        cursor = self._execute(
            f"DELETE FROM {_quote(table)} WHERE {where}",
            tuple(identifier.values())
        )
        return cursor.rowcount


class ConnectionPool:
    """Hands out named connections and resolves tables to connections."""

    def __init__(self, connections: Dict[str, str], table_mapping: Optional[Dict[str, str]] = None):
        """
        Args:
            connections: Connection name -> SQLite database path
            table_mapping: Table name -> connection name
        """
        if DEFAULT_CONNECTION not in connections:
            raise DatabaseError(f"A '{DEFAULT_CONNECTION}' connection must be configured")
        self._paths = dict(connections)
        self._table_mapping = dict(table_mapping or {})
        self._connections: Dict[str, Connection] = {}

    @classmethod
    def from_config(cls, config) -> "ConnectionPool":
        return cls(config.get_connection_paths(), config.database.table_mapping)

    def get_connection_by_name(self, name: str) -> Connection:
        if name not in self._paths:
            raise DatabaseError(f"Unknown database connection: {name}")
        if name not in self._connections:
            connection = Connection(name, self._paths[name])
            connection.connect()
            self._connections[name] = connection
        return self._connections[name]

    def get_connection_for_table(self, table: str) -> Connection:
        name = self._table_mapping.get(table, DEFAULT_CONNECTION)
        return self.get_connection_by_name(name)

    def executed_queries(self) -> List[str]:
        queries = []
        for connection in self._connections.values():
            queries.extend(connection.executed_queries)
        return queries

    def reset_query_log(self):
        for connection in self._connections.values():
            connection.executed_queries.clear()

    def close_all(self):
        for connection in self._connections.values():
            connection.close()
        self._connections.clear()
