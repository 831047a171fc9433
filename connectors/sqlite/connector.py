"""
SQLite Connector

Opens the database file named by ``-dbname`` (or the connection string when
no database name is given) with the standard library driver.
"""

import sqlite3
from typing import Any, Sequence, Tuple

from core.sql_connector import SqlConnector


class SqliteConnector(SqlConnector):
    engine_name = "sqlite"
    driver_errors = (sqlite3.Error,)

    def open_connection(self) -> sqlite3.Connection:
        path = self.command.db_name or self.command.conn_str
        return sqlite3.connect(path)

    def tables_query(self) -> Tuple[str, Sequence[Any]]:
        return "select name from sqlite_master where type = 'table' order by name", ()

    def table_info_query(self, table_name: str) -> str:
        quoted = table_name.replace('"', '""')
        return f'PRAGMA table_info("{quoted}")'
