"""
PostgreSQL Connector

Uses psycopg2 with the libpq connection string (``postgresql://...`` URIs or
``key=value`` DSNs) passed through ``-conn-str``.
"""

from typing import Any, Sequence, Tuple

import psycopg2

from config import Config
from core.sql_connector import SqlConnector

TABLE_INFO_QUERY = """SELECT
    UPPER(c.column_name) AS column_name,
    c.data_type,
    CASE WHEN c.is_nullable = 'YES' THEN '-' ELSE 'NOT NULL' END AS not_null,
    COALESCE(CAST(c.character_maximum_length AS TEXT), '-') AS length,
    COALESCE(tc.constraint_type, '-') AS constraint_type,
    CASE
        WHEN tc.constraint_type = 'FOREIGN KEY' THEN ccu.table_name || '.' || ccu.column_name
        ELSE '-'
    END AS referenced_table_column
FROM information_schema.columns AS c
LEFT JOIN information_schema.key_column_usage AS kcu
    ON c.column_name = kcu.column_name
    AND c.table_name = kcu.table_name
    AND c.table_schema = kcu.table_schema
LEFT JOIN information_schema.table_constraints AS tc
    ON kcu.constraint_name = tc.constraint_name
    AND kcu.table_schema = tc.table_schema
LEFT JOIN information_schema.constraint_column_usage AS ccu
    ON tc.constraint_type = 'FOREIGN KEY'
    AND tc.constraint_name = ccu.constraint_name
    AND tc.table_schema = ccu.constraint_schema
WHERE c.table_name = %s
    AND c.table_schema = current_schema()
ORDER BY c.ordinal_position"""


class PostgresConnector(SqlConnector):
    engine_name = "postgres"
    driver_errors = (psycopg2.Error,)

    def open_connection(self):
        return psycopg2.connect(self.command.conn_str, connect_timeout=Config.CONNECT_TIMEOUT)

    def tables_query(self) -> Tuple[str, Sequence[Any]]:
        return (
            "select table_name from information_schema.tables "
            "where table_schema = current_schema() order by table_name",
            (),
        )

    def table_info_query(self, table_name: str) -> str:
        return TABLE_INFO_QUERY

    def table_info_params(self, table_name: str) -> Sequence[Any]:
        return (table_name,)
