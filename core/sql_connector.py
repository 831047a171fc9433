"""
Shared DB-API executor for the relational connectors.

Subclasses open the driver connection and provide the catalog queries;
selection, statement execution and table listing are common to all of them.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Type

from core.base_connector import EMPTY_RESULT_MESSAGE, BaseConnector
from core.errors import BackendConnectionError, DriverError
from core.query import is_insert_update_or_delete, is_select_query, split_queries, strip_sql_comments
from core.result_sink import numbered
from core.table import Table

logger = logging.getLogger(__name__)

STATEMENT_OK = "Statement executed correctly."


class SqlConnector(BaseConnector):
    """DB-API 2.0 connector; ``driver_errors`` lists the driver's exception bases."""

    driver_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, command, sink, connection: Any = None):
        super().__init__(command, sink)
        self.connection = connection
        self.connected = connection is not None

    @abstractmethod
    def open_connection(self) -> Any:
        """Return a new DB-API connection for the invocation."""

    @abstractmethod
    def tables_query(self) -> Tuple[str, Sequence[Any]]:
        """Return the SQL (and parameters) listing the table names."""

    @abstractmethod
    def table_info_query(self, table_name: str) -> str:
        """Return SQL describing the columns of ``table_name``."""

    def table_info_params(self, table_name: str) -> Sequence[Any]:
        return ()

    def connect(self) -> None:
        if self.connected:
            return
        try:
            self.connection = self.open_connection()
        except self.driver_errors as exc:
            raise BackendConnectionError(
                f"Error connecting {self.engine_name}. Connection string: {self.command.conn_str}"
            ) from exc
        self.connected = True

    def disconnect(self) -> None:
        if self.connection is not None:
            self.connection.close()
        self.connection = None
        self.connected = False

    def run(self) -> Optional[str]:
        queries = strip_sql_comments(self.command.queries)
        logger.debug("Query: %s", queries)
        if is_select_query(queries):
            return self.select(queries)
        return self.execute(queries)

    def select(self, sql: str, params: Sequence[Any] = ()) -> Optional[str]:
        """Run a row-returning query and render its result set."""
        if not self.connected:
            self.connect()

        cursor = self.connection.cursor()
        try:
            _execute(cursor, sql, params)
            table = Table(self.command.border_style)
            table.set_headers(column[0] for column in cursor.description or ())
            for row in cursor.fetchall():
                table.ingest_row(row)
        except self.driver_errors as exc:
            raise DriverError(f"{self.engine_name} error => {exc}") from exc
        finally:
            cursor.close()

        if not table.rows:
            print(EMPTY_RESULT_MESSAGE)
            return None

        logger.debug("Generating dbeer table...")
        return self.sink.write_table(table)

    def execute(self, sql: str) -> Optional[str]:
        """
        Execute non-row-returning statements.

        A single statement reports its status on stdout. Several statements
        are executed one by one and their numbered statuses, including
        errors, are written to a result file.
        """
        if not self.connected:
            self.connect()

        statements = split_queries(sql)
        if len(statements) == 1:
            try:
                print(f"  {self._execute_statement(statements[0])}")
            except self.driver_errors as exc:
                raise DriverError(f"{self.engine_name} error => {exc}") from exc
            return None

        results: List[str] = []
        for statement in statements:
            try:
                results.append(self._execute_statement(statement))
            except self.driver_errors as exc:
                logger.error("Error executing statement %r: %s", statement, exc)
                self.connection.rollback()
                results.append(str(exc))

        logger.debug("Statement results: %s", results)
        return self.sink.write_statement_results(numbered(results))

    def tables(self) -> None:
        if not self.connected:
            self.connect()

        sql, params = self.tables_query()
        cursor = self.connection.cursor()
        try:
            _execute(cursor, sql, params)
            names = [str(row[0]) for row in cursor.fetchall()]
        except self.driver_errors as exc:
            raise DriverError(f"{self.engine_name} error => {exc}") from exc
        finally:
            cursor.close()

        self.print_names(names)

    def table_info(self, table_name: str) -> Optional[str]:
        sql = self.table_info_query(table_name)
        logger.debug("Table info query: %s", sql)
        return self.select(sql, self.table_info_params(table_name))

    def _execute_statement(self, statement: str) -> str:
        cursor = self.connection.cursor()
        try:
            cursor.execute(statement)
            self.connection.commit()
            if is_insert_update_or_delete(statement):
                return f"Row(s) affected: {cursor.rowcount}"
            return STATEMENT_OK
        finally:
            cursor.close()


def _execute(cursor: Any, sql: str, params: Sequence[Any]) -> None:
    # pymysql and psycopg2 %-format the SQL whenever parameters are passed
    if params:
        cursor.execute(sql, params)
    else:
        cursor.execute(sql)
