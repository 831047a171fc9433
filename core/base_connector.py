"""
Base class for backend connectors.

Every backend offers the same operation set (run, tables, table info and
ping). Operations a backend cannot serve raise ``UnsupportedOperation``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from core.errors import UnsupportedOperation
from core.result_sink import ResultSink
from models.command import Command

logger = logging.getLogger(__name__)

PING_MESSAGE = "Successfully connected to the database!"
EMPTY_RESULT_MESSAGE = "  Query has returned 0 results."


class BaseConnector(ABC):
    """
    Connector for one backend, used for exactly one invocation.

    Args:
        command: Parsed invocation (connection string, database, queries)
        sink: Result sink receiving rendered output
    """

    engine_name = "base"

    def __init__(self, command: Command, sink: ResultSink):
        self.command = command
        self.sink = sink
        self.connected = False

    def __enter__(self) -> "BaseConnector":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the backend."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the backend."""

    @abstractmethod
    def run(self) -> Optional[str]:
        """
        Execute ``command.queries``.

        Returns:
            Path of the written result file, or None when only a status
            line was printed
        """

    def ping(self) -> None:
        """Report that the connection opened correctly."""
        if not self.connected:
            self.connect()
        print(PING_MESSAGE)

    def tables(self) -> None:
        raise UnsupportedOperation(f"Listing tables is not supported for {self.engine_name}")

    def table_info(self, table_name: str) -> Optional[str]:
        raise UnsupportedOperation(f"Table info is not supported for {self.engine_name}")

    def table_info_query(self, table_name: str) -> str:
        raise UnsupportedOperation(f"Table info is not supported for {self.engine_name}")

    @staticmethod
    def print_names(names) -> None:
        """Print object names the way the editor expects: ``[A B C]``."""
        formatted = " ".join(name.upper() for name in names)
        logger.debug("Table names: %s", formatted)
        print(f"[{formatted}]")
