"""
Result Sink

Writes rendered results to timestamped files in the destination folder and
prints the two stdout lines the editor integration reads: the highlight
directives and the path of the written file.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from core.errors import ResultIoError
from core.table import Table

logger = logging.getLogger(__name__)

DBEER_EXTENSION = "dbeer"
DBEER_JSON_EXTENSION = "dbeer.json"
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
STATEMENT_HIGHLIGHT = "syn match dbeerStmtErr ' ' | hi link dbeerStmtErr ErrorMsg"


class ResultSink:
    """
    Persist rendered output for the editor integration.

    Args:
        dest_folder: Folder receiving the result files
        header_style_link: Highlight group linked to every header name
        clock: Optional callable returning the current datetime
    """

    def __init__(
        self,
        dest_folder: str,
        header_style_link: str = "Type",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.dest_folder = dest_folder
        self.header_style_link = header_style_link
        self.clock = clock or datetime.now

    def build_path(self, extension: str = DBEER_EXTENSION) -> str:
        """Return ``<dest_folder>/<YYYYMMDD-HHMMSS>.<extension>``."""
        timestamp = self.clock().strftime(TIMESTAMP_FORMAT)
        return os.path.join(self.dest_folder, f"{timestamp}.{extension}")

    def highlight(self, table: Table) -> str:
        """Build the syntax-match directives for every header, by position."""
        directives = [
            f"syn match header{position} '\\<{name}\\>' | "
            f"hi link header{position} {self.header_style_link} |"
            for position, name in table.column_names()
        ]
        matches = " ".join(directives)
        logger.debug("Highlight matches: %s", matches)
        return matches

    def write_table(self, table: Table) -> str:
        """Render a table, write it and announce it on stdout."""
        lines = table.render()
        filepath = self.build_path(DBEER_EXTENSION)
        self.write_lines(filepath, lines)
        print(self.highlight(table))
        print(filepath)
        return filepath

    def write_documents(self, documents: Sequence[str]) -> str:
        """Write pretty-printed documents, one per entry, to a JSON result file."""
        filepath = self.build_path(DBEER_JSON_EXTENSION)
        self.write_lines(filepath, documents)
        print(STATEMENT_HIGHLIGHT)
        print(filepath)
        return filepath

    def write_statement_results(self, results: Sequence[str]) -> str:
        """Write numbered per-statement status lines to a result file."""
        filepath = self.build_path(DBEER_EXTENSION)
        self.write_lines(filepath, results)
        print(STATEMENT_HIGHLIGHT)
        print(filepath)
        return filepath

    def write_lines(self, filepath: str, lines: Iterable[str]) -> None:
        """
        Write each line followed by a newline.

        A partially written file is removed before the error propagates.

        Raises:
            ResultIoError: if the file cannot be created or written
        """
        logger.debug("File path: %s", filepath)
        try:
            with open(filepath, "w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(f"{line}\n")
        except OSError as exc:
            logger.error("Error writing result file %s: %s", filepath, exc)
            _discard(filepath)
            raise ResultIoError(f"IO error => {exc}") from exc


def _discard(filepath: str) -> None:
    if os.path.exists(filepath):
        os.remove(filepath)


def numbered(results: Iterable[str]) -> List[str]:
    """Prefix statement results with their 1-based index."""
    return [f"{index})   {result}" for index, result in enumerate(results, start=1)]
