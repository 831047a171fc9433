"""Helpers for SQL text handed to the relational connectors."""

import re
from typing import List

ROW_RETURNING_PREFIXES = ("select", "with", "pragma", "show", "describe", "explain")
DATA_CHANGE_PREFIXES = ("insert", "update", "delete")

_COMMENT_PATTERN = re.compile(
    r"""
    (
      '(?:[^']|'')*'            # single quoted string, '' is an escaped quote
    | "(?:[^"]|"")*"            # double quoted identifier
    | /\*.*?\*/                 # block comment
    | --[^\n]*                  # line comment
    )
    """,
    re.VERBOSE | re.DOTALL,
)


def strip_sql_comments(sql: str) -> str:
    """Remove ``--`` and ``/* */`` comments, leaving quoted text untouched."""

    def _replace(match: "re.Match[str]") -> str:
        text = match.group(0)
        if text.startswith(("'", '"')):
            return text
        return ""

    return _COMMENT_PATTERN.sub(_replace, sql)


def split_queries(sql: str) -> List[str]:
    """Split on ``;`` and drop statements that are empty once trimmed."""
    return [statement.strip() for statement in sql.split(";") if statement.strip()]


def is_select_query(sql: str) -> bool:
    query = sql.strip().lower()
    return bool(query) and query.startswith(ROW_RETURNING_PREFIXES)


def is_insert_update_or_delete(sql: str) -> bool:
    return sql.strip().lower().startswith(DATA_CHANGE_PREFIXES)
