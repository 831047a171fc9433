"""Invocation value built from the command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from config import Config
from core.border import BorderStyle
from core.errors import ConfigurationError


class Action(Enum):
    RUN = "1"
    TABLES = "2"
    TABLE_INFO = "3"
    PING = "4"

    @classmethod
    def from_code(cls, code: Union[str, int, "Action", None]) -> "Action":
        if isinstance(code, cls):
            return code
        if code is None:
            return cls.RUN
        value = str(code).strip()
        for action in cls:
            if value == action.value:
                return action
        normalized = value.upper().replace("-", "_")
        if normalized in cls.__members__:
            return cls[normalized]
        raise ConfigurationError(f"Option not supported: {code!r}")


@dataclass
class Command:
    """
    Everything one invocation needs.

    ``queries`` holds the SQL text, the Redis line or the Mongo expression
    for ``Action.RUN``, and the table name for ``Action.TABLE_INFO``.
    """

    engine: str
    conn_str: str = ""
    db_name: str = ""
    queries: str = ""
    border_style: BorderStyle = BorderStyle.DEFAULT
    dest_folder: str = field(default_factory=lambda: Config.DEST_FOLDER)
    header_style_link: str = field(default_factory=lambda: Config.HEADER_STYLE_LINK)
    action: Action = Action.RUN
