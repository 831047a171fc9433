"""
Border catalog for rendered tables.

Each style resolves to an immutable set of eleven box-drawing glyphs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from core.errors import ConfigurationError


@dataclass(frozen=True)
class Border:
    corner_up_left: str
    corner_up_right: str
    corner_bottom_left: str
    corner_bottom_right: str
    division_up: str
    division_bottom: str
    horizontal: str
    vertical: str
    intersection: str
    vertical_left: str
    vertical_right: str


class BorderStyle(Enum):
    DEFAULT = "1"
    SIMPLE = "2"
    ROUNDED = "3"
    DOUBLE = "4"
    SIMPLE_DOUBLE = "5"

    @classmethod
    def from_code(cls, code: Union[str, int, "BorderStyle", None]) -> "BorderStyle":
        """
        Convert a numeric code or style name into a BorderStyle.

        Args:
            code: "1".."5", an int, a style name such as "rounded" or
                "simple-double", or None for the default style

        Raises:
            ConfigurationError: if the code names no known style
        """
        if isinstance(code, cls):
            return code
        if code is None:
            return cls.DEFAULT

        value = str(code).strip()
        for style in cls:
            if value == style.value:
                return style

        normalized = value.upper().replace("-", "_")
        if normalized in cls.__members__:
            return cls[normalized]

        raise ConfigurationError(f"Border style not supported: {code!r}")


_BORDERS = {
    BorderStyle.DEFAULT: Border(
        corner_up_left="┏",
        corner_up_right="┓",
        corner_bottom_left="┗",
        corner_bottom_right="┛",
        division_up="┳",
        division_bottom="┻",
        horizontal="━",
        vertical="┃",
        intersection="╋",
        vertical_left="┣",
        vertical_right="┫",
    ),
    BorderStyle.SIMPLE: Border(
        corner_up_left="┌",
        corner_up_right="┐",
        corner_bottom_left="└",
        corner_bottom_right="┘",
        division_up="┬",
        division_bottom="┴",
        horizontal="─",
        vertical="│",
        intersection="┼",
        vertical_left="├",
        vertical_right="┤",
    ),
    BorderStyle.ROUNDED: Border(
        corner_up_left="╭",
        corner_up_right="╮",
        corner_bottom_left="╰",
        corner_bottom_right="╯",
        division_up="┬",
        division_bottom="┴",
        horizontal="─",
        vertical="│",
        intersection="┼",
        vertical_left="├",
        vertical_right="┤",
    ),
    BorderStyle.DOUBLE: Border(
        corner_up_left="╔",
        corner_up_right="╗",
        corner_bottom_left="╚",
        corner_bottom_right="╝",
        division_up="╦",
        division_bottom="╩",
        horizontal="═",
        vertical="║",
        intersection="╬",
        vertical_left="╠",
        vertical_right="╣",
    ),
    BorderStyle.SIMPLE_DOUBLE: Border(
        corner_up_left="╒",
        corner_up_right="╕",
        corner_bottom_left="╘",
        corner_bottom_right="╛",
        division_up="╤",
        division_bottom="╧",
        horizontal="═",
        vertical="│",
        intersection="╪",
        vertical_left="╞",
        vertical_right="╡",
    ),
}


def resolve(style: Union[BorderStyle, str, int, None]) -> Border:
    """Return the glyph set for a style or style code."""
    return _BORDERS[BorderStyle.from_code(style)]
