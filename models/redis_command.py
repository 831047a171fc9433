"""
Redis command grammar.

Translates one line of free text into a validated command value. Verbs are
recognized by prefix in a fixed priority order; every variant is fully
populated once parsing succeeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple, Union

from core.errors import UnsupportedOperation, ValidationError

logger = logging.getLogger(__name__)

GET = "GET"
SET = "SET"
DEL = "DEL"
EXISTS = "EXISTS"
EXPIRE = "EXPIRE"
KEYS = "KEYS"
TTL = "TTL"
FLUSHALL = "FLUSHALL"


@dataclass(frozen=True)
class Get:
    key: str


@dataclass(frozen=True)
class Set:
    key: str
    value: str


@dataclass(frozen=True)
class Del:
    keys: Tuple[str, ...]


@dataclass(frozen=True)
class Exists:
    key: str


@dataclass(frozen=True)
class Keys:
    pattern: str


@dataclass(frozen=True)
class Expire:
    key: str
    seconds: int


@dataclass(frozen=True)
class Ttl:
    key: str


@dataclass(frozen=True)
class FlushAll:
    pass


RedisCommand = Union[Get, Set, Del, Exists, Keys, Expire, Ttl, FlushAll]

_SINGLE_KEY_VERBS = (
    (GET, Get),
    (TTL, Ttl),
    (KEYS, Keys),
    (EXISTS, Exists),
)


def parse_redis_command(text: str) -> RedisCommand:
    """
    Parse a single Redis command line.

    Args:
        text: Raw command, e.g. ``SET user:1 "John Doe"``

    Returns:
        One of the RedisCommand variants

    Raises:
        ValidationError: if a required argument is empty or not numeric
        UnsupportedOperation: if no supported verb matches
    """
    query = text.strip()

    for verb, variant in _SINGLE_KEY_VERBS:
        if query.startswith(verb):
            return variant(_take_key(query, verb))

    if query == FLUSHALL:
        return FlushAll()

    if query.startswith(DEL):
        keys = _remainder(query, DEL)
        if not keys:
            raise ValidationError("keys is empty")
        return Del(tuple(keys.split()))

    if query.startswith(EXPIRE):
        values = _remainder(query, EXPIRE)
        if not values:
            raise ValidationError("values are empty")
        tokens = values.split()
        if len(tokens) < 2:
            raise ValidationError("Missing second value")
        if len(tokens) > 2:
            raise ValidationError(f"EXPIRE takes a key and seconds, got: {values}")
        try:
            seconds = int(tokens[1])
        except ValueError as exc:
            raise ValidationError("Failed to parse seconds as number") from exc
        return Expire(tokens[0], seconds)

    if query.startswith(SET):
        values = _remainder(query, SET)
        if not values:
            raise ValidationError("values are empty")
        parts = values.split(None, 1)
        if len(parts) < 2:
            raise ValidationError("Missing second value")
        return Set(parts[0], _strip_quotes(parts[1].strip()))

    raise UnsupportedOperation(f"Command '{query}' not supported!")


def _remainder(query: str, verb: str) -> str:
    return query[len(verb):].strip()


def _take_key(query: str, verb: str) -> str:
    key = _remainder(query, verb)
    if not key:
        raise ValidationError("key is empty")
    return key


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value
