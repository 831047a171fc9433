"""
MongoDB call-chain grammar.

Parses shell-style expressions such as
``db.users.find({"age": 30}).limit(10)`` into a collection name plus a
command value. Argument bodies are kept as raw text; the Mongo connector
decodes them into documents.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from core.errors import ParseError, ValidationError

logger = logging.getLogger(__name__)

# A call body cannot contain parentheses: JSON arguments only use {} and [].
_CALL_PATTERN = re.compile(r"^([A-Za-z]+)\s*\(([^()]*)\)$", re.DOTALL)
_NUMBER_PATTERN = re.compile(r"^\d+$")

_OPENERS = "([{"
_CLOSERS = ")]}"
_QUOTES = "\"'"


@dataclass(frozen=True)
class Sort:
    arguments: str


@dataclass(frozen=True)
class Skip:
    count: int


@dataclass(frozen=True)
class Limit:
    count: int


Modifier = Union[Sort, Skip, Limit]


@dataclass(frozen=True)
class Find:
    filter: str
    modifier: Optional[Modifier] = None


@dataclass(frozen=True)
class FindOne:
    filter: str


@dataclass(frozen=True)
class CountDocuments:
    filter: str


@dataclass(frozen=True)
class InsertOne:
    document: str


@dataclass(frozen=True)
class InsertMany:
    documents: str


@dataclass(frozen=True)
class DeleteOne:
    filter: str


@dataclass(frozen=True)
class DeleteMany:
    filter: str


@dataclass(frozen=True)
class UpdateOne:
    arguments: str


@dataclass(frozen=True)
class UpdateMany:
    arguments: str


@dataclass(frozen=True)
class Drop:
    pass


MongoCommand = Union[
    Find,
    FindOne,
    CountDocuments,
    InsertOne,
    InsertMany,
    DeleteOne,
    DeleteMany,
    UpdateOne,
    UpdateMany,
    Drop,
]

_VERBS = {
    "findOne": FindOne,
    "countDocuments": CountDocuments,
    "insertOne": InsertOne,
    "insertMany": InsertMany,
    "deleteOne": DeleteOne,
    "deleteMany": DeleteMany,
    "updateOne": UpdateOne,
    "updateMany": UpdateMany,
}


@dataclass(frozen=True)
class MongoQuery:
    collection: str
    command: MongoCommand


def parse_mongo_command(text: str) -> MongoQuery:
    """
    Parse ``[db.]collection.verb(args)[.modifier(args)]``.

    Raises:
        ParseError: if the expression or the verb cannot be recognized;
            the error carries the raw text
        ValidationError: if a skip/limit argument is not a number
    """
    raw = text.strip()
    segments = split_call_chain(raw)

    if len(segments) < 2:
        raise ParseError(f"MongoDB bad format: {raw}", raw)

    if segments[0] == "db":
        if len(segments) < 3:
            raise ParseError(f"Error parsing function: {raw}", raw)
        collection, calls = segments[1], segments[2:]
    else:
        collection, calls = segments[0], segments[1:]

    if not collection:
        raise ParseError(f"MongoDB collection name is empty: {raw}", raw)
    if len(calls) > 2:
        raise ParseError(f"MongoDB supports one function and one modifier: {raw}", raw)

    verb, arguments = _split_call(calls[0], raw)
    modifier_segment = calls[1] if len(calls) == 2 else None

    if verb == "find":
        modifier = _parse_modifier(modifier_segment, raw) if modifier_segment else None
        command: MongoCommand = Find(arguments, modifier)
    elif verb == "drop":
        command = Drop()
    elif verb in _VERBS:
        command = _VERBS[verb](arguments)
    else:
        raise ParseError(f"MongoDB function not supported: {raw}", raw)

    if modifier_segment and verb != "find":
        logger.debug("Ignoring modifier '%s' after %s", modifier_segment, verb)

    logger.debug("Parsed Mongo command on '%s': %s", collection, command)
    return MongoQuery(collection=collection, command=command)


def split_call_chain(text: str) -> List[str]:
    """
    Split an expression on ``.`` outside brackets and quoted strings.

    ``users.find({"a.b": 1.5})`` gives ``["users", 'find({"a.b": 1.5})']``.
    """
    segments: List[str] = []
    current: List[str] = []
    depth = 0
    quote: Optional[str] = None
    escaped = False

    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue

        if char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char == "." and depth == 0:
            segments.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    segments.append("".join(current).strip())
    return segments


def split_update_arguments(arguments: str) -> Tuple[str, str]:
    """
    Split ``filter, update`` argument text of updateOne/updateMany.

    The update document starts at the last unmatched ``{`` before ``$set``.
    This is textual: it does not understand JSON.

    Raises:
        ValidationError: if ``$set`` does not occur in the arguments
    """
    set_position = arguments.find("$set")
    if set_position < 0:
        raise ValidationError("$set not found in update")

    start = 0
    depth = 0
    for index in range(set_position - 1, -1, -1):
        char = arguments[index]
        if char == "}":
            depth += 1
        elif char == "{":
            if depth == 0:
                start = index
                break
            depth -= 1

    query = arguments[:start].strip().rstrip(",").strip()
    update = arguments[start:].strip()
    return query, update


def _split_call(segment: str, raw: str) -> Tuple[str, str]:
    match = _CALL_PATTERN.match(segment.strip())
    if not match:
        raise ParseError(f"MongoDB function not supported: {raw}", raw)
    return match.group(1), match.group(2).strip()


def _parse_modifier(segment: str, raw: str) -> Optional[Modifier]:
    verb, arguments = _split_call(segment, raw)

    if verb == "sort":
        return Sort(arguments)
    if verb in ("skip", "limit"):
        if not _NUMBER_PATTERN.match(arguments):
            raise ValidationError(f"{verb} parameter could not be cast to a number")
        count = int(arguments)
        return Skip(count) if verb == "skip" else Limit(count)

    logger.debug("Discarding unsupported find modifier '%s'", verb)
    return None
