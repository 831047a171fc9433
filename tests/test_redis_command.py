import pytest

from core.errors import UnsupportedOperation, ValidationError
from models.redis_command import (
    Del,
    Exists,
    Expire,
    FlushAll,
    Get,
    Keys,
    Set,
    Ttl,
    parse_redis_command,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("GET user:1", Get("user:1")),
        ('SET user:1 "John Doe"', Set("user:1", "John Doe")),
        ("SET counter 10 20", Set("counter", "10 20")),
        ("DEL a b c", Del(("a", "b", "c"))),
        ("EXISTS session", Exists("session")),
        ("  KEYS user:*  ", Keys("user:*")),
        ("EXPIRE session 60", Expire("session", 60)),
        ("TTL session", Ttl("session")),
        ("FLUSHALL", FlushAll()),
    ],
)
def test_parse_supported_commands(text, expected):
    assert parse_redis_command(text) == expected


@pytest.mark.parametrize(
    "text, message",
    [
        ("GET", "key is empty"),
        ("TTL   ", "key is empty"),
        ("DEL", "keys is empty"),
        ("SET", "values are empty"),
        ("SET lonely", "Missing second value"),
        ("EXPIRE session", "Missing second value"),
        ("EXPIRE session soon", "Failed to parse seconds as number"),
    ],
)
def test_invalid_arguments_raise_validation_error(text, message):
    with pytest.raises(ValidationError) as excinfo:
        parse_redis_command(text)

    assert str(excinfo.value) == message


def test_expire_rejects_extra_tokens():
    with pytest.raises(ValidationError):
        parse_redis_command("EXPIRE session 60 NX")


@pytest.mark.parametrize("text", ["HGET user name", "FLUSHALL ASYNC", "get user:1", ""])
def test_unknown_commands_are_unsupported(text):
    with pytest.raises(UnsupportedOperation) as excinfo:
        parse_redis_command(text)

    assert "not supported!" in str(excinfo.value)
