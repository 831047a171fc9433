"""
Redis Connector

Each line of ``-queries`` is one command of the Redis grammar. A single
command prints its status line; several commands are run in order and their
numbered statuses are written to a result file.
"""

import logging
from typing import List, Optional

import redis

from config import Config
from core.base_connector import PING_MESSAGE, BaseConnector
from core.errors import BackendConnectionError, DBeerError, DriverError
from core.result_sink import numbered
from models.redis_command import (
    Del,
    Exists,
    Expire,
    FlushAll,
    Get,
    Keys,
    RedisCommand,
    Set,
    Ttl,
    parse_redis_command,
)

logger = logging.getLogger(__name__)


class RedisConnector(BaseConnector):
    """
    Connector for Redis.

    Args:
        command: Invocation carrying the ``redis://`` URL and the command lines
        sink: Result sink for multi-command output
        client: Optional redis client, used instead of opening one
    """

    engine_name = "redis"

    def __init__(self, command, sink, client: Optional[redis.Redis] = None):
        super().__init__(command, sink)
        self.client = client
        self.connected = client is not None

    def connect(self) -> None:
        if self.connected:
            return
        try:
            self.client = redis.Redis.from_url(
                self.command.conn_str,
                socket_connect_timeout=Config.CONNECT_TIMEOUT,
                decode_responses=True,
            )
            self.client.ping()
        except (redis.exceptions.RedisError, ValueError) as exc:
            raise BackendConnectionError(
                f"Error connecting Redis. Connection string: {self.command.conn_str}"
            ) from exc
        self.connected = True

    def disconnect(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        self.connected = False

    def ping(self) -> None:
        if not self.connected:
            self.connect()
        print(PING_MESSAGE)

    def run(self) -> Optional[str]:
        if not self.connected:
            self.connect()

        lines = [line.strip() for line in self.command.queries.splitlines() if line.strip()]
        if len(lines) <= 1:
            print(self.execute(parse_redis_command(self.command.queries)))
            return None

        results: List[str] = []
        for line in lines:
            try:
                results.append(self.execute(parse_redis_command(line)).strip())
            except DBeerError as exc:
                logger.error("Error executing Redis command %r: %s", line, exc)
                results.append(str(exc))
        return self.sink.write_statement_results(numbered(results))

    def execute(self, command: RedisCommand) -> str:
        """Run one command and return its status line."""
        logger.debug("Redis command: %s", command)
        try:
            return self._dispatch(command)
        except redis.exceptions.ConnectionError as exc:
            raise BackendConnectionError(f"Redis error => {exc}") from exc
        except redis.exceptions.RedisError as exc:
            raise DriverError(f"Redis error => {exc}") from exc

    def _dispatch(self, command: RedisCommand) -> str:
        client = self.client

        if isinstance(command, Get):
            value = client.get(command.key)
            return f"Key '{command.key}' is '{'nil' if value is None else value}'"
        if isinstance(command, Set):
            client.set(command.key, command.value)
            return f"  Key '{command.key}' has been set with '{command.value}'"
        if isinstance(command, Del):
            deleted = client.delete(*command.keys)
            return f"{deleted} key(s) have been deleted."
        if isinstance(command, Exists):
            found = client.exists(command.key)
            return f"Key '{command.key}' {'exists.' if found else 'does not exist.'}"
        if isinstance(command, Keys):
            keys = client.keys(command.pattern)
            return f"Pattern '{command.pattern}' returns: [{', '.join(str(key) for key in keys)}]"
        if isinstance(command, Expire):
            client.expire(command.key, command.seconds)
            return f"Key '{command.key}' has been set with expiration of {command.seconds}s"
        if isinstance(command, Ttl):
            remaining = client.ttl(command.key)
            return f"Key '{command.key}' remaining time is {remaining}s"
        if isinstance(command, FlushAll):
            client.flushall()
            return "  All Keys have been deleted."
        raise DriverError(f"Unhandled Redis command: {command!r}")
