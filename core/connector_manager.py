from typing import Dict, List, Type
import logging

from connectors.mongo.connector import MongoConnector
from connectors.mysql.connector import MySqlConnector
from connectors.postgres.connector import PostgresConnector
from connectors.redis.connector import RedisConnector
from connectors.sqlite.connector import SqliteConnector
from core.base_connector import BaseConnector
from core.errors import ConfigurationError
from core.result_sink import ResultSink
from models.command import Command

logger = logging.getLogger(__name__)


class ConnectorManager:
    """
    Resolves engine names to connector classes.
    """

    CONNECTORS: Dict[str, Type[BaseConnector]] = {
        "sqlite": SqliteConnector,
        "postgres": PostgresConnector,
        "mysql": MySqlConnector,
        "mongo": MongoConnector,
        "redis": RedisConnector,
    }

    ALIASES: Dict[str, str] = {
        "sqlite3": "sqlite",
        "postgresql": "postgres",
        "mariadb": "mysql",
        "mongodb": "mongo",
    }

    def __init__(self, connectors: Dict[str, Type[BaseConnector]] = None):
        """
        Initialize connector manager.

        Args:
            connectors: Optional engine name to connector class mapping
        """
        self.connectors = dict(connectors) if connectors is not None else dict(self.CONNECTORS)

    def list_engines(self) -> List[str]:
        return sorted(self.connectors)

    def get_connector_class(self, engine: str) -> Type[BaseConnector]:
        """
        Look up the connector class for an engine name.

        Raises:
            ConfigurationError: if the engine is not supported
        """
        name = (engine or "").strip().lower()
        name = self.ALIASES.get(name, name)
        if name not in self.connectors:
            raise ConfigurationError(f"Engine {engine} is not supported")
        return self.connectors[name]

    def create(self, command: Command, sink: ResultSink) -> BaseConnector:
        """Instantiate the connector serving ``command.engine``."""
        connector_class = self.get_connector_class(command.engine)
        logger.debug("Using connector %s for engine '%s'", connector_class.__name__, command.engine)
        return connector_class(command, sink)
