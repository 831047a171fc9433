from typing import Optional
import logging

from core.connector_manager import ConnectorManager
from core.result_sink import ResultSink
from models.command import Action, Command


class QueryEngine:
    """
    Orchestrates one dbeer invocation: picks the connector for the engine,
    opens it, runs the requested action and closes it again.
    """

    def __init__(self, connector_manager: ConnectorManager = None,
                 logger: logging.Logger = None):
        """
        Initialize query engine.

        Args:
            connector_manager: ConnectorManager instance
            logger: Invocation logger returned by ``core.logger.init_logging``
        """
        self.connector_manager = connector_manager or ConnectorManager()
        self.logger = logger or logging.getLogger(__name__)

    def process(self, command: Command) -> Optional[str]:
        """
        Execute the action of an invocation.

        Args:
            command: Parsed invocation

        Returns:
            Path of the written result file, or None when the outcome was
            only printed to stdout
        """
        self.logger.debug("Parsed params: %s", command)

        sink = ResultSink(command.dest_folder, command.header_style_link)
        connector = self.connector_manager.create(command, sink)

        with connector:
            if command.action is Action.RUN:
                return connector.run()
            if command.action is Action.TABLES:
                connector.tables()
                return None
            if command.action is Action.TABLE_INFO:
                return connector.table_info(command.queries)
            connector.ping()
            return None
