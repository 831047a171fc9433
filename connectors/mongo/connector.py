"""
MongoDB Connector

Executes shell-style call chains (``db.users.find({...}).limit(5)``) with
pymongo. ``find``/``findOne`` results are written as pretty-printed
documents; every other verb prints one status line.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import json_util
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, PyMongoError

from config import Config
from core.base_connector import EMPTY_RESULT_MESSAGE, PING_MESSAGE, BaseConnector
from core.errors import BackendConnectionError, DriverError, ParseError, UnsupportedOperation, ValidationError
from models.mongo_command import (
    CountDocuments,
    DeleteMany,
    DeleteOne,
    Drop,
    Find,
    FindOne,
    InsertMany,
    InsertOne,
    Limit,
    MongoCommand,
    Skip,
    Sort,
    UpdateMany,
    UpdateOne,
    parse_mongo_command,
    split_update_arguments,
)

logger = logging.getLogger(__name__)


class MongoConnector(BaseConnector):
    """
    Connector for MongoDB.

    Args:
        command: Invocation carrying the connection URI, database and expression
        sink: Result sink for document output
        db_client: Optional MongoClient, used instead of opening one
    """

    engine_name = "mongo"

    def __init__(self, command, sink, db_client: MongoClient = None):
        super().__init__(command, sink)
        self.client = db_client
        self.db = db_client[command.db_name] if db_client is not None else None
        self.connected = db_client is not None

    def connect(self) -> None:
        if self.connected:
            return
        try:
            self.client = MongoClient(
                self.command.conn_str,
                serverSelectionTimeoutMS=Config.MONGO_TIMEOUT_MS,
            )
        except (PyMongoError, ValueError) as exc:
            raise BackendConnectionError(
                f"Error connecting MongoDB. Connection string: {self.command.conn_str}"
            ) from exc
        self.db = self.client[self.command.db_name]
        self.connected = True

    def disconnect(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        self.db = None
        self.connected = False

    def ping(self) -> None:
        if not self.connected:
            self.connect()
        try:
            self.client.admin.command("ping")
        except PyMongoError as exc:
            raise BackendConnectionError(f"Mongo error => {exc}") from exc
        print(PING_MESSAGE)

    def tables(self) -> None:
        if not self.connected:
            self.connect()
        try:
            names = self.db.list_collection_names()
        except PyMongoError as exc:
            raise _driver_error(exc) from exc
        self.print_names(names)

    def table_info(self, table_name: str) -> Optional[str]:
        raise UnsupportedOperation("Table info is not supported for MongoDB")

    def run(self) -> Optional[str]:
        if not self.connected:
            self.connect()

        query = parse_mongo_command(self.command.queries)
        # pymongo checks cursor options such as sort keys with ValueError and TypeError
        try:
            collection = self.db[query.collection]
            return self.execute(collection, query.command)
        except (PyMongoError, ValueError, TypeError) as exc:
            raise _driver_error(exc) from exc

    def execute(self, collection: Collection, command: MongoCommand) -> Optional[str]:
        """Dispatch one parsed command against a collection."""
        name = collection.name

        if isinstance(command, Find):
            cursor = collection.find(create_document(command.filter))
            modifier = command.modifier
            if isinstance(modifier, Sort):
                cursor = cursor.sort(list(create_document(modifier.arguments).items()))
            elif isinstance(modifier, Skip):
                cursor = cursor.skip(modifier.count)
            elif isinstance(modifier, Limit):
                cursor = cursor.limit(modifier.count)

            documents = [to_pretty_json(document) for document in cursor]
            if not documents:
                print(EMPTY_RESULT_MESSAGE)
                return None
            return self.sink.write_documents(documents)

        if isinstance(command, FindOne):
            document = collection.find_one(create_document(command.filter))
            if document is None:
                print(EMPTY_RESULT_MESSAGE)
                return None
            return self.sink.write_documents([to_pretty_json(document)])

        if isinstance(command, CountDocuments):
            total = collection.count_documents(create_document(command.filter))
            print(f"  Collection {name} count: {total} results.")
        elif isinstance(command, InsertOne):
            inserted = collection.insert_one(create_document(command.document)).inserted_id
            print(f"  Collection {name}, document inserted with ID: {inserted}")
        elif isinstance(command, InsertMany):
            inserted = collection.insert_many(create_documents(command.documents)).inserted_ids
            ids = ", ".join(str(value) for value in inserted)
            print(f"  Collection {name}, documents inserted with ID(s): {ids}")
        elif isinstance(command, DeleteOne):
            deleted = collection.delete_one(create_document(command.filter)).deleted_count
            print(f"  Collection {name}, deleted {deleted} document(s)")
        elif isinstance(command, DeleteMany):
            deleted = collection.delete_many(create_document(command.filter)).deleted_count
            print(f"  Collection {name}, deleted {deleted} document(s)")
        elif isinstance(command, (UpdateOne, UpdateMany)):
            query, update = split_update_arguments(command.arguments)
            update_method = collection.update_one if isinstance(command, UpdateOne) else collection.update_many
            modified = update_method(create_document(query), create_document(update)).modified_count
            print(f"  Collection {name}, updated {modified} document(s)")
        elif isinstance(command, Drop):
            collection.drop()
            print(f"  Collection {name} dropped successfully.")
        return None


def create_document(text: str) -> Dict[str, Any]:
    """
    Decode an argument body into a document; an empty body matches everything.

    Raises:
        ParseError: if the text is not valid (extended) JSON
        ValidationError: if the text is not a JSON object
    """
    if not text.strip():
        return {}
    value = _loads(text)
    if not isinstance(value, dict):
        raise ValidationError(f"Expected a JSON object: {text}")
    return value


def create_documents(text: str) -> List[Dict[str, Any]]:
    value = _loads(text)
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ValidationError("Expected JSON array")
    return value


def to_pretty_json(document: Dict[str, Any]) -> str:
    return json_util.dumps(document, indent=2)


def _loads(text: str) -> Any:
    try:
        return json_util.loads(text)
    except ValueError as exc:
        raise ParseError(f"JSON parser error => {exc}", text) from exc


def _driver_error(exc: Exception) -> Exception:
    if isinstance(exc, ConnectionFailure):
        return BackendConnectionError(f"Mongo error => {exc}")
    return DriverError(f"Mongo error => {exc}")
