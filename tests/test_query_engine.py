import sqlite3

import pytest

from core.base_connector import BaseConnector
from core.connector_manager import ConnectorManager
from core.errors import ConfigurationError, UnsupportedOperation
from core.query_engine import QueryEngine
from models.command import Action, Command


class StubConnector(BaseConnector):
    engine_name = "stub"
    calls = []

    def connect(self):
        self.connected = True
        StubConnector.calls.append("connect")

    def disconnect(self):
        self.connected = False
        StubConnector.calls.append("disconnect")

    def run(self):
        StubConnector.calls.append(("run", self.command.queries))
        return "/tmp/result.dbeer"

    def tables(self):
        StubConnector.calls.append("tables")


@pytest.fixture
def engine():
    StubConnector.calls = []
    return QueryEngine(ConnectorManager({"stub": StubConnector}))


def test_run_action_returns_result_path(engine):
    command = Command(engine="stub", queries="SELECT 1")

    assert engine.process(command) == "/tmp/result.dbeer"
    assert StubConnector.calls == ["connect", ("run", "SELECT 1"), "disconnect"]


def test_tables_action(engine):
    assert engine.process(Command(engine="stub", action=Action.TABLES)) is None
    assert StubConnector.calls == ["connect", "tables", "disconnect"]


def test_ping_action_prints_success(engine, capsys):
    engine.process(Command(engine="STUB", action=Action.PING))

    assert capsys.readouterr().out == "Successfully connected to the database!\n"


def test_connector_is_closed_when_action_fails(engine):
    with pytest.raises(UnsupportedOperation):
        engine.process(Command(engine="stub", queries="t", action=Action.TABLE_INFO))

    assert StubConnector.calls == ["connect", "disconnect"]


def test_unknown_engine_is_rejected():
    with pytest.raises(ConfigurationError) as excinfo:
        QueryEngine().process(Command(engine="oracle"))

    assert str(excinfo.value) == "Engine oracle is not supported"


@pytest.mark.parametrize("alias, name", [("sqlite3", "sqlite"), ("postgresql", "postgres"), ("mongodb", "mongo")])
def test_engine_aliases(alias, name):
    manager = ConnectorManager()

    assert manager.get_connector_class(alias) is manager.get_connector_class(name)


def test_list_engines():
    assert ConnectorManager().list_engines() == ["mongo", "mysql", "postgres", "redis", "sqlite"]


def test_sqlite_end_to_end(tmp_path, capsys):
    db_path = tmp_path / "data.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE items (id INTEGER)")
    conn.execute("INSERT INTO items VALUES (7)")
    conn.commit()
    conn.close()

    command = Command(
        engine="sqlite",
        db_name=str(db_path),
        queries="select id from items",
        dest_folder=str(tmp_path),
    )
    filepath = QueryEngine().process(command)

    with open(filepath, encoding="utf-8") as handle:
        assert handle.read().splitlines() == [
            "┏━━━━┳━━━━┓",
            "┃ #  ┃ ID ┃",
            "┣━━━━╋━━━━┫",
            "┃ #1 ┃ 7  ┃",
            "┗━━━━┻━━━━┛",
        ]
    assert capsys.readouterr().out.splitlines()[1] == filepath
