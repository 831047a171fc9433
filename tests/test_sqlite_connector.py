import sqlite3

import pytest

from connectors.sqlite.connector import SqliteConnector
from core.border import BorderStyle
from core.errors import DriverError
from core.result_sink import STATEMENT_HIGHLIGHT, ResultSink
from models.command import Command


@pytest.fixture
def database(tmp_path):
    path = tmp_path / "shop.db"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE t (id INTEGER, name TEXT)")
    conn.executemany("INSERT INTO t VALUES (?, ?)", [(1, "Alice"), (2, None)])
    conn.commit()
    conn.close()
    return path


def _connector(database, tmp_path, queries, border_style=BorderStyle.SIMPLE):
    command = Command(
        engine="sqlite",
        db_name=str(database),
        queries=queries,
        border_style=border_style,
        dest_folder=str(tmp_path),
    )
    return SqliteConnector(command, ResultSink(str(tmp_path)))


def _read(filepath):
    with open(filepath, encoding="utf-8") as handle:
        return handle.read().splitlines()


def test_select_writes_rendered_table(database, tmp_path, capsys):
    with _connector(database, tmp_path, "-- all ids\nSELECT id FROM t ORDER BY id") as connector:
        filepath = connector.run()

    assert _read(filepath) == [
        "┌────┬────┐",
        "│ #  │ ID │",
        "├────┼────┤",
        "│ #1 │ 1  │",
        "├────┼────┤",
        "│ #2 │ 2  │",
        "└────┴────┘",
    ]
    out_lines = capsys.readouterr().out.splitlines()
    assert out_lines[0].startswith(r"syn match header1 '\<#\>' | hi link header1 Type |")
    assert out_lines[1] == filepath


def test_null_values_are_rendered(database, tmp_path):
    with _connector(database, tmp_path, "SELECT name FROM t WHERE id = 2") as connector:
        filepath = connector.run()

    assert _read(filepath)[3] == "│ #1 │ NULL │"


def test_empty_result_prints_message(database, tmp_path, capsys):
    with _connector(database, tmp_path, "SELECT id FROM t WHERE id > 100") as connector:
        assert connector.run() is None

    assert capsys.readouterr().out == "  Query has returned 0 results.\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["shop.db"]


def test_single_statement_prints_affected_rows(database, tmp_path, capsys):
    with _connector(database, tmp_path, "INSERT INTO t VALUES (3, 'Carol')") as connector:
        assert connector.run() is None

    assert capsys.readouterr().out == "  Row(s) affected: 1\n"


def test_single_ddl_statement_reports_success(database, tmp_path, capsys):
    with _connector(database, tmp_path, "CREATE TABLE u (x INTEGER);") as connector:
        connector.run()

    assert capsys.readouterr().out == "  Statement executed correctly.\n"


def test_multiple_statements_write_numbered_results(database, tmp_path, capsys):
    queries = (
        "INSERT INTO t VALUES (4, 'Dan');"
        "CREATE TABLE u (x INTEGER);"
        "INSERT INTO missing VALUES (1)"
    )
    with _connector(database, tmp_path, queries) as connector:
        filepath = connector.run()

    assert _read(filepath) == [
        "1)   Row(s) affected: 1",
        "2)   Statement executed correctly.",
        "3)   no such table: missing",
    ]
    assert capsys.readouterr().out.splitlines() == [STATEMENT_HIGHLIGHT, filepath]


def test_bad_select_raises_driver_error(database, tmp_path):
    with _connector(database, tmp_path, "SELECT nope FROM t") as connector:
        with pytest.raises(DriverError) as excinfo:
            connector.run()

    assert str(excinfo.value).startswith("sqlite error => ")


def test_tables_prints_upper_case_names(database, tmp_path, capsys):
    with _connector(database, tmp_path, "") as connector:
        connector.tables()

    assert capsys.readouterr().out == "[T]\n"


def test_table_info_renders_pragma_result(database, tmp_path):
    with _connector(database, tmp_path, "t") as connector:
        filepath = connector.table_info("t")

    lines = _read(filepath)
    assert len(lines) == 3 + 2 * 2
    assert "NAME" in lines[1]
    assert "DFLT_VALUE" in lines[1]
    assert "INTEGER" in lines[3]
    assert "NULL" in lines[3]
