import sqlite3
from unittest.mock import MagicMock

import pytest

from core.border import BorderStyle
from core.errors import ConfigurationError
from models.command import Action
from run_query import build_command, main, parse_args


def test_parse_args_accepts_single_and_double_dash_flags():
    args = parse_args(
        [
            "-engine", "sqlite",
            "--dbname", "shop.db",
            "-queries", "select 1",
            "-border-style", "3",
            "--option", "2",
            "-log-debug", "true",
        ]
    )

    assert args.engine == "sqlite"
    assert args.db_name == "shop.db"
    assert args.queries == "select 1"
    assert args.log_debug is True

    command = build_command(args)
    assert command.border_style is BorderStyle.ROUNDED
    assert command.action is Action.TABLES


@pytest.mark.parametrize(
    "flag, value",
    [
        ("-border-style", "9"),
        ("-option", "7"),
    ],
)
def test_build_command_rejects_unknown_codes(flag, value):
    args = parse_args(["-engine", "sqlite", flag, value])

    with pytest.raises(ConfigurationError):
        build_command(args)


def test_main_runs_query_and_prints_result_path(tmp_path, capsys):
    db_path = tmp_path / "cli.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE t (id INTEGER)")
    conn.execute("INSERT INTO t VALUES (1)")
    conn.commit()
    conn.close()

    exit_code = main(
        [
            "-engine", "sqlite",
            "-dbname", str(db_path),
            "-queries", "SELECT id FROM t",
            "-dest-folder", str(tmp_path),
            "-border-style", "2",
        ]
    )

    assert exit_code == 0
    out_lines = capsys.readouterr().out.splitlines()
    assert len(out_lines) == 2
    assert out_lines[0].startswith("syn match header1")
    with open(out_lines[1], encoding="utf-8") as handle:
        assert handle.readline() == "┌────┬────┐\n"


def test_main_reports_errors_and_logs_them(tmp_path, capsys):
    log_file = tmp_path / "dbeer.log"

    exit_code = main(["-engine", "oracle", "-dbeer-log-file", str(log_file)])

    assert exit_code == 1
    assert capsys.readouterr().out == "[ERROR] Engine oracle is not supported\n"
    log_text = log_file.read_text(encoding="utf-8")
    assert "[ERROR] [" in log_text
    assert "[PY] [ERROR] Engine oracle is not supported" in log_text


def test_main_ping(tmp_path, capsys):
    exit_code = main(
        ["-engine", "sqlite", "-dbname", str(tmp_path / "new.db"), "-option", "4"]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "Successfully connected to the database!\n"


def test_main_reports_rejected_mongo_sort(monkeypatch, capsys):
    client = MagicMock()
    client["shop"]["users"].find.return_value.sort.side_effect = ValueError(
        "key_or_list must not be empty"
    )
    monkeypatch.setattr("connectors.mongo.connector.MongoClient", MagicMock(return_value=client))

    exit_code = main(
        [
            "-engine", "mongo",
            "-conn-str", "mongodb://localhost:27017",
            "-dbname", "shop",
            "-queries", "db.users.find().sort({})",
        ]
    )

    assert exit_code == 1
    assert capsys.readouterr().out == "[ERROR] Mongo error => key_or_list must not be empty\n"
