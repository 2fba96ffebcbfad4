import pytest

from tabquery.config.env import EnvLoader
from tabquery.handlers.error_handler import ErrorHandler
from tabquery.handlers.log_handler import LogHandler
from tabquery.managers.error_manager import ErrorManager
from tabquery.managers.log_manager import LogManager
from tabquery.managers.query_manager import QueryManager
from tabquery.query.exceptions import InvalidArgument, QueryError
from tabquery.query.query import QuerySpec


@pytest.fixture
def log_file(tmp_path, monkeypatch):
    path = tmp_path / "run.log"
    monkeypatch.setenv("LOG_FILE_PATH", str(path))
    LogManager.delete()
    ErrorManager.delete()
    return path


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("TQ_FLAG", "Yes")
    monkeypatch.setenv("TQ_NUM", " 12 ")
    monkeypatch.setenv("TQ_BAD", "x12")
    assert EnvLoader.get_bool("TQ_FLAG") is True
    assert EnvLoader.get_bool("TQ_MISSING", True) is True
    assert EnvLoader.get_int("TQ_NUM") == 12
    assert EnvLoader.get_int("TQ_BAD", 7) == 7
    assert EnvLoader.debug_info()["loaded"] is True


def test_log_manager_keeps_entries_and_writes_file(log_file):
    LogManager.info("prvi")
    LogManager.create("custom", "drugi")
    assert LogManager.read() == [("INFO", "prvi"), ("CUSTOM", "drugi")]
    assert LogManager.read(last_only=True) == ("CUSTOM", "drugi")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("[INFO] ") and lines[0].endswith(" - prvi")
    assert lines[1].startswith("[CUSTOM] ")

    LogManager.update(0, "izmenjen")
    assert LogManager.read()[0] == ("INFO", "izmenjen")
    LogManager.delete(0)
    assert LogManager.read() == [("CUSTOM", "drugi")]


def test_log_level_threshold(log_file, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert LogHandler.threshold() == 30
    LogManager.debug("tiho")
    LogManager.info("tiho")
    LogManager.error("glasno")

    assert log_file.read_text(encoding="utf-8").count("\n") == 1
    # u memoriji ostaje sve
    assert [level for level, _ in LogManager.read()] == ["DEBUG", "INFO", "ERROR"]


def test_error_manager_records_and_logs(log_file):
    try:
        raise InvalidArgument("loš argument")
    except InvalidArgument as e:
        ErrorManager.create(e)

    last = ErrorManager.read()
    assert isinstance(last, InvalidArgument)
    assert ErrorHandler.format_error(last) == "InvalidArgument: loš argument"
    assert "Traceback" in ErrorHandler.get_traceback(last)
    assert "[ERROR]" in log_file.read_text(encoding="utf-8")


def test_error_handler_without_traceback():
    assert ErrorHandler.get_traceback(ValueError("x")) == ""


def test_query_manager_run_logs_outcome(people, log_file):
    spec = QuerySpec().and_where("city", "=", "Beograd").select("name")
    result = QueryManager.run(spec, people)

    assert result.to_list() == [{"name": "Ana"}, {"name": "Ceca"}]
    level, message = LogManager.read(last_only=True)
    assert level == "INFO"
    assert "[QueryManager] run -> source=ListSource" in message
    assert "rows=2" in message


def test_query_manager_fetch(people, log_file):
    rows = QueryManager.fetch(QuerySpec().order_by_desc("id").limit(2).select("id"), people)
    assert rows == [{"id": "5"}, {"id": "4"}]


def test_query_manager_records_query_errors(people, log_file):
    spec = QuerySpec().and_where("salary", ">", "1")
    with pytest.raises(QueryError):
        QueryManager.run(spec, people)

    assert isinstance(ErrorManager.read(), InvalidArgument)
    assert LogManager.read(last_only=True)[0] == "WARNING"
    assert "run failed" in LogManager.read(last_only=True)[1]


@pytest.fixture
def small_registries(log_file, monkeypatch):
    monkeypatch.setenv("MEMORY_ENTRIES_LIMIT", "3")
    LogManager.initialize()
    ErrorManager.initialize(dev_mode=False)
    yield
    monkeypatch.delenv("MEMORY_ENTRIES_LIMIT")
    LogManager.initialize()
    ErrorManager.initialize(dev_mode=False)


def test_registries_keep_only_latest_entries(small_registries):
    assert LogManager.capacity() == 3
    for i in range(5):
        LogManager.info(f"poruka {i}")
    assert LogManager.read() == [("INFO", "poruka 2"), ("INFO", "poruka 3"), ("INFO", "poruka 4")]

    for i in range(4):
        ErrorManager.create(InvalidArgument(f"greška {i}"))
    assert [str(e) for e in ErrorManager.read(last_only=False)] == ["greška 1", "greška 2", "greška 3"]


def test_repeated_runs_do_not_grow_registries(small_registries, people):
    for _ in range(10):
        QueryManager.run(QuerySpec().limit(1), people)
    assert len(LogManager.read()) == 3


def test_error_log_line_points_to_origin(people, log_file):
    try:
        QuerySpec().and_where("salary", "=", "1").apply(people).to_list()
    except InvalidArgument as e:
        ErrorManager.create(e)
        assert ErrorHandler.location(e).split(" in ")[-1] == "column_value"

    level, message = [entry for entry in LogManager.read() if entry[0] == "ERROR"][-1]
    assert message.startswith("InvalidArgument: ")
    assert "comparison.py:" in message
    assert ErrorHandler.location(ValueError("x")) is None
    assert ErrorHandler.summary(ValueError("x")) == "ValueError: x"
