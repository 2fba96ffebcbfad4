import os
import sys
from pathlib import Path
import pytest

# Omogući import projekta kad se testovi pokreću iz bilo kog radnog dir-a
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tabquery.config.env import EnvLoader
from tabquery.managers.query_manager import QueryManager
from tabquery.sources.list_source import ListSource


@pytest.fixture(scope="session", autouse=True)
def ensure_env_and_init(tmp_path_factory):
    """
    - Log fajl ide u privremeni folder (ne diramo data/logs).
    - Dev režim isključen da testovi ne pune stdout traceback-ovima.
    - Učitaj .env i inicijalizuj QueryManager.
    """
    log_dir = tmp_path_factory.mktemp("logs")
    previous = {k: os.environ.get(k) for k in ("LOG_FILE_PATH", "APP_DEBUG", "LOG_LEVEL")}
    os.environ["LOG_FILE_PATH"] = str(log_dir / "test.log")
    os.environ["APP_DEBUG"] = "false"
    os.environ["LOG_LEVEL"] = "debug"

    EnvLoader.load()
    QueryManager.initialize(reload_env=True)
    yield
    for k, v in previous.items():
        if v is None:
            os.environ.pop(k, None)
        else:
            os.environ[k] = v


@pytest.fixture
def people():
    """Standardna mala tabela sa zaglavljem (sve ćelije su stringovi)."""
    return ListSource(
        [
            ["1", "Ana", "ana@example.com", "30", "Beograd"],
            ["2", "Boris", "boris@example.com", "25", "Novi Sad"],
            ["3", "Ceca", "ceca@example.com", "27", "Beograd"],
            ["4", "Dejan", "dejan@example.com", "25", "Niš"],
            ["5", "Ema", None, "41", "Novi Sad"],
        ],
        header=["id", "name", "email", "age", "city"],
    )


@pytest.fixture
def make_rows():
    """
    Helper: napravi ListSource bez zaglavlja od zadatih redova.
    """
    def _maker(*rows):
        return ListSource([list(r) for r in rows])
    return _maker
