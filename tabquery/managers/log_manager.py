# ============================================================================
# File:       tabquery/managers/log_manager.py
# Purpose:    LogManager klasa: ograničen registar logova iznad LogHandler-a
# Author:     Aleksandar Popovic
# Created:    2025-08-18
# Updated:    2025-09-02 (deque sa MEMORY_ENTRIES_LIMIT)
# ============================================================================

from collections import deque
from typing import Deque, List, Optional, Tuple, Union

from tabquery.config.env import EnvLoader
from tabquery.handlers.log_handler import LogHandler, LEVELS
from tabquery.helpers.core_helper import safe_call

DEFAULT_MEMORY_LIMIT = 1000

LogEntry = Tuple[str, str]


def memory_limit() -> int:
    """Koliko poslednjih unosa registri (log, greške) čuvaju u memoriji."""
    limit = EnvLoader.get_int("MEMORY_ENTRIES_LIMIT", DEFAULT_MEMORY_LIMIT)
    return limit if limit > 0 else DEFAULT_MEMORY_LIMIT


class LogManager:
    """
    Svaki unos ide u fajl (preko LogHandler-a, uz LOG_LEVEL prag) i u
    memorijski registar. Registar je deque sa maxlen, pa najstariji
    unosi otpadaju kada se popuni.
    """
    _log_entries: Deque[LogEntry] = deque(maxlen=DEFAULT_MEMORY_LIMIT)

    @classmethod
    def initialize(cls):
        cls._log_entries = deque(maxlen=memory_limit())

    @classmethod
    def create(cls, level: str, message: str):
        level_upper = (level or "").upper()
        cls._log_entries.append((level_upper, message))

        # poznat nivo -> odgovarajuća metoda handler-a, inače direktan upis
        method = getattr(LogHandler, level_upper.lower(), None)
        if level_upper in LEVELS and callable(method):
            safe_call(method, message)
            return
        safe_call(LogHandler._write, level_upper, message)

    @classmethod
    def read(cls, last_only: bool = False) -> Union[List[LogEntry], Optional[LogEntry]]:
        if last_only:
            return cls._log_entries[-1] if cls._log_entries else None
        return list(cls._log_entries)

    @classmethod
    def update(cls, index: int, new_message: str):
        if 0 <= index < len(cls._log_entries):
            level = cls._log_entries[index][0]
            cls._log_entries[index] = (level, new_message)

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._log_entries.clear()
        elif 0 <= index < len(cls._log_entries):
            del cls._log_entries[index]

    @classmethod
    def capacity(cls) -> Optional[int]:
        return cls._log_entries.maxlen

    # === Shortcut metode ===

    @classmethod
    def debug(cls, message: str):
        cls.create("DEBUG", message)

    @classmethod
    def info(cls, message: str):
        cls.create("INFO", message)

    @classmethod
    def warning(cls, message: str):
        cls.create("WARNING", message)

    @classmethod
    def success(cls, message: str):
        cls.create("SUCCESS", message)

    @classmethod
    def error(cls, message: str):
        cls.create("ERROR", message)

    @classmethod
    def critical(cls, message: str):
        cls.create("CRITICAL", message)
