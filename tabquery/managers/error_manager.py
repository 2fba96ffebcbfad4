# ========================================================================
# File:       tabquery/managers/error_manager.py
# Purpose:    Ograničen registar grešaka query sloja (log + dev prikaz)
# Author:     Aleksandar Popovic
# Created:    2025-08-18
# Updated:    2025-09-02 (deque, jednolinijski log + traceback na DEBUG)
# ========================================================================

from collections import deque
from typing import Deque, List, Optional, Union

from tabquery.handlers.error_handler import ErrorHandler
from tabquery.managers.log_manager import DEFAULT_MEMORY_LIMIT, LogManager, memory_limit
from tabquery.helpers.core_helper import safe_call


class ErrorManager:
    _errors: Deque[Exception] = deque(maxlen=DEFAULT_MEMORY_LIMIT)
    _dev_mode = True

    @classmethod
    def initialize(cls, dev_mode: bool = True):
        cls._dev_mode = dev_mode
        cls._errors = deque(cls._errors, maxlen=memory_limit())

    @classmethod
    def create(cls, error: Exception):
        """
        Beleži grešku: ERROR linija sa mestom nastanka, ceo traceback na
        DEBUG nivou (upisuje se samo kada LOG_LEVEL to dozvoljava).
        """
        cls._errors.append(error)

        if cls._dev_mode:
            ErrorHandler.display(error, dev_mode=True)

        safe_call(LogManager.error, ErrorHandler.summary(error))
        trace = ErrorHandler.get_traceback(error).rstrip()
        if trace:
            safe_call(LogManager.debug, trace)

    @classmethod
    def read(cls, last_only: bool = True) -> Union[List[Exception], Optional[Exception]]:
        if last_only:
            return cls._errors[-1] if cls._errors else None
        return list(cls._errors)

    @classmethod
    def update(cls, index: int, new_error: Exception):
        if 0 <= index < len(cls._errors):
            cls._errors[index] = new_error

    @classmethod
    def delete(cls, index: int = None):
        if index is None:
            cls._errors.clear()
        elif 0 <= index < len(cls._errors):
            del cls._errors[index]
