# ========================================================================
# File:       tabquery/handlers/error_handler.py
# Purpose:    Formatira greške query sloja (poruka, mesto nastanka, traceback)
# Author:     Aleksandar Popovic
# Created:    2025-08-18
# Updated:    2025-09-02
# ========================================================================

import traceback
from typing import Optional


class ErrorHandler:
    @staticmethod
    def format_error(error: Exception) -> str:
        return f"{type(error).__name__}: {str(error)}"

    @staticmethod
    def location(error: Exception) -> Optional[str]:
        """Poslednji frame traceback-a kao 'fajl:linija u funkcija' (None ako greška nije bačena)."""
        if error.__traceback__ is None:
            return None
        frame = traceback.extract_tb(error.__traceback__)[-1]
        return f"{frame.filename}:{frame.lineno} in {frame.name}"

    @staticmethod
    def summary(error: Exception) -> str:
        """Jedna linija za log: tip, poruka i mesto nastanka."""
        where = ErrorHandler.location(error)
        formatted = ErrorHandler.format_error(error)
        return f"{formatted} (at {where})" if where else formatted

    @staticmethod
    def get_traceback(error: Exception) -> str:
        if error.__traceback__ is None:
            return ""
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))

    @staticmethod
    def display(error: Exception, dev_mode: bool = True):
        """Prikazuje grešku u dev režimu, bez logovanja."""
        if dev_mode:
            print(f"[ERROR]: {ErrorHandler.summary(error)}\n{ErrorHandler.get_traceback(error)}")
