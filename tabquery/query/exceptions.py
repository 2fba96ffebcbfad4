# =============================================================================
# File:        tabquery/query/exceptions.py
# Purpose:     Izuzeci query sloja
# Author:      Aleksandar Popović
# Created:     2025-08-18
# Updated:     2025-08-25
# =============================================================================

from __future__ import annotations
from typing import Any


class QueryError(Exception):
    """Bazna greška query sloja."""
    pass


class InvalidArgument(QueryError, ValueError):
    """Neispravan argument upita (offset, limit, kolona, operator, predikat...)."""

    @classmethod
    def due_to_invalid_offset(cls, offset: int, method: str) -> "InvalidArgument":
        return cls(f"{method}() očekuje offset >= 0; dobijeno {offset}.")

    @classmethod
    def due_to_invalid_limit(cls, limit: int, method: str) -> "InvalidArgument":
        return cls(f"{method}() očekuje limit >= -1; dobijeno {limit}.")

    @classmethod
    def due_to_unknown_column(cls, column: Any, method: str) -> "InvalidArgument":
        return cls(f"{method}(): kolona {column!r} ne postoji.")

    @classmethod
    def due_to_invalid_column(cls, column: Any, method: str) -> "InvalidArgument":
        return cls(f"{method}(): kolona mora biti naziv (str) ili pozicija (int >= 0); dobijeno {column!r}.")

    @classmethod
    def due_to_unknown_operator(cls, operator: Any) -> "InvalidArgument":
        return cls(f"Nepoznat operator poređenja: {operator!r}.")

    @classmethod
    def due_to_invalid_operand(cls, operator: str, expected: str, value: Any) -> "InvalidArgument":
        return cls(f"Operator {operator} očekuje {expected}; dobijeno {value!r}.")
