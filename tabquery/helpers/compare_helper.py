# ========================================================================
# File:       tabquery/helpers/compare_helper.py
# Purpose:    Prirodno poređenje ćelija (numerički ako su obe strane brojevi)
# Author:     Aleksandar Popovic
# Created:    2025-08-19
# Updated:    2025-09-02 (tačno poređenje velikih brojeva)
# ========================================================================

from __future__ import annotations
import re
from decimal import Decimal
from typing import Any, Optional, Union

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER = re.compile(r"^[+-]?\d+$")

Number = Union[int, float, Decimal]


def to_number(value: Any) -> Optional[Number]:
    """
    Vrati broj ako je vrednost broj ili numerički string, inače None.
    Stringovi se parsiraju tačno: celi u int, ostali u Decimal.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str) and _NUMERIC.match(value):
        text = value.strip()
        if _INTEGER.match(text):
            try:
                return int(text)
            except ValueError:
                # preko limita cifara za int(str); Decimal nema taj limit
                return Decimal(text)
        return Decimal(text)
    return None


def natural_compare(first: Any, second: Any) -> int:
    """
    Trostruko poređenje -> -1 / 0 / 1.

    - None je manji od svake vrednosti (dva None su jednaka),
    - ako su obe strane numeričke, porede se kao brojevi (bez konverzije u float),
    - inače leksički, preko str().
    """
    if first is None or second is None:
        if first is None and second is None:
            return 0
        return -1 if first is None else 1

    a = to_number(first)
    b = to_number(second)
    if a is not None and b is not None:
        return (a > b) - (a < b)

    x, y = str(first), str(second)
    return (x > y) - (x < y)
