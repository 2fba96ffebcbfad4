# ========================================================================
# File:       tabquery/helpers/core_helper.py
# Purpose:    Bezbedni pozivi + konverzija vrednosti u ćelije
# Author:     Aleksandar Popovic
# Created:    2025-08-18
# Updated:    2025-08-25
# ========================================================================

from __future__ import annotations
import json
from typing import Any, Callable, Optional


def safe_call(func: Callable, *args, **kwargs):
    """Poziva funkciju i prepušta izuzetke višem sloju; zadržavamo postojeći ugovor."""
    return func(*args, **kwargs)


def to_cell(value: Any) -> Optional[str]:
    """
    Svodi vrednost iz izvora (JSON, SQLite) na tekstualnu ćeliju.
    None ostaje None, bool ide u "true"/"false", strukture u kompaktni JSON.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
