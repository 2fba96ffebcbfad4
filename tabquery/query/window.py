# =============================================================================
# File:        tabquery/query/window.py
# Purpose:     Offset/limit prozor nad već filtriranim i sortiranim zapisima
# Author:      Aleksandar Popović
# Created:     2025-08-20
# Updated:     2025-08-20
# =============================================================================

from __future__ import annotations
from itertools import islice
from typing import Iterable, Iterator

from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import RecordPair


def slice_records(records: Iterable[RecordPair], offset: int = 0, limit: int = -1) -> Iterator[RecordPair]:
    """Offset van opsega daje prazan rezultat; limit -1 znači bez ograničenja."""
    if offset < 0:
        raise InvalidArgument.due_to_invalid_offset(offset, "slice_records")
    if limit < -1:
        raise InvalidArgument.due_to_invalid_limit(limit, "slice_records")

    stop = None if limit == -1 else offset + limit
    return islice(records, offset, stop)
