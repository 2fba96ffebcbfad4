# =============================================================================
# File:        tabquery/sources/result.py
# Purpose:     Rezultat upita: isti ugovor kao izvor + first/nth/pluck/count helperi
# Author:      Aleksandar Popović
# Created:     2025-08-21
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from tabquery.query.comparison import Column, column_value, validate_column
from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import Record, RecordPair, TabularSource, combine, validate_header


class Result(TabularSource):
    """
    Ulaz se troši tek pri prvom čitanju i tada se kešira, pa se rezultat
    može čitati više puta i ponovo proslediti drugom QuerySpec-u.
    """

    def __init__(self, records: Iterable[RecordPair], header: Optional[Sequence[str]] = None):
        self._source: Optional[Iterable[RecordPair]] = records
        self._rows: Optional[List[RecordPair]] = None
        self._header = validate_header(header)

    def _materialize(self) -> List[RecordPair]:
        if self._rows is None:
            self._rows = list(self._source or [])
            self._source = None
        return self._rows

    # ---------- ugovor izvora ----------
    def header(self) -> List[str]:
        return list(self._header)

    def records(self, header: Optional[Sequence[str]] = None) -> Iterator[RecordPair]:
        rows = self._materialize()
        if not header or list(header) == self._header:
            for key, record in rows:
                yield key, dict(record)
            return
        names = validate_header(header)
        for key, record in rows:
            yield key, combine(names, list(record.values()))

    # ---------- helperi ----------
    def count(self) -> int:
        return len(self._materialize())

    def __len__(self) -> int:
        return self.count()

    def exists(self) -> bool:
        return self.count() > 0

    def to_list(self) -> List[Record]:
        return [dict(record) for _, record in self._materialize()]

    def keys(self) -> List[int]:
        """Originalni indeksi zapisa iz izvora."""
        return [key for key, _ in self._materialize()]

    def first(self) -> Optional[Record]:
        return self.nth(0)

    def nth(self, n: int) -> Optional[Record]:
        if n < 0:
            raise InvalidArgument.due_to_invalid_offset(n, "nth")
        rows = self._materialize()
        if n >= len(rows):
            return None
        return dict(rows[n][1])

    def pluck(self, column: Column) -> List[Any]:
        """Vrednosti jedne kolone (naziv ili pozicija) kroz sve zapise."""
        column = validate_column(column, "pluck")
        if isinstance(column, str) and self._header and column not in self._header:
            raise InvalidArgument.due_to_unknown_column(column, "pluck")
        return [column_value(record, column) for _, record in self._materialize()]

    def __repr__(self) -> str:
        state = f"{len(self._rows)} rows" if self._rows is not None else "lazy"
        return f"Result(header={self._header!r}, {state})"
