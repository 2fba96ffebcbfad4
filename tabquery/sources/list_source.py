# =============================================================================
# File:        tabquery/sources/list_source.py
# Purpose:     In-memory izvor: lista redova (liste ili dict-ovi) + opciono zaglavlje
# Author:      Aleksandar Popović
# Created:     2025-08-21
# Updated:     2025-08-25
# =============================================================================

from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence

from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import RecordPair, TabularSource, combine, validate_header


class ListSource(TabularSource):
    """
    Prihvata:
      - listu sekvenci:  [["1", "Ana"], ["2", "Boris"]]
      - listu dict-ova:  [{"id": "1", "name": "Ana"}, ...]  (zaglavlje = ključevi prvog reda)
    header_offset: red na toj poziciji postaje zaglavlje i preskače se;
    indeksi ostalih redova ostaju originalni.
    """

    def __init__(
        self,
        rows: Iterable[Any],
        header: Optional[Sequence[str]] = None,
        header_offset: Optional[int] = None,
    ):
        rows = list(rows)
        if header_offset is not None:
            if header is not None:
                raise InvalidArgument("ListSource: header i header_offset se ne koriste zajedno.")
            if not 0 <= header_offset < len(rows):
                raise InvalidArgument(f"ListSource: header_offset {header_offset} je van opsega.")
            cells = self._cells(rows[header_offset], None)
            if any(c is None for c in cells):
                raise InvalidArgument(f"ListSource: red zaglavlja {header_offset} sadrži praznu (None) ćeliju: {cells!r}.")
            header = [str(c) for c in cells]

        if header is None and rows and isinstance(rows[0], Mapping):
            header = [str(k) for k in rows[0].keys()]

        self._header = validate_header(header)
        self._header_offset = header_offset
        self._rows: List[RecordPair] = [
            (index, self._cells(row, self._header))
            for index, row in enumerate(rows)
            if index != header_offset
        ]

    @staticmethod
    def _cells(row: Any, header: Optional[List[str]]) -> list:
        if isinstance(row, Mapping):
            if header:
                return [row.get(name) for name in header]
            return list(row.values())
        if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
            raise InvalidArgument(f"ListSource: red mora biti sekvenca ili dict; dobijeno {row!r}.")
        return list(row)

    def header(self) -> List[str]:
        return list(self._header)

    def records(self, header: Optional[Sequence[str]] = None) -> Iterator[RecordPair]:
        names = validate_header(header) if header else self._header
        for index, cells in self._rows:
            yield index, combine(names, cells)

    def __len__(self) -> int:
        return len(self._rows)
