# =============================================================================
# File:        tabquery/query/projector.py
# Purpose:     Projekcija kolona (select): po nazivu ili poziciji, u redosledu izbora
# Author:      Aleksandar Popović
# Created:     2025-08-21
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Sequence, Tuple, Union

from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import Record, RecordPair
from tabquery.sources.result import Result


class Projector:
    """
    Razrešava listu kolona naspram zaglavlja i preslikava svaki zapis.

    - naziv -> pozicija preko zaglavlja (nema ga -> InvalidArgument),
    - pozicija -> proverava se opseg [0, len(header)) kada zaglavlje postoji,
    - izlazni redosled je redosled izbora, ne redosled u izvoru.
    """

    def __init__(self, columns: Sequence[Union[str, int]], header: Sequence[str]):
        self.columns = list(columns)
        self.source_header = list(header)
        self.mapping: List[Tuple[Union[str, int], int]] = [self._resolve(c) for c in self.columns]

    def _resolve(self, column: Any) -> Tuple[Union[str, int], int]:
        has_header = bool(self.source_header)

        if isinstance(column, str):
            if column not in self.source_header:
                raise InvalidArgument.due_to_unknown_column(column, "select")
            return column, self.source_header.index(column)

        if isinstance(column, int) and not isinstance(column, bool):
            if column < 0 or (has_header and column >= len(self.source_header)):
                raise InvalidArgument.due_to_unknown_column(column, "select")
            name = self.source_header[column] if has_header else column
            return name, column

        raise InvalidArgument.due_to_invalid_column(column, "select")

    @property
    def header(self) -> List[str]:
        """Zaglavlje rezultata; bez izvornog zaglavlja ostaje prazno."""
        if not self.source_header:
            return []
        seen: List[str] = []
        for name, _ in self.mapping:
            if name not in seen:
                seen.append(name)
        return seen

    def project(self, record: Record) -> Record:
        row = list(record.values())
        element: Record = {}
        for name, position in self.mapping:
            element[name] = row[position] if position < len(row) else None
        return element

    def _iterate(self, records: Iterable[RecordPair]) -> Iterator[RecordPair]:
        for key, record in records:
            yield key, self.project(record)

    def apply(self, records: Iterable[RecordPair]) -> Result:
        if not self.columns:
            return Result(records, self.source_header)
        return Result(self._iterate(records), self.header)
