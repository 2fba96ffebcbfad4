# =============================================================================
# File:        tabquery/query/ordering.py
# Purpose:     Komparatori po kolonama i stabilno sortiranje po više ključeva
# Author:      Aleksandar Popović
# Created:     2025-08-20
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from tabquery.helpers.compare_helper import natural_compare
from tabquery.query.comparison import Column, column_value, validate_column
from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import Record, RecordPair

Comparator = Callable[[Record, Record], Any]

_DIRECTIONS = {
    "ASC": 1,
    "ASCENDING": 1,
    "UP": 1,
    "DESC": -1,
    "DESCENDING": -1,
    "DOWN": -1,
}


def _sign(value: Any) -> int:
    return (value > 0) - (value < 0)


class ColumnOrdering:
    """Komparator po vrednosti kolone, uz opcionu transformaciju pre poređenja."""

    def __init__(self, column: Column, direction: int, transform: Optional[Callable[[Any], Any]] = None):
        self.column = column
        self.direction = direction
        self.transform = transform

    @classmethod
    def sort_by(
        cls,
        column: Column,
        direction: Union[str, int] = "asc",
        transform: Optional[Callable[[Any], Any]] = None,
    ) -> "ColumnOrdering":
        column = validate_column(column, "sort_by")
        if isinstance(direction, str):
            key = direction.strip().upper()
            if key not in _DIRECTIONS:
                raise InvalidArgument(f"sort_by(): nepoznat smer sortiranja {direction!r} (asc/desc).")
            sign = _DIRECTIONS[key]
        elif direction in (1, -1) and not isinstance(direction, bool):
            sign = direction
        else:
            raise InvalidArgument(f"sort_by(): nepoznat smer sortiranja {direction!r} (asc/desc).")
        if transform is not None and not callable(transform):
            raise InvalidArgument(f"sort_by(): transform mora biti callable; dobijeno {transform!r}.")
        return cls(column, sign, transform)

    def _value(self, record: Record) -> Any:
        value = column_value(record, self.column)
        if self.transform is not None:
            value = self.transform(value)
        return value

    def __call__(self, first: Record, second: Record) -> int:
        return self.direction * natural_compare(self._value(first), self._value(second))

    def __repr__(self) -> str:
        return f"ColumnOrdering({self.column!r}, {'asc' if self.direction > 0 else 'desc'})"


class MultiSort:
    """Komparatori se pitaju redom; prvi rezultat različit od 0 odlučuje."""

    def __init__(self, comparators: List[Comparator]):
        self.comparators = comparators

    @classmethod
    def all(cls, *comparators: Comparator) -> "MultiSort":
        for comparator in comparators:
            if not callable(comparator):
                raise InvalidArgument(f"order_by() očekuje callable; dobijeno {comparator!r}.")
        return cls(list(comparators))

    def __call__(self, first: Record, second: Record) -> int:
        for comparator in self.comparators:
            result = _sign(comparator(first, second))
            if result != 0:
                return result
        return 0

    def sort(self, records: Iterable[RecordPair]) -> Iterator[RecordPair]:
        """
        Stabilno sortiranje parova (index, record); indeksi se ne menjaju.
        Bez komparatora ulaz prolazi lenjo, inače se materijalizuje.
        """
        if not self.comparators:
            return iter(records)
        key = cmp_to_key(lambda a, b: self(a[1], b[1]))
        return iter(sorted(records, key=key))
