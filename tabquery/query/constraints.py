# =============================================================================
# File:        tabquery/query/constraints.py
# Purpose:     Atomski predikati nad kolonama (kolona vs literal, kolona vs kolona)
# Author:      Aleksandar Popović
# Created:     2025-08-19
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
from typing import Any, List, Sequence, Union

from tabquery.query.comparison import Column, Comparison, column_value, validate_column
from tabquery.query.exceptions import InvalidArgument
from tabquery.query.predicates import Predicate, Record


class ColumnPredicate(Predicate):
    """Poredi vrednost jedne kolone sa literalom: record[column] <op> value."""

    def __init__(self, column: Column, comparison: Comparison, value: Any):
        self.column = column
        self.comparison = comparison
        self.value = value

    @classmethod
    def filter_on(cls, column: Column, operator: Union[Comparison, str], value: Any) -> "ColumnPredicate":
        column = validate_column(column, "filter_on")
        comparison = Comparison.from_operator(operator)
        comparison.accept(value)
        if comparison.takes_list:
            value = frozenset(value) if isinstance(value, (set, frozenset)) else tuple(value)
        return cls(column, comparison, value)

    def __call__(self, record: Record, key: int) -> bool:
        return self.comparison.compare(column_value(record, self.column), self.value)

    def __repr__(self) -> str:
        return f"ColumnPredicate({self.column!r} {self.comparison.value} {self.value!r})"


class TwoColumnsPredicate(Predicate):
    """
    Poredi dve kolone istog zapisa: record[first] <op> record[second].
    Ako je second lista kolona, njihove vrednosti se skupljaju u listu
    (za IN / NIN / BETWEEN / NBETWEEN).
    """

    def __init__(self, first: Column, comparison: Comparison, second: Union[Column, Sequence[Column]]):
        self.first = first
        self.comparison = comparison
        self.second = second

    @classmethod
    def filter_on(
        cls,
        first: Column,
        operator: Union[Comparison, str],
        second: Union[Column, Sequence[Column]],
    ) -> "TwoColumnsPredicate":
        first = validate_column(first, "filter_on")
        comparison = Comparison.from_operator(operator)

        if isinstance(second, (list, tuple)):
            if not comparison.takes_list:
                raise InvalidArgument.due_to_invalid_operand(comparison.value, "jednu kolonu", second)
            second = tuple(validate_column(c, "filter_on") for c in second)
            if comparison in (Comparison.BETWEEN, Comparison.NOT_BETWEEN) and len(second) != 2:
                raise InvalidArgument.due_to_invalid_operand(comparison.value, "tačno 2 kolone", second)
        else:
            if comparison.takes_list:
                raise InvalidArgument.due_to_invalid_operand(comparison.value, "listu kolona", second)
            second = validate_column(second, "filter_on")

        return cls(first, comparison, second)

    def _operand(self, record: Record) -> Any:
        if isinstance(self.second, tuple):
            values: List[Any] = [column_value(record, c) for c in self.second]
            return values
        return column_value(record, self.second)

    def __call__(self, record: Record, key: int) -> bool:
        subject = column_value(record, self.first)
        operand = self._operand(record)
        if self.comparison.takes_list:
            return self.comparison.compare(subject, operand)
        if self.comparison.takes_string:
            if not isinstance(operand, str):
                return False
            if self.comparison in (Comparison.REGEXP, Comparison.NOT_REGEXP):
                self.comparison.accept(operand)
        return self.comparison.compare(subject, operand)

    def __repr__(self) -> str:
        return f"TwoColumnsPredicate({self.first!r} {self.comparison.value} {self.second!r})"
