# =============================================================================
# File:        tabquery/query/query.py
# Purpose:     QuerySpec: nepromenljiv builder upita (filter -> sort -> prozor -> select)
# Author:      Aleksandar Popović
# Created:     2025-08-12
# Updated:     2025-08-27
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from tabquery.query.comparison import Column, Comparison
from tabquery.query.constraints import ColumnPredicate, TwoColumnsPredicate
from tabquery.query.exceptions import InvalidArgument
from tabquery.query.ordering import ColumnOrdering, Comparator, MultiSort
from tabquery.query.predicates import CallablePredicate, Criteria, IDENTITY, Joiner, Predicate
from tabquery.query.projector import Projector
from tabquery.query.window import slice_records
from tabquery.sources.base_source import TabularSource
from tabquery.sources.result import Result

Operator = Union[Comparison, str]


@dataclass(frozen=True)
class QuerySpec:
    """
    Svaki "setter" vraća NOVU instancu (ili istu, ako nema promene),
    pa se jedna QuerySpec bezbedno deli i ponovo koristi.

        spec = (QuerySpec()
                .and_where("age", ">=", "18")
                .order_by_asc("name")
                .limit(10)
                .select("name", "email"))
        result = spec.apply(source)
    """
    conditions: Tuple[Predicate, ...] = ()
    orderings: Tuple[Comparator, ...] = ()
    offset_value: int = 0
    limit_value: int = -1
    columns: Tuple[Column, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, where: Optional[Callable[..., Any]] = None, offset: int = 0, limit: int = -1) -> "QuerySpec":
        spec = cls()
        if where is not None:
            spec = spec.where(where)
        return spec.offset(offset).limit(limit)

    # ---------- select ----------
    def select(self, *columns: Column) -> "QuerySpec":
        if columns == self.columns:
            return self
        return replace(self, columns=tuple(columns))

    # ---------- where ----------
    def where(self, where: Callable[..., Any]) -> "QuerySpec":
        predicate = CallablePredicate.wrap(where)
        return replace(self, conditions=self.conditions + (predicate,))

    def and_where(self, column: Column, operator: Operator, value: Any) -> "QuerySpec":
        return self._add_condition(Joiner.AND, ColumnPredicate.filter_on(column, operator, value))

    def or_where(self, column: Column, operator: Operator, value: Any) -> "QuerySpec":
        return self._add_condition(Joiner.OR, ColumnPredicate.filter_on(column, operator, value))

    def xor_where(self, column: Column, operator: Operator, value: Any) -> "QuerySpec":
        return self._add_condition(Joiner.XOR, ColumnPredicate.filter_on(column, operator, value))

    def where_not(self, column: Column, operator: Operator, value: Any) -> "QuerySpec":
        return self._add_condition(Joiner.AND_NOT, ColumnPredicate.filter_on(column, operator, value))

    def and_where_column(self, first: Column, operator: Operator, second: Union[Column, Sequence[Column]]) -> "QuerySpec":
        return self._add_condition(Joiner.AND, TwoColumnsPredicate.filter_on(first, operator, second))

    def or_where_column(self, first: Column, operator: Operator, second: Union[Column, Sequence[Column]]) -> "QuerySpec":
        return self._add_condition(Joiner.OR, TwoColumnsPredicate.filter_on(first, operator, second))

    def xor_where_column(self, first: Column, operator: Operator, second: Union[Column, Sequence[Column]]) -> "QuerySpec":
        return self._add_condition(Joiner.XOR, TwoColumnsPredicate.filter_on(first, operator, second))

    def where_not_column(self, first: Column, operator: Operator, second: Union[Column, Sequence[Column]]) -> "QuerySpec":
        return self._add_condition(Joiner.AND_NOT, TwoColumnsPredicate.filter_on(first, operator, second))

    def _add_condition(self, joiner: Joiner, predicate: Predicate) -> "QuerySpec":
        """
        Prvi uslov: and/or/xor se čuva takav kakav je, not postaje IDENTITY AND_NOT p.
        Svaki sledeći: CEO dosadašnji izraz (levo) <joiner> novi predikat (desno).
        """
        if not self.conditions:
            if joiner is Joiner.AND_NOT:
                return self.where(IDENTITY.and_not(predicate))
            return self.where(predicate)

        aggregate = Criteria.all(*self.conditions)
        return replace(self, conditions=(aggregate.joined(joiner, predicate),))

    # ---------- order by ----------
    def order_by(self, comparator: Comparator) -> "QuerySpec":
        if not callable(comparator):
            raise InvalidArgument(f"order_by() očekuje callable; dobijeno {comparator!r}.")
        return replace(self, orderings=self.orderings + (comparator,))

    def order_by_asc(self, column: Column, transform: Optional[Callable[[Any], Any]] = None) -> "QuerySpec":
        return self.order_by(ColumnOrdering.sort_by(column, "asc", transform))

    def order_by_desc(self, column: Column, transform: Optional[Callable[[Any], Any]] = None) -> "QuerySpec":
        return self.order_by(ColumnOrdering.sort_by(column, "desc", transform))

    # ---------- offset / limit ----------
    def offset(self, offset: int) -> "QuerySpec":
        if offset < 0:
            raise InvalidArgument.due_to_invalid_offset(offset, "offset")
        if offset == self.offset_value:
            return self
        return replace(self, offset_value=offset)

    def limit(self, limit: int) -> "QuerySpec":
        if limit < -1:
            raise InvalidArgument.due_to_invalid_limit(limit, "limit")
        if limit == self.limit_value:
            return self
        return replace(self, limit_value=limit)

    # ---------- izvršavanje ----------
    def apply(self, source: TabularSource, header: Optional[Sequence[str]] = None) -> Result:
        """
        Izvršava upit nad izvorom: filter -> sort -> offset/limit -> select.
        header (ako nije prazan) zamenjuje zaglavlje izvora.
        """
        names = list(header) if header else list(source.header())
        projector = Projector(self.columns, names)

        records = source.records(names)
        if self.conditions:
            records = Criteria.all(*self.conditions).filter(records)
        records = MultiSort.all(*self.orderings).sort(records)
        records = slice_records(records, self.offset_value, self.limit_value)

        return projector.apply(records)
