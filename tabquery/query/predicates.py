# =============================================================================
# File:        tabquery/query/predicates.py
# Purpose:     Algebra predikata: AND / OR / XOR / AND-NOT nad zapisima
# Author:      Aleksandar Popović
# Created:     2025-08-19
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
import inspect
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import Record, RecordPair


class Joiner(str, Enum):
    AND = "and"
    OR = "or"
    XOR = "xor"
    AND_NOT = "not"


class Predicate(ABC):
    """
    Predikat nad zapisom: (record, index) -> bool.

    Svaki predikat ovog sloja može da se spoji sa drugim u Criteria čvor;
    spajanje uvek uzima CEO levi izraz kao levu stranu (levi fold).
    """

    @abstractmethod
    def __call__(self, record: Record, key: int) -> bool:
        ...

    def matches(self, record: Record, key: int) -> bool:
        return bool(self(record, key))

    def joined(self, joiner: Joiner, other: "Predicate") -> "Criteria":
        return Criteria(self, Joiner(joiner), other)

    def and_(self, other: "Predicate") -> "Criteria":
        return self.joined(Joiner.AND, other)

    def or_(self, other: "Predicate") -> "Criteria":
        return self.joined(Joiner.OR, other)

    def xor(self, other: "Predicate") -> "Criteria":
        return self.joined(Joiner.XOR, other)

    def and_not(self, other: "Predicate") -> "Criteria":
        return self.joined(Joiner.AND_NOT, other)

    def filter(self, records: Iterable[RecordPair]) -> Iterator[RecordPair]:
        """Lenjo filtriranje; redosled i originalni indeksi ostaju netaknuti."""
        for key, record in records:
            if self.matches(record, key):
                yield key, record


class _Identity(Predicate):
    def __call__(self, record: Record, key: int) -> bool:
        return True

    def __repr__(self) -> str:
        return "IDENTITY"


IDENTITY = _Identity()


class CallablePredicate(Predicate):
    """Omotač za obične funkcije; pass_key=False odbacuje indeks."""

    def __init__(self, func: Callable[..., Any], pass_key: bool = True):
        self.func = func
        self.pass_key = pass_key

    def __call__(self, record: Record, key: int) -> bool:
        if self.pass_key:
            return bool(self.func(record, key))
        return bool(self.func(record))

    def __repr__(self) -> str:
        return f"CallablePredicate({self.func!r}, pass_key={self.pass_key})"

    @classmethod
    def wrap(cls, where: Callable[..., Any]) -> Predicate:
        """
        Normalizuje broj obaveznih parametara:
          0  -> InvalidArgument (predikat mora da primi bar zapis)
          1  -> indeks se odbacuje
          2+ -> prosleđuje se (record, index)
        Predicate instance prolaze nepromenjene.
        """
        if isinstance(where, Predicate):
            return where
        if not callable(where):
            raise InvalidArgument(f"where() očekuje callable; dobijeno {where!r}.")

        try:
            params = inspect.signature(where).parameters.values()
        except (TypeError, ValueError):
            # builtin bez potpisa -> tretira se kao (record, index)
            return cls(where, pass_key=True)

        if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
            return cls(where, pass_key=True)

        required = [
            p for p in params
            if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and p.default is inspect.Parameter.empty
        ]
        if len(required) == 0:
            raise InvalidArgument("where() uslov mora biti callable sa 2 obavezna parametra (record, index).")
        return cls(where, pass_key=len(required) >= 2)


class Criteria(Predicate):
    """
    Čvor binarnog stabla {left, joiner, right}.

    Evaluacija sa kratkim spojem:
      AND      -> desna strana samo ako je leva True
      OR       -> desna strana samo ako je leva False
      XOR      -> obe strane uvek
      AND_NOT  -> desna strana samo ako je leva True, rezultat desne se negira
    """

    def __init__(self, left: Predicate, joiner: Joiner, right: Predicate):
        self.left = left
        self.joiner = Joiner(joiner)
        self.right = right

    def __call__(self, record: Record, key: int) -> bool:
        if self.joiner is Joiner.AND:
            return self.left.matches(record, key) and self.right.matches(record, key)
        if self.joiner is Joiner.OR:
            return self.left.matches(record, key) or self.right.matches(record, key)
        if self.joiner is Joiner.XOR:
            return self.left.matches(record, key) != self.right.matches(record, key)
        return self.left.matches(record, key) and not self.right.matches(record, key)

    def __repr__(self) -> str:
        return f"Criteria({self.left!r} {self.joiner.value.upper()} {self.right!r})"

    # ---------- fabrike ----------
    @staticmethod
    def all(*predicates: Callable[..., Any]) -> Predicate:
        """AND levi fold; prazna lista je identitet, jedan predikat je on sam."""
        items = [CallablePredicate.wrap(p) for p in predicates]
        if not items:
            return IDENTITY
        aggregate = items[0]
        for item in items[1:]:
            aggregate = aggregate.and_(item)
        return aggregate

    @staticmethod
    def any(*predicates: Callable[..., Any]) -> Predicate:
        """OR levi fold; jedan predikat je on sam."""
        items = [CallablePredicate.wrap(p) for p in predicates]
        if not items:
            raise InvalidArgument("Criteria.any() zahteva bar jedan predikat.")
        aggregate = items[0]
        for item in items[1:]:
            aggregate = aggregate.or_(item)
        return aggregate

    @staticmethod
    def xany(*predicates: Callable[..., Any]) -> Predicate:
        """XOR levi fold; jedan predikat je on sam."""
        items = [CallablePredicate.wrap(p) for p in predicates]
        if not items:
            raise InvalidArgument("Criteria.xany() zahteva bar jedan predikat.")
        aggregate = items[0]
        for item in items[1:]:
            aggregate = aggregate.xor(item)
        return aggregate

    @staticmethod
    def none(*predicates: Callable[..., Any]) -> Predicate:
        """Prolaze zapisi koje NIJEDAN predikat ne prihvata: IDENTITY AND_NOT p1 AND_NOT p2 ..."""
        aggregate: Predicate = IDENTITY
        for item in predicates:
            aggregate = aggregate.and_not(CallablePredicate.wrap(item))
        return aggregate
