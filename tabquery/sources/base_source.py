# =============================================================================
# File:        tabquery/sources/base_source.py
# Purpose:     Jedinstven interfejs za sve izvore zapisa (lista, JSON, SQLite, Result)
# Author:      Aleksandar Popović
# Created:     2025-08-18
# Updated:     2025-08-25
# =============================================================================

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from tabquery.query.exceptions import InvalidArgument

Record = Dict[Any, Any]
RecordPair = Tuple[int, Record]


def validate_header(header: Optional[Sequence[str]]) -> List[str]:
    """Zaglavlje mora biti lista različitih stringova (ili prazno)."""
    if not header:
        return []
    names = list(header)
    for name in names:
        if not isinstance(name, str):
            raise InvalidArgument(f"Zaglavlje sme da sadrži samo stringove; dobijeno {name!r}.")
    if len(set(names)) != len(names):
        duplicates = sorted({n for n in names if names.count(n) > 1})
        raise InvalidArgument(f"Zaglavlje ne sme da sadrži duplikate: {duplicates}.")
    return names


def combine(header: Sequence[str], cells: Sequence[Any]) -> Record:
    """
    Spaja zaglavlje i ćelije u zapis.
    Bez zaglavlja ključevi su pozicije; sa zaglavljem se višak odseca, a manjak dopunjuje sa None.
    """
    if not header:
        return {i: v for i, v in enumerate(cells)}
    width = len(header)
    row = list(cells[:width])
    if len(row) < width:
        row.extend([None] * (width - len(row)))
    return dict(zip(header, row))


class TabularSource(ABC):
    """
    Svi izvori moraju implementirati isti API:
      - header()           -> lista naziva kolona (može biti prazna)
      - records(header)    -> iterator parova (originalni indeks, zapis)
    Svaki poziv records() vraća nov iterator.
    """

    @abstractmethod
    def header(self) -> List[str]:
        """Zaglavlje izvora; [] znači da se kolone adresiraju samo pozicijom."""

    @abstractmethod
    def records(self, header: Optional[Sequence[str]] = None) -> Iterator[RecordPair]:
        """Zapisi uparenim sa originalnim indeksom; header (ako nije prazan) menja ključeve."""

    def __iter__(self) -> Iterator[Record]:
        for _, record in self.records():
            yield record
