# ========================================================================
# File:       tabquery/sources/json_source.py
# Purpose:    Izvor zapisa iz JSON fajla (niz objekata ili niz nizova)
# Author:     Aleksandar Popovic
# Updated:    2025-08-25
# ========================================================================

from __future__ import annotations
import os, json
from typing import Any, Dict, Iterator, List, Optional, Sequence

from tabquery.helpers.core_helper import to_cell
from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import RecordPair, TabularSource, combine, validate_header


class JSONSource(TabularSource):
    """
    Uniformni konstruktor: JSONSource(path)
      - fajl mora sadržati JSON niz,
      - niz objekata: zaglavlje = ključevi po redosledu prvog pojavljivanja,
      - niz nizova: bez zaglavlja (pozicioni režim),
      - ćelije se svode na stringove (None ostaje None).
    Fajl se čita jednom i kešira; reload() ga ponovo učitava.
    """

    def __init__(self, path: str):
        self.path = path
        self._cache: Optional[List[List[Optional[str]]]] = None
        self._header: List[str] = []

    # -------- storage --------------------------------------------------------
    def _load(self) -> List[List[Optional[str]]]:
        if not os.path.exists(self.path):
            raise InvalidArgument(f"JSONSource: fajl ne postoji: {self.path}")
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise InvalidArgument(f"JSONSource: očekivan JSON niz u {self.path}")

        if data and all(isinstance(item, dict) for item in data):
            header: List[str] = []
            for item in data:
                for k in item.keys():
                    if k not in header:
                        header.append(k)
            rows = [[to_cell(item.get(k)) for k in header] for item in data]
        elif all(isinstance(item, list) for item in data):
            header = []
            rows = [[to_cell(v) for v in item] for item in data]
        else:
            raise InvalidArgument(f"JSONSource: elementi niza moraju biti svi objekti ili svi nizovi ({self.path})")

        self._header = validate_header(header)
        self._cache = rows
        return rows

    def _ensure_loaded(self) -> List[List[Optional[str]]]:
        if self._cache is None:
            return self._load()
        return self._cache

    def reload(self) -> "JSONSource":
        self._cache = None
        self._ensure_loaded()
        return self

    # -------- ugovor izvora --------------------------------------------------
    def header(self) -> List[str]:
        self._ensure_loaded()
        return list(self._header)

    def records(self, header: Optional[Sequence[str]] = None) -> Iterator[RecordPair]:
        rows = self._ensure_loaded()
        names = validate_header(header) if header else self._header
        for index, cells in enumerate(rows):
            yield index, combine(names, cells)

    def debug_info(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "loaded": self._cache is not None,
            "rows": len(self._cache) if self._cache is not None else None,
            "header": list(self._header),
        }
