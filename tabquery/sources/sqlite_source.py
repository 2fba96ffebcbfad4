# =============================================================================
# File:        tabquery/sources/sqlite_source.py
# Purpose:     Izvor zapisa iz SQLite tabele ili SELECT upita (samo čitanje)
# Author:      Aleksandar Popović
# Updated:     2025-08-26
# =============================================================================
from __future__ import annotations

import os
import re
import sqlite3
from typing import Any, Iterator, List, Optional, Sequence

from tabquery.helpers.core_helper import to_cell
from tabquery.query.exceptions import InvalidArgument
from tabquery.sources.base_source import RecordPair, TabularSource, combine, validate_header

_SAFE_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_READ_ONLY = re.compile(r"^\s*(SELECT|WITH)\b", re.IGNORECASE)


def _safe_ident(name: str) -> str:
    if not _SAFE_IDENT.match(name or ""):
        raise InvalidArgument(f"Invalid identifier: {name}")
    return name


def _read_only(sql: str) -> str:
    """Samo SELECT / WITH upit, bez završnog ';' (upit se ugnježđuje u SELECT * FROM (...))."""
    text = (sql or "").strip().rstrip(";").strip()
    if not _READ_ONLY.match(text):
        raise InvalidArgument(f"SQLiteSource: dozvoljen je samo SELECT upit; dobijeno {sql!r}")
    return text


class SQLiteSource(TabularSource):
    """
    SQLiteSource(path, table="users") ili SQLiteSource(path, sql="SELECT ...", params=(...))
      - zaglavlje dolazi iz cursor.description,
      - svaki records() otvara svoju konekciju i zatvara je po završetku čitanja,
      - ćelije se svode na stringove (NULL -> None).
    """

    def __init__(self, path: str, table: Optional[str] = None, sql: Optional[str] = None, params: Sequence[Any] = ()):
        if (table is None) == (sql is None):
            raise InvalidArgument("SQLiteSource: zadaj tačno jedno od 'table' ili 'sql'.")
        self.db_file = os.path.abspath(path)
        if os.path.isdir(self.db_file):
            raise InvalidArgument(
                f"SQLite path '{self.db_file}' je direktorijum, očekivan je put do .db fajla."
            )
        self.sql = f"SELECT * FROM {_safe_ident(table)}" if table is not None else _read_only(sql)
        self.params = tuple(params)
        self._header: Optional[List[str]] = None

    def _connect(self) -> sqlite3.Connection:
        if not os.path.exists(self.db_file):
            raise InvalidArgument(f"SQLiteSource: fajl ne postoji: {self.db_file}")
        return sqlite3.connect(self.db_file, timeout=5.0)

    def _execute(self, conn: sqlite3.Connection, sql: str) -> sqlite3.Cursor:
        try:
            return conn.execute(sql, self.params)
        except sqlite3.Error as e:
            raise InvalidArgument(f"SQLiteSource: upit nije izvršen ({e}): {self.sql}") from e

    def header(self) -> List[str]:
        if self._header is None:
            conn = self._connect()
            try:
                cur = self._execute(conn, f"SELECT * FROM ({self.sql}) LIMIT 0")
                self._header = validate_header([d[0] for d in cur.description or []])
            finally:
                conn.close()
        return list(self._header)

    def records(self, header: Optional[Sequence[str]] = None) -> Iterator[RecordPair]:
        names = validate_header(header) if header else self.header()
        conn = self._connect()
        try:
            cur = self._execute(conn, self.sql)
            for index, row in enumerate(cur):
                yield index, combine(names, [to_cell(v) for v in row])
        finally:
            conn.close()
