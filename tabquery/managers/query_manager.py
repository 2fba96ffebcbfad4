# =============================================================================
# File:        tabquery/managers/query_manager.py
# Purpose:     Centralni API za izvršavanje QuerySpec-a (log + registar grešaka)
# Author:      Aleksandar Popović
# Created:     2025-08-22
# Updated:     2025-08-27
# =============================================================================

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from tabquery.config.env import EnvLoader
from tabquery.managers.error_manager import ErrorManager
from tabquery.managers.log_manager import LogManager
from tabquery.query.exceptions import QueryError
from tabquery.query.query import QuerySpec
from tabquery.sources.base_source import TabularSource
from tabquery.sources.result import Result


def _log(level: str, msg: str):
    getattr(LogManager, level)(f"[QueryManager] {msg}")


def _describe(spec: QuerySpec) -> Dict[str, Any]:
    return {
        "conditions": len(spec.conditions),
        "orderings": len(spec.orderings),
        "offset": spec.offset_value,
        "limit": spec.limit_value,
        "select": list(spec.columns),
    }


class QueryManager:
    """
    Tanka fasada iznad QuerySpec.apply:
    - initialize()  -> .env, ErrorManager (dev režim iz APP_DEBUG), LogManager
    - run()         -> izvrši upit, materijalizuj rezultat, zabeleži ishod
    - fetch()       -> run() + lista dict-ova
    Greške query sloja se beleže (ErrorManager + log) i prosleđuju dalje.
    """
    _initialized: bool = False

    @classmethod
    def initialize(cls, reload_env: bool = False) -> None:
        if cls._initialized and not reload_env:
            return
        EnvLoader.load(force=reload_env)
        ErrorManager.initialize(dev_mode=EnvLoader.get_bool("APP_DEBUG", False))
        LogManager.initialize()
        cls._initialized = True
        _log("debug", f"initialize -> env={EnvLoader.debug_info()}")

    @classmethod
    def run(cls, spec: QuerySpec, source: TabularSource, header: Optional[Sequence[str]] = None) -> Result:
        if not cls._initialized:
            cls.initialize()
        try:
            result = spec.apply(source, header)
            # lenje faze (filter, prozor) bacaju greške tek pri čitanju
            total = result.count()
        except QueryError as e:
            ErrorManager.create(e)
            _log("warning", f"run failed: source={source.__class__.__name__} spec={_describe(spec)} error={e}")
            raise
        _log("info", f"run -> source={source.__class__.__name__} spec={_describe(spec)} rows={total}")
        return result

    @classmethod
    def fetch(cls, spec: QuerySpec, source: TabularSource, header: Optional[Sequence[str]] = None) -> List[Dict[Any, Any]]:
        return cls.run(spec, source, header).to_list()
