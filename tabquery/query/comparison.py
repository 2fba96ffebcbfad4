# =============================================================================
# File:        tabquery/query/comparison.py
# Purpose:     Zatvoren registar operatora poređenja + čitanje kolone iz zapisa
# Author:      Aleksandar Popović
# Created:     2025-08-19
# Updated:     2025-08-26
# =============================================================================

from __future__ import annotations
import re
from enum import Enum
from typing import Any, Dict, Union

from tabquery.helpers.compare_helper import natural_compare
from tabquery.query.exceptions import InvalidArgument

Column = Union[str, int]

# alias -> kanonski operator (ključevi su već upper-case)
_ALIASES: Dict[str, str] = {
    "==": "=",
    "EQ": "=",
    "IS": "=",
    "EQUAL": "=",
    "EQUALS": "=",
    "<>": "!=",
    "NEQ": "!=",
    "IS NOT": "!=",
    "NOT EQUAL": "!=",
    "GT": ">",
    "GREATER THAN": ">",
    "GTE": ">=",
    "GREATER THAN OR EQUAL": ">=",
    "LT": "<",
    "LESSER THAN": "<",
    "LTE": "<=",
    "LESSER THAN OR EQUAL": "<=",
    "NOT_BETWEEN": "NBETWEEN",
    "NOT BETWEEN": "NBETWEEN",
    "NOT_IN": "NIN",
    "NOT IN": "NIN",
    "CONTAIN": "CONTAINS",
    "NOT_CONTAIN": "NCONTAIN",
    "NOT CONTAIN": "NCONTAIN",
    "DOES_NOT_CONTAIN": "NCONTAIN",
    "DOES NOT CONTAIN": "NCONTAIN",
    "NOT_REGEXP": "NREGEXP",
    "NOT REGEXP": "NREGEXP",
    "STARTS WITH": "STARTS_WITH",
    "ENDS WITH": "ENDS_WITH",
}


class Comparison(str, Enum):
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESSER_THAN = "<"
    LESSER_THAN_OR_EQUAL = "<="
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NBETWEEN"
    IN = "IN"
    NOT_IN = "NIN"
    CONTAINS = "CONTAINS"
    NOT_CONTAIN = "NCONTAIN"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    REGEXP = "REGEXP"
    NOT_REGEXP = "NREGEXP"

    @classmethod
    def from_operator(cls, operator: Union["Comparison", str]) -> "Comparison":
        if isinstance(operator, Comparison):
            return operator
        if not isinstance(operator, str):
            raise InvalidArgument.due_to_unknown_operator(operator)

        key = " ".join(operator.strip().upper().split())
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise InvalidArgument.due_to_unknown_operator(operator) from None

    @property
    def takes_list(self) -> bool:
        return self in _LIST_OPERATORS

    @property
    def takes_string(self) -> bool:
        return self in _STRING_OPERATORS

    def accept(self, value: Any) -> None:
        """Proveri operand pre pravljenja predikata; baca InvalidArgument."""
        if self in (Comparison.BETWEEN, Comparison.NOT_BETWEEN):
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise InvalidArgument.due_to_invalid_operand(self.value, "listu od 2 vrednosti [min, max]", value)
        elif self in (Comparison.IN, Comparison.NOT_IN):
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise InvalidArgument.due_to_invalid_operand(self.value, "listu ili skup vrednosti", value)
        elif self in _STRING_OPERATORS:
            if not isinstance(value, str):
                raise InvalidArgument.due_to_invalid_operand(self.value, "string", value)
            if self in (Comparison.REGEXP, Comparison.NOT_REGEXP):
                try:
                    re.compile(value)
                except re.error as e:
                    raise InvalidArgument.due_to_invalid_operand(self.value, f"ispravan regex ({e})", value) from e

    def compare(self, subject: Any, value: Any) -> bool:
        if self is Comparison.EQUALS:
            return subject == value
        if self is Comparison.NOT_EQUALS:
            return subject != value

        if self in _ORDERING_OPERATORS:
            if subject is None or value is None:
                return False
            result = natural_compare(subject, value)
            if self is Comparison.GREATER_THAN:
                return result > 0
            if self is Comparison.GREATER_THAN_OR_EQUAL:
                return result >= 0
            if self is Comparison.LESSER_THAN:
                return result < 0
            return result <= 0

        if self in (Comparison.BETWEEN, Comparison.NOT_BETWEEN):
            if subject is None:
                return False
            low, high = value
            inside = natural_compare(subject, low) >= 0 and natural_compare(subject, high) <= 0
            return inside if self is Comparison.BETWEEN else not inside

        if self is Comparison.IN:
            return subject in value
        if self is Comparison.NOT_IN:
            return subject not in value

        # string operatori: ne-string subjekat nikad ne prolazi
        if not isinstance(subject, str):
            return False
        if self is Comparison.CONTAINS:
            return value in subject
        if self is Comparison.NOT_CONTAIN:
            return value not in subject
        if self is Comparison.STARTS_WITH:
            return subject.startswith(value)
        if self is Comparison.ENDS_WITH:
            return subject.endswith(value)
        if self is Comparison.REGEXP:
            return re.search(value, subject) is not None
        return re.search(value, subject) is None


_ORDERING_OPERATORS = frozenset({
    Comparison.GREATER_THAN,
    Comparison.GREATER_THAN_OR_EQUAL,
    Comparison.LESSER_THAN,
    Comparison.LESSER_THAN_OR_EQUAL,
})

_LIST_OPERATORS = frozenset({
    Comparison.BETWEEN,
    Comparison.NOT_BETWEEN,
    Comparison.IN,
    Comparison.NOT_IN,
})

_STRING_OPERATORS = frozenset({
    Comparison.CONTAINS,
    Comparison.NOT_CONTAIN,
    Comparison.STARTS_WITH,
    Comparison.ENDS_WITH,
    Comparison.REGEXP,
    Comparison.NOT_REGEXP,
})


# ---------- Čitanje kolone ----------

def validate_column(column: Any, method: str) -> Column:
    """Naziv (str) ili nenegativna pozicija (int); proverava se pri građenju upita."""
    if isinstance(column, bool) or not isinstance(column, (str, int)):
        raise InvalidArgument.due_to_invalid_column(column, method)
    if isinstance(column, int) and column < 0:
        raise InvalidArgument.due_to_invalid_column(column, method)
    return column


def column_value(record: Dict[Any, Any], column: Column) -> Any:
    """
    Vrednost kolone iz zapisa: po nazivu (ključ) ili po poziciji
    (redosled vrednosti u zapisu). Nepostojeća kolona -> InvalidArgument.
    """
    if isinstance(column, int) and not isinstance(column, bool):
        values = list(record.values())
        if 0 <= column < len(values):
            return values[column]
        raise InvalidArgument.due_to_unknown_column(column, "column_value")

    if column not in record:
        raise InvalidArgument.due_to_unknown_column(column, "column_value")
    return record[column]
