"""Predicates and their compilation into the repository query language.

A predicate is a tuple ``(operator, path, *args)``, e.g.
``("at", "document.type", "article")``. ``compile_predicates`` turns a
sequence of them into a query string such as
``[[:d = at(document.type, "article")]]``.
"""

from collections.abc import Sequence
from datetime import UTC, date, datetime
from typing import Any

Predicate = tuple[Any, ...]

AT = "at"
ANY = "any"
SIMILAR = "similar"
FULLTEXT = "fulltext"
NUMBER_GT = "number.gt"
NUMBER_LT = "number.lt"
DATE_AFTER = "date.after"
DATE_BEFORE = "date.before"
DATE_BETWEEN = "date.between"

DOCUMENT_ID = "document.id"
DOCUMENT_TYPE = "document.type"
DOCUMENT_TAGS = "document.tags"

# Paths with these prefixes are path expressions, anything else is a literal.
_PATH_PREFIXES = ("my.", "document.")


def at(path: str, value: Any) -> Predicate:
    return (AT, path, value)


def any_(path: str, values: Sequence[str]) -> Predicate:
    return (ANY, path, list(values))


def similar(document_id: str, max_results: int) -> Predicate:
    return (SIMILAR, document_id, max_results)


def fulltext(path: str, text: str) -> Predicate:
    return (FULLTEXT, path, text)


def number_gt(path: str, value: float) -> Predicate:
    return (NUMBER_GT, path, value)


def number_lt(path: str, value: float) -> Predicate:
    return (NUMBER_LT, path, value)


def date_after(path: str, value: date | datetime) -> Predicate:
    return (DATE_AFTER, path, value)


def date_before(path: str, value: date | datetime) -> Predicate:
    return (DATE_BEFORE, path, value)


def date_between(path: str, start: date | datetime, end: date | datetime) -> Predicate:
    return (DATE_BETWEEN, path, start, end)


def to_epoch_millis(value: date | datetime) -> int:
    """Milliseconds since the epoch; naive datetimes and dates are taken as UTC."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=UTC)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp() * 1000)


def encode_path(path: str) -> str:
    if path.startswith(_PATH_PREFIXES):
        return path
    return f'"{path}"'


def encode_value(value: Any) -> str:
    """Encode one predicate argument as a query-language literal."""
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, list | tuple):
        return "[" + ",".join(f'"{e}"' for e in value) + "]"
    if isinstance(value, date):
        return str(to_epoch_millis(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_predicate(predicate: Predicate) -> str:
    operator, path, *args = predicate
    inner = encode_path(path)
    if args:
        inner += ", " + ",".join(encode_value(a) for a in args)
    return f"[:d = {operator}({inner})]"


def compile_predicates(predicates: Sequence[Predicate]) -> str:
    """Compile predicates into a single query string."""
    return "[" + "".join(compile_predicate(p) for p in predicates) + "]"
