"""Record-to-Wire Serializer — turns ORM rows and plain values into JSON-safe structures.

Invariants:
    - Decimal values are rendered as fixed-notation strings (never "1E+2"), scale preserved
    - BigInteger and Numeric columns are ALWAYS strings, even when the value is small
    - Plain ints beyond the IEEE-754 safe range (2^53 - 1) become strings
    - Empty collections serialize to [] (never None)
    - Anything not representable raises SerializationError (non-finite numbers included)

Design Decisions:
    - Column-aware path reads the mapper, not the value: a BigInteger column holding 5
      and one holding 9999999999999999 come out with the same wire type
"""

import enum
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from sqlalchemy import BigInteger, Float, Numeric, inspect
from sqlalchemy.exc import NoInspectionAvailable

from backoffice.core.errors import SerializationError

MAX_SAFE_INTEGER = 2**53 - 1


def decimal_string(value: Any) -> str | None:
    """Render an exact numeric value as a plain decimal string."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise SerializationError(f"Boolean is not a decimal value: {value!r}")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise SerializationError(f"Non-finite decimal: {value}")
        return format(value, "f")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Non-finite float: {value}")
        return format(Decimal(repr(value)), "f")
    if isinstance(value, str):
        try:
            parsed = Decimal(value)
        except InvalidOperation:
            raise SerializationError(f"Not a decimal string: {value!r}")
        if not parsed.is_finite():
            raise SerializationError(f"Non-finite decimal: {value}")
        return format(parsed, "f")
    raise SerializationError(
        f"Unsupported exact numeric type: {type(value).__name__}",
    )


def to_wire(value: Any, exact_keys: Iterable[str] = ()) -> Any:
    """Recursively convert a plain value into something json.dumps accepts.

    Keys named in exact_keys are forced through decimal_string at any depth.
    """
    exact = frozenset(exact_keys)
    return _convert(value, exact)


def _convert(value: Any, exact: frozenset[str]) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, enum.Enum):
        return _convert(value.value, exact)
    if isinstance(value, int):
        if abs(value) > MAX_SAFE_INTEGER:
            return str(value)
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Non-finite float: {value}")
        return value
    if isinstance(value, Decimal):
        return decimal_string(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(
                    f"Mapping keys must be str, got {type(key).__name__}",
                )
            out[key] = decimal_string(item) if key in exact else _convert(item, exact)
        return out
    if isinstance(value, (list, tuple)):
        return [_convert(item, exact) for item in value]
    raise SerializationError(f"Unsupported type: {type(value).__name__}")


def _is_exact_column(column_type: Any) -> bool:
    if isinstance(column_type, Float):
        return False
    return isinstance(column_type, (BigInteger, Numeric))


def serialize_record(
    obj: Any,
    exclude: Iterable[str] = (),
    relationships: Iterable[str] = (),
) -> dict:
    """Serialize a mapped ORM instance column by column.

    relationships accepts dotted paths ("items.product") for nested loading;
    the relationships must already be loaded on the instance.
    """
    try:
        mapper = inspect(obj).mapper
    except NoInspectionAvailable:
        raise SerializationError(
            f"Not a mapped instance: {type(obj).__name__}",
        )

    skipped = set(exclude)
    out: dict[str, Any] = {}
    for attr in mapper.column_attrs:
        if attr.key in skipped:
            continue
        value = getattr(obj, attr.key)
        if _is_exact_column(attr.columns[0].type):
            out[attr.key] = decimal_string(value)
        else:
            out[attr.key] = _convert(value, frozenset())

    nested: dict[str, list[str]] = {}
    for path in relationships:
        head, _, rest = path.partition(".")
        nested.setdefault(head, [])
        if rest:
            nested[head].append(rest)

    for name, sub_paths in nested.items():
        if name not in mapper.relationships:
            raise SerializationError(
                f"{mapper.class_.__name__} has no relationship '{name}'",
            )
        related = getattr(obj, name)
        if related is None:
            out[name] = None
        elif mapper.relationships[name].uselist:
            out[name] = serialize_records(related, relationships=sub_paths)
        else:
            out[name] = serialize_record(related, relationships=sub_paths)
    return out


def serialize_records(
    objs: Iterable[Any] | None,
    exclude: Iterable[str] = (),
    relationships: Iterable[str] = (),
) -> list[dict]:
    """List version of serialize_record. None or empty input gives []."""
    if not objs:
        return []
    excluded = tuple(exclude)
    related = tuple(relationships)
    return [
        serialize_record(o, exclude=excluded, relationships=related)
        for o in objs
    ]
