"""Allow-list filtering and schema validation for bridged block input.

Context is reduced to the keys a block declares in ``uses_context``;
attributes are reduced to the keys of its attribute schema, cast to the
declared type or filled from the schema default. Casting is total: every
declared type yields a value for every input, falling back to the type's
zero value.
"""
from __future__ import annotations

import numbers
import re
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable

__all__ = ["AttributeType", "filter_context", "apply_defaults_and_cast", "cast_value"]

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class AttributeType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


def filter_context(accepted_keys: Iterable[str], raw: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return the entries of ``raw`` whose keys are in ``accepted_keys``."""

    accepted = set(accepted_keys or ())
    if not accepted or not raw:
        return {}
    return {key: value for key, value in raw.items() if key in accepted}


def apply_defaults_and_cast(
    schema: Mapping[str, Mapping[str, Any]] | None, raw: Mapping[str, Any] | None
) -> Dict[str, Any]:
    """Validate ``raw`` attributes against ``schema``.

    Supplied keys are cast to their declared type, missing keys take the
    schema default when one exists, and keys unknown to the schema are dropped.
    """

    raw = raw or {}
    validated: Dict[str, Any] = {}
    for key, definition in (schema or {}).items():
        definition = definition or {}
        if key in raw:
            validated[key] = cast_value(raw[key], definition)
        elif "default" in definition:
            validated[key] = definition["default"]
    return validated


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (numbers.Real, Decimal)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def _to_number(value: Any):
    if not _is_numeric(value):
        return 0
    try:
        return float(value)
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")
    except ValueError:
        # Signalling NaN decimals
        return 0


def _to_integer(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError):
            # NaN and infinities
            return 0
    if isinstance(value, str):
        if _is_numeric(value):
            return _to_integer(float(value))
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else 0
    if isinstance(value, (Mapping, list, tuple)):
        return 1 if value else 0
    return 1


def _to_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)


def _to_array(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _to_object(value: Any) -> dict:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return dict(enumerate(value))
    if isinstance(value, (str, bytes, int, float)) or value is None:
        return {}
    if hasattr(value, "__dict__"):
        return dict(vars(value))
    return {}


def cast_value(value: Any, definition: Mapping[str, Any] | None) -> Any:
    """Cast ``value`` to the type declared in ``definition``.

    A definition without a ``type`` is treated as ``string``; an unknown type
    passes the value through unchanged.
    """

    declared = (definition or {}).get("type", "string")
    try:
        kind = AttributeType(declared)
    except ValueError:
        return value

    if kind is AttributeType.STRING:
        return _to_string(value)
    if kind is AttributeType.NUMBER:
        return _to_number(value)
    if kind is AttributeType.INTEGER:
        return _to_integer(value)
    if kind is AttributeType.BOOLEAN:
        return _to_boolean(value)
    if kind is AttributeType.ARRAY:
        return _to_array(value)
    if kind is AttributeType.OBJECT:
        return _to_object(value)
    return value
