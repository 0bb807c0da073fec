"""
JavaScript literals - Values that exist in JavaScript but not in JSON/Python.

Generated inputs may hold `undefined` and `NaN`; they are kept as Python
values (UNDEFINED sentinel, a shared NaN float) and turned into JS source or
JSON-safe data at the edges.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import Any

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class _Undefined:
    """The JavaScript `undefined` value."""

    _instance: _Undefined | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "UNDEFINED"


UNDEFINED = _Undefined()

# One shared object so containers holding it still compare equal
NAN = float("nan")


def js_literal(value: Any) -> str:
    """Render a Python value as JavaScript source."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(js_literal(v) for v in value) + "]"
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        entries = ", ".join(f"{_js_key(k)}: {js_literal(v)}" for k, v in value.items())
        return "{ " + entries + " }"
    return json.dumps(str(value))


def to_jsonable(value: Any) -> Any:
    """Convert a value to plain JSON data (undefined/NaN become marker strings)."""
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return js_literal(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value


def _js_key(key: Any) -> str:
    key = str(key)
    return key if _IDENTIFIER.match(key) else json.dumps(key)
