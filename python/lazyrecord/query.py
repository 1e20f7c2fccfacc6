"""JMESPath queries over lazy records.

Field lookups go through ``record.get``, so a query computes only the fields
it actually touches. Truthiness checks (``&&``, ``||``, ``!``) on a record
compare it against an empty mapping, which is decided by its key count.
Functions that read every value (``values``, ``merge``) compute every field.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import jmespath  # type: ignore[import-untyped]
from jmespath import functions as _functions  # type: ignore[import-untyped]
from jmespath.exceptions import JMESPathTypeError  # type: ignore[import-untyped]

_query_cache: dict[str, Any] = {}


def _require(function_name: str, value, expected: list[str]) -> None:
    allowed = {"object": Mapping, "array": list, "string": str}
    if not isinstance(value, tuple(allowed[name] for name in expected)):
        raise JMESPathTypeError(
            function_name, value, type(value).__name__, expected
        )


class RecordFunctions(_functions.Functions):
    """Built-in functions that accept any mapping where JMESPath wants an object.

    The stock implementations type arguments by concrete class, so a record
    would be reported as "unknown".
    """

    @_functions.signature({"types": []})
    def _func_keys(self, arg):
        _require("keys", arg, ["object"])
        return list(arg.keys())

    @_functions.signature({"types": []})
    def _func_values(self, arg):
        _require("values", arg, ["object"])
        return list(arg.values())

    @_functions.signature({"types": []})
    def _func_length(self, arg):
        _require("length", arg, ["string", "array", "object"])
        return len(arg)

    @_functions.signature({"types": [], "variadic": True})
    def _func_merge(self, *arguments):
        merged: dict = {}
        for arg in arguments:
            _require("merge", arg, ["object"])
            merged.update(arg.items())
        return merged

    @_functions.signature({"types": []})
    def _func_type(self, arg):
        if isinstance(arg, Mapping) and not isinstance(arg, dict):
            return "object"
        return super()._func_type(arg)


_options = jmespath.Options(custom_functions=RecordFunctions())


def compile_query(expression: str):
    parsed = _query_cache.get(expression)
    if parsed is None:
        parsed = jmespath.compile(expression)
        _query_cache[expression] = parsed
    return parsed


def select(expression: str, record):
    """Evaluate ``expression`` against ``record`` and return the result."""
    return compile_query(expression).search(record, options=_options)
