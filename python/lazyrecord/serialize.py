"""Conversion of lazy records to plain dicts and JSON.

Conversion walks a record's own keys and reads each one, so it computes and
memoizes exactly the fields a plain read would, includes assigned fields and
skips deleted ones.
"""

from __future__ import annotations

import json as _json
from collections.abc import Mapping

from .record import LazyRecord


def _plain(value):
    if isinstance(value, LazyRecord):
        return to_dict(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def to_dict(record: LazyRecord) -> dict:
    return {name: _plain(value) for name, value in record.items()}


def json_default(obj):
    """``default=`` hook for :func:`json.dumps` that accepts any mapping."""
    if isinstance(obj, Mapping):
        return dict(obj.items())
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps(record, **kwargs) -> str:
    kwargs.setdefault("default", json_default)
    return _json.dumps(record, **kwargs)
