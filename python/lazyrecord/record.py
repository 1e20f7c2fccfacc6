"""Lazy records: mutable mappings whose declared fields compute on first read.

A record is backed by three pieces of state:

* the shared field specification (name -> ``compute(source, view)``),
* a store of materialized values, computed or assigned,
* a set of tombstones for names deleted since their last assignment.

Presence testing (``in``) looks only at the store and the declared fields, so a
deleted declared field still tests as present while reading it reports
absent. Callers may depend on either answer, so the two are kept apart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Optional

from .errors import CircularFieldError

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Descriptor:
    """Introspection result for one field.

    ``materialized`` is False for a declared field that has no stored value;
    ``value`` is then None and is not the field's value.
    """

    materialized: bool
    value: Any = None
    enumerable: bool = True
    writable: bool = True
    configurable: bool = True


class RecordView(Mapping):
    """Read-only window onto a record, handed to compute functions."""

    __slots__ = ("_record",)

    def __init__(self, record: LazyRecord) -> None:
        self._record = record

    def __getitem__(self, name):
        return self._record[name]

    def get(self, name, default=None):
        return self._record.get(name, default)

    def __contains__(self, name) -> bool:
        return name in self._record

    def __iter__(self) -> Iterator:
        return iter(self._record)

    def __len__(self) -> int:
        return len(self._record)

    def describe(self, name) -> Optional[Descriptor]:
        return self._record.describe(name)

    @property
    def source(self):
        return self._record.source

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        value = self._record.get(name, _MISSING)
        if value is _MISSING:
            raise AttributeError(f"record has no field {name!r}")
        return value

    def __repr__(self) -> str:
        return f"RecordView({self._record!r})"


class LazyRecord(MutableMapping):
    """Mutable mapping that computes declared fields on first read.

    Fields are reachable by key (``record["name"]``) and, for names that do
    not start with an underscore or collide with a mapping method, by
    attribute (``record.name``).
    """

    __slots__ = ("_spec", "_source", "_store", "_tombstones", "_computing")

    def __init__(self, spec: Mapping, source, *, detect_cycles: bool = False) -> None:
        self._spec = spec
        self._source = source
        self._store: dict = {}
        self._tombstones: set = set()
        self._computing: Optional[list] = [] if detect_cycles else None

    @property
    def spec(self) -> Mapping:
        return self._spec

    @property
    def source(self):
        return self._source

    def _materialize(self, name):
        compute = self._spec[name]
        computing = self._computing
        if computing is not None:
            if name in computing:
                chain = computing[computing.index(name):] + [name]
                logger.debug("cycle detected while computing %r: %s", name, chain)
                raise CircularFieldError(chain)
            computing.append(name)

        logger.debug("computing field %r", name)
        try:
            value = compute(self._source, RecordView(self))
        except Exception as exc:
            logger.debug("computing field %r raised %s", name, type(exc).__name__)
            raise
        finally:
            if computing is not None:
                computing.pop()

        self._store[name] = value
        return value

    def __getitem__(self, name):
        if name not in self._tombstones:
            if name in self._store:
                return self._store[name]
            if name in self._spec:
                return self._materialize(name)
        raise KeyError(name)

    def get(self, name, default=None):
        # Not via __getitem__: a KeyError raised by a compute function must
        # propagate instead of reading as absent.
        if name in self._tombstones:
            return default
        if name in self._store:
            return self._store[name]
        if name in self._spec:
            return self._materialize(name)
        return default

    def __setitem__(self, name, value) -> None:
        self._tombstones.discard(name)
        self._store[name] = value

    def set(self, name, value):
        self[name] = value
        return value

    def __delitem__(self, name) -> None:
        self._store.pop(name, None)
        self._tombstones.add(name)
        logger.debug("field %r tombstoned", name)

    def pop(self, name, default=_MISSING):
        value = self.get(name, _MISSING)
        if value is _MISSING:
            if default is _MISSING:
                raise KeyError(name)
            return default
        del self[name]
        return value

    def setdefault(self, name, default=None):
        value = self.get(name, _MISSING)
        if value is _MISSING:
            self[name] = default
            return default
        return value

    def clear(self) -> None:
        # Tombstone without reading; popitem() would compute every field.
        for name in self._names():
            del self[name]

    def __contains__(self, name) -> bool:
        return name in self._store or name in self._spec

    def _names(self) -> list:
        spec = self._spec
        tombstones = self._tombstones
        names = [name for name in spec if name not in tombstones]
        names.extend(
            name
            for name in self._store
            if name not in spec and name not in tombstones
        )
        return names

    def __iter__(self) -> Iterator:
        return iter(self._names())

    def __len__(self) -> int:
        return len(self._names())

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        # Sizes differ: decided without computing any field.
        if len(self) != len(other):
            return False
        return dict(self.items()) == dict(other.items())

    __hash__ = None  # type: ignore[assignment]

    def describe(self, name) -> Optional[Descriptor]:
        """Describe ``name`` without computing it.

        Tombstones are ignored here as they are for ``in``: a deleted
        declared field is still described, as unmaterialized.
        """
        if name in self._store:
            return Descriptor(materialized=True, value=self._store[name])
        if name in self._spec:
            return Descriptor(materialized=False)
        return None

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        value = self.get(name, _MISSING)
        if value is _MISSING:
            raise AttributeError(
                f"{type(self).__name__!r} object has no field {name!r}"
            )
        return value

    def __setattr__(self, name, value) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __delattr__(self, name) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            del self[name]

    def __repr__(self) -> str:
        pending = [
            name
            for name in self._spec
            if name not in self._store and name not in self._tombstones
        ]
        return f"{type(self).__name__}({self._store!r}, pending={pending!r})"
