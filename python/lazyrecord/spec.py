"""Field specifications and the record factory."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Callable, Union

from .errors import FieldSpecError
from .record import LazyRecord

# compute(source, view) -> value
ComputeFn = Callable[[Any, Any], Any]


class FieldSpec(Mapping):
    """Immutable mapping of field name to compute function.

    Compute functions are called as ``compute(source, view)`` where ``view``
    is a read-only :class:`~lazyrecord.record.RecordView` of the record being
    filled in, so one field may read its siblings.
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        fields: Mapping[str, ComputeFn] = MappingProxyType({}),
        /,
        **kwargs: ComputeFn,
    ) -> None:
        self._fields = MappingProxyType({**fields, **kwargs})

    def __getitem__(self, name) -> ComputeFn:
        return self._fields[name]

    def __contains__(self, name) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def validate(self) -> FieldSpec:
        for name, compute in self._fields.items():
            if not callable(compute):
                raise FieldSpecError(name, compute)
        return self

    def __repr__(self) -> str:
        return f"FieldSpec({list(self._fields)!r})"


def make_factory(
    fields: Union[FieldSpec, Mapping[str, ComputeFn]],
    *,
    detect_cycles: bool = False,
    validate: bool = False,
) -> Callable[[Any], LazyRecord]:
    """Return a constructor that wraps a source value in a LazyRecord.

    Nothing is computed here or at construction; each field computes on its
    first read. ``validate`` checks that every field is callable up front.
    ``detect_cycles`` turns self-dependent fields into CircularFieldError
    rather than unbounded recursion.
    """
    spec = fields if isinstance(fields, FieldSpec) else FieldSpec(fields)
    if validate:
        spec.validate()

    def construct(source) -> LazyRecord:
        return LazyRecord(spec, source, detect_cycles=detect_cycles)

    construct.spec = spec  # type: ignore[attr-defined]
    return construct
