from __future__ import annotations


class LazyRecordError(Exception):
    """Base class for errors raised by lazyrecord itself."""


class FieldSpecError(LazyRecordError, TypeError):
    """Raised when a validated field specification holds a non-callable."""

    def __init__(self, name, value) -> None:
        super().__init__(
            f"field {name!r} must be callable, got {type(value).__name__}"
        )
        self.name = name


class CircularFieldError(LazyRecordError, RecursionError):
    """Raised when a field's computation re-enters itself.

    Only raised by factories built with ``detect_cycles=True``; otherwise
    the interpreter's own RecursionError surfaces.
    """

    def __init__(self, chain: list) -> None:
        super().__init__("circular field dependency: " + " -> ".join(map(str, chain)))
        self.chain = list(chain)
