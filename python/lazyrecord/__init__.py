from __future__ import annotations

import logging

from .errors import CircularFieldError, FieldSpecError, LazyRecordError
from .query import select
from .record import Descriptor, LazyRecord, RecordView
from .serialize import dumps, json_default, to_dict
from .spec import FieldSpec, make_factory

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CircularFieldError",
    "Descriptor",
    "FieldSpec",
    "FieldSpecError",
    "LazyRecord",
    "LazyRecordError",
    "RecordView",
    "dumps",
    "json_default",
    "make_factory",
    "select",
    "to_dict",
    "__version__",
]
