from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import pytest

PYTHON_DIR = Path(__file__).resolve().parents[1]
if str(PYTHON_DIR) not in sys.path:
    sys.path.insert(0, str(PYTHON_DIR))

from lazyrecord import make_factory  # noqa: E402


@pytest.fixture
def source() -> dict[str, str]:
    return {
        "first": "Lando",
        "last": "Calrissian",
        "mobile": "555-123-1234",
        "home": "555-555-5555",
    }


@pytest.fixture
def calls() -> Counter:
    """Number of times each field's compute function has run."""
    return Counter()


@pytest.fixture
def fields(calls: Counter) -> dict:
    def name(src, rec):
        calls["name"] += 1
        return f"{src['first']} {src['last']}"

    def phone(src, rec):
        calls["phone"] += 1
        return src["mobile"] or src["home"]

    def contact_info(src, rec):
        calls["contactInfo"] += 1
        return rec["name"] + "\n" + rec.phone

    return {"name": name, "phone": phone, "contactInfo": contact_info}


@pytest.fixture
def to_person(fields):
    return make_factory(fields)


@pytest.fixture
def person(to_person, source):
    return to_person(source)
