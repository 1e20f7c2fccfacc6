from __future__ import annotations

import pytest
from jmespath.exceptions import JMESPathTypeError

from lazyrecord import make_factory, select
from lazyrecord.query import compile_query


def test_select_computes_only_touched_fields(person, calls) -> None:
    assert select("name", person) == "Lando Calrissian"
    assert calls == {"name": 1}


def test_select_multiselect(person, calls) -> None:
    result = select("{who: name, number: phone}", person)
    assert result == {"who": "Lando Calrissian", "number": "555-123-1234"}
    assert "contactInfo" not in calls


def test_select_missing_field_is_none(person) -> None:
    assert select("nonexistent", person) is None


def test_select_skips_deleted_fields(person) -> None:
    del person["phone"]
    assert select("phone", person) is None


def test_select_nested_and_filtered(source) -> None:
    to_ship = make_factory(
        {
            "model": lambda src, rec: src["model"],
            "fast": lambda src, rec: src["parsecs"] < 14,
        }
    )
    to_pilot = make_factory(
        {
            "name": lambda src, rec: src["first"],
            "ships": lambda src, rec: [
                to_ship({"model": "YT-1300", "parsecs": 12}),
                to_ship({"model": "Lambda", "parsecs": 20}),
            ],
        }
    )
    pilot = to_pilot(source)
    assert select("ships[0].model", pilot) == "YT-1300"
    assert select("ships[?fast].model", pilot) == ["YT-1300"]


def test_compiled_queries_are_cached() -> None:
    assert compile_query("a.b") is compile_query("a.b")


def test_truthiness_checks_do_not_compute_record(person, calls) -> None:
    assert select("@ && name", person) == "Lando Calrissian"
    assert calls == {"name": 1}
    assert select("!@", person) is False
    assert select("name || phone", person) == "Lando Calrissian"
    assert calls == {"name": 1}


def test_empty_record_is_falsy(person) -> None:
    person.clear()
    assert select("@ || 'empty'", person) == "empty"


def test_keys_and_length_functions(person, calls) -> None:
    person["foo"] = "bar"
    assert select("keys(@)", person) == ["name", "phone", "contactInfo", "foo"]
    assert select("length(@)", person) == 4
    assert select("type(@)", person) == "object"
    assert select("length(name)", person) == len("Lando Calrissian")
    assert calls == {"name": 1}


def test_values_and_merge_functions(person) -> None:
    del person["contactInfo"]
    assert select("values(@)", person) == ["Lando Calrissian", "555-123-1234"]
    assert select("merge(@, `{\"foo\": \"bar\"}`)", person) == {
        "name": "Lando Calrissian",
        "phone": "555-123-1234",
        "foo": "bar",
    }


def test_functions_still_reject_wrong_types(person) -> None:
    with pytest.raises(JMESPathTypeError):
        select("keys(name)", person)
    with pytest.raises(JMESPathTypeError):
        select("length(`1`)", person)
