from __future__ import annotations

from snek.services.store import HeaderStore, QueryStore


def test_header_keys_are_lowercased_and_overwrite_by_case() -> None:
    headers = HeaderStore()
    headers.set_one("Content-Type", "text/plain")
    headers.set_one("CONTENT-TYPE", "application/json")

    assert headers.to_dict() == {"content-type": "application/json"}
    assert headers.get("Content-type") == "application/json"
    assert "CoNtEnT-TyPe" in headers


def test_set_many_lowercases_every_key() -> None:
    headers = HeaderStore({"X-One": "1"})
    headers.set_many({"X-Two": "2", "x-one": "uno"})

    assert headers.to_dict() == {"x-one": "uno", "x-two": "2"}


def test_query_keeps_first_seen_order_and_last_value() -> None:
    query = QueryStore()
    query.set_one("a", "1")
    query.set_one("b", "2")
    query.set_many({"a": "3", "c": 4})

    assert list(query.items()) == [("a", "3"), ("b", "2"), ("c", "4")]


def test_missing_value_is_a_no_op() -> None:
    query = QueryStore()
    query.set_one("a", None)
    query.set_one("b", "")

    assert len(query) == 0


def test_copy_is_independent() -> None:
    headers = HeaderStore({"a": "1"})
    clone = headers.copy()
    clone.set_one("b", "2")

    assert isinstance(clone, HeaderStore)
    assert headers.to_dict() == {"a": "1"}
    assert clone.to_dict() == {"a": "1", "b": "2"}
