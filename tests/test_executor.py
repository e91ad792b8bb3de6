from __future__ import annotations

import asyncio

import pytest

from snek.clients.transport import RawResponse
from snek.exceptions.custom_exceptions import HTTPError, TransportError
from snek.services.executor import Executor, RequestConfig, build_url, failure_result
from snek.services.store import HeaderStore, QueryStore
from tests.helpers import FakeTransport, text_response


def test_build_url_without_query_is_unchanged() -> None:
    assert build_url("http://x/y", None) == "http://x/y"
    assert build_url("http://x/y", QueryStore()) == "http://x/y"


def test_build_url_joins_and_encodes() -> None:
    query = QueryStore({"a": "1", "q": "a b&c/d"})

    assert build_url("http://x/y", query) == "http://x/y?a=1&q=a%20b%26c%2Fd"
    assert build_url("http://x/y?z=0", QueryStore({"a": "1"})) == "http://x/y?z=0&a=1"
    assert build_url("http://x/y?", QueryStore({"a": "1"})) == "http://x/y?a=1"


def test_snapshot_copies_stores() -> None:
    config = RequestConfig(method="GET", url="http://x/y", headers=HeaderStore({"a": "1"}), query=QueryStore())
    frozen = config.snapshot()
    config.headers.set_one("b", "2")
    config.query.set_one("c", "3")

    assert frozen.headers.to_dict() == {"a": "1"}
    assert len(frozen.query) == 0


def test_execute_sends_method_headers_and_body() -> None:
    fake = FakeTransport([text_response("done")])
    config = RequestConfig(
        method="PATCH",
        url="http://x/items/1",
        headers=HeaderStore({"Content-Type": "text/plain"}),
        body="payload",
        user_agent="agent/1",
    )

    result = asyncio.run(Executor(fake).execute(config))

    assert result.raw == "done"
    sent = fake.calls[0]
    assert sent.method == "PATCH"
    assert sent.body == "payload"
    assert sent.headers == {"content-type": "text/plain", "user-agent": "agent/1"}
    assert config.headers.to_dict() == {"content-type": "text/plain"}


def test_non_ok_status_raises_with_status_message() -> None:
    fake = FakeTransport([text_response("boom", status=500, reason="Internal Server Error")])

    with pytest.raises(HTTPError, match="500 Internal Server Error") as info:
        asyncio.run(Executor(fake).execute(RequestConfig(method="GET", url="http://x/y")))

    assert info.value.result.status_code == 500
    assert info.value.headers == {"content-type": "text/plain"}


def test_transport_error_with_response_is_normalized() -> None:
    salvaged = RawResponse(200, "OK", [("Content-Type", "application/json")], b'{"partial":true}')
    fake = FakeTransport([TransportError("stream cut", response=salvaged)])

    with pytest.raises(HTTPError) as info:
        asyncio.run(Executor(fake).execute(RequestConfig(method="GET", url="http://x/y")))

    err = info.value
    assert err.ok is False
    assert err.status_code == 200
    assert err.body == {"partial": True}
    assert isinstance(err.__cause__, TransportError)


def test_failure_result_defaults_missing_fields() -> None:
    result = failure_result(OSError())

    assert result.status_code == 0
    assert result.status_text == "OSError"
    assert result.raw == ""
    assert result.ok is False


def test_failure_result_survives_an_unreadable_response() -> None:
    def broken():
        raise OSError("reset")
        yield b""

    err = TransportError("read failed", response=RawResponse(200, "OK", [], broken()))

    result = failure_result(err)

    assert result.status_code == 0
    assert result.status_text == "read failed"


def test_build_url_keeps_fragment_last() -> None:
    query = QueryStore({"a": "1"})

    assert build_url("http://x/y#top", query) == "http://x/y?a=1#top"
    assert build_url("http://x/y?z=0#top", query) == "http://x/y?z=0&a=1#top"
    assert build_url("http://x/y#top", None) == "http://x/y#top"
