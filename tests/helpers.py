from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Any, Awaitable

from snek.clients.transport import RawResponse


@dataclass
class SentRequest:
    method: str
    url: str
    headers: dict[str, str]
    body: Any


class FakeTransport:
    """Replays canned outcomes and records what was sent."""

    def __init__(self, outcomes: list[object]) -> None:
        self._outcomes = list(outcomes)
        self._lock = threading.Lock()
        self.calls: list[SentRequest] = []

    def send(self, method: str, url: str, headers: Any, body: Any) -> RawResponse:
        with self._lock:
            self.calls.append(SentRequest(method=method, url=url, headers=dict(headers), body=body))
            outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        assert isinstance(outcome, RawResponse)
        return outcome


def json_response(payload: Any, *, status: int = 200, reason: str = "OK") -> RawResponse:
    return RawResponse(
        status_code=status,
        status_text=reason,
        headers=[("Content-Type", "application/json; charset=utf-8")],
        body=json.dumps(payload).encode("utf-8"),
    )


def text_response(text: str, *, status: int = 200, reason: str = "OK") -> RawResponse:
    return RawResponse(
        status_code=status,
        status_text=reason,
        headers=[("Content-Type", "text/plain")],
        body=text,
    )


async def wait(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
