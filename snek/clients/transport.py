"""Transport contract and the default requests-backed implementation."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Protocol, Tuple, Union
import requests
from snek.exceptions.custom_exceptions import TransportError
from snek.utils.constants import DEFAULT_CHUNK_SIZE
from snek.utils.logger import get_logger

log = get_logger(__name__)

Body = Union[str, bytes, Iterable[Union[str, bytes]], None]

@dataclass
class RawResponse:
    """What a transport hands back: status line, headers and an unread body."""
    status_code: int
    status_text: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: Body = None
    ok: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.ok is None:
            self.ok = 200 <= self.status_code < 300

class Transport(Protocol):
    """Anything able to issue a single HTTP request."""

    def send(self, method: str, url: str, headers: Mapping[str, str], body: Any) -> RawResponse:
        ...

def _stream(resp: requests.Response, chunk_size: int) -> Iterator[bytes]:
    """Yield body chunks and always release the connection afterwards."""
    try:
        yield from resp.iter_content(chunk_size=chunk_size)
    except requests.RequestException as e:
        raise TransportError(
            f"Failed reading body from {resp.url}: {e}",
            response=RawResponse(resp.status_code, resp.reason or "", list(resp.headers.items()), b""),
        ) from e
    finally:
        resp.close()

@dataclass
class RequestsTransport:
    """Transport built on requests; the body is streamed, not preloaded."""
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def send(self, method: str, url: str, headers: Mapping[str, str], body: Any) -> RawResponse:
        """Issue one request and wrap the streamed response."""
        try:
            resp = requests.request(method, url, headers=dict(headers), data=body, stream=True)
        except requests.RequestException as e:
            raise TransportError(f"{type(e).__name__}: {e}", response=self._from_error(e)) from e
        return RawResponse(
            status_code=resp.status_code,
            status_text=resp.reason or "",
            headers=list(resp.headers.items()),
            body=_stream(resp, self.chunk_size),
        )

    @staticmethod
    def _from_error(e: requests.RequestException) -> Optional[RawResponse]:
        """Salvage a response attached to a requests error, if any."""
        resp = e.response
        if resp is None:
            return None
        log.debug("Transport error carried a %s response", resp.status_code)
        try:
            content = resp.content
        except requests.RequestException:
            content = b""
        return RawResponse(resp.status_code, resp.reason or "", list(resp.headers.items()), content)
