"""Turns a raw transport response into the uniform Result shape."""
from __future__ import annotations
import codecs
from dataclasses import dataclass, field
from email.message import Message
from functools import cached_property
from typing import Any, Dict, Iterable, Optional, Tuple
from snek.clients.transport import RawResponse
from snek.services.serializer import parse_body
from snek.utils.constants import CONTENT_TYPE, DEFAULT_CHARSET

@dataclass(frozen=True)
class Result:
    """A normalized response. `body` is parsed on first access and memoized."""
    raw: str
    ok: bool
    status_code: int
    status_text: str
    headers: Dict[str, str] = field(default_factory=dict)

    @cached_property
    def body(self) -> Any:
        """Response body parsed according to its content type."""
        return parse_body(self.raw, self.headers.get(CONTENT_TYPE))

def flatten_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Copy header pairs into a flat dict, skipping empty keys or values."""
    headers: Dict[str, str] = {}
    for key, value in pairs:
        if key and value:
            headers[key.lower()] = value
    return headers

def charset_of(content_type: Optional[str]) -> str:
    """Charset declared in a content-type header, or utf-8."""
    if not content_type:
        return DEFAULT_CHARSET
    msg = Message()
    msg[CONTENT_TYPE] = content_type
    return msg.get_content_charset() or DEFAULT_CHARSET

def _decoder(charset: str) -> codecs.IncrementalDecoder:
    try:
        return codecs.getincrementaldecoder(charset)(errors="replace")
    except LookupError:
        return codecs.getincrementaldecoder(DEFAULT_CHARSET)(errors="replace")

def read_body(body: Any, charset: str) -> str:
    """Read a buffered or streamed body to completion as text."""
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    decoder = _decoder(charset)
    if isinstance(body, (bytes, bytearray)):
        return decoder.decode(bytes(body), final=True)
    # Decode incrementally so multi-byte characters split across chunks survive.
    parts = []
    for chunk in body:
        parts.append(chunk if isinstance(chunk, str) else decoder.decode(chunk))
    parts.append(decoder.decode(b"", final=True))
    return "".join(parts)

def normalize(response: RawResponse) -> Result:
    """Build a Result from a raw response, reading its body fully."""
    headers = flatten_headers(response.headers)
    raw = read_body(response.body, charset_of(headers.get(CONTENT_TYPE)))
    return Result(
        raw=raw,
        ok=bool(response.ok),
        status_code=response.status_code,
        status_text=response.status_text,
        headers=headers,
    )
