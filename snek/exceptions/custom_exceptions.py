"""Custom exception types for clearer error handling."""
from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from snek.clients.transport import RawResponse
    from snek.services.normalizer import Result

class SnekError(Exception):
    """Base exception for the library."""

class ConfigurationError(SnekError):
    """Raised when a settings value is malformed."""

class TransportError(SnekError):
    """Raised by a transport when the underlying client fails."""

    def __init__(self, message: str, response: Optional["RawResponse"] = None) -> None:
        super().__init__(message)
        self.response = response

class HTTPError(SnekError):
    """A failed call: non-2xx status or transport failure.

    Carries every field of the normalized result so failure handlers can
    inspect the response without re-parsing it.
    """

    def __init__(self, message: str, result: "Result") -> None:
        super().__init__(message)
        self.message = message
        self.result = result
        self.raw: str = result.raw
        self.ok: bool = result.ok
        self.status_code: int = result.status_code
        self.status_text: str = result.status_text
        self.headers: Dict[str, str] = result.headers

    @property
    def body(self) -> Any:
        """Parsed response body, shared with the wrapped result."""
        return self.result.body

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"
