"""Executor: performs exactly one outbound call for a request configuration."""
from __future__ import annotations
import asyncio
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode
from snek.clients.transport import RawResponse, Transport
from snek.exceptions.custom_exceptions import HTTPError
from snek.services.normalizer import Result, normalize
from snek.services.store import HeaderStore, QueryStore
from snek.utils.constants import LIBRARY_NAME, USER_AGENT, VERSION
from snek.utils.logger import get_logger

log = get_logger(__name__)

@dataclass
class RequestConfig:
    """Everything needed to issue one request."""
    method: str
    url: str
    headers: HeaderStore = field(default_factory=HeaderStore)
    query: Optional[QueryStore] = None
    body: Any = None
    user_agent: str = f"{LIBRARY_NAME}/{VERSION}"

    def snapshot(self) -> "RequestConfig":
        """Independent copy, so later chaining cannot touch an in-flight call."""
        return replace(
            self,
            headers=self.headers.copy(),
            query=self.query.copy() if self.query is not None else None,
        )

def build_url(url: str, query: Optional[QueryStore]) -> str:
    """Append percent-encoded query pairs in insertion order, ahead of any fragment."""
    if not query:
        return url
    url, hash_mark, fragment = url.partition("#")
    encoded = urlencode(list(query.items()), quote_via=quote)
    if url.endswith(("?", "&")):
        sep = ""
    elif "?" in url:
        sep = "&"
    else:
        sep = "?"
    return f"{url}{sep}{encoded}{hash_mark}{fragment}"

def failure_result(exc: BaseException) -> Result:
    """Best-effort Result for a transport failure.

    Uses the response the failure carries when there is one; otherwise the
    status fields are defaulted.
    """
    response = getattr(exc, "response", None)
    if isinstance(response, RawResponse):
        try:
            return replace(normalize(response), ok=False)
        except Exception as e:
            log.debug("Could not normalize failed response: %s", e)
    return Result(raw="", ok=False, status_code=0, status_text=str(exc) or type(exc).__name__)

@dataclass
class Executor:
    """Runs a configuration through a transport and normalizes the outcome."""
    transport: Transport

    async def execute(self, config: RequestConfig) -> Result:
        """Issue the call; raise HTTPError for non-2xx or transport failures."""
        url = build_url(config.url, config.query)
        headers = config.headers.copy()
        if USER_AGENT not in headers:
            headers.set_one(USER_AGENT, config.user_agent)

        log.debug("%s %s", config.method, url)
        try:
            result = await asyncio.to_thread(self._round_trip, config.method, url, headers.to_dict(), config.body)
        except Exception as e:
            log.warning("%s %s failed: %s", config.method, url, e)
            failed = failure_result(e)
            raise HTTPError(f"{failed.status_code} {failed.status_text}", failed) from e

        if not result.ok:
            log.info("%s %s returned %s %s", config.method, url, result.status_code, result.status_text)
            raise HTTPError(f"{result.status_code} {result.status_text}", result)
        return result

    def _round_trip(self, method: str, url: str, headers: Dict[str, str], body: Any) -> Result:
        """Blocking send plus full body read; runs off the event loop."""
        return normalize(self.transport.send(method, url, headers, body))
