"""Fluent request builder and the verb factories."""
from __future__ import annotations
import asyncio
from collections.abc import Mapping
from typing import Any, Callable, Dict, Generator, Optional, TypedDict
from snek.clients.transport import RequestsTransport, Transport
from snek.config.settings import Settings
from snek.exceptions.custom_exceptions import HTTPError
from snek.services.deferred import Deferred
from snek.services.executor import Executor, RequestConfig
from snek.services.normalizer import Result
from snek.services.serializer import is_structured, serializer_for
from snek.services.store import QueryStore
from snek.utils.constants import CONTENT_TYPE, JSON_TYPE
from snek.utils.logger import get_logger

log = get_logger(__name__)

class RequestOptions(TypedDict, total=False):
    """Initial configuration accepted by the verb factories."""
    method: str
    headers: Mapping[str, str]
    query: Mapping[str, Any]
    body: Any
    user_agent: str

class Request:
    """Chainable request configuration that executes once when awaited.

    Build with a verb factory, chain `query`, `set` and `send`, then either
    `await` the request or register handlers with `then` / `catch`. The first
    of those schedules the network call; later ones share its outcome.
    """

    def __init__(
        self,
        method: str,
        url: str,
        options: Optional[RequestOptions] = None,
        *,
        transport: Optional[Transport] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        options = options or {}
        settings = settings or Settings.from_env()
        self._config = RequestConfig(method=method.upper(), url=url, user_agent=settings.user_agent)
        self._executor = Executor(transport if transport is not None else RequestsTransport(settings.chunk_size))
        self._deferred: Optional[Deferred[Result]] = None

        if options.get("headers"):
            self.set(options["headers"])
        if options.get("query"):
            self.query(options["query"])
        if options.get("body") is not None:
            self.send(options["body"])
        if options.get("user_agent"):
            self._config.user_agent = options["user_agent"]

    @staticmethod
    def get(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("GET", url, options, **kwargs)

    @staticmethod
    def post(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("POST", url, options, **kwargs)

    @staticmethod
    def put(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("PUT", url, options, **kwargs)

    @staticmethod
    def patch(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("PATCH", url, options, **kwargs)

    @staticmethod
    def delete(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("DELETE", url, options, **kwargs)

    @staticmethod
    def head(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("HEAD", url, options, **kwargs)

    @staticmethod
    def options(url: str, options: Optional[RequestOptions] = None, **kwargs: Any) -> "Request":
        return Request("OPTIONS", url, options, **kwargs)

    @property
    def method(self) -> str:
        return self._config.method

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def headers(self) -> Dict[str, str]:
        return self._config.headers.to_dict()

    @property
    def query_params(self) -> Dict[str, str]:
        return self._config.query.to_dict() if self._config.query is not None else {}

    @property
    def body(self) -> Any:
        return self._config.body

    @property
    def user_agent(self) -> str:
        return self._config.user_agent

    def _check_mutable(self) -> None:
        if self._deferred is not None:
            log.warning("%s %s already dispatched; further changes are ignored", self.method, self.url)

    def query(self, name: Any, value: Any = None) -> "Request":
        """Add query parameters from a mapping, or one name/value pair."""
        self._check_mutable()
        if self._config.query is None:
            self._config.query = QueryStore()
        if isinstance(name, Mapping):
            self._config.query.set_many(name)
        else:
            self._config.query.set_one(name, value)
        return self

    def set(self, name: Any, value: Any = None) -> "Request":
        """Set headers from a mapping, or one name/value pair. Keys are lower-cased."""
        self._check_mutable()
        if isinstance(name, Mapping):
            self._config.headers.set_many(name)
        else:
            self._config.headers.set_one(name, value)
        return self

    def send(self, data: Any) -> "Request":
        """Assign the body, serializing mappings and sequences by content type.

        With no content-type set, JSON is assumed and the header is added. A
        content type other than JSON or form-urlencoded leaves the data as-is.
        """
        self._check_mutable()
        if not is_structured(data):
            self._config.body = data
            return self

        content_type = self._config.headers.get(CONTENT_TYPE)
        serialize = serializer_for(content_type)
        if content_type is None:
            self.set(CONTENT_TYPE, JSON_TYPE)
        self._config.body = serialize(data) if serialize is not None else data
        return self

    def _dispatch(self) -> Deferred[Result]:
        if self._deferred is None:
            # Fails outside a running loop before anything is marked dispatched.
            asyncio.get_running_loop()
            config = self._config.snapshot()
            self._deferred = Deferred(lambda: self._executor.execute(config))
        return self._deferred

    def then(
        self,
        on_resolve: Optional[Callable[[Result], Any]] = None,
        on_reject: Optional[Callable[[HTTPError], Any]] = None,
    ) -> asyncio.Task:
        """Register completion handlers, starting the call on first use."""
        return self._dispatch().then(on_resolve, on_reject)

    def catch(self, on_reject: Callable[[HTTPError], Any]) -> asyncio.Task:
        return self._dispatch().catch(on_reject)

    def __await__(self) -> Generator[Any, None, Result]:
        return self._dispatch().__await__()

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"

get = Request.get
post = Request.post
put = Request.put
patch = Request.patch
delete = Request.delete
head = Request.head
options = Request.options
