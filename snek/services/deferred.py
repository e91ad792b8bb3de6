"""A memoized, single-shot asynchronous computation."""
from __future__ import annotations
import asyncio
import inspect
from typing import Any, Awaitable, Callable, Generator, Generic, Optional, TypeVar

T = TypeVar("T")

async def _resolve(value: Any) -> Any:
    """Await handler results that are awaitable; pass plain values through."""
    if inspect.isawaitable(value):
        return await value
    return value

class Deferred(Generic[T]):
    """Runs its factory once, on first use, and shares the outcome.

    Every `then`, `catch` or `await` attaches to the same underlying task, so
    any number of completion chains observe one result without repeating the
    work. Must be used from within a running event loop.
    """

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory = factory
        self._future: Optional[asyncio.Future] = None

    @property
    def started(self) -> bool:
        return self._future is not None

    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def future(self) -> asyncio.Future:
        """The shared future, scheduling the computation on first call."""
        if self._future is None:
            loop = asyncio.get_running_loop()
            self._future = asyncio.ensure_future(self._factory(), loop=loop)
        return self._future

    def then(
        self,
        on_resolve: Optional[Callable[[T], Any]] = None,
        on_reject: Optional[Callable[[Exception], Any]] = None,
    ) -> asyncio.Task:
        """Attach handlers; returns a task settling with the handler's result."""
        shared = self.future()
        return asyncio.ensure_future(self._settle(shared, on_resolve, on_reject))

    def catch(self, on_reject: Callable[[Exception], Any]) -> asyncio.Task:
        return self.then(None, on_reject)

    @staticmethod
    async def _settle(shared: asyncio.Future, on_resolve, on_reject) -> Any:
        try:
            value = await asyncio.shield(shared)
        except Exception as e:
            if on_reject is None:
                raise
            return await _resolve(on_reject(e))
        if on_resolve is None:
            return value
        return await _resolve(on_resolve(value))

    def __await__(self) -> Generator[Any, None, T]:
        return asyncio.shield(self.future()).__await__()
