"""Debounced dispatch on the asyncio event loop.

A burst of calls closer together than the delay collapses into one call of the
target, made ``delay`` after the last call and with the last call's arguments.
Earlier scheduled firings are cancelled, never run.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce rapid calls into a single delayed call.

    The target is always invoked from the event loop (``loop.call_later``),
    never synchronously from inside the caller. Coroutine targets are
    scheduled as tasks.

    Example:
        ```python
        search = Debouncer(presenter.do_search, delay_ms=80)
        search("f")
        search("fo")
        search("foo")  # only this one reaches do_search, 80ms from now
        ```
    """

    def __init__(self, callback: Callable[..., Any], delay_ms: float):
        self.callback = callback
        self.delay = max(delay_ms, 0) / 1000
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """Whether a firing is currently scheduled."""
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args, kwargs)

    def cancel(self) -> None:
        """Drop the scheduled firing, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._handle = None
        result = self.callback(*args, **kwargs)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced call failed: {task.exception()!r}")


def debounce(delay_ms: float) -> Callable[[Callable[..., Any]], Debouncer]:
    """Decorator form of :class:`Debouncer`."""

    def wrap(callback: Callable[..., Any]) -> Debouncer:
        return Debouncer(callback, delay_ms)

    return wrap
