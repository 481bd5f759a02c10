"""Trailing-edge debounce on top of a ``call_later`` scheduler."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later, e.g. an asyncio event loop."""

    def call_later(
        self, delay: float, callback: Callable[..., object], *args: Any
    ) -> TimerHandle: ...


class Debouncer:
    """Collapse bursts of calls into one call with the last arguments.

    Each call cancels the pending timer and schedules a new one ``wait``
    seconds out, so the callback runs exactly once after the calls stop.
    Without an explicit scheduler the running asyncio loop is used.
    """

    def __init__(
        self,
        callback: Callable[..., object],
        wait: float,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._callback = callback
        self._wait = wait
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Debounce window reset")
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(self._wait, self._fire, *args)

    def _fire(self, *args: Any) -> None:
        self._handle = None
        self._callback(*args)
