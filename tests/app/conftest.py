"""Fixtures for the application layer: a manually advanced scheduler."""

from collections.abc import Callable
from typing import Any

import pytest


class _Timer:
    def __init__(self, when: float, callback: Callable[..., object], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """call_later stand-in driven by an explicit clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[_Timer] = []

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> _Timer:
        timer = _Timer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [t for t in self.timers if not t.cancelled and t.when <= self.now]
        self.timers = [t for t in self.timers if t not in due and not t.cancelled]
        for timer in sorted(due, key=lambda t: t.when):
            timer.callback(*timer.args)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
