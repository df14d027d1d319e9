"""Minimal publish/subscribe signal"""

from __future__ import annotations

from typing import Any, Callable


class Signal:
    """Synchronous callback list; subscribe() returns an unsubscribe function"""

    def __init__(self, name: str):
        self.name = name
        self._listeners: list[Callable[..., Any]] = []

    def subscribe(self, listener: Callable[..., Any]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, *args: Any) -> None:
        for listener in list(self._listeners):
            listener(*args)
