from __future__ import annotations

"""Tiny observer registry.

Handlers receive no payload; they are expected to re-read whatever state
they display from the object that notified them.
"""

from typing import Callable, Dict, List

Listener = Callable[[], None]


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, handler: Listener) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str) -> None:
        for h in list(self._subs.get(event, [])):
            h()

    def has_subscribers(self, event: str) -> bool:
        return bool(self._subs.get(event))
