"""Publish events to every subscribed channel without blocking."""

from __future__ import annotations

import threading
from typing import Any, Protocol


class _Sink(Protocol):
    def put(self, item: Any) -> None: ...


class EventStreamer:
    """Delivers each published item to all subscribers on background threads."""

    def __init__(self) -> None:
        self._channels: list[_Sink] = []
        self._lock = threading.Lock()

    def publish(self, item: Any) -> None:
        """Hand ``item`` to every subscribed channel without waiting."""
        with self._lock:
            for channel in self._channels:
                threading.Thread(target=channel.put, args=(item,), daemon=True).start()

    def subscribe(self, channel: _Sink) -> None:
        """Add ``channel`` to the subscribers."""
        with self._lock:
            self._channels.append(channel)