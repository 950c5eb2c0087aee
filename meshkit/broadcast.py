"""Multi-listener broadcast of messages to registered queues."""

from __future__ import annotations

import enum
import queue
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


class BroadcastSource(str, enum.Enum):
    """Origin of a broadcast message."""

    OPERATOR_SYNC = "urn:meshery:operator:sync"


@dataclass
class BroadcastMessage:
    """A message delivered to every registered listener."""

    source: BroadcastSource | str = BroadcastSource.OPERATOR_SYNC
    type: str = ""
    data: Any = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _Sink(Protocol):
    def put(self, item: Any) -> None: ...


_REGISTER = "register"
_UNREGISTER = "unregister"
_MESSAGE = "message"
_CLOSE = "close"


class Broadcaster:
    """Fans submitted messages out to every registered channel.

    Channels are any objects with a ``put`` method, such as ``queue.Queue``.
    Commands are handled in order by a background worker thread.
    """

    def __init__(self, buflen: int = 0) -> None:
        self._commands: queue.Queue[tuple[str, Any]] = queue.Queue(maxsize=max(buflen, 1))
        self._outputs: dict[_Sink, bool] = {}
        self._closed = False
        self._lock = threading.Lock()
        self._worker = threading.Thread(target=self._run, daemon=True)
        self._worker.start()

    def _run(self) -> None:
        while True:
            kind, payload = self._commands.get()
            if kind == _MESSAGE:
                for channel in list(self._outputs):
                    channel.put(payload)
            elif kind == _REGISTER:
                self._outputs[payload] = True
            elif kind == _UNREGISTER:
                self._outputs.pop(payload, None)
            elif kind == _CLOSE:
                return

    def _send(self, kind: str, payload: Any) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("broadcaster is closed")
        self._commands.put((kind, payload))

    def register(self, channel: _Sink) -> None:
        """Start delivering broadcasts to ``channel``."""
        self._send(_REGISTER, channel)

    def unregister(self, channel: _Sink) -> None:
        """Stop delivering broadcasts to ``channel``."""
        self._send(_UNREGISTER, channel)

    def submit(self, message: BroadcastMessage) -> None:
        """Send ``message`` to all registered channels."""
        self._send(_MESSAGE, message)

    def close(self) -> None:
        """Shut the broadcaster down after pending commands are handled."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._commands.put((_CLOSE, None))
        self._worker.join()

    def __enter__(self) -> Broadcaster:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()