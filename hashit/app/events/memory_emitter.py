from __future__ import annotations

import threading
from typing import List

from hashit.app.events.emitter import HashEventEmitter
from hashit.app.events.models import HashEvent, HashEventType


class MemoryEventEmitter(HashEventEmitter):
    """
    Thread-safe in-memory recorder of emitted events.

    Keeps events in arrival order. Stops recording once the run
    completes or fails.
    """

    def __init__(self) -> None:
        self._events: List[HashEvent] = []
        self._lock = threading.Lock()
        self._closed = False

    def emit(self, event: HashEvent) -> None:
        with self._lock:
            if self._closed:
                return
            self._events.append(event)
            if event.event_type in {
                HashEventType.RUN_COMPLETED,
                HashEventType.RUN_FAILED,
            }:
                self._closed = True

    @property
    def events(self) -> List[HashEvent]:
        with self._lock:
            return list(self._events)

    def of_type(self, event_type: HashEventType) -> List[HashEvent]:
        return [e for e in self.events if e.event_type == event_type]
