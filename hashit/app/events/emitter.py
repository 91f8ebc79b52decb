from __future__ import annotations

import logging
from typing import Protocol

from hashit.app.events.models import HashEvent

logger = logging.getLogger(__name__)


class HashEventEmitter(Protocol):
    """
    Interface for broadcasting run observations.

    Implementations are called from worker threads and must be:
    - thread-safe
    - fail-safe (emission failures must not break the run)
    - observational only
    """

    def emit(self, event: HashEvent) -> None:
        ...


class NullEventEmitter:
    """A no-op emitter, used when nobody is listening."""

    def emit(self, event: HashEvent) -> None:
        return


def safe_emit(emitter: HashEventEmitter, event: HashEvent) -> None:
    """Emit an event; a failing emitter is logged and otherwise ignored."""
    try:
        emitter.emit(event)
    except Exception:
        logger.exception("event emitter failed on %s", event.event_type.value)
