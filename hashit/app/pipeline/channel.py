"""
Bounded producer/consumer channel.

A thin layer over ``queue.Queue`` that adds an explicit end-of-stream
signal. ``put`` blocks while the channel is full (backpressure), ``get``
blocks while it is empty, and once the producer side calls ``close`` the
consumers drain what is left and then see ChannelClosed.

Closing posts a sentinel. A consumer that receives it puts it back so
every other consumer blocked on the same channel also wakes up.
"""

from __future__ import annotations

import queue
import threading
from typing import Generic, Iterator, TypeVar

from hashit.app.errors import ChannelClosed

T = TypeVar("T")

_CLOSED = object()


class BoundedChannel(Generic[T]):
    def __init__(self, maxsize: int) -> None:
        if maxsize < 1:
            raise ValueError("channel capacity must be at least 1")
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()

    def put(self, item: T) -> None:
        if self._closed.is_set():
            raise ChannelClosed("put on a closed channel")
        self._queue.put(item)

    def get(self) -> T:
        item = self._queue.get()
        if item is _CLOSED:
            self._queue.put(_CLOSED)
            raise ChannelClosed("channel closed and drained")
        return item

    def close(self) -> None:
        """Signal that no more items will be put. Idempotent."""
        with self._close_lock:
            if self._closed.is_set():
                return
            self._closed.set()
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return
