"""
Digest worker pool.

A fixed number of threads drain the task channel, digest each file and
push the resulting DigestSet to the result channel. Workers share the
DigestEngine and the ReferenceIndex read-only; each DigestSet belongs to
exactly one worker until it is handed to the result channel.

When the last worker exits, the result channel is closed so the
aggregator can finish.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from hashit.app.digest.engine import DigestEngine
from hashit.app.events import (
    HashEvent,
    HashEventEmitter,
    HashEventType,
    NullEventEmitter,
    safe_emit,
)
from hashit.app.pipeline.channel import BoundedChannel
from hashit.app.reference.index import ReferenceIndex
from hashit.app.schemas.digest_set import DigestSet

logger = logging.getLogger(__name__)


class WorkerPool:
    def __init__(
        self,
        engine: DigestEngine,
        tasks: BoundedChannel[str],
        results: BoundedChannel[DigestSet],
        *,
        workers: int,
        reference_index: Optional[ReferenceIndex] = None,
        emitter: Optional[HashEventEmitter] = None,
        run_id: str = "",
        cancel: Optional[threading.Event] = None,
    ) -> None:
        if workers < 1:
            raise ValueError("worker pool needs at least one worker")

        self._engine = engine
        self._tasks = tasks
        self._results = results
        self._workers = workers
        self._index = reference_index
        self._emitter = emitter or NullEventEmitter()
        self._run_id = run_id
        self._cancel = cancel or threading.Event()

        self._threads: List[threading.Thread] = []
        self._closer: Optional[threading.Thread] = None
        self._error: Optional[Exception] = None
        self._error_lock = threading.Lock()

    @property
    def size(self) -> int:
        return self._workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._threads = [
            threading.Thread(
                target=self._work,
                name=f"hashit-worker-{n}",
                daemon=True,
            )
            for n in range(self._workers)
        ]
        for thread in self._threads:
            thread.start()

        self._closer = threading.Thread(
            target=self._close_when_drained,
            name="hashit-worker-barrier",
            daemon=True,
        )
        self._closer.start()

    def join(self) -> None:
        """
        Wait until every worker has exited.

        An unexpected exception in a worker is a programming error and
        is re-raised here rather than recorded as a per-file failure.
        """
        if self._closer is not None:
            self._closer.join()
        if self._error is not None:
            raise self._error

    def process(self, path: str) -> DigestSet:
        """Digest one file and annotate it with any known-file match."""
        result = self._engine.safe_compute(path)
        if self._index is not None and not result.failed:
            known = self._index.identify(result)
            if known is not None:
                result = result.model_copy(update={"known": known})
        return result

    # ------------------------------------------------------------------
    # Worker loop
    # ------------------------------------------------------------------

    def _work(self) -> None:
        # Keep draining after cancellation so a producer blocked on a
        # full channel can always make progress and close it.
        for path in self._tasks:
            if self._cancel.is_set():
                continue
            try:
                result = self.process(path)
            except Exception as exc:
                logger.exception("worker failed on %s", path)
                with self._error_lock:
                    if self._error is None:
                        self._error = exc
                self._cancel.set()
                continue

            self._results.put(result)
            self._emit(result)

    def _close_when_drained(self) -> None:
        for thread in self._threads:
            thread.join()
        self._results.close()

    def _emit(self, result: DigestSet) -> None:
        safe_emit(
            self._emitter,
            HashEvent(
                run_id=self._run_id,
                event_type=(
                    HashEventType.FILE_FAILED
                    if result.failed
                    else HashEventType.FILE_PROCESSED
                ),
                details={"result": result.model_dump(mode="json", by_alias=True)},
            ),
        )
