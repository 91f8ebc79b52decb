"""
File discovery.

Turns the operator's input paths into FileTasks on the task channel.
Files are queued as given; directories are walked only when recursion
is enabled. A single input path always enables recursion.

A path that does not exist (or cannot be statted) is fatal: the
operator named a bad target, so the run is cancelled and the error is
re-raised to the coordinator.
"""

from __future__ import annotations

import logging
import os
import stat
import threading
from typing import Iterator, List, Optional, Sequence

from hashit.app.errors import DiscoveryError
from hashit.app.pipeline.channel import BoundedChannel

logger = logging.getLogger(__name__)


class Discovery:
    def __init__(
        self,
        paths: Sequence[str],
        tasks: BoundedChannel[str],
        *,
        recursive: bool = False,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        self._paths: List[str] = list(paths) or ["."]
        self._tasks = tasks
        self._recursive = recursive or len(self._paths) == 1
        self._cancel = cancel or threading.Event()

        self._count = 0
        self._error: Optional[Exception] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def recursive(self) -> bool:
        return self._recursive

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> int:
        """
        Queue every file, then close the task channel.

        The channel is closed even when a path is bad, so workers drain
        and exit instead of blocking forever.
        """
        try:
            for path in self._paths:
                for task in self._expand(path):
                    if self._cancel.is_set():
                        return self._count
                    self._tasks.put(task)
                    self._count += 1
        except DiscoveryError:
            self._cancel.set()
            raise
        finally:
            self._tasks.close()

        logger.info("discovered %d files", self._count)
        return self._count

    def start(self) -> None:
        """Run discovery on its own producer thread."""
        self._thread = threading.Thread(
            target=self._run_captured,
            name="hashit-discovery",
            daemon=True,
        )
        self._thread.start()

    def join(self) -> int:
        """Wait for the producer thread and re-raise its error, if any."""
        if self._thread is not None:
            self._thread.join()
        if self._error is not None:
            raise self._error
        return self._count

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run_captured(self) -> None:
        try:
            self.run()
        except Exception as exc:
            self._cancel.set()
            self._error = exc

    def _expand(self, path: str) -> Iterator[str]:
        fp = os.path.normpath(path)
        try:
            st = os.stat(fp)
        except OSError as exc:
            raise DiscoveryError(fp, exc.strerror or str(exc)) from exc

        if not stat.S_ISDIR(st.st_mode):
            yield fp
            return

        if not self._recursive:
            logger.info("skipping directory %s (recursion disabled)", fp)
            return

        yield from self._walk(fp)

    @staticmethod
    def _walk(root: str) -> Iterator[str]:
        def on_error(exc: OSError) -> None:
            logger.warning(
                "unable to read directory %s: %s", exc.filename, exc.strerror
            )

        for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
            for name in filenames:
                full = os.path.join(dirpath, name)
                if os.path.isfile(full):
                    yield full
