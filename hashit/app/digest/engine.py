"""
Digest engine.

Computes every requested digest of a file from a single read pass.
Small files are read into memory once and each hasher is fed the same
buffer; files at or above the stream threshold are read in fixed-size
chunks so memory stays bounded. The strategy never changes the result.

The engine holds no per-file state and is shared by all workers.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Dict, Iterable, List, Optional

from hashit.app.config import HashitConfig
from hashit.app.digest.algorithms import (
    Hasher,
    new_hashers,
    resolve_algorithms,
    unknown_algorithms,
)
from hashit.app.errors import DigestReadError
from hashit.app.schemas.digest_set import DigestSet
from hashit.app.utils.hashing import encode_digest

logger = logging.getLogger(__name__)

DEFAULT_STREAM_SIZE = 1_000_000
DEFAULT_CHUNK_SIZE = 1024 * 1024


class DigestEngine:
    def __init__(
        self,
        algorithms: Iterable[str],
        *,
        stream_size: int = DEFAULT_STREAM_SIZE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = "hex",
    ) -> None:
        requested = list(algorithms)
        ignored = unknown_algorithms(requested)
        if ignored:
            logger.debug("ignoring unknown algorithms: %s", ", ".join(ignored))

        self._algorithms = resolve_algorithms(requested)
        self._stream_size = stream_size
        self._chunk_size = chunk_size
        self._encoding = encoding

    @classmethod
    def from_config(cls, config: HashitConfig) -> "DigestEngine":
        return cls(
            config.algorithms,
            stream_size=config.stream_size,
            chunk_size=config.chunk_size,
            encoding=config.digest_encoding,
        )

    @property
    def algorithms(self) -> List[str]:
        return list(self._algorithms)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(self, path: str) -> DigestSet:
        """
        Digest a file on disk.

        Raises DigestReadError if the file cannot be statted, opened or
        read to the end.
        """
        try:
            size = os.stat(path).st_size
            with open(path, "rb") as f:
                if size >= self._stream_size:
                    hashers, size = self._consume(f)
                else:
                    data = f.read()
                    size = len(data)
                    hashers = new_hashers(self._algorithms)
                    for hasher in hashers.values():
                        hasher.update(data)
        except OSError as exc:
            raise DigestReadError(path, exc.strerror or str(exc)) from exc

        return self._build(path, size, hashers)

    def compute_stream(
        self, stream: BinaryIO, file: Optional[str] = None
    ) -> DigestSet:
        """Digest an already open binary stream, such as standard input."""
        hashers, size = self._consume(stream)
        return self._build(file, size, hashers)

    def safe_compute(self, path: str) -> DigestSet:
        """
        Digest a file, turning read failures into a failed DigestSet.

        Used by workers so one unreadable file does not stop the run.
        """
        try:
            return self.compute(path)
        except DigestReadError as exc:
            logger.warning("%s", exc)
            return DigestSet(file=path, error=exc.reason)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _consume(self, stream: BinaryIO) -> tuple[Dict[str, Hasher], int]:
        hashers = new_hashers(self._algorithms)
        size = 0
        for chunk in iter(lambda: stream.read(self._chunk_size), b""):
            size += len(chunk)
            for hasher in hashers.values():
                hasher.update(chunk)
        return hashers, size

    def _build(
        self, file: Optional[str], size: int, hashers: Dict[str, Hasher]
    ) -> DigestSet:
        values = {
            name: encode_digest(hasher.digest(), self._encoding)
            for name, hasher in hashers.items()
        }
        return DigestSet(file=file, size=size, **values)
