"""
Known-file reference index.

Decodes the embedded reference dataset and builds a reverse lookup from
any known digest value to the canonical name of the file it identifies.

The index is built once, before any worker starts, and is read-only
afterwards; workers share it without locking.

Collisions (two names sharing one digest value) resolve to whichever
entry is inserted last. This is a known property of the dataset, not a
runtime fault.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import time
from typing import Dict, Mapping, Optional

from pydantic import ValidationError

from hashit.app.errors import ReferenceDataError
from hashit.app.reference.payload import EMBEDDED_PAYLOAD
from hashit.app.schemas.digest_set import DigestSet
from hashit.app.utils.hashing import canonical_digest

logger = logging.getLogger(__name__)

# Algorithms carried by the reference dataset, in insertion order.
INDEXED_ALGORITHMS = ("md5", "sha1", "sha256", "sha512")

# Lookup priority: strongest digest first.
LOOKUP_ORDER = ("sha512", "sha256", "sha1", "md5")


class ReferenceIndex:
    def __init__(self, entries: Mapping[str, DigestSet]) -> None:
        self._entries: Dict[str, DigestSet] = dict(entries)
        self._lookup: Dict[str, str] = {}

        started = time.perf_counter()
        for name, digests in self._entries.items():
            for algorithm in INDEXED_ALGORITHMS:
                value = canonical_digest(digests.get_digest(algorithm))
                if value is not None:
                    self._lookup[value] = name

        logger.debug(
            "built reverse index of %d digests from %d entries in %.3fms",
            len(self._lookup),
            len(self._entries),
            (time.perf_counter() - started) * 1000,
        )

    @classmethod
    def from_entries(
        cls, entries: Mapping[str, Mapping[str, str] | DigestSet]
    ) -> "ReferenceIndex":
        """Build an index from plain ``{name: {"SHA256": ...}}`` data."""
        return cls(
            {
                name: (
                    value
                    if isinstance(value, DigestSet)
                    else DigestSet.model_validate(value)
                )
                for name, value in entries.items()
            }
        )

    def __len__(self) -> int:
        return len(self._lookup)

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def lookup(self, digest: str) -> Optional[str]:
        value = canonical_digest(digest)
        return self._lookup.get(value) if value is not None else None

    def identify(self, digest_set: DigestSet) -> Optional[str]:
        """
        Return the canonical name matching any computed digest.

        Digests are tried strongest first; algorithms the DigestSet did
        not compute are skipped.
        """
        for algorithm in LOOKUP_ORDER:
            value = digest_set.get_digest(algorithm)
            if value is None:
                continue
            name = self.lookup(value)
            if name is not None:
                return name
        return None


def load_reference_index(payload: str = EMBEDDED_PAYLOAD) -> ReferenceIndex:
    """
    Decode the embedded dataset into a ReferenceIndex.

    The payload is a build artefact, so any decoding or structural
    failure raises ReferenceDataError and the run cannot proceed.
    """
    started = time.perf_counter()

    try:
        raw = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise ReferenceDataError(
            f"failed to base64 decode reference dataset: {exc}"
        ) from exc

    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ReferenceDataError(f"reference dataset json invalid: {exc}") from exc

    if not isinstance(data, dict):
        raise ReferenceDataError(
            "reference dataset json invalid: expected an object of entries"
        )

    try:
        index = ReferenceIndex.from_entries(data)
    except (TypeError, ValidationError) as exc:
        raise ReferenceDataError(f"reference dataset entry invalid: {exc}") from exc

    logger.debug(
        "loaded reference dataset in %.3fms",
        (time.perf_counter() - started) * 1000,
    )
    return index
