"""
Result aggregator.

Drains the result channel as DigestSets arrive (in no particular order)
and produces the final, path-sorted list plus the overall validity flag.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from hashit.app.pipeline.channel import BoundedChannel
from hashit.app.schemas.digest_set import DigestSet


def sort_results(results: Iterable[DigestSet]) -> List[DigestSet]:
    """Sort by path; the path-less standard input record sorts first."""
    return sorted(results, key=lambda r: (r.file is not None, r.file or ""))


class Aggregator:
    def __init__(self, results: BoundedChannel[DigestSet]) -> None:
        self._results = results

    def summarize(self) -> Tuple[List[DigestSet], bool]:
        """
        Block until the result channel is closed and drained.

        The run is valid only if every DigestSet was read successfully.
        """
        collected = list(self._results)
        valid = not any(r.failed for r in collected)
        return sort_results(collected), valid
