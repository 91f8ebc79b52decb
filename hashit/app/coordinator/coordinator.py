"""
Run coordinator and composition root.

The coordinator wires the pipeline from an immutable HashitConfig and
runs it:

    Discovery --(task channel)--> WorkerPool --(result channel)--> Aggregator

then reconciles the aggregated results with the audit manifest, if one
was supplied, and builds the final Report.

It does not format output or decide exit status. Fatal errors
(DiscoveryError, ManifestError, ReferenceDataError) propagate to the
caller unchanged.
"""

from __future__ import annotations

import logging
import threading
from typing import BinaryIO, List, Optional, Sequence, Tuple
from uuid import uuid4

from hashit.app.config import HashitConfig
from hashit.app.digest.engine import DigestEngine
from hashit.app.events import (
    HashEvent,
    HashEventEmitter,
    HashEventType,
    NullEventEmitter,
    safe_emit,
)
from hashit.app.manifest import diff_manifest, parse_manifest
from hashit.app.pipeline.aggregator import Aggregator
from hashit.app.pipeline.channel import BoundedChannel
from hashit.app.pipeline.discovery import Discovery
from hashit.app.pipeline.workers import WorkerPool
from hashit.app.reference.index import ReferenceIndex, load_reference_index
from hashit.app.schemas.audit import AuditRecord, DiffReport
from hashit.app.schemas.digest_set import DigestSet
from hashit.app.schemas.report import Report

logger = logging.getLogger(__name__)


class HashCoordinator:
    """
    Central run coordinator.

    Execution order:
        1. Filesystem pipeline, or standard input digest
        2. Aggregation and per-file validity
        3. Manifest diff (optional)
        4. Report construction
    """

    def __init__(
        self,
        config: HashitConfig,
        engine: Optional[DigestEngine] = None,
        reference_index: Optional[ReferenceIndex] = None,
        audit_records: Optional[List[AuditRecord]] = None,
    ) -> None:
        """
        Direct constructor.

        Intended for tests and explicit wiring. Nothing is loaded
        implicitly: the reference index and manifest records are used
        only if passed in.
        """
        self._config = config
        self._engine = (
            engine if engine is not None else DigestEngine.from_config(config)
        )
        self._reference_index = reference_index
        self._audit_records = audit_records

    # ------------------------------------------------------------------
    # Integration constructor (composition root)
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: HashitConfig) -> "HashCoordinator":
        """
        Construct a fully wired coordinator from runtime configuration.

        Loads the audit manifest (when ``audit_file`` is set) and the
        embedded reference index (when ``file_audit`` is set). Both
        raise fatal errors here, before any file is touched.

        Algorithms recorded in the manifest are added to the requested
        set so every recorded digest can be compared.
        """
        audit_records = None
        algorithms = list(config.algorithms)

        if config.audit_file is not None:
            audit_records = parse_manifest(config.audit_file)
            recorded = _recorded_algorithms(audit_records)
            extra = [a for a in recorded if a not in algorithms]
            if extra:
                logger.info(
                    "adding algorithms recorded in audit file: %s",
                    ", ".join(extra),
                )
                algorithms.extend(extra)

        engine = DigestEngine(
            algorithms,
            stream_size=config.stream_size,
            chunk_size=config.chunk_size,
            encoding=config.digest_encoding,
        )

        reference_index = load_reference_index() if config.file_audit else None

        return cls(
            config=config,
            engine=engine,
            reference_index=reference_index,
            audit_records=audit_records,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def algorithms(self) -> List[str]:
        return self._engine.algorithms

    def run(
        self,
        paths: Sequence[str] = (),
        *,
        stdin: Optional[BinaryIO] = None,
        emitter: Optional[HashEventEmitter] = None,
        run_id: Optional[str] = None,
    ) -> Report:
        """
        Execute one run and return its Report.

        When ``stdin`` is given the stream is digested as a single
        path-less file and ``paths`` is ignored.
        """
        emitter = emitter or NullEventEmitter()
        run_id = run_id or str(uuid4())

        self._emit(
            emitter,
            run_id,
            HashEventType.RUN_STARTED,
            {
                "algorithms": self.algorithms,
                "mode": "stdin" if stdin is not None else "files",
            },
        )

        try:
            results: BoundedChannel[DigestSet] = BoundedChannel(
                self._config.queue_size
            )

            if stdin is not None:
                digests, valid = self._run_stdin(stdin, results)
            else:
                digests, valid = self._run_files(paths, results, emitter, run_id)

            diff: Optional[DiffReport] = None
            if self._audit_records is not None:
                diff = diff_manifest(digests, self._audit_records)
                valid = valid and diff.passed

            report = Report(
                results=digests,
                algorithms=self.algorithms,
                valid=valid,
                diff=diff,
            )

            self._emit(
                emitter,
                run_id,
                HashEventType.RUN_COMPLETED,
                {
                    "valid": report.valid,
                    "files": len(report.results),
                    "failures": len(report.failures),
                    "audit": diff.counts() if diff is not None else None,
                },
            )
            return report

        except Exception as exc:
            self._emit(
                emitter,
                run_id,
                HashEventType.RUN_FAILED,
                {
                    "error": str(exc),
                    "exception_type": type(exc).__name__,
                },
            )
            raise

    # ------------------------------------------------------------------
    # Execution modes
    # ------------------------------------------------------------------

    def _run_files(
        self,
        paths: Sequence[str],
        results: BoundedChannel[DigestSet],
        emitter: HashEventEmitter,
        run_id: str,
    ) -> Tuple[List[DigestSet], bool]:
        cancel = threading.Event()
        tasks: BoundedChannel[str] = BoundedChannel(self._config.queue_size)

        discovery = Discovery(
            paths,
            tasks,
            recursive=self._config.recursive,
            cancel=cancel,
        )
        pool = WorkerPool(
            self._engine,
            tasks,
            results,
            workers=self._config.workers,
            reference_index=self._reference_index,
            emitter=emitter,
            run_id=run_id,
            cancel=cancel,
        )

        discovery.start()
        pool.start()

        digests, valid = Aggregator(results).summarize()

        discovered = discovery.join()
        pool.join()

        self._emit(
            emitter,
            run_id,
            HashEventType.DISCOVERY_COMPLETED,
            {"files": discovered, "workers": pool.size},
        )
        return digests, valid

    def _run_stdin(
        self,
        stdin: BinaryIO,
        results: BoundedChannel[DigestSet],
    ) -> Tuple[List[DigestSet], bool]:
        try:
            digest_set = self._engine.compute_stream(stdin)
        except OSError as exc:
            logger.warning("unable to read standard input: %s", exc)
            digest_set = DigestSet(error=exc.strerror or str(exc))

        if self._reference_index is not None and not digest_set.failed:
            known = self._reference_index.identify(digest_set)
            if known is not None:
                digest_set = digest_set.model_copy(update={"known": known})

        results.put(digest_set)
        results.close()
        return Aggregator(results).summarize()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _emit(
        emitter: HashEventEmitter,
        run_id: str,
        event_type: HashEventType,
        details: dict,
    ) -> None:
        safe_emit(
            emitter,
            HashEvent(run_id=run_id, event_type=event_type, details=details),
        )


def _recorded_algorithms(records: List[AuditRecord]) -> List[str]:
    seen: List[str] = []
    for record in records:
        for algorithm in record.digests.digests():
            if algorithm not in seen:
                seen.append(algorithm)
    return seen

