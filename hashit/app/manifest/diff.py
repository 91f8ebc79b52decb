"""
Manifest diff.

Compares freshly computed DigestSets against AuditRecords by path. The
comparison only looks at the canonical record shape, so it is the same
for every manifest dialect.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Set

from hashit.app.schemas.audit import (
    AuditFinding,
    AuditRecord,
    AuditStatus,
    DiffReport,
)
from hashit.app.schemas.digest_set import DigestSet
from hashit.app.utils.hashing import canonical_digest


def path_key(path: str) -> str:
    return os.path.normpath(path)


def compare_digests(recorded: DigestSet, current: DigestSet) -> AuditFinding:
    """
    Compare every algorithm present in both records.

    A record that failed to read is always CHANGED. Values are compared
    in canonical hex so hex and base64 manifests audit the same way.
    """
    path = recorded.file or current.file or ""
    if current.failed:
        return AuditFinding(path=path, status=AuditStatus.CHANGED)

    expected = recorded.digests()
    actual = current.digests()
    shared = [a for a in expected if a in actual]
    mismatched = [
        a for a in shared
        if canonical_digest(expected[a]) != canonical_digest(actual[a])
    ]

    if mismatched:
        return AuditFinding(
            path=path, status=AuditStatus.CHANGED, algorithms=mismatched
        )
    return AuditFinding(path=path, status=AuditStatus.MATCH, algorithms=shared)


def diff_manifest(
    results: Iterable[DigestSet], records: Iterable[AuditRecord]
) -> DiffReport:
    computed: Dict[str, DigestSet] = {
        path_key(r.file): r for r in results if r.file is not None
    }

    findings: List[AuditFinding] = []
    recorded: Set[str] = set()

    for record in records:
        key = path_key(record.path)
        recorded.add(key)

        current = computed.get(key)
        if current is None:
            findings.append(
                AuditFinding(path=record.path, status=AuditStatus.MISSING)
            )
            continue

        finding = compare_digests(record.digests, current)
        findings.append(finding.model_copy(update={"path": record.path}))

    for key, current in computed.items():
        if key not in recorded:
            findings.append(
                AuditFinding(path=current.file, status=AuditStatus.NEW)
            )

    return DiffReport(findings=findings)
