"""
Audit manifest schemas.

An AuditRecord is one file entry read from a previously recorded
manifest. The diff between records and freshly computed DigestSets is
expressed as AuditFindings collected in a DiffReport.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from hashit.app.schemas.digest_set import DigestSet


class AuditStatus(str, Enum):
    """
    Outcome of comparing one path against the manifest.

    CHANGED and MISSING invalidate the run. NEW is reported only.
    """

    MATCH = "match"
    CHANGED = "changed"
    MISSING = "missing"
    NEW = "new"


class AuditRecord(BaseModel):
    path: str
    digests: DigestSet

    model_config = ConfigDict(frozen=True)


class AuditFinding(BaseModel):
    path: str
    status: AuditStatus
    algorithms: List[str] = Field(
        default_factory=list,
        description="Algorithms that disagreed (CHANGED) or were compared (MATCH)",
    )

    model_config = ConfigDict(frozen=True)


class DiffReport(BaseModel):
    findings: List[AuditFinding] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def passed(self) -> bool:
        return not any(
            f.status in (AuditStatus.CHANGED, AuditStatus.MISSING)
            for f in self.findings
        )

    def paths(self, status: AuditStatus) -> List[str]:
        return [f.path for f in self.findings if f.status is status]

    def counts(self) -> Dict[str, int]:
        counts = {s.value: 0 for s in AuditStatus}
        for f in self.findings:
            counts[f.status.value] += 1
        return counts
