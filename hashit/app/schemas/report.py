"""
Report schema.

The Report is the single input of every output formatter: the digests of
all processed files, the algorithms that were requested, the manifest
diff when auditing, and the overall validity flag that drives the exit
status.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from hashit.app.schemas.audit import DiffReport
from hashit.app.schemas.digest_set import DigestSet


class Report(BaseModel):
    results: List[DigestSet] = Field(default_factory=list)
    algorithms: List[str] = Field(
        default_factory=list,
        description="Canonical algorithm names requested for this run",
    )
    valid: bool = Field(
        ...,
        description=(
            "False if any file failed to read, or if the manifest diff "
            "reported changed or missing files"
        ),
    )
    diff: Optional[DiffReport] = None

    model_config = ConfigDict(frozen=True)

    @property
    def failures(self) -> List[DigestSet]:
        return [r for r in self.results if r.failed]
