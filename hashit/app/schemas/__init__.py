from .digest_set import DigestSet
from .audit import AuditFinding, AuditRecord, AuditStatus, DiffReport
from .report import Report

__all__ = [
    "DigestSet",
    "AuditFinding",
    "AuditRecord",
    "AuditStatus",
    "DiffReport",
    "Report",
]
