"""
Report formatters.

PRESENTATION ONLY: formatters read a finished Report and return text.
They never influence validity or exit status.

Two formats double as audit manifest dialects and can be fed back with
``--audit``: ``json`` and ``hashdeep``. Only records of files on disk
are manifest entries. The standard input record has no path: in json it
is written without ``File`` and the manifest parser rejects it, in
hashdeep it is written as a comment line.
"""

from __future__ import annotations

import json
import os
from typing import Any, List, Optional, Sequence

from hashit.app.digest.algorithms import DISPLAY_NAMES
from hashit.app.schemas.audit import AuditStatus, DiffReport
from hashit.app.schemas.digest_set import DigestSet
from hashit.app.schemas.report import Report

STDIN_LABEL = "<stdin>"

# Algorithms the hashdeep tool itself understands.
HASHDEEP_NATIVE = ("md5", "sha1", "sha256")


def pretty_json(data: Any) -> str:
    return json.dumps(
        data,
        ensure_ascii=False,
        allow_nan=False,
        indent=2,
        separators=(",", ": "),
    )


def _label(result: DigestSet) -> str:
    return result.file if result.file is not None else STDIN_LABEL


# ---------------------------------------------------------------------------
# text
# ---------------------------------------------------------------------------

def format_result_text(result: DigestSet) -> str:
    """One file block; also used to stream results as they complete."""
    lines = [f"{_label(result)} ({result.size} bytes)"]
    if result.failed:
        lines.append(f"{'Error':<11}{result.error}")
    for algorithm, value in result.digests().items():
        lines.append(f"{DISPLAY_NAMES[algorithm]:<11}{value}")
    if result.known is not None:
        lines.append(f"{'Known':<11}{result.known}")
    return "\n".join(lines) + "\n"


def format_diff_text(diff: DiffReport) -> str:
    counts = diff.counts()
    lines = [
        "audit: "
        + ", ".join(f"{counts[s.value]} {s.value}" for s in AuditStatus)
    ]
    for status in (AuditStatus.CHANGED, AuditStatus.MISSING, AuditStatus.NEW):
        for path in diff.paths(status):
            lines.append(f"{status.value}: {path}")
    lines.append("audit passed" if diff.passed else "audit failed")
    return "\n".join(lines) + "\n"


def format_text(report: Report, include_results: bool = True) -> str:
    parts: List[str] = []
    if include_results:
        parts.extend(format_result_text(r) for r in report.results)
    if report.diff is not None:
        parts.append(format_diff_text(report.diff))
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# json
# ---------------------------------------------------------------------------

def format_json(report: Report) -> str:
    return pretty_json(
        [
            r.model_dump(mode="json", by_alias=True, exclude_none=True)
            for r in report.results
        ]
    ) + "\n"


# ---------------------------------------------------------------------------
# hashdeep
# ---------------------------------------------------------------------------

def hashdeep_columns(algorithms: Sequence[str]) -> List[str]:
    native = [a for a in algorithms if a in HASHDEEP_NATIVE]
    return native or list(algorithms)


def format_hashdeep(report: Report, command: Optional[str] = None) -> str:
    columns = hashdeep_columns(report.algorithms)
    lines = [
        "%%%% HASHDEEP-1.0",
        "%%%% " + ",".join(["size", *columns, "filename"]),
        f"## Invoked from: {os.getcwd()}",
    ]
    if command:
        lines.append(f"## $ {command}")
    lines.append("##")

    for result in report.results:
        if result.failed:
            lines.append(f"## unable to read {_label(result)}: {result.error}")
            continue
        values = [result.get_digest(a) or "" for a in columns]
        row = ",".join([str(result.size), *values, _label(result)])
        lines.append(row if result.file is not None else f"## {row}")

    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# sum
# ---------------------------------------------------------------------------

def format_sum(report: Report) -> str:
    """
    Checksum-utility output.

    A single algorithm uses the ``<digest>  <path>`` layout of md5sum and
    friends; several algorithms use tagged ``ALGO (path) = digest`` lines.
    """
    lines: List[str] = []
    tagged = len(report.algorithms) > 1
    for result in report.results:
        for algorithm, value in result.digests().items():
            if tagged:
                lines.append(
                    f"{DISPLAY_NAMES[algorithm]} ({_label(result)}) = {value}"
                )
            else:
                lines.append(f"{value}  {_label(result)}")
    return "\n".join(lines) + ("\n" if lines else "")


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def render(
    report: Report,
    output_format: str = "text",
    *,
    command: Optional[str] = None,
    include_results: bool = True,
) -> str:
    if output_format == "text":
        return format_text(report, include_results=include_results)
    if output_format == "json":
        return format_json(report)
    if output_format == "hashdeep":
        return format_hashdeep(report, command=command)
    if output_format == "sum":
        return format_sum(report)
    raise ValueError(f"unsupported output format: {output_format}")
