"""
Audit manifest parsers.

Two dialects are accepted and both produce the same AuditRecord shape,
so the diff never needs to know where a record came from:

- JSON: an array of objects as written by ``--format json``.
- Hash list: hashdeep-style text, one file per line.

Hash list grammar::

    %%%% HASHDEEP-1.0                   optional banner, ignored
    %%%% size,md5,sha256,filename       column declaration
    ## any text                         comment
    # any text                          comment
    5,5d41...,2cf2...,dir/a.txt         data line

Columns are separated by ``,`` or ``|``. A column declaration fixes the
separator for every line after it: ``|`` if the declaration contains
one, otherwise ``,``. Without a declaration the columns are
``size,md5,sha256,filename`` and each line picks its own separator:
``|`` when splitting on it yields exactly one field per column, ``,``
otherwise. ``filename`` is always the last column and may itself contain
the separator. Unknown algorithm columns are skipped.

The dialect is chosen by sniffing: content whose first non-blank
character is ``[`` is JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from pydantic import ValidationError

from hashit.app.digest.algorithms import ALGORITHMS, normalize_name
from hashit.app.errors import ManifestError
from hashit.app.schemas.audit import AuditRecord
from hashit.app.schemas.digest_set import DigestSet

logger = logging.getLogger(__name__)

HASHDEEP_BANNER = "%%%% HASHDEEP-1.0"
DEFAULT_COLUMNS = ["size", "md5", "sha256", "filename"]


class ManifestParser(Protocol):
    name: str

    def parse(self, content: str, source: str) -> List[AuditRecord]:
        ...


class JsonManifestParser:
    name = "json"

    def parse(self, content: str, source: str) -> List[AuditRecord]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ManifestError(source, f"invalid json: {exc}") from exc

        if not isinstance(data, list):
            raise ManifestError(source, "expected a JSON array of file entries")

        records: List[AuditRecord] = []
        for position, item in enumerate(data):
            if not isinstance(item, dict):
                raise ManifestError(source, f"entry {position} is not an object")
            try:
                digests = DigestSet.model_validate(item)
            except ValidationError as exc:
                raise ManifestError(
                    source, f"entry {position} invalid: {exc}"
                ) from exc
            if not digests.file:
                raise ManifestError(source, f"entry {position} has no File")
            records.append(AuditRecord(path=digests.file, digests=digests))
        return records


class HashListManifestParser:
    name = "hashdeep"

    def parse(self, content: str, source: str) -> List[AuditRecord]:
        columns = list(DEFAULT_COLUMNS)
        delimiter: Optional[str] = None
        records: List[AuditRecord] = []

        for lineno, raw in enumerate(content.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#") or line == HASHDEEP_BANNER:
                continue

            if line.startswith("%%%%"):
                header = line[4:].strip()
                delimiter = _delimiter_for(header)
                columns = [c.strip().lower() for c in header.split(delimiter)]
                if columns[-1] != "filename":
                    raise ManifestError(
                        source,
                        f"line {lineno}: column header must end with filename",
                    )
                continue

            records.append(
                self._parse_line(
                    line,
                    columns,
                    delimiter or _delimiter_for(line, len(columns)),
                    source,
                    lineno,
                )
            )

        return records

    @staticmethod
    def _parse_line(
        line: str,
        columns: List[str],
        delimiter: str,
        source: str,
        lineno: int,
    ) -> AuditRecord:
        fields = line.split(delimiter, len(columns) - 1)
        if len(fields) != len(columns):
            raise ManifestError(
                source,
                f"line {lineno}: expected {len(columns)} fields, "
                f"got {len(fields)}",
            )

        values: Dict[str, Union[str, int]] = {}
        for column, value in zip(columns, fields):
            if column == "filename":
                values["file"] = value
            elif column == "size":
                try:
                    values["size"] = int(value.strip())
                except ValueError as exc:
                    raise ManifestError(
                        source, f"line {lineno}: invalid size {value!r}"
                    ) from exc
            else:
                algorithm = normalize_name(column)
                if algorithm in ALGORITHMS and value.strip():
                    values[algorithm] = value.strip()

        if not values.get("file"):
            raise ManifestError(source, f"line {lineno}: empty filename")

        digests = DigestSet(**values)
        return AuditRecord(path=digests.file, digests=digests)


def _delimiter_for(line: str, fields: Optional[int] = None) -> str:
    if "|" not in line:
        return ","
    if fields is not None and len(line.split("|", fields - 1)) != fields:
        return ","
    return "|"


def select_parser(content: str) -> ManifestParser:
    if content.lstrip().startswith("["):
        return JsonManifestParser()
    return HashListManifestParser()


def parse_manifest(path: Union[str, Path]) -> List[AuditRecord]:
    """
    Read an audit manifest from disk.

    Raises ManifestError if the file cannot be read or parsed; audits
    against a broken manifest are never attempted.
    """
    source = str(path)
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(source, str(exc)) from exc

    parser = select_parser(content)
    records = parser.parse(content, source)
    logger.info(
        "loaded %d records from %s audit file %s",
        len(records),
        parser.name,
        source,
    )
    return records
