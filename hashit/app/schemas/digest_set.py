"""
DigestSet schema.

A DigestSet is the per-file result record flowing through the pipeline:
the file path, its size, one optional value per supported algorithm,
an optional known-file match and an optional read error.

JSON aliases follow the field names used by hashit's JSON output so a
report written with ``--format json`` can be read back as an audit
manifest.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from hashit.app.digest.algorithms import ALGORITHMS


class DigestSet(BaseModel):
    """
    Digests computed for one file (or for standard input).

    Only requested algorithms are populated; the rest stay None.
    A DigestSet with ``error`` set has no digests at all.
    """

    file: Optional[str] = Field(
        None,
        alias="File",
        description="Source path; None when digesting standard input",
    )
    size: int = Field(0, alias="Bytes", ge=0)

    md4: Optional[str] = Field(None, alias="MD4")
    md5: Optional[str] = Field(None, alias="MD5")
    sha1: Optional[str] = Field(None, alias="SHA1")
    sha256: Optional[str] = Field(None, alias="SHA256")
    sha512: Optional[str] = Field(None, alias="SHA512")
    blake2b256: Optional[str] = Field(None, alias="Blake2b256")
    blake2b512: Optional[str] = Field(None, alias="Blake2b512")
    blake3: Optional[str] = Field(None, alias="Blake3")
    sha3224: Optional[str] = Field(None, alias="Sha3224")
    sha3256: Optional[str] = Field(None, alias="Sha3256")
    sha3384: Optional[str] = Field(None, alias="Sha3384")
    sha3512: Optional[str] = Field(None, alias="Sha3512")

    known: Optional[str] = Field(
        None,
        alias="Known",
        description="Canonical name from the reference dataset, if matched",
    )
    error: Optional[str] = Field(
        None,
        alias="Error",
        description="Read failure; the run continues but is marked invalid",
    )

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def failed(self) -> bool:
        return self.error is not None

    def get_digest(self, algorithm: str) -> Optional[str]:
        return getattr(self, algorithm, None) if algorithm in ALGORITHMS else None

    def digests(self) -> Dict[str, str]:
        """Populated digests keyed by canonical algorithm name, in report order."""
        return {
            a: getattr(self, a)
            for a in ALGORITHMS
            if getattr(self, a) is not None
        }
