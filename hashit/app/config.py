"""
Runtime configuration for hashit.

All tunables (requested algorithms, thresholds, queue sizes, audit modes
and output selection) live in one immutable settings object. It is built
once at startup from environment variables (``HASHIT_*``) overlaid with
command-line values, and passed explicitly to the coordinator and the
components it wires. Nothing reads ambient module state.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hashit.app.digest.algorithms import normalize_name


OUTPUT_FORMATS = {"text", "json", "hashdeep", "sum"}
DIGEST_ENCODINGS = {"hex", "base64"}


def _default_workers() -> int:
    return os.cpu_count() or 1


class HashitConfig(BaseSettings):
    """
    Immutable run configuration.

    Constructor keyword arguments take precedence over environment
    variables, which take precedence over defaults.
    """

    # ------------------------------------------------------------------
    # Digesting
    # ------------------------------------------------------------------

    algorithms: List[str] = Field(
        default_factory=lambda: ["md5", "sha1", "sha256", "sha512"],
        description="Requested algorithms; 'all' selects every algorithm",
    )

    digest_encoding: str = Field(
        "hex",
        description="Text encoding of digest values (hex or base64)",
    )

    stream_size: PositiveInt = Field(
        1_000_000,
        description="Files of at least this many bytes are streamed in chunks",
    )

    chunk_size: PositiveInt = Field(
        1024 * 1024,
        description="Read size used when streaming",
    )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    recursive: bool = Field(False, description="Walk directories")

    queue_size: PositiveInt = Field(
        1000,
        description="Capacity of the task and result queues",
    )

    workers: PositiveInt = Field(
        default_factory=_default_workers,
        description="Number of digest worker threads",
    )

    # ------------------------------------------------------------------
    # Auditing
    # ------------------------------------------------------------------

    file_audit: bool = Field(
        False,
        description="Identify files against the embedded known-hash dataset",
    )

    audit_file: Optional[Path] = Field(
        None,
        description="Previously recorded manifest to audit against",
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    output_format: str = Field("text", description="text, json, hashdeep or sum")

    file_output: Optional[Path] = Field(
        None,
        description="Write the report here instead of standard output",
    )

    no_stream: bool = Field(
        False,
        description="Do not print results as they are processed",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("algorithms")
    @classmethod
    def lowercase_algorithms(cls, v: List[str]) -> List[str]:
        return [normalize_name(name) for name in v if name.strip()]

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unsupported output format '{v}'. "
                f"Allowed values: {sorted(OUTPUT_FORMATS)}"
            )
        return v

    @field_validator("digest_encoding")
    @classmethod
    def validate_digest_encoding(cls, v: str) -> str:
        v = v.lower()
        if v not in DIGEST_ENCODINGS:
            raise ValueError(
                f"Unsupported digest encoding '{v}'. "
                f"Allowed values: {sorted(DIGEST_ENCODINGS)}"
            )
        return v

    model_config = SettingsConfigDict(
        env_prefix="HASHIT_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )
