"""
Error taxonomy for hashit.

Two tiers exist:

- Fatal errors abort the whole run and are reported to the operator
  (bad input path, unreadable manifest, corrupted reference payload).
- Recoverable errors are attached to the record that caused them and
  travel through the pipeline (an unreadable file during digesting).
"""

from __future__ import annotations


class HashitError(RuntimeError):
    """Base class for every error raised by hashit."""


class DiscoveryError(HashitError):
    """A named input path does not exist or cannot be inspected."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"file or directory issue: {path} {reason}")


class ManifestError(HashitError):
    """The audit manifest cannot be read or is structurally invalid."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"unable to load audit file: {path} {reason}")


class ReferenceDataError(HashitError):
    """The embedded reference dataset failed to decode."""


class DigestReadError(HashitError):
    """A file could not be opened or read while digesting."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"unable to read file: {path} {reason}")


class ChannelClosed(HashitError):
    """Raised by a closed channel on put, or on get once drained."""
