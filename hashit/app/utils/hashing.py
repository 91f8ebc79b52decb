"""
Digest encoding helpers.

Digests are stored as text. Hex is the default encoding, base64 is
available for operators that record it. Comparison always happens on
the canonical lowercase hex form so manifests written in either
encoding can be audited.
"""

from __future__ import annotations

import base64
import binascii
import string
from typing import Optional

_HEX = set(string.hexdigits)


def encode_digest(raw: bytes, encoding: str = "hex") -> str:
    if encoding == "base64":
        return base64.b64encode(raw).decode("ascii")
    return raw.hex()


def canonical_digest(value: Optional[str]) -> Optional[str]:
    """
    Return the lowercase hex form of a stored digest, or None if empty.

    Hex input is lowercased. Anything else is tried as base64; values
    that are neither are returned stripped and lowercased so they still
    compare deterministically.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if len(value) % 2 == 0 and set(value) <= _HEX:
        return value.lower()
    try:
        return base64.b64decode(value, validate=True).hex()
    except (binascii.Error, ValueError):
        return value.lower()
