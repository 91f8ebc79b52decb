"""
Supported digest algorithms.

Canonical names are lowercase with separators removed (``sha3256``,
``blake2b512``). They double as the DigestSet field names, so adding an
algorithm means adding a factory here and a field on DigestSet.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, Iterable, List, Protocol

import blake3
from Crypto.Hash import MD4


class Hasher(Protocol):
    def update(self, data: bytes) -> object:
        ...

    def digest(self) -> bytes:
        ...


ALL = "all"

# Output order for reports and formatters.
ALGORITHMS: List[str] = [
    "md4",
    "md5",
    "sha1",
    "sha256",
    "sha512",
    "blake2b256",
    "blake2b512",
    "blake3",
    "sha3224",
    "sha3256",
    "sha3384",
    "sha3512",
]

HASHER_FACTORIES: Dict[str, Callable[[], Hasher]] = {
    "md4": MD4.new,
    "md5": hashlib.md5,
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "blake2b256": lambda: hashlib.blake2b(digest_size=32),
    "blake2b512": lambda: hashlib.blake2b(digest_size=64),
    "blake3": blake3.blake3,
    "sha3224": hashlib.sha3_224,
    "sha3256": hashlib.sha3_256,
    "sha3384": hashlib.sha3_384,
    "sha3512": hashlib.sha3_512,
}

# Labels used by text output and the JSON dialect.
DISPLAY_NAMES: Dict[str, str] = {
    "md4": "MD4",
    "md5": "MD5",
    "sha1": "SHA1",
    "sha256": "SHA256",
    "sha512": "SHA512",
    "blake2b256": "Blake2b256",
    "blake2b512": "Blake2b512",
    "blake3": "Blake3",
    "sha3224": "Sha3224",
    "sha3256": "Sha3256",
    "sha3384": "Sha3384",
    "sha3512": "Sha3512",
}


def normalize_name(name: str) -> str:
    """Lowercase and drop ``-``/``_`` so ``SHA-256`` and ``sha3_256`` resolve."""
    return name.strip().lower().replace("-", "").replace("_", "")


def resolve_algorithms(requested: Iterable[str]) -> List[str]:
    """
    Turn user supplied names into canonical algorithm names.

    ``all`` selects every algorithm. Unknown names are dropped without
    error. The result follows ALGORITHMS order and has no duplicates.
    """
    names = {normalize_name(n) for n in requested}
    if ALL in names:
        return list(ALGORITHMS)
    return [a for a in ALGORITHMS if a in names]


def unknown_algorithms(requested: Iterable[str]) -> List[str]:
    return [
        n for n in requested
        if normalize_name(n) != ALL and normalize_name(n) not in HASHER_FACTORIES
    ]


def new_hashers(algorithms: Iterable[str]) -> Dict[str, Hasher]:
    return {a: HASHER_FACTORIES[a]() for a in algorithms}
