from .parsers import (
    HashListManifestParser,
    JsonManifestParser,
    ManifestParser,
    parse_manifest,
    select_parser,
)
from .diff import diff_manifest

__all__ = [
    "HashListManifestParser",
    "JsonManifestParser",
    "ManifestParser",
    "parse_manifest",
    "select_parser",
    "diff_manifest",
]
