"""
Command line entrypoint for hashit.

Parses arguments into an immutable HashitConfig, wires the coordinator,
runs it against the given paths (or standard input) and renders the
Report. Exit status is 0 when the report is valid, 1 when any file
failed to read, the audit found changed or missing files, or a fatal
error occurred, and 2 for invalid arguments.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from typing import Any, Dict, List, Optional, TextIO

from pydantic import ValidationError
from pydantic_settings import SettingsError

from hashit.app.config import DIGEST_ENCODINGS, OUTPUT_FORMATS, HashitConfig
from hashit.app.coordinator.coordinator import HashCoordinator
from hashit.app.digest.algorithms import ALGORITHMS, DISPLAY_NAMES
from hashit.app.errors import HashitError
from hashit.app.events import HashEvent, HashEventType
from hashit.app.formatters import format_result_text, render
from hashit.app.schemas.digest_set import DigestSet

__version__ = "0.1.0"

logger = logging.getLogger("hashit")


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

class StreamingPrinter:
    """
    Event emitter that prints each file block as soon as it completes.

    Output order follows completion order; the final report is sorted.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, event: HashEvent) -> None:
        if event.event_type not in {
            HashEventType.FILE_PROCESSED,
            HashEventType.FILE_FAILED,
        }:
            return
        result = DigestSet.model_validate(event.details["result"])
        with self._lock:
            self._stream.write(format_result_text(result) + "\n")
            self._stream.flush()


def supported_hashes() -> str:
    lines = ["Hashes", "------"]
    lines.extend(f"{name:<11}{DISPLAY_NAMES[name]}" for name in ALGORITHMS)
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Arguments and configuration
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hashit",
        description=(
            "Hash files, directories or standard input and optionally audit "
            "them against known hashes or a recorded manifest."
        ),
    )
    p.add_argument("paths", nargs="*", help="Files or directories (default: .)")
    p.add_argument(
        "-c",
        "--hash",
        action="append",
        dest="hashes_requested",
        metavar="ALGO",
        help="Algorithms to compute (comma separated or repeated, 'all' for every one)",
    )
    p.add_argument(
        "-r", "--recursive", action="store_true", help="Walk directories"
    )
    p.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=sorted(OUTPUT_FORMATS),
        help="Output format (default: text)",
    )
    p.add_argument(
        "-o", "--output", dest="file_output", help="Write output to this file"
    )
    p.add_argument(
        "--audit",
        dest="audit_file",
        help="Audit against a json or hashdeep manifest",
    )
    p.add_argument(
        "-a",
        "--file-audit",
        action="store_true",
        help="Identify files against the embedded known-hash dataset",
    )
    p.add_argument(
        "--no-stream",
        action="store_true",
        help="Do not print results as they are processed",
    )
    p.add_argument(
        "--no-stdin", action="store_true", help="Never read standard input"
    )
    p.add_argument(
        "--stream-size",
        type=int,
        help="Stream files of at least this many bytes (default: 1000000)",
    )
    p.add_argument("--workers", type=int, help="Number of worker threads")
    p.add_argument(
        "--encoding",
        dest="digest_encoding",
        choices=sorted(DIGEST_ENCODINGS),
        help="Digest text encoding (default: hex)",
    )
    p.add_argument(
        "--hashes", action="store_true", help="List supported hashes and exit"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    p.add_argument("--debug", action="store_true", help="Debug output")
    p.add_argument("--trace", action="store_true", help="Trace output (timings)")
    p.add_argument("--version", action="version", version=f"hashit {__version__}")
    return p


def split_hashes(values: Optional[List[str]]) -> Optional[List[str]]:
    if not values:
        return None
    return [name for value in values for name in value.split(",") if name.strip()]


def build_config(args: argparse.Namespace) -> HashitConfig:
    """Overlay command-line values on the environment-driven defaults."""
    overrides: Dict[str, Any] = {}

    algorithms = split_hashes(args.hashes_requested)
    if algorithms is not None:
        overrides["algorithms"] = algorithms
    if args.recursive:
        overrides["recursive"] = True
    if args.file_audit:
        overrides["file_audit"] = True
    if args.no_stream:
        overrides["no_stream"] = True
    for name in (
        "output_format",
        "file_output",
        "audit_file",
        "stream_size",
        "workers",
        "digest_encoding",
    ):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value

    return HashitConfig(**overrides)


def configure_logging(args: argparse.Namespace) -> None:
    if args.debug or args.trace:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def stdin_is_piped(stream: Optional[TextIO] = None) -> bool:
    stream = stream if stream is not None else sys.stdin
    if stream is None:
        return False
    try:
        return not stream.isatty()
    except ValueError:
        # closed stream
        return False


def write_private(path: os.PathLike, text: str) -> None:
    """Write ``text`` to a file that is owner-only from the moment it exists."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        # an existing file keeps its mode through O_CREAT
        os.fchmod(f.fileno(), 0o600)
        f.write(text)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def cli(argv: List[str]) -> int:
    args = build_parser().parse_args(argv)

    if args.hashes:
        sys.stdout.write(supported_hashes())
        return 0

    configure_logging(args)

    try:
        config = build_config(args)
    except (ValidationError, SettingsError) as exc:
        print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
        return 2

    use_stdin = not args.no_stdin and not args.paths and stdin_is_piped()
    streaming = (
        config.output_format == "text"
        and config.file_output is None
        and not config.no_stream
        and not use_stdin
    )

    try:
        coordinator = HashCoordinator.from_config(config)
        report = coordinator.run(
            args.paths,
            stdin=sys.stdin.buffer if use_stdin else None,
            emitter=StreamingPrinter(sys.stdout) if streaming else None,
        )
    except HashitError as exc:
        logger.debug("fatal error", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    output = render(
        report,
        config.output_format,
        command=" ".join(["hashit", *argv]),
        include_results=not streaming,
    )

    if config.file_output is None:
        sys.stdout.write(output)
    else:
        try:
            write_private(config.file_output, output)
        except OSError as exc:
            print(
                f"ERROR: unable to write {config.file_output}: {exc}",
                file=sys.stderr,
            )
            return 1
        print(f"results written to {config.file_output}")

    return 0 if report.valid else 1


def main() -> int:
    return cli(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
