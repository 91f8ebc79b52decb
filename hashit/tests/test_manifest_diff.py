import os

from hashit.app.manifest.diff import compare_digests, diff_manifest
from hashit.app.schemas.audit import AuditRecord, AuditStatus
from hashit.app.schemas.digest_set import DigestSet
from hashit.tests.fixtures.file_factory import EMPTY_DIGESTS, HELLO_DIGESTS


def _record(path, **digests):
    return AuditRecord(path=path, digests=DigestSet(file=path, **digests))


def _result(path, **digests):
    return DigestSet(file=path, **digests)


# ---------------------------------------------------------------------------
# Single record comparison
# ---------------------------------------------------------------------------

def test_matching_digests():
    finding = compare_digests(
        DigestSet(md5=HELLO_DIGESTS["md5"]),
        DigestSet(file="a", md5=HELLO_DIGESTS["md5"], sha1=HELLO_DIGESTS["sha1"]),
    )

    assert finding.status is AuditStatus.MATCH
    assert finding.algorithms == ["md5"]


def test_any_mismatch_is_changed():
    finding = compare_digests(
        DigestSet(md5=HELLO_DIGESTS["md5"], sha1=EMPTY_DIGESTS["sha1"]),
        DigestSet(file="a", md5=HELLO_DIGESTS["md5"], sha1=HELLO_DIGESTS["sha1"]),
    )

    assert finding.status is AuditStatus.CHANGED
    assert finding.algorithms == ["sha1"]


def test_comparison_ignores_case_and_encoding():
    finding = compare_digests(
        DigestSet(md5="XUFAKrxLKna5cZ2REBfFkg=="),
        DigestSet(file="a", md5=HELLO_DIGESTS["md5"].upper()),
    )

    assert finding.status is AuditStatus.MATCH


def test_failed_read_is_changed():
    finding = compare_digests(
        DigestSet(md5=HELLO_DIGESTS["md5"]),
        DigestSet(file="a", error="permission denied"),
    )

    assert finding.status is AuditStatus.CHANGED


# ---------------------------------------------------------------------------
# Whole manifest diff
# ---------------------------------------------------------------------------

def test_all_present_and_matching_passes():
    report = diff_manifest(
        [_result("a.txt", md5=HELLO_DIGESTS["md5"])],
        [_record("a.txt", md5=HELLO_DIGESTS["md5"])],
    )

    assert report.passed
    assert report.counts() == {"match": 1, "changed": 0, "missing": 0, "new": 0}


def test_missing_file_fails_the_audit():
    report = diff_manifest(
        [_result("a.txt", md5=HELLO_DIGESTS["md5"])],
        [
            _record("a.txt", md5=HELLO_DIGESTS["md5"]),
            _record("b.txt", md5=EMPTY_DIGESTS["md5"]),
        ],
    )

    assert not report.passed
    assert report.paths(AuditStatus.MISSING) == ["b.txt"]


def test_changed_file_fails_the_audit():
    report = diff_manifest(
        [_result("a.txt", md5=EMPTY_DIGESTS["md5"])],
        [_record("a.txt", md5=HELLO_DIGESTS["md5"])],
    )

    assert not report.passed
    assert report.paths(AuditStatus.CHANGED) == ["a.txt"]


def test_new_files_are_reported_but_do_not_fail():
    report = diff_manifest(
        [
            _result("a.txt", md5=HELLO_DIGESTS["md5"]),
            _result("extra.txt", md5=EMPTY_DIGESTS["md5"]),
        ],
        [_record("a.txt", md5=HELLO_DIGESTS["md5"])],
    )

    assert report.passed
    assert report.paths(AuditStatus.NEW) == ["extra.txt"]


def test_paths_are_normalised_before_matching():
    report = diff_manifest(
        [_result(os.path.join("dir", "a.txt"), md5=HELLO_DIGESTS["md5"])],
        [_record("./dir//a.txt", md5=HELLO_DIGESTS["md5"])],
    )

    assert report.passed
    assert report.paths(AuditStatus.MATCH) == ["./dir//a.txt"]
    assert report.paths(AuditStatus.NEW) == []


def test_stdin_results_are_never_new():
    report = diff_manifest([DigestSet(md5=HELLO_DIGESTS["md5"])], [])

    assert report.findings == []
    assert report.passed
