import json

import pytest

from hashit.app.errors import ManifestError
from hashit.app.manifest.parsers import (
    HashListManifestParser,
    JsonManifestParser,
    parse_manifest,
    select_parser,
)
from hashit.tests.fixtures.file_factory import EMPTY_DIGESTS, HELLO_DIGESTS, write_file


# ---------------------------------------------------------------------------
# Dialect sniffing
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "content, expected",
    [
        ('[{"File": "a"}]', "json"),
        ("  \n[]", "json"),
        ("%%%% HASHDEEP-1.0\n", "hashdeep"),
        ("5,abc,def,a.txt\n", "hashdeep"),
        ("", "hashdeep"),
    ],
)
def test_select_parser(content, expected):
    assert select_parser(content).name == expected


# ---------------------------------------------------------------------------
# JSON dialect
# ---------------------------------------------------------------------------

def test_json_manifest_reads_aliased_fields():
    content = json.dumps(
        [
            {"File": "dir/a.txt", "Bytes": 5, "MD5": HELLO_DIGESTS["md5"]},
            {"File": "dir/b.txt", "Bytes": 0, "SHA256": EMPTY_DIGESTS["sha256"]},
        ]
    )

    records = JsonManifestParser().parse(content, "m.json")

    assert [r.path for r in records] == ["dir/a.txt", "dir/b.txt"]
    assert records[0].digests.md5 == HELLO_DIGESTS["md5"]
    assert records[0].digests.size == 5
    assert records[1].digests.sha256 == EMPTY_DIGESTS["sha256"]


def test_json_manifest_ignores_unknown_keys():
    content = json.dumps([{"File": "a", "Comment": "x", "MD5": HELLO_DIGESTS["md5"]}])

    (record,) = JsonManifestParser().parse(content, "m.json")

    assert record.digests.md5 == HELLO_DIGESTS["md5"]


def test_empty_json_array_is_an_empty_manifest():
    assert JsonManifestParser().parse("[]", "m.json") == []


@pytest.mark.parametrize(
    "content",
    [
        "[not json",
        '{"File": "a"}',
        '["a.txt"]',
        '[{"MD5": "abc"}]',
        '[{"File": "a", "Bytes": -1}]',
    ],
)
def test_json_manifest_rejects_malformed_content(content):
    with pytest.raises(ManifestError):
        JsonManifestParser().parse(content, "m.json")


# ---------------------------------------------------------------------------
# Hash list dialect
# ---------------------------------------------------------------------------

def test_hash_list_with_header_and_comments():
    content = "\n".join(
        [
            "%%%% HASHDEEP-1.0",
            "%%%% size,md5,sha1,filename",
            "## Invoked from: /tmp",
            "## $ hashit -f hashdeep .",
            "##",
            f"5,{HELLO_DIGESTS['md5']},{HELLO_DIGESTS['sha1']},dir/a.txt",
            "",
            f"0,{EMPTY_DIGESTS['md5']},{EMPTY_DIGESTS['sha1']},dir/empty",
        ]
    )

    records = HashListManifestParser().parse(content, "m.txt")

    assert [r.path for r in records] == ["dir/a.txt", "dir/empty"]
    assert records[0].digests.size == 5
    assert records[0].digests.md5 == HELLO_DIGESTS["md5"]
    assert records[0].digests.sha1 == HELLO_DIGESTS["sha1"]
    assert records[0].digests.sha256 is None


def test_hash_list_defaults_to_size_md5_sha256():
    content = f"5,{HELLO_DIGESTS['md5']},{HELLO_DIGESTS['sha256']},a.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "a.txt"
    assert record.digests.md5 == HELLO_DIGESTS["md5"]
    assert record.digests.sha256 == HELLO_DIGESTS["sha256"]


def test_hash_list_filename_may_contain_the_separator():
    content = "%%%% size,md5,filename\n" f"5,{HELLO_DIGESTS['md5']},a,b.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "a,b.txt"


def test_hash_list_pipe_delimiter():
    content = "%%%% size|md5|filename\n" f"5|{HELLO_DIGESTS['md5']}|a.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "a.txt"
    assert record.digests.md5 == HELLO_DIGESTS["md5"]


def test_hash_list_skips_unknown_algorithm_columns():
    content = "%%%% size,tiger,md5,filename\n" f"5,deadbeef,{HELLO_DIGESTS['md5']},a.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.digests.digests() == {"md5": HELLO_DIGESTS["md5"]}


def test_hash_list_accepts_dashed_algorithm_names():
    content = "%%%% size,sha-256,filename\n" f"5,{HELLO_DIGESTS['sha256']},a.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.digests.sha256 == HELLO_DIGESTS["sha256"]


@pytest.mark.parametrize(
    "content",
    [
        "%%%% size,md5,sha256,filename\n5,abc\n",
        "%%%% size,md5,sha256,filename\nfive,abc,def,a.txt\n",
        "%%%% size,md5,sha256,filename\n5,abc,def,\n",
        "%%%% filename,size,md5\n",
    ],
)
def test_hash_list_rejects_malformed_lines(content):
    with pytest.raises(ManifestError):
        HashListManifestParser().parse(content, "m.txt")


# ---------------------------------------------------------------------------
# Loading from disk
# ---------------------------------------------------------------------------

def test_parse_manifest_from_disk(tmp_path):
    path = write_file(
        tmp_path,
        "manifest.json",
        json.dumps([{"File": "a.txt", "MD5": HELLO_DIGESTS["md5"]}]),
    )

    records = parse_manifest(path)

    assert len(records) == 1
    assert records[0].path == "a.txt"


def test_parse_manifest_missing_file(tmp_path):
    with pytest.raises(ManifestError) as exc_info:
        parse_manifest(tmp_path / "absent.json")

    assert "unable to load audit file" in str(exc_info.value)


def test_parse_manifest_binary_file(tmp_path):
    path = write_file(tmp_path, "manifest.bin", b"\xff\xfe\x00\x80")

    with pytest.raises(ManifestError):
        parse_manifest(path)


def test_manifest_with_byte_order_mark(tmp_path):
    path = write_file(
        tmp_path,
        "manifest.json",
        b"\xef\xbb\xbf"
        + json.dumps([{"File": "a.txt", "MD5": HELLO_DIGESTS["md5"]}]).encode(),
    )

    (record,) = parse_manifest(path)

    assert record.path == "a.txt"
    assert record.digests.md5 == HELLO_DIGESTS["md5"]


def test_hash_list_comma_line_with_pipe_in_filename():
    content = f"5,{HELLO_DIGESTS['md5']},{HELLO_DIGESTS['sha256']},dir/a|b.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "dir/a|b.txt"
    assert record.digests.sha256 == HELLO_DIGESTS["sha256"]


def test_hash_list_pipe_line_without_header():
    content = f"5|{HELLO_DIGESTS['md5']}|{HELLO_DIGESTS['sha256']}|a,b.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "a,b.txt"
    assert record.digests.md5 == HELLO_DIGESTS["md5"]


def test_hash_list_header_fixes_the_separator():
    content = "%%%% size,md5,filename\n" f"5,{HELLO_DIGESTS['md5']},a|b|c.txt\n"

    (record,) = HashListManifestParser().parse(content, "m.txt")

    assert record.path == "a|b|c.txt"
