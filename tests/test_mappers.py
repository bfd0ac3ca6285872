"""Tests for the path and content mapping stages."""

import pytest

from mezzanine.errors import ResourceReadError
from mezzanine.generation import file_to_string_contents, read_resource, resolve_resource_path, to_path_pair


def test_to_path_pair_projects_payload(make_declaration):
    declaration = make_declaration(resource_path="docs/license.txt")

    pair = to_path_pair(declaration)

    assert pair.declaration is declaration
    assert pair.path == "docs/license.txt"


def test_resolve_relative_and_absolute_paths(tmp_path):
    assert resolve_resource_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"
    absolute = tmp_path / "elsewhere.txt"
    assert resolve_resource_path(str(absolute), tmp_path / "root") == absolute


def test_read_resource_preserves_line_endings(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\rthree\n")

    assert read_resource(path, "utf-8") == "one\r\ntwo\rthree\n"


def test_read_resource_uses_given_encoding(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes("café".encode("latin-1"))

    assert read_resource(path, "latin-1") == "café"


def test_read_resource_decode_failure_is_fatal(tmp_path):
    path = tmp_path / "binary.txt"
    path.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ResourceReadError):
        read_resource(path, "utf-8")


def test_content_stage_reports_then_reads(tmp_path, make_declaration, messager):
    (tmp_path / "license.txt").write_text("MIT\n", encoding="utf-8")
    to_content_pair = file_to_string_contents(tmp_path, messager, "utf-8")

    pair = to_content_pair(to_path_pair(make_declaration()))

    assert pair.text == "MIT\n"
    assert messager.infos == ["Processing file: license.txt"]


def test_content_stage_missing_file_is_fatal(tmp_path, make_declaration, messager):
    to_content_pair = file_to_string_contents(tmp_path, messager)

    with pytest.raises(ResourceReadError) as exc_info:
        to_content_pair(to_path_pair(make_declaration(resource_path="missing.txt")))

    assert exc_info.value.path == tmp_path / "missing.txt"
    assert exc_info.value.reason in str(exc_info.value)
    # The informational message is emitted before the read is attempted
    assert messager.infos == ["Processing file: missing.txt"]
