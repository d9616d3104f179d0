"""Unit tests for file helpers."""

import pytest

from pipeline_adapters.utils.files import append_text_to_file, is_null_or_whitespace


def test_append_text_to_file_appends(tmp_path):
    path = tmp_path / "build.gradle"
    path.write_text("first\n", encoding="utf-8")

    append_text_to_file(path, "second\n")
    append_text_to_file(str(path), "third\n")

    assert path.read_text(encoding="utf-8") == "first\nsecond\nthird\n"


def test_append_text_to_file_never_creates_files(tmp_path):
    path = tmp_path / "missing.gradle"

    with pytest.raises(FileNotFoundError, match="File not found"):
        append_text_to_file(path, "text")

    assert not path.exists()


def test_append_text_to_file_rejects_directories(tmp_path):
    with pytest.raises(FileNotFoundError):
        append_text_to_file(tmp_path, "text")


@pytest.mark.parametrize("value, expected", [(None, True), ("", True), (" \t\n", True), ("x", False)])
def test_is_null_or_whitespace(value, expected):
    assert is_null_or_whitespace(value) is expected
