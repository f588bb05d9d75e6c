"""Unit tests for core/parse.py"""

import pytest

from mdtidy.core.parse import (
    DecodeError,
    decode_document,
    discover_files,
    join_lines,
    parse_tokens,
    read_document,
    split_lines,
)


def test_decode_document_passes_text_through():
    """decode_document returns str input unchanged."""
    assert decode_document("# Hi\n") == "# Hi\n"


def test_decode_document_decodes_utf8_bytes():
    """decode_document decodes valid UTF-8 bytes."""
    assert decode_document("café".encode("utf-8")) == "café"


def test_decode_document_rejects_invalid_utf8():
    """Invalid UTF-8 raises DecodeError (a ValueError) naming the byte offset."""
    with pytest.raises(DecodeError, match="byte offset 2"):
        decode_document(b"# \xff\xfe\n")
    assert issubclass(DecodeError, ValueError)


@pytest.mark.parametrize("text, lines, newline, trailing", [
    ("", [], "\n", False),
    ("a", ["a"], "\n", False),
    ("a\nb\n", ["a", "b"], "\n", True),
    ("a\r\nb\r\n", ["a", "b"], "\r\n", True),
    ("a\n\n", ["a", ""], "\n", True),
    ("a\x0cb\n", ["a\x0cb"], "\n", True),
])
def test_split_lines(text, lines, newline, trailing):
    """split_lines breaks only on LF/CRLF and reports the newline style and final newline."""
    assert split_lines(text) == (lines, newline, trailing)


@pytest.mark.parametrize("text", ["", "a", "a\nb\n", "a\r\nb\r\n", "a\n\n\n", "x\r\n\r\ny"])
def test_join_lines_inverts_split_lines(text):
    """join_lines(*split_lines(text)) reproduces text exactly."""
    assert join_lines(*split_lines(text)) == text


def test_discover_files_single(tmp_path):
    """discover_files returns a list with one file when given a file path."""
    f = tmp_path / "doc.md"
    f.write_text("# Hello")
    assert discover_files(f) == [f]


def test_discover_files_non_md_skipped(tmp_path):
    """discover_files ignores non-.md/.mdx files."""
    (tmp_path / "notes.txt").write_text("text")
    assert discover_files(tmp_path / "notes.txt") == []
    assert discover_files(tmp_path) == []


def test_discover_files_dir(tmp_path):
    """discover_files finds all .md and .mdx files recursively, sorted."""
    (tmp_path / "b.md").write_text("b")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.mdx").write_text("a")
    assert discover_files(tmp_path) == [tmp_path / "b.md", sub / "a.mdx"]


def test_read_document_names_file_on_decode_error(tmp_path):
    """read_document reports the offending path in the DecodeError message."""
    f = tmp_path / "bad.md"
    f.write_bytes(b"\xc3\x28")
    with pytest.raises(DecodeError, match="bad.md"):
        read_document(f)


def test_read_document_keeps_crlf(tmp_path):
    """read_document does not translate line endings."""
    f = tmp_path / "win.md"
    f.write_bytes(b"# A\r\n")
    assert read_document(f) == "# A\r\n"


def test_parse_tokens_recognizes_tables():
    """parse_tokens uses a GFM-like preset, so pipe tables are tokenized."""
    tokens = parse_tokens("| a | b |\n| - | - |\n| 1 | 2 |\n")
    assert any(t.type == "table_open" for t in tokens)
