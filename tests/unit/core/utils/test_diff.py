"""Unit tests for core/utils/diff.py"""

from mdtidy.core.utils.diff import change_counts, unified_diff


def test_change_counts():
    """change_counts returns (added, deleted) line counts."""
    assert change_counts("a\nb\nc\n", "a\nB\nc\nd\n") == (2, 1)


def test_change_counts_identical():
    """Identical texts have no changes."""
    assert change_counts("same\n", "same\n") == (0, 0)


def test_change_counts_ignores_file_headers():
    """Content lines that look like diff headers are still counted."""
    assert change_counts("-- x\n", "++ y\n") == (1, 1)


def test_unified_diff_empty_when_identical():
    """Identical inputs produce no diff lines."""
    assert unified_diff("same\n", "same\n") == []


def test_unified_diff_labels_and_hunks():
    """unified_diff uses the given labels and marks changed lines."""
    lines = unified_diff("#A\n", "# A\n", "a/doc.md", "b/doc.md")
    assert lines[0] == "--- a/doc.md\n"
    assert lines[1] == "+++ b/doc.md\n"
    assert "-#A\n" in lines
    assert "+# A\n" in lines


def test_unified_diff_terminates_last_line():
    """A final line without a newline still ends with one in the diff."""
    lines = unified_diff("#A", "# A")
    assert all(line.endswith("\n") for line in lines)
