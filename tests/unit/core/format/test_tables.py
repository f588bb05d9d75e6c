"""Unit tests for core/format/tables.py"""

import pytest

from mdtidy.config import TableSettings
from mdtidy.core.classify import classify
from mdtidy.core.format.tables import format_tables, parse_alignment
from mdtidy.core.models import Alignment, Severity


def _run(protected, text, **settings):
    p = protected(text)
    lines, diags = format_tables(classify(p.lines, p), TableSettings(**settings))
    return "\n".join(line.raw for line in lines), diags


def _format(protected, text, **settings):
    return _run(protected, text, **settings)[0]


@pytest.mark.parametrize("cell, alignment", [
    ("---", Alignment.default),
    (":---", Alignment.left),
    ("---:", Alignment.right),
    (":-:", Alignment.center),
    ("-", Alignment.default),
])
def test_parse_alignment(cell, alignment):
    """Colons on the delimiter cell select the column alignment."""
    assert parse_alignment(cell) == alignment


def test_aligns_columns_to_widest_cell(protected):
    """Every row of a table has the same rendered width per column."""
    text = "|Name|Age|\n|---|---|\n|Alice|30|"
    assert _format(protected, text) == (
        "| Name  | Age |\n"
        "| ----- | --- |\n"
        "| Alice | 30  |"
    )


def test_alignment_markers_and_justification(protected):
    """Left, right, center and default columns are justified accordingly."""
    text = "| Left | Right | Center | Plain |\n|:---|---:|:---:|---|\n| a | b | c | d |"
    assert _format(protected, text) == (
        "| Left | Right | Center | Plain |\n"
        "| :--- | ----: | :----: | ----- |\n"
        "| a    |     b |   c    | d     |"
    )


def test_min_column_width_applies_to_narrow_columns(protected):
    """Narrow columns are widened to min_column_width."""
    assert _format(protected, "|a|b|\n|-|-|") == "| a   | b   |\n| --- | --- |"


def test_padding_setting(protected):
    """padding controls the spaces between pipes and cell content."""
    assert _format(protected, "|a|b|\n|-|-|", padding=0) == "|a  |b  |\n|---|---|"


def test_pads_short_rows_with_info(protected):
    """Rows with too few cells get empty cells and an info diagnostic."""
    text, diags = _run(protected, "| a | b | c |\n|---|---|---|\n| 1 |")
    assert text.splitlines()[2] == "| 1   |     |     |"
    assert [(d.line, d.severity, d.message) for d in diags] == [
        (3, Severity.info, "padded table row with 2 empty cell(s)"),
    ]


def test_drops_excess_cells_with_warning(protected):
    """Rows with too many cells are truncated and the loss is reported."""
    text, diags = _run(protected, "| a | b |\n|---|---|\n| 1 | 2 | 3 |")
    assert text.splitlines()[2] == "| 1   | 2   |"
    assert len(diags) == 1
    assert diags[0].severity == Severity.warning
    assert diags[0].line == 3
    assert diags[0].after == "3"


def test_escaped_pipe_stays_in_cell(protected):
    """'\\|' is cell content, not a column separator."""
    text = "| a \\| b | c |\n|---|---|"
    assert _format(protected, text) == "| a \\| b | c   |\n| ------ | --- |"


def test_align_off_uses_short_markers_and_no_padding_to_width(protected):
    """With align disabled cells are not justified and delimiters are minimal."""
    text = "|a|b|\n|:-|-:|\n|long cell|x|"
    assert _format(protected, text, align=False) == "| a | b |\n| :-- | --: |\n| long cell | x |"


def test_keeps_header_indent(protected):
    """An indented table keeps the header row's indentation."""
    assert _format(protected, "  |a|b|\n  |-|-|") == "  | a   | b   |\n  | --- | --- |"


def test_rows_without_delimiter_are_not_a_table(protected):
    """Pipe rows with no delimiter row below the header are left alone."""
    text = "|a|b|\n|c|d|"
    assert _format(protected, text) == text


def test_table_block_ends_at_non_row(protected):
    """Rows after a non-table line belong to no table."""
    text = "|a|b|\n|-|-|\n\n|c|d|"
    assert _format(protected, text) == "| a   | b   |\n| --- | --- |\n\n|c|d|"


def test_formatted_table_is_stable(protected):
    """Reformatting a formatted table changes nothing."""
    once = _format(protected, "|x|:y:|z|\n|---|:-:|--:|\n|1|2|\n|10|20|30|")
    again, diags = _run(protected, once)
    assert again == once
    assert diags == []
