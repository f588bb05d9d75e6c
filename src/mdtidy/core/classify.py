"""Line classification: tag each preprocessed line with its structural role"""

from mdtidy.core.models import (
    BlockQuoteMarker,
    ClassifiedLine,
    CodeFencePlaceholder,
    Heading,
    ListItem,
    MarkerKind,
    Plain,
    TableRow,
)
from mdtidy.core.patterns import BLOCKQUOTE_RE, HEADING_RE, LIST_ITEM_RE, THEMATIC_BREAK_RE, split_row
from mdtidy.core.protect import ProtectedText, indent_width


def classify_line(line: str, lineno: int, protected: ProtectedText) -> ClassifiedLine:
    """Return the structural variant for one line (first matching rule wins)."""
    block_id = protected.block_id(line)
    if block_id is not None:
        return CodeFencePlaceholder(raw=line, lineno=lineno, block_id=block_id)
    if not line.strip():
        return Plain(raw=line, lineno=lineno)

    m = HEADING_RE.match(line)
    if m:
        return Heading(raw=line, lineno=lineno, level=len(m.group('hashes')), text=(m.group('text') or '').strip())

    if BLOCKQUOTE_RE.match(line):
        return BlockQuoteMarker(raw=line, lineno=lineno)
    if THEMATIC_BREAK_RE.match(line):
        return Plain(raw=line, lineno=lineno)

    m = LIST_ITEM_RE.match(line)
    if m:
        ordered = m.group('ordinal') is not None
        return ListItem(
            raw=line,
            lineno=lineno,
            kind=MarkerKind.ordered if ordered else MarkerKind.bullet,
            indent=indent_width(m.group('indent')),
            marker=m.group('delim') if ordered else m.group('bullet'),
            ordinal=int(m.group('ordinal')) if ordered else None,
            text=m.group('text'),
        )

    stripped = line.lstrip()
    if stripped.startswith('|'):
        indent = line[:len(line) - len(stripped)]
        return TableRow(raw=line, lineno=lineno, indent=indent, cells=tuple(split_row(line)))

    return Plain(raw=line, lineno=lineno)


def classify(lines: list[str], protected: ProtectedText) -> list[ClassifiedLine]:
    """Classify preprocessed lines; line numbers come from the protector's map."""
    return [classify_line(line, lineno, protected) for line, lineno in zip(lines, protected.linenos)]
