"""Table formatting: column-count repair, alignment parsing, and padded reflow"""

from typing import Optional

from mdtidy.config import TableSettings
from mdtidy.core.diagnostics import info, warning
from mdtidy.core.models import Alignment, ClassifiedLine, Diagnostic, TableRow
from mdtidy.core.patterns import DELIMITER_CELL_RE


# shortest delimiter cell that still encodes each alignment
_MIN_MARKER = {Alignment.default: 1, Alignment.left: 2, Alignment.right: 2, Alignment.center: 3}
_SHORT_MARKER = {Alignment.default: '---', Alignment.left: ':--', Alignment.right: '--:', Alignment.center: ':-:'}


def is_delimiter(line: ClassifiedLine) -> bool:
    return isinstance(line, TableRow) and all(DELIMITER_CELL_RE.match(c) for c in line.cells)


def parse_alignment(cell: str) -> Alignment:
    """':---' left, '---:' right, ':-:' center, '---' default."""
    m = DELIMITER_CELL_RE.match(cell)
    left, right = bool(m.group('left')), bool(m.group('right'))
    if left and right:
        return Alignment.center
    if left:
        return Alignment.left
    if right:
        return Alignment.right
    return Alignment.default


def _justify(text: str, width: int, alignment: Alignment) -> str:
    if alignment == Alignment.right:
        return text.rjust(width)
    if alignment == Alignment.center:
        left = (width - len(text)) // 2
        return ' ' * left + text + ' ' * (width - len(text) - left)
    return text.ljust(width)


def _delimiter_cell(alignment: Alignment, width: Optional[int]) -> str:
    if width is None:
        return _SHORT_MARKER[alignment]
    if alignment == Alignment.center:
        return ':' + '-' * (width - 2) + ':'
    if alignment == Alignment.left:
        return ':' + '-' * (width - 1)
    if alignment == Alignment.right:
        return '-' * (width - 1) + ':'
    return '-' * width


def _render_row(indent: str, cells: list[str], padding: int) -> str:
    pad = ' ' * padding
    return indent + '|' + '|'.join(f'{pad}{cell}{pad}' for cell in cells) + '|'


def _fit_row(row: TableRow, columns: int) -> tuple[list[str], list[Diagnostic]]:
    """Pad a short row with empty cells or drop the excess of a long one."""
    cells = list(row.cells)
    if len(cells) < columns:
        missing = columns - len(cells)
        return cells + [''] * missing, [info(row.lineno, f"padded table row with {missing} empty cell(s)")]
    if len(cells) > columns:
        dropped = cells[columns:]
        return cells[:columns], [warning(
            row.lineno,
            f"table row has {len(cells)} cells, expected {columns}; dropped {len(dropped)} excess cell(s)",
            before=row.raw.strip(),
            after=' | '.join(dropped),
        )]
    return cells, []


def format_table(block: list[TableRow], settings: TableSettings) -> tuple[list[TableRow], list[Diagnostic]]:
    """Reflow one table block (header, delimiter, body rows)."""
    header, delimiter, *body = block
    alignments = [parse_alignment(c) for c in delimiter.cells]
    columns = len(alignments)
    indent = header.indent
    diagnostics: list[Diagnostic] = []

    rows: list[tuple[TableRow, list[str]]] = []
    for row in (header, *body):
        cells, diags = _fit_row(row, columns)
        rows.append((row, cells))
        diagnostics.extend(diags)

    widths: list[Optional[int]] = [None] * columns
    if settings.align:
        widths = [
            max(settings.min_column_width, _MIN_MARKER[alignments[c]], *(len(cells[c]) for _, cells in rows))
            for c in range(columns)
        ]

    def render(source: TableRow, cells: list[str]) -> TableRow:
        if settings.align:
            cells = [_justify(cell, widths[c], alignments[c]) for c, cell in enumerate(cells)]
        raw = _render_row(indent, cells, settings.padding)
        return TableRow(raw=raw, lineno=source.lineno, indent=indent, cells=tuple(c.strip() for c in cells))

    delimiter_cells = [_delimiter_cell(alignments[c], widths[c]) for c in range(columns)]
    formatted = [render(*rows[0]), render(delimiter, delimiter_cells)]
    formatted.extend(render(row, cells) for row, cells in rows[1:])
    return formatted, diagnostics


def format_tables(
    lines: list[ClassifiedLine],
    settings: TableSettings,
    ) -> tuple[list[ClassifiedLine], list[Diagnostic]]:
    """Find table blocks (header row + delimiter row + following rows) and reflow each."""
    out: list[ClassifiedLine] = []
    diagnostics: list[Diagnostic] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if isinstance(line, TableRow) and i + 1 < len(lines) and is_delimiter(lines[i + 1]):
            j = i + 2
            while j < len(lines) and isinstance(lines[j], TableRow):
                j += 1
            formatted, diags = format_table(lines[i:j], settings)
            out.extend(formatted)
            diagnostics.extend(diags)
            i = j
            continue
        out.append(line)
        i += 1
    return out, diagnostics
