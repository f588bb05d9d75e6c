"""Line-local heuristic repair of malformed-but-recognizable markdown.

Each rule looks at one line only and either rewrites it (info diagnostic) or
flags it (warning, content unchanged). Lines are never merged or split, so
line numbers stay valid for reporting.
"""

import logging
from typing import Optional

from mdtidy.config import Settings
from mdtidy.core.diagnostics import info, warning
from mdtidy.core.models import Diagnostic
from mdtidy.core.patterns import (
    BLOCKQUOTE_RE,
    CLOSING_HASHES_RE,
    HEADING_PREFIX_RE,
    HEADING_RE,
    LEADING_EMPHASIS_RE,
    LIST_ITEM_RE,
    MARKER_NO_SPACE_RE,
    ORDERED_NO_SPACE_RE,
    THEMATIC_BREAK_RE,
    is_delimiter_row,
    pipe_positions,
)
from mdtidy.core.protect import ProtectedText

logger = logging.getLogger(__name__)


def fix_heading(line: str, space_after_hash: bool = True) -> tuple[str, Optional[str]]:
    """'#Title' -> '# Title', '## Title ##' -> '## Title', '###  Title' -> '### Title'.

    Returns (line, message); message is None when the line is left alone.
    Trailing whitespace alone is not reported; the heading formatter
    re-renders headings anyway.
    """
    m = HEADING_PREFIX_RE.match(line)
    if not m:
        return line, None
    rest = m.group('rest')
    if not rest.strip() or rest.startswith('#'):
        return line, None

    missing_space = not rest[0].isspace()
    if missing_space and not space_after_hash:
        return line, None

    text = CLOSING_HASHES_RE.sub('', rest.strip())
    fixed = f"{m.group('indent')}{m.group('hashes')} {text}".rstrip()
    if fixed == line.rstrip():
        return line, None
    return fixed, "missing space after '#'" if missing_space else "normalized heading markers"


def fix_list_marker(line: str) -> tuple[str, Optional[str], bool]:
    """'-item' -> '- item', '1.Item' -> '1. Item'. Returns (line, message, is_warning).

    Emphasis wins over a marker: '**Bold:**' and '*word*' are left alone.
    A doubled marker without a balanced span ('**Note:', '--flag') is only flagged.
    """
    m = ORDERED_NO_SPACE_RE.match(line)
    if m:
        fixed = f"{m.group('indent')}{m.group('ordinal')}{m.group('delim')} {m.group('rest')}"
        return fixed, "missing space after list marker", False

    m = MARKER_NO_SPACE_RE.match(line)
    if not m or THEMATIC_BREAK_RE.match(line) or is_delimiter_row(line):
        return line, None, False

    marker, rest = m.group('marker'), m.group('rest')
    content = marker + rest
    if marker == '*' and LEADING_EMPHASIS_RE.match(content):
        return line, None, False
    if rest[0] == marker:
        return line, "ambiguous list marker", True
    return f"{m.group('indent')}{marker} {rest}", "missing space after list marker", False


def fix_table_pipes(line: str) -> tuple[str, Optional[str]]:
    """'Name|Age' -> '|Name|Age|': add missing outer pipes to a row with an interior pipe."""
    stripped = line.strip()
    if (not stripped or BLOCKQUOTE_RE.match(line) or HEADING_RE.match(line)
            or LIST_ITEM_RE.match(line)):
        return line, None

    positions = pipe_positions(stripped, skip_code_spans=True)
    if not positions:
        return line, None
    leading = positions[0] == 0
    trailing = positions[-1] == len(stripped) - 1
    if leading and trailing:
        return line, None
    if not any(0 < p < len(stripped) - 1 for p in positions):
        return line, None

    indent = line[:len(line) - len(line.lstrip())]
    fixed = stripped if leading else "|" + stripped
    if not trailing:
        # a trailing backslash would escape the new pipe
        fixed += " |" if fixed.endswith("\\") else "|"
    return indent + fixed, "fixed missing table pipes"


def preprocess(protected: ProtectedText, settings: Settings) -> tuple[list[str], list[Diagnostic]]:
    """Apply the repair rules to every non-placeholder line."""
    lines: list[str] = []
    diagnostics: list[Diagnostic] = []

    for line, lineno in zip(protected.lines, protected.linenos):
        if protected.block_id(line) is not None:
            lines.append(line)
            continue
        original = line

        line, message = fix_heading(line, settings.headings.space_after_hash)
        if message:
            diagnostics.append(info(lineno, message, before=original.strip(), after=line.strip()))

        before = line
        line, message, flagged = fix_list_marker(line)
        if message and flagged:
            diagnostics.append(warning(lineno, message, before=line.strip()))
        elif message:
            diagnostics.append(info(lineno, message, before=before.strip(), after=line.strip()))

        before = line
        line, message = fix_table_pipes(line)
        if message:
            diagnostics.append(info(lineno, message, before=before.strip(), after=line.strip()))

        lines.append(line)

    logger.debug("preprocess: %d repair(s) across %d line(s)", len(diagnostics), len(lines))
    return lines, diagnostics
