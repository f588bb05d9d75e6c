"""Compiled line-shape patterns and pipe scanning shared by the preprocessor,
classifier and table formatter.
"""

import re


# ─── Headings ─────────────────────────────────────────────────────────────────

# ATX heading prefix: up to three spaces, 1-6 hashes, anything after.
# A rest starting with '#' means the run is longer than six.
HEADING_PREFIX_RE = re.compile(r"^(?P<indent> {0,3})(?P<hashes>#{1,6})(?P<rest>.*)$")

# Well-formed ATX heading: hashes followed by whitespace or end of line
HEADING_RE = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<text>.*?))?[ \t]*$")

# Closing run of unescaped hashes at line end, with optional whitespace before it
CLOSING_HASHES_RE = re.compile(r"[ \t]*(?<!\\)#+[ \t]*$")


# ─── Lists ────────────────────────────────────────────────────────────────────

LIST_ITEM_RE = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?:(?P<bullet>[-*+])|(?P<ordinal>\d{1,9})(?P<delim>[.)]))"
    r"[ \t]+(?P<text>\S.*)$"
)

# Marker glued to its text, e.g. "-item"
MARKER_NO_SPACE_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<marker>[-*+])(?P<rest>\S.*)$")

# Ordinal glued to its text, e.g. "1.Item"; a digit after the delimiter is a decimal
ORDERED_NO_SPACE_RE = re.compile(r"^(?P<indent>[ \t]*)(?P<ordinal>\d{1,9})(?P<delim>[.)])(?P<rest>[^\s\d].*)$")

# Balanced emphasis span at the start of the content: *a*, **a**, ***a***
LEADING_EMPHASIS_RE = re.compile(r"^(?P<run>\*{1,3})(?=\S)(?P<body>.*?\S)(?P=run)(?!\*)")

# Thematic break / setext underline: ---, ***, ___, - - -
THEMATIC_BREAK_RE = re.compile(r"^ {0,3}(?P<char>[-*_])(?:[ \t]*(?P=char)){2,}[ \t]*$")


# ─── Tables ───────────────────────────────────────────────────────────────────

DELIMITER_CELL_RE = re.compile(r"^(?P<left>:?)-+(?P<right>:?)$")


# ─── Block quotes ─────────────────────────────────────────────────────────────

BLOCKQUOTE_RE = re.compile(r"^ {0,3}>")


def is_escaped(text: str, index: int) -> bool:
    """True if the character at index is preceded by an odd number of backslashes."""
    count = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def pipe_positions(text: str, skip_code_spans: bool = False) -> list[int]:
    """Indexes of unescaped '|' characters, optionally ignoring those inside `code` spans."""
    positions: list[int] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "`" and skip_code_spans and not is_escaped(text, i):
            run = len(text[i:]) - len(text[i:].lstrip("`"))
            close = re.compile(r"(?<!`)" + "`" * run + r"(?!`)").search(text, i + run)
            if close:
                i = close.end()
                continue
            i += run
            continue
        if ch == "|" and not is_escaped(text, i):
            positions.append(i)
        i += 1
    return positions


def split_row(line: str) -> list[str]:
    """Split a pipe table row into trimmed cells; '\\|' stays inside its cell."""
    text = line.strip()
    positions = pipe_positions(text)
    if positions and positions[0] == 0:
        text = text[1:]
        positions = [p - 1 for p in positions[1:]]
    if positions and positions[-1] == len(text) - 1:
        text = text[:-1]
        positions = positions[:-1]
    cells: list[str] = []
    start = 0
    for p in positions:
        cells.append(text[start:p].strip())
        start = p + 1
    cells.append(text[start:].strip())
    return cells


def is_delimiter_row(line: str) -> bool:
    """True for a table delimiter row such as '|---|:-:|' or '---|---'."""
    if not pipe_positions(line.strip()):
        return False
    return all(DELIMITER_CELL_RE.match(cell) for cell in split_row(line))
