"""Code region protection: lift fenced code (and front matter) out of the document.

Every later stage sees a single placeholder line per protected block, so
nothing inside code is ever reinterpreted as markdown. ``restore`` puts the
exact original bytes back; only fence delimiter lines may be rewritten.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

import yaml

from mdtidy.config import CodeSettings
from mdtidy.core.diagnostics import info, warning
from mdtidy.core.models import BlockKind, Diagnostic, ProtectedBlock
from mdtidy.core.parse import join_lines, split_lines

logger = logging.getLogger(__name__)


FENCE_RE = re.compile(r'^(?P<indent>[ \t]*)(?P<fence>`{3,}|~{3,})(?P<info>.*)$')
CLOSE_RE = re.compile(r'^(?P<indent>[ \t]*)(?P<fence>`{3,}|~{3,})[ \t]*$')
FRONTMATTER_OPEN_RE = re.compile(r'^---[ \t]*$')
FRONTMATTER_CLOSE_RE = re.compile(r'^(---|\.\.\.)[ \t]*$')
DEFAULT_LANGUAGE = 'text'


def indent_width(indent: str) -> int:
    """Width of leading whitespace with tabs expanded to 4 columns."""
    return len(indent.expandtabs(4))


@dataclass
class ProtectedText:
    """Document text with protected blocks replaced by placeholder lines."""
    lines:    list[str]
    linenos:  list[int]                         # original 1-based line number per line
    blocks:   dict[int, ProtectedBlock] = field(default_factory=dict)
    token:    str = '\x00mdtidy-block:'
    newline:  str = '\n'
    trailing: bool = False

    def placeholder(self, block_id: int) -> str:
        return f"{self.token}{block_id}\x00"

    def block_id(self, line: str) -> Optional[int]:
        """Return the block id if line is a placeholder line, else None."""
        stripped = line.strip(' \t')
        if not (stripped.startswith(self.token) and stripped.endswith('\x00')):
            return None
        digits = stripped[len(self.token):-1]
        return int(digits) if digits.isdigit() and int(digits) in self.blocks else None


def _unique_token(text: str) -> str:
    """A placeholder prefix that does not occur anywhere in the input."""
    token = '\x00mdtidy-block:'
    while token in text:
        token = '\x00' + token
    return token


def _open_fence(line: str) -> Optional[re.Match]:
    m = FENCE_RE.match(line)
    # a backtick fence's info string cannot itself contain backticks
    if m and m.group('fence')[0] == '`' and '`' in m.group('info'):
        return None
    return m


def _closes(line: str, char: str, length: int, max_indent: int) -> bool:
    m = CLOSE_RE.match(line)
    return (
        m is not None
        and m.group('fence')[0] == char
        and len(m.group('fence')) >= length
        and indent_width(m.group('indent')) <= max_indent
    )


def _frontmatter_end(lines: list[str]) -> Optional[int]:
    """Index of the closing '---' of a leading YAML front matter block, else None.

    The enclosed lines must load as a YAML mapping; a thematic break that
    merely opens the document is not front matter.
    """
    if not lines or not FRONTMATTER_OPEN_RE.match(lines[0]):
        return None
    end = next((i for i in range(1, len(lines)) if FRONTMATTER_CLOSE_RE.match(lines[i])), None)
    if end is None or end == 1:
        return None
    try:
        data = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError:
        return None
    return end if isinstance(data, dict) else None


def protect(text: str) -> tuple[ProtectedText, list[Diagnostic]]:
    """Replace every fenced code block (and leading front matter) with a placeholder line."""
    source, newline, trailing = split_lines(text)
    result = ProtectedText(lines=[], linenos=[], token=_unique_token(text), newline=newline, trailing=trailing)
    diagnostics: list[Diagnostic] = []

    i = 0
    end = _frontmatter_end(source)
    if end is not None:
        block = ProtectedBlock(
            id=0, kind=BlockKind.frontmatter, lineno=1, indent='',
            opening=source[0], closing=source[end], content=source[1:end],
        )
        result.blocks[block.id] = block
        result.lines.append(result.placeholder(block.id))
        result.linenos.append(1)
        i = end + 1

    while i < len(source):
        line = source[i]
        m = _open_fence(line)
        if m is None:
            result.lines.append(line)
            result.linenos.append(i + 1)
            i += 1
            continue

        char, length = m.group('fence')[0], len(m.group('fence'))
        max_indent = indent_width(m.group('indent'))
        j = i + 1
        while j < len(source) and not _closes(source[j], char, length, max_indent):
            j += 1

        block = ProtectedBlock(
            id=len(result.blocks), kind=BlockKind.code, lineno=i + 1, indent=m.group('indent'),
            opening=line, closing=source[j] if j < len(source) else None, content=source[i + 1:j],
        )
        if block.closing is None:
            diagnostics.append(warning(block.lineno, "unclosed code fence", before=line.strip()))
        result.blocks[block.id] = block
        result.lines.append(block.indent + result.placeholder(block.id))
        result.linenos.append(block.lineno)
        i = j + 1

    logger.debug("protected %d block(s)", len(result.blocks))
    return result, diagnostics


def _fence_length(block: ProtectedBlock, char: str, length: int) -> int:
    """Shortest run >= length that no content line could close."""
    longest = 0
    for line in block.content:
        m = CLOSE_RE.match(line)
        if m and m.group('fence')[0] == char:
            longest = max(longest, len(m.group('fence')))
    return max(length, longest + 1) if longest >= length else length


def _render_code(block: ProtectedBlock, code: CodeSettings) -> tuple[list[str], list[Diagnostic]]:
    diagnostics: list[Diagnostic] = []
    m = FENCE_RE.match(block.opening)
    fence, language = m.group('fence'), m.group('info').strip()

    char = code.fence_style[0]
    if char == '`' and '`' in language:
        char = fence[0]
    length = _fence_length(block, char, len(fence))

    if code.ensure_language_tag and not language:
        language = DEFAULT_LANGUAGE
        diagnostics.append(info(
            block.lineno, "added missing language tag",
            before=block.opening.strip(), after=char * length + language,
        ))

    lines = [block.indent + char * length + language, *block.content]
    if block.closing is not None:
        close_indent = CLOSE_RE.match(block.closing).group('indent')
        lines.append(close_indent + char * length)
    return lines, diagnostics


def restore(lines: list[str], protected: ProtectedText, code: CodeSettings) -> tuple[str, list[Diagnostic]]:
    """Substitute placeholder lines back with their blocks; rewrite code fences to the configured style."""
    out: list[str] = []
    diagnostics: list[Diagnostic] = []
    for line in lines:
        block_id = protected.block_id(line)
        if block_id is None:
            out.append(line)
            continue
        block = protected.blocks[block_id]
        if block.kind == BlockKind.frontmatter:
            out.extend([block.opening, *block.content, block.closing])
            continue
        rendered, diags = _render_code(block, code)
        out.extend(rendered)
        diagnostics.extend(diags)
    return join_lines(out, protected.newline, protected.trailing), diagnostics
