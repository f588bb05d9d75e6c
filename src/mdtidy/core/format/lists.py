"""List formatting: depth inference, re-indentation, marker and number normalization"""

from dataclasses import dataclass
from typing import Optional

from mdtidy.config import ListSettings
from mdtidy.core.diagnostics import warning
from mdtidy.core.models import ClassifiedLine, Diagnostic, Heading, ListItem, MarkerKind, is_blank


@dataclass
class _Level:
    """One nesting level of the list currently being formatted."""
    indent: int                           # source indentation that opened this level
    kind:   Optional[MarkerKind] = None   # kind of the run in progress at this level
    delim:  Optional[str] = None
    next:   Optional[int] = None          # next ordinal of the ordered run in progress


def _ends_list(line: ClassifiedLine) -> bool:
    """A heading, or any non-blank line starting at column 0, closes the list block."""
    if isinstance(line, Heading):
        return True
    return not is_blank(line) and not line.raw[:1].isspace()


def _depth(stack: list[_Level], indent: int) -> tuple[int, bool]:
    """Place an item on the level stack. Returns (depth, ambiguous)."""
    if not stack or indent > stack[-1].indent:
        stack.append(_Level(indent=indent))
        return len(stack) - 1, False

    popped = None
    while stack and stack[-1].indent > indent:
        popped = stack.pop()
    if stack and stack[-1].indent == indent:
        return len(stack) - 1, False

    # dedent landed between two known levels: join the level it popped out of
    ambiguous = bool(stack)
    popped.indent = indent
    stack.append(popped)
    return len(stack) - 1, ambiguous


def _marker(item: ListItem, level: _Level, settings: ListSettings) -> str:
    if item.kind == MarkerKind.bullet:
        level.kind, level.delim, level.next = MarkerKind.bullet, None, None
        return settings.marker

    continues = level.kind == MarkerKind.ordered and level.delim == item.marker
    number = level.next if continues and settings.normalize_numbers else item.ordinal
    level.kind, level.delim, level.next = MarkerKind.ordered, item.marker, number + 1
    return f"{number}{item.marker}"


def format_lists(
    lines: list[ClassifiedLine],
    settings: ListSettings,
    ) -> tuple[list[ClassifiedLine], list[Diagnostic]]:
    """Re-indent list items to indent_size * depth and normalize markers.

    Depth comes from a stack of previously seen indentations rather than a
    fixed divisor, so 3-, 4- or 5-space source steps all nest correctly.
    """
    out: list[ClassifiedLine] = []
    diagnostics: list[Diagnostic] = []
    stack: list[_Level] = []

    for line in lines:
        if not isinstance(line, ListItem):
            if _ends_list(line):
                stack.clear()
            out.append(line)
            continue

        depth, ambiguous = _depth(stack, line.indent)
        if ambiguous:
            diagnostics.append(warning(line.lineno, "ambiguous list nesting", before=line.raw.rstrip()))
        marker = _marker(line, stack[depth], settings)
        raw = f"{' ' * (settings.indent_size * depth)}{marker} {line.text}"
        out.append(ListItem(
            raw=raw,
            lineno=line.lineno,
            kind=line.kind,
            indent=settings.indent_size * depth,
            marker=line.marker if line.kind == MarkerKind.ordered else settings.marker,
            ordinal=int(marker[:-1]) if line.kind == MarkerKind.ordered else None,
            text=line.text,
        ))

    return out, diagnostics
