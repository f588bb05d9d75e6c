"""Heading formatting: canonical ATX rendering and blank-line spacing"""

from mdtidy.config import HeadingSettings
from mdtidy.core.models import ClassifiedLine, Diagnostic, Heading, Plain, is_blank


def render_heading(heading: Heading) -> Heading:
    """'  ##   Title' -> '## Title'."""
    raw = '#' * heading.level + (f' {heading.text}' if heading.text else '')
    return Heading(raw=raw, lineno=heading.lineno, level=heading.level, text=heading.text)


def _trailing_blanks(lines: list[ClassifiedLine]) -> int:
    count = 0
    for line in reversed(lines):
        if not is_blank(line):
            break
        count += 1
    return count


def _set_trailing_blanks(out: list[ClassifiedLine], target: int) -> None:
    """Collapse or extend the blank run at the end of out to exactly target lines."""
    current = _trailing_blanks(out)
    while current > target:
        out.pop()
        current -= 1
    out.extend(Plain(raw='', lineno=None) for _ in range(target - current))


def format_headings(
    lines: list[ClassifiedLine],
    settings: HeadingSettings,
    ) -> tuple[list[ClassifiedLine], list[Diagnostic]]:
    """Ensure exactly blank_lines_before/after around every heading.

    Existing blank runs are measured first and only changed when they differ,
    so formatted output is left as it is. Nothing is inserted before a heading
    that starts the document or after one that ends it; between two adjacent
    headings the gap is the larger of the two settings.
    """
    out: list[ClassifiedLine] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if not isinstance(line, Heading):
            out.append(line)
            i += 1
            continue

        blanks = _trailing_blanks(out)
        if blanks == len(out):
            target = 0
        elif isinstance(out[-blanks - 1], Heading):
            target = max(settings.blank_lines_before, settings.blank_lines_after)
        else:
            target = settings.blank_lines_before
        _set_trailing_blanks(out, target)
        out.append(render_heading(line))

        j = i + 1
        while j < len(lines) and is_blank(lines[j]):
            j += 1
        if j < len(lines):
            existing = lines[i + 1:j]
            out.extend(existing[:settings.blank_lines_after])
            out.extend(Plain(raw='', lineno=None) for _ in range(settings.blank_lines_after - len(existing)))
        i = j

    return out, []
