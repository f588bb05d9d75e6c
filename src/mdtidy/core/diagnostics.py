"""Diagnostic constructors and the ordered merge of per-stage diagnostic streams"""

from typing import Iterable, Optional

from mdtidy.core.models import Diagnostic, Severity


def warning(line: int, message: str, before: Optional[str] = None, after: Optional[str] = None) -> Diagnostic:
    return Diagnostic(line=line, severity=Severity.warning, message=message, before=before, after=after)


def info(line: int, message: str, before: Optional[str] = None, after: Optional[str] = None) -> Diagnostic:
    return Diagnostic(line=line, severity=Severity.info, message=message, before=before, after=after)


def merge(*streams: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Concatenate streams in stage order, then stable-sort by original line number.

    Ties keep emission order, so the result is reproducible for identical input.
    """
    combined = [d for stream in streams for d in stream]
    return sorted(combined, key=lambda d: d.line)
