"""Data models shared by the formatting pipeline stages"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    warning = "warning"
    info = "info"


class Diagnostic(BaseModel):
    """A single issue found (warning) or fixed (info), keyed by original line number."""
    model_config = ConfigDict(frozen=True)

    line:     int
    severity: Severity
    message:  str
    before:   Optional[str] = None
    after:    Optional[str] = None


class BlockKind(str, Enum):
    code = "code"
    frontmatter = "frontmatter"


@dataclass
class ProtectedBlock:
    """A region lifted out of the document before any other stage runs."""
    id:      int
    kind:    BlockKind
    lineno:  int                  # original line of the opening delimiter
    indent:  str                  # leading whitespace of the opening delimiter
    opening: str                  # opening delimiter line, verbatim
    closing: Optional[str]        # closing delimiter line; None = runs to end of document
    content: list[str] = field(default_factory=list)


class Alignment(str, Enum):
    default = "default"
    left = "left"
    right = "right"
    center = "center"


class MarkerKind(str, Enum):
    bullet = "bullet"
    ordered = "ordered"


# --- classified lines ---
# Every variant carries its rendered text (raw) and the original line number
# (None for lines a formatter inserted).

@dataclass(frozen=True)
class CodeFencePlaceholder:
    raw:      str
    lineno:   Optional[int]
    block_id: int


@dataclass(frozen=True)
class Heading:
    raw:    str
    lineno: Optional[int]
    level:  int
    text:   str


@dataclass(frozen=True)
class ListItem:
    raw:     str
    lineno:  Optional[int]
    kind:    MarkerKind
    indent:  int                  # raw indentation width, tabs expanded
    marker:  str                  # bullet character or ordinal delimiter ('.' / ')')
    ordinal: Optional[int]
    text:    str


@dataclass(frozen=True)
class TableRow:
    raw:    str
    lineno: Optional[int]
    indent: str
    cells:  tuple[str, ...]


@dataclass(frozen=True)
class BlockQuoteMarker:
    raw:    str
    lineno: Optional[int]


@dataclass(frozen=True)
class Plain:
    raw:    str
    lineno: Optional[int]

    @property
    def blank(self) -> bool:
        return not self.raw.strip()


ClassifiedLine = Union[CodeFencePlaceholder, Heading, ListItem, TableRow, BlockQuoteMarker, Plain]


@dataclass(frozen=True)
class FormatResult:
    """Output of one pipeline invocation."""
    text:        str
    diagnostics: list[Diagnostic]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.warning]

    @property
    def fixes(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.info]


def is_blank(line: ClassifiedLine) -> bool:
    """True for an empty or whitespace-only Plain line."""
    return isinstance(line, Plain) and line.blank
