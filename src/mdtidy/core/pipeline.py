"""Pipeline orchestration: the format entry point and per-file runner"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from mdtidy.config import Settings
from mdtidy.core.classify import classify
from mdtidy.core.diagnostics import merge
from mdtidy.core.format.headings import format_headings
from mdtidy.core.format.lists import format_lists
from mdtidy.core.format.tables import format_tables
from mdtidy.core.models import FormatResult
from mdtidy.core.parse import decode_document, discover_files, read_document
from mdtidy.core.preprocess import preprocess
from mdtidy.core.protect import protect, restore

logger = logging.getLogger(__name__)


def format_markdown(content: Union[str, bytes], settings: Settings = None) -> FormatResult:
    """Format markdown text: protect -> preprocess -> classify -> headings -> lists -> tables -> restore.

    A pure function of (content, settings). Bytes are decoded as strict UTF-8;
    undecodable input raises DecodeError before anything is formatted.
    """
    settings = settings or Settings()
    text = decode_document(content)

    protected, protect_diags = protect(text)
    lines, pre_diags = preprocess(protected, settings)
    classified = classify(lines, protected)

    classified, heading_diags = format_headings(classified, settings.headings)
    classified, list_diags = format_lists(classified, settings.lists)
    classified, table_diags = format_tables(classified, settings.tables)

    output, restore_diags = restore([line.raw for line in classified], protected, settings.code)
    diagnostics = merge(protect_diags, pre_diags, heading_diags, list_diags, table_diags, restore_diags)
    logger.debug("formatted %d line(s), %d diagnostic(s)", len(classified), len(diagnostics))
    return FormatResult(text=output, diagnostics=diagnostics)


@dataclass(frozen=True)
class FileResult:
    """Formatting outcome for one file on disk."""
    path:     Path
    original: str
    result:   FormatResult

    @property
    def changed(self) -> bool:
        return self.original != self.result.text


def run_format(paths: list[Path], settings: Settings) -> list[FileResult]:
    """Format every markdown file under paths. Raises DecodeError on undecodable input."""
    results = []
    for root in paths:
        for p in discover_files(root):
            original = read_document(p)
            results.append(FileResult(path=p, original=original, result=format_markdown(original, settings)))
            logger.debug("formatted %s", p)
    return results
