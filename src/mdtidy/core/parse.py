"""File discovery, strict decoding, line splitting, and markdown-it tokenization"""

from pathlib import Path
from typing import Union

from markdown_it import MarkdownIt


MD_EXTENSIONS = {'.md', '.mdx'}


class DecodeError(ValueError):
    """Raised when document bytes are not valid UTF-8; nothing is formatted."""


def _make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def decode_document(content: Union[str, bytes]) -> str:
    """Return content as text, decoding bytes as strict UTF-8."""
    if isinstance(content, str):
        return content
    try:
        return content.decode('utf-8')
    except UnicodeDecodeError as e:
        raise DecodeError(f"Input is not valid UTF-8 (byte offset {e.start}): {e.reason}") from e


def split_lines(text: str) -> tuple[list[str], str, bool]:
    """Split text into lines. Returns (lines, newline, has_final_newline).

    Only '\\n' and '\\r\\n' break lines; other separators that str.splitlines()
    honours (form feed, U+2028, ...) stay inside the line.
    """
    newline = '\r\n' if '\r\n' in text else '\n'
    if not text:
        return [], newline, False
    lines = text.split('\n')
    trailing = lines[-1] == ''
    if trailing:
        lines.pop()
    if newline == '\r\n':
        lines = [line[:-1] if line.endswith('\r') else line for line in lines]
    return lines, newline, trailing


def join_lines(lines: list[str], newline: str = '\n', trailing: bool = False) -> str:
    """Inverse of split_lines."""
    text = newline.join(lines)
    return text + newline if trailing and lines else text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def read_document(path: Path) -> str:
    """Read a markdown file, raising DecodeError for undecodable bytes."""
    try:
        return decode_document(path.read_bytes())
    except DecodeError as e:
        raise DecodeError(f"{path}: {e}") from e


def parse_tokens(text: str, parser_config: str = 'gfm-like') -> list:
    """Tokenize markdown with markdown-it; used for structural verification only."""
    return _make_parser(parser_config).parse(text)
