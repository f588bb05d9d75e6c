"""Post-format verification: idempotence and code-content preservation"""

from mdtidy.config import Settings
from mdtidy.core.parse import parse_tokens
from mdtidy.core.pipeline import format_markdown


def fence_contents(text: str) -> list[str]:
    """Contents of all fenced code blocks as a CommonMark parser sees them."""
    return [tok.content for tok in parse_tokens(text) if tok.type == 'fence']


def verify(original: str, formatted: str, settings: Settings) -> list[str]:
    """Return human-readable problems; an empty list means the output is sound."""
    problems = []
    again = format_markdown(formatted, settings).text
    if again != formatted:
        problems.append("formatting is not idempotent: a second pass changes the output")

    before, after = fence_contents(original), fence_contents(formatted)
    if len(before) != len(after):
        problems.append(f"code block count changed: {len(before)} -> {len(after)}")
    else:
        for n, (a, b) in enumerate(zip(before, after), start=1):
            if a != b:
                problems.append(f"content of code block {n} changed")
    return problems
