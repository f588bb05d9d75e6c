"""Unified diffs and change counts between original and formatted text"""

import difflib


def unified_diff(
    old: str,
    new: str,
    from_label: str = "original",
    to_label: str = "formatted",
    context: int = 3,
    ) -> list[str]:
    """Return unified diff lines comparing old to new. Empty list if identical.

    Every line ends with a newline, including a final source line that had
    none, so ''.join(...) prints one diff line per terminal line.
    """
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=from_label,
        tofile=to_label,
        n=context,
    )
    return [line if line.endswith("\n") else line + "\n" for line in lines]


def change_counts(old: str, new: str) -> tuple[int, int]:
    """(added, deleted) line counts, read off a zero-context diff."""
    added = deleted = 0
    # the first two lines are the ---/+++ file headers
    for line in unified_diff(old, new, context=0)[2:]:
        if line.startswith("+"):
            added += 1
        elif line.startswith("-"):
            deleted += 1
    return added, deleted
