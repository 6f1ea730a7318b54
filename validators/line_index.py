"""
line_index.py

Best-effort mapping from a validation finding back to a source line.

The parsed tree does not keep reliable positions for every lookup the
validator needs (attribute values, file names), so lines are recovered by
substring search over the raw document text. Callers pass an increasing
``from_line`` while they walk deeper into the document so that a later
search does not land on an earlier element with the same tag name.
"""

from typing import Sequence


def find_line(lines: Sequence[str], needle: str, from_line: int = 0) -> int:
    """
    Find the 1-based line number of the first line containing ``needle``.

    Args:
        lines: Document text split into lines
        needle: Literal substring to look for
        from_line: 0-based index of the first line to scan (inclusive)

    Returns:
        1-based line number of the match. Without a match: ``from_line`` when
        it is greater than 0, otherwise 1.
    """
    start = max(from_line, 0)
    for index in range(start, len(lines)):
        if needle in lines[index]:
            return index + 1
    return from_line if from_line > 0 else 1


LINE_NOT_FOUND = "Line not found"


def line_preview(lines: Sequence[str], line: int) -> str:
    """
    Source text of a 1-based line, stripped.

    Returns:
        The line text, or LINE_NOT_FOUND when ``line`` is outside the document
    """
    if line is None or line < 1 or line > len(lines):
        return LINE_NOT_FOUND
    return lines[line - 1].strip()
