# tests/test_line_index.py
from validators.line_index import LINE_NOT_FOUND, find_line, line_preview

LINES = ["<start>", "  <adZone>", "    <PHT>2</PHT>", "  </adZone>", "  <adZone>", "    <PHT>3</PHT>"]


def test_first_match_is_one_based():
    assert find_line(LINES, "<adZone") == 2


def test_search_starts_at_offset():
    assert find_line(LINES, "<adZone", 2) == 5
    assert find_line(LINES, "<PHT", 5) == 6


def test_no_match_falls_back_to_offset():
    assert find_line(LINES, "<missing", 3) == 3


def test_no_match_without_offset_is_line_one():
    assert find_line(LINES, "<missing") == 1
    assert find_line([], "<adZone") == 1


def test_negative_offset_is_clamped():
    assert find_line(LINES, "<start", -4) == 1


def test_line_preview_strips_source_line():
    assert line_preview(LINES, 3) == "<PHT>2</PHT>"
    assert line_preview(LINES, 1) == "<start>"


def test_line_preview_outside_document():
    assert line_preview(LINES, 0) == LINE_NOT_FOUND
    assert line_preview(LINES, len(LINES) + 1) == LINE_NOT_FOUND
    assert line_preview([], 1) == "Line not found"
