"""Unit tests for placeholder templates."""

from defscope.core.templates import format_range, format_string, replace_placeholder


def test_replaces_every_occurrence() -> None:
    assert replace_placeholder("{text}|{text}", "text", "x") == "x|x"


def test_escaped_placeholder_is_left_alone() -> None:
    assert replace_placeholder(r"\{text} {text}", "text", "x") == r"\{text} x"


def test_values_are_inserted_literally() -> None:
    assert format_string("{text}", {"text": r"a\1 {range} $0"}) == r"a\1 {range} $0"


def test_missing_values_become_empty() -> None:
    assert format_string("{filePath}{range}\n{text}", {"filePath": "a.py", "range": None, "text": "x"}) == "a.py\nx"


def test_unknown_placeholders_are_kept() -> None:
    assert format_string("{other} {text}", {"text": "x"}) == "{other} x"


def test_format_range_is_one_based() -> None:
    assert format_range(":{startLine}:{startChar}-{endLine}:{endChar}", 0, 0, 4, 6) == ":1:1-5:7"
