import re
from collections.abc import Mapping


def replace_placeholder(template: str, placeholder: str, value: str) -> str:
    """Replace ``{placeholder}`` everywhere except where the brace is backslash-escaped."""
    pattern = re.compile(r"(?<!\\)\{" + re.escape(placeholder) + r"\}")
    return pattern.sub(lambda _: value, template)


def format_string(template: str, replacements: Mapping[str, str | None]) -> str:
    formatted = template
    for key, value in replacements.items():
        formatted = replace_placeholder(formatted, key, value or "")
    return formatted


def format_range(range_template: str, start_line: int, start_char: int, end_line: int, end_char: int) -> str:
    """Fill a range template; positions arrive zero-based and are reported one-based."""
    return format_string(
        range_template,
        {
            "startLine": str(start_line + 1),
            "startChar": str(start_char + 1),
            "endLine": str(end_line + 1),
            "endChar": str(end_char + 1),
        },
    )
