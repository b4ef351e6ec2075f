"""
Phrase parameter types - Typed placeholders for step patterns.

Registered with behave's parse matcher, so a "{selector:QuotedString}"
slot only matches a double-quoted literal and the step receives the
unquoted value. Quotes inside the literal are written as \\".
"""

import re

import parse

# A double-quoted literal; backslash escapes any character, including quotes
QUOTED_STRING_PATTERN = r'"(?:[^"\\]|\\.)*"'

_ESCAPED = re.compile(r"\\(.)")


@parse.with_pattern(QUOTED_STRING_PATTERN)
def parse_quoted_string(text: str) -> str:
    """
    Convert a matched literal to its value.

    Example:
        >>> parse_quoted_string('"input[name=\\\\"email\\\\"]"')
        'input[name="email"]'
    """
    return _ESCAPED.sub(r"\1", text[1:-1])


PARAMETER_TYPES = {
    "QuotedString": parse_quoted_string,
}
