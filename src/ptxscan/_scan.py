"""Primitive scanners shared by the ptx grammar.

Every scanner takes the source buffer and a starting offset and returns
a tuple of the offset after the match and the matched value. When the
grammar does not match a ParseError is raised with the offset where
matching failed. Offsets are plain values so a failed scan never consumes
anything, callers simply retry from the offset they already hold.
"""

__all__ = [
    "SPECIAL_CHARS",
    "MULTISPACE",
    "parse_tag",
    "parse_space0",
    "parse_space1",
    "parse_multispace1",
    "parse_name",
    "parse_parenthesized_naive",
    "parse_braced_balanced",
]

from ._error import ParseError
from ._text import Span


# Characters that end an identifier
SPECIAL_CHARS = frozenset("./()[]{},;:%")

SPACE = " \t"
MULTISPACE = " \t\r\n"


def parse_tag(source, pos, tag):
    """Match literal text at the offset."""
    if not source.startswith(tag, pos):
        raise ParseError(f"Expected {tag!r}", pos)
    end = pos + len(tag)
    return end, Span(source, pos, end)


def _take_while(source, pos, chars):
    end = pos
    size = len(source)
    while end < size and source[end] in chars:
        end += 1
    return end


def parse_space0(source, pos):
    """Match zero or more spaces or tabs."""
    end = _take_while(source, pos, SPACE)
    return end, Span(source, pos, end)


def parse_space1(source, pos):
    """Match one or more spaces or tabs."""
    end = _take_while(source, pos, SPACE)
    if end == pos:
        raise ParseError("Expected space", pos)
    return end, Span(source, pos, end)


def parse_multispace1(source, pos):
    """Match one or more spaces, tabs or line breaks."""
    end = _take_while(source, pos, MULTISPACE)
    if end == pos:
        raise ParseError("Expected whitespace", pos)
    return end, Span(source, pos, end)


def parse_name(source, pos):
    """Match an identifier.

    An identifier is the longest run of characters that are neither
    whitespace nor one of the SPECIAL_CHARS punctuation marks.

    Args:
        source: (str) Source buffer
        pos: (int) Offset to start matching

    Returns:
        (tuple[int, Span]) Offset after the name and the name itself

    Raises:
        ParseError: No identifier character at the offset
    """
    end = pos
    size = len(source)
    while end < size:
        c = source[end]
        if c.isspace() or c in SPECIAL_CHARS:
            break
        end += 1
    if end == pos:
        raise ParseError("Expected name", pos)
    return end, Span(source, pos, end)


def parse_parenthesized_naive(source, pos):
    """Match text inside parenthesis without tracking nesting.

    The match ends at the first closing parenthesis, so `((hello)`
    captures `(hello`. The group must contain at least one character.

    Returns:
        (tuple[int, Span]) Offset after the `)` and the text between
    """
    if not source.startswith("(", pos):
        raise ParseError("Expected '('", pos)
    start = pos + 1
    close = source.find(")", start)
    if close < 0:
        raise ParseError("Unterminated '('", len(source))
    if close == start:
        raise ParseError("Empty parenthesis", start)
    return close + 1, Span(source, start, close)


def parse_braced_balanced(source, pos):
    """Match text inside braces, tracking nested braces.

    The match ends when the brace depth returns to zero. The inner text
    is returned verbatim with any nested braces.

    Returns:
        (tuple[int, Span]) Offset after the final `}` and the text between

    Raises:
        ParseError: No `{` at the offset, or the braces never balance
    """
    if not source.startswith("{", pos):
        raise ParseError("Expected '{'", pos)
    depth = 1
    size = len(source)
    index = pos + 1
    while index < size:
        c = source[index]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return index + 1, Span(source, pos + 1, index)
        index += 1
    raise ParseError("Unbalanced '{'", size)
