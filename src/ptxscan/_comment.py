"""Comments and whitespace.

Comments are treated exactly like whitespace by the rest of the grammar.
Both `// line` and `/* block */` forms are recognized. Block comments end
at the first `*/` and do not nest.
"""

__all__ = [
    "Comment",
    "parse_comment",
    "comment_or_whitespace",
    "many1_comments_or_whitespace",
    "skip_comments_or_whitespace",
]

from dataclasses import dataclass

from ._error import ParseError
from ._scan import parse_multispace1
from ._text import Span


@dataclass(frozen=True)
class Comment:
    """A comment found in the source.

    Attributes:
        kind: (str) Either Comment.LINE or Comment.BLOCK
        text: (Span) Text after `//` up to the line break, or between
            `/*` and `*/`
    """

    LINE = "line"
    BLOCK = "block"

    kind: str
    text: Span


def parse_comment(source, pos):
    """Match a single line or block comment.

    A line comment stops before the line break, leaving it for the next
    scan. A lone `/` is not a comment and raises without consuming.

    Returns:
        (tuple[int, Comment]) Offset after the comment and the comment
    """
    if not source.startswith("/", pos):
        raise ParseError("Expected comment", pos)
    start = pos + 2
    if source.startswith("/", pos + 1):
        end = source.find("\n", start)
        if end < 0:
            end = len(source)
        return end, Comment(Comment.LINE, Span(source, start, end))
    if source.startswith("*", pos + 1):
        end = source.find("*/", start)
        if end < 0:
            raise ParseError("Unterminated block comment", len(source))
        return end + 2, Comment(Comment.BLOCK, Span(source, start, end))
    raise ParseError("Expected comment", pos)


def comment_or_whitespace(source, pos):
    """Match one run of whitespace or one comment.

    Returns:
        (tuple[int, Span]) Offset after the match and the whitespace or
        comment text
    """
    try:
        return parse_multispace1(source, pos)
    except ParseError:
        pass
    end, comment = parse_comment(source, pos)
    return end, comment.text


def many1_comments_or_whitespace(source, pos):
    """Match as many whitespace runs and comments as possible.

    Args:
        source: (str) Source buffer
        pos: (int) Offset to start matching

    Returns:
        (tuple[int, int]) Offset after the last match and the number of
        whitespace runs and comments matched

    Raises:
        ParseError: Neither whitespace nor a comment at the offset
    """
    pos, _ = comment_or_whitespace(source, pos)
    count = 1
    while True:
        try:
            pos, _ = comment_or_whitespace(source, pos)
        except ParseError:
            return pos, count
        count += 1


def skip_comments_or_whitespace(source, pos):
    """Optional form of many1_comments_or_whitespace, returns the new offset."""
    try:
        pos, _ = many1_comments_or_whitespace(source, pos)
    except ParseError:
        pass
    return pos
