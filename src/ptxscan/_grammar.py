"""Lark grammars for the simple directive parsers.

The preamble and global declarations have a flat, regular grammar that is
described in the `lark/*.lark` files next to this module. The text handed
to lark is always a slice that was already delimited by the hand written
scanners, positions in the resulting tree are relative to that slice.
"""

__all__ = ["lark_parser", "parse_slice", "token_span"]

import lark

from ._error import ParseError
from ._text import Span


_parsers = {}


def lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="lalr", propagate_positions=True
    )
    _parsers[name] = parser
    return parser


def parse_slice(name, source, start, end):
    """Parse `source[start:end]` with the named grammar.

    Lark failures are converted into ParseError with the offset moved
    back into the full source.

    Returns:
        (lark.Tree) Parse tree with positions relative to `start`
    """
    parser = lark_parser(name)
    try:
        return parser.parse(source[start:end])
    except lark.UnexpectedInput as e:
        offset = getattr(e, "pos_in_stream", None)
        position = end if offset is None or offset < 0 else start + offset
        raise ParseError(f"Invalid {name}: {_describe(e)}", position) from e


def _describe(error):
    if isinstance(error, lark.UnexpectedToken):
        return f"unexpected {error.token.type} {error.token.value!r}"
    if isinstance(error, lark.UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    return "unexpected end of input"


def token_span(token, source, base):
    """Create a Span for a lark Token parsed from a slice at base."""
    return Span(source, base + token.start_pos, base + token.end_pos)

