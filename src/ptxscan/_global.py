"""Global variable declarations.

    .global .align 4 .b8 buffer[64];
    .visible .const .align 4 .f32 coeffs[2] = {1.0, 2.0};

The initializer is kept as opaque text.
"""

__all__ = ["Global", "LINKAGES", "STATE_SPACES", "parse_global"]

from dataclasses import dataclass, field

import lark

from ._error import ParseError
from ._grammar import parse_slice, token_span
from ._text import Span


LINKAGES = (".visible", ".extern", ".weak", ".common")
STATE_SPACES = (".global", ".const", ".shared", ".local")


@dataclass(frozen=True)
class Global:
    """A global variable declaration.

    Attributes:
        linkage: (Span | None) Linkage directive, like `.visible`
        state_space: (Span) State space, like `.global` or `.shared`
        align: (int | None) Alignment in bytes
        vector: (Span | None) Vector width directive, like `.v4`
        ty: (Span) Element type, like `.b8`
        name: (Span) Variable name
        raw_string: (Span) Text of the whole declaration with the `;`
        dims: (list[int | None]) Array dimensions, None for `[]`
        initializer: (Span | None) Text after `=`
    """

    linkage: Span | None
    state_space: Span
    align: int | None
    vector: Span | None
    ty: Span
    name: Span
    raw_string: Span
    dims: list = field(default_factory=list)
    initializer: Span | None = None


def _global_extent(source, pos):
    """Find the end of a declaration, the first `;` outside of braces."""
    if not source.startswith(LINKAGES + STATE_SPACES, pos):
        raise ParseError("Expected global declaration", pos)
    depth = 0
    for index in range(pos, len(source)):
        c = source[index]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == ";" and depth <= 0:
            return index + 1
    raise ParseError("Unterminated global declaration", len(source))


def parse_global(source, pos):
    """Parse a global variable declaration ending with `;`.

    Returns:
        (tuple[int, Global]) Offset after the `;` and the declaration

    Raises:
        ParseError: The declaration does not match
    """
    end = _global_extent(source, pos)
    tree = parse_slice("global", source, pos, end)

    fields = {"linkage": None, "align": None, "vector": None, "dims": []}
    for node in tree.children:
        if isinstance(node, lark.Token):
            if node.type == "TYPE":
                fields["ty"] = token_span(node, source, pos)
            elif node.type == "NAME":
                fields["name"] = token_span(node, source, pos)
            continue
        match node.data:
            case "linkage" | "state_space" | "vector" | "initializer":
                fields[node.data] = token_span(node.children[0], source, pos)
            case "align":
                fields["align"] = int(node.children[0].value)
            case "dims":
                for dim in node.children:
                    fields["dims"].append(int(dim.children[0].value) if dim.children else None)

    return end, Global(raw_string=Span(source, pos, end), **fields)
