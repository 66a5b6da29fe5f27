"""Module preamble.

The preamble is the block of header directives at the start of every ptx
module. It must appear before any declaration.

    .version 8.0
    .target sm_80
    .address_size 64
"""

__all__ = ["Preamble", "PREAMBLE_DIRECTIVES", "parse_preamble"]

from dataclasses import dataclass

from ._comment import parse_comment, skip_comments_or_whitespace
from ._error import ParseError
from ._grammar import parse_slice, token_span
from ._text import Span


PREAMBLE_DIRECTIVES = (".version", ".target", ".address_size")


@dataclass(frozen=True)
class Preamble:
    """Header directives of a module.

    Attributes:
        version: (Span) ISA version number, like `8.0`
        targets: (list[Span]) Target architecture and options, like `sm_80`
        address_size: (Span | None) Address size in bits when declared
        raw_string: (Span) Text of all preamble directives
    """

    version: Span
    targets: list
    address_size: Span | None
    raw_string: Span

    @property
    def address_bits(self):
        """(int | None) Address size as a number."""
        if self.address_size is None:
            return None
        return int(self.address_size.text)


def _line_end(source, pos):
    """Find the line break ending a directive, stepping over comments."""
    size = len(source)
    while pos < size and source[pos] != "\n":
        if source.startswith(("//", "/*"), pos):
            pos, _ = parse_comment(source, pos)
        else:
            pos += 1
    return pos


def _preamble_extent(source, pos):
    """Find the end of the last consecutive preamble directive line."""
    end = pos
    scan = pos
    while True:
        scan = skip_comments_or_whitespace(source, scan)
        if not source.startswith(PREAMBLE_DIRECTIVES, scan):
            return end
        scan = _line_end(source, scan)
        end = scan


def parse_preamble(source, pos):
    """Parse the module preamble.

    Returns:
        (tuple[int, Preamble]) Offset after the preamble and the preamble

    Raises:
        ParseError: There is no preamble or it is malformed
    """
    start = skip_comments_or_whitespace(source, pos)
    end = _preamble_extent(source, start)
    if end == start:
        raise ParseError("Expected .version directive", start)

    tree = parse_slice("preamble", source, start, end)
    version = None
    targets = []
    address_size = None
    for node in tree.children:
        tokens = [token_span(t, source, start) for t in node.children]
        if node.data == "version":
            version = tokens[0]
        elif node.data == "target":
            targets = tokens
        elif node.data == "address_size":
            address_size = tokens[0]

    preamble = Preamble(
        version=version,
        targets=targets,
        address_size=address_size,
        raw_string=Span(source, start, end),
    )
    return end, preamble
