"""Parse a complete ptx module.

A module is a preamble followed by any number of function and global
declarations. `PtxParser` is a forward only cursor that decodes one
declaration each time it is advanced. `PtxFile` collects everything from
a cursor into lists.
"""

__all__ = [
    "PtxParser",
    "PtxFile",
    "parse_declaration",
    "parse_module",
    "read_module",
]

import logging
import pathlib
from dataclasses import dataclass, field

from ._comment import skip_comments_or_whitespace
from ._error import DecodeError, ParseError
from ._function import Function, parse_function
from ._global import Global, parse_global
from ._preamble import Preamble, parse_preamble
from ._text import Span


logger = logging.getLogger(__name__)


def parse_declaration(source, pos):
    """Parse a function or a global declaration at the offset.

    A function is tried first. Both grammars are tried at the same offset,
    when neither matches the error that got furthest is raised.

    Returns:
        (tuple[int, Function | Global]) Offset after the declaration and
        the declaration
    """
    try:
        return parse_function(source, pos)
    except ParseError as e:
        function_error = e
    try:
        return parse_global(source, pos)
    except ParseError as e:
        if (e.position or 0) >= (function_error.position or 0):
            raise
        raise function_error from None


class PtxParser:
    """Cursor over the declarations of a module.

    The preamble is parsed when the cursor is created. Iterating yields
    each Function or Global in source order. Whitespace and comments
    between declarations are skipped.

    Iteration stops cleanly when only whitespace and comments remain. Any
    other failure raises once from `next()`, after which the cursor is
    exhausted and only raises StopIteration.

    A cursor must only be advanced from one thread at a time.

    Args:
        source: (str) Complete module text

    Attributes:
        source: (str) Complete module text
        preamble: (Preamble) The parsed module preamble

    Raises:
        ParseError: The module does not start with a valid preamble
    """

    __slots__ = ("source", "preamble", "_pos")

    def __init__(self, source):
        pos, preamble = parse_preamble(source, 0)
        self.source = source
        self.preamble = preamble
        self._pos = pos
        logger.debug(f"Preamble version {preamble.version} ends at offset {pos}")

    def __repr__(self):
        state = "done" if self._pos is None else f"at {self._pos}"
        return f"PtxParser<{state}>"

    @property
    def remaining(self):
        """(Span | None) Unparsed text, None once the cursor is done."""
        if self._pos is None:
            return None
        return Span(self.source, self._pos, len(self.source))

    @property
    def done(self):
        """(bool) The cursor has been exhausted."""
        return self._pos is None

    def __iter__(self):
        return self

    def __next__(self):
        if self._pos is None:
            raise StopIteration
        pos = skip_comments_or_whitespace(self.source, self._pos)
        if pos >= len(self.source):
            logger.debug(f"End of module at offset {pos}")
            self._pos = None
            raise StopIteration
        try:
            pos, declaration = parse_declaration(self.source, pos)
        except (ParseError, DecodeError) as e:
            logger.debug(f"Declaration failed at offset {e.position}: {e.message}")
            self._pos = None
            raise
        logger.debug(f"Parsed {type(declaration).__name__} ending at offset {pos}")
        self._pos = pos
        return declaration


@dataclass
class PtxFile:
    """All declarations of a module.

    Attributes:
        preamble: (Preamble) The module preamble
        functions: (list[Function]) Functions in source order
        globals: (list[Global]) Global variables in source order
        declarations: (list[Function | Global]) Everything in source order
    """

    preamble: Preamble
    functions: list = field(default_factory=list)
    globals: list = field(default_factory=list)
    declarations: list = field(default_factory=list)

    @classmethod
    def from_parser(cls, parser):
        """Consume the rest of a cursor."""
        ptx = cls(parser.preamble)
        for declaration in parser:
            ptx.declarations.append(declaration)
            if isinstance(declaration, Function):
                ptx.functions.append(declaration)
            elif isinstance(declaration, Global):
                ptx.globals.append(declaration)
        return ptx

    @classmethod
    def from_text(cls, source):
        """Parse a whole module.

        Raises:
            ParseError: The text is not a valid module
            DecodeError: A parameter type is unknown
        """
        return cls.from_parser(PtxParser(source))


def parse_module(source):
    """Create a cursor over module text."""
    return PtxParser(source)


def read_module(path):
    """Read a module file and create a cursor over it.

    Args:
        path: (str | pathlib.Path) Path to a .ptx file

    Returns:
        (PtxParser) Cursor positioned after the preamble
    """
    source = pathlib.Path(path).read_text(encoding="utf-8")
    return PtxParser(source)
