"""Views into source text.

Parsed records never hold copies of the source. Every piece of text is a
`Span` that references the source buffer by offset. Python strings are
immutable, so holding the buffer is enough to keep every span valid for as
long as the record that owns it.
"""

__all__ = ["Span", "line_column"]


class Span:
    """Read-only view of a slice of a source buffer.

    A span compares equal to another span or a plain string with the same
    text, which keeps tests and lookups simple.

    Args:
        source: (str) The complete source buffer
        start: (int) Offset of the first character
        end: (int) Offset after the last character

    Attributes:
        source: (str) The complete source buffer
        start: (int) Offset of the first character
        end: (int) Offset after the last character
    """

    __slots__ = ("source", "start", "end")

    def __init__(self, source, start, end):
        if not 0 <= start <= end <= len(source):
            raise ValueError(f"Span {start}:{end} outside of source")
        self.source = source
        self.start = start
        self.end = end

    @property
    def text(self):
        """(str) Copy of the referenced text."""
        return self.source[self.start:self.end]

    @property
    def line_column(self):
        """(tuple[int, int]) One based line and column of the start."""
        return line_column(self.source, self.start)

    def __str__(self):
        return self.source[self.start:self.end]

    def __repr__(self):
        return f"Span({self.text!r}, {self.start}, {self.end})"

    def __format__(self, spec):
        return format(self.text, spec)

    def __len__(self):
        return self.end - self.start

    def __eq__(self, other):
        if isinstance(other, Span):
            return self.text == other.text
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self):
        return hash(self.text)

    def startswith(self, prefix):
        return self.source.startswith(prefix, self.start, self.end)

    def endswith(self, suffix):
        return self.source.endswith(suffix, self.start, self.end)

    def strip(self):
        """Span without leading and trailing whitespace."""
        start, end = self.start, self.end
        while start < end and self.source[start].isspace():
            start += 1
        while end > start and self.source[end - 1].isspace():
            end -= 1
        return Span(self.source, start, end)

    def removesuffix(self, suffix):
        """Span without one trailing copy of suffix, if present."""
        if suffix and self.endswith(suffix):
            return Span(self.source, self.start, self.end - len(suffix))
        return self

    def split(self, sep):
        """Split on every occurrence of sep, like `str.split(sep)`.

        Empty fields are kept, so consecutive separators produce empty
        spans just as the string method does.
        """
        if not sep:
            raise ValueError("empty separator")
        parts = []
        start = self.start
        while True:
            found = self.source.find(sep, start, self.end)
            if found < 0:
                parts.append(Span(self.source, start, self.end))
                return parts
            parts.append(Span(self.source, start, found))
            start = found + len(sep)

    def splitlines(self):
        """Split on newline characters, keeping empty leading and trailing lines."""
        return self.split("\n")


def line_column(source, position):
    """Convert an offset into a one based (line, column) pair.

    Args:
        source: (str) Source buffer
        position: (int) Offset into the buffer, may equal its length

    Returns:
        (tuple[int, int]) Line and column numbers
    """
    position = max(0, min(position, len(source)))
    line = source.count("\n", 0, position) + 1
    line_start = source.rfind("\n", 0, position) + 1
    return line, position - line_start + 1
