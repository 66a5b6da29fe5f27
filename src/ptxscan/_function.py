"""Function declarations.

A function is a signature followed by either `;` or a brace delimited
body. The body is kept as opaque text, nested braces included.

    .visible .entry _Z6kernelPiS_i(
        .param .u64 _Z6kernelPiS_i_param_0,
        .param .u32 _Z6kernelPiS_i_param_1
    )
    {
        ...
    }
"""

__all__ = [
    "PARAM_SIZES",
    "Function",
    "FunctionSignature",
    "FunctionBody",
    "ReturnValue",
    "Parameters",
    "Parameter",
    "parse_function",
    "parse_function_signature",
    "parse_function_body",
]

from dataclasses import dataclass, field

from ._comment import skip_comments_or_whitespace
from ._error import DecodeError, ParseError
from ._scan import (
    parse_braced_balanced,
    parse_name,
    parse_parenthesized_naive,
    parse_space0,
    parse_space1,
    parse_tag,
)
from ._text import Span


# Byte size of each parameter type suffix
PARAM_SIZES = {
    ".s8": 1,
    ".s16": 2,
    ".s32": 4,
    ".s64": 8,
    ".u8": 1,
    ".u16": 2,
    ".u32": 4,
    ".u64": 8,
    ".f16": 2,
    ".f16x2": 4,
    ".f32": 4,
    ".f64": 8,
    ".b8": 1,
    ".b16": 2,
    ".b32": 4,
    ".b64": 8,
    ".b128": 16,
}


@dataclass(frozen=True)
class ReturnValue:
    """Text inside the return value clause, `(.param .b64 func_retval0)`."""

    raw_string: Span


@dataclass(frozen=True)
class Parameter:
    """A single decoded function parameter.

    Attributes:
        name: (Span) Parameter name
        ty: (Span) Type suffix, like `.b64`
        size: (int) Size in bytes of the type
        raw_string: (Span) The parameter text without its trailing comma
    """

    name: Span
    ty: Span
    size: int
    raw_string: Span


@dataclass
class Parameters:
    """The parameter group of a function signature.

    Created with the raw group text and an empty list, then filled in
    by `decode`. Decoding again replaces the list rather than extending it.

    Attributes:
        raw_string: (Span) Text between the parenthesis
        params: (list[Parameter]) Decoded parameters in source order
    """

    raw_string: Span
    params: list = field(default_factory=list)

    def decode(self):
        """Decode one parameter from each line of the raw text.

        A line decodes when, after trimming whitespace and a trailing
        comma, it has exactly three space separated fields. Other lines
        are skipped. The second field is the type and the third is the
        name.

        Raises:
            DecodeError: A type suffix is not in PARAM_SIZES
        """
        params = []
        for line in self.raw_string.splitlines():
            line = line.strip().removesuffix(",")
            parts = line.split(" ")
            if len(parts) != 3:
                continue
            ty = parts[1]
            name = parts[2]
            size = PARAM_SIZES.get(ty.text)
            if size is None:
                raise DecodeError(f"Unknown type: {ty.text}", ty.start, ty.text)
            params.append(Parameter(name=name, ty=ty, size=size, raw_string=line))
        self.params = params
        return self


@dataclass(frozen=True)
class FunctionSignature:
    """Everything in a function declaration before the body.

    Attributes:
        visible: (bool) Declared with `.visible`
        entry: (bool) Declared as a kernel `.entry`
        return_value: (ReturnValue | None) Return value clause
        name: (Span) Function name
        parameters: (Parameters | None) Parameter group
    """

    visible: bool
    entry: bool
    return_value: ReturnValue | None
    name: Span
    parameters: Parameters | None


@dataclass(frozen=True)
class FunctionBody:
    """Opaque text of a function body, without the outer braces."""

    body: Span | None


@dataclass(frozen=True)
class Function:
    """A function declaration or definition.

    Attributes:
        signature: (FunctionSignature) The signature
        body: (FunctionBody | None) None when the declaration ends with `;`
    """

    signature: FunctionSignature
    body: FunctionBody | None


def _parse_linkage(source, pos):
    """Match `.visible .entry` or `.func`, returning (visible, entry)."""
    try:
        end, _ = parse_tag(source, pos, ".visible")
        end, _ = parse_space1(source, end)
        end, _ = parse_tag(source, end, ".entry")
        return end, (True, True)
    except ParseError:
        pass
    end, _ = parse_tag(source, pos, ".func")
    return end, (False, False)


def parse_function_signature(source, pos):
    """Parse a function signature.

    Returns:
        (tuple[int, FunctionSignature]) Offset after the signature and
        the signature

    Raises:
        ParseError: The signature does not match
        DecodeError: A parameter type is unknown
    """
    pos, (visible, entry) = _parse_linkage(source, pos)
    pos, _ = parse_space1(source, pos)

    return_value = None
    try:
        pos, raw_string = parse_parenthesized_naive(source, pos)
        return_value = ReturnValue(raw_string)
    except ParseError:
        pass

    pos, _ = parse_space0(source, pos)
    pos, name = parse_name(source, pos)
    pos = skip_comments_or_whitespace(source, pos)

    parameters = None
    try:
        pos, raw_string = parse_parenthesized_naive(source, pos)
    except ParseError:
        pass
    else:
        parameters = Parameters(raw_string).decode()

    signature = FunctionSignature(
        visible=visible,
        entry=entry,
        return_value=return_value,
        name=name,
        parameters=parameters,
    )
    return pos, signature


def parse_function_body(source, pos):
    """Parse a brace delimited function body."""
    pos, raw_string = parse_braced_balanced(source, pos)
    return pos, FunctionBody(raw_string)


def parse_function(source, pos):
    """Parse a function signature followed by `;` or a body.

    Returns:
        (tuple[int, Function]) Offset after the function and the function
    """
    pos, signature = parse_function_signature(source, pos)
    pos = skip_comments_or_whitespace(source, pos)
    if source.startswith(";", pos):
        return pos + 1, Function(signature, None)
    try:
        pos, body = parse_function_body(source, pos)
    except ParseError as e:
        raise ParseError("Expected ';' or function body", e.position) from e
    return pos, Function(signature, body)
