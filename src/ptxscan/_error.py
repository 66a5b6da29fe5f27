"""Error classes and helpers"""

__all__ = ["ParseError", "DecodeError"]


class ParseError(Exception):
    """Exception raised when grammar does not match the source.

    Also used for unterminated groups and braces, in which case the
    position is the end of the source.

    Args:
        message: (str) Error description
        position: (int | None) Offset in the source where matching failed

    Attributes:
        message: (str) Error description
        position: (int | None) Offset in the source where matching failed
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)


class DecodeError(Exception):
    """Exception raised when matched text cannot be decoded.

    This is not a ParseError, alternatives in the grammar will never
    swallow it and try a different rule.

    Args:
        message: (str) Error description
        position: (int | None) Offset of the text that failed to decode
        suffix: (str | None) The unrecognized type suffix

    Attributes:
        message: (str) Error description
        position: (int | None) Offset of the text that failed to decode
        suffix: (str | None) The unrecognized type suffix
    """

    def __init__(self, message, position=None, suffix=None):
        self.message = message
        self.position = position
        self.suffix = suffix
        super().__init__(message)
