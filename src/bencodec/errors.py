"""
Exception hierarchy for bencode decoding.

Lexer errors report the byte offset of the token that could not be read.
Parser errors report the offending token where there is one.
"""
from typing import Optional


class BencodeError(Exception):
    """Base class for every error raised by this package."""


# ------------------------------------------------------------
#   Lexer errors
# ------------------------------------------------------------

class LexError(BencodeError):
    """Raised when the raw buffer cannot be split into tokens."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


class InvalidInteger(LexError):
    def __init__(self, offset: int, reason: str = "malformed integer"):
        super().__init__(f"Invalid integer ({reason})", offset)
        self.reason = reason


class IntegerOverflow(InvalidInteger):
    def __init__(self, offset: int, literal: bytes):
        super().__init__(offset, "value outside the signed 64-bit range")
        self.literal = literal


class InvalidLength(LexError):
    def __init__(self, offset: int, reason: str = "malformed length prefix"):
        super().__init__(f"Invalid byte string length ({reason})", offset)
        self.reason = reason


class TruncatedByteString(LexError):
    def __init__(self, offset: int, declared: Optional[int], available: int):
        # declared is None when the length prefix is too long to convert
        shown = declared if declared is not None else "more"
        super().__init__(
            f"Byte string declares {shown} bytes but only {available} remain",
            offset,
        )
        self.declared = declared
        self.available = available


class UnrecognizedLeadingByte(LexError):
    def __init__(self, offset: int, byte: int):
        super().__init__(f"Unrecognized leading byte {bytes([byte])!r}", offset)
        self.byte = byte


class EmptyInput(LexError):
    def __init__(self, offset: int):
        super().__init__("No input left to read a token from", offset)


# ------------------------------------------------------------
#   Parser errors
# ------------------------------------------------------------

class ParseError(BencodeError):
    """Raised when a token sequence does not form a single bencode value."""

    def __init__(self, message: str, token=None):
        if token is not None:
            message = f"{message} (token {token.kind.name} at offset {token.offset})"
        super().__init__(message)
        self.token = token


class NoTokens(ParseError):
    def __init__(self):
        super().__init__("There are no tokens to parse")


class UnexpectedEnd(ParseError):
    def __init__(self, token):
        super().__init__("End marker where a value was expected", token)


class UnterminatedList(ParseError):
    def __init__(self, token):
        super().__init__("List is missing its end marker", token)


class InvalidDictionaryKey(ParseError):
    def __init__(self, token):
        super().__init__("Dictionary keys must be byte strings", token)


class UnterminatedDictionary(ParseError):
    def __init__(self, token):
        super().__init__("Dictionary is missing its end marker", token)


class MaxDepthExceeded(ParseError):
    def __init__(self, token, max_depth: int):
        super().__init__(f"Nesting deeper than {max_depth} containers", token)
        self.max_depth = max_depth


class DuplicateDictionaryKey(ParseError):
    def __init__(self, token, key: bytes):
        super().__init__(f"Duplicate dictionary key {key!r}", token)
        self.key = key


class TrailingTokens(ParseError):
    def __init__(self, token):
        super().__init__("Extra data after the root value", token)


# ------------------------------------------------------------
#   Public boundary
# ------------------------------------------------------------

class BencodeDecodeError(BencodeError):
    """
    Raised by decode(). Tags which stage failed ("lexer" or "parser")
    and keeps the stage error in .error (also chained as __cause__).
    """

    def __init__(self, stage: str, error: BencodeError):
        super().__init__(f"{stage.capitalize()} error: {error}")
        self.stage = stage
        self.error = error
