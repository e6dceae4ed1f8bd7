"""
Bencode lexer: splits a raw byte buffer into flat tokens.

Nesting is not resolved here. Lists and dictionaries show up as
LIST_OPEN / DICT_OPEN ... END markers and the parser rebuilds the tree.
"""
import logging
import re
from enum import IntEnum
from typing import List, NamedTuple, Optional, Union

from .errors import (
    EmptyInput,
    IntegerOverflow,
    InvalidInteger,
    InvalidLength,
    TruncatedByteString,
    UnrecognizedLeadingByte,
)
from .limits import DICT_MARKER, END_MARKER, INT_MARKER, INT_MAX, INT_MIN, LIST_MARKER

logger = logging.getLogger(__name__)

# "i" [-] digits "e"; canonical form is checked after the match
_INTEGER_RE = re.compile(rb"i(-?)([0-9]+)e")
# longest well-formed start of an integer token
_INTEGER_PREFIX_RE = re.compile(rb"i-?[0-9]*")
# digits ":"
_LENGTH_RE = re.compile(rb"([0-9]+):")

# len(str(INT_MAX)), anything longer cannot fit
_MAX_DIGITS = 19


class TokenKind(IntEnum):
    """Kinds of tokens produced by the lexer."""
    DICT_OPEN = 0
    LIST_OPEN = 1
    END = 2
    INTEGER = 3
    BYTE_STRING = 4


class Token(NamedTuple):
    """
    One lexical unit.

    value is the int for INTEGER, the payload bytes for BYTE_STRING and
    None otherwise. shift is the number of bytes the reader consumed.
    """
    kind: TokenKind
    value: Optional[Union[int, bytes]]
    offset: int
    shift: int

    @property
    def end(self) -> int:
        return self.offset + self.shift


_SINGLE_BYTE_KINDS = {
    DICT_MARKER[0]: TokenKind.DICT_OPEN,
    LIST_MARKER[0]: TokenKind.LIST_OPEN,
    END_MARKER[0]: TokenKind.END,
}


# --------------------------
# Single token readers
# --------------------------

def _read_int(buffer: bytes, offset: int) -> Token:
    m = _INTEGER_RE.match(buffer, offset)
    if m is None:
        stop = _INTEGER_PREFIX_RE.match(buffer, offset).end()
        if stop >= len(buffer):
            raise InvalidInteger(offset, "missing terminator")
        raise InvalidInteger(offset, "empty or non-numeric digits")

    sign, digits = m.group(1), m.group(2)
    if len(digits) > 1 and digits[0:1] == b"0":
        raise InvalidInteger(offset, "leading zero")
    if sign and digits == b"0":
        raise InvalidInteger(offset, "negative zero")
    if len(digits) > _MAX_DIGITS:
        raise IntegerOverflow(offset, sign + digits)

    num = int(sign + digits)
    if not INT_MIN <= num <= INT_MAX:
        raise IntegerOverflow(offset, sign + digits)

    return Token(TokenKind.INTEGER, num, offset, m.end() - offset)


def _read_byte_string(buffer: bytes, offset: int) -> Token:
    m = _LENGTH_RE.match(buffer, offset)
    if m is None:
        raise InvalidLength(offset, "expected digits followed by ':'")

    digits = m.group(1)
    if len(digits) > 1 and digits[0:1] == b"0":
        raise InvalidLength(offset, "leading zero")
    start = m.end()
    available = len(buffer) - start
    if len(digits) > _MAX_DIGITS:
        # longer than any buffer could be
        raise TruncatedByteString(offset, None, available)

    length = int(digits)
    # check before slicing so a crafted prefix cannot over-read
    if length > available:
        raise TruncatedByteString(offset, length, available)

    payload = buffer[start:start + length]
    return Token(TokenKind.BYTE_STRING, payload, offset, start + length - offset)


def read_token(buffer: bytes, offset: int = 0) -> Token:
    """
    Reads the single token starting at `offset`.
    Raises EmptyInput if there is nothing left to read.
    """
    if offset >= len(buffer):
        raise EmptyInput(offset)

    lead = buffer[offset]

    kind = _SINGLE_BYTE_KINDS.get(lead)
    if kind is not None:
        return Token(kind, None, offset, 1)

    if lead == INT_MARKER[0]:
        return _read_int(buffer, offset)

    if 0x30 <= lead <= 0x39:  # '0'..'9' starts a length prefix
        return _read_byte_string(buffer, offset)

    raise UnrecognizedLeadingByte(offset, lead)


def tokenize(buffer: bytes) -> List[Token]:
    """
    Splits the whole buffer into tokens in one left-to-right pass.
    An empty buffer gives an empty list.
    """
    if isinstance(buffer, str):
        raise TypeError("tokenize() needs bytes; use decode_str() for text")
    if not isinstance(buffer, bytes):
        buffer = bytes(buffer)

    tokens = []
    cursor = 0
    while cursor < len(buffer):
        token = read_token(buffer, cursor)
        tokens.append(token)
        cursor = token.end

    logger.debug(f"Tokenized {len(buffer)} bytes into {len(tokens)} tokens")
    return tokens
