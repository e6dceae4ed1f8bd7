"""
Bencode parser: rebuilds the value tree from the lexer's flat tokens.

Open lists and dictionaries are kept on an explicit frame stack rather
than the Python call stack, so nesting depth is bounded by max_depth.
"""
import logging
from typing import List, Sequence

from .errors import (
    DuplicateDictionaryKey,
    InvalidDictionaryKey,
    MaxDepthExceeded,
    NoTokens,
    TrailingTokens,
    UnexpectedEnd,
    UnterminatedDictionary,
    UnterminatedList,
)
from .lexer import Token, TokenKind
from .limits import MAX_DEPTH
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)


class _ListFrame:
    """A list whose END token has not been seen yet."""

    def __init__(self, token: Token):
        self.token = token
        self.items = []

    def expects_key(self) -> bool:
        return False

    def expects_value(self) -> bool:
        return False

    def add(self, value: BencodeType):
        self.items.append(value)

    def close(self) -> BencodeType:
        return BencodeList(self.items)

    def unterminated(self):
        return UnterminatedList(self.token)


class _DictFrame:
    """A dictionary whose END token has not been seen yet."""

    def __init__(self, token: Token, allow_duplicate_keys: bool):
        self.token = token
        self.items = {}
        self.key = None
        self.allow_duplicate_keys = allow_duplicate_keys

    def expects_key(self) -> bool:
        return self.key is None

    def expects_value(self) -> bool:
        return self.key is not None

    def set_key(self, token: Token):
        if token.value in self.items and not self.allow_duplicate_keys:
            raise DuplicateDictionaryKey(token, token.value)
        self.key = token.value

    def add(self, value: BencodeType):
        # last write wins when duplicates are allowed
        self.items[self.key] = value
        self.key = None

    def close(self) -> BencodeType:
        return BencodeDict(self.items)

    def unterminated(self):
        return UnterminatedDictionary(self.token)


def _scalar(token: Token) -> BencodeType:
    if token.kind is TokenKind.INTEGER:
        return BencodeInt(token.value)
    return BencodeString(token.value)


def parse(
    tokens: Sequence[Token],
    *,
    max_depth: int = MAX_DEPTH,
    allow_duplicate_keys: bool = False,
) -> BencodeType:
    """
    Builds exactly one value from the token sequence.

    Raises a ParseError subclass if the tokens are empty, unbalanced,
    use a non-string dictionary key, nest deeper than max_depth, or
    continue past the root value.
    """
    if not tokens:
        raise NoTokens()

    # reversed so the next token is popped from the end
    pending: List[Token] = list(reversed(tokens))
    stack = []

    while pending:
        token = pending.pop()
        frame = stack[-1] if stack else None

        if token.kind is TokenKind.END:
            if frame is None or frame.expects_value():
                raise UnexpectedEnd(token)
            stack.pop()
            value = frame.close()

        elif frame is not None and frame.expects_key():
            if token.kind is not TokenKind.BYTE_STRING:
                raise InvalidDictionaryKey(token)
            frame.set_key(token)
            continue

        elif token.kind in (TokenKind.LIST_OPEN, TokenKind.DICT_OPEN):
            if len(stack) >= max_depth:
                raise MaxDepthExceeded(token, max_depth)
            if token.kind is TokenKind.LIST_OPEN:
                stack.append(_ListFrame(token))
            else:
                stack.append(_DictFrame(token, allow_duplicate_keys))
            continue

        else:
            value = _scalar(token)

        if stack:
            stack[-1].add(value)
            continue

        # root value complete
        if pending:
            raise TrailingTokens(pending[-1])
        logger.debug(f"Parsed {len(tokens)} tokens into {type(value).__name__}")
        return value

    raise stack[-1].unterminated()
