"""
Bencode decoder for BitTorrent metainfo and tracker responses.

Runs the lexer over the whole buffer, then the parser over the tokens.
Failures from either stage come out as BencodeDecodeError tagged with
the stage name.
"""
import logging

from .errors import BencodeDecodeError, LexError, ParseError
from .lexer import tokenize
from .limits import MAX_DEPTH
from .parser import parse
from .structure import BencodeType

logger = logging.getLogger(__name__)


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.
    """
    def __init__(self, max_depth: int = MAX_DEPTH, allow_duplicate_keys: bool = False):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self.allow_duplicate_keys = allow_duplicate_keys

    def decode(self, data: bytes) -> BencodeType:
        """Decodes one complete bencoded value from `data`."""
        try:
            tokens = tokenize(data)
        except LexError as exc:
            logger.debug(f"Lexer rejected input: {exc}")
            raise BencodeDecodeError("lexer", exc) from exc

        try:
            return parse(
                tokens,
                max_depth=self.max_depth,
                allow_duplicate_keys=self.allow_duplicate_keys,
            )
        except ParseError as exc:
            logger.debug(f"Parser rejected input: {exc}")
            raise BencodeDecodeError("parser", exc) from exc


def decode(data: bytes, *, max_depth: int = MAX_DEPTH, allow_duplicate_keys: bool = False):
    """
    Convenience function to decode Bencoded data.
    """
    return BencodeDecoder(max_depth, allow_duplicate_keys).decode(data)


def decode_str(text: str, *, max_depth: int = MAX_DEPTH, allow_duplicate_keys: bool = False):
    """Decodes bencoded text, taking its UTF-8 bytes as the input buffer."""
    return decode(
        text.encode(),
        max_depth=max_depth,
        allow_duplicate_keys=allow_duplicate_keys,
    )
