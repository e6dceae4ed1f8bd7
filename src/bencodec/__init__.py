"""
Bencode codec: lexer, parser and canonical encoder for BitTorrent data.
"""
from .decoder import BencodeDecoder, decode, decode_str
from .encoder import encode
from .errors import (
    BencodeDecodeError,
    BencodeError,
    DuplicateDictionaryKey,
    EmptyInput,
    IntegerOverflow,
    InvalidDictionaryKey,
    InvalidInteger,
    InvalidLength,
    LexError,
    MaxDepthExceeded,
    NoTokens,
    ParseError,
    TrailingTokens,
    TruncatedByteString,
    UnexpectedEnd,
    UnrecognizedLeadingByte,
    UnterminatedDictionary,
    UnterminatedList,
)
from .lexer import Token, TokenKind, read_token, tokenize
from .parser import parse
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, wrap

__all__ = [
    'decode', 'decode_str', 'encode', 'BencodeDecoder',
    'tokenize', 'read_token', 'parse', 'Token', 'TokenKind',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict', 'wrap',
    'BencodeError', 'BencodeDecodeError', 'LexError', 'ParseError',
    'InvalidInteger', 'IntegerOverflow', 'InvalidLength', 'TruncatedByteString',
    'UnrecognizedLeadingByte', 'EmptyInput',
    'NoTokens', 'UnexpectedEnd', 'UnterminatedList', 'InvalidDictionaryKey',
    'UnterminatedDictionary', 'MaxDepthExceeded', 'DuplicateDictionaryKey', 'TrailingTokens',
]
