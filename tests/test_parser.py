import pytest

from bencodec.errors import (
    DuplicateDictionaryKey,
    InvalidDictionaryKey,
    MaxDepthExceeded,
    NoTokens,
    TrailingTokens,
    UnexpectedEnd,
    UnterminatedDictionary,
    UnterminatedList,
)
from bencodec.lexer import Token, TokenKind, tokenize
from bencodec.parser import parse
from bencodec.structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def tok(kind, value=None):
    # offsets are irrelevant when feeding the parser directly
    return Token(kind, value, 0, 1)


DICT = tok(TokenKind.DICT_OPEN)
LIST = tok(TokenKind.LIST_OPEN)
END = tok(TokenKind.END)


def integer(n):
    return tok(TokenKind.INTEGER, n)


def string(s):
    return tok(TokenKind.BYTE_STRING, s)


def test_parse_list():
    tokens = [LIST, integer(55), string(b"str"), END]
    assert parse(tokens) == BencodeList([BencodeInt(55), BencodeString(b"str")])


def test_parse_nested_list():
    tokens = [LIST, integer(55), LIST, string(b"str"), END, END]
    assert parse(tokens) == BencodeList([
        BencodeInt(55),
        BencodeList([BencodeString(b"str")]),
    ])


def test_parse_nested_dict():
    tokens = [
        DICT,
        string(b"bar"), string(b"spam"),
        string(b"foo"), DICT, string(b"nested"), integer(-123), END,
        END,
    ]
    assert parse(tokens) == BencodeDict({
        b"bar": BencodeString(b"spam"),
        b"foo": BencodeDict({b"nested": BencodeInt(-123)}),
    })


def test_parse_empty_containers():
    assert parse([DICT, END]) == BencodeDict({})
    assert parse([LIST, DICT, END, LIST, END, END]) == BencodeList([
        BencodeDict({}),
        BencodeList([]),
    ])


def test_no_tokens():
    with pytest.raises(NoTokens):
        parse([])


def test_bare_end():
    with pytest.raises(UnexpectedEnd):
        parse([END])


def test_end_in_place_of_dict_value():
    with pytest.raises(UnexpectedEnd):
        parse([DICT, string(b"k"), END])


def test_unterminated_list():
    with pytest.raises(UnterminatedList):
        parse([LIST, integer(1)])


def test_unterminated_dict():
    with pytest.raises(UnterminatedDictionary):
        parse([DICT, string(b"k"), integer(1)])
    with pytest.raises(UnterminatedDictionary):
        parse([DICT, string(b"k")])


def test_innermost_unterminated_container_reported():
    with pytest.raises(UnterminatedDictionary):
        parse([LIST, DICT])


@pytest.mark.parametrize("key", [integer(1), LIST, DICT])
def test_invalid_dictionary_key(key):
    with pytest.raises(InvalidDictionaryKey):
        parse([DICT, key, string(b"a"), END])


def test_duplicate_keys_rejected_by_default():
    tokens = tokenize(b"d1:ai1e1:ai2ee")
    with pytest.raises(DuplicateDictionaryKey) as ei:
        parse(tokens)
    assert ei.value.key == b"a"
    assert ei.value.token.offset == 7


def test_duplicate_keys_last_write_wins_when_allowed():
    tokens = tokenize(b"d1:ai1e1:ai2ee")
    assert parse(tokens, allow_duplicate_keys=True) == BencodeDict({b"a": BencodeInt(2)})


def test_trailing_tokens():
    with pytest.raises(TrailingTokens) as ei:
        parse(tokenize(b"i1ei2e"))
    assert ei.value.token.offset == 3


def test_depth_limit():
    depth = 10
    assert parse(tokenize(b"l" * depth + b"e" * depth), max_depth=depth) is not None

    with pytest.raises(MaxDepthExceeded) as ei:
        parse(tokenize(b"l" * (depth + 1) + b"e" * (depth + 1)), max_depth=depth)
    assert ei.value.max_depth == depth


def test_deep_nesting_does_not_recurse():
    depth = 50000
    tokens = tokenize(b"l" * depth + b"e" * depth)
    value = parse(tokens, max_depth=depth)

    for _ in range(depth - 1):
        value = value[0]
    assert value == BencodeList([])
