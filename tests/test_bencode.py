import pytest

from bencodec.decoder import decode, decode_str
from bencodec.encoder import encode
from bencodec.errors import (
    BencodeDecodeError,
    InvalidDictionaryKey,
    InvalidInteger,
    NoTokens,
    TruncatedByteString,
    UnterminatedList,
)
from bencodec.structure import BencodeInt, BencodeString, BencodeList, BencodeDict


def test_int():
    print("Testing integer decoding...")
    obj = decode(b"i42e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i42e"


@pytest.mark.parametrize("raw, expected", [
    (b"i0e", 0),
    (b"i42e", 42),
    (b"i-42e", -42),
    (b"i9223372036854775807e", 2 ** 63 - 1),
    (b"i-9223372036854775808e", -(2 ** 63)),
])
def test_int_values(raw, expected):
    assert decode(raw) == BencodeInt(expected)


def test_negative_zero_rejected():
    with pytest.raises(BencodeDecodeError) as ei:
        decode(b"i-0e")
    assert ei.value.stage == "lexer"
    assert isinstance(ei.value.error, InvalidInteger)


def test_string():
    print("Testing string decoding...")
    obj = decode(b"4:spam")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"

    print("Testing string encoding...")
    assert encode(obj) == b"4:spam"


def test_empty_string():
    assert decode(b"0:") == BencodeString(b"")


def test_truncated_string():
    with pytest.raises(BencodeDecodeError) as ei:
        decode(b"5:ab")
    assert isinstance(ei.value.error, TruncatedByteString)


def test_list():
    print("Testing list decoding...")
    obj = decode(b"l4:spami3ee")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert len(obj.value) == 2


def test_empty_list():
    assert decode(b"le") == BencodeList([])


def test_nested_list_scenario():
    obj = decode(b"l4:spami42ei666e5:tumore")
    assert obj == BencodeList([
        BencodeString(b"spam"),
        BencodeInt(42),
        BencodeInt(666),
        BencodeString(b"tumor"),
    ])


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj = decode(b"d3:cow3:mooe")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:mooe"


def test_dict_scenario_round_trip():
    raw = b"d3:bar4:spam3:fooi42ee"
    obj = decode(raw)
    assert obj == BencodeDict({
        b"bar": BencodeString(b"spam"),
        b"foo": BencodeInt(42),
    })
    assert obj.encode() == raw


def test_structural_errors():
    with pytest.raises(BencodeDecodeError) as ei:
        decode(b"l")
    assert isinstance(ei.value.error, UnterminatedList)

    with pytest.raises(BencodeDecodeError) as ei:
        decode(b"di1e1:ae")
    assert isinstance(ei.value.error, InvalidDictionaryKey)

    with pytest.raises(BencodeDecodeError) as ei:
        decode(b"")
    assert ei.value.stage == "parser"
    assert isinstance(ei.value.error, NoTokens)


def test_decode_str():
    assert decode_str("d3:bar4:spam3:fooi42ee") == decode(b"d3:bar4:spam3:fooi42ee")
    assert decode_str("5:café") == BencodeString("café".encode())
