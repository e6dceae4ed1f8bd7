"""
Bencode encoder. Output is canonical: dictionary keys are emitted in
ascending raw-byte order, so equal trees always encode to equal bytes.

Containers are walked with an explicit stack, so encoding works at any
nesting depth.
"""
from .limits import INT_MAX, INT_MIN
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    parts = []
    # each entry is (literal chunk, None) or (None, object to encode)
    pending = [(None, obj)]

    while pending:
        chunk, item = pending.pop()
        if chunk is not None:
            parts.append(chunk)
            continue

        if isinstance(item, bool):
            raise TypeError("Cannot bencode a bool")

        if isinstance(item, (int, BencodeInt)):
            value = item if isinstance(item, int) else item.value
            parts.append(encode_int(value))

        elif isinstance(item, (str, BencodeString)):
            if isinstance(item, str):
                parts.append(encode_str(item))
            else:
                # BencodeString wraps bytes
                parts.append(encode_bytes(item.value))

        elif isinstance(item, (bytes, bytearray)):
            parts.append(encode_bytes(bytes(item)))

        elif isinstance(item, (list, tuple, BencodeList)):
            value = item.value if isinstance(item, BencodeList) else item
            parts.append(b"l")
            pending.append((b"e", None))
            pending.extend((None, x) for x in reversed(value))

        elif isinstance(item, (dict, BencodeDict)):
            value = item if isinstance(item, dict) else item.value
            parts.append(b"d")
            pending.append((b"e", None))
            for key_bytes, v in reversed(_sorted_entries(value)):
                pending.append((None, v))
                pending.append((encode_bytes(key_bytes), None))

        else:
            raise TypeError(f"Cannot bencode object of type {type(item)}")

    return b"".join(parts)


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    if not INT_MIN <= n <= INT_MAX:
        raise ValueError(f"Integer out of 64-bit range: {n}")
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def _sorted_entries(d: dict) -> list:
    """Returns (key bytes, value) pairs in canonical key order."""

    def key_to_bytes(k):
        if isinstance(k, str):
            return k.encode()
        if isinstance(k, (bytes, bytearray)):
            return bytes(k)
        raise TypeError(f"Dictionary keys must be bytes or str, not {type(k).__name__}")

    entries = {}
    for key, value in d.items():
        key_bytes = key_to_bytes(key)
        if key_bytes in entries:
            raise ValueError(f"Dictionary key {key_bytes!r} appears more than once")
        entries[key_bytes] = value

    # bytes compare by raw byte value, which is the canonical order
    return sorted(entries.items(), key=lambda entry: entry[0])
