"""
Data structures for representing Bencoded types.

Comparison, unwrapping and wrapping walk the tree with an explicit
stack, so they work at any nesting depth the parser can produce.
"""
from .limits import INT_MAX, INT_MIN

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "wrap",
]


def _key_bytes(key) -> bytes:
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TypeError(f"Dictionary keys must be bytes or str, not {type(key).__name__}")


class BencodeType:
    """Base class for all Bencode data types."""

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return _tree_equal(self, other)

    def encode(self) -> bytes:
        """Serializes this value to its canonical bencoded form."""
        from .encoder import encode
        return encode(self)

    def to_python(self):
        """Unwraps the tree into plain int / bytes / list / dict objects."""
        return _unwrap(self)


class BencodeInt(BencodeType):
    """Represents a Bencoded integer (signed 64-bit)."""
    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"BencodeInt out of 64-bit range: {value}")
        self.value = value

    def __hash__(self):
        return hash((BencodeInt, self.value))

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string. The payload is opaque bytes."""
    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __hash__(self):
        return hash((BencodeString, self.value))

    def as_text(self, encoding: str = "utf-8") -> str:
        """
        Returns the payload as text.
        Raises UnicodeDecodeError for binary payloads (e.g. piece hashes).
        """
        return self.value.decode(encoding)

    def __len__(self):
        return len(self.value)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    __hash__ = None

    def __init__(self, value: list):
        if not isinstance(value, list):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError("BencodeList items must be Bencode types.")
        self.value = list(value)

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Keys are bytes. Lookups also accept str keys, which are UTF-8 encoded.
    Storage order carries no meaning; the encoder sorts keys.
    """
    __hash__ = None

    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        # keys must be bytes (bencode requirement)
        for k, v in value.items():
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError("BencodeDict values must be Bencode types.")
        self.value = {bytes(k): v for k, v in value.items()}

    def get(self, key, default=None):
        return self.value.get(_key_bytes(key), default)

    def __getitem__(self, key):
        return self.value[_key_bytes(key)]

    def __contains__(self, key):
        return _key_bytes(key) in self.value

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __repr__(self):
        return f"BencodeDict({self.value!r})"


_CONTAINERS = (BencodeList, BencodeDict)


def _tree_equal(left: BencodeType, right: BencodeType) -> bool:
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if type(a) is not type(b):
            return False
        if isinstance(a, BencodeList):
            if len(a.value) != len(b.value):
                return False
            pending.extend(zip(a.value, b.value))
        elif isinstance(a, BencodeDict):
            if a.value.keys() != b.value.keys():
                return False
            pending.extend((v, b.value[k]) for k, v in a.value.items())
        elif a.value != b.value:
            return False
    return True


def _empty_python(node: BencodeType):
    if isinstance(node, BencodeList):
        return []
    if isinstance(node, BencodeDict):
        return {}
    return node.value


def _unwrap(root: BencodeType):
    result = _empty_python(root)
    pending = [(root, result)]
    while pending:
        node, out = pending.pop()
        if isinstance(node, BencodeList):
            for child in node.value:
                py = _empty_python(child)
                out.append(py)
                if isinstance(child, _CONTAINERS):
                    pending.append((child, py))
        elif isinstance(node, BencodeDict):
            for key, child in node.value.items():
                py = _empty_python(child)
                out[key] = py
                if isinstance(child, _CONTAINERS):
                    pending.append((child, py))
    return result


def _shell(obj) -> BencodeType:
    """Scalars are converted fully; containers come back empty."""
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise TypeError("Cannot bencode a bool")

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (bytes, bytearray)):
        return BencodeString(obj)

    if isinstance(obj, str):
        return BencodeString(obj.encode())

    if isinstance(obj, (list, tuple)):
        return BencodeList([])

    if isinstance(obj, dict):
        return BencodeDict({})

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


def wrap(obj) -> BencodeType:
    """
    Builds a Bencode tree from plain Python objects.
    Accepts int, bytes, bytearray, str, list, tuple, dict and Bencode types.
    """
    root = _shell(obj)
    pending = [(obj, root)] if root is not obj else []
    while pending:
        src, node = pending.pop()
        if isinstance(node, BencodeList):
            children = ((None, x) for x in src)
        else:
            children = src.items()

        for k, x in children:
            child = _shell(x)
            if isinstance(node, BencodeList):
                node.value.append(child)
            else:
                key = _key_bytes(k)
                if key in node.value:
                    raise ValueError(f"Dictionary key {key!r} appears more than once")
                node.value[key] = child
            # Bencode values passed in are already complete
            if isinstance(child, _CONTAINERS) and child is not x:
                pending.append((x, child))
    return root
