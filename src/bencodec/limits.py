"""
Defines marker bytes and resource limits for the bencode codec.
"""

# Leading bytes that open or close a token
DICT_MARKER = b"d"
LIST_MARKER = b"l"
INT_MARKER = b"i"
END_MARKER = b"e"

# Integers are signed 64-bit
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

# Maximum number of lists/dictionaries open at the same time while parsing
MAX_DEPTH = 256
