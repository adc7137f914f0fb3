"""
Bencode encoder for decoded Value trees.
"""
from .structure import ByteStr, Dict, Int, List, Value


def encode(value: Value) -> bytes:
    """Encodes a Value tree into bencoded bytes."""
    if isinstance(value, ByteStr):
        return encode_bytes(value.value)

    if isinstance(value, Int):
        return encode_int(value.value.value)

    if isinstance(value, List):
        return encode_list(value)

    if isinstance(value, Dict):
        return encode_dict(value)

    raise TypeError(f"Cannot bencode object of type {type(value)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_list(lst: List) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    return b"l" + b"".join(encode(x) for x in lst) + b"e"


def encode_dict(d: Dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    parts = [b"d"]

    for key in sorted(d):
        parts.append(encode_bytes(key))
        parts.append(encode(d[key]))

    parts.append(b"e")
    return b"".join(parts)
