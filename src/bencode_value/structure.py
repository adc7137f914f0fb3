"""
Data structures for representing decoded Bencode values.
"""
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from .errors import BencodeError

__all__ = [
    "I64_MIN",
    "I64_MAX",
    "U64_MAX",
    "Number",
    "Signed",
    "Unsigned",
    "Value",
    "ByteStr",
    "Int",
    "List",
    "Dict",
]

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
U64_MAX = (1 << 64) - 1

TOO_LARGE = "number too large to fit in target type"
TOO_SMALL = "number too small to fit in target type"


def _check_int(value, name: str) -> int:
    # bool is an int subclass but has no Bencode form
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} requires an integer.")
    return int(value)


def _to_bytes(value, name: str) -> bytes:
    if isinstance(value, ByteStr):
        return value.value
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} requires bytes.")
    return bytes(value)


# ------------------------------------------------------------
#   Numbers
# ------------------------------------------------------------

class Number:
    """
    A Bencoded integer tagged with the form it was read in.

    Two numbers are equal only if both the variant and the value match, so
    ``Signed(3) != Unsigned(3)``.
    """
    __slots__ = ("_value",)

    def __init__(self, value: int):
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __int__(self):
        return self._value

    def __eq__(self, other):
        return type(self) is type(other) and self._value == other._value

    def __hash__(self):
        return hash((type(self).__name__, self._value))

    def __repr__(self):
        return f"{type(self).__name__}({self._value})"


class Signed(Number):
    """An integer in the signed 64-bit range."""
    __slots__ = ()

    def __init__(self, value: int):
        value = _check_int(value, "Signed")
        if value > I64_MAX:
            raise ValueError(TOO_LARGE)
        if value < I64_MIN:
            raise ValueError(TOO_SMALL)
        super().__init__(value)


class Unsigned(Number):
    """An integer in the unsigned 64-bit range."""
    __slots__ = ()

    def __init__(self, value: int):
        value = _check_int(value, "Unsigned")
        if value > U64_MAX:
            raise ValueError(TOO_LARGE)
        if value < 0:
            raise ValueError(TOO_SMALL)
        super().__init__(value)


# ------------------------------------------------------------
#   Values
# ------------------------------------------------------------

class Value:
    """
    Base class for any valid decoded Bencode term.

    Values are read-only once built. Equality is deep and structural, and
    includes the Number variant inside Int.
    """
    __slots__ = ()

    def _key(self):
        raise NotImplementedError

    def unexpected(self) -> str:
        """Describes this value for type mismatch diagnostics."""
        raise NotImplementedError

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    # --------------------------
    # Typed accessors
    # --------------------------

    def _expect(self, cls, expected: str):
        if not isinstance(self, cls):
            raise BencodeError.invalid_type(self.unexpected(), expected)
        return self

    def as_bytes(self) -> bytes:
        return self._expect(ByteStr, "a byte string").value

    def as_str(self, encoding: str = "utf-8") -> str:
        """Decodes a byte string as text."""
        raw = self.as_bytes()
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise BencodeError.from_utf8(exc) from exc

    def as_int(self) -> int:
        return self._expect(Int, "an integer").value.value

    def as_list(self) -> tuple:
        return self._expect(List, "a list").value

    def as_dict(self) -> Mapping:
        return self._expect(Dict, "a dictionary").value

    def to_python(self):
        """Converts the tree into plain bytes, int, list and dict objects."""
        raise NotImplementedError


class ByteStr(Value):
    """Represents a Bencoded byte string. The bytes need not be valid text."""
    __slots__ = ("_value",)

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("ByteStr requires bytes.")
        self._value = bytes(value)

    @property
    def value(self) -> bytes:
        return self._value

    def _key(self):
        return self._value

    def unexpected(self) -> str:
        return "byte array"

    def to_python(self):
        return self._value

    def __len__(self):
        return len(self._value)

    def __repr__(self):
        return f"ByteStr({self._value!r})"


class Int(Value):
    """Represents a Bencoded integer."""
    __slots__ = ("_value",)

    def __init__(self, value: Number):
        if not isinstance(value, Number):
            raise TypeError("Int requires a Signed or Unsigned number.")
        self._value = value

    @property
    def value(self) -> Number:
        return self._value

    def _key(self):
        return self._value

    def unexpected(self) -> str:
        return f"integer `{self._value.value}`"

    def to_python(self):
        return self._value.value

    def __int__(self):
        return self._value.value

    def __repr__(self):
        return f"Int({self._value!r})"


class List(Value, Sequence):
    """Represents a Bencoded list. Element order is preserved."""
    __slots__ = ("_items",)

    def __init__(self, value=()):
        items = tuple(value)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError("List elements must be Values.")
        self._items = items

    @property
    def value(self) -> tuple:
        return self._items

    def _key(self):
        return self._items

    def unexpected(self) -> str:
        return "sequence"

    def to_python(self):
        return [item.to_python() for item in self._items]

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self):
        return f"List({list(self._items)!r})"


class Dict(Value, Mapping):
    """
    Represents a Bencoded dictionary.

    Keys are byte strings and are kept in byte-lexicographic order no
    matter the order entries were supplied in, so two dicts holding the
    same entries iterate, compare, hash and encode identically.
    """
    __slots__ = ("_entries",)

    def __init__(self, value=None):
        if value is None:
            value = {}
        pairs = value.items() if isinstance(value, Mapping) else value

        entries = {}
        for key, item in pairs:
            if not isinstance(item, Value):
                raise TypeError("Dict values must be Values.")
            entries[_to_bytes(key, "Dict key")] = item

        self._entries = {key: entries[key] for key in sorted(entries)}

    @property
    def value(self) -> Mapping:
        return MappingProxyType(self._entries)

    def _key(self):
        return tuple(self._entries.items())

    def unexpected(self) -> str:
        return "map"

    def to_python(self):
        return {key: item.to_python() for key, item in self._entries.items()}

    def __getitem__(self, key):
        try:
            raw = _to_bytes(key, "Dict key")
        except TypeError:
            # only byte strings can be keys, so anything else is just missing
            raise KeyError(key) from None
        return self._entries[raw]

    def __contains__(self, key):
        try:
            self[key]
        except KeyError:
            return False
        return True

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return f"Dict({self._entries!r})"
