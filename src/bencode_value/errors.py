"""
Error taxonomy for Bencode decoding and value conversion.

Every failure raised by this package is a ``BencodeError`` carrying one
``ErrorKind``. Fixed kinds have a fixed message; wrapped kinds render the
message of the failure they wrap.
"""
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of failure kinds."""
    DESERIALIZE = "deserialize"
    EOF_WHILE_PARSING_VALUE = "eof_while_parsing_value"
    EXPECTED_SOME_VALUE = "expected_some_value"
    INVALID_BYTE_STR_LEN = "invalid_byte_str_len"
    INVALID_INTEGER = "invalid_integer"
    INVALID_DICT = "invalid_dict"
    INVALID_LIST = "invalid_list"
    KEY_MUST_BE_A_BYTE_STR = "key_must_be_a_byte_str"
    TRAILING_DATA = "trailing_data"
    FROM_UTF8_ERROR = "from_utf8_error"
    PARSE_INT_ERROR = "parse_int_error"
    IO_ERROR = "io_error"


_MESSAGES = {
    ErrorKind.EOF_WHILE_PARSING_VALUE: "eof while parsing value",
    ErrorKind.EXPECTED_SOME_VALUE: "expected some value",
    ErrorKind.INVALID_BYTE_STR_LEN: "invalid byte string length",
    ErrorKind.INVALID_INTEGER: "invalid integer",
    ErrorKind.INVALID_DICT: "invalid dictionary",
    ErrorKind.INVALID_LIST: "invalid list",
    ErrorKind.KEY_MUST_BE_A_BYTE_STR: "key must be a byte string",
    ErrorKind.TRAILING_DATA: "trailing data error",
}

WRAPPED_KINDS = frozenset({
    ErrorKind.FROM_UTF8_ERROR,
    ErrorKind.PARSE_INT_ERROR,
    ErrorKind.IO_ERROR,
})


class BencodeError(Exception):
    """Exception raised for every decode or conversion failure."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None,
                 inner: Optional[BaseException] = None):
        if not isinstance(kind, ErrorKind):
            raise TypeError("BencodeError requires an ErrorKind.")

        if kind is ErrorKind.DESERIALIZE:
            if message is None:
                raise TypeError("DESERIALIZE errors require a message.")
        elif kind in WRAPPED_KINDS:
            if inner is None:
                raise TypeError(f"{kind.name} errors require an inner exception.")
            message = str(inner)
        else:
            if message is not None or inner is not None:
                raise TypeError(f"{kind.name} errors carry a fixed message.")
            message = _MESSAGES[kind]

        super().__init__(message)
        self.kind = kind
        self.message = message
        self.inner = inner

    # --------------------------
    # Constructors
    # --------------------------

    @classmethod
    def custom(cls, message) -> "BencodeError":
        return cls(ErrorKind.DESERIALIZE, message=str(message))

    @classmethod
    def invalid_type(cls, unexpected, expected) -> "BencodeError":
        """Reports a value of the wrong shape for what the caller expected."""
        return cls.custom(
            f"unexpected type error. invalid_type={unexpected}, expected_type={expected}"
        )

    @classmethod
    def from_utf8(cls, exc: UnicodeError) -> "BencodeError":
        return cls(ErrorKind.FROM_UTF8_ERROR, inner=exc)

    @classmethod
    def parse_int(cls, exc: ValueError) -> "BencodeError":
        return cls(ErrorKind.PARSE_INT_ERROR, inner=exc)

    @classmethod
    def io(cls, exc: BaseException) -> "BencodeError":
        return cls(ErrorKind.IO_ERROR, inner=exc)

    @classmethod
    def wrap(cls, exc: BaseException) -> "BencodeError":
        """Wraps a lower-level failure in the matching kind."""
        if isinstance(exc, BencodeError):
            return exc
        # UnicodeError is a ValueError, so it has to be checked first
        if isinstance(exc, UnicodeError):
            return cls.from_utf8(exc)
        if isinstance(exc, ValueError):
            return cls.parse_int(exc)
        return cls.io(exc)

    # --------------------------
    # Conversions
    # --------------------------

    def to_io_error(self) -> OSError:
        """
        Collapses this error into an OSError.

        Only an IO_ERROR wrapping an OSError survives intact; every other
        kind becomes a generic "other error".
        """
        if self.kind is ErrorKind.IO_ERROR and isinstance(self.inner, OSError):
            return self.inner
        return OSError("other error")

    def __repr__(self):
        if self.kind in WRAPPED_KINDS:
            return f"BencodeError({self.kind.name}, inner={self.inner!r})"
        if self.kind is ErrorKind.DESERIALIZE:
            return f"BencodeError({self.kind.name}, {self.message!r})"
        return f"BencodeError({self.kind.name})"
