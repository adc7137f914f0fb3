"""
Byte cursor that turns a Bencoded buffer into decode events.
"""
import re

from .errors import BencodeError, ErrorKind
from .events import END, MAP, SEQ, Event, EventKind
from .structure import TOO_LARGE, TOO_SMALL

_INT_LITERAL = re.compile(rb"-?(?:0|[1-9][0-9]*)")
_LENGTH = re.compile(rb"[0-9]+")

# u64 and i64 literals need at most 20 digits
_MAX_INT_DIGITS = 20


class Tokenizer:
    """
    Iterates over the events of a Bencoded buffer, one token at a time.

    The cursor never moves past the token it last returned, so after a
    caller has taken one complete value ``pos`` is the offset right after
    it. Running out of input raises EOF_WHILE_PARSING_VALUE rather than
    stopping the iteration.
    """
    def __init__(self, data: bytes, pos: int = 0):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("Tokenizer requires bytes.")
        self.data = bytes(data)
        if not 0 <= pos <= len(self.data):
            raise ValueError(f"start offset {pos} is outside the buffer")
        self.i = pos  # cursor index

    @property
    def pos(self) -> int:
        return self.i

    def at_end(self) -> bool:
        return self.i >= len(self.data)

    def __iter__(self):
        return self

    def __next__(self) -> Event:
        ch = self._peek()

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit():  # byte strings start with their length
            return self._parse_byte_str()

        if ch == b'l':
            self._consume(1)
            return SEQ

        if ch == b'd':
            self._consume(1)
            return MAP

        if ch == b'e':
            self._consume(1)
            return END

        raise BencodeError(ErrorKind.EXPECTED_SOME_VALUE)

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self) -> bytes:
        if self.at_end():
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE)
        return self.data[self.i:self.i + 1]

    def _consume(self, n: int = 1) -> bytes:
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        if self.i + n > len(self.data):
            self.i = len(self.data)
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE)
        chunk = self.data[self.i:self.i + n]
        self.i += n
        return chunk

    # --------------------------
    # Token parsers
    # --------------------------

    def _parse_int(self) -> Event:
        """Parses an i...e integer into a SIGNED or UNSIGNED event."""
        start = self.i + 1  # skip 'i'
        end = self.data.find(b'e', start)
        if end < 0:
            self.i = len(self.data)
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE)

        literal = self.data[start:end]
        if not _INT_LITERAL.fullmatch(literal) or literal == b"-0":
            raise BencodeError(ErrorKind.INVALID_INTEGER)

        negative = literal.startswith(b"-")
        if len(literal) - negative > _MAX_INT_DIGITS:
            message = TOO_SMALL if negative else TOO_LARGE
            raise BencodeError.parse_int(ValueError(message))

        self.i = end + 1  # skip 'e'
        number = int(literal)
        if negative:
            return Event(EventKind.SIGNED, number)
        return Event(EventKind.UNSIGNED, number)

    def _parse_byte_str(self) -> Event:
        """Parses a <len>:<bytes> byte string into a BYTES event."""
        match = _LENGTH.match(self.data, self.i)
        colon = match.end()
        if colon >= len(self.data):
            self.i = len(self.data)
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE)
        if self.data[colon:colon + 1] != b':':
            raise BencodeError(ErrorKind.INVALID_BYTE_STR_LEN)

        digits = match.group().lstrip(b"0") or b"0"
        if len(digits) > len(str(len(self.data))):
            # longer than the whole buffer
            self.i = len(self.data)
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE)

        length = int(digits)
        self.i = colon + 1
        return Event(EventKind.BYTES, self._consume(length))
