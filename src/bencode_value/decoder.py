"""
Bencode decoder: folds decode events into a Value tree.
"""
import logging
from typing import Iterable, Iterator, Tuple

from .errors import BencodeError, ErrorKind
from .events import Event, EventKind
from .structure import ByteStr, Dict, Int, List, Signed, Unsigned, Value
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# Deepest list/dict nesting accepted. Encoding, comparing and printing a
# tree recurse once per level.
MAX_DEPTH = 200

_EXPECTING = "any valid Bencode value"
_NOTHING = object()


class _ListFrame:
    def __init__(self):
        self.items = []

    def add(self, value: Value):
        self.items.append(value)

    def wants_key(self) -> bool:
        return False

    def finish(self) -> Value:
        return List(self.items)


class _DictFrame:
    def __init__(self):
        self.entries = {}
        self.key = None

    def add(self, value: Value):
        if self.key is None:
            self.key = value.value
        else:
            # later entries overwrite earlier ones with the same key
            self.entries[self.key] = value
            self.key = None

    def wants_key(self) -> bool:
        return self.key is None

    def finish(self) -> Value:
        if self.key is not None:
            raise BencodeError(ErrorKind.INVALID_DICT)
        return Dict(self.entries)


def _scalar(event: Event) -> Value:
    """Builds the leaf Value for a BYTES, SIGNED or UNSIGNED event."""
    kind, payload = event
    try:
        if kind is EventKind.BYTES:
            if isinstance(payload, str):
                payload = payload.encode("utf-8")
            return ByteStr(payload)
        if kind is EventKind.SIGNED:
            return Int(Signed(payload))
        return Int(Unsigned(payload))
    except TypeError as exc:
        raise BencodeError.invalid_type(repr(event), _EXPECTING) from exc
    except ValueError as exc:
        raise BencodeError.parse_int(exc) from exc


def _next_event(events: Iterator, stack: list) -> Event:
    try:
        event = next(events)
    except StopIteration:
        if not stack:
            raise BencodeError(ErrorKind.EOF_WHILE_PARSING_VALUE) from None
        if isinstance(stack[-1], _ListFrame):
            raise BencodeError(ErrorKind.INVALID_LIST) from None
        raise BencodeError(ErrorKind.INVALID_DICT) from None

    if not isinstance(event, Event) or not isinstance(event.kind, EventKind):
        raise BencodeError.invalid_type(repr(event), _EXPECTING)
    return event


def reduce_events(events: Iterator[Event], max_depth: int = MAX_DEPTH) -> Value:
    """
    Folds exactly one value's worth of events into a Value.

    Consumes events from the iterator up to and including the last event of
    the value and leaves the rest untouched. Opening a list or dict deeper
    than ``max_depth`` fails as INVALID_LIST or INVALID_DICT.
    """
    stack = []
    after_some = False

    while True:
        event = _next_event(events, stack)
        kind = event.kind
        in_key = bool(stack) and stack[-1].wants_key()

        if kind is EventKind.SOME:
            # presence is transparent: the wrapped value is returned as-is
            after_some = True
            continue

        if kind is EventKind.END:
            if after_some or not stack:
                raise BencodeError(ErrorKind.EXPECTED_SOME_VALUE)
            value = stack.pop().finish()

        elif kind is EventKind.SEQ or kind is EventKind.MAP:
            if in_key:
                raise BencodeError(ErrorKind.KEY_MUST_BE_A_BYTE_STR)
            if len(stack) >= max_depth:
                if kind is EventKind.SEQ:
                    raise BencodeError(ErrorKind.INVALID_LIST)
                raise BencodeError(ErrorKind.INVALID_DICT)
            stack.append(_ListFrame() if kind is EventKind.SEQ else _DictFrame())
            after_some = False
            continue

        else:
            if in_key and kind is not EventKind.BYTES:
                raise BencodeError(ErrorKind.KEY_MUST_BE_A_BYTE_STR)
            value = _scalar(event)

        after_some = False
        if not stack:
            return value
        stack[-1].add(value)


def from_events(events: Iterable[Event], max_depth: int = MAX_DEPTH) -> Value:
    """
    Reduces an event stream that must describe exactly one value.

    A Tokenizer raises at the end of its buffer instead of stopping, so
    byte input goes through ``decode``, which checks the leftover bytes.
    """
    events = iter(events)
    value = reduce_events(events, max_depth)
    if next(events, _NOTHING) is not _NOTHING:
        raise BencodeError(ErrorKind.TRAILING_DATA)
    return value


def decode_prefix(data: bytes, start: int = 0,
                  max_depth: int = MAX_DEPTH) -> Tuple[Value, int]:
    """
    Decodes the single value starting at ``start``.

    Returns the value and the offset just past it. Whatever follows is left
    alone, which lets callers slice out the exact bytes of a nested value.

    ``start == len(data)`` fails as EOF_WHILE_PARSING_VALUE. A negative
    ``start`` or one past the end is a caller bug and raises ValueError.
    """
    tokenizer = Tokenizer(data, start)
    value = reduce_events(tokenizer, max_depth)
    return value, tokenizer.pos


def decode(data: bytes, max_depth: int = MAX_DEPTH) -> Value:
    """
    Decodes a complete Bencoded buffer.

    Bytes left over after the top-level value are an error.
    """
    value, end = decode_prefix(data, max_depth=max_depth)
    if end != len(data):
        raise BencodeError(ErrorKind.TRAILING_DATA)

    logger.debug("Decoded %d bytes into %s", end, type(value).__name__)
    return value
