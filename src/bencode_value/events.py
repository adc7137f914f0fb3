"""
Primitive decode events.

An event source (such as ``Tokenizer``) describes a Bencode term as a flat
stream of events; ``reduce_events`` folds that stream back into a Value.
"""
from enum import Enum
from typing import Any, NamedTuple


class EventKind(Enum):
    """Kinds of primitive decode events."""
    BYTES = "bytes"        # payload: bytes-like or str
    SIGNED = "signed"      # payload: int
    UNSIGNED = "unsigned"  # payload: int
    SOME = "some"          # a value follows
    SEQ = "seq"            # list start
    MAP = "map"            # dict start
    END = "end"            # closes the innermost list or dict


class Event(NamedTuple):
    kind: EventKind
    payload: Any = None


def byte_str(data) -> Event:
    return Event(EventKind.BYTES, data)


def signed(n: int) -> Event:
    return Event(EventKind.SIGNED, n)


def unsigned(n: int) -> Event:
    return Event(EventKind.UNSIGNED, n)


SOME = Event(EventKind.SOME)
SEQ = Event(EventKind.SEQ)
MAP = Event(EventKind.MAP)
END = Event(EventKind.END)
