"""
Untyped Bencode value model with a decoder, encoder and loaders.
"""
from .decoder import MAX_DEPTH, decode, decode_prefix, from_events, reduce_events
from .encoder import encode
from .errors import BencodeError, ErrorKind
from .events import Event, EventKind
from .loader import fetch, load
from .structure import ByteStr, Dict, Int, List, Number, Signed, Unsigned, Value
from .tokenizer import Tokenizer

__all__ = [
    'MAX_DEPTH', 'decode', 'decode_prefix', 'from_events', 'reduce_events', 'encode',
    'BencodeError', 'ErrorKind', 'Event', 'EventKind', 'Tokenizer',
    'fetch', 'load',
    'Value', 'ByteStr', 'Int', 'List', 'Dict', 'Number', 'Signed', 'Unsigned',
]
