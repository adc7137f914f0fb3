import pytest

from bencode_value.decoder import MAX_DEPTH, from_events, reduce_events
from bencode_value.errors import BencodeError, ErrorKind
from bencode_value.events import END, MAP, SEQ, SOME, Event, EventKind, byte_str, signed, unsigned
from bencode_value.structure import ByteStr, Dict, Int, List, Signed, Unsigned


def kind_of(events, max_depth=MAX_DEPTH):
    with pytest.raises(BencodeError) as info:
        from_events(events, max_depth=max_depth)
    return info.value.kind


def test_scalars():
    assert from_events([signed(-3)]) == Int(Signed(-3))
    assert from_events([signed(3)]) == Int(Signed(3))
    assert from_events([unsigned(3)]) == Int(Unsigned(3))
    assert from_events([byte_str(b"spam")]) == ByteStr(b"spam")


def test_borrowed_and_text_payloads_become_byte_strings():
    assert from_events([byte_str(memoryview(b"spam"))]) == ByteStr(b"spam")
    assert from_events([byte_str(bytearray(b"\xff"))]) == ByteStr(b"\xff")
    assert from_events([byte_str("café")]) == ByteStr("café".encode("utf-8"))


def test_some_is_transparent():
    assert from_events([SOME, unsigned(1)]) == Int(Unsigned(1))
    assert from_events([SEQ, SOME, byte_str(b"a"), END]) == List([ByteStr(b"a")])
    assert from_events([MAP, SOME, byte_str(b"k"), SOME, SEQ, END, END]) == Dict({b"k": List([])})


def test_sequence_keeps_arrival_order():
    events = [SEQ, unsigned(2), unsigned(1), SEQ, END, MAP, END, END]
    assert from_events(events) == List([Int(Unsigned(2)), Int(Unsigned(1)), List([]), Dict({})])


def test_map_folds_entries_last_write_wins():
    events = [MAP, byte_str(b"b"), unsigned(1), byte_str(b"a"), unsigned(2), byte_str(b"b"), unsigned(3), END]
    value = from_events(events)
    assert value == Dict({b"a": Int(Unsigned(2)), b"b": Int(Unsigned(3))})
    assert list(value) == [b"a", b"b"]


@pytest.mark.parametrize("key", [signed(-1), unsigned(1), SEQ, MAP])
def test_non_byte_string_key(key):
    assert kind_of([MAP, key, unsigned(1), END]) is ErrorKind.KEY_MUST_BE_A_BYTE_STR


def test_end_without_value():
    assert kind_of([END]) is ErrorKind.EXPECTED_SOME_VALUE
    assert kind_of([SOME, END]) is ErrorKind.EXPECTED_SOME_VALUE
    assert kind_of([SEQ, SOME, END]) is ErrorKind.EXPECTED_SOME_VALUE


def test_dict_key_without_value():
    assert kind_of([MAP, byte_str(b"k"), END]) is ErrorKind.INVALID_DICT


def test_exhausted_stream():
    assert kind_of([]) is ErrorKind.EOF_WHILE_PARSING_VALUE
    assert kind_of([SOME]) is ErrorKind.EOF_WHILE_PARSING_VALUE
    assert kind_of([SEQ, unsigned(1)]) is ErrorKind.INVALID_LIST
    assert kind_of([MAP, byte_str(b"k")]) is ErrorKind.INVALID_DICT
    assert kind_of([SEQ, MAP]) is ErrorKind.INVALID_DICT


def test_trailing_events():
    assert kind_of([unsigned(1), unsigned(2)]) is ErrorKind.TRAILING_DATA


def test_integer_out_of_range():
    with pytest.raises(BencodeError) as info:
        from_events([unsigned(1 << 64)])
    assert info.value.kind is ErrorKind.PARSE_INT_ERROR
    assert str(info.value) == "number too large to fit in target type"
    assert isinstance(info.value.__cause__, ValueError)

    assert kind_of([signed(-(1 << 63) - 1)]) is ErrorKind.PARSE_INT_ERROR


def test_unrepresentable_events():
    assert kind_of([Event("float", 1.5)]) is ErrorKind.DESERIALIZE
    assert kind_of([True]) is ErrorKind.DESERIALIZE
    assert kind_of([unsigned(1.5)]) is ErrorKind.DESERIALIZE

    with pytest.raises(BencodeError) as info:
        from_events([Event(EventKind.BYTES, 42)])
    assert "expected_type=any valid Bencode value" in str(info.value)


def test_reduce_leaves_following_events():
    events = iter([SEQ, END, unsigned(7)])
    assert reduce_events(events) == List([])
    assert next(events) == unsigned(7)


def test_nesting_up_to_max_depth():
    value = from_events([SEQ] * MAX_DEPTH + [END] * MAX_DEPTH)
    for _ in range(MAX_DEPTH - 1):
        assert len(value) == 1
        value = value[0]
    assert value == List([])


def test_nesting_past_max_depth():
    assert kind_of([SEQ] * (MAX_DEPTH + 1) + [END] * (MAX_DEPTH + 1)) is ErrorKind.INVALID_LIST
    assert kind_of([SEQ] * MAX_DEPTH + [MAP, END] + [END] * MAX_DEPTH) is ErrorKind.INVALID_DICT

    shallow = [SEQ, SEQ, SEQ, END, END, END]
    assert from_events(shallow, max_depth=3) == List([List([List([])])])
    assert kind_of(shallow, max_depth=2) is ErrorKind.INVALID_LIST
