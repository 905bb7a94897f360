import copy
import gc
import pickle

import pytest

from padbits import BitSequence, BitView, DecodeError


def test_view_clone():
    expected = (True, True, False, True, False, True, False, True, True, True)
    bits = BitSequence.from_bool_slice(expected)
    view = bits.as_bit_view()

    clone = view.copy()

    assert clone.to_bool_slice() == view.to_bool_slice()
    assert clone.to_bool_slice() == expected


def test_clone_outlives_original():
    expected = (True, False, True, True)
    data = b"\xb0"
    view = BitView.from_padded_bytes(data, 4)
    clone = copy.copy(view)
    view.release()
    del view
    gc.collect()
    assert clone.to_bool_slice() == expected
    assert clone.as_padded_bytes()[0].tobytes() == data


def test_view_iter():
    expected = (True, True, False, True, False, True, False, True)
    bits = BitSequence.from_bool_slice(expected)
    view = bits.as_bit_view()
    assert view.to_bool_slice() == expected
    assert list(view) == list(expected)


def test_view_is_restartable():
    view = BitView.from_padded_bytes(b"\xc0", 6)
    assert list(view.iter_bits()) == [True, True]
    assert list(view.iter_bits()) == [True, True]


def test_from_padded_bytes_does_not_copy():
    data = bytearray(b"\x00")
    view = BitView.from_padded_bytes(data, 0)
    raw, _ = view.as_padded_bytes()
    assert raw.obj is data


def test_from_padded_bytes_reads_external_buffer():
    view = BitView.from_padded_bytes(b"\x5a\x80", 7)
    assert view.len_bits() == 9
    assert view.least_len_bytes() == 2
    assert view.to_bool_slice() == (False, True, False, True, True, False, True, False, True)


@pytest.mark.parametrize("data, padding", [(b"\x00", 8), (b"\x00", -1), (b"", 1)])
def test_from_padded_bytes_rejects_bad_padding(data, padding):
    with pytest.raises(ValueError):
        BitView.from_padded_bytes(data, padding)


def test_from_padded_bytes_accepts_other_formats():
    data = memoryview(bytes([1, 2, 3, 4])).cast("H")
    view = BitView.from_padded_bytes(data, 0)
    assert view.least_len_bytes() == 4
    assert view.as_padded_bytes()[0].format == "B"


def test_serialize_returns_new_bytes():
    view = BitView.from_padded_bytes(b"\xa0", 5)
    frame = view.serialize()
    assert isinstance(frame, bytes)
    assert frame == b"\x05\xa0"
    assert view.serialize() == frame


def test_serialize_matches_sequence():
    bits = BitSequence("1101101011")
    with bits.as_bit_view() as view:
        assert view.serialize() == bytes(bits.serialize())


def test_deserialize_borrows_input():
    data = bytearray(b"\x04\xf0")
    view = BitView.deserialize(data)
    assert view.to_bool_slice() == (True, True, True, True)
    raw, padding = view.as_padded_bytes()
    assert raw.obj is data
    assert padding == 4


def test_deserialize_empty():
    with pytest.raises(DecodeError):
        BitView.deserialize(b"")


def test_serde():
    bits = BitSequence("10010100001")
    with bits.as_bit_view() as view:
        restored = BitView.deserialize(view.serialize())
        assert restored == view
        assert restored.to_bool_slice() == bits.to_bool_slice()


def test_release_ends_reads():
    view = BitView.from_padded_bytes(b"\x80", 7)
    view.release()
    with pytest.raises(ValueError):
        view.len_bits()


def test_release_twice():
    bits = BitSequence("1")
    view = bits.as_bit_view()
    view.release()
    view.release()
    bits.append_bit(True)
    assert bits == BitSequence("11")


def test_not_picklable():
    with pytest.raises(TypeError):
        pickle.dumps(BitView.from_padded_bytes(b"\x80", 7))


def test_eq():
    assert BitView.from_padded_bytes(b"\x80", 7) == BitView.from_padded_bytes(bytearray(b"\x80"), 7)
    assert BitView.from_padded_bytes(b"\x80", 7) != BitView.from_padded_bytes(b"\x80", 6)
    assert BitView.from_padded_bytes(b"\x80", 7) != b"\x80"


def test_len():
    assert len(BitView.from_padded_bytes(b"\xff\xff", 3)) == 13
    assert len(BitView.from_padded_bytes(b"", 0)) == 0


def test_str_and_repr():
    view = BitView.from_padded_bytes(b"\x80", 6)
    assert str(view) == "[10]"
    assert repr(view) == 'BitView("10")'


def test_from_padded_bytes_rejects_non_contiguous():
    with pytest.raises(ValueError):
        BitView.from_padded_bytes(memoryview(b"\xff\x00\xff\x00")[::2], 0)


def test_constructor_accepts_bytes():
    view = BitView(b"\xc0", 6)
    assert view.to_bool_slice() == (True, True)
    assert view.as_padded_bytes()[0].readonly
    view.release()
    with pytest.raises(ValueError):
        view.len_bits()
