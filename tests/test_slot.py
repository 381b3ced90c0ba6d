import pytest

from reverbkit.slot import Slot


def _filled(size=8, channels=2):
    slot = Slot()
    slot.alloc(size, channels)
    for buffer in slot:
        buffer[:] = [1.0] * size
    return slot


def test_alloc_creates_zeroed_channels():
    slot = Slot()
    slot.alloc(16, 3)
    assert slot.size == 16
    assert slot.channels == 3
    assert all(buffer == [0.0] * 16 for buffer in slot)


def test_new_slot_is_empty():
    slot = Slot()
    assert slot.size == 0
    assert slot.channels == 0
    assert not slot


@pytest.mark.parametrize("size,channels", [(0, 2), (-4, 2), (8, 0), (8, -1)])
def test_invalid_alloc_keeps_previous_state(size, channels):
    slot = _filled(8, 2)
    slot.alloc(size, channels)
    assert slot.size == 8
    assert slot.channels == 2
    assert slot.left == [1.0] * 8


def test_realloc_replaces_buffers():
    slot = _filled(8, 2)
    slot.alloc(4, 1)
    assert slot.size == 4
    assert slot.channels == 1
    assert slot.left == [0.0] * 4


def test_free_resets():
    slot = _filled()
    slot.free()
    assert slot.size == 0
    assert slot.channels == 0
    assert slot.data == []


def test_channel_out_of_range_falls_back_to_first():
    slot = _filled(4, 2)
    assert slot.channel(5) is slot.channel(0)


def test_left_and_right_are_distinct_in_stereo():
    slot = _filled(4, 2)
    slot.right[0] = 7.0
    assert slot.channel(1)[0] == 7.0
    assert slot.left[0] == 1.0


def test_mono_right_is_left():
    slot = Slot()
    slot.alloc(4, 1)
    assert slot.right is slot.left


def test_channel_on_empty_slot_raises():
    with pytest.raises(ValueError):
        Slot().channel(0)


def test_negative_channel_raises():
    slot = _filled()
    with pytest.raises(IndexError):
        slot.channel(-1)


def test_mute_all():
    slot = _filled(6, 2)
    slot.mute()
    assert all(buffer == [0.0] * 6 for buffer in slot)


def test_mute_limit():
    slot = _filled(6, 2)
    slot.mute(2)
    for buffer in slot:
        assert buffer[:2] == [0.0, 0.0]
        assert buffer[2:] == [1.0] * 4


def test_mute_limit_clipped_to_size():
    slot = _filled(4, 1)
    slot.mute(100)
    assert slot.left == [0.0] * 4
    assert len(slot.left) == 4


def test_mute_offset_and_limit():
    slot = _filled(6, 2)
    slot.mute(2, offset=3)
    for buffer in slot:
        assert buffer[:3] == [1.0] * 3
        assert buffer[3:5] == [0.0, 0.0]
        assert buffer[5:] == [1.0]


def test_mute_offset_range_clipped():
    slot = _filled(6, 1)
    slot.mute(10, offset=4)
    assert slot.left[:4] == [1.0] * 4
    assert slot.left[4:] == [0.0, 0.0]
    assert len(slot.left) == 6


@pytest.mark.parametrize("limit,offset", [(-1, 0), (2, -1)])
def test_mute_negative_leaves_data(limit, offset):
    slot = _filled(4, 2)
    slot.mute(limit, offset=offset)
    assert all(buffer == [1.0] * 4 for buffer in slot)


def test_mute_keeps_buffer_identity():
    slot = _filled(4, 2)
    left = slot.left
    slot.mute()
    assert slot.left is left
    assert left == [0.0] * 4