import pytest

from reverbkit.allpass import Allpass, Allpass2


def impulse_response(filt, length):
    return [filt(1.0 if n == 0 else 0.0) for n in range(length)]


def test_unallocated_allpass_passes_through():
    ap = Allpass(feedback=0.5)
    assert ap.size == 0
    assert ap(0.25) == 0.25
    assert ap.process_decay(0.75) == 0.75
    assert ap.process_original(-0.5) == -0.5


def test_zero_feedback_is_pure_delay():
    ap = Allpass(3, feedback=0.0)
    out = [ap(x) for x in [1.0, 2.0, 3.0, 0.0, 0.0, 0.0]]
    assert out == [0.0, 0.0, 0.0, 1.0, 2.0, 3.0]


def test_allpass_impulse_energy_is_unity():
    ap = Allpass(5, feedback=0.5)
    response = impulse_response(ap, 3000)
    assert sum(v * v for v in response) == pytest.approx(1.0, rel=1e-9)
    assert response[0] == pytest.approx(-0.5)


def test_process_decay_scales_delayed_path():
    ap = Allpass(2, feedback=0.0, decay=0.5)
    out = [ap.process_decay(x) for x in [4.0, 8.0, 0.0, 0.0]]
    assert out == [0.0, 0.0, 2.0, 4.0]


def test_process_original_zero_feedback():
    ap = Allpass(2, feedback=0.0)
    out = [ap.process_original(x) for x in [1.0, 0.0, 0.0]]
    assert out == [-1.0, 0.0, 1.0]


def test_get_z_and_last():
    ap = Allpass(3, feedback=0.0)
    for x in [1.0, 2.0, 3.0]:
        ap(x)
    assert ap.get_z(1) == 3.0
    assert ap.get_z(3) == 1.0
    assert ap.last == 1.0
    with pytest.raises(IndexError):
        ap.get_z(0)
    with pytest.raises(IndexError):
        ap.get_z(4)


def test_get_z_unallocated_raises():
    with pytest.raises(IndexError):
        Allpass().get_z(1)


def test_resize_grow_keeps_pending_signal():
    ap = Allpass(3, feedback=0.0)
    for x in [1.0, 2.0, 3.0]:
        ap(x)
    ap.resize(5)
    assert ap.size == 5
    assert [ap(0.0) for _ in range(5)] == [0.0, 0.0, 1.0, 2.0, 3.0]


def test_resize_shrink_drops_oldest():
    ap = Allpass(3, feedback=0.0)
    for x in [1.0, 2.0, 3.0]:
        ap(x)
    ap.resize(2)
    assert ap.size == 2
    assert [ap(0.0) for _ in range(2)] == [2.0, 3.0]


def test_resize_non_positive_is_ignored():
    ap = Allpass(4)
    ap.resize(0)
    ap.resize(-3)
    assert ap.size == 4


def test_mute_and_free():
    ap = Allpass(2, feedback=0.0)
    ap(5.0)
    ap.mute()
    assert [ap(0.0) for _ in range(3)] == [0.0, 0.0, 0.0]
    ap.free()
    assert ap.size == 0
    assert ap(7.0) == 7.0


def test_unallocated_allpass2_passes_through():
    ap = Allpass2()
    ap.resize(3, 0)
    assert ap(0.5) == 0.5


def test_allpass2_zero_feedback_delays_by_both_lengths():
    ap = Allpass2()
    ap.resize(2, 3)
    response = impulse_response(ap, 8)
    assert response.index(1.0) == 5
    assert sum(abs(v) for v in response) == 1.0


def test_allpass2_impulse_energy_is_unity():
    ap = Allpass2()
    ap.resize(3, 7)
    ap.feedback1 = 0.4
    ap.feedback2 = 0.5
    response = impulse_response(ap, 6000)
    assert sum(v * v for v in response) == pytest.approx(1.0, rel=1e-9)


def test_allpass2_taps_and_errors():
    ap = Allpass2()
    ap.resize(2, 3)
    ap(1.0)
    assert ap.get_z1(1) == 1.0
    assert ap.get_z2(1) == 0.0
    assert ap.last1 == 0.0
    with pytest.raises(IndexError):
        ap.get_z1(3)
    with pytest.raises(IndexError):
        ap.get_z2(0)


def test_allpass2_mute_and_free():
    ap = Allpass2()
    ap.resize(2, 2)
    ap(1.0)
    ap.mute()
    assert [ap(0.0) for _ in range(6)] == [0.0] * 6
    ap.free()
    assert (ap.size1, ap.size2) == (0, 0)
    assert ap(3.0) == 3.0