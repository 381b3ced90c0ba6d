import math

import pytest

from reverbkit.delay import Delay, ModulatedDelay


def _run(line, values, modulations=None):
    if modulations is None:
        return [line(v) for v in values]
    return [line(v, m) for v, m in zip(values, modulations)]


def test_unallocated_delay_passes_through():
    line = Delay()
    assert line.size == 0
    assert line.process(0.75) == 0.75
    assert line.last == 0.0
    assert line.get_z(3) == 0.0


@pytest.mark.parametrize("size", [1, 3, 7])
def test_impulse_is_delayed_by_size(size):
    line = Delay(size)
    out = _run(line, [1.0] + [0.0] * (size + 2))
    assert out.index(1.0) == size
    assert sum(out) == 1.0


def test_get_z_reads_history_and_clamps():
    line = Delay(3)
    _run(line, [1.0, 2.0, 3.0])
    assert line.get_z(1) == 3.0
    assert line.get_z(2) == 2.0
    assert line.get_z(3) == 1.0
    assert line.get_z(10) == 1.0
    assert line.get_z(0) == 3.0
    assert line.last == line.get_z(line.size)


def test_growing_keeps_pending_samples():
    line = Delay(3)
    _run(line, [1.0, 2.0, 3.0])
    line.resize(5)
    assert line.size == 5
    assert _run(line, [0.0] * 5) == [0.0, 0.0, 1.0, 2.0, 3.0]


def test_shrinking_drops_oldest_samples():
    line = Delay(3)
    _run(line, [1.0, 2.0, 3.0])
    line.resize(2)
    assert line.size == 2
    assert _run(line, [0.0, 0.0]) == [2.0, 3.0]


def test_non_positive_resize_is_ignored():
    line = Delay(4)
    line.resize(0)
    line.resize(-2)
    assert line.size == 4


def test_mute_clears_and_free_releases():
    line = Delay(2)
    _run(line, [5.0, 6.0])
    line.mute()
    assert _run(line, [0.0, 0.0]) == [0.0, 0.0]
    line.free()
    assert line.size == 0
    assert line(4.0) == 4.0


def test_process_wf_scales_stored_value():
    line = Delay(1, feedback=0.5)
    assert line.process_wf(4.0) == 0.0
    assert line.process_wf(0.0) == 0.5 * 4.0
    bare = Delay(feedback=0.25)
    assert bare.process_wf(8.0) == 0.25 * 8.0


def test_modulated_sizes_and_clamping():
    line = ModulatedDelay()
    line.resize(10, 4)
    assert (line.size, line.delay_size, line.modulation_size) == (14, 10, 4)
    line.resize(5, 9)
    assert line.modulation_size == 5
    assert line.size == 10
    line.resize(5, -3)
    assert line.modulation_size == 0
    assert line.size == line.delay_size


def test_modulated_unallocated_passes_through():
    line = ModulatedDelay()
    assert line.process(0.3, 0.5) == 0.3
    line.resize(0, 2)
    assert line.size == 0


def _signal(n):
    return [math.sin(0.3 * i) + (1.0 if i == 0 else 0.0) for i in range(n)]


def _sweep(n):
    return [math.sin(0.05 * i) for i in range(n)]


@pytest.mark.parametrize("size, modsize", [(8, 0), (8, 3), (5, 5)])
def test_modulated_is_linear(size, modsize):
    a = ModulatedDelay(size, modsize)
    b = ModulatedDelay(size, modsize)
    sig = _signal(40)
    mod = _sweep(40)
    out_a = _run(a, sig, mod)
    out_b = _run(b, [2.0 * v for v in sig], mod)
    assert any(abs(v) > 1e-9 for v in out_a)
    for x, y in zip(out_a, out_b):
        assert y == pytest.approx(2.0 * x, abs=1e-12)


def test_modulated_feedback_scales_input():
    a = ModulatedDelay(6, 2, feedback=0.5)
    b = ModulatedDelay(6, 2)
    sig = _signal(30)
    mod = _sweep(30)
    out_a = _run(a, [2.0 * v for v in sig], mod)
    out_b = _run(b, sig, mod)
    assert out_a == pytest.approx(out_b, abs=1e-12)


def test_modulated_silence_stays_silent():
    line = ModulatedDelay(7, 3)
    out = _run(line, [0.0] * 20, _sweep(20))
    assert out == [0.0] * 20


def test_modulated_mute_restores_initial_state():
    line = ModulatedDelay(9, 2)
    sig = _signal(25)
    mod = _sweep(25)
    first = _run(line, sig, mod)
    line.mute()
    second = _run(line, sig, mod)
    assert first == second
    assert line.last == second[-1]


def test_modulated_free_releases():
    line = ModulatedDelay(4, 1)
    _run(line, [1.0, 2.0])
    line.free()
    assert line.size == 0
    assert line.modulation_size == 0
    assert line(1.5) == 1.5