"""Allpass filters with a modulated delay: a swept first-order and a nested third-order filter."""

from __future__ import annotations

import math

from reverbkit.allpass import _tap
from reverbkit.utils import undenormal


class ModulatedAllpass:
    """A first-order allpass whose delay read point can be swept.

    The buffer holds the nominal delay plus room for the sweep. A modulation
    of 0 reads at the nominal delay; -1 and +1 move the read point by the
    full modulation size either way.
    """

    def __init__(
        self, size: int = 0, modsize: int = 0, feedback: float = 0.0, decay: float = 1.0
    ) -> None:
        self.decay = decay
        self._feedback = feedback
        self._feedback_mod = feedback
        self._buffer: list[float] = []
        self._read = 0
        self._write = 0
        self._modsize = 0
        self._z1 = 0.0
        self.resize(size, modsize)

    @property
    def size(self) -> int:
        """Total buffer length, delay plus modulation room."""
        return len(self._buffer)

    @property
    def delay_size(self) -> int:
        """Nominal delay length in samples."""
        return len(self._buffer) - self._modsize

    @property
    def modulation_size(self) -> int:
        """Maximum excursion of the read point in samples."""
        return self._modsize

    @property
    def feedback(self) -> float:
        """Allpass coefficient; assigning it also clears any feedback modulation."""
        return self._feedback

    @feedback.setter
    def feedback(self, value: float) -> None:
        self._feedback = value
        self._feedback_mod = value

    def resize(self, size: int, modsize: int = 0) -> None:
        """Allocate a cleared line of ``size`` samples with ``modsize`` samples of sweep.

        ``modsize`` is clamped to 0..size; a non-positive size is ignored.
        Previous contents are discarded.
        """
        if size <= 0:
            return
        modsize = max(0, min(modsize, size))
        self._buffer = [0.0] * (size + modsize)
        self._modsize = modsize
        self._write = 0
        self._z1 = 0.0
        self._read = (modsize * 2) % len(self._buffer)

    def free(self) -> None:
        """Release the buffer; the filter then passes its input straight through."""
        self._buffer = []
        self._read = self._write = self._modsize = 0
        self._z1 = 0.0

    def mute(self) -> None:
        """Clear the stored signal, the interpolator and any feedback modulation."""
        if not self._buffer:
            return
        self._buffer = [0.0] * len(self._buffer)
        self._write = 0
        self._z1 = 0.0
        self._read = (self._modsize * 2) % len(self._buffer)
        self._feedback_mod = self._feedback

    def set_90deg_frequency(self, fc: float, fs: float) -> None:
        """Set the feedback so the phase shift is 90 degrees at ``fc`` Hz."""
        tant = math.tan(math.pi * fc / fs)
        self._feedback = (tant - 1.0) / (tant + 1.0)

    def _read_points(self, modulation: float) -> tuple[int, int, float]:
        size = len(self._buffer)
        position = (modulation + 1.0) * self._modsize
        floor_mod = math.floor(position)
        read_a = (self._read - int(floor_mod)) % size
        read_b = (read_a - 1) % size
        return read_a, read_b, position - floor_mod

    def _step(self, stored: float) -> None:
        size = len(self._buffer)
        self._read += 1
        if self._read >= size:
            self._read = 0
        self._buffer[self._write] = stored
        self._write += 1
        if self._write >= size:
            self._write = 0

    def _interpolate(self, modulation: float) -> float:
        read_a, read_b, frac = self._read_points(modulation)
        buffer = self._buffer
        self._z1 = undenormal(buffer[read_b] + (1.0 - frac) * (buffer[read_a] - self._z1))
        return self._z1

    def _set_fmod(self, fmod: float | None) -> None:
        if fmod is not None:
            self._feedback_mod = self._feedback + fmod

    def process(self, value: float, modulation: float = 0.0, fmod: float | None = None) -> float:
        """Run one sample through the filter with allpass-interpolated modulation.

        ``modulation`` is meant to lie in -1..+1. When ``fmod`` is given the
        feedback becomes ``feedback + fmod`` from this sample on.
        """
        self._set_fmod(fmod)
        if not self._buffer:
            return value
        delayed = self._interpolate(modulation)
        stored = value + delayed * self._feedback_mod
        out = delayed - stored * self._feedback_mod
        self._step(stored)
        return out

    def process_decay(
        self, value: float, modulation: float = 0.0, fmod: float | None = None
    ) -> float:
        """Like :meth:`process`, with the delayed path scaled by the decay."""
        self._set_fmod(fmod)
        if not self._buffer:
            return value
        delayed = self._interpolate(modulation)
        stored = value + delayed * self._feedback_mod
        out = self.decay * delayed - stored * self._feedback_mod
        self._step(stored)
        return out

    def process_linear(
        self, value: float, modulation: float = 0.0, fmod: float | None = None
    ) -> float:
        """Like :meth:`process`, but with linear interpolation of the delayed signal."""
        self._set_fmod(fmod)
        if not self._buffer:
            return value
        read_a, read_b, frac = self._read_points(modulation)
        delayed = self._buffer[read_b] * frac + self._buffer[read_a] * (1.0 - frac)
        stored = value + delayed * self._feedback_mod
        out = delayed - stored * self._feedback_mod
        self._step(stored)
        return out

    def __call__(self, value: float, modulation: float = 0.0, fmod: float | None = None) -> float:
        return self.process(value, modulation, fmod)


class Allpass3:
    """A nested third-order allpass whose innermost delay can be swept."""

    def __init__(self) -> None:
        self.feedback1 = 0.0
        self.feedback2 = 0.0
        self.feedback3 = 0.0
        self.decay1 = 1.0
        self.decay2 = 1.0
        self.decay3 = 1.0
        self._buffer1: list[float] = []
        self._buffer2: list[float] = []
        self._buffer3: list[float] = []
        self._read1 = 0
        self._write1 = 0
        self._index2 = 0
        self._index3 = 0
        self._modsize = 0

    @property
    def size1(self) -> int:
        """Innermost buffer length, delay plus modulation room."""
        return len(self._buffer1)

    @property
    def size2(self) -> int:
        """Middle delay length in samples."""
        return len(self._buffer2)

    @property
    def size3(self) -> int:
        """Outer delay length in samples."""
        return len(self._buffer3)

    @property
    def modulation_size(self) -> int:
        """Maximum excursion of the innermost read point in samples."""
        return self._modsize

    def _allocated(self) -> bool:
        return bool(self._buffer1) and bool(self._buffer2) and bool(self._buffer3)

    def resize(self, size1: int, size2: int, size3: int, *, modsize: int = 0) -> None:
        """Allocate cleared delays; ignored unless all three sizes are positive.

        ``modsize`` adds sweep room to the innermost delay and is clamped to 0..size1.
        """
        if size1 <= 0 or size2 <= 0 or size3 <= 0:
            return
        modsize = max(0, min(modsize, size1))
        self.free()
        self._buffer1 = [0.0] * (size1 + modsize)
        self._buffer2 = [0.0] * size2
        self._buffer3 = [0.0] * size3
        self._modsize = modsize
        self.mute()

    def free(self) -> None:
        """Release all delays; the filter then passes its input straight through."""
        if not self._allocated():
            return
        self._buffer1 = []
        self._buffer2 = []
        self._buffer3 = []
        self._read1 = self._write1 = self._index2 = self._index3 = 0

    def mute(self) -> None:
        """Clear the stored signal in all delays."""
        if not self._allocated():
            return
        self._buffer1 = [0.0] * len(self._buffer1)
        self._buffer2 = [0.0] * len(self._buffer2)
        self._buffer3 = [0.0] * len(self._buffer3)
        self._write1 = 0
        self._read1 = (self._modsize * 2) % len(self._buffer1)

    @property
    def last1(self) -> float:
        """The sample at the innermost read point."""
        if not self._buffer1:
            return 0.0
        return self._buffer1[self._read1]

    @property
    def last2(self) -> float:
        """The oldest sample of the middle delay."""
        if not self._buffer2:
            return 0.0
        return self._buffer2[self._index2]

    @property
    def last3(self) -> float:
        """The oldest sample of the outer delay."""
        if not self._buffer3:
            return 0.0
        return self._buffer3[self._index3]

    def get_z1(self, index: int) -> float:
        """Return the innermost sample ``index`` steps before the read point (1..size1)."""
        return _tap(self._buffer1, self._read1, index)

    def get_z2(self, index: int) -> float:
        """Return the middle sample stored ``index`` steps ago (1..size2)."""
        return _tap(self._buffer2, self._index2, index)

    def get_z3(self, index: int) -> float:
        """Return the outer sample stored ``index`` steps ago (1..size3)."""
        return _tap(self._buffer3, self._index3, index)

    def _inner_delayed(self, modulation: float | None) -> float:
        buffer = self._buffer1
        if modulation is None:
            return buffer[self._read1]
        size = len(buffer)
        position = (modulation + 1.0) * self._modsize
        floor_mod = math.floor(position)
        frac = position - floor_mod
        read_a = (self._read1 - int(floor_mod)) % size
        read_b = (read_a - 1) % size
        return buffer[read_b] * frac + buffer[read_a] * (1.0 - frac)

    def process(self, value: float, modulation: float | None = None) -> float:
        """Run one sample through the nested allpass.

        Without ``modulation`` the innermost delay is read at its fixed point;
        with it (meant to lie in -1..+1) the read point is swept with linear
        interpolation.
        """
        if not self._allocated():
            return value
        b1, b2, b3 = self._buffer1, self._buffer2, self._buffer3
        i2, i3 = self._index2, self._index3

        value += self.feedback3 * b3[i3]
        out = undenormal(self.decay3 * b3[i3] - self.feedback3 * value)

        value += self.feedback2 * b2[i2]
        b3[i3] = undenormal(self.decay2 * b2[i2] - self.feedback2 * value)

        inner = self._inner_delayed(modulation)
        value += self.feedback1 * inner
        b2[i2] = undenormal(self.decay1 * inner - self.feedback1 * value)

        b1[self._write1] = value

        size1 = len(b1)
        self._write1 = (self._write1 + 1) % size1
        self._read1 = (self._read1 + 1) % size1
        self._index2 = (i2 + 1) % len(b2)
        self._index3 = (i3 + 1) % len(b3)
        return out

    def __call__(self, value: float, modulation: float | None = None) -> float:
        return self.process(value, modulation)