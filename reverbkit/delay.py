"""Plain and modulated delay lines."""

from __future__ import annotations

import math

from reverbkit.utils import undenormal


class Delay:
    """A fixed-length sample delay line."""

    def __init__(self, size: int = 0, feedback: float = 1.0) -> None:
        self.feedback = feedback
        self._buffer: list[float] = []
        self._index = 0
        self.resize(size)

    @property
    def size(self) -> int:
        """Length of the delay in samples; 0 when unallocated."""
        return len(self._buffer)

    def resize(self, size: int) -> None:
        """Change the delay length, keeping the samples still in flight.

        Growing the line inserts silence ahead of the pending samples;
        shrinking it drops the oldest ones. A non-positive size is ignored.
        """
        if size <= 0:
            return
        old_size = len(self._buffer)
        new_buffer = [0.0] * size
        if old_size:
            if old_size <= size:
                new_buffer[size - old_size:] = [self.process(0.0) for _ in range(old_size)]
            else:
                for _ in range(old_size - size):
                    self.process(0.0)
                new_buffer = [self.process(0.0) for _ in range(size)]
        self._buffer = new_buffer
        self._index = 0

    def free(self) -> None:
        """Release the buffer; the line then passes its input straight through."""
        self._buffer = []
        self._index = 0

    def mute(self) -> None:
        """Clear the stored samples."""
        if not self._buffer:
            return
        self._buffer = [0.0] * len(self._buffer)
        self._index = 0

    @property
    def last(self) -> float:
        """The oldest stored sample, the one the next call will return."""
        if not self._buffer:
            return 0.0
        return self._buffer[self._index]

    def get_z(self, index: int) -> float:
        """Return the sample written ``index`` steps ago, clamped to 1..size."""
        size = len(self._buffer)
        if size == 0:
            return 0.0
        index = max(1, min(index, size))
        return self._buffer[(self._index - index) % size]

    def process(self, value: float) -> float:
        """Push ``value`` into the line and return the sample leaving it."""
        if not self._buffer:
            return value
        return self._push(value)

    def process_wf(self, value: float) -> float:
        """Like :meth:`process`, but store ``value`` scaled by the feedback."""
        if not self._buffer:
            return self.feedback * value
        return self._push(self.feedback * value)

    def _push(self, value: float) -> float:
        out = self._buffer[self._index]
        self._buffer[self._index] = value
        self._index += 1
        if self._index >= len(self._buffer):
            self._index = 0
        return out

    def __call__(self, value: float) -> float:
        return self.process(value)


class ModulatedDelay:
    """A delay line whose read point is swept with allpass interpolation."""

    def __init__(self, size: int = 0, modsize: int = 0, feedback: float = 1.0) -> None:
        self.feedback = feedback
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
        """Release the buffer; the line then passes its input straight through."""
        self._buffer = []
        self._read = self._write = self._modsize = 0
        self._z1 = 0.0

    def mute(self) -> None:
        """Clear the stored samples and the interpolator state."""
        if not self._buffer:
            return
        self._buffer = [0.0] * len(self._buffer)
        self._write = 0
        self._z1 = 0.0
        self._read = (self._modsize * 2) % len(self._buffer)

    @property
    def last(self) -> float:
        """The most recent output sample."""
        return self._z1

    def process(self, value: float, modulation: float = 0.0) -> float:
        """Push ``value`` and return the interpolated output.

        ``modulation`` moves the read point and is meant to lie in -1..+1.
        """
        size = len(self._buffer)
        if size == 0:
            return value
        position = (modulation + 1.0) * self._modsize
        floor_mod = math.floor(position)
        frac = 1.0 - (position - floor_mod)
        read_a = (self._read - int(floor_mod)) % size
        read_b = (read_a - 1) % size
        self._z1 = undenormal(self._buffer[read_b] + frac * (self._buffer[read_a] - self._z1))
        self._read += 1
        if self._read >= size:
            self._read = 0
        self._buffer[self._write] = self.feedback * value
        self._write += 1
        if self._write >= size:
            self._write = 0
        return self._z1

    def __call__(self, value: float, modulation: float = 0.0) -> float:
        return self.process(value, modulation)