"""First- and second-order allpass filters built on plain delay lines."""

from __future__ import annotations

from reverbkit.utils import undenormal


def _tap(buffer: list[float], position: int, index: int) -> float:
    size = len(buffer)
    if not 1 <= index <= size:
        raise IndexError(f"delay index must lie in 1..{size}: {index}")
    return buffer[(position - index) % size]


class Allpass:
    """A first-order Schroeder allpass filter around a delay line."""

    def __init__(self, size: int = 0, feedback: float = 0.0, decay: float = 1.0) -> None:
        self.feedback = feedback
        self.decay = decay
        self._buffer: list[float] = []
        self._index = 0
        self.resize(size)

    @property
    def size(self) -> int:
        """Length of the delay in samples; 0 when unallocated."""
        return len(self._buffer)

    def resize(self, size: int) -> None:
        """Change the delay length, keeping the signal still in the filter.

        Growing inserts silence ahead of the pending signal; shrinking drops
        the oldest part. A non-positive size is ignored.
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
        """Release the buffer; the filter then passes its input straight through."""
        self._buffer = []
        self._index = 0

    def mute(self) -> None:
        """Clear the stored signal."""
        if not self._buffer:
            return
        self._buffer = [0.0] * len(self._buffer)
        self._index = 0

    @property
    def last(self) -> float:
        """The oldest stored sample, z^-size of the internal line."""
        if not self._buffer:
            return 0.0
        return self._buffer[self._index]

    def get_z(self, index: int) -> float:
        """Return the internal sample stored ``index`` steps ago (1..size)."""
        return _tap(self._buffer, self._index, index)

    def _advance(self, stored: float) -> None:
        self._buffer[self._index] = stored
        self._index += 1
        if self._index >= len(self._buffer):
            self._index = 0

    def process(self, value: float) -> float:
        """Run one sample through the allpass filter."""
        if not self._buffer:
            return value
        delayed = self._buffer[self._index]
        value += self.feedback * delayed
        out = undenormal(delayed - self.feedback * value)
        self._advance(value)
        return out

    def process_decay(self, value: float) -> float:
        """Run one sample through the allpass filter with the delayed path scaled by decay."""
        if not self._buffer:
            return value
        delayed = self._buffer[self._index]
        value += self.feedback * delayed
        out = undenormal(self.decay * delayed - self.feedback * value)
        self._advance(value)
        return out

    def process_original(self, value: float) -> float:
        """Run one sample through the classic freeverb-style allpass approximation."""
        if not self._buffer:
            return value
        delayed = undenormal(self._buffer[self._index])
        self._advance(value + delayed * self.feedback)
        return delayed - value

    def __call__(self, value: float) -> float:
        return self.process(value)


class Allpass2:
    """A nested second-order allpass: an inner allpass inside an outer one."""

    def __init__(self) -> None:
        self.feedback1 = 0.0
        self.feedback2 = 0.0
        self.decay1 = 1.0
        self.decay2 = 1.0
        self._buffer1: list[float] = []
        self._buffer2: list[float] = []
        self._index1 = 0
        self._index2 = 0

    @property
    def size1(self) -> int:
        """Inner delay length in samples."""
        return len(self._buffer1)

    @property
    def size2(self) -> int:
        """Outer delay length in samples."""
        return len(self._buffer2)

    def _allocated(self) -> bool:
        return bool(self._buffer1) and bool(self._buffer2)

    def resize(self, size1: int, size2: int) -> None:
        """Allocate cleared inner and outer delays; ignored unless both sizes are positive."""
        if size1 <= 0 or size2 <= 0:
            return
        self.free()
        self._buffer1 = [0.0] * size1
        self._buffer2 = [0.0] * size2

    def free(self) -> None:
        """Release both delays; the filter then passes its input straight through."""
        if not self._allocated():
            return
        self._buffer1 = []
        self._buffer2 = []
        self._index1 = self._index2 = 0

    def mute(self) -> None:
        """Clear the stored signal in both delays."""
        if not self._allocated():
            return
        self._buffer1 = [0.0] * len(self._buffer1)
        self._buffer2 = [0.0] * len(self._buffer2)

    @property
    def last1(self) -> float:
        """The oldest sample of the inner delay."""
        if not self._buffer1:
            return 0.0
        return self._buffer1[self._index1]

    @property
    def last2(self) -> float:
        """The oldest sample of the outer delay."""
        if not self._buffer2:
            return 0.0
        return self._buffer2[self._index2]

    def get_z1(self, index: int) -> float:
        """Return the inner sample stored ``index`` steps ago (1..size1)."""
        return _tap(self._buffer1, self._index1, index)

    def get_z2(self, index: int) -> float:
        """Return the outer sample stored ``index`` steps ago (1..size2)."""
        return _tap(self._buffer2, self._index2, index)

    def process(self, value: float) -> float:
        """Run one sample through the nested allpass."""
        if not self._allocated():
            return value
        b1, b2 = self._buffer1, self._buffer2
        i1, i2 = self._index1, self._index2
        value += self.feedback2 * b2[i2]
        out = undenormal(self.decay2 * b2[i2] - value * self.feedback2)
        value += self.feedback1 * b1[i1]
        b2[i2] = undenormal(self.decay1 * b1[i1] - value * self.feedback1)
        b1[i1] = value
        self._index1 = (i1 + 1) % len(b1)
        self._index2 = (i2 + 1) % len(b2)
        return out

    def __call__(self, value: float) -> float:
        return self.process(value)