"""Multi-channel sample buffers."""

from __future__ import annotations

from collections.abc import Iterator


class Slot:
    """A fixed-size block of samples for one or more channels."""

    def __init__(self) -> None:
        self._data: list[list[float]] = []
        self._size = 0

    @property
    def size(self) -> int:
        """Number of samples in each channel."""
        return self._size

    @property
    def channels(self) -> int:
        """Number of channels."""
        return len(self._data)

    @property
    def data(self) -> list[list[float]]:
        """All channel buffers, in order."""
        return self._data

    def __iter__(self) -> Iterator[list[float]]:
        return iter(self._data)

    def __bool__(self) -> bool:
        return self._size > 0 and bool(self._data)

    def alloc(self, size: int, channels: int) -> None:
        """Allocate zeroed buffers; a non-positive size or channel count leaves the slot unchanged."""
        if size <= 0 or channels <= 0:
            return
        self.free()
        self._data = [[0.0] * size for _ in range(channels)]
        self._size = size

    def free(self) -> None:
        """Release all buffers."""
        self._data = []
        self._size = 0

    def channel(self, index: int) -> list[float]:
        """Return the buffer of channel ``index``, or channel 0 when ``index`` is out of range."""
        if not self:
            raise ValueError("slot is not allocated")
        if index < 0:
            raise IndexError(f"channel index must not be negative: {index}")
        if index < len(self._data):
            return self._data[index]
        return self._data[0]

    @property
    def left(self) -> list[float]:
        """The first channel."""
        return self.channel(0)

    @property
    def right(self) -> list[float]:
        """The second channel, or the first for a mono slot."""
        return self.channel(1)

    def mute(self, limit: int | None = None, *, offset: int = 0) -> None:
        """Zero ``limit`` samples from ``offset`` in every channel, or all samples by default.

        Negative values leave the data untouched; ranges are clipped to the buffer.
        """
        if not self:
            return
        if limit is None:
            limit = self._size
        if offset < 0 or limit < 0:
            return
        offset = min(offset, self._size)
        limit = min(limit, self._size - offset)
        zeros = [0.0] * limit
        for buffer in self._data:
            buffer[offset:offset + limit] = zeros