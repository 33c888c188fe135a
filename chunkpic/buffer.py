"""Resizable byte buffer used for message exchange."""

from __future__ import annotations


class Buffer:
    """A growable block of bytes with offset views."""

    __slots__ = ("data",)

    def __init__(self, size: int = 0) -> None:
        if size < 0:
            raise ValueError(f"buffer size must be non-negative, got {size}")
        self.data = bytearray(size)

    @property
    def size(self) -> int:
        """Size of the buffer in bytes."""
        return len(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, pos: int = 0) -> memoryview:
        """Return a writable view starting ``pos`` bytes into the buffer."""
        if not 0 <= pos <= len(self.data):
            raise IndexError(f"position {pos} outside buffer of size {len(self.data)}")
        return memoryview(self.data)[pos:]

    def resize(self, size: int) -> None:
        """Reallocate to ``size`` bytes, keeping the common prefix."""
        if size < 0:
            raise ValueError(f"buffer size must be non-negative, got {size}")
        copysize = min(len(self.data), size)
        new = bytearray(size)
        new[:copysize] = self.data[:copysize]
        self.data = new