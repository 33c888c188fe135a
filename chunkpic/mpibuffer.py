"""Per-direction buffers and bookkeeping for a boundary exchange."""

from __future__ import annotations

import struct

import numpy as np

from .buffer import Buffer

DIRECTION_SHAPE = (3, 3, 3)
NUM_DIRECTIONS = 27

# Size assumed for a communicator, request or datatype handle.
HANDLE_BYTE = 8

_HEADER = struct.Struct("<??ii")
_INT_BYTE = 4
PACKED_SIZE = _HEADER.size + 2 * NUM_DIRECTIONS * _INT_BYTE


def _handles() -> np.ndarray:
    return np.full(DIRECTION_SHAPE, None, dtype=object)


class MpiBuffer:
    """Send/receive buffers with per-direction sizes, offsets and handles."""

    def __init__(self) -> None:
        self.sendwait = False
        self.recvwait = False
        self.sendbuf = Buffer()
        self.recvbuf = Buffer()
        self.bufsize = np.zeros(DIRECTION_SHAPE, dtype=np.int32)
        self.bufaddr = np.zeros(DIRECTION_SHAPE, dtype=np.int32)
        self.comm = _handles()
        self.sendreq = _handles()
        self.recvreq = _handles()
        self.sendtype = _handles()
        self.recvtype = _handles()

    def get_send_buffer(self, iz: int, iy: int, ix: int) -> memoryview:
        """Return the send buffer region for the given direction."""
        return self.sendbuf.get(int(self.bufaddr[iz, iy, ix]))

    def get_recv_buffer(self, iz: int, iy: int, ix: int) -> memoryview:
        """Return the receive buffer region for the given direction."""
        return self.recvbuf.get(int(self.bufaddr[iz, iy, ix]))

    @property
    def size_byte(self) -> int:
        """Approximate memory held by this object in bytes."""
        handles = (self.comm, self.sendreq, self.recvreq, self.sendtype, self.recvtype)
        return (
            2
            + self.sendbuf.size
            + self.recvbuf.size
            + (self.bufsize.size + self.bufaddr.size) * _INT_BYTE
            + sum(h.size for h in handles) * HANDLE_BYTE
        )

    def pack(self) -> bytes:
        """Serialise flags, buffer sizes and the direction tables."""
        header = _HEADER.pack(self.sendwait, self.recvwait, self.sendbuf.size, self.recvbuf.size)
        return (
            header
            + self.bufsize.astype("<i4").tobytes()
            + self.bufaddr.astype("<i4").tobytes()
        )

    def unpack(self, data: bytes | bytearray | memoryview, address: int = 0) -> int:
        """Restore state from ``data`` at ``address``; return the address after it.

        The buffers are reallocated to the stored sizes.
        """
        if address < 0 or len(data) - address < PACKED_SIZE:
            raise ValueError(
                f"need {PACKED_SIZE} bytes at offset {address}, have {len(data) - address}"
            )
        sendwait, recvwait, ssize, rsize = _HEADER.unpack_from(data, address)
        address += _HEADER.size

        tables = []
        for _ in range(2):
            table = np.frombuffer(data, dtype="<i4", count=NUM_DIRECTIONS, offset=address)
            tables.append(table.astype(np.int32).reshape(DIRECTION_SHAPE))
            address += NUM_DIRECTIONS * _INT_BYTE

        self.sendwait = bool(sendwait)
        self.recvwait = bool(recvwait)
        self.bufsize, self.bufaddr = tables
        self.sendbuf.resize(ssize)
        self.recvbuf.resize(rsize)
        return address