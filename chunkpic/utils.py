"""Shared constants and small helpers used throughout the package."""

from __future__ import annotations

import enum
import math
import os
import sys
import time

# Maximum number of chunks a single rank may own; message tags stay below it.
MAX_CHUNK_PER_RANK = 32768

# Default vector width (number of 64-bit floats per vector lane group).
SIMD_WIDTH = 8

PI = math.pi
PI2 = 2.0 * math.pi
PI4 = 4.0 * math.pi


class SendRecvMode(enum.IntEnum):
    """Flags marking the send or receive side of a boundary exchange."""

    SEND = 0b01000000000000
    RECV = 0b10000000000000


class ArrayLayout(enum.IntEnum):
    """Memory layout of multi-dimensional arrays."""

    LEFT = 0  # column-major
    RIGHT = 1  # row-major


ARRAY_LAYOUT = ArrayLayout.RIGHT


def wall_clock() -> float:
    """Return the wall-clock time since the epoch in seconds."""
    return time.time_ns() * 1.0e-9


def get_endian_flag() -> int:
    """Return 1 on a little-endian system and 16777216 on a big-endian one."""
    return int.from_bytes(b"\x01\x00\x00\x00", sys.byteorder)


def get_max_threads() -> int:
    """Return the number of threads available for parallel work.

    ``OMP_NUM_THREADS`` takes precedence when it holds a positive number;
    otherwise the number of usable processors is returned.
    """
    value = os.environ.get("OMP_NUM_THREADS", "")
    first = value.split(",")[0].strip()
    if first.isdigit() and int(first) > 0:
        return int(first)
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


def format_step(step: int) -> str:
    """Return the zero-padded, eight-digit representation of a time step."""
    return f"{step:08d}"


def sync_directory(dirname: str | os.PathLike) -> bool:
    """Flush a directory entry to disk.

    Returns True when the directory was synchronised and False when the path
    is not a directory or the platform cannot open directories.
    """
    path = os.fspath(dirname)
    if not os.path.isdir(path) or not hasattr(os, "O_DIRECTORY"):
        return False
    fd = os.open(path, os.O_RDONLY | os.O_DIRECTORY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)
    return True