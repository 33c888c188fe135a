"""Interpolation of gridded field values to particle positions.

The field ``eb`` is a 4D array indexed ``[iz, iy, ix, component]``. Weights
have ``order + 2`` entries along their first axis. Start indices and weights
may carry lanes: an integer array of start indices, or weights of shape
``(order + 2, lanes)``, gives one result per lane.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np


def shift_weights(shift: Any, ww: np.ndarray) -> None:
    """Shift ``ww`` one cell to the right in place where ``shift > 0``.

    The first entry becomes zero. With lanes, ``shift`` may be an array
    giving the decision per lane.
    """
    if not isinstance(ww, np.ndarray):
        raise TypeError("ww must be a numpy array")
    cond = np.asarray(shift) > 0
    ww[1:] = np.where(cond, ww[:-1], ww[1:])
    ww[0] = np.where(cond, 0, ww[0])


def _interpolate(
    eb: np.ndarray,
    fixed: Sequence[int],
    starts: Sequence[Any],
    ik: int,
    weights: Sequence[Any],
    dt: Any,
) -> Any:
    if not isinstance(eb, np.ndarray) or eb.ndim != 4:
        raise ValueError("eb must be a 4D numpy array")
    for value in (*fixed, ik):
        if value < 0:
            raise IndexError(f"negative index {value}")

    ws = [np.asarray(w, dtype=float) for w in weights]
    n = ws[0].shape[0]
    if any(w.shape[0] != n for w in ws):
        raise ValueError("all weights must have the same length")

    ss = [np.asarray(s) for s in starts]
    if any(not np.issubdtype(s.dtype, np.integer) for s in ss):
        raise TypeError("start indices must be integers")

    lane = np.broadcast_shapes(*(s.shape for s in ss), *(w.shape[1:] for w in ws))
    k = len(ss)
    nlane = len(lane)
    offsets = np.arange(n)

    index: list[Any] = list(fixed)
    weight: Any = 1.0
    for d, (s, w) in enumerate(zip(ss, ws)):
        tail = (1,) * d + (n,) + (1,) * (k - 1 - d)
        idx = np.broadcast_to(s, lane)[..., None] + offsets
        if (idx < 0).any():
            raise IndexError("negative grid index")
        index.append(idx.reshape(lane + tail))
        w_lane = np.moveaxis(np.broadcast_to(w, (n,) + lane), 0, -1)
        weight = weight * w_lane.reshape(lane + tail)

    values = eb[tuple(index) + (ik,)]
    result = (values * weight).sum(axis=tuple(range(nlane, nlane + k))) * dt
    if lane == ():
        return float(result)
    return result


def interp1d(eb: np.ndarray, iz0: int, iy0: int, ix0: Any, ik: int, wx: Any, dt: Any) -> Any:
    """Interpolate component ``ik`` along x at fixed ``iz0`` and ``iy0``, times ``dt``."""
    return _interpolate(eb, (iz0, iy0), (ix0,), ik, (wx,), dt)


def interp2d(
    eb: np.ndarray, iz0: int, iy0: Any, ix0: Any, ik: int, wy: Any, wx: Any, dt: Any
) -> Any:
    """Interpolate component ``ik`` in the y-x plane at fixed ``iz0``, times ``dt``."""
    return _interpolate(eb, (iz0,), (iy0, ix0), ik, (wy, wx), dt)


def interp3d(
    eb: np.ndarray, iz0: Any, iy0: Any, ix0: Any, ik: int, wz: Any, wy: Any, wx: Any, dt: Any
) -> Any:
    """Interpolate component ``ik`` in 3D, multiplied by ``dt``."""
    return _interpolate(eb, (), (iz0, iy0, ix0), ik, (wz, wy, wx), dt)