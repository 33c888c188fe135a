"""Charge-conserving current deposition (Esirkepov 2001).

Weights ``ss`` have shape ``(2, dim, N)`` with ``N = order + 3``: ``ss[0]``
holds the 1D shape factors before and ``ss[1]`` after a particle moves by one
step, in the direction order x, y, z. The local ``current`` mesh has shape
``(N,) * dim + (4,)`` indexed ``[..., jy, jx, component]`` where component 0
is the charge density and 1, 2, 3 are Jx, Jy, Jz. Both arrays are modified in
place: the current is accumulated, and ``ss[1]`` is replaced by the weight
difference ``ss[1] - ss[0]``.
"""

from __future__ import annotations

from typing import Any

import numpy as np

_A = 1.0 / 2
_B = 1.0 / 3


def _check(ss: Any, current: Any, dim: int) -> int:
    if not isinstance(ss, np.ndarray) or not isinstance(current, np.ndarray):
        raise TypeError("ss and current must be numpy arrays")
    if ss.ndim != 3 or ss.shape[0] != 2 or ss.shape[1] != dim or ss.shape[2] < 3:
        raise ValueError(f"ss must have shape (2, {dim}, order + 3), got {ss.shape}")
    n = ss.shape[2]
    expected = (n,) * dim + (4,)
    if current.shape != expected:
        raise ValueError(f"current must have shape {expected}, got {current.shape}")
    return n


def shift_weights(shift: Any, ss: np.ndarray) -> None:
    """Shift each row of ``ss`` by one cell in place.

    A negative ``shift[d]`` moves row ``d`` one cell to the left, a positive
    one to the right; zero leaves it alone. Rows may carry a trailing lane
    axis, in which case ``shift[d]`` may be an array giving one shift per lane.
    """
    if not isinstance(ss, np.ndarray):
        raise TypeError("ss must be a numpy array")
    dim = ss.shape[0]
    shift = np.asarray(shift)
    if shift.shape[0] != dim:
        raise ValueError(f"shift must have {dim} entries, got {shift.shape[0]}")

    for d in range(dim):
        s = shift[d]
        forward = np.asarray(s < 0)
        ss[d, :-1] = np.where(forward, ss[d, 1:], ss[d, :-1])
        backward = np.asarray(s > 0)
        ss[d, 1:] = np.where(backward, ss[d, :-1], ss[d, 1:])


def deposit1d(
    dxdt: float, vy: float, vz: float, qs: float, ss: np.ndarray, current: np.ndarray
) -> None:
    """Accumulate charge and current of one particle on a 1D local mesh."""
    _check(ss, current, 1)

    current[:, 0] += qs * ss[1, 0]

    ss[1] -= ss[0]

    s0x, dsx = ss[0, 0], ss[1, 0]
    wx = -(qs * dxdt)
    current[1:, 1] += np.cumsum(dsx[:-1] * wx)
    current[:, 2] += (s0x + _A * dsx) * (qs * vy)
    current[:, 3] += (s0x + _A * dsx) * (qs * vz)


def deposit2d(
    dxdt: float, dydt: float, vz: float, qs: float, ss: np.ndarray, current: np.ndarray
) -> None:
    """Accumulate charge and current of one particle on a 2D local mesh."""
    _check(ss, current, 2)

    current[:, :, 0] += qs * np.outer(ss[1, 1], ss[1, 0])

    ss[1] -= ss[0]

    s0x, s0y = ss[0, 0], ss[0, 1]
    dsx, dsy = ss[1, 0], ss[1, 1]

    wx = -(s0y + _A * dsy) * (qs * dxdt)  # indexed by jy
    current[:, 1:, 1] += np.cumsum(np.outer(wx, dsx[:-1]), axis=1)

    wy = -(s0x + _A * dsx) * (qs * dydt)  # indexed by jx
    current[1:, :, 2] += np.cumsum(np.outer(dsy[:-1], wy), axis=0)

    wz = (np.outer(s0y, s0x + _A * dsx) + np.outer(dsy, _A * s0x + _B * dsx)) * (qs * vz)
    current[:, :, 3] += wz


def deposit3d(
    dxdt: float, dydt: float, dzdt: float, qs: float, ss: np.ndarray, current: np.ndarray
) -> None:
    """Accumulate charge and current of one particle on a 3D local mesh."""
    _check(ss, current, 3)

    s1x, s1y, s1z = ss[1, 0], ss[1, 1], ss[1, 2]
    current[..., 0] += qs * (s1z[:, None, None] * s1y[None, :, None] * s1x[None, None, :])

    ss[1] -= ss[0]

    s0x, s0y, s0z = ss[0, 0], ss[0, 1], ss[0, 2]
    dsx, dsy, dsz = ss[1, 0], ss[1, 1], ss[1, 2]

    # wx[jz, jy]
    wx = -(np.outer(s0z, s0y + _A * dsy) + np.outer(dsz, _A * s0y + _B * dsy)) * (qs * dxdt)
    current[:, :, 1:, 1] += np.cumsum(wx[:, :, None] * dsx[None, None, :-1], axis=2)

    # wy[jz, jx]
    wy = -(np.outer(s0z + _A * dsz, s0x) + np.outer(_A * s0z + _B * dsz, dsx)) * (qs * dydt)
    current[:, 1:, :, 2] += np.cumsum(wy[:, None, :] * dsy[None, :-1, None], axis=1)

    # wz[jy, jx]
    wz = -(np.outer(s0y, s0x + _A * dsx) + np.outer(dsy, _A * s0x + _B * dsx)) * (qs * dzdt)
    current[1:, :, :, 3] += np.cumsum(dsz[:-1, None, None] * wz[None, :, :], axis=0)