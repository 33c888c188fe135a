import numpy as np
import pytest

from chunkpic.esirkepov import deposit1d, deposit2d, deposit3d, shift_weights

S_OLD_X = np.array([0.0, 0.7, 0.3, 0.0])
S_NEW_X = np.array([0.0, 0.4, 0.6, 0.0])
S_OLD_Y = np.array([0.0, 0.25, 0.75, 0.0])
S_NEW_Y = np.array([0.0, 0.5, 0.5, 0.0])
S_OLD_Z = np.array([0.0, 0.9, 0.1, 0.0])
S_NEW_Z = np.array([0.0, 0.6, 0.4, 0.0])


def _weights(old, new):
    return np.array([old, new], dtype=float)


def _diff(array, axis):
    return np.diff(array, axis=axis, append=0.0)


def test_shift_weights_scalar():
    ss = np.array([[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0], [9.0, 10.0, 11.0, 12.0]])
    shift_weights([-1, 1, 0], ss)
    np.testing.assert_array_equal(ss[0], [2.0, 3.0, 4.0, 4.0])
    np.testing.assert_array_equal(ss[1], [5.0, 5.0, 6.0, 7.0])
    np.testing.assert_array_equal(ss[2], [9.0, 10.0, 11.0, 12.0])


def test_shift_weights_per_lane():
    ss = np.array([[[1.0, 10.0], [2.0, 20.0], [3.0, 30.0]]])
    shift_weights([np.array([-1, 1])], ss)
    np.testing.assert_array_equal(ss[0, :, 0], [2.0, 3.0, 3.0])
    np.testing.assert_array_equal(ss[0, :, 1], [10.0, 10.0, 20.0])


def test_shift_weights_wrong_dim():
    with pytest.raises(ValueError):
        shift_weights([0, 0], np.zeros((3, 4)))


def test_deposit1d_continuity_and_totals():
    qs, dxdt, vy, vz = 2.0, 0.5, 0.3, -0.7
    ss = np.array([[S_OLD_X], [S_NEW_X]])
    current = np.zeros((4, 4))
    deposit1d(dxdt, vy, vz, qs, ss, current)

    np.testing.assert_allclose(current[:, 0], qs * S_NEW_X)
    np.testing.assert_allclose(ss[1, 0], S_NEW_X - S_OLD_X)
    assert current[0, 1] == 0.0
    drho = qs * (S_NEW_X - S_OLD_X)
    np.testing.assert_allclose(drho + _diff(current[:, 1], 0) / dxdt, 0.0, atol=1e-12)
    assert current[:, 2].sum() == pytest.approx(qs * vy)
    assert current[:, 3].sum() == pytest.approx(qs * vz)


def test_deposit2d_continuity():
    qs, dxdt, dydt, vz = 1.5, 0.4, 0.6, 0.2
    ss = np.stack([_weights(S_OLD_X, S_NEW_X), _weights(S_OLD_Y, S_NEW_Y)], axis=1)
    current = np.zeros((4, 4, 4))
    deposit2d(dxdt, dydt, vz, qs, ss, current)

    rho_old = qs * np.outer(S_OLD_Y, S_OLD_X)
    rho_new = current[:, :, 0]
    np.testing.assert_allclose(rho_new, qs * np.outer(S_NEW_Y, S_NEW_X))
    div = _diff(current[:, :, 1], 1) / dxdt + _diff(current[:, :, 2], 0) / dydt
    np.testing.assert_allclose(rho_new - rho_old + div, 0.0, atol=1e-12)
    assert current[:, :, 3].sum() == pytest.approx(qs * vz)


def test_deposit3d_continuity():
    qs, dxdt, dydt, dzdt = 0.8, 0.3, 0.5, 0.7
    ss = np.stack(
        [
            _weights(S_OLD_X, S_NEW_X),
            _weights(S_OLD_Y, S_NEW_Y),
            _weights(S_OLD_Z, S_NEW_Z),
        ],
        axis=1,
    )
    current = np.zeros((4, 4, 4, 4))
    deposit3d(dxdt, dydt, dzdt, qs, ss, current)

    def density(sx, sy, sz):
        return qs * sz[:, None, None] * sy[None, :, None] * sx[None, None, :]

    rho_old = density(S_OLD_X, S_OLD_Y, S_OLD_Z)
    rho_new = current[..., 0]
    np.testing.assert_allclose(rho_new, density(S_NEW_X, S_NEW_Y, S_NEW_Z))
    div = (
        _diff(current[..., 1], 2) / dxdt
        + _diff(current[..., 2], 1) / dydt
        + _diff(current[..., 3], 0) / dzdt
    )
    np.testing.assert_allclose(rho_new - rho_old + div, 0.0, atol=1e-12)


def test_deposit_accumulates():
    ss = np.array([[S_OLD_X], [S_NEW_X]])
    current = np.ones((4, 4))
    deposit1d(0.0, 0.0, 0.0, 1.0, ss, current)
    np.testing.assert_allclose(current[:, 0], 1.0 + S_NEW_X)
    np.testing.assert_allclose(current[:, 1], 1.0)


def test_deposit_rejects_bad_shapes():
    with pytest.raises(ValueError):
        deposit2d(1.0, 1.0, 0.0, 1.0, np.zeros((2, 2, 4)), np.zeros((4, 4, 3)))
    with pytest.raises(ValueError):
        deposit3d(1.0, 1.0, 1.0, 1.0, np.zeros((2, 2, 4)), np.zeros((4, 4, 4, 4)))


def test_deposit_rejects_non_arrays():
    with pytest.raises(TypeError):
        deposit1d(1.0, 0.0, 0.0, 1.0, [[[0.0] * 4], [[0.0] * 4]], np.zeros((4, 4)))