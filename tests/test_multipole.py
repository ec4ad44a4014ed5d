import cmath
import math

import numpy as np
import pytest

from molmodel.multipole import (
    dipole_moment,
    hexadecapole_moment,
    net_charge,
    octopole_moment,
    optical_dielectric_constant,
    quadrupole_moment,
    static_dielectric_constant,
    structure_factor,
)

Q = [0.8, -0.5, -0.3, 0.25]
R = [
    [0.1, -0.4, 1.2],
    [1.3, 0.7, -0.2],
    [-0.9, 0.5, 0.35],
    [0.2, -1.1, -0.6],
]


def _r2(r):
    return np.sum(np.asarray(r) ** 2, axis=1)


def test_net_charge_of_neutral_pair():
    assert net_charge([1.0, -1.0]) == pytest.approx(0.0)


def test_net_charge_empty():
    assert net_charge([]) == 0.0


def test_dipole_translation_invariant_for_neutral_system():
    q = [1.0, -0.4, -0.6]
    r = np.array(R[:3])
    shift = np.array([3.0, -2.0, 5.0])
    assert np.allclose(dipole_moment(q, r), dipole_moment(q, r + shift))


def test_dipole_is_linear_in_charges():
    d1 = dipole_moment(Q, R)
    d2 = dipole_moment([2 * x for x in Q], R)
    assert np.allclose(d2, 2 * d1)


def test_dipole_of_empty_system_is_zero():
    assert np.allclose(dipole_moment([], []), np.zeros(3))


def test_quadrupole_trace_equals_charge_weighted_r2():
    m = quadrupole_moment(Q, R)
    assert m["XX"] + m["YY"] + m["ZZ"] == pytest.approx(float(np.dot(Q, _r2(R))))


def test_quadrupole_components_named():
    assert list(quadrupole_moment(Q, R)) == ["XX", "YY", "ZZ", "XY", "XZ", "YZ"]


def test_octopole_contraction():
    m = octopole_moment(Q, R)
    x = np.asarray(R)[:, 0]
    expected = float(np.dot(Q, x * _r2(R)))
    assert m["XXX"] + m["XYY"] + m["XZZ"] == pytest.approx(expected)


def test_hexadecapole_contraction():
    m = hexadecapole_moment(Q, R)
    r2 = _r2(R)
    assert (m["XXXX"] + m["YYYY"] + m["ZZZZ"]
            + 2 * (m["XXYY"] + m["XXZZ"] + m["YYZZ"])) == pytest.approx(
        float(np.dot(Q, r2 * r2)))
    assert len(m) == 15


def test_structure_factor_at_zero_wavevector_is_net_charge():
    assert structure_factor(Q, R, [0, 0, 0]) == pytest.approx(complex(net_charge(Q)))


def test_structure_factor_conjugate_symmetry():
    k = np.array([0.3, -0.7, 1.1])
    assert structure_factor(Q, R, -k) == pytest.approx(
        structure_factor(Q, R, k).conjugate())


def test_structure_factor_translation_changes_only_phase():
    k = np.array([0.3, -0.7, 1.1])
    shift = np.array([0.5, 0.2, -0.4])
    s0 = structure_factor(Q, R, k)
    s1 = structure_factor(Q, np.asarray(R) + shift, k)
    assert s1 == pytest.approx(s0 * cmath.exp(-1j * float(k @ shift)))


def test_static_dielectric_no_dipole_is_one():
    assert static_dielectric_constant([0, 0, 0], 1000.0) == pytest.approx(1.0)


def test_static_dielectric_scales_with_inverse_kt():
    mu = [1.0, 2.0, 0.5]
    e1 = static_dielectric_constant(mu, 500.0, kT=0.6)
    e2 = static_dielectric_constant(mu, 500.0, kT=1.2)
    assert (e1 - 1) == pytest.approx(2 * (e2 - 1))


def test_optical_dielectric_depends_only_on_trace():
    a = np.diag([1.0, 2.0, 3.0])
    b = a + np.array([[0, 5.0, 0], [0, 0, 0], [1.0, 0, 0]])
    assert optical_dielectric_constant(a, 200.0) == pytest.approx(
        optical_dielectric_constant(b, 200.0))
    assert optical_dielectric_constant(np.zeros((3, 3)), 200.0) == pytest.approx(1.0)
    assert optical_dielectric_constant(a, 200.0) > 1.0
    assert math.isfinite(optical_dielectric_constant(a, 200.0))


def test_mismatched_lengths_raise():
    with pytest.raises(ValueError):
        dipole_moment([1.0, 2.0], [[0, 0, 0]])
    with pytest.raises(ValueError):
        quadrupole_moment([1.0], [[0, 0]])