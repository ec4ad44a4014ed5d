import math

import numpy as np
import pytest

from molmodel.bci import (
    BondChargeIncrement,
    ConvergenceError,
    one_three_potential,
    solve_for_bci,
    update_charges,
)


def test_set_lambda_endpoints():
    b = BondChargeIncrement(k1=2.0, k2=4.0, q01=0.1, q02=0.3)
    b.set_lambda(0.0)
    assert (b.k, b.q0) == (2.0, 0.1)
    b.set_lambda(1.0)
    assert (b.k, b.q0) == (4.0, 0.3)


def test_set_lambda_midpoint_is_average():
    b = BondChargeIncrement(k1=2.0, k2=4.0, q01=0.1, q02=0.3)
    b.set_lambda(0.5)
    assert b.k == pytest.approx((b.k1 + b.k2) / 2)
    assert b.q0 == pytest.approx((b.q01 + b.q02) / 2)


def test_update_charges_transfers_charge():
    inc = {(0, 1): BondChargeIncrement(q0=0.5, dq=0.25)}
    q = update_charges([0.0, 0.0, 1.0], inc)
    assert q[0] == pytest.approx(0.75)
    assert q[1] == pytest.approx(-0.75)
    assert q[2] == 1.0


def test_update_charges_conserves_total():
    inc = {(0, 1): BondChargeIncrement(q0=0.3, dq=-0.1),
           (1, 2): BondChargeIncrement(q0=-0.2, dq=0.05)}
    base = [0.4, -0.1, 0.2]
    q = update_charges(base, inc)
    assert q.sum() == pytest.approx(sum(base))


def _linear_phi(external):
    coupling = np.array([[1.0, 0.2], [0.2, 1.0]])

    def calc_phi(q):
        return coupling @ q + external

    return calc_phi


def test_solve_is_self_consistent():
    calc_phi = _linear_phi(np.array([0.0, 1.0]))
    b = BondChargeIncrement(k=5.0, q0=0.0, velocity=3.0)
    inc = {(0, 1): b}
    q = solve_for_bci([0.0, 0.0], inc, calc_phi)
    phi = calc_phi(q)
    assert b.k * b.dq == pytest.approx(phi[1] - phi[0], abs=1e-8)
    assert q[0] == pytest.approx(b.dq)
    assert q.sum() == pytest.approx(0.0)
    assert b.velocity == 0.0


def test_zero_force_constant_gives_no_transfer():
    b = BondChargeIncrement(k=0.0, q0=0.2, dq=1.0)
    q = solve_for_bci([0.0, 0.0], {(0, 1): b}, _linear_phi(np.array([0.0, 1.0])))
    assert b.dq == 0.0
    assert q[0] == pytest.approx(0.2)


def test_too_few_iterations_raise():
    b = BondChargeIncrement(k=5.0)
    with pytest.raises(ConvergenceError):
        solve_for_bci([0.0, 0.0], {(0, 1): b}, _linear_phi(np.array([0.0, 1.0])),
                      max_iterations=1)


def test_nan_raises():
    b = BondChargeIncrement(k=1.0)
    with pytest.raises(ConvergenceError):
        solve_for_bci([0.0, 0.0], {(0, 1): b}, lambda q: np.array([math.nan, 0.0]))


def test_one_three_potential():
    phi = one_three_potential([0.0, 0.0, 0.0], [1.0, 2.0, 3.0], {(0, 2): 0.5})
    assert phi[0] == pytest.approx(3.0 * 0.5)
    assert phi[2] == pytest.approx(1.0 * 0.5)
    assert phi[1] == 0.0


def test_one_three_potential_does_not_modify_input():
    phi0 = np.zeros(2)
    out = one_three_potential(phi0, [1.0, 1.0], {(0, 1): 2.0})
    assert np.all(phi0 == 0.0)
    assert out[0] == pytest.approx(2.0)