"""Bond charge increments: charge transfer along bonds driven by the potential.

Each increment moves a charge ``q0 + dq`` from the second site of a bonded
pair to the first.  The fluctuating part ``dq`` obeys ``k dq = phi_b - phi_a``,
which is solved by self-consistent iteration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Tuple

import numpy as np

_SMALL = 1e-10

Pair = Tuple[int, int]


class ConvergenceError(RuntimeError):
    """The self-consistent charge iteration failed."""


def _is_almost_zero(x: float) -> bool:
    return abs(x) < _SMALL


@dataclass
class BondChargeIncrement:
    """Parameters and state of one bond charge increment.

    ``k1``/``q01`` belong to the reference state and ``k2``/``q02`` to the
    perturbed state; ``k`` and ``q0`` are the values at the current lambda.
    """

    k1: float = 0.0
    k2: float = 0.0
    q01: float = 0.0
    q02: float = 0.0
    omega2: float = 0.0
    dq: float = 0.0
    velocity: float = 0.0
    k: float = 0.0
    q0: float = 0.0

    def set_lambda(self, lam: float) -> None:
        """Interpolate ``k`` and ``q0`` between the two states."""
        tmp = 1 - lam
        self.k = tmp * self.k1 + lam * self.k2
        self.q0 = tmp * self.q01 + lam * self.q02


def update_charges(base_charges, increments: Mapping[Pair, BondChargeIncrement]) -> np.ndarray:
    """Site charges: the fixed charges plus the transfer of every increment."""
    q = np.array(base_charges, dtype=float).reshape(-1)
    for (a, b), inc in increments.items():
        transfer = inc.q0 + inc.dq
        q[a] += transfer
        q[b] -= transfer
    return q


def solve_for_bci(
    base_charges,
    increments: Mapping[Pair, BondChargeIncrement],
    calc_phi: Callable[[np.ndarray], np.ndarray],
    tolerance: float = 1e-10,
    max_iterations: int = 1000,
) -> np.ndarray:
    """Iterate the increments to self-consistency and return the site charges.

    ``calc_phi(q)`` returns the potential at every site for charges ``q``.
    The ``dq`` of each increment is updated in place and its velocity set to
    zero.  Raises ConvergenceError if the iteration does not converge within
    ``max_iterations`` or produces NaN.
    """
    if tolerance <= 0:
        raise ValueError("tolerance must be > 0")
    if max_iterations <= 0:
        raise ValueError("max_iterations must be > 0")
    q = update_charges(base_charges, increments)
    converged = False
    iteration = 0
    while not converged and iteration < max_iterations:
        converged = True
        phi = np.asarray(calc_phi(q.copy()), dtype=float).reshape(-1)
        for (a, b), inc in increments.items():
            if _is_almost_zero(inc.k):
                inc.dq = 0.0
                continue
            last = inc.dq
            inc.dq = (phi[b] - phi[a]) / inc.k
            if math.isnan(inc.dq):
                raise ConvergenceError("solve_for_bci: NaN detected")
            if abs(inc.dq) > tolerance:
                if abs(last - inc.dq) / abs(inc.dq) > tolerance:
                    converged = False
            elif abs(last - inc.dq) > tolerance:
                converged = False
        q = update_charges(base_charges, increments)
        iteration += 1
    if not converged:
        raise ConvergenceError(
            "solve_for_bci: did not converge to tolerance of %g within %d iterations"
            % (tolerance, max_iterations))
    for inc in increments.values():
        inc.velocity = 0.0
    return q


def one_three_potential(phi, charges, one_three: Mapping[Pair, float]) -> np.ndarray:
    """Add the 1-3 interaction potential to ``phi`` and return the result."""
    out = np.array(phi, dtype=float).reshape(-1)
    q = np.asarray(charges, dtype=float).reshape(-1)
    for (i, j), param in one_three.items():
        out[i] += q[j] * param
        out[j] += q[i] * param
    return out