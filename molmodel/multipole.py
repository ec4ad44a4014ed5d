"""Net charge, multipole moments, structure factors and dielectric constants
of a set of point charges.

Charges are in the internal charge unit and positions in angstrom.  The
Cartesian moments follow the same convention as Gaussian: they are plain
sums of q times products of coordinates, with no traceless correction.
"""

from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

import numpy as np

from molmodel.units import K_to_kcal_mol

DEFAULT_KT = K_to_kcal_mol(298.15)

_QUADRUPOLE = ("XX", "YY", "ZZ", "XY", "XZ", "YZ")
_OCTOPOLE = ("XXX", "YYY", "ZZZ", "XYY", "XXY", "XXZ", "XZZ", "YZZ", "YYZ", "XYZ")
_HEXADECAPOLE = (
    "XXXX", "YYYY", "ZZZZ", "XXXY", "XXXZ", "YYYX", "YYYZ", "ZZZX",
    "ZZZY", "XXYY", "XXZZ", "YYZZ", "XXYZ", "YYXZ", "ZZXY",
)
_AXIS = {"X": 0, "Y": 1, "Z": 2}


def _charges(charges) -> np.ndarray:
    return np.asarray(charges, dtype=float).reshape(-1)


def _sites(charges, positions) -> Tuple[np.ndarray, np.ndarray]:
    q = _charges(charges)
    r = np.asarray(positions, dtype=float)
    if q.size == 0 and r.size == 0:
        return q, np.zeros((0, 3))
    if r.ndim != 2 or r.shape[1] != 3:
        raise ValueError("positions must be a sequence of 3-vectors")
    if r.shape[0] != q.size:
        raise ValueError(
            "%d charges but %d positions" % (q.size, r.shape[0]))
    return q, r


def _moment(charges, positions, components: Sequence[str]) -> Dict[str, float]:
    q, r = _sites(charges, positions)
    result = {}
    for name in components:
        prod = np.ones(q.size)
        for axis in name:
            prod = prod * r[:, _AXIS[axis]]
        result[name] = float(q @ prod)
    return result


def net_charge(charges) -> float:
    """Sum of the charges."""
    return float(np.sum(_charges(charges)))


def dipole_moment(charges, positions) -> np.ndarray:
    """Dipole moment, sum of q r."""
    q, r = _sites(charges, positions)
    return q @ r if q.size else np.zeros(3)


def quadrupole_moment(charges, positions) -> Dict[str, float]:
    """Second Cartesian moments, keyed by component name (``"XX"`` ...)."""
    return _moment(charges, positions, _QUADRUPOLE)


def octopole_moment(charges, positions) -> Dict[str, float]:
    """Third Cartesian moments, keyed by component name (``"XXX"`` ...)."""
    return _moment(charges, positions, _OCTOPOLE)


def hexadecapole_moment(charges, positions) -> Dict[str, float]:
    """Fourth Cartesian moments, keyed by component name (``"XXXX"`` ...)."""
    return _moment(charges, positions, _HEXADECAPOLE)


def structure_factor(charges, positions, k) -> complex:
    """Charge structure factor, sum of q exp(-i k.r)."""
    q, r = _sites(charges, positions)
    kv = np.asarray(k, dtype=float).reshape(3)
    return complex(np.sum(q * np.exp(-1j * (r @ kv)))) if q.size else 0j


def static_dielectric_constant(dipole, volume: float, kT: float = DEFAULT_KT) -> float:
    """Static dielectric constant from the cell dipole moment."""
    mu = np.asarray(dipole, dtype=float).reshape(3)
    return 1 + 4 * math.pi * float(mu @ mu) / (3 * volume * kT)


def optical_dielectric_constant(polarizability, volume: float) -> float:
    """Optical dielectric constant from the polarizability tensor."""
    alpha = np.asarray(polarizability, dtype=float).reshape(3, 3)
    diagonal_sum = float(alpha[0, 0] + alpha[1, 1] + alpha[2, 2])
    return 1 + 4 * math.pi * diagonal_sum / (3 * volume)