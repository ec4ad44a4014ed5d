"""Ewald summation helpers.

This module covers error estimates, the screening parameter, the self and
net-charge potential, and the long-range Lennard-Jones correction.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Tuple

import numpy as np

_SMALL = 1e-10


def _is_almost_zero(x: float) -> bool:
    return abs(x) < _SMALL


def estimated_kspace_error(kspace_cutoff: float, eta: float, volume: float) -> float:
    """Dimensionless RMS force error of the reciprocal-space sum.

    Uses the estimate of Kolafa and Perram.
    """
    if kspace_cutoff <= 0:
        raise ValueError("k-space cutoff must be > 0")
    if eta <= 0 or volume <= 0:
        raise ValueError("screening parameter and volume must be > 0")
    length = np.cbrt(volume)
    return (eta * length / math.pi * math.sqrt(8 / kspace_cutoff)
            * math.exp(-((math.pi * kspace_cutoff / (eta * length)) ** 2)))


def estimated_rspace_error(rspace_cutoff: float, eta: float, volume: float) -> float:
    """Dimensionless RMS force error of the real-space sum.

    Uses the estimate of Kolafa and Perram.
    """
    if rspace_cutoff <= 0 or volume <= 0:
        raise ValueError("real-space cutoff and volume must be > 0")
    return (2 / math.sqrt(rspace_cutoff / np.cbrt(volume))
            * math.exp(-((rspace_cutoff * eta) ** 2)))


def default_ewald_screening(kspace_cutoff: float, cutoff: float, min_diameter: float) -> float:
    """Screening parameter that balances the real- and reciprocal-space sums."""
    if kspace_cutoff <= 0 or cutoff <= 0 or min_diameter <= 0:
        raise ValueError("cutoffs and cell diameter must be > 0")
    return math.sqrt((math.pi * kspace_cutoff) / (cutoff * min_diameter))


def self_potential(charges, eta: float, volume: float) -> np.ndarray:
    """Potential at each site from its own Gaussian and the neutralising background.

    A net charge adds a uniform term (Bogusz, Cheatham and Brooks, eq. 3).
    """
    if eta <= 0:
        raise ValueError("screening parameter must be > 0")
    q = np.asarray(charges, dtype=float).reshape(-1)
    phi = -eta * (2 / math.sqrt(math.pi)) * q
    qsum = float(np.sum(q))
    if not _is_almost_zero(qsum):
        if volume <= 0:
            raise ValueError("volume must be > 0")
        phi = phi + (-math.pi / (eta ** 2 * volume) * qsum)
    return phi


def lj_dispersion_totals(sigmas, epsilons, geometric_combining: bool = False) -> Tuple[float, float]:
    """Totals (A, B) of the repulsive and attractive Lennard-Jones coefficients.

    Sites whose epsilon is zero take no part.  Parameters are grouped after
    rounding to six significant digits.
    """
    sig = np.asarray(sigmas, dtype=float).reshape(-1)
    eps = np.asarray(epsilons, dtype=float).reshape(-1)
    if sig.size != eps.size:
        raise ValueError("%d sigmas but %d epsilons" % (sig.size, eps.size))
    counts: Counter = Counter()
    for s, e in zip(sig, eps):
        if _is_almost_zero(e):
            continue
        if e < 0:
            raise ValueError("epsilon must be >= 0")
        if s <= 0:
            raise ValueError("sigma must be > 0")
        counts[(float("%.6g" % s), float("%.6g" % e))] += 1
    total_a = total_b = 0.0
    for (si, ei), ni in counts.items():
        for (sj, ej), nj in counts.items():
            mixed = math.sqrt(si * sj) if geometric_combining else 0.5 * (si + sj)
            s6 = mixed ** 6
            b = 4 * math.sqrt(ei * ej) * ni * nj * s6
            total_b -= b
            total_a += b * s6
    return total_a, total_b


def lj_correction(total_a: float, total_b: float, cutoff: float,
                  smoothing_width: float, volume: float) -> float:
    """Long-range Lennard-Jones energy correction beyond a smoothed cutoff."""
    if cutoff <= 0:
        raise ValueError("cutoff must be > 0")
    if smoothing_width < 0 or smoothing_width >= cutoff:
        raise ValueError("smoothing width (%g) must be >= 0 and less than the cutoff (%g)"
                         % (smoothing_width, cutoff))
    if volume <= 0:
        raise ValueError("volume must be > 0")
    rhi = cutoff
    rlo = rhi - smoothing_width
    rlo2 = rlo * rlo
    rlo3 = rlo2 * rlo
    rlo4 = rlo3 * rlo
    rlo5 = rlo4 * rlo
    rlo6 = rlo5 * rlo
    rlo7 = rlo6 * rlo
    rlo9 = rlo7 * rlo2
    rhi2 = rhi * rhi
    rhi3 = rhi2 * rhi
    rhi4 = rhi3 * rhi
    rhi5 = rhi4 * rhi
    rhi6 = rhi5 * rhi
    rhi7 = rhi6 * rhi
    return 2 * math.pi / volume * (
        total_a / (9 * rlo9) + total_b / (3 * rlo3)
        - (rhi - rlo) / (63 * rhi3 * rlo9 * (rhi + rlo) ** 5)
        * (3 * total_b * rhi3 * rlo6
           * (7 * rhi4 + 42 * rhi3 * rlo + 112 * rhi2 * rlo2 + 150 * rhi * rlo3 + 25 * rlo4)
           + total_a * (7 * rhi7 + 42 * rhi6 * rlo + 112 * rhi5 * rlo2 + 182 * rhi4 * rlo3
                        + 217 * rhi3 * rlo4 + 224 * rhi2 * rlo5 + 192 * rhi * rlo6
                        + 32 * rlo7)))