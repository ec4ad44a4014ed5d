"""Preconditioned conjugate-gradient minimisation with a cubic line search."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

MAX_LINESEARCH = 20

ObjectiveFn = Callable[[np.ndarray], Tuple[float, np.ndarray]]
PreconditionFn = Callable[[np.ndarray, np.ndarray], np.ndarray]


@dataclass
class MinimizeResult:
    """Outcome of a minimisation.

    ``residual`` is the negative gradient at ``x``.  ``success`` is true when
    the number of function evaluations stayed within the budget; ``converged``
    is true when the RMS gradient dropped below the tolerance.
    """

    x: np.ndarray
    value: float
    residual: np.ndarray
    iterations: int
    evaluations: int
    success: bool
    converged: bool

    @property
    def rms_gradient(self) -> float:
        return _rms(self.residual)


def _interpolate(a, fa, dfa, b, fb, dfb):
    """Minimum of the cubic through (a, fa, dfa) and (b, fb, dfb), or the midpoint."""
    a2, b2 = a * a, b * b
    a3, b3 = a2 * a, b2 * b
    a_b = a - b
    a_b3 = a_b * a_b * a_b
    assert a < b
    assert (fa <= fb and dfa < 0) or (fb <= fa and dfb > 0)
    if abs(a_b3) < 1e-10:
        return 0.5 * (a + b)
    va = (a_b * (dfa + dfb) - 2 * fa + 2 * fb) / a_b3
    vb = (-(a2 * (dfa + 2 * dfb)) + a * (-(b * dfa) + b * dfb + 3 * fa - 3 * fb)
          + b * (2 * b * dfa + b * dfb + 3 * fa - 3 * fb)) / a_b3
    vc = (-(b3 * dfa) + a3 * dfb + a2 * b * (2 * dfa + dfb)
          - a * b * (b * dfa + 2 * b * dfb + 6 * fa - 6 * fb)) / a_b3
    if abs(va * vc) > 1e-8 * abs(vb * vb):
        vtmp = vb * vb - 3 * va * vc
        assert vtmp > 0
        x = (-vb + math.sqrt(vtmp)) / (3 * va)
    else:
        x = -vc / (2 * vb)
    eps = -1e-3 * a_b
    if a + eps < x < b - eps:
        return x
    return 0.5 * (a + b)


def _extrapolate(a, fa, b, fb, dfb):
    """Minimum of the parabola through (a, fa) and (b, fb, dfb), or 3b - 2a."""
    tmp = (b - a) * dfb + fa - fb
    assert a < b
    assert dfb < 0
    if tmp > 1e-10:
        x = -(a * a * dfb - b * (b * dfb + 2 * fa - 2 * fb)) / (2 * tmp)
    else:
        x = 3 * b - 2 * a
    assert x > b
    return x


def _rms(v: np.ndarray) -> float:
    return math.sqrt(float(v @ v) / v.size) if v.size > 0 else 0.0


def _evaluate(calc_fr: ObjectiveFn, x: np.ndarray):
    f, r = calc_fr(x.copy())
    return float(f), np.array(r, dtype=float)


def conjugate_gradient_minimize(
    x,
    calc_fr: ObjectiveFn,
    tolerance: float = 1e-6,
    linesearch_tolerance: float = 0.5,
    maxeval: int = 1000,
    verbose: int = 0,
    calc_s: Optional[PreconditionFn] = None,
) -> MinimizeResult:
    """Minimise a function starting from ``x``.

    ``calc_fr(x)`` returns ``(f, r)`` with ``r`` the negative gradient.
    ``calc_s(x, r)``, if given, returns the preconditioned residual; the
    preconditioner must be positive definite, otherwise ValueError is raised.
    """
    x = np.array(x, dtype=float)
    if verbose:
        print("Starting conjugate gradient minimization...")
        print("Preconditioning: %s" % ("yes" if calc_s else "no"), flush=True)
    ft, r = _evaluate(calc_fr, x)
    if verbose:
        print("Initial function value: %g" % ft)
        print("Initial RMS gradient: %g" % _rms(r))
    first_time = True
    neval = 1
    niter = 0
    t = 1.0
    d0 = s0 = None
    r0s0 = 0.0
    b = fb = dfb = c = fc = dfc = 0.0
    while neval < maxeval and _rms(r) > tolerance:
        s = np.array(calc_s(x.copy(), r.copy()), dtype=float) if calc_s else r
        rs = float(r @ s)
        restart = first_time
        if not first_time:
            beta = (rs - float(r @ s0)) / r0s0
            d = s + beta * d0
            rd = float(r @ d)
            if rd <= 0:
                restart = True
        if restart:
            d = s.copy()
            rd = float(r @ d)
            t = 1.0
        if not rd > 0:
            raise ValueError("search direction is not downhill; "
                             "the preconditioner must be positive definite")
        first_time = False
        d0 = d.copy()
        s0 = s.copy()
        r0s0 = rs

        a = lo = 0.0
        f0 = fa = flo = ft
        df0 = dfa = -rd
        bdefined = cdefined = False
        x0 = x.copy()
        iline = 0
        while True:
            x = x0 + t * d
            ft, r = _evaluate(calc_fr, x)
            dft = -float(r @ d)
            if ft < flo:
                flo = ft
                lo = t
            neval += 1
            if verbose > 1:
                line = "%d a: %14.8e %14.8e %14.8e  " % (niter, a, fa, dfa)
                if bdefined:
                    line += "b: %14.8e %14.8e %14.8e  " % (b, fb, dfb)
                if cdefined:
                    line += "c: %14.8e %14.8e %14.8e  " % (c, fc, dfc)
                line += "t: %14.8e %14.8e %14.8e" % (t, ft, dft)
                print(line, flush=True)
            if ft < f0 and abs(dft) < linesearch_tolerance * abs(df0):
                break
            too_many = iline > MAX_LINESEARCH
            iline += 1
            if too_many or neval >= maxeval:
                # Give up and return to the lowest point seen.
                x = x0 + lo * d
                ft, r = _evaluate(calc_fr, x)
                first_time = True
                break
            if bdefined:
                if t < b:
                    if ft < fb:
                        c, fc, dfc = b, fb, dfb
                        b, fb, dfb = t, ft, dft
                        bdefined = cdefined = True
                    else:
                        a, fa, dfa = t, ft, dft
                else:
                    if ft < fb:
                        a, fa, dfa = b, fb, dfb
                        b, fb, dfb = t, ft, dft
                        bdefined = True
                    else:
                        c, fc, dfc = t, ft, dft
                        cdefined = True
            else:
                if ft < fa:
                    b, fb, dfb = t, ft, dft
                    bdefined = True
                else:
                    c, fc, dfc = t, ft, dft
                    cdefined = True
            if bdefined:
                if dfb < 0:
                    if cdefined:
                        t = _interpolate(b, fb, dfb, c, fc, dfc)
                    else:
                        t = _extrapolate(a, fa, b, fb, dfb)
                else:
                    t = _interpolate(a, fa, dfa, b, fb, dfb)
            else:
                t = _interpolate(a, fa, dfa, c, fc, dfc)
        niter += 1
    rmsg = _rms(r)
    if verbose:
        print("Final function value: %g" % ft)
        print("Final RMS gradient: %g" % rmsg)
        print(("Converged " if rmsg < tolerance else "*** Did not converge ")
              + "to tolerance of %g with %d iterations and %d function evaluations"
              % (tolerance, niter, neval))
        print("(averaged %.2f evaluations per line search, linesearch_tolerance = %g)"
              % (neval / niter if niter > 0 else 0.0, linesearch_tolerance), flush=True)
    return MinimizeResult(
        x=x,
        value=ft,
        residual=r,
        iterations=niter,
        evaluations=neval,
        success=neval <= maxeval,
        converged=rmsg <= tolerance,
    )