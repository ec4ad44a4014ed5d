"""Euler angles (x-convention) and rotation matrices."""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

_SMALL = 1e-10


def _arccos(x: float) -> float:
    return math.acos(min(1.0, max(-1.0, x)))


def _skew(u: np.ndarray) -> np.ndarray:
    x, y, z = u
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def _score(a: np.ndarray, b: np.ndarray) -> float:
    # The first column does not take part in the comparison.
    diff = (a - b)[:, 1:]
    return float(np.sum(diff * diff))


def euler_angles_to_rotation_matrix(phi: float, theta: float, psi: float) -> np.ndarray:
    """Rotation matrix for Euler angles in the x-convention."""
    ch, sh = math.cos(phi), math.sin(phi)
    ct, st = math.cos(theta), math.sin(theta)
    cs, ss = math.cos(psi), math.sin(psi)
    return np.array([
        [cs * ch - ct * sh * ss, cs * sh + ct * ch * ss, ss * st],
        [-ss * ch - ct * sh * cs, -ss * sh + ct * ch * cs, cs * st],
        [st * sh, -st * ch, ct],
    ])


def rotation_matrix_to_euler_angles(m) -> Tuple[float, float, float]:
    """Euler angles (phi, theta, psi) reproducing the rotation matrix ``m``."""
    m = np.asarray(m, dtype=float)
    phi = theta = psi = 0.0
    t0 = _arccos(m[2, 2])
    best = 1e8
    if abs(t0) < _SMALL:
        h0 = _arccos(m[0, 0])
        for h in (h0, -h0):
            sc = _score(m, euler_angles_to_rotation_matrix(h, 0.0, 0.0))
            if sc < best:
                phi = h
                best = sc
            if abs(best) < _SMALL:
                break
        return phi, theta, psi
    for t in (t0, -t0):
        st = math.sin(t)
        h0 = _arccos(-m[2, 1] / st)
        s0 = _arccos(m[1, 2] / st)
        for h in (h0, -h0):
            for s in (s0, -s0):
                sc = _score(m, euler_angles_to_rotation_matrix(h, t, s))
                if sc < best:
                    phi, theta, psi = h, t, s
                    best = sc
                if abs(best) < _SMALL:
                    return phi, theta, psi
    return phi, theta, psi


def axis_angle_to_rotation_matrix(u, theta: float) -> np.ndarray:
    """Rotation by ``theta`` about the axis ``u`` (need not be normalised)."""
    u = np.asarray(u, dtype=float)
    n = _skew(u / np.linalg.norm(u))
    return np.eye(3) + math.sin(theta) * n + (1 - math.cos(theta)) * (n @ n)


def euler_angle_jacobian(phi: float, theta: float, psi: float):
    """Derivatives of the rotation matrix with respect to phi, theta and psi."""
    ch, sh = math.cos(phi), math.sin(phi)
    ct, st = math.cos(theta), math.sin(theta)
    cs, ss = math.cos(psi), math.sin(psi)
    dphi = np.array([
        [-cs * sh - ch * ct * ss, ch * cs - ct * sh * ss, 0.0],
        [-ch * cs * ct + sh * ss, -cs * ct * sh - ch * ss, 0.0],
        [ch * st, sh * st, 0.0],
    ])
    dtheta = np.array([
        [sh * ss * st, -ch * ss * st, ct * ss],
        [cs * sh * st, -ch * cs * st, cs * ct],
        [ct * sh, -ch * ct, -st],
    ])
    dpsi = np.array([
        [-cs * ct * sh - ch * ss, ch * cs * ct - sh * ss, cs * st],
        [-ch * cs + ct * sh * ss, -cs * sh - ch * ct * ss, -ss * st],
        [0.0, 0.0, 0.0],
    ])
    return dphi, dtheta, dpsi