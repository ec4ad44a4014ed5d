"""Periodic and non-periodic boundary conditions."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class BoundaryType(str, Enum):
    """Kinds of boundary conditions."""

    NON_PERIODIC = "non_periodic"
    CUBIC = "cubic"
    ORTHORHOMBIC = "orthorhombic"
    BCC = "bcc"
    FCC = "fcc"
    TRICLINIC = "triclinic"

    def __str__(self) -> str:
        return self.value


def parse_boundary_type(text: str) -> BoundaryType:
    """Boundary type named by ``text``."""
    try:
        return BoundaryType(text.strip())
    except ValueError:
        raise ValueError(
            "boundary condition type must be one of 'non_periodic','cubic',"
            "'orthorhombic','bcc','fcc','triclinic'"
        ) from None


def _approx_equal(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-12)


def _angle(u: np.ndarray, v: np.ndarray) -> float:
    cos = float(u @ v) / (np.linalg.norm(u) * np.linalg.norm(v))
    return math.acos(min(1.0, max(-1.0, cos)))


def _fmt(x: float) -> str:
    return "%g" % x


class BoundaryConditions(ABC):
    """Shape of the simulation cell."""

    type: BoundaryType

    @abstractmethod
    def volume(self) -> float:
        """Volume of the cell."""

    @abstractmethod
    def min_diameter(self) -> float:
        """Smallest distance between opposite faces of the cell."""

    @abstractmethod
    def max_diameter(self) -> float:
        """Largest diagonal of the cell."""

    @abstractmethod
    def scale(self, s: float) -> None:
        """Scale the cell by a factor ``s``."""

    @abstractmethod
    def lattice_vectors(self) -> np.ndarray:
        """Lattice vectors as the columns of a 3x3 matrix."""

    @abstractmethod
    def copy(self) -> "BoundaryConditions":
        """An independent copy."""

    def reciprocal_lattice_vectors(self) -> np.ndarray:
        """Reciprocal lattice vectors (including the factor 2 pi) as columns."""
        return 2 * math.pi * np.linalg.inv(self.lattice_vectors()).T


class NonPeriodic(BoundaryConditions):
    type = BoundaryType.NON_PERIODIC

    def volume(self) -> float:
        return 0.0

    def min_diameter(self) -> float:
        return 0.0

    def max_diameter(self) -> float:
        return 0.0

    def scale(self, s: float) -> None:
        pass

    def lattice_vectors(self) -> np.ndarray:
        return np.zeros((3, 3))

    def reciprocal_lattice_vectors(self) -> np.ndarray:
        raise ValueError("non-periodic boundary conditions have no reciprocal lattice")

    def copy(self) -> "NonPeriodic":
        return NonPeriodic()

    def __str__(self) -> str:
        return "non_periodic"


class Cubic(BoundaryConditions):
    type = BoundaryType.CUBIC

    def __init__(self, boxl: float):
        self.boxl = float(boxl)

    def volume(self) -> float:
        return self.boxl ** 3

    def min_diameter(self) -> float:
        return self.boxl

    def max_diameter(self) -> float:
        return math.sqrt(3.0) * self.boxl

    def scale(self, s: float) -> None:
        self.boxl *= s

    def lattice_vectors(self) -> np.ndarray:
        return self.boxl * np.eye(3)

    def copy(self) -> "Cubic":
        return Cubic(self.boxl)

    def __str__(self) -> str:
        return "cubic " + _fmt(self.min_diameter())


class Orthorhombic(BoundaryConditions):
    type = BoundaryType.ORTHORHOMBIC

    def __init__(self, boxl):
        self.boxl = np.array(boxl, dtype=float).reshape(3)

    def volume(self) -> float:
        return float(np.prod(self.boxl))

    def min_diameter(self) -> float:
        return float(np.min(self.boxl))

    def max_diameter(self) -> float:
        return float(np.linalg.norm(self.boxl))

    def scale(self, s: float) -> None:
        self.boxl = self.boxl * s

    def lattice_vectors(self) -> np.ndarray:
        return np.diag(self.boxl)

    def copy(self) -> "Orthorhombic":
        return Orthorhombic(self.boxl)

    def __str__(self) -> str:
        return "orthorhombic " + " ".join(_fmt(v) for v in self.boxl)


class BCC(BoundaryConditions):
    """Truncated octahedron; ``boxl`` is the distance between opposite hexagonal faces."""

    type = BoundaryType.BCC

    def __init__(self, boxl: float):
        self.side = boxl / (0.5 * math.sqrt(3.0))  # side of the containing cube

    def volume(self) -> float:
        return 0.5 * self.side ** 3

    def min_diameter(self) -> float:
        return 0.5 * math.sqrt(3.0) * self.side

    def max_diameter(self) -> float:
        return 0.5 * math.sqrt(5.0) * self.side

    def scale(self, s: float) -> None:
        self.side *= s

    def lattice_vectors(self) -> np.ndarray:
        return 0.5 * self.side * np.array([[1.0, -1.0, 1.0],
                                           [1.0, 1.0, -1.0],
                                           [1.0, 1.0, 1.0]])

    def copy(self) -> "BCC":
        return BCC(self.min_diameter())

    def __str__(self) -> str:
        return "bcc " + _fmt(self.min_diameter())


class FCC(BoundaryConditions):
    """Rhombic dodecahedron; ``boxl`` is the distance between opposite faces."""

    type = BoundaryType.FCC

    def __init__(self, boxl: float):
        self.halfside = boxl / math.sqrt(2.0)  # half the side of the containing cube

    def volume(self) -> float:
        return 0.25 * (2 * self.halfside) ** 3

    def min_diameter(self) -> float:
        return math.sqrt(2.0) * self.halfside

    def max_diameter(self) -> float:
        return 2 * self.halfside

    def scale(self, s: float) -> None:
        self.halfside *= s

    def lattice_vectors(self) -> np.ndarray:
        return self.halfside * np.array([[1.0, 0.0, 1.0],
                                         [1.0, 1.0, 0.0],
                                         [0.0, 1.0, 1.0]])

    def copy(self) -> "FCC":
        return FCC(self.min_diameter())

    def __str__(self) -> str:
        return "fcc " + _fmt(self.min_diameter())


class Triclinic(BoundaryConditions):
    """General cell with lattice vectors as the columns of ``h``."""

    type = BoundaryType.TRICLINIC

    def __init__(self, h):
        self.box_vectors = np.array(h, dtype=float).reshape(3, 3)
        self.inverse_box_vectors = np.linalg.inv(self.box_vectors)

    @classmethod
    def _from_radians(cls, a, b, c, alpha, beta, gamma) -> "Triclinic":
        cosa, cosb, cosg = math.cos(alpha), math.cos(beta), math.cos(gamma)
        sing = math.sin(gamma)
        tmp = 1 - cosa ** 2 - cosb ** 2 - cosg ** 2 + 2 * cosa * cosb * cosg
        if not tmp > 0:
            raise ValueError("Triclinic: cell angles do not describe a valid cell")
        return cls([[a, b * cosg, c * cosb],
                    [0.0, b * sing, c * (cosa - cosb * cosg) / sing],
                    [0.0, 0.0, c * math.sqrt(tmp) / sing]])

    @classmethod
    def from_cell(cls, a, b, c, alpha, beta, gamma) -> "Triclinic":
        """Cell from edge lengths and angles in degrees."""
        return cls._from_radians(a, b, c, math.radians(alpha),
                                 math.radians(beta), math.radians(gamma))

    def _col(self, i: int) -> np.ndarray:
        return self.box_vectors[:, i]

    def volume(self) -> float:
        return abs(float(np.linalg.det(self.box_vectors)))

    def min_diameter(self) -> float:
        v0, v1, v2 = self._col(0), self._col(1), self._col(2)
        areas = (np.linalg.norm(np.cross(v0, v1)),
                 np.linalg.norm(np.cross(v0, v2)),
                 np.linalg.norm(np.cross(v1, v2)))
        return self.volume() / float(max(areas))

    def max_diameter(self) -> float:
        v0, v1, v2 = self._col(0), self._col(1), self._col(2)
        return float(max(np.linalg.norm(v0 + v1 + v2),
                         np.linalg.norm(-v0 + v1 + v2),
                         np.linalg.norm(v0 - v1 + v2),
                         np.linalg.norm(v0 + v1 - v2)))

    def scale(self, s: float) -> None:
        self.box_vectors = self.box_vectors * s
        self.inverse_box_vectors = self.inverse_box_vectors * (1 / s)

    def lattice_vectors(self) -> np.ndarray:
        return self.box_vectors.copy()

    def copy(self) -> "Triclinic":
        return Triclinic._from_radians(self.a(), self.b(), self.c(),
                                       self.alpha(), self.beta(), self.gamma())

    def a(self) -> float:
        return float(np.linalg.norm(self._col(0)))

    def b(self) -> float:
        return float(np.linalg.norm(self._col(1)))

    def c(self) -> float:
        return float(np.linalg.norm(self._col(2)))

    def alpha(self) -> float:
        """Angle between the second and third vectors, in radians."""
        return _angle(self._col(1), self._col(2))

    def beta(self) -> float:
        """Angle between the first and third vectors, in radians."""
        return _angle(self._col(0), self._col(2))

    def gamma(self) -> float:
        """Angle between the first and second vectors, in radians."""
        return _angle(self._col(0), self._col(1))

    def __str__(self) -> str:
        return "triclinic %s %s %s  %s %s %s" % (
            _fmt(self.a()), _fmt(self.b()), _fmt(self.c()),
            _fmt(math.degrees(self.alpha())),
            _fmt(math.degrees(self.beta())),
            _fmt(math.degrees(self.gamma())))


def new_from_cell(a, b, c, alpha, beta, gamma) -> BoundaryConditions:
    """Cubic, orthorhombic or triclinic cell from lengths and angles in degrees."""
    if _approx_equal(alpha, 90) and _approx_equal(beta, 90) and _approx_equal(gamma, 90):
        if _approx_equal(a, b) and _approx_equal(b, c):
            return Cubic(a)
        return Orthorhombic((a, b, c))
    return Triclinic.from_cell(a, b, c, alpha, beta, gamma)


_ARGUMENTS = {
    BoundaryType.NON_PERIODIC: (0, ""),
    BoundaryType.CUBIC: (1, "error reading Cubic: expecting box length"),
    BoundaryType.ORTHORHOMBIC: (3, "error reading Orthorhombic: expecting box dimensions"),
    BoundaryType.BCC: (1, "error reading BCC: expecting box length"),
    BoundaryType.FCC: (1, "error reading FCC: expecting box length"),
    BoundaryType.TRICLINIC: (6, "error reading Triclinic: expecting a,b,c,alpha,beta,gamma"),
}


def parse_boundary_conditions(text: str) -> BoundaryConditions:
    """Boundary conditions from text such as ``"cubic 20"``."""
    tokens = text.split()
    if not tokens:
        raise ValueError("BoundaryConditions: expecting a boundary condition type")
    kind = parse_boundary_type(tokens[0])
    count, message = _ARGUMENTS[kind]
    args = tokens[1:]
    if len(args) < count:
        raise ValueError("BoundaryConditions: " + message)
    if len(args) > count:
        raise ValueError("BoundaryConditions: unexpected text: " + " ".join(args[count:]))
    try:
        values = [float(v) for v in args]
    except ValueError:
        raise ValueError("BoundaryConditions: " + message) from None
    if kind is BoundaryType.NON_PERIODIC:
        return NonPeriodic()
    if kind is BoundaryType.CUBIC:
        return Cubic(values[0])
    if kind is BoundaryType.ORTHORHOMBIC:
        return Orthorhombic(values)
    if kind is BoundaryType.BCC:
        return BCC(values[0])
    if kind is BoundaryType.FCC:
        return FCC(values[0])
    return new_from_cell(*values)