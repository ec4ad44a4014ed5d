"""Constant covalent bond energies summed over bonded pairs of atom types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple


@dataclass
class BondedAtom:
    """An atom type and the indices of the atoms bonded to it."""

    type: str
    neighbors: List[int] = field(default_factory=list)


@dataclass
class Covalent:
    """Energy from a table of per-bond contributions keyed by type pairs.

    A pair ``(t1, t2)`` is also found as ``(t2, t1)``.  With a perturbed
    structure the energy is interpolated linearly in lambda.
    """

    param: Dict[Tuple[str, str], float] = field(default_factory=dict)
    verbose: int = 1
    u1: float = 0.0
    u2: float = 0.0
    u: float = 0.0

    def _bond_energy(self, atoms: Sequence[BondedAtom]) -> float:
        total = 0.0
        for i, atom in enumerate(atoms):
            for j in atom.neighbors:
                if i >= j:
                    continue
                p = self.param.get((atom.type, atoms[j].type))
                if p is None:
                    p = self.param.get((atoms[j].type, atom.type))
                if p is not None:
                    total += p
        return total

    def types_changed(self, atoms: Sequence[BondedAtom],
                      perturbed: Optional[Sequence[BondedAtom]] = None) -> None:
        """Recompute the energy; with ``perturbed``, reset lambda to zero."""
        if perturbed is None:
            self.u1 = self._bond_energy(atoms)
            self.u2 = self.u = self.u1
            return
        if len(perturbed) != len(atoms):
            raise ValueError("perturbed structure has %d atoms, expected %d"
                             % (len(perturbed), len(atoms)))
        self.u1 = self._bond_energy(atoms)
        self.u2 = self._bond_energy(perturbed)
        self.set_lambda(0.0)

    def set_lambda(self, lam: float) -> None:
        self.u = (1 - lam) * self.u1 + lam * self.u2

    def add_to_energy(self, u: float) -> float:
        """``u`` plus the covalent energy."""
        return u + self.u

    def __str__(self) -> str:
        return "Covalent energy: %g kcal/mol" % self.u