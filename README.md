# molmodel

Building blocks for molecular modelling in Python. They all work in one
internal unit system: energy in kcal/mol, length in ångström and time in
picoseconds. The charge unit is sqrt(Å kcal/mol).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `molmodel.units` converts between the internal units and common
  external units. Examples are `hartree_to_kcal_mol`, `e_to_charge_unit`,
  `debye_to_dipole_unit`, `K_to_kcal_mol`, `pressure_unit_to_bar` and
  `nm_to_kcal_mol`. The physical constants are module-level names such as
  `BOHR_RADIUS` and `AVOGADRO`.
- `molmodel.cgmin` provides `conjugate_gradient_minimize(x, calc_fr,
  tolerance, linesearch_tolerance, maxeval, verbose, calc_s)`. This is a
  conjugate-gradient minimizer with a cubic/parabolic line search.
  - `calc_fr(x)` returns `(f, r)`, where `r` is the negative gradient.
  - The optional `calc_s(x, r)` returns a preconditioned residual. It must
    be positive definite, or `ValueError` is raised.
  - The result is a `MinimizeResult` with the fields `x`, `value`,
    `residual`, `iterations`, `evaluations`, `success` and `converged`, and
    the property `rms_gradient`.
  - With `verbose` set, progress is printed.
- `molmodel.euler` works with Euler angles in the x-convention:
  - `euler_angles_to_rotation_matrix`
  - `rotation_matrix_to_euler_angles`
  - `axis_angle_to_rotation_matrix`
  - `euler_angle_jacobian`
- `molmodel.bcond` holds the cell shapes.
  - Classes: `NonPeriodic`, `Cubic`, `Orthorhombic`, `BCC`, `FCC` and
    `Triclinic`. They share the base class `BoundaryConditions`.
  - Methods: `volume`, `min_diameter`, `max_diameter`, `scale`,
    `lattice_vectors`, `reciprocal_lattice_vectors` and `copy`.
  - `NonPeriodic.reciprocal_lattice_vectors` raises `ValueError`.
  - `Triclinic.from_cell` takes the cell angles in degrees. `a`, `b`, `c`,
    `alpha`, `beta` and `gamma` read the cell back, with the angles in
    radians.
  - `parse_boundary_type` and `parse_boundary_conditions` read text such as
    `"cubic 20"` or `"triclinic 10 11 12 80 90 100"`.
  - `new_from_cell` picks the simplest box that fits the given cell:
    cubic, orthorhombic or triclinic.
- `molmodel.ranges` provides `Range` and `parse_range` for inclusive
  `n1..n2` ranges. The ends are put in order.
- `molmodel.apattern` provides `AtomPattern`, which finds bonded paths of
  `PatternAtom` objects that match a pattern.
  - A pattern can use property names, neighbour counts (`x3`) and negation
    (`!`).
  - Tests combine with `,` (or) and `&` (and).
  - Parentheses open branches, and `@N` marks ring closures.
  - `matches` returns the paths as tuples of atom indices.
  - `run` calls `succeed` for each path. By default `succeed` prints the
    path.
  - A bad pattern raises `PatternError`.
- `molmodel.multipole` computes properties of a set of point charges:
  - `net_charge` and `dipole_moment`.
  - `quadrupole_moment`, `octopole_moment` and `hexadecapole_moment`, each
    returned as a dict keyed by component name, for example `"XX"`.
  - `structure_factor`.
  - `static_dielectric_constant` and `optical_dielectric_constant`.
- `molmodel.ewald` provides Ewald helpers:
  - `estimated_kspace_error` and `estimated_rspace_error`
  - `default_ewald_screening`
  - `self_potential`
  - `lj_dispersion_totals` and `lj_correction`, for the long-range
    Lennard-Jones correction.
- `molmodel.bci` handles bond charge increments.
  - `BondChargeIncrement` holds the parameters. Its `set_lambda`
    interpolates between the two states.
  - `update_charges` computes the site charges.
  - `solve_for_bci` iterates `dq` to self-consistency against a potential
    function that you supply. It raises `ConvergenceError` if the iteration
    fails.
  - `one_three_potential` adds the 1–3 interaction terms.
- `molmodel.covalent` provides `Covalent`, a per-bond energy table keyed by
  pairs of atom types, for lists of `BondedAtom`.
  - `types_changed` recomputes the energy.
  - `set_lambda` interpolates to a perturbed set of types.
  - `add_to_energy` adds the energy to a running total.

## Example

```python
import numpy as np
from molmodel.bcond import parse_boundary_conditions
from molmodel.cgmin import conjugate_gradient_minimize
from molmodel.units import hartree_to_kcal_mol

bc = parse_boundary_conditions("cubic 20.0")
print(bc.volume())                 # 8000.0

print(hartree_to_kcal_mol(1.0))    # about 627.5

target = np.array([-3.45, 0.677, -0.25])

def calc_fr(x):
    d = x - target
    return float(d @ d), -2 * d

result = conjugate_gradient_minimize(np.zeros(3), calc_fr, tolerance=1e-6)
print(result.x, result.converged)
```

## What it does not do

This package is a library of parts. It is not a simulation program:

- It has no command-line tool.
- It has no molecular dynamics or minimization driver for whole molecular
  systems.
- It reads no structure or parameter files.
- It builds no neighbour lists.
- It does not evaluate the real-space or reciprocal-space Ewald sums
  themselves. `molmodel.ewald` gives only estimates and corrections.
- The boundary condition classes describe the cell, but they do not map
  coordinates into the central box.

For `solve_for_bci` you supply the electrostatic potential yourself, as a
function.