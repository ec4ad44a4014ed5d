import pytest

from molmodel.covalent import BondedAtom, Covalent


def _chain(types):
    n = len(types)
    atoms = []
    for i, t in enumerate(types):
        nb = [j for j in (i - 1, i + 1) if 0 <= j < n]
        atoms.append(BondedAtom(t, nb))
    return atoms


def test_single_bond():
    cov = Covalent(param={("A", "B"): 1.5})
    cov.types_changed(_chain(["A", "B"]))
    assert cov.u == pytest.approx(1.5)
    assert cov.u1 == cov.u2 == cov.u


def test_reverse_key_lookup():
    cov = Covalent(param={("A", "B"): 1.5})
    cov.types_changed(_chain(["B", "A"]))
    assert cov.u == pytest.approx(1.5)


def test_each_bond_counted_once():
    cov = Covalent(param={("A", "A"): 2.0})
    cov.types_changed(_chain(["A", "A", "A"]))
    assert cov.u == pytest.approx(2 * 2.0)


def test_unknown_pair_contributes_nothing():
    cov = Covalent(param={("A", "B"): 1.5})
    cov.types_changed(_chain(["A", "C"]))
    assert cov.u == 0.0


def test_perturbed_interpolation():
    cov = Covalent(param={("A", "B"): 1.5, ("A", "C"): 4.0})
    cov.types_changed(_chain(["A", "B"]), _chain(["A", "C"]))
    assert cov.u == pytest.approx(cov.u1)
    assert cov.u1 == pytest.approx(1.5)
    assert cov.u2 == pytest.approx(4.0)
    cov.set_lambda(1.0)
    assert cov.u == pytest.approx(cov.u2)
    cov.set_lambda(0.5)
    assert cov.u == pytest.approx((cov.u1 + cov.u2) / 2)


def test_add_to_energy():
    cov = Covalent(param={("A", "B"): 1.5})
    cov.types_changed(_chain(["A", "B"]))
    assert cov.add_to_energy(2.0) == pytest.approx(2.0 + 1.5)


def test_size_mismatch_raises():
    cov = Covalent(param={("A", "B"): 1.5})
    with pytest.raises(ValueError):
        cov.types_changed(_chain(["A", "B"]), _chain(["A", "B", "A"]))