import math

import numpy as np
import pytest

from molmodel.bcond import (
    BCC,
    FCC,
    BoundaryType,
    Cubic,
    NonPeriodic,
    Orthorhombic,
    Triclinic,
    new_from_cell,
    parse_boundary_conditions,
    parse_boundary_type,
)

PERIODIC_TEXTS = [
    "cubic 12",
    "orthorhombic 10 12 14",
    "bcc 15",
    "fcc 15",
    "triclinic 10 11 12 80 85 95",
]


def test_parse_boundary_type_names():
    for kind in BoundaryType:
        assert parse_boundary_type(str(kind)) is kind


def test_parse_boundary_type_rejects_unknown():
    with pytest.raises(ValueError):
        parse_boundary_type("hexagonal")


@pytest.mark.parametrize("text", PERIODIC_TEXTS)
def test_volume_is_lattice_determinant(text):
    bc = parse_boundary_conditions(text)
    assert bc.volume() == pytest.approx(abs(np.linalg.det(bc.lattice_vectors())))


@pytest.mark.parametrize("text", PERIODIC_TEXTS)
def test_reciprocal_lattice(text):
    bc = parse_boundary_conditions(text)
    prod = bc.reciprocal_lattice_vectors().T @ bc.lattice_vectors()
    assert np.allclose(prod, 2 * math.pi * np.eye(3))


@pytest.mark.parametrize("text", PERIODIC_TEXTS)
def test_scale_scales_volume_and_diameters(text):
    bc = parse_boundary_conditions(text)
    c = bc.copy()
    v, dmin, dmax = c.volume(), c.min_diameter(), c.max_diameter()
    c.scale(2.0)
    assert c.volume() == pytest.approx(8 * v)
    assert c.min_diameter() == pytest.approx(2 * dmin)
    assert c.max_diameter() == pytest.approx(2 * dmax)
    assert bc.volume() == pytest.approx(v)


@pytest.mark.parametrize("text", PERIODIC_TEXTS)
def test_string_round_trip(text):
    bc = parse_boundary_conditions(text)
    again = parse_boundary_conditions(str(bc))
    assert again.volume() == pytest.approx(bc.volume(), rel=1e-4)
    assert again.min_diameter() == pytest.approx(bc.min_diameter(), rel=1e-4)


@pytest.mark.parametrize("text", PERIODIC_TEXTS)
def test_min_diameter_not_above_max(text):
    bc = parse_boundary_conditions(text)
    assert bc.min_diameter() <= bc.max_diameter()


def test_bcc_and_fcc_keep_min_diameter():
    assert BCC(15.0).min_diameter() == pytest.approx(15.0)
    assert FCC(15.0).min_diameter() == pytest.approx(15.0)


def test_cubic_lattice_is_diagonal():
    assert np.allclose(Cubic(12.0).lattice_vectors(), 12.0 * np.eye(3))
    assert Cubic(12.0).max_diameter() == pytest.approx(math.sqrt(3.0) * 12.0)


def test_non_periodic():
    bc = NonPeriodic()
    assert bc.volume() == 0.0
    assert str(bc) == "non_periodic"
    assert isinstance(parse_boundary_conditions("non_periodic"), NonPeriodic)
    with pytest.raises(ValueError):
        bc.reciprocal_lattice_vectors()


def test_triclinic_angles_round_trip():
    t = Triclinic.from_cell(10.0, 11.0, 12.0, 80.0, 85.0, 95.0)
    assert (t.a(), t.b(), t.c()) == pytest.approx((10.0, 11.0, 12.0))
    assert math.degrees(t.alpha()) == pytest.approx(80.0)
    assert math.degrees(t.beta()) == pytest.approx(85.0)
    assert math.degrees(t.gamma()) == pytest.approx(95.0)
    c = t.copy()
    assert np.allclose(c.lattice_vectors(), t.lattice_vectors())


def test_right_angled_triclinic_matches_orthorhombic():
    t = Triclinic.from_cell(10.0, 12.0, 14.0, 90.0, 90.0, 90.0)
    o = Orthorhombic((10.0, 12.0, 14.0))
    assert t.volume() == pytest.approx(o.volume())
    assert t.min_diameter() == pytest.approx(o.min_diameter())
    assert t.max_diameter() == pytest.approx(o.max_diameter())


def test_triclinic_invalid_cell():
    with pytest.raises(ValueError):
        Triclinic.from_cell(10.0, 10.0, 10.0, 120.0, 120.0, 120.0)


def test_new_from_cell_chooses_type():
    cubic = new_from_cell(10, 10, 10, 90, 90, 90)
    assert isinstance(cubic, Cubic)
    assert cubic.volume() == pytest.approx(1000.0)
    ortho = new_from_cell(10, 11, 12, 90, 90, 90)
    assert isinstance(ortho, Orthorhombic)
    assert ortho.volume() == pytest.approx(1320.0)
    assert ortho.min_diameter() == pytest.approx(10.0)
    tri = new_from_cell(10, 11, 12, 80, 90, 90)
    assert isinstance(tri, Triclinic)
    assert math.degrees(tri.alpha()) == pytest.approx(80.0)
    assert tri.b() == pytest.approx(11.0)


def test_parse_triclinic_uses_cell():
    cubic = parse_boundary_conditions("triclinic 9 9 9 90 90 90")
    assert isinstance(cubic, Cubic)
    assert cubic.volume() == pytest.approx(729.0)
    bc = parse_boundary_conditions("orthorhombic 10 12 14")
    assert np.allclose(np.diag(bc.lattice_vectors()), [10.0, 12.0, 14.0])


@pytest.mark.parametrize("text", ["cubic", "orthorhombic 1 2", "bcc x",
                                  "triclinic 1 2 3 90 90", "", "cubic 1 2", "box 3"])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        parse_boundary_conditions(text)