"""Unit conversions for the internal unit system.

Base units are kcal/mol for energy, angstrom for length and picoseconds
for time; every other internal unit is derived from these.  The charge
unit is sqrt(A kcal/mol) and the mass unit is (kcal/mol) (ps^2/A^2).
"""

import math

BOHR_RADIUS = 0.5291772108  # 10^-10 m
AVOGADRO = 6.0221415  # 10^23 mol^-1
HARTREE = 4.35974417  # 10^-18 J
CALORIE = 4.184  # J
BOLTZMANN = 1.3806505  # 10^-23 J/K
SPEED_OF_LIGHT = 2.99792548  # 10^8 m/s
HBAR = 1.05457168  # 10^-34 J s

_HARTREE_KCAL = HARTREE * AVOGADRO * 100 / CALORIE
_HARTREE_BOHR_KCAL_A = (HARTREE * AVOGADRO * 100) / (BOHR_RADIUS * CALORIE)
_E_CHARGE = math.sqrt(BOHR_RADIUS * HARTREE * AVOGADRO * 100 / CALORIE)
_DEBYE = math.sqrt(CALORIE / (AVOGADRO * 10))
_MASS = 100 * CALORIE
_CM3_MOL = AVOGADRO * 1e-1
_BAR = CALORIE * 1e5 / AVOGADRO
_KELVIN = BOLTZMANN * AVOGADRO * 1e-3 / CALORIE
_CM1 = 2 * math.pi * SPEED_OF_LIGHT * 1e-2
_MOLAR = 1e4 / AVOGADRO
_ACTION = HBAR * AVOGADRO * 1e-2 / CALORIE
_VELOCITY = SPEED_OF_LIGHT * 1e6


def radians_to_degrees(x):
    return x * (180 / math.pi)


def degrees_to_radians(x):
    return x * (math.pi / 180)


def angstrom_to_bohr(x):
    return x / BOHR_RADIUS


def bohr_to_angstrom(x):
    return x * BOHR_RADIUS


def angstrom2_to_bohr2(x):
    return x / BOHR_RADIUS**2


def bohr2_to_angstrom2(x):
    return x * BOHR_RADIUS**2


def angstrom3_to_bohr3(x):
    return x / BOHR_RADIUS**3


def bohr3_to_angstrom3(x):
    return x * BOHR_RADIUS**3


def hartree_to_kcal_mol(x):
    return x * _HARTREE_KCAL


def kcal_mol_to_hartree(x):
    return x / _HARTREE_KCAL


def hartree_bohr_to_kcal_mol_A(x):
    return x * _HARTREE_BOHR_KCAL_A


def kcal_mol_A_to_hartree_bohr(x):
    return x / _HARTREE_BOHR_KCAL_A


def e_to_charge_unit(x):
    return x * _E_CHARGE


def charge_unit_to_e(x):
    return x / _E_CHARGE


def hartree_e_to_potential_unit(x):
    return e_to_charge_unit(angstrom_to_bohr(x))


def potential_unit_to_hartree_e(x):
    return bohr_to_angstrom(charge_unit_to_e(x))


def kcal_mol_e_to_potential_unit(x):
    return hartree_e_to_potential_unit(kcal_mol_to_hartree(x))


def potential_unit_to_kcal_mol_e(x):
    return hartree_to_kcal_mol(potential_unit_to_hartree_e(x))


def potential_unit_to_e_A(x):
    return charge_unit_to_e(x)


def e_A_to_potential_unit(x):
    return e_to_charge_unit(x)


def dipole_unit_to_debye(x):
    return x * _DEBYE


def debye_to_dipole_unit(x):
    return x / _DEBYE


def quadrupole_unit_to_au(x):
    return charge_unit_to_e(angstrom2_to_bohr2(x))


def au_to_quadrupole_unit(x):
    return bohr2_to_angstrom2(e_to_charge_unit(x))


def dipole_unit2_to_debye2(x):
    return dipole_unit_to_debye(dipole_unit_to_debye(x))


def debye2_to_dipole_unit2(x):
    return debye_to_dipole_unit(debye_to_dipole_unit(x))


def mass_unit_to_g_mol(x):
    return x * _MASS


def g_mol_to_mass_unit(x):
    return x / _MASS


def angstrom3_to_cm3_mol(x):
    return x * _CM3_MOL


def cm3_mol_to_angstrom3(x):
    return x / _CM3_MOL


def density_unit_to_g_cm3(x):
    return mass_unit_to_g_mol(cm3_mol_to_angstrom3(x))


def g_cm3_to_density_unit(x):
    return angstrom3_to_cm3_mol(g_mol_to_mass_unit(x))


def pressure_unit_to_bar(x):
    return x * _BAR


def bar_to_pressure_unit(x):
    return x / _BAR


def K_to_kcal_mol(x):
    return x * _KELVIN


def kcal_mol_to_K(x):
    return x / _KELVIN


def angstrom2_psec_to_m2_sec(x):
    return x * 1e-8


def m2_sec_to_angstrom2_psec(x):
    return x / 1e-8


def angular_velocity_unit_to_cm1(x):
    return x / _CM1


def cm1_to_angular_velocity_unit(x):
    return x * _CM1


def concentration_unit_to_molar(x):
    return x * _MOLAR


def molar_to_concentration_unit(x):
    return x / _MOLAR


def hbar_to_action_unit(x):
    return x * _ACTION


def action_unit_to_hbar(x):
    return x / _ACTION


def c_to_velocity_unit(x):
    return x * _VELOCITY


def velocity_unit_to_c(x):
    return x / _VELOCITY


def nm_to_kcal_mol(x):
    """Photon energy (kcal/mol) for a wavelength in nm."""
    return (0.1 * 2 * math.pi * hbar_to_action_unit(1.0) * c_to_velocity_unit(1.0)) / x


def kcal_mol_to_nm(x):
    """Wavelength (nm) for a photon energy in kcal/mol."""
    return nm_to_kcal_mol(x)


def A3_to_L_mol(x):
    return x * AVOGADRO * 1e-4


def L_mol_to_A3(x):
    return x / AVOGADRO * 1e-4