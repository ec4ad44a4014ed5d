"""Molecular modelling building blocks in kcal/mol, ångström and picosecond units."""

__version__ = "0.1.0"

__all__ = [
    "apattern",
    "bcond",
    "bci",
    "cgmin",
    "covalent",
    "euler",
    "ewald",
    "multipole",
    "ranges",
    "units",
]