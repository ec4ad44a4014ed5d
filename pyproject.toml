[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "molmodel"
version = "0.1.0"
description = "Molecular modelling building blocks: units, boundary conditions, minimization, multipoles, Ewald estimates and bond charge increments"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "molecular modelling",
    "electrostatics",
    "ewald",
    "boundary conditions",
    "conjugate gradient",
    "multipole moments",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["molmodel"]

[tool.pytest.ini_options]
addopts = "-ra"
