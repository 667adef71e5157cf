[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "polrts"
version = "0.1.0"
description = "Simulation core for a small real-time strategy game: geometry, polynomial roots, grid path finding, meshes, particles and scene bookkeeping"
requires-python = ">=3.10"
keywords = ["rts", "game", "pathfinding", "a-star", "particles", "mesh", "geometry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["polrts*"]

[tool.pytest.ini_options]
addopts = "-ra"
