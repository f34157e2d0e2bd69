[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spaced"
version = "0.1.0"
description = "A 6502 processor model with its instruction set, and a separating-axis collision test for convex polygons"
requires-python = ">=3.10"
dependencies = []
keywords = ["6502", "emulator", "cpu", "collision", "separating axis theorem", "geometry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spaced"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
