[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tetremesh"
version = "0.1.0"
description = "Tetrahedral mesh face adjacency, cell-tuple navigation and local remeshing operations"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tetrahedral mesh",
    "remeshing",
    "edge removal",
    "multi-face removal",
    "edge contraction",
    "edge split",
    "mesh adjacency",
    "cell tuple",
    "geometry processing",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tetremesh"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
