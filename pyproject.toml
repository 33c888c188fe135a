[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chunkpic"
version = "0.1.0"
description = "Building blocks for chunk-decomposed particle-in-cell simulations: load balancing, current deposition, field interpolation and run configuration."
requires-python = ">=3.11"
dependencies = [
    "numpy",
]
keywords = [
    "particle-in-cell",
    "plasma",
    "simulation",
    "domain decomposition",
    "load balancing",
    "esirkepov",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chunkpic"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
ignore_missing_imports = true
