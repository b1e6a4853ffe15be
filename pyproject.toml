[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clusterpos"
version = "0.1.0"
description = "Read Illumina cluster position files (locs and clocs)"
requires-python = ">=3.10"
dependencies = []
keywords = ["illumina", "sequencing", "locs", "clocs", "cluster", "positions"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["clusterpos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
