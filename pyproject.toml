[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "geoserde"
version = "0.5.2"
description = "Adapter between Python data structures and geospatial feature formats"
requires-python = ">=3.10"
dependencies = []
keywords = ["gis", "geometry", "serialization", "geojson", "wkt", "features"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["geoserde"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
