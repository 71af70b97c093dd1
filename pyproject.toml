[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huskympcc"
version = "0.1.0"
description = "Vehicle model, arc-length splines, track loading and bounds for contouring control of a differential-drive robot"
requires-python = ">=3.10"
keywords = ["mpcc", "contouring control", "robotics", "spline", "arc length", "unicycle model", "runge-kutta"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["huskympcc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
