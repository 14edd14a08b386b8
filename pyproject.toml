[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minkindr"
version = "0.1.0"
description = "Minimal kinematics: rotation quaternions, angle-axis rotations, rigid, similarity and planar transformations."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "kinematics",
    "quaternion",
    "rotation",
    "angle-axis",
    "transformation",
    "robotics",
    "SO3",
    "Sim3",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["minkindr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
