[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmkit"
version = "0.1.0"
description = "Signal filters, orientation helpers, remote-controller decoding and referee-protocol tools for competition robots"
requires-python = ">=3.10"
keywords = ["robotics", "filters", "quaternion", "dbus", "referee", "crc", "serial"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]
dependencies = [
    "numpy",
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rmkit-dbus = "rmkit.dbus_node:main"

[tool.hatch.build.targets.wheel]
packages = ["rmkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
