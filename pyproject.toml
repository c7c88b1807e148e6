[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proprf"
version = "0.1.0"
description = "Building blocks for a pseudorandom OPRF: prime-field arithmetic, COPE correlations, LPN expansion, LowMC, fixed-point floats and Kyber matrix generation"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["oprf", "vole", "cope", "lpn", "lowmc", "kyber", "cryptography", "mpc"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["proprf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
