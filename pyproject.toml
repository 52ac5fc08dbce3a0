[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spxdgt"
version = "0.1.0"
description = "Primitives for hash-based signatures: SHA-256/SHA-512 with resumable states and MGF1, seed-tweaked Haraka, bitsliced AES rounds and an AES-256 CTR DRBG"
requires-python = ">=3.10"
keywords = ["sphincs", "hash-based signatures", "post-quantum", "haraka", "sha2", "mgf1", "drbg", "bitslice"]
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
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spxdgt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
