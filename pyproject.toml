[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jessy"
version = "0.1.0"
description = "Labeled hashes, hash tool registry, security requirements, letter serialization, and checksums and signature files for text, YAML and JSON"
requires-python = ">=3.10"
dependencies = [
    "cbor2",
]
keywords = [
    "cryptography",
    "hashing",
    "labeled-hash",
    "checksum",
    "signature-file",
    "blake2",
    "blake3",
    "sha3",
    "base58",
    "cbor",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["jessy"]

[tool.hatch.build.targets.sdist]
include = [
    "jessy",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
