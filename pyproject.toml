[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "saltybox"
version = "0.1.0"
description = "Passphrase-based file encryption with a versioned, shell-safe armored format"
requires-python = ">=3.10"
keywords = ["encryption", "passphrase", "scrypt", "secretbox", "nacl"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Utilities",
]
dependencies = [
    "pynacl",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
saltybox = "saltybox.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["saltybox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
