[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "klip"
version = "0.1.0"
description = "Pure-Python SHA-256, SHA-512, HMAC, PBKDF2, scrypt and Ed25519 primitives"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sha256",
    "sha512",
    "hmac",
    "pbkdf2",
    "scrypt",
    "salsa20",
    "ed25519",
    "curve25519",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["klip"]

[tool.pytest.ini_options]
addopts = "-ra"
