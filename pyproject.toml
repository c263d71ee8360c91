[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gravsphincs"
version = "0.1.0"
description = "Gravity-SPHINCS stateless hash-based signatures in pure Python"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["signature", "post-quantum", "hash-based", "sphincs", "haraka", "merkle", "wots", "pors"]
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

[project.scripts]
gravsphincs-gen-ivs = "gravsphincs.gen_ivs:main"

[tool.hatch.build.targets.wheel]
packages = ["gravsphincs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
