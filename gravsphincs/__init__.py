"""Gravity-SPHINCS stateless hash-based signatures: primitives, trees, signing API and batching."""

__version__ = "0.1.0"

__all__ = [
    "aes",
    "batch",
    "debug",
    "gen_ivs",
    "gravity",
    "haraka",
    "hashes",
    "ltree",
    "merkle",
    "params",
    "pors",
    "sign",
    "wots",
]