"""Hash primitives on 32-byte values and the address type used to derive keys."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from dataclasses import dataclass

from gravsphincs.haraka import haraka256, haraka256_chain, haraka512


@dataclass(frozen=True)
class Address:
    """Position of a key in the hypertree: a leaf index and a layer number."""

    index: int
    layer: int = 0


def hash_n_to_n(src: bytes) -> bytes:
    """Hash one 32-byte value to 32 bytes."""
    return haraka256(src)


def hash_n_to_n_chain(src: bytes, chainlen: int) -> bytes:
    """Apply the 32-to-32 byte hash ``chainlen`` times."""
    return haraka256_chain(src, chainlen)


def hash_2n_to_n(src: bytes) -> bytes:
    """Compress 64 bytes (two hashes) into one 32-byte hash."""
    return haraka512(src)


def hash_to_n(data: bytes) -> bytes:
    """Hash a message of any length to 32 bytes."""
    return hashlib.sha256(bytes(data)).digest()


def hash_compress_pairs(src: Sequence[bytes]) -> list[bytes]:
    """Compress 2*n hashes pairwise into n hashes."""
    if len(src) % 2:
        raise ValueError("an even number of hashes is required")
    it = iter(src)
    return [haraka512(bytes(left) + bytes(right)) for left, right in zip(it, it)]


def hash_compress_all(src: Sequence[bytes]) -> bytes:
    """Compress any number of hashes into a single hash."""
    return hash_to_n(b"".join(bytes(h) for h in src))


def hash_parallel(src: Sequence[bytes]) -> list[bytes]:
    """Hash each value independently."""
    return [haraka256(h) for h in src]


def hash_parallel_chains(src: Sequence[bytes], chainlen: int) -> list[bytes]:
    """Compute an independent hash chain of length ``chainlen`` from each value."""
    return [haraka256_chain(h, chainlen) for h in src]