"""Winternitz one-time signatures, with the public key compressed by an L-tree."""

from __future__ import annotations

from collections.abc import Sequence

from gravsphincs.aes import aesctr256
from gravsphincs.hashes import Address, hash_n_to_n_chain, hash_parallel_chains
from gravsphincs.ltree import ltree
from gravsphincs.params import HASH_SIZE, WOTS_CHKSUM, WOTS_ELL, WOTS_ELL1, WOTS_W

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF


def _address_iv(address: Address) -> bytes:
    return (
        (address.index & _MASK64).to_bytes(8, "little")
        + (address.layer & _MASK32).to_bytes(4, "little")
        + bytes(4)
    )


def _check_hash(value: bytes) -> bytes:
    value = bytes(value)
    if len(value) != HASH_SIZE:
        raise ValueError(f"a hash must be {HASH_SIZE} bytes")
    return value


def _check_chains(values: Sequence[bytes], what: str) -> list[bytes]:
    if len(values) != WOTS_ELL:
        raise ValueError(f"{what} must hold {WOTS_ELL} hashes")
    return [_check_hash(v) for v in values]


def _digits(msg: bytes) -> list[int]:
    """Base-16 digits of the message followed by its checksum digits."""
    msg = _check_hash(msg)
    digits: list[int] = []
    for byte in msg[: WOTS_ELL1 // 2]:
        digits += (byte >> 4, byte & 15)
    checksum = sum(WOTS_W - 1 - d for d in digits)
    for _ in range(WOTS_CHKSUM):
        digits.append(checksum & 15)
        checksum >>= 4
    return digits


def wots_chain(src: bytes, count: int) -> bytes:
    """Advance ``src`` by ``count`` steps along its hash chain."""
    return hash_n_to_n_chain(src, count)


def wots_gensk(key: bytes, address: Address) -> list[bytes]:
    """Derive the secret chain starts for the key at ``address``."""
    stream = aesctr256(key, _address_iv(address), WOTS_ELL * HASH_SIZE)
    return [stream[i:i + HASH_SIZE] for i in range(0, len(stream), HASH_SIZE)]


def wots_sign(sk: Sequence[bytes], msg: bytes) -> list[bytes]:
    """Sign a 32-byte message hash."""
    sk = _check_chains(sk, "secret key")
    return [wots_chain(k, d) for k, d in zip(sk, _digits(msg))]


def lwots_ltree(pk: Sequence[bytes]) -> bytes:
    """Compress the chain ends into a single public key."""
    return ltree(_check_chains(pk, "public key"))


def lwots_genpk(sk: Sequence[bytes]) -> bytes:
    """Compute the compressed public key from a secret key."""
    sk = _check_chains(sk, "secret key")
    return lwots_ltree(hash_parallel_chains(sk, WOTS_W - 1))


def lwots_extract(sign: Sequence[bytes], msg: bytes) -> bytes:
    """Recover the compressed public key from a signature and its message."""
    sign = _check_chains(sign, "signature")
    ends = [wots_chain(s, WOTS_W - 1 - d) for s, d in zip(sign, _digits(msg))]
    return lwots_ltree(ends)