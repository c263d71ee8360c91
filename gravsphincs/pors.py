"""PORS few-time signatures and the PORST variant with an authentication octopus."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gravsphincs.aes import aesctr256, aesctr256_zeroiv
from gravsphincs.hashes import Address, hash_2n_to_n, hash_parallel
from gravsphincs.merkle import (
    merkle_compress_all,
    merkle_compress_octopus,
    merkle_gen_octopus,
)
from gravsphincs.params import HASH_SIZE, Params, VerificationError, u8to32

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF
_BYTES_PER_INDEX = 4


@dataclass(frozen=True)
class OctoporstSignature:
    """Revealed secret values, sorted by index, and the merged authentication nodes."""

    values: tuple[bytes, ...]
    octopus: tuple[bytes, ...]

    def to_bytes(self) -> bytes:
        return b"".join(self.values) + b"".join(self.octopus)


def _address_iv(address: Address) -> bytes:
    return (
        (address.index & _MASK64).to_bytes(8, "little")
        + (address.layer & _MASK32).to_bytes(4, "little")
        + bytes(4)
    )


def _split(data: bytes) -> list[bytes]:
    return [data[i:i + HASH_SIZE] for i in range(0, len(data), HASH_SIZE)]


def pors_gensk(params: Params, key: bytes, address: Address) -> list[bytes]:
    """Derive the ``pors_t`` secret values of the PORS key at ``address``."""
    stream = aesctr256(key, _address_iv(address), params.pors_t * HASH_SIZE)
    return _split(stream)


def pors_sign(sk: Sequence[bytes], subset: Sequence[int]) -> list[bytes]:
    """Reveal the secret values selected by ``subset``, in subset order."""
    if any(not 0 <= index < len(sk) for index in subset):
        raise ValueError("subset index out of range")
    return [bytes(sk[index]) for index in subset]


def porst_genpk(sk: Sequence[bytes]) -> bytes:
    """Root of the Merkle tree over the hashed secret values."""
    return merkle_compress_all(hash_parallel(sk))


def octoporst_sign(
    sk: Sequence[bytes], subset: Sequence[int]
) -> tuple[OctoporstSignature, bytes]:
    """Sign a subset of indices; return the signature and the PORST public key."""
    ordered = sorted(subset)
    values = pors_sign(sk, ordered)
    octopus, root = merkle_gen_octopus(hash_parallel(sk), ordered)
    return OctoporstSignature(tuple(values), tuple(octopus)), root


def octoporst_extract(
    params: Params, sign: OctoporstSignature, subset: Sequence[int]
) -> bytes:
    """Recover the PORST public key from a signature on ``subset``."""
    ordered = sorted(subset)
    if len(ordered) != params.pors_k or len(sign.values) != params.pors_k:
        raise VerificationError("wrong number of revealed values")
    if any(not 0 <= index < params.pors_t for index in ordered):
        raise VerificationError("subset index out of range")
    leaves = hash_parallel(sign.values)
    return merkle_compress_octopus(leaves, params.pors_tau, sign.octopus, ordered)


def octoporst_loadsign(params: Params, data: bytes) -> OctoporstSignature:
    """Parse a serialized PORST signature; the octopus length follows from the size."""
    data = bytes(data)
    values_len = params.pors_k * HASH_SIZE
    if len(data) < values_len:
        raise VerificationError("PORST signature is too short")
    rest = len(data) - values_len
    if rest % HASH_SIZE:
        raise VerificationError("PORST octopus is not a whole number of hashes")
    if rest // HASH_SIZE > params.pors_k * params.pors_tau:
        raise VerificationError("PORST octopus is too long")
    return OctoporstSignature(
        tuple(_split(data[:values_len])), tuple(_split(data[values_len:]))
    )


def pors_randsubset(params: Params, rand: bytes, msg: bytes) -> tuple[int, list[int]]:
    """Derive the hypertree address and ``pors_k`` distinct PORS indices."""
    seed = hash_2n_to_n(bytes(rand) + bytes(msg))
    stream = aesctr256_zeroiv(seed, 8 * params.pors_k + HASH_SIZE)

    address = int.from_bytes(stream[:HASH_SIZE], "big") & params.gravity_mask

    subset: list[int] = []
    seen: set[int] = set()
    offset = 0
    while len(subset) < params.pors_k:
        if offset + _BYTES_PER_INDEX > len(stream):
            stream = aesctr256_zeroiv(seed, 2 * len(stream))
        index = u8to32(stream, offset) % params.pors_t
        offset += _BYTES_PER_INDEX
        if index not in seen:
            seen.add(index)
            subset.append(index)
    return address, subset