"""The stateless hash-based signature scheme: key generation, signing, verification."""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from gravsphincs.hashes import Address, hash_2n_to_n, hash_compress_pairs
from gravsphincs.merkle import (
    MerkleSignature,
    merkle_compress_auth,
    merkle_extract,
    merkle_genpk,
    merkle_loadsign,
    merkle_sign,
)
from gravsphincs.params import HASH_SIZE, WOTS_ELL, Params, VerificationError
from gravsphincs.pors import (
    OctoporstSignature,
    octoporst_extract,
    octoporst_loadsign,
    octoporst_sign,
    pors_gensk,
    pors_randsubset,
)


@dataclass(frozen=True)
class SecretKey:
    """Seed, salt and the cached top tree, stored leaves first and root last."""

    params: Params
    seed: bytes
    salt: bytes
    cache: tuple[bytes, ...]

    def to_bytes(self) -> bytes:
        return self.seed + self.salt + b"".join(self.cache)


@dataclass(frozen=True)
class PublicKey:
    """Root of the whole hypertree."""

    params: Params
    k: bytes


@dataclass(frozen=True)
class Signature:
    """Randomness, PORST signature, one Merkle signature per layer and the cache path."""

    params: Params
    rand: bytes
    op_sign: OctoporstSignature
    merkle: tuple[MerkleSignature, ...]
    auth: tuple[bytes, ...]

    def to_bytes(self) -> bytes:
        return (
            self.rand
            + self.op_sign.to_bytes()
            + b"".join(m.to_bytes() for m in self.merkle)
            + b"".join(self.auth)
        )


def _check_hash(value: bytes, what: str) -> bytes:
    value = bytes(value)
    if len(value) != HASH_SIZE:
        raise ValueError(f"{what} must be {HASH_SIZE} bytes")
    return value


def _split(data: bytes) -> tuple[bytes, ...]:
    return tuple(data[i:i + HASH_SIZE] for i in range(0, len(data), HASH_SIZE))


def gravity_gensk(params: Params, seed: bytes, salt: bytes) -> SecretKey:
    """Build a secret key, computing the cached top tree from the seed."""
    seed = _check_hash(seed, "seed")
    salt = _check_hash(salt, "salt")
    level = [
        merkle_genpk(params, seed, Address(i * params.merkle_hhh, 0))
        for i in range(params.gravity_ccc)
    ]
    cache = list(level)
    for _ in range(params.gravity_c):
        level = hash_compress_pairs(level)
        cache.extend(level)
    return SecretKey(params, seed, salt, tuple(cache))


def gravity_genpk(sk: SecretKey) -> PublicKey:
    """Public key of a secret key: the root of its cached tree."""
    return PublicKey(sk.params, sk.cache[-1])


def gravity_sign(sk: SecretKey, msg: bytes) -> Signature:
    """Sign a 32-byte message hash."""
    params = sk.params
    msg = _check_hash(msg, "message hash")
    rand = hash_2n_to_n(msg + sk.salt)

    index, subset = pors_randsubset(params, rand, msg)
    psk = pors_gensk(params, sk.seed, Address(index, params.gravity_d))
    op_sign, node = octoporst_sign(psk, subset)

    merkle = []
    for layer in reversed(range(params.gravity_d)):
        sig, node = merkle_sign(params, sk.seed, Address(index, layer), node)
        merkle.append(sig)
        index >>= params.merkle_h

    auth = []
    offset, width = 0, params.gravity_ccc
    for _ in range(params.gravity_c):
        auth.append(sk.cache[offset + (index ^ 1)])
        index >>= 1
        offset += width
        width >>= 1

    return Signature(params, rand, op_sign, tuple(merkle), tuple(auth))


def gravity_verify(pk: PublicKey, sign: Signature, msg: bytes) -> None:
    """Check a signature on a 32-byte message hash; raise if it does not verify."""
    params = sign.params
    msg = _check_hash(msg, "message hash")
    if len(sign.merkle) != params.gravity_d or len(sign.auth) != params.gravity_c:
        raise VerificationError("signature has the wrong structure")

    index, subset = pors_randsubset(params, sign.rand, msg)
    node = octoporst_extract(params, sign.op_sign, subset)

    for layer, msig in zip(reversed(range(params.gravity_d)), sign.merkle):
        node = merkle_extract(params, Address(index, layer), msig, node)
        index >>= params.merkle_h

    node, _ = merkle_compress_auth(node, index, sign.auth)

    if not hmac.compare_digest(node, bytes(pk.k)):
        raise VerificationError("signature does not verify")


def gravity_loadsign(params: Params, data: bytes) -> Signature:
    """Parse a serialized signature."""
    data = bytes(data)
    merkle_size = (WOTS_ELL + params.merkle_h) * HASH_SIZE
    baselen = HASH_SIZE + params.gravity_d * merkle_size + params.gravity_c * HASH_SIZE
    if len(data) < baselen:
        raise VerificationError("signature is too short")
    oplen = len(data) - baselen

    rand = data[:HASH_SIZE]
    pos = HASH_SIZE
    op_sign = octoporst_loadsign(params, data[pos:pos + oplen])
    pos += oplen

    merkle = tuple(
        merkle_loadsign(params, data[pos + i * merkle_size:pos + (i + 1) * merkle_size])
        for i in range(params.gravity_d)
    )
    pos += params.gravity_d * merkle_size
    auth = _split(data[pos:])
    return Signature(params, rand, op_sign, merkle, auth)


def gravity_loadsk(params: Params, data: bytes) -> SecretKey:
    """Parse a serialized secret key."""
    data = bytes(data)
    if len(data) != params.secret_key_size():
        raise ValueError(f"secret key must be {params.secret_key_size()} bytes")
    seed = data[:HASH_SIZE]
    salt = data[HASH_SIZE:2 * HASH_SIZE]
    return SecretKey(params, seed, salt, _split(data[2 * HASH_SIZE:]))