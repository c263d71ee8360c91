"""Signing API over byte strings: key pairs, signed messages and their opening."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from gravsphincs.debug import format_bytes, format_int
from gravsphincs.gravity import (
    PublicKey,
    Signature,
    gravity_genpk,
    gravity_gensk,
    gravity_loadsk,
    gravity_sign,
    gravity_verify,
)
from gravsphincs.hashes import hash_to_n
from gravsphincs.merkle import merkle_loadsign
from gravsphincs.params import (
    HASH_SIZE,
    OCTOLEN_FIELD_SIZE,
    WOTS_ELL,
    Params,
    VerificationError,
)
from gravsphincs.pors import OctoporstSignature

logger = logging.getLogger(__name__)


def _trace(fmt: Callable[..., str], *args) -> None:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(fmt(*args))


def _split(data: bytes) -> tuple[bytes, ...]:
    return tuple(data[i:i + HASH_SIZE] for i in range(0, len(data), HASH_SIZE))


def _pack_signature(sig: Signature) -> bytes:
    """Fixed-size record: the octopus area is padded to its full capacity."""
    params = sig.params
    capacity = params.pors_k * params.pors_tau
    octopus = list(sig.op_sign.octopus)
    if len(octopus) > capacity:
        raise ValueError("octopus exceeds its capacity")
    padding = bytes(HASH_SIZE) * (capacity - len(octopus))
    octolen = len(octopus).to_bytes(4, "little").ljust(OCTOLEN_FIELD_SIZE, b"\0")
    return (
        sig.rand
        + b"".join(sig.op_sign.values)
        + b"".join(octopus)
        + padding
        + octolen
        + b"".join(m.to_bytes() for m in sig.merkle)
        + b"".join(sig.auth)
    )


def _unpack_signature(params: Params, data: bytes) -> Signature:
    if len(data) != params.signature_size():
        raise VerificationError("signature record has the wrong length")
    pos = 0

    def take(n: int) -> bytes:
        nonlocal pos
        chunk = data[pos:pos + n]
        pos += n
        return chunk

    capacity = params.pors_k * params.pors_tau
    rand = take(HASH_SIZE)
    values = _split(take(params.pors_k * HASH_SIZE))
    octopus_area = take(capacity * HASH_SIZE)
    octolen = int.from_bytes(take(OCTOLEN_FIELD_SIZE)[:4], "little", signed=True)
    if not 0 <= octolen <= capacity:
        raise VerificationError("octopus length out of range")
    octopus = _split(octopus_area[:octolen * HASH_SIZE])
    merkle_size = (WOTS_ELL + params.merkle_h) * HASH_SIZE
    merkle = tuple(
        merkle_loadsign(params, take(merkle_size)) for _ in range(params.gravity_d)
    )
    auth = _split(take(params.gravity_c * HASH_SIZE))
    return Signature(params, rand, OctoporstSignature(values, octopus), merkle, auth)


def randombytes(length: int) -> bytes:
    """Return ``length`` bytes from the operating system's random source."""
    if length < 0:
        raise ValueError("length must not be negative")
    return os.urandom(length)


def crypto_sign_keypair(params: Params) -> tuple[bytes, bytes]:
    """Generate a fresh key pair; return (public key, secret key) as bytes."""
    seed = randombytes(HASH_SIZE)
    salt = randombytes(HASH_SIZE)
    _trace(format_bytes, "crypto_sign_keypair: sk seed", seed)
    _trace(format_bytes, "crypto_sign_keypair: sk salt", salt)

    sk = gravity_gensk(params, seed, salt)
    sk_bytes = sk.to_bytes()
    _trace(format_bytes, "crypto_sign_keypair: sk", sk_bytes)

    pk_bytes = gravity_genpk(sk).k
    _trace(format_bytes, "crypto_sign_keypair: pk", pk_bytes)
    return pk_bytes, sk_bytes


def crypto_sign(params: Params, m: bytes, sk: bytes) -> bytes:
    """Return the message followed by its signature record."""
    m = bytes(m)
    sk = bytes(sk)
    _trace(format_int, "crypto_sign: mlen", len(m))
    _trace(format_bytes, "crypto_sign: m", m)
    _trace(format_bytes, "crypto_sign: sk seed", sk[:HASH_SIZE])
    _trace(format_bytes, "crypto_sign: sk salt", sk[HASH_SIZE:2 * HASH_SIZE])

    msg = hash_to_n(m)
    _trace(format_bytes, "crypto_sign: H(m)", msg)

    secret = gravity_loadsk(params, sk)
    sig = gravity_sign(secret, msg)
    sm = m + _pack_signature(sig)
    _trace(format_int, "crypto_sign: smlen", len(sm))
    return sm


def crypto_sign_open(params: Params, sm: bytes, pk: bytes) -> bytes:
    """Verify a signed message and return the message; raise if it does not verify."""
    sm = bytes(sm)
    pk = bytes(pk)
    if len(pk) != params.public_key_size:
        raise ValueError(f"public key must be {params.public_key_size} bytes")
    siglen = params.signature_size()
    if len(sm) < siglen:
        raise VerificationError("signed message is shorter than a signature")

    _trace(format_int, "crypto_sign_open: smlen", len(sm))
    _trace(format_bytes, "crypto_sign_open: sm", sm)
    _trace(format_bytes, "crypto_sign_open: pk", pk)

    mlen = len(sm) - siglen
    _trace(format_int, "crypto_sign_open: mlen", mlen)

    m = sm[:mlen]
    sig = _unpack_signature(params, sm[mlen:])
    msg = hash_to_n(m)
    _trace(format_bytes, "crypto_sign: H(m)", msg)

    gravity_verify(PublicKey(params, pk), sig, msg)
    return m