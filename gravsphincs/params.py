"""Scheme parameters, shared constants and error types."""

from __future__ import annotations

from dataclasses import dataclass

HASH_SIZE = 32

WOTS_LOG_ELL1 = 6
WOTS_ELL1 = 1 << WOTS_LOG_ELL1
WOTS_CHKSUM = 3
WOTS_ELL = WOTS_ELL1 + WOTS_CHKSUM
WOTS_W = 16

PORS_TAU = 16

LOG_MAX_BATCH_COUNT = 10
MAX_BATCH_COUNT = 1 << LOG_MAX_BATCH_COUNT

# The octopus length is stored as an int, padded to the 16-byte hash alignment.
OCTOLEN_FIELD_SIZE = 16

_MASK64 = 0xFFFFFFFFFFFFFFFF


class GravityError(Exception):
    """Base class for errors raised by the signature scheme."""


class VerificationError(GravityError):
    """A signature is malformed or does not verify."""


class BatchError(GravityError):
    """A batch is full, empty, or indexed out of range."""


@dataclass(frozen=True)
class Params:
    """One instance of the scheme: PORST subset size, tree heights and layer counts."""

    pors_k: int
    merkle_h: int
    gravity_d: int
    gravity_c: int
    pors_tau: int = PORS_TAU
    name: str = "custom"

    def __post_init__(self) -> None:
        if self.pors_tau < 1:
            raise ValueError("pors_tau must be at least 1")
        if not 1 <= self.pors_k <= self.pors_t:
            raise ValueError("pors_k must lie between 1 and 2**pors_tau")
        if self.merkle_h < 1:
            raise ValueError("merkle_h must be at least 1")
        if self.gravity_d < 0:
            raise ValueError("gravity_d must not be negative")
        if self.gravity_c < 0:
            raise ValueError("gravity_c must not be negative")

    @property
    def pors_t(self) -> int:
        """Number of PORS secret values."""
        return 1 << self.pors_tau

    @property
    def merkle_hhh(self) -> int:
        """Number of leaves in each hypertree Merkle tree."""
        return 1 << self.merkle_h

    @property
    def gravity_ccc(self) -> int:
        """Number of leaves in the cached top tree."""
        return 1 << self.gravity_c

    @property
    def gravity_h(self) -> int:
        """Total height of the hypertree including the cache."""
        return self.merkle_h * self.gravity_d + self.gravity_c

    @property
    def gravity_mask(self) -> int:
        """Mask applied to the address derived from the message."""
        if self.gravity_h < 64:
            return _MASK64 & ~(_MASK64 << self.gravity_h)
        return _MASK64

    @property
    def public_key_size(self) -> int:
        return HASH_SIZE

    def secret_key_size(self) -> int:
        """Size of a serialized secret key: seed, salt and the cached tree."""
        return 2 * HASH_SIZE + (2 * self.gravity_ccc - 1) * HASH_SIZE

    def signature_size(self) -> int:
        """Size of the fixed-layout signature record used by the signing API."""
        octoporst = (
            self.pors_k * HASH_SIZE
            + self.pors_k * self.pors_tau * HASH_SIZE
            + OCTOLEN_FIELD_SIZE
        )
        merkle = (WOTS_ELL + self.merkle_h) * HASH_SIZE
        return (
            HASH_SIZE
            + octoporst
            + self.gravity_d * merkle
            + self.gravity_c * HASH_SIZE
        )


SMALL = Params(pors_k=24, merkle_h=5, gravity_d=1, gravity_c=10, name="Gravity-SPHINCS S")
MEDIUM = Params(pors_k=32, merkle_h=5, gravity_d=7, gravity_c=15, name="Gravity-SPHINCS M")
LARGE = Params(pors_k=28, merkle_h=5, gravity_d=10, gravity_c=14, name="Gravity-SPHINCS L")
DEFAULT = SMALL


def u8to32(data: bytes, offset: int = 0) -> int:
    """Read a little-endian unsigned 32-bit integer at ``offset``."""
    if offset < 0 or offset + 4 > len(data):
        raise ValueError("not enough bytes for a 32-bit integer")
    return int.from_bytes(data[offset:offset + 4], "little")