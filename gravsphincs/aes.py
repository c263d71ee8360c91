"""AES-256 in counter mode and a single AES encryption round."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

BLOCK_SIZE = 16
KEY_SIZE = 32
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _xtime(a: int) -> int:
    return ((a << 1) ^ (0x1B if a & 0x80 else 0)) & 0xFF


def _rotl8(x: int, shift: int) -> int:
    return ((x << shift) | (x >> (8 - shift))) & 0xFF


def _build_sbox() -> tuple[int, ...]:
    sbox = [0] * 256
    p = q = 1
    while True:
        # p walks the multiplicative group by powers of 3, q by powers of 1/3.
        p = (p ^ (p << 1) ^ (0x1B if p & 0x80 else 0)) & 0xFF
        q ^= (q << 1) & 0xFF
        q ^= (q << 2) & 0xFF
        q ^= (q << 4) & 0xFF
        if q & 0x80:
            q ^= 0x09
        x = q ^ _rotl8(q, 1) ^ _rotl8(q, 2) ^ _rotl8(q, 3) ^ _rotl8(q, 4)
        sbox[p] = x ^ 0x63
        if p == 1:
            break
    sbox[0] = 0x63
    return tuple(sbox)


_SBOX = _build_sbox()
_XTIME = tuple(_xtime(a) for a in range(256))
# Column-major state: byte i sits in row i % 4, column i // 4.
_SHIFT_ROWS = tuple((i + 4 * (i % 4)) % 16 for i in range(16))


def aes_round(state: bytes, round_key: bytes) -> bytes:
    """One full AES encryption round: ShiftRows, SubBytes, MixColumns, AddRoundKey."""
    if len(state) != BLOCK_SIZE or len(round_key) != BLOCK_SIZE:
        raise ValueError("state and round key must be 16 bytes")
    sub = [_SBOX[state[j]] for j in _SHIFT_ROWS]
    mixed: list[int] = []
    for a0, a1, a2, a3 in zip(*[iter(sub)] * 4):
        t = a0 ^ a1 ^ a2 ^ a3
        mixed += (
            a0 ^ t ^ _XTIME[a0 ^ a1],
            a1 ^ t ^ _XTIME[a1 ^ a2],
            a2 ^ t ^ _XTIME[a2 ^ a3],
            a3 ^ t ^ _XTIME[a3 ^ a0],
        )
    return bytes(m ^ k for m, k in zip(mixed, round_key))


def aesctr256(key: bytes, counter: bytes, length: int) -> bytes:
    """Return ``length`` bytes of AES-256-CTR keystream.

    The counter's last 8 bytes are a big-endian integer that is incremented
    per block and wraps modulo 2**64; the first 8 bytes never change.
    """
    if len(key) != KEY_SIZE:
        raise ValueError("key must be 32 bytes")
    if len(counter) != BLOCK_SIZE:
        raise ValueError("counter must be 16 bytes")
    if length < 0:
        raise ValueError("length must not be negative")
    if length == 0:
        return b""

    prefix = bytes(counter[:8])
    low = int.from_bytes(counter[8:], "big")
    nblocks = -(-length // BLOCK_SIZE)
    blocks = b"".join(
        prefix + ((low + i) & _MASK64).to_bytes(8, "big") for i in range(nblocks)
    )
    encryptor = Cipher(algorithms.AES(bytes(key)), modes.ECB()).encryptor()
    stream = encryptor.update(blocks) + encryptor.finalize()
    return stream[:length]


def aesctr256_zeroiv(key: bytes, length: int) -> bytes:
    """AES-256-CTR keystream starting from an all-zero counter."""
    return aesctr256(key, bytes(BLOCK_SIZE), length)