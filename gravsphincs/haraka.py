"""Haraka-256 and Haraka-512 short-input hash functions, with batched variants."""

from __future__ import annotations

import struct

from gravsphincs.aes import aes_round

HARAKA_ROUNDS = 6

_RC_WORDS = (
    0x75817B9D, 0xB2C5FEF0, 0xE620C00A, 0x0684704C, 0x2F08F717, 0x640F6BA4,
    0x88F3A06B, 0x8B66B4E1, 0x9F029114, 0xCF029D60, 0x53F28498, 0x3402DE2D,
    0xFD5B4F79, 0xBBF3BCAF, 0x2E7B4F08, 0x0ED6EAE6, 0xBE397044, 0x79EECD1C,
    0x4872448B, 0xCBCFB0CB, 0x2B8A057B, 0x8D5335ED, 0x6E9032B7, 0x7EEACDEE,
    0xDA4FEF1B, 0xE2412761, 0x5E2E7CD0, 0x67C28F43, 0x1FC70B3B, 0x675FFDE2,
    0xAFCACC07, 0x2924D9B0, 0xB9D465EE, 0xECDB8FCA, 0xE6867FE9, 0xAB4D63F1,
    0xAD037E33, 0x5B2A404F, 0xD4B7CD64, 0x1C30BF84, 0x8DF69800, 0x69028B2E,
    0x941723BF, 0xB2CC0BB9, 0x5C9D2D8A, 0x4AAA9EC8, 0xDE6F5572, 0xFA0478A6,
    0x29129FD4, 0x0EFA4F2E, 0x6B772A12, 0xDFB49F2B, 0xBB6A12EE, 0x32D611AE,
    0xF449A236, 0x1EA10344, 0x9CA8ECA6, 0x5F9600C9, 0x4B050084, 0xAF044988,
    0x27E593EC, 0x78A2C7E3, 0x9D199C4F, 0x21025ED8, 0x82D40173, 0xB9282ECD,
    0xA759C9B7, 0xBF3AAAF8, 0x10307D6B, 0x37F2EFD9, 0x6186B017, 0x6260700D,
    0xF6FC9AC6, 0x81C29153, 0x21300443, 0x5ACA45C2, 0x36D1943A, 0x2CAF92E8,
    0x226B68BB, 0x9223973C, 0xE51071B4, 0x6CBAB958, 0x225886EB, 0xD3BF9238,
    0x24E1128D, 0x933DFDDD, 0xAEF0C677, 0xDB863CE5, 0xCB2212B1, 0x83E48DE3,
    0xFFEBA09C, 0xBB606268, 0xC72BF77D, 0x2DB91A4E, 0xE2E4D19C, 0x734BD3DC,
    0x2CB3924E, 0x4B1415C4, 0x61301B43, 0x43BB47C3, 0x16EB6899, 0x03B231DD,
    0xE707EFF6, 0xDBA775A8, 0x7ECA472C, 0x8E5E2302, 0x3C755977, 0x6DF3614B,
    0xB88617F9, 0x6D1BE5B9, 0xD6DE7D77, 0xCDA75A17, 0xA946EE5D, 0x9D6C069D,
    0x6BA8E9AA, 0xEC6B43F0, 0x3BF327C1, 0xA2531159, 0xF957332B, 0xCB1E6950,
    0x600ED0D9, 0xE4ED0353, 0x00DA619C, 0x2CEE0C75, 0x63A4A350, 0x80BBBABC,
    0x96E90CAB, 0xF0B1A5A1, 0x938DCA39, 0xAB0DDE30, 0x5E962988, 0xAE3DB102,
    0x2E75B442, 0x8814F3A8, 0xD554A40B, 0x17BB8F38, 0x360A16F6, 0xAEB6B779,
    0x5F427FD7, 0x34BB8A5B, 0xFFBAAFDE, 0x43CE5918, 0xCBE55438, 0x26F65241,
    0x839EC978, 0xA2CA9CF7, 0xB9F3026A, 0x4CE99A54, 0x22901235, 0x40C06E28,
    0x1BDFF7BE, 0xAE51A51A, 0x48A659CF, 0xC173BC0F, 0xBA7ED22B, 0xA0C1613C,
    0xE9C59DA1, 0x4AD6BDFD, 0x02288288, 0x756ACC03, 0x848F2AD2, 0x367E4778,
    0x0DE7D31E, 0x2FF37238, 0xB73BD58F, 0xEE36B135, 0xCF74BE8B, 0x08D95C6A,
    0xA3743E4A, 0x66AE1838, 0xC9D6EE98, 0x5880F434, 0x9A9369BD, 0xD0FDF4C7,
    0xAEFABD99, 0x593023F0, 0x6F1ECB2A, 0xA5CC637B, 0xEB606E6F, 0x329AE3D1,
    0xCB7594AB, 0xA4DC93D6, 0x49E01594, 0xE00207EB, 0x65208EF8, 0x942366A6,
    0xF751C880, 0x1CAA0C4F, 0xE3E67E4A, 0xBD03239F, 0xDB2DC1DD, 0x02F7F57F,
)

# Each round constant is four little-endian 32-bit words forming one AES block.
_RC = tuple(
    struct.pack("<4I", *_RC_WORDS[i:i + 4]) for i in range(0, len(_RC_WORDS), 4)
)


def _xor(a: bytes, b: bytes) -> bytes:
    return (int.from_bytes(a, "little") ^ int.from_bytes(b, "little")).to_bytes(
        len(a), "little"
    )


def _unpack_lo(a: bytes, b: bytes) -> bytes:
    """Interleave the low two 32-bit lanes of ``a`` and ``b``."""
    return a[0:4] + b[0:4] + a[4:8] + b[4:8]


def _unpack_hi(a: bytes, b: bytes) -> bytes:
    """Interleave the high two 32-bit lanes of ``a`` and ``b``."""
    return a[8:12] + b[8:12] + a[12:16] + b[12:16]


def _check(data: bytes, size: int) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"input must be {size} bytes, got {len(data)}")
    return data


def _chunks(data: bytes, size: int) -> list[bytes]:
    return [data[i:i + size] for i in range(0, len(data), size)]


def _permute256(block: bytes) -> bytes:
    s0, s1 = block[:16], block[16:]
    for r in range(HARAKA_ROUNDS):
        base = 4 * r
        s0 = aes_round(s0, _RC[base])
        s1 = aes_round(s1, _RC[base + 1])
        s0 = aes_round(s0, _RC[base + 2])
        s1 = aes_round(s1, _RC[base + 3])
        s0, s1 = _unpack_lo(s0, s1), _unpack_hi(s0, s1)
    return s0 + s1


def _haraka256_block(block: bytes) -> bytes:
    return _xor(_permute256(block), block)


def _haraka512_block(block: bytes) -> bytes:
    s0, s1, s2, s3 = _chunks(block, 16)
    for r in range(HARAKA_ROUNDS):
        base = 8 * r
        s0 = aes_round(s0, _RC[base])
        s1 = aes_round(s1, _RC[base + 1])
        s2 = aes_round(s2, _RC[base + 2])
        s3 = aes_round(s3, _RC[base + 3])
        s0 = aes_round(s0, _RC[base + 4])
        s1 = aes_round(s1, _RC[base + 5])
        s2 = aes_round(s2, _RC[base + 6])
        s3 = aes_round(s3, _RC[base + 7])

        tmp = _unpack_lo(s0, s1)
        s0 = _unpack_hi(s0, s1)
        s1 = _unpack_lo(s2, s3)
        s2 = _unpack_hi(s2, s3)
        s3 = _unpack_lo(s0, s2)
        s0 = _unpack_hi(s0, s2)
        s2 = _unpack_hi(s1, tmp)
        s1 = _unpack_lo(s1, tmp)

    f0, f1, f2, f3 = (_xor(s, b) for s, b in zip((s0, s1, s2, s3), _chunks(block, 16)))
    return f0[8:16] + f1[8:16] + f2[0:8] + f3[0:8]


def _chain_block(block: bytes, chainlen: int) -> bytes:
    for _ in range(chainlen):
        block = _haraka256_block(block)
    return block


def _check_chainlen(chainlen: int) -> None:
    if chainlen < 0:
        raise ValueError("chain length must not be negative")


def haraka256(data: bytes) -> bytes:
    """Hash 32 bytes to 32 bytes."""
    return _haraka256_block(_check(data, 32))


def haraka256_chain(data: bytes, chainlen: int) -> bytes:
    """Apply Haraka-256 ``chainlen`` times to 32 bytes."""
    _check_chainlen(chainlen)
    return _chain_block(_check(data, 32), chainlen)


def haraka256_4x(data: bytes) -> bytes:
    """Hash four independent 32-byte blocks."""
    return b"".join(_haraka256_block(b) for b in _chunks(_check(data, 128), 32))


def haraka256_4x_chain(data: bytes, chainlen: int) -> bytes:
    """Chain Haraka-256 ``chainlen`` times on four independent 32-byte blocks."""
    _check_chainlen(chainlen)
    return b"".join(_chain_block(b, chainlen) for b in _chunks(_check(data, 128), 32))


def haraka256_8x(data: bytes) -> bytes:
    """Hash eight independent 32-byte blocks."""
    data = _check(data, 256)
    return haraka256_4x(data[:128]) + haraka256_4x(data[128:])


def haraka512(data: bytes) -> bytes:
    """Hash 64 bytes to 32 bytes."""
    return _haraka512_block(_check(data, 64))


def haraka512_4x(data: bytes) -> bytes:
    """Hash four independent 64-byte blocks into four 32-byte digests."""
    return b"".join(_haraka512_block(b) for b in _chunks(_check(data, 256), 64))


def haraka512_8x(data: bytes) -> bytes:
    """Hash eight independent 64-byte blocks into eight 32-byte digests."""
    data = _check(data, 512)
    return haraka512_4x(data[:256]) + haraka512_4x(data[256:])