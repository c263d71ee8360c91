import pytest

from gravsphincs.params import HASH_SIZE, Params, VerificationError
from gravsphincs.sign import (
    crypto_sign,
    crypto_sign_keypair,
    crypto_sign_open,
    randombytes,
)

TINY = Params(pors_k=2, merkle_h=1, gravity_d=1, gravity_c=0, pors_tau=2)
MESSAGE = b"a message to sign"


@pytest.fixture(scope="module")
def keypair():
    return crypto_sign_keypair(TINY)


@pytest.fixture(scope="module")
def signed(keypair):
    _, sk = keypair
    return crypto_sign(TINY, MESSAGE, sk)


def test_randombytes_length_and_variety():
    a = randombytes(32)
    b = randombytes(32)
    assert len(a) == 32
    assert a != b or len(set(a)) > 1


def test_randombytes_negative():
    with pytest.raises(ValueError):
        randombytes(-1)


def test_keypair_sizes(keypair):
    pk, sk = keypair
    assert len(pk) == HASH_SIZE
    assert len(sk) == TINY.secret_key_size()


def test_public_key_is_cache_root(keypair):
    pk, sk = keypair
    assert sk[-HASH_SIZE:] == pk


def test_signed_message_layout(signed):
    assert signed.startswith(MESSAGE)
    assert len(signed) == len(MESSAGE) + TINY.signature_size()


def test_open_round_trip(keypair, signed):
    pk, _ = keypair
    assert crypto_sign_open(TINY, signed, pk) == MESSAGE


def test_signing_is_deterministic(keypair, signed):
    _, sk = keypair
    assert crypto_sign(TINY, MESSAGE, sk) == signed


def test_tampered_message_fails(keypair, signed):
    pk, _ = keypair
    forged = bytes([signed[0] ^ 1]) + signed[1:]
    with pytest.raises(VerificationError):
        crypto_sign_open(TINY, forged, pk)


def test_tampered_randomness_fails(keypair, signed):
    pk, _ = keypair
    pos = len(MESSAGE)
    forged = signed[:pos] + bytes([signed[pos] ^ 0x80]) + signed[pos + 1:]
    with pytest.raises(VerificationError):
        crypto_sign_open(TINY, forged, pk)


def test_wrong_public_key_fails(keypair, signed):
    pk, _ = keypair
    other = bytes(b ^ 0xFF for b in pk)
    with pytest.raises(VerificationError):
        crypto_sign_open(TINY, signed, other)


def test_too_short_fails(keypair):
    pk, _ = keypair
    with pytest.raises(VerificationError):
        crypto_sign_open(TINY, bytes(TINY.signature_size() - 1), pk)


def test_octopus_length_out_of_range_fails(keypair, signed):
    pk, _ = keypair
    capacity = TINY.pors_k * TINY.pors_tau
    pos = len(MESSAGE) + HASH_SIZE + TINY.pors_k * HASH_SIZE + capacity * HASH_SIZE
    forged = signed[:pos] + (capacity + 1).to_bytes(4, "little") + signed[pos + 4:]
    with pytest.raises(VerificationError):
        crypto_sign_open(TINY, forged, pk)


def test_bad_public_key_length(signed):
    with pytest.raises(ValueError):
        crypto_sign_open(TINY, signed, bytes(5))


def test_bad_secret_key_length():
    with pytest.raises(ValueError):
        crypto_sign(TINY, MESSAGE, bytes(10))