import dataclasses

import pytest

from gravsphincs.hashes import (
    Address,
    hash_2n_to_n,
    hash_compress_all,
    hash_compress_pairs,
    hash_n_to_n,
    hash_n_to_n_chain,
    hash_parallel,
    hash_parallel_chains,
    hash_to_n,
)


def _h(value):
    return bytes([value]) * 32


def test_hash_to_n_known_vector():
    assert hash_to_n(b"abc").hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_hash_to_n_empty():
    assert hash_to_n(b"").hex() == (
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_n_to_n_size_and_determinism():
    out = hash_n_to_n(_h(7))
    assert len(out) == 32
    assert out == hash_n_to_n(_h(7))
    assert out != hash_n_to_n(_h(8))


def test_hash_n_to_n_rejects_wrong_length():
    with pytest.raises(ValueError):
        hash_n_to_n(b"short")


def test_chain_zero_is_identity():
    assert hash_n_to_n_chain(_h(3), 0) == _h(3)


def test_chain_composes():
    x = _h(9)
    assert hash_n_to_n_chain(x, 2) == hash_n_to_n(hash_n_to_n(x))
    assert hash_n_to_n_chain(hash_n_to_n_chain(x, 1), 2) == hash_n_to_n_chain(x, 3)


def test_hash_2n_to_n_order_matters():
    a, b = _h(1), _h(2)
    assert len(hash_2n_to_n(a + b)) == 32
    assert hash_2n_to_n(a + b) != hash_2n_to_n(b + a)


def test_compress_pairs_matches_single_compressions():
    src = [_h(i) for i in range(6)]
    out = hash_compress_pairs(src)
    assert len(out) == 3
    assert out[0] == hash_2n_to_n(src[0] + src[1])
    assert out[2] == hash_2n_to_n(src[4] + src[5])


def test_compress_pairs_rejects_odd_count():
    with pytest.raises(ValueError):
        hash_compress_pairs([_h(1), _h(2), _h(3)])


def test_compress_all_is_hash_of_concatenation():
    src = [_h(1), _h(2), _h(3)]
    assert hash_compress_all(src) == hash_to_n(b"".join(src))


def test_parallel_matches_single():
    src = [_h(i) for i in range(5)]
    assert hash_parallel(src) == [hash_n_to_n(h) for h in src]


def test_parallel_chains_match_single():
    src = [_h(i) for i in range(5)]
    assert hash_parallel_chains(src, 2) == [hash_n_to_n_chain(h, 2) for h in src]


def test_address_is_frozen_value():
    addr = Address(index=5, layer=1)
    assert addr == Address(5, 1)
    assert Address(3).layer == 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        addr.index = 6