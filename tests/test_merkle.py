import pytest

from gravsphincs.hashes import Address, hash_2n_to_n
from gravsphincs.merkle import (
    MerkleSignature,
    merkle_base_address,
    merkle_compress_all,
    merkle_compress_auth,
    merkle_compress_octopus,
    merkle_extract,
    merkle_gen_auth,
    merkle_gen_octopus,
    merkle_genpk,
    merkle_loadsign,
    merkle_sign,
)
from gravsphincs.params import WOTS_ELL, Params, VerificationError

TINY = Params(pors_k=1, merkle_h=1, gravity_d=1, gravity_c=0, pors_tau=1)
KEY = bytes(range(32))
MSG = bytes(range(50, 82))
ADDRESS = Address(index=3, layer=2)


def _h(value):
    return bytes([value]) * 32


LEAVES = [_h(i) for i in range(8)]


@pytest.fixture(scope="module")
def signed():
    return merkle_sign(TINY, KEY, ADDRESS, MSG)


def test_base_address():
    assert merkle_base_address(Address(13, 4), 3) == (5, Address(8, 4))


def test_compress_all_four_leaves():
    a, b, c, d = LEAVES[:4]
    expected = hash_2n_to_n(hash_2n_to_n(a + b) + hash_2n_to_n(c + d))
    assert merkle_compress_all([a, b, c, d]) == expected


def test_compress_all_single_leaf():
    assert merkle_compress_all([_h(9)]) == _h(9)


def test_compress_all_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        merkle_compress_all(LEAVES[:3])


@pytest.mark.parametrize("index", [0, 3, 6, 7])
def test_auth_path_round_trip(index):
    auth, root = merkle_gen_auth(LEAVES, index)
    assert len(auth) == 3
    assert root == merkle_compress_all(LEAVES)
    assert merkle_compress_auth(LEAVES[index], index, auth) == (root, 0)


def test_auth_index_out_of_range():
    with pytest.raises(ValueError):
        merkle_gen_auth(LEAVES, 8)


def test_octopus_round_trip():
    indices = [1, 2, 3, 6]
    octopus, root = merkle_gen_octopus(LEAVES, indices)
    assert root == merkle_compress_all(LEAVES)
    nodes = [LEAVES[i] for i in indices]
    assert merkle_compress_octopus(nodes, 3, octopus, indices) == root


def test_octopus_siblings_need_nothing():
    octopus, root = merkle_gen_octopus(LEAVES[:2], [0, 1])
    assert octopus == []
    assert merkle_compress_octopus(LEAVES[:2], 1, [], [0, 1]) == root


def test_octopus_single_index_is_auth_path():
    octopus, _ = merkle_gen_octopus(LEAVES, [5])
    auth, _ = merkle_gen_auth(LEAVES, 5)
    assert octopus == auth


def test_octopus_too_short():
    octopus, _ = merkle_gen_octopus(LEAVES, [2, 5])
    with pytest.raises(VerificationError):
        merkle_compress_octopus([LEAVES[2], LEAVES[5]], 3, octopus[:-1], [2, 5])


def test_octopus_too_long():
    octopus, _ = merkle_gen_octopus(LEAVES, [2, 5])
    with pytest.raises(VerificationError):
        merkle_compress_octopus([LEAVES[2], LEAVES[5]], 3, octopus + [_h(1)], [2, 5])


def test_octopus_unsorted_indices():
    with pytest.raises(ValueError):
        merkle_gen_octopus(LEAVES, [4, 1])


def test_sign_matches_genpk(signed):
    sig, root = signed
    assert len(sig.wots) == WOTS_ELL
    assert len(sig.auth) == TINY.merkle_h
    assert merkle_genpk(TINY, KEY, ADDRESS) == root


def test_extract_recovers_root(signed):
    sig, root = signed
    assert merkle_extract(TINY, ADDRESS, sig, MSG) == root


def test_extract_wrong_message(signed):
    sig, root = signed
    assert merkle_extract(TINY, ADDRESS, sig, bytes(32)) != root


def test_serialization_round_trip(signed):
    sig, _ = signed
    data = sig.to_bytes()
    assert len(data) == (WOTS_ELL + TINY.merkle_h) * 32
    assert merkle_loadsign(TINY, data) == sig


def test_loadsign_wrong_length():
    with pytest.raises(VerificationError):
        merkle_loadsign(TINY, bytes(100))


def test_extract_rejects_bad_auth_length(signed):
    sig, _ = signed
    bad = MerkleSignature(sig.wots, sig.auth + (_h(1),))
    with pytest.raises(VerificationError):
        merkle_extract(TINY, ADDRESS, bad, MSG)