"""Merkle trees of one-time keys, authentication paths and octopuses."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gravsphincs.hashes import Address, hash_2n_to_n, hash_compress_pairs
from gravsphincs.params import HASH_SIZE, WOTS_ELL, Params, VerificationError
from gravsphincs.wots import lwots_extract, lwots_genpk, wots_gensk, wots_sign


@dataclass(frozen=True)
class MerkleSignature:
    """A one-time signature with the authentication path of its leaf."""

    wots: tuple[bytes, ...]
    auth: tuple[bytes, ...]

    def to_bytes(self) -> bytes:
        return b"".join(self.wots) + b"".join(self.auth)


def _check_tree(leaves: Sequence[bytes]) -> list[bytes]:
    nodes = [bytes(leaf) for leaf in leaves]
    if not nodes or len(nodes) & (len(nodes) - 1):
        raise ValueError("the number of leaves must be a power of two")
    return nodes


def merkle_base_address(address: Address, height: int) -> tuple[int, Address]:
    """Split an address into the leaf index within its tree and the tree's first leaf."""
    index = address.index & ((1 << height) - 1)
    return index, Address(address.index - index, address.layer)


def _leaf_keys(params: Params, key: bytes, base: Address):
    for j in range(params.merkle_hhh):
        wsk = wots_gensk(key, Address(base.index + j, base.layer))
        yield wsk, lwots_genpk(wsk)


def merkle_genpk(params: Params, key: bytes, address: Address) -> bytes:
    """Root of the tree of one-time keys that contains ``address``."""
    _, base = merkle_base_address(address, params.merkle_h)
    return merkle_compress_all([leaf for _, leaf in _leaf_keys(params, key, base)])


def merkle_sign(
    params: Params, key: bytes, address: Address, msg: bytes
) -> tuple[MerkleSignature, bytes]:
    """Sign ``msg`` with the one-time key at ``address``; return the signature and root."""
    index, base = merkle_base_address(address, params.merkle_h)
    leaves = []
    wots = None
    for j, (wsk, leaf) in enumerate(_leaf_keys(params, key, base)):
        leaves.append(leaf)
        if j == index:
            wots = wots_sign(wsk, msg)
    auth, root = merkle_gen_auth(leaves, index)
    return MerkleSignature(tuple(wots), tuple(auth)), root


def merkle_extract(
    params: Params, address: Address, sign: MerkleSignature, msg: bytes
) -> bytes:
    """Recover the tree root from a signature on ``msg``."""
    if len(sign.auth) != params.merkle_h:
        raise VerificationError("authentication path has the wrong length")
    index, _ = merkle_base_address(address, params.merkle_h)
    node = lwots_extract(sign.wots, msg)
    root, _ = merkle_compress_auth(node, index, sign.auth)
    return root


def merkle_compress_all(leaves: Sequence[bytes]) -> bytes:
    """Root of the complete binary tree over ``leaves``."""
    nodes = _check_tree(leaves)
    while len(nodes) > 1:
        nodes = hash_compress_pairs(nodes)
    return nodes[0]


def merkle_gen_auth(leaves: Sequence[bytes], index: int) -> tuple[list[bytes], bytes]:
    """Authentication path of leaf ``index`` and the tree root."""
    nodes = _check_tree(leaves)
    if not 0 <= index < len(nodes):
        raise ValueError("leaf index out of range")
    auth = []
    while len(nodes) > 1:
        auth.append(nodes[index ^ 1])
        index >>= 1
        nodes = hash_compress_pairs(nodes)
    return auth, nodes[0]


def merkle_compress_auth(
    node: bytes, index: int, auth: Sequence[bytes]
) -> tuple[bytes, int]:
    """Climb from ``node`` along ``auth``; return the reached node and its index."""
    node = bytes(node)
    for sibling in auth:
        sibling = bytes(sibling)
        node = hash_2n_to_n(node + sibling if index % 2 == 0 else sibling + node)
        index >>= 1
    return node, index


def _check_sorted(indices: Sequence[int]) -> list[int]:
    idx = list(indices)
    if any(b < a for a, b in zip(idx, idx[1:])):
        raise ValueError("indices must be sorted")
    return idx


def merkle_gen_octopus(
    leaves: Sequence[bytes], indices: Sequence[int]
) -> tuple[list[bytes], bytes]:
    """Merged authentication paths of the sorted leaf ``indices`` and the tree root."""
    nodes = _check_tree(leaves)
    idx = _check_sorted(indices)
    if any(not 0 <= i < len(nodes) for i in idx):
        raise ValueError("leaf index out of range")
    octopus: list[bytes] = []
    while len(nodes) > 1:
        parents = []
        i = 0
        while i < len(idx):
            sibling = idx[i] ^ 1
            if i + 1 < len(idx) and idx[i + 1] == sibling:
                i += 1
            else:
                octopus.append(nodes[sibling])
            parents.append(idx[i] >> 1)
            i += 1
        idx = parents
        nodes = hash_compress_pairs(nodes)
    return octopus, nodes[0]


def merkle_compress_octopus(
    nodes: Sequence[bytes],
    height: int,
    octopus: Sequence[bytes],
    indices: Sequence[int],
) -> bytes:
    """Compress leaves at sorted ``indices`` with their octopus up ``height`` levels."""
    current = [bytes(n) for n in nodes]
    idx = _check_sorted(indices)
    if not current or len(current) != len(idx):
        raise ValueError("one index per node is required")
    octo = iter(octopus)

    def take() -> bytes:
        value = next(octo, None)
        if value is None:
            raise VerificationError("octopus is too short")
        return bytes(value)

    for _ in range(height):
        merged: list[bytes] = []
        parents: list[int] = []
        i = 0
        while i < len(idx):
            index = idx[i]
            if index % 2 == 0:
                left = current[i]
                if i + 1 < len(idx) and idx[i + 1] == index + 1:
                    i += 1
                    right = current[i]
                else:
                    right = take()
            else:
                left = take()
                right = current[i]
            merged.append(hash_2n_to_n(left + right))
            parents.append(idx[i] >> 1)
            i += 1
        current, idx = merged, parents

    if next(octo, None) is not None:
        raise VerificationError("octopus is too long")
    return current[0]


def merkle_loadsign(params: Params, data: bytes) -> MerkleSignature:
    """Parse a serialized Merkle signature."""
    data = bytes(data)
    if len(data) != (WOTS_ELL + params.merkle_h) * HASH_SIZE:
        raise VerificationError("Merkle signature has the wrong length")
    hashes = [data[i:i + HASH_SIZE] for i in range(0, len(data), HASH_SIZE)]
    return MerkleSignature(tuple(hashes[:WOTS_ELL]), tuple(hashes[WOTS_ELL:]))