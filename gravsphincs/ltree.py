"""L-tree: compress an arbitrary number of hashes into one root."""

from __future__ import annotations

from collections.abc import Sequence

from gravsphincs.hashes import hash_compress_pairs


def ltree(leaves: Sequence[bytes]) -> bytes:
    """Hash leaves pairwise level by level, carrying an odd last node up unchanged."""
    nodes = [bytes(leaf) for leaf in leaves]
    if not nodes:
        raise ValueError("at least one leaf is required")
    while len(nodes) > 1:
        carry = nodes[-1:] if len(nodes) % 2 else []
        nodes = hash_compress_pairs(nodes[: len(nodes) - len(carry)]) + carry
    return nodes[0]