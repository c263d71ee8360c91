"""Batching of messages under one Merkle tree so that a single signature covers them."""

from __future__ import annotations

from dataclasses import dataclass

from gravsphincs.hashes import hash_compress_pairs, hash_to_n
from gravsphincs.merkle import merkle_compress_auth
from gravsphincs.params import LOG_MAX_BATCH_COUNT, MAX_BATCH_COUNT, BatchError


@dataclass(frozen=True)
class BatchAuth:
    """Authentication path of one message and its position in the batch tree."""

    auth: tuple[bytes, ...]
    index: int


@dataclass(frozen=True)
class BatchGroup:
    """A complete batch tree stored level by level from the root down."""

    tree: tuple[bytes, ...]
    count: int

    @property
    def root(self) -> bytes:
        return self.tree[0]

    def extract(self, index: int) -> BatchAuth:
        """Authentication path of the message appended at ``index``."""
        if not 0 <= index < self.count:
            raise BatchError("batch index out of range")
        offset = MAX_BATCH_COUNT - 1
        tree_index = offset + index
        auth = []
        for _ in range(LOG_MAX_BATCH_COUNT):
            auth.append(self.tree[offset + (index ^ 1)])
            index >>= 1
            offset >>= 1
        return BatchAuth(tuple(auth), tree_index)


class BatchBuffer:
    """Collects message hashes until they are grouped into a tree."""

    def __init__(self) -> None:
        self._hashes: list[bytes] = []

    def __len__(self) -> int:
        return len(self._hashes)

    @property
    def count(self) -> int:
        return len(self._hashes)

    def append(self, msg: bytes) -> int:
        """Add a message and return its index in the batch."""
        if len(self._hashes) == MAX_BATCH_COUNT:
            raise BatchError("batch is full")
        self._hashes.append(hash_to_n(msg))
        return len(self._hashes) - 1

    def group(self) -> BatchGroup:
        """Build the batch tree, padding unused leaves with the first message."""
        if not self._hashes:
            raise BatchError("batch is empty")
        count = len(self._hashes)
        level = self._hashes + [self._hashes[0]] * (MAX_BATCH_COUNT - count)
        levels = [level]
        while len(level) > 1:
            level = hash_compress_pairs(level)
            levels.append(level)
        tree = tuple(node for lvl in reversed(levels) for node in lvl)
        return BatchGroup(tree, count)


def batch_compress_auth(auth: BatchAuth, msg: bytes) -> bytes:
    """Climb from a message along its batch authentication path."""
    node, _ = merkle_compress_auth(hash_to_n(msg), auth.index, auth.auth)
    return node