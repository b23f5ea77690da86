"""Merkle root over published module checksums.

Rules:
1. Leaves are module checksums (64-char hex), sorted ascending.
2. Parent = sha256((left + right).encode("utf-8")) as hex.
3. An odd node at the end of a level is paired with itself.
4. Empty set: root is the empty string.

Sorting the leaves first makes the root independent of the order in
which modules were discovered or written.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from langshake.core.hasher import sha256_hex
from langshake.models.artifacts import MerkleIndex, Module

EMPTY_ROOT = ""


def merkle_parent(left: str, right: str) -> str:
    """Hash two hex digests into their parent digest."""
    return sha256_hex((left + right).encode("utf-8"))


def merkle_root(leaves: Sequence[str]) -> str:
    """Reduce already-ordered leaves to a single root digest.

    Callers that need order independence must sort first; see
    :func:`build_merkle_index`.
    """
    if not leaves:
        return EMPTY_ROOT
    level = list(leaves)
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        level = [merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]


def build_merkle_index(modules: Iterable[Module]) -> MerkleIndex:
    """Canonically order *modules* and compute the Merkle root.

    Modules are sorted by ``(checksum, public_path)`` so that both the root
    and the emitted path list are identical for any permutation of the
    same module set.
    """
    ordered = sorted(modules, key=lambda m: (m.checksum, m.public_path))
    if not ordered:
        return MerkleIndex()
    checksums = [m.checksum for m in ordered]
    return MerkleIndex(
        ordered_paths=[m.public_path for m in ordered],
        ordered_checksums=checksums,
        merkle_root=merkle_root(checksums),
    )


# ---------------------------------------------------------------------------
# Inclusion proofs
# ---------------------------------------------------------------------------


def merkle_proof(leaves: Sequence[str], index: int) -> list[tuple[str, bool]]:
    """Compute the inclusion proof for ``leaves[index]``.

    *leaves* must be in tree order (canonically sorted).  Returns a list of
    ``(sibling, sibling_is_left)`` pairs from the leaf level upwards.
    """
    if index < 0 or index >= len(leaves):
        raise ValueError(f"Invalid leaf index: {index}")

    level = list(leaves)
    proof: list[tuple[str, bool]] = []
    current = index
    while len(level) > 1:
        if len(level) % 2 == 1:
            level.append(level[-1])
        if current % 2 == 0:
            proof.append((level[current + 1], False))
        else:
            proof.append((level[current - 1], True))
        level = [merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)]
        current //= 2
    return proof


def verify_merkle_proof(leaf: str, proof: Sequence[tuple[str, bool]], root: str) -> bool:
    """Check that *leaf* combined along *proof* reproduces *root*."""
    current = leaf
    for sibling, sibling_is_left in proof:
        current = merkle_parent(sibling, current) if sibling_is_left else merkle_parent(current, sibling)
    return current == root
