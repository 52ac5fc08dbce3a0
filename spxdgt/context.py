"""Per-key hashing context and the result of hashing a message."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Context:
    """Seeds shared by every hash call for one key, plus hash-specific state."""

    pub_seed: bytes
    sk_seed: bytes = b""
    state_seeded: bytes | None = None
    state_seeded_512: bytes | None = None
    tweaked512_rc64: list | None = None
    tweaked256_rc32: list | None = None

    def __post_init__(self):
        self.pub_seed = bytes(self.pub_seed)
        self.sk_seed = bytes(self.sk_seed)


@dataclass(frozen=True)
class MessageDigest:
    """Digest of a message together with the tree and leaf it selects."""

    digest: bytes
    tree: int
    leaf_idx: int

    def __post_init__(self):
        object.__setattr__(self, "digest", bytes(self.digest))
        if self.tree < 0 or self.leaf_idx < 0:
            raise ValueError("tree and leaf index must be non-negative")

    def __iter__(self):
        yield self.digest
        yield self.tree
        yield self.leaf_idx