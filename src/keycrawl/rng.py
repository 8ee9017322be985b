from __future__ import annotations

import hashlib
import logging
import random
import secrets
from dataclasses import dataclass, field
from typing import Optional, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]


def seed_to_bytes(seed: Union[int, str, bytes]) -> bytes:
    """Canonical byte form of a master seed.

    Strings of digits count as the integer they spell, so ``--seed 42`` and
    ``seed: 42`` in a settings file give the same dungeons.
    """
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, str) and seed.strip().isdigit():
        seed = int(seed.strip())
    if isinstance(seed, str):
        return seed.encode("utf-8")
    if isinstance(seed, int) and not isinstance(seed, bool):
        if seed < 0:
            raise ValueError("Integer seeds must be non-negative")
        return seed.to_bytes(max(1, (seed.bit_length() + 7) // 8), "big")
    raise TypeError(f"Unsupported seed type: {type(seed)!r}")


@dataclass(frozen=True)
class RNGManager:
    """Hands out one ``random.Random`` per dungeon of a session.

    Each stream is seeded from a hash of the master seed and a context such as
    ``("dungeon", 3)``, so the fourth dungeon of a seed is the same no matter
    how the earlier ones were played. A ``None`` master seed is replaced by
    random bytes, logged so the run can be replayed.
    """

    master_seed: Seed = None
    _seed_bytes: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.master_seed is None:
            seed_bytes = secrets.token_bytes(16)
            logger.info("No seed given; using random seed 0x%s", seed_bytes.hex())
        else:
            seed_bytes = seed_to_bytes(self.master_seed)
        object.__setattr__(self, "_seed_bytes", seed_bytes)

    def derive_seed(self, domain: str, *identifiers: object) -> int:
        """64-bit seed for a context; the same inputs always give the same value."""
        h = hashlib.blake2b(digest_size=8, person=b"keycrawl")
        h.update(self._seed_bytes)
        h.update(b"\x00")
        h.update(repr((domain,) + tuple(identifiers)).encode("utf-8"))
        value = int.from_bytes(h.digest(), "big")
        logger.debug("Seed for %s%r: %d", domain, identifiers, value)
        return value

    def context_rng(self, domain: str, *identifiers: object) -> random.Random:
        return random.Random(self.derive_seed(domain, *identifiers))

    def get_master_seed_hex(self) -> str:
        return self._seed_bytes.hex()


def make_rng(seed: Optional[Seed] = None) -> random.Random:
    """RNG of the first dungeon for ``seed``."""
    return RNGManager(seed).context_rng("dungeon", 0)
