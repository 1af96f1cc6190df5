"""Deterministic keyed random streams.

Every stochastic decision in the engine draws from a stream derived from a
structured key: (namespace, base seed, move id, reroll nonce, q, r). The
key is JSON-encoded, which keeps distinct keys distinct ("ab" + "1" can't
collide with "a" + "b1"), hashed with BLAKE2b to 64 bits, and used to seed
a numpy PCG64 generator. No generator state is shared between keys.

Use:
    stream = stream_for("caerwynn-001", move_id=3, reroll_nonce=0, q=1, r=-2)
    p = stream.random()
    order = stream.permutation(candidates)
"""

import hashlib
import json
from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")

TILE_NAMESPACE = "tile"
RIVER_NAMESPACE = "river"


def key_to_seed(
    base_seed: str,
    move_id: int,
    reroll_nonce: int,
    q: int,
    r: int,
    namespace: str = TILE_NAMESPACE,
) -> int:
    """Hash a structured key into a 64-bit unsigned integer."""
    payload = json.dumps(
        [namespace, base_seed, int(move_id), int(reroll_nonce), int(q), int(r)],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    digest = hashlib.blake2b(payload.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


class RandomStream:
    """Unbounded sequence of uniform draws for one key."""

    def __init__(self, seed: int):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        """Next uniform float in [0, 1)."""
        return float(self._rng.random())

    def integers(self, n: int) -> int:
        """Next uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"n must be > 0, got {n}")
        return int(self._rng.integers(n))

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence uniformly."""
        if not seq:
            raise ValueError("choice() on empty sequence")
        return seq[self.integers(len(seq))]

    def permutation(self, seq: Sequence[T]) -> list[T]:
        """Return the elements of seq in a random order."""
        return [seq[int(i)] for i in self._rng.permutation(len(seq))]


def stream_for(
    base_seed: str,
    move_id: int,
    reroll_nonce: int,
    q: int,
    r: int,
    namespace: str = TILE_NAMESPACE,
) -> RandomStream:
    """Return the reproducible stream for a key.

    Two calls with identical arguments yield bit-identical sequences.
    """
    return RandomStream(key_to_seed(base_seed, move_id, reroll_nonce, q, r, namespace))
