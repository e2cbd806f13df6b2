"""
Hash-seeded random source.

A mint is identified by a hash string ("oo" + 49 base58 characters). The hash
is split into four chunks, each chunk is base58-decoded into a 32-bit word and
the four words seed an sfc32 generator. Every random draw of the piece goes
through one FXRand instance, so the same hash always produces the same art.
"""
import math
import random
from typing import Optional, Sequence, TypeVar

ALPHABET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"
HASH_PREFIX = "oo"
HASH_BODY_LENGTH = 49

_MASK32 = 0xFFFFFFFF

T = TypeVar("T")


def _to_int32(x: int) -> int:
    x &= _MASK32
    return x - 0x100000000 if x & 0x80000000 else x


def random_hash(rng: Optional[random.Random] = None) -> str:
    """Make a fresh mint hash."""
    rng = rng or random.Random()
    return HASH_PREFIX + "".join(rng.choice(ALPHABET) for _ in range(HASH_BODY_LENGTH))


def b58_decode(chunk: str) -> int:
    """Decode a base58 chunk, wrapping to a signed 32-bit int after every digit."""
    value = 0
    for ch in chunk:
        idx = ALPHABET.find(ch)
        if idx < 0:
            raise ValueError(f"Invalid character {ch!r} in hash")
        value = _to_int32(value * len(ALPHABET) + idx)
    return value


def hash_to_seeds(fxhash: str) -> Sequence[int]:
    if not fxhash.startswith(HASH_PREFIX):
        raise ValueError(f"Hash must start with {HASH_PREFIX!r}: {fxhash!r}")
    body = fxhash[len(HASH_PREFIX):]
    bad = sorted({ch for ch in body if ch not in ALPHABET})
    if bad:
        raise ValueError(f"Invalid character(s) {''.join(bad)!r} in hash")
    size = len(body) // 4
    if size == 0:
        raise ValueError(f"Hash too short: {fxhash!r}")
    return [b58_decode(body[i * size:(i + 1) * size]) for i in range(4)]


class FXRand:
    """sfc32 generator seeded from a mint hash, with the draw helpers the piece uses."""

    def __init__(self, fxhash: str):
        self.hash = fxhash
        a, b, c, d = hash_to_seeds(fxhash)
        self._state = [a & _MASK32, b & _MASK32, c & _MASK32, d & _MASK32]

    def rand(self) -> float:
        a, b, c, d = self._state
        t = (a + b + d) & _MASK32
        d = (d + 1) & _MASK32
        a = b ^ (b >> 9)
        b = (c + (c << 3)) & _MASK32
        c = ((c << 21) & _MASK32) | (c >> 11)
        c = (c + t) & _MASK32
        self._state = [a, b, c, d]
        return t / 4294967296.0

    def num(self, lo: float, hi: float) -> float:
        return self.rand() * (hi - lo) + lo

    def int(self, lo: int, hi: int) -> int:
        # inclusive on both ends
        return math.floor(self.num(lo, hi + 1))

    def bool(self, p: float) -> bool:
        return self.rand() < p

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("choice() from an empty sequence")
        return seq[self.int(0, len(seq) - 1)]
