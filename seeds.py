"""
Deterministic seed derivation.

Every procedural value in the galaxy traces back to a SHA-256 digest of a
"|"-joined key (galaxy seed + coordinates, system seed + planet index, ...).
Draws beyond a fixed digest go through SeedStream, an immutable stream whose
state is passed explicitly: each draw returns the value and the next stream.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar, Union

T = TypeVar("T")

SEED_SEPARATOR = "|"
_INT_TEXT = re.compile(r"-?(0|[1-9][0-9]*)")


def _key_part(part: Union[int, str]) -> str:
    if isinstance(part, bool) or not isinstance(part, (int, str)):
        raise ValueError(f"Seed key parts must be int or str, got {type(part).__name__}")
    if isinstance(part, int):
        return str(part)
    if SEED_SEPARATOR in part:
        raise ValueError(f"Seed key part {part!r} contains '{SEED_SEPARATOR}'")
    # Would render the same as an int part.
    if _INT_TEXT.fullmatch(part):
        raise ValueError(f"Seed key part {part!r} is integer text; pass it as an int")
    return part


def derive_seed(*parts: Union[int, str]) -> str:
    """SHA-256 hex of the '|'-joined key. Distinct keys map to distinct tokens."""
    token = SEED_SEPARATOR.join(_key_part(p) for p in parts).encode("utf-8")
    return hashlib.sha256(token).hexdigest()


def extract_from_seed(seed_hex: str, byte_offset: int, byte_length: int, max_value: int) -> int:
    """Read `byte_length` bytes of the hex digest at `byte_offset`, reduced modulo `max_value`."""
    if max_value <= 0:
        raise ValueError("max_value must be positive")
    start = byte_offset * 2
    chunk = seed_hex[start:start + byte_length * 2]
    if len(chunk) != byte_length * 2:
        raise ValueError(f"Seed too short for offset {byte_offset} length {byte_length}")
    return int(chunk, 16) % max_value


@dataclass(frozen=True)
class SeedStream:
    seed: str
    position: int = 0

    def _digest(self) -> bytes:
        return hashlib.sha256(f"{self.seed}|{self.position}".encode("utf-8")).digest()

    def advance(self) -> "SeedStream":
        return SeedStream(self.seed, self.position + 1)

    def next_int(self, upper: int) -> Tuple[int, "SeedStream"]:
        """Uniform-ish integer in [0, upper)."""
        if upper <= 0:
            raise ValueError("upper must be positive")
        raw = int.from_bytes(self._digest()[:8], "big")
        return raw % upper, self.advance()

    def next_range(self, low: int, high: int) -> Tuple[int, "SeedStream"]:
        """Integer in [low, high] inclusive."""
        value, stream = self.next_int(high - low + 1)
        return low + value, stream

    def choice(self, pool: Sequence[T]) -> Tuple[T, "SeedStream"]:
        if not pool:
            raise ValueError("Cannot choose from an empty pool")
        index, stream = self.next_int(len(pool))
        return pool[index], stream

    def sample(self, pool: Sequence[T], count: int) -> Tuple[List[T], "SeedStream"]:
        """`count` distinct entries of `pool`, in draw order (partial Fisher-Yates)."""
        items = list(pool)
        count = max(0, min(int(count), len(items)))
        stream = self
        for i in range(count):
            offset, stream = stream.next_int(len(items) - i)
            j = i + offset
            items[i], items[j] = items[j], items[i]
        return items[:count], stream
