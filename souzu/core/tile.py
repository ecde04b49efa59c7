"""Tile ranks for the single-suit (souzu) set and the per-rank counter.

A tile is a plain int rank 1..9. Count tables are 10-long tuples indexed
by rank, so ``counts[rank]`` reads naturally and index 0 is always 0.
"""

from typing import Iterable, List, Tuple

from souzu.core.errors import ValidationError

MIN_RANK = 1
MAX_RANK = 9
RANKS = range(MIN_RANK, MAX_RANK + 1)
COPIES_PER_RANK = 4

TERMINAL_RANKS = frozenset((1, 9))
SIMPLE_RANKS = frozenset(range(2, 9))
# 2s 3s 4s 6s 8s carry only green ink
GREEN_RANKS = frozenset((2, 3, 4, 6, 8))

# Nine gates: 1112345678999
NINE_GATES_TEMPLATE = (0, 3, 1, 1, 1, 1, 1, 1, 1, 3)

Counts = Tuple[int, ...]
EMPTY_COUNTS: Counts = (0,) * (MAX_RANK + 1)


def validate_rank(rank) -> int:
    """Return ``rank`` if it is a legal tile, else raise ValidationError."""
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise ValidationError(f"tile must be an int rank, got {rank!r}")
    if not (MIN_RANK <= rank <= MAX_RANK):
        raise ValidationError(f"tile rank must be 1..9, got {rank}")
    return rank


def is_terminal(rank: int) -> bool:
    return rank in TERMINAL_RANKS


def tile_name(rank: int) -> str:
    return f"{rank}s"


def tiles_to_counts(tiles: Iterable[int]) -> Counts:
    """Convert a tile multiset into a per-rank frequency table."""
    arr = [0] * (MAX_RANK + 1)
    for t in tiles:
        arr[validate_rank(t)] += 1
    for rank in RANKS:
        if arr[rank] > COPIES_PER_RANK:
            raise ValidationError(
                f"rank {rank} appears {arr[rank]} times, at most {COPIES_PER_RANK} exist")
    return tuple(arr)


def counts_to_tiles(counts: Counts) -> List[int]:
    """Flatten a frequency table back into a sorted tile list."""
    tiles = []
    for rank in RANKS:
        tiles.extend([rank] * counts[rank])
    return tiles


def add_tile(counts: Counts, rank: int, n: int = 1) -> Counts:
    """Return a copy of ``counts`` with ``n`` tiles of ``rank`` added (or removed if negative)."""
    arr = list(counts)
    arr[rank] += n
    return tuple(arr)


def make_tiles_from_string(s: str) -> List[int]:
    """Parse a shorthand string like '11123456789999s' into tile ranks.

    Spaces and the 's' suit marker are ignored; any other character is
    rejected.
    """
    tiles = []
    for ch in s:
        if ch.isdigit():
            tiles.append(validate_rank(int(ch)))
        elif ch in ('s', ' ', ','):
            continue
        else:
            raise ValidationError(f"unexpected character {ch!r} in tile string {s!r}")
    return tiles


def tiles_to_string(tiles: Iterable[int]) -> str:
    """Inverse of make_tiles_from_string, sorted: [1, 2, 3] -> '123s'."""
    return "".join(str(t) for t in sorted(tiles)) + "s"
