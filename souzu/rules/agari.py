"""Win (和了) detection - standard form, seven pairs, nine gates.

Returns every possible decomposition of a winning hand, since which group
holds the winning tile changes the wait and therefore the yaku.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from souzu.core.errors import InternalInvariantViolation, ValidationError
from souzu.core.log import get_logger
from souzu.core.meld import Meld, MeldType, meld_sort_key
from souzu.core.tile import (
    COPIES_PER_RANK, MAX_RANK, NINE_GATES_TEMPLATE, RANKS,
    Counts, add_tile, validate_rank,
)

logger = get_logger(__name__)

COMPLETE_HAND_SIZE = 14
WAITING_HAND_SIZE = 13
MELDS_PER_HAND = 4


@dataclass(frozen=True)
class StandardDecomposition:
    """Four melds (concealed kans included) and a pair."""
    pair: int
    melds: Tuple[Meld, ...]

    @property
    def sequences(self) -> List[Meld]:
        return [m for m in self.melds if m.is_sequence]

    @property
    def triplets(self) -> List[Meld]:
        """Triplets proper, kans excluded."""
        return [m for m in self.melds if m.meld_type == MeldType.TRIPLET]

    @property
    def kans(self) -> List[Meld]:
        return [m for m in self.melds if m.is_kan]

    def to_counts(self) -> Counts:
        arr = [0] * (MAX_RANK + 1)
        arr[self.pair] += 2
        for meld in self.melds:
            for r in meld.ranks:
                arr[r] += 1
        return tuple(arr)


@dataclass(frozen=True)
class SevenPairsDecomposition:
    """七対子: seven distinct pairs."""
    pairs: Tuple[int, ...]

    def to_counts(self) -> Counts:
        arr = [0] * (MAX_RANK + 1)
        for r in self.pairs:
            arr[r] += 2
        return tuple(arr)


@dataclass(frozen=True)
class NineGatesDecomposition:
    """九蓮宝燈: 1112345678999 plus any one tile."""
    counts: Counts
    is_pure: bool = False

    def to_counts(self) -> Counts:
        return self.counts


Decomposition = Union[StandardDecomposition, SevenPairsDecomposition, NineGatesDecomposition]


class WaitType(Enum):
    RYANMEN = "ryanmen"  # 両面
    TANKI = "tanki"      # 単騎
    KANCHAN = "kanchan"  # 嵌張
    PENCHAN = "penchan"  # 辺張
    SHANPON = "shanpon"  # 双碰


# Most favourable reading first: ryanmen unlocks pinfu, and reading the
# winning tile into a sequence keeps every triplet concealed.
WAIT_PREFERENCE = (
    WaitType.RYANMEN, WaitType.TANKI, WaitType.KANCHAN,
    WaitType.PENCHAN, WaitType.SHANPON,
)


def subtract_kans(counts: Counts, concealed_kan_ranks: Sequence[int]) -> Counts:
    """Remove four tiles per declared kan from a full count table."""
    remaining = list(counts)
    for rank in concealed_kan_ranks:
        validate_rank(rank)
        remaining[rank] -= COPIES_PER_RANK
        if remaining[rank] < 0:
            raise ValidationError(
                f"concealed kan on {rank} needs {COPIES_PER_RANK} tiles, "
                f"hand has {remaining[rank] + COPIES_PER_RANK} left")
    return tuple(remaining)


def decompose(counts: Counts, concealed_kan_ranks: Sequence[int] = (),
              win_tile: Optional[int] = None) -> List[Decomposition]:
    """Find ALL decompositions of a complete hand.

    ``counts`` is the full 10-slot count table, kan tiles included. An
    empty result means the hand is not a winning shape.
    """
    if len(counts) != MAX_RANK + 1:
        raise ValidationError(f"count table must have {MAX_RANK + 1} slots, got {len(counts)}")
    kan_count = len(concealed_kan_ranks)
    if kan_count > MELDS_PER_HAND:
        raise ValidationError(f"at most {MELDS_PER_HAND} kans, got {kan_count}")
    live = subtract_kans(counts, concealed_kan_ranks)

    if sum(live) != COMPLETE_HAND_SIZE - 3 * kan_count:
        return []

    kan_melds = tuple(Meld.concealed_kan(r) for r in concealed_kan_ranks)
    results: List[Decomposition] = []
    seen = set()
    for pair, melds in _search(live, None, (), MELDS_PER_HAND - kan_count):
        decomposition = StandardDecomposition(
            pair, tuple(sorted(melds + kan_melds, key=meld_sort_key)))
        if decomposition not in seen:
            seen.add(decomposition)
            results.append(decomposition)

    if kan_count == 0:
        if is_seven_pairs(live):
            results.append(SevenPairsDecomposition(
                tuple(r for r in RANKS if live[r] == 2)))
        if is_nine_gates(live):
            results.append(NineGatesDecomposition(live, is_pure_nine_gates(live, win_tile)))

    for decomposition in results:
        if decomposition.to_counts() != tuple(counts):
            raise InternalInvariantViolation(
                f"{decomposition!r} does not reconstruct {tuple(counts)!r}")

    logger.debug("hand decomposed", kans=list(concealed_kan_ranks), candidates=len(results))
    return results


def _search(counts: Counts, pair: Optional[int], melds: Tuple[Meld, ...],
            needed: int):
    """Recursively yield (pair, melds) covering every tile in ``counts``.

    Each branch works on its own tuple, so nothing needs undoing.
    """
    idx = next((r for r in RANKS if counts[r] > 0), None)
    if idx is None:
        if pair is not None and len(melds) == needed:
            yield pair, melds
        return
    if len(melds) > needed:
        return

    # Try the pair (雀頭) first
    if pair is None and counts[idx] >= 2:
        yield from _search(add_tile(counts, idx, -2), idx, melds, needed)

    # Try triplet (刻子)
    if counts[idx] >= 3:
        yield from _search(add_tile(counts, idx, -3), pair,
                           melds + (Meld.triplet(idx),), needed)

    # Try sequence (順子) - 8 and 9 cannot start one
    if idx <= 7 and counts[idx + 1] >= 1 and counts[idx + 2] >= 1:
        rest = add_tile(add_tile(add_tile(counts, idx, -1), idx + 1, -1), idx + 2, -1)
        yield from _search(rest, pair, melds + (Meld.sequence(idx),), needed)


def is_agari(counts: Counts, concealed_kan_ranks: Sequence[int] = ()) -> bool:
    """Check if the count table represents a winning hand (any form)."""
    return len(decompose(counts, concealed_kan_ranks)) > 0


def is_seven_pairs(counts: Counts) -> bool:
    """Check seven pairs (七対子) form: seven distinct ranks, two of each."""
    if sum(counts) != COMPLETE_HAND_SIZE:
        return False
    return all(counts[r] in (0, 2) for r in RANKS) and \
        sum(1 for r in RANKS if counts[r] == 2) == 7


def is_nine_gates(counts: Counts) -> bool:
    """Check nine gates (九蓮宝燈) form: the template covered plus one more tile."""
    if sum(counts) != COMPLETE_HAND_SIZE:
        return False
    return all(counts[r] >= NINE_GATES_TEMPLATE[r] for r in RANKS)


def is_pure_nine_gates(counts: Counts, win_tile: Optional[int]) -> bool:
    """純正: removing the winning tile leaves exactly 1112345678999."""
    if win_tile is None or counts[win_tile] == 0:
        return False
    return add_tile(counts, win_tile, -1) == NINE_GATES_TEMPLATE


def possible_waits(decomposition: Decomposition, win_tile: int) -> List[WaitType]:
    """Every role the winning tile can play in this decomposition."""
    if isinstance(decomposition, SevenPairsDecomposition):
        return [WaitType.TANKI] if win_tile in decomposition.pairs else []
    if isinstance(decomposition, NineGatesDecomposition):
        return []

    waits = set()
    if win_tile == decomposition.pair:
        waits.add(WaitType.TANKI)
    for meld in decomposition.melds:
        if meld.is_kan or win_tile not in meld.ranks:
            continue
        if meld.meld_type == MeldType.TRIPLET:
            waits.add(WaitType.SHANPON)
        elif win_tile == meld.rank + 1:
            waits.add(WaitType.KANCHAN)
        elif (meld.rank == 1 and win_tile == 3) or (meld.rank == 7 and win_tile == 7):
            # 12 waiting on 3, 89 waiting on 7
            waits.add(WaitType.PENCHAN)
        else:
            waits.add(WaitType.RYANMEN)
    return [w for w in WAIT_PREFERENCE if w in waits]


def classify_wait(decomposition: Decomposition, win_tile: int) -> Optional[WaitType]:
    """Pick the wait used for scoring; None for nine gates, which has no groups."""
    if isinstance(decomposition, NineGatesDecomposition):
        return None
    waits = possible_waits(decomposition, win_tile)
    if not waits:
        raise InternalInvariantViolation(
            f"winning tile {win_tile} is not part of {decomposition!r}")
    return waits[0]


def get_waiting_tiles(counts: Counts, concealed_kan_ranks: Sequence[int] = ()) -> List[int]:
    """Find all ranks that would complete this hand.

    ``counts`` holds the waiting hand including kan tiles: 13 live tiles,
    three fewer per kan.
    """
    live = subtract_kans(counts, concealed_kan_ranks)
    if sum(live) != WAITING_HAND_SIZE - 3 * len(concealed_kan_ranks):
        return []

    waits = []
    for rank in RANKS:
        if counts[rank] >= COPIES_PER_RANK:
            continue
        if is_agari(add_tile(counts, rank), concealed_kan_ranks):
            waits.append(rank)
    return waits
