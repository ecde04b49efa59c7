"""Concealed kan (暗槓) eligibility."""

from typing import List

from souzu.core.hand import Hand
from souzu.core.tile import COPIES_PER_RANK, RANKS, add_tile
from souzu.rules.agari import COMPLETE_HAND_SIZE, get_waiting_tiles


def concealed_kan_candidates(hand: Hand, riichi: bool = False) -> List[int]:
    """Ranks the hand may declare as a concealed kan right after drawing.

    After riichi only the drawn tile may complete the kan, and the kan must
    leave the riichi waits unchanged.
    """
    if hand.total_tiles != COMPLETE_HAND_SIZE:
        return []
    counts = hand.to_counts()
    candidates = [r for r in RANKS if counts[r] == COPIES_PER_RANK]
    if not riichi:
        return candidates
    return [r for r in candidates if r == hand.draw_tile and _keeps_waits(hand, r)]


def _keeps_waits(hand: Hand, rank: int) -> bool:
    full = hand.full_counts()
    kans = hand.kan_ranks
    before = get_waiting_tiles(add_tile(full, hand.draw_tile, -1), kans)
    if not before:
        # a riichi that was never tenpai may not kan
        return False
    after = get_waiting_tiles(full, kans + (rank,))
    return before == after
