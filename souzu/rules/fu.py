"""Fu (符) calculation.

Every hand is concealed in this variant, so the open/closed distinctions of
full riichi rules collapse: a discard win always earns the menzen bonus.
"""

from typing import Optional

from souzu.core.context import WinContext
from souzu.core.meld import MeldType
from souzu.core.tile import is_terminal
from souzu.rules.agari import (
    Decomposition, NineGatesDecomposition, SevenPairsDecomposition, WaitType,
    classify_wait,
)

BASE_FU = 20          # 副底
CHIITOI_FU = 25
PINFU_TSUMO_FU = 20
DISCARD_WIN_FU = 10   # 門前加符
SELF_DRAW_FU = 2
TRIPLET_FU = 4        # 暗刻, doubled for 1 and 9
KAN_FU = 16           # 暗槓, doubled for 1 and 9
WAIT_FU = 2

_WAITS_WITH_FU = (WaitType.TANKI, WaitType.KANCHAN, WaitType.PENCHAN)


def calculate_fu(decomposition: Decomposition, win: WinContext, win_tile: int,
                 is_pinfu: bool = False, wait: Optional[WaitType] = None) -> int:
    """Calculate fu for one decomposition.

    Args:
        decomposition: The decomposition being scored
        win: Situational flags; only the win type matters here
        win_tile: Rank of the winning tile
        is_pinfu: Whether pinfu was awarded for this decomposition
        wait: Wait classification, computed from the decomposition if omitted

    Returns:
        25 for seven pairs, 20 for pinfu self-draw, otherwise the fu total
        rounded up to the nearest 10.
    """
    if isinstance(decomposition, SevenPairsDecomposition):
        return CHIITOI_FU
    if is_pinfu and win.is_self_draw:
        return PINFU_TSUMO_FU

    fu = BASE_FU
    if win.is_self_draw:
        fu += SELF_DRAW_FU
    else:
        fu += DISCARD_WIN_FU

    # Nine gates has no groups to score; it is always a yakuman anyway
    if isinstance(decomposition, NineGatesDecomposition):
        return _round_up_10(fu)

    for meld in decomposition.melds:
        if meld.meld_type == MeldType.TRIPLET:
            base = TRIPLET_FU
        elif meld.meld_type == MeldType.CONCEALED_KAN:
            base = KAN_FU
        else:
            continue  # sequences: 0 fu
        if is_terminal(meld.rank):
            base *= 2
        fu += base

    if wait is None:
        wait = classify_wait(decomposition, win_tile)
    if wait in _WAITS_WITH_FU:
        fu += WAIT_FU

    return _round_up_10(fu)


def _round_up_10(fu: int) -> int:
    """Round up to nearest 10."""
    return ((fu + 9) // 10) * 10
