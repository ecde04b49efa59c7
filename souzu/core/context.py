"""Situational flags supplied by the gameplay driver for one win check."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class WinType(Enum):
    SELF_DRAW = "self_draw"  # 自摸
    DISCARD = "discard"      # 栄和


@dataclass(frozen=True)
class WinContext:
    """Everything about a win that is not visible in the tiles.

    The engine never infers these; the driver owns turn counting, riichi
    state and the wall.
    """
    win_type: WinType = WinType.DISCARD
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    is_dealer: bool = False
    first_turn_self_draw: bool = False  # 天和 / 地和
    first_turn_discard: bool = False    # 人和
    after_replacement_draw: bool = False  # 嶺上
    last_tile: bool = False  # last tile of the wall (haitei / houtei)
    concealed_kan_ranks: Tuple[int, ...] = ()

    def __post_init__(self):
        # accept any iterable from callers but keep the snapshot immutable
        object.__setattr__(self, "concealed_kan_ranks", tuple(self.concealed_kan_ranks))

    @property
    def is_self_draw(self) -> bool:
        return self.win_type == WinType.SELF_DRAW

    @property
    def kan_count(self) -> int:
        return len(self.concealed_kan_ranks)
