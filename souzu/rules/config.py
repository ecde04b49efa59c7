"""Scoring configuration."""

from enum import Enum
from typing import Sequence, Tuple


class LimitTier(Enum):
    YAKUMAN = "役滿"
    CUMULATIVE_YAKUMAN = "累計役滿"
    SANBAIMAN = "三倍滿"
    BAIMAN = "倍滿"
    HANEMAN = "跳滿"
    MANGAN = "滿貫"


# (minimum han, points, tier), highest first
DEFAULT_LIMIT_TABLE: Tuple[Tuple[int, int, LimitTier], ...] = (
    (11, 24000, LimitTier.SANBAIMAN),
    (8, 16000, LimitTier.BAIMAN),
    (6, 12000, LimitTier.HANEMAN),
)


class RuleConfig:
    """Point table and thresholds used by the score resolver."""

    def __init__(
        self,
        yakuman_points: int = 32000,
        dealer_multiplier: float = 1.5,
        cumulative_yakuman_han: int = 13,
        base_points: int = 8000,
        limit_table: Sequence[Tuple[int, int, LimitTier]] = DEFAULT_LIMIT_TABLE,
    ):
        self.yakuman_points = yakuman_points
        self.dealer_multiplier = dealer_multiplier
        self.cumulative_yakuman_han = cumulative_yakuman_han
        self.base_points = base_points  # every completed hand scores at least this
        self.limit_table = tuple(sorted(limit_table, key=lambda row: row[0], reverse=True))


DEFAULT_CONFIG = RuleConfig()
