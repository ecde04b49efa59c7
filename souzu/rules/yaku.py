"""Yaku (役) detection for single-suit mahjong.

Yaku live in one closed enumeration carrying their metadata. Evaluation is
driven by static tables: yakuman groups and exclusive chains take the first
match in priority order, stackable yaku are all checked independently.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from souzu.core.context import WinContext
from souzu.core.tile import GREEN_RANKS, RANKS, TERMINAL_RANKS, Counts
from souzu.rules.agari import (
    Decomposition, NineGatesDecomposition, SevenPairsDecomposition,
    StandardDecomposition, WaitType, classify_wait,
)
from souzu.rules.config import DEFAULT_CONFIG, RuleConfig


class Yaku(Enum):
    """Every scoring condition: (label, han, yakuman rank)."""

    # === Normal tier ===
    RIICHI = ("立直", 1, 0)
    DOUBLE_RIICHI = ("雙立直", 2, 0)
    IPPATSU = ("一發", 1, 0)
    TSUMO = ("門前清自摸和", 1, 0)
    PINFU = ("平和", 1, 0)
    TANYAO = ("斷么九", 1, 0)
    IIPEIKOU = ("一盃口", 1, 0)
    RYANPEIKOU = ("二盃口", 3, 0)
    HAITEI = ("海底撈月", 1, 0)
    HOUTEI = ("河底撈魚", 1, 0)
    RINSHAN = ("嶺上開花", 1, 0)
    TOITOI = ("對對和", 2, 0)
    SANANKOU = ("三暗刻", 2, 0)
    SANKANTSU = ("三槓子", 2, 0)
    CHIITOI = ("七對子", 2, 0)
    ITTSU = ("一氣通貫", 2, 0)
    JUNCHAN = ("純全帶么九", 3, 0)
    CHINITSU = ("清一色", 6, 0)

    # === Yakuman ===
    TENHOU = ("天和", 0, 1)
    CHIHOU = ("地和", 0, 1)
    RENHOU = ("人和", 0, 1)
    SUUANKOU = ("四暗刻", 0, 1)
    SUUANKOU_TANKI = ("四暗刻單騎", 0, 2)
    SUUKANTSU = ("四槓子", 0, 1)
    RYUUIISOU = ("綠一色", 0, 1)
    GOLDEN_GATE = ("金門橋", 0, 1)  # 123 345 567 789
    DAI_CHIKURIN = ("大竹林", 0, 1)  # seven pairs of 2..8
    CHUUREN = ("九蓮寶燈", 0, 1)
    CHUUREN_PURE = ("純正九蓮寶燈", 0, 2)
    ISHI_NO_UE = ("石上三年", 0, 1)  # double riichi won on the last tile

    def __init__(self, label: str, han: int, yakuman: int):
        self.label = label
        self.han = han
        self.yakuman = yakuman

    @property
    def is_yakuman(self) -> bool:
        return self.yakuman > 0


# Within a group at most one yakuman applies: the first that matches.
YAKUMAN_GROUPS: Tuple[Tuple[Yaku, ...], ...] = (
    (Yaku.TENHOU, Yaku.CHIHOU, Yaku.RENHOU),
    (Yaku.SUUANKOU_TANKI, Yaku.SUUANKOU),
    (Yaku.SUUKANTSU,),
    (Yaku.RYUUIISOU,),
    (Yaku.GOLDEN_GATE,),
    (Yaku.DAI_CHIKURIN,),
    (Yaku.CHUUREN_PURE, Yaku.CHUUREN),
    (Yaku.ISHI_NO_UE,),
)

EXCLUSIVE_CHAINS: Tuple[Tuple[Yaku, ...], ...] = (
    (Yaku.DOUBLE_RIICHI, Yaku.RIICHI),
    (Yaku.RYANPEIKOU, Yaku.IIPEIKOU),
)

STACKABLE_YAKU: Tuple[Yaku, ...] = (
    Yaku.IPPATSU, Yaku.TSUMO, Yaku.PINFU, Yaku.TANYAO,
    Yaku.HAITEI, Yaku.HOUTEI, Yaku.RINSHAN,
    Yaku.TOITOI, Yaku.ITTSU, Yaku.SANANKOU, Yaku.SANKANTSU,
    Yaku.CHIITOI, Yaku.JUNCHAN, Yaku.CHINITSU,
)

# Order in which matched yaku are shown, independent of evaluation order.
DISPLAY_ORDER: Tuple[Yaku, ...] = (
    Yaku.TENHOU, Yaku.CHIHOU, Yaku.RENHOU,
    Yaku.CHUUREN_PURE, Yaku.CHUUREN,
    Yaku.SUUANKOU_TANKI, Yaku.SUUANKOU, Yaku.SUUKANTSU,
    Yaku.RYUUIISOU, Yaku.GOLDEN_GATE, Yaku.DAI_CHIKURIN, Yaku.ISHI_NO_UE,
    Yaku.DOUBLE_RIICHI, Yaku.RIICHI, Yaku.IPPATSU, Yaku.TSUMO,
    Yaku.PINFU, Yaku.TANYAO, Yaku.IIPEIKOU,
    Yaku.HAITEI, Yaku.HOUTEI, Yaku.RINSHAN,
    Yaku.CHIITOI, Yaku.TOITOI, Yaku.SANANKOU, Yaku.SANKANTSU,
    Yaku.ITTSU, Yaku.RYANPEIKOU, Yaku.JUNCHAN, Yaku.CHINITSU,
)
_DISPLAY_RANK = {yaku: i for i, yaku in enumerate(DISPLAY_ORDER)}


@dataclass
class HandContext:
    """All information needed to judge yaku for one decomposition.

    Counts and wait are derived from the decomposition when omitted.
    """
    decomposition: Decomposition
    win_tile: int
    win: WinContext
    counts: Counts = ()
    wait: Optional[WaitType] = None

    def __post_init__(self):
        if not self.counts:
            self.counts = self.decomposition.to_counts()
        if self.wait is None:
            self.wait = classify_wait(self.decomposition, self.win_tile)

    @property
    def standard(self) -> Optional[StandardDecomposition]:
        if isinstance(self.decomposition, StandardDecomposition):
            return self.decomposition
        return None

    @property
    def sequence_starts(self) -> List[int]:
        std = self.standard
        return [m.rank for m in std.sequences] if std else []

    @property
    def concealed_triplets(self) -> int:
        """暗刻 count: triplets plus kans.

        A triplet completed by another player's discard counts as open.
        """
        std = self.standard
        if std is None:
            return 0
        count = len(std.triplets) + len(std.kans)
        if not self.win.is_self_draw and self.wait == WaitType.SHANPON:
            count -= 1
        return count


@dataclass
class YakuEvaluation:
    """Yaku matched by one decomposition."""
    yaku: List[Yaku] = field(default_factory=list)
    han_total: int = 0
    yakuman_rank: int = 0
    is_cumulative_yakuman: bool = False
    wait: Optional[WaitType] = None

    @property
    def is_yakuman(self) -> bool:
        return self.yakuman_rank > 0

    @property
    def names(self) -> List[str]:
        return [y.label for y in self.yaku]


# === Normal tier checks ===

def check_riichi(ctx: HandContext) -> bool:
    return ctx.win.riichi


def check_double_riichi(ctx: HandContext) -> bool:
    return ctx.win.double_riichi


def check_ippatsu(ctx: HandContext) -> bool:
    return ctx.win.ippatsu and (ctx.win.riichi or ctx.win.double_riichi)


def check_tsumo(ctx: HandContext) -> bool:
    # no open melds exist, so every self-draw is menzen
    return ctx.win.is_self_draw


def check_tanyao(ctx: HandContext) -> bool:
    """All simples (斷么九) - no 1 or 9 anywhere, kans included."""
    return all(ctx.counts[r] == 0 for r in TERMINAL_RANKS)


def check_pinfu(ctx: HandContext) -> bool:
    """Pinfu - four sequences, ryanmen wait.

    A single suit has no honour tiles, so the pair never carries value.
    """
    std = ctx.standard
    if std is None:
        return False
    if any(not m.is_sequence for m in std.melds):
        return False
    return ctx.wait == WaitType.RYANMEN


def _identical_sequence_pairs(ctx: HandContext) -> int:
    seen = Counter(ctx.sequence_starts)
    return sum(v // 2 for v in seen.values())


def check_iipeikou(ctx: HandContext) -> bool:
    return _identical_sequence_pairs(ctx) >= 1


def check_ryanpeikou(ctx: HandContext) -> bool:
    return _identical_sequence_pairs(ctx) >= 2


def check_haitei(ctx: HandContext) -> bool:
    return ctx.win.last_tile and ctx.win.is_self_draw


def check_houtei(ctx: HandContext) -> bool:
    return ctx.win.last_tile and not ctx.win.is_self_draw


def check_rinshan(ctx: HandContext) -> bool:
    return ctx.win.after_replacement_draw and ctx.win.is_self_draw


def check_toitoi(ctx: HandContext) -> bool:
    """All triplets (對對和), kans count as triplets."""
    std = ctx.standard
    return std is not None and all(m.is_triplet_like for m in std.melds)


def check_ittsu(ctx: HandContext) -> bool:
    """Straight (一氣通貫): 123 456 789."""
    starts = set(ctx.sequence_starts)
    return {1, 4, 7} <= starts


def check_sanankou(ctx: HandContext) -> bool:
    return ctx.concealed_triplets == 3


def check_sankantsu(ctx: HandContext) -> bool:
    std = ctx.standard
    return std is not None and len(std.kans) == 3


def check_chiitoi(ctx: HandContext) -> bool:
    return isinstance(ctx.decomposition, SevenPairsDecomposition)


def check_junchan(ctx: HandContext) -> bool:
    """Pure outside hand (純全帶么九): every group and the pair hold a 1 or 9."""
    std = ctx.standard
    if std is None or std.pair not in TERMINAL_RANKS:
        return False
    if not std.sequences:
        return False
    return all(m.contains_terminal() for m in std.melds)


def check_chinitsu(ctx: HandContext) -> bool:
    # the whole tile set is one suit
    return True


# === Yakuman checks ===

def check_tenhou(ctx: HandContext) -> bool:
    return ctx.win.first_turn_self_draw and ctx.win.is_self_draw and ctx.win.is_dealer


def check_chihou(ctx: HandContext) -> bool:
    return ctx.win.first_turn_self_draw and ctx.win.is_self_draw and not ctx.win.is_dealer


def check_renhou(ctx: HandContext) -> bool:
    return ctx.win.first_turn_discard and not ctx.win.is_self_draw


def check_suuankou(ctx: HandContext) -> bool:
    return ctx.concealed_triplets == 4


def check_suuankou_tanki(ctx: HandContext) -> bool:
    return check_suuankou(ctx) and ctx.wait == WaitType.TANKI


def check_suukantsu(ctx: HandContext) -> bool:
    std = ctx.standard
    return std is not None and len(std.kans) == 4


def check_ryuuiisou(ctx: HandContext) -> bool:
    """All green (綠一色): only 2, 3, 4, 6 and 8."""
    return all(ctx.counts[r] == 0 for r in RANKS if r not in GREEN_RANKS)


def check_golden_gate(ctx: HandContext) -> bool:
    return {1, 3, 5, 7} <= set(ctx.sequence_starts)


def check_dai_chikurin(ctx: HandContext) -> bool:
    d = ctx.decomposition
    return isinstance(d, SevenPairsDecomposition) and d.pairs == tuple(range(2, 9))


def check_chuuren(ctx: HandContext) -> bool:
    return isinstance(ctx.decomposition, NineGatesDecomposition)


def check_chuuren_pure(ctx: HandContext) -> bool:
    return check_chuuren(ctx) and ctx.decomposition.is_pure


def check_ishi_no_ue(ctx: HandContext) -> bool:
    return ctx.win.double_riichi and ctx.win.last_tile


_CHECKS: Dict[Yaku, Callable[[HandContext], bool]] = {
    Yaku.RIICHI: check_riichi,
    Yaku.DOUBLE_RIICHI: check_double_riichi,
    Yaku.IPPATSU: check_ippatsu,
    Yaku.TSUMO: check_tsumo,
    Yaku.PINFU: check_pinfu,
    Yaku.TANYAO: check_tanyao,
    Yaku.IIPEIKOU: check_iipeikou,
    Yaku.RYANPEIKOU: check_ryanpeikou,
    Yaku.HAITEI: check_haitei,
    Yaku.HOUTEI: check_houtei,
    Yaku.RINSHAN: check_rinshan,
    Yaku.TOITOI: check_toitoi,
    Yaku.SANANKOU: check_sanankou,
    Yaku.SANKANTSU: check_sankantsu,
    Yaku.CHIITOI: check_chiitoi,
    Yaku.ITTSU: check_ittsu,
    Yaku.JUNCHAN: check_junchan,
    Yaku.CHINITSU: check_chinitsu,
    Yaku.TENHOU: check_tenhou,
    Yaku.CHIHOU: check_chihou,
    Yaku.RENHOU: check_renhou,
    Yaku.SUUANKOU: check_suuankou,
    Yaku.SUUANKOU_TANKI: check_suuankou_tanki,
    Yaku.SUUKANTSU: check_suukantsu,
    Yaku.RYUUIISOU: check_ryuuiisou,
    Yaku.GOLDEN_GATE: check_golden_gate,
    Yaku.DAI_CHIKURIN: check_dai_chikurin,
    Yaku.CHUUREN: check_chuuren,
    Yaku.CHUUREN_PURE: check_chuuren_pure,
    Yaku.ISHI_NO_UE: check_ishi_no_ue,
}


def build_context(decomposition: Decomposition, win_tile: int,
                  win: WinContext) -> HandContext:
    return HandContext(decomposition=decomposition, win_tile=win_tile, win=win)


def first_match(group: Tuple[Yaku, ...], ctx: HandContext) -> Optional[Yaku]:
    """The most specific yaku of a priority group that applies, if any."""
    for yaku in group:
        if _CHECKS[yaku](ctx):
            return yaku
    return None


def sort_for_display(yaku_list: List[Yaku]) -> List[Yaku]:
    return sorted(yaku_list, key=_DISPLAY_RANK.__getitem__)


def evaluate(decomposition: Decomposition, win: WinContext, win_tile: int,
             config: RuleConfig = DEFAULT_CONFIG) -> YakuEvaluation:
    """Detect all applicable yaku for one decomposition.

    Any yakuman match replaces the normal tier entirely.
    """
    ctx = build_context(decomposition, win_tile, win)

    yakuman = [y for y in (first_match(g, ctx) for g in YAKUMAN_GROUPS) if y]
    if yakuman:
        return YakuEvaluation(
            yaku=sort_for_display(yakuman),
            yakuman_rank=sum(y.yakuman for y in yakuman),
            wait=ctx.wait,
        )

    results = [y for y in (first_match(c, ctx) for c in EXCLUSIVE_CHAINS) if y]
    results.extend(y for y in STACKABLE_YAKU if _CHECKS[y](ctx))
    han = total_han(results)
    return YakuEvaluation(
        yaku=sort_for_display(results),
        han_total=han,
        is_cumulative_yakuman=han >= config.cumulative_yakuman_han,
        wait=ctx.wait,
    )


def total_han(yaku_list: List[Yaku]) -> int:
    """Sum total han from yaku list."""
    return sum(y.han for y in yaku_list)
