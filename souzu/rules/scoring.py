"""Score calculation - pick the best decomposition and convert it to points."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from souzu.core.context import WinContext
from souzu.core.errors import NoDecompositionFound, ValidationError
from souzu.core.hand import Hand
from souzu.core.log import get_logger
from souzu.core.tile import COPIES_PER_RANK, Counts, counts_to_tiles, tiles_to_counts, validate_rank
from souzu.rules.agari import (
    COMPLETE_HAND_SIZE, WAITING_HAND_SIZE, Decomposition, SevenPairsDecomposition,
    WaitType, decompose,
)
from souzu.rules.config import DEFAULT_CONFIG, LimitTier, RuleConfig
from souzu.rules.fu import calculate_fu
from souzu.rules.yaku import Yaku, YakuEvaluation, evaluate

logger = get_logger(__name__)


@dataclass
class ScoreResult:
    """Result of score calculation."""
    han_total: int
    fu_total: int
    yaku: List[Yaku]
    yakuman_rank: int
    is_cumulative_yakuman: bool
    final_points: int
    limit_tier: LimitTier
    is_dealer: bool = False
    decomposition: Optional[Decomposition] = None
    wait: Optional[WaitType] = None
    win_tile: Optional[int] = None
    tiles: List[int] = field(default_factory=list)

    @property
    def matched_yaku_names(self) -> List[str]:
        return [y.label for y in self.yaku]

    @property
    def is_yakuman(self) -> bool:
        return self.yakuman_rank > 0


def calculate_points(han: int, yakuman_rank: int, is_cumulative: bool,
                     is_dealer: bool,
                     config: RuleConfig = DEFAULT_CONFIG) -> Tuple[int, LimitTier]:
    """Convert han / yakuman rank into final points and the tier reached."""
    if yakuman_rank > 0:
        points, tier = config.yakuman_points * yakuman_rank, LimitTier.YAKUMAN
    elif is_cumulative:
        points, tier = config.yakuman_points, LimitTier.CUMULATIVE_YAKUMAN
    else:
        points, tier = config.base_points, LimitTier.MANGAN
        for min_han, row_points, row_tier in config.limit_table:
            if han >= min_han:
                points, tier = row_points, row_tier
                break

    if is_dealer:
        points = int(points * config.dealer_multiplier)
    return points, tier


def false_declaration_penalty(is_dealer: bool, config: RuleConfig = DEFAULT_CONFIG) -> int:
    """Points paid for declaring a win the hand cannot make (チョンボ)."""
    points, _ = calculate_points(0, 1, False, is_dealer, config)
    return points


def _candidate_key(decomposition: Decomposition,
                   ev: YakuEvaluation) -> Tuple[bool, int, bool, bool, int, int]:
    # Below yakuman, a seven pairs reading beats any standard reading of the same tiles.
    return (ev.is_yakuman, ev.yakuman_rank, ev.is_cumulative_yakuman,
            isinstance(decomposition, SevenPairsDecomposition),
            ev.han_total, len(ev.yaku))


def resolve(counts: Counts, win_tile: int, win: WinContext,
            config: RuleConfig = DEFAULT_CONFIG) -> ScoreResult:
    """Score a complete hand given as full counts (kan tiles included).

    Raises NoDecompositionFound when the tiles form no winning shape.
    """
    decompositions = decompose(counts, win.concealed_kan_ranks, win_tile)
    if not decompositions:
        logger.warning("no winning decomposition", counts=list(counts), win_tile=win_tile)
        raise NoDecompositionFound(counts)

    best: Optional[Tuple[Decomposition, YakuEvaluation]] = None
    for decomposition in decompositions:
        ev = evaluate(decomposition, win, win_tile, config)
        if best is None or _candidate_key(decomposition, ev) > _candidate_key(*best):
            best = (decomposition, ev)

    decomposition, ev = best
    fu = calculate_fu(decomposition, win, win_tile,
                      is_pinfu=Yaku.PINFU in ev.yaku, wait=ev.wait)
    points, tier = calculate_points(
        ev.han_total, ev.yakuman_rank, ev.is_cumulative_yakuman, win.is_dealer, config)

    logger.debug(
        "win resolved",
        candidates=len(decompositions),
        yaku=ev.yaku,
        han=ev.han_total,
        fu=fu,
        yakuman_rank=ev.yakuman_rank,
        points=points,
    )
    return ScoreResult(
        han_total=ev.han_total,
        fu_total=fu,
        yaku=ev.yaku,
        yakuman_rank=ev.yakuman_rank,
        is_cumulative_yakuman=ev.is_cumulative_yakuman,
        final_points=points,
        limit_tier=tier,
        is_dealer=win.is_dealer,
        decomposition=decomposition,
        wait=ev.wait,
        win_tile=win_tile,
        tiles=counts_to_tiles(counts),
    )


def win_check(hand: Union[Hand, Iterable[int]], win_tile: int, win: WinContext,
              config: Optional[RuleConfig] = None) -> ScoreResult:
    """Check a declared win and score it.

    ``hand`` is the live hand with declared kan tiles already set aside:
    13 tiles (the winning tile is added) or 14 tiles (it must be among
    them), three fewer per kan.
    """
    if isinstance(hand, Hand):
        if tuple(hand.concealed_kans) != win.concealed_kan_ranks:
            raise ValidationError(
                f"hand declares kans {hand.concealed_kans}, context says "
                f"{list(win.concealed_kan_ranks)}")
        tiles = list(hand.closed_tiles)
    else:
        tiles = list(hand)
    validate_rank(win_tile)

    kan_count = win.kan_count
    if len(tiles) == WAITING_HAND_SIZE - 3 * kan_count:
        tiles.append(win_tile)
    elif len(tiles) == COMPLETE_HAND_SIZE - 3 * kan_count:
        if win_tile not in tiles:
            raise ValidationError(f"winning tile {win_tile} is not in the hand")
    else:
        raise ValidationError(
            f"hand has {len(tiles)} tiles; with {kan_count} kan(s) expected "
            f"{WAITING_HAND_SIZE - 3 * kan_count} or {COMPLETE_HAND_SIZE - 3 * kan_count}")

    for rank in win.concealed_kan_ranks:
        tiles.extend([validate_rank(rank)] * COPIES_PER_RANK)
    counts = tiles_to_counts(tiles)
    return resolve(counts, win_tile, win, config or DEFAULT_CONFIG)
