"""Tests for fu.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import random

from souzu.core.context import WinContext, WinType
from souzu.core.meld import Meld, meld_sort_key
from souzu.core.tile import COPIES_PER_RANK, counts_to_tiles, make_tiles_from_string, tiles_to_counts
from souzu.rules.agari import (
    NineGatesDecomposition, SevenPairsDecomposition, StandardDecomposition, WaitType,
)
from souzu.rules.fu import calculate_fu
from souzu.rules.scoring import win_check

S, T, K = Meld.sequence, Meld.triplet, Meld.concealed_kan

TSUMO = WinContext(win_type=WinType.SELF_DRAW)
RON = WinContext(win_type=WinType.DISCARD)


def std(pair, *melds):
    return StandardDecomposition(pair, tuple(sorted(melds, key=meld_sort_key)))


class TestFixedFu:
    def test_chiitoi(self):
        """Chiitoi = 25 fu always."""
        d = SevenPairsDecomposition((1, 2, 3, 4, 5, 6, 7))
        assert calculate_fu(d, TSUMO, 4) == 25
        assert calculate_fu(d, RON, 4) == 25

    def test_pinfu_tsumo(self):
        """Pinfu tsumo = 20 fu."""
        d = std(2, S(1), S(4), S(4), S(7))
        assert calculate_fu(d, TSUMO, 4, is_pinfu=True) == 20

    def test_pinfu_ron(self):
        """Pinfu ron = 30 fu (20 base + 10 discard win)."""
        d = std(2, S(1), S(4), S(4), S(7))
        assert calculate_fu(d, RON, 4, is_pinfu=True) == 30


class TestMeldFu:
    def test_closed_triplet_terminal(self):
        d = std(9, T(1), S(2), S(4), S(5))
        # 20 base + 2 (tsumo) + 8 (terminal triplet) + 2 (tanki) = 32 -> 40
        assert calculate_fu(d, TSUMO, 9) == 40

    def test_simple_triplet_shanpon(self):
        d = std(9, T(2), S(3), S(4), S(5))
        # 20 + 10 (discard) + 4 (simple triplet) + 0 (shanpon) = 34 -> 40
        assert calculate_fu(d, RON, 2) == 40

    def test_kan_terminal(self):
        d = std(5, K(9), S(1), S(1), S(2))
        # 20 + 10 + 32 (terminal kan) + 2 (tanki) = 64 -> 70
        assert calculate_fu(d, RON, 5) == 70

    def test_kan_simple(self):
        d = std(9, K(5), S(1), S(2), S(6))
        # 20 + 2 + 16 + 2 (tanki) = 40
        assert calculate_fu(d, TSUMO, 9) == 40

    def test_sequences_are_free(self):
        d = std(2, S(1), S(4), S(4), S(7))
        # not pinfu: 20 + 2 (tsumo) = 22 -> 30
        assert calculate_fu(d, TSUMO, 4) == 30


class TestWaitFu:
    def test_kanchan(self):
        d = std(2, S(1), S(4), S(4), S(7))
        # 20 + 10 + 2 (kanchan) = 32 -> 40
        assert calculate_fu(d, RON, 5) == 40

    def test_penchan(self):
        d = std(5, S(1), S(4), S(4), S(7))
        # 1-2 waiting on 3
        assert calculate_fu(d, RON, 3) == 40

    def test_explicit_wait_overrides(self):
        d = std(2, S(1), S(4), S(4), S(7))
        assert calculate_fu(d, RON, 4, wait=WaitType.RYANMEN) == 30
        assert calculate_fu(d, RON, 4, wait=WaitType.KANCHAN) == 40


class TestNineGatesFu:
    def test_base_only(self):
        counts = tiles_to_counts(make_tiles_from_string("11123456789999"))
        d = NineGatesDecomposition(counts, True)
        assert calculate_fu(d, RON, 9) == 30
        assert calculate_fu(d, TSUMO, 9) == 30


def _random_hand(rng):
    """A random complete hand as (live tiles, kan ranks), or None if impossible."""
    kan_count = rng.choice([0, 0, 0, 1, 2])
    kans = tuple(rng.sample(range(1, 10), kan_count))
    melds = [K(r) for r in kans]
    while len(melds) < 4:
        if rng.random() < 0.6:
            melds.append(S(rng.randint(1, 7)))
        else:
            melds.append(T(rng.randint(1, 9)))
    d = std(rng.randint(1, 9), *melds)
    counts = d.to_counts()
    if any(c > COPIES_PER_RANK for c in counts):
        return None
    live = list(counts)
    for r in kans:
        live[r] -= COPIES_PER_RANK
    return counts_to_tiles(tuple(live)), kans


class TestFuProperty:
    def test_random_hands_are_multiples_of_ten(self):
        rng = random.Random(42)
        checked = 0
        while checked < 60:
            generated = _random_hand(rng)
            if generated is None:
                continue
            tiles, kans = generated
            ctx = WinContext(
                win_type=rng.choice([WinType.SELF_DRAW, WinType.DISCARD]),
                is_dealer=rng.random() < 0.5,
                concealed_kan_ranks=kans,
            )
            result = win_check(tiles, rng.choice(tiles), ctx)
            assert result.fu_total % 10 == 0 or result.fu_total == 25
            assert result.fu_total >= 20
            if result.is_yakuman:
                multiplier = 1.5 if ctx.is_dealer else 1
                assert result.final_points == 32000 * result.yakuman_rank * multiplier
            checked += 1
