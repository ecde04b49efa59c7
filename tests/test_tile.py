"""Tests for tile.py"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from souzu.core.errors import ValidationError
from souzu.core.tile import (
    GREEN_RANKS, NINE_GATES_TEMPLATE, add_tile, counts_to_tiles, is_terminal,
    make_tiles_from_string, tile_name, tiles_to_counts, tiles_to_string,
    validate_rank,
)


class TestRankCounter:
    def test_counts_are_indexed_by_rank(self):
        counts = tiles_to_counts([1, 1, 5, 9])
        assert len(counts) == 10
        assert counts[0] == 0
        assert counts[1] == 2
        assert counts[5] == 1
        assert counts[9] == 1
        assert sum(counts) == 4

    def test_fifth_copy_rejected(self):
        with pytest.raises(ValidationError):
            tiles_to_counts([3, 3, 3, 3, 3])

    def test_counts_to_tiles_sorted(self):
        assert counts_to_tiles(tiles_to_counts([9, 1, 5, 1])) == [1, 1, 5, 9]

    def test_add_tile_returns_copy(self):
        counts = tiles_to_counts([2, 2])
        more = add_tile(counts, 2)
        assert counts[2] == 2
        assert more[2] == 3

    def test_nine_gates_template_has_13_tiles(self):
        assert sum(NINE_GATES_TEMPLATE) == 13


class TestRank:
    def test_out_of_range(self):
        for bad in (0, 10, -1):
            with pytest.raises(ValidationError):
                validate_rank(bad)

    def test_non_int(self):
        with pytest.raises(ValidationError):
            validate_rank("5")
        with pytest.raises(ValidationError):
            validate_rank(True)

    def test_terminals(self):
        assert is_terminal(1)
        assert is_terminal(9)
        assert not is_terminal(5)

    def test_green(self):
        assert GREEN_RANKS == {2, 3, 4, 6, 8}

    def test_name(self):
        assert tile_name(7) == "7s"


class TestTileString:
    def test_parse(self):
        assert make_tiles_from_string("123s") == [1, 2, 3]
        assert make_tiles_from_string("11 99") == [1, 1, 9, 9]

    def test_zero_is_not_a_tile(self):
        with pytest.raises(ValidationError):
            make_tiles_from_string("1230")

    def test_bad_character(self):
        with pytest.raises(ValidationError):
            make_tiles_from_string("123m")

    def test_format(self):
        assert tiles_to_string([3, 1, 2]) == "123s"
