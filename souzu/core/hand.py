"""Hand management - closed tiles and declared concealed kans."""

from typing import List, Optional, Tuple

from souzu.core.errors import ValidationError
from souzu.core.tile import COPIES_PER_RANK, Counts, tiles_to_counts, validate_rank


class Hand:
    """Manages a player's live hand during a round.

    Attributes:
        closed_tiles: Tiles in hand (kan tiles already set aside)
        concealed_kans: Ranks declared as concealed kans, in declaration order
        draw_tile: The most recently drawn tile
    """

    def __init__(self, tiles=None):
        self.closed_tiles: List[int] = [validate_rank(t) for t in (tiles or [])]
        self.concealed_kans: List[int] = []
        self.draw_tile: Optional[int] = None

    def draw(self, tile: int):
        """Draw a tile from the wall."""
        self.closed_tiles.append(validate_rank(tile))
        self.draw_tile = tile

    def discard(self, tile: int):
        """Discard a tile from hand."""
        if tile not in self.closed_tiles:
            raise ValidationError(f"cannot discard {tile}: not in hand")
        self.closed_tiles.remove(tile)
        self.draw_tile = None

    def declare_concealed_kan(self, rank: int):
        """Set aside four tiles of ``rank`` as a concealed kan."""
        validate_rank(rank)
        held = self.closed_tiles.count(rank)
        if held < COPIES_PER_RANK:
            raise ValidationError(f"cannot declare kan on {rank}: only {held} held")
        for _ in range(COPIES_PER_RANK):
            self.closed_tiles.remove(rank)
        self.concealed_kans.append(rank)
        if self.draw_tile == rank:
            self.draw_tile = None

    def sort_closed(self):
        self.closed_tiles.sort()

    def to_counts(self) -> Counts:
        """Per-rank counts of the closed tiles only."""
        return tiles_to_counts(self.closed_tiles)

    def full_counts(self) -> Counts:
        """Per-rank counts including the tiles held in concealed kans."""
        tiles = list(self.closed_tiles)
        for rank in self.concealed_kans:
            tiles.extend([rank] * COPIES_PER_RANK)
        return tiles_to_counts(tiles)

    @property
    def kan_ranks(self) -> Tuple[int, ...]:
        return tuple(self.concealed_kans)

    @property
    def total_tiles(self) -> int:
        """Tiles in the hand counting each kan as three (its meld slot)."""
        return len(self.closed_tiles) + 3 * len(self.concealed_kans)

    def clone(self) -> 'Hand':
        """Create a deep copy for simulation."""
        h = Hand()
        h.closed_tiles = list(self.closed_tiles)
        h.concealed_kans = list(self.concealed_kans)
        h.draw_tile = self.draw_tile
        return h
