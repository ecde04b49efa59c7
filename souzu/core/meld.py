"""Meld (面子) data structures. Every meld is concealed in this variant."""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from souzu.core.errors import ValidationError
from souzu.core.tile import TERMINAL_RANKS, validate_rank


class MeldType(Enum):
    TRIPLET = "triplet"            # 刻子
    SEQUENCE = "sequence"          # 順子
    CONCEALED_KAN = "concealed_kan"  # 暗槓


@dataclass(frozen=True)
class Meld:
    """A frozen meld.

    Attributes:
        meld_type: Type of meld
        rank: The repeated rank for triplets and kans, the start rank for sequences
    """
    meld_type: MeldType
    rank: int

    def __post_init__(self):
        validate_rank(self.rank)
        if self.meld_type == MeldType.SEQUENCE and self.rank > 7:
            raise ValidationError(f"sequence must start at 1..7, got {self.rank}")

    @classmethod
    def triplet(cls, rank: int) -> 'Meld':
        return cls(MeldType.TRIPLET, rank)

    @classmethod
    def sequence(cls, start: int) -> 'Meld':
        return cls(MeldType.SEQUENCE, start)

    @classmethod
    def concealed_kan(cls, rank: int) -> 'Meld':
        return cls(MeldType.CONCEALED_KAN, rank)

    @property
    def is_kan(self) -> bool:
        return self.meld_type == MeldType.CONCEALED_KAN

    @property
    def is_sequence(self) -> bool:
        return self.meld_type == MeldType.SEQUENCE

    @property
    def is_triplet_like(self) -> bool:
        """Triplets and kans: groups of identical tiles."""
        return self.meld_type != MeldType.SEQUENCE

    @property
    def ranks(self) -> Tuple[int, ...]:
        """The ranks of every tile in the meld."""
        if self.meld_type == MeldType.SEQUENCE:
            return (self.rank, self.rank + 1, self.rank + 2)
        if self.meld_type == MeldType.CONCEALED_KAN:
            return (self.rank,) * 4
        return (self.rank,) * 3

    def contains_terminal(self) -> bool:
        return any(r in TERMINAL_RANKS for r in self.ranks)

    def __str__(self):
        return "".join(str(r) for r in self.ranks) + "s"


def meld_sort_key(meld: Meld) -> Tuple[int, str]:
    """Canonical ordering used to de-duplicate decompositions."""
    return (meld.rank, meld.meld_type.value)
