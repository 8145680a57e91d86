"""
Melds and meld validation.

A meld is a run (chow), a triple (pong) or a quad (kong). Quads come in
three kinds that differ only in where their tiles came from, so every
meld records a TileSource per tile and the validator checks provenance
as well as shape.
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import numpy as np

from .errors import InvalidMeldError
from .tiles import Tile, NUM_TILE_KINDS


class MeldType(IntEnum):
    """Types of melds (combinations) a player can have"""
    CHOW = 0  # 顺子 - Sequence of 3 consecutive tiles in same suit
    PONG = 1  # 刻子 - 3 identical tiles
    KONG = 2  # 杠 - 4 identical tiles


class KongType(IntEnum):
    """Where the four tiles of a kong came from"""
    CONCEALED = 0  # 暗杠 - all four self-drawn
    OPEN = 1       # 明杠 - claimed from a discard
    PROMOTED = 2   # 加杠 - fourth tile added to a claimed pong


class MeldViolation(IntEnum):
    """Reasons a group of tiles is not a legal meld"""
    WRONG_COUNT = 0
    NOT_NUMBERED = 1
    MIXED_SUITS = 2
    NON_CONSECUTIVE = 3
    NOT_IDENTICAL = 4
    BONUS_TILE = 5
    SOURCE_COUNT = 6
    PROVENANCE_MISMATCH = 7
    MISSING_BASE = 8


@dataclass(frozen=True)
class TileSource:
    """
    Provenance of one tile in a meld.

    Attributes:
        claimed: True when the tile was taken from another player's discard
        seat: The seat it was claimed from, when known
    """
    claimed: bool = False
    seat: Optional[int] = None

    @property
    def is_self_drawn(self) -> bool:
        return not self.claimed


SELF_DRAWN = TileSource()


def claimed_from(seat: Optional[int] = None) -> TileSource:
    return TileSource(claimed=True, seat=seat)


def validate_run(tiles: Sequence[Tile]) -> Optional[MeldViolation]:
    """Check three tiles form a sequence. Returns None when legal."""
    if len(tiles) != 3:
        return MeldViolation.WRONG_COUNT
    if any(t.is_bonus for t in tiles):
        return MeldViolation.BONUS_TILE
    if not all(t.is_numbered for t in tiles):
        return MeldViolation.NOT_NUMBERED
    if any(t.suit != tiles[0].suit for t in tiles):
        return MeldViolation.MIXED_SUITS
    values = sorted(t.value for t in tiles)
    if values[1] != values[0] + 1 or values[2] != values[1] + 1:
        return MeldViolation.NON_CONSECUTIVE
    return None


def validate_triple(tiles: Sequence[Tile]) -> Optional[MeldViolation]:
    """Check three identical tiles. Returns None when legal."""
    if len(tiles) != 3:
        return MeldViolation.WRONG_COUNT
    return _check_identical(tiles)


def validate_quad(tiles: Sequence[Tile], sources: Sequence[TileSource],
                  kong_type: KongType, base: Optional['Meld'] = None) -> Optional[MeldViolation]:
    """
    Check four identical tiles and their provenance.

    Concealed kongs must be entirely self-drawn, open kongs need at least
    one claimed tile, and a promoted kong has exactly one self-drawn tile
    (the one added) on top of a previously claimed pong. When `base` is
    given it must be that open pong.
    """
    if len(tiles) != 4:
        return MeldViolation.WRONG_COUNT
    violation = _check_identical(tiles)
    if violation is not None:
        return violation
    if len(sources) != 4:
        return MeldViolation.SOURCE_COUNT

    self_drawn = sum(1 for s in sources if s.is_self_drawn)
    if kong_type == KongType.CONCEALED and self_drawn != 4:
        return MeldViolation.PROVENANCE_MISMATCH
    if kong_type == KongType.OPEN and self_drawn == 4:
        return MeldViolation.PROVENANCE_MISMATCH
    if kong_type == KongType.PROMOTED:
        if self_drawn != 1:
            return MeldViolation.PROVENANCE_MISMATCH
        if base is not None and (base.meld_type != MeldType.PONG
                                 or not base.is_open
                                 or base.tiles[0] != tiles[0]):
            return MeldViolation.MISSING_BASE
    return None


def _check_identical(tiles: Sequence[Tile]) -> Optional[MeldViolation]:
    if any(t.is_bonus for t in tiles):
        return MeldViolation.BONUS_TILE
    if not all(t == tiles[0] for t in tiles):
        return MeldViolation.NOT_IDENTICAL
    return None


def _default_sources(meld_type: MeldType, kong_type: Optional[KongType],
                     size: int) -> Tuple[TileSource, ...]:
    """Provenance assumed when a caller does not track it"""
    if kong_type == KongType.CONCEALED:
        return (SELF_DRAWN,) * size
    if kong_type == KongType.PROMOTED:
        return (claimed_from(),) * (size - 1) + (SELF_DRAWN,)
    return (SELF_DRAWN,) * (size - 1) + (claimed_from(),)


@dataclass(frozen=True)
class Meld:
    """
    Represents a declared meld.

    Attributes:
        meld_type: Chow, Pong or Kong
        tiles: Tiles in the meld (chows are stored ascending)
        sources: Provenance of each tile, parallel to tiles
        kong_type: Concealed, open or promoted; only set for kongs
    """
    meld_type: MeldType
    tiles: Tuple[Tile, ...]
    sources: Tuple[TileSource, ...] = ()
    kong_type: Optional[KongType] = None

    def __post_init__(self):
        """Validate meld"""
        tiles = tuple(self.tiles)
        kong_type = self.kong_type
        if self.meld_type == MeldType.KONG and kong_type is None:
            kong_type = KongType.OPEN
        elif self.meld_type != MeldType.KONG and kong_type is not None:
            raise InvalidMeldError(MeldViolation.WRONG_COUNT, "Only kongs carry a kong type")

        sources = tuple(self.sources) or _default_sources(self.meld_type, kong_type, len(tiles))
        if len(sources) != len(tiles):
            raise InvalidMeldError(MeldViolation.SOURCE_COUNT)

        if self.meld_type == MeldType.CHOW:
            violation = validate_run(tiles)
            if violation is None:
                ordered = sorted(zip(tiles, sources), key=lambda pair: pair[0].tile_index)
                tiles = tuple(t for t, _ in ordered)
                sources = tuple(s for _, s in ordered)
        elif self.meld_type == MeldType.PONG:
            violation = validate_triple(tiles)
        else:
            violation = validate_quad(tiles, sources, kong_type)
        if violation is None and self.meld_type != MeldType.KONG:
            if sum(1 for s in sources if s.claimed) != 1:
                violation = MeldViolation.PROVENANCE_MISMATCH
        if violation is not None:
            raise InvalidMeldError(violation)

        object.__setattr__(self, 'tiles', tiles)
        object.__setattr__(self, 'sources', sources)
        object.__setattr__(self, 'kong_type', kong_type)

    @classmethod
    def promote(cls, pong: 'Meld', tile: Optional[Tile] = None) -> 'Meld':
        """Turn a claimed pong into a promoted kong with a self-drawn fourth tile"""
        tile = tile if tile is not None else pong.tiles[0]
        tiles = pong.tiles + (tile,)
        sources = (claimed_from(pong.claimed_seat),) * 3 + (SELF_DRAWN,)
        violation = validate_quad(tiles, sources, KongType.PROMOTED, base=pong)
        if violation is not None:
            raise InvalidMeldError(violation)
        return cls(MeldType.KONG, tiles, sources, KongType.PROMOTED)

    @property
    def is_kong(self) -> bool:
        return self.meld_type == MeldType.KONG

    @property
    def is_concealed(self) -> bool:
        """Only a self-formed kong keeps the hand concealed"""
        return self.kong_type == KongType.CONCEALED

    @property
    def is_open(self) -> bool:
        return not self.is_concealed

    @property
    def base_tile(self) -> Tile:
        """Lowest tile of a chow or the repeated tile of a pong/kong"""
        return self.tiles[0]

    @property
    def tile_index(self) -> int:
        return self.base_tile.tile_index

    @property
    def claimed_tile(self) -> Optional[Tile]:
        for tile, source in zip(self.tiles, self.sources):
            if source.claimed:
                return tile
        return None

    @property
    def claimed_seat(self) -> Optional[int]:
        for source in self.sources:
            if source.claimed:
                return source.seat
        return None

    def to_count_array(self) -> np.ndarray:
        """Convert meld to 34-element count array"""
        counts = np.zeros(NUM_TILE_KINDS, dtype=np.int8)
        for tile in self.tiles:
            counts[tile.tile_index] += 1
        return counts

    def __repr__(self) -> str:
        kind = self.kong_type.name if self.kong_type is not None else self.meld_type.name
        return f"Meld({kind}, {list(self.tiles)})"

    def __str__(self) -> str:
        tiles_str = " ".join(str(t) for t in self.tiles)
        concealed = "暗" if self.is_concealed else "明"
        return f"[{concealed}{self.meld_type.name}: {tiles_str}]"


@dataclass(frozen=True)
class MeldCandidate:
    """
    A meld the hand could form, before the caller commits to it.

    Attributes:
        meld_type: Type of meld
        tiles: Full tile list of the resulting meld, ascending
        claimed_tile: The external tile, None for self-declared kongs
        kong_type: Set for kong candidates
        base: The open pong a promotion builds on
    """
    meld_type: MeldType
    tiles: Tuple[Tile, ...]
    claimed_tile: Optional[Tile] = None
    kong_type: Optional[KongType] = None
    base: Optional[Meld] = field(default=None, compare=False)

    @property
    def hand_tiles(self) -> List[Tile]:
        """Tiles that leave the concealed hand when the meld is declared"""
        if self.base is not None:
            return [self.tiles[-1]]
        tiles = list(self.tiles)
        if self.claimed_tile is not None:
            tiles.remove(self.claimed_tile)
        return tiles

    def to_meld(self, from_seat: Optional[int] = None) -> Meld:
        """Build the Meld, recording the claimed tile as coming from `from_seat`"""
        if self.kong_type == KongType.PROMOTED:
            return Meld.promote(self.base, self.tiles[-1])
        sources = []
        claimed = self.claimed_tile
        for tile in self.tiles:
            if claimed is not None and tile == claimed:
                sources.append(claimed_from(from_seat))
                claimed = None
            else:
                sources.append(SELF_DRAWN)
        return Meld(self.meld_type, self.tiles, tuple(sources), self.kong_type)


def find_run_completions(hand, tile: Tile) -> List[MeldCandidate]:
    """
    All chows the hand can make with an external tile.
    The tile may sit low, middle or high in the run; each window is
    checked independently and every legal one is returned.
    """
    if not tile.is_numbered:
        return []

    counts = hand.concealed_counts()
    base = tile.tile_index - tile.value + 1  # index of this suit's 1
    value = tile.value
    candidates = []
    # tile low, tile middle, tile high
    for first, second in ((value + 1, value + 2), (value - 1, value + 1), (value - 2, value - 1)):
        if first < 1 or second > 9:
            continue
        if counts[base + first - 1] > 0 and counts[base + second - 1] > 0:
            tiles = sorted([tile, Tile.from_index(base + first - 1),
                            Tile.from_index(base + second - 1)])
            candidates.append(MeldCandidate(MeldType.CHOW, tuple(tiles), tile))
    return candidates


def find_triple_completions(hand, tile: Tile) -> List[MeldCandidate]:
    """Pong with an external tile, if the hand holds a pair of it"""
    if tile.is_bonus or hand.count(tile) < 2:
        return []
    return [MeldCandidate(MeldType.PONG, (tile,) * 3, tile)]


def find_quad_completions(hand, tile: Tile) -> List[MeldCandidate]:
    """Open kong with an external tile, if the hand holds three of it"""
    if tile.is_bonus or hand.count(tile) < 3:
        return []
    return [MeldCandidate(MeldType.KONG, (tile,) * 4, tile, KongType.OPEN)]


def find_concealed_quads(hand) -> List[MeldCandidate]:
    """Kongs the hand can declare from four concealed copies"""
    counts = hand.concealed_counts()
    candidates = []
    for idx in range(NUM_TILE_KINDS):
        if counts[idx] == 4:
            tile = Tile.from_index(idx)
            candidates.append(MeldCandidate(MeldType.KONG, (tile,) * 4, None, KongType.CONCEALED))
    return candidates


def find_promotions(hand) -> List[MeldCandidate]:
    """Claimed pongs that can take a concealed fourth copy"""
    candidates = []
    for meld in hand.melds:
        if meld.meld_type == MeldType.PONG and hand.count(meld.base_tile) > 0:
            tiles = meld.tiles + (meld.base_tile,)
            candidates.append(MeldCandidate(MeldType.KONG, tiles, None, KongType.PROMOTED, base=meld))
    return candidates
