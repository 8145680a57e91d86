"""
Hand Module

A player's hand as the evaluation code sees it: concealed tiles as a
count table, declared melds, the freshly drawn tile and any bonus tiles
set aside. The caller owns and mutates it; evaluation works on copies.
"""

from typing import Iterable, List, Optional, Tuple
import numpy as np

from .errors import HandSizeError, MahjongError, TileCountError, TileNotInHandError
from .meld import KongType, Meld, MeldCandidate
from .tiles import (
    Tile, NUM_ALL_KINDS, NUM_TILE_KINDS, COPIES_PER_TYPE, FLOWER_START, JOKER_INDEX,
)


class Hand:
    """
    Concealed tiles, declared melds and an optional drawn tile.

    tile_count counts every declared meld as three tiles, so a kong takes
    one group slot just like a pong. Bonus tiles are not counted.
    """

    def __init__(self, tiles: Optional[Iterable[Tile]] = None,
                 melds: Optional[Iterable[Meld]] = None,
                 drawn_tile: Optional[Tile] = None):
        self._counts = np.zeros(NUM_ALL_KINDS, dtype=np.int8)
        self._reds = np.zeros(NUM_TILE_KINDS, dtype=np.int8)
        self._melds: List[Meld] = []
        self._drawn: Optional[Tile] = None

        for meld in melds or []:
            self.declare_meld(meld)
        for tile in tiles or []:
            self.add(tile)
        if drawn_tile is not None:
            self.draw(drawn_tile)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add(self, tile: Tile) -> None:
        """Add a tile to the concealed part"""
        self._check_supply(tile, 1)
        self._counts[tile.tile_index] += 1
        if tile.is_red:
            self._reds[tile.tile_index] += 1

    def remove(self, tile: Tile) -> Tile:
        """
        Take one copy out of the concealed part.
        A plain copy is preferred over a red one unless the red copy was asked for.
        Returns the tile actually removed.
        """
        idx = tile.tile_index
        if self._counts[idx] == 0:
            raise TileNotInHandError(f"{tile} is not in the hand")
        self._counts[idx] -= 1
        if idx < NUM_TILE_KINDS and self._reds[idx] > 0:
            if tile.is_red or self._reds[idx] > self._counts[idx]:
                self._reds[idx] -= 1
                return Tile(tile.suit, tile.value, is_red=True)
        return Tile(tile.suit, tile.value)

    def draw(self, tile: Tile) -> None:
        """Receive a tile from the wall. Bonus tiles go straight to the side."""
        if tile.is_bonus:
            self.add(tile)
            return
        if self._drawn is not None:
            raise MahjongError(f"Hand already holds drawn tile {self._drawn}")
        self._check_supply(tile, 1)
        self._drawn = tile

    def commit_drawn(self) -> None:
        """Move the drawn tile into the concealed part"""
        if self._drawn is not None:
            drawn, self._drawn = self._drawn, None
            self.add(drawn)

    def discard(self, tile: Tile) -> Tile:
        """
        Discard the drawn tile or a concealed one.
        In the latter case the drawn tile joins the concealed part.
        """
        if self._drawn is not None and self._drawn == tile:
            drawn, self._drawn = self._drawn, None
            return drawn
        removed = self.remove(tile)
        self.commit_drawn()
        return removed

    def declare_meld(self, meld: Meld) -> None:
        """Record an already formed meld"""
        for tile in set(meld.tiles):
            self._check_supply(tile, meld.tiles.count(tile))
        self._melds.append(meld)

    def claim(self, candidate: MeldCandidate, from_seat: Optional[int] = None) -> Meld:
        """
        Turn a meld candidate into a declared meld, taking its tiles
        out of the concealed part (and the drawn tile, for kongs).
        """
        self.commit_drawn()
        for tile in candidate.hand_tiles:
            self.remove(tile)
        meld = candidate.to_meld(from_seat)
        if candidate.kong_type == KongType.PROMOTED:
            self._melds[self._melds.index(candidate.base)] = meld
        else:
            self._melds.append(meld)
        return meld

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    @property
    def melds(self) -> Tuple[Meld, ...]:
        return tuple(self._melds)

    @property
    def num_melds(self) -> int:
        return len(self._melds)

    @property
    def drawn_tile(self) -> Optional[Tile]:
        return self._drawn

    @property
    def tile_count(self) -> int:
        """Effective size: concealed + drawn + 3 per meld, bonus tiles excluded"""
        concealed = int(self._counts[:NUM_TILE_KINDS].sum())
        drawn = 1 if self._drawn is not None else 0
        return concealed + drawn + 3 * len(self._melds)

    @property
    def is_concealed(self) -> bool:
        """No open melds (concealed kongs are allowed)"""
        return all(m.is_concealed for m in self._melds)

    @property
    def flower_count(self) -> int:
        return int(self._counts[FLOWER_START:JOKER_INDEX].sum())

    @property
    def red_five_count(self) -> int:
        in_melds = sum(1 for m in self._melds for t in m.tiles if t.is_red)
        drawn = 1 if self._drawn is not None and self._drawn.is_red else 0
        return int(self._reds.sum()) + in_melds + drawn

    def count(self, tile: Tile) -> int:
        """Concealed copies of a tile, drawn tile included"""
        n = int(self._counts[tile.tile_index])
        if self._drawn is not None and self._drawn == tile:
            n += 1
        return n

    def concealed_counts(self) -> np.ndarray:
        """34-element counts of concealed tiles plus the drawn tile"""
        counts = self._counts[:NUM_TILE_KINDS].copy()
        if self._drawn is not None:
            counts[self._drawn.tile_index] += 1
        return counts

    def counts_with_melds(self) -> np.ndarray:
        """34-element counts over every tile the hand owns (kongs count 4)"""
        counts = self.concealed_counts()
        for meld in self._melds:
            counts += meld.to_count_array()
        return counts

    def concealed_tiles(self) -> List[Tile]:
        """Sorted concealed tiles, excluding the drawn tile and bonus tiles"""
        tiles = []
        for idx in range(NUM_TILE_KINDS):
            n = int(self._counts[idx])
            reds = int(self._reds[idx])
            for i in range(n):
                tiles.append(Tile.from_index(idx, is_red=i < reds))
        return tiles

    def tiles(self) -> List[Tile]:
        """Concealed tiles followed by the drawn tile"""
        tiles = self.concealed_tiles()
        if self._drawn is not None:
            tiles.append(self._drawn)
        return tiles

    def bonus_tiles(self) -> List[Tile]:
        tiles = []
        for idx in range(FLOWER_START, NUM_ALL_KINDS):
            tiles.extend([Tile.from_index(idx)] * int(self._counts[idx]))
        return tiles

    def require_size(self, *sizes: int) -> None:
        """Raise HandSizeError unless tile_count is one of sizes"""
        if self.tile_count not in sizes:
            raise HandSizeError(sizes, self.tile_count)

    def copy(self) -> 'Hand':
        clone = Hand.__new__(Hand)
        clone._counts = self._counts.copy()
        clone._reds = self._reds.copy()
        clone._melds = list(self._melds)
        clone._drawn = self._drawn
        return clone

    def _check_supply(self, tile: Tile, adding: int) -> None:
        idx = tile.tile_index
        if tile.is_flower:
            limit = 1
        elif idx == JOKER_INDEX:
            limit = 2 * COPIES_PER_TYPE
        else:
            limit = COPIES_PER_TYPE
        held = int(self._counts[idx])
        if idx < NUM_TILE_KINDS:
            held = int(self.counts_with_melds()[idx])
        if held + adding > limit:
            raise TileCountError(f"At most {limit} copies of {tile} exist, hand would hold {held + adding}")

    def __len__(self) -> int:
        return self.tile_count

    def __repr__(self) -> str:
        return f"Hand({self.tile_count} tiles, {len(self._melds)} melds)"

    def __str__(self) -> str:
        parts = [" ".join(str(t) for t in self.concealed_tiles())]
        if self._drawn is not None:
            parts.append(f"+ {self._drawn}")
        parts.extend(str(m) for m in self._melds)
        if self.bonus_tiles():
            parts.append("(" + " ".join(str(t) for t in self.bonus_tiles()) + ")")
        return " ".join(parts)
