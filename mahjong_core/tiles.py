"""
Mahjong Tiles System

Tile identities shared by every rule variant:
- 9 Characters (万), 9 Bamboos (条), 9 Dots (筒), four copies each
- 4 Winds (东南西北) and 3 Dragons (中发白), four copies each
- 8 Flowers (seasons and plants) and the Joker, bonus tiles that never
  take part in hand shapes

Each identity has a dense ordinal (tile_index) used to address the
count tables the shanten and scoring code work on:
  0-8 characters, 9-17 bamboos, 18-26 dots, 27-30 winds,
  31-33 dragons, 34-41 flowers, 42 joker
"""

from enum import IntEnum
from dataclasses import dataclass, field
from typing import Iterable, List
import numpy as np

from .errors import InvalidTileError


# Identities that can form groups and pairs
NUM_TILE_KINDS = 34
# Every identity including bonus tiles
NUM_ALL_KINDS = 43
COPIES_PER_TYPE = 4

HONOR_START = 27
FLOWER_START = 34
JOKER_INDEX = 42


class TileSuit(IntEnum):
    """Tile suits"""
    CHARACTERS = 0  # 万 (Wan) - Numbers 1-9
    BAMBOOS = 1     # 条 (Tiao) - Numbers 1-9
    DOTS = 2        # 筒 (Tong) - Numbers 1-9
    WINDS = 3       # 风 (Feng) - East, South, West, North
    DRAGONS = 4     # 箭 (Jian) - Red, Green, White
    FLOWERS = 5     # 花 (Hua) - Seasons and plants
    JOKER = 6       # 百搭 (Baida)


NUMBERED_SUITS = (TileSuit.CHARACTERS, TileSuit.BAMBOOS, TileSuit.DOTS)

_SUIT_LIMITS = {
    TileSuit.CHARACTERS: (1, 9),
    TileSuit.BAMBOOS: (1, 9),
    TileSuit.DOTS: (1, 9),
    TileSuit.WINDS: (0, 3),
    TileSuit.DRAGONS: (0, 2),
    TileSuit.FLOWERS: (0, 7),
    TileSuit.JOKER: (0, 0),
}


class WindType(IntEnum):
    """Wind tile types"""
    EAST = 0   # 东
    SOUTH = 1  # 南
    WEST = 2   # 西
    NORTH = 3  # 北


class DragonType(IntEnum):
    """Dragon tile types"""
    RED = 0    # 中 (Zhong)
    GREEN = 1  # 发 (Fa)
    WHITE = 2  # 白 (Bai)


class FlowerType(IntEnum):
    """Bonus flower tiles. Value % 4 is the seat the flower belongs to."""
    SPRING = 0
    SUMMER = 1
    AUTUMN = 2
    WINTER = 3
    PLUM = 4
    ORCHID = 5
    CHRYSANTHEMUM = 6
    BAMBOO = 7


@dataclass(frozen=True)
class Tile:
    """
    Represents a single tile identity.

    Attributes:
        suit: The suit of the tile
        value: 1-9 for numbered suits, 0-3 winds, 0-2 dragons, 0-7 flowers
        is_red: Marks the promotional red copy of a rank-5 tile. It is a
            scoring bonus only and is ignored by equality and hashing.
    """
    suit: TileSuit
    value: int
    is_red: bool = field(default=False, compare=False)

    def __post_init__(self):
        """Validate tile values"""
        try:
            suit = TileSuit(self.suit)
        except ValueError:
            raise InvalidTileError(f"Unknown suit: {self.suit!r}") from None
        low, high = _SUIT_LIMITS[suit]
        if not isinstance(self.value, (int, np.integer)) or not low <= self.value <= high:
            raise InvalidTileError(
                f"{suit.name.title()} tiles must have value {low}-{high}, got {self.value!r}"
            )
        if self.is_red and not (suit in NUMBERED_SUITS and self.value == 5):
            raise InvalidTileError(f"Only rank-5 tiles have red copies, got {suit.name} {self.value}")
        # normalise ints and sub-enums passed by callers
        object.__setattr__(self, 'suit', suit)
        object.__setattr__(self, 'value', int(self.value))

    @property
    def is_numbered(self) -> bool:
        return self.suit in NUMBERED_SUITS

    @property
    def is_honor(self) -> bool:
        """Check if tile is an honor tile (Wind or Dragon)"""
        return self.suit in (TileSuit.WINDS, TileSuit.DRAGONS)

    @property
    def is_flower(self) -> bool:
        return self.suit == TileSuit.FLOWERS

    @property
    def is_joker(self) -> bool:
        return self.suit == TileSuit.JOKER

    @property
    def is_bonus(self) -> bool:
        """Flowers and jokers sit beside the hand and never form shapes"""
        return self.suit in (TileSuit.FLOWERS, TileSuit.JOKER)

    @property
    def is_terminal(self) -> bool:
        """Check if tile is a terminal (1 or 9 of numbered suits)"""
        return self.is_numbered and self.value in (1, 9)

    @property
    def is_terminal_or_honor(self) -> bool:
        return self.is_terminal or self.is_honor

    @property
    def is_simple(self) -> bool:
        """Check if tile is a simple (2-8 of numbered suits)"""
        return self.is_numbered and 2 <= self.value <= 8

    @property
    def is_green(self) -> bool:
        """Check if tile is a green tile (for All Green pattern)"""
        if self.suit == TileSuit.BAMBOOS:
            return self.value in (2, 3, 4, 6, 8)
        if self.suit == TileSuit.DRAGONS:
            return self.value == DragonType.GREEN
        return False

    @property
    def tile_index(self) -> int:
        """Dense ordinal of this identity (0-42)"""
        if self.suit in NUMBERED_SUITS:
            return 9 * int(self.suit) + self.value - 1
        elif self.suit == TileSuit.WINDS:
            return 27 + self.value
        elif self.suit == TileSuit.DRAGONS:
            return 31 + self.value
        elif self.suit == TileSuit.FLOWERS:
            return FLOWER_START + self.value
        return JOKER_INDEX

    def __eq__(self, other) -> bool:
        """Two tiles are equal if they have same suit and value (red flag ignored)"""
        if not isinstance(other, Tile):
            return False
        return self.suit == other.suit and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.suit, self.value))

    def __lt__(self, other) -> bool:
        """Comparison for sorting"""
        if not isinstance(other, Tile):
            return NotImplemented
        return self.tile_index < other.tile_index

    def __repr__(self) -> str:
        red = ", red" if self.is_red else ""
        return f"Tile({self.suit.name}, {self.value}{red})"

    def __str__(self) -> str:
        """Human-readable string representation"""
        if self.suit == TileSuit.CHARACTERS:
            return f"{self.value}万"
        elif self.suit == TileSuit.BAMBOOS:
            return f"{self.value}条"
        elif self.suit == TileSuit.DOTS:
            return f"{self.value}筒"
        elif self.suit == TileSuit.WINDS:
            return _WIND_NAMES[self.value]
        elif self.suit == TileSuit.DRAGONS:
            return _DRAGON_NAMES[self.value]
        elif self.suit == TileSuit.FLOWERS:
            return _FLOWER_NAMES[self.value]
        return "百搭"

    @classmethod
    def from_index(cls, tile_index: int, is_red: bool = False) -> 'Tile':
        """Create a tile from its ordinal (0-42)"""
        tile_index = int(tile_index)
        if not 0 <= tile_index < NUM_ALL_KINDS:
            raise InvalidTileError(f"Tile index out of range: {tile_index}")
        if tile_index < HONOR_START:
            return cls(TileSuit(tile_index // 9), tile_index % 9 + 1, is_red)
        elif tile_index < 31:
            return cls(TileSuit.WINDS, tile_index - 27)
        elif tile_index < FLOWER_START:
            return cls(TileSuit.DRAGONS, tile_index - 31)
        elif tile_index < JOKER_INDEX:
            return cls(TileSuit.FLOWERS, tile_index - FLOWER_START)
        return cls(TileSuit.JOKER, 0)

    @classmethod
    def from_string(cls, s: str) -> 'Tile':
        """
        Create tile from its glyph name.

        Args:
            s: String like "1万", "9条", "东", "中", "春", "百搭"
        """
        s = s.strip()

        if len(s) == 2 and s[0].isdigit():
            value = int(s[0])
            suit_char = s[1]
            if suit_char == '万':
                return cls(TileSuit.CHARACTERS, value)
            elif suit_char == '条':
                return cls(TileSuit.BAMBOOS, value)
            elif suit_char == '筒':
                return cls(TileSuit.DOTS, value)

        if s in _WIND_NAMES:
            return cls(TileSuit.WINDS, _WIND_NAMES.index(s))
        elif s in _DRAGON_NAMES:
            return cls(TileSuit.DRAGONS, _DRAGON_NAMES.index(s))
        elif s in _FLOWER_NAMES:
            return cls(TileSuit.FLOWERS, _FLOWER_NAMES.index(s))
        elif s == "百搭":
            return cls(TileSuit.JOKER, 0)

        raise InvalidTileError(f"Cannot parse tile string: {s}")


_WIND_NAMES = ["东", "南", "西", "北"]
_DRAGON_NAMES = ["中", "发", "白"]
_FLOWER_NAMES = ["春", "夏", "秋", "冬", "梅", "兰", "菊", "竹"]

# 1/9 of each suit plus all honors
TERMINAL_AND_HONOR_INDICES = (0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33)


def tiles_to_counts(tiles: Iterable[Tile], size: int = NUM_TILE_KINDS) -> np.ndarray:
    """
    Count tiles per identity.
    Bonus tiles are skipped unless size covers them.
    """
    counts = np.zeros(size, dtype=np.int8)
    for tile in tiles:
        idx = tile.tile_index
        if idx < size:
            counts[idx] += 1
    return counts


def counts_to_tiles(counts) -> List[Tile]:
    """Expand a count table back into a sorted tile list"""
    tiles = []
    for idx, n in enumerate(counts):
        tiles.extend([Tile.from_index(idx)] * int(n))
    return tiles


# Convenience functions for creating specific tiles
def char(value: int) -> Tile:
    """Create a Characters tile (1-9万)"""
    return Tile(TileSuit.CHARACTERS, value)

def bam(value: int) -> Tile:
    """Create a Bamboos tile (1-9条)"""
    return Tile(TileSuit.BAMBOOS, value)

def dot(value: int) -> Tile:
    """Create a Dots tile (1-9筒)"""
    return Tile(TileSuit.DOTS, value)

def wind(wind_type: WindType) -> Tile:
    """Create a Wind tile (东南西北)"""
    return Tile(TileSuit.WINDS, wind_type)

def dragon(dragon_type: DragonType) -> Tile:
    """Create a Dragon tile (中发白)"""
    return Tile(TileSuit.DRAGONS, dragon_type)

def flower(flower_type: FlowerType) -> Tile:
    return Tile(TileSuit.FLOWERS, flower_type)

def red_five(suit: TileSuit) -> Tile:
    """The red copy of a suit's 5"""
    return Tile(suit, 5, is_red=True)


# Named wind tiles
EAST = Tile(TileSuit.WINDS, WindType.EAST)
SOUTH = Tile(TileSuit.WINDS, WindType.SOUTH)
WEST = Tile(TileSuit.WINDS, WindType.WEST)
NORTH = Tile(TileSuit.WINDS, WindType.NORTH)

# Named dragon tiles
RED_DRAGON = Tile(TileSuit.DRAGONS, DragonType.RED)
GREEN_DRAGON = Tile(TileSuit.DRAGONS, DragonType.GREEN)
WHITE_DRAGON = Tile(TileSuit.DRAGONS, DragonType.WHITE)

JOKER = Tile(TileSuit.JOKER, 0)
