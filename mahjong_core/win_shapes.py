"""
Winning shape detection.

Enumerates every way a 14-tile hand can be read as a winning shape:
4 groups + 1 pair, seven pairs or thirteen orphans. Scoring needs all
of them, since the same tiles can score differently depending on how
they are grouped and where the winning tile sits.
"""

from enum import IntEnum
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple

from .meld import KongType, Meld, MeldType
from .tiles import Tile, NUM_TILE_KINDS, HONOR_START, TERMINAL_AND_HONOR_INDICES


class ShapeFamily(IntEnum):
    """Winning shape families"""
    STANDARD = 0          # 4 groups + 1 pair
    SEVEN_PAIRS = 1       # 七对
    THIRTEEN_ORPHANS = 2  # 十三幺


class WaitType(IntEnum):
    """Where the winning tile landed"""
    TWO_SIDED = 0       # 两面
    CLOSED = 1          # 嵌张
    EDGE = 2            # 边张
    SINGLE = 3          # 单钓
    DUAL_PUNG = 4       # 双碰
    THIRTEEN_SIDED = 5  # 十三面


@dataclass(frozen=True)
class WinPolicy:
    """
    Which shapes a rule variant accepts.

    Attributes:
        allow_seven_pairs: Seven pairs is a winning shape
        allow_duplicate_pairs: Four copies count as two of the seven pairs
        allow_thirteen_orphans: Thirteen orphans is a winning shape
    """
    allow_seven_pairs: bool = True
    allow_duplicate_pairs: bool = False
    allow_thirteen_orphans: bool = True


@dataclass(frozen=True)
class Block:
    """
    One group of a decomposed hand.

    Attributes:
        meld_type: Chow, Pong or Kong
        tile_index: Lowest tile of the group
        concealed: False for declared open melds and for a pong finished
            with a discard
        declared: Came from a declared meld rather than the concealed tiles
        kong_type: Set for kongs
    """
    meld_type: MeldType
    tile_index: int
    concealed: bool = True
    declared: bool = False
    kong_type: Optional[KongType] = None

    @classmethod
    def from_meld(cls, meld: Meld) -> 'Block':
        return cls(meld.meld_type, meld.tile_index, meld.is_concealed, True, meld.kong_type)

    @property
    def is_chow(self) -> bool:
        return self.meld_type == MeldType.CHOW

    @property
    def is_pung(self) -> bool:
        """Pongs and kongs"""
        return self.meld_type != MeldType.CHOW

    @property
    def is_kong(self) -> bool:
        return self.meld_type == MeldType.KONG

    @property
    def indices(self) -> Tuple[int, ...]:
        if self.is_chow:
            return (self.tile_index, self.tile_index + 1, self.tile_index + 2)
        return (self.tile_index,) * (4 if self.is_kong else 3)

    @property
    def base_tile(self) -> Tile:
        return Tile.from_index(self.tile_index)

    @property
    def tiles(self) -> List[Tile]:
        return [Tile.from_index(i) for i in self.indices]

    def contains(self, tile_index: int) -> bool:
        return tile_index in self.indices


@dataclass(frozen=True)
class HandShape:
    """
    One interpretation of a complete hand.

    Attributes:
        family: Shape family
        blocks: Declared melds first, then concealed groups
        pair: Pair tile index (standard form and thirteen orphans)
        pairs: Pair tile indices for seven pairs
        wait: How the winning tile completed the hand, once known
        winning_block: Index into blocks of the group the winning tile
            completed; None when it completed the pair
    """
    family: ShapeFamily
    blocks: Tuple[Block, ...] = ()
    pair: Optional[int] = None
    pairs: Tuple[int, ...] = ()
    wait: Optional[WaitType] = None
    winning_block: Optional[int] = None

    @property
    def chows(self) -> List[Block]:
        return [b for b in self.blocks if b.is_chow]

    @property
    def pungs(self) -> List[Block]:
        """Pongs and kongs"""
        return [b for b in self.blocks if b.is_pung]

    @property
    def kongs(self) -> List[Block]:
        return [b for b in self.blocks if b.is_kong]


def _groups(counts: List[int], needed: int) -> Iterator[Tuple[Block, ...]]:
    """Yield every split of counts into exactly `needed` groups"""
    first = next((i for i in range(NUM_TILE_KINDS) if counts[i]), None)
    if first is None:
        if needed == 0:
            yield ()
        return
    if needed == 0:
        return

    # Try Pong (triplet)
    if counts[first] >= 3:
        counts[first] -= 3
        for rest in _groups(counts, needed - 1):
            yield (Block(MeldType.PONG, first),) + rest
        counts[first] += 3

    # Try Chow - numbered suits, starting at 1-7
    if first < HONOR_START and first % 9 <= 6 and counts[first + 1] and counts[first + 2]:
        for i in (first, first + 1, first + 2):
            counts[i] -= 1
        for rest in _groups(counts, needed - 1):
            yield (Block(MeldType.CHOW, first),) + rest
        for i in (first, first + 1, first + 2):
            counts[i] += 1


def decompose_standard(counts, sets_needed: int) -> List[Tuple[Tuple[Block, ...], int]]:
    """
    All (groups, pair) decompositions of concealed tile counts.

    Args:
        counts: 34-element array of concealed tile counts
        sets_needed: Groups the concealed tiles must supply (4 - melds)
    """
    work = [int(c) for c in counts[:NUM_TILE_KINDS]]
    results = []
    for head in range(NUM_TILE_KINDS):
        if work[head] >= 2:
            work[head] -= 2
            for blocks in _groups(work, sets_needed):
                results.append((blocks, head))
            work[head] += 2
    return results


def is_seven_pairs(counts, allow_duplicate_pairs: bool = False) -> bool:
    counts = [int(c) for c in counts[:NUM_TILE_KINDS]]
    if sum(counts) != 14 or any(c % 2 for c in counts):
        return False
    return allow_duplicate_pairs or all(c in (0, 2) for c in counts)


def is_thirteen_orphans(counts) -> bool:
    counts = [int(c) for c in counts[:NUM_TILE_KINDS]]
    if sum(counts) != 14:
        return False
    return all(counts[i] >= 1 for i in TERMINAL_AND_HONOR_INDICES) and \
        sum(counts[i] for i in TERMINAL_AND_HONOR_INDICES) == 14


def find_shapes(hand, policy: Optional[WinPolicy] = None) -> List[HandShape]:
    """
    Every winning interpretation of a hand. Empty when it is not complete.
    Bonus tiles are ignored.
    """
    policy = policy or WinPolicy()
    counts = hand.concealed_counts()
    if int(counts.sum()) + 3 * hand.num_melds != 14:
        return []

    declared = tuple(Block.from_meld(m) for m in hand.melds)
    shapes = [
        HandShape(ShapeFamily.STANDARD, declared + blocks, pair=head)
        for blocks, head in decompose_standard(counts, 4 - hand.num_melds)
    ]

    if hand.num_melds == 0:
        if policy.allow_seven_pairs and is_seven_pairs(counts, policy.allow_duplicate_pairs):
            pairs = []
            for idx in range(NUM_TILE_KINDS):
                pairs.extend([idx] * (int(counts[idx]) // 2))
            shapes.append(HandShape(ShapeFamily.SEVEN_PAIRS, pairs=tuple(pairs)))
        if policy.allow_thirteen_orphans and is_thirteen_orphans(counts):
            pair = next(i for i in TERMINAL_AND_HONOR_INDICES if counts[i] == 2)
            shapes.append(HandShape(ShapeFamily.THIRTEEN_ORPHANS, pair=pair))

    return shapes


def is_complete(hand, policy: Optional[WinPolicy] = None) -> bool:
    """Check a 14-tile hand forms a winning shape"""
    hand.require_size(14)
    return bool(find_shapes(hand, policy))


def _chow_wait(block: Block, tile_index: int) -> WaitType:
    position = tile_index - block.tile_index
    start_value = block.tile_index % 9 + 1
    if position == 1:
        return WaitType.CLOSED
    if position == 0:
        return WaitType.EDGE if start_value == 7 else WaitType.TWO_SIDED
    return WaitType.EDGE if start_value == 1 else WaitType.TWO_SIDED


def expand_waits(shape: HandShape, winning_tile: Tile, self_drawn: bool) -> List[HandShape]:
    """
    Re-label a shape with each place the winning tile can occupy.

    A pong completed by a discard is no longer concealed. Declared melds
    are never candidates.
    """
    idx = winning_tile.tile_index

    if shape.family == ShapeFamily.SEVEN_PAIRS:
        return [replace(shape, wait=WaitType.SINGLE)]
    if shape.family == ShapeFamily.THIRTEEN_ORPHANS:
        wait = WaitType.THIRTEEN_SIDED if shape.pair == idx else WaitType.SINGLE
        return [replace(shape, wait=wait)]

    results = []
    if shape.pair == idx:
        results.append(replace(shape, wait=WaitType.SINGLE, winning_block=None))

    for i, block in enumerate(shape.blocks):
        if block.declared or not block.contains(idx):
            continue
        if block.is_chow:
            wait = _chow_wait(block, idx)
        else:
            wait = WaitType.DUAL_PUNG
            if not self_drawn:
                block = replace(block, concealed=False)
        blocks = shape.blocks[:i] + (block,) + shape.blocks[i + 1:]
        candidate = replace(shape, blocks=blocks, wait=wait, winning_block=i)
        if not any(c.blocks == candidate.blocks and c.wait == candidate.wait for c in results):
            results.append(candidate)

    return results or [shape]
