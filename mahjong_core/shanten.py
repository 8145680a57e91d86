"""
Shanten Calculator

Calculates the shanten number (distance to a winning shape) for a hand
and the tiles it is waiting on.

Shanten values:
- -1: Complete hand
-  0: Tenpai (one tile away from winning)
-  1: One exchange away from tenpai
-  2+: Further away

Three shape families are measured separately and the minimum wins:
- Standard form (4 groups + 1 pair), declared melds count as groups
- Seven pairs
- Thirteen orphans
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, FrozenSet, List, Optional, Set, Tuple
import numpy as np

from .tiles import Tile, NUM_TILE_KINDS, COPIES_PER_TYPE, TERMINAL_AND_HONOR_INDICES
from .win_shapes import ShapeFamily, WinPolicy


# Distance reported for a family the hand can never reach
SHANTEN_IMPOSSIBLE = 99

# (start, end, runs allowed) for each suit of the count table
_SECTIONS = ((0, 9, True), (9, 18, True), (18, 27, True), (27, 34, False))


@dataclass
class ShantenResult:
    """
    Result of shanten calculation.

    waits is only filled for a 13-tile tenpai hand: each winning tile
    with the number of copies still unseen.
    """
    shanten: int
    families: Dict[ShapeFamily, int]
    waits: List[Tuple[Tile, int]] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.shanten == -1

    @property
    def is_tenpai(self) -> bool:
        return self.shanten == 0

    @property
    def wait_kinds(self) -> int:
        return len(self.waits)

    @property
    def wait_count(self) -> int:
        return sum(n for _, n in self.waits)

    def family(self, family: ShapeFamily) -> int:
        return self.families.get(family, SHANTEN_IMPOSSIBLE)


def _pareto(points: Set[Tuple[int, int]]) -> FrozenSet[Tuple[int, int]]:
    """Drop (groups, partials) pairs dominated by another pair"""
    return frozenset(
        p for p in points
        if not any(q != p and q[0] >= p[0] and q[1] >= p[1] for q in points)
    )


@lru_cache(maxsize=None)
def _group_frontier(counts: Tuple[int, ...], runs: bool) -> FrozenSet[Tuple[int, int]]:
    """
    All useful (groups, partials) splits of a single suit.

    The lowest tile present either starts a triplet, a run, a pair, a
    two-tile partial run, or is left isolated; every branch is tried
    and undone, so the search is exhaustive. Results only depend on
    the count vector and are cached.
    """
    first = next((i for i, c in enumerate(counts) if c), None)
    if first is None:
        return frozenset({(0, 0)})

    work = list(counts)
    size = len(work)
    found = set()

    def explore(indices, groups, partials):
        for i in indices:
            work[i] -= 1
        for g, p in _group_frontier(tuple(work), runs):
            found.add((g + groups, p + partials))
        for i in indices:
            work[i] += 1

    if work[first] >= 3:
        explore((first, first, first), 1, 0)
    if runs and first + 2 < size and work[first + 1] and work[first + 2]:
        explore((first, first + 1, first + 2), 1, 0)
    if work[first] >= 2:
        explore((first, first), 0, 1)
    if runs and first + 1 < size and work[first + 1]:
        explore((first, first + 1), 0, 1)
    if runs and first + 2 < size and work[first + 2]:
        explore((first, first + 2), 0, 1)
    explore((first,), 0, 0)

    return _pareto(found)


class ShantenCalculator:
    """
    Shanten calculator over 34-element count arrays.

    Args:
        policy: Which shape families count as a win, and whether four
            copies make two pairs in seven pairs
    """

    def __init__(self, policy: Optional[WinPolicy] = None):
        self.policy = policy or WinPolicy()

    def calculate(self, hand_counts: np.ndarray, num_melds: int = 0,
                  visible: Optional[np.ndarray] = None) -> ShantenResult:
        """
        Calculate shanten for a hand.

        Args:
            hand_counts: 34-element array of concealed tile counts
            num_melds: Number of declared melds
            visible: 34-element array of copies seen outside the concealed
                tiles (own melds, discards, indicators)

        Returns:
            ShantenResult with the minimum distance, per-family distances
            and, for a 13-tile tenpai hand, the waits
        """
        counts = np.asarray(hand_counts, dtype=np.int8)[:NUM_TILE_KINDS].copy()
        families = self._families(counts, num_melds)
        best = min(families.values())

        waits = []
        if best == 0 and (int(counts.sum()) + 3 * num_melds) % 3 == 1:
            waits = [
                (Tile.from_index(idx), remaining)
                for idx, remaining in self.completing_tiles(counts, num_melds, visible)
            ]

        return ShantenResult(shanten=best, families=families, waits=waits)

    def minimum(self, hand_counts: np.ndarray, num_melds: int = 0) -> int:
        """Best distance over the allowed families"""
        return min(self._families(hand_counts, num_melds).values())

    def _families(self, counts: np.ndarray, num_melds: int) -> Dict[ShapeFamily, int]:
        families = {ShapeFamily.STANDARD: self.standard(counts, num_melds)}
        if self.policy.allow_seven_pairs:
            families[ShapeFamily.SEVEN_PAIRS] = self.seven_pairs(counts, num_melds)
        if self.policy.allow_thirteen_orphans:
            families[ShapeFamily.THIRTEEN_ORPHANS] = self.thirteen_orphans(counts, num_melds)
        return families

    def standard(self, counts: np.ndarray, num_melds: int = 0) -> int:
        """
        Standard form shanten (4 groups + 1 pair).

        8 - 2*groups - partials - head, where groups + partials may not
        exceed 4. Every tile kind is tried as the head.
        """
        counts = [int(c) for c in counts[:NUM_TILE_KINDS]]
        best = self._standard_with(counts, num_melds, 0)
        for i in range(NUM_TILE_KINDS):
            if counts[i] >= 2:
                counts[i] -= 2
                best = min(best, self._standard_with(counts, num_melds, 1))
                counts[i] += 2
        return best

    @staticmethod
    def _standard_with(counts: List[int], num_melds: int, head: int) -> int:
        combos = {(0, 0)}
        for start, end, runs in _SECTIONS:
            frontier = _group_frontier(tuple(counts[start:end]), runs)
            combos = _pareto({(g1 + g2, p1 + p2) for g1, p1 in combos for g2, p2 in frontier})

        best = 8
        for groups, partials in combos:
            groups = min(groups + num_melds, 4)
            partials = min(partials, 4 - groups)
            best = min(best, 8 - 2 * groups - partials - head)
        return best

    def seven_pairs(self, counts: np.ndarray, num_melds: int = 0) -> int:
        """
        Seven pairs shanten: 6 - pairs.

        A kind held three or four times is one pair unless the policy
        allows duplicate pairs, in which case four copies are two. With
        fewer than seven kinds the missing kinds still have to be drawn.
        """
        if num_melds:
            return SHANTEN_IMPOSSIBLE
        counts = counts[:NUM_TILE_KINDS]
        if self.policy.allow_duplicate_pairs:
            pairs = int(sum(int(c) // 2 for c in counts))
            return 6 - min(pairs, 7)
        pairs = int(sum(1 for c in counts if c >= 2))
        distinct = int(sum(1 for c in counts if c >= 1))
        return 6 - pairs + max(0, 7 - distinct)

    def thirteen_orphans(self, counts: np.ndarray, num_melds: int = 0) -> int:
        """
        Thirteen orphans shanten: 13 - distinct terminals/honors,
        one less when one of them is paired. Any meld or any simple
        tile rules the shape out.
        """
        if num_melds:
            return SHANTEN_IMPOSSIBLE
        counts = counts[:NUM_TILE_KINDS]
        members = set(TERMINAL_AND_HONOR_INDICES)
        if any(counts[i] for i in range(NUM_TILE_KINDS) if i not in members):
            return SHANTEN_IMPOSSIBLE
        unique = sum(1 for i in TERMINAL_AND_HONOR_INDICES if counts[i] >= 1)
        has_pair = any(counts[i] >= 2 for i in TERMINAL_AND_HONOR_INDICES)
        return 13 - unique - (1 if has_pair else 0)

    def completing_tiles(self, counts: np.ndarray, num_melds: int = 0,
                         visible: Optional[np.ndarray] = None) -> List[Tuple[int, int]]:
        """Tiles that complete the hand, as (tile index, copies left)"""
        return self._accepting(counts, num_melds, visible, target=-1)

    def improving_tiles(self, counts: np.ndarray, num_melds: int = 0,
                        visible: Optional[np.ndarray] = None) -> List[Tuple[int, int]]:
        """
        Tiles that lower the shanten (ukeire), as (tile index, copies left).
        For a tenpai hand this is the same as completing_tiles.
        """
        current = self.minimum(counts, num_melds)
        return self._accepting(counts, num_melds, visible, target=current - 1)

    def _accepting(self, counts: np.ndarray, num_melds: int,
                   visible: Optional[np.ndarray], target: int) -> List[Tuple[int, int]]:
        counts = np.asarray(counts, dtype=np.int8)[:NUM_TILE_KINDS].copy()
        seen = np.zeros(NUM_TILE_KINDS, dtype=np.int8)
        if visible is not None:
            seen += np.asarray(visible, dtype=np.int8)[:NUM_TILE_KINDS]

        accepted = []
        for idx in range(NUM_TILE_KINDS):
            if counts[idx] >= COPIES_PER_TYPE:
                continue
            counts[idx] += 1
            shanten = self.minimum(counts, num_melds)
            counts[idx] -= 1
            if shanten <= target:
                remaining = max(0, COPIES_PER_TYPE - int(counts[idx]) - int(seen[idx]))
                accepted.append((idx, remaining))
        return accepted


def calculate_shanten(hand_counts: np.ndarray, num_melds: int = 0) -> int:
    """
    Convenience function to calculate shanten.

    Args:
        hand_counts: 34-element array of tile counts
        num_melds: Number of declared melds

    Returns:
        Shanten value (-1 to 8)
    """
    return ShantenCalculator().minimum(hand_counts, num_melds)
