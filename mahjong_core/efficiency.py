"""
Discard efficiency.

For a hand holding its drawn tile, try every distinct discard and rank
them by the shanten left behind, then by how many tile kinds and how
many unseen copies would improve the hand next.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import numpy as np

from .hand import Hand
from .shanten import ShantenCalculator
from .tiles import Tile, NUM_TILE_KINDS

logger = logging.getLogger(__name__)


@dataclass
class DiscardMetrics:
    """How good the hand is after discarding `tile`"""
    tile: Tile
    shanten: int
    useful_kinds: int
    useful_count: int
    useful_tiles: List[Tuple[Tile, int]] = field(default_factory=list)

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.shanten, -self.useful_kinds, -self.useful_count)


class EfficiencyAnalyzer:
    """
    Ranks discards by tile efficiency.

    Args:
        calculator: Shanten calculator to use; default policy when omitted
    """

    def __init__(self, calculator: Optional[ShantenCalculator] = None):
        self.calculator = calculator or ShantenCalculator()

    def rank_discards(self, hand: Hand, visible: Optional[np.ndarray] = None) -> List[DiscardMetrics]:
        """
        Metrics for each distinct discard, best first.

        Ties keep tile order. The hand itself is not modified.

        Args:
            hand: Hand holding 14 tiles
            visible: 34-element counts of copies seen outside the hand
        """
        hand.require_size(14)
        seen = np.zeros(NUM_TILE_KINDS, dtype=np.int8)
        for meld in hand.melds:
            seen += meld.to_count_array()
        if visible is not None:
            seen += np.asarray(visible, dtype=np.int8)[:NUM_TILE_KINDS]

        counts = hand.concealed_counts()
        ranking = []
        for idx in range(NUM_TILE_KINDS):
            if counts[idx] == 0:
                continue
            trial = hand.copy()
            discarded = trial.discard(Tile.from_index(idx))
            remaining = trial.concealed_counts()
            shanten = self.calculator.minimum(remaining, trial.num_melds)
            useful = self.calculator.improving_tiles(remaining, trial.num_melds, seen)
            ranking.append(DiscardMetrics(
                tile=discarded,
                shanten=shanten,
                useful_kinds=len(useful),
                useful_count=sum(n for _, n in useful),
                useful_tiles=[(Tile.from_index(i), n) for i, n in useful],
            ))

        ranking.sort(key=DiscardMetrics.sort_key)
        if ranking:
            best = ranking[0]
            logger.debug(
                f"Best discard {best.tile}: shanten {best.shanten}, "
                f"{best.useful_kinds} kinds / {best.useful_count} tiles"
            )
        return ranking

    def best_discard(self, hand: Hand, visible: Optional[np.ndarray] = None) -> Tuple[Tile, DiscardMetrics]:
        best = self.rank_discards(hand, visible)[0]
        return best.tile, best
