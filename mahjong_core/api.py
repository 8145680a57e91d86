"""
Entry points used by game drivers and agents.

    from mahjong_core.api import shanten, is_complete, legal_melds_with, score, best_discard
"""

from typing import List, Optional, Tuple
import numpy as np

from .context import WinContext
from .efficiency import DiscardMetrics, EfficiencyAnalyzer
from .hand import Hand
from .meld import MeldCandidate, find_quad_completions, find_run_completions, find_triple_completions
from .scoring import ScoreResult, ScoringEngine
from .shanten import ShantenCalculator, ShantenResult
from .tiles import Tile, NUM_TILE_KINDS
from .win_shapes import WinPolicy
from . import win_shapes


def shanten(hand: Hand, visible: Optional[np.ndarray] = None,
            policy: Optional[WinPolicy] = None) -> ShantenResult:
    """
    Distance to a winning shape, with waits for a 13-tile tenpai hand.

    Args:
        hand: Hand holding 13 or 14 tiles
        visible: 34-element counts of copies seen outside the hand
        policy: Shape families to consider
    """
    hand.require_size(13, 14)
    seen = np.zeros(NUM_TILE_KINDS, dtype=np.int8)
    for meld in hand.melds:
        seen += meld.to_count_array()
    if visible is not None:
        seen += np.asarray(visible, dtype=np.int8)[:NUM_TILE_KINDS]
    return ShantenCalculator(policy).calculate(hand.concealed_counts(), hand.num_melds, seen)


def is_complete(hand: Hand, policy: Optional[WinPolicy] = None) -> bool:
    return win_shapes.is_complete(hand, policy)


def legal_melds_with(hand: Hand, tile: Tile) -> List[MeldCandidate]:
    """Every chow, pong and kong the hand could claim with a discarded tile"""
    return (find_run_completions(hand, tile)
            + find_triple_completions(hand, tile)
            + find_quad_completions(hand, tile))


def score(hand: Hand, context: WinContext, variant) -> Optional[ScoreResult]:
    """Score a complete hand; None when it cannot win under the variant"""
    return ScoringEngine().score(hand, context, variant)


def best_discard(hand: Hand, visible: Optional[np.ndarray] = None) -> Tuple[Tile, DiscardMetrics]:
    return EfficiencyAnalyzer().best_discard(hand, visible)
