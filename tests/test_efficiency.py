"""
Tests for discard efficiency
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core import api
from mahjong_core.efficiency import EfficiencyAnalyzer
from mahjong_core.errors import HandSizeError
from mahjong_core.notation import parse_hand
from mahjong_core.tiles import bam, NORTH


class TestEfficiency:
    """Test ranking discards"""

    HAND = "123m456m789m11p46s +4z"

    def test_best_discard(self):
        """Dropping the isolated honor leaves a ready hand"""
        tile, metrics = api.best_discard(parse_hand(self.HAND))
        assert tile == NORTH
        assert metrics.shanten == 0
        assert metrics.useful_tiles == [(bam(5), 4)]
        assert metrics.useful_kinds == 1
        assert metrics.useful_count == 4

    def test_unique_best(self):
        """Every other discard leaves the hand further from ready"""
        ranking = EfficiencyAnalyzer().rank_discards(parse_hand(self.HAND))
        assert ranking[0].tile == NORTH
        assert all(m.shanten > 0 for m in ranking[1:])
        assert len(ranking) == len({m.tile for m in ranking})

    def test_visible_copies(self):
        """Seen copies lower the useful count"""
        visible = np.zeros(34, dtype=np.int8)
        visible[bam(5).tile_index] = 3
        _, metrics = api.best_discard(parse_hand(self.HAND), visible)
        assert metrics.useful_count == 1

    def test_hand_untouched(self):
        """Trying discards leaves the hand as it was"""
        hand = parse_hand(self.HAND)
        EfficiencyAnalyzer().rank_discards(hand)
        assert hand.tile_count == 14
        assert hand.drawn_tile == NORTH

    def test_needs_fourteen_tiles(self):
        """A hand waiting for its draw cannot discard"""
        with pytest.raises(HandSizeError):
            api.best_discard(parse_hand("123m456m789m11p46s"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
