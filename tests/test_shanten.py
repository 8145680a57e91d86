"""
Tests for the shanten calculator
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core import api
from mahjong_core.notation import parse_hand, parse_tiles
from mahjong_core.shanten import ShantenCalculator, SHANTEN_IMPOSSIBLE, calculate_shanten
from mahjong_core.tiles import tiles_to_counts, bam, RED_DRAGON
from mahjong_core.win_shapes import ShapeFamily, WinPolicy


def counts_of(text: str) -> np.ndarray:
    return tiles_to_counts(parse_tiles(text))


class TestStandardForm:
    """Test 4 groups + 1 pair distances"""

    def test_complete_hand(self):
        """Test that complete hands have shanten -1"""
        result = api.shanten(parse_hand("123m456m789m123p1s +1s"))
        assert result.shanten == -1
        assert result.is_complete
        assert result.waits == []

    def test_single_wait(self):
        """Tenpai on the pair tile"""
        result = api.shanten(parse_hand("123m456m789m123p1s"))
        assert result.is_tenpai
        assert result.waits == [(bam(1), 3)]

    def test_two_sided_wait(self):
        """Both ends of a run, four copies each"""
        result = api.shanten(parse_hand("123m456m789m11p45s"))
        assert result.shanten == 0
        assert result.waits == [(bam(3), 4), (bam(6), 4)]
        assert result.wait_kinds == 2
        assert result.wait_count == 8

    def test_declared_melds_count_as_groups(self):
        """Melds fill group slots"""
        result = api.shanten(parse_hand("789p11s45s [123m] [555z]"))
        assert result.shanten == 0
        assert [t for t, _ in result.waits] == [bam(3), bam(6)]

    def test_visible_tiles_reduce_waits(self):
        """Copies seen elsewhere are not available"""
        visible = np.zeros(34, dtype=np.int8)
        visible[bam(3).tile_index] = 2
        result = api.shanten(parse_hand("123m456m789m11p45s"), visible=visible)
        assert result.waits == [(bam(3), 2), (bam(6), 4)]

    def test_scattered_hand(self):
        """No groups and no partials"""
        result = api.shanten(parse_hand("147m147p147s1234z"))
        assert result.family(ShapeFamily.STANDARD) == 8
        assert result.family(ShapeFamily.SEVEN_PAIRS) == 6
        assert result.family(ShapeFamily.THIRTEEN_ORPHANS) == SHANTEN_IMPOSSIBLE
        assert result.shanten == 6

    def test_completing_a_partial_never_hurts(self):
        """Adding the tile a partial run waits for does not raise the distance"""
        calc = ShantenCalculator()
        before = counts_of("13m456p789s11z2468s")
        after = before.copy()
        after[1] += 1
        assert calc.standard(after) <= calc.standard(before)

    def test_remove_and_re_add(self):
        """Taking a tile out and putting it back changes nothing"""
        hand = parse_hand("123m456m789m11p45s")
        first = api.shanten(hand)
        tile = hand.remove(bam(4))
        hand.add(tile)
        second = api.shanten(hand)
        assert first.shanten == second.shanten
        assert first.waits == second.waits

    def test_hand_size_checked(self):
        """Only 13 or 14 tile hands are measured"""
        with pytest.raises(ValueError):
            api.shanten(parse_hand("123m"))

    def test_convenience_function(self):
        """calculate_shanten returns the minimum"""
        assert calculate_shanten(counts_of("123m456m789m123p11s")) == -1


class TestSevenPairs:
    """Test the seven pairs family"""

    def test_seven_pairs_tenpai(self):
        """Six pairs wait on the single"""
        result = api.shanten(parse_hand("1122m3344p5566s7z"))
        assert result.family(ShapeFamily.SEVEN_PAIRS) == 0
        assert result.waits == [(RED_DRAGON, 3)]

    def test_four_copies_are_one_pair(self):
        """By default four of a kind is a single pair"""
        counts = counts_of("1111m2233p4455s6z")
        assert ShantenCalculator().seven_pairs(counts) == 2

    def test_duplicate_pairs_policy(self):
        """With duplicate pairs four of a kind is two pairs"""
        counts = counts_of("1111m2233p4455s6z")
        calc = ShantenCalculator(WinPolicy(allow_duplicate_pairs=True))
        assert calc.seven_pairs(counts) == 0

    def test_impossible_with_meld(self):
        """Seven pairs needs a fully concealed hand"""
        counts = counts_of("1122m3344p5z")
        assert ShantenCalculator().seven_pairs(counts, num_melds=2) == SHANTEN_IMPOSSIBLE

    def test_disabled_by_policy(self):
        """A policy without seven pairs reports only the other families"""
        calc = ShantenCalculator(WinPolicy(allow_seven_pairs=False))
        result = calc.calculate(counts_of("1122m3344p5566s7z"))
        assert ShapeFamily.SEVEN_PAIRS not in result.families
        assert result.shanten > 0


class TestThirteenOrphans:
    """Test the thirteen orphans family"""

    def test_thirteen_sided_wait(self):
        """Thirteen different orphans wait on all of them"""
        result = api.shanten(parse_hand("19m19p19s1234567z"))
        assert result.family(ShapeFamily.THIRTEEN_ORPHANS) == 0
        assert result.wait_kinds == 13
        assert all(n == 3 for _, n in result.waits)

    def test_simple_tile_rules_it_out(self):
        """Any non-orphan tile makes the family impossible"""
        counts = counts_of("19m19p19s123456z5m")
        assert ShantenCalculator().thirteen_orphans(counts) == SHANTEN_IMPOSSIBLE

    def test_impossible_with_meld(self):
        """Thirteen orphans needs a fully concealed hand"""
        counts = counts_of("19m19p19s1234z")
        assert ShantenCalculator().thirteen_orphans(counts, num_melds=1) == SHANTEN_IMPOSSIBLE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
