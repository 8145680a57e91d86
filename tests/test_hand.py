"""
Tests for the Hand container
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core.errors import HandSizeError, MahjongError, TileCountError, TileNotInHandError
from mahjong_core.hand import Hand
from mahjong_core.meld import Meld, MeldType, KongType
from mahjong_core.tiles import TileSuit, FlowerType, char, bam, dot, flower, red_five, EAST


class TestHand:
    """Test hand bookkeeping"""

    def test_add_remove(self):
        """Test adding and removing tiles"""
        hand = Hand()
        hand.add(char(1))
        hand.add(char(1))
        assert hand.count(char(1)) == 2
        assert len(hand) == 2

        removed = hand.remove(char(1))
        assert removed == char(1)
        assert hand.count(char(1)) == 1

    def test_remove_missing_tile(self):
        """Removing a tile the hand lacks raises"""
        hand = Hand([char(1)])
        with pytest.raises(TileNotInHandError):
            hand.remove(char(2))
        with pytest.raises(ValueError):
            hand.remove(EAST)

    def test_fifth_copy_rejected(self):
        """Only four copies of a tile exist"""
        hand = Hand([bam(7)] * 4)
        with pytest.raises(TileCountError):
            hand.add(bam(7))

    def test_copies_in_melds_count_towards_supply(self):
        """Meld tiles use up copies too"""
        hand = Hand([dot(2)], melds=[Meld(MeldType.PONG, (dot(2),) * 3)])
        with pytest.raises(TileCountError):
            hand.draw(dot(2))

    def test_kong_counts_as_three(self):
        """A kong takes one group slot"""
        kong = Meld(MeldType.KONG, (EAST,) * 4, kong_type=KongType.CONCEALED)
        tiles = [char(1), char(2), char(3), dot(4), dot(5), dot(6),
                 bam(7), bam(8), bam(9), char(9), char(9)]
        hand = Hand(tiles, melds=[kong])
        assert hand.tile_count == 14
        assert hand.is_concealed
        hand.require_size(14)

    def test_open_meld_breaks_concealment(self):
        """Any open meld opens the hand"""
        hand = Hand(melds=[Meld(MeldType.PONG, (EAST,) * 3)])
        assert not hand.is_concealed

    def test_draw_and_discard(self):
        """Discarding the drawn tile returns it"""
        hand = Hand([char(1), char(2)])
        hand.draw(char(3))
        assert hand.drawn_tile == char(3)
        assert hand.tile_count == 3
        assert hand.discard(char(3)) == char(3)
        assert hand.drawn_tile is None
        assert hand.tile_count == 2

    def test_discard_keeps_drawn_tile(self):
        """Discarding from the hand moves the drawn tile in"""
        hand = Hand([char(1), char(2)])
        hand.draw(char(3))
        hand.discard(char(1))
        assert hand.drawn_tile is None
        assert hand.count(char(3)) == 1
        assert hand.count(char(1)) == 0

    def test_draw_twice(self):
        """Only one drawn tile at a time"""
        hand = Hand(drawn_tile=char(1))
        with pytest.raises(MahjongError):
            hand.draw(char(2))

    def test_flowers_set_aside(self):
        """Bonus tiles never count towards hand size"""
        hand = Hand([char(1)])
        hand.draw(flower(FlowerType.PLUM))
        assert hand.flower_count == 1
        assert hand.drawn_tile is None
        assert hand.tile_count == 1
        assert hand.bonus_tiles() == [flower(FlowerType.PLUM)]

    def test_red_five_kept_on_remove(self):
        """A plain five is removed before the red one"""
        hand = Hand([red_five(TileSuit.DOTS), dot(5)])
        assert hand.red_five_count == 1
        first = hand.remove(dot(5))
        assert not first.is_red
        assert hand.red_five_count == 1
        second = hand.remove(dot(5))
        assert second.is_red
        assert hand.red_five_count == 0

    def test_require_size(self):
        """Wrong sizes raise HandSizeError with both numbers"""
        hand = Hand([char(1)] * 3)
        with pytest.raises(HandSizeError) as exc:
            hand.require_size(13, 14)
        assert exc.value.expected == (13, 14)
        assert exc.value.actual == 3

    def test_copy_is_independent(self):
        """Changing a copy leaves the original alone"""
        hand = Hand([char(1), char(2)], drawn_tile=char(3))
        clone = hand.copy()
        clone.discard(char(1))
        clone.add(dot(9))
        assert hand.count(char(1)) == 1
        assert hand.count(dot(9)) == 0
        assert hand.drawn_tile == char(3)

    def test_concealed_counts_include_drawn(self):
        """The drawn tile shows up in counts but not in concealed_tiles"""
        hand = Hand([char(1)], drawn_tile=char(1))
        assert hand.concealed_counts()[0] == 2
        assert hand.concealed_tiles() == [char(1)]
        assert hand.tiles() == [char(1), char(1)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
