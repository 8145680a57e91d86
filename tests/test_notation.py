"""
Tests for the compact tile notation
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core.errors import InvalidTileError, InvalidMeldError
from mahjong_core.meld import KongType, MeldType
from mahjong_core.notation import format_hand, format_tiles, parse_hand, parse_meld, parse_tiles
from mahjong_core.tiles import (
    FlowerType, TileSuit, char, dot, flower, red_five,
    EAST, NORTH, WHITE_DRAGON, GREEN_DRAGON, RED_DRAGON,
)


class TestParseTiles:
    """Test reading tile strings"""

    def test_suits(self):
        """Digits take the suit letter that follows them"""
        assert parse_tiles("12m9p") == [char(1), char(2), dot(9)]

    def test_honors(self):
        """1z-4z are winds, 5z-7z dragons"""
        assert parse_tiles("14567z") == [EAST, NORTH, WHITE_DRAGON, GREEN_DRAGON, RED_DRAGON]

    def test_red_five(self):
        """0 is the red five"""
        tiles = parse_tiles("0s")
        assert tiles[0].is_red
        assert tiles[0].suit == TileSuit.BAMBOOS
        assert tiles[0].value == 5

    def test_flowers(self):
        """Nf is the Nth flower"""
        assert parse_tiles("15f") == [flower(FlowerType.SPRING), flower(FlowerType.PLUM)]

    def test_errors(self):
        """Malformed strings raise InvalidTileError"""
        for text in ("8z", "9f", "12", "m", "1x", "0z"):
            with pytest.raises(InvalidTileError):
                parse_tiles(text)


class TestFormat:
    """Test writing tiles back"""

    def test_format_groups_by_suit(self):
        """Output order is m p s z f"""
        tiles = [EAST, dot(3), char(1), red_five(TileSuit.CHARACTERS), char(5)]
        assert format_tiles(tiles) == "105m3p1z"

    def test_format_hand(self):
        """Drawn tile and melds come back in their own tokens"""
        text = "123m456p11z +5s [789s] [6666z!]"
        assert format_hand(parse_hand(text)) == "123m456p11z +5s [789s] [6666z!]"


class TestParseHand:
    """Test reading whole hands"""

    def test_drawn_tile(self):
        """+tile is the drawn tile"""
        hand = parse_hand("123m +4m")
        assert hand.drawn_tile == char(4)
        assert hand.tile_count == 4

    def test_melds(self):
        """Bracketed tokens are declared melds"""
        hand = parse_hand("11p [123m] [555z] [1111z!]")
        kinds = [m.meld_type for m in hand.melds]
        assert kinds == [MeldType.CHOW, MeldType.PONG, MeldType.KONG]
        assert hand.melds[2].kong_type == KongType.CONCEALED
        assert hand.tile_count == 11

    def test_open_kong(self):
        """A kong without the marker is open"""
        assert parse_meld("9999p").kong_type == KongType.OPEN

    def test_bad_meld(self):
        """Melds must be legal"""
        with pytest.raises(InvalidMeldError):
            parse_meld("12m")
        with pytest.raises(InvalidMeldError):
            parse_meld("124m")

    def test_two_drawn_tiles(self):
        """Only one drawn tile"""
        with pytest.raises(InvalidTileError):
            parse_hand("123m +45m")

    def test_flowers_set_aside(self):
        """Flowers in a hand string are bonus tiles"""
        hand = parse_hand("123m 12f")
        assert hand.flower_count == 2
        assert hand.tile_count == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
