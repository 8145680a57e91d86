"""
Tests for Shanghai Mahjong scoring
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core import api
from mahjong_core.context import WinContext, WinMethod, SeatRole
from mahjong_core.notation import parse_hand
from mahjong_core.scoring import Payer, Payment
from shanghai_mahjong.scoring import ShanghaiVariant, FAN_UNITS, MAX_FAN

OPEN_HAND = "67s11z +8s [234m] [567p] [456s]"


class TestFan:
    """Test fan categories"""

    def test_base_win(self):
        """A hand with nothing else still wins for one fan"""
        result = api.score(parse_hand(OPEN_HAND), WinContext(win_method=WinMethod.DISCARD),
                           ShanghaiVariant())
        assert result.categories == [("Base Win", 1)]
        assert result.payments == [Payment(Payer.DISCARDER, 1)]

    def test_flowers_are_flat_points(self):
        """Flowers add to the units without adding fan"""
        hand = parse_hand("67s11z 2f +8s [234m] [567p] [456s]")
        result = api.score(hand, WinContext(win_method=WinMethod.DISCARD), ShanghaiVariant())
        assert ("Flowers", 1) in result.categories
        assert ("Seat Flower", 1) in result.categories
        assert result.aggregate.total == 1
        assert result.aggregate.value == 3

    def test_other_seat_flower(self):
        """A flower of another seat is only a plain flower"""
        hand = parse_hand("67s11z 1f +8s [234m] [567p] [456s]")
        result = api.score(hand, WinContext(win_method=WinMethod.DISCARD), ShanghaiVariant())
        assert "Seat Flower" not in result.category_names
        assert result.aggregate.value == 2

    def test_dragon_pungs_count_each(self):
        """Every dragon pung is a fan"""
        hand = parse_hand("555z666z123m456p7s +7s")
        result = api.score(hand, WinContext(win_method=WinMethod.DISCARD), ShanghaiVariant())
        assert result.categories == [("Dragon Pung", 2), ("Concealed Hand", 1)]
        assert result.payments == [Payment(Payer.DISCARDER, FAN_UNITS[3])]

    def test_seven_pairs(self):
        """Seven pairs replaces the concealed hand fan"""
        hand = parse_hand("1122m3344p5566s7z +7z")
        result = api.score(hand, WinContext(), ShanghaiVariant())
        assert result.category_names == ["Seven Pairs", "Self-Drawn"]
        assert result.total == 8 + 4 + 4

    def test_big_hook(self):
        """Four exposed melds, won on the pair"""
        hand = parse_hand("1z +1z [234m] [567p] [456s] [789s]")
        result = api.score(hand, WinContext(win_method=WinMethod.DISCARD), ShanghaiVariant())
        assert result.category_names == ["Big Hook"]


class TestCapAndPayments:
    """Test the fan cap and who pays"""

    ALL_HONORS = "111z222z333z555z6z +6z"

    def test_fan_cap(self):
        """Fan beyond the cap are dropped"""
        result = api.score(parse_hand(self.ALL_HONORS), WinContext(), ShanghaiVariant())
        assert "All Honors" in result.category_names
        assert "All Pungs" not in result.category_names
        assert sum(w for _, w in result.categories) == 13
        assert result.aggregate.total == MAX_FAN
        assert result.aggregate.limit == "Fan Cap"
        assert result.payments == [
            Payment(Payer.DEALER, 30),
            Payment(Payer.NON_DEALER, 15),
            Payment(Payer.NON_DEALER, 15),
        ]
        assert result.total == 60

    def test_lower_cap(self):
        """The cap can be lowered"""
        result = api.score(parse_hand(self.ALL_HONORS), WinContext(), ShanghaiVariant(max_fan=4))
        assert result.aggregate.total == 4
        assert result.aggregate.value == FAN_UNITS[4]

    def test_cap_out_of_range(self):
        """Caps outside the unit table are rejected"""
        with pytest.raises(ValueError):
            ShanghaiVariant(max_fan=9)
        with pytest.raises(ValueError):
            ShanghaiVariant(max_fan=0)

    def test_dealer_ron_doubles(self):
        """A dealer winning on a discard collects double"""
        hand = parse_hand("234567m22345p67s +8s")
        dealer = WinContext(win_method=WinMethod.DISCARD, seat_role=SeatRole.DEALER)
        result = api.score(hand, dealer, ShanghaiVariant())
        assert result.category_names == ["Concealed Hand"]
        assert result.payments == [Payment(Payer.DISCARDER, 2)]

    def test_dealer_self_draw(self):
        """Every opponent pays the dealer double"""
        hand = parse_hand("234567m22345p67s +8s")
        dealer = WinContext(seat_role=SeatRole.DEALER)
        result = api.score(hand, dealer, ShanghaiVariant())
        assert result.aggregate.total == 2
        assert result.payments == [Payment(Payer.NON_DEALER, 4)] * 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
