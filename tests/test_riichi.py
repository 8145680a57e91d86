"""
Tests for Riichi Mahjong scoring: yaku, fu, limits, dora and payments
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from mahjong_core import api
from mahjong_core.context import WinContext, WinMethod, SeatRole
from mahjong_core.notation import parse_hand
from mahjong_core.scoring import Payer, Payment
from mahjong_core.tiles import (
    WindType, FlowerType, char, bam, flower, EAST, NORTH, WHITE_DRAGON, GREEN_DRAGON, RED_DRAGON,
)
from riichi_mahjong.dora import DoraSystem, create_dora_system, get_dora_tile
from riichi_mahjong.rules import RuleSet, EMA_RULES, TENHOU_RULES, WRC_RULES
from riichi_mahjong.scoring import RiichiVariant, round_up_100

# Riichi, Tanyao and Pinfu on a two-sided wait
PINFU_HAND = "234567m22345p67s +8s"


def ron(**kwargs) -> WinContext:
    return WinContext(win_method=WinMethod.DISCARD, **kwargs)


def tsumo(**kwargs) -> WinContext:
    return WinContext(win_method=WinMethod.SELF_DRAWN, **kwargs)


class TestYaku:
    """Test yaku detection"""

    def test_riichi_tanyao_pinfu(self):
        """Closed all-simples hand on a two-sided wait"""
        result = api.score(parse_hand(PINFU_HAND), ron(riichi=True), RiichiVariant())
        assert result.category_names == ["Riichi", "Tanyao", "Pinfu"]
        assert result.aggregate.total == 3
        assert result.aggregate.secondary == 30

    def test_open_tanyao(self):
        """Open tanyao is worth one han with kuitan"""
        hand = parse_hand("567m22345p67s +8s [234m]")
        result = api.score(hand, ron(), RiichiVariant())
        assert result.category_names == ["Tanyao"]
        assert result.aggregate.secondary == 30
        assert result.payments == [Payment(Payer.DISCARDER, 1000)]

    def test_no_kuitan(self):
        """Without kuitan the open hand has no yaku, and dora do not help"""
        hand = parse_hand("567m22345p67s +8s [234m]")
        variant = RiichiVariant(RuleSet(allow_kuitan=False))
        assert api.score(hand, ron(indicators=(char(1),)), variant) is None

    def test_closed_only_yaku_dropped_when_open(self):
        """Riichi needs a closed hand"""
        hand = parse_hand("567m22345p67s +8s [234m]")
        result = api.score(hand, ron(riichi=True), RiichiVariant())
        assert "Riichi" not in result.category_names

    def test_chiitoitsu(self):
        """Seven pairs are always 25 fu"""
        result = api.score(parse_hand("1122m3344p5566s7z +7z"), tsumo(), RiichiVariant())
        assert result.category_names == ["Menzen Tsumo", "Chiitoitsu"]
        assert result.aggregate.secondary == 25
        assert result.payments == [
            Payment(Payer.DEALER, 1600),
            Payment(Payer.NON_DEALER, 800),
            Payment(Payer.NON_DEALER, 800),
        ]

    def test_round_wind_pung(self):
        """A concealed pung of the round wind is yakuhai and 8 fu"""
        result = api.score(parse_hand("111z234m567p789s5p +5p"), ron(), RiichiVariant())
        assert result.category_names == ["Yakuhai (Round Wind)"]
        assert result.aggregate.secondary == 40
        assert result.total == 1300

    def test_double_riichi_replaces_riichi(self):
        """Double riichi implies riichi"""
        context = ron(riichi=True, double_riichi=True)
        result = api.score(parse_hand(PINFU_HAND), context, RiichiVariant())
        assert "Double Riichi" in result.category_names
        assert "Riichi" not in result.category_names

    def test_chinitsu_replaces_honitsu(self):
        """A pure flush is not also a half flush"""
        result = api.score(parse_hand("123m234m456m789m5m +5m"), ron(), RiichiVariant())
        assert "Chinitsu" in result.category_names
        assert "Honitsu" not in result.category_names


class TestYakuman:
    """Test limit hands"""

    def test_kokushi(self):
        """Thirteen orphans on a self-draw"""
        hand = parse_hand("19m19p19s1234567z +1m")
        result = api.score(hand, tsumo(), RiichiVariant())
        assert result.category_names == ["Kokushi Musou"]
        assert result.aggregate.value == 8000
        assert result.aggregate.limit == "Yakuman"
        assert result.payments == [
            Payment(Payer.DEALER, 16000),
            Payment(Payer.NON_DEALER, 8000),
            Payment(Payer.NON_DEALER, 8000),
        ]

    def test_kokushi_thirteen_sided_double(self):
        """Waiting on all thirteen counts twice when doubles are on"""
        hand = parse_hand("19m19p19s1234567z +1m")
        variant = RiichiVariant(RuleSet(double_yakuman=True))
        result = api.score(hand, tsumo(), variant)
        assert result.aggregate.value == 16000
        assert result.aggregate.limit == "2x Yakuman"

    def test_tenhou(self):
        """The dealer winning on the first draw"""
        context = tsumo(seat_role=SeatRole.DEALER, seat_wind=WindType.EAST, is_first_turn=True)
        result = api.score(parse_hand(PINFU_HAND), context, RiichiVariant())
        assert result.category_names == ["Tenhou"]
        assert result.payments == [Payment(Payer.NON_DEALER, 16000)] * 3

    def test_daisangen(self):
        """Three dragon pungs"""
        hand = parse_hand("555z666z777z123m1p +1p")
        result = api.score(hand, ron(), RiichiVariant())
        assert result.category_names == ["Daisangen"]
        assert result.total == 32000


class TestFuAndLimits:
    """Test han/fu to base points"""

    def test_base_points(self):
        """fu * 2^(han+2) below mangan"""
        variant = RiichiVariant(EMA_RULES)
        assert variant.base_points(1, 30) == (240, None)
        assert variant.base_points(3, 30) == (960, None)
        assert variant.base_points(3, 70) == (2000, "Mangan")

    def test_limits(self):
        """Han thresholds for each limit"""
        variant = RiichiVariant(EMA_RULES)
        assert variant.base_points(5, 30) == (2000, "Mangan")
        assert variant.base_points(6, 30) == (3000, "Haneman")
        assert variant.base_points(8, 30) == (4000, "Baiman")
        assert variant.base_points(11, 30) == (6000, "Sanbaiman")

    def test_kazoe_yakuman(self):
        """13 han is a yakuman only with kazoe"""
        assert RiichiVariant(TENHOU_RULES).base_points(13, 30) == (8000, "Kazoe Yakuman")
        assert RiichiVariant(EMA_RULES).base_points(13, 30) == (6000, "Sanbaiman")

    def test_kiriage_mangan(self):
        """4 han 30 fu rounds up under WRC"""
        assert RiichiVariant(EMA_RULES).base_points(4, 30) == (1920, None)
        assert RiichiVariant(WRC_RULES).base_points(4, 30) == (2000, "Mangan")

    def test_round_up_100(self):
        """Payments round up"""
        assert round_up_100(3840) == 3900
        assert round_up_100(1000) == 1000


class TestPayments:
    """Test payments for ron and tsumo"""

    def test_non_dealer_ron(self):
        """Four times base from the discarder"""
        result = api.score(parse_hand(PINFU_HAND), ron(riichi=True), RiichiVariant())
        assert result.payments == [Payment(Payer.DISCARDER, 3900)]

    def test_dealer_ron(self):
        """Six times base from the discarder"""
        context = ron(riichi=True, seat_role=SeatRole.DEALER)
        result = api.score(parse_hand(PINFU_HAND), context, RiichiVariant())
        assert result.total == 5800

    def test_non_dealer_tsumo(self):
        """Pinfu tsumo is 20 fu"""
        result = api.score(parse_hand(PINFU_HAND), tsumo(riichi=True), RiichiVariant())
        assert result.aggregate.total == 4
        assert result.aggregate.secondary == 20
        assert result.payments == [
            Payment(Payer.DEALER, 2600),
            Payment(Payer.NON_DEALER, 1300),
            Payment(Payer.NON_DEALER, 1300),
        ]

    def test_dealer_tsumo(self):
        """Every opponent pays twice base"""
        context = tsumo(riichi=True, seat_role=SeatRole.DEALER)
        result = api.score(parse_hand(PINFU_HAND), context, RiichiVariant())
        assert result.payments == [Payment(Payer.NON_DEALER, 2600)] * 3

    def test_honba_and_riichi_sticks(self):
        """Repeat counters and deposits go to the winner"""
        context = ron(riichi=True, honba=2, riichi_sticks=1)
        result = api.score(parse_hand(PINFU_HAND), context, RiichiVariant())
        assert result.payments == [
            Payment(Payer.DISCARDER, 4500),
            Payment(Payer.TABLE, 1000),
        ]
        assert result.total == 5500


class TestDora:
    """Test dora indicators and red fives"""

    def test_dora_wraps(self):
        """Indicators point at the next tile, wrapping around"""
        assert get_dora_tile(char(9)) == char(1)
        assert get_dora_tile(NORTH) == EAST
        assert get_dora_tile(WHITE_DRAGON) == GREEN_DRAGON
        assert get_dora_tile(GREEN_DRAGON) == RED_DRAGON
        assert get_dora_tile(RED_DRAGON) == WHITE_DRAGON

    def test_flowers_are_not_indicators(self):
        """Bonus tiles point at nothing"""
        with pytest.raises(ValueError):
            get_dora_tile(flower(FlowerType.SPRING))

    def test_count_dora(self):
        """Each indicator counts every matching tile"""
        dora = DoraSystem(dora_indicators=[char(1), char(1)])
        assert dora.count_dora([char(2), char(2), bam(2)]) == 4

    def test_dora_adds_han(self):
        """One dora lifts 3 han 30 fu to 4 han"""
        context = ron(riichi=True, indicators=(char(1),))
        ema = api.score(parse_hand(PINFU_HAND), context, RiichiVariant(EMA_RULES))
        assert ("Dora", 1) in ema.categories
        assert ema.aggregate.total == 4
        assert ema.aggregate.bonus == 1
        assert ema.total == 7700

        wrc = api.score(parse_hand(PINFU_HAND), context, RiichiVariant(WRC_RULES))
        assert wrc.total == 8000

    def test_uradora_needs_riichi(self):
        """Hidden indicators are ignored without a riichi declaration"""
        hidden = (char(1),)
        plain = api.score(parse_hand(PINFU_HAND), tsumo(hidden_indicators=hidden), RiichiVariant())
        assert "Uradora" not in plain.category_names

        declared = tsumo(riichi=True, hidden_indicators=hidden)
        result = api.score(parse_hand(PINFU_HAND), declared, RiichiVariant())
        assert ("Uradora", 1) in result.categories

    def test_akadora(self):
        """Red fives count only when the rules use them"""
        hand_text = "234067m22345p67s +8s"
        tenhou = api.score(parse_hand(hand_text), ron(riichi=True), RiichiVariant(TENHOU_RULES))
        assert ("Akadora", 1) in tenhou.categories
        ema = api.score(parse_hand(hand_text), ron(riichi=True), RiichiVariant(EMA_RULES))
        assert "Akadora" not in ema.category_names

    def test_create_dora_system(self):
        """Red fives follow the rule set"""
        context = WinContext(indicators=(char(3),))
        assert create_dora_system(context, TENHOU_RULES).red_fives_enabled
        dora = create_dora_system(context, EMA_RULES)
        assert not dora.red_fives_enabled
        assert dora.get_all_dora_tiles() == [char(4)]


class TestRuleSets:
    """Test the preset rule sets"""

    def test_presets(self):
        """Each organisation's switches"""
        assert EMA_RULES.red_fives == 0 and not EMA_RULES.kazoe_yakuman
        assert TENHOU_RULES.red_fives == 3 and TENHOU_RULES.kazoe_yakuman
        assert WRC_RULES.kiriage_mangan
        assert repr(WRC_RULES) == "RuleSet(WRC)"

    def test_default_variant_uses_tenhou(self):
        """The default variant plays Tenhou rules"""
        assert RiichiVariant().rules == TENHOU_RULES
        assert repr(RiichiVariant(EMA_RULES)) == "RiichiVariant(EMA)"

    def test_package_exports(self):
        """Everything the package exports exists"""
        import riichi_mahjong
        for name in riichi_mahjong.__all__:
            assert hasattr(riichi_mahjong, name), name
        assert "YakuType" not in riichi_mahjong.__all__


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
