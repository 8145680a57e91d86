"""
Riichi Mahjong Scoring System

Riichi as a rule variant of the scoring engine: yaku with open and
closed han values, yakuman, dora, fu and base points with the mangan
to yakuman limits. Supports both EMA and Tenhou scoring variations.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from mahjong_core.scoring import (
    Aggregate, Category, Payer, Payment, RuleVariant, ScoringContext, apply_exclusions,
)
from mahjong_core.tiles import TileSuit, DragonType, HONOR_START
from mahjong_core.win_shapes import ShapeFamily, WaitType, WinPolicy

from .dora import create_dora_system
from .rules import RuleSet, TENHOU_RULES

logger = logging.getLogger(__name__)

# Han weight of a single yakuman
YAKUMAN_HAN = 13
MANGAN = 2000

# (minimum han, base points, name), highest first
LIMITS = [
    (11, 6000, "Sanbaiman"),
    (8, 4000, "Baiman"),
    (6, 3000, "Haneman"),
    (5, 2000, "Mangan"),
]

YAKUMAN_NAMES = frozenset({
    "Tenhou", "Chihou", "Kokushi Musou", "Suuankou", "Daisangen", "Daisuushii",
    "Shousuushii", "Tsuuiisou", "Chinroutou", "Ryuuiisou", "Chuuren Poutou", "Suukantsu",
})


@dataclass
class Yaku:
    """A yaku and the check that detects it"""
    name: str
    japanese_name: str
    han_closed: int        # Han value when closed
    han_open: int          # Han value when open (0 = not allowed open)
    check_func: Callable[[ScoringContext], bool]
    excludes: List[str] = field(default_factory=list)

    def han(self, is_open: bool) -> int:
        return self.han_open if is_open else self.han_closed

    def to_category(self, is_open: bool) -> Category:
        return Category(self.name, self.han(is_open), self.japanese_name, tuple(self.excludes))


def round_up_100(points: int) -> int:
    return -(-points // 100) * 100


def _wind_pungs(ctx: ScoringContext) -> List[int]:
    return [idx - 27 for idx in ctx.pung_indices() if 27 <= idx < 31]


def _dragon_pungs(ctx: ScoringContext) -> List[int]:
    return [idx - 31 for idx in ctx.pung_indices() if idx >= 31]


def _block_has_terminal(block, honors_ok: bool) -> bool:
    if block.is_chow:
        return block.tile_index % 9 in (0, 6)
    tile = block.base_tile
    return tile.is_terminal or (honors_ok and tile.is_honor)


class RiichiVariant(RuleVariant):
    """
    Riichi Mahjong scorer.

    Yakuman replace every other yaku. Dora only add han to a hand that
    already has a yaku.

    Args:
        rules: Rule set switching red fives, open tanyao and the limits
    """

    name = "riichi"
    policy = WinPolicy(allow_seven_pairs=True, allow_duplicate_pairs=False,
                       allow_thirteen_orphans=True)

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or TENHOU_RULES
        self.yaku_checks = self._create_yaku_checks()

    def __repr__(self) -> str:
        return f"RiichiVariant({self.rules.name})"

    # ------------------------------------------------------------------
    # RuleVariant hooks
    # ------------------------------------------------------------------

    def enumerate_categories(self, ctx: ScoringContext) -> List[Category]:
        yakuman = self._check_yakuman(ctx)
        if yakuman:
            return yakuman

        is_open = not ctx.is_concealed
        matching = []
        for yaku in self.yaku_checks:
            if is_open and yaku.han_open == 0:
                continue
            if yaku.name == "Tanyao" and is_open and not self.rules.allow_kuitan:
                continue
            if yaku.check_func(ctx):
                matching.append(yaku.to_category(is_open))
        categories = apply_exclusions(matching)
        if categories:
            categories.extend(self._dora_categories(ctx))
        return categories

    def qualifies(self, categories: Sequence[Category], ctx: ScoringContext) -> bool:
        """At least one yaku; dora alone never win a hand"""
        return any(not c.bonus for c in categories)

    def aggregate(self, categories: Sequence[Category], ctx: ScoringContext) -> Aggregate:
        han = sum(c.weight for c in categories)
        bonus = sum(c.weight for c in categories if c.bonus)

        if all(c.name in YAKUMAN_NAMES for c in categories):
            count = han // YAKUMAN_HAN
            limit = "Yakuman" if count == 1 else f"{count}x Yakuman"
            return Aggregate(value=8000 * count, total=han, limit=limit)

        fu = self.calculate_fu(ctx, categories)
        base, limit = self.base_points(han, fu)
        logger.debug(f"{han} han {fu} fu: {base} base points ({limit or 'no limit'})")
        return Aggregate(value=base, total=han, secondary=fu, bonus=bonus, limit=limit)

    def convert_to_points(self, aggregate: Aggregate, ctx: ScoringContext) -> List[Payment]:
        """
        Ron: the discarder pays 6x base (dealer) or 4x base. Tsumo: the
        dealer collects 2x base from each player; a non-dealer collects
        2x base from the dealer and 1x from the others. Each share is
        rounded up to 100. Honba go to the winner, riichi sticks too.
        """
        base = aggregate.value
        honba = ctx.win.honba
        if ctx.is_zimo:
            per_payer = honba * self.rules.honba_value // 3
            if ctx.win.is_dealer:
                payments = [Payment(Payer.NON_DEALER, round_up_100(2 * base) + per_payer)
                            for _ in range(3)]
            else:
                payments = [Payment(Payer.DEALER, round_up_100(2 * base) + per_payer)]
                payments += [Payment(Payer.NON_DEALER, round_up_100(base) + per_payer)
                             for _ in range(2)]
        else:
            multiplier = 6 if ctx.win.is_dealer else 4
            payments = [Payment(Payer.DISCARDER,
                                round_up_100(multiplier * base) + honba * self.rules.honba_value)]

        if ctx.win.riichi_sticks:
            payments.append(Payment(Payer.TABLE, ctx.win.riichi_sticks * self.rules.riichi_deposit))
        return payments

    # ------------------------------------------------------------------
    # Han and fu
    # ------------------------------------------------------------------

    def base_points(self, han: int, fu: int) -> Tuple[int, Optional[str]]:
        """Base points and the name of the limit reached"""
        if han >= YAKUMAN_HAN:
            if self.rules.kazoe_yakuman:
                return 8000, "Kazoe Yakuman"
            return 6000, "Sanbaiman"
        for min_han, points, limit in LIMITS:
            if han >= min_han:
                return points, limit

        if self.rules.kiriage_mangan and (han, fu) in ((4, 30), (3, 60)):
            return MANGAN, "Mangan"
        base = fu * 2 ** (han + 2)
        if base >= MANGAN:
            return MANGAN, "Mangan"
        return base, None

    def calculate_fu(self, ctx: ScoringContext, categories: Sequence[Category] = ()) -> int:
        """Calculate fu (minipoints)"""
        if ctx.family == ShapeFamily.SEVEN_PAIRS:
            return 25

        is_pinfu = any(c.name == "Pinfu" for c in categories)
        if is_pinfu:
            return 20 if ctx.is_zimo else 30

        fu = 20  # Base fu

        # Menzen ron
        if ctx.is_concealed and not ctx.is_zimo:
            fu += 10
        if ctx.is_zimo:
            fu += 2

        for block in ctx.pungs:
            honor_or_terminal = block.base_tile.is_terminal_or_honor
            if block.is_kong:
                value = 16 if honor_or_terminal else 8
            else:
                value = 4 if honor_or_terminal else 2
            fu += value * 2 if block.concealed else value

        pair = ctx.pair_tile
        if pair is not None:
            if pair.suit == TileSuit.DRAGONS:
                fu += 2
            elif pair.suit == TileSuit.WINDS:
                if pair.value == ctx.round_wind:
                    fu += 2
                if pair.value == ctx.seat_wind:
                    fu += 2

        if ctx.wait in (WaitType.CLOSED, WaitType.EDGE, WaitType.SINGLE):
            fu += 2

        fu = ((fu + 9) // 10) * 10
        # Open hand with no fu still scores 30
        return max(fu, 30)

    # ------------------------------------------------------------------
    # Yaku table
    # ------------------------------------------------------------------

    def _create_yaku_checks(self) -> List[Yaku]:
        Y = Yaku
        return [
            # 1 han
            Y("Riichi", "立直", 1, 0, self._check_riichi),
            Y("Ippatsu", "一発", 1, 0, self._check_ippatsu),
            Y("Menzen Tsumo", "門前清自摸和", 1, 0, self._check_menzen_tsumo),
            Y("Tanyao", "断幺九", 1, 1, self._check_tanyao),
            Y("Pinfu", "平和", 1, 0, self._check_pinfu),
            Y("Iipeikou", "一盃口", 1, 0, self._check_iipeikou),
            Y("Yakuhai (Round Wind)", "役牌 場風", 1, 1, self._check_round_wind),
            Y("Yakuhai (Seat Wind)", "役牌 自風", 1, 1, self._check_seat_wind),
            Y("Yakuhai (Haku)", "役牌 白", 1, 1,
              lambda ctx: DragonType.WHITE in _dragon_pungs(ctx)),
            Y("Yakuhai (Hatsu)", "役牌 發", 1, 1,
              lambda ctx: DragonType.GREEN in _dragon_pungs(ctx)),
            Y("Yakuhai (Chun)", "役牌 中", 1, 1,
              lambda ctx: DragonType.RED in _dragon_pungs(ctx)),
            Y("Rinshan Kaihou", "嶺上開花", 1, 1, self._check_rinshan),
            Y("Chankan", "槍槓", 1, 1, self._check_chankan),
            Y("Haitei", "海底摸月", 1, 1, self._check_haitei),
            Y("Houtei", "河底撈魚", 1, 1, self._check_houtei),

            # 2 han
            Y("Double Riichi", "両立直", 2, 0, self._check_double_riichi, ["Riichi"]),
            Y("Chiitoitsu", "七対子", 2, 0, self._check_chiitoitsu),
            Y("Sanshoku Doujun", "三色同順", 2, 1, self._check_sanshoku_doujun),
            Y("Ittsu", "一気通貫", 2, 1, self._check_ittsu),
            Y("Toitoi", "対々和", 2, 2, self._check_toitoi),
            Y("Sanankou", "三暗刻", 2, 2, self._check_sanankou),
            Y("Sanshoku Doukou", "三色同刻", 2, 2, self._check_sanshoku_doukou),
            Y("Sankantsu", "三槓子", 2, 2, self._check_sankantsu),
            Y("Chanta", "混全帯幺九", 2, 1, self._check_chanta),
            Y("Honroutou", "混老頭", 2, 2, self._check_honroutou, ["Chanta"]),
            Y("Shousangen", "小三元", 2, 2, self._check_shousangen),

            # 3 han
            Y("Honitsu", "混一色", 3, 2, self._check_honitsu),
            Y("Junchan", "純全帯幺九", 3, 2, self._check_junchan, ["Chanta"]),
            Y("Ryanpeikou", "二盃口", 3, 0, self._check_ryanpeikou, ["Iipeikou"]),

            # 6 han
            Y("Chinitsu", "清一色", 6, 5, self._check_chinitsu, ["Honitsu"]),
        ]

    def _check_yakuman(self, ctx: ScoringContext) -> List[Category]:
        """Yakuman hands, each weighted 13 han (26 when counted double)"""
        doubles = self.rules.double_yakuman
        found = []

        def add(name: str, japanese: str, double: bool = False):
            weight = YAKUMAN_HAN * (2 if double and doubles else 1)
            found.append(Category(name, weight, japanese))

        if ctx.win.is_first_turn and ctx.is_zimo:
            if ctx.win.is_dealer:
                add("Tenhou", "天和")
            else:
                add("Chihou", "地和")
        if ctx.family == ShapeFamily.THIRTEEN_ORPHANS:
            add("Kokushi Musou", "国士無双", ctx.wait == WaitType.THIRTEEN_SIDED)
        if self._check_suuankou(ctx):
            add("Suuankou", "四暗刻", ctx.wait == WaitType.SINGLE)
        if len(_dragon_pungs(ctx)) == 3:
            add("Daisangen", "大三元")
        wind_pungs = len(_wind_pungs(ctx))
        if wind_pungs == 4:
            add("Daisuushii", "大四喜", True)
        elif wind_pungs == 3 and ctx.pair is not None and 27 <= ctx.pair < 31:
            add("Shousuushii", "小四喜")
        if ctx.all_match(lambda t: t.is_honor):
            add("Tsuuiisou", "字一色")
        if ctx.all_match(lambda t: t.is_terminal):
            add("Chinroutou", "清老頭")
        if ctx.all_match(lambda t: t.is_green):
            add("Ryuuiisou", "緑一色")
        nine_gates = self._check_chuuren(ctx)
        if nine_gates:
            add("Chuuren Poutou", "九蓮宝燈", nine_gates == 2)
        if len(ctx.kongs) == 4:
            add("Suukantsu", "四槓子")
        return found

    def _dora_categories(self, ctx: ScoringContext) -> List[Category]:
        dora = create_dora_system(ctx.win, self.rules)
        counts = [
            ("Dora", "ドラ", dora.count_dora(ctx.all_tiles)),
            ("Uradora", "裏ドラ", dora.count_uradora(ctx.all_tiles)),
            ("Akadora", "赤ドラ", dora.count_akadora(ctx.red_fives)),
        ]
        return [Category(name, n, japanese, bonus=True) for name, japanese, n in counts if n]

    # === Yaku Check Functions ===

    def _check_riichi(self, ctx: ScoringContext) -> bool:
        return ctx.win.riichi

    def _check_ippatsu(self, ctx: ScoringContext) -> bool:
        return ctx.win.ippatsu and (ctx.win.riichi or ctx.win.double_riichi)

    def _check_menzen_tsumo(self, ctx: ScoringContext) -> bool:
        return ctx.is_concealed and ctx.is_zimo

    def _check_tanyao(self, ctx: ScoringContext) -> bool:
        """All simples (no terminals/honors)"""
        return ctx.all_match(lambda t: t.is_simple)

    def _check_pinfu(self, ctx: ScoringContext) -> bool:
        """All sequences, valueless pair, two-sided wait"""
        if not ctx.is_concealed or not ctx.is_standard:
            return False
        if len(ctx.chows) != 4 or ctx.wait != WaitType.TWO_SIDED:
            return False
        pair = ctx.pair_tile
        if pair.suit == TileSuit.DRAGONS:
            return False
        if pair.suit == TileSuit.WINDS and pair.value in (ctx.round_wind, ctx.seat_wind):
            return False
        return True

    def _check_iipeikou(self, ctx: ScoringContext) -> bool:
        """Two identical sequences"""
        if not ctx.is_concealed:
            return False
        counts = Counter(b.tile_index for b in ctx.chows)
        return any(c >= 2 for c in counts.values())

    def _check_round_wind(self, ctx: ScoringContext) -> bool:
        return ctx.round_wind in _wind_pungs(ctx)

    def _check_seat_wind(self, ctx: ScoringContext) -> bool:
        return ctx.seat_wind in _wind_pungs(ctx)

    def _check_rinshan(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_kong_replacement and ctx.is_zimo

    def _check_chankan(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_robbing_kong and not ctx.is_zimo

    def _check_haitei(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_last_tile and ctx.is_zimo

    def _check_houtei(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_last_tile and not ctx.is_zimo

    def _check_double_riichi(self, ctx: ScoringContext) -> bool:
        return ctx.win.double_riichi

    def _check_chiitoitsu(self, ctx: ScoringContext) -> bool:
        return ctx.family == ShapeFamily.SEVEN_PAIRS

    def _check_sanshoku_doujun(self, ctx: ScoringContext) -> bool:
        """Three suits, same sequence"""
        suits_by_value = {}
        for suit, value in ctx.chow_starts():
            suits_by_value.setdefault(value, set()).add(suit)
        return any(len(suits) >= 3 for suits in suits_by_value.values())

    def _check_ittsu(self, ctx: ScoringContext) -> bool:
        """1-2-3, 4-5-6, 7-8-9 in same suit"""
        starts = set(ctx.chow_starts())
        return any({(suit, 1), (suit, 4), (suit, 7)} <= starts for suit in range(3))

    def _check_toitoi(self, ctx: ScoringContext) -> bool:
        """All triplets/quads"""
        return ctx.is_standard and len(ctx.pungs) == 4

    def _check_sanankou(self, ctx: ScoringContext) -> bool:
        """Three concealed triplets; a triplet finished by ron is open"""
        return ctx.concealed_pung_count() == 3

    def _check_sanshoku_doukou(self, ctx: ScoringContext) -> bool:
        """Same triplet in three suits"""
        suits_by_value = {}
        for idx in ctx.pung_indices():
            if idx < HONOR_START:
                suits_by_value.setdefault(idx % 9, set()).add(idx // 9)
        return any(len(suits) >= 3 for suits in suits_by_value.values())

    def _check_sankantsu(self, ctx: ScoringContext) -> bool:
        return len(ctx.kongs) == 3

    def _check_chanta(self, ctx: ScoringContext) -> bool:
        """Every group and the pair hold a terminal or honor, with a sequence and an honor"""
        if not ctx.is_standard or not ctx.chows or not ctx.has_honors:
            return False
        if not ctx.pair_tile.is_terminal_or_honor:
            return False
        return all(_block_has_terminal(b, honors_ok=True) for b in ctx.blocks)

    def _check_honroutou(self, ctx: ScoringContext) -> bool:
        """All terminals and honors"""
        return ctx.all_match(lambda t: t.is_terminal_or_honor)

    def _check_shousangen(self, ctx: ScoringContext) -> bool:
        """Small 3 dragons (2 pongs + pair)"""
        return len(_dragon_pungs(ctx)) == 2 and ctx.pair is not None and ctx.pair >= 31

    def _check_honitsu(self, ctx: ScoringContext) -> bool:
        """One suit + honors"""
        return len(ctx.suits) == 1 and ctx.has_honors

    def _check_junchan(self, ctx: ScoringContext) -> bool:
        """Every group and the pair hold a terminal, no honors"""
        if not ctx.is_standard or not ctx.chows or ctx.has_honors:
            return False
        if not ctx.pair_tile.is_terminal:
            return False
        return all(_block_has_terminal(b, honors_ok=False) for b in ctx.blocks)

    def _check_ryanpeikou(self, ctx: ScoringContext) -> bool:
        """Two sets of identical sequences"""
        if not ctx.is_concealed:
            return False
        counts = Counter(b.tile_index for b in ctx.chows)
        return sum(c // 2 for c in counts.values()) == 2

    def _check_chinitsu(self, ctx: ScoringContext) -> bool:
        """Pure one suit (no honors)"""
        return len(ctx.suits) == 1 and not ctx.has_honors

    # === Yakuman Checks ===

    def _check_suuankou(self, ctx: ScoringContext) -> bool:
        """Four concealed triplets"""
        return ctx.is_standard and ctx.concealed_pung_count() == 4

    def _check_chuuren(self, ctx: ScoringContext) -> int:
        """
        Nine gates (1112345678999 + any in same suit).

        Returns 2 for the pure nine-sided form, 1 otherwise, 0 if absent.
        """
        if not ctx.is_concealed or ctx.kongs or len(ctx.suits) != 1 or ctx.has_honors:
            return 0
        suit = next(iter(ctx.suits))
        start = 9 * int(suit)
        suit_counts = [int(ctx.counts[start + i]) for i in range(9)]
        required = [3, 1, 1, 1, 1, 1, 1, 1, 3]
        if any(have < need for have, need in zip(suit_counts, required)):
            return 0
        tile = ctx.winning_tile
        if tile is not None and tile.tile_index - start in range(9):
            extra = tile.tile_index - start
            if suit_counts[extra] - required[extra] == 1:
                return 2
        return 1
