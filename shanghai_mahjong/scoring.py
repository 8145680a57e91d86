"""
Shanghai Mahjong Scoring System

Fan add up with no minimum: a hand with nothing else still wins with the
one-fan Base Win. Fan are capped and mapped to payment units; flowers are
flat points added to the units instead of extra fan.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from mahjong_core.scoring import (
    Aggregate, Category, Payer, Payment, RuleVariant, ScoringContext, apply_exclusions,
)
from mahjong_core.win_shapes import ShapeFamily, WaitType, WinPolicy

logger = logging.getLogger(__name__)

MAX_FAN = 8

# Payment units per capped fan
FAN_UNITS: Dict[int, int] = {1: 1, 2: 2, 3: 4, 4: 6, 5: 8, 6: 10, 7: 12, 8: 15}


@dataclass
class FanRule:
    """
    A fan category.

    `count_func` returns how many times the category applies (0 when it
    does not); the category's weight is `fan` times that.
    """
    name: str
    chinese_name: str
    fan: int
    count_func: Callable[[ScoringContext], int]
    excludes: List[str] = field(default_factory=list)

    def to_category(self, times: int) -> Category:
        return Category(self.name, self.fan * times, self.chinese_name, tuple(self.excludes))


class ShanghaiVariant(RuleVariant):
    """
    Shanghai Mahjong scorer.

    Args:
        max_fan: Fan cap, at most 8
    """

    name = "shanghai"
    policy = WinPolicy(allow_seven_pairs=True, allow_duplicate_pairs=False,
                       allow_thirteen_orphans=True)

    def __init__(self, max_fan: int = MAX_FAN):
        if max_fan not in FAN_UNITS:
            raise ValueError(f"max_fan must be between 1 and {MAX_FAN}, got {max_fan}")
        self.max_fan = max_fan
        self.rules = self._create_rules()

    def __repr__(self) -> str:
        return f"ShanghaiVariant(max_fan={self.max_fan})"

    # ------------------------------------------------------------------
    # RuleVariant hooks
    # ------------------------------------------------------------------

    def enumerate_categories(self, ctx: ScoringContext) -> List[Category]:
        matching = []
        for rule in self.rules:
            times = int(rule.count_func(ctx))
            if times:
                matching.append(rule.to_category(times))
        categories = apply_exclusions(matching)
        if not categories:
            categories = [Category("Base Win", 1, "底和")]

        if ctx.flowers:
            categories.append(Category("Flowers", len(ctx.flowers), "花", bonus=True))
            seat_flowers = sum(1 for t in ctx.flowers if t.value % 4 == ctx.seat_wind)
            if seat_flowers:
                categories.append(Category("Seat Flower", seat_flowers, "正花", bonus=True))
        return categories

    def qualifies(self, categories: Sequence[Category], ctx: ScoringContext) -> bool:
        """Every complete hand wins"""
        return True

    def aggregate(self, categories: Sequence[Category], ctx: ScoringContext) -> Aggregate:
        fan = sum(c.weight for c in categories if not c.bonus)
        bonus = sum(c.weight for c in categories if c.bonus)
        capped = min(fan, self.max_fan)
        limit = None
        if fan > self.max_fan:
            limit = "Fan Cap"
            logger.debug(f"{fan} fan capped at {self.max_fan}")
        return Aggregate(value=FAN_UNITS[capped] + bonus, total=capped, bonus=bonus, limit=limit)

    def convert_to_points(self, aggregate: Aggregate, ctx: ScoringContext) -> List[Payment]:
        """
        Self-drawn: all three opponents pay the units. Discard: only the
        discarder pays. Any payment between the dealer and the winner is
        doubled.
        """
        units = aggregate.value
        if not ctx.is_zimo:
            multiplier = 2 if ctx.win.is_dealer else 1
            return [Payment(Payer.DISCARDER, units * multiplier)]
        if ctx.win.is_dealer:
            return [Payment(Payer.NON_DEALER, units * 2) for _ in range(3)]
        return [
            Payment(Payer.DEALER, units * 2),
            Payment(Payer.NON_DEALER, units),
            Payment(Payer.NON_DEALER, units),
        ]

    def _create_rules(self) -> List[FanRule]:
        R = FanRule
        return [
            R("All Honors", "字一色", 8, self._check_all_honors, ["Half Flush", "All Pungs"]),
            R("Thirteen Orphans", "十三幺", 8, self._check_thirteen_orphans,
              ["Concealed Hand"]),
            R("Full Flush", "清一色", 4, self._check_full_flush, ["Half Flush"]),
            R("Half Flush", "混一色", 2, self._check_half_flush),
            R("All Pungs", "碰碰和", 2, self._check_all_pungs),
            R("Seven Pairs", "七对", 2, self._check_seven_pairs, ["Concealed Hand"]),
            R("Dragon Pung", "箭刻", 1, self._count_dragon_pungs),
            R("Seat Wind", "门风", 1, self._check_seat_wind),
            R("Prevalent Wind", "圈风", 1, self._check_prevalent_wind),
            R("Concealed Hand", "门清", 1, self._check_concealed_hand),
            R("Self-Drawn", "自摸", 1, lambda ctx: ctx.is_zimo),
            R("Kong Replacement", "杠开", 1, self._check_kong_replacement),
            R("Last Tile", "海底", 1, lambda ctx: ctx.win.is_last_tile),
            R("Robbing the Kong", "抢杠", 1, self._check_robbing_kong),
            R("Big Hook", "大吊车", 1, self._check_big_hook),
        ]

    # === Fan Check Functions ===

    def _check_all_honors(self, ctx: ScoringContext) -> bool:
        return ctx.all_match(lambda t: t.is_honor)

    def _check_thirteen_orphans(self, ctx: ScoringContext) -> bool:
        return ctx.family == ShapeFamily.THIRTEEN_ORPHANS

    def _check_full_flush(self, ctx: ScoringContext) -> bool:
        return len(ctx.suits) == 1 and not ctx.has_honors

    def _check_half_flush(self, ctx: ScoringContext) -> bool:
        return len(ctx.suits) == 1 and ctx.has_honors

    def _check_all_pungs(self, ctx: ScoringContext) -> bool:
        return ctx.is_standard and len(ctx.pungs) == 4

    def _check_seven_pairs(self, ctx: ScoringContext) -> bool:
        return ctx.family == ShapeFamily.SEVEN_PAIRS

    def _count_dragon_pungs(self, ctx: ScoringContext) -> int:
        return sum(1 for idx in ctx.pung_indices() if idx >= 31)

    def _check_seat_wind(self, ctx: ScoringContext) -> bool:
        return 27 + ctx.seat_wind in ctx.pung_indices()

    def _check_prevalent_wind(self, ctx: ScoringContext) -> bool:
        return 27 + ctx.round_wind in ctx.pung_indices()

    def _check_concealed_hand(self, ctx: ScoringContext) -> bool:
        return ctx.is_concealed

    def _check_kong_replacement(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_kong_replacement and ctx.is_zimo

    def _check_robbing_kong(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_robbing_kong and not ctx.is_zimo

    def _check_big_hook(self, ctx: ScoringContext) -> bool:
        """Four melds exposed, won on the pair"""
        exposed = sum(1 for b in ctx.blocks if b.declared and not b.concealed)
        return exposed == 4 and ctx.wait == WaitType.SINGLE
