"""
MCR Mahjong Scoring System

Chinese Official Mahjong (Mahjong Competition Rules) as a rule variant
of the scoring engine. Patterns are organized by point value from 88
down to 1.

MCR uses an exclusion principle where higher-scoring patterns exclude
patterns they imply (e.g., Big Four Winds excludes All Pungs). A hand
needs 8 points before flowers to win; each flower adds 1 point on top.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from mahjong_core.scoring import (
    Aggregate, Category, Payer, Payment, RuleVariant, ScoringContext, apply_exclusions,
)
from mahjong_core.shanten import ShantenCalculator
from mahjong_core.tiles import TileSuit, DragonType, NUMBERED_SUITS
from mahjong_core.win_shapes import ShapeFamily, WaitType, WinPolicy

logger = logging.getLogger(__name__)

MIN_WINNING_SCORE = 8
BASE_PAYMENT = 8


@dataclass
class ScoringPattern:
    """
    Represents a scoring pattern.

    `check_func` returns a bool, or a count for patterns scored once per
    qualifying group.
    """
    name: str
    chinese_name: str
    points: int
    check_func: Callable[[ScoringContext], int]
    excludes: List[str] = field(default_factory=list)  # Patterns this one excludes

    def to_category(self, times: int = 1) -> Category:
        return Category(self.name, self.points * times, self.chinese_name, tuple(self.excludes))


# ---------------------------------------------------------------------
# Group helpers
# ---------------------------------------------------------------------

def _chows(ctx: ScoringContext) -> List[Tuple[int, int]]:
    """(suit, lowest value) per chow"""
    return ctx.chow_starts()


def _numbered_pungs(ctx: ScoringContext) -> List[Tuple[int, int]]:
    """(suit, value) per pung or kong of a numbered suit"""
    return [(idx // 9, idx % 9 + 1) for idx in ctx.pung_indices() if idx < 27]


def _wind_pungs(ctx: ScoringContext) -> List[int]:
    return [idx - 27 for idx in ctx.pung_indices() if 27 <= idx < 31]


def _dragon_pungs(ctx: ScoringContext) -> List[int]:
    return [idx - 31 for idx in ctx.pung_indices() if idx >= 31]


def _shifted(values: List[int], length: int, step: int) -> bool:
    """Some `length` values form a run with the given step"""
    present = set(values)
    return any(all(v + step * k in present for k in range(length)) for v in present)


def _by_value(groups: List[Tuple[int, int]]):
    found = defaultdict(set)
    for suit, value in groups:
        found[value].add(suit)
    return found


class MCRVariant(RuleVariant):
    """
    MCR Mahjong scorer.

    Args:
        min_points: Points needed before flowers to declare a win
    """

    name = "mcr"
    policy = WinPolicy(allow_seven_pairs=True, allow_duplicate_pairs=True,
                       allow_thirteen_orphans=True)

    def __init__(self, min_points: int = MIN_WINNING_SCORE):
        self.min_points = min_points
        self.patterns = self._create_patterns()
        self._calculator = ShantenCalculator(self.policy)

    # ------------------------------------------------------------------
    # RuleVariant hooks
    # ------------------------------------------------------------------

    def enumerate_categories(self, ctx: ScoringContext) -> List[Category]:
        """Matching patterns after the exclusion principle, then flowers"""
        matching = []
        for pattern in self.patterns:
            times = int(pattern.check_func(ctx))
            if times:
                matching.append(pattern.to_category(times))
        categories = apply_exclusions(matching)
        if not categories:
            categories = [Category("Chicken Hand", 8, "无番和")]
        if ctx.flowers:
            categories.append(Category("Flower Tiles", len(ctx.flowers), "花牌", bonus=True))
        return categories

    def qualifies(self, categories: Sequence[Category], ctx: ScoringContext) -> bool:
        points = sum(c.weight for c in categories if not c.bonus)
        return points >= self.min_points

    def aggregate(self, categories: Sequence[Category], ctx: ScoringContext) -> Aggregate:
        bonus = sum(c.weight for c in categories if c.bonus)
        total = sum(c.weight for c in categories)
        return Aggregate(value=total, total=total, bonus=bonus)

    def convert_to_points(self, aggregate: Aggregate, ctx: ScoringContext) -> List[Payment]:
        """
        Every opponent pays the base 8. On self-draw all three also pay the
        hand's points; on a discard only the discarder does.
        """
        if ctx.is_zimo:
            return [Payment(Payer.BYSTANDER, BASE_PAYMENT + aggregate.total) for _ in range(3)]
        return [
            Payment(Payer.DISCARDER, BASE_PAYMENT + aggregate.total),
            Payment(Payer.BYSTANDER, BASE_PAYMENT),
            Payment(Payer.BYSTANDER, BASE_PAYMENT),
        ]

    def _create_patterns(self) -> List[ScoringPattern]:
        """Create the scoring pattern table"""
        P = ScoringPattern
        return [
            # ========== 88 Points ==========
            P("Big Four Winds", "大四喜", 88, self._check_big_four_winds,
              ["All Pungs", "Prevalent Wind", "Seat Wind", "Pung of Terminals or Honors",
               "Big Three Winds", "Little Four Winds"]),
            P("Big Three Dragons", "大三元", 88, self._check_big_three_dragons,
              ["Two Dragon Pungs", "Dragon Pung", "Little Three Dragons"]),
            P("All Green", "绿一色", 88, self._check_all_green,
              ["Half Flush", "One Voided Suit"]),
            P("Nine Gates", "九莲宝灯", 88, self._check_nine_gates,
              ["Full Flush", "Concealed Hand", "Pung of Terminals or Honors",
               "One Voided Suit", "No Honors"]),
            P("Four Kongs", "四杠", 88, self._check_four_kongs,
              ["Three Kongs", "Two Concealed Kongs", "Two Melded Kongs", "Melded Kong",
               "Concealed Kong", "All Pungs", "Single Wait"]),
            P("Seven Shifted Pairs", "连七对", 88, self._check_seven_shifted_pairs,
              ["Full Flush", "Concealed Hand", "Single Wait", "Seven Pairs", "No Honors"]),
            P("Thirteen Orphans", "十三幺", 88, self._check_thirteen_orphans,
              ["All Types", "Concealed Hand", "Single Wait"]),

            # ========== 64 Points ==========
            P("All Terminals", "清幺九", 64, self._check_all_terminals,
              ["All Pungs", "Outside Hand", "Pung of Terminals or Honors", "No Honors",
               "All Terminals and Honors"]),
            P("Little Four Winds", "小四喜", 64, self._check_little_four_winds,
              ["Big Three Winds", "Prevalent Wind", "Seat Wind", "Pung of Terminals or Honors"]),
            P("Little Three Dragons", "小三元", 64, self._check_little_three_dragons,
              ["Two Dragon Pungs", "Dragon Pung"]),
            P("All Honors", "字一色", 64, self._check_all_honors,
              ["All Pungs", "Pung of Terminals or Honors", "Outside Hand",
               "All Terminals and Honors"]),
            P("Four Concealed Pungs", "四暗刻", 64, self._check_four_concealed_pungs,
              ["Concealed Hand", "All Pungs", "Three Concealed Pungs", "Two Concealed Pungs"]),
            P("Pure Terminal Chows", "一色双龙会", 64, self._check_pure_terminal_chows,
              ["Full Flush", "All Chows", "Pure Double Chow", "Two Terminal Chows", "No Honors"]),

            # ========== 48 Points ==========
            P("Quadruple Chow", "一色四同顺", 48, self._check_quadruple_chow,
              ["Pure Triple Chow", "Tile Hog", "Pure Double Chow"]),
            P("Four Pure Shifted Pungs", "一色四节高", 48, self._check_four_pure_shifted_pungs,
              ["Pure Shifted Pungs", "All Pungs"]),

            # ========== 32 Points ==========
            P("Four Shifted Chows", "一色四步高", 32, self._check_four_shifted_chows,
              ["Short Straight", "Two Terminal Chows", "Pure Shifted Chows"]),
            P("Three Kongs", "三杠", 32, self._check_three_kongs,
              ["Two Melded Kongs", "Two Concealed Kongs", "Melded Kong", "Concealed Kong"]),
            P("All Terminals and Honors", "混幺九", 32, self._check_all_terminals_and_honors,
              ["All Pungs", "Outside Hand", "Pung of Terminals or Honors"]),

            # ========== 24 Points ==========
            P("Seven Pairs", "七对", 24, self._check_seven_pairs,
              ["Concealed Hand", "Single Wait"]),
            P("All Even Pungs", "全双刻", 24, self._check_all_even_pungs,
              ["All Pungs", "All Simples", "No Honors"]),
            P("Full Flush", "清一色", 24, self._check_full_flush,
              ["Half Flush", "One Voided Suit", "No Honors"]),
            P("Pure Triple Chow", "一色三同顺", 24, self._check_pure_triple_chow,
              ["Pure Double Chow"]),
            P("Pure Shifted Pungs", "一色三节高", 24, self._check_pure_shifted_pungs, []),
            P("Upper Tiles", "全大", 24, self._check_upper_tiles,
              ["No Honors", "Upper Four"]),
            P("Middle Tiles", "全中", 24, self._check_middle_tiles,
              ["All Simples", "No Honors"]),
            P("Lower Tiles", "全小", 24, self._check_lower_tiles,
              ["No Honors", "Lower Four"]),

            # ========== 16 Points ==========
            P("Pure Straight", "清龙", 16, self._check_pure_straight,
              ["Short Straight", "Two Terminal Chows"]),
            P("Three-Suited Terminal Chows", "三色双龙会", 16,
              self._check_three_suited_terminal_chows,
              ["All Chows", "Mixed Double Chow", "Two Terminal Chows", "No Honors"]),
            P("Pure Shifted Chows", "一色三步高", 16, self._check_pure_shifted_chows, []),
            P("All Fives", "全带五", 16, self._check_all_fives,
              ["All Simples", "No Honors"]),
            P("Triple Pung", "三同刻", 16, self._check_triple_pung, ["Double Pung"]),
            P("Three Concealed Pungs", "三暗刻", 16, self._check_three_concealed_pungs,
              ["Two Concealed Pungs"]),

            # ========== 12 Points ==========
            P("Upper Four", "大于五", 12, self._check_upper_four, ["No Honors"]),
            P("Lower Four", "小于五", 12, self._check_lower_four, ["No Honors"]),
            P("Big Three Winds", "三风刻", 12, self._check_big_three_winds, []),

            # ========== 8 Points ==========
            P("Mixed Straight", "花龙", 8, self._check_mixed_straight, []),
            P("Reversible Tiles", "推不倒", 8, self._check_reversible_tiles,
              ["One Voided Suit"]),
            P("Mixed Triple Chow", "三色三同顺", 8, self._check_mixed_triple_chow,
              ["Mixed Double Chow"]),
            P("Mixed Shifted Pungs", "三色三节高", 8, self._check_mixed_shifted_pungs, []),
            P("Last Tile Draw", "妙手回春", 8, self._check_last_tile_draw, ["Self-Drawn"]),
            P("Last Tile Claim", "海底捞月", 8, self._check_last_tile_claim, []),
            P("Out with Replacement Tile", "杠上开花", 8, self._check_out_with_replacement,
              ["Self-Drawn"]),
            P("Robbing the Kong", "抢杠和", 8, self._check_robbing_kong, ["Last Tile"]),
            P("Two Concealed Kongs", "双暗杠", 8, self._check_two_concealed_kongs,
              ["Concealed Kong"]),

            # ========== 6 Points ==========
            P("All Pungs", "碰碰和", 6, self._check_all_pungs, []),
            P("Half Flush", "混一色", 6, self._check_half_flush, ["One Voided Suit"]),
            P("Mixed Shifted Chows", "三色三步高", 6, self._check_mixed_shifted_chows, []),
            P("All Types", "五门齐", 6, self._check_all_types, []),
            P("Melded Hand", "全求人", 6, self._check_melded_hand, ["Single Wait"]),
            P("Two Dragon Pungs", "双箭刻", 6, self._check_two_dragon_pungs, ["Dragon Pung"]),

            # ========== 4 Points ==========
            P("Outside Hand", "全带幺", 4, self._check_outside_hand, []),
            P("Fully Concealed Hand", "不求人", 4, self._check_fully_concealed_hand,
              ["Self-Drawn", "Concealed Hand"]),
            P("Two Melded Kongs", "双明杠", 4, self._check_two_melded_kongs, ["Melded Kong"]),
            P("Last Tile", "和绝张", 4, self._check_last_tile, []),

            # ========== 2 Points ==========
            P("Dragon Pung", "箭刻", 2, self._check_dragon_pung, []),
            P("Prevalent Wind", "圈风刻", 2, self._check_prevalent_wind, []),
            P("Seat Wind", "门风刻", 2, self._check_seat_wind, []),
            P("Concealed Hand", "门前清", 2, self._check_concealed_hand, []),
            P("All Chows", "平和", 2, self._check_all_chows, ["No Honors"]),
            P("Tile Hog", "四归一", 2, self._check_tile_hog, []),
            P("Double Pung", "双同刻", 2, self._check_double_pung, []),
            P("Two Concealed Pungs", "双暗刻", 2, self._check_two_concealed_pungs, []),
            P("Concealed Kong", "暗杠", 2, self._check_concealed_kong, []),
            P("All Simples", "断幺", 2, self._check_all_simples, ["No Honors"]),

            # ========== 1 Point ==========
            P("Pure Double Chow", "一般高", 1, self._check_pure_double_chow, []),
            P("Mixed Double Chow", "喜相逢", 1, self._check_mixed_double_chow, []),
            P("Short Straight", "连六", 1, self._check_short_straight, []),
            P("Two Terminal Chows", "老少副", 1, self._check_two_terminal_chows, []),
            P("Pung of Terminals or Honors", "幺九刻", 1, self._check_pung_terminals_honors, []),
            P("Melded Kong", "明杠", 1, self._check_melded_kong, []),
            P("One Voided Suit", "缺一门", 1, self._check_one_voided_suit, []),
            P("No Honors", "无字", 1, self._check_no_honors, []),
            P("Edge Wait", "边张", 1, self._check_edge_wait, []),
            P("Closed Wait", "嵌张", 1, self._check_closed_wait, []),
            P("Single Wait", "单钓将", 1, self._check_single_wait, []),
            P("Self-Drawn", "自摸", 1, self._check_self_drawn, []),
        ]

    # ========== Pattern Check Functions ==========

    # --- 88 Points ---

    def _check_big_four_winds(self, ctx: ScoringContext) -> bool:
        """Pungs/Kongs of all four winds"""
        return len(set(_wind_pungs(ctx))) == 4

    def _check_big_three_dragons(self, ctx: ScoringContext) -> bool:
        return len(set(_dragon_pungs(ctx))) == 3

    def _check_all_green(self, ctx: ScoringContext) -> bool:
        """All tiles are green (2,3,4,6,8 bamboo + green dragon)"""
        return ctx.all_match(lambda t: t.is_green)

    def _check_nine_gates(self, ctx: ScoringContext) -> bool:
        """1112345678999 + any tile of the same suit, fully concealed"""
        if ctx.hand.num_melds or len(ctx.suits) != 1 or ctx.has_honors:
            return False
        values = [0] * 10
        for t in ctx.all_tiles:
            values[t.value] += 1
        return values[1] >= 3 and values[9] >= 3 and all(values[v] >= 1 for v in range(2, 9))

    def _check_four_kongs(self, ctx: ScoringContext) -> bool:
        return len(ctx.kongs) == 4

    def _check_seven_shifted_pairs(self, ctx: ScoringContext) -> bool:
        """Seven consecutive pairs in same suit"""
        if ctx.family != ShapeFamily.SEVEN_PAIRS:
            return False
        counts = ctx.counts
        for suit in range(3):
            offset = suit * 9
            for start in range(3):
                if all(counts[offset + start + i] == 2 for i in range(7)):
                    return True
        return False

    def _check_thirteen_orphans(self, ctx: ScoringContext) -> bool:
        return ctx.family == ShapeFamily.THIRTEEN_ORPHANS

    # --- 64 Points ---

    def _check_all_terminals(self, ctx: ScoringContext) -> bool:
        return ctx.all_match(lambda t: t.is_terminal)

    def _check_little_four_winds(self, ctx: ScoringContext) -> bool:
        """Three wind pungs + wind pair"""
        pair = ctx.pair_tile
        return len(_wind_pungs(ctx)) == 3 and pair is not None and pair.suit == TileSuit.WINDS

    def _check_little_three_dragons(self, ctx: ScoringContext) -> bool:
        """Two dragon pungs + dragon pair"""
        pair = ctx.pair_tile
        return len(_dragon_pungs(ctx)) == 2 and pair is not None and pair.suit == TileSuit.DRAGONS

    def _check_all_honors(self, ctx: ScoringContext) -> bool:
        return ctx.all_match(lambda t: t.is_honor)

    def _check_four_concealed_pungs(self, ctx: ScoringContext) -> bool:
        return ctx.concealed_pung_count() == 4

    def _check_pure_terminal_chows(self, ctx: ScoringContext) -> bool:
        """123+789 twice in same suit + 5 pair"""
        chows = Counter(_chows(ctx))
        pair = ctx.pair_tile
        if pair is None or not pair.is_numbered or pair.value != 5:
            return False
        return chows[(pair.suit, 1)] == 2 and chows[(pair.suit, 7)] == 2

    # --- 48 Points ---

    def _check_quadruple_chow(self, ctx: ScoringContext) -> bool:
        """Four identical chows"""
        return any(c >= 4 for c in Counter(_chows(ctx)).values())

    def _check_four_pure_shifted_pungs(self, ctx: ScoringContext) -> bool:
        """Four pungs in sequence in same suit (e.g., 2222-3333-4444-5555)"""
        pungs = _numbered_pungs(ctx)
        return any(_shifted([v for s, v in pungs if s == suit], 4, 1) for suit in range(3))

    # --- 32 Points ---

    def _check_four_shifted_chows(self, ctx: ScoringContext) -> bool:
        """Four chows in sequence (by 1 or 2) in same suit"""
        chows = _chows(ctx)
        for suit in range(3):
            values = [v for s, v in chows if s == suit]
            if _shifted(values, 4, 1) or _shifted(values, 4, 2):
                return True
        return False

    def _check_three_kongs(self, ctx: ScoringContext) -> bool:
        return len(ctx.kongs) == 3

    def _check_all_terminals_and_honors(self, ctx: ScoringContext) -> bool:
        return ctx.all_match(lambda t: t.is_terminal_or_honor)

    # --- 24 Points ---

    def _check_seven_pairs(self, ctx: ScoringContext) -> bool:
        return ctx.family == ShapeFamily.SEVEN_PAIRS

    def _check_all_even_pungs(self, ctx: ScoringContext) -> bool:
        """All pungs of even numbers (2,4,6,8)"""
        if not self._check_all_pungs(ctx):
            return False
        return ctx.all_match(lambda t: t.is_numbered and t.value % 2 == 0)

    def _check_full_flush(self, ctx: ScoringContext) -> bool:
        """All tiles same numbered suit (no honors)"""
        return len(ctx.suits) == 1 and not ctx.has_honors

    def _check_pure_triple_chow(self, ctx: ScoringContext) -> bool:
        return any(c >= 3 for c in Counter(_chows(ctx)).values())

    def _check_pure_shifted_pungs(self, ctx: ScoringContext) -> bool:
        """Three pungs in sequence in same suit"""
        pungs = _numbered_pungs(ctx)
        return any(_shifted([v for s, v in pungs if s == suit], 3, 1) for suit in range(3))

    def _check_upper_tiles(self, ctx: ScoringContext) -> bool:
        """All tiles are 7,8,9"""
        return ctx.all_match(lambda t: t.is_numbered and t.value >= 7)

    def _check_middle_tiles(self, ctx: ScoringContext) -> bool:
        """All tiles are 4,5,6"""
        return ctx.all_match(lambda t: t.is_numbered and t.value in (4, 5, 6))

    def _check_lower_tiles(self, ctx: ScoringContext) -> bool:
        """All tiles are 1,2,3"""
        return ctx.all_match(lambda t: t.is_numbered and t.value <= 3)

    # --- 16 Points ---

    def _check_pure_straight(self, ctx: ScoringContext) -> bool:
        """123-456-789 in same suit"""
        chows = _chows(ctx)
        return any({1, 4, 7} <= {v for s, v in chows if s == suit} for suit in range(3))

    def _check_three_suited_terminal_chows(self, ctx: ScoringContext) -> bool:
        """123+789 in two suits + 5 pair in the third"""
        chows = set(_chows(ctx))
        pair = ctx.pair_tile
        if pair is None or not pair.is_numbered or pair.value != 5 or len(ctx.chows) != 4:
            return False
        others = [s for s in range(3) if s != pair.suit]
        return all((s, 1) in chows and (s, 7) in chows for s in others)

    def _check_pure_shifted_chows(self, ctx: ScoringContext) -> bool:
        """Three chows in sequence (by 1 or 2) in same suit"""
        chows = _chows(ctx)
        for suit in range(3):
            values = [v for s, v in chows if s == suit]
            if _shifted(values, 3, 1) or _shifted(values, 3, 2):
                return True
        return False

    def _check_all_fives(self, ctx: ScoringContext) -> bool:
        """Every set and pair contains a 5"""
        if not ctx.is_standard:
            return False
        for block in ctx.blocks:
            if not any(t.is_numbered and t.value == 5 for t in block.tiles):
                return False
        pair = ctx.pair_tile
        return pair.is_numbered and pair.value == 5

    def _check_triple_pung(self, ctx: ScoringContext) -> bool:
        """Three pungs of same number in different suits"""
        return any(len(suits) >= 3 for suits in _by_value(_numbered_pungs(ctx)).values())

    def _check_three_concealed_pungs(self, ctx: ScoringContext) -> bool:
        return ctx.concealed_pung_count() == 3

    # --- 12 Points ---

    def _check_upper_four(self, ctx: ScoringContext) -> bool:
        """All tiles are 6,7,8,9"""
        return ctx.all_match(lambda t: t.is_numbered and t.value >= 6)

    def _check_lower_four(self, ctx: ScoringContext) -> bool:
        """All tiles are 1,2,3,4"""
        return ctx.all_match(lambda t: t.is_numbered and t.value <= 4)

    def _check_big_three_winds(self, ctx: ScoringContext) -> bool:
        return len(_wind_pungs(ctx)) == 3

    # --- 8 Points ---

    def _check_mixed_straight(self, ctx: ScoringContext) -> bool:
        """123-456-789 from three different suits"""
        chows = _chows(ctx)
        for s1, v1 in chows:
            for s4, v4 in chows:
                for s7, v7 in chows:
                    if (v1, v4, v7) == (1, 4, 7) and len({s1, s4, s7}) == 3:
                        return True
        return False

    def _check_reversible_tiles(self, ctx: ScoringContext) -> bool:
        """All tiles look the same upside down"""
        reversible = {
            (TileSuit.DOTS, 1), (TileSuit.DOTS, 2), (TileSuit.DOTS, 3),
            (TileSuit.DOTS, 4), (TileSuit.DOTS, 5), (TileSuit.DOTS, 8),
            (TileSuit.DOTS, 9), (TileSuit.BAMBOOS, 2), (TileSuit.BAMBOOS, 4),
            (TileSuit.BAMBOOS, 5), (TileSuit.BAMBOOS, 6), (TileSuit.BAMBOOS, 8),
            (TileSuit.BAMBOOS, 9), (TileSuit.DRAGONS, DragonType.WHITE),
        }
        return ctx.all_match(lambda t: (t.suit, t.value) in reversible)

    def _check_mixed_triple_chow(self, ctx: ScoringContext) -> bool:
        """Three chows of same numbers in different suits"""
        return any(len(suits) >= 3 for suits in _by_value(_chows(ctx)).values())

    def _check_mixed_shifted_pungs(self, ctx: ScoringContext) -> bool:
        """Three pungs in sequence from three suits"""
        pungs = _numbered_pungs(ctx)
        for i in range(len(pungs)):
            for j in range(i + 1, len(pungs)):
                for k in range(j + 1, len(pungs)):
                    suits = {pungs[i][0], pungs[j][0], pungs[k][0]}
                    vals = sorted([pungs[i][1], pungs[j][1], pungs[k][1]])
                    if len(suits) == 3 and vals == list(range(vals[0], vals[0] + 3)):
                        return True
        return False

    def _check_last_tile_draw(self, ctx: ScoringContext) -> bool:
        return ctx.is_zimo and ctx.win.is_last_tile

    def _check_last_tile_claim(self, ctx: ScoringContext) -> bool:
        return not ctx.is_zimo and ctx.win.is_last_tile

    def _check_out_with_replacement(self, ctx: ScoringContext) -> bool:
        return ctx.is_zimo and ctx.win.is_kong_replacement

    def _check_robbing_kong(self, ctx: ScoringContext) -> bool:
        return ctx.win.is_robbing_kong

    def _check_two_concealed_kongs(self, ctx: ScoringContext) -> bool:
        return sum(1 for b in ctx.kongs if b.concealed) == 2

    # --- 6 Points ---

    def _check_all_pungs(self, ctx: ScoringContext) -> bool:
        """Four pungs/kongs + pair"""
        return ctx.is_standard and len(ctx.pungs) == 4

    def _check_half_flush(self, ctx: ScoringContext) -> bool:
        """One numbered suit + honors"""
        return len(ctx.suits) == 1 and ctx.has_honors

    def _check_mixed_shifted_chows(self, ctx: ScoringContext) -> bool:
        """Three chows shifted by one from three suits"""
        chows = _chows(ctx)
        for i in range(len(chows)):
            for j in range(i + 1, len(chows)):
                for k in range(j + 1, len(chows)):
                    suits = {chows[i][0], chows[j][0], chows[k][0]}
                    vals = sorted([chows[i][1], chows[j][1], chows[k][1]])
                    if len(suits) == 3 and vals == list(range(vals[0], vals[0] + 3)):
                        return True
        return False

    def _check_all_types(self, ctx: ScoringContext) -> bool:
        """All five tile types present (3 suits + winds + dragons)"""
        kinds = {t.suit for t in ctx.all_tiles}
        return kinds >= set(NUMBERED_SUITS) | {TileSuit.WINDS, TileSuit.DRAGONS}

    def _check_melded_hand(self, ctx: ScoringContext) -> bool:
        """Four exposed melds + win on discard"""
        exposed = [m for m in ctx.hand.melds if m.is_open]
        return len(exposed) == 4 and not ctx.is_zimo

    def _check_two_dragon_pungs(self, ctx: ScoringContext) -> bool:
        return len(_dragon_pungs(ctx)) == 2

    # --- 4 Points ---

    def _check_outside_hand(self, ctx: ScoringContext) -> bool:
        """Every set and the pair contain a terminal or honor"""
        if not ctx.is_standard:
            return False
        if not all(any(t.is_terminal_or_honor for t in b.tiles) for b in ctx.blocks):
            return False
        return ctx.pair_tile.is_terminal_or_honor

    def _check_fully_concealed_hand(self, ctx: ScoringContext) -> bool:
        """Concealed hand with self-drawn win"""
        return ctx.is_concealed and ctx.is_zimo

    def _check_two_melded_kongs(self, ctx: ScoringContext) -> bool:
        return sum(1 for b in ctx.kongs if not b.concealed) == 2

    def _check_last_tile(self, ctx: ScoringContext) -> bool:
        """Win on the last unseen copy of a tile"""
        return ctx.win.is_last_copy

    # --- 2 Points ---

    def _check_dragon_pung(self, ctx: ScoringContext) -> bool:
        return len(_dragon_pungs(ctx)) >= 1

    def _check_prevalent_wind(self, ctx: ScoringContext) -> bool:
        return ctx.round_wind in _wind_pungs(ctx)

    def _check_seat_wind(self, ctx: ScoringContext) -> bool:
        return ctx.seat_wind in _wind_pungs(ctx)

    def _check_concealed_hand(self, ctx: ScoringContext) -> bool:
        """No exposed melds (concealed kongs OK)"""
        return ctx.is_concealed

    def _check_all_chows(self, ctx: ScoringContext) -> bool:
        """Four chows + non-honor pair"""
        if not ctx.is_standard or len(ctx.chows) != 4:
            return False
        return not ctx.pair_tile.is_honor

    def _check_tile_hog(self, ctx: ScoringContext) -> bool:
        """Four of a tile type without kong"""
        kongs = {b.tile_index for b in ctx.kongs}
        return any(ctx.counts[i] == 4 and i not in kongs for i in range(len(ctx.counts)))

    def _check_double_pung(self, ctx: ScoringContext) -> bool:
        """Two pungs of same number in different suits"""
        return any(len(suits) >= 2 for suits in _by_value(_numbered_pungs(ctx)).values())

    def _check_two_concealed_pungs(self, ctx: ScoringContext) -> bool:
        return ctx.concealed_pung_count() == 2

    def _check_concealed_kong(self, ctx: ScoringContext) -> bool:
        return any(b.concealed for b in ctx.kongs)

    def _check_all_simples(self, ctx: ScoringContext) -> bool:
        """No terminals or honors"""
        return ctx.all_match(lambda t: t.is_simple)

    # --- 1 Point ---

    def _check_pure_double_chow(self, ctx: ScoringContext) -> bool:
        """Two identical chows in same suit"""
        return any(c >= 2 for c in Counter(_chows(ctx)).values())

    def _check_mixed_double_chow(self, ctx: ScoringContext) -> bool:
        """Two chows of the same numbers in different suits"""
        return any(len(suits) >= 2 for suits in _by_value(_chows(ctx)).values())

    def _check_short_straight(self, ctx: ScoringContext) -> bool:
        """Two consecutive chows in same suit (e.g., 123-456)"""
        chows = set(_chows(ctx))
        return any((s, v + 3) in chows for s, v in chows)

    def _check_two_terminal_chows(self, ctx: ScoringContext) -> bool:
        """123 and 789 in same suit"""
        chows = set(_chows(ctx))
        return any((s, 1) in chows and (s, 7) in chows for s in range(3))

    def _check_pung_terminals_honors(self, ctx: ScoringContext) -> int:
        """
        One per terminal pung and per wind pung that is neither seat nor
        prevalent wind. Dragon and scoring wind pungs have their own
        patterns.
        """
        terminals = sum(1 for _, v in _numbered_pungs(ctx) if v in (1, 9))
        winds = sum(1 for w in _wind_pungs(ctx) if w not in (ctx.seat_wind, ctx.round_wind))
        return terminals + winds

    def _check_melded_kong(self, ctx: ScoringContext) -> bool:
        return any(not b.concealed for b in ctx.kongs)

    def _check_one_voided_suit(self, ctx: ScoringContext) -> bool:
        """Missing exactly one numbered suit"""
        return len(ctx.suits) == 2

    def _check_no_honors(self, ctx: ScoringContext) -> bool:
        return not ctx.has_honors

    def _check_edge_wait(self, ctx: ScoringContext) -> bool:
        """Won on 3 to complete 12X or 7 to complete X89"""
        return ctx.wait == WaitType.EDGE and self._only_winning_tile(ctx)

    def _check_closed_wait(self, ctx: ScoringContext) -> bool:
        """Won on the middle tile of a chow"""
        return ctx.wait == WaitType.CLOSED and self._only_winning_tile(ctx)

    def _check_single_wait(self, ctx: ScoringContext) -> bool:
        """Won on the pair tile"""
        return (ctx.is_standard and ctx.wait == WaitType.SINGLE
                and self._only_winning_tile(ctx))

    def _only_winning_tile(self, ctx: ScoringContext) -> bool:
        """Whether the hand before the win waited on one kind of tile only"""
        if ctx.winning_tile is None:
            return False
        counts = ctx.hand.concealed_counts()
        counts[ctx.winning_tile.tile_index] -= 1
        waits = self._calculator.completing_tiles(counts, ctx.hand.num_melds)
        return len(waits) == 1

    def _check_self_drawn(self, ctx: ScoringContext) -> bool:
        return ctx.is_zimo
