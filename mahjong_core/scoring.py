"""
Scoring Engine

Variant-independent half of scoring. For a complete hand the engine
enumerates every shape interpretation and every place the winning tile
can sit, asks the rule variant which categories each interpretation
earns, and keeps the best one that passes the variant's minimum.

A rule variant plugs in through four operations:
- enumerate_categories: which scoring categories an interpretation earns
- qualifies: whether those categories are enough to declare a win
- aggregate: combine categories into the variant's total
- convert_to_points: turn the total into payments between players
"""

import logging
from abc import ABC, abstractmethod
from enum import IntEnum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .context import WinContext
from .errors import TileNotInHandError
from .hand import Hand
from .shanten import ShantenCalculator
from .tiles import Tile, TileSuit, NUM_TILE_KINDS, NUMBERED_SUITS
from .win_shapes import Block, HandShape, ShapeFamily, WaitType, WinPolicy, expand_waits, find_shapes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """
    A scoring category earned by a hand.

    Attributes:
        name: English name
        weight: Points, han or fan, depending on the variant
        local_name: Name in the variant's home language
        excludes: Categories this one implies and therefore replaces
        bonus: Flat extra (flowers, dora) that never helps reach a minimum
    """
    name: str
    weight: int
    local_name: str = ""
    excludes: Tuple[str, ...] = ()
    bonus: bool = False


def apply_exclusions(categories: Iterable[Category]) -> List[Category]:
    """Drop every category that a matched higher category implies"""
    categories = list(categories)
    excluded: Set[str] = set()
    for category in categories:
        excluded.update(category.excludes)
    return [c for c in categories if c.name not in excluded]


@dataclass
class Aggregate:
    """
    A variant's combined total.

    Attributes:
        value: What interpretations are ranked by (points, base points)
        total: Primary measure (points, han, fan)
        secondary: Secondary measure, e.g. fu
        bonus: Flat points added outside the primary measure
        limit: Name of the limit reached, if any
    """
    value: int
    total: int
    secondary: int = 0
    bonus: int = 0
    limit: Optional[str] = None


class Payer(IntEnum):
    DISCARDER = 0
    DEALER = 1
    NON_DEALER = 2
    BYSTANDER = 3   # opponent who did not deal in
    TABLE = 4       # deposits on the table


@dataclass(frozen=True)
class Payment:
    payer: Payer
    amount: int


@dataclass
class ScoreResult:
    """Outcome of a successful win"""
    variant: str
    categories: List[Tuple[str, int]]
    aggregate: Aggregate
    payments: List[Payment]
    shape: HandShape

    @property
    def total(self) -> int:
        """Everything the winner collects"""
        return sum(p.amount for p in self.payments)

    @property
    def category_names(self) -> List[str]:
        return [name for name, _ in self.categories]


class ScoringContext:
    """
    One interpretation of a winning hand, analysed for scoring.

    Built by the engine for each shape/wait pair and handed to the
    variant. Nothing in here is variant specific.
    """

    def __init__(self, hand: Hand, shape: HandShape, win: WinContext,
                 winning_tile: Optional[Tile] = None):
        self.hand = hand
        self.shape = shape
        self.win = win
        self.winning_tile = winning_tile

        self.is_zimo = win.is_self_drawn
        self.round_wind = int(win.round_wind)
        self.seat_wind = int(win.seat_wind)
        self.is_concealed = hand.is_concealed
        self.flowers = [t for t in hand.bonus_tiles() if t.is_flower]
        self.red_fives = hand.red_five_count

        self.counts = hand.counts_with_melds()
        self.all_tiles: List[Tile] = []
        for idx in range(NUM_TILE_KINDS):
            self.all_tiles.extend([Tile.from_index(idx)] * int(self.counts[idx]))

        self.blocks: Tuple[Block, ...] = shape.blocks
        self.chows = shape.chows
        self.pungs = shape.pungs
        self.kongs = shape.kongs
        self.pair = shape.pair

    @property
    def family(self) -> ShapeFamily:
        return self.shape.family

    @property
    def wait(self) -> Optional[WaitType]:
        return self.shape.wait

    @property
    def is_standard(self) -> bool:
        return self.shape.family == ShapeFamily.STANDARD

    @property
    def pair_tile(self) -> Optional[Tile]:
        return Tile.from_index(self.pair) if self.pair is not None else None

    @property
    def suits(self) -> Set[TileSuit]:
        """Numbered suits present"""
        return {t.suit for t in self.all_tiles if t.suit in NUMBERED_SUITS}

    @property
    def has_honors(self) -> bool:
        return any(t.is_honor for t in self.all_tiles)

    def concealed_pung_count(self) -> int:
        return sum(1 for b in self.pungs if b.concealed)

    def pung_indices(self) -> List[int]:
        return [b.tile_index for b in self.pungs]

    def chow_starts(self) -> List[Tuple[int, int]]:
        """(suit, first value) of each chow"""
        return [(b.tile_index // 9, b.tile_index % 9 + 1) for b in self.chows]

    def all_match(self, predicate) -> bool:
        return all(predicate(t) for t in self.all_tiles)


class RuleVariant(ABC):
    """
    A rule variant's scoring rules.

    Subclasses set `name` and `policy` and implement the four hooks.
    """

    name: str = ""
    policy: WinPolicy = WinPolicy()

    @abstractmethod
    def enumerate_categories(self, ctx: ScoringContext) -> List[Category]:
        """Categories earned by one interpretation, exclusions applied"""

    @abstractmethod
    def qualifies(self, categories: Sequence[Category], ctx: ScoringContext) -> bool:
        """Whether the categories meet the variant's minimum"""

    @abstractmethod
    def aggregate(self, categories: Sequence[Category], ctx: ScoringContext) -> Aggregate:
        """Combine categories into the variant's total"""

    @abstractmethod
    def convert_to_points(self, aggregate: Aggregate, ctx: ScoringContext) -> List[Payment]:
        """Payments owed to the winner"""

    def rank(self, aggregate: Aggregate) -> Tuple[int, ...]:
        """Sort key used to pick the best interpretation"""
        return (aggregate.value, aggregate.total, aggregate.secondary)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ScoringEngine:
    """
    Scores complete hands under any rule variant.

    Args:
        calculator: Shanten calculator used to confirm completeness;
            built from the variant's policy when omitted
    """

    def __init__(self, calculator: Optional[ShantenCalculator] = None):
        self.calculator = calculator

    def score(self, hand: Hand, context: WinContext, variant) -> Optional[ScoreResult]:
        """
        Score a 14-tile hand.

        Returns:
            The best qualifying ScoreResult, or None when the hand is not
            complete or does not meet the variant's minimum
        """
        from .variants import resolve_variant

        variant = resolve_variant(variant)
        hand.require_size(14)

        winning_tile = context.winning_tile or hand.drawn_tile
        if winning_tile is not None and hand.count(winning_tile) == 0:
            raise TileNotInHandError(f"Winning tile {winning_tile} is not in the concealed hand")

        calculator = self.calculator or ShantenCalculator(variant.policy)
        distance = calculator.minimum(hand.concealed_counts(), hand.num_melds)
        shapes = find_shapes(hand, variant.policy)
        if distance != -1 or not shapes:
            if distance == -1 or shapes:
                logger.warning(
                    f"Shanten {distance} disagrees with {len(shapes)} decompositions for {hand}"
                )
            return None

        best = None
        for ctx in self._interpretations(hand, shapes, context, winning_tile):
            categories = variant.enumerate_categories(ctx)
            if not variant.qualifies(categories, ctx):
                logger.debug(f"{variant.name}: {ctx.shape.family.name} reading does not qualify")
                continue
            aggregate = variant.aggregate(categories, ctx)
            if best is None or variant.rank(aggregate) > variant.rank(best[1]):
                best = (categories, aggregate, ctx)

        if best is None:
            return None

        categories, aggregate, ctx = best
        payments = variant.convert_to_points(aggregate, ctx)
        logger.debug(f"{variant.name}: scored {aggregate.total} ({[c.name for c in categories]})")
        return ScoreResult(
            variant=variant.name,
            categories=[(c.name, c.weight) for c in categories],
            aggregate=aggregate,
            payments=payments,
            shape=ctx.shape,
        )

    @staticmethod
    def _interpretations(hand: Hand, shapes: List[HandShape], context: WinContext,
                         winning_tile: Optional[Tile]):
        for shape in shapes:
            if winning_tile is None:
                yield ScoringContext(hand, shape, context)
                continue
            for labelled in expand_waits(shape, winning_tile, context.is_self_drawn):
                yield ScoringContext(hand, labelled, context, winning_tile)
