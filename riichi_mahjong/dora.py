"""
Dora for Riichi Mahjong

Dora add han to a winning hand without being yaku themselves:
- Regular dora and kandora, from the indicators on the dead wall
- Uradora, from the indicators under them, for riichi wins
- Akadora, red fives
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from mahjong_core.context import WinContext
from mahjong_core.tiles import Tile, TileSuit, NUMBERED_SUITS

from .rules import RuleSet


def get_dora_tile(indicator: Tile) -> Tile:
    """
    The tile an indicator points at: the next one in sequence.

    - Numbers: 1->2->...->9->1
    - Winds: E->S->W->N->E
    - Dragons: White->Green->Red->White
    """
    if indicator.suit in NUMBERED_SUITS:
        return Tile(indicator.suit, indicator.value % 9 + 1)
    if indicator.suit == TileSuit.WINDS:
        return Tile(TileSuit.WINDS, (indicator.value + 1) % 4)
    if indicator.suit == TileSuit.DRAGONS:
        # DragonType counts Red=0, Green=1, White=2, so step downwards
        return Tile(TileSuit.DRAGONS, (indicator.value - 1) % 3)
    raise ValueError(f"{indicator!r} cannot be a dora indicator")


@dataclass
class DoraSystem:
    """
    Dora indicators revealed for one win.

    Attributes:
        dora_indicators: Face-up indicators, kandora included
        uradora_indicators: Indicators revealed under them
        red_fives_enabled: Red fives count as dora
    """

    dora_indicators: List[Tile] = field(default_factory=list)
    uradora_indicators: List[Tile] = field(default_factory=list)
    red_fives_enabled: bool = False

    def get_all_dora_tiles(self) -> List[Tile]:
        return [get_dora_tile(ind) for ind in self.dora_indicators]

    def get_all_uradora_tiles(self) -> List[Tile]:
        return [get_dora_tile(ind) for ind in self.uradora_indicators]

    def count_dora(self, tiles: Iterable[Tile]) -> int:
        """Each tile counts once per indicator pointing at it"""
        return _count_matches(tiles, self.get_all_dora_tiles())

    def count_uradora(self, tiles: Iterable[Tile]) -> int:
        return _count_matches(tiles, self.get_all_uradora_tiles())

    def count_akadora(self, red_fives: int) -> int:
        return red_fives if self.red_fives_enabled else 0

    def __repr__(self) -> str:
        dora_str = ", ".join(str(t) for t in self.get_all_dora_tiles())
        return f"DoraSystem(dora=[{dora_str}], red_fives={self.red_fives_enabled})"


def _count_matches(tiles: Iterable[Tile], targets: List[Tile]) -> int:
    tiles = list(tiles)
    return sum(1 for target in targets for tile in tiles if tile == target)


def create_dora_system(context: WinContext, rules: RuleSet) -> DoraSystem:
    """
    Dora system for a win.

    Uradora are only kept for riichi wins when the rules say so.
    """
    riichi = context.riichi or context.double_riichi
    hidden = context.hidden_indicators
    if rules.uradora_on_riichi_win and not riichi:
        hidden = ()
    return DoraSystem(
        dora_indicators=list(context.indicators),
        uradora_indicators=list(hidden),
        red_fives_enabled=rules.red_fives > 0,
    )
