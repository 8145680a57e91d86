"""
Situation of a win, as supplied by whoever runs the game.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Optional, Tuple

from .tiles import Tile, WindType


class WinMethod(IntEnum):
    SELF_DRAWN = 0  # 自摸 / tsumo
    DISCARD = 1     # 点和 / ron


class SeatRole(IntEnum):
    DEALER = 0
    NON_DEALER = 1


@dataclass(frozen=True)
class WinContext:
    """
    Everything about a win that the tiles alone do not tell.

    Attributes:
        win_method: Self-drawn or on a discard
        seat_role: Dealer or not
        seat_wind: The winner's seat wind
        round_wind: Prevalent wind
        indicators: Bonus indicator tiles (dora indicators)
        hidden_indicators: Indicators revealed only after the win (uradora)
        winning_tile: Defaults to the hand's drawn tile
        riichi: Ready declaration made
        double_riichi: Ready declaration made on the first turn
        ippatsu: Won within one go-around of the declaration
        is_last_tile: Won on the last tile of the wall
        is_kong_replacement: Won on the replacement draw after a kong
        is_robbing_kong: Won on a tile added to a promoted kong
        is_first_turn: Won on the first draw (or first discard) of the hand
        is_last_copy: The winning tile was the last unseen copy
        honba: Repeat counters on the table
        riichi_sticks: Deposits waiting to be collected
    """
    win_method: WinMethod = WinMethod.SELF_DRAWN
    seat_role: SeatRole = SeatRole.NON_DEALER
    seat_wind: WindType = WindType.SOUTH
    round_wind: WindType = WindType.EAST
    indicators: Tuple[Tile, ...] = ()
    hidden_indicators: Tuple[Tile, ...] = ()
    winning_tile: Optional[Tile] = None
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    is_last_tile: bool = False
    is_kong_replacement: bool = False
    is_robbing_kong: bool = False
    is_first_turn: bool = False
    is_last_copy: bool = False
    honba: int = 0
    riichi_sticks: int = 0

    @property
    def is_self_drawn(self) -> bool:
        return self.win_method == WinMethod.SELF_DRAWN

    @property
    def is_dealer(self) -> bool:
        return self.seat_role == SeatRole.DEALER
