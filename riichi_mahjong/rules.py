"""
Riichi Mahjong Rule Sets

Scoring switches that differ between organisations:
- EMA (European Mahjong Association)
- Tenhou (Japanese online platform)
- WRC (World Riichi Championship)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Scoring rules for one Riichi Mahjong organisation.

    Only the switches that change how a finished hand is valued live
    here; seating, uma and abortive draws belong to whoever runs the game.
    """

    name: str = "Default"

    # Red dora (akadora), 0, 3 or 4 red fives in the set
    red_fives: int = 0

    # Kuitan (open tanyao)
    allow_kuitan: bool = True

    # 13+ han counts as yakuman; otherwise capped at sanbaiman
    kazoe_yakuman: bool = True

    # 4 han 30 fu and 3 han 60 fu round up to mangan
    kiriage_mangan: bool = False

    # Kokushi 13-sided, suuankou tanki, junsei chuuren and daisuushii count twice
    double_yakuman: bool = False

    # Uradora only count when the winner declared riichi
    uradora_on_riichi_win: bool = True

    # Per repeat counter: 300 on a discard win, 100 from each payer on self-draw
    honba_value: int = 300

    riichi_deposit: int = 1000

    def __repr__(self) -> str:
        return f"RuleSet({self.name})"


# EMA (European Mahjong Association) Rules
EMA_RULES = RuleSet(
    name="EMA",
    red_fives=0,  # No red dora in EMA
    allow_kuitan=True,
    kazoe_yakuman=False,
    kiriage_mangan=False,
    double_yakuman=False,
)


# Tenhou Rules (Japanese online platform)
TENHOU_RULES = RuleSet(
    name="Tenhou",
    red_fives=3,  # One red 5 in each suit
    allow_kuitan=True,
    kazoe_yakuman=True,
    kiriage_mangan=False,
    double_yakuman=False,
)


# WRC (World Riichi Championship) Rules
WRC_RULES = RuleSet(
    name="WRC",
    red_fives=0,
    allow_kuitan=True,
    kazoe_yakuman=False,
    kiriage_mangan=True,
    double_yakuman=False,
)
