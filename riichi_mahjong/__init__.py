"""
Riichi Mahjong scoring variant
Japanese Mahjong with support for EMA, Tenhou and WRC rules
"""

from .scoring import RiichiVariant, Yaku
from .dora import DoraSystem, get_dora_tile
from .rules import RuleSet, EMA_RULES, TENHOU_RULES, WRC_RULES

__all__ = [
    "RiichiVariant",
    "Yaku",
    "DoraSystem",
    "get_dora_tile",
    "RuleSet",
    "EMA_RULES",
    "TENHOU_RULES",
    "WRC_RULES",
]
