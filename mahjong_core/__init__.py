"""
Mahjong hand evaluation core.

Tiles, hands and melds shared by all rule variants, plus shanten,
winning-shape detection, the variant-agnostic scoring engine and
discard efficiency. Entry points live in mahjong_core.api.
"""

from .errors import (
    MahjongError, InvalidTileError, InvalidMeldError, HandSizeError,
    TileCountError, TileNotInHandError,
)
from .tiles import Tile, TileSuit, WindType, DragonType, FlowerType
from .meld import Meld, MeldType, KongType, MeldViolation, MeldCandidate, TileSource, SELF_DRAWN, claimed_from
from .hand import Hand
from .win_shapes import WinPolicy, ShapeFamily, WaitType, HandShape
from .shanten import ShantenCalculator, ShantenResult, SHANTEN_IMPOSSIBLE
from .context import WinContext, WinMethod, SeatRole
from .scoring import ScoringEngine, ScoreResult, RuleVariant, Category, Aggregate, Payment, Payer
from .variants import VariantTag, resolve_variant
from .efficiency import EfficiencyAnalyzer, DiscardMetrics

__version__ = "0.1.0"
__all__ = [
    "MahjongError",
    "InvalidTileError",
    "InvalidMeldError",
    "HandSizeError",
    "TileCountError",
    "TileNotInHandError",
    "Tile",
    "TileSuit",
    "WindType",
    "DragonType",
    "FlowerType",
    "Meld",
    "MeldType",
    "KongType",
    "MeldViolation",
    "MeldCandidate",
    "TileSource",
    "SELF_DRAWN",
    "claimed_from",
    "Hand",
    "WinPolicy",
    "ShapeFamily",
    "WaitType",
    "HandShape",
    "ShantenCalculator",
    "ShantenResult",
    "SHANTEN_IMPOSSIBLE",
    "WinContext",
    "WinMethod",
    "SeatRole",
    "ScoringEngine",
    "ScoreResult",
    "RuleVariant",
    "Category",
    "Aggregate",
    "Payment",
    "Payer",
    "VariantTag",
    "resolve_variant",
    "EfficiencyAnalyzer",
    "DiscardMetrics",
]
