"""
Shanghai Mahjong scoring variant
Additive fan with a cap, flowers as flat points
"""

from .scoring import ShanghaiVariant, FanRule, FAN_UNITS, MAX_FAN

__all__ = [
    "ShanghaiVariant",
    "FanRule",
    "FAN_UNITS",
    "MAX_FAN",
]
