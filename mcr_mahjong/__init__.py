"""
MCR Mahjong scoring variant
Chinese Official Mahjong (Mahjong Competition Rules)
"""

from .scoring import MCRVariant, ScoringPattern, MIN_WINNING_SCORE, BASE_PAYMENT

__all__ = [
    "MCRVariant",
    "ScoringPattern",
    "MIN_WINNING_SCORE",
    "BASE_PAYMENT",
]
