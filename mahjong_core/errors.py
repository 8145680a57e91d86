"""
Exceptions raised by the evaluation core.

Everything derives from MahjongError and ValueError, so callers that only
care about malformed input can keep catching ValueError.
"""

from typing import Optional


class MahjongError(ValueError):
    """Base class for all evaluation errors"""


class InvalidTileError(MahjongError):
    """Tile identity outside the known alphabet"""


class InvalidMeldError(MahjongError):
    """A group that violates the meld rules"""

    def __init__(self, violation, message: Optional[str] = None):
        self.violation = violation
        super().__init__(message or f"Invalid meld: {violation.name.lower()}")


class HandSizeError(MahjongError):
    """Hand holds the wrong number of tiles for the requested operation"""

    def __init__(self, expected, actual: int):
        self.expected = tuple(expected) if isinstance(expected, (tuple, list, set)) else (expected,)
        self.actual = actual
        wanted = " or ".join(str(n) for n in sorted(self.expected))
        super().__init__(f"Hand must hold {wanted} tiles, got {actual}")


class TileCountError(MahjongError):
    """More copies of a tile than exist in the set"""


class TileNotInHandError(MahjongError):
    """Tried to take a tile the hand does not hold"""
