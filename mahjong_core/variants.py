"""
The closed set of rule variants the engine knows about.
"""

from enum import Enum
from typing import Union

from .scoring import RuleVariant


class VariantTag(str, Enum):
    MCR = "mcr"
    RIICHI = "riichi"
    SHANGHAI = "shanghai"


def resolve_variant(variant: Union[RuleVariant, VariantTag, str]) -> RuleVariant:
    """
    Turn a tag (or its string value) into a variant with default rules.
    Variant instances pass through untouched.
    """
    if isinstance(variant, RuleVariant):
        return variant

    tag = VariantTag(variant)
    if tag is VariantTag.MCR:
        from mcr_mahjong.scoring import MCRVariant
        return MCRVariant()
    elif tag is VariantTag.RIICHI:
        from riichi_mahjong.scoring import RiichiVariant
        return RiichiVariant()
    else:
        from shanghai_mahjong.scoring import ShanghaiVariant
        return ShanghaiVariant()
