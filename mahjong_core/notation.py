"""
Compact text notation for tiles and hands.

    123m456p789s1122z   digits followed by their suit
    0m / 0p / 0s        red five
    1z-7z               East South West North White Green Red
    1f-8f               flowers (seasons, then plants)

A hand string may add the drawn tile and declared melds as extra
whitespace separated tokens:

    "123m456p11z +5s [789s] [1111z!]"

`[...]` is an exposed meld, `[...!]` a concealed kong. Hands are built
through the Hand API, so all of its checks apply.
"""

from typing import Iterable, List

from .errors import InvalidMeldError, InvalidTileError
from .hand import Hand
from .meld import KongType, Meld, MeldType, MeldViolation
from .tiles import Tile, TileSuit, DragonType

_SUIT_LETTERS = {
    'm': TileSuit.CHARACTERS,
    'p': TileSuit.DOTS,
    's': TileSuit.BAMBOOS,
}

# 5z 6z 7z
_DRAGON_ORDER = (DragonType.WHITE, DragonType.GREEN, DragonType.RED)

_OUTPUT_ORDER = ('m', 'p', 's', 'z', 'f')


def _tile_from(digit: int, letter: str) -> Tile:
    if letter in _SUIT_LETTERS:
        if digit == 0:
            return Tile(_SUIT_LETTERS[letter], 5, is_red=True)
        return Tile(_SUIT_LETTERS[letter], digit)
    if letter == 'z':
        if 1 <= digit <= 4:
            return Tile(TileSuit.WINDS, digit - 1)
        if 5 <= digit <= 7:
            return Tile(TileSuit.DRAGONS, _DRAGON_ORDER[digit - 5])
    if letter == 'f' and 1 <= digit <= 8:
        return Tile(TileSuit.FLOWERS, digit - 1)
    raise InvalidTileError(f"No tile {digit}{letter}")


def _letter_and_digit(tile: Tile):
    for letter, suit in _SUIT_LETTERS.items():
        if tile.suit == suit:
            return letter, 0 if tile.is_red else tile.value
    if tile.suit == TileSuit.WINDS:
        return 'z', tile.value + 1
    if tile.suit == TileSuit.DRAGONS:
        return 'z', _DRAGON_ORDER.index(tile.value) + 5
    if tile.suit == TileSuit.FLOWERS:
        return 'f', tile.value + 1
    raise InvalidTileError(f"{tile!r} has no notation")


def parse_tiles(text: str) -> List[Tile]:
    """Parse "123m45p" style text into tiles, in written order"""
    tiles = []
    pending = []
    for ch in text.strip():
        if ch.isdigit():
            pending.append(int(ch))
        elif ch in _SUIT_LETTERS or ch in 'zf':
            if not pending:
                raise InvalidTileError(f"Suit letter '{ch}' without digits in {text!r}")
            tiles.extend(_tile_from(d, ch) for d in pending)
            pending = []
        elif not ch.isspace():
            raise InvalidTileError(f"Unexpected character '{ch}' in {text!r}")
    if pending:
        raise InvalidTileError(f"Digits without a suit letter in {text!r}")
    return tiles


def format_tiles(tiles: Iterable[Tile]) -> str:
    """Inverse of parse_tiles, grouped by suit in m p s z f order"""
    groups = {letter: [] for letter in _OUTPUT_ORDER}
    for tile in sorted(tiles, key=lambda t: (t.tile_index, not t.is_red)):
        letter, digit = _letter_and_digit(tile)
        groups[letter].append(str(digit))
    return "".join("".join(digits) + letter for letter, digits in groups.items() if digits)


def parse_meld(text: str) -> Meld:
    """Parse a meld body like "789s", "555m" or "1111z!" (concealed kong)"""
    concealed = text.endswith('!')
    tiles = parse_tiles(text.rstrip('!'))
    if len(tiles) == 4:
        kong_type = KongType.CONCEALED if concealed else KongType.OPEN
        return Meld(MeldType.KONG, tuple(tiles), kong_type=kong_type)
    if len(tiles) != 3:
        raise InvalidMeldError(MeldViolation.WRONG_COUNT, f"Cannot read meld {text!r}")
    if all(t == tiles[0] for t in tiles):
        return Meld(MeldType.PONG, tuple(tiles))
    return Meld(MeldType.CHOW, tuple(tiles))


def parse_hand(text: str) -> Hand:
    """Build a Hand from concealed tiles, an optional "+tile" and "[meld]" tokens"""
    hand = Hand()
    drawn = None
    for token in text.split():
        if token.startswith('[') and token.endswith(']'):
            hand.declare_meld(parse_meld(token[1:-1]))
        elif token.startswith('+'):
            drawn = parse_tiles(token[1:])
            if len(drawn) != 1:
                raise InvalidTileError(f"Expected one drawn tile in {token!r}")
        else:
            for tile in parse_tiles(token):
                hand.add(tile)
    if drawn:
        hand.draw(drawn[0])
    return hand


def format_hand(hand: Hand) -> str:
    parts = [format_tiles(hand.concealed_tiles() + hand.bonus_tiles())]
    if hand.drawn_tile is not None:
        parts.append("+" + format_tiles([hand.drawn_tile]))
    for meld in hand.melds:
        suffix = "!" if meld.is_concealed else ""
        parts.append(f"[{format_tiles(meld.tiles)}{suffix}]")
    return " ".join(p for p in parts if p)
