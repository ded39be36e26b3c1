"""
Hexlish Types & Constants — Hexlish Color-Block Format
=======================================================

Foundational constants, lookup tables, error classes and the stream
normalizer for the hexlish image codec. This module has ZERO external
dependencies beyond the Python standard library.

Contents:
  - Block size and padding color
  - Symbol <-> Color table (16 fixed entries)
  - Hex digit <-> Hexlish symbol table (text layer only)
  - Error classes
  - normalize_stream()
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


Color = Tuple[int, int, int]

# ═══════════════════════════════════════════════════════════════
# GEOMETRY CONSTANTS
# ═══════════════════════════════════════════════════════════════

# Side length of one block, in pixels
PIXEL_SIZE = 8

# Fill for blocks that only complete the last grid row. Not a symbol color.
PADDING_COLOR: Color = (0, 0, 0)

# Raw-stream entry produced by a padding block before trimming
PADDING_SYMBOL = "\x00"


class ImageFormat(Enum):
    """Output/input container selector."""
    PNG = "png"
    SVG = "svg"


# ═══════════════════════════════════════════════════════════════
# ALPHABET TABLE
# ═══════════════════════════════════════════════════════════════

ALPHABET = "ACEHIJLMNOPRSTUV"

SYMBOL_COLORS: Mapping[str, Color] = MappingProxyType({
    'A': (209, 177, 135),
    'C': (199, 123, 88),
    'E': (174, 93, 64),
    'H': (121, 68, 74),
    'I': (75, 61, 68),
    'J': (186, 145, 88),
    'L': (146, 116, 65),
    'M': (77, 69, 57),
    'N': (119, 116, 59),
    'O': (179, 165, 85),
    'P': (210, 201, 165),
    'R': (140, 171, 161),
    'S': (75, 114, 110),
    'T': (87, 72, 82),
    'U': (132, 120, 117),
    'V': (171, 155, 142),
})

COLOR_SYMBOLS: Mapping[Color, str] = MappingProxyType(
    {color: symbol for symbol, color in SYMBOL_COLORS.items()}
)

# Hex digit i maps to ALPHABET[i]
HEXLISH_TO_HEX: Mapping[str, str] = MappingProxyType(
    {symbol: "0123456789ABCDEF"[i] for i, symbol in enumerate(ALPHABET)}
)

HEX_TO_HEXLISH: Mapping[str, str] = MappingProxyType(
    {digit: symbol for symbol, digit in HEXLISH_TO_HEX.items()}
)


# ═══════════════════════════════════════════════════════════════
# ERROR CLASSES
# ═══════════════════════════════════════════════════════════════

class HexlishError(Exception):
    """Base error for all hexlish codec operations."""
    pass


class UnknownSymbolError(HexlishError, ValueError):
    """Character outside the alphabet (or outside 0-9A-F for hex input)."""

    def __init__(self, symbol: str, index: Optional[int] = None):
        self.symbol = symbol
        self.index = index
        where = f" at index {index}" if index is not None else ""
        super().__init__(f"Unknown symbol {symbol!r}{where}")


class UnknownColorError(HexlishError, ValueError):
    """Sampled color has no exact match in the color table."""

    def __init__(self, color: Color, index: Optional[int] = None):
        self.color = tuple(color)
        self.index = index
        where = f" at block {index}" if index is not None else ""
        super().__init__(
            "Unknown color rgb({},{},{}){}".format(*self.color, where)
        )


class MalformedImageError(HexlishError):
    """Unreadable container, bad grid dimensions, or stray padding."""
    pass


# ═══════════════════════════════════════════════════════════════
# LOOKUPS
# ═══════════════════════════════════════════════════════════════

def color_of(symbol: str, index: Optional[int] = None) -> Color:
    """Resolve a symbol to its block color."""
    try:
        return SYMBOL_COLORS[symbol]
    except KeyError:
        raise UnknownSymbolError(symbol, index) from None


def symbol_of(color: Color, index: Optional[int] = None) -> str:
    """
    Resolve a block color back to its symbol.

    Matching is exact. A color that drifted through lossy recompression
    is not recovered.
    """
    key = tuple(int(c) for c in color[:3])
    try:
        return COLOR_SYMBOLS[key]
    except KeyError:
        raise UnknownColorError(key, index) from None


def hex_to_hexlish(digit: str) -> str:
    """Translate one hex digit (either case) to its hexlish symbol."""
    try:
        return HEX_TO_HEXLISH[digit.upper()]
    except (KeyError, AttributeError):
        raise UnknownSymbolError(digit) from None


def hexlish_to_hex(symbol: str) -> str:
    """Translate one hexlish symbol to an uppercase hex digit."""
    try:
        return HEXLISH_TO_HEX[symbol]
    except KeyError:
        raise UnknownSymbolError(symbol) from None


def hex_to_hexlish_text(text: str) -> str:
    """Translate a whole hex string; whitespace is dropped first."""
    out = []
    for i, digit in enumerate(normalize_stream(text)):
        try:
            out.append(hex_to_hexlish(digit))
        except UnknownSymbolError:
            raise UnknownSymbolError(digit, i) from None
    return "".join(out)


def hexlish_to_hex_text(text: str) -> str:
    """Translate a whole hexlish string back to uppercase hex."""
    out = []
    for i, symbol in enumerate(normalize_stream(text)):
        try:
            out.append(hexlish_to_hex(symbol))
        except UnknownSymbolError:
            raise UnknownSymbolError(symbol, i) from None
    return "".join(out)


# ═══════════════════════════════════════════════════════════════
# STREAM NORMALIZER
# ═══════════════════════════════════════════════════════════════

_STRIP = str.maketrans("", "", " \r\n")


def normalize_stream(text: str) -> str:
    """
    Drop spaces, CR and LF. Every other character is kept as-is, so an
    invalid symbol still reaches color_of() and fails there.
    """
    return text.translate(_STRIP)
