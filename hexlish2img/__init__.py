"""
hexlish2img — Hexlish Color-Block Image Codec
==============================================

Reversible mapping between the 16-symbol hexlish alphabet and a tiled
color-block image (PNG or SVG).
"""

from .hexlish_types import (
    PIXEL_SIZE, ImageFormat,
    HexlishError, UnknownSymbolError, UnknownColorError, MalformedImageError,
    color_of, symbol_of, hex_to_hexlish, hexlish_to_hex,
    hex_to_hexlish_text, hexlish_to_hex_text, normalize_stream,
)
from .hexlish_geometry import GridLayout, position_of, block_origin, canvas_size
from .hexlish_encoder import HexlishEncoder, encode_text
from .hexlish_decoder import HexlishDecoder, decode_image, trim_padding

__version__ = "1.0.0"
__all__ = [
    'HexlishEncoder', 'HexlishDecoder', 'encode_text', 'decode_image',
    'ImageFormat', 'PIXEL_SIZE', 'GridLayout',
    'position_of', 'block_origin', 'canvas_size', 'trim_padding',
    'color_of', 'symbol_of', 'hex_to_hexlish', 'hexlish_to_hex',
    'hex_to_hexlish_text', 'hexlish_to_hex_text', 'normalize_stream',
    'HexlishError', 'UnknownSymbolError', 'UnknownColorError',
    'MalformedImageError',
]
