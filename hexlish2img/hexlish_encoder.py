"""
Hexlish Encoder — symbol stream to color-block image
=====================================================

Paints one solid `pixel_size` square per symbol, row-major, into either

  - a PNG raster (Pillow), unused trailing cells left at PADDING_COLOR, or
  - an SVG document (svgwrite), one <rect> per symbol and nothing for
    padding cells.

Adjacent blocks of the same color are never merged: the decoder reads
back exactly one block per symbol.

The whole image is built in memory. Nothing reaches the output stream
unless every symbol resolved to a color.
"""

import io
import logging
from typing import BinaryIO, List, Optional, TextIO, Union

import svgwrite
from PIL import Image

from .hexlish_types import (
    PIXEL_SIZE, PADDING_COLOR, Color, ImageFormat,
    color_of, hex_to_hexlish_text, normalize_stream,
)
from .hexlish_geometry import GridLayout

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# ENCODER
# ═══════════════════════════════════════════════════════════════

class HexlishEncoder:
    """
    Hexlish image encoder.

    Usage:
        encoder = HexlishEncoder(blocks_per_row=16)
        png_bytes = encoder.encode("ACEH IJLM")
        svg_bytes = encoder.encode("ACEH IJLM", fmt=ImageFormat.SVG)
    """

    def __init__(self, pixel_size: int = PIXEL_SIZE, blocks_per_row: int = 0):
        if pixel_size < 1:
            raise ValueError(f"pixel_size must be >= 1, got {pixel_size}")
        self.pixel_size = pixel_size
        self.blocks_per_row = blocks_per_row

    # ─── Main Entry Points ────────────────────────────────────

    def encode(self, text: str,
               fmt: Union[ImageFormat, str] = ImageFormat.PNG) -> bytes:
        """
        Encode raw hexlish text into image bytes.

        Spaces, CR and LF are dropped first. Raises UnknownSymbolError
        for the first character outside the alphabet.
        """
        fmt = ImageFormat(fmt)
        symbols = normalize_stream(text)
        if fmt is ImageFormat.SVG:
            return self.encode_svg(symbols)
        return self.encode_png(symbols)

    def encode_stream(self, reader: Union[BinaryIO, TextIO], writer: BinaryIO,
                      fmt: Union[ImageFormat, str] = ImageFormat.PNG,
                      hex_input: bool = False) -> int:
        """
        Read all of `reader`, write the image to `writer`. Returns bytes
        written. With `hex_input` the text is plain hex digits.
        """
        raw = reader.read()
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        if hex_input:
            raw = hex_to_hexlish_text(raw)
        data = self.encode(raw, fmt)
        writer.write(data)
        return len(data)

    # ─── Raster ───────────────────────────────────────────────

    def encode_png(self, symbols: str) -> bytes:
        """Paint `symbols` (already normalized) onto an RGB canvas and return PNG bytes."""
        colors = self._resolve(symbols)
        layout = self._layout(len(colors))

        img = Image.new('RGB', (layout.width, layout.height), PADDING_COLOR)
        size = self.pixel_size
        for i, color in enumerate(colors):
            x, y = layout.origin(i)
            img.paste(color, (x, y, x + size, y + size))

        buf = io.BytesIO()
        img.save(buf, format='PNG')
        return buf.getvalue()

    # ─── Vector ───────────────────────────────────────────────

    def encode_svg(self, symbols: str) -> bytes:
        """Emit one filled <rect> per symbol and return UTF-8 SVG bytes."""
        colors = self._resolve(symbols)
        layout = self._layout(len(colors))

        dwg = svgwrite.Drawing(size=(layout.width, layout.height))
        size = self.pixel_size
        for i, (r, g, b) in enumerate(colors):
            dwg.add(dwg.rect(insert=layout.origin(i), size=(size, size),
                             fill=svgwrite.rgb(r, g, b)))

        buf = io.StringIO()
        dwg.write(buf, pretty=True)
        return buf.getvalue().encode('utf-8')

    # ─── Helpers ──────────────────────────────────────────────

    def _resolve(self, symbols: str) -> List[Color]:
        return [color_of(s, i) for i, s in enumerate(symbols)]

    def _layout(self, count: int) -> GridLayout:
        layout = GridLayout.for_stream(count, self.blocks_per_row, self.pixel_size)
        logger.debug("Grid %dx%d blocks (%dx%d px) for %d symbols, %d padding",
                     layout.blocks_per_row, layout.rows, layout.width,
                     layout.height, count, layout.padding_blocks)
        return layout


# ═══════════════════════════════════════════════════════════════
# CONVENIENCE FUNCTIONS
# ═══════════════════════════════════════════════════════════════

def encode_text(text: str, blocks_per_row: int = 0,
                fmt: Union[ImageFormat, str] = ImageFormat.PNG,
                pixel_size: Optional[int] = None) -> bytes:
    """Convenience: encode hexlish text in one call."""
    encoder = HexlishEncoder(pixel_size=pixel_size or PIXEL_SIZE,
                             blocks_per_row=blocks_per_row)
    return encoder.encode(text, fmt)
