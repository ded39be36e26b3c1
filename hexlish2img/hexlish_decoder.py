"""
Hexlish Decoder — color-block image back to symbol stream
==========================================================

Raster path: the canvas is walked block by block at `pixel_size` stride,
row-major. Only the top-left pixel of each block is sampled; blocks are
assumed uniform. Width and height must both be exact multiples of
`pixel_size`.

Vector path: every <rect> carrying an rgb(r,g,b) fill, either as a
`fill` attribute or inside `style`, is one block, taken in document
order. Other elements, and rects without such a fill, are ignored.

Each sampled color must match the table exactly. In rasters only,
PADDING_COLOR maps to PADDING_SYMBOL and the trailing run of those is
trimmed. Anything else unmatched aborts the decode with
UnknownColorError.
"""

import io
import logging
import re
import warnings
import xml.etree.ElementTree as ET
from typing import BinaryIO, Iterable, List, Optional, TextIO, Union

from PIL import Image

from .hexlish_types import (
    PIXEL_SIZE, PADDING_COLOR, PADDING_SYMBOL, Color, ImageFormat,
    MalformedImageError, symbol_of, hexlish_to_hex_text,
)

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

_RGB_FILL = re.compile(
    r'rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)')
_STYLE_FILL = re.compile(r'(?:^|;)\s*fill\s*:\s*([^;]+)')

# Elements that count as one block each
SHAPE_TAGS = frozenset({'rect'})


# ═══════════════════════════════════════════════════════════════
# DECODER
# ═══════════════════════════════════════════════════════════════

class HexlishDecoder:
    """
    Hexlish image decoder.

    Usage:
        decoder = HexlishDecoder()
        text = decoder.decode(png_bytes)
        text = decoder.decode(svg_bytes, fmt=ImageFormat.SVG)
    """

    def __init__(self, pixel_size: int = PIXEL_SIZE):
        if pixel_size < 1:
            raise ValueError(f"pixel_size must be >= 1, got {pixel_size}")
        self.pixel_size = pixel_size

    # ─── Main Entry Points ────────────────────────────────────

    def decode(self, data: bytes,
               fmt: Optional[Union[ImageFormat, str]] = None) -> str:
        """
        Decode image bytes to the logical symbol stream.

        Args:
            data: PNG (or any lossless raster Pillow reads) or SVG bytes.
            fmt:  Container format. None sniffs it from the content.

        Returns:
            The symbol stream with trailing padding removed.
        """
        fmt = detect_format(data) if fmt is None else ImageFormat(fmt)
        if fmt is ImageFormat.SVG:
            return self.decode_svg(data)
        return self.decode_png(data)

    def decode_stream(self, reader: BinaryIO, writer: Union[TextIO, BinaryIO],
                      fmt: Optional[Union[ImageFormat, str]] = None,
                      hex_output: bool = False) -> str:
        """
        Decode all of `reader` and write the stream plus one newline to
        `writer`. With `hex_output` the symbols are written as uppercase hex.
        """
        text = self.decode(reader.read(), fmt)
        if hex_output:
            text = hexlish_to_hex_text(text)
        out = text + "\n"
        if isinstance(writer, io.TextIOBase):
            writer.write(out)
        else:
            writer.write(out.encode('ascii'))
        return text

    # ─── Raster ───────────────────────────────────────────────

    def decode_png(self, data: bytes) -> str:
        img = _open_raster(data)

        img = img.convert('RGB')
        width, height = img.size
        size = self.pixel_size
        if width == 0 or height == 0:
            raise MalformedImageError(f"Empty canvas {width}x{height}")
        if width % size or height % size:
            raise MalformedImageError(
                f"Canvas {width}x{height} is not a whole number of "
                f"{size}px blocks"
            )

        px = img.load()
        colors = [px[x, y]
                  for y in range(0, height, size)
                  for x in range(0, width, size)]
        logger.debug("Sampled %d blocks from %dx%d raster",
                     len(colors), width, height)
        return trim_padding(self._symbols(colors, allow_padding=True))

    # ─── Vector ───────────────────────────────────────────────

    def decode_svg(self, data: Union[bytes, str]) -> str:
        if isinstance(data, str):
            data = data.encode('utf-8')
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise MalformedImageError(f"Cannot parse SVG document: {e}") from e

        colors = []
        for elem in root.iter():
            if _local_name(elem.tag) not in SHAPE_TAGS:
                continue
            color = _element_fill(elem)
            if color is not None:
                colors.append(color)
        logger.debug("Found %d filled shapes in SVG", len(colors))
        # SVG output never carries padding, so black is just an unknown color
        return self._symbols(colors, allow_padding=False)

    # ─── Helpers ──────────────────────────────────────────────

    def _symbols(self, colors: Iterable[Color], allow_padding: bool) -> str:
        out: List[str] = []
        for i, color in enumerate(colors):
            color = tuple(color[:3])
            if allow_padding and color == PADDING_COLOR:
                out.append(PADDING_SYMBOL)
            else:
                out.append(symbol_of(color, i))
        return "".join(out)


def _open_raster(data: bytes) -> Image.Image:
    """
    Open and load a raster with Pillow's decompression-bomb limit lifted.

    The grid dimensions are checked by the caller, and a legitimately long
    stream easily exceeds Pillow's default pixel budget.
    """
    saved_limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', Image.DecompressionBombWarning)
            img = Image.open(io.BytesIO(data))
            img.load()
    except (OSError, SyntaxError, ValueError, EOFError,
            Image.DecompressionBombError) as e:
        raise MalformedImageError(f"Cannot read raster image: {e}") from e
    finally:
        Image.MAX_IMAGE_PIXELS = saved_limit
    return img


def _local_name(tag) -> str:
    """Tag without its '{namespace}' prefix. Comments and PIs yield ''."""
    if not isinstance(tag, str):
        return ''
    return tag.rsplit('}', 1)[-1]


def _element_fill(elem: ET.Element) -> Optional[Color]:
    """rgb() fill of an element, from `style` first, then the `fill` attribute."""
    candidates = []
    style = elem.get('style')
    if style:
        m = _STYLE_FILL.search(style)
        if m:
            candidates.append(m.group(1))
    fill = elem.get('fill')
    if fill:
        candidates.append(fill)

    for value in candidates:
        m = _RGB_FILL.search(value)
        if m:
            return tuple(int(c) for c in m.groups())
    return None


# ═══════════════════════════════════════════════════════════════
# PADDING & FORMAT
# ═══════════════════════════════════════════════════════════════

def trim_padding(raw: str) -> str:
    """
    Remove the trailing run of PADDING_SYMBOL entries.

    Padding only ever completes the last row, so one found before a real
    symbol means the image is not a hexlish grid.
    """
    stream = raw.rstrip(PADDING_SYMBOL)
    stray = stream.find(PADDING_SYMBOL)
    if stray >= 0:
        raise MalformedImageError(f"Padding block at index {stray} precedes symbol data")
    return stream


def detect_format(data: Union[bytes, str]) -> ImageFormat:
    """Guess the container from its first bytes."""
    if isinstance(data, str):
        return ImageFormat.SVG
    if data.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    head = data[:256].lstrip(b'\xef\xbb\xbf \t\r\n')
    if head.startswith(b'<'):
        return ImageFormat.SVG
    # Let Pillow try any other raster container
    return ImageFormat.PNG


# ═══════════════════════════════════════════════════════════════
# CONVENIENCE FUNCTIONS
# ═══════════════════════════════════════════════════════════════

def decode_image(data: bytes, fmt: Optional[Union[ImageFormat, str]] = None,
                 pixel_size: Optional[int] = None) -> str:
    """Convenience: decode image bytes in one call."""
    return HexlishDecoder(pixel_size=pixel_size or PIXEL_SIZE).decode(data, fmt)
