"""
Hexlish Geometry — block placement on the grid.

Blocks are laid out row-major, `blocks_per_row` columns wide. A
non-positive `blocks_per_row` puts every symbol on a single row.
"""

from dataclasses import dataclass
from typing import Tuple

from .hexlish_types import PIXEL_SIZE


def position_of(index: int, blocks_per_row: int) -> Tuple[int, int]:
    """Grid cell (col, row) of block `index`, both zero-based."""
    if blocks_per_row < 1:
        raise ValueError(f"blocks_per_row must be >= 1, got {blocks_per_row}")
    if index < 0:
        raise ValueError(f"block index must be >= 0, got {index}")
    return index % blocks_per_row, index // blocks_per_row


def block_origin(index: int, blocks_per_row: int,
                 pixel_size: int = PIXEL_SIZE) -> Tuple[int, int]:
    """Top-left pixel (x, y) of block `index`."""
    col, row = position_of(index, blocks_per_row)
    return col * pixel_size, row * pixel_size


def canvas_size(symbol_count: int, blocks_per_row: int,
                pixel_size: int = PIXEL_SIZE) -> Tuple[int, int]:
    """Canvas (width, height) in pixels for `symbol_count` blocks."""
    layout = GridLayout.for_stream(symbol_count, blocks_per_row, pixel_size)
    return layout.width, layout.height


@dataclass(frozen=True)
class GridLayout:
    """
    Resolved grid for one stream.

    An empty stream still gets one (padding) cell so the canvas is never
    zero-area.
    """
    symbol_count: int
    blocks_per_row: int
    rows: int
    pixel_size: int = PIXEL_SIZE

    @classmethod
    def for_stream(cls, symbol_count: int, blocks_per_row: int = 0,
                   pixel_size: int = PIXEL_SIZE) -> 'GridLayout':
        if symbol_count < 0:
            raise ValueError(f"symbol_count must be >= 0, got {symbol_count}")
        if pixel_size < 1:
            raise ValueError(f"pixel_size must be >= 1, got {pixel_size}")
        if blocks_per_row <= 0:
            blocks_per_row = symbol_count
        blocks_per_row = max(blocks_per_row, 1)
        rows = max(-(-symbol_count // blocks_per_row), 1)
        return cls(symbol_count=symbol_count, blocks_per_row=blocks_per_row,
                   rows=rows, pixel_size=pixel_size)

    @property
    def width(self) -> int:
        return self.blocks_per_row * self.pixel_size

    @property
    def height(self) -> int:
        return self.rows * self.pixel_size

    @property
    def block_count(self) -> int:
        """Cells on the canvas, padding included."""
        return self.blocks_per_row * self.rows

    @property
    def padding_blocks(self) -> int:
        return self.block_count - self.symbol_count

    def origin(self, index: int) -> Tuple[int, int]:
        return block_origin(index, self.blocks_per_row, self.pixel_size)
