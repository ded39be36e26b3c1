#!/usr/bin/env python3
"""
hexlish2img command line.

Usage
-----
# Encode hexlish text to a PNG, 16 blocks per row
cat data.txt | hexlish2img -b 16 > data.png

# Encode plain hex as SVG
xxd -p file.bin | hexlish2img -x -v -b 32 > file.svg

# Decode back to text (format is sniffed; -v forces SVG)
cat data.png | hexlish2img -d > data.txt
cat file.svg | hexlish2img -d -x > file.hex
"""

import argparse
import logging
import sys
from typing import List, Optional

from .hexlish_types import PIXEL_SIZE, ImageFormat, HexlishError
from .hexlish_encoder import HexlishEncoder
from .hexlish_decoder import HexlishDecoder

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hexlish2img",
        description="Encode hexlish text to a color-block image, or decode it back. "
                    "Reads stdin, writes stdout.",
    )
    p.add_argument("-d", "--decode", action="store_true",
                   help="Decode PNG/SVG to hexlish")
    p.add_argument("-b", "--blocks-per-row", type=int, default=0,
                   help="Number of blocks per row (0 for single row)")
    p.add_argument("-v", "--svg", action="store_true",
                   help="Use SVG format instead of PNG")
    p.add_argument("-x", "--hex", action="store_true",
                   help="Input (encode) or output (decode) is plain hex")
    p.add_argument("-s", "--pixel-size", type=int, default=PIXEL_SIZE,
                   help=f"Block side in pixels (default: {PIXEL_SIZE})")
    p.add_argument("--debug", action="store_true",
                   help="Log grid details to stderr")
    return p


def run_encode(args: argparse.Namespace) -> None:
    fmt = ImageFormat.SVG if args.svg else ImageFormat.PNG
    encoder = HexlishEncoder(pixel_size=args.pixel_size,
                             blocks_per_row=args.blocks_per_row)
    encoder.encode_stream(sys.stdin.buffer, sys.stdout.buffer, fmt,
                          hex_input=args.hex)
    sys.stdout.buffer.flush()


def run_decode(args: argparse.Namespace) -> None:
    # Without -v the container is sniffed, so SVG input still decodes
    fmt = ImageFormat.SVG if args.svg else None
    decoder = HexlishDecoder(pixel_size=args.pixel_size)
    decoder.decode_stream(sys.stdin.buffer, sys.stdout, fmt,
                          hex_output=args.hex)
    sys.stdout.flush()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return 0

    args = parser.parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    action = "decoding" if args.decode else "encoding"
    try:
        if args.decode:
            run_decode(args)
        else:
            run_encode(args)
    except (HexlishError, ValueError, OSError) as e:
        logger.debug("%s failed", action, exc_info=True)
        print(f"Error {action}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
