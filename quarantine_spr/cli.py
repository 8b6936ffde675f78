# ==============================================================================
# QUARANTINE SPR EXTRACTOR - COMMAND LINE INTERFACE
# ==============================================================================
# Reads the palette from an .IMG file, then decodes every sprite in an .SPR
# archive and writes one .ppm image per non-empty sprite.
#
# Usage:
#   quarantine-spr SPRITES.IMG SPRITES.SPR
#   quarantine-spr SPRITES.IMG SPRITES.SPR -o extracted/
#   quarantine-spr SPRITES.IMG SPRITES.SPR --planar --palette-offset 0x0D
#
# Exit codes:
#   0    success (or usage printed)
#   255  palette could not be read
#   254  one or more sprites could not be decoded or written
# ==============================================================================

import argparse
import sys
from typing import List, Optional

from . import __version__
from .core.config import (
    EXIT_ARCHIVE_ERROR,
    EXIT_OK,
    EXIT_PALETTE_ERROR,
    PALETTE_DATA_OFFSET,
    DecodeOptions,
    parse_offset,
)
from .parsers.img_palette import read_palette
from .parsers.spr_decoder import SPRDecoder

PROG = "quarantine-spr"


# ==============================================================================
# COLOR HELPERS FOR TERMINAL OUTPUT
# ==============================================================================
class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[92m'
    RED = '\033[91m'
    END = '\033[0m'

    @classmethod
    def paint(cls, color: str, text: str, stream) -> str:
        """Colorize text only if the stream it is written to is a terminal."""
        isatty = getattr(stream, 'isatty', None)
        if isatty is not None and isatty():
            return f"{color}{text}{cls.END}"
        return text


def print_success(text: str):
    """Print a success message."""
    print(Colors.paint(Colors.GREEN, f"✓ {text}", sys.stdout))


def print_error(text: str):
    """Print an error message to stderr."""
    print(Colors.paint(Colors.RED, f"✗ {text}", sys.stderr), file=sys.stderr)


def usage(prog: str = PROG) -> str:
    return f"Usage: {prog} <palette_file> <spr_file>"


# ==============================================================================
# PIPELINE
# ==============================================================================
def run(palette_file: str, spr_file: str, options: Optional[DecodeOptions] = None) -> int:
    """
    Read the palette, then decode the archive.

    The archive is not touched when the palette cannot be read.

    Returns:
        Process exit code
    """
    options = options or DecodeOptions()
    options.info(f"Reading palette from {palette_file} and sprites from {spr_file}...")

    table, issue = read_palette(palette_file, options.palette_offset)
    if table is None:
        return EXIT_PALETTE_ERROR

    report = SPRDecoder(table, options).decode(spr_file)

    if not report.success:
        print_error(
            f"{len(report.issues)} problem(s) while decoding '{spr_file}'; "
            f"{len(report.written)} image(s) written"
        )
        return EXIT_ARCHIVE_ERROR

    if not options.quiet:
        print_success(f"Wrote {len(report.written)} image(s), skipped {len(report.skipped)} empty sprite(s)")
    return EXIT_OK


# ==============================================================================
# ARGUMENT PARSING
# ==============================================================================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Extract sprites from Quarantine (1994) .SPR archives as .ppm images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s SPRITES.IMG SPRITES.SPR              Write SPRITES.SPR_000.ppm, ...
  %(prog)s SPRITES.IMG SPRITES.SPR -o out/      Write into out/
        """
    )
    parser.add_argument('palette_file', nargs='?', help='File containing the palette (.IMG)')
    parser.add_argument('spr_file', nargs='?', help='Sprite archive (.SPR)')
    parser.add_argument('extra', nargs='*', metavar='IGNORED', help='Further arguments are accepted and ignored')
    parser.add_argument('-o', '--output-dir', help='Directory for .ppm files (default: beside the archive)')
    parser.add_argument('--palette-offset', type=parse_offset, default=PALETTE_DATA_OFFSET,
                        help='Byte offset of the palette (default: 0x0D)')
    parser.add_argument('--planar', action='store_true',
                        help='Treat pixel data as VGA Mode X planar and re-interleave it')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only print errors')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


# ==============================================================================
# MAIN
# ==============================================================================
def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if args.palette_file is None or args.spr_file is None:
        print(usage(parser.prog))
        return EXIT_OK

    return run(args.palette_file, args.spr_file, DecodeOptions.from_args(args))


if __name__ == "__main__":
    sys.exit(main())
